"""Exception hierarchy for rpc-swagger."""

from __future__ import annotations


class RpcSwaggerError(Exception):
    """Base for all rpc-swagger errors."""


class IdlLoadError(RpcSwaggerError):
    """The parsed IDL dump could not be read or validated."""

    def __init__(self, detail: str, *, cause: Exception | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.cause = cause


class SerializationError(RpcSwaggerError):
    """The generated document could not be encoded to the output format."""

    def __init__(self, detail: str, *, cause: Exception | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.cause = cause
