"""OpenAPI v3.0.3 document models.

Generated documents and author-supplied override payloads share these
shapes, so one merge routine covers every override annotation. Fields are
snake_case in Python and camelCase on the wire; unknown keys (``x-...``
extensions) are kept as extras.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SCHEMA_REF_PREFIX = "#/components/schemas/"


class OpenApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class Schema(OpenApiModel):
    """A schema object, or a ``$ref`` to a component schema when ``ref`` is set."""

    ref: str | None = Field(default=None, alias="$ref")
    nullable: bool | None = None
    read_only: bool | None = None
    write_only: bool | None = None
    example: Any = None
    deprecated: bool | None = None
    title: str | None = None
    multiple_of: float | None = None
    maximum: float | None = None
    exclusive_maximum: bool | None = None
    minimum: float | None = None
    exclusive_minimum: bool | None = None
    max_length: int | None = None
    min_length: int | None = None
    pattern: str | None = None
    max_items: int | None = None
    min_items: int | None = None
    unique_items: bool | None = None
    max_properties: int | None = None
    min_properties: int | None = None
    required: list[str] | None = None
    enum: list[Any] | None = None
    type: str | None = None
    all_of: list[Schema] | None = None
    one_of: list[Schema] | None = None
    any_of: list[Schema] | None = None
    not_: Schema | None = Field(default=None, alias="not")
    items: Schema | None = None
    properties: dict[str, Schema] | None = None
    additional_properties: Schema | bool | None = None
    default: Any = None
    description: str | None = None
    format: str | None = None

    @classmethod
    def reference(cls, name: str) -> Schema:
        return cls(ref=SCHEMA_REF_PREFIX + name)

    def is_reference(self) -> bool:
        return self.ref is not None


class ExternalDocs(OpenApiModel):
    description: str | None = None
    url: str | None = None


class Contact(OpenApiModel):
    name: str | None = None
    url: str | None = None
    email: str | None = None


class License(OpenApiModel):
    name: str | None = None
    url: str | None = None


class Info(OpenApiModel):
    title: str | None = None
    description: str | None = None
    terms_of_service: str | None = None
    contact: Contact | None = None
    license: License | None = None
    version: str | None = None


class Server(OpenApiModel):
    url: str
    description: str | None = None


class Tag(OpenApiModel):
    name: str
    description: str | None = None
    external_docs: ExternalDocs | None = None


class Parameter(OpenApiModel):
    name: str | None = None
    in_: str | None = Field(default=None, alias="in")  # query / path / header / cookie
    description: str | None = None
    required: bool | None = None
    deprecated: bool | None = None
    allow_empty_value: bool | None = None
    style: str | None = None
    explode: bool | None = None
    schema_: Schema | None = Field(default=None, alias="schema")
    example: Any = None


class MediaType(OpenApiModel):
    schema_: Schema | None = Field(default=None, alias="schema")
    example: Any = None


class Header(OpenApiModel):
    description: str | None = None
    required: bool | None = None
    deprecated: bool | None = None
    schema_: Schema | None = Field(default=None, alias="schema")


class RequestBody(OpenApiModel):
    description: str | None = None
    content: dict[str, MediaType] | None = None
    required: bool | None = None


class Response(OpenApiModel):
    description: str | None = None
    headers: dict[str, Header] | None = None
    content: dict[str, MediaType] | None = None


class Operation(OpenApiModel):
    tags: list[str] | None = None
    summary: str | None = None
    description: str | None = None
    external_docs: ExternalDocs | None = None
    operation_id: str | None = None
    parameters: list[Parameter] | None = None
    request_body: RequestBody | None = None
    responses: dict[str, Response] | None = None
    deprecated: bool | None = None
    security: list[dict[str, list[str]]] | None = None
    servers: list[Server] | None = None


# PathItem attribute for each HTTP verb the generator can bind.
OPERATION_SLOTS: dict[str, str] = {
    "GET": "get",
    "PUT": "put",
    "POST": "post",
    "DELETE": "delete",
    "OPTIONS": "options",
    "HEAD": "head",
    "PATCH": "patch",
}


class PathItem(OpenApiModel):
    summary: str | None = None
    description: str | None = None
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    servers: list[Server] | None = None
    parameters: list[Parameter] | None = None

    def operations(self) -> list[Operation]:
        """Bound operations in slot order."""
        ops = [getattr(self, slot) for slot in OPERATION_SLOTS.values()]
        return [op for op in ops if op is not None]


class Components(OpenApiModel):
    schemas: dict[str, Schema] = {}


class Document(OpenApiModel):
    openapi: str = "3.0.3"
    info: Info = Field(default_factory=Info)
    servers: list[Server] | None = None
    paths: dict[str, PathItem] = {}
    components: Components = Field(default_factory=Components)
    tags: list[Tag] | None = None
