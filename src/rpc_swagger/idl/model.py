"""Data models for a parsed IDL file.

The IDL parser itself lives outside this project; these models describe
the already-parsed services, methods and structs it hands over.
"""

from __future__ import annotations

from pydantic import BaseModel

PRIMITIVE_TYPES = {"string", "binary", "bool", "byte", "double", "i8", "i16", "i32", "i64"}


class TypeDescriptor(BaseModel):
    """A declared type: primitive, container (list/set/map) or struct reference."""

    name: str
    key_type: TypeDescriptor | None = None  # map only
    value_type: TypeDescriptor | None = None  # list / set / map

    def is_primitive(self) -> bool:
        return self.name in PRIMITIVE_TYPES

    def is_list(self) -> bool:
        return self.name == "list"

    def is_set(self) -> bool:
        return self.name == "set"

    def is_map(self) -> bool:
        return self.name == "map"

    def is_struct(self) -> bool:
        return not (self.is_primitive() or self.is_list() or self.is_set() or self.is_map())


class Field(BaseModel):
    """A struct field or method argument."""

    name: str
    type: TypeDescriptor
    comments: str = ""
    annotations: dict[str, list[str]] = {}


class StructDescriptor(BaseModel):
    name: str
    fields: list[Field] = []
    comments: str = ""
    annotations: dict[str, list[str]] = {}


class Method(BaseModel):
    name: str
    arguments: list[Field] = []
    function_type: TypeDescriptor | None = None  # None for void
    comments: str = ""
    annotations: dict[str, list[str]] = {}


class Service(BaseModel):
    name: str
    methods: list[Method] = []
    comments: str = ""
    annotations: dict[str, list[str]] = {}


class IdlFile(BaseModel):
    """Everything the generator reads from one parsed IDL file."""

    filename: str = ""
    services: list[Service] = []
    structs: list[StructDescriptor] = []

    def get_struct(self, name: str) -> StructDescriptor | None:
        """Look up a struct descriptor by name."""
        for struct in self.structs:
            if struct.name == name:
                return struct
        return None
