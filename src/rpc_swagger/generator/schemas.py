"""Map IDL types to OpenAPI schemas and track component schema dependencies.

Struct types are never inlined: a field of struct type becomes a ``$ref``
and the struct name is queued on the resolver. ``SchemaResolver.resolve``
later drains that queue until every referenced struct has exactly one
component schema, which keeps self-referencing and mutually recursive
structs safe.
"""

from __future__ import annotations

import logging

from rpc_swagger.generator.annotations import (
    API_BODY,
    API_FORM,
    API_HEADER,
    API_RAW_BODY,
    OPENAPI_PROPERTY,
    OPENAPI_SCHEMA,
    first_annotation,
    parse_override,
)
from rpc_swagger.generator.comments import filter_comment
from rpc_swagger.idl.model import Field, IdlFile, StructDescriptor, TypeDescriptor
from rpc_swagger.openapi.merge import merge
from rpc_swagger.openapi.models import Schema

logger = logging.getLogger(__name__)

# (type, format) per primitive IDL type
PRIMITIVE_SCHEMAS: dict[str, tuple[str, str | None]] = {
    "string": ("string", None),
    "binary": ("string", "binary"),
    "bool": ("boolean", None),
    "byte": ("string", "byte"),
    "double": ("number", "double"),
    "i8": ("integer", "int8"),
    "i16": ("integer", "int16"),
    "i32": ("integer", "int32"),
    "i64": ("integer", "int64"),
}

# Annotations whose value renames a property in a component schema, in
# precedence order (the last non-empty one wins).
PROPERTY_NAME_ANNOTATIONS = (API_HEADER, API_BODY, API_FORM, API_RAW_BODY)


class SchemaResolver:
    """Owns the component schemas and the queue of structs still to emit."""

    def __init__(self, idl: IdlFile, schemas: dict[str, Schema] | None = None):
        self.idl = idl
        self.schemas: dict[str, Schema] = schemas if schemas is not None else {}
        self.required: list[str] = []
        self.emitted: set[str] = set()

    def require(self, name: str) -> str:
        """Queue a struct for emission and return its ``$ref`` target."""
        if name not in self.emitted and name not in self.required:
            self.required.append(name)
        return Schema.reference(name).ref

    def emit(self, name: str, schema: Schema) -> bool:
        """Store a component schema. Returns False if ``name`` was already emitted."""
        if name in self.emitted:
            return False
        self.emitted.add(name)
        self.schemas[name] = schema
        return True

    def schema_for_type(self, type_desc: TypeDescriptor) -> Schema | None:
        """Schema for a declared type, or None if it cannot be resolved."""
        if type_desc.is_primitive():
            schema_type, schema_format = PRIMITIVE_SCHEMAS[type_desc.name]
            return Schema(type=schema_type, format=schema_format)

        if type_desc.is_list() or type_desc.is_set():
            items = self._element_schema(type_desc)
            if items is None:
                return None
            return Schema(type="array", items=items, unique_items=True if type_desc.is_set() else None)

        if type_desc.is_map():
            values = self._element_schema(type_desc)
            if values is None:
                return None
            return Schema(type="object", additional_properties=values)

        struct = self.idl.get_struct(type_desc.name)
        if struct is None:
            logger.error("cannot resolve struct descriptor for type '%s'", type_desc.name)
            return None
        return Schema(ref=self.require(struct.name))

    def _element_schema(self, type_desc: TypeDescriptor) -> Schema | None:
        if type_desc.value_type is None:
            logger.error("container type '%s' has no element type", type_desc.name)
            return None
        return self.schema_for_type(type_desc.value_type)

    def schema_for_field(self, field: Field, describe: bool = True) -> Schema | None:
        """Field schema with its description and ``openapi.property`` override.

        References are returned bare: siblings of ``$ref`` are ignored by
        OpenAPI 3.0 tooling.
        """
        schema = self.schema_for_type(field.type)
        if schema is None or schema.is_reference():
            return schema
        description = filter_comment(field.comments) if describe else ""
        if description:
            schema.description = description
        merge(schema, parse_override(field, OPENAPI_PROPERTY, Schema))
        return schema

    def schema_for_struct(self, struct: StructDescriptor) -> Schema:
        """Component schema for a struct: every field, in declaration order."""
        properties: dict[str, Schema] = {}
        for field in struct.fields:
            field_schema = self.schema_for_field(field)
            if field_schema is None:
                continue
            properties[property_name(field)] = field_schema

        schema = Schema(
            type="object",
            description=filter_comment(struct.comments) or None,
            properties=properties,
        )
        return merge(schema, parse_override(struct, OPENAPI_SCHEMA, Schema))

    def resolve(self) -> None:
        """Emit a component for every queued struct until nothing new is queued."""
        while self.required:
            count = len(self.required)
            visited: set[str] = set()
            for struct in self.idl.structs:
                self._visit(struct, visited)
            self.required = self.required[count:]

    def _visit(self, struct: StructDescriptor, visited: set[str]) -> None:
        # nested structs first, depth-first
        if struct.name in visited:
            return
        visited.add(struct.name)
        for field in struct.fields:
            for nested in _struct_types(field.type):
                nested_struct = self.idl.get_struct(nested)
                if nested_struct is not None:
                    self._visit(nested_struct, visited)

        if struct.name in self.required and struct.name not in self.emitted:
            self.emit(struct.name, self.schema_for_struct(struct))


def property_name(field: Field) -> str:
    name = field.name
    for key in PROPERTY_NAME_ANNOTATIONS:
        value = first_annotation(field, key)
        if value:
            name = value
    return name


def _struct_types(type_desc: TypeDescriptor) -> list[str]:
    """Struct names reachable from a type, looking through containers."""
    if type_desc.is_struct():
        return [type_desc.name]
    if type_desc.value_type is not None:
        return _struct_types(type_desc.value_type)
    return []
