"""Build one OpenAPI operation for an annotated service method."""

from __future__ import annotations

import re

from rpc_swagger.generator.annotations import (
    API_BODY,
    API_HEADER,
    API_RAW_BODY,
    BODY_ANNOTATIONS,
    OPENAPI_PARAMETER,
    OPENAPI_SCHEMA,
    PARAMETER_ANNOTATIONS,
    first_annotation,
    parse_override,
)
from rpc_swagger.generator.comments import filter_comment
from rpc_swagger.generator.schemas import SchemaResolver
from rpc_swagger.idl.model import StructDescriptor
from rpc_swagger.openapi.merge import merge
from rpc_swagger.openapi.models import (
    Header,
    MediaType,
    Operation,
    Parameter,
    RequestBody,
    Response,
    Schema,
    Server,
)

PATH_PARAM_PATTERN = re.compile(r":(\w+)")

# Verbs whose requests never carry a body.
BODYLESS_METHODS = {"GET", "HEAD", "DELETE"}

# Body buckets a response may use, in content order.
RESPONSE_BODY_ANNOTATIONS = (API_BODY, API_RAW_BODY)

SUCCESS_STATUS = "200"
DEFAULT_RESPONSE_DESCRIPTION = "Successful response"


def normalize_path(path: str) -> str:
    """Rewrite ``:name`` placeholders to OpenAPI ``{name}`` form."""
    return PATH_PARAM_PATTERN.sub(r"{\1}", path)


def normalize_host(host: str) -> str:
    if not host.startswith(("http://", "https://")):
        return "http://" + host
    return host


class OperationBuilder:
    """Derives parameters, request body, response and servers for a method."""

    def __init__(self, resolver: SchemaResolver):
        self.resolver = resolver

    def build(
        self,
        *,
        method: str,
        path: str,
        operation_id: str,
        tag: str,
        description: str = "",
        host: str = "",
        input_struct: StructDescriptor | None = None,
        output_struct: StructDescriptor | None = None,
    ) -> tuple[Operation, str]:
        """Return the operation and its normalized path."""
        op = Operation(
            tags=[tag],
            description=description or None,
            operation_id=operation_id,
        )

        if input_struct is not None:
            op.parameters = self.build_parameters(input_struct) or None
            if method not in BODYLESS_METHODS:
                op.request_body = self.build_request_body(input_struct)

        op.responses = {SUCCESS_STATUS: self.build_response(output_struct)}

        if host:
            op.servers = [Server(url=normalize_host(host))]

        return op, normalize_path(path)

    def build_parameters(self, struct: StructDescriptor) -> list[Parameter]:
        parameters = []
        for field in struct.fields:
            name = location = ""
            for key, candidate in PARAMETER_ANNOTATIONS.items():
                value = first_annotation(field, key)
                if value:
                    name, location = value, candidate
            if not location:
                continue

            # the parameter carries the field description, not its schema
            schema = self.resolver.schema_for_field(field, describe=False)
            if schema is None:
                continue

            parameter = Parameter(
                name=name,
                in_=location,
                description=filter_comment(field.comments) or None,
                required=True if location == "path" else None,
                schema_=schema,
            )
            merge(parameter, parse_override(field, OPENAPI_PARAMETER, Parameter))
            parameters.append(parameter)
        return parameters

    def build_request_body(self, struct: StructDescriptor) -> RequestBody | None:
        content = {}
        for key, media_type in BODY_ANNOTATIONS.items():
            schema = self.body_schema(struct, key)
            if schema.properties:
                content[media_type] = MediaType(schema_=schema)
        if not content:
            return None
        return RequestBody(
            description=filter_comment(struct.comments) or None,
            content=content,
        )

    def build_response(self, struct: StructDescriptor | None) -> Response:
        response = Response(description=DEFAULT_RESPONSE_DESCRIPTION)
        if struct is None:
            return response

        response.description = filter_comment(struct.comments) or DEFAULT_RESPONSE_DESCRIPTION

        headers = {}
        for field in struct.fields:
            header_name = first_annotation(field, API_HEADER)
            if not header_name:
                continue
            schema = self.resolver.schema_for_type(field.type)
            if schema is None:
                continue
            headers[header_name] = Header(
                description=filter_comment(field.comments) or None,
                schema_=schema,
            )

        content = {}
        for key in RESPONSE_BODY_ANNOTATIONS:
            schema = self.body_schema(struct, key)
            if not schema.properties:
                continue
            # emitted once under the struct name; later buckets reuse it
            self.resolver.emit(struct.name, schema)
            content[BODY_ANNOTATIONS[key]] = MediaType(schema_=Schema.reference(struct.name))

        response.headers = headers or None
        response.content = content or None
        return response

    def body_schema(self, struct: StructDescriptor, key: str) -> Schema:
        """Inline object schema of the fields carrying body annotation ``key``."""
        override = parse_override(struct, OPENAPI_SCHEMA, Schema)
        allowed = set(override.required or []) if override is not None else set()

        properties: dict[str, Schema] = {}
        required = []
        for field in struct.fields:
            if key not in field.annotations:
                continue
            name = first_annotation(field, key) or field.name
            field_schema = self.resolver.schema_for_field(field)
            if field_schema is None:
                continue
            if name in allowed:
                required.append(name)
            properties[name] = field_schema

        schema = Schema(type="object", properties=properties)
        merge(schema, override)
        schema.required = required or None
        return schema

