"""Assemble a complete OpenAPI document from a parsed IDL file.

Drives the operation builder once per annotated method and verb, drains the
schema resolver, then normalizes tags, servers and ordering so that the same
IDL always yields the same document.
"""

from __future__ import annotations

import logging

from rpc_swagger.generator.annotations import (
    API_BASE_DOMAIN,
    API_BASE_URL,
    OPENAPI_DOCUMENT,
    OPENAPI_OPERATION,
    Annotated,
    annotations_on,
    first_annotation,
    http_methods,
    parse_override,
)
from rpc_swagger.generator.comments import filter_comment
from rpc_swagger.generator.operation import OperationBuilder
from rpc_swagger.generator.schemas import SchemaResolver
from rpc_swagger.idl.model import IdlFile, Method, Service, StructDescriptor
from rpc_swagger.openapi.merge import merge
from rpc_swagger.openapi.models import (
    OPERATION_SLOTS,
    Document,
    Operation,
    PathItem,
    Server,
    Tag,
)

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.3"
DEFAULT_TITLE = "API"
DEFAULT_DESCRIPTION = "API description"
DEFAULT_VERSION = "1.0.0"


class DocumentGenerator:
    """Builds one OpenAPI v3 document for every service in an IDL file."""

    def __init__(self, idl: IdlFile):
        self.idl = idl

    def build(self) -> Document:
        document = Document(openapi=OPENAPI_VERSION)
        merge(document, self._document_override())

        resolver = SchemaResolver(self.idl, document.components.schemas)
        builder = OperationBuilder(resolver)

        for service in self.idl.services:
            self._add_service(document, builder, service)

        resolver.resolve()

        _promote_single_tag(document)
        _hoist_servers(document)
        _fill_info_defaults(document)
        _sort(document)
        return document

    def _document_override(self) -> Document | None:
        """Document override from the first service, else struct, carrying one."""
        carriers: list[Annotated] = [*self.idl.services, *self.idl.structs]
        for carrier in carriers:
            if annotations_on(carrier, OPENAPI_DOCUMENT):
                return parse_override(carrier, OPENAPI_DOCUMENT, Document)
        return None

    def _add_service(self, document: Document, builder: OperationBuilder, service: Service) -> None:
        operation_count = 0
        for method in service.methods:
            bindings = http_methods(method)
            if not bindings:
                continue

            input_struct = self._input_struct(method)
            output_struct = self._output_struct(method)
            host = first_annotation(method, API_BASE_URL) or first_annotation(service, API_BASE_DOMAIN)

            for verb, path in bindings:
                if verb not in OPERATION_SLOTS:
                    logger.warning(
                        "method '%s' uses %s, which has no OpenAPI operation slot; skipped",
                        method.name,
                        verb,
                    )
                    continue

                op, normalized = builder.build(
                    method=verb,
                    path=path,
                    operation_id=f"{service.name}_{method.name}",
                    tag=service.name,
                    description=filter_comment(method.comments),
                    host=host,
                    input_struct=input_struct,
                    output_struct=output_struct,
                )
                merge(op, parse_override(method, OPENAPI_OPERATION, Operation))
                _add_operation(document, op, normalized, verb)
                operation_count += 1

        if operation_count:
            document.tags = document.tags or []
            document.tags.append(
                Tag(name=service.name, description=filter_comment(service.comments) or None)
            )

    def _input_struct(self, method: Method) -> StructDescriptor | None:
        if not method.arguments:
            return None
        if len(method.arguments) > 1:
            logger.warning(
                "method '%s' has more than one argument, only the first is used", method.name
            )
        type_name = method.arguments[0].type.name
        struct = self.idl.get_struct(type_name)
        if struct is None:
            logger.warning("argument of method '%s' is not a known struct: '%s'", method.name, type_name)
        return struct

    def _output_struct(self, method: Method) -> StructDescriptor | None:
        if method.function_type is None or method.function_type.name == "void":
            return None
        return self.idl.get_struct(method.function_type.name)


def _add_operation(document: Document, op: Operation, path: str, verb: str) -> None:
    path_item = document.paths.get(path)
    if path_item is None:
        path_item = document.paths[path] = PathItem()
    slot = OPERATION_SLOTS[verb]
    if getattr(path_item, slot) is not None:
        logger.warning("%s %s is bound more than once; keeping '%s'", verb, path, op.operation_id)
    setattr(path_item, slot, op)


def _promote_single_tag(document: Document) -> None:
    # one service: it names the whole document
    if not document.tags or len(document.tags) != 1:
        return
    tag = document.tags[0]
    if not document.info.title and tag.name:
        document.info.title = f"{tag.name} API"
    if not document.info.description:
        document.info.description = tag.description
    tag.description = None


def _hoist_servers(document: Document) -> None:
    """Move servers shared by all operations of a path (or the whole document) up a level."""
    all_servers: list[str] = []
    for path_item in document.paths.values():
        servers: list[str] = []
        for op in path_item.operations():
            if op.servers and len(op.servers) == 1:
                url = op.servers[0].url
                if url not in servers:
                    servers.append(url)
                if url not in all_servers:
                    all_servers.append(url)

        if len(servers) == 1:
            path_item.servers = [Server(url=servers[0])]
            for op in path_item.operations():
                op.servers = None

    if all_servers:
        document.servers = [Server(url=url) for url in all_servers]

    if len(all_servers) == 1:
        for path_item in document.paths.values():
            path_item.servers = None


def _fill_info_defaults(document: Document) -> None:
    info = document.info
    info.title = info.title or DEFAULT_TITLE
    info.description = info.description or DEFAULT_DESCRIPTION
    info.version = info.version or DEFAULT_VERSION


def _sort(document: Document) -> None:
    if document.tags:
        document.tags.sort(key=lambda tag: tag.name)
    document.paths = dict(sorted(document.paths.items()))
    document.components.schemas = dict(sorted(document.components.schemas.items()))
