"""Annotation vocabulary understood by the generator.

Keys outside this table carry no meaning for the generated document and are
ignored.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

API_GET = "api.get"
API_POST = "api.post"
API_PUT = "api.put"
API_PATCH = "api.patch"
API_DELETE = "api.delete"
API_OPTIONS = "api.options"
API_HEAD = "api.head"
API_ANY = "api.any"
API_QUERY = "api.query"
API_FORM = "api.form"
API_PATH = "api.path"
API_HEADER = "api.header"
API_COOKIE = "api.cookie"
API_BODY = "api.body"
API_RAW_BODY = "api.raw_body"
API_BASE_DOMAIN = "api.base_domain"
API_BASE_URL = "api.baseurl"
OPENAPI_OPERATION = "openapi.operation"
OPENAPI_PROPERTY = "openapi.property"
OPENAPI_SCHEMA = "openapi.schema"
OPENAPI_PARAMETER = "openapi.parameter"
OPENAPI_DOCUMENT = "openapi.document"


class Role(Enum):
    HTTP_METHOD = "http_method"
    PARAMETER = "parameter"
    BODY = "body"
    BASE_URL = "base_url"
    OVERRIDE = "override"


HTTP_METHOD_ANNOTATIONS: dict[str, str] = {
    API_GET: "GET",
    API_POST: "POST",
    API_PUT: "PUT",
    API_PATCH: "PATCH",
    API_DELETE: "DELETE",
    API_OPTIONS: "OPTIONS",
    API_HEAD: "HEAD",
    API_ANY: "ANY",
}

# Evaluation order matters: a later location overwrites an earlier one.
PARAMETER_ANNOTATIONS: dict[str, str] = {
    API_QUERY: "query",
    API_PATH: "path",
    API_COOKIE: "cookie",
    API_HEADER: "header",
}

BODY_ANNOTATIONS: dict[str, str] = {
    API_BODY: "application/json",
    API_FORM: "multipart/form-data",
    API_RAW_BODY: "application/octet-stream",
}

_ROLES: dict[str, Role] = {
    **{key: Role.HTTP_METHOD for key in HTTP_METHOD_ANNOTATIONS},
    **{key: Role.PARAMETER for key in PARAMETER_ANNOTATIONS},
    **{key: Role.BODY for key in BODY_ANNOTATIONS},
    API_BASE_URL: Role.BASE_URL,
    API_BASE_DOMAIN: Role.BASE_URL,
    OPENAPI_DOCUMENT: Role.OVERRIDE,
    OPENAPI_OPERATION: Role.OVERRIDE,
    OPENAPI_SCHEMA: Role.OVERRIDE,
    OPENAPI_PROPERTY: Role.OVERRIDE,
    OPENAPI_PARAMETER: Role.OVERRIDE,
}


class Annotated(Protocol):
    annotations: dict[str, list[str]]


M = TypeVar("M", bound=BaseModel)


def role_of(key: str) -> Role | None:
    return _ROLES.get(key)


def annotations_on(element: Annotated, key: str) -> list[str]:
    """Values of annotation ``key`` on an IDL element, empty if absent."""
    return list(element.annotations.get(key, []))


def first_annotation(element: Annotated, key: str) -> str:
    """First value of ``key``, or "" when absent."""
    values = annotations_on(element, key)
    return values[0] if values else ""


def http_methods(element: Annotated) -> list[tuple[str, str]]:
    """(HTTP verb, path template) pairs for every verb annotation on a method.

    Verbs are returned in annotation order; empty paths are skipped.
    """
    result = []
    for key in element.annotations:
        if role_of(key) is not Role.HTTP_METHOD:
            continue
        path = first_annotation(element, key)
        if path:
            result.append((HTTP_METHOD_ANNOTATIONS[key], path))
    return result


def parse_override(element: Annotated, key: str, shape: type[M]) -> M | None:
    """Parse the payload of an override annotation into ``shape``.

    The payload is a YAML/JSON flow mapping, e.g.
    ``{title: "Name", max_length: 50}``. A payload that does not parse or
    does not fit the shape is reported and treated as absent.
    """
    raw = first_annotation(element, key)
    if not raw:
        return None

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        logger.warning("ignoring %s on '%s': invalid payload: %s", key, _name_of(element), e)
        return None

    if not isinstance(data, dict):
        logger.warning("ignoring %s on '%s': payload is not a mapping", key, _name_of(element))
        return None

    try:
        return shape.model_validate(data)
    except ValidationError as e:
        logger.warning("ignoring %s on '%s': %s", key, _name_of(element), e)
        return None


def _name_of(element: Annotated) -> str:
    return getattr(element, "name", "?")
