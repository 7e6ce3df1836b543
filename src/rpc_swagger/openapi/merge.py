"""Merge author-supplied override payloads onto generated OpenAPI models."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, TypeVar

from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


def merge(base: M, override: BaseModel | None) -> M:
    """Merge ``override`` onto ``base`` in place and return ``base``.

    Only fields the override explicitly set are considered, plus any extra
    (``x-...``) keys it carries. Nested models and mappings are merged
    recursively; anything else set by the override replaces the base value.
    """
    if override is None:
        return base

    declared = type(override).model_fields
    for name in override.model_fields_set:
        if name not in declared:
            continue
        setattr(base, name, _merge_value(getattr(base, name, None), getattr(override, name)))

    for key, value in (override.model_extra or {}).items():
        current = (base.model_extra or {}).get(key)
        setattr(base, key, _merge_value(current, value))

    return base


def _merge_value(current: Any, incoming: Any) -> Any:
    if isinstance(current, BaseModel) and isinstance(incoming, BaseModel):
        return merge(current, incoming)
    if isinstance(current, dict) and isinstance(incoming, dict):
        merged = dict(current)
        for key, value in incoming.items():
            merged[key] = _merge_value(merged.get(key), value)
        return merged
    return deepcopy(incoming)
