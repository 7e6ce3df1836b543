"""Serialize a generated Document to YAML or JSON and write it to disk."""

import json
from pathlib import Path

import yaml

from rpc_swagger.exceptions import SerializationError
from rpc_swagger.openapi.models import Document

HEADER = "Generated with rpc-swagger"

OUTPUT_NAMES = {"yaml": "openapi.yaml", "json": "openapi.json"}


def document_to_dict(document: Document) -> dict:
    """Wire form of the document: camelCase keys, unset fields dropped."""
    return document.model_dump(mode="json", by_alias=True, exclude_none=True)


def render_document(document: Document, fmt: str = "yaml") -> str:
    """Encode the document. YAML output is prefixed with a comment header."""
    if fmt not in OUTPUT_NAMES:
        raise SerializationError(f"unsupported output format: {fmt}")

    try:
        data = document_to_dict(document)
        if fmt == "json":
            return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        body = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    except (TypeError, ValueError, yaml.YAMLError) as e:
        raise SerializationError(f"cannot encode document as {fmt}: {e}", cause=e) from e

    header = "\n".join(f"# {line}" for line in HEADER.splitlines())
    return f"{header}\n\n{body}"


def write_document(document: Document, output_dir: Path, fmt: str = "yaml") -> Path:
    """Render the document into ``output_dir`` and return the written path."""
    content = render_document(document, fmt)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / OUTPUT_NAMES[fmt]
    output_path.write_text(content, encoding="utf-8")
    return output_path
