"""Load a parsed IDL dump (YAML or JSON) into an IdlFile."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from rpc_swagger.exceptions import IdlLoadError
from rpc_swagger.idl.model import IdlFile


def load_idl(file_path: Path) -> IdlFile:
    """Read and validate an IDL dump. JSON is accepted since it is valid YAML."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise IdlLoadError(f"cannot read {file_path}: {e}", cause=e) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise IdlLoadError(f"{file_path} is not valid YAML/JSON: {e}", cause=e) from e

    if not isinstance(data, dict):
        raise IdlLoadError(f"{file_path} does not contain an IDL mapping")

    try:
        idl = IdlFile.model_validate(data)
    except ValidationError as e:
        raise IdlLoadError(f"{file_path} is not a valid IDL dump: {e}", cause=e) from e

    if not idl.filename:
        idl.filename = file_path.name
    return idl
