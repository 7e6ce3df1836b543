"""CLI entry point for rpc-swagger."""

import logging
from pathlib import Path

import click

from rpc_swagger.exceptions import IdlLoadError, SerializationError
from rpc_swagger.generator.document import DocumentGenerator
from rpc_swagger.idl.loader import load_idl
from rpc_swagger.openapi.render import write_document


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@click.group()
def main():
    """rpc-swagger: generate OpenAPI documents from annotated IDL services."""
    pass


@main.command()
@click.argument("idl_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output-dir", default=".", type=click.Path(file_okay=False, path_type=Path), help="Directory to write the document into.")
@click.option("--format", "fmt", default="yaml", type=click.Choice(["yaml", "json"]), help="Output format.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def generate(idl_path: Path, output_dir: Path, fmt: str, verbose: bool):
    """Generate an OpenAPI v3 document from a parsed IDL dump."""
    _setup_logging(verbose)

    click.echo(f"Loading {idl_path}...")
    try:
        idl = load_idl(idl_path)
    except IdlLoadError as e:
        raise click.ClickException(e.detail) from e
    click.echo(f"Found {len(idl.services)} services and {len(idl.structs)} structs.")

    document = DocumentGenerator(idl).build()

    try:
        output_path = write_document(document, output_dir, fmt)
    except SerializationError as e:
        raise click.ClickException(e.detail) from e
    click.echo(f"Generated {output_path} ({len(document.paths)} paths, {len(document.components.schemas)} schemas)")
