"""CLI entry point for router-docs."""

import json
import logging
from pathlib import Path

import click
import yaml
from openapi_spec_validator import validate
from openapi_spec_validator.validation.exceptions import OpenAPIValidationError

from router_docs.api import SwaggerAPI
from router_docs.errors import RouterDocsError
from router_docs.loader import load_route_file


def _dump(spec: dict, output: Path) -> str:
    if output.suffix == ".json":
        return json.dumps(spec, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(spec, sort_keys=False, allow_unicode=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """router-docs: generate OpenAPI 2.0 documents from route tables."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("routes_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file (.json or .yaml).")
@click.option("--prefix", default=None, help="Override every router's own prefix.")
@click.option("--no-default-responses", is_flag=True, help="Do not add the default 200 response.")
@click.option("--check", is_flag=True, help="Validate the result against the OpenAPI 2.0 schema.")
def generate(routes_path: Path, output: Path, prefix: str | None, no_default_responses: bool, check: bool):
    """Generate an OpenAPI document from a route file."""
    click.echo(f"Reading routes from {routes_path}...")
    options = {"default_responses": None} if no_default_responses else {}
    try:
        document, routers = load_route_file(routes_path)
        api = SwaggerAPI()
        for router in routers:
            api.add_router(router, prefix=prefix)
        click.echo(f"Found {len(api.routes)} routes.")
        spec = api.generate_spec(document, options)
    except RouterDocsError as e:
        raise click.ClickException(str(e)) from e

    if check:
        try:
            validate(spec)
        except OpenAPIValidationError as e:
            raise click.ClickException(f"Generated document is not valid OpenAPI 2.0: {e.message}") from e
        click.echo("Document passed OpenAPI 2.0 validation.")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(_dump(spec, output), encoding="utf-8")
    click.echo(f"Spec saved to {output}")
