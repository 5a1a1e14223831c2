"""CLI entry point for scraper-contract."""

import logging
from pathlib import Path

import click
from pydantic import ValidationError

from scraper_contract.catalog.aliases import default_index
from scraper_contract.catalog.parameters import get_all
from scraper_contract.config import DocumentSettings, Server, load_settings
from scraper_contract.errors import ContractError
from scraper_contract.generator.document import Document, assemble
from scraper_contract.generator.render import dump_document, render_document
from scraper_contract.generator.validator import validate_document
from scraper_contract.parser.swagger import diff_documents, load_document
from scraper_contract.schema.components import COMPONENT_SCHEMAS


def _settings(config: Path | None, servers: tuple[str, ...] = ()) -> DocumentSettings:
    """Load document settings, with --server URLs replacing the configured servers."""
    settings = load_settings(config) if config else DocumentSettings()
    if servers:
        settings = settings.model_copy(update={"servers": tuple(Server(url=url) for url in servers)})
    return settings


def _build(settings: DocumentSettings) -> Document:
    try:
        return assemble(get_all(), COMPONENT_SCHEMAS, settings)
    except ContractError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}") from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Build and check the OpenAPI document for the scrape endpoint."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file path for the OpenAPI document.")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), help="Output format.")
@click.option("--config", type=click.Path(exists=True, path_type=Path), default=None, help="YAML file overriding document metadata.")
@click.option("--server", "servers", multiple=True, help="Server URL; may be repeated. Replaces configured servers.")
def generate(output: Path, fmt: str, config: Path | None, servers: tuple[str, ...]):
    """Generate the OpenAPI document."""
    try:
        settings = _settings(config, servers)
    except (ContractError, ValidationError) as e:
        raise click.ClickException(f"Invalid config: {e}") from e

    click.echo("Assembling OpenAPI document...")
    doc = _build(settings)

    errors = validate_document(render_document(doc))
    if errors:
        for location, message in errors.items():
            click.echo(f"  {location}: {message}", err=True)
        raise click.ClickException(f"Generated document failed validation ({len(errors)} errors)")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dump_document(doc, fmt), encoding="utf-8")
    click.echo(f"OpenAPI specification written to: {output}")
    click.echo(f"Total parameters documented: {len(doc.operations[0].parameters)}")
    click.echo(f"Total schemas documented: {len(doc.registry)}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("--config", type=click.Path(exists=True, path_type=Path), default=None, help="YAML file overriding document metadata.")
def check(doc_path: Path, config: Path | None):
    """Check that a published document matches the current contract."""
    try:
        settings = _settings(config)
    except (ContractError, ValidationError) as e:
        raise click.ClickException(f"Invalid config: {e}") from e

    expected = render_document(_build(settings))
    try:
        actual = load_document(doc_path)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    lines = diff_documents(expected, actual)
    if lines:
        click.echo(f"{doc_path} is out of date:")
        for line in lines:
            click.echo(f"  {line}")
        raise SystemExit(1)
    click.echo(f"{doc_path} is up to date.")


@main.command()
@click.argument("names", nargs=-1, required=True)
def resolve(names: tuple[str, ...]):
    """Resolve query parameter names to their canonical parameter."""
    index = default_index()
    unknown = 0
    for name in names:
        canonical = index.canonical_name_for(name)
        if canonical is None:
            click.echo(f"{name}: not recognized")
            unknown += 1
            continue
        aliases = index.aliases_of(canonical)
        suffix = f" (aliases: {', '.join(aliases)})" if aliases else ""
        click.echo(f"{name} -> {canonical}{suffix}")
    if unknown:
        raise SystemExit(1)


@main.command()
def names():
    """List every recognized query parameter name."""
    for name in sorted(default_index().all_recognized_names()):
        click.echo(name)
