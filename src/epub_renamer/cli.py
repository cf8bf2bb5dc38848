"""CLI entry point for the EPUB renamer (preview only)."""

from pathlib import Path

import click
from loguru import logger
from pydantic import ValidationError

from .collisions import ExistingNames
from .config import RenamerConfig
from .errors import ConfigError, ManifestError
from .metadata import load_manifest
from .models import AuthorOrder, parse_author_order
from .planner import plan_batch
from .report import plan_to_json, render_plan

log = logger.bind(stage="cli")


def _author_format_option(ctx: click.Context, param: click.Parameter, value: str | None):
    if value is None:
        return None
    try:
        return parse_author_order(value)
    except ConfigError as e:
        raise click.BadParameter(str(e)) from e


@click.command()
@click.argument(
    "manifest_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--out",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Destination folder; existing files there are never reused.",
)
@click.option(
    "--ascii/--no-ascii",
    "strip_diacritics",
    default=None,
    help="Strip diacritics for ASCII-friendly names (Unicode kept by default).",
)
@click.option(
    "--titlecase/--no-titlecase",
    "apply_title_case",
    default=None,
    help="Apply smart Title Case to title and authors (on by default).",
)
@click.option(
    "--author-format",
    callback=_author_format_option,
    default=None,
    help="Author name order: as-is | firstlast | lastfirst (default: firstlast).",
)
@click.option("--extension", default=None, help="Target extension (default: .epub).")
@click.option("--json", "as_json", is_flag=True, help="Print the plan as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to .env file.",
)
def main(
    manifest_path: Path,
    output_dir: Path | None,
    strip_diacritics: bool | None,
    apply_title_case: bool | None,
    author_format: AuthorOrder | None,
    extension: str | None,
    as_json: bool,
    verbose: bool,
    config_file: Path | None,
) -> None:
    """Propose safe, consistent filenames for EPUBs from their metadata.

    MANIFEST_PATH is a JSON array of {"source", "title", "authors"} records.
    Nothing is copied or moved; the plan is only printed.
    """
    # Pass CLI flags as kwargs so they win over env and .env
    config_kwargs: dict = {"verbose": verbose}
    if output_dir is not None:
        config_kwargs["output_dir"] = output_dir
    if strip_diacritics is not None:
        config_kwargs["strip_diacritics"] = strip_diacritics
    if apply_title_case is not None:
        config_kwargs["apply_title_case"] = apply_title_case
    if author_format is not None:
        config_kwargs["author_format"] = author_format
    if extension is not None:
        config_kwargs["extension"] = extension
    if config_file is not None:
        config_kwargs["_env_file"] = config_file

    try:
        config = RenamerConfig(**config_kwargs)
    except ValidationError as e:
        raise click.UsageError(f"Invalid configuration: {e}") from e
    log_file = config.setup_logging()
    if log_file is not None:
        log.debug(f"Logging to {log_file}")

    try:
        items = load_manifest(manifest_path)
    except ManifestError as e:
        raise click.ClickException(str(e)) from e

    if not items:
        click.echo("No records found.")
        return

    exists = ExistingNames.from_directory(config.output_dir) if config.output_dir else None

    log.info(
        f"Planning: manifest={manifest_path} items={len(items)} "
        f"out={config.output_dir} options={config.to_options()}"
    )
    plan = plan_batch(
        items,
        config.to_options(),
        exists=exists,
        extension=config.extension,
        max_stem_length=config.max_stem_length,
    )

    if as_json:
        click.echo(plan_to_json(plan))
        return

    render_plan(plan)
    click.echo("Preview only. Nothing was copied or moved.")
