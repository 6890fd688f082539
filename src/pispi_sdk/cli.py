"""CLI entry point for the PI-SPI SDK build tooling."""

from pathlib import Path

import click
from pydantic import ValidationError

from pispi_sdk.build.normalizer import StructuralValidationError, normalize_file
from pispi_sdk.build.patcher import patch_generated
from pispi_sdk.config import BuildConfig, load_build_config


def _run_normalize(spec_path: Path) -> None:
    """Normalize the OpenAPI document, exiting with status 1 on a structural or I/O error."""
    if not spec_path.exists():
        click.echo(f"❌ Error validating OpenAPI spec: {spec_path} not found", err=True)
        raise SystemExit(1)
    try:
        normalize_file(spec_path)
    except (StructuralValidationError, OSError) as e:
        click.echo(f"❌ Error validating OpenAPI spec: {e}", err=True)
        raise SystemExit(1)


@click.group()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Build configuration YAML (default: ./pispi.yaml if present).",
)
@click.pass_context
def main(ctx: click.Context, config_path: Path | None):
    """PI-SPI SDK: repair the OpenAPI spec and patch generated client code."""
    try:
        ctx.obj = load_build_config(config_path)
    except ValidationError as e:
        raise click.ClickException(f"Invalid build configuration: {e}")


@main.command()
@click.argument("spec_path", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def normalize(config: BuildConfig, spec_path: Path | None):
    """Validate and fix the OpenAPI JSON document in place."""
    _run_normalize(spec_path or config.spec_path)


@main.command()
@click.option("--generated-dir", default=None, type=click.Path(file_okay=False, path_type=Path), help="Root of the generated client.")
@click.option("--base-url", default=None, help="Base URL written into core/OpenAPI.ts.")
@click.option("--api-version", default=None, help="VERSION written into core/OpenAPI.ts.")
@click.pass_obj
def patch(config: BuildConfig, generated_dir: Path | None, base_url: str | None, api_version: str | None):
    """Fix known defects in the generated client (always exits 0)."""
    overrides = {
        "generated_dir": generated_dir,
        "base_url": base_url,
        "api_version": api_version,
    }
    config = config.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    click.echo(f"Patching generated client in {config.generated_dir}...")
    report = patch_generated(config)
    click.echo(f"Done! {report.fixes} fix(es) in {len(report.modified_files)} file(s)")
