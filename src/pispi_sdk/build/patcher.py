"""Post-generation patcher.

Runs after openapi-typescript-codegen: points ``core/OpenAPI.ts`` at the
target base URL/version and rewrites type aliases the generator emitted with
an empty body (``export type Name = ;``) using a fixed correction table.
"""

import re
from pathlib import Path

import click
from pydantic import BaseModel

from pispi_sdk.config import BuildConfig

TYPE_FILE_SUFFIX = ".ts"

# Known empty types and their proper definitions
EMPTY_TYPE_FIXES = {
    "CompteTransfertIntraRequest": """{
    txId: string;
    montant: number;
    motif?: string;
    payeurNumero?: string;
    payeNumero?: string;
    payeurAlias?: string;
    payeAlias?: string;
}""",
    "WebhookModificationRequest": """{
    callbackUrl?: string;
    alias?: string;
}""",
    "remise": """{
    montant?: number;
    taux?: number;
}""",
}

EMPTY_TYPE_RE = re.compile(r"export type (\w+) = \s*;")
INLINE_REMISE_RE = re.compile(r"(\s+)(remise)\??:\s*;")
REQUIRED_REMISE_RE = re.compile(r"remise:\s*;")

BASE_RE = re.compile(r"BASE: '.*'")
VERSION_RE = re.compile(r"VERSION: '.*'")


class PatchReport(BaseModel):
    """Outcome of a patch run over the generated tree."""

    config_updated: bool = False
    fixes: int = 0
    modified_files: list[str] = []
    unknown_types: list[str] = []


def update_base_config(config_path: Path, base_url: str, version: str) -> bool:
    """Rewrite the BASE and VERSION constants of the generated OpenAPI config.

    Returns True if the file content changed. A missing file is skipped.
    """
    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"⚠️  Could not update {config_path.name}: {e}")
        click.echo("   This is okay if the file doesn't exist yet.")
        return False

    updated = BASE_RE.sub(lambda _: f"BASE: '{base_url}'", content, count=1)
    updated = VERSION_RE.sub(lambda _: f"VERSION: '{version}'", updated, count=1)

    if updated == content:
        click.echo(f"✅ {config_path.name} already up to date")
        return False

    try:
        config_path.write_text(updated, encoding="utf-8")
    except OSError as e:
        click.echo(f"⚠️  Could not update {config_path.name}: {e}")
        return False
    click.echo("✅ Updated OpenAPI configuration")
    return True


def find_empty_types(content: str) -> list[str]:
    """Names of every type alias declared with an empty body."""
    return [m.group(1) for m in EMPTY_TYPE_RE.finditer(content)]


def patch_type_source(
    content: str,
    filename: str,
    fixes: dict[str, str] = EMPTY_TYPE_FIXES,
) -> tuple[str, int, list[str]]:
    """Apply the empty-type rules to one file's text.

    Returns ``(new_content, fix_count, unknown_type_names)``. A file holding
    both an indented ``remise: ;`` and an unindented one counts two fixes.
    """
    count = 0
    unknown: list[str] = []

    for match in EMPTY_TYPE_RE.finditer(content):
        name = match.group(1)
        if name not in fixes:
            unknown.append(name)
            continue
        content = content.replace(match.group(0), f"export type {name} = {fixes[name]};", 1)
        count += 1
        click.echo(f"  ✅ Fixed empty type: {name}")

    remise = fixes.get("remise")
    if remise is None:
        return content, count, unknown

    content, n = INLINE_REMISE_RE.subn(lambda m: f"{m.group(1)}{m.group(2)}?: {remise}", content)
    if n:
        count += 1
        click.echo(f"  ✅ Fixed remise type in: {filename}")

    if "remise: ;" in content:
        content = REQUIRED_REMISE_RE.sub(lambda _: f"remise: {remise}", content)
        count += 1
        click.echo(f"  ✅ Fixed remise type definition in: {filename}")

    return content, count, unknown


def fix_empty_types(models_dir: Path, fixes: dict[str, str] = EMPTY_TYPE_FIXES) -> PatchReport:
    """Repair empty type definitions in every generated model file."""
    report = PatchReport()
    try:
        files = sorted(p for p in models_dir.iterdir() if p.is_file() and p.suffix == TYPE_FILE_SUFFIX)
    except OSError as e:
        click.echo(f"⚠️  Could not fix empty types: {e}")
        return report

    for file_path in files:
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            click.echo(f"⚠️  Skipping unreadable file {file_path.name}: {e}")
            continue

        patched, count, unknown = patch_type_source(content, file_path.name, fixes)
        for name in unknown:
            click.echo(f"  ⚠️  No known fix for empty type: {name}")
        report.unknown_types.extend(unknown)

        if count:
            try:
                file_path.write_text(patched, encoding="utf-8")
            except OSError as e:
                click.echo(f"⚠️  Could not write {file_path.name}: {e}")
                continue
            report.fixes += count
            report.modified_files.append(file_path.name)

    if report.fixes:
        click.echo(f"✅ Fixed {report.fixes} empty type definition(s)")
    else:
        click.echo("✅ No empty types found to fix")
    return report


def patch_generated(config: BuildConfig) -> PatchReport:
    """Run both post-generation fixes over the generated client tree of ``config``."""
    config_updated = update_base_config(config.openapi_config_path, config.base_url, config.api_version)

    click.echo("🔧 Fixing empty type definitions...")
    report = fix_empty_types(config.models_dir)
    report.config_updated = config_updated

    click.echo("✅ Post-generation setup complete")
    return report
