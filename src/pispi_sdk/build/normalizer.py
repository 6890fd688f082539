"""OpenAPI spec normalizer.

Validates the required top-level sections of an OpenAPI 3.x JSON document
and repairs the structural defects that break the code generator: missing
``tags``, null operations, operations without tags or ``operationId``.
"""

import json
from pathlib import Path

import click
from pydantic import BaseModel

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "options", "head")

DEFAULT_TAG = "Default"


class StructuralValidationError(Exception):
    """The document is missing a required top-level section."""


class NormalizeReport(BaseModel):
    """Counters collected during one normalization pass."""

    created_tags: bool = False
    fixed_paths: int = 0
    removed_null_operations: int = 0
    skipped_operations: int = 0
    added_operation_ids: int = 0

    @property
    def changed(self) -> bool:
        return bool(
            self.created_tags
            or self.fixed_paths
            or self.removed_null_operations
            or self.added_operation_ids
        )


def validate_structure(doc: object) -> None:
    """Raise StructuralValidationError if a required section is missing or malformed."""
    if not isinstance(doc, dict):
        raise StructuralValidationError("Document root must be a JSON object")
    if not doc.get("openapi"):
        raise StructuralValidationError('Missing "openapi" field')
    info = doc.get("info")
    if info is None or (not info and not isinstance(info, dict)):
        raise StructuralValidationError('Missing "info" field')
    if not isinstance(doc.get("paths"), dict):
        raise StructuralValidationError('Missing or invalid "paths" field')
    if not isinstance(doc.get("components"), dict):
        raise StructuralValidationError('Missing or invalid "components" field')


def synthesize_operation_id(method: str, path: str) -> str:
    """Build an operationId from the method and the literal path segments.

    ``("post", "/comptes/{numero}/transferts")`` -> ``"postComptesTransferts"``
    """
    parts = [p for p in path.split("/") if p and not p.startswith("{")]
    return method.lower() + "".join(p[0].upper() + p[1:] for p in parts)


def normalize_spec(doc: dict) -> NormalizeReport:
    """Validate and repair ``doc`` in place. Returns the pass counters."""
    validate_structure(doc)
    report = NormalizeReport()

    if not isinstance(doc.get("tags"), list):
        click.echo("⚠️  Tags array missing or invalid, creating empty array...")
        doc["tags"] = []
        report.created_tags = True

    for path, path_item in doc["paths"].items():
        if not isinstance(path_item, dict):
            continue
        # Copy the keys: null operations are deleted while iterating
        for key in list(path_item.keys()):
            if key.lower() not in HTTP_METHODS:
                continue
            _normalize_operation(path_item, key, path, report)

    return report


def _normalize_operation(path_item: dict, key: str, path: str, report: NormalizeReport) -> None:
    operation = path_item[key]
    label = f"{key.upper()} {path}"

    if operation is None:
        click.echo(f"⚠️  Removing null operation {label}")
        del path_item[key]
        report.removed_null_operations += 1
        return

    if not isinstance(operation, dict):
        click.echo(f"⚠️  Skipping invalid operation {label}")
        report.skipped_operations += 1
        return

    tags = operation.get("tags")
    if not isinstance(tags, list) or not tags:
        click.echo(f"⚠️  Adding default tag to {label}")
        operation["tags"] = [DEFAULT_TAG]
        report.fixed_paths += 1

    if not operation.get("operationId"):
        operation_id = synthesize_operation_id(key, path)
        operation["operationId"] = operation_id
        click.echo(f'⚠️  Added operationId "{operation_id}" to {label}')
        report.added_operation_ids += 1


def dump_spec(doc: dict) -> str:
    """Serialize a document the way it is written back to disk."""
    return json.dumps(doc, indent=2, ensure_ascii=False) + "\n"


def normalize_file(spec_path: Path) -> NormalizeReport:
    """Normalize the JSON spec at ``spec_path`` and write it back in place.

    Nothing is written if the document fails validation.
    """
    click.echo(f"📋 Validating OpenAPI specification {spec_path}...")
    try:
        text = spec_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise StructuralValidationError(f"Invalid UTF-8: {e}") from e
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise StructuralValidationError(f"Invalid JSON: {e}") from e

    report = normalize_spec(doc)
    spec_path.write_text(dump_spec(doc), encoding="utf-8")

    if report.removed_null_operations:
        click.echo(f"✅ Removed {report.removed_null_operations} null operations")
    if report.fixed_paths:
        click.echo(f"✅ Fixed {report.fixed_paths} path operations")
    if report.added_operation_ids:
        click.echo(f"✅ Added {report.added_operation_ids} operationIds")
    click.echo("✅ OpenAPI specification validated and fixed")
    return report
