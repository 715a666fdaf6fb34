"""Package manifest (package.json) loading and license normalization.

The ``license``/``licenses`` fields vary across package-manager versions:

    "license": "MIT"
    "license": {"type": "MIT", "url": "..."}
    "licenses": [{"type": "MIT"}, "Apache-2.0"]

They are resolved into one :data:`LicenseDeclaration` variant first, and
only then rendered to a string.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import structlog

from license_lens.engines.license_scanner.models import UNKNOWN_LICENSE

log = structlog.get_logger("license_lens.scanner")

MANIFEST_FILE = "package.json"
LICENSE_SEPARATOR = " OR "


@dataclass(frozen=True)
class LicenseText:
    """``license`` is a plain string."""

    value: str


@dataclass(frozen=True)
class LicenseObject:
    """``license`` is an object with a string ``type``."""

    type: str


@dataclass(frozen=True)
class LicenseList:
    """Legacy ``licenses`` array; entries already reduced to strings."""

    entries: tuple[str, ...]


# None means the manifest declares no usable license.
LicenseDeclaration = Union[LicenseText, LicenseObject, LicenseList, None]


def _entry_text(entry: Any) -> str | None:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict) and isinstance(entry.get("type"), str):
        return entry["type"]
    return None


def read_license_declaration(license_field: Any, licenses_field: Any) -> LicenseDeclaration:
    """Resolve raw manifest values: string → object → array → absent."""
    if isinstance(license_field, str):
        return LicenseText(license_field)
    if isinstance(license_field, dict) and isinstance(license_field.get("type"), str):
        return LicenseObject(license_field["type"])
    if isinstance(licenses_field, list) and licenses_field:
        entries = tuple(t for t in map(_entry_text, licenses_field) if t is not None)
        if entries:
            return LicenseList(entries)
    return None


def render_license(declaration: LicenseDeclaration) -> str:
    if isinstance(declaration, LicenseText):
        return declaration.value.strip()
    if isinstance(declaration, LicenseObject):
        return declaration.type.strip()
    if isinstance(declaration, LicenseList):
        return LICENSE_SEPARATOR.join(e.strip() for e in declaration.entries)
    return UNKNOWN_LICENSE


def normalize_license(license_field: Any, licenses_field: Any = None) -> str:
    """Normalize a manifest's license declaration to a single string.

    Returns ``UNKNOWN`` when nothing usable is declared.
    """
    return render_license(read_license_declaration(license_field, licenses_field))


def load_manifest(path: Path) -> dict[str, Any] | None:
    """Read and parse a manifest file.

    Returns None when the file cannot be read, is not valid JSON, or is not
    a JSON object. Callers treat None as "skip this package".
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, RecursionError) as exc:
        log.debug("scanner.manifest_invalid", path=str(path), error=str(exc))
        return None
    if not isinstance(data, dict):
        log.debug("scanner.manifest_invalid", path=str(path), error="not a JSON object")
        return None
    return data
