"""Walk an installed-dependency tree and collect one record per package."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from license_lens.engines.license_scanner.manifest import (
    MANIFEST_FILE,
    load_manifest,
    normalize_license,
)
from license_lens.engines.license_scanner.models import PackageRecord, identity_key

log = structlog.get_logger("license_lens.scanner")

STORE_DIR = "node_modules"
BIN_DIR = ".bin"
SCOPE_PREFIX = "@"


@dataclass
class _ScanState:
    """Accumulator owned by a single :func:`scan` call."""

    seen: set[str] = field(default_factory=set)
    walked: set[str] = field(default_factory=set)  # real paths of visited dirs
    records: list[PackageRecord] = field(default_factory=list)


def scan(root: Path | str) -> list[PackageRecord]:
    """Scan a ``node_modules`` directory for installed packages.

    Every package is reported once per ``name@version``, sorted by
    ``(name, version)`` as plain strings. Unreadable directories and
    malformed manifests are skipped; this never raises for them.
    """
    state = _ScanState()
    _visit(Path(root), state)
    records = sorted(state.records, key=lambda r: (r.name, r.version))
    log.info("scanner.done", root=str(root), packages=len(records))
    return records


def _read_entries(directory: Path) -> list[str]:
    """List a directory, or return [] when it cannot be read."""
    try:
        return sorted(os.listdir(directory))
    except OSError as exc:
        log.debug("scanner.readdir_failed", path=str(directory), error=str(exc))
        return []


def _visit(directory: Path, state: _ScanState) -> None:
    real = os.path.realpath(directory)
    if real in state.walked:
        return
    state.walked.add(real)

    for entry in _read_entries(directory):
        if entry == BIN_DIR:
            continue
        entry_path = directory / entry

        # Scope directory: its children are the packages.
        if entry.startswith(SCOPE_PREFIX):
            _visit(entry_path, state)
            continue

        manifest_path = entry_path / MANIFEST_FILE
        if os.path.exists(manifest_path):
            _visit_package(entry_path, manifest_path, state)
        elif os.path.isdir(entry_path):
            # Indirection layer without a manifest (e.g. pnpm's .pnpm store).
            nested = entry_path / STORE_DIR
            if os.path.exists(nested):
                _visit(nested, state)


def _visit_package(package_dir: Path, manifest_path: Path, state: _ScanState) -> None:
    manifest = load_manifest(manifest_path)
    if manifest is None:
        return

    name = manifest.get("name")
    version = manifest.get("version")
    if isinstance(name, str) and name and isinstance(version, str):
        key = identity_key(name, version)
        if key in state.seen:
            log.debug("scanner.duplicate_skipped", key=key, path=str(package_dir))
            return
        state.seen.add(key)
        state.records.append(
            PackageRecord(
                name=name,
                version=version,
                license=normalize_license(manifest.get("license"), manifest.get("licenses")),
                source_path=str(package_dir),
            )
        )
    else:
        log.debug("scanner.identity_missing", path=str(manifest_path))

    nested = package_dir / STORE_DIR
    if os.path.exists(nested):
        _visit(nested, state)
