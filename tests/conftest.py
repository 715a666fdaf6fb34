"""Shared pytest fixtures for License Lens tests."""

import json
from pathlib import Path

import pytest


def write_package(store: Path, dirname: str, manifest: dict | str | None) -> Path:
    """Create ``store/dirname`` with a package.json.

    ``manifest`` may be a dict (serialized), a raw string (written as-is)
    or None (directory without a manifest).
    """
    pkg_dir = store / dirname
    pkg_dir.mkdir(parents=True, exist_ok=True)
    if isinstance(manifest, dict):
        (pkg_dir / "package.json").write_text(json.dumps(manifest))
    elif isinstance(manifest, str):
        (pkg_dir / "package.json").write_text(manifest)
    return pkg_dir


@pytest.fixture
def node_modules(tmp_path: Path) -> Path:
    store = tmp_path / "node_modules"
    store.mkdir()
    return store


@pytest.fixture
def project(tmp_path: Path, node_modules: Path) -> Path:
    """A project root with a package.json and an empty node_modules."""
    (tmp_path / "package.json").write_text(json.dumps({"name": "app", "version": "0.0.0"}))
    return tmp_path


@pytest.fixture
def make_package():
    return write_package
