"""Data models for the license scanner engine."""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_LICENSE = "UNKNOWN"


@dataclass(frozen=True)
class PackageRecord:
    """A single installed package discovered in the dependency tree."""

    name: str
    version: str
    license: str  # normalized, or UNKNOWN_LICENSE
    source_path: str  # diagnostics only, not part of identity

    @property
    def key(self) -> str:
        return identity_key(self.name, self.version)


def identity_key(name: str, version: str) -> str:
    """Return the ``name@version`` key that identifies a package."""
    return f"{name}@{version}"
