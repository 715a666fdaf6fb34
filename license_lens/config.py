"""Policy configuration — defaults, config file, CLI overrides."""

from __future__ import annotations

import json
import os
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from license_lens.exceptions import ConfigError

log = structlog.get_logger("license_lens.config")

CONFIG_FILE = "license-lens.config.json"
PROJECT_MARKER = "package.json"


class PolicyConfig(BaseModel):
    """License policy.

    ``disallow`` and ``warn`` are compared case-insensitively; ``ignore``
    holds exact ``name@version`` keys.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    disallow: list[str] = Field(default_factory=list)
    warn: list[str] = Field(default_factory=list)
    allow_unlicensed: bool = Field(default=False, alias="allowUnlicensed")
    ignore: list[str] = Field(default_factory=list)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def find_project_root(start: Path) -> Path:
    """Walk up from ``start`` to the nearest directory holding a package.json.

    Falls back to ``start`` itself when no ancestor has one.
    """
    start = start.resolve()
    directory = start
    while directory != directory.parent:
        if (directory / PROJECT_MARKER).exists():
            return directory
        directory = directory.parent
    return start


def split_list(value: str) -> list[str]:
    """Split a comma-separated CLI value, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(
    root: Path,
    config_path: Path | None = None,
    *,
    disallow: str | None = None,
    warn: str | None = None,
    no_allow_unlicensed: bool = False,
) -> PolicyConfig:
    """Build the effective policy for a project.

    File values override defaults; ``disallow``/``warn`` (comma-separated)
    replace the file's lists; ``no_allow_unlicensed`` forces
    ``allowUnlicensed`` off.

    Raises:
        ConfigError: the config file is not valid JSON or has the wrong shape.
    """
    path = config_path if config_path is not None else root / CONFIG_FILE
    raw: dict = {}
    if os.path.exists(path):
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as exc:
            raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"{path} must contain a JSON object")
        log.debug("config.loaded", path=str(path), keys=sorted(raw))
    elif config_path is not None:
        raise ConfigError(f"Config file not found: {path}")

    try:
        config = PolicyConfig.model_validate(raw)
    except ValidationError as exc:
        messages = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err["loc"])
            messages.append(f"{loc}: {err['msg']}")
        raise ConfigError(f"Invalid config in {path}: " + "; ".join(messages)) from exc

    updates: dict = {}
    if disallow:
        updates["disallow"] = split_list(disallow)
    if warn:
        updates["warn"] = split_list(warn)
    if no_allow_unlicensed:
        updates["allow_unlicensed"] = False
    return config.model_copy(update=updates)
