"""Render a Report as JSON or as a bounded text table."""

from __future__ import annotations

import json

from license_lens.config import PolicyConfig
from license_lens.engines.policy_evaluator.models import Report

NAME_WIDTH = 40
VERSION_WIDTH = 12
LICENSE_WIDTH = 20
MAX_ROWS = 200
ELLIPSIS = "…"


def render_json(report: Report, config: PolicyConfig) -> str:
    """Serialize config + report as one deterministic JSON document."""
    return json.dumps({"config": config.to_dict(), **report.to_dict()}, indent=2)


def pad(value: object, width: int) -> str:
    """Pad to ``width``; values that would fill it are cut and end in an ellipsis."""
    text = str(value)
    if len(text) >= width:
        return text[: width - 1] + ELLIPSIS
    return text + " " * (width - len(text))


def render_table(report: Report, config: PolicyConfig) -> str:
    lines = [f"License Lens — scanned {report.total} packages"]
    if report.errors or report.warnings:
        lines.append(f"✖ {report.errors} error(s), ⚠︎ {report.warnings} warning(s)")
    else:
        lines.append("✓ no issues")

    head = (
        pad("package", NAME_WIDTH)
        + pad("version", VERSION_WIDTH)
        + pad("license", LICENSE_WIDTH)
        + "status"
    )
    lines.append(head)
    lines.append("-" * len(head))
    for row in report.rows[:MAX_ROWS]:
        status = "" if row.status == "ok" else row.status
        lines.append(
            pad(row.name, NAME_WIDTH)
            + pad(row.version, VERSION_WIDTH)
            + pad(row.license, LICENSE_WIDTH)
            + status
        )
    if len(report.rows) > MAX_ROWS:
        lines.append(f"{ELLIPSIS} ({len(report.rows) - MAX_ROWS} more)")

    if report.errors:
        disallowed = ", ".join(config.disallow) if config.disallow else "(none configured)"
        allow = "true" if config.allow_unlicensed else "false"
        lines.append("")
        lines.append(f"Policy: disallow = {disallowed}; allowUnlicensed = {allow}")
        lines.append("Failing because disallowed/unknown licenses were found.")
    return "\n".join(lines)
