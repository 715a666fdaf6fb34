"""Classify scanned packages as ok / warn / error under a PolicyConfig."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from license_lens.config import PolicyConfig
from license_lens.engines.license_scanner.models import UNKNOWN_LICENSE, PackageRecord
from license_lens.engines.policy_evaluator.models import EvaluatedRow, Report, RowStatus

log = structlog.get_logger("license_lens.evaluator")


def classify(license: str, policy: PolicyConfig, disallow: set[str], warn: set[str]) -> RowStatus:
    """First match wins: unknown → disallow → warn → ok.

    ``disallow`` and ``warn`` must already be uppercased.
    """
    lic = (license or UNKNOWN_LICENSE).upper()
    if lic == UNKNOWN_LICENSE and not policy.allow_unlicensed:
        return "error"
    if lic in disallow:
        return "error"
    if lic in warn:
        return "warn"
    return "ok"


def evaluate(records: Iterable[PackageRecord], policy: PolicyConfig) -> Report:
    """Evaluate every non-ignored record; never stops early and never raises."""
    disallow = {x.upper() for x in policy.disallow}
    warn = {x.upper() for x in policy.warn}
    ignore = set(policy.ignore)

    report = Report()
    for record in records:
        if record.key in ignore:
            continue
        status = classify(record.license, policy, disallow, warn)
        if status == "error":
            report.errors += 1
        elif status == "warn":
            report.warnings += 1
        report.rows.append(
            EvaluatedRow(
                name=record.name,
                version=record.version,
                license=record.license,
                status=status,
            )
        )

    report.total = len(report.rows)
    report.fail = report.errors > 0
    log.info(
        "evaluator.done",
        total=report.total,
        errors=report.errors,
        warnings=report.warnings,
    )
    return report
