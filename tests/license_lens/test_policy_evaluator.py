"""Tests for the policy evaluator engine."""

from __future__ import annotations

from license_lens.config import PolicyConfig
from license_lens.engines.license_scanner import UNKNOWN_LICENSE, PackageRecord, scan
from license_lens.engines.policy_evaluator import EvaluatedRow, evaluate
from license_lens.engines.policy_evaluator.evaluator import classify


def _rec(name: str, version: str = "1.0.0", license: str = "MIT") -> PackageRecord:
    return PackageRecord(name=name, version=version, license=license, source_path=f"/nm/{name}")


class TestClassify:
    def test_unknown_is_error_by_default(self):
        assert classify(UNKNOWN_LICENSE, PolicyConfig(), set(), set()) == "error"

    def test_unknown_allowed(self):
        assert classify(UNKNOWN_LICENSE, PolicyConfig(allow_unlicensed=True), set(), set()) == "ok"

    def test_blank_license_counts_as_unknown(self):
        assert classify("", PolicyConfig(), set(), set()) == "error"

    def test_unknown_lowercase_is_unknown(self):
        assert classify("unknown", PolicyConfig(), set(), set()) == "error"

    def test_disallow_beats_warn(self):
        assert classify("GPL-3.0", PolicyConfig(), {"GPL-3.0"}, {"GPL-3.0"}) == "error"

    def test_warn(self):
        assert classify("lgpl-3.0", PolicyConfig(), set(), {"LGPL-3.0"}) == "warn"

    def test_ok(self):
        assert classify("MIT", PolicyConfig(), {"GPL-3.0"}, {"LGPL-3.0"}) == "ok"


class TestEvaluate:
    def test_disallowed_structured_license(self):
        records = [_rec("a", license="MIT"), _rec("b", "2.0.0", license="GPL-3.0")]
        report = evaluate(records, PolicyConfig(disallow=["GPL-3.0"]))
        assert report.total == 2
        assert report.errors == 1
        assert report.warnings == 0
        assert report.fail is True
        assert report.rows[1] == EvaluatedRow("b", "2.0.0", "GPL-3.0", "error")
        assert report.rows[0].status == "ok"

    def test_case_insensitive_policy(self):
        report = evaluate([_rec("a", license="gpl-3.0")], PolicyConfig(disallow=["GPL-3.0"]))
        assert report.rows[0].status == "error"
        assert report.rows[0].license == "gpl-3.0"

    def test_missing_license_fails_by_default(self):
        report = evaluate([_rec("c", license=UNKNOWN_LICENSE)], PolicyConfig())
        assert report.total == 1
        assert report.rows[0].status == "error"
        assert report.fail is True

    def test_missing_license_allowed(self):
        report = evaluate(
            [_rec("c", license=UNKNOWN_LICENSE)], PolicyConfig(allow_unlicensed=True)
        )
        assert report.rows[0].status == "ok"
        assert report.fail is False

    def test_ignore_excludes_entirely(self):
        records = [_rec("a"), _rec("c", license=UNKNOWN_LICENSE)]
        report = evaluate(records, PolicyConfig(ignore=["c@1.0.0"]))
        assert report.total == 1
        assert report.errors == 0
        assert [r.name for r in report.rows] == ["a"]
        assert report.fail is False

    def test_ignore_is_exact_key(self):
        records = [_rec("c", "1.0.1", license=UNKNOWN_LICENSE)]
        report = evaluate(records, PolicyConfig(ignore=["c@1.0.0", "c"]))
        assert report.total == 1
        assert report.errors == 1

    def test_warnings_do_not_fail(self):
        report = evaluate([_rec("a", license="LGPL-3.0")], PolicyConfig(warn=["LGPL-3.0"]))
        assert report.warnings == 1
        assert report.errors == 0
        assert report.fail is False
        assert report.rows[0].status == "warn"

    def test_row_order_matches_input(self):
        records = [_rec("a"), _rec("b", license="X"), _rec("c"), _rec("d")]
        report = evaluate(records, PolicyConfig(ignore=["b@1.0.0"]))
        assert [r.name for r in report.rows] == ["a", "c", "d"]

    def test_idempotent(self):
        records = [_rec("a", license="GPL-3.0"), _rec("b", license="LGPL-3.0"), _rec("c")]
        policy = PolicyConfig(disallow=["GPL-3.0"], warn=["LGPL-3.0"])
        first = evaluate(records, policy)
        second = evaluate(records, policy)
        assert first == second
        assert (first.total, first.errors, first.warnings) == (3, 1, 1)

    def test_records_not_mutated(self):
        records = [_rec("a", license=" MIT")]
        before = list(records)
        evaluate(records, PolicyConfig(disallow=["MIT"]))
        assert records == before

    def test_empty(self):
        report = evaluate([], PolicyConfig())
        assert report.to_dict() == {
            "total": 0,
            "errors": 0,
            "warnings": 0,
            "fail": False,
            "rows": [],
        }

    def test_to_dict_rows(self):
        report = evaluate([_rec("a")], PolicyConfig())
        assert report.to_dict()["rows"] == [
            {"name": "a", "version": "1.0.0", "license": "MIT", "status": "ok"}
        ]


class TestScanThenEvaluate:
    def test_scoped_unlicensed_and_ignored(self, node_modules, make_package):
        make_package(node_modules, "c", {"name": "c", "version": "1.0.0"})
        make_package(
            node_modules / "@scope",
            "d",
            {"name": "@scope/d", "version": "3.0.0", "licenses": [{"type": "MIT"}, "Apache-2.0"]},
        )
        make_package(node_modules, "e", "{ broken")

        report = evaluate(scan(node_modules), PolicyConfig())
        assert [(r.name, r.status) for r in report.rows] == [("@scope/d", "ok"), ("c", "error")]

        report = evaluate(scan(node_modules), PolicyConfig(ignore=["c@1.0.0"]))
        assert report.total == 1
        assert report.fail is False
