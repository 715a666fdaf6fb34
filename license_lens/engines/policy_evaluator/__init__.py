"""Policy evaluator engine — classify scanned packages against a license policy."""

from license_lens.engines.policy_evaluator.evaluator import evaluate
from license_lens.engines.policy_evaluator.models import EvaluatedRow, Report, RowStatus

__all__ = ["EvaluatedRow", "Report", "RowStatus", "evaluate"]
