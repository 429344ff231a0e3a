"""
Benchmark Service — runs labelled RFPs through the pipeline and reports
which expectations held.

Each BenchmarkCase may pin the score range, the decision, and any of the
four dimension scores. Dimension checks allow a small tolerance so that
rounding in the distance table does not flip a case.
"""

from __future__ import annotations

import logging

from rfp_screening.models.enums import DecisionScheme
from rfp_screening.models.profile import CompanyProfile
from rfp_screening.models.schemas import (
    BenchmarkCase,
    BenchmarkCaseResult,
    BenchmarkReport,
)

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 0.5

_DIMENSIONS = ("geographic", "insurance", "services", "certifications")


class BenchmarkService:
    """Evaluates the screening engine against labelled cases."""

    def __init__(self, tolerance: float = DEFAULT_TOLERANCE):
        self.tolerance = tolerance

    def run_case(
        self,
        case: BenchmarkCase,
        profile: CompanyProfile,
        scheme: DecisionScheme = DecisionScheme.THREE_TIER,
    ) -> BenchmarkCaseResult:
        from rfp_screening.orchestration.graph import run_screening

        result = run_screening(case.content, profile, scheme=scheme, use_llm=False)
        failures: list[str] = []

        if not case.expected_score.min <= result.total_score <= case.expected_score.max:
            failures.append(
                f"score {result.total_score:.1f} outside "
                f"[{case.expected_score.min:g}, {case.expected_score.max:g}]"
            )
        if case.expected_decision is not None and result.decision != case.expected_decision:
            failures.append(
                f"decision {result.decision.value} != expected {case.expected_decision.value}"
            )
        for dim in _DIMENSIONS:
            expected = getattr(case, f"expected_{dim}")
            if expected is None:
                continue
            actual = getattr(result.breakdown, dim)
            if abs(actual - expected) > self.tolerance:
                failures.append(f"{dim} {actual:.1f} != expected {expected:g}")

        passed = not failures
        logger.info(
            f"[BENCH] {'PASS' if passed else 'FAIL'} {case.case_id} "
            f"score={result.score} decision={result.decision.value}"
            + (f" | {'; '.join(failures)}" if failures else "")
        )
        return BenchmarkCaseResult(
            case_id=case.case_id,
            name=case.name,
            passed=passed,
            score=result.score,
            decision=result.decision,
            breakdown=result.breakdown,
            failures=failures,
        )

    def run(
        self,
        cases: list[BenchmarkCase],
        profile: CompanyProfile,
        scheme: DecisionScheme = DecisionScheme.THREE_TIER,
    ) -> BenchmarkReport:
        results = [self.run_case(case, profile, scheme) for case in cases]
        report = BenchmarkReport(
            results=results,
            passed=sum(1 for r in results if r.passed),
            total=len(results),
        )
        logger.info(f"[BENCH] {report.passed}/{report.total} passed ({report.accuracy:.0f}%)")
        return report
