"""
Tests: benchmark harness over the labelled sample RFPs.

Run with:
    pytest rfp_screening/tests/test_benchmark.py -v
"""

from rfp_screening.data.sample_rfps import BENCHMARK_CASES, SAMPLE_RFPS
from rfp_screening.models.enums import Decision
from rfp_screening.models.schemas import BenchmarkCase, ScoreRange
from rfp_screening.services.benchmark_service import BenchmarkService


class TestBenchmarkCases:
    def test_every_sample_has_a_case(self):
        assert {case.case_id for case in BENCHMARK_CASES} == set(SAMPLE_RFPS)

    def test_all_labelled_cases_pass(self, reference_profile):
        report = BenchmarkService().run(BENCHMARK_CASES, reference_profile)

        failures = {r.case_id: r.failures for r in report.results if not r.passed}
        assert failures == {}
        assert report.passed == report.total == len(BENCHMARK_CASES)
        assert report.accuracy == 100


class TestFailureReporting:
    def test_wrong_expectations_are_reported(self, reference_profile):
        case = BenchmarkCase(
            case_id="mislabelled",
            name="Riverside labelled as a local job",
            content=SAMPLE_RFPS["riverside-transit"],
            expected_score=ScoreRange(min=95, max=100),
            expected_decision=Decision.NO_GO,
            expected_geographic=100,
        )
        result = BenchmarkService().run_case(case, reference_profile)

        assert not result.passed
        assert len(result.failures) == 3
        assert result.failures[0].startswith("score 75.0 outside [95, 100]")
        assert result.decision == Decision.GO

    def test_tolerance_applies_to_dimensions(self, reference_profile):
        case = BenchmarkCase(
            case_id="santa-monica",
            name="Santa Monica",
            content=SAMPLE_RFPS["santa-monica-parking"],
            expected_services=66,
        )
        assert not BenchmarkService(tolerance=0.5).run_case(case, reference_profile).passed
        assert BenchmarkService(tolerance=1.0).run_case(case, reference_profile).passed

    def test_empty_report(self, reference_profile):
        report = BenchmarkService().run([], reference_profile)
        assert report.total == 0
        assert report.accuracy == 0.0
