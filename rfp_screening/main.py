"""
RFP Bid Screening — Main Entry Point

Screen an RFP from the command line:
    python -m rfp_screening path/to/rfp.txt [path/to/profile.json] [--scheme four_tier]

With no arguments the bundled sample RFPs are screened against the
reference profile.

Run as an API server:
    python -m rfp_screening --serve
    # or: uvicorn rfp_screening.api:app --reload --port 8000

Or import and run programmatically:
    from rfp_screening.main import run
    result = run("path/to/rfp.txt")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from rfp_screening.config import get_settings
from rfp_screening.data.sample_rfps import REFERENCE_PROFILE, SAMPLE_RFPS
from rfp_screening.models.profile import CompanyProfile
from rfp_screening.models.schemas import AnalysisResult
from rfp_screening.orchestration.graph import run_screening
from rfp_screening.utils.logger import setup_logging


def load_profile(path: str = "") -> CompanyProfile:
    """Read a profile JSON file (camelCase or snake_case keys)."""
    if not path:
        return REFERENCE_PROFILE
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return CompanyProfile.model_validate(data)


def run(file_path: str = "", profile_path: str = "", scheme: str | None = None) -> list[AnalysisResult]:
    """Screen one RFP file (or every bundled sample) and log a summary."""
    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info("  RFP BID SCREENING")
    logger.info(f"  Started: {datetime.now(timezone.utc).isoformat()}")
    logger.info("=" * 60)

    profile = load_profile(profile_path)
    if file_path:
        documents = {Path(file_path).name: Path(file_path).read_text(encoding="utf-8")}
    else:
        documents = SAMPLE_RFPS

    results = []
    for name, text in documents.items():
        result = run_screening(text, profile, scheme=scheme)
        _print_summary(name, result)
        results.append(result)
    return results


def _print_summary(name: str, result: AnalysisResult) -> None:
    """Print a human-readable summary of one screening result."""
    logger = logging.getLogger(__name__)
    b = result.breakdown

    logger.info("-" * 60)
    logger.info(f"  RFP:            {name}")
    logger.info(f"  Decision:       {result.decision.value} ({result.scheme.value})")
    logger.info(f"  Score:          {result.score}%")
    logger.info(
        f"  Breakdown:      geo={b.geographic:.0f} ins={b.insurance:.0f} "
        f"svc={b.services:.0f} cert={b.certifications:.0f}"
    )
    logger.info(f"  Extraction:     {result.extraction_source.value}")
    logger.info(f"  Missing:        {len(result.missing_requirements)}")
    logger.info(f"  Fillable:       {len(result.fillable_gaps)}")
    logger.info("-" * 60)
    logger.info(result.analysis)


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Start the FastAPI server."""
    import uvicorn

    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("rfp_screening.api:app", host=host, port=port, reload=get_settings().debug)


def cli(argv: list[str]) -> None:
    if "--serve" in argv:
        serve()
        return

    scheme = None
    if "--scheme" in argv:
        index = argv.index("--scheme")
        if index + 1 >= len(argv):
            raise SystemExit("--scheme needs a value: three_tier | four_tier")
        scheme = argv[index + 1]
        argv = argv[:index] + argv[index + 2:]

    file_arg = argv[0] if len(argv) > 0 else ""
    profile_arg = argv[1] if len(argv) > 1 else ""
    run(file_arg, profile_arg, scheme)


def main() -> None:
    cli(sys.argv[1:])


if __name__ == "__main__":
    main()
