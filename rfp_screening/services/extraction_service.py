"""
Extraction Service — RFP text → ExtractedRequirements.

Two extractors share one contract:
  - RequirementExtractor      deterministic keyword / regex matching
  - LLMRequirementExtractor   Groq call, schema-checked, falls back to the
                              deterministic extractor on any failure

Neither raises on bad input text. A pattern that does not match, or a number
that fails to parse, simply leaves the field absent.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from rfp_screening.config import get_settings
from rfp_screening.models.enums import ExtractionSource
from rfp_screening.models.requirements import (
    EquipmentRequirement,
    ExtractedRequirements,
    InsuranceRequirement,
    LocationRequirement,
    OperationalRequirement,
)
from rfp_screening.services.llm_service import (
    check_schema,
    llm_text_call,
    parse_json_object,
)

logger = logging.getLogger(__name__)

_PROMPT_PATH = Path(__file__).resolve().parent.parent / "prompts" / "extraction_prompt.txt"


# ── Keyword tables ───────────────────────────────────────

# gazetteer entry → canonical city name
CITY_GAZETTEER: dict[str, str] = {
    "los angeles": "Los Angeles",
    "glendale": "Glendale",
    "pasadena": "Pasadena",
    "burbank": "Burbank",
    "santa monica": "Santa Monica",
    "beverly hills": "Beverly Hills",
    "monterey park": "Monterey Park",
    "alhambra": "Alhambra",
    "long beach": "Long Beach",
    "torrance": "Torrance",
    "inglewood": "Inglewood",
    "downtown la": "Los Angeles",
    "dtla": "Los Angeles",
    "anaheim": "Anaheim",
    "riverside": "Riverside",
}

SERVICE_TERMS: tuple[str, ...] = (
    "building washing",
    "building exterior",
    "exterior cleaning",
    "exterior washing",
    "concrete cleaning",
    "parking garage",
    "parking structure",
    "graffiti removal",
    "sidewalk cleaning",
    "dumpster area",
    "awning cleaning",
    "canopy cleaning",
    "fleet washing",
    "window cleaning",
    "roof cleaning",
    "emergency services",
    "oil stain",
    "gum removal",
    "drive-through",
    "brick cleaning",
    "rust removal",
    "solar panel",
    "deck cleaning",
    "fence cleaning",
)

CERT_TERMS: tuple[str, ...] = (
    "business license",
    "contractor license",
    "contractor's license",
    "epa",
    "prevailing wage",
    "davis-bacon",
    "sam registration",
    "sam.gov",
    "cage code",
    "duns",
    "small business",
    "minority owned",
    "minority-owned",
    "woman owned",
    "woman-owned",
    "women-owned",
    "veteran owned",
    "veteran-owned",
    "dvbe",
    "hubzone",
    "hub zone",
)

WORKERS_COMP_PHRASES = ("workers comp", "workers' comp", "workman")
HOT_WATER_PHRASES = ("hot water", "heated water")
WATER_RECOVERY_PHRASES = ("water recovery", "water reclamation")
AERIAL_LIFT_PHRASES = ("aerial lift", "boom lift", "scissor lift")
NIGHT_PHRASES = ("night work", "after hours")
EMERGENCY_PHRASES = ("emergency", "24/7")


def _word(term: str) -> re.Pattern:
    return re.compile(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])")


_SERVICE_PATTERNS = [(term, _word(term)) for term in SERVICE_TERMS]
_CERT_PATTERNS = [(term, _word(term)) for term in CERT_TERMS]

_AMOUNT = r"\$(\d+(?:,\d{3})*(?:\.\d+)?)\s*(?:(million|m|k)\b)?"
_GL_RE = re.compile(r"general liability.*?" + _AMOUNT)
_AUTO_RE = re.compile(r"(?:commercial )?auto(?:mobile)?\s*(?:liability|insurance).*?" + _AMOUNT)
_UMBRELLA_RE = re.compile(r"(?:umbrella|excess liability).*?" + _AMOUNT)
_PROFESSIONAL_RE = re.compile(r"(?:professional liability|errors and omissions|e&o).*?" + _AMOUNT)

_ZIP_RE = re.compile(r"(?<![\$\d,.])\b\d{5}(?:-\d{4})?\b")
_PSI_RE = re.compile(r"(?<![\d,])(\d{1,2},\d{3}|\d{3,5})\s*psi")
_OSHA_LEVEL_RE = re.compile(r"osha\D{0,12}?(10|30)[\s-]*hour|(10|30)[\s-]*hour\s+osha")
_OSHA_RE = _word("osha")
_ISO_RE = re.compile(r"(?<![a-z0-9])iso[\s-]?(\d{4,5})\b")
_ISO_BARE_RE = _word("iso")
_RESPONSE_RE = re.compile(r"respon\w*\s+(?:time\s+)?(?:within|of|under)\s+(\d+(?:\.\d+)?)\s*(?:hours?|hrs?)\b")


def _parse_amount(match: Optional[re.Match]) -> Optional[float]:
    if not match:
        return None
    try:
        amount = float(match.group(1).replace(",", ""))
    except ValueError:
        logger.debug(f"[S1] Unparseable amount '{match.group(1)}' — field left absent")
        return None
    unit = match.group(2)
    if unit and unit.startswith("m"):
        return amount * 1_000_000
    if unit == "k":
        return amount * 1_000
    return amount


def _any_phrase(text: str, phrases: tuple[str, ...]) -> bool:
    return any(phrase in text for phrase in phrases)


class RequirementExtractor:
    """Deterministic keyword / regex extractor."""

    def extract(self, rfp_text: str) -> ExtractedRequirements:
        text = (rfp_text or "").lower() if isinstance(rfp_text, str) else ""

        requirements = ExtractedRequirements(
            location=self._location(text),
            insurance=self._insurance(text),
            services=self._services(text),
            certifications=self._certifications(text),
            equipment=self._equipment(text),
            operational=self._operational(text),
        )
        logger.debug(
            f"[S1] Deterministic extraction: zip={requirements.location.zip} "
            f"city={requirements.location.city} services={len(requirements.services)} "
            f"certs={len(requirements.certifications)}"
        )
        return requirements

    # ── Fields ───────────────────────────────────────────

    @staticmethod
    def _location(text: str) -> LocationRequirement:
        zip_match = _ZIP_RE.search(text)
        zip_code = zip_match.group(0)[:5] if zip_match else None
        for name, canonical in CITY_GAZETTEER.items():
            if name in text:
                return LocationRequirement(city=canonical, state="CA", zip=zip_code)
        return LocationRequirement(zip=zip_code)

    @staticmethod
    def _insurance(text: str) -> InsuranceRequirement:
        return InsuranceRequirement(
            general_liability=_parse_amount(_GL_RE.search(text)),
            workers_comp=True if _any_phrase(text, WORKERS_COMP_PHRASES) else None,
            commercial_auto=_parse_amount(_AUTO_RE.search(text)),
            umbrella=_parse_amount(_UMBRELLA_RE.search(text)),
            professional=_parse_amount(_PROFESSIONAL_RE.search(text)),
        )

    @staticmethod
    def _services(text: str) -> list[str]:
        found: list[str] = []
        for term, pattern in _SERVICE_PATTERNS:
            if pattern.search(text) and not any(term in longer for longer in found):
                found.append(term)
        return found

    @staticmethod
    def _certifications(text: str) -> list[str]:
        found: list[str] = []

        if _OSHA_RE.search(text):
            level = _OSHA_LEVEL_RE.search(text)
            if level:
                found.append(f"osha {level.group(1) or level.group(2)}-hour")
            else:
                found.append("osha")

        for term, pattern in _CERT_PATTERNS:
            if pattern.search(text):
                found.append(term)

        iso_numbers = list(dict.fromkeys(_ISO_RE.findall(text)))
        if iso_numbers:
            found.extend(f"iso {number}" for number in iso_numbers)
        elif _ISO_BARE_RE.search(text):
            found.append("iso")
        return found

    @staticmethod
    def _equipment(text: str) -> EquipmentRequirement:
        min_psi = None
        psi_match = _PSI_RE.search(text)
        if psi_match:
            min_psi = int(psi_match.group(1).replace(",", "")) or None
        return EquipmentRequirement(
            min_psi=min_psi,
            hot_water=True if _any_phrase(text, HOT_WATER_PHRASES) else None,
            water_recovery=True if _any_phrase(text, WATER_RECOVERY_PHRASES) else None,
            aerial_lift=True if _any_phrase(text, AERIAL_LIFT_PHRASES) else None,
        )

    @staticmethod
    def _operational(text: str) -> OperationalRequirement:
        max_response = None
        response_match = _RESPONSE_RE.search(text)
        if response_match:
            try:
                max_response = float(response_match.group(1))
            except ValueError:
                max_response = None
        return OperationalRequirement(
            night_work=True if _any_phrase(text, NIGHT_PHRASES) else None,
            weekend_work=True if "weekend" in text else None,
            emergency_response=True if _any_phrase(text, EMERGENCY_PHRASES) else None,
            max_response_time=max_response,
        )


# ── LLM path ─────────────────────────────────────────────

REQUIRED_KEYS: dict[str, type] = {
    "location": dict,
    "insurance": dict,
    "services": list,
    "certifications": list,
    "equipment": dict,
    "operational": dict,
}


class LLMRequirementExtractor:
    """
    Delegates extraction to the LLM and validates the reply against
    REQUIRED_KEYS. Falls back to the deterministic extractor on a missing
    credential, a transport error, malformed JSON, or a schema mismatch.
    """

    def __init__(self, fallback: RequirementExtractor | None = None):
        self.fallback = fallback or RequirementExtractor()

    def extract(self, rfp_text: str) -> ExtractedRequirements:
        return self.extract_with_source(rfp_text)[0]

    def extract_with_source(self, rfp_text: str) -> tuple[ExtractedRequirements, ExtractionSource]:
        if not get_settings().llm_configured:
            logger.info("[S1] No LLM credential configured — using deterministic extractor")
            return self.fallback.extract(rfp_text), ExtractionSource.DETERMINISTIC

        try:
            prompt = _PROMPT_PATH.read_text(encoding="utf-8").replace(
                "{rfp_text}", (rfp_text or "")[:12_000]
            )
            raw = llm_text_call(prompt)
            data = parse_json_object(raw)
            check_schema(data, REQUIRED_KEYS)
            requirements = ExtractedRequirements.model_validate(data)
        except Exception as exc:
            logger.warning(f"[S1] LLM extraction failed, falling back to deterministic: {exc}")
            return self.fallback.extract(rfp_text), ExtractionSource.DETERMINISTIC

        logger.info(
            f"[S1] LLM extraction: {len(requirements.services)} services, "
            f"{len(requirements.certifications)} certifications"
        )
        return requirements, ExtractionSource.LLM


def extract_requirements(
    rfp_text: str,
    use_llm: bool | None = None,
) -> tuple[ExtractedRequirements, ExtractionSource]:
    """Module-level entry point used by the S1 stage and the API."""
    if use_llm is None:
        use_llm = get_settings().use_llm_extraction
    if use_llm:
        return LLMRequirementExtractor().extract_with_source(rfp_text)
    return RequirementExtractor().extract(rfp_text), ExtractionSource.DETERMINISTIC
