from enum import Enum


class StageName(str, Enum):
    S1_EXTRACTION = "S1_EXTRACTION"
    S2_SCORING = "S2_SCORING"
    S3_DECISION = "S3_DECISION"
    S4_NARRATION = "S4_NARRATION"


class ScreeningStatus(str, Enum):
    RECEIVED = "RECEIVED"
    EXTRACTED = "EXTRACTED"
    SCORED = "SCORED"
    DECIDED = "DECIDED"
    COMPLETED = "COMPLETED"


class Dimension(str, Enum):
    GEOGRAPHIC = "geographic"
    INSURANCE = "insurance"
    SERVICES = "services"
    CERTIFICATIONS = "certifications"


class GapCategory(str, Enum):
    GEOGRAPHIC = "geographic"
    INSURANCE = "insurance"
    SERVICES = "services"
    CERTIFICATIONS = "certifications"
    EQUIPMENT = "equipment"
    OPERATIONAL = "operational"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class DecisionScheme(str, Enum):
    THREE_TIER = "three_tier"
    FOUR_TIER = "four_tier"


class Decision(str, Enum):
    # three-tier table
    GO = "GO"
    MAYBE = "MAYBE"
    NO_GO = "NO-GO"
    # four-tier table
    HIGH_CONFIDENCE_GO = "HIGH_CONFIDENCE_GO"
    MEDIUM_CONFIDENCE_GO = "MEDIUM_CONFIDENCE_GO"
    LOW_CONFIDENCE_GO = "LOW_CONFIDENCE_GO"
    NO_GO_FOUR_TIER = "NO_GO"


class ExtractionSource(str, Enum):
    DETERMINISTIC = "deterministic"
    LLM = "llm"


class EntityType(str, Enum):
    LLC = "LLC"
    CORPORATION = "Corporation"
    PARTNERSHIP = "Partnership"
    SOLE_PROPRIETORSHIP = "Sole Proprietorship"
    OTHER = "Other"


class OshaLevel(str, Enum):
    TEN_HOUR = "10-hour"
    THIRTY_HOUR = "30-hour"
    NONE = "None"


class PaymentTerms(str, Enum):
    NET_15 = "Net 15"
    NET_30 = "Net 30"
    NET_45 = "Net 45"
    NET_60 = "Net 60"
    COD = "COD"
