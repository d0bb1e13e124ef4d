"""
Pain assessment record captured once per dressing session.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class PainScaleType(str, Enum):
    NRS = "NRS"
    VAS = "VAS"
    FLACC = "FLACC"
    WONG_BAKER = "WONG_BAKER"
    BPS = "BPS"
    CPOT = "CPOT"


class PainType(str, Enum):
    NOCICEPTIVE = "nociceptive"
    NEUROPATHIC = "neuropathic"
    INFLAMMATORY = "inflammatory"
    ISCHEMIC = "ischemic"
    MIXED = "mixed"


class PainContext(str, Enum):
    REST = "rest"
    MOVEMENT = "movement"
    PROCEDURAL = "procedural"


class PainDuration(str, Enum):
    ACUTE = "acute"
    SUBACUTE = "subacute"
    CHRONIC = "chronic"


class PainSeverity(str, Enum):
    NONE = "none"          # 0
    MILD = "mild"          # 1-3
    MODERATE = "moderate"  # 4-6
    SEVERE = "severe"      # 7-10


# Upper bound (inclusive) of each band on the 0-10 basis
MILD_MAX_SCORE = 3
MODERATE_MAX_SCORE = 6
REFERENCE_MAX_SCORE = 10


def get_pain_severity(score: float) -> PainSeverity:
    """Map a 0-10 score onto the fixed severity bands."""
    if score <= 0:
        return PainSeverity.NONE
    if score <= MILD_MAX_SCORE:
        return PainSeverity.MILD
    if score <= MODERATE_MAX_SCORE:
        return PainSeverity.MODERATE
    return PainSeverity.SEVERE


@dataclass(frozen=True)
class PainAssessment:
    score: float
    pain_type: PainType = PainType.NOCICEPTIVE
    pain_context: PainContext = PainContext.REST
    scale_used: PainScaleType = PainScaleType.NRS
    max_score: float = REFERENCE_MAX_SCORE
    location: str = ""
    description: str = ""
    pain_duration: PainDuration = PainDuration.ACUTE
    procedural_pain_anticipated: bool = False
    characteristics: List[str] = field(default_factory=list)

    @property
    def normalized_score(self) -> float:
        """
        Score on the 0-10 basis the severity bands use.

        Only VAS (0-100) is rescaled; behavioural scales (BPS, CPOT) keep
        their raw score against the fixed bands.
        """
        if self.scale_used != PainScaleType.VAS or not self.max_score:
            return self.score
        return round(self.score * REFERENCE_MAX_SCORE / self.max_score, 1)

    @property
    def severity(self) -> PainSeverity:
        return get_pain_severity(self.normalized_score)

    def to_dict(self) -> dict:
        return {
            "scale_used": self.scale_used.value,
            "score": self.score,
            "max_score": self.max_score,
            "severity": self.severity.value,
            "pain_type": self.pain_type.value,
            "pain_context": self.pain_context.value,
            "pain_duration": self.pain_duration.value,
            "location": self.location,
            "description": self.description,
            "procedural_pain_anticipated": self.procedural_pain_anticipated,
            "characteristics": list(self.characteristics),
        }
