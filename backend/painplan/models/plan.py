"""
Output records of the pain-management pipeline.

Every record is rebuilt from scratch on each pipeline run. ``to_dict``
produces the JSON shape consumed by the report generator and the UI.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple

from .assessment import PainAssessment, PainSeverity
from .patient import ComorbidityEntry, PatientInfo


class RiskLevel(str, Enum):
    INFO = "info"
    CAUTION = "caution"
    WARNING = "warning"
    CONTRAINDICATED = "contraindicated"


# Total order used when several flags hit the same drug class
RISK_LEVEL_ORDER = {
    RiskLevel.INFO: 0,
    RiskLevel.CAUTION: 1,
    RiskLevel.WARNING: 2,
    RiskLevel.CONTRAINDICATED: 3,
}


class AnalgesicClass(str, Enum):
    PARACETAMOL = "paracetamol"
    NSAID_NON_SELECTIVE = "nsaid_non_selective"
    NSAID_COX2_SELECTIVE = "nsaid_cox2_selective"
    WEAK_OPIOID = "weak_opioid"
    STRONG_OPIOID = "strong_opioid"
    ADJUVANT_ANTICONVULSANT = "adjuvant_anticonvulsant"
    ADJUVANT_ANTIDEPRESSANT = "adjuvant_antidepressant"
    ADJUVANT_MUSCLE_RELAXANT = "adjuvant_muscle_relaxant"
    TOPICAL_ANALGESIC = "topical_analgesic"
    TOPICAL_ANESTHETIC = "topical_anesthetic"
    REGIONAL_ANESTHESIA = "regional_anesthesia"
    ANXIOLYTIC = "anxiolytic"
    KETAMINE = "ketamine"
    NITROUS_OXIDE = "nitrous_oxide"


OPIOID_CLASSES = frozenset({AnalgesicClass.WEAK_OPIOID, AnalgesicClass.STRONG_OPIOID})
NSAID_CLASSES = frozenset({AnalgesicClass.NSAID_NON_SELECTIVE, AnalgesicClass.NSAID_COX2_SELECTIVE})


class AnalgesicRoute(str, Enum):
    ORAL = "oral"
    SUBLINGUAL = "sublingual"
    INTRAVENOUS = "intravenous"
    INTRAMUSCULAR = "intramuscular"
    SUBCUTANEOUS = "subcutaneous"
    TRANSDERMAL = "transdermal"
    TOPICAL = "topical"
    RECTAL = "rectal"
    INTRANASAL = "intranasal"
    INHALATION = "inhalation"
    REGIONAL = "regional"


class Suitability(str, Enum):
    RECOMMENDED = "recommended"
    CONSIDER = "consider"
    CAUTION = "caution"
    AVOID = "avoid"
    CONTRAINDICATED = "contraindicated"


class RedFlagSeverity(str, Enum):
    WARNING = "warning"
    CRITICAL = "critical"


class ProcedureType(str, Enum):
    WOUND_DRESSING = "wound_dressing"
    BURN_DRESSING = "burn_dressing"
    DEBRIDEMENT = "debridement"
    SUTURING = "suturing"
    DRAIN_REMOVAL = "drain_removal"
    CATHETER_INSERTION = "catheter_insertion"
    LUMBAR_PUNCTURE = "lumbar_puncture"
    BONE_MARROW_BIOPSY = "bone_marrow_biopsy"
    CHEST_TUBE = "chest_tube"
    CENTRAL_LINE = "central_line"
    OTHER = "other"


@dataclass(frozen=True)
class RiskFlag:
    """A comorbidity- or age-driven warning tied to specific drug classes."""
    id: str
    level: RiskLevel
    category: str
    message: str
    affected_drug_classes: Tuple[AnalgesicClass, ...]
    recommendation: str

    def affects(self, drug_class: AnalgesicClass) -> bool:
        return drug_class in self.affected_drug_classes

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "level": self.level.value,
            "category": self.category,
            "message": self.message,
            "affected_drug_classes": [c.value for c in self.affected_drug_classes],
            "recommendation": self.recommendation,
        }


@dataclass
class AnalgesicRecommendation:
    drug_class: AnalgesicClass
    suitability: Suitability
    routes: List[AnalgesicRoute]
    rationale: str
    dose_adjustment: Optional[str] = None
    monitoring_required: Optional[List[str]] = None

    def to_dict(self) -> dict:
        return {
            "class": self.drug_class.value,
            "suitability": self.suitability.value,
            "routes": [r.value for r in self.routes],
            "rationale": self.rationale,
            "dose_adjustment": self.dose_adjustment,
            "monitoring_required": self.monitoring_required,
        }


@dataclass
class AnalgesicPlan:
    primary_recommendations: List[AnalgesicRecommendation] = field(default_factory=list)
    adjunct_recommendations: List[AnalgesicRecommendation] = field(default_factory=list)
    contraindicated_classes: List[AnalgesicClass] = field(default_factory=list)
    non_pharmacological: List[str] = field(default_factory=list)

    @property
    def all_recommendations(self) -> List[AnalgesicRecommendation]:
        return self.primary_recommendations + self.adjunct_recommendations

    def to_dict(self) -> dict:
        return {
            "primary_recommendations": [r.to_dict() for r in self.primary_recommendations],
            "adjunct_recommendations": [r.to_dict() for r in self.adjunct_recommendations],
            "contraindicated_classes": [c.value for c in self.contraindicated_classes],
            "non_pharmacological": list(self.non_pharmacological),
        }


@dataclass
class MonitoringRequirement:
    """
    One monitoring sub-block.

    ``parameters`` holds vital signs, lab tests or, for GI protection,
    the protective measures to put in place.
    """
    required: bool
    frequency: Optional[str] = None
    parameters: List[str] = field(default_factory=list)
    scale: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "required": self.required,
            "frequency": self.frequency,
            "parameters": list(self.parameters),
            "scale": self.scale,
        }


@dataclass
class MonitoringPlan:
    sedation_monitoring: MonitoringRequirement
    respiratory_monitoring: MonitoringRequirement
    cardiovascular_monitoring: MonitoringRequirement
    renal_monitoring: MonitoringRequirement
    gi_protection: MonitoringRequirement
    other_monitoring: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "sedation_monitoring": self.sedation_monitoring.to_dict(),
            "respiratory_monitoring": self.respiratory_monitoring.to_dict(),
            "cardiovascular_monitoring": self.cardiovascular_monitoring.to_dict(),
            "renal_monitoring": self.renal_monitoring.to_dict(),
            "gi_protection": self.gi_protection.to_dict(),
            "other_monitoring": list(self.other_monitoring),
        }


@dataclass(frozen=True)
class RedFlag:
    """An actionable safety alert shown alongside the plan."""
    id: str
    severity: RedFlagSeverity
    title: str
    description: str
    action: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "action": self.action,
        }


@dataclass
class PreEmptiveAnalgesia:
    required: bool
    timing: str
    recommendations: List[AnalgesicRecommendation] = field(default_factory=list)


@dataclass
class IntraProceduralAnalgesia:
    topical: bool
    regional: bool
    systemic: bool
    topical_agent: Optional[str] = None
    regional_technique: Optional[str] = None
    systemic_options: List[AnalgesicRecommendation] = field(default_factory=list)


@dataclass
class Anxiolysis:
    recommended: bool
    rationale: Optional[str] = None


@dataclass
class ProceduralPainPlan:
    procedure_type: ProcedureType
    procedure_description: str
    anticipated_pain_level: PainSeverity
    pre_emptive_analgesia: PreEmptiveAnalgesia
    intra_procedural_analgesia: IntraProceduralAnalgesia
    anxiolysis: Anxiolysis
    non_pharmacological: List[str] = field(default_factory=list)
    monitoring_during: List[str] = field(default_factory=list)
    post_procedure_follow: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        intra = self.intra_procedural_analgesia
        return {
            "procedure_type": self.procedure_type.value,
            "procedure_description": self.procedure_description,
            "anticipated_pain_level": self.anticipated_pain_level.value,
            "pre_emptive_analgesia": {
                "required": self.pre_emptive_analgesia.required,
                "timing": self.pre_emptive_analgesia.timing,
                "recommendations": [r.to_dict() for r in self.pre_emptive_analgesia.recommendations],
            },
            "intra_procedural_analgesia": {
                "topical": intra.topical,
                "topical_agent": intra.topical_agent,
                "regional": intra.regional,
                "regional_technique": intra.regional_technique,
                "systemic": intra.systemic,
                "systemic_options": [r.to_dict() for r in intra.systemic_options],
            },
            "anxiolysis": {
                "recommended": self.anxiolysis.recommended,
                "rationale": self.anxiolysis.rationale,
            },
            "non_pharmacological": list(self.non_pharmacological),
            "monitoring_during": list(self.monitoring_during),
            "post_procedure_follow": list(self.post_procedure_follow),
        }


@dataclass
class PainManagementPlan:
    """Snapshot of one full pipeline run. The caller decides whether to keep it."""
    id: str
    patient: PatientInfo
    pain_assessment: PainAssessment
    comorbidities: List[ComorbidityEntry]
    risk_flags: List[RiskFlag]
    analgesic_plan: AnalgesicPlan
    monitoring_plan: MonitoringPlan
    red_flags: List[RedFlag]
    legal_disclaimer: str
    increase_monitoring: bool = False
    procedural_plan: Optional[ProceduralPainPlan] = None
    notes: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "patient": self.patient.to_dict(),
            "pain_assessment": self.pain_assessment.to_dict(),
            "comorbidities": [c.to_dict() for c in self.comorbidities],
            "risk_flags": [f.to_dict() for f in self.risk_flags],
            "analgesic_plan": self.analgesic_plan.to_dict(),
            "procedural_plan": self.procedural_plan.to_dict() if self.procedural_plan else None,
            "monitoring_plan": self.monitoring_plan.to_dict(),
            "red_flags": [f.to_dict() for f in self.red_flags],
            "increase_monitoring": self.increase_monitoring,
            "notes": self.notes,
            "legal_disclaimer": self.legal_disclaimer,
        }
