"""Pain plan API: validate session input and run the decision-support pipeline."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field, field_validator, model_validator

from ..models.assessment import PainAssessment, PainContext, PainDuration, PainScaleType, PainType
from ..models.patient import (
    AgeUnit,
    Comorbidity,
    ComorbidityEntry,
    ComorbiditySeverity,
    Gender,
    PatientInfo,
)
from ..models.plan import ProcedureType
from ..services.analgesic_engine import generate_procedural_pain_plan, get_simple_analgesia_guidance
from ..services.comorbidity_engine import (
    comorbidity_options,
    generate_risk_flags,
    get_caution_classes,
    get_contraindicated_classes,
    group_comorbidities,
)
from ..services.pain_plan import build_pain_plan
from ..services.rule_catalog import (
    ANALGESIC_CLASS_INFO,
    COMORBIDITY_INFO,
    NON_PHARMACOLOGICAL_OPTIONS,
    PAIN_SCALES,
    PROCEDURE_INFO,
    SEDATION_SCALES,
)
from ..services.safety_module import generate_dressing_safety_checks, generate_post_dressing_monitoring

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pain-plans", tags=["pain-plans"])


class PatientIn(BaseModel):
    id: str
    initials: str
    age: float = Field(ge=0)
    age_unit: AgeUnit = AgeUnit.YEARS
    gender: Gender = Gender.OTHER
    weight_kg: Optional[float] = Field(default=None, gt=0)

    def to_domain(self) -> PatientInfo:
        return PatientInfo(
            id=self.id,
            initials=self.initials,
            age=self.age,
            age_unit=self.age_unit,
            gender=self.gender,
            weight_kg=self.weight_kg,
        )


class AssessmentIn(BaseModel):
    score: float = Field(ge=0)
    scale_used: PainScaleType = PainScaleType.NRS
    max_score: Optional[float] = Field(default=None, gt=0)
    pain_type: PainType = PainType.NOCICEPTIVE
    pain_context: PainContext = PainContext.REST
    pain_duration: PainDuration = PainDuration.ACUTE
    location: str = ""
    description: str = ""
    procedural_pain_anticipated: bool = False
    characteristics: List[str] = []

    @model_validator(mode="after")
    def check_score_range(self):
        scale_max = PAIN_SCALES[self.scale_used]["max_score"]
        if self.max_score is None:
            self.max_score = scale_max
        elif self.max_score != scale_max:
            raise ValueError(
                f"max_score {self.max_score} does not match scale {self.scale_used.value} "
                f"(maximum {scale_max})"
            )
        if self.score > self.max_score:
            raise ValueError(
                f"Pain score {self.score} exceeds the maximum of {self.max_score} "
                f"for scale {self.scale_used.value}"
            )
        return self

    def to_domain(self) -> PainAssessment:
        return PainAssessment(
            score=self.score,
            scale_used=self.scale_used,
            max_score=self.max_score,
            pain_type=self.pain_type,
            pain_context=self.pain_context,
            pain_duration=self.pain_duration,
            location=self.location,
            description=self.description,
            procedural_pain_anticipated=self.procedural_pain_anticipated,
            characteristics=list(self.characteristics),
        )


class ComorbidityIn(BaseModel):
    condition: Comorbidity
    severity: Optional[ComorbiditySeverity] = None
    notes: Optional[str] = None

    def to_domain(self) -> ComorbidityEntry:
        return ComorbidityEntry(condition=self.condition, severity=self.severity, notes=self.notes)


class RiskRequest(BaseModel):
    patient: PatientIn
    comorbidities: List[ComorbidityIn] = []

    @field_validator("comorbidities")
    @classmethod
    def reject_duplicate_conditions(cls, value: List[ComorbidityIn]) -> List[ComorbidityIn]:
        seen = set()
        for entry in value:
            if entry.condition in seen:
                raise ValueError(f"Duplicate comorbidity: {entry.condition.value}")
            seen.add(entry.condition)
        return value

    def domain_comorbidities(self) -> List[ComorbidityEntry]:
        return [c.to_domain() for c in self.comorbidities]


class PainPlanRequest(RiskRequest):
    assessment: AssessmentIn
    procedure_type: Optional[ProcedureType] = None
    procedure_description: Optional[str] = None
    notes: str = ""


class ProceduralPlanRequest(RiskRequest):
    assessment: AssessmentIn
    procedure_type: ProcedureType
    procedure_description: str = ""


@router.post("/")
def create_pain_plan(request: PainPlanRequest):
    """Run the full pipeline and return the plan snapshot. Nothing is stored."""
    plan = build_pain_plan(
        patient=request.patient.to_domain(),
        assessment=request.assessment.to_domain(),
        comorbidities=request.domain_comorbidities(),
        procedure_type=request.procedure_type,
        procedure_description=request.procedure_description,
        notes=request.notes,
    )
    return plan.to_dict()


@router.post("/risk-flags")
def evaluate_risk_flags(request: RiskRequest):
    """Risk flags only, with the derived contraindicated/caution class sets."""
    patient = request.patient.to_domain()
    comorbidities = request.domain_comorbidities()
    flags = generate_risk_flags(comorbidities, patient)
    return {
        "patient_category": patient.category.value,
        "comorbidities_by_category": {
            category: [e.to_dict() for e in grouped]
            for category, grouped in group_comorbidities(comorbidities).items()
        },
        "risk_flags": [f.to_dict() for f in flags],
        "contraindicated_classes": sorted(c.value for c in get_contraindicated_classes(flags)),
        "caution_classes": sorted(c.value for c in get_caution_classes(flags)),
    }


@router.post("/procedural")
def create_procedural_plan(request: ProceduralPlanRequest):
    patient = request.patient.to_domain()
    flags = generate_risk_flags(request.domain_comorbidities(), patient)
    plan = generate_procedural_pain_plan(
        request.procedure_type,
        request.procedure_description,
        request.assessment.to_domain(),
        flags,
        patient,
    )
    return {
        "risk_flags": [f.to_dict() for f in flags],
        "procedural_plan": plan.to_dict(),
    }


@router.get("/comorbidities")
def list_comorbidities():
    """Selectable comorbidities grouped by category."""
    return {
        category: [
            {"condition": c.value, **COMORBIDITY_INFO[c]}
            for c in conditions
        ]
        for category, conditions in comorbidity_options().items()
    }


@router.get("/guidance")
def quick_guidance(
    score: float = Query(..., ge=0, le=10),
    procedural_pain_anticipated: bool = False,
):
    return {"guidance": get_simple_analgesia_guidance(score, procedural_pain_anticipated)}


@router.get("/dressing-checklist")
def dressing_checklist(
    pain_score: float = Query(..., ge=0, le=10),
    wound_phase: str = "",
    has_opioids: bool = False,
):
    """Pre-procedure safety checks and post-dressing monitoring for a dressing change."""
    return {
        "safety_checks": generate_dressing_safety_checks(wound_phase, pain_score),
        "post_dressing_monitoring": generate_post_dressing_monitoring(pain_score, has_opioids),
    }


@router.get("/reference")
def reference_tables():
    """Static lookup tables for selection screens and report legends."""
    return {
        "analgesic_classes": {
            drug_class.value: {**info, "common_routes": [r.value for r in info["common_routes"]]}
            for drug_class, info in ANALGESIC_CLASS_INFO.items()
        },
        "procedures": {procedure.value: info for procedure, info in PROCEDURE_INFO.items()},
        "pain_scales": {
            scale.value: {**info, "patient_categories": [c.value for c in info["patient_categories"]]}
            for scale, info in PAIN_SCALES.items()
        },
        "sedation_scales": {
            key: {
                "name": scale["name"],
                "levels": [
                    {"score": score, "description": description, "action": action}
                    for score, description, action in scale["levels"]
                ],
            }
            for key, scale in SEDATION_SCALES.items()
        },
        "non_pharmacological": list(NON_PHARMACOLOGICAL_OPTIONS),
    }
