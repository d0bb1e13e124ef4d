"""
Pain-management plan assembly.

Runs the engines in order, each feeding the next:
    risk flags -> analgesic plan -> (procedural plan) -> monitoring plan -> red flags
No state is kept between calls; the caller owns the returned plan.
"""
import logging
from typing import Iterable, List, Optional

from ..core.config import settings
from ..models.assessment import PainAssessment, PainContext
from ..models.base import IdFactory, generate_uuid
from ..models.patient import ComorbidityEntry, PatientInfo
from ..models.plan import PainManagementPlan, ProcedureType
from .analgesic_engine import generate_analgesic_recommendations, generate_procedural_pain_plan
from .comorbidity_engine import generate_risk_flags
from .rule_catalog import LEGAL_DISCLAIMER
from .safety_module import generate_monitoring_plan, generate_red_flags, should_increase_monitoring

logger = logging.getLogger(__name__)


def unique_comorbidities(comorbidities: Iterable[ComorbidityEntry]) -> List[ComorbidityEntry]:
    """Drop repeated conditions, keeping the first entry for each."""
    seen = set()
    unique = []
    for entry in comorbidities:
        if entry.condition in seen:
            continue
        seen.add(entry.condition)
        unique.append(entry)
    return unique


def build_pain_plan(
    patient: PatientInfo,
    assessment: PainAssessment,
    comorbidities: Iterable[ComorbidityEntry] = (),
    procedure_type: Optional[ProcedureType] = None,
    procedure_description: Optional[str] = None,
    notes: str = "",
    id_factory: IdFactory = generate_uuid,
) -> PainManagementPlan:
    """
    Generate the full plan for one patient and assessment.

    A procedural plan is produced when ``procedure_type`` is given, or when
    the pain was assessed in a procedural context (the configured default
    procedure is used then).
    """
    # Category must match the age the recommendations are made for
    patient = patient.with_derived_category()
    entries = unique_comorbidities(comorbidities)

    risk_flags = generate_risk_flags(entries, patient, id_factory=id_factory)
    analgesic_plan = generate_analgesic_recommendations(assessment, risk_flags, patient)

    procedural_plan = None
    if procedure_type is None and assessment.pain_context == PainContext.PROCEDURAL:
        procedure_type = settings.DEFAULT_PROCEDURE_TYPE
        procedure_description = procedure_description or settings.DEFAULT_PROCEDURE_DESCRIPTION
    if procedure_type is not None:
        procedural_plan = generate_procedural_pain_plan(
            procedure_type,
            procedure_description or "",
            assessment,
            risk_flags,
            patient,
        )

    recommendations = analgesic_plan.all_recommendations
    if procedural_plan is not None:
        # Drugs given for the procedure need the same monitoring and alerts
        recommendations = (
            recommendations
            + procedural_plan.pre_emptive_analgesia.recommendations
            + procedural_plan.intra_procedural_analgesia.systemic_options
        )
    monitoring_plan = generate_monitoring_plan(recommendations, risk_flags, patient, entries)
    red_flags = generate_red_flags(assessment, recommendations, risk_flags, patient, id_factory=id_factory)

    plan = PainManagementPlan(
        id=id_factory(),
        patient=patient,
        pain_assessment=assessment,
        comorbidities=entries,
        risk_flags=risk_flags,
        analgesic_plan=analgesic_plan,
        procedural_plan=procedural_plan,
        monitoring_plan=monitoring_plan,
        red_flags=red_flags,
        increase_monitoring=should_increase_monitoring(assessment, risk_flags, patient),
        notes=notes,
        legal_disclaimer=settings.LEGAL_DISCLAIMER or LEGAL_DISCLAIMER,
    )
    logger.info(
        "Pain plan %s generated for patient %s (%s pain, %d risk flag(s), %d red flag(s))",
        plan.id, patient.id, assessment.severity.value, len(risk_flags), len(red_flags),
    )
    return plan
