"""
Rule-based safety module.
Derives the monitoring plan and red-flag alerts from the recommended drug
classes, the patient's comorbidities and the pain assessment.
"""
import logging
from typing import Iterable, List

from ..models.assessment import PainAssessment, PainContext, PainSeverity
from ..models.base import IdFactory, generate_uuid
from ..models.patient import Comorbidity, ComorbidityEntry, PatientCategory, PatientInfo
from ..models.plan import (
    NSAID_CLASSES,
    OPIOID_CLASSES,
    AnalgesicClass,
    AnalgesicRecommendation,
    MonitoringPlan,
    MonitoringRequirement,
    RedFlag,
    RedFlagSeverity,
    RiskFlag,
    RiskLevel,
)

logger = logging.getLogger(__name__)

RENAL_RISK_PREFIX = "ckd_"
RESPIRATORY_RISK_CONDITIONS = frozenset({Comorbidity.COPD, Comorbidity.RESPIRATORY_DEPRESSION_RISK})
CARDIOVASCULAR_RISK_CONDITIONS = frozenset({Comorbidity.HEART_FAILURE, Comorbidity.ISCHEMIC_HEART_DISEASE})
GI_RISK_CONDITIONS = frozenset({Comorbidity.PEPTIC_ULCER, Comorbidity.GI_BLEED_HISTORY})

SEDATION_SCALE = "Pasero Opioid-Induced Sedation Scale (POSS) or equivalent"
HIGH_LEVEL_FLAG_THRESHOLD = 2
HIGH_PAIN_SCORE = 7
PRE_PROCEDURE_ANALGESIA_SCORE = 5


def _offered(recommendations: Iterable[AnalgesicRecommendation]) -> frozenset:
    return frozenset(r.drug_class for r in recommendations)


def generate_monitoring_plan(
    recommendations: List[AnalgesicRecommendation],
    risk_flags: List[RiskFlag],
    patient: PatientInfo,
    comorbidities: List[ComorbidityEntry],
) -> MonitoringPlan:
    """
    Monitoring requirements for the recommended classes.

    ``risk_flags`` is accepted for interface symmetry with the red-flag
    generator; the plan is driven by recommendations and comorbidities.
    """
    offered = _offered(recommendations)
    has_opioids = not offered.isdisjoint(OPIOID_CLASSES)
    has_strong_opioids = AnalgesicClass.STRONG_OPIOID in offered
    has_nsaids = not offered.isdisjoint(NSAID_CLASSES)
    has_ketamine = AnalgesicClass.KETAMINE in offered
    has_anxiolytics = AnalgesicClass.ANXIOLYTIC in offered

    conditions = frozenset(c.condition for c in comorbidities)
    renal_risk = any(c.value.startswith(RENAL_RISK_PREFIX) for c in conditions)
    respiratory_risk = not conditions.isdisjoint(RESPIRATORY_RISK_CONDITIONS)
    cardiovascular_risk = not conditions.isdisjoint(CARDIOVASCULAR_RISK_CONDITIONS)
    gi_risk = not conditions.isdisjoint(GI_RISK_CONDITIONS)
    elderly = patient.is_elderly

    # ── Sedation ──────────────────────────────────────────────────────────
    sedation = MonitoringRequirement(required=has_opioids or has_anxiolytics or has_ketamine)
    if sedation.required:
        sedation.frequency = (
            "Every 1 hour for first 4 hours, then every 2-4 hours"
            if has_strong_opioids or has_ketamine else "Every 4 hours"
        )
        sedation.scale = SEDATION_SCALE

    # ── Respiratory ───────────────────────────────────────────────────────
    respiratory = MonitoringRequirement(required=has_opioids or has_ketamine or respiratory_risk)
    if respiratory.required:
        respiratory.frequency = (
            "Every 1-2 hours initially, then every 4 hours"
            if has_strong_opioids or respiratory_risk else "Every 4 hours"
        )
        respiratory.parameters = ["Respiratory rate", "Oxygen saturation (SpO2)"]
        if has_strong_opioids:
            respiratory.parameters.append("End-tidal CO2 if available")

    # ── Cardiovascular ────────────────────────────────────────────────────
    cardiovascular = MonitoringRequirement(required=has_nsaids or cardiovascular_risk or has_ketamine)
    if cardiovascular.required:
        cardiovascular.frequency = "Every 4-6 hours or as per unit protocol"
        cardiovascular.parameters = ["Blood pressure", "Heart rate"]
        if has_ketamine:
            cardiovascular.parameters.append("Continuous during ketamine administration")

    # ── Renal ─────────────────────────────────────────────────────────────
    renal = MonitoringRequirement(required=has_nsaids or renal_risk)
    if renal.required:
        renal.frequency = (
            "Daily during acute phase" if renal_risk else "Every 2-3 days if prolonged NSAID use"
        )
        renal.parameters = ["Serum creatinine", "eGFR", "Urine output if indicated"]

    # ── GI protection ─────────────────────────────────────────────────────
    gi = MonitoringRequirement(required=has_nsaids or gi_risk)
    if has_nsaids:
        gi.parameters += [
            "Consider PPI co-prescription",
            "Monitor for GI symptoms (dyspepsia, abdominal pain, bleeding)",
        ]
    if has_opioids:
        gi.parameters += [
            "Prescribe laxative prophylaxis with opioids",
            "Antiemetic PRN for opioid-induced nausea",
        ]

    # ── Other ─────────────────────────────────────────────────────────────
    other: List[str] = []
    if has_opioids:
        other += [
            "Pain score assessment at regular intervals",
            "Assess for opioid side effects (nausea, constipation, pruritus)",
        ]
    if has_strong_opioids and elderly:
        other += ["Increased frequency of cognitive assessment", "Falls risk assessment"]
    if has_ketamine:
        other += [
            "Monitor for emergence phenomena (vivid dreams, hallucinations)",
            "Assess for nystagmus",
        ]
    if AnalgesicClass.ADJUVANT_ANTICONVULSANT in offered:
        other += ["Monitor for dizziness and sedation", "Assess for peripheral edema"]

    plan = MonitoringPlan(
        sedation_monitoring=sedation,
        respiratory_monitoring=respiratory,
        cardiovascular_monitoring=cardiovascular,
        renal_monitoring=renal,
        gi_protection=gi,
        other_monitoring=other,
    )
    logger.debug(
        "Monitoring plan for patient %s: sedation=%s respiratory=%s cv=%s renal=%s gi=%s",
        patient.id, sedation.required, respiratory.required, cardiovascular.required,
        renal.required, gi.required,
    )
    return plan


def generate_red_flags(
    assessment: PainAssessment,
    recommendations: List[AnalgesicRecommendation],
    risk_flags: List[RiskFlag],
    patient: PatientInfo,
    id_factory: IdFactory = generate_uuid,
) -> List[RedFlag]:
    """Evaluate all red-flag rules in a fixed order."""
    offered = _offered(recommendations)
    red_flags: List[RedFlag] = []

    def emit(severity: RedFlagSeverity, title: str, description: str, action: str) -> None:
        red_flags.append(RedFlag(
            id=id_factory(), severity=severity, title=title, description=description, action=action,
        ))

    # ── Rule 1: Escalating pain (always shown) ────────────────────────────
    emit(
        RedFlagSeverity.CRITICAL,
        "Escalating Pain Despite Treatment",
        "If pain escalates despite analgesic treatment, this may indicate treatment failure "
        "or underlying pathology",
        "Reassess for underlying cause. Consider dose adjustment, alternative agents, "
        "or specialist review.",
    )

    # ── Rule 2: Severe pain ───────────────────────────────────────────────
    if assessment.severity == PainSeverity.SEVERE:
        emit(
            RedFlagSeverity.WARNING,
            "Severe Pain",
            "Patient has severe pain requiring prompt and effective analgesia",
            "Ensure adequate analgesia is administered promptly. Reassess frequently.",
        )

    # ── Rule 3: Opioid toxicity / elderly sensitivity ─────────────────────
    if not offered.isdisjoint(OPIOID_CLASSES):
        emit(
            RedFlagSeverity.CRITICAL,
            "Opioid Toxicity Signs",
            "Monitor for respiratory depression (RR <8), excessive sedation (unable to rouse), "
            "pinpoint pupils",
            "STOP opioid. Administer naloxone if respiratory depression. "
            "Call for urgent medical review.",
        )
        if patient.is_elderly:
            emit(
                RedFlagSeverity.WARNING,
                "Elderly Opioid Sensitivity",
                "Elderly patients have increased sensitivity to opioids",
                "Start with lower doses. Monitor closely for sedation and confusion.",
            )

    # ── Rule 4: NSAID adverse effects ─────────────────────────────────────
    if not offered.isdisjoint(NSAID_CLASSES):
        emit(
            RedFlagSeverity.WARNING,
            "NSAID Adverse Effects",
            "Monitor for GI bleeding (black stools, coffee-ground vomit), AKI (reduced urine "
            "output, rising creatinine), cardiovascular events",
            "Stop NSAID if adverse effects occur. Review renal function and GI symptoms regularly.",
        )

    # ── Rule 5: Procedural context ────────────────────────────────────────
    if assessment.pain_context == PainContext.PROCEDURAL:
        emit(
            RedFlagSeverity.WARNING,
            "Inadequate Procedural Analgesia",
            "Inadequate analgesia during procedures causes significant distress and may prevent "
            "procedure completion",
            "Ensure pre-emptive analgesia is given with adequate lead time. Have rescue analgesia "
            "available. Consider procedure postponement if pain uncontrolled.",
        )

    # ── Rule 6: Contraindications aggregate ───────────────────────────────
    contraindicated = [f for f in risk_flags if f.level == RiskLevel.CONTRAINDICATED]
    if contraindicated:
        emit(
            RedFlagSeverity.CRITICAL,
            "Contraindicated Drug Classes Identified",
            "Patient has contraindications to: " + "; ".join(f.message for f in contraindicated),
            "Ensure contraindicated drug classes are NOT prescribed. "
            "Document contraindications clearly.",
        )

    critical = sum(1 for f in red_flags if f.severity == RedFlagSeverity.CRITICAL)
    logger.info(
        "Red flags for patient %s: %d total, %d critical", patient.id, len(red_flags), critical,
    )
    return red_flags


def should_increase_monitoring(
    assessment: PainAssessment,
    risk_flags: List[RiskFlag],
    patient: PatientInfo,
) -> bool:
    if assessment.severity == PainSeverity.SEVERE:
        return True
    if patient.category == PatientCategory.ELDERLY:
        return True
    if any(f.category == "Respiratory" for f in risk_flags):
        return True
    high_level = [f for f in risk_flags if f.level in (RiskLevel.WARNING, RiskLevel.CONTRAINDICATED)]
    return len(high_level) >= HIGH_LEVEL_FLAG_THRESHOLD


def generate_dressing_safety_checks(wound_phase: str, pain_score: float) -> List[str]:
    """Pre-procedure checklist for a dressing change."""
    checks = [
        "Verify patient identity and wound location",
        "Check for known allergies to dressing materials",
        "Assess wound for signs of infection before proceeding",
    ]
    if pain_score >= PRE_PROCEDURE_ANALGESIA_SCORE:
        checks += [
            "Ensure adequate analgesia has been administered",
            "Allow sufficient time for analgesia to take effect",
        ]
    if wound_phase == "extension":
        checks += [
            "Consider additional infection control measures",
            "Document any concerning wound changes for review",
        ]
    return checks


def generate_post_dressing_monitoring(pain_score: float, has_opioids: bool) -> List[str]:
    monitoring = [
        "Reassess pain 30-60 minutes post-procedure",
        "Check dressing security and comfort",
        "Document procedure completion and patient response",
    ]
    if has_opioids:
        monitoring += [
            "Monitor sedation level for 2-4 hours post-opioid",
            "Ensure patient is safe to mobilize/discharge",
        ]
    if pain_score >= HIGH_PAIN_SCORE:
        monitoring += [
            "Schedule follow-up pain assessment within 24 hours",
            "Provide clear escalation instructions to patient/carer",
        ]
    return monitoring
