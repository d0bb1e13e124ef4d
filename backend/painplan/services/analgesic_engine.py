"""
Analgesic recommendation engine.
WHO-ladder based drug-class recommendations, adjuvants, non-pharmacological
measures and a pre-emptive plan for painful procedures.
"""
import logging
from typing import Iterable, List, Optional

from ..models.assessment import PainAssessment, PainContext, PainSeverity, PainType, get_pain_severity
from ..models.patient import PatientCategory, PatientInfo
from ..models.plan import (
    OPIOID_CLASSES,
    AnalgesicClass,
    AnalgesicPlan,
    AnalgesicRecommendation,
    AnalgesicRoute,
    Anxiolysis,
    IntraProceduralAnalgesia,
    PreEmptiveAnalgesia,
    ProceduralPainPlan,
    ProcedureType,
    RiskFlag,
    RiskLevel,
    Suitability,
)
from .comorbidity_engine import DrugClassSafety, check_drug_class_safety, get_contraindicated_classes
from .rule_catalog import (
    ANXIOLYSIS_PROCEDURES,
    MILD_PAIN_PROCEDURES,
    REGIONAL_ANESTHESIA_PROCEDURES,
    SEVERE_PAIN_PROCEDURES,
    TOPICAL_ANESTHESIA_PROCEDURES,
)

logger = logging.getLogger(__name__)

R = AnalgesicRoute

PRE_EMPTIVE_TIMING = "30-60 minutes pre-procedure (oral) or 15-30 minutes (IV)"
TOPICAL_AGENT = "Lidocaine gel/EMLA cream applied 30-60 min before"
REGIONAL_TECHNIQUE = "Local infiltration or regional block as appropriate"

_LADDER_STEP = {
    PainSeverity.NONE: 1,
    PainSeverity.MILD: 1,
    PainSeverity.MODERATE: 2,
    PainSeverity.SEVERE: 3,
}


# Opioid class added at ladder steps 2 and 3
_OPIOID_TIERS = (AnalgesicClass.WEAK_OPIOID, AnalgesicClass.STRONG_OPIOID)


def get_who_step(severity: PainSeverity) -> int:
    return _LADDER_STEP[severity]


def _standard_suitability(level: RiskLevel) -> Suitability:
    if level == RiskLevel.INFO:
        return Suitability.RECOMMENDED
    if level == RiskLevel.CAUTION:
        return Suitability.CONSIDER
    return Suitability.CAUTION


def _strong_opioid_suitability(level: RiskLevel) -> Suitability:
    # Severe pain keeps strong opioids at "consider" under caution-level flags
    if level == RiskLevel.INFO:
        return Suitability.RECOMMENDED
    if level == RiskLevel.WARNING:
        return Suitability.CAUTION
    return Suitability.CONSIDER


def _dose_adjustment(safety: DrugClassSafety) -> Optional[str]:
    if not safety.warnings:
        return None
    return ". ".join(safety.warnings) + ". " + " ".join(safety.recommendations)


def generate_analgesic_recommendations(
    assessment: PainAssessment,
    risk_flags: List[RiskFlag],
    patient: PatientInfo,
) -> AnalgesicPlan:
    """
    Build the tiered analgesic plan for the assessed pain.

    The ladder is cumulative: a step-3 patient also gets every step-1 and
    step-2 class that is not contraindicated. Contraindicated classes are
    left out entirely rather than listed as "contraindicated".
    """
    contraindicated = get_contraindicated_classes(risk_flags)
    step = get_who_step(assessment.severity)
    primary: List[AnalgesicRecommendation] = []
    adjunct: List[AnalgesicRecommendation] = []

    # Step 1: non-opioids
    paracetamol = check_drug_class_safety(AnalgesicClass.PARACETAMOL, risk_flags)
    primary.append(AnalgesicRecommendation(
        drug_class=AnalgesicClass.PARACETAMOL,
        suitability=Suitability.RECOMMENDED if paracetamol.safe else Suitability.CAUTION,
        routes=[R.ORAL, R.INTRAVENOUS, R.RECTAL],
        rationale="First-line analgesic for all pain levels. Safe in most patients.",
        dose_adjustment=_dose_adjustment(paracetamol),
        monitoring_required=(
            ["Liver function if prolonged use"] if paracetamol.level != RiskLevel.INFO else None
        ),
    ))

    if (
        AnalgesicClass.NSAID_NON_SELECTIVE not in contraindicated
        and assessment.pain_type in (PainType.INFLAMMATORY, PainType.NOCICEPTIVE)
    ):
        nsaid = check_drug_class_safety(AnalgesicClass.NSAID_NON_SELECTIVE, risk_flags)
        primary.append(AnalgesicRecommendation(
            drug_class=AnalgesicClass.NSAID_NON_SELECTIVE,
            suitability=_standard_suitability(nsaid.level),
            routes=[R.ORAL, R.INTRAVENOUS, R.TOPICAL],
            rationale="Effective for inflammatory and nociceptive pain. Consider GI protection.",
            dose_adjustment=_dose_adjustment(nsaid),
            monitoring_required=["Renal function", "GI symptoms", "Blood pressure"],
        ))

    # Step 2: weak opioids
    if step >= 2 and AnalgesicClass.WEAK_OPIOID not in contraindicated:
        weak = check_drug_class_safety(AnalgesicClass.WEAK_OPIOID, risk_flags)
        primary.append(AnalgesicRecommendation(
            drug_class=AnalgesicClass.WEAK_OPIOID,
            suitability=_standard_suitability(weak.level),
            routes=[R.ORAL, R.INTRAVENOUS],
            rationale="Step 2 WHO ladder for moderate pain not controlled by non-opioids alone.",
            dose_adjustment=_dose_adjustment(weak),
            monitoring_required=["Sedation level", "Respiratory rate", "Constipation", "Nausea"],
        ))

    # Step 3: strong opioids
    if step >= 3 and AnalgesicClass.STRONG_OPIOID not in contraindicated:
        strong = check_drug_class_safety(AnalgesicClass.STRONG_OPIOID, risk_flags)
        primary.append(AnalgesicRecommendation(
            drug_class=AnalgesicClass.STRONG_OPIOID,
            suitability=_strong_opioid_suitability(strong.level),
            routes=[R.ORAL, R.INTRAVENOUS, R.SUBCUTANEOUS, R.TRANSDERMAL],
            rationale="Step 3 WHO ladder for severe pain. Titrate to effect.",
            dose_adjustment=_dose_adjustment(strong),
            monitoring_required=["Sedation scoring", "Respiratory rate q1-4h", "Pain score", "Side effects"],
        ))

    # Adjuvants by pain type
    if assessment.pain_type in (PainType.NEUROPATHIC, PainType.MIXED):
        adjunct.append(AnalgesicRecommendation(
            drug_class=AnalgesicClass.ADJUVANT_ANTICONVULSANT,
            suitability=Suitability.CONSIDER,
            routes=[R.ORAL],
            rationale="First-line adjuvant for neuropathic pain component.",
            monitoring_required=["Sedation", "Dizziness", "Peripheral edema"],
        ))
        adjunct.append(AnalgesicRecommendation(
            drug_class=AnalgesicClass.ADJUVANT_ANTIDEPRESSANT,
            suitability=Suitability.CONSIDER,
            routes=[R.ORAL],
            rationale="Alternative or addition for neuropathic pain.",
            monitoring_required=["Anticholinergic effects", "Cardiac effects (TCAs)"],
        ))

    if assessment.location and assessment.pain_type in (PainType.NOCICEPTIVE, PainType.INFLAMMATORY):
        adjunct.append(AnalgesicRecommendation(
            drug_class=AnalgesicClass.TOPICAL_ANALGESIC,
            suitability=Suitability.CONSIDER,
            routes=[R.TOPICAL],
            rationale="Topical option for localized pain with minimal systemic effects.",
            monitoring_required=["Local skin reaction"],
        ))

    if "spasm" in assessment.description.lower():
        adjunct.append(AnalgesicRecommendation(
            drug_class=AnalgesicClass.ADJUVANT_MUSCLE_RELAXANT,
            suitability=Suitability.CONSIDER,
            routes=[R.ORAL],
            rationale="May help if muscle spasm component present.",
            monitoring_required=["Sedation", "Weakness"],
        ))

    if step > 1 and not any(r.drug_class in OPIOID_CLASSES for r in primary):
        skipped = [c.value for c in _OPIOID_TIERS[:step - 1] if c in contraindicated]
        logger.warning(
            "No opioid tier offered for %s pain in patient %s; contraindicated: %s",
            assessment.severity.value, patient.id, ", ".join(skipped),
        )

    plan = AnalgesicPlan(
        primary_recommendations=primary,
        adjunct_recommendations=adjunct,
        contraindicated_classes=sorted(contraindicated, key=lambda c: c.value),
        non_pharmacological=get_applicable_non_pharmacological(assessment, patient),
    )
    logger.info(
        "WHO step %d for patient %s: %d primary, %d adjunct, %d contraindicated",
        step, patient.id, len(primary), len(adjunct), len(contraindicated),
    )
    return plan


def get_applicable_non_pharmacological(assessment: PainAssessment, patient: PatientInfo) -> List[str]:
    applicable = [
        "Positioning and comfort measures",
        "Relaxation and breathing exercises",
    ]

    if patient.category == PatientCategory.PEDIATRIC:
        applicable += [
            "Distraction techniques",
            "Play therapy (pediatric)",
            "Parental presence (pediatric)",
        ]
    elif patient.category == PatientCategory.NEONATE:
        applicable += [
            "Sucrose solution (neonatal)",
            "Swaddling (neonatal)",
            "Skin-to-skin contact (neonatal)",
        ]
    else:
        applicable += [
            "Distraction techniques",
            "Music therapy",
            "Guided imagery",
        ]

    if (
        assessment.pain_type in (PainType.NOCICEPTIVE, PainType.INFLAMMATORY)
        and assessment.pain_context != PainContext.PROCEDURAL
    ):
        applicable += ["Cold therapy / cryotherapy", "Heat therapy"]

    if assessment.pain_type == PainType.NEUROPATHIC:
        applicable.append("TENS (Transcutaneous Electrical Nerve Stimulation)")

    return applicable


def anticipated_procedural_pain(procedure_type: ProcedureType) -> PainSeverity:
    if procedure_type in SEVERE_PAIN_PROCEDURES:
        return PainSeverity.SEVERE
    if procedure_type in MILD_PAIN_PROCEDURES:
        return PainSeverity.MILD
    return PainSeverity.MODERATE


def _has_class(options: Iterable[AnalgesicRecommendation], drug_class: AnalgesicClass) -> bool:
    return any(o.drug_class == drug_class for o in options)


def generate_procedural_pain_plan(
    procedure_type: ProcedureType,
    procedure_description: str,
    baseline_assessment: PainAssessment,
    risk_flags: List[RiskFlag],
    patient: PatientInfo,
) -> ProceduralPainPlan:
    """Pre-emptive, intra-procedural and follow-up plan for a painful procedure."""
    contraindicated = get_contraindicated_classes(risk_flags)
    anticipated = anticipated_procedural_pain(procedure_type)

    pre_emptive = [AnalgesicRecommendation(
        drug_class=AnalgesicClass.PARACETAMOL,
        suitability=Suitability.RECOMMENDED,
        routes=[R.ORAL, R.INTRAVENOUS],
        rationale="Pre-emptive non-opioid analgesia",
    )]

    if anticipated in (PainSeverity.MODERATE, PainSeverity.SEVERE):
        opioid = (
            AnalgesicClass.STRONG_OPIOID if anticipated == PainSeverity.SEVERE
            else AnalgesicClass.WEAK_OPIOID
        )
        if opioid not in contraindicated:
            pre_emptive.append(AnalgesicRecommendation(
                drug_class=opioid,
                suitability=Suitability.RECOMMENDED,
                routes=[R.ORAL, R.INTRAVENOUS],
                rationale=f"Pre-emptive opioid for anticipated {anticipated.value} procedural pain",
            ))
        else:
            logger.debug("Pre-emptive %s skipped: contraindicated", opioid.value)

    systemic: List[AnalgesicRecommendation] = []
    if anticipated == PainSeverity.SEVERE:
        if AnalgesicClass.STRONG_OPIOID not in contraindicated:
            systemic.append(AnalgesicRecommendation(
                drug_class=AnalgesicClass.STRONG_OPIOID,
                suitability=Suitability.RECOMMENDED,
                routes=[R.INTRAVENOUS],
                rationale="IV opioid for severe procedural pain",
            ))
        systemic.append(AnalgesicRecommendation(
            drug_class=AnalgesicClass.KETAMINE,
            suitability=Suitability.CONSIDER,
            routes=[R.INTRAVENOUS, R.INTRANASAL],
            rationale="Sub-dissociative ketamine for severe procedural pain",
        ))
        systemic.append(AnalgesicRecommendation(
            drug_class=AnalgesicClass.NITROUS_OXIDE,
            suitability=Suitability.CONSIDER,
            routes=[R.INHALATION],
            rationale="Inhaled analgesia for procedure-related anxiety and pain",
        ))

    use_topical = procedure_type in TOPICAL_ANESTHESIA_PROCEDURES
    consider_regional = procedure_type in REGIONAL_ANESTHESIA_PROCEDURES
    anxiolysis = anticipated == PainSeverity.SEVERE or procedure_type in ANXIOLYSIS_PROCEDURES

    monitoring_during = ["Pain score at regular intervals"]
    if anticipated == PainSeverity.SEVERE or _has_class(systemic, AnalgesicClass.STRONG_OPIOID):
        monitoring_during += ["Sedation level", "Respiratory rate", "Oxygen saturation"]
    if _has_class(systemic, AnalgesicClass.KETAMINE):
        monitoring_during += ["Blood pressure", "Emergence phenomena"]

    post_procedure = [
        "Pain score 30 minutes post-procedure",
        "Assess for adequate analgesia",
        "Document analgesic effectiveness",
    ]
    if anticipated == PainSeverity.SEVERE:
        post_procedure += [
            "Continue monitoring for 2-4 hours post-procedure",
            "PRN analgesia availability",
        ]

    non_pharmacological = get_applicable_non_pharmacological(baseline_assessment, patient)
    non_pharmacological += [
        "Explanation and preparation before procedure",
        "Minimize procedure duration where possible",
    ]

    logger.info(
        "Procedural plan for %s (patient %s): anticipated %s pain, %d systemic option(s)",
        procedure_type.value, patient.id, anticipated.value, len(systemic),
    )
    return ProceduralPainPlan(
        procedure_type=procedure_type,
        procedure_description=procedure_description,
        anticipated_pain_level=anticipated,
        pre_emptive_analgesia=PreEmptiveAnalgesia(
            required=True,
            timing=PRE_EMPTIVE_TIMING,
            recommendations=pre_emptive,
        ),
        intra_procedural_analgesia=IntraProceduralAnalgesia(
            topical=use_topical,
            topical_agent=TOPICAL_AGENT if use_topical else None,
            regional=consider_regional,
            regional_technique=REGIONAL_TECHNIQUE if consider_regional else None,
            systemic=anticipated != PainSeverity.MILD,
            systemic_options=systemic,
        ),
        anxiolysis=Anxiolysis(
            recommended=anxiolysis,
            rationale="Procedure-related anxiety may exacerbate pain perception" if anxiolysis else None,
        ),
        non_pharmacological=non_pharmacological,
        monitoring_during=monitoring_during,
        post_procedure_follow=post_procedure,
    )


def get_simple_analgesia_guidance(pain_score: float, procedural_pain_anticipated: bool) -> str:
    """One-line guidance for the quick assessment screen."""
    severity = get_pain_severity(pain_score)
    if severity == PainSeverity.NONE and not procedural_pain_anticipated:
        return "No analgesia required. Monitor for changes during procedure."
    if severity in (PainSeverity.NONE, PainSeverity.MILD):
        return (
            "Consider oral paracetamol 1g 30 minutes before dressing change "
            "if procedural pain anticipated."
        )
    if severity == PainSeverity.MODERATE:
        return (
            "Recommend oral analgesics 30-60 minutes before procedure. Consider tramadol "
            "50-100mg or paracetamol/codeine combination. Apply topical anesthetic if wound "
            "bed is sensitive."
        )
    return (
        "Strong analgesia recommended. Consider opioid analgesics with medical supervision. "
        "May require procedural sedation for complex wounds. Consult pain management team "
        "if chronic."
    )
