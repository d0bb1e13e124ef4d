"""
Static clinical rule catalog and reference tables.

RISK_RULES is evaluated top to bottom by the comorbidity engine; the order
of the tuple is the order in which risk flags are emitted. Nothing in this
module is mutated at runtime.
"""
import operator
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from ..models.assessment import PainScaleType
from ..models.patient import Comorbidity, PatientCategory
from ..models.plan import AnalgesicClass, AnalgesicRoute, ProcedureType, RiskLevel

C = Comorbidity
A = AnalgesicClass


class ConditionLogic(str, Enum):
    ANY = "any"
    ALL = "all"


_AGE_OPERATORS = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}


@dataclass(frozen=True)
class AgeCondition:
    operator: str  # one of >, <, >=, <=
    value: float

    def matches(self, age: float) -> bool:
        return _AGE_OPERATORS[self.operator](age, self.value)


@dataclass(frozen=True)
class RiskRule:
    conditions: FrozenSet[Comorbidity]
    level: RiskLevel
    category: str
    message: str
    affected_drug_classes: Tuple[AnalgesicClass, ...]
    recommendation: str
    condition_logic: ConditionLogic = ConditionLogic.ANY
    age_condition: Optional[AgeCondition] = None


@dataclass(frozen=True)
class AgeRule:
    """Flag synthesized from the patient category rather than a comorbidity."""
    category: PatientCategory
    level: RiskLevel
    message: str
    affected_drug_classes: Tuple[AnalgesicClass, ...]
    recommendation: str


AGE_FLAG_CATEGORY = "Age"


# ── Comorbidity → risk rules ─────────────────────────────────────────────────

RISK_RULES: Tuple[RiskRule, ...] = (
    # GI risk - NSAIDs
    RiskRule(
        conditions=frozenset({C.PEPTIC_ULCER, C.GI_BLEED_HISTORY}),
        level=RiskLevel.CONTRAINDICATED,
        category="Gastrointestinal",
        message="NSAIDs contraindicated due to GI risk",
        affected_drug_classes=(A.NSAID_NON_SELECTIVE, A.NSAID_COX2_SELECTIVE),
        recommendation=(
            "Avoid all NSAIDs. Consider paracetamol as first-line. If NSAID essential, "
            "use COX-2 selective with PPI cover after specialist review."
        ),
    ),
    # Moderate-severe CKD - NSAIDs
    RiskRule(
        conditions=frozenset({C.CKD_STAGE_3A, C.CKD_STAGE_3B, C.CKD_STAGE_4, C.CKD_STAGE_5}),
        level=RiskLevel.CONTRAINDICATED,
        category="Renal",
        message="NSAIDs contraindicated in moderate-severe CKD",
        affected_drug_classes=(A.NSAID_NON_SELECTIVE, A.NSAID_COX2_SELECTIVE),
        recommendation="Avoid all NSAIDs. Use paracetamol. Opioids require dose adjustment based on eGFR.",
    ),
    # Early CKD - NSAID caution
    RiskRule(
        conditions=frozenset({C.CKD_STAGE_1, C.CKD_STAGE_2}),
        level=RiskLevel.CAUTION,
        category="Renal",
        message="Use NSAIDs with caution in early CKD",
        affected_drug_classes=(A.NSAID_NON_SELECTIVE, A.NSAID_COX2_SELECTIVE),
        recommendation="Short-term use only. Monitor renal function. Ensure adequate hydration.",
    ),
    # Severe CKD - opioid adjustment
    RiskRule(
        conditions=frozenset({C.CKD_STAGE_4, C.CKD_STAGE_5}),
        level=RiskLevel.WARNING,
        category="Renal",
        message="Opioid dose adjustment required in severe CKD",
        affected_drug_classes=(A.WEAK_OPIOID, A.STRONG_OPIOID),
        recommendation=(
            "Reduce opioid doses by 50-75%. Avoid morphine (active metabolites accumulate). "
            "Prefer fentanyl or hydromorphone."
        ),
    ),
    # Severe liver disease - paracetamol
    RiskRule(
        conditions=frozenset({C.LIVER_DISEASE_SEVERE}),
        level=RiskLevel.WARNING,
        category="Hepatic",
        message="Paracetamol dose reduction required in severe liver disease",
        affected_drug_classes=(A.PARACETAMOL,),
        recommendation="Maximum 2g/day paracetamol. Avoid in acute liver failure. Monitor LFTs.",
    ),
    # Liver disease - opioids
    RiskRule(
        conditions=frozenset({C.LIVER_DISEASE_MODERATE, C.LIVER_DISEASE_SEVERE}),
        level=RiskLevel.WARNING,
        category="Hepatic",
        message="Opioid dose adjustment required in liver disease",
        affected_drug_classes=(A.WEAK_OPIOID, A.STRONG_OPIOID),
        recommendation=(
            "Reduce opioid doses. Avoid codeine and tramadol (unpredictable metabolism). "
            "Increase dosing interval."
        ),
    ),
    # Heart failure / IHD - NSAIDs
    RiskRule(
        conditions=frozenset({C.HEART_FAILURE, C.ISCHEMIC_HEART_DISEASE}),
        level=RiskLevel.CONTRAINDICATED,
        category="Cardiovascular",
        message="NSAIDs contraindicated in heart failure and IHD",
        affected_drug_classes=(A.NSAID_NON_SELECTIVE, A.NSAID_COX2_SELECTIVE),
        recommendation=(
            "Avoid all NSAIDs due to cardiovascular and fluid retention risks. "
            "Use paracetamol and opioids if needed."
        ),
    ),
    # Hypertension - NSAID caution
    RiskRule(
        conditions=frozenset({C.HYPERTENSION}),
        level=RiskLevel.CAUTION,
        category="Cardiovascular",
        message="NSAIDs may worsen hypertension",
        affected_drug_classes=(A.NSAID_NON_SELECTIVE, A.NSAID_COX2_SELECTIVE),
        recommendation=(
            "Monitor blood pressure if NSAID used. Prefer short-term use. "
            "Consider paracetamol first-line."
        ),
    ),
    # COPD / hypoventilation - opioids
    RiskRule(
        conditions=frozenset({C.COPD, C.RESPIRATORY_DEPRESSION_RISK}),
        level=RiskLevel.WARNING,
        category="Respiratory",
        message="Increased respiratory depression risk with opioids",
        affected_drug_classes=(A.WEAK_OPIOID, A.STRONG_OPIOID, A.ANXIOLYTIC),
        recommendation=(
            "Use lowest effective opioid dose. Start low, titrate slowly. Continuous monitoring "
            "recommended. Avoid benzodiazepines if possible."
        ),
    ),
    # Asthma - NSAIDs
    RiskRule(
        conditions=frozenset({C.ASTHMA}),
        level=RiskLevel.CAUTION,
        category="Respiratory",
        message="Risk of NSAID-induced bronchospasm",
        affected_drug_classes=(A.NSAID_NON_SELECTIVE,),
        recommendation=(
            "Avoid in aspirin-sensitive asthma. Use with caution otherwise. "
            "COX-2 selective may be safer alternative."
        ),
    ),
    # Pregnancy - NSAIDs
    RiskRule(
        conditions=frozenset({C.PREGNANCY}),
        level=RiskLevel.CONTRAINDICATED,
        category="Pregnancy",
        message="NSAIDs contraindicated in pregnancy (especially third trimester)",
        affected_drug_classes=(A.NSAID_NON_SELECTIVE, A.NSAID_COX2_SELECTIVE),
        recommendation=(
            "Avoid NSAIDs. Paracetamol is preferred analgesic. "
            "Opioids only under specialist supervision."
        ),
    ),
    # Pregnancy - opioids
    RiskRule(
        conditions=frozenset({C.PREGNANCY}),
        level=RiskLevel.WARNING,
        category="Pregnancy",
        message="Opioid use in pregnancy requires specialist supervision",
        affected_drug_classes=(A.WEAK_OPIOID, A.STRONG_OPIOID),
        recommendation=(
            "Short-term use only. Monitor for neonatal abstinence syndrome if used near delivery. "
            "Avoid codeine."
        ),
    ),
    # Lactation
    RiskRule(
        conditions=frozenset({C.LACTATION}),
        level=RiskLevel.CAUTION,
        category="Lactation",
        message="Analgesic choice requires consideration of breastfeeding",
        affected_drug_classes=(A.WEAK_OPIOID, A.STRONG_OPIOID, A.NSAID_NON_SELECTIVE),
        recommendation=(
            "Paracetamol and ibuprofen are compatible with breastfeeding. Avoid codeine. "
            "Use lowest effective dose of any analgesic."
        ),
    ),
    # Opioid tolerance
    RiskRule(
        conditions=frozenset({C.OPIOID_TOLERANCE}),
        level=RiskLevel.INFO,
        category="Pain History",
        message="Patient is opioid tolerant - higher doses may be required",
        affected_drug_classes=(A.WEAK_OPIOID, A.STRONG_OPIOID),
        recommendation=(
            "Calculate opioid requirement based on current daily dose. May need higher starting "
            "doses for acute pain. Multimodal analgesia recommended."
        ),
    ),
    # Opioid dependence
    RiskRule(
        conditions=frozenset({C.OPIOID_DEPENDENCE}),
        level=RiskLevel.WARNING,
        category="Pain History",
        message="History of opioid dependence - careful opioid management required",
        affected_drug_classes=(A.WEAK_OPIOID, A.STRONG_OPIOID),
        recommendation=(
            "Develop clear pain management plan. Consider addiction medicine consultation. "
            "Maximize non-opioid strategies. If opioids needed, use structured approach with "
            "defined endpoints."
        ),
    ),
    # Coagulopathy - NSAIDs
    RiskRule(
        conditions=frozenset({C.COAGULOPATHY}),
        level=RiskLevel.CONTRAINDICATED,
        category="Hematologic",
        message="NSAIDs contraindicated with coagulopathy",
        affected_drug_classes=(A.NSAID_NON_SELECTIVE,),
        recommendation=(
            "Avoid non-selective NSAIDs. COX-2 selective may be considered with caution. "
            "Avoid intramuscular injections."
        ),
    ),
    # Seizure disorder - tramadol
    RiskRule(
        conditions=frozenset({C.SEIZURE_DISORDER}),
        level=RiskLevel.CONTRAINDICATED,
        category="Neurological",
        message="Tramadol contraindicated in seizure disorder",
        affected_drug_classes=(A.WEAK_OPIOID,),
        recommendation=(
            "Avoid tramadol (lowers seizure threshold). Consider other opioids if needed. "
            "Gabapentinoids may be useful adjuvants."
        ),
    ),
    # Mental health - opioids
    RiskRule(
        conditions=frozenset({C.MENTAL_HEALTH_DISORDER}),
        level=RiskLevel.CAUTION,
        category="Psychiatric",
        message="Increased risk of opioid misuse in mental health disorders",
        affected_drug_classes=(A.WEAK_OPIOID, A.STRONG_OPIOID),
        recommendation=(
            "Careful assessment and monitoring. Defined treatment duration. Consider non-opioid "
            "strategies. Liaise with mental health team if needed."
        ),
    ),
)


# ── Age / category rules ─────────────────────────────────────────────────────

ELDERLY_RULE = AgeRule(
    category=PatientCategory.ELDERLY,
    level=RiskLevel.CAUTION,
    message="Elderly patient - consider age-related pharmacokinetic changes",
    affected_drug_classes=(A.NSAID_NON_SELECTIVE, A.NSAID_COX2_SELECTIVE, A.WEAK_OPIOID, A.STRONG_OPIOID),
    recommendation=(
        "Start low, go slow with all analgesics. Increased sensitivity to opioids. "
        "Higher NSAID GI/CV/renal risks. Consider reduced doses."
    ),
)

PEDIATRIC_RULE = AgeRule(
    category=PatientCategory.PEDIATRIC,
    level=RiskLevel.INFO,
    message="Pediatric patient - weight-based dosing required",
    affected_drug_classes=(A.PARACETAMOL, A.NSAID_NON_SELECTIVE, A.WEAK_OPIOID, A.STRONG_OPIOID),
    recommendation=(
        "All doses must be calculated per kilogram. Avoid codeine in children. "
        "Use age-appropriate formulations."
    ),
)

NEONATE_RULE = AgeRule(
    category=PatientCategory.NEONATE,
    level=RiskLevel.WARNING,
    message="Neonate - specialist pain management required",
    affected_drug_classes=(A.PARACETAMOL, A.WEAK_OPIOID, A.STRONG_OPIOID),
    recommendation=(
        "Neonatal-specific dosing protocols required. Immature hepatic and renal function. "
        "Consider non-pharmacological measures (sucrose, swaddling, skin-to-skin)."
    ),
)


# ── Reference tables ─────────────────────────────────────────────────────────

COMORBIDITY_INFO: Dict[Comorbidity, Dict[str, str]] = {
    C.PEPTIC_ULCER: {"display_name": "Peptic Ulcer Disease", "category": "Gastrointestinal",
                     "description": "Active or history of gastric/duodenal ulcer"},
    C.CKD_STAGE_1: {"display_name": "CKD Stage 1", "category": "Renal",
                    "description": "eGFR >=90 with kidney damage"},
    C.CKD_STAGE_2: {"display_name": "CKD Stage 2", "category": "Renal", "description": "eGFR 60-89"},
    C.CKD_STAGE_3A: {"display_name": "CKD Stage 3a", "category": "Renal", "description": "eGFR 45-59"},
    C.CKD_STAGE_3B: {"display_name": "CKD Stage 3b", "category": "Renal", "description": "eGFR 30-44"},
    C.CKD_STAGE_4: {"display_name": "CKD Stage 4", "category": "Renal", "description": "eGFR 15-29"},
    C.CKD_STAGE_5: {"display_name": "CKD Stage 5", "category": "Renal",
                    "description": "eGFR <15 or dialysis"},
    C.LIVER_DISEASE_MILD: {"display_name": "Liver Disease (Mild)", "category": "Hepatic",
                           "description": "Child-Pugh A or mild hepatic impairment"},
    C.LIVER_DISEASE_MODERATE: {"display_name": "Liver Disease (Moderate)", "category": "Hepatic",
                               "description": "Child-Pugh B or moderate hepatic impairment"},
    C.LIVER_DISEASE_SEVERE: {"display_name": "Liver Disease (Severe)", "category": "Hepatic",
                             "description": "Child-Pugh C or severe hepatic impairment"},
    C.HEART_FAILURE: {"display_name": "Heart Failure", "category": "Cardiovascular",
                      "description": "Diagnosed heart failure (any class)"},
    C.ISCHEMIC_HEART_DISEASE: {"display_name": "Ischemic Heart Disease", "category": "Cardiovascular",
                               "description": "Coronary artery disease, previous MI, angina"},
    C.HYPERTENSION: {"display_name": "Hypertension", "category": "Cardiovascular",
                     "description": "Diagnosed hypertension"},
    C.DIABETES: {"display_name": "Diabetes Mellitus", "category": "Metabolic",
                 "description": "Type 1 or Type 2 diabetes"},
    C.ASTHMA: {"display_name": "Asthma", "category": "Respiratory", "description": "Diagnosed asthma"},
    C.COPD: {"display_name": "COPD", "category": "Respiratory",
             "description": "Chronic obstructive pulmonary disease"},
    C.PREGNANCY: {"display_name": "Pregnancy", "category": "Special Population",
                  "description": "Currently pregnant"},
    C.LACTATION: {"display_name": "Lactation", "category": "Special Population",
                  "description": "Currently breastfeeding"},
    C.OPIOID_TOLERANCE: {"display_name": "Opioid Tolerance", "category": "Pain History",
                         "description": "Currently on regular opioid therapy"},
    C.OPIOID_DEPENDENCE: {"display_name": "Opioid Dependence", "category": "Pain History",
                          "description": "History of opioid use disorder"},
    C.GI_BLEED_HISTORY: {"display_name": "GI Bleed History", "category": "Gastrointestinal",
                         "description": "Previous gastrointestinal bleeding"},
    C.COAGULOPATHY: {"display_name": "Coagulopathy", "category": "Hematologic",
                     "description": "Bleeding disorder or on anticoagulation"},
    C.SEIZURE_DISORDER: {"display_name": "Seizure Disorder", "category": "Neurological",
                         "description": "Epilepsy or seizure history"},
    C.MENTAL_HEALTH_DISORDER: {"display_name": "Mental Health Disorder", "category": "Psychiatric",
                               "description": "Depression, anxiety, or other mental health condition"},
    C.RESPIRATORY_DEPRESSION_RISK: {"display_name": "Respiratory Depression Risk", "category": "Respiratory",
                                    "description": "OSA, obesity hypoventilation, or neuromuscular disease"},
}

R = AnalgesicRoute

ANALGESIC_CLASS_INFO: Dict[AnalgesicClass, dict] = {
    A.PARACETAMOL: {
        "display_name": "Paracetamol (Acetaminophen)", "category": "Non-opioid Analgesic",
        "examples": ["Paracetamol", "Acetaminophen"],
        "common_routes": [R.ORAL, R.INTRAVENOUS, R.RECTAL],
    },
    A.NSAID_NON_SELECTIVE: {
        "display_name": "Non-selective NSAIDs", "category": "Non-opioid Analgesic",
        "examples": ["Ibuprofen", "Naproxen", "Diclofenac", "Ketorolac"],
        "common_routes": [R.ORAL, R.INTRAVENOUS, R.INTRAMUSCULAR, R.TOPICAL],
    },
    A.NSAID_COX2_SELECTIVE: {
        "display_name": "COX-2 Selective NSAIDs", "category": "Non-opioid Analgesic",
        "examples": ["Celecoxib", "Etoricoxib"],
        "common_routes": [R.ORAL],
    },
    A.WEAK_OPIOID: {
        "display_name": "Weak Opioids", "category": "Opioid Analgesic",
        "examples": ["Tramadol", "Codeine"],
        "common_routes": [R.ORAL, R.INTRAVENOUS],
    },
    A.STRONG_OPIOID: {
        "display_name": "Strong Opioids", "category": "Opioid Analgesic",
        "examples": ["Morphine", "Oxycodone", "Fentanyl", "Hydromorphone"],
        "common_routes": [R.ORAL, R.INTRAVENOUS, R.SUBCUTANEOUS, R.TRANSDERMAL],
    },
    A.ADJUVANT_ANTICONVULSANT: {
        "display_name": "Anticonvulsant Adjuvants", "category": "Adjuvant Analgesic",
        "examples": ["Gabapentin", "Pregabalin", "Carbamazepine"],
        "common_routes": [R.ORAL],
    },
    A.ADJUVANT_ANTIDEPRESSANT: {
        "display_name": "Antidepressant Adjuvants", "category": "Adjuvant Analgesic",
        "examples": ["Amitriptyline", "Duloxetine", "Nortriptyline"],
        "common_routes": [R.ORAL],
    },
    A.ADJUVANT_MUSCLE_RELAXANT: {
        "display_name": "Muscle Relaxants", "category": "Adjuvant Analgesic",
        "examples": ["Baclofen", "Tizanidine", "Cyclobenzaprine"],
        "common_routes": [R.ORAL],
    },
    A.TOPICAL_ANALGESIC: {
        "display_name": "Topical Analgesics", "category": "Topical",
        "examples": ["Topical NSAIDs", "Capsaicin", "Menthol"],
        "common_routes": [R.TOPICAL],
    },
    A.TOPICAL_ANESTHETIC: {
        "display_name": "Topical Anesthetics", "category": "Topical",
        "examples": ["Lidocaine gel", "EMLA cream", "Lidocaine patches"],
        "common_routes": [R.TOPICAL],
    },
    A.REGIONAL_ANESTHESIA: {
        "display_name": "Regional Anesthesia", "category": "Interventional",
        "examples": ["Local infiltration", "Nerve block", "Epidural"],
        "common_routes": [R.REGIONAL],
    },
    A.ANXIOLYTIC: {
        "display_name": "Anxiolytics", "category": "Adjuvant",
        "examples": ["Midazolam", "Lorazepam"],
        "common_routes": [R.ORAL, R.INTRAVENOUS, R.INTRANASAL],
    },
    A.KETAMINE: {
        "display_name": "Ketamine", "category": "Dissociative Analgesic",
        "examples": ["Ketamine"],
        "common_routes": [R.INTRAVENOUS, R.INTRAMUSCULAR, R.INTRANASAL],
    },
    A.NITROUS_OXIDE: {
        "display_name": "Nitrous Oxide", "category": "Inhalation Analgesic",
        "examples": ["Entonox (50% N2O/50% O2)"],
        "common_routes": [R.INHALATION],
    },
}

P = ProcedureType

PROCEDURE_INFO: Dict[ProcedureType, Dict[str, str]] = {
    P.WOUND_DRESSING: {"display_name": "Wound Dressing Change", "category": "Wound Care",
                       "typical_duration": "15-30 minutes"},
    P.BURN_DRESSING: {"display_name": "Burn Dressing Change", "category": "Burn Care",
                      "typical_duration": "30-60 minutes"},
    P.DEBRIDEMENT: {"display_name": "Wound Debridement", "category": "Wound Care",
                    "typical_duration": "30-90 minutes"},
    P.SUTURING: {"display_name": "Suturing / Wound Closure", "category": "Minor Procedure",
                 "typical_duration": "15-45 minutes"},
    P.DRAIN_REMOVAL: {"display_name": "Drain Removal", "category": "Post-operative",
                      "typical_duration": "5-10 minutes"},
    P.CATHETER_INSERTION: {"display_name": "Catheter Insertion", "category": "Minor Procedure",
                           "typical_duration": "5-15 minutes"},
    P.LUMBAR_PUNCTURE: {"display_name": "Lumbar Puncture", "category": "Invasive Procedure",
                        "typical_duration": "15-30 minutes"},
    P.BONE_MARROW_BIOPSY: {"display_name": "Bone Marrow Biopsy", "category": "Invasive Procedure",
                           "typical_duration": "30-45 minutes"},
    P.CHEST_TUBE: {"display_name": "Chest Tube Insertion/Removal", "category": "Invasive Procedure",
                   "typical_duration": "15-30 minutes"},
    P.CENTRAL_LINE: {"display_name": "Central Line Insertion", "category": "Invasive Procedure",
                     "typical_duration": "30-60 minutes"},
    P.OTHER: {"display_name": "Other Procedure", "category": "Other", "typical_duration": "Variable"},
}

# Anticipated pain per procedure; anything not listed is moderate
SEVERE_PAIN_PROCEDURES = frozenset({P.BURN_DRESSING, P.DEBRIDEMENT, P.CHEST_TUBE, P.BONE_MARROW_BIOPSY})
MILD_PAIN_PROCEDURES = frozenset({P.DRAIN_REMOVAL, P.CATHETER_INSERTION})

TOPICAL_ANESTHESIA_PROCEDURES = frozenset({
    P.WOUND_DRESSING, P.BURN_DRESSING, P.DEBRIDEMENT, P.SUTURING, P.CATHETER_INSERTION,
})
REGIONAL_ANESTHESIA_PROCEDURES = frozenset({
    P.DEBRIDEMENT, P.BONE_MARROW_BIOPSY, P.CHEST_TUBE, P.CENTRAL_LINE, P.SUTURING,
})
ANXIOLYSIS_PROCEDURES = frozenset({P.BONE_MARROW_BIOPSY, P.LUMBAR_PUNCTURE})

PAIN_SCALES: Dict[PainScaleType, dict] = {
    PainScaleType.NRS: {
        "name": "Numeric Rating Scale", "max_score": 10,
        "patient_categories": [PatientCategory.ADULT, PatientCategory.ELDERLY],
    },
    PainScaleType.VAS: {
        "name": "Visual Analogue Scale", "max_score": 100,
        "patient_categories": [PatientCategory.ADULT, PatientCategory.ELDERLY],
    },
    PainScaleType.FLACC: {
        "name": "FLACC Scale", "max_score": 10,
        "patient_categories": [PatientCategory.PEDIATRIC, PatientCategory.NEONATE],
    },
    PainScaleType.WONG_BAKER: {
        "name": "Wong-Baker FACES Pain Scale", "max_score": 10,
        "patient_categories": [PatientCategory.PEDIATRIC],
    },
    PainScaleType.BPS: {
        "name": "Behavioral Pain Scale", "max_score": 12,
        "patient_categories": [PatientCategory.ADULT, PatientCategory.ELDERLY],
    },
    PainScaleType.CPOT: {
        "name": "Critical-Care Pain Observation Tool", "max_score": 8,
        "patient_categories": [PatientCategory.ADULT, PatientCategory.ELDERLY],
    },
}

SEDATION_SCALES = {
    "POSS": {
        "name": "Pasero Opioid-Induced Sedation Scale",
        "levels": [
            ("S", "Sleep, easy to arouse", "Acceptable; no action required"),
            ("1", "Awake and alert", "Acceptable; no action required"),
            ("2", "Slightly drowsy, easily aroused", "Acceptable; may need to decrease opioid dose"),
            ("3", "Frequently drowsy, arousable, drifts off during conversation",
             "Unacceptable; decrease opioid dose"),
            ("4", "Somnolent, minimal or no response to verbal/physical stimulation",
             "Unacceptable; STOP opioid, consider naloxone"),
        ],
    },
    "RASS": {
        "name": "Richmond Agitation-Sedation Scale",
        "levels": [
            ("+4", "Combative", "Overtly combative, violent"),
            ("+3", "Very agitated", "Pulls or removes tubes/catheters"),
            ("+2", "Agitated", "Frequent non-purposeful movement"),
            ("+1", "Restless", "Anxious but movements not aggressive"),
            ("0", "Alert and calm", "Target for most patients"),
            ("-1", "Drowsy", "Not fully alert but sustained awakening"),
            ("-2", "Light sedation", "Briefly awakens with eye contact"),
            ("-3", "Moderate sedation", "Movement or eye opening to voice"),
            ("-4", "Deep sedation", "No response to voice, movement to physical stimulation"),
            ("-5", "Unarousable", "No response to voice or physical stimulation"),
        ],
    },
}

NON_PHARMACOLOGICAL_OPTIONS = (
    "Positioning and comfort measures",
    "Distraction techniques",
    "Relaxation and breathing exercises",
    "Music therapy",
    "Cold therapy / cryotherapy",
    "Heat therapy",
    "TENS (Transcutaneous Electrical Nerve Stimulation)",
    "Massage therapy",
    "Guided imagery",
    "Virtual reality distraction",
    "Play therapy (pediatric)",
    "Parental presence (pediatric)",
    "Sucrose solution (neonatal)",
    "Swaddling (neonatal)",
    "Skin-to-skin contact (neonatal)",
)

LEGAL_DISCLAIMER = """CLINICAL DECISION SUPPORT TOOL - DISCLAIMER

This document is generated by a clinical decision-support and planning tool.
It is NOT a prescription and does NOT replace clinical judgment.

- All analgesic recommendations are class-based suggestions only
- Final prescribing decisions must be made by qualified clinicians
- Individual patient factors may require deviation from suggestions
- This tool does not account for all possible drug interactions
- Medication doses and routes must be verified independently
- Local protocols and formulary should take precedence
- Wound phase classification should be verified by clinician

The healthcare provider is solely responsible for treatment decisions.
This document is for clinical planning and documentation purposes only."""
