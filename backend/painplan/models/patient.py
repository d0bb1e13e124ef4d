"""
Patient demographics and comorbidity records supplied by the session layer.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class PatientCategory(str, Enum):
    ADULT = "adult"
    PEDIATRIC = "pediatric"
    ELDERLY = "elderly"
    NEONATE = "neonate"


class AgeUnit(str, Enum):
    YEARS = "years"
    MONTHS = "months"
    DAYS = "days"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Comorbidity(str, Enum):
    PEPTIC_ULCER = "peptic_ulcer"
    CKD_STAGE_1 = "ckd_stage_1"
    CKD_STAGE_2 = "ckd_stage_2"
    CKD_STAGE_3A = "ckd_stage_3a"
    CKD_STAGE_3B = "ckd_stage_3b"
    CKD_STAGE_4 = "ckd_stage_4"
    CKD_STAGE_5 = "ckd_stage_5"
    LIVER_DISEASE_MILD = "liver_disease_mild"
    LIVER_DISEASE_MODERATE = "liver_disease_moderate"
    LIVER_DISEASE_SEVERE = "liver_disease_severe"
    HEART_FAILURE = "heart_failure"
    ISCHEMIC_HEART_DISEASE = "ischemic_heart_disease"
    HYPERTENSION = "hypertension"
    DIABETES = "diabetes"
    ASTHMA = "asthma"
    COPD = "copd"
    PREGNANCY = "pregnancy"
    LACTATION = "lactation"
    OPIOID_TOLERANCE = "opioid_tolerance"
    OPIOID_DEPENDENCE = "opioid_dependence"
    GI_BLEED_HISTORY = "gi_bleed_history"
    COAGULOPATHY = "coagulopathy"
    SEIZURE_DISORDER = "seizure_disorder"
    MENTAL_HEALTH_DISORDER = "mental_health_disorder"
    RESPIRATORY_DEPRESSION_RISK = "respiratory_depression_risk"


class ComorbiditySeverity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


ELDERLY_AGE_YEARS = 65
ADULT_AGE_YEARS = 18
NEONATE_AGE_YEARS = 1


def age_in_years(age: float, unit: AgeUnit = AgeUnit.YEARS) -> float:
    if unit == AgeUnit.MONTHS:
        return age / 12.0
    if unit == AgeUnit.DAYS:
        return age / 365.0
    return float(age)


def derive_patient_category(age: float, unit: AgeUnit = AgeUnit.YEARS) -> PatientCategory:
    """<1 year neonate, <18 pediatric, >=65 elderly, otherwise adult."""
    years = age_in_years(age, unit)
    if years < NEONATE_AGE_YEARS:
        return PatientCategory.NEONATE
    if years < ADULT_AGE_YEARS:
        return PatientCategory.PEDIATRIC
    if years >= ELDERLY_AGE_YEARS:
        return PatientCategory.ELDERLY
    return PatientCategory.ADULT


@dataclass(frozen=True)
class ComorbidityEntry:
    condition: Comorbidity
    severity: Optional[ComorbiditySeverity] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "condition": self.condition.value,
            "severity": self.severity.value if self.severity else None,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class PatientInfo:
    """
    Demographics used by the rule engines.

    ``category`` is filled from ``age``/``age_unit`` when omitted. Use
    ``with_age`` to change the age so the category follows it.
    """
    id: str
    initials: str
    age: float
    age_unit: AgeUnit = AgeUnit.YEARS
    gender: Gender = Gender.OTHER
    weight_kg: Optional[float] = None
    category: Optional[PatientCategory] = field(default=None)

    def __post_init__(self):
        if self.category is None:
            object.__setattr__(self, "category", derive_patient_category(self.age, self.age_unit))

    @property
    def age_years(self) -> float:
        return age_in_years(self.age, self.age_unit)

    @property
    def is_elderly(self) -> bool:
        return self.category == PatientCategory.ELDERLY or self.age_years >= ELDERLY_AGE_YEARS

    def with_age(self, age: float, unit: Optional[AgeUnit] = None) -> "PatientInfo":
        unit = unit or self.age_unit
        return replace(self, age=age, age_unit=unit, category=derive_patient_category(age, unit))

    def with_derived_category(self) -> "PatientInfo":
        return replace(self, category=derive_patient_category(self.age, self.age_unit))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "initials": self.initials,
            "age": self.age,
            "age_unit": self.age_unit.value,
            "weight_kg": self.weight_kg,
            "category": self.category.value,
            "gender": self.gender.value,
        }
