"""
Comorbidity risk engine.
Evaluates the rule catalog against a patient's comorbidities and age,
producing the risk flags the analgesic engine filters drug classes with.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional

from ..models.base import IdFactory, generate_uuid
from ..models.patient import Comorbidity, ComorbidityEntry, PatientCategory, PatientInfo
from ..models.plan import RISK_LEVEL_ORDER, AnalgesicClass, RiskFlag, RiskLevel
from .rule_catalog import (
    AGE_FLAG_CATEGORY,
    COMORBIDITY_INFO,
    ELDERLY_RULE,
    NEONATE_RULE,
    PEDIATRIC_RULE,
    RISK_RULES,
    AgeRule,
    ConditionLogic,
    RiskRule,
)

logger = logging.getLogger(__name__)


@dataclass
class DrugClassSafety:
    safe: bool
    level: RiskLevel
    warnings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


def _rule_matches(rule: RiskRule, present: FrozenSet[Comorbidity], age: float) -> bool:
    if rule.condition_logic == ConditionLogic.ALL:
        matched = rule.conditions <= present
    else:
        matched = not rule.conditions.isdisjoint(present)
    if matched and rule.age_condition is not None:
        matched = rule.age_condition.matches(age)
    return matched


def _age_rule_for(patient: PatientInfo) -> Optional[AgeRule]:
    if patient.is_elderly:
        return ELDERLY_RULE
    if patient.category == PatientCategory.PEDIATRIC:
        return PEDIATRIC_RULE
    if patient.category == PatientCategory.NEONATE:
        return NEONATE_RULE
    return None


def generate_risk_flags(
    comorbidities: Iterable[ComorbidityEntry],
    patient: PatientInfo,
    id_factory: IdFactory = generate_uuid,
) -> List[RiskFlag]:
    """
    Evaluate every catalog rule in order and emit one flag per match,
    followed by at most one age/category flag.

    Flags are never merged: two rules in the same category produce two flags.
    """
    present = frozenset(entry.condition for entry in comorbidities)
    age = patient.age_years
    flags: List[RiskFlag] = []

    for rule in RISK_RULES:
        if not _rule_matches(rule, present, age):
            continue
        flags.append(RiskFlag(
            id=id_factory(),
            level=rule.level,
            category=rule.category,
            message=rule.message,
            affected_drug_classes=rule.affected_drug_classes,
            recommendation=rule.recommendation,
        ))

    age_rule = _age_rule_for(patient)
    if age_rule is not None:
        flags.append(RiskFlag(
            id=id_factory(),
            level=age_rule.level,
            category=AGE_FLAG_CATEGORY,
            message=age_rule.message,
            affected_drug_classes=age_rule.affected_drug_classes,
            recommendation=age_rule.recommendation,
        ))

    logger.info(
        "Risk evaluation for patient %s: %d comorbidities -> %d flag(s)",
        patient.id, len(present), len(flags),
    )
    return flags


def get_contraindicated_classes(flags: Iterable[RiskFlag]) -> FrozenSet[AnalgesicClass]:
    """Union of drug classes across contraindicated-level flags."""
    return frozenset(
        drug_class
        for flag in flags
        if flag.level == RiskLevel.CONTRAINDICATED
        for drug_class in flag.affected_drug_classes
    )


def get_caution_classes(flags: Iterable[RiskFlag]) -> FrozenSet[AnalgesicClass]:
    """Union of drug classes across caution- and warning-level flags."""
    return frozenset(
        drug_class
        for flag in flags
        if flag.level in (RiskLevel.CAUTION, RiskLevel.WARNING)
        for drug_class in flag.affected_drug_classes
    )


def check_drug_class_safety(drug_class: AnalgesicClass, flags: Iterable[RiskFlag]) -> DrugClassSafety:
    """
    Highest risk level among flags touching ``drug_class``.

    A class is unsafe only when some flag contraindicates it; warnings
    collect the message of every matching flag in flag order.
    """
    relevant = [f for f in flags if f.affects(drug_class)]
    if not relevant:
        return DrugClassSafety(safe=True, level=RiskLevel.INFO)

    highest = max((f.level for f in relevant), key=RISK_LEVEL_ORDER.__getitem__)
    return DrugClassSafety(
        safe=highest != RiskLevel.CONTRAINDICATED,
        level=highest,
        warnings=[f.message for f in relevant],
        recommendations=[f.recommendation for f in relevant],
    )


def group_comorbidities(comorbidities: Iterable[ComorbidityEntry]) -> Dict[str, List[ComorbidityEntry]]:
    """Group a patient's entries by clinical category, keeping entry order."""
    grouped: Dict[str, List[ComorbidityEntry]] = {}
    for entry in comorbidities:
        category = COMORBIDITY_INFO[entry.condition]["category"]
        grouped.setdefault(category, []).append(entry)
    return grouped


def comorbidity_options() -> Dict[str, List[Comorbidity]]:
    """All selectable comorbidities grouped by category."""
    grouped: Dict[str, List[Comorbidity]] = {}
    for condition, info in COMORBIDITY_INFO.items():
        grouped.setdefault(info["category"], []).append(condition)
    return grouped
