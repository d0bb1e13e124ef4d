"""Builders for domain records used across the test suites."""
from painplan.models.assessment import PainAssessment, PainContext, PainType
from painplan.models.patient import Comorbidity, ComorbidityEntry, PatientInfo


def make_patient(age=40, **kwargs) -> PatientInfo:
    kwargs.setdefault("id", "patient-1")
    kwargs.setdefault("initials", "JD")
    return PatientInfo(age=age, **kwargs)


def make_assessment(score=5, pain_type=PainType.NOCICEPTIVE, context=PainContext.REST, **kwargs) -> PainAssessment:
    return PainAssessment(score=score, pain_type=pain_type, pain_context=context, **kwargs)


def entries(*conditions: Comorbidity):
    return [ComorbidityEntry(condition=c) for c in conditions]


def sequential_ids(prefix="id"):
    """Id factory yielding prefix-1, prefix-2, ... for reproducible assertions."""
    counter = {"n": 0}

    def _next():
        counter["n"] += 1
        return f"{prefix}-{counter['n']}"

    return _next
