"""
Wound pain management decision support.

Usage:
    from painplan.services.pain_plan import build_pain_plan

    plan = build_pain_plan(patient, assessment, comorbidities)
"""
__version__ = "1.0.0"
