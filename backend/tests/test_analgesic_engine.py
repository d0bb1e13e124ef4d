import logging

import pytest

from painplan.models.assessment import PainContext, PainSeverity, PainType
from painplan.models.patient import AgeUnit, Comorbidity
from painplan.models.plan import AnalgesicClass, ProcedureType, RiskFlag, RiskLevel, Suitability
from painplan.services.analgesic_engine import (
    anticipated_procedural_pain,
    generate_analgesic_recommendations,
    generate_procedural_pain_plan,
    get_simple_analgesia_guidance,
    get_who_step,
)
from painplan.services.comorbidity_engine import generate_risk_flags

from factories import entries, make_assessment, make_patient

A = AnalgesicClass


def _classes(recommendations):
    return [r.drug_class for r in recommendations]


def _by_class(recommendations):
    return {r.drug_class: r for r in recommendations}


class TestWhoLadder:
    @pytest.mark.parametrize(
        "severity, step",
        [
            (PainSeverity.NONE, 1),
            (PainSeverity.MILD, 1),
            (PainSeverity.MODERATE, 2),
            (PainSeverity.SEVERE, 3),
        ],
    )
    def test_step_mapping(self, severity, step):
        assert get_who_step(severity) == step

    def test_mild_pain_gets_non_opioids_only(self, adult):
        plan = generate_analgesic_recommendations(make_assessment(score=2), [], adult)
        assert _classes(plan.primary_recommendations) == [A.PARACETAMOL, A.NSAID_NON_SELECTIVE]

    def test_moderate_pain_adds_weak_opioid(self, adult):
        plan = generate_analgesic_recommendations(make_assessment(score=5), [], adult)
        assert _classes(plan.primary_recommendations) == [
            A.PARACETAMOL, A.NSAID_NON_SELECTIVE, A.WEAK_OPIOID,
        ]

    def test_severe_pain_without_comorbidities(self, adult):
        """Severe nociceptive pain, no risk flags: every tier is recommended."""
        plan = generate_analgesic_recommendations(make_assessment(score=8), [], adult)
        recs = _by_class(plan.primary_recommendations)
        assert list(recs) == [A.PARACETAMOL, A.NSAID_NON_SELECTIVE, A.WEAK_OPIOID, A.STRONG_OPIOID]
        assert all(r.suitability == Suitability.RECOMMENDED for r in recs.values())
        assert all(r.dose_adjustment is None for r in recs.values())
        assert plan.contraindicated_classes == []

    @pytest.mark.parametrize(
        "conditions",
        [
            (),
            (Comorbidity.PEPTIC_ULCER,),
            (Comorbidity.CKD_STAGE_5, Comorbidity.COPD),
            (Comorbidity.SEIZURE_DISORDER, Comorbidity.OPIOID_DEPENDENCE),
            (Comorbidity.PREGNANCY, Comorbidity.LIVER_DISEASE_SEVERE),
        ],
    )
    def test_severe_is_superset_of_moderate(self, adult, conditions):
        flags = generate_risk_flags(entries(*conditions), adult)
        moderate = generate_analgesic_recommendations(make_assessment(score=5), flags, adult)
        severe = generate_analgesic_recommendations(make_assessment(score=9), flags, adult)
        assert set(_classes(moderate.primary_recommendations)) <= set(_classes(severe.primary_recommendations))

    def test_nsaids_excluded_for_peptic_ulcer_at_every_severity(self, adult):
        flags = generate_risk_flags(entries(Comorbidity.PEPTIC_ULCER), adult)
        for score in (0, 2, 5, 9):
            plan = generate_analgesic_recommendations(make_assessment(score=score), flags, adult)
            offered = set(_classes(plan.all_recommendations))
            assert offered.isdisjoint({A.NSAID_NON_SELECTIVE, A.NSAID_COX2_SELECTIVE})
        assert plan.contraindicated_classes == [A.NSAID_COX2_SELECTIVE, A.NSAID_NON_SELECTIVE]

    def test_inflammatory_pain_gets_nsaid(self, adult):
        plan = generate_analgesic_recommendations(
            make_assessment(score=2, pain_type=PainType.INFLAMMATORY), [], adult,
        )
        assert _classes(plan.primary_recommendations) == [A.PARACETAMOL, A.NSAID_NON_SELECTIVE]

    def test_nsaid_needs_inflammatory_or_nociceptive_pain(self, adult):
        plan = generate_analgesic_recommendations(
            make_assessment(score=5, pain_type=PainType.ISCHEMIC), [], adult,
        )
        assert A.NSAID_NON_SELECTIVE not in _classes(plan.primary_recommendations)

    def test_seizure_disorder_removes_weak_opioid(self, adult):
        flags = generate_risk_flags(entries(Comorbidity.SEIZURE_DISORDER), adult)
        plan = generate_analgesic_recommendations(make_assessment(score=8), flags, adult)
        assert _classes(plan.primary_recommendations) == [
            A.PARACETAMOL, A.NSAID_NON_SELECTIVE, A.STRONG_OPIOID,
        ]


    def test_missing_opioid_tier_is_logged_by_name(self, adult, caplog):
        flags = generate_risk_flags(entries(Comorbidity.SEIZURE_DISORDER), adult)
        with caplog.at_level(logging.WARNING, logger="painplan.services.analgesic_engine"):
            generate_analgesic_recommendations(make_assessment(score=5), flags, adult)
        assert "contraindicated: weak_opioid" in caplog.text
        assert "strong_opioid" not in caplog.text

class TestSuitability:
    def test_severe_ckd_opioid_dose_adjustment(self, adult):
        flags = generate_risk_flags(entries(Comorbidity.CKD_STAGE_5), adult)
        plan = generate_analgesic_recommendations(make_assessment(score=8), flags, adult)
        recs = _by_class(plan.primary_recommendations)

        assert A.NSAID_NON_SELECTIVE not in recs
        strong = recs[A.STRONG_OPIOID]
        assert strong.suitability == Suitability.CAUTION
        assert "50-75%" in strong.dose_adjustment
        assert "Avoid morphine" in strong.dose_adjustment
        assert recs[A.PARACETAMOL].suitability == Suitability.RECOMMENDED

    def test_caution_level_maps_to_consider(self, adult):
        flags = generate_risk_flags(entries(Comorbidity.MENTAL_HEALTH_DISORDER, Comorbidity.HYPERTENSION), adult)
        recs = _by_class(generate_analgesic_recommendations(make_assessment(score=9), flags, adult).primary_recommendations)
        assert recs[A.NSAID_NON_SELECTIVE].suitability == Suitability.CONSIDER
        assert recs[A.WEAK_OPIOID].suitability == Suitability.CONSIDER
        assert recs[A.STRONG_OPIOID].suitability == Suitability.CONSIDER

    def test_warning_level_maps_to_caution(self, adult):
        flags = generate_risk_flags(entries(Comorbidity.OPIOID_DEPENDENCE), adult)
        recs = _by_class(generate_analgesic_recommendations(make_assessment(score=9), flags, adult).primary_recommendations)
        assert recs[A.WEAK_OPIOID].suitability == Suitability.CAUTION
        assert recs[A.STRONG_OPIOID].suitability == Suitability.CAUTION

    def test_info_level_stays_recommended(self, adult):
        flags = generate_risk_flags(entries(Comorbidity.OPIOID_TOLERANCE), adult)
        recs = _by_class(generate_analgesic_recommendations(make_assessment(score=9), flags, adult).primary_recommendations)
        assert recs[A.STRONG_OPIOID].suitability == Suitability.RECOMMENDED
        assert "opioid tolerant" in recs[A.STRONG_OPIOID].dose_adjustment

    def test_paracetamol_under_warning_is_still_recommended(self):
        neonate = make_patient(age=10, age_unit=AgeUnit.DAYS)
        flags = generate_risk_flags([], neonate)
        para = generate_analgesic_recommendations(make_assessment(score=2), flags, neonate).primary_recommendations[0]
        assert para.drug_class == A.PARACETAMOL
        assert para.suitability == Suitability.RECOMMENDED
        assert para.monitoring_required == ["Liver function if prolonged use"]
        assert para.dose_adjustment.startswith("Neonate - specialist pain management required")

    def test_contraindicated_paracetamol_falls_back_to_caution(self, adult):
        flag = RiskFlag(
            id="x", level=RiskLevel.CONTRAINDICATED, category="Hepatic", message="Acute liver failure",
            affected_drug_classes=(A.PARACETAMOL,), recommendation="Avoid paracetamol.",
        )
        para = generate_analgesic_recommendations(make_assessment(score=2), [flag], adult).primary_recommendations[0]
        assert para.suitability == Suitability.CAUTION


class TestAdjuncts:
    def test_neuropathic_pain_gets_adjuvants(self, adult):
        plan = generate_analgesic_recommendations(
            make_assessment(score=5, pain_type=PainType.NEUROPATHIC), [], adult,
        )
        assert _classes(plan.adjunct_recommendations) == [A.ADJUVANT_ANTICONVULSANT, A.ADJUVANT_ANTIDEPRESSANT]
        assert all(r.suitability == Suitability.CONSIDER for r in plan.adjunct_recommendations)

    def test_localised_nociceptive_pain_gets_topical(self, adult):
        plan = generate_analgesic_recommendations(
            make_assessment(score=3, location="left heel"), [], adult,
        )
        assert _classes(plan.adjunct_recommendations) == [A.TOPICAL_ANALGESIC]

    def test_no_topical_without_location(self, adult):
        plan = generate_analgesic_recommendations(make_assessment(score=3), [], adult)
        assert plan.adjunct_recommendations == []

    def test_spasm_in_description_adds_muscle_relaxant(self, adult):
        plan = generate_analgesic_recommendations(
            make_assessment(score=4, description="Calf SPASMS on movement"), [], adult,
        )
        assert A.ADJUVANT_MUSCLE_RELAXANT in _classes(plan.adjunct_recommendations)


class TestNonPharmacological:
    def test_adult_rest_nociceptive(self, adult):
        plan = generate_analgesic_recommendations(make_assessment(score=3), [], adult)
        assert plan.non_pharmacological == [
            "Positioning and comfort measures",
            "Relaxation and breathing exercises",
            "Distraction techniques",
            "Music therapy",
            "Guided imagery",
            "Cold therapy / cryotherapy",
            "Heat therapy",
        ]

    def test_pediatric_additions(self):
        child = make_patient(age=6)
        plan = generate_analgesic_recommendations(make_assessment(score=3), [], child)
        assert "Play therapy (pediatric)" in plan.non_pharmacological
        assert "Music therapy" not in plan.non_pharmacological

    def test_neonate_additions(self):
        baby = make_patient(age=3, age_unit=AgeUnit.MONTHS)
        plan = generate_analgesic_recommendations(make_assessment(score=3), [], baby)
        assert "Sucrose solution (neonatal)" in plan.non_pharmacological
        assert "Distraction techniques" not in plan.non_pharmacological

    def test_no_thermal_therapy_during_procedures(self, adult):
        plan = generate_analgesic_recommendations(
            make_assessment(score=3, context=PainContext.PROCEDURAL), [], adult,
        )
        assert "Heat therapy" not in plan.non_pharmacological

    def test_neuropathic_gets_tens(self, adult):
        plan = generate_analgesic_recommendations(
            make_assessment(score=3, pain_type=PainType.NEUROPATHIC), [], adult,
        )
        assert plan.non_pharmacological[-1].startswith("TENS")


class TestProceduralPlan:
    def setup_method(self):
        self.patient = make_patient(age=45)
        self.baseline = make_assessment(score=3, context=PainContext.PROCEDURAL)

    def _plan(self, procedure, flags=()):
        return generate_procedural_pain_plan(procedure, "", self.baseline, list(flags), self.patient)

    @pytest.mark.parametrize(
        "procedure, level",
        [
            (ProcedureType.BURN_DRESSING, PainSeverity.SEVERE),
            (ProcedureType.DEBRIDEMENT, PainSeverity.SEVERE),
            (ProcedureType.CHEST_TUBE, PainSeverity.SEVERE),
            (ProcedureType.BONE_MARROW_BIOPSY, PainSeverity.SEVERE),
            (ProcedureType.DRAIN_REMOVAL, PainSeverity.MILD),
            (ProcedureType.CATHETER_INSERTION, PainSeverity.MILD),
            (ProcedureType.WOUND_DRESSING, PainSeverity.MODERATE),
            (ProcedureType.OTHER, PainSeverity.MODERATE),
        ],
    )
    def test_anticipated_pain_lookup(self, procedure, level):
        assert anticipated_procedural_pain(procedure) == level

    def test_drain_removal_is_mild(self):
        plan = self._plan(ProcedureType.DRAIN_REMOVAL)
        assert plan.anticipated_pain_level == PainSeverity.MILD
        assert _classes(plan.pre_emptive_analgesia.recommendations) == [A.PARACETAMOL]
        assert plan.anxiolysis.recommended is False
        assert plan.intra_procedural_analgesia.systemic is False
        assert plan.intra_procedural_analgesia.systemic_options == []

    def test_burn_dressing_full_plan(self):
        plan = self._plan(ProcedureType.BURN_DRESSING)
        assert _classes(plan.pre_emptive_analgesia.recommendations) == [A.PARACETAMOL, A.STRONG_OPIOID]
        intra = plan.intra_procedural_analgesia
        assert _classes(intra.systemic_options) == [A.STRONG_OPIOID, A.KETAMINE, A.NITROUS_OXIDE]
        assert intra.topical is True and intra.topical_agent
        assert intra.regional is False and intra.regional_technique is None
        assert plan.anxiolysis.recommended is True
        assert "Emergence phenomena" in plan.monitoring_during
        assert "Oxygen saturation" in plan.monitoring_during
        assert "PRN analgesia availability" in plan.post_procedure_follow

    def test_moderate_procedure_uses_weak_opioid(self):
        plan = self._plan(ProcedureType.LUMBAR_PUNCTURE)
        assert _classes(plan.pre_emptive_analgesia.recommendations) == [A.PARACETAMOL, A.WEAK_OPIOID]
        assert plan.anxiolysis.recommended is True
        assert plan.intra_procedural_analgesia.systemic is True
        assert plan.monitoring_during == ["Pain score at regular intervals"]

    def test_contraindicated_opioid_left_out(self):
        flag = RiskFlag(
            id="x", level=RiskLevel.CONTRAINDICATED, category="Test", message="No strong opioids",
            affected_drug_classes=(A.STRONG_OPIOID,), recommendation="",
        )
        plan = self._plan(ProcedureType.DEBRIDEMENT, [flag])
        assert _classes(plan.pre_emptive_analgesia.recommendations) == [A.PARACETAMOL]
        assert _classes(plan.intra_procedural_analgesia.systemic_options) == [A.KETAMINE, A.NITROUS_OXIDE]
        assert plan.intra_procedural_analgesia.regional is True

    def test_procedural_non_pharmacological_extras(self):
        plan = self._plan(ProcedureType.SUTURING)
        assert plan.non_pharmacological[-2:] == [
            "Explanation and preparation before procedure",
            "Minimize procedure duration where possible",
        ]


class TestSimpleGuidance:
    def test_no_pain_no_procedure(self):
        assert get_simple_analgesia_guidance(0, False).startswith("No analgesia required")

    def test_no_pain_with_procedure_gets_paracetamol(self):
        assert "paracetamol" in get_simple_analgesia_guidance(0, True)

    def test_moderate(self):
        assert "tramadol" in get_simple_analgesia_guidance(5, False)

    def test_severe(self):
        assert get_simple_analgesia_guidance(9, False).startswith("Strong analgesia recommended")
