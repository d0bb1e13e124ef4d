import pytest
from fastapi.testclient import TestClient

from painplan.main import app

BASE = "/api/v1/pain-plans"

PATIENT = {"id": "patient-42", "initials": "MK", "age": 58, "gender": "female"}


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestCreatePainPlan:
    def test_full_plan(self, client):
        response = client.post(f"{BASE}/", json={
            "patient": PATIENT,
            "assessment": {"score": 6, "pain_type": "mixed", "location": "sacrum"},
            "comorbidities": [{"condition": "hypertension", "severity": "moderate"}],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["patient"]["category"] == "adult"
        assert data["pain_assessment"]["severity"] == "moderate"
        assert data["risk_flags"][0]["category"] == "Cardiovascular"
        adjuncts = [r["class"] for r in data["analgesic_plan"]["adjunct_recommendations"]]
        assert adjuncts == ["adjuvant_anticonvulsant", "adjuvant_antidepressant"]
        assert data["red_flags"][0]["title"] == "Escalating Pain Despite Treatment"
        assert data["legal_disclaimer"]

    def test_vas_score_is_rescaled(self, client):
        response = client.post(f"{BASE}/", json={
            "patient": PATIENT,
            "assessment": {"score": 80, "scale_used": "VAS"},
        })
        assert response.status_code == 200
        data = response.json()
        assert data["pain_assessment"]["max_score"] == 100
        assert data["pain_assessment"]["severity"] == "severe"

    def test_procedural_context_returns_procedural_plan(self, client):
        response = client.post(f"{BASE}/", json={
            "patient": PATIENT,
            "assessment": {"score": 4, "pain_context": "procedural"},
            "procedure_type": "debridement",
        })
        assert response.status_code == 200
        assert response.json()["procedural_plan"]["anticipated_pain_level"] == "severe"

    def test_unknown_comorbidity_rejected(self, client):
        response = client.post(f"{BASE}/", json={
            "patient": PATIENT,
            "assessment": {"score": 3},
            "comorbidities": [{"condition": "gout"}],
        })
        assert response.status_code == 422

    def test_duplicate_comorbidity_rejected(self, client):
        response = client.post(f"{BASE}/", json={
            "patient": PATIENT,
            "assessment": {"score": 3},
            "comorbidities": [{"condition": "asthma"}, {"condition": "asthma"}],
        })
        assert response.status_code == 422

    def test_score_above_scale_maximum_rejected(self, client):
        response = client.post(f"{BASE}/", json={"patient": PATIENT, "assessment": {"score": 11}})
        assert response.status_code == 422

    def test_max_score_must_match_scale(self, client):
        response = client.post(f"{BASE}/", json={
            "patient": PATIENT,
            "assessment": {"score": 4, "scale_used": "NRS", "max_score": 5},
        })
        assert response.status_code == 422

    def test_negative_age_rejected(self, client):
        patient = dict(PATIENT, age=-1)
        response = client.post(f"{BASE}/", json={"patient": patient, "assessment": {"score": 3}})
        assert response.status_code == 422


class TestAuxiliaryEndpoints:
    def test_risk_flags(self, client):
        response = client.post(f"{BASE}/risk-flags", json={
            "patient": dict(PATIENT, age=72),
            "comorbidities": [{"condition": "ckd_stage_4"}],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["patient_category"] == "elderly"
        assert data["comorbidities_by_category"] == {
            "Renal": [{"condition": "ckd_stage_4", "severity": None, "notes": None}],
        }
        assert [f["category"] for f in data["risk_flags"]] == ["Renal", "Renal", "Age"]
        assert data["contraindicated_classes"] == ["nsaid_cox2_selective", "nsaid_non_selective"]
        assert "strong_opioid" in data["caution_classes"]

    def test_procedural_plan(self, client):
        response = client.post(f"{BASE}/procedural", json={
            "patient": PATIENT,
            "assessment": {"score": 2, "pain_context": "procedural"},
            "procedure_type": "drain_removal",
        })
        assert response.status_code == 200
        plan = response.json()["procedural_plan"]
        assert plan["anticipated_pain_level"] == "mild"
        assert [r["class"] for r in plan["pre_emptive_analgesia"]["recommendations"]] == ["paracetamol"]

    def test_comorbidity_options(self, client):
        response = client.get(f"{BASE}/comorbidities")
        assert response.status_code == 200
        renal = response.json()["Renal"]
        assert renal[0]["condition"] == "ckd_stage_1"
        assert renal[0]["display_name"] == "CKD Stage 1"

    def test_guidance(self, client):
        response = client.get(f"{BASE}/guidance", params={"score": 0, "procedural_pain_anticipated": True})
        assert response.status_code == 200
        assert "paracetamol" in response.json()["guidance"]

    def test_dressing_checklist(self, client):
        response = client.get(
            f"{BASE}/dressing-checklist",
            params={"pain_score": 8, "wound_phase": "extension", "has_opioids": True},
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["safety_checks"]) == 7
        assert "Ensure adequate analgesia has been administered" in data["safety_checks"]
        assert "Monitor sedation level for 2-4 hours post-opioid" in data["post_dressing_monitoring"]
        assert data["post_dressing_monitoring"][-1] == "Provide clear escalation instructions to patient/carer"

    def test_dressing_checklist_requires_score(self, client):
        assert client.get(f"{BASE}/dressing-checklist").status_code == 422

    def test_guidance_score_out_of_range(self, client):
        assert client.get(f"{BASE}/guidance", params={"score": 12}).status_code == 422

    def test_reference_tables(self, client):
        response = client.get(f"{BASE}/reference")
        assert response.status_code == 200
        data = response.json()
        assert len(data["analgesic_classes"]) == 14
        assert data["analgesic_classes"]["ketamine"]["common_routes"] == ["intravenous", "intramuscular", "intranasal"]
        assert data["procedures"]["drain_removal"]["typical_duration"] == "5-10 minutes"
        assert data["pain_scales"]["VAS"]["max_score"] == 100
        assert data["sedation_scales"]["POSS"]["levels"][0]["score"] == "S"
        assert "Swaddling (neonatal)" in data["non_pharmacological"]
