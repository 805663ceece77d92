import pytest
from fastapi import HTTPException

from app.schemas.profile_schema import ExperienceCreate
from app.services.profile_service import build_profile_fields, normalize_user_id, split_skills
from app.schemas.profile_schema import ProfileUpsert
from app.utils.validators import (
    EDUCATION_CHECKS,
    PROFILE_CHECKS,
    FieldCheck,
    ensure_valid,
    has_items,
    not_empty,
    run_checks,
)


@pytest.mark.parametrize("value", [None, "", "   ", [], {}])
def test_not_empty_rejects_blank_values(value):
    assert not_empty(value) is False


@pytest.mark.parametrize("value", ["x", " dev ", ["a"], 0, False])
def test_not_empty_accepts_values(value):
    assert not_empty(value) is True


def test_has_items():
    assert has_items("node, css")
    assert not has_items(" , ,")
    assert not has_items(None)


def test_run_checks_returns_every_failure_in_order():
    errors = run_checks({}, EDUCATION_CHECKS)
    assert [e["param"] for e in errors] == ["school", "degree", "fieldofstudy", "from"]
    assert all(e["location"] == "body" for e in errors)


def test_run_checks_passes_valid_body():
    assert run_checks({"status": "Dev", "skills": "python"}, PROFILE_CHECKS) == []


def test_custom_check():
    checks = (FieldCheck("age", lambda v: isinstance(v, int) and v > 0, "Age must be positive"),)
    errors = run_checks({"age": -1}, checks)
    assert errors == [{"value": -1, "msg": "Age must be positive", "param": "age", "location": "body"}]


def test_ensure_valid_raises_400_with_errors():
    payload = ExperienceCreate(title="Engineer", company="Acme")

    with pytest.raises(HTTPException) as exc_info:
        ensure_valid(payload, (FieldCheck("from", not_empty, "From date is required"),))

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail["errors"][0]["param"] == "from"


def test_split_skills():
    assert split_skills("node, css ") == ["node", "css"]
    assert split_skills(" python ,, go") == ["python", "go"]


def test_build_profile_fields_only_includes_sent_fields():
    payload = ProfileUpsert(status="Dev", skills="a,b", youtube="https://youtube.com/x")
    fields = build_profile_fields(payload)

    assert fields == {
        "status": "Dev",
        "skills": ["a", "b"],
        "social": {"youtube": "https://youtube.com/x"},
    }


def test_normalize_user_id():
    canonical = "0f8fad5b-d9cb-469f-a165-70867728950e"
    assert normalize_user_id(canonical) == canonical
    assert normalize_user_id("0F8FAD5BD9CB469FA16570867728950E") == canonical
    assert normalize_user_id("{0f8fad5b-d9cb-469f-a165-70867728950e}") == canonical
    assert normalize_user_id("5d7a514b5d2c12c7449be042") is None
