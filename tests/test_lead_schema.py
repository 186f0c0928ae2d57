from datetime import UTC, datetime

import pytest

from haloride.core.errors import LeadValidationError
from haloride.schemas.lead import GRADE_OPTIONS, LEAD_FIELD_RULES, LeadRead, validate_lead_input


def valid_input(**overrides):
    data = {
        "name": "Priya Sharma",
        "grade": "Lower primary",
        "schoolName": "Green Valley School",
        "city": "Pune",
        "mobileNumber": "9876543210",
        "email": "priya@example.com",
    }
    data.update(overrides)
    return data


def errors_for(data, **kwargs):
    with pytest.raises(LeadValidationError) as exc_info:
        validate_lead_input(data, **kwargs)
    return exc_info.value.errors


def test_valid_input_is_accepted():
    lead = validate_lead_input(valid_input())
    assert lead.name == "Priya Sharma"
    assert lead.school_name == "Green Valley School"
    assert lead.mobile_number == "9876543210"


@pytest.mark.parametrize("field", ["name", "city"])
@pytest.mark.parametrize("value", ["Priya 2", "Pune!", "St. Mary", "O'Neil"])
def test_name_and_city_reject_digits_and_punctuation(field, value):
    errors = errors_for(valid_input(**{field: value}))
    assert errors == {field: "Only alphabets allowed"}


def test_name_and_city_require_two_characters():
    errors = errors_for(valid_input(name="P", city="X"))
    assert errors["name"] == "Name must be at least 2 characters"
    assert errors["city"] == "City must be at least 2 characters"


@pytest.mark.parametrize("value", ["987654321", "98765432100", "98765abcde", "+919876543210", "98765 43210"])
def test_mobile_number_must_be_ten_digits(value):
    errors = errors_for(valid_input(mobileNumber=value))
    assert errors == {"mobileNumber": "Must be exactly 10 digits"}


def test_mobile_number_rejects_non_ascii_digits():
    errors = errors_for(valid_input(mobileNumber="٩٨٧٦٥٤٣٢١٠"))
    assert "mobileNumber" in errors


def test_empty_email_is_absent():
    lead = validate_lead_input(valid_input(email=""))
    assert lead.email is None


def test_invalid_email_rejected():
    errors = errors_for(valid_input(email="not-an-email"))
    assert errors == {"email": "Please enter a valid email address"}


def test_simple_email_accepted():
    assert validate_lead_input(valid_input(email="a@b.com")).email == "a@b.com"


@pytest.mark.parametrize("value", ["Rohan <a@b.com>", "<a@b.com>"])
def test_display_name_email_rejected(value):
    errors = errors_for(valid_input(email=value))
    assert errors == {"email": "Please enter a valid email address"}


def test_padded_optional_values_are_stripped():
    lead = validate_lead_input(valid_input(email=" a@b.com ", schoolName=" Green Valley School "))
    assert lead.email == "a@b.com"
    assert lead.school_name == "Green Valley School"


def test_blank_school_name_is_absent():
    assert validate_lead_input(valid_input(schoolName="   ")).school_name is None
    data = valid_input()
    del data["schoolName"]
    assert validate_lead_input(data).school_name is None


def test_school_name_rejects_digits():
    errors = errors_for(valid_input(schoolName="School 42"))
    assert errors == {"schoolName": "Only alphabets allowed"}


def test_missing_required_fields_are_reported_by_client_key():
    errors = errors_for({"email": "a@b.com"})
    assert errors == {
        "name": "Name is required",
        "grade": "Please select a grade",
        "city": "City is required",
        "mobileNumber": "Mobile number is required",
    }


def test_non_string_value_rejected():
    errors = errors_for(valid_input(mobileNumber=9876543210))
    assert errors == {"mobileNumber": "Must be text"}


def test_non_mapping_body_rejected():
    assert errors_for(["not", "a", "mapping"]) == {"body": "Expected an object of lead fields"}


def test_grade_restricted_only_when_choices_given():
    assert validate_lead_input(valid_input(grade="Kindergarten")).grade == "Kindergarten"
    errors = errors_for(valid_input(grade="Class 5"), grade_choices=GRADE_OPTIONS)
    assert errors == {"grade": "Please select a valid grade"}
    assert validate_lead_input(valid_input(grade="Higher secondary"), grade_choices=GRADE_OPTIONS).grade == "Higher secondary"


def test_legacy_field_names_accepted():
    data = valid_input()
    data["parentName"] = data.pop("name")
    data["childGrade"] = data.pop("grade")
    lead = validate_lead_input(data)
    assert lead.name == "Priya Sharma"
    assert lead.grade == "Lower primary"


def test_rules_cover_every_input_field():
    assert set(LEAD_FIELD_RULES) == {"name", "grade", "school_name", "city", "mobile_number", "email"}


def test_lead_read_translates_storage_row_to_client_shape():
    row = {
        "id": 7,
        "name": "Priya Sharma",
        "grade": "Lower primary",
        "school_name": None,
        "city": "Pune",
        "mobile_number": "9876543210",
        "email": "",
        "created_at": "2025-03-01T10:00:00Z",
    }
    lead = LeadRead.model_validate(row)
    assert lead.created_at == datetime(2025, 3, 1, 10, 0, tzinfo=UTC)
    client = lead.to_client()
    assert client["mobileNumber"] == "9876543210"
    assert client["createdAt"].startswith("2025-03-01T10:00:00")
    assert "schoolName" not in client
    assert "email" not in client
    assert "mobile_number" not in client
