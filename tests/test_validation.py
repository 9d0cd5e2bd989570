"""
Tests for employee field validation.

Covers single-field rules, all-errors payload validation, the
department/other-department cross-field rule and dob-derived age.
"""

from datetime import date, datetime

import pytest

from app.core.exceptions import EmployeeValidationError
from app.core.validation import (
    calculate_age,
    field_feedback,
    parse_date,
    parse_employee,
    validate_employee,
    validate_field,
)
from app.models.employee import Department, Gender

NOW = datetime(2026, 10, 19, 12, 0, 0)

REQUIRED_FIELDS = [
    ("firstName", "First Name is required."),
    ("lastName", "Last Name is required."),
    ("dob", "Date of Birth is required."),
    ("age", "Age is required."),
    ("gender", "Gender is required."),
    ("email", "Email is required."),
    ("phone", "Phone number is required."),
    ("employeeId", "Employee ID is required."),
    ("department", "Department is required."),
    ("dateOfJoining", "Date of Joining is required."),
    ("role", "Role is required."),
]


def test_valid_payload_passes(make_payload):
    """Test that a complete, well-formed payload has no errors."""
    result = validate_employee(make_payload(), now=NOW)

    assert result.is_valid
    assert result.errors == {}
    assert result.first_error is None


@pytest.mark.parametrize("field,message", REQUIRED_FIELDS)
def test_missing_required_field_is_reported(make_payload, field, message):
    """Test that a missing required field appears in the error set."""
    # Arrange
    payload = make_payload()
    del payload[field]

    # Act
    result = validate_employee(payload, now=NOW)

    # Assert
    assert not result.is_valid
    assert result.errors[field] == message


@pytest.mark.parametrize("field", [name for name, _ in REQUIRED_FIELDS])
def test_empty_string_counts_as_missing(make_payload, field):
    result = validate_employee(make_payload(**{field: ""}), now=NOW)

    assert field in result.errors


def test_all_errors_are_collected(make_payload):
    """Test that validation reports every invalid field, not just the first."""
    payload = make_payload(
        firstName="Jo",
        email="not-an-email",
        phone="12",
        employeeId="bad",
        gender="Unknown",
    )

    result = validate_employee(payload, now=NOW)

    assert set(result.errors) == {
        "firstName",
        "email",
        "phone",
        "employeeId",
        "gender",
    }
    # Errors follow the form's field order
    assert result.first_error == "First Name should be at least 4 characters long."


def test_optional_middle_name_may_be_absent(make_payload):
    payload = make_payload()
    del payload["middleName"]

    assert validate_employee(payload, now=NOW).is_valid


@pytest.mark.parametrize(
    "employee_id,valid",
    [
        ("AB1-CD2-EF3-GH4", True),
        ("abc-123-xyz-789", True),
        ("AB1-CD2-EF3", False),
        ("ab1_cd2_ef3_gh4", False),
        ("AB1-CD2-EF3-GH45", False),
        ("AB!-CD2-EF3-GH4", False),
    ],
)
def test_employee_id_format(employee_id, valid):
    error = validate_field("employeeId", employee_id, now=NOW)

    assert (error is None) is valid
    if not valid:
        assert error.startswith("Employee ID must be in the format xxx-xxx-xxx-xxx")


def test_employee_id_length_limit():
    error = validate_field("employeeId", "A" * 21, now=NOW)

    assert error == "Employee ID must not exceed 20 characters."


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("firstName", "J0hn", "First Name should only contain alphabets."),
        ("firstName", "Jon", "First Name should be at least 4 characters long."),
        ("firstName", "Mary Ann", "First Name should only contain alphabets."),
        ("middleName", "J.", "Middle Name should only contain alphabets."),
        ("lastName", "O'Neil", "Last Name should only contain alphabets."),
        ("lastName", "Doe", "Last Name should be at least 4 characters long."),
        ("phone", "555-0100", "Phone number should only contain digits."),
        ("phone", "+1 555", "Phone number should be at least 7 digits long."),
        ("email", "jane.doeson", "Email must be a valid email."),
        ("age", 17, "Age must be at least 18."),
        ("age", 81, "Age must not exceed 80."),
        ("age", "thirty", "Age must be a number."),
        ("age", 30.5, "Age must be a number."),
        ("department", "Others", "Department must be one of HR, Engineering, Sales, Other."),
        ("gender", "male", "Gender must be one of Male, Female, Other."),
        ("role", 42, "Role must be text."),
    ],
)
def test_field_rule_messages(field, value, message):
    assert validate_field(field, value, now=NOW) == message


@pytest.mark.parametrize(
    "field,value",
    [
        ("firstName", "Jane"),
        ("middleName", ""),
        ("lastName", "Van Dyke"),
        ("phone", "+91 98765#43210"),
        ("age", 18),
        ("age", 80),
        ("age", "36"),
        ("department", "Other"),
        ("gender", "Other"),
        ("role", "Anything goes: QA/Release #2"),
    ],
)
def test_field_rule_accepts(field, value):
    assert validate_field(field, value, now=NOW) is None


@pytest.mark.parametrize(
    "dob,message",
    [
        ("2015-01-01", "Date of Birth must make the employee at least 18 years old."),
        ("1930-06-01", "Date of Birth must make the employee not older than 80 years."),
        ("not-a-date", "Date of Birth must be a valid date."),
    ],
)
def test_dob_outside_age_range_is_rejected(make_payload, dob, message):
    """Test that a dob giving an age outside 18-80 is rejected."""
    result = validate_employee(make_payload(dob=dob), now=NOW)

    assert result.errors["dob"] == message


def test_dob_bounds_use_365_day_years(make_payload):
    # 18 * 365 days before NOW is 2008-10-23 12:00; leap days make that
    # later than the calendar 18th birthday cutoff
    assert validate_field("dob", "2008-10-22", now=NOW) is None
    assert validate_field("dob", "2008-10-24", now=NOW) == (
        "Date of Birth must make the employee at least 18 years old."
    )
    assert calculate_age(date(2008, 10, 22), NOW.date()) == 17

    # The age rule checks the calendar age derived from dob as well
    result = validate_employee(make_payload(dob="2008-10-22", age=18), now=NOW)

    assert result.errors == {"age": "Age must be at least 18."}


def test_age_rule_checks_age_derived_from_dob():
    assert validate_field("age", 80, record={"dob": "1945-10-20"}, now=NOW) is None
    assert validate_field("age", 80, record={"dob": "1945-10-19"}, now=NOW) == (
        "Age must not exceed 80."
    )


@pytest.mark.parametrize(
    "age,message",
    [
        (10**400, "Age must not exceed 80."),
        ("1" * 400, "Age must be a number."),
        ("1e400", "Age must be a number."),
    ],
)
def test_huge_age_is_reported_not_raised(age, message):
    assert validate_field("age", age, now=NOW) == message


def test_date_of_joining_rules():
    assert validate_field("dateOfJoining", "2026-10-20", now=NOW) == (
        "Date of Joining cannot be in the future."
    )
    assert validate_field("dateOfJoining", "1940-01-01", now=NOW) == (
        "Date of Joining must not be older than 80 years."
    )
    assert validate_field("dateOfJoining", "2026-10-19", now=NOW) is None


def test_other_department_required_when_department_is_other(make_payload):
    """Test the cross-field rule between department and otherDepartment."""
    result = validate_employee(
        make_payload(department="Other", otherDepartment=""), now=NOW
    )

    assert result.errors == {"otherDepartment": "Other Department is required."}


def test_other_department_whitespace_only_is_rejected(make_payload):
    result = validate_employee(
        make_payload(department="Other", otherDepartment="   "), now=NOW
    )

    assert "otherDepartment" in result.errors


def test_other_department_ignored_for_listed_department(make_payload):
    result = validate_employee(
        make_payload(department="HR", otherDepartment=None), now=NOW
    )

    assert result.is_valid


def test_single_field_check_uses_record_for_cross_field_rule():
    error = validate_field("otherDepartment", "", record={"department": "Other"}, now=NOW)
    assert error == "Other Department is required."

    assert validate_field("otherDepartment", "", record={"department": "Sales"}) is None


def test_unknown_field():
    assert validate_field("salary", 1000, now=NOW) == "Unknown field: salary."


@pytest.mark.parametrize(
    "dob,today,expected",
    [
        (date(1990, 5, 15), date(2026, 10, 19), 36),
        (date(1990, 10, 19), date(2026, 10, 19), 36),
        (date(1990, 10, 20), date(2026, 10, 19), 35),
        (date(2000, 2, 29), date(2026, 2, 28), 25),
    ],
)
def test_calculate_age(dob, today, expected):
    assert calculate_age(dob, today) == expected


def test_parse_date_accepts_browser_timestamps():
    assert parse_date("1990-05-15") == date(1990, 5, 15)
    assert parse_date("1990-05-15T18:30:00.000Z") == date(1990, 5, 15)
    assert parse_date(19900515) is None
    assert parse_date("15/05/1990") is None


def test_field_feedback_derives_age_from_dob():
    """Test that editing dob returns the age the form should display."""
    feedback = field_feedback("dob", "1990-10-20", now=NOW)

    assert feedback.valid is True
    assert feedback.message is None
    assert feedback.age == 35


def test_field_feedback_reports_invalid_dob_with_age():
    feedback = field_feedback("dob", "2015-01-01", now=NOW)

    assert feedback.valid is False
    assert feedback.message == "Date of Birth must make the employee at least 18 years old."
    assert feedback.age == 11


def test_field_feedback_has_no_age_for_other_fields():
    feedback = field_feedback("firstName", "Jane", now=NOW)

    assert feedback.valid is True
    assert feedback.age is None


def test_parse_employee_returns_typed_payload(make_payload):
    payload = parse_employee(
        make_payload(dob="1990-05-15T00:00:00.000Z", age="36", otherDepartment="Ops"),
        now=NOW,
    )

    assert payload.employee_id == "AB1-CD2-EF3-GH4"
    assert payload.full_name == "Jane Marie Doeson"
    assert payload.department is Department.ENGINEERING
    assert payload.gender is Gender.FEMALE
    assert payload.dob == date(1990, 5, 15)
    # Only kept when the department is Other
    assert payload.resolved_other_department is None


def test_parse_employee_keeps_other_department(make_payload):
    payload = parse_employee(
        make_payload(department="Other", otherDepartment="Research", middleName=""),
        now=NOW,
    )

    assert payload.full_name == "Jane Doeson"
    assert payload.resolved_other_department == "Research"


def test_parse_employee_raises_with_all_errors(make_payload):
    with pytest.raises(EmployeeValidationError) as exc_info:
        parse_employee(make_payload(email="", role=""), now=NOW)

    assert exc_info.value.errors == {
        "email": "Email is required.",
        "role": "Role is required.",
    }
    assert exc_info.value.message == "Email is required."
