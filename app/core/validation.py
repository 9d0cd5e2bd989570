"""
Employee field validation.

This is the single rule set for employee payloads. The API applies it to
every write, and publishes it through the field-check endpoint so the form
gives the same feedback the server will enforce.

Each rule returns an error message or None. Only the first violated rule
of a field is reported; full-payload validation collects one message for
every invalid field instead of stopping at the first.
"""

import re
from collections.abc import Callable, Mapping
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import EmployeeValidationError
from app.models.employee import Department, EmployeePayload, Gender

MIN_AGE = 18
MAX_AGE = 80
MAX_EMPLOYEE_ID_LENGTH = 20

NAME_PATTERN = re.compile(r"^[A-Za-z]+$")
MIDDLE_NAME_PATTERN = re.compile(r"^[A-Za-z]*$")
LAST_NAME_PATTERN = re.compile(r"^[A-Za-z ]+$")
PHONE_PATTERN = re.compile(r"^[+#\d\s]+$")
EMPLOYEE_ID_PATTERN = re.compile(r"^[A-Za-z0-9]{3}-[A-Za-z0-9]{3}-[A-Za-z0-9]{3}-[A-Za-z0-9]{3}$")

DEPARTMENTS = [department.value for department in Department]
GENDERS = [gender.value for gender in Gender]

# Wire field name -> label used in messages, in form order
FIELD_LABELS = {
    "firstName": "First Name",
    "middleName": "Middle Name",
    "lastName": "Last Name",
    "dob": "Date of Birth",
    "age": "Age",
    "gender": "Gender",
    "email": "Email",
    "phone": "Phone number",
    "employeeId": "Employee ID",
    "department": "Department",
    "otherDepartment": "Other Department",
    "dateOfJoining": "Date of Joining",
    "role": "Role",
}

OPTIONAL_FIELDS = {"middleName", "otherDepartment"}

_date_adapter = TypeAdapter(date)


class ValidationResult(BaseModel):
    """Outcome of validating a whole payload; empty errors means valid."""

    errors: dict[str, str] = {}

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> Optional[str]:
        return next(iter(self.errors.values()), None)


class FieldFeedback(BaseModel):
    """Outcome of validating one field while the form is being edited."""

    field: str
    valid: bool
    message: Optional[str] = None
    age: Optional[int] = None


def parse_date(value: Any) -> Optional[date]:
    """Parse a date or ISO date/datetime string, returning None if it can't."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return _date_adapter.validate_python(value)
    except PydanticValidationError:
        pass
    # Browsers may send full timestamps such as 2000-01-31T18:30:00.000Z
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def calculate_age(dob: date, today: date) -> int:
    """Age in whole years on `today`, calendar-accurate."""
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age


def years_before(now: datetime, years: int) -> datetime:
    """`years` 365-day years before `now`, ignoring leap days."""
    return now - timedelta(days=years * 365)


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def _as_midnight(value: date) -> datetime:
    return datetime.combine(value, time.min)


# Field rules


def _check_text(label: str, value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return f"{label} must be text."
    return None


def check_first_name(value: Any, record: Mapping[str, Any], now: datetime) -> Optional[str]:
    if not NAME_PATTERN.match(value):
        return "First Name should only contain alphabets."
    if len(value) < 4:
        return "First Name should be at least 4 characters long."
    return None


def check_middle_name(value: Any, record: Mapping[str, Any], now: datetime) -> Optional[str]:
    if not MIDDLE_NAME_PATTERN.match(value):
        return "Middle Name should only contain alphabets."
    return None


def check_last_name(value: Any, record: Mapping[str, Any], now: datetime) -> Optional[str]:
    if not LAST_NAME_PATTERN.match(value):
        return "Last Name should only contain alphabets."
    if len(value) < 4:
        return "Last Name should be at least 4 characters long."
    return None


def check_phone(value: Any, record: Mapping[str, Any], now: datetime) -> Optional[str]:
    if not PHONE_PATTERN.match(value):
        return "Phone number should only contain digits."
    if len(value) < 7:
        return "Phone number should be at least 7 digits long."
    return None


def check_employee_id(value: Any, record: Mapping[str, Any], now: datetime) -> Optional[str]:
    if len(value) > MAX_EMPLOYEE_ID_LENGTH:
        return f"Employee ID must not exceed {MAX_EMPLOYEE_ID_LENGTH} characters."
    if not EMPLOYEE_ID_PATTERN.match(value):
        return (
            "Employee ID must be in the format xxx-xxx-xxx-xxx and only contain "
            "alphabets, digits, and dashes."
        )
    return None


def check_email(value: Any, record: Mapping[str, Any], now: datetime) -> Optional[str]:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return "Email must be a valid email."
    return None


def check_dob(value: Any, record: Mapping[str, Any], now: datetime) -> Optional[str]:
    dob = parse_date(value)
    if dob is None:
        return "Date of Birth must be a valid date."
    born = _as_midnight(dob)
    if not born < years_before(now, MIN_AGE):
        return "Date of Birth must make the employee at least 18 years old."
    if not born > years_before(now, MAX_AGE):
        return "Date of Birth must make the employee not older than 80 years."
    return None


def check_age(value: Any, record: Mapping[str, Any], now: datetime) -> Optional[str]:
    if isinstance(value, bool):
        return "Age must be a number."
    if not isinstance(value, int):
        try:
            age = float(value)
        except (TypeError, ValueError, OverflowError):
            return "Age must be a number."
        if not age.is_integer():
            return "Age must be a number."
        value = age
    error = _check_age_range(value)
    if error:
        return error
    # The stored age is derived from dob, so it has to satisfy the same range
    dob = parse_date(record.get("dob"))
    if dob is not None:
        return _check_age_range(calculate_age(dob, now.date()))
    return None


def _check_age_range(age: float) -> Optional[str]:
    if age < MIN_AGE:
        return f"Age must be at least {MIN_AGE}."
    if age > MAX_AGE:
        return f"Age must not exceed {MAX_AGE}."
    return None


def check_date_of_joining(value: Any, record: Mapping[str, Any], now: datetime) -> Optional[str]:
    joined = parse_date(value)
    if joined is None:
        return "Date of Joining must be a valid date."
    joined_at = _as_midnight(joined)
    if not joined_at < now:
        return "Date of Joining cannot be in the future."
    if not joined_at > years_before(now, MAX_AGE):
        return "Date of Joining must not be older than 80 years."
    return None


def check_department(value: Any, record: Mapping[str, Any], now: datetime) -> Optional[str]:
    if value not in DEPARTMENTS:
        return f"Department must be one of {', '.join(DEPARTMENTS)}."
    return None


def check_gender(value: Any, record: Mapping[str, Any], now: datetime) -> Optional[str]:
    if value not in GENDERS:
        return f"Gender must be one of {', '.join(GENDERS)}."
    return None


def check_role(value: Any, record: Mapping[str, Any], now: datetime) -> Optional[str]:
    return None


Rule = Callable[[Any, Mapping[str, Any], datetime], Optional[str]]

FIELD_RULES: dict[str, Rule] = {
    "firstName": check_first_name,
    "middleName": check_middle_name,
    "lastName": check_last_name,
    "dob": check_dob,
    "age": check_age,
    "gender": check_gender,
    "email": check_email,
    "phone": check_phone,
    "employeeId": check_employee_id,
    "department": check_department,
    "dateOfJoining": check_date_of_joining,
    "role": check_role,
}

TEXT_FIELDS = {
    "firstName",
    "middleName",
    "lastName",
    "email",
    "phone",
    "employeeId",
    "otherDepartment",
    "role",
}


def _check_other_department(value: Any, record: Mapping[str, Any]) -> Optional[str]:
    # Only meaningful when the department is Other; otherwise the value is discarded
    if record.get("department") != Department.OTHER.value:
        return None
    if _is_missing(value) or (isinstance(value, str) and not value.strip()):
        return "Other Department is required."
    return _check_text(FIELD_LABELS["otherDepartment"], value)


def validate_field(
    name: str,
    value: Any,
    record: Optional[Mapping[str, Any]] = None,
    now: Optional[datetime] = None,
) -> Optional[str]:
    """
    Validate a single field.

    Args:
        name: Wire field name, e.g. "employeeId"
        value: Candidate value
        record: Other values of the form, needed by cross-field rules
        now: Reference time (defaults to the current time)

    Returns:
        The violation message, or None if the value is acceptable
    """
    record = record or {}
    now = now or datetime.now()

    if name not in FIELD_LABELS:
        return f"Unknown field: {name}."

    label = FIELD_LABELS[name]

    if name == "otherDepartment":
        return _check_other_department(value, record)

    if _is_missing(value):
        if name in OPTIONAL_FIELDS:
            return None
        return f"{label} is required."

    if name in TEXT_FIELDS:
        error = _check_text(label, value)
        if error:
            return error

    return FIELD_RULES[name](value, record, now)


def validate_employee(
    payload: Mapping[str, Any], now: Optional[datetime] = None
) -> ValidationResult:
    """
    Validate a whole employee payload, collecting every invalid field.

    Errors are ordered like the form's fields, so the first error is stable.
    """
    now = now or datetime.now()
    errors: dict[str, str] = {}
    for name in FIELD_LABELS:
        error = validate_field(name, payload.get(name), record=payload, now=now)
        if error:
            errors[name] = error
    return ValidationResult(errors=errors)


def field_feedback(
    name: str,
    value: Any,
    record: Optional[Mapping[str, Any]] = None,
    now: Optional[datetime] = None,
) -> FieldFeedback:
    """
    Validate one field and, for a date of birth, report the derived age.

    The form fills its age input from the returned age instead of computing
    it itself.
    """
    now = now or datetime.now()
    message = validate_field(name, value, record=record, now=now)
    age = None
    if name == "dob":
        dob = parse_date(value)
        if dob is not None:
            derived = calculate_age(dob, now.date())
            age = derived if derived >= 0 else None
    return FieldFeedback(field=name, valid=message is None, message=message, age=age)


def parse_employee(
    payload: Mapping[str, Any], now: Optional[datetime] = None
) -> EmployeePayload:
    """
    Validate a create/update body and convert it to a typed payload.

    Raises:
        EmployeeValidationError: with one message per invalid field
    """
    result = validate_employee(payload, now=now)
    if not result.is_valid:
        raise EmployeeValidationError(result.errors)

    data = dict(payload)
    data["dob"] = parse_date(payload["dob"])
    data["dateOfJoining"] = parse_date(payload["dateOfJoining"])
    if data.get("department") != Department.OTHER.value:
        data["otherDepartment"] = None
    return EmployeePayload.model_validate(data)
