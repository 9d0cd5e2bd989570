from typing import Annotated, Any

from fastapi import APIRouter, Body

from app.api.dependencies import StoreDep
from app.core.config import settings
from app.core.exceptions import EmployeeNotFoundError, EmployeeValidationError
from app.core.logging import get_logger
from app.core.validation import (
    DEPARTMENTS,
    GENDERS,
    FieldFeedback,
    field_feedback,
    parse_employee,
)
from app.models.employee import (
    EmployeeOptions,
    EmployeePublic,
    FieldCheckRequest,
    MessageResponse,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/employees",
    tags=["employees"],
    responses={404: {"description": "Employee not found"}},
)

# Bodies are taken as plain JSON objects so invalid input is answered with
# the field messages below (400) rather than the framework's 422.
EmployeeBody = Annotated[dict[str, Any], Body()]


@router.get("", response_model=list[EmployeePublic])
def list_employees(store: StoreDep) -> list[EmployeePublic]:
    """
    List every employee record, in storage order.
    """
    employees = store.list_employees()
    logger.info(f"Retrieved {len(employees)} employee record(s)")
    return [EmployeePublic.from_employee(employee) for employee in employees]


@router.get("/options", response_model=EmployeeOptions)
def get_form_options() -> EmployeeOptions:
    """
    Departments and genders accepted by the validator, for the form's selects.
    """
    return EmployeeOptions(departments=DEPARTMENTS, genders=GENDERS)


@router.post("/validate", response_model=FieldFeedback)
def validate_employee_field(request: FieldCheckRequest) -> FieldFeedback:
    """
    Validate one form field as the user edits it.

    Uses the same rules as create and update. When the field is the date of
    birth, the derived age is returned so the form can fill its age input.

    Args:
        request: Field name, candidate value and the rest of the form
    """
    return field_feedback(request.field, request.value, record=request.record)


@router.get("/{employee_id}", response_model=EmployeePublic)
def get_employee(employee_id: str, store: StoreDep) -> EmployeePublic:
    """
    Get a single employee record.

    Raises:
        EmployeeNotFoundError: 404 if no employee has this ID
    """
    employee = store.get_employee(employee_id)
    if not employee:
        logger.warning(f"Employee {employee_id} not found")
        raise EmployeeNotFoundError()
    return EmployeePublic.from_employee(employee)


@router.post("", response_model=MessageResponse, status_code=201)
def create_employee(payload: EmployeeBody, store: StoreDep) -> MessageResponse:
    """
    Create an employee record.

    The payload is validated in full before anything is written; all field
    errors are returned together.

    Raises:
        EmployeeValidationError: 400 if any field is invalid
        ConflictError: 400 if the employee ID or email already exists
    """
    logger.info(f"Create requested for employee {payload.get('employeeId')}")
    employee = parse_employee(payload)
    store.create_employee(employee)
    return MessageResponse(message="Employee added successfully.")


@router.put("/{employee_id}", response_model=MessageResponse)
def update_employee(
    employee_id: str, payload: EmployeeBody, store: StoreDep
) -> MessageResponse:
    """
    Replace every mutable field of an employee record.

    The employee ID is taken from the path and cannot be changed; a body
    that names a different ID is rejected.

    Raises:
        EmployeeValidationError: 400 if any field is invalid
        ConflictError: 400 if the new email belongs to another employee
        EmployeeNotFoundError: 404 in strict mode when the employee is absent
    """
    logger.info(f"Update requested for employee {employee_id}")
    body_id = payload.get("employeeId")
    if body_id not in (None, "", employee_id):
        raise EmployeeValidationError({"employeeId": "Employee ID cannot be changed."})

    employee = parse_employee({**payload, "employeeId": employee_id})
    updated = store.update_employee(employee_id, employee)
    if not updated:
        logger.warning(f"Update matched no employee with ID {employee_id}")
        if settings.STRICT_NOT_FOUND:
            raise EmployeeNotFoundError()
    return MessageResponse(message="Employee updated successfully.")


@router.delete("/{employee_id}", response_model=MessageResponse)
def delete_employee(employee_id: str, store: StoreDep) -> MessageResponse:
    """
    Delete an employee record.

    Raises:
        EmployeeNotFoundError: 404 in strict mode when the employee is absent
    """
    logger.info(f"Delete requested for employee {employee_id}")
    deleted = store.delete_employee(employee_id)
    if not deleted:
        logger.warning(f"Delete matched no employee with ID {employee_id}")
        if settings.STRICT_NOT_FOUND:
            raise EmployeeNotFoundError()
    return MessageResponse(message="Employee deleted successfully.")
