"""
Database models and schemas module.
Contains the SQLModel table definition and Pydantic schemas.
"""

from app.models.employee import (
    Department,
    Employee,
    EmployeeOptions,
    EmployeePayload,
    EmployeePublic,
    FieldCheckRequest,
    Gender,
    MessageResponse,
)

__all__ = [
    # Database Model
    "Employee",
    # Enums
    "Department",
    "Gender",
    # Request Schemas
    "EmployeePayload",
    "FieldCheckRequest",
    # Response Schemas
    "EmployeePublic",
    "EmployeeOptions",
    "MessageResponse",
]
