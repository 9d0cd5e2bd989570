"""
Employee database model and schemas for Employee Records Service.

The table stores one denormalized row per employee: the name parts
submitted by the form are joined into a single full name, and age is
derived from the date of birth when the row is written.
"""

from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import Field, SQLModel


class Department(str, Enum):
    """Departments offered by the employee form."""

    HR = "HR"
    ENGINEERING = "Engineering"
    SALES = "Sales"
    OTHER = "Other"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


# Database Model


class Employee(SQLModel, table=True):
    """
    ORM model for the employees table.

    employee_id and email are unique; the database constraints are what
    reject duplicates, so concurrent creates cannot both succeed.
    """

    __tablename__ = "employees"

    employee_id: str = Field(
        primary_key=True, max_length=20, description="Caller-supplied employee ID"
    )
    name: str = Field(max_length=255, description="Full name for display")
    email: str = Field(
        index=True, unique=True, max_length=255, description="Employee email"
    )
    phone: str = Field(max_length=50)
    department: str = Field(max_length=50, description="Department name")
    other_department: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Free-text department, only set when department is Other",
    )
    date_of_joining: date = Field(nullable=False)
    role: str = Field(max_length=255, description="Job role")
    dob: date = Field(nullable=False, description="Date of birth")
    age: int = Field(description="Age derived from dob at write time")
    gender: str = Field(max_length=10)


# Request Schemas


class EmployeePayload(BaseModel):
    """
    Typed view of a create/update body that has already passed validation.

    Field names follow the form's camelCase wire names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    employee_id: str
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    email: str
    phone: str
    department: Department
    other_department: Optional[str] = None
    date_of_joining: date
    role: str
    dob: date
    gender: Gender

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(part for part in parts if part)

    @property
    def resolved_other_department(self) -> Optional[str]:
        if self.department is Department.OTHER:
            return self.other_department
        return None


class FieldCheckRequest(BaseModel):
    """Single-field validation request sent while the form is being edited."""

    field: str
    value: Any = None
    record: dict[str, Any] = {}


# Response Schemas


class EmployeePublic(BaseModel):
    """Schema for employee responses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    employee_id: str
    name: str
    email: str
    phone: str
    department: str
    other_department: Optional[str] = None
    department_label: str
    date_of_joining: date
    role: str
    dob: date
    age: int
    gender: str

    @classmethod
    def from_employee(cls, employee: Employee) -> "EmployeePublic":
        label = employee.department
        if employee.department == Department.OTHER.value and employee.other_department:
            label = employee.other_department
        return cls(
            employee_id=employee.employee_id,
            name=employee.name,
            email=employee.email,
            phone=employee.phone,
            department=employee.department,
            other_department=employee.other_department,
            department_label=label,
            date_of_joining=employee.date_of_joining,
            role=employee.role,
            dob=employee.dob,
            age=employee.age,
            gender=employee.gender,
        )


class EmployeeOptions(BaseModel):
    """Choices for the form's select inputs."""

    departments: list[str]
    genders: list[str]


class MessageResponse(BaseModel):
    message: str
