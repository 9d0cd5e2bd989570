"""
Shared API dependencies.
Contains reusable dependency functions for FastAPI endpoints.
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from app.core.database import get_session
from app.core.employee_store import EmployeeStore

# Database session dependency
# Use this type annotation in route handlers to get automatic session injection
SessionDep = Annotated[Session, Depends(get_session)]


def get_employee_store(session: SessionDep) -> EmployeeStore:
    return EmployeeStore(session)


StoreDep = Annotated[EmployeeStore, Depends(get_employee_store)]
