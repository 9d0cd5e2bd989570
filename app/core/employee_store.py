"""
Employee record store.

Each operation is a single SQL statement. Uniqueness of employee ID and
email is enforced by the table's constraints, so a duplicate create fails
inside the INSERT itself rather than after a separate existence check.
"""

from datetime import date
from typing import Any, NoReturn, Optional

from sqlalchemy import delete, insert, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from app.core.exceptions import ConflictError, StorageFault
from app.core.logging import get_logger
from app.core.validation import calculate_age
from app.models.employee import Employee, EmployeePayload

logger = get_logger(__name__)


def build_row(payload: EmployeePayload, today: Optional[date] = None) -> dict[str, Any]:
    """
    Column values for a validated payload, minus the employee ID.

    The full name and age are derived here so every write stores values
    consistent with the submitted name parts and date of birth.
    """
    today = today or date.today()
    return {
        "name": payload.full_name,
        "email": payload.email,
        "phone": payload.phone,
        "department": payload.department.value,
        "other_department": payload.resolved_other_department,
        "date_of_joining": payload.date_of_joining,
        "role": payload.role,
        "dob": payload.dob,
        "age": calculate_age(payload.dob, today),
        "gender": payload.gender.value,
    }


class EmployeeStore:
    """CRUD access to the employees table through one session."""

    def __init__(self, session: Session):
        self.session = session

    def list_employees(self) -> list[Employee]:
        try:
            return list(self.session.exec(select(Employee)).all())
        except SQLAlchemyError as e:
            self._fail("list employees", e)

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        try:
            return self.session.get(Employee, employee_id)
        except SQLAlchemyError as e:
            self._fail(f"fetch employee {employee_id}", e)

    def create_employee(
        self, payload: EmployeePayload, today: Optional[date] = None
    ) -> Employee:
        """
        Insert a new employee.

        Raises:
            ConflictError: if the employee ID or email is already taken
            StorageFault: on any other database failure
        """
        row = build_row(payload, today)
        statement = insert(Employee).values(employee_id=payload.employee_id, **row)
        try:
            self.session.execute(statement)
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.warning(
                f"Duplicate employee ID or email on create: {payload.employee_id}"
            )
            raise ConflictError()
        except SQLAlchemyError as e:
            self._fail(f"create employee {payload.employee_id}", e)

        logger.info(f"Employee {payload.employee_id} created")
        return self.session.get(Employee, payload.employee_id)

    def update_employee(
        self,
        employee_id: str,
        payload: EmployeePayload,
        today: Optional[date] = None,
    ) -> int:
        """
        Overwrite every mutable column of one employee.

        The employee ID itself is never changed.

        Returns:
            Number of rows updated (0 when the employee does not exist)
        """
        statement = (
            update(Employee)
            .where(Employee.employee_id == employee_id)
            .values(**build_row(payload, today))
        )
        try:
            result = self.session.execute(statement)
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.warning(f"Email already in use on update of employee {employee_id}")
            raise ConflictError()
        except SQLAlchemyError as e:
            self._fail(f"update employee {employee_id}", e)

        logger.info(f"Employee {employee_id} update affected {result.rowcount} row(s)")
        return result.rowcount

    def delete_employee(self, employee_id: str) -> int:
        """
        Delete one employee.

        Returns:
            Number of rows deleted (0 when the employee does not exist)
        """
        statement = delete(Employee).where(Employee.employee_id == employee_id)
        try:
            result = self.session.execute(statement)
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail(f"delete employee {employee_id}", e)

        logger.info(f"Employee {employee_id} delete affected {result.rowcount} row(s)")
        return result.rowcount

    def _fail(self, action: str, error: SQLAlchemyError) -> NoReturn:
        self.session.rollback()
        logger.error(f"Database error while trying to {action}: {error}", exc_info=True)
        raise StorageFault() from error
