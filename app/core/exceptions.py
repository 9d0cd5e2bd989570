"""
Error taxonomy for Employee Records Service.

Each error carries the HTTP status it maps to; the handlers registered in
app.main turn them into JSON responses.
"""


class EmployeeServiceError(Exception):
    """Base class for errors reported to API callers."""

    status_code = 500
    message = "Internal Server Error."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class EmployeeValidationError(EmployeeServiceError):
    """One or more fields of an employee payload are invalid."""

    status_code = 400

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        first = next(iter(self.errors.values()), "Invalid employee data.")
        super().__init__(first)


class ConflictError(EmployeeServiceError):
    """Employee ID or email already belongs to another record."""

    status_code = 400
    message = "Employee ID and/or Email already exists."


class EmployeeNotFoundError(EmployeeServiceError):
    status_code = 404
    message = "Employee not found."


class StorageFault(EmployeeServiceError):
    """The persistence layer failed; details are logged, never returned."""

    status_code = 500
    message = "Internal Server Error."
