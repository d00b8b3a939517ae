# motorph_payroll/exceptions.py

from typing import Optional


class PayrollError(Exception):
    """Root of every error the payroll engine reports to its callers."""
    kind = "payroll"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PayrollError, ValueError):
    """Malformed or out-of-range input: bad ids, inverted periods, negative money."""
    kind = "validation"


class NotFoundError(PayrollError, LookupError):
    kind = "not_found"


class ComputationError(PayrollError):
    """Internal inconsistency found while aggregating or computing."""
    kind = "computation"


class PayrollCalculationException(PayrollError):
    """
    Raised by PayrollCalculator when a calculation ends in the FAILED state.
    `failed_state` is the state the calculation was in when it failed.
    """
    kind = "calculation"

    def __init__(self, message: str, employee_id: Optional[int] = None, failed_state: Optional[str] = None):
        super().__init__(message)
        self.employee_id = employee_id
        self.failed_state = failed_state


class PayrollValidationError(PayrollCalculationException, ValidationError):
    kind = ValidationError.kind


class EmployeeNotFoundError(PayrollCalculationException, NotFoundError):
    kind = NotFoundError.kind


class PayrollComputationError(PayrollCalculationException, ComputationError):
    kind = ComputationError.kind
