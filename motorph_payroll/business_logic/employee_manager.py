# motorph_payroll/business_logic/employee_manager.py

import re
from typing import Optional, List, TYPE_CHECKING
from datetime import date
from decimal import Decimal

from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity
from motorph_payroll.constants import (
    EmploymentStatus, MAX_NAME_LENGTH, MAX_POSITION_LENGTH, MAX_PHONE_NUMBER_LENGTH, PHONE_NUMBER_PATTERN
)
from motorph_payroll.exceptions import ValidationError, NotFoundError
from motorph_payroll.utils.money import to_decimal, to_optional_decimal
import logging

if TYPE_CHECKING:
    from motorph_payroll.data_access.employees_repository import EmployeesRepository

logger = logging.getLogger(__name__)

# Fields update_employee_details accepts besides the validated ones
_PLAIN_FIELDS = ("position", "birthday", "address", "phone_number", "sss_number", "philhealth_number",
                 "tin_number", "pagibig_number", "immediate_supervisor", "bonus_eligible")


class EmployeeManager:
    def __init__(self, employees_repository: 'EmployeesRepository'):
        """
        Initializes the EmployeeManager.
        :param employees_repository: An instance of EmployeesRepository.
        """
        if employees_repository is None: raise ValueError("employees_repository cannot be None")
        self.employees_repository = employees_repository

    @staticmethod
    def _validate_name(value: Optional[str], label: str) -> str:
        if value is None or not value.strip():
            raise ValidationError(f"{label} cannot be empty.")
        if len(value.strip()) > MAX_NAME_LENGTH:
            raise ValidationError(f"{label} cannot be longer than {MAX_NAME_LENGTH} characters.")
        return value.strip()

    @staticmethod
    def _validate_employee_id(employee_id) -> int:
        if isinstance(employee_id, bool) or not isinstance(employee_id, int) or employee_id <= 0:
            raise ValidationError(f"Invalid employee ID: {employee_id!r}")
        return employee_id

    @staticmethod
    def _validate_money(value, label: str) -> Decimal:
        amount = to_decimal(value, label)
        if amount < 0:
            raise ValidationError(f"{label} cannot be negative.")
        return amount

    @staticmethod
    def _validate_status(status) -> EmploymentStatus:
        if isinstance(status, EmploymentStatus):
            return status
        if status is None or not str(status).strip():
            raise ValidationError("Employment status cannot be empty.")
        try:
            return EmploymentStatus(str(status).strip())
        except ValueError as e:
            allowed = ", ".join(s.value for s in EmploymentStatus)
            raise ValidationError(f"Invalid employment status '{status}'. Expected one of: {allowed}.") from e

    @staticmethod
    def _validate_filter(value: Optional[str], label: str) -> str:
        if value is None or not str(value).strip():
            raise ValidationError(f"{label} cannot be empty.")
        return str(value).strip()

    @staticmethod
    def _validate_position(position: Optional[str]):
        if position is not None and len(position) > MAX_POSITION_LENGTH:
            raise ValidationError(f"Position cannot be longer than {MAX_POSITION_LENGTH} characters.")

    @staticmethod
    def _validate_phone_number(phone_number: Optional[str]):
        if phone_number is None or not phone_number.strip():
            return
        if len(phone_number) > MAX_PHONE_NUMBER_LENGTH:
            raise ValidationError(f"Phone number cannot be longer than {MAX_PHONE_NUMBER_LENGTH} characters.")
        if not re.match(PHONE_NUMBER_PATTERN, phone_number.strip()):
            raise ValidationError(f"Invalid phone number: '{phone_number}'")

    def validate_employee(self, employee: EmployeeEntity) -> None:
        """Raises ValidationError when a record would not be accepted by add/update."""
        if employee is None:
            raise ValidationError("Employee record is required.")
        self._validate_employee_id(employee.id)
        self._validate_name(employee.first_name, "First name")
        self._validate_name(employee.last_name, "Last name")
        self._validate_status(employee.status)
        self._validate_position(employee.position)
        self._validate_phone_number(employee.phone_number)
        self._validate_money(employee.basic_salary, "Basic salary")
        for label, value in (("Rice subsidy", employee.rice_subsidy),
                             ("Phone allowance", employee.phone_allowance),
                             ("Clothing allowance", employee.clothing_allowance)):
            if value is not None:
                self._validate_money(value, label)

    def add_employee(self,
                     employee_id: int,
                     first_name: str,
                     last_name: str,
                     basic_salary,
                     status: EmploymentStatus = EmploymentStatus.REGULAR,
                     position: Optional[str] = None,
                     rice_subsidy=None,
                     phone_allowance=None,
                     clothing_allowance=None,
                     birthday: Optional[date] = None,
                     **details) -> EmployeeEntity:
        """
        Adds a new employee under an HR-assigned employee number.
        Extra keyword arguments (address, phone_number, government numbers, ...) go to the record as-is.
        """
        employee = EmployeeEntity(
            id=self._validate_employee_id(employee_id),
            first_name=self._validate_name(first_name, "First name"),
            last_name=self._validate_name(last_name, "Last name"),
            status=self._validate_status(status),
            basic_salary=self._validate_money(basic_salary, "Basic salary"),
            position=position,
            rice_subsidy=to_optional_decimal(rice_subsidy, "rice_subsidy"),
            phone_allowance=to_optional_decimal(phone_allowance, "phone_allowance"),
            clothing_allowance=to_optional_decimal(clothing_allowance, "clothing_allowance"),
            birthday=birthday,
            **details
        )
        self.validate_employee(employee)

        if self.employees_repository.get_by_id(employee_id) is not None:
            raise ValidationError(f"Employee ID {employee_id} already exists.")

        try:
            created = self.employees_repository.add(employee)
            logger.info(f"Employee record created (ID: {created.id}) for '{created.full_name}'.")
            return created
        except Exception as e:
            logger.error(f"Error adding employee '{first_name} {last_name}': {e}", exc_info=True)
            raise

    def get_employee(self, employee_id: int) -> Optional[EmployeeEntity]:
        if isinstance(employee_id, bool) or not isinstance(employee_id, int) or employee_id <= 0: return None
        return self.employees_repository.get_by_id(employee_id)

    def employee_exists(self, employee_id: int) -> bool:
        return self.get_employee(employee_id) is not None

    def get_all_employees(self, include_terminated: bool = True) -> List[EmployeeEntity]:
        employees = self.employees_repository.get_all(order_by="id")
        if include_terminated:
            return employees
        return [e for e in employees if e.status is not EmploymentStatus.TERMINATED]

    def search_employees(self, text: Optional[str] = None) -> List[EmployeeEntity]:
        """Name search; blank text lists everyone."""
        if text is None or not text.strip():
            return self.get_all_employees()
        return self.employees_repository.search_by_name(text)

    def get_employees_by_status(self, status) -> List[EmployeeEntity]:
        return self.employees_repository.get_by_status(self._validate_status(status))

    def get_employees_by_position(self, position: str) -> List[EmployeeEntity]:
        return self.employees_repository.get_by_position(self._validate_filter(position, "Position"))

    def get_employees_by_supervisor(self, supervisor: str) -> List[EmployeeEntity]:
        return self.employees_repository.get_by_supervisor(self._validate_filter(supervisor, "Supervisor"))

    def count_employees_by_status(self, status) -> int:
        return self.employees_repository.count_by_status(self._validate_status(status))

    def update_employee_details(self,
                                employee_id: int,
                                first_name: Optional[str] = None,
                                last_name: Optional[str] = None,
                                status: Optional[EmploymentStatus] = None,
                                basic_salary=None,
                                rice_subsidy=None,
                                phone_allowance=None,
                                clothing_allowance=None,
                                **details) -> EmployeeEntity:
        """Updates the given fields only; None leaves a field unchanged."""
        self._validate_employee_id(employee_id)
        unknown = set(details) - set(_PLAIN_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown employee field(s): {', '.join(sorted(unknown))}")

        employee = self.employees_repository.get_by_id(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee with ID {employee_id} not found.")

        if first_name is not None:
            employee.first_name = self._validate_name(first_name, "First name")
        if last_name is not None:
            employee.last_name = self._validate_name(last_name, "Last name")
        if status is not None:
            employee.status = self._validate_status(status)
        if basic_salary is not None:
            employee.basic_salary = self._validate_money(basic_salary, "Basic salary")
        if rice_subsidy is not None:
            employee.rice_subsidy = self._validate_money(rice_subsidy, "Rice subsidy")
        if phone_allowance is not None:
            employee.phone_allowance = self._validate_money(phone_allowance, "Phone allowance")
        if clothing_allowance is not None:
            employee.clothing_allowance = self._validate_money(clothing_allowance, "Clothing allowance")
        for name, value in details.items():
            if value is not None:
                setattr(employee, name, value)
        self.validate_employee(employee)

        try:
            self.employees_repository.update(employee)
            logger.info(f"Details for employee ID {employee_id} updated.")
            return employee
        except Exception as e:
            logger.error(f"Error updating employee ID {employee_id}: {e}", exc_info=True)
            raise

    def terminate_employee(self, employee_id: int) -> EmployeeEntity:
        """Employees are marked Terminated rather than deleted so their payroll history stays intact."""
        return self.update_employee_details(employee_id, status=EmploymentStatus.TERMINATED)

    def delete_employee_record(self, employee_id: int) -> bool:
        logger.warning(f"Attempting to delete employee record ID: {employee_id}.")
        if self.employees_repository.get_by_id(employee_id) is None:
            logger.warning(f"Employee record ID {employee_id} not found for deletion.")
            return False
        try:
            return self.employees_repository.delete(employee_id)
        except Exception as e:
            logger.error(f"Error deleting employee record ID {employee_id}: {e}", exc_info=True)
            raise
