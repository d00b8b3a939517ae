# tests/conftest.py
"""
Shared fixtures.

The engine tests run against in-memory providers; repository and manager tests
use a throwaway SQLite file under pytest's tmp_path.
"""

from datetime import date, time
from decimal import Decimal

import pytest

from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity
from motorph_payroll.business_logic.entities.attendance_entity import AttendanceEntity
from motorph_payroll.business_logic.payroll_calculator import PayrollCalculator
from motorph_payroll.constants import EmploymentStatus
from motorph_payroll.data_access.database_manager import DatabaseManager
from motorph_payroll.utils.date_converter import iter_dates, is_weekday

# August 2024 has exactly 22 weekdays
AUG_START = date(2024, 8, 1)
AUG_END = date(2024, 8, 31)


def weekday_attendance(employee_id, start, end, log_in=time(8, 0), log_out=time(17, 0)):
    return [AttendanceEntity(employee_id=employee_id, log_date=d, log_in=log_in, log_out=log_out)
            for d in iter_dates(start, end) if is_weekday(d)]


class FakeEmployeeProvider:
    def __init__(self, *employees):
        self.employees = {e.id: e for e in employees}

    def get_employee_by_id(self, employee_id):
        return self.employees.get(employee_id)


class FakeRecordProvider:
    """Returns every record it holds, whatever the period; filtering is the aggregator's job."""
    def __init__(self, records=None):
        self.records = list(records or [])
        self.calls = []

    def _get(self, employee_id, start, end):
        self.calls.append((employee_id, start, end))
        return list(self.records)

    get_attendance_between = _get
    get_overtime_between = _get
    get_approved_leave_between = _get


class FailingProvider:
    def __init__(self, error):
        self.error = error

    def _raise(self, *args):
        raise self.error

    get_employee_by_id = _raise
    get_attendance_between = _raise
    get_overtime_between = _raise
    get_approved_leave_between = _raise


@pytest.fixture
def regular_employee():
    return EmployeeEntity(
        id=10001, first_name="Manuel", last_name="Garcia", status=EmploymentStatus.REGULAR,
        basic_salary=Decimal("50000"), position="Account Manager",
        phone_allowance=Decimal("1000"), clothing_allowance=Decimal("800"),
    )


@pytest.fixture
def probationary_employee():
    return EmployeeEntity(
        id=10002, first_name="Antonio", last_name="Lim", status=EmploymentStatus.PROBATIONARY,
        basic_salary=Decimal("30000"), position="Sales Rep",
        phone_allowance=Decimal("1000"), clothing_allowance=Decimal("1000"),
    )


@pytest.fixture
def contractual_employee():
    return EmployeeEntity(
        id=10003, first_name="Bianca", last_name="Aquino", status=EmploymentStatus.CONTRACTUAL,
        basic_salary=Decimal("22000"), position="Driver",
    )


@pytest.fixture
def attendance_provider(regular_employee):
    return FakeRecordProvider(weekday_attendance(regular_employee.id, AUG_START, AUG_END))


@pytest.fixture
def overtime_provider():
    return FakeRecordProvider()


@pytest.fixture
def leave_provider():
    return FakeRecordProvider()


@pytest.fixture
def calculator(regular_employee, probationary_employee, contractual_employee,
               attendance_provider, overtime_provider, leave_provider):
    return PayrollCalculator(
        employees_repository=FakeEmployeeProvider(regular_employee, probationary_employee, contractual_employee),
        attendance_repository=attendance_provider,
        overtime_repository=overtime_provider,
        leave_repository=leave_provider,
    )


@pytest.fixture
def db_manager(tmp_path):
    manager = DatabaseManager(str(tmp_path / "payroll_test.db"))
    manager.create_tables()
    return manager
