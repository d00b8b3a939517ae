"""SQLite round trips for every repository."""

from datetime import date, datetime, time
from decimal import Decimal
import sqlite3

import pytest

from motorph_payroll.business_logic.entities.attendance_entity import AttendanceEntity
from motorph_payroll.business_logic.entities.leave_entity import LeaveEntity
from motorph_payroll.business_logic.entities.overtime_entity import OvertimeEntity
from motorph_payroll.business_logic.entities.payroll_entity import PayrollEntity
from motorph_payroll.business_logic.entities.user_credential_entity import UserCredentialEntity
from motorph_payroll.constants import EmploymentStatus, LeaveStatus
from motorph_payroll.data_access import (
    EmployeesRepository, AttendanceRepository, OvertimeRepository,
    LeaveRequestsRepository, PayrollsRepository, CredentialsRepository
)

D = Decimal


@pytest.fixture
def employees_repo(db_manager, regular_employee, probationary_employee):
    repo = EmployeesRepository(db_manager)
    repo.add(regular_employee)
    repo.add(probationary_employee)
    return repo


class TestEmployeesRepository:

    def test_round_trip_keeps_employee_number_and_types(self, employees_repo):
        loaded = employees_repo.get_employee_by_id(10001)
        assert loaded.id == 10001
        assert loaded.full_name == "Manuel Garcia"
        assert loaded.status is EmploymentStatus.REGULAR
        assert loaded.basic_salary == D("50000")
        assert loaded.phone_allowance == D("1000")
        assert loaded.rice_subsidy is None
        assert loaded.bonus_eligible is True

    def test_missing_employee_is_none(self, employees_repo):
        assert employees_repo.get_by_id(99999) is None

    def test_queries(self, employees_repo):
        assert [e.id for e in employees_repo.get_all(order_by="id")] == [10001, 10002]
        assert [e.id for e in employees_repo.get_by_status(EmploymentStatus.PROBATIONARY)] == [10002]
        assert [e.id for e in employees_repo.search_by_name("garc")] == [10001]

    def test_update_and_delete(self, employees_repo):
        employee = employees_repo.get_by_id(10002)
        employee.status = EmploymentStatus.REGULAR
        employee.birthday = date(1990, 5, 17)
        employees_repo.update(employee)

        reloaded = employees_repo.get_by_id(10002)
        assert reloaded.status is EmploymentStatus.REGULAR
        assert reloaded.birthday == date(1990, 5, 17)

        assert employees_repo.delete(10002) is True
        assert employees_repo.delete(10002) is False

    def test_duplicate_employee_number_is_rejected(self, employees_repo, regular_employee):
        with pytest.raises(sqlite3.IntegrityError):
            employees_repo.add(regular_employee)


class TestAttendanceRepository:

    def test_period_query_is_inclusive_and_ordered(self, db_manager, employees_repo):
        repo = AttendanceRepository(db_manager)
        for day in (date(2024, 8, 2), date(2024, 7, 31), date(2024, 8, 1), date(2024, 9, 1)):
            repo.add(AttendanceEntity(employee_id=10001, log_date=day, log_in=time(8, 5), log_out=time(17, 0)))

        records = repo.get_attendance_between(10001, date(2024, 8, 1), date(2024, 8, 31))
        assert [r.log_date for r in records] == [date(2024, 8, 1), date(2024, 8, 2)]
        assert records[0].log_in == time(8, 5)
        assert records[0].late_minutes() == D("5.00")
        assert repo.get_attendance_between(10002, date(2024, 8, 1), date(2024, 8, 31)) == []

    def test_absent_day_keeps_null_logs(self, db_manager, employees_repo):
        repo = AttendanceRepository(db_manager)
        saved = repo.add(AttendanceEntity(employee_id=10001, log_date=date(2024, 8, 5)))
        loaded = repo.get_by_id(saved.id)
        assert loaded.log_in is None and loaded.log_out is None
        assert not loaded.is_present

    def test_hh_mm_logs_are_read(self, db_manager, employees_repo):
        db_manager.execute_query(
            "INSERT INTO attendance (employee_id, log_date, log_in, log_out) VALUES (?, ?, ?, ?)",
            (10001, "2024-08-06", "08:30", "17:30"))
        record = AttendanceRepository(db_manager).get_by_employee_id(10001)[0]
        assert record.log_in == time(8, 30)
        assert record.work_hours == D("9.00")


class TestOvertimeRepository:

    def test_between_and_pending(self, db_manager, employees_repo):
        repo = OvertimeRepository(db_manager)
        repo.add(OvertimeEntity(employee_id=10001, ot_date=date(2024, 8, 5), hours=D("2.5"), is_approved=True))
        repo.add(OvertimeEntity(employee_id=10001, ot_date=date(2024, 8, 6), hours=D("1")))
        repo.add(OvertimeEntity(employee_id=10001, ot_date=date(2024, 9, 2), hours=D("3")))

        in_august = repo.get_overtime_between(10001, date(2024, 8, 1), date(2024, 8, 31))
        assert [o.hours for o in in_august] == [D("2.5"), D("1")]
        assert in_august[0].is_approved is True
        assert [o.ot_date for o in repo.get_pending()] == [date(2024, 8, 6), date(2024, 9, 2)]


class TestLeaveRequestsRepository:

    def test_only_approved_overlapping_leave_is_returned(self, db_manager, employees_repo):
        repo = LeaveRequestsRepository(db_manager)
        spanning = repo.add(LeaveEntity(employee_id=10001, start_date=date(2024, 7, 29), end_date=date(2024, 8, 2),
                                        status=LeaveStatus.APPROVED))
        repo.add(LeaveEntity(employee_id=10001, start_date=date(2024, 8, 12), end_date=date(2024, 8, 12),
                             status=LeaveStatus.PENDING))
        repo.add(LeaveEntity(employee_id=10001, start_date=date(2024, 9, 2), end_date=date(2024, 9, 3),
                             status=LeaveStatus.APPROVED))

        approved = repo.get_approved_leave_between(10001, date(2024, 8, 1), date(2024, 8, 31))
        assert [leave.id for leave in approved] == [spanning.id]
        assert approved[0].status is LeaveStatus.APPROVED
        assert approved[0].is_paid is True
        assert len(repo.get_by_status(LeaveStatus.PENDING)) == 1


class TestPayrollsRepository:

    def _payroll(self, employee_id=10001, start=date(2024, 8, 1), end=date(2024, 8, 31)):
        return PayrollEntity(employee_id=employee_id, period_start=start, period_end=end, days_worked=22,
                             payable_days=22, monthly_rate=D("50000"), gross_earnings=D("50000.00"),
                             rice_subsidy=D("1500.00"), sss=D("1350.00"), philhealth=D("1332.50"),
                             pagibig=D("200.00"), withholding_tax=D("5291.90"), rate_schedule="2024",
                             created_at=datetime(2024, 9, 1, 9, 30))

    def test_round_trip_and_derived_totals(self, db_manager, employees_repo):
        repo = PayrollsRepository(db_manager)
        saved = repo.add(self._payroll())
        loaded = repo.get_by_id(saved.id)

        assert loaded.period_start == date(2024, 8, 1)
        assert loaded.created_at == datetime(2024, 9, 1, 9, 30)
        assert loaded.rate_schedule == "2024"
        assert loaded.gross_pay == D("51500.00")
        assert loaded.total_deductions == D("8174.40")
        assert loaded.net_pay == D("43325.60")

    def test_period_lookups(self, db_manager, employees_repo):
        repo = PayrollsRepository(db_manager)
        repo.add(self._payroll())
        repo.add(self._payroll(employee_id=10002))
        repo.add(self._payroll(start=date(2024, 9, 1), end=date(2024, 9, 30)))

        assert [p.employee_id for p in repo.get_by_pay_period(date(2024, 8, 1), date(2024, 8, 31))] == [10001, 10002]
        assert [p.period_start for p in repo.get_by_employee_id(10001)] == [date(2024, 9, 1), date(2024, 8, 1)]
        assert repo.get_for_employee_period(10002, date(2024, 8, 1), date(2024, 8, 31)) is not None
        assert repo.get_for_employee_period(10002, date(2024, 9, 1), date(2024, 9, 30)) is None

    def test_employee_with_payroll_cannot_be_deleted(self, db_manager, employees_repo):
        PayrollsRepository(db_manager).add(self._payroll())
        with pytest.raises(sqlite3.IntegrityError):
            employees_repo.delete(10001)


class TestCredentialsRepository:

    def test_one_login_per_employee(self, db_manager, employees_repo):
        repo = CredentialsRepository(db_manager)
        saved = repo.add(UserCredentialEntity(employee_id=10001, password_hash="hash"))
        assert repo.get_by_employee_id(10001).id == saved.id
        assert repo.get_by_employee_id(10002) is None
        with pytest.raises(sqlite3.IntegrityError):
            repo.add(UserCredentialEntity(employee_id=10001, password_hash="other"))

    def test_last_login_round_trip(self, db_manager, employees_repo):
        repo = CredentialsRepository(db_manager)
        credential = repo.add(UserCredentialEntity(employee_id=10001, password_hash="hash"))
        credential.last_login = datetime(2024, 8, 1, 8, 0, 5)
        repo.update(credential)
        assert repo.get_by_employee_id(10001).last_login == datetime(2024, 8, 1, 8, 0, 5)
