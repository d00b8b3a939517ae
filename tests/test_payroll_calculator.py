"""End-to-end payroll computation against in-memory providers."""

import logging
from datetime import date
from decimal import Decimal

import pytest

from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity
from motorph_payroll.business_logic.entities.overtime_entity import OvertimeEntity
from motorph_payroll.business_logic.entities.leave_entity import LeaveEntity
from motorph_payroll.business_logic.payroll_calculator import PayrollCalculator, build_entitled_allowances
from motorph_payroll.constants import CalculationState, EmploymentStatus, LeaveStatus
from motorph_payroll.exceptions import (
    PayrollCalculationException, PayrollValidationError, EmployeeNotFoundError, PayrollComputationError,
    ValidationError, NotFoundError
)
from tests.conftest import (
    FakeEmployeeProvider, FakeRecordProvider, FailingProvider, weekday_attendance, AUG_START, AUG_END
)

D = Decimal


def _overtime(hours, employee_id=10001, day=date(2024, 8, 5)):
    return OvertimeEntity(employee_id=employee_id, ot_date=day, hours=D(hours), is_approved=True)


class TestRegularEmployeeScenario:

    def test_full_period_without_overtime(self, calculator):
        payroll = calculator.calculate_payroll(10001, AUG_START, AUG_END)

        assert payroll.days_worked == 22
        assert payroll.payable_days == 22
        assert payroll.monthly_rate == D("50000")
        assert payroll.gross_earnings == D("50000.00")
        assert payroll.overtime_pay == D("0.00")
        assert payroll.rice_subsidy == D("1500.00")
        assert payroll.phone_allowance == D("1000.00")
        assert payroll.clothing_allowance == D("800.00")
        assert payroll.allowance_total == D("3300.00")
        assert payroll.gross_pay == D("53300.00")
        assert payroll.sss == D("1350.00")
        assert payroll.philhealth == D("1332.50")
        assert payroll.pagibig == D("200.00")
        assert payroll.withholding_tax == D("5291.90")
        assert payroll.total_deductions == D("8174.40")
        assert payroll.net_pay == D("45125.60")
        assert payroll.rate_schedule == "2024"
        assert all(v > 0 for v in (payroll.sss, payroll.philhealth, payroll.pagibig, payroll.withholding_tax))

    def test_approved_overtime_increases_gross_pay(self, calculator, overtime_provider):
        baseline = calculator.calculate_payroll(10001, AUG_START, AUG_END)
        overtime_provider.records = [_overtime("10")]
        with_overtime = calculator.calculate_payroll(10001, AUG_START, AUG_END)

        assert with_overtime.total_overtime_hours == D("10")
        assert with_overtime.overtime_pay == D("3551.14")
        assert with_overtime.gross_pay > baseline.gross_pay

    def test_unapproved_overtime_is_not_paid(self, calculator, overtime_provider):
        overtime_provider.records = [
            OvertimeEntity(employee_id=10001, ot_date=date(2024, 8, 5), hours=D("10"), is_approved=False)
        ]
        assert calculator.calculate_payroll(10001, AUG_START, AUG_END).overtime_pay == 0

    def test_paid_leave_keeps_full_basic_pay(self, calculator, attendance_provider, leave_provider):
        attendance_provider.records = weekday_attendance(10001, AUG_START, date(2024, 8, 16)) + \
            weekday_attendance(10001, date(2024, 8, 26), AUG_END)
        leave_provider.records = [LeaveEntity(employee_id=10001, start_date=date(2024, 8, 19),
                                              end_date=date(2024, 8, 23), status=LeaveStatus.APPROVED)]
        payroll = calculator.calculate_payroll(10001, AUG_START, AUG_END)
        assert payroll.days_worked == 17
        assert payroll.leave_days == 5
        assert payroll.gross_earnings == D("50000.00")

    def test_partial_attendance_is_prorated(self, calculator, attendance_provider):
        attendance_provider.records = weekday_attendance(10001, AUG_START, date(2024, 8, 16))
        payroll = calculator.calculate_payroll(10001, AUG_START, AUG_END)
        assert payroll.days_worked == 12
        assert payroll.gross_earnings == D("27272.73")

    def test_full_attendance_in_a_23_weekday_month_pays_the_monthly_rate(self, calculator, attendance_provider):
        july_start, july_end = date(2024, 7, 1), date(2024, 7, 31)
        attendance_provider.records = weekday_attendance(10001, july_start, july_end)
        payroll = calculator.calculate_payroll(10001, july_start, july_end)
        assert payroll.days_worked == 23
        assert payroll.gross_earnings == D("50000.00")
        assert payroll.gross_earnings <= payroll.monthly_rate

    def test_overtime_rate_follows_the_period_weekdays(self, calculator, attendance_provider, overtime_provider):
        july_start, july_end = date(2024, 7, 1), date(2024, 7, 31)
        attendance_provider.records = weekday_attendance(10001, july_start, july_end)
        overtime_provider.records = [_overtime("10", day=date(2024, 7, 8))]
        # 10 h * 50000 / (23 * 8) * 1.25
        assert calculator.calculate_payroll(10001, july_start, july_end).overtime_pay == D("3396.74")

    def test_net_pay_identity_and_gross_covers_allowances(self, calculator, overtime_provider):
        overtime_provider.records = [_overtime("3.5")]
        payroll = calculator.calculate_payroll(10001, AUG_START, AUG_END)
        assert payroll.net_pay == payroll.gross_pay - payroll.total_deductions
        assert payroll.gross_pay >= payroll.allowance_total

    def test_repeated_calls_give_identical_results(self, calculator):
        first = calculator.calculate_payroll(10001, AUG_START, AUG_END)
        second = calculator.calculate_payroll(10001, AUG_START, AUG_END)
        assert first.net_pay == second.net_pay
        assert first.total_deductions == second.total_deductions


class TestStatusDependentAllowances:

    def test_probationary_gets_rice_and_reduced_phone(self, calculator, attendance_provider):
        attendance_provider.records = weekday_attendance(10002, AUG_START, AUG_END)
        payroll = calculator.calculate_payroll(10002, AUG_START, AUG_END)
        assert payroll.rice_subsidy == D("1500.00")
        assert payroll.phone_allowance == D("500.00")
        assert payroll.clothing_allowance == 0
        assert payroll.gross_pay == D("32000.00")

    def test_contractual_gets_no_allowances(self, calculator, attendance_provider):
        attendance_provider.records = weekday_attendance(10003, AUG_START, AUG_END)
        payroll = calculator.calculate_payroll(10003, AUG_START, AUG_END)
        assert payroll.allowance_total == 0
        assert payroll.gross_pay == D("22000.00")

    def test_build_entitled_allowances_without_probationary_policy(self, probationary_employee):
        allowances = build_entitled_allowances(probationary_employee)
        assert [a.type for a in allowances] == ["Rice Subsidy"]


class TestNegativeNetPay:

    def test_negative_net_pay_is_returned_and_logged(self, caplog):
        employee = EmployeeEntity(id=20001, first_name="Zero", last_name="Pay",
                                  status=EmploymentStatus.CONTRACTUAL, basic_salary=D("0"))
        calculator = PayrollCalculator(FakeEmployeeProvider(employee), FakeRecordProvider(),
                                       FakeRecordProvider(), FakeRecordProvider())
        with caplog.at_level(logging.WARNING):
            payroll = calculator.calculate_payroll(20001, AUG_START, AUG_END)
        assert payroll.gross_pay == 0
        assert payroll.net_pay < 0
        assert payroll.net_pay == payroll.gross_pay - payroll.total_deductions
        assert "negative" in caplog.text


class TestFailures:

    def test_start_after_end(self, calculator):
        with pytest.raises(PayrollValidationError) as excinfo:
            calculator.calculate_payroll(10001, AUG_END, AUG_START)
        error = excinfo.value
        assert isinstance(error, ValidationError)
        assert isinstance(error, PayrollCalculationException)
        assert error.kind == "validation"
        assert error.employee_id == 10001
        assert error.failed_state == CalculationState.VALIDATING.value

    @pytest.mark.parametrize("employee_id", [0, -1])
    def test_non_positive_employee_id(self, calculator, employee_id):
        with pytest.raises(ValidationError):
            calculator.calculate_payroll(employee_id, AUG_START, AUG_END)

    def test_missing_period_date(self, calculator):
        with pytest.raises(PayrollValidationError):
            calculator.calculate_payroll(10001, None, AUG_END)

    def test_unknown_employee(self, calculator):
        with pytest.raises(EmployeeNotFoundError) as excinfo:
            calculator.calculate_payroll(99999, AUG_START, AUG_END)
        assert isinstance(excinfo.value, NotFoundError)
        assert excinfo.value.failed_state == CalculationState.LOADING.value

    def test_provider_failure_is_reported_with_its_state(self, regular_employee):
        calculator = PayrollCalculator(FakeEmployeeProvider(regular_employee),
                                       FailingProvider(RuntimeError("database is locked")),
                                       FakeRecordProvider(), FakeRecordProvider())
        with pytest.raises(PayrollComputationError) as excinfo:
            calculator.calculate_payroll(10001, AUG_START, AUG_END)
        assert excinfo.value.failed_state == CalculationState.AGGREGATING.value
        assert "database is locked" in excinfo.value.message

    def test_records_of_another_employee_fail_the_calculation(self, calculator):
        # attendance_provider holds employee 10001's records
        with pytest.raises(PayrollComputationError):
            calculator.calculate_payroll(10002, AUG_START, AUG_END)

    @pytest.mark.parametrize("missing", [
        "employees_repository", "attendance_repository", "overtime_repository", "leave_repository",
    ])
    def test_collaborators_are_required(self, missing):
        providers = dict(employees_repository=FakeEmployeeProvider(), attendance_repository=FakeRecordProvider(),
                         overtime_repository=FakeRecordProvider(), leave_repository=FakeRecordProvider())
        providers[missing] = None
        with pytest.raises(ValueError):
            PayrollCalculator(**providers)
