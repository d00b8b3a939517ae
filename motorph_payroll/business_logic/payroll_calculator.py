# motorph_payroll/business_logic/payroll_calculator.py

from typing import Any, Dict, List, Optional, Sequence
from datetime import date, datetime
from decimal import Decimal
import logging

from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity
from motorph_payroll.business_logic.entities.payroll_entity import PayrollEntity
from motorph_payroll.business_logic.entities.allowance_entity import (
    Allowance, RiceAllowance, PhoneAllowance, ClothingAllowance
)
from motorph_payroll.business_logic.attendance_aggregator import aggregate_attendance, AttendanceSummary
from motorph_payroll.business_logic.contribution_calculator import GovernmentContributionCalculator
from motorph_payroll.business_logic.rate_tables import RateSchedule, select_rate_schedule
from motorph_payroll.constants import (
    CalculationState, EmploymentStatus, AllowanceType, DEFAULT_PAYROLL_CONFIG,
    RICE_SUBSIDY_AMOUNT, STANDARD_PHONE_ALLOWANCE, CLOTHING_ALLOWANCE_AMOUNT
)
from motorph_payroll.exceptions import (
    PayrollError, ValidationError, NotFoundError, PayrollCalculationException,
    PayrollValidationError, EmployeeNotFoundError, PayrollComputationError
)
from motorph_payroll.utils.date_converter import count_weekdays
from motorph_payroll.utils.money import ZERO, quantize_money

logger = logging.getLogger(__name__)


def build_entitled_allowances(employee: EmployeeEntity,
                              probationary_phone_allowance: Optional[Decimal] = None) -> List[Allowance]:
    """
    The allowances an employee's profile entitles them to, filtered by eligibility.
    Amounts come from the profile; a missing amount falls back to the standard one.
    """
    phone_amount = employee.phone_allowance if employee.phone_allowance is not None else STANDARD_PHONE_ALLOWANCE
    candidates: List[Allowance] = [
        RiceAllowance(employee.id, employee.rice_subsidy if employee.rice_subsidy is not None else RICE_SUBSIDY_AMOUNT),
        PhoneAllowance(employee.id, phone_amount, probationary_amount=probationary_phone_allowance),
        ClothingAllowance(employee.id, employee.clothing_allowance
                          if employee.clothing_allowance is not None else CLOTHING_ALLOWANCE_AMOUNT),
    ]
    # for_employee picks the status-dependent amount (e.g. the reduced probationary phone allowance)
    return [a.for_employee(employee) for a in candidates if a.is_eligible(employee)]


class PayrollCalculator:
    """
    Computes one employee's pay for one period.

    The calculation walks VALIDATING -> LOADING -> AGGREGATING -> COMPUTING -> ASSEMBLED.
    Any failure ends in FAILED and is raised as a PayrollCalculationException subclass
    that records the employee and the state it failed in. Nothing is cached on the
    instance between calls.
    """
    def __init__(self,
                 employees_repository,
                 attendance_repository,
                 overtime_repository,
                 leave_repository,
                 payroll_config: Optional[Dict[str, Any]] = None,
                 rate_schedules: Optional[Sequence[RateSchedule]] = None):

        if employees_repository is None: raise ValueError("employees_repository cannot be None")
        if attendance_repository is None: raise ValueError("attendance_repository cannot be None")
        if overtime_repository is None: raise ValueError("overtime_repository cannot be None")
        if leave_repository is None: raise ValueError("leave_repository cannot be None")

        self.employees_repository = employees_repository
        self.attendance_repository = attendance_repository
        self.overtime_repository = overtime_repository
        self.leave_repository = leave_repository
        self.payroll_config = {**DEFAULT_PAYROLL_CONFIG, **(payroll_config or {})}
        self.rate_schedules = rate_schedules

    def calculate_payroll(self, employee_id: int, period_start: date, period_end: date) -> PayrollEntity:
        state = CalculationState.VALIDATING
        try:
            logger.debug(f"Payroll for employee {employee_id}, {period_start} to {period_end}: {state.value}")
            self._validate_request(employee_id, period_start, period_end)

            state = CalculationState.LOADING
            employee = self.employees_repository.get_employee_by_id(employee_id)
            if employee is None:
                raise NotFoundError(f"Employee with ID {employee_id} not found.")
            if employee.status is EmploymentStatus.TERMINATED:
                logger.warning(f"Calculating payroll for terminated employee {employee_id}.")

            state = CalculationState.AGGREGATING
            summary = aggregate_attendance(
                employee_id, period_start, period_end,
                self.attendance_repository.get_attendance_between(employee_id, period_start, period_end),
                self.overtime_repository.get_overtime_between(employee_id, period_start, period_end),
                self.leave_repository.get_approved_leave_between(employee_id, period_start, period_end),
                payroll_config=self.payroll_config,
            )

            state = CalculationState.COMPUTING
            payroll = self._compute(employee, period_start, period_end, summary)

            state = CalculationState.ASSEMBLED
            logger.info(f"Payroll for employee {employee_id} ({period_start} to {period_end}) {state.value}: "
                        f"gross {payroll.gross_pay}, deductions {payroll.total_deductions}, net {payroll.net_pay}")
            return payroll
        except PayrollCalculationException:
            raise
        except Exception as e:
            logger.error(f"Payroll for employee {employee_id} {CalculationState.FAILED.value} "
                         f"during {state.value}: {e}", exc_info=True)
            raise self._as_calculation_error(e, employee_id, state) from e

    @staticmethod
    def _validate_request(employee_id, period_start, period_end):
        if isinstance(employee_id, bool) or not isinstance(employee_id, int) or employee_id <= 0:
            raise ValidationError(f"Invalid employee ID: {employee_id!r}")
        if not isinstance(period_start, date) or not isinstance(period_end, date):
            raise ValidationError("Pay period start and end dates are required.")
        if period_start > period_end:
            raise ValidationError(f"Pay period start {period_start} is after its end {period_end}.")

    @staticmethod
    def _as_calculation_error(error: Exception, employee_id, state: CalculationState) -> PayrollCalculationException:
        message = error.message if isinstance(error, PayrollError) else str(error)
        if isinstance(error, ValidationError):
            return PayrollValidationError(message, employee_id=employee_id, failed_state=state.value)
        if isinstance(error, NotFoundError):
            return EmployeeNotFoundError(message, employee_id=employee_id, failed_state=state.value)
        return PayrollComputationError(message, employee_id=employee_id, failed_state=state.value)

    def _compute(self, employee: EmployeeEntity, period_start: date, period_end: date,
                 summary: AttendanceSummary) -> PayrollEntity:
        # Prorated over the weekdays of the period; the configured figure covers weekend-only periods
        standard_days = Decimal(count_weekdays(period_start, period_end)
                                or self.payroll_config["standard_working_days"])
        hours_per_day = Decimal(self.payroll_config["hours_per_day"])
        overtime_multiplier = self.payroll_config["overtime_multiplier"]

        monthly_rate = employee.basic_salary
        if monthly_rate < 0:
            raise ValidationError(f"Basic salary of employee {employee.id} is negative.")
        gross_earnings = quantize_money(monthly_rate * Decimal(summary.payable_days) / standard_days)
        hourly_rate = monthly_rate / (standard_days * hours_per_day)
        overtime_pay = quantize_money(summary.total_overtime_hours * hourly_rate * overtime_multiplier)

        allowances = build_entitled_allowances(employee, self.payroll_config.get("probationary_phone_allowance"))
        amounts = {a.allowance_type: quantize_money(a.calculated_amount()) for a in allowances}

        gross_pay = gross_earnings + overtime_pay + sum(amounts.values(), ZERO)
        rate_schedule = select_rate_schedule(period_end, self.rate_schedules)
        contributions = GovernmentContributionCalculator(rate_schedule).calculate(gross_pay, employee_id=employee.id)

        payroll = PayrollEntity(
            employee_id=employee.id,
            period_start=period_start,
            period_end=period_end,
            days_worked=summary.days_worked,
            leave_days=summary.total_leave_days,
            payable_days=summary.payable_days,
            total_work_hours=summary.total_work_hours,
            late_minutes=summary.total_late_minutes,
            undertime_minutes=summary.total_undertime_minutes,
            total_overtime_hours=summary.total_overtime_hours,
            monthly_rate=monthly_rate,
            gross_earnings=gross_earnings,
            overtime_pay=overtime_pay,
            rice_subsidy=amounts.get(AllowanceType.RICE, ZERO),
            phone_allowance=amounts.get(AllowanceType.PHONE, ZERO),
            clothing_allowance=amounts.get(AllowanceType.CLOTHING, ZERO),
            sss=contributions.sss,
            philhealth=contributions.philhealth,
            pagibig=contributions.pagibig,
            withholding_tax=contributions.withholding_tax,
            rate_schedule=rate_schedule.name,
            created_at=datetime.now(),
        )
        if payroll.net_pay < 0:
            logger.warning(f"Net pay for employee {employee.id} ({period_start} to {period_end}) is negative: "
                           f"{payroll.net_pay}")
        return payroll
