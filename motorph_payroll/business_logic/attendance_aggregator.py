# motorph_payroll/business_logic/attendance_aggregator.py

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Set
from datetime import date
from decimal import Decimal
import logging

from motorph_payroll.business_logic.entities.attendance_entity import AttendanceEntity
from motorph_payroll.business_logic.entities.overtime_entity import OvertimeEntity
from motorph_payroll.business_logic.entities.leave_entity import LeaveEntity
from motorph_payroll.constants import DEFAULT_PAYROLL_CONFIG
from motorph_payroll.exceptions import ValidationError, ComputationError
from motorph_payroll.utils.money import ZERO

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceSummary:
    days_worked: int = 0
    full_days: int = 0
    total_work_hours: Decimal = ZERO
    total_late_minutes: Decimal = ZERO
    total_undertime_minutes: Decimal = ZERO
    total_overtime_hours: Decimal = ZERO
    total_leave_days: int = 0 # approved, paid
    unpaid_leave_days: int = 0 # approved, unpaid
    payable_days: int = 0 # days_worked + total_leave_days


def _check_owner(record: Any, employee_id: int):
    if record.employee_id != employee_id:
        raise ComputationError(
            f"{type(record).__name__} for employee {record.employee_id} passed to the aggregation "
            f"for employee {employee_id}."
        )


def aggregate_attendance(employee_id: int,
                         start: date,
                         end: date,
                         attendance: Iterable[AttendanceEntity],
                         overtime: Iterable[OvertimeEntity] = (),
                         leaves: Iterable[LeaveEntity] = (),
                         payroll_config: Optional[Dict[str, Any]] = None) -> AttendanceSummary:
    """
    Reduces one employee's daily records for [start, end] to period totals.

    Records dated outside the period are ignored. Only approved overtime and approved
    leave count; leave days are weekdays of the leave that fall in the period and
    were not already worked. Paid leave days are payable, unpaid ones are only reported.
    """
    if not isinstance(employee_id, int) or employee_id <= 0:
        raise ValidationError(f"Invalid employee ID: {employee_id!r}")
    if not isinstance(start, date) or not isinstance(end, date):
        raise ValidationError("Period start and end dates are required.")
    if start > end:
        raise ValidationError(f"Period start {start} is after period end {end}.")

    config = {**DEFAULT_PAYROLL_CONFIG, **(payroll_config or {})}
    shift_start = config["shift_start"]
    shift_end = config["shift_end"]
    full_day_hours = config["full_day_hours"]

    logs_by_date: Dict[date, List[AttendanceEntity]] = {}
    for record in attendance or ():
        _check_owner(record, employee_id)
        if not (start <= record.log_date <= end) or not record.is_present:
            continue
        if record.work_hours < 0:
            raise ComputationError(f"Negative work hours ({record.work_hours}) on {record.log_date} "
                                   f"for employee {employee_id}.")
        logs_by_date.setdefault(record.log_date, []).append(record)

    worked_dates: Set[date] = set(logs_by_date)
    full_day_dates: Set[date] = set()
    total_hours = ZERO
    total_late = ZERO
    total_undertime = ZERO

    for log_date, logs in logs_by_date.items():
        day_hours = sum((log.work_hours for log in logs), ZERO)
        log_outs = [log.log_out for log in logs if log.log_out is not None]
        # Split shifts are late from the first log-in and short from the last log-out
        day = AttendanceEntity(employee_id=employee_id, log_date=log_date,
                               log_in=min(log.log_in for log in logs),
                               log_out=max(log_outs) if log_outs else None)
        total_hours += day_hours
        total_late += day.late_minutes(shift_start)
        total_undertime += day.undertime_minutes(shift_end)
        if day_hours >= full_day_hours:
            full_day_dates.add(log_date)

    total_overtime = ZERO
    for record in overtime or ():
        _check_owner(record, employee_id)
        if record.is_approved and start <= record.ot_date <= end:
            total_overtime += record.hours

    paid_leave_dates: Set[date] = set()
    unpaid_leave_dates: Set[date] = set()
    for leave in leaves or ():
        _check_owner(leave, employee_id)
        if not leave.is_approved:
            continue
        leave_dates = set(leave.working_days_within(start, end)) - worked_dates
        if leave.is_paid:
            paid_leave_dates |= leave_dates
        else:
            unpaid_leave_dates |= leave_dates
    # A day covered by both a paid and an unpaid leave is paid
    unpaid_leave_dates -= paid_leave_dates

    summary = AttendanceSummary(
        days_worked=len(worked_dates),
        full_days=len(full_day_dates),
        total_work_hours=total_hours,
        total_late_minutes=total_late,
        total_undertime_minutes=total_undertime,
        total_overtime_hours=total_overtime,
        total_leave_days=len(paid_leave_dates),
        unpaid_leave_days=len(unpaid_leave_dates),
        payable_days=len(worked_dates) + len(paid_leave_dates),
    )
    logger.debug(f"Attendance summary for employee {employee_id}, {start} to {end}: {summary}")
    return summary
