# motorph_payroll/business_logic/entities/attendance_entity.py
from dataclasses import dataclass, field
from typing import Optional
from datetime import date, datetime, time
from decimal import Decimal
from .base_entity import BaseEntity
from motorph_payroll.constants import DEFAULT_PAYROLL_CONFIG
from motorph_payroll.exceptions import ValidationError
from motorph_payroll.utils.money import CENTAVO, ZERO

SECONDS_PER_HOUR = Decimal(3600)
SECONDS_PER_MINUTE = Decimal(60)

@dataclass
class AttendanceEntity(BaseEntity):
    """
    One day of time logs for an employee.
    log_in None means the employee did not report that day; log_out None means
    the employee has not logged out (or the log-out was never recorded).
    """
    employee_id: int
    log_date: date
    log_in: Optional[time] = field(default=None)
    log_out: Optional[time] = field(default=None)

    def __post_init__(self):
        if not isinstance(self.employee_id, int) or self.employee_id <= 0:
            raise ValidationError(f"Invalid employee ID for attendance: {self.employee_id!r}")
        if not isinstance(self.log_date, date):
            raise ValidationError("Attendance date is required.")
        if self.log_out is not None and self.log_in is None:
            raise ValidationError(f"Attendance on {self.log_date} has a log-out time but no log-in time.")
        if self.log_in is not None and self.log_out is not None and self.log_out < self.log_in:
            raise ValidationError(
                f"Log-out time {self.log_out} cannot be earlier than log-in time {self.log_in} ({self.log_date})."
            )

    def _minutes_between(self, earlier: time, later: time) -> Decimal:
        delta = datetime.combine(self.log_date, later) - datetime.combine(self.log_date, earlier)
        return (Decimal(int(delta.total_seconds())) / SECONDS_PER_MINUTE).quantize(CENTAVO)

    @property
    def is_present(self) -> bool:
        return self.log_in is not None

    @property
    def work_hours(self) -> Decimal:
        if self.log_in is None or self.log_out is None:
            return ZERO
        delta = datetime.combine(self.log_date, self.log_out) - datetime.combine(self.log_date, self.log_in)
        hours = Decimal(int(delta.total_seconds())) / SECONDS_PER_HOUR
        return max(ZERO, hours.quantize(CENTAVO))

    def late_minutes(self, shift_start: time = DEFAULT_PAYROLL_CONFIG["shift_start"]) -> Decimal:
        if self.log_in is None or self.log_in <= shift_start:
            return ZERO
        return self._minutes_between(shift_start, self.log_in)

    def is_late(self, shift_start: time = DEFAULT_PAYROLL_CONFIG["shift_start"]) -> bool:
        return self.late_minutes(shift_start) > 0

    def undertime_minutes(self, shift_end: time = DEFAULT_PAYROLL_CONFIG["shift_end"]) -> Decimal:
        # No log-out means there is nothing to measure undertime against
        if not self.is_present or self.log_out is None or self.log_out >= shift_end:
            return ZERO
        return self._minutes_between(self.log_out, shift_end)

    def has_undertime(self, shift_end: time = DEFAULT_PAYROLL_CONFIG["shift_end"]) -> bool:
        return self.undertime_minutes(shift_end) > 0

    def is_full_day(self, full_day_hours: Decimal = DEFAULT_PAYROLL_CONFIG["full_day_hours"]) -> bool:
        return self.work_hours >= full_day_hours

    def __str__(self) -> str:
        return (f"Attendance(id={self.id}, employee_id={self.employee_id}, date={self.log_date}, "
                f"log_in={self.log_in}, log_out={self.log_out}, hours={self.work_hours:.2f})")
