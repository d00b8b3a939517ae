# motorph_payroll/business_logic/entities/leave_entity.py
from dataclasses import dataclass, field
from typing import List, Optional
from datetime import date
from .base_entity import BaseEntity
from motorph_payroll.constants import LeaveStatus
from motorph_payroll.exceptions import ValidationError
from motorph_payroll.utils.date_converter import iter_dates, is_weekday

@dataclass
class LeaveEntity(BaseEntity):
    employee_id: int
    start_date: date
    end_date: date
    status: LeaveStatus = field(default=LeaveStatus.PENDING)
    is_paid: bool = field(default=True)
    leave_type: Optional[str] = field(default=None) # e.g. "Vacation", "Sick"

    def __post_init__(self):
        if isinstance(self.status, str):
            self.status = LeaveStatus(self.status)
        if not isinstance(self.employee_id, int) or self.employee_id <= 0:
            raise ValidationError(f"Invalid employee ID for leave request: {self.employee_id!r}")
        if not isinstance(self.start_date, date) or not isinstance(self.end_date, date):
            raise ValidationError("Leave start and end dates are required.")
        if self.end_date < self.start_date:
            raise ValidationError(f"Leave end date {self.end_date} is before its start date {self.start_date}.")

    @property
    def is_approved(self) -> bool:
        return self.status is LeaveStatus.APPROVED

    def working_days_within(self, period_start: date, period_end: date) -> List[date]:
        """Weekdays covered by this leave that also fall inside [period_start, period_end]."""
        start = max(self.start_date, period_start)
        end = min(self.end_date, period_end)
        return [d for d in iter_dates(start, end) if is_weekday(d)]
