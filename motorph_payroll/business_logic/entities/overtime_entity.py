# motorph_payroll/business_logic/entities/overtime_entity.py
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from .base_entity import BaseEntity
from motorph_payroll.exceptions import ValidationError
from motorph_payroll.utils.money import to_decimal

@dataclass
class OvertimeEntity(BaseEntity):
    employee_id: int
    ot_date: date
    hours: Decimal
    is_approved: bool = field(default=False) # Only approved overtime is paid

    def __post_init__(self):
        if not isinstance(self.employee_id, int) or self.employee_id <= 0:
            raise ValidationError(f"Invalid employee ID for overtime: {self.employee_id!r}")
        if not isinstance(self.ot_date, date):
            raise ValidationError("Overtime date is required.")
        self.hours = to_decimal(self.hours, "hours")
        if self.hours < 0:
            raise ValidationError(f"Overtime hours cannot be negative ({self.hours} on {self.ot_date}).")
