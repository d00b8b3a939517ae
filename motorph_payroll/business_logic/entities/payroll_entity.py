# motorph_payroll/business_logic/entities/payroll_entity.py
from dataclasses import dataclass, field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from .base_entity import BaseEntity
from .government_contributions_entity import GovernmentContributionsEntity

ZERO = Decimal("0.00")

@dataclass
class PayrollEntity(BaseEntity):
    employee_id: int # Foreign Key to EmployeeEntity
    period_start: date
    period_end: date
    days_worked: int = field(default=0)
    leave_days: int = field(default=0) # approved paid leave only
    payable_days: int = field(default=0)
    total_work_hours: Decimal = field(default=ZERO)
    late_minutes: Decimal = field(default=ZERO)
    undertime_minutes: Decimal = field(default=ZERO)
    total_overtime_hours: Decimal = field(default=ZERO)
    monthly_rate: Decimal = field(default=ZERO)
    gross_earnings: Decimal = field(default=ZERO)
    overtime_pay: Decimal = field(default=ZERO)
    rice_subsidy: Decimal = field(default=ZERO)
    phone_allowance: Decimal = field(default=ZERO)
    clothing_allowance: Decimal = field(default=ZERO)
    sss: Decimal = field(default=ZERO)
    philhealth: Decimal = field(default=ZERO)
    pagibig: Decimal = field(default=ZERO)
    withholding_tax: Decimal = field(default=ZERO)
    rate_schedule: Optional[str] = field(default=None) # name of the contribution tables used
    created_at: Optional[datetime] = field(default=None)
    # allowance_total, gross_pay, total_deductions and net_pay are @properties

    @property
    def allowance_total(self) -> Decimal:
        return self.rice_subsidy + self.phone_allowance + self.clothing_allowance

    @property
    def gross_pay(self) -> Decimal:
        return self.gross_earnings + self.overtime_pay + self.allowance_total

    @property
    def government_contributions(self) -> GovernmentContributionsEntity:
        return GovernmentContributionsEntity(
            sss=self.sss, philhealth=self.philhealth, pagibig=self.pagibig,
            withholding_tax=self.withholding_tax, employee_id=self.employee_id
        )

    @property
    def total_deductions(self) -> Decimal:
        return self.sss + self.philhealth + self.pagibig + self.withholding_tax

    @property
    def net_pay(self) -> Decimal:
        # Not clamped: deductions larger than gross pay give a negative net pay
        return self.gross_pay - self.total_deductions
