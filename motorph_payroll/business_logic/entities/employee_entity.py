# motorph_payroll/business_logic/entities/employee_entity.py
from dataclasses import dataclass, field
from typing import Optional
from datetime import date
from decimal import Decimal
from .base_entity import BaseEntity
from motorph_payroll.constants import EmploymentStatus
from motorph_payroll.utils.money import to_decimal, to_optional_decimal

@dataclass
class EmployeeEntity(BaseEntity):
    # id is the employee number (e.g. 10001), assigned by HR rather than by the database
    first_name: str
    last_name: str
    status: EmploymentStatus = field(default=EmploymentStatus.REGULAR)
    basic_salary: Decimal = field(default=Decimal("0.00"))
    position: Optional[str] = field(default=None)
    # Fixed monthly entitlements. None means "use the standard amount for this allowance".
    rice_subsidy: Optional[Decimal] = field(default=None)
    phone_allowance: Optional[Decimal] = field(default=None)
    clothing_allowance: Optional[Decimal] = field(default=None)
    bonus_eligible: bool = field(default=True)
    birthday: Optional[date] = field(default=None)
    address: Optional[str] = field(default=None)
    phone_number: Optional[str] = field(default=None)
    sss_number: Optional[str] = field(default=None)
    philhealth_number: Optional[str] = field(default=None)
    tin_number: Optional[str] = field(default=None)
    pagibig_number: Optional[str] = field(default=None)
    immediate_supervisor: Optional[str] = field(default=None)

    def __post_init__(self):
        if isinstance(self.status, str):
            self.status = EmploymentStatus(self.status)
        self.basic_salary = to_decimal(self.basic_salary, "basic_salary")
        self.rice_subsidy = to_optional_decimal(self.rice_subsidy, "rice_subsidy")
        self.phone_allowance = to_optional_decimal(self.phone_allowance, "phone_allowance")
        self.clothing_allowance = to_optional_decimal(self.clothing_allowance, "clothing_allowance")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_regular_employee(self) -> bool:
        return self.status is EmploymentStatus.REGULAR

    @property
    def can_receive_bonus(self) -> bool:
        return self.bonus_eligible and self.status is not EmploymentStatus.TERMINATED
