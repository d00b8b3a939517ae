# motorph_payroll/business_logic/entities/allowance_entity.py
from dataclasses import dataclass, field, replace
from typing import ClassVar, FrozenSet, Optional, Union
from datetime import date
from decimal import Decimal
from .base_entity import BaseEntity
from .employee_entity import EmployeeEntity
from motorph_payroll.constants import (
    AllowanceType, EmploymentStatus, RICE_SUBSIDY_AMOUNT, CLOTHING_ALLOWANCE_AMOUNT
)
from motorph_payroll.exceptions import ValidationError
from motorph_payroll.utils.money import to_decimal, to_optional_decimal

StatusOrEmployee = Union[EmploymentStatus, EmployeeEntity, None]


def _status_of(subject: StatusOrEmployee) -> Optional[EmploymentStatus]:
    if subject is None:
        return None
    if isinstance(subject, EmploymentStatus):
        return subject
    return subject.status


@dataclass
class Allowance(BaseEntity):
    """
    Base of the closed allowance set (rice, phone, clothing).

    Every variant answers the same questions: is an employee with a given status
    entitled to it, how much it pays, whether it is taxable, and what it is called.
    Variants differ only in their class-level rules and, for phone, in how the
    amount depends on status.
    """
    employee_id: int
    amount: Decimal
    effective_date: date = field(default_factory=date.today)

    allowance_type: ClassVar[AllowanceType]
    taxable: ClassVar[bool] = True
    eligible_statuses: ClassVar[FrozenSet[EmploymentStatus]] = frozenset({EmploymentStatus.REGULAR})

    def __post_init__(self):
        if not isinstance(self.employee_id, int) or self.employee_id <= 0:
            raise ValidationError(f"Invalid employee ID for allowance: {self.employee_id!r}")
        self.amount = to_decimal(self.amount, "amount")
        if self.amount < 0:
            raise ValidationError(f"{self.type} amount cannot be negative.")
        if not isinstance(self.effective_date, date):
            raise ValidationError(f"{self.type} requires an effective date.")

    @property
    def type(self) -> str:
        return self.allowance_type.value

    def is_eligible(self, subject: StatusOrEmployee) -> bool:
        return _status_of(subject) in self.eligible_statuses

    def calculated_amount(self) -> Decimal:
        return self.amount

    def is_taxable(self) -> bool:
        return self.taxable

    def for_employee(self, employee: EmployeeEntity) -> "Allowance":
        """A fresh copy of this allowance for another employee (no shared state with the original)."""
        return replace(self, id=None, employee_id=employee.id, effective_date=date.today())


@dataclass
class RiceAllowance(Allowance):
    amount: Decimal = RICE_SUBSIDY_AMOUNT

    allowance_type: ClassVar[AllowanceType] = AllowanceType.RICE
    taxable: ClassVar[bool] = False
    eligible_statuses: ClassVar[FrozenSet[EmploymentStatus]] = frozenset(
        {EmploymentStatus.REGULAR, EmploymentStatus.PROBATIONARY}
    )


@dataclass
class PhoneAllowance(Allowance):
    # Regular employees get `amount`. Probationary employees are entitled only when the
    # caller sets a reduced `probationary_amount`; without it the rule is "Regular only".
    probationary_amount: Optional[Decimal] = field(default=None)
    regular_amount: Optional[Decimal] = field(default=None, repr=False)

    allowance_type: ClassVar[AllowanceType] = AllowanceType.PHONE

    def __post_init__(self):
        super().__post_init__()
        self.probationary_amount = to_optional_decimal(self.probationary_amount, "probationary_amount")
        if self.probationary_amount is not None and self.probationary_amount < 0:
            raise ValidationError("Probationary phone allowance cannot be negative.")
        self.regular_amount = self.amount if self.regular_amount is None else to_decimal(self.regular_amount)

    def is_eligible(self, subject: StatusOrEmployee) -> bool:
        status = _status_of(subject)
        if status is EmploymentStatus.PROBATIONARY:
            return self.probationary_amount is not None
        return super().is_eligible(status)

    def for_employee(self, employee: EmployeeEntity) -> "PhoneAllowance":
        amount = self.regular_amount
        if employee.status is EmploymentStatus.PROBATIONARY and self.probationary_amount is not None:
            amount = self.probationary_amount
        return replace(self, id=None, employee_id=employee.id, amount=amount, effective_date=date.today())


@dataclass
class ClothingAllowance(Allowance):
    amount: Decimal = CLOTHING_ALLOWANCE_AMOUNT

    allowance_type: ClassVar[AllowanceType] = AllowanceType.CLOTHING
