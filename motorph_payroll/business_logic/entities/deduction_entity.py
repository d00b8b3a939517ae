# motorph_payroll/business_logic/entities/deduction_entity.py
from dataclasses import dataclass, field
from typing import Optional
from decimal import Decimal
from .base_entity import BaseEntity
from motorph_payroll.constants import DeductionType
from motorph_payroll.exceptions import ValidationError
from motorph_payroll.utils.money import to_decimal

@dataclass
class DeductionEntity(BaseEntity):
    deduction_type: str # Label, e.g. "Cash Advance". DeductionType members are accepted and stored by value.
    amount: Decimal
    reduces_taxable_base: bool = field(default=False)
    description: Optional[str] = field(default=None)

    def __post_init__(self):
        if isinstance(self.deduction_type, DeductionType):
            self.deduction_type = self.deduction_type.value
        if not self.deduction_type or not str(self.deduction_type).strip():
            raise ValidationError("Deduction type cannot be empty.")
        self.amount = to_decimal(self.amount, "amount")
        if self.amount < 0:
            raise ValidationError(f"Deduction '{self.deduction_type}' cannot be negative.")

    @property
    def type(self) -> str:
        return self.deduction_type
