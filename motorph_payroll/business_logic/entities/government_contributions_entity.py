# motorph_payroll/business_logic/entities/government_contributions_entity.py
from dataclasses import dataclass, field
from typing import Optional
from decimal import Decimal
from .base_entity import BaseEntity
from motorph_payroll.exceptions import ValidationError
from motorph_payroll.utils.money import to_decimal

@dataclass
class GovernmentContributionsEntity(BaseEntity):
    sss: Decimal = field(default=Decimal("0.00"))
    philhealth: Decimal = field(default=Decimal("0.00"))
    pagibig: Decimal = field(default=Decimal("0.00"))
    withholding_tax: Decimal = field(default=Decimal("0.00"))
    employee_id: Optional[int] = field(default=None)

    def __post_init__(self):
        for name in ("sss", "philhealth", "pagibig", "withholding_tax"):
            value = to_decimal(getattr(self, name), name)
            if value < 0:
                raise ValidationError(f"{name} contribution cannot be negative.")
            setattr(self, name, value)

    @property
    def mandatory_total(self) -> Decimal:
        """SSS + PhilHealth + Pag-IBIG, the amount subtracted before withholding tax."""
        return self.sss + self.philhealth + self.pagibig

    @property
    def total(self) -> Decimal:
        return self.mandatory_total + self.withholding_tax
