# motorph_payroll/business_logic/compensation_package.py

from dataclasses import dataclass, field
from typing import Dict, List, Optional
from datetime import date
from decimal import Decimal
import logging

from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity
from motorph_payroll.business_logic.entities.allowance_entity import (
    Allowance, RiceAllowance, PhoneAllowance, ClothingAllowance
)
from motorph_payroll.business_logic.entities.deduction_entity import DeductionEntity
from motorph_payroll.business_logic.entities.government_contributions_entity import GovernmentContributionsEntity
from motorph_payroll.constants import (
    BONUS_SALARY_RATE, BONUS_ALLOWANCE_RATE, DEFAULT_PAYROLL_CONFIG, STANDARD_PHONE_ALLOWANCE
)
from motorph_payroll.utils.money import ZERO, quantize_money, format_peso

logger = logging.getLogger(__name__)


@dataclass
class CompensationPackage:
    """
    An employee's allowances, other deductions and government contributions viewed
    as one unit, independent of any pay run. Totals are computed on read, so they
    always match the current lists.
    """
    employee: Optional[EmployeeEntity]
    package_name: str
    effective_date: date = field(default_factory=date.today)
    is_active: bool = True
    allowances: List[Allowance] = field(default_factory=list)
    deductions: List[DeductionEntity] = field(default_factory=list)
    government_contributions: GovernmentContributionsEntity = field(default_factory=GovernmentContributionsEntity)

    @classmethod
    def standard(cls, employee: EmployeeEntity, package_name: str = "Standard Package",
                 probationary_phone_allowance: Decimal = DEFAULT_PAYROLL_CONFIG["probationary_phone_allowance"]
                 ) -> "CompensationPackage":
        """Rice for everyone eligible; phone and clothing for Regular; reduced phone for Probationary."""
        package = cls(employee=employee, package_name=package_name)
        for allowance in (RiceAllowance(employee.id),
                          PhoneAllowance(employee.id, STANDARD_PHONE_ALLOWANCE,
                                         probationary_amount=probationary_phone_allowance),
                          ClothingAllowance(employee.id)):
            if allowance.is_eligible(employee):
                package.add_allowance(allowance.for_employee(employee))
        logger.debug(f"Standard package for employee {employee.id}: {len(package.allowances)} allowance(s).")
        return package

    # --- Mutation ---

    def add_allowance(self, allowance: Allowance) -> bool:
        if allowance is None:
            return False
        if self.employee is not None and not allowance.is_eligible(self.employee):
            logger.info(f"{allowance.type} rejected for employee {self.employee.id} "
                        f"({self.employee.status.value}): not eligible.")
            return False
        self.allowances.append(allowance)
        return True

    def remove_allowance(self, allowance: Allowance) -> bool:
        try:
            self.allowances.remove(allowance)
            return True
        except ValueError:
            return False

    def add_deduction(self, deduction: DeductionEntity) -> bool:
        if deduction is None:
            return False
        self.deductions.append(deduction)
        return True

    def remove_deduction(self, deduction: DeductionEntity) -> bool:
        try:
            self.deductions.remove(deduction)
            return True
        except ValueError:
            return False

    # --- Totals ---

    @property
    def total_allowances(self) -> Decimal:
        return sum((a.calculated_amount() for a in self.allowances), ZERO)

    @property
    def total_taxable_allowances(self) -> Decimal:
        return sum((a.calculated_amount() for a in self.allowances if a.is_taxable()), ZERO)

    @property
    def total_deductions(self) -> Decimal:
        return sum((d.amount for d in self.deductions), ZERO) + self.government_contributions.total

    @property
    def taxable_income(self) -> Decimal:
        """Basic salary and taxable allowances, less mandatory contributions and pre-tax deductions."""
        basic_salary = self.employee.basic_salary if self.employee is not None else ZERO
        pre_tax = sum((d.amount for d in self.deductions if d.reduces_taxable_base), ZERO)
        return (basic_salary + self.total_taxable_allowances
                - self.government_contributions.mandatory_total - pre_tax)

    @property
    def net_compensation(self) -> Decimal:
        basic_salary = self.employee.basic_salary if self.employee is not None else ZERO
        return basic_salary + self.total_allowances - self.total_deductions

    # --- Queries ---

    def allowances_by_type(self) -> Dict[str, List[Allowance]]:
        grouped: Dict[str, List[Allowance]] = {}
        for allowance in self.allowances:
            grouped.setdefault(allowance.type, []).append(allowance)
        return grouped

    def deductions_by_type(self) -> Dict[str, List[DeductionEntity]]:
        grouped: Dict[str, List[DeductionEntity]] = {}
        for deduction in self.deductions:
            grouped.setdefault(deduction.type, []).append(deduction)
        return grouped

    def clone_for_employee(self, new_employee: EmployeeEntity) -> "CompensationPackage":
        """
        A new package for `new_employee` with the same name. Each allowance is
        re-created for the new employee only if they are eligible for it; deductions
        and contributions are employee-specific and are not copied.
        """
        clone = CompensationPackage(employee=new_employee, package_name=self.package_name)
        for allowance in self.allowances:
            if allowance.is_eligible(new_employee):
                clone.add_allowance(allowance.for_employee(new_employee))
        logger.debug(f"Cloned package '{self.package_name}' to employee {new_employee.id}: "
                     f"{len(clone.allowances)} of {len(self.allowances)} allowance(s) kept.")
        return clone

    def is_eligible_for_bonus(self) -> bool:
        return self.employee is not None and self.employee.can_receive_bonus and self.is_active

    def calculate_bonus_amount(self) -> Decimal:
        if not self.is_eligible_for_bonus():
            return ZERO
        return quantize_money(self.employee.basic_salary * BONUS_SALARY_RATE
                              + self.total_allowances * BONUS_ALLOWANCE_RATE)

    def is_valid(self) -> bool:
        return (self.employee is not None
                and isinstance(self.employee.id, int) and self.employee.id > 0
                and bool(self.package_name and self.package_name.strip())
                and self.effective_date is not None
                and self.total_allowances >= 0
                and self.total_deductions >= 0)

    def __str__(self) -> str:
        owner = self.employee.full_name if self.employee is not None else "no employee"
        return (f"CompensationPackage('{self.package_name}' for {owner}, "
                f"allowances={format_peso(self.total_allowances)}, "
                f"deductions={format_peso(self.total_deductions)}, "
                f"net={format_peso(self.net_compensation)}, active={self.is_active})")
