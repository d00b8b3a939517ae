# motorph_payroll/business_logic/contribution_calculator.py

from typing import Optional, Sequence, Union
from decimal import Decimal
import logging

from motorph_payroll.business_logic.entities.government_contributions_entity import GovernmentContributionsEntity
from motorph_payroll.business_logic.rate_tables import (
    ContributionBracket, TaxBracket, RateSchedule, RATE_SCHEDULES
)
from motorph_payroll.exceptions import ValidationError, ComputationError
from motorph_payroll.utils.money import ZERO, to_decimal, quantize_money

logger = logging.getLogger(__name__)


def _find_bracket(brackets: Sequence[Union[ContributionBracket, TaxBracket]], value: Decimal, table: str):
    for bracket in brackets:
        if bracket.contains(value):
            return bracket
    raise ComputationError(f"No {table} bracket covers {value}.")


class GovernmentContributionCalculator:
    """
    Computes the employee's mandatory contributions (SSS, PhilHealth, Pag-IBIG) and
    withholding tax for one month of gross pay, using a single RateSchedule.
    Withholding tax applies to gross pay less the mandatory contributions.
    """
    def __init__(self, rate_schedule: Optional[RateSchedule] = None):
        self.rate_schedule = rate_schedule if rate_schedule is not None else RATE_SCHEDULES[-1]

    def calculate_sss(self, gross_pay: Decimal) -> Decimal:
        gross = self._validated_gross(gross_pay)
        return quantize_money(_find_bracket(self.rate_schedule.sss, gross, "SSS").contribution_for(gross))

    def calculate_philhealth(self, gross_pay: Decimal) -> Decimal:
        gross = self._validated_gross(gross_pay)
        return quantize_money(_find_bracket(self.rate_schedule.philhealth, gross, "PhilHealth").contribution_for(gross))

    def calculate_pagibig(self, gross_pay: Decimal) -> Decimal:
        gross = self._validated_gross(gross_pay)
        return quantize_money(_find_bracket(self.rate_schedule.pagibig, gross, "Pag-IBIG").contribution_for(gross))

    def calculate_withholding_tax(self, taxable_income: Decimal) -> Decimal:
        taxable = to_decimal(taxable_income, "taxable_income")
        if taxable <= 0:
            return ZERO
        bracket = _find_bracket(self.rate_schedule.withholding_tax, taxable, "withholding tax")
        return max(ZERO, quantize_money(bracket.tax_for(taxable)))

    def calculate(self, gross_pay: Decimal, employee_id: Optional[int] = None) -> GovernmentContributionsEntity:
        gross = self._validated_gross(gross_pay)

        sss = self.calculate_sss(gross)
        philhealth = self.calculate_philhealth(gross)
        pagibig = self.calculate_pagibig(gross)
        taxable_income = gross - (sss + philhealth + pagibig)
        withholding_tax = self.calculate_withholding_tax(taxable_income)

        contributions = GovernmentContributionsEntity(
            sss=sss, philhealth=philhealth, pagibig=pagibig,
            withholding_tax=withholding_tax, employee_id=employee_id
        )
        logger.debug(f"Contributions on gross {gross} ({self.rate_schedule.name} rates): SSS {sss}, "
                     f"PhilHealth {philhealth}, Pag-IBIG {pagibig}, tax {withholding_tax} "
                     f"(taxable {taxable_income}).")
        return contributions

    @staticmethod
    def _validated_gross(gross_pay) -> Decimal:
        gross = to_decimal(gross_pay, "gross_pay")
        if gross < 0:
            raise ValidationError(f"Gross pay cannot be negative: {gross}")
        return gross
