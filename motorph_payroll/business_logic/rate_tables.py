# motorph_payroll/business_logic/rate_tables.py

"""
Contribution and withholding-tax tables.

A RateSchedule bundles the SSS, PhilHealth, Pag-IBIG and withholding tables that
were in force from a given date. Tables are plain data so new rates can be added
(or injected in tests) without touching the calculator.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Sequence
from datetime import date
from decimal import Decimal
import logging

from motorph_payroll.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContributionBracket:
    """[lower, upper) range of gross pay; pays a fixed `amount` or `gross x rate`. upper None = open-ended."""
    lower: Decimal
    upper: Optional[Decimal]
    amount: Optional[Decimal] = None
    rate: Optional[Decimal] = None

    def contains(self, value: Decimal) -> bool:
        return value >= self.lower and (self.upper is None or value < self.upper)

    def contribution_for(self, value: Decimal) -> Decimal:
        if self.amount is not None:
            return self.amount
        return value * self.rate


@dataclass(frozen=True)
class TaxBracket:
    lower: Decimal
    upper: Optional[Decimal]
    base: Decimal
    rate: Decimal

    def contains(self, value: Decimal) -> bool:
        return value >= self.lower and (self.upper is None or value < self.upper)

    def tax_for(self, taxable: Decimal) -> Decimal:
        return self.base + (taxable - self.lower) * self.rate


@dataclass(frozen=True)
class RateSchedule:
    name: str
    effective_from: date
    sss: Tuple[ContributionBracket, ...]
    philhealth: Tuple[ContributionBracket, ...]
    pagibig: Tuple[ContributionBracket, ...]
    withholding_tax: Tuple[TaxBracket, ...] = field(repr=False)


def _d(value: str) -> Decimal:
    return Decimal(value)


def _sss_table(rate: str, min_credit: int, max_credit: int) -> Tuple[ContributionBracket, ...]:
    """
    SSS employee share by monthly salary credit (MSC). Credits step by 500 and each
    compensation range of 500 maps to the credit at its midpoint; e.g. with a
    4,000 minimum credit, compensation below 4,250 pays on 4,000 and 4,250 to
    4,749.99 pays on 4,500.
    """
    share = _d(rate)
    brackets = []
    lower = _d("0")
    credit = min_credit
    while credit < max_credit:
        upper = Decimal(credit + 250)
        brackets.append(ContributionBracket(lower, upper, amount=(Decimal(credit) * share).quantize(_d("0.01"))))
        lower = upper
        credit += 500
    brackets.append(ContributionBracket(lower, None, amount=(Decimal(max_credit) * share).quantize(_d("0.01"))))
    return tuple(brackets)


SSS_2023 = _sss_table("0.045", 4000, 30000)
SSS_2025 = _sss_table("0.05", 5000, 35000)

# Employee share (half of the premium); floor and ceiling are fixed amounts
PHILHEALTH_2023 = (
    ContributionBracket(_d("0"), _d("10000"), amount=_d("200.00")),
    ContributionBracket(_d("10000"), _d("80000"), rate=_d("0.02")),
    ContributionBracket(_d("80000"), None, amount=_d("1600.00")),
)
PHILHEALTH_2024 = (
    ContributionBracket(_d("0"), _d("10000"), amount=_d("250.00")),
    ContributionBracket(_d("10000"), _d("100000"), rate=_d("0.025")),
    ContributionBracket(_d("100000"), None, amount=_d("2500.00")),
)

PAGIBIG_2023 = (
    ContributionBracket(_d("0"), _d("1500"), rate=_d("0.01")),
    ContributionBracket(_d("1500"), _d("5000"), rate=_d("0.02")),
    ContributionBracket(_d("5000"), None, amount=_d("100.00")), # 2% of the 5,000 max fund salary
)
PAGIBIG_2024 = (
    ContributionBracket(_d("0"), _d("1500"), rate=_d("0.01")),
    ContributionBracket(_d("1500"), _d("10000"), rate=_d("0.02")),
    ContributionBracket(_d("10000"), None, amount=_d("200.00")),
)

# TRAIN law monthly withholding table, effective 2023
WITHHOLDING_TAX_2023 = (
    TaxBracket(_d("0"), _d("20833"), _d("0"), _d("0")),
    TaxBracket(_d("20833"), _d("33333"), _d("0"), _d("0.15")),
    TaxBracket(_d("33333"), _d("66667"), _d("1875.00"), _d("0.20")),
    TaxBracket(_d("66667"), _d("166667"), _d("8541.80"), _d("0.25")),
    TaxBracket(_d("166667"), _d("666667"), _d("33541.80"), _d("0.30")),
    TaxBracket(_d("666667"), None, _d("183541.80"), _d("0.35")),
)

RATE_SCHEDULES: Tuple[RateSchedule, ...] = (
    RateSchedule("2023", date(2023, 1, 1), SSS_2023, PHILHEALTH_2023, PAGIBIG_2023, WITHHOLDING_TAX_2023),
    RateSchedule("2024", date(2024, 1, 1), SSS_2023, PHILHEALTH_2024, PAGIBIG_2024, WITHHOLDING_TAX_2023),
    RateSchedule("2025", date(2025, 1, 1), SSS_2025, PHILHEALTH_2024, PAGIBIG_2024, WITHHOLDING_TAX_2023),
)


def select_rate_schedule(on_date: date, schedules: Optional[Sequence[RateSchedule]] = None) -> RateSchedule:
    """Returns the latest schedule effective on `on_date`; dates before every schedule use the earliest one."""
    available = sorted(schedules if schedules is not None else RATE_SCHEDULES, key=lambda s: s.effective_from)
    if not available:
        raise ValidationError("No rate schedules configured.")
    if not isinstance(on_date, date):
        raise ValidationError(f"Invalid date for rate schedule lookup: {on_date!r}")

    effective = [s for s in available if s.effective_from <= on_date]
    if not effective:
        logger.warning(f"No rate schedule effective on {on_date}; using earliest schedule '{available[0].name}'.")
        return available[0]
    return effective[-1]
