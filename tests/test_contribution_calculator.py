"""Bracket lookups, withholding tax and rate-schedule selection."""

from datetime import date
from decimal import Decimal

import pytest

from motorph_payroll.business_logic.contribution_calculator import GovernmentContributionCalculator
from motorph_payroll.business_logic.rate_tables import (
    RATE_SCHEDULES, RateSchedule, ContributionBracket, TaxBracket, select_rate_schedule,
    SSS_2023, SSS_2025
)
from motorph_payroll.exceptions import ValidationError

D = Decimal


@pytest.fixture
def schedule_2024():
    return select_rate_schedule(date(2024, 8, 31))


@pytest.fixture
def calc(schedule_2024):
    return GovernmentContributionCalculator(schedule_2024)


class TestRateScheduleSelection:

    @pytest.mark.parametrize("on_date,name", [
        (date(2023, 1, 1), "2023"),
        (date(2023, 12, 31), "2023"),
        (date(2024, 1, 1), "2024"),
        (date(2024, 8, 31), "2024"),
        (date(2025, 6, 30), "2025"),
    ])
    def test_latest_effective_schedule_wins(self, on_date, name):
        assert select_rate_schedule(on_date).name == name

    def test_date_before_every_schedule_uses_the_earliest(self):
        assert select_rate_schedule(date(2019, 5, 1)).name == "2023"

    def test_injected_schedules(self):
        flat = RateSchedule(
            "flat", date(2000, 1, 1),
            sss=(ContributionBracket(D("0"), None, amount=D("10")),),
            philhealth=(ContributionBracket(D("0"), None, amount=D("20")),),
            pagibig=(ContributionBracket(D("0"), None, amount=D("30")),),
            withholding_tax=(TaxBracket(D("0"), None, D("0"), D("0")),),
        )
        assert select_rate_schedule(date(2024, 1, 1), [flat]) is flat
        result = GovernmentContributionCalculator(flat).calculate(D("1000"))
        assert result.total == D("60.00")

    def test_empty_schedule_list_is_rejected(self):
        with pytest.raises(ValidationError):
            select_rate_schedule(date(2024, 1, 1), [])


class TestSSSTables:

    def test_tables_are_contiguous(self):
        for table in (SSS_2023, SSS_2025):
            for lower, upper in zip(table, table[1:]):
                assert lower.upper == upper.lower
            assert table[-1].upper is None

    @pytest.mark.parametrize("gross,expected", [
        (D("0"), D("180.00")),
        (D("4249.99"), D("180.00")),
        (D("4250"), D("202.50")),
        (D("20000"), D("900.00")),
        (D("29749.99"), D("1327.50")),
        (D("29750"), D("1350.00")),
        (D("150000"), D("1350.00")),
    ])
    def test_2023_employee_share(self, gross, expected):
        calc = GovernmentContributionCalculator(RATE_SCHEDULES[0])
        assert calc.calculate_sss(gross) == expected

    def test_2025_cap(self):
        calc = GovernmentContributionCalculator(select_rate_schedule(date(2025, 1, 31)))
        assert calc.calculate_sss(D("100000")) == D("1750.00")
        assert calc.calculate_sss(D("1000")) == D("250.00")


class TestOtherContributions:

    @pytest.mark.parametrize("gross,expected", [
        (D("5000"), D("250.00")),
        (D("10000"), D("250.00")),
        (D("53300"), D("1332.50")),
        (D("100000"), D("2500.00")),
        (D("250000"), D("2500.00")),
    ])
    def test_philhealth_2024(self, calc, gross, expected):
        assert calc.calculate_philhealth(gross) == expected

    @pytest.mark.parametrize("gross,expected", [
        (D("1000"), D("10.00")),
        (D("1500"), D("30.00")),
        (D("9000"), D("180.00")),
        (D("53300"), D("200.00")),
    ])
    def test_pagibig_2024(self, calc, gross, expected):
        assert calc.calculate_pagibig(gross) == expected

    @pytest.mark.parametrize("taxable,expected", [
        (D("0"), D("0.00")),
        (D("-100"), D("0.00")),
        (D("20833"), D("0.00")),
        (D("25000"), D("625.05")),
        (D("50417.50"), D("5291.90")),
        (D("100000"), D("16875.05")),
    ])
    def test_withholding_tax(self, calc, taxable, expected):
        assert calc.calculate_withholding_tax(taxable) == expected


class TestCalculate:

    def test_monthly_contributions_for_regular_salary(self, calc):
        result = calc.calculate(D("53300"), employee_id=10001)
        assert result.sss == D("1350.00")
        assert result.philhealth == D("1332.50")
        assert result.pagibig == D("200.00")
        assert result.withholding_tax == D("5291.90")
        assert result.mandatory_total == D("2882.50")
        assert result.total == D("8174.40")
        assert result.employee_id == 10001

    def test_tax_is_applied_after_mandatory_contributions(self, calc):
        result = calc.calculate(D("25000"))
        taxable = D("25000") - result.mandatory_total
        assert result.withholding_tax == calc.calculate_withholding_tax(taxable)

    def test_zero_gross_still_pays_minimum_brackets_without_tax(self, calc):
        result = calc.calculate(D("0"))
        assert result.withholding_tax == D("0.00")
        assert all(v >= 0 for v in (result.sss, result.philhealth, result.pagibig))

    def test_negative_gross_is_rejected(self, calc):
        with pytest.raises(ValidationError):
            calc.calculate(D("-0.01"))

    @pytest.mark.parametrize("gross", [float("nan"), float("inf"), float("-inf"), D("NaN"), D("Infinity"), "nan"])
    def test_non_finite_gross_is_rejected(self, calc, gross):
        with pytest.raises(ValidationError):
            calc.calculate(gross)

    @pytest.mark.parametrize("taxable", [float("nan"), D("Infinity")])
    def test_non_finite_taxable_income_is_rejected(self, calc, taxable):
        with pytest.raises(ValidationError):
            calc.calculate_withholding_tax(taxable)

    def test_results_are_quantized_to_centavos(self, calc):
        result = calc.calculate(D("12345.678"))
        for value in (result.sss, result.philhealth, result.pagibig, result.withholding_tax):
            assert value == value.quantize(D("0.01"))
