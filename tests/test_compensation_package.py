"""Compensation package totals, eligibility filtering, cloning and bonus."""

from decimal import Decimal

import pytest

from motorph_payroll.business_logic.compensation_package import CompensationPackage
from motorph_payroll.business_logic.entities.allowance_entity import (
    RiceAllowance, PhoneAllowance, ClothingAllowance
)
from motorph_payroll.business_logic.entities.deduction_entity import DeductionEntity
from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity
from motorph_payroll.business_logic.entities.government_contributions_entity import GovernmentContributionsEntity
from motorph_payroll.constants import DeductionType, EmploymentStatus
from motorph_payroll.exceptions import ValidationError

D = Decimal


@pytest.fixture
def regular_package(regular_employee):
    return CompensationPackage.standard(regular_employee)


class TestStandardPackage:

    def test_regular_gets_all_three_allowances(self, regular_package):
        assert [a.type for a in regular_package.allowances] == ["Rice Subsidy", "Phone Allowance", "Clothing Allowance"]
        assert regular_package.total_allowances == D("3500.00")

    def test_probationary_gets_rice_and_reduced_phone(self, probationary_employee):
        package = CompensationPackage.standard(probationary_employee)
        amounts = {a.type: a.calculated_amount() for a in package.allowances}
        assert amounts == {"Rice Subsidy": D("1500.00"), "Phone Allowance": D("500.00")}

    def test_contractual_gets_nothing(self, contractual_employee):
        assert CompensationPackage.standard(contractual_employee).allowances == []


class TestMutationAndTotals:

    def test_ineligible_allowance_is_rejected(self, probationary_employee):
        package = CompensationPackage(employee=probationary_employee, package_name="Custom")
        assert package.add_allowance(ClothingAllowance(probationary_employee.id)) is False
        assert package.allowances == []
        assert package.total_allowances == 0

    def test_totals_follow_every_mutation(self, regular_package):
        cash_advance = DeductionEntity(DeductionType.CASH_ADVANCE, D("700"))
        assert regular_package.add_deduction(cash_advance)
        assert regular_package.total_deductions == D("700")

        rice = regular_package.allowances[0]
        assert regular_package.remove_allowance(rice)
        assert regular_package.total_allowances == D("2000.00")

        assert regular_package.remove_deduction(cash_advance)
        assert regular_package.total_deductions == 0
        assert regular_package.remove_deduction(cash_advance) is False

    def test_contributions_count_as_deductions(self, regular_employee):
        package = CompensationPackage(
            employee=regular_employee, package_name="With contributions",
            government_contributions=GovernmentContributionsEntity(
                sss=D("1350"), philhealth=D("1250"), pagibig=D("200"), withholding_tax=D("5000")),
        )
        assert package.total_deductions == D("7800")
        assert package.net_compensation == D("50000") - D("7800")

    def test_taxable_allowances_exclude_rice(self, regular_package):
        assert regular_package.total_taxable_allowances == D("2000.00")

    def test_taxable_income_uses_taxable_allowances_and_pre_tax_deductions(self, regular_package):
        regular_package.government_contributions = GovernmentContributionsEntity(
            sss=D("1350"), philhealth=D("1250"), pagibig=D("200"), withholding_tax=D("5000"))
        regular_package.add_deduction(DeductionEntity("Retirement Plan", D("500"), reduces_taxable_base=True))
        regular_package.add_deduction(DeductionEntity(DeductionType.CASH_ADVANCE, D("700")))
        # 50000 + 2000 taxable allowances - 2800 mandatory contributions - 500 pre-tax
        assert regular_package.taxable_income == D("48700.00")

    def test_grouping_by_type(self, regular_package):
        regular_package.add_deduction(DeductionEntity("Loan", D("100")))
        regular_package.add_deduction(DeductionEntity("Loan", D("50")))
        assert set(regular_package.allowances_by_type()) == {"Rice Subsidy", "Phone Allowance", "Clothing Allowance"}
        assert len(regular_package.deductions_by_type()["Loan"]) == 2

    def test_negative_deduction_is_rejected(self):
        with pytest.raises(ValidationError):
            DeductionEntity("Loan", D("-1"))

    def test_blank_deduction_label_is_rejected(self):
        with pytest.raises(ValidationError):
            DeductionEntity("  ", D("1"))


class TestCloneForEmployee:

    def test_clone_keeps_only_eligible_types(self, regular_package, probationary_employee):
        clone = regular_package.clone_for_employee(probationary_employee)
        assert clone.employee is probationary_employee
        assert clone.package_name == regular_package.package_name
        assert [a.type for a in clone.allowances] == ["Rice Subsidy", "Phone Allowance"]
        assert all(a.employee_id == probationary_employee.id for a in clone.allowances)
        assert len(clone.allowances) <= len(regular_package.allowances)

    def test_clone_copies_data_not_references(self, regular_package, regular_employee):
        other = EmployeeEntity(id=10009, first_name="Eduard", last_name="Hernandez",
                               status=EmploymentStatus.REGULAR, basic_salary=D("40000"))
        clone = regular_package.clone_for_employee(other)
        for original, copied in zip(regular_package.allowances, clone.allowances):
            assert original is not copied
            assert original.calculated_amount() == copied.calculated_amount()
        assert regular_package.allowances[0].employee_id == regular_employee.id

    def test_clone_to_contractual_has_no_allowances(self, regular_package, contractual_employee):
        assert regular_package.clone_for_employee(contractual_employee).allowances == []

    def test_clone_does_not_copy_deductions(self, regular_package, probationary_employee):
        regular_package.add_deduction(DeductionEntity("Loan", D("100")))
        assert regular_package.clone_for_employee(probationary_employee).deductions == []


class TestBonus:

    def test_bonus_is_ten_percent_salary_plus_five_percent_allowances(self, regular_package):
        assert regular_package.is_eligible_for_bonus()
        # 50000 * 0.10 + 3500 * 0.05
        assert regular_package.calculate_bonus_amount() == D("5175.00")

    def test_inactive_package_gets_no_bonus(self, regular_package):
        regular_package.is_active = False
        assert not regular_package.is_eligible_for_bonus()
        assert regular_package.calculate_bonus_amount() == 0

    def test_bonus_flag_and_termination(self, regular_employee):
        regular_employee.bonus_eligible = False
        assert CompensationPackage.standard(regular_employee).calculate_bonus_amount() == 0

        regular_employee.bonus_eligible = True
        regular_employee.status = EmploymentStatus.TERMINATED
        assert not CompensationPackage(employee=regular_employee, package_name="x").is_eligible_for_bonus()

    def test_package_without_employee(self):
        package = CompensationPackage(employee=None, package_name="Template")
        assert not package.is_eligible_for_bonus()
        assert not package.is_valid()
        assert package.add_allowance(RiceAllowance(10001))


class TestValidity:

    def test_standard_package_is_valid(self, regular_package):
        assert regular_package.is_valid()

    def test_blank_name_is_invalid(self, regular_employee):
        assert not CompensationPackage(employee=regular_employee, package_name="  ").is_valid()

    def test_str_mentions_name_and_owner(self, regular_package):
        text = str(regular_package)
        assert "Standard Package" in text
        assert "Manuel Garcia" in text
