from datetime import date
from decimal import Decimal

from motorph_payroll.business_logic.compensation_package import CompensationPackage
from motorph_payroll.business_logic.entities.deduction_entity import DeductionEntity
from motorph_payroll.business_logic.entities.payroll_entity import PayrollEntity
from motorph_payroll.business_logic.report_manager import ReportManager, LINE_WIDTH
from motorph_payroll.constants import DeductionType

D = Decimal


def _payroll():
    return PayrollEntity(employee_id=10001, period_start=date(2024, 8, 1), period_end=date(2024, 8, 31),
                         days_worked=22, payable_days=22, monthly_rate=D("50000"), gross_earnings=D("50000.00"),
                         rice_subsidy=D("1500.00"), phone_allowance=D("1000.00"), clothing_allowance=D("800.00"),
                         sss=D("1350.00"), philhealth=D("1332.50"), pagibig=D("200.00"),
                         withholding_tax=D("5291.90"), rate_schedule="2024")


class TestPayslip:

    def test_header_and_net_pay(self, regular_employee):
        text = ReportManager().payslip_text(_payroll(), regular_employee)
        lines = text.splitlines()
        assert lines[0] == "MotorPH PAYSLIP"
        assert "Name: Manuel Garcia" in lines
        assert "Period: 2024-08-01 to 2024-08-31" in lines
        assert "DEDUCTIONS (2024 rates)" in lines
        assert lines[-1].startswith("NET PAY")
        assert lines[-1].endswith("₱45,125.60")

    def test_amount_lines_are_aligned(self):
        text = ReportManager().payslip_text(_payroll())
        amount_lines = [line for line in text.splitlines() if "₱" in line]
        assert amount_lines
        assert all(len(line) == LINE_WIDTH for line in amount_lines)

    def test_without_employee(self):
        text = ReportManager().payslip_text(_payroll())
        assert "Employee ID: 10001" in text
        assert "Name:" not in text


class TestCompensationSummary:

    def test_summary_lists_allowances_and_bonus(self, regular_employee):
        package = CompensationPackage.standard(regular_employee)
        package.add_deduction(DeductionEntity(DeductionType.CASH_ADVANCE, D("500")))
        text = ReportManager().compensation_summary_text(package)

        assert "Compensation package: Standard Package" in text
        assert "Rice Subsidy (non-taxable)" in text
        assert "Cash Advance" in text
        assert "₱3,500.00" in text
        assert any(line.startswith("Taxable income") and line.endswith("₱52,000.00") for line in text.splitlines())
        assert "Net compensation" in text
        assert "Bonus (if granted)" in text

    def test_no_bonus_line_when_not_eligible(self, contractual_employee):
        contractual_employee.bonus_eligible = False
        text = ReportManager().compensation_summary_text(CompensationPackage.standard(contractual_employee))
        assert "(none)" in text
        assert "Bonus" not in text
