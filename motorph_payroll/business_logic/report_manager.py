# motorph_payroll/business_logic/report_manager.py

from typing import Optional, List
from decimal import Decimal

from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity
from motorph_payroll.business_logic.entities.payroll_entity import PayrollEntity
from motorph_payroll.business_logic.compensation_package import CompensationPackage
from motorph_payroll.config import COMPANY_NAME
from motorph_payroll.constants import DATE_FORMAT
from motorph_payroll.utils.money import format_peso
import logging

logger = logging.getLogger(__name__)

LINE_WIDTH = 44

def _line(label: str, amount: Decimal) -> str:
    value = format_peso(amount)
    return f"{label}{value:>{LINE_WIDTH - len(label)}}"

def _rule(char: str = "-") -> str:
    return char * LINE_WIDTH

class ReportManager:
    """Plain-text payslips and package summaries for display and printing."""

    def payslip_text(self, payroll: PayrollEntity, employee: Optional[EmployeeEntity] = None) -> str:
        logger.debug(f"Rendering payslip for employee {payroll.employee_id}, "
                     f"{payroll.period_start} to {payroll.period_end}")
        lines: List[str] = [
            f"{COMPANY_NAME} PAYSLIP",
            _rule("="),
            f"Employee ID: {payroll.employee_id}",
        ]
        if employee is not None:
            lines.append(f"Name: {employee.full_name}")
            if employee.position:
                lines.append(f"Position: {employee.position}")
            lines.append(f"Status: {employee.status.value}")
        lines += [
            f"Period: {payroll.period_start.strftime(DATE_FORMAT)} to {payroll.period_end.strftime(DATE_FORMAT)}",
            f"Days worked: {payroll.days_worked}   Paid leave: {payroll.leave_days}",
            f"Hours worked: {payroll.total_work_hours:.2f}   Overtime hours: {payroll.total_overtime_hours:.2f}",
            f"Late: {payroll.late_minutes:.0f} min   Undertime: {payroll.undertime_minutes:.0f} min",
            _rule(),
            "EARNINGS",
            _line("Monthly rate", payroll.monthly_rate),
            _line("Basic pay", payroll.gross_earnings),
            _line("Overtime pay", payroll.overtime_pay),
            _line("Rice subsidy", payroll.rice_subsidy),
            _line("Phone allowance", payroll.phone_allowance),
            _line("Clothing allowance", payroll.clothing_allowance),
            _line("Gross pay", payroll.gross_pay),
            _rule(),
            f"DEDUCTIONS ({payroll.rate_schedule or 'current'} rates)",
            _line("SSS", payroll.sss),
            _line("PhilHealth", payroll.philhealth),
            _line("Pag-IBIG", payroll.pagibig),
            _line("Withholding tax", payroll.withholding_tax),
            _line("Total deductions", payroll.total_deductions),
            _rule("="),
            _line("NET PAY", payroll.net_pay),
        ]
        return "\n".join(lines)

    def compensation_summary_text(self, package: CompensationPackage) -> str:
        owner = package.employee.full_name if package.employee is not None else "(no employee)"
        lines: List[str] = [
            f"Compensation package: {package.package_name}",
            f"Employee: {owner}",
            f"Effective: {package.effective_date.strftime(DATE_FORMAT)}   Active: {'Yes' if package.is_active else 'No'}",
            _rule(),
            "Allowances:",
        ]
        if not package.allowances:
            lines.append("  (none)")
        for allowance in package.allowances:
            suffix = "" if allowance.is_taxable() else " (non-taxable)"
            lines.append(_line(f"  {allowance.type}{suffix}", allowance.calculated_amount()))
        lines.append(_line("Total allowances", package.total_allowances))
        lines += [_rule(), "Deductions:"]
        contributions = package.government_contributions
        for label, amount in (("  SSS", contributions.sss), ("  PhilHealth", contributions.philhealth),
                              ("  Pag-IBIG", contributions.pagibig), ("  Withholding tax", contributions.withholding_tax)):
            lines.append(_line(label, amount))
        for deduction in package.deductions:
            lines.append(_line(f"  {deduction.type}", deduction.amount))
        lines.append(_line("Total deductions", package.total_deductions))
        lines.append(_line("Taxable income", package.taxable_income))
        lines += [_rule("="), _line("Net compensation", package.net_compensation)]
        if package.is_eligible_for_bonus():
            lines.append(_line("Bonus (if granted)", package.calculate_bonus_amount()))
        return "\n".join(lines)
