# motorph_payroll/business_logic/payroll_manager.py

from typing import Optional, List, Dict, TYPE_CHECKING
from datetime import date
from decimal import Decimal

from motorph_payroll.business_logic.entities.payroll_entity import PayrollEntity
from motorph_payroll.business_logic.payroll_calculator import PayrollCalculator
from motorph_payroll.exceptions import ValidationError, PayrollCalculationException
from motorph_payroll.utils.money import ZERO
import logging

if TYPE_CHECKING:
    from motorph_payroll.data_access.payrolls_repository import PayrollsRepository
    from motorph_payroll.business_logic.employee_manager import EmployeeManager

logger = logging.getLogger(__name__)

class PayrollManager:
    def __init__(self,
                 payrolls_repository: 'PayrollsRepository',
                 payroll_calculator: PayrollCalculator,
                 employee_manager: Optional['EmployeeManager'] = None):

        if payrolls_repository is None: raise ValueError("payrolls_repository cannot be None")
        if payroll_calculator is None: raise ValueError("payroll_calculator cannot be None")

        self.payrolls_repository = payrolls_repository
        self.payroll_calculator = payroll_calculator
        self.employee_manager = employee_manager

    def preview_payroll(self, employee_id: int, period_start: date, period_end: date) -> PayrollEntity:
        """Computes a payroll without storing it."""
        return self.payroll_calculator.calculate_payroll(employee_id, period_start, period_end)

    def generate_payroll_for_employee(self,
                                      employee_id: int,
                                      period_start: date,
                                      period_end: date,
                                      replace_existing: bool = False) -> PayrollEntity:
        """
        Computes and stores the payroll of one employee for a period.
        A period can only be stored once per employee unless replace_existing is set.
        """
        payroll = self.payroll_calculator.calculate_payroll(employee_id, period_start, period_end)

        existing = self.payrolls_repository.get_for_employee_period(employee_id, period_start, period_end)
        if existing is not None:
            if not replace_existing:
                raise ValidationError(f"Payroll for employee {employee_id} for {period_start} to {period_end} "
                                      f"already exists (ID {existing.id}).")
            payroll.id = existing.id

        try:
            if payroll.id is not None:
                saved = self.payrolls_repository.update(payroll)
            else:
                saved = self.payrolls_repository.add(payroll)
            logger.info(f"Payroll ID {saved.id} stored for employee ID {employee_id} for period "
                        f"{period_start} to {period_end}. Net pay: {saved.net_pay:.2f}")
            return saved
        except Exception as e:
            logger.error(f"Error storing payroll for employee ID {employee_id}: {e}", exc_info=True)
            raise

    def generate_payroll_for_all(self, period_start: date, period_end: date) -> Dict[str, list]:
        """
        Runs the payroll for every employee who is not terminated.
        Failures for one employee do not stop the run; they are collected under "failed".
        """
        if self.employee_manager is None:
            raise ValueError("employee_manager is required to run payroll for all employees")

        result: Dict[str, list] = {"created": [], "failed": []}
        for employee in self.employee_manager.get_all_employees(include_terminated=False):
            try:
                result["created"].append(
                    self.generate_payroll_for_employee(employee.id, period_start, period_end, replace_existing=True)
                )
            except PayrollCalculationException as e:
                logger.error(f"Payroll run skipped employee {employee.id}: {e}")
                result["failed"].append((employee.id, e))
        logger.info(f"Payroll run {period_start} to {period_end}: {len(result['created'])} stored, "
                    f"{len(result['failed'])} failed.")
        return result

    def get_payroll(self, payroll_id: int) -> Optional[PayrollEntity]:
        if not isinstance(payroll_id, int) or payroll_id <= 0: return None
        return self.payrolls_repository.get_by_id(payroll_id)

    def get_payrolls_for_employee(self, employee_id: int) -> List[PayrollEntity]:
        return self.payrolls_repository.get_by_employee_id(employee_id)

    def get_payrolls_for_period(self, period_start: date, period_end: date) -> List[PayrollEntity]:
        return self.payrolls_repository.get_by_pay_period(period_start, period_end)

    def get_period_totals(self, period_start: date, period_end: date) -> Dict[str, Decimal]:
        payrolls = self.get_payrolls_for_period(period_start, period_end)
        return {
            "gross_pay": sum((p.gross_pay for p in payrolls), ZERO),
            "total_deductions": sum((p.total_deductions for p in payrolls), ZERO),
            "net_pay": sum((p.net_pay for p in payrolls), ZERO),
        }

    def delete_payroll(self, payroll_id: int) -> bool:
        payroll = self.get_payroll(payroll_id)
        if payroll is None:
            logger.warning(f"Payroll ID {payroll_id} not found for deletion.")
            return False
        try:
            deleted = self.payrolls_repository.delete(payroll_id)
            logger.info(f"Payroll ID {payroll_id} deleted.")
            return deleted
        except Exception as e:
            logger.error(f"Error deleting payroll ID {payroll_id}: {e}", exc_info=True)
            raise
