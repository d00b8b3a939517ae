# motorph_payroll/data_access/payrolls_repository.py

from typing import Optional, List
from datetime import date
from motorph_payroll.data_access.base_repository import BaseRepository
from motorph_payroll.data_access.database_manager import DatabaseManager
from motorph_payroll.business_logic.entities.payroll_entity import PayrollEntity
from motorph_payroll.constants import DATE_FORMAT
import logging

logger = logging.getLogger(__name__)

class PayrollsRepository(BaseRepository[PayrollEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=PayrollEntity,
                         table_name="payrolls")

    def get_by_employee_id(self, employee_id: int) -> List[PayrollEntity]:
        query = f"SELECT * FROM {self._table_name} WHERE employee_id = ? ORDER BY period_start DESC"
        rows = self.db_manager.fetch_all(query, (employee_id,))
        return [self._entity_from_row(dict(row)) for row in rows if row]

    def get_by_pay_period(self, start_date: date, end_date: date) -> List[PayrollEntity]:
        query = f"SELECT * FROM {self._table_name} WHERE period_start >= ? AND period_end <= ? ORDER BY employee_id"
        rows = self.db_manager.fetch_all(query, (start_date.strftime(DATE_FORMAT), end_date.strftime(DATE_FORMAT)))
        return [self._entity_from_row(dict(row)) for row in rows if row]

    def get_for_employee_period(self, employee_id: int, start_date: date, end_date: date) -> Optional[PayrollEntity]:
        query = (f"SELECT * FROM {self._table_name} "
                 f"WHERE employee_id = ? AND period_start = ? AND period_end = ? ORDER BY id DESC")
        row = self.db_manager.fetch_one(query, (
            employee_id, start_date.strftime(DATE_FORMAT), end_date.strftime(DATE_FORMAT)
        ))
        return self._entity_from_row(dict(row)) if row else None
