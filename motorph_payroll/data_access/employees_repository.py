# motorph_payroll/data_access/employees_repository.py

from typing import List, Optional

from motorph_payroll.data_access.base_repository import BaseRepository
from motorph_payroll.data_access.database_manager import DatabaseManager
from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity
from motorph_payroll.constants import EmploymentStatus
import logging

logger = logging.getLogger(__name__)

class EmployeesRepository(BaseRepository[EmployeeEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=EmployeeEntity,
                         table_name="employees")

    def get_employee_by_id(self, employee_id: int) -> Optional[EmployeeEntity]:
        return self.get_by_id(employee_id)

    def get_by_status(self, status: EmploymentStatus) -> List[EmployeeEntity]:
        query = f"SELECT * FROM {self._table_name} WHERE status = ? ORDER BY id"
        rows = self.db_manager.fetch_all(query, (status.value,))
        return [self._entity_from_row(dict(r)) for r in rows if r]

    def search_by_name(self, text: str) -> List[EmployeeEntity]:
        pattern = f"%{text.strip()}%"
        query = (f"SELECT * FROM {self._table_name} "
                 f"WHERE first_name LIKE ? OR last_name LIKE ? ORDER BY last_name, first_name")
        rows = self.db_manager.fetch_all(query, (pattern, pattern))
        return [self._entity_from_row(dict(r)) for r in rows if r]

    def get_by_position(self, position: str) -> List[EmployeeEntity]:
        return self.find_by_criteria({"position": position}, order_by="id")

    def get_by_supervisor(self, supervisor: str) -> List[EmployeeEntity]:
        return self.find_by_criteria({"immediate_supervisor": supervisor}, order_by="id")

    def count_by_status(self, status: EmploymentStatus) -> int:
        row = self.db_manager.fetch_one(f"SELECT COUNT(*) AS total FROM {self._table_name} WHERE status = ?",
                                        (status.value,))
        return row["total"] if row else 0
