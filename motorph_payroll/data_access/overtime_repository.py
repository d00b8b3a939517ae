# motorph_payroll/data_access/overtime_repository.py

from typing import List
from datetime import date

from motorph_payroll.data_access.base_repository import BaseRepository
from motorph_payroll.data_access.database_manager import DatabaseManager
from motorph_payroll.business_logic.entities.overtime_entity import OvertimeEntity
import logging

logger = logging.getLogger(__name__)

class OvertimeRepository(BaseRepository[OvertimeEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=OvertimeEntity,
                         table_name="overtime")

    def get_overtime_between(self, employee_id: int, start_date: date, end_date: date) -> List[OvertimeEntity]:
        """All overtime filed in the period, approved or not; the aggregator decides what counts."""
        return self.find_by_criteria(
            {"employee_id": employee_id, "ot_date": ("BETWEEN", (start_date, end_date))},
            order_by="ot_date"
        )

    def get_pending(self) -> List[OvertimeEntity]:
        return self.find_by_criteria({"is_approved": False}, order_by="ot_date")
