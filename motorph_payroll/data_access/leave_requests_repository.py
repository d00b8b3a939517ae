# motorph_payroll/data_access/leave_requests_repository.py

from typing import List
from datetime import date

from motorph_payroll.data_access.base_repository import BaseRepository
from motorph_payroll.data_access.database_manager import DatabaseManager
from motorph_payroll.business_logic.entities.leave_entity import LeaveEntity
from motorph_payroll.constants import LeaveStatus, DATE_FORMAT
import logging

logger = logging.getLogger(__name__)

class LeaveRequestsRepository(BaseRepository[LeaveEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=LeaveEntity,
                         table_name="leave_requests")

    def get_approved_leave_between(self, employee_id: int, start_date: date, end_date: date) -> List[LeaveEntity]:
        """Approved leave overlapping [start_date, end_date], including leave that only partly overlaps."""
        query = (f"SELECT * FROM {self._table_name} "
                 f"WHERE employee_id = ? AND status = ? AND start_date <= ? AND end_date >= ? "
                 f"ORDER BY start_date")
        rows = self.db_manager.fetch_all(query, (
            employee_id, LeaveStatus.APPROVED.value,
            end_date.strftime(DATE_FORMAT), start_date.strftime(DATE_FORMAT)
        ))
        return [self._entity_from_row(dict(row)) for row in rows if row]

    def get_by_status(self, status: LeaveStatus) -> List[LeaveEntity]:
        return self.find_by_criteria({"status": status}, order_by="start_date")
