# motorph_payroll/data_access/attendance_repository.py

from typing import Dict, Any, List
from datetime import date

from motorph_payroll.data_access.base_repository import BaseRepository
from motorph_payroll.data_access.database_manager import DatabaseManager
from motorph_payroll.business_logic.entities.attendance_entity import AttendanceEntity
from motorph_payroll.utils.date_converter import parse_date, parse_time
from motorph_payroll.constants import DATE_FORMAT
import logging

logger = logging.getLogger(__name__)

class AttendanceRepository(BaseRepository[AttendanceEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=AttendanceEntity,
                         table_name="attendance")

    def _entity_from_row(self, row: Dict[str, Any]) -> AttendanceEntity:
        if row is None:
            raise ValueError("Input row cannot be None for AttendanceEntity")
        try:
            # Imported logs may be stored as HH:MM, so parse_time is used instead of time.fromisoformat
            return AttendanceEntity(
                id=row['id'],
                employee_id=row['employee_id'],
                log_date=parse_date(row['log_date']),
                log_in=parse_time(row.get('log_in')),
                log_out=parse_time(row.get('log_out'))
            )
        except KeyError as e:
            logger.error(f"KeyError when creating AttendanceEntity from row: {e}. Row: {row}")
            raise
        except ValueError as e: # For date or time conversion, or an invalid log pair
            logger.error(f"ValueError when creating AttendanceEntity: {e}. Row: {row}")
            raise

    def get_attendance_between(self, employee_id: int, start_date: date, end_date: date) -> List[AttendanceEntity]:
        query = (f"SELECT * FROM {self._table_name} "
                 f"WHERE employee_id = ? AND log_date BETWEEN ? AND ? ORDER BY log_date, log_in")
        rows = self.db_manager.fetch_all(
            query, (employee_id, start_date.strftime(DATE_FORMAT), end_date.strftime(DATE_FORMAT))
        )
        return [self._entity_from_row(dict(row)) for row in rows if row]

    def get_by_employee_id(self, employee_id: int) -> List[AttendanceEntity]:
        query = f"SELECT * FROM {self._table_name} WHERE employee_id = ? ORDER BY log_date DESC"
        rows = self.db_manager.fetch_all(query, (employee_id,))
        return [self._entity_from_row(dict(row)) for row in rows if row]
