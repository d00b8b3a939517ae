# motorph_payroll/data_access/credentials_repository.py

from typing import Optional

from motorph_payroll.data_access.base_repository import BaseRepository
from motorph_payroll.data_access.database_manager import DatabaseManager
from motorph_payroll.business_logic.entities.user_credential_entity import UserCredentialEntity
import logging

logger = logging.getLogger(__name__)

class CredentialsRepository(BaseRepository[UserCredentialEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=UserCredentialEntity,
                         table_name="user_credentials")

    def get_by_employee_id(self, employee_id: int) -> Optional[UserCredentialEntity]:
        query = f"SELECT * FROM {self._table_name} WHERE employee_id = ?"
        row = self.db_manager.fetch_one(query, (employee_id,))
        return self._entity_from_row(dict(row)) if row else None
