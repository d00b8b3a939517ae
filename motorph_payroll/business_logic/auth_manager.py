# motorph_payroll/business_logic/auth_manager.py

from typing import Optional, TYPE_CHECKING
from datetime import datetime

from werkzeug.security import generate_password_hash, check_password_hash

from motorph_payroll.business_logic.entities.employee_entity import EmployeeEntity
from motorph_payroll.business_logic.entities.user_credential_entity import UserCredentialEntity
from motorph_payroll.constants import EmploymentStatus, HR_ROLE_KEYWORDS
from motorph_payroll.exceptions import ValidationError, NotFoundError
import logging

if TYPE_CHECKING:
    from motorph_payroll.data_access.employees_repository import EmployeesRepository
    from motorph_payroll.data_access.credentials_repository import CredentialsRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

class AuthManager:
    """Employee-number/password login. Only password hashes are stored."""
    def __init__(self,
                 employees_repository: 'EmployeesRepository',
                 credentials_repository: 'CredentialsRepository'):
        if employees_repository is None: raise ValueError("employees_repository cannot be None")
        if credentials_repository is None: raise ValueError("credentials_repository cannot be None")

        self.employees_repository = employees_repository
        self.credentials_repository = credentials_repository

    @staticmethod
    def is_valid_employee_id(employee_id) -> bool:
        """Accepts positive ints and digit strings such as '10001' typed into the login form."""
        if isinstance(employee_id, bool):
            return False
        if isinstance(employee_id, str):
            employee_id = employee_id.strip()
            if not employee_id.isdigit():
                return False
            employee_id = int(employee_id)
        return isinstance(employee_id, int) and employee_id > 0

    @staticmethod
    def is_hr_role(position: Optional[str]) -> bool:
        if not position:
            return False
        return any(keyword.lower() in position.lower() for keyword in HR_ROLE_KEYWORDS)

    def register_credentials(self, employee_id: int, password: str) -> UserCredentialEntity:
        """Creates or replaces the login of an existing employee."""
        if not self.is_valid_employee_id(employee_id):
            raise ValidationError(f"Invalid employee ID: {employee_id!r}")
        employee_id = int(employee_id)
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
        if self.employees_repository.get_by_id(employee_id) is None:
            raise NotFoundError(f"Employee with ID {employee_id} not found.")

        password_hash = generate_password_hash(password)
        existing = self.credentials_repository.get_by_employee_id(employee_id)
        try:
            if existing is not None:
                existing.password_hash = password_hash
                saved = self.credentials_repository.update(existing)
                logger.info(f"Password changed for employee ID {employee_id}.")
            else:
                saved = self.credentials_repository.add(
                    UserCredentialEntity(employee_id=employee_id, password_hash=password_hash)
                )
                logger.info(f"Login created for employee ID {employee_id}.")
            return saved
        except Exception as e:
            logger.error(f"Error saving credentials for employee ID {employee_id}: {e}", exc_info=True)
            raise

    def authenticate(self, employee_id, password: str) -> Optional[EmployeeEntity]:
        """Returns the employee on success, None for any bad id/password combination."""
        if not self.is_valid_employee_id(employee_id) or not password:
            logger.info(f"Login rejected: malformed employee ID or empty password ({employee_id!r}).")
            return None
        employee_id = int(employee_id)

        credential = self.credentials_repository.get_by_employee_id(employee_id)
        if credential is None or not check_password_hash(credential.password_hash, password):
            logger.info(f"Login failed for employee ID {employee_id}.")
            return None

        employee = self.employees_repository.get_by_id(employee_id)
        if employee is None:
            logger.warning(f"Credentials exist for missing employee ID {employee_id}.")
            return None
        if employee.status is EmploymentStatus.TERMINATED:
            logger.info(f"Login refused for terminated employee ID {employee_id}.")
            return None

        credential.last_login = datetime.now()
        self.credentials_repository.update(credential)
        logger.info(f"Employee ID {employee_id} logged in.")
        return employee
