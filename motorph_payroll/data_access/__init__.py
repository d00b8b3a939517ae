# motorph_payroll/data_access/__init__.py

from .database_manager import DatabaseManager
from .base_repository import BaseRepository

from .employees_repository import EmployeesRepository
from .attendance_repository import AttendanceRepository
from .overtime_repository import OvertimeRepository
from .leave_requests_repository import LeaveRequestsRepository
from .payrolls_repository import PayrollsRepository
from .credentials_repository import CredentialsRepository

ALL_REPOSITORIES = [
    EmployeesRepository, AttendanceRepository, OvertimeRepository,
    LeaveRequestsRepository, PayrollsRepository, CredentialsRepository,
]
