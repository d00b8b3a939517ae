# motorph_payroll/business_logic/entities/__init__.py
from .base_entity import BaseEntity
from .employee_entity import EmployeeEntity
from .attendance_entity import AttendanceEntity
from .overtime_entity import OvertimeEntity
from .leave_entity import LeaveEntity
from .allowance_entity import Allowance, RiceAllowance, PhoneAllowance, ClothingAllowance
from .deduction_entity import DeductionEntity
from .government_contributions_entity import GovernmentContributionsEntity
from .payroll_entity import PayrollEntity
from .user_credential_entity import UserCredentialEntity
__all__ = [
    "BaseEntity", "EmployeeEntity", "AttendanceEntity", "OvertimeEntity", "LeaveEntity",
    "Allowance", "RiceAllowance", "PhoneAllowance", "ClothingAllowance",
    "DeductionEntity", "GovernmentContributionsEntity", "PayrollEntity", "UserCredentialEntity",
]
