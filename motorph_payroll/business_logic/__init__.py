# motorph_payroll/business_logic/__init__.py
from .contribution_calculator import GovernmentContributionCalculator
from .attendance_aggregator import aggregate_attendance, AttendanceSummary
from .payroll_calculator import PayrollCalculator
from .compensation_package import CompensationPackage
from .employee_manager import EmployeeManager
from .payroll_manager import PayrollManager
from .auth_manager import AuthManager
from .report_manager import ReportManager
