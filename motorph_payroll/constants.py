# motorph_payroll/constants.py

from enum import Enum
from datetime import time
from decimal import Decimal

# General
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
CURRENCY_SYMBOL = "₱"

class EmploymentStatus(Enum):
    REGULAR = "Regular"
    PROBATIONARY = "Probationary"
    CONTRACTUAL = "Contractual"
    TERMINATED = "Terminated"

class LeaveStatus(Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

class AllowanceType(Enum):
    RICE = "Rice Subsidy"
    PHONE = "Phone Allowance"
    CLOTHING = "Clothing Allowance"

class DeductionType(Enum):
    SSS = "SSS"
    PHILHEALTH = "PhilHealth"
    PAGIBIG = "Pag-IBIG"
    WITHHOLDING_TAX = "Withholding Tax"
    CASH_ADVANCE = "Cash Advance"
    LOAN = "Loan"
    OTHER = "Other"

class CalculationState(Enum):
    VALIDATING = "VALIDATING"
    LOADING = "LOADING"
    AGGREGATING = "AGGREGATING"
    COMPUTING = "COMPUTING"
    ASSEMBLED = "ASSEMBLED"
    FAILED = "FAILED"

# Fixed allowance amounts used when an employee profile carries no override
RICE_SUBSIDY_AMOUNT = Decimal("1500.00")
CLOTHING_ALLOWANCE_AMOUNT = Decimal("1000.00")
STANDARD_PHONE_ALLOWANCE = Decimal("1000.00")

# Bonus = 10% of basic salary + 5% of total allowances
BONUS_SALARY_RATE = Decimal("0.10")
BONUS_ALLOWANCE_RATE = Decimal("0.05")

# Positions whose holders get the HR view after login
HR_ROLE_KEYWORDS = ("HR", "Chief", "Manager", "Director", "Supervisor")

# Employee record limits
MAX_NAME_LENGTH = 50
MAX_POSITION_LENGTH = 100
MAX_PHONE_NUMBER_LENGTH = 20
PHONE_NUMBER_PATTERN = r"^(?=.*[0-9])\+?[0-9(][0-9\s()-]*$"

DEFAULT_PAYROLL_CONFIG = {
    "shift_start": time(8, 0),
    "shift_end": time(17, 0),
    "full_day_hours": Decimal("8.0"),
    "standard_working_days": 22, # only for periods without a weekday
    "hours_per_day": 8,
    "overtime_multiplier": Decimal("1.25"),
    "probationary_phone_allowance": Decimal("500.00"),
}
