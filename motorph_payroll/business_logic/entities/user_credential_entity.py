# motorph_payroll/business_logic/entities/user_credential_entity.py
from dataclasses import dataclass, field
from typing import Optional
from datetime import datetime
from .base_entity import BaseEntity

@dataclass
class UserCredentialEntity(BaseEntity):
    employee_id: int # Foreign Key to EmployeeEntity, one login per employee
    password_hash: str
    last_login: Optional[datetime] = field(default=None)
