from enum import Enum


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class CompanyStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
