from enum import Enum


class Role(str, Enum):
    admin = "admin"
    operator = "operator"


WRITE_ROLES = {Role.admin}
