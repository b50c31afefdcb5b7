from .base import Base
from .user import User
from .movement_record import MovementRecord
from .exit_detail import ExitDetail

__all__ = ["Base", "User", "MovementRecord", "ExitDetail"]
