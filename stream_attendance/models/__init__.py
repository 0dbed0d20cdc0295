from .profile import Profile
from .user_role import UserRole
from .auth_session import AuthSession
from .attendance import AttendanceRecord
from .stream_config import StreamConfig
from .system_log import SystemLog

__all__ = [
    "Profile",
    "UserRole",
    "AuthSession",
    "AttendanceRecord",
    "StreamConfig",
    "SystemLog",
]
