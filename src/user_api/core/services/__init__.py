from .database import DbManageService, DbSessionService
from .user_service import UserService

__all__ = ["DbManageService", "DbSessionService", "UserService"]
