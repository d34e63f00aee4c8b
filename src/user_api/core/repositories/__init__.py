from .user_port import UserPersistencePort

__all__ = ["UserPersistencePort"]
