from dataclasses import dataclass

from src.user_api.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
