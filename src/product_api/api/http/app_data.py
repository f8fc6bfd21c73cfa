from dataclasses import dataclass

from src.product_api.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
