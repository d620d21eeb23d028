"""
API dependencies
"""
from functools import lru_cache

from app.core import SessionLocal
from app.repositories import create_sqlalchemy_repositories
from app.services import ServiceContainer


@lru_cache()
def get_services() -> ServiceContainer:
    return ServiceContainer(create_sqlalchemy_repositories(SessionLocal))
