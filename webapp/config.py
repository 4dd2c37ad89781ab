from enum import Enum

from pydantic_settings import BaseSettings

from cookbook.models import Requester


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    db_url: str = "sqlite+aiosqlite:///cookbook.db"
    log_level: str = "INFO"
    # Bearer token -> user, e.g. {"dev-admin-token": {"id": "admin-1", "role": "ADMIN"}}
    dev_tokens: dict[str, Requester] = {}
