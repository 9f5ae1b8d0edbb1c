# Area: Shared
"""
rps_wager._config — Service Configuration
=========================================

Configuration loading and validation for the game service.
Values come from an optional dict, then environment variables
(optionally read from a .env file), validated by pydantic.
"""

import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from ._shared.logging_config import resolve_level
from ._storage.keys import DEFAULT_KEY_SEED

logger = logging.getLogger("rps_wager.config")

# Environment variable -> config key
ENV_MAPPINGS = {
    "RPS_DB_PATH": "db_path",
    "RPS_LOG_FILE": "log_file",
    "RPS_LOG_LEVEL": "log_level",
    "RPS_KEY_SEED": "key_seed",
    "RPS_REPLACE_FINISHED": "replace_finished",
}


class ServiceConfig(BaseModel):
    """
    Validated service settings.

    Attributes:
        db_path: SQLite file for game records; in-memory store when None
        log_file: JSON log file path; terminal logging only when None
        log_level: Logging level name
        key_seed: Seed mixed into every derived game key
        replace_finished: Let create_game supersede a FINISHED game
    """

    db_path: Optional[str] = None
    log_file: Optional[str] = None
    log_level: str = "INFO"
    key_seed: str = Field(default=DEFAULT_KEY_SEED, min_length=1)
    replace_finished: bool = True

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        resolve_level(value)
        return value.upper()

    @field_validator("db_path", "log_file")
    @classmethod
    def _blank_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


def load_config(
    config: Optional[Dict[str, Any]] = None,
    env_file: Optional[str] = None,
) -> ServiceConfig:
    """
    Build a ServiceConfig from a dict and the environment.

    Environment variables override dict values. A .env file is read
    first when env_file is given; it never overrides variables that
    are already set.

    Raises:
        pydantic.ValidationError: If a value is invalid
    """
    if env_file:
        found = load_dotenv(env_file, override=False)
        logger.debug(f"Env file {env_file}: {'loaded' if found else 'not found'}")

    values: Dict[str, Any] = dict(config or {})
    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            values[config_key] = os.environ[env_key]
            logger.debug(f"{config_key} taken from {env_key}")

    return ServiceConfig(**values)
