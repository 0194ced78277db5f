"""
Configuration for the Small Batch COGS Calculator.

Decides where the settings database lives:
- production: ~/Documents/COGSCalculator/cogs_calculator.db
- development: <project>/data/cogs_calculator.db
- COGS_CALCULATOR_DB overrides either with an explicit file path

The environment comes from COGS_CALCULATOR_ENV (default: production).
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .constants import APP_NAME, DATABASE_FILENAME

ENV_VAR = "COGS_CALCULATOR_ENV"
DATABASE_PATH_VAR = "COGS_CALCULATOR_DB"

PRODUCTION = "production"
DEVELOPMENT = "development"

logger = logging.getLogger(__name__)


class Config:
    """
    Location of the settings database for one environment.

    Args:
        environment: 'production' or 'development'; anything else is treated
            as production
        database_path: Explicit database file, overriding the environment
            default
    """

    def __init__(
        self,
        environment: str = PRODUCTION,
        database_path: Optional[Union[str, Path]] = None,
    ):
        self.environment = environment

        if database_path is None:
            database_path = self._default_data_dir() / DATABASE_FILENAME
        self._database_path = Path(database_path).expanduser()

        self._database_path.parent.mkdir(parents=True, exist_ok=True)

    def _default_data_dir(self) -> Path:
        if self.is_development:
            return Path(__file__).parent.parent.parent / "data"
        return Path.home() / "Documents" / "COGSCalculator"

    @property
    def app_name(self) -> str:
        return APP_NAME

    @property
    def is_development(self) -> bool:
        return self.environment == DEVELOPMENT

    @property
    def database_path(self) -> Path:
        """Full path to the database file."""
        return self._database_path

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL for the database file."""
        return f"sqlite:///{self._database_path.as_posix()}"

    def database_exists(self) -> bool:
        return self._database_path.exists()

    def __repr__(self) -> str:
        return f"Config(environment='{self.environment}', database_path='{self._database_path}')"


_config_instance: Optional[Config] = None


def get_config(environment: Optional[str] = None) -> Config:
    """
    Get the process-wide configuration, creating it on first use.

    The first call fixes the environment; later calls asking for a different
    one get the existing instance and a warning, so the database cannot
    change mid-session.

    Args:
        environment: Environment for the first call; defaults to
            COGS_CALCULATOR_ENV, then production

    Returns:
        Config instance
    """
    global _config_instance

    if _config_instance is None:
        if environment is None:
            environment = os.environ.get(ENV_VAR, PRODUCTION)
        _config_instance = Config(environment, os.environ.get(DATABASE_PATH_VAR))
    elif environment is not None and environment != _config_instance.environment:
        logger.warning(
            f"get_config() called with environment='{environment}' but the "
            f"configuration already uses '{_config_instance.environment}'; "
            f"keeping the existing one."
        )

    return _config_instance


def reset_config() -> None:
    """Forget the process-wide configuration (used by tests)."""
    global _config_instance
    _config_instance = None
