"""Runtime configuration read from the environment."""

import logging
import os

DATABASE_URL = os.environ.get("SERVICELOG_DATABASE_URL", "sqlite:///servicelog.db")
LOG_LEVEL = os.environ.get("SERVICELOG_LOG_LEVEL", "INFO")
SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
# Principal used by the CLI when --user is not given
DEFAULT_OWNER = os.environ.get("SERVICELOG_USER", "local")


def configure_logging(level: str = None) -> None:
    """Set up root logging for the CLI and web entry points."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # SQL echo is noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
