import logging
import os


class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get("VENTURE_DATABASE_URL", "sqlite:///venture.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "sql" persists through flask_sqlalchemy, "memory" keeps everything in-process
    STORAGE_BACKEND = os.environ.get("VENTURE_STORAGE", "sql")

    LOG_LEVEL = os.environ.get("VENTURE_LOG_LEVEL", "INFO")

    DASHBOARD_TOP_N = 3


def log_level(value):
    """Accept either a logging constant or its name ("DEBUG", "info", ...)."""
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    return level if isinstance(level, int) else logging.INFO
