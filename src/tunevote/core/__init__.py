"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML + .env)
- Database operations (SQLite)
- Logging (Loguru)
"""

from .config import (
    Config,
    LoggingConfig,
    ServerConfig,
    VotingConfig,
    create_default_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    load_config,
    parse_config,
)
from .database import (
    SCHEMA_VERSION,
    get_database_path,
    get_db_connection,
    get_schema_version,
    init_database,
    migrate_database,
)
from .output import setup_from_config, setup_loguru

__all__ = [
    "Config",
    "LoggingConfig",
    "ServerConfig",
    "VotingConfig",
    "create_default_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "load_config",
    "parse_config",
    "SCHEMA_VERSION",
    "get_database_path",
    "get_db_connection",
    "get_schema_version",
    "init_database",
    "migrate_database",
    "setup_from_config",
    "setup_loguru",
]
