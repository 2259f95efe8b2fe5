"""
Configuration management for TuneVote
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from loguru import logger


IDENTITY_STRATEGIES = ("forwarded", "peer")


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""

    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class VotingConfig:
    """Configuration for vote recording."""

    identity_strategy: str = "forwarded"  # 'forwarded' | 'peer'

    def validate(self) -> None:
        """Validate voting configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if self.identity_strategy not in IDENTITY_STRATEGIES:
            raise ValueError(
                f"Invalid identity strategy: {self.identity_strategy!r}. "
                f"Valid strategies are: {IDENTITY_STRATEGIES}"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/tunevote/tunevote.log)
    )
    rotation: str = "10 MB"
    retention: int = 5  # Number of rotated files to keep
    console_output: bool = True


@dataclass
class Config:
    """Main configuration object."""

    server: ServerConfig = field(default_factory=ServerConfig)
    voting: VotingConfig = field(default_factory=VotingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "tunevote"
    return Path.home() / ".config" / "tunevote"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            if config_path.exists():
                return config_path
            return None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/tunevote (or ~/.config/tunevote)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "tunevote"
    return Path.home() / ".local" / "share" / "tunevote"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# TuneVote Configuration

[server]
# Interface and port for the API server (PORT / HOST env vars override)
host = "0.0.0.0"
port = 3000

# Origins allowed to call the API ("*" allows any origin)
allowed_origins = ["*"]

[voting]
# How anonymous voter identity is derived:
#   "forwarded" - X-Forwarded-For, then X-Real-IP, then peer address
#   "peer"      - peer address only (use when not behind a trusted proxy)
identity_strategy = "forwarded"

[logging]
# Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
level = "INFO"

# Custom log file path (default: ~/.local/share/tunevote/tunevote.log)
# log_file = "/var/log/tunevote.log"

# Rotate after this size, keeping this many old files
rotation = "10 MB"
retention = 5

# Also log to stderr
console_output = true
"""


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides on top of file values."""
    if os.environ.get("HOST"):
        config.server.host = os.environ["HOST"]

    if os.environ.get("PORT"):
        try:
            config.server.port = int(os.environ["PORT"])
        except ValueError:
            logger.warning(f"Ignoring non-numeric PORT={os.environ['PORT']!r}")

    if os.environ.get("ALLOWED_ORIGINS"):
        config.server.allowed_origins = [
            origin.strip()
            for origin in os.environ["ALLOWED_ORIGINS"].split(",")
            if origin.strip()
        ]

    if os.environ.get("LOG_LEVEL"):
        config.logging.level = os.environ["LOG_LEVEL"].upper()

    return config


def load_config() -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - HOST, PORT
    - ALLOWED_ORIGINS (comma-separated)
    - LOG_LEVEL
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    load_dotenv(Path.cwd() / ".env")

    config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        logger.info(f"Created default configuration at: {config_path}")
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Error loading configuration from {config_path}: {e}")
        logger.warning("Using default configuration.")
        return _apply_env_overrides(Config())

    return _apply_env_overrides(parse_config(toml_data))


def parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML data, falling back to defaults per key."""
    config = Config()

    if "server" in toml_data:
        server_data = toml_data["server"]
        config.server = ServerConfig(
            host=server_data.get("host", config.server.host),
            port=server_data.get("port", config.server.port),
            allowed_origins=server_data.get(
                "allowed_origins", config.server.allowed_origins
            ),
        )

    if "voting" in toml_data:
        voting_data = toml_data["voting"]
        voting = VotingConfig(
            identity_strategy=voting_data.get(
                "identity_strategy", config.voting.identity_strategy
            ),
        )
        try:
            voting.validate()
            config.voting = voting
        except ValueError as e:
            logger.warning(f"Invalid voting configuration: {e}")
            logger.warning("Using default voting configuration.")

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level),
            log_file=logging_data.get("log_file"),
            rotation=logging_data.get("rotation", config.logging.rotation),
            retention=logging_data.get("retention", config.logging.retention),
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    return config
