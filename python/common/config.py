"""
Configuration management for SQL-to-Graph.
Loads the optional YAML config and turns connection descriptors into
SQLAlchemy engines. Also loads environment variables from .env file.
"""
import yaml
import os
from pathlib import Path
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from typing import Dict, Any, Optional, Union

REPO_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = REPO_ROOT / "config" / "sql_graph.yaml"

# Load environment variables from .env file if it exists
_env_path = REPO_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


class ConfigError(ValueError):
    """Raised when configuration exists but cannot be used."""


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from sql_graph.yaml.

    The file is optional when no path is given: a missing default file
    yields an empty config. An explicit path (argument or SQLGRAPH_CONFIG
    environment variable) must exist.

    Args:
        config_path: Optional path to a YAML config file.

    Returns:
        Dict containing database connections, report and logging settings.
    """
    explicit = config_path or os.environ.get('SQLGRAPH_CONFIG')
    path = Path(explicit).expanduser() if explicit else DEFAULT_CONFIG_PATH

    if not path.exists():
        if explicit:
            raise FileNotFoundError(
                f"Config file not found at {path}. "
                "Copy sql_graph.example.yaml to sql_graph.yaml and configure."
            )
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")

    return config


def get_report_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Get report settings with defaults applied.

    Returns:
        Dict with 'output_dir' (str) and 'fill_missing_days' (bool).
    """
    report = config.get('report') or {}
    return {
        'output_dir': str(report.get('output_dir', '.')),
        'fill_missing_days': bool(report.get('fill_missing_days', False)),
    }


LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def get_log_level(config: Dict[str, Any]) -> str:
    level = str((config.get('logging') or {}).get('level', 'INFO')).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"Unknown logging level '{level}' (expected one of {', '.join(LOG_LEVELS)})")
    return level


def _url_from_fields(dialect: str, fields: Dict[str, Any]) -> str:
    missing = [k for k in ('user', 'password', 'host', 'database') if k not in fields]
    if missing:
        raise ConfigError(f"{dialect} connection is missing fields: {', '.join(missing)}")
    port = f":{fields['port']}" if fields.get('port') else ""
    return f"{dialect}://{fields['user']}:{fields['password']}@{fields['host']}{port}/{fields['database']}"


def _engine_from_block(name: str, block: Dict[str, Any]) -> Engine:
    """Build an engine from a named entry under 'databases'."""
    if 'sqlite' in block:
        return create_engine(f"sqlite:///{block['sqlite']}", echo=False)

    # Environment variable first (for cloud databases)
    env_var = block.get('url_env')
    if env_var and os.environ.get(env_var):
        return create_engine(os.environ[env_var], echo=False, pool_pre_ping=True)

    if 'connection_string' in block:
        return create_engine(block['connection_string'], echo=False, pool_pre_ping=True)

    if 'postgres' in block:
        return create_engine(_url_from_fields('postgresql+psycopg', block['postgres']),
                             echo=False, pool_pre_ping=True)

    if 'mysql' in block:
        return create_engine(_url_from_fields('mysql+pymysql', block['mysql']),
                             echo=False, pool_pre_ping=True)

    raise ConfigError(f"No usable connection settings for database '{name}'")


def get_engine(descriptor: str, config: Optional[Dict[str, Any]] = None) -> Engine:
    """
    Get SQLAlchemy engine for a connection descriptor.

    Args:
        descriptor: Either the name of a connection under 'databases' in the
            config file, or a SQLAlchemy database URL
            (e.g. 'mysql+pymysql://user:pw@localhost:3306/testdb').
        config: Loaded config; loaded from the default location if None.

    Returns:
        SQLAlchemy Engine. No connection is opened yet.
    """
    if config is None:
        config = load_config()

    databases = config.get('databases') or {}
    if descriptor in databases:
        return _engine_from_block(descriptor, databases[descriptor] or {})

    if '://' not in descriptor:
        raise ConfigError(
            f"'{descriptor}' is neither a database URL nor a connection named in the config file"
        )

    if descriptor.startswith('sqlite'):
        return create_engine(descriptor, echo=False)
    return create_engine(descriptor, echo=False, pool_pre_ping=True)
