"""
Configuration for the application
"""

import os

import yaml

from budget_api.utils.logger import app_logger

# Application configuration
APP_NAME = "budget_api"
APP_VERSION = "0.1.0"

DEFAULT_PORT = 4000

# plain driver schemes mapped to the async drivers the engine needs
ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "mysql": "mysql+aiomysql",
    "sqlite": "sqlite+aiosqlite",
}


def load_config():
    """Load the YAML configuration, preferring an external file over the packaged one"""
    external_config_path = os.getenv("BUDGET_API_CONFIG") or os.path.join(os.getcwd(), 'config', 'config.yml')

    if os.path.exists(external_config_path):
        config_path = external_config_path
        app_logger.info(f"Loading external config from: {config_path}")
    else:
        config_path = os.path.join(os.path.dirname(__file__), 'config.yml')
        app_logger.info(f"Loading internal config from: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)


def get_env_config(config=None) -> dict:
    """Return the section of the config selected by APP_ENV or current_env"""
    if config is None:
        config = load_config()
    current_env = os.getenv("APP_ENV", config['current_env'])
    try:
        return config['environments'][current_env]
    except KeyError:
        raise RuntimeError(f"Environment '{current_env}' is not defined in the configuration")


def to_async_url(url: str) -> str:
    scheme, sep, rest = url.partition("://")
    if not sep:
        raise RuntimeError("DATABASE_URL is not a valid database URL")
    return f"{ASYNC_DRIVERS.get(scheme, scheme)}://{rest}"


def get_database_url(env_config: dict) -> str:
    """
    Resolve the database URL

    DATABASE_URL from the environment wins over the config file. There is no
    built-in fallback: a missing URL is a startup error.
    """
    url = os.getenv("DATABASE_URL") or (env_config.get('database') or {}).get('url')
    if not url:
        raise RuntimeError("DATABASE_URL is not set and no database url is configured")
    return to_async_url(url)


def get_server_config(env_config: dict) -> dict:
    server = env_config.get('server') or {}
    return {
        "host": os.getenv("HOST", server.get('host', "127.0.0.1")),
        "port": int(os.getenv("PORT", server.get('port', DEFAULT_PORT))),
    }
