# helpdesk/config/settings.py
# Loads environment variables and defines the application configuration.

from dataclasses import dataclass, field
from typing import Optional, List
from dotenv import load_dotenv
import os
import logging
import sys
from urllib.parse import quote_plus # Para senhas na URL

# Determine the project root directory dynamically
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
dotenv_path = os.path.join(PROJECT_ROOT, '.env')
load_dotenv(dotenv_path=dotenv_path)

DEFAULT_SECRET_KEY = 'default_secret_key_change_me_in_env'


def _split_paths(raw: str) -> List[str]:
    return [p.strip() for p in raw.split(',') if p.strip()]


@dataclass
class Config:
    """
    Application configuration loaded from environment variables.
    Provides type hints and default values.
    """
    # Flask Settings
    SECRET_KEY: str = field(default_factory=lambda: os.environ.get('SECRET_KEY', DEFAULT_SECRET_KEY))
    APP_HOST: str = field(default_factory=lambda: os.environ.get('APP_HOST', '0.0.0.0'))
    APP_PORT: int = field(default_factory=lambda: int(os.environ.get('APP_PORT', 8080)))
    APP_DEBUG: bool = field(default_factory=lambda: os.environ.get('APP_DEBUG', 'True').lower() == 'true')
    LOG_LEVEL: str = field(default_factory=lambda: os.environ.get('LOG_LEVEL', 'DEBUG').upper())

    # --- JWT Settings ---
    # JWT_SECRET falls back to SECRET_KEY when not set.
    JWT_SECRET: str = field(default_factory=lambda: os.environ.get('JWT_SECRET', ''))
    JWT_EXPIRATION: int = field(default_factory=lambda: int(os.environ.get('JWT_EXPIRATION', 180000))) # milissegundos

    # --- Access Guard ---
    PUBLIC_PATHS: List[str] = field(default_factory=lambda: _split_paths(os.environ.get('PUBLIC_PATHS', '/login,/health')))

    # Popula o banco com os dados de exemplo na inicialização
    SEED_DATABASE: bool = field(default_factory=lambda: os.environ.get('SEED_DATABASE', 'False').lower() == 'true')

    # --- Database Settings ---
    DB_TYPE: str = field(default_factory=lambda: os.environ.get('DB_TYPE', 'POSTGRES').upper()) # Default to POSTGRES

    # PostgreSQL Specific Settings (read from .env)
    POSTGRES_HOST: str = field(default_factory=lambda: os.environ.get('POSTGRES_HOST', 'localhost'))
    POSTGRES_PORT: int = field(default_factory=lambda: int(os.environ.get('POSTGRES_PORT', 5432)))
    POSTGRES_USER: str = field(default_factory=lambda: os.environ.get('POSTGRES_USER', ''))
    POSTGRES_PASSWORD: str = field(default_factory=lambda: os.environ.get('POSTGRES_PASSWORD', ''))
    POSTGRES_DB: str = field(default_factory=lambda: os.environ.get('POSTGRES_DB', ''))

    # SQLite path (relative to PROJECT_ROOT when not absolute)
    DATABASE_PATH: str = field(default_factory=lambda: os.environ.get('DATABASE_PATH', ''))

    # --- SQLAlchemy Database URL ---
    # Constructed based on the DB_TYPE and specific settings
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    def __post_init__(self):
        # Validate log level
        valid_levels = list(logging._nameToLevel.keys())
        if self.LOG_LEVEL not in valid_levels:
             print(f"Warning: Invalid LOG_LEVEL '{self.LOG_LEVEL}'. Valid levels: {valid_levels}. Defaulting to DEBUG.", file=sys.stderr)
             self.LOG_LEVEL = 'DEBUG'

        if not self.JWT_SECRET:
            self.JWT_SECRET = self.SECRET_KEY

        if self.JWT_EXPIRATION <= 0:
            print(f"Warning: JWT_EXPIRATION ({self.JWT_EXPIRATION}) is invalid. Setting to default 180000 ms.", file=sys.stderr)
            self.JWT_EXPIRATION = 180000

        # An explicit URI (e.g. from tests) wins over DB_TYPE
        if self.SQLALCHEMY_DATABASE_URI:
            return

        # --- Build SQLAlchemy Database URI ---
        if self.DB_TYPE == 'POSTGRES':
            if not all([self.POSTGRES_HOST, self.POSTGRES_USER, self.POSTGRES_PASSWORD, self.POSTGRES_DB]):
                print("Warning: Missing PostgreSQL connection details in environment variables. Database connection will likely fail.", file=sys.stderr)
                self.SQLALCHEMY_DATABASE_URI = None
            else:
                 # Use quote_plus for password in case it has special characters
                 encoded_password = quote_plus(self.POSTGRES_PASSWORD)
                 # Specify the driver (+psycopg)
                 self.SQLALCHEMY_DATABASE_URI = f"postgresql+psycopg://{self.POSTGRES_USER}:{encoded_password}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        elif self.DB_TYPE == 'SQLITE':
             if self.DATABASE_PATH:
                  abs_path = os.path.join(PROJECT_ROOT, self.DATABASE_PATH) if not os.path.isabs(self.DATABASE_PATH) else self.DATABASE_PATH
                  os.makedirs(os.path.dirname(abs_path), exist_ok=True)
                  self.SQLALCHEMY_DATABASE_URI = f"sqlite:///{abs_path}"
             else:
                  print("Warning: DB_TYPE is SQLITE but DATABASE_PATH is not set.", file=sys.stderr)
                  self.SQLALCHEMY_DATABASE_URI = None
        else:
             print(f"Warning: Unsupported DB_TYPE '{self.DB_TYPE}'. No database URI configured.", file=sys.stderr)
             self.SQLALCHEMY_DATABASE_URI = None

# Singleton instance, created by load_config
_config_instance: Optional[Config] = None

def load_config() -> Config:
    """Loads or returns the singleton Config instance."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
        # Log loaded config values (mask sensitive ones)
        print("--- Configuration Loaded ---")
        print(f"  APP_HOST: {_config_instance.APP_HOST}")
        print(f"  APP_PORT: {_config_instance.APP_PORT}")
        print(f"  APP_DEBUG: {_config_instance.APP_DEBUG}")
        print(f"  LOG_LEVEL: {_config_instance.LOG_LEVEL}")
        print(f"  DB_TYPE: {_config_instance.DB_TYPE}")
        # Mask password in logged URI
        db_uri_log = str(_config_instance.SQLALCHEMY_DATABASE_URI)
        if _config_instance.POSTGRES_PASSWORD:
             db_uri_log = db_uri_log.replace(quote_plus(_config_instance.POSTGRES_PASSWORD), '********')
        print(f"  SQLALCHEMY_DATABASE_URI: {db_uri_log}")
        print(f"  JWT_EXPIRATION (ms): {_config_instance.JWT_EXPIRATION}")
        print(f"  PUBLIC_PATHS: {_config_instance.PUBLIC_PATHS}")
        print(f"  SEED_DATABASE: {_config_instance.SEED_DATABASE}")
        print("--------------------------")
    return _config_instance

# Expose the singleton instance directly
config = load_config()

# Helper to get PROJECT_ROOT if needed elsewhere
def get_project_root() -> str:
    return PROJECT_ROOT
