import os
import sys
from logging.config import fileConfig

from sqlalchemy import engine_from_config
from sqlalchemy import pool

from alembic import context

# --- Adicionar Raiz do Projeto ao sys.path ---
# Permite rodar 'alembic' a partir da raiz sem instalar o pacote.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
# --------------------------------------------

# --- Importar configurações e Base dos modelos ---
try:
    from helpdesk.config import config as app_config
    from helpdesk.database.base import Base
    # Registra Pessoa, PessoaPerfil e Chamado na metadata
    import helpdesk.domain  # noqa: F401
except ImportError as e:
    print(f"Erro ao importar módulos da aplicação: {e}")
    print("Certifique-se de que está executando o alembic a partir do diretório raiz do projeto")
    print(f"PROJECT_ROOT: {PROJECT_ROOT}")
    sys.exit(1)
# ----------------------------------------------

# MetaData usado pelo 'autogenerate'
target_metadata = Base.metadata

config = context.config

# --- Configurar a URL do banco dinamicamente ---
db_url = app_config.SQLALCHEMY_DATABASE_URI
if not db_url:
    print("Erro: SQLALCHEMY_DATABASE_URI não está configurado na aplicação.")
    sys.exit(1)
config.set_main_option('sqlalchemy.url', db_url.replace('%', '%%'))
# ---------------------------------------------

# Interpreta o arquivo de configuração para logging do Python.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # SQLite não suporta ALTER TABLE completo
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
