"""
Testes da configuração carregada do ambiente.
"""

from helpdesk.config import Config
from helpdesk.config.settings import DEFAULT_SECRET_KEY


def test_jwt_secret_usa_secret_key_quando_ausente(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.setenv("SECRET_KEY", "minha-chave")

    config = Config(SQLALCHEMY_DATABASE_URI="sqlite://")

    assert config.JWT_SECRET == "minha-chave"


def test_valores_padrao(monkeypatch):
    for var in ("JWT_EXPIRATION", "PUBLIC_PATHS", "SECRET_KEY", "APP_PORT"):
        monkeypatch.delenv(var, raising=False)

    config = Config(SQLALCHEMY_DATABASE_URI="sqlite://")

    assert config.JWT_EXPIRATION == 180000
    assert config.PUBLIC_PATHS == ["/login", "/health"]
    assert config.SECRET_KEY == DEFAULT_SECRET_KEY
    assert config.APP_PORT == 8080


def test_public_paths_do_ambiente(monkeypatch):
    monkeypatch.setenv("PUBLIC_PATHS", " /login , /health,/docs ,")

    assert Config(SQLALCHEMY_DATABASE_URI="sqlite://").PUBLIC_PATHS == ["/login", "/health", "/docs"]


def test_uri_sqlite_a_partir_do_caminho(monkeypatch, tmp_path):
    monkeypatch.setenv("DB_TYPE", "SQLITE")
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "dados" / "helpdesk.db"))

    config = Config()

    assert config.SQLALCHEMY_DATABASE_URI == f"sqlite:///{tmp_path / 'dados' / 'helpdesk.db'}"


def test_uri_postgres(monkeypatch):
    monkeypatch.setenv("DB_TYPE", "POSTGRES")
    monkeypatch.setenv("POSTGRES_HOST", "db")
    monkeypatch.setenv("POSTGRES_PORT", "5433")
    monkeypatch.setenv("POSTGRES_USER", "helpdesk")
    monkeypatch.setenv("POSTGRES_PASSWORD", "p@ss word")
    monkeypatch.setenv("POSTGRES_DB", "helpdesk")

    config = Config()

    assert config.SQLALCHEMY_DATABASE_URI == "postgresql+psycopg://helpdesk:p%40ss+word@db:5433/helpdesk"


def test_expiracao_invalida_volta_ao_padrao(monkeypatch):
    monkeypatch.setenv("JWT_EXPIRATION", "-5")

    assert Config(SQLALCHEMY_DATABASE_URI="sqlite://").JWT_EXPIRATION == 180000
