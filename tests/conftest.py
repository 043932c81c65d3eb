"""
Configurações globais do Pytest para a HelpDesk API.

Cada teste recebe uma aplicação nova sobre um banco SQLite temporário,
já populado com os dados de exemplo (técnico admin Bill Gates, cliente
Linus Torvalds e um chamado em andamento).
"""

import pytest

from helpdesk.app import create_app
from helpdesk.config import Config
from helpdesk.database.schema_manager import SEED_TECNICO, SEED_CLIENTE

TEST_JWT_SECRET = "jwt-secret-de-teste-com-tamanho-suficiente-para-assinar-tokens-hs512-0123456789"


@pytest.fixture
def config(tmp_path):
    """Configuração isolada: SQLite em diretório temporário e seed ativo."""
    return Config(
        SECRET_KEY="chave-secreta-de-teste",
        APP_DEBUG=False,
        LOG_LEVEL="WARNING",
        JWT_SECRET=TEST_JWT_SECRET,
        JWT_EXPIRATION=180000,
        PUBLIC_PATHS=["/login", "/health"],
        SEED_DATABASE=True,
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'helpdesk_test.db'}",
    )


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config.update(TESTING=True)
    yield app
    app.config['database'].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def database(app):
    return app.config['database']


@pytest.fixture
def pessoa_repository(app):
    return app.config['pessoa_repository']


@pytest.fixture
def cliente_service(app):
    return app.config['cliente_service']


@pytest.fixture
def tecnico_service(app):
    return app.config['tecnico_service']


@pytest.fixture
def chamado_service(app):
    return app.config['chamado_service']


@pytest.fixture
def auth_service(app):
    return app.config['auth_service']


@pytest.fixture
def jwt_util(app):
    return app.config['jwt_util']


@pytest.fixture
def seed_tecnico(tecnico_service):
    """Técnico (e admin) criado pelo seed."""
    return next(t for t in tecnico_service.find_all() if t.email == SEED_TECNICO["email"])


@pytest.fixture
def seed_cliente(cliente_service):
    """Cliente criado pelo seed."""
    return next(c for c in cliente_service.find_all() if c.email == SEED_CLIENTE["email"])


def _login_headers(client, email, senha):
    response = client.post('/login', json={"email": email, "senha": senha})
    assert response.status_code == 200, response.get_data(as_text=True)
    return {"Authorization": response.headers["Authorization"]}


@pytest.fixture
def admin_headers(client):
    """Cabeçalho Authorization do técnico admin do seed."""
    return _login_headers(client, SEED_TECNICO["email"], SEED_TECNICO["senha"])


@pytest.fixture
def cliente_headers(client):
    """Cabeçalho Authorization do cliente do seed (sem perfil ADMIN)."""
    return _login_headers(client, SEED_CLIENTE["email"], SEED_CLIENTE["senha"])


@pytest.fixture
def novo_cliente_payload():
    return {
        "nome": "Ada Lovelace",
        "cpf": "529.982.247-25",
        "email": "ada@mail.com",
        "senha": "segredo",
    }


@pytest.fixture
def novo_tecnico_payload():
    return {
        "nome": "Grace Hopper",
        "cpf": "11144477735",
        "email": "grace@mail.com",
        "senha": "segredo",
    }
