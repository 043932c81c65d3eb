"""
Testes de login, do guard de acesso e do endpoint /login/me.
"""

from contextlib import contextmanager
from datetime import datetime, timedelta, timezone

import pytest

from helpdesk.api.errors import DatabaseError
from helpdesk.database.schema_manager import SEED_TECNICO, SEED_CLIENTE
from helpdesk.domain.enums import Perfil


class TestLogin:

    def test_login_devolve_token_no_cabecalho(self, client, jwt_util):
        response = client.post('/login', json={"email": SEED_TECNICO["email"], "senha": SEED_TECNICO["senha"]})

        assert response.status_code == 200
        auth = response.headers["Authorization"]
        assert auth.startswith("Bearer ")
        assert "Authorization" in response.headers["Access-Control-Expose-Headers"]
        assert jwt_util.get_username(auth[len("Bearer "):]) == SEED_TECNICO["email"]

    def test_email_sem_diferenciar_maiusculas(self, client):
        response = client.post('/login', json={"email": "BILL@MAIL.COM", "senha": SEED_TECNICO["senha"]})

        assert response.status_code == 200

    @pytest.mark.parametrize("body", [
        {"email": SEED_TECNICO["email"], "senha": "errada"},
        {"email": "ninguem@mail.com", "senha": "123"},
        {"email": SEED_TECNICO["email"]},
        {},
    ])
    def test_falhas_respondem_401_uniforme(self, client, body):
        response = client.post('/login', json=body)

        assert response.status_code == 401
        data = response.get_json()
        assert data["status"] == 401
        assert data["error"] == "Não autorizado"
        assert data["message"] == "Email ou senha inválidos"
        assert data["path"] == "/login"
        assert isinstance(data["timestamp"], int)
        assert "Authorization" not in response.headers

    def test_corpo_malformado(self, client):
        response = client.post('/login', data="isso não é json", content_type="application/json")

        assert response.status_code == 401
        assert response.get_json()["message"] == "Email ou senha inválidos"


class TestGuard:

    def test_sem_token(self, client):
        response = client.get('/clientes')

        assert response.status_code == 401
        data = response.get_json()
        assert data["error"] == "Não autorizado"
        assert data["path"] == "/clientes"

    def test_token_invalido(self, client):
        response = client.get('/chamados', headers={"Authorization": "Bearer nao-e-um-token"})

        assert response.status_code == 401

    def test_esquema_diferente_de_bearer(self, client, admin_headers):
        token = admin_headers["Authorization"][len("Bearer "):]
        response = client.get('/chamados', headers={"Authorization": f"Token {token}"})

        assert response.status_code == 401

    def test_token_expirado(self, client, jwt_util):
        issued_at = datetime.now(timezone.utc) - timedelta(hours=1)
        token = jwt_util.generate_token(SEED_TECNICO["email"], issued_at=issued_at)

        response = client.get('/chamados', headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_token_de_pessoa_removida(self, client, jwt_util):
        token = jwt_util.generate_token("fantasma@mail.com")

        response = client.get('/chamados', headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_health_e_publico(self, client):
        response = client.get('/health')

        assert response.status_code == 200
        assert response.get_json()["database"] == "ok"

    def test_health_nao_expoe_erro_do_banco(self, client, database, monkeypatch):
        @contextmanager
        def sessao_com_falha():
            raise DatabaseError("connection to postgresql://admin:segredo@db:5432 refused")
            yield

        monkeypatch.setattr(database, "get_session", sessao_com_falha)

        response = client.get('/health')

        assert response.status_code == 503
        data = response.get_json()
        assert data == {"status": "ok", "database": "error"}
        assert "segredo" not in response.get_data(as_text=True)

    def test_preflight_options_nao_exige_token(self, client):
        response = client.options('/clientes', headers={
            "Origin": "http://localhost:4200",
            "Access-Control-Request-Method": "GET",
        })

        assert response.status_code == 200

    def test_rota_inexistente_exige_token(self, client):
        assert client.get('/nao-existe').status_code == 401

    def test_rota_inexistente_autenticado(self, client, admin_headers):
        response = client.get('/nao-existe', headers=admin_headers)

        assert response.status_code == 404
        assert response.get_json()["path"] == "/nao-existe"


class TestMe:

    def test_retorna_pessoa_autenticada(self, client, admin_headers):
        response = client.get('/login/me', headers=admin_headers)

        assert response.status_code == 200
        data = response.get_json()
        assert data["email"] == SEED_TECNICO["email"]
        assert sorted(data["perfis"]) == [Perfil.ADMIN.codigo, Perfil.TECNICO.codigo]
        assert "senha" not in data

    def test_sem_token(self, client):
        assert client.get('/login/me').status_code == 401

    def test_perfis_relidos_a_cada_requisicao(self, client, cliente_headers, cliente_service, seed_cliente,
                                              novo_tecnico_payload):
        from helpdesk.domain.dtos import PessoaCreateDTO

        assert client.post('/tecnicos', json=novo_tecnico_payload, headers=cliente_headers).status_code == 403

        dto = PessoaCreateDTO.from_dict(
            {"nome": seed_cliente.nome, "cpf": SEED_CLIENTE["cpf"], "email": SEED_CLIENTE["email"],
             "perfis": [Perfil.ADMIN.codigo]},
            require_senha=False,
        )
        cliente_service.update(seed_cliente.id, dto)

        # Mesmo token, perfil novo já vale
        assert client.post('/tecnicos', json=novo_tecnico_payload, headers=cliente_headers).status_code == 201

    def test_token_invalido_apos_troca_de_email(self, client, cliente_headers, cliente_service, seed_cliente):
        from helpdesk.domain.dtos import PessoaCreateDTO

        dto = PessoaCreateDTO.from_dict(
            {"nome": seed_cliente.nome, "cpf": SEED_CLIENTE["cpf"], "email": "linus.novo@mail.com"},
            require_senha=False,
        )
        cliente_service.update(seed_cliente.id, dto)

        assert client.get('/login/me', headers=cliente_headers).status_code == 401
