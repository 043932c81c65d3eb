"""
Testes do emissor/validador de tokens JWT.

Coverage:
- generate_token(): claims sub/iat/exp e algoritmo HS512
- get_claims(): token expirado, adulterado ou assinado com outra chave
- token_valido() / get_username()
- Configuração inválida
"""

import base64
import json
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from helpdesk.api.errors import ConfigurationError
from helpdesk.security import JWTUtil, JWT_ALGORITHM

SECRET = "segredo-de-teste-com-pelo-menos-sessenta-e-quatro-caracteres-para-hs512-abcdef"


@pytest.fixture
def util():
    return JWTUtil(SECRET, 180000)


class TestGeracaoDeToken:

    def test_token_carrega_email_como_subject(self, util):
        token = util.generate_token("bill@mail.com")

        claims = jwt.decode(token, SECRET, algorithms=["HS512"])
        assert claims["sub"] == "bill@mail.com"
        assert "iat" in claims
        assert "exp" in claims

    def test_algoritmo_hs512(self, util):
        token = util.generate_token("bill@mail.com")

        assert jwt.get_unverified_header(token)["alg"] == JWT_ALGORITHM == "HS512"

    def test_expiracao_em_milissegundos(self, util):
        issued_at = datetime.now(timezone.utc).replace(microsecond=0)
        token = util.generate_token("bill@mail.com", issued_at=issued_at)

        claims = util.get_claims(token)
        assert claims["exp"] - claims["iat"] == 180

    def test_email_vazio_rejeitado(self, util):
        with pytest.raises(ValueError):
            util.generate_token("")


class TestValidacaoDeToken:

    def test_token_recem_emitido_e_valido(self, util):
        token = util.generate_token("linus@mail.com")

        assert util.token_valido(token) is True
        assert util.get_username(token) == "linus@mail.com"

    def test_token_expirado_invalido(self, util):
        issued_at = datetime.now(timezone.utc) - timedelta(hours=1)
        token = util.generate_token("linus@mail.com", issued_at=issued_at)

        assert util.get_claims(token) is None
        assert util.token_valido(token) is False
        assert util.get_username(token) is None

    def test_token_assinado_com_outra_chave(self, util):
        outro = JWTUtil("outra-chave-secreta-tambem-longa-o-bastante-para-assinar-em-hs512-xyz", 180000)
        token = outro.generate_token("bill@mail.com")

        assert util.token_valido(token) is False

    def test_token_adulterado(self, util):
        token = util.generate_token("bill@mail.com")
        header, payload, signature = token.split(".")
        adulterado = ".".join([header, payload, signature[::-1]])

        assert util.token_valido(adulterado) is False

    def test_payload_adulterado_com_assinatura_original(self, util):
        token = util.generate_token("linus@mail.com")
        header, payload, signature = token.split(".")
        claims = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
        claims["sub"] = "bill@mail.com"
        claims["exp"] += 3600
        forjado = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
        adulterado = ".".join([header, forjado, signature])

        assert util.token_valido(adulterado) is False
        assert util.get_username(adulterado) is None

    def test_token_sem_subject(self, util):
        now = datetime.now(timezone.utc)
        token = jwt.encode({"iat": now, "exp": now + timedelta(minutes=3)}, SECRET, algorithm="HS512")

        assert util.get_claims(token) is None
        assert util.token_valido(token) is False

    @pytest.mark.parametrize("token", ["", None, "nao.e.jwt", "lixo"])
    def test_tokens_malformados(self, util, token):
        assert util.token_valido(token) is False


class TestInstanteDeExpiracao:

    def test_rejeitado_quando_exp_chega_ao_agora(self, util):
        issued_at = datetime.now(timezone.utc) - util.expiration
        token = util.generate_token("bill@mail.com", issued_at=issued_at)

        assert util.token_valido(token) is False

    def test_aceito_pouco_antes_da_expiracao(self, util):
        issued_at = datetime.now(timezone.utc) - util.expiration + timedelta(seconds=5)
        token = util.generate_token("bill@mail.com", issued_at=issued_at)

        assert util.token_valido(token) is True

    def test_exp_estritamente_no_futuro(self, util):
        issued_at = datetime.now(timezone.utc).replace(microsecond=0)
        token = util.generate_token("bill@mail.com", issued_at=issued_at)
        exp = issued_at + util.expiration

        assert util.token_valido(token, now=exp - timedelta(milliseconds=1)) is True
        assert util.token_valido(token, now=exp) is False
        assert util.token_valido(token, now=exp + timedelta(seconds=1)) is False


class TestConfiguracao:

    def test_segredo_vazio(self):
        with pytest.raises(ConfigurationError):
            JWTUtil("", 180000)

    def test_expiracao_nao_positiva(self):
        with pytest.raises(ConfigurationError):
            JWTUtil(SECRET, 0)
