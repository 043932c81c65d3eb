"""
Testes do repositório de pessoas chamado diretamente, sem a checagem
prévia de unicidade feita pelos serviços.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from helpdesk.api.errors import DataIntegrityViolationError
from helpdesk.database.pessoa_repository import integrity_error_message
from helpdesk.database.schema_manager import SEED_TECNICO, SEED_CLIENTE
from helpdesk.domain.enums import TipoPessoa
from helpdesk.domain.pessoa import Pessoa


def _pessoa(cpf, email):
    pessoa = Pessoa(TipoPessoa.CLIENTE, "Margaret Hamilton", cpf, email)
    pessoa.set_senha("segredo")
    return pessoa


class TestUnicidadeNoBanco:

    def test_cpf_duplicado(self, database, pessoa_repository):
        with pytest.raises(DataIntegrityViolationError) as exc_info:
            with database.get_session() as db:
                pessoa_repository.add(db, _pessoa(SEED_CLIENTE["cpf"], "margaret@mail.com"))

        assert exc_info.value.message == "CPF já cadastrado no sistema!"

    def test_email_duplicado(self, database, pessoa_repository):
        with pytest.raises(DataIntegrityViolationError) as exc_info:
            with database.get_session() as db:
                pessoa_repository.add(db, _pessoa("52998224725", SEED_TECNICO["email"]))

        assert exc_info.value.message == "E-mail já cadastrado no sistema!"

    def test_nada_gravado_apos_violacao(self, database, pessoa_repository):
        with pytest.raises(DataIntegrityViolationError):
            with database.get_session() as db:
                pessoa_repository.add(db, _pessoa(SEED_CLIENTE["cpf"], "margaret@mail.com"))

        with database.get_session() as db:
            assert pessoa_repository.find_by_email(db, "margaret@mail.com") is None

    def test_insercao_valida(self, database, pessoa_repository):
        with database.get_session() as db:
            pessoa = pessoa_repository.add(db, _pessoa("52998224725", "margaret@mail.com"))
            assert pessoa.id is not None


class TestMensagemDeIntegridade:

    @pytest.mark.parametrize("detalhe, esperado", [
        ("UNIQUE constraint failed: pessoas.cpf", "CPF já cadastrado no sistema!"),
        ('duplicate key value violates unique constraint "uq_pessoas_email"', "E-mail já cadastrado no sistema!"),
        ("FOREIGN KEY constraint failed", "Violação de integridade dos dados."),
    ])
    def test_traduz_detalhe_do_driver(self, detalhe, esperado):
        erro = IntegrityError("INSERT INTO pessoas", {}, Exception(detalhe))

        assert integrity_error_message(erro) == esperado
