"""
Testes dos serviços de clientes e técnicos.

Coverage:
- create(): id descartado, senha com hash, perfil da variante
- update(): unicidade excluindo o próprio id, senha opcional
- delete(): bloqueado enquanto houver chamados
- find_by_id(): variante errada é tratada como inexistente
"""

import pytest

from helpdesk.api.errors import ObjectNotFoundError, DataIntegrityViolationError
from helpdesk.database.schema_manager import SEED_TECNICO, SEED_CLIENTE
from helpdesk.domain.dtos import PessoaCreateDTO
from helpdesk.domain.enums import Perfil, TipoPessoa


class TestCriacao:

    def test_cria_cliente(self, cliente_service, novo_cliente_payload):
        payload = dict(novo_cliente_payload, id=999)
        cliente = cliente_service.create(PessoaCreateDTO.from_dict(payload))

        assert cliente.id is not None
        assert cliente.id != 999
        assert cliente.tipo_pessoa is TipoPessoa.CLIENTE
        assert cliente.perfis == {Perfil.CLIENTE}
        assert cliente.senha != "segredo"
        assert cliente.verify_senha("segredo")
        assert cliente.data_criacao is not None

    def test_cria_tecnico_com_perfil_extra(self, tecnico_service, novo_tecnico_payload):
        payload = dict(novo_tecnico_payload, perfis=[Perfil.ADMIN.codigo])
        tecnico = tecnico_service.create(PessoaCreateDTO.from_dict(payload))

        assert tecnico.perfis == {Perfil.TECNICO, Perfil.ADMIN}

    def test_cpf_duplicado_entre_variantes(self, tecnico_service, novo_tecnico_payload):
        payload = dict(novo_tecnico_payload, cpf=SEED_CLIENTE["cpf"])

        with pytest.raises(DataIntegrityViolationError) as exc_info:
            tecnico_service.create(PessoaCreateDTO.from_dict(payload))

        assert exc_info.value.message == "CPF já cadastrado no sistema!"

    def test_email_duplicado(self, cliente_service, novo_cliente_payload):
        payload = dict(novo_cliente_payload, email=SEED_TECNICO["email"])

        with pytest.raises(DataIntegrityViolationError) as exc_info:
            cliente_service.create(PessoaCreateDTO.from_dict(payload))

        assert exc_info.value.message == "E-mail já cadastrado no sistema!"


class TestBusca:

    def test_find_all_filtra_variante(self, cliente_service, tecnico_service):
        assert [c.email for c in cliente_service.find_all()] == [SEED_CLIENTE["email"]]
        assert [t.email for t in tecnico_service.find_all()] == [SEED_TECNICO["email"]]

    def test_id_inexistente(self, cliente_service):
        with pytest.raises(ObjectNotFoundError) as exc_info:
            cliente_service.find_by_id(4242)

        assert exc_info.value.message == "Objeto não encontrado! Id: 4242"

    def test_id_de_outra_variante(self, cliente_service, seed_tecnico):
        with pytest.raises(ObjectNotFoundError):
            cliente_service.find_by_id(seed_tecnico.id)


class TestAtualizacao:

    def test_atualiza_mantendo_cpf_e_email_proprios(self, cliente_service, seed_cliente):
        dto = PessoaCreateDTO.from_dict(
            {"nome": "Linus B. Torvalds", "cpf": SEED_CLIENTE["cpf"], "email": SEED_CLIENTE["email"]},
            require_senha=False,
        )
        atualizado = cliente_service.update(seed_cliente.id, dto)

        assert atualizado.id == seed_cliente.id
        assert atualizado.nome == "Linus B. Torvalds"
        assert atualizado.verify_senha(SEED_CLIENTE["senha"])

    def test_troca_senha_quando_informada(self, cliente_service, seed_cliente):
        dto = PessoaCreateDTO.from_dict({
            "nome": seed_cliente.nome, "cpf": SEED_CLIENTE["cpf"],
            "email": SEED_CLIENTE["email"], "senha": "nova-senha",
        })
        atualizado = cliente_service.update(seed_cliente.id, dto)

        assert atualizado.verify_senha("nova-senha")
        assert not atualizado.verify_senha(SEED_CLIENTE["senha"])

    def test_email_de_outra_pessoa(self, cliente_service, seed_cliente):
        dto = PessoaCreateDTO.from_dict(
            {"nome": "Linus", "cpf": SEED_CLIENTE["cpf"], "email": SEED_TECNICO["email"]},
            require_senha=False,
        )

        with pytest.raises(DataIntegrityViolationError):
            cliente_service.update(seed_cliente.id, dto)

    def test_atualiza_inexistente(self, tecnico_service, novo_tecnico_payload):
        with pytest.raises(ObjectNotFoundError):
            tecnico_service.update(4242, PessoaCreateDTO.from_dict(novo_tecnico_payload))


class TestExclusao:

    def test_nao_exclui_cliente_com_chamados(self, cliente_service, seed_cliente):
        with pytest.raises(DataIntegrityViolationError) as exc_info:
            cliente_service.delete(seed_cliente.id)

        assert exc_info.value.message == "Cliente possui chamados e não pode ser deletado!"
        assert cliente_service.find_by_id(seed_cliente.id).id == seed_cliente.id

    def test_nao_exclui_tecnico_com_chamados(self, tecnico_service, seed_tecnico):
        with pytest.raises(DataIntegrityViolationError) as exc_info:
            tecnico_service.delete(seed_tecnico.id)

        assert exc_info.value.message == "Técnico possui chamados e não pode ser deletado!"

    def test_exclui_cliente_sem_chamados(self, cliente_service, novo_cliente_payload):
        ada = cliente_service.create(PessoaCreateDTO.from_dict(novo_cliente_payload))

        cliente_service.delete(ada.id)

        with pytest.raises(ObjectNotFoundError):
            cliente_service.find_by_id(ada.id)

    def test_exclui_inexistente(self, cliente_service):
        with pytest.raises(ObjectNotFoundError):
            cliente_service.delete(4242)
