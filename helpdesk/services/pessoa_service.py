# helpdesk/services/pessoa_service.py
# Contains business logic for clientes and técnicos using ORM.

from typing import List

from helpdesk.database import Database
from helpdesk.database.pessoa_repository import PessoaRepository
from helpdesk.domain.dtos import PessoaCreateDTO
from helpdesk.domain.enums import TipoPessoa
from helpdesk.domain.pessoa import Pessoa
from helpdesk.services.validation import valida_por_cpf_e_email, has_open_references
from helpdesk.api.errors import ObjectNotFoundError, DataIntegrityViolationError
from helpdesk.utils.logger import logger


class PessoaService:
    """
    Camada de serviço de uma variante de Pessoa (cliente ou técnico).
    """

    tipo: TipoPessoa

    def __init__(self, database: Database, pessoa_repository: PessoaRepository):
        self.database = database
        self.pessoa_repository = pessoa_repository
        logger.info(f"{self.__class__.__name__} inicializado (ORM).")

    @property
    def label(self) -> str:
        return self.tipo.label

    def find_by_id(self, pessoa_id: int) -> Pessoa:
        """Busca a pessoa da variante pelo ID ou levanta ObjectNotFoundError."""
        with self.database.get_session() as db:
            pessoa = self.pessoa_repository.find_by_id(db, pessoa_id, self.tipo)
        if pessoa is None:
            logger.warning(f"{self.label} com ID {pessoa_id} não encontrado.")
            raise ObjectNotFoundError(f"Objeto não encontrado! Id: {pessoa_id}")
        return pessoa

    def find_all(self) -> List[Pessoa]:
        with self.database.get_session() as db:
            return self.pessoa_repository.find_all(db, self.tipo)

    def create(self, dto: PessoaCreateDTO) -> Pessoa:
        """Cria a pessoa; o id informado pelo cliente é sempre descartado."""
        dto.id = None
        logger.info(f"Criando {self.label.lower()} '{dto.email}'.")
        with self.database.get_session() as db:
            valida_por_cpf_e_email(self.pessoa_repository, db, dto.cpf, dto.email)

            pessoa = Pessoa(self.tipo, dto.nome, dto.cpf, dto.email)
            pessoa.set_senha(dto.senha)
            for perfil in dto.perfis:
                pessoa.add_perfil(perfil)

            created = self.pessoa_repository.add(db, pessoa)
        logger.info(f"{self.label} '{created.email}' criado com ID {created.id}.")
        return created

    def update(self, pessoa_id: int, dto: PessoaCreateDTO) -> Pessoa:
        """
        Substitui nome, CPF e e-mail; a senha só é trocada quando uma nova
        senha não vazia é informada.
        """
        dto.id = pessoa_id
        logger.info(f"Atualizando {self.label.lower()} ID {pessoa_id}.")
        with self.database.get_session() as db:
            pessoa = self.pessoa_repository.find_by_id(db, pessoa_id, self.tipo)
            if pessoa is None:
                raise ObjectNotFoundError(f"Objeto não encontrado! Id: {pessoa_id}")

            valida_por_cpf_e_email(self.pessoa_repository, db, dto.cpf, dto.email, excluding_id=dto.id)

            pessoa.nome = dto.nome
            pessoa.cpf = dto.cpf
            pessoa.email = dto.email
            if dto.senha:
                logger.debug(f"Atualizando senha de {self.label.lower()} ID {pessoa_id}.")
                pessoa.set_senha(dto.senha)
            for perfil in dto.perfis:
                pessoa.add_perfil(perfil)

            updated = self.pessoa_repository.update(db, pessoa)
        logger.info(f"{self.label} ID {pessoa_id} atualizado.")
        return updated

    def delete(self, pessoa_id: int) -> None:
        """Remove a pessoa, recusando enquanto algum chamado a referenciar."""
        logger.info(f"Excluindo {self.label.lower()} ID {pessoa_id}.")
        with self.database.get_session() as db:
            pessoa = self.pessoa_repository.find_by_id(db, pessoa_id, self.tipo)
            if pessoa is None:
                raise ObjectNotFoundError(f"Objeto não encontrado! Id: {pessoa_id}")

            if has_open_references(self.pessoa_repository, db, pessoa_id):
                logger.warning(f"{self.label} ID {pessoa_id} possui chamados; exclusão recusada.")
                raise DataIntegrityViolationError(f"{self.label} possui chamados e não pode ser deletado!")

            self.pessoa_repository.delete(db, pessoa)
        logger.info(f"{self.label} ID {pessoa_id} excluído.")


class ClienteService(PessoaService):
    tipo = TipoPessoa.CLIENTE


class TecnicoService(PessoaService):
    tipo = TipoPessoa.TECNICO
