# helpdesk/services/chamado_service.py
# Contains business logic related to managing chamados using ORM.

from datetime import date
from typing import List, Tuple
from sqlalchemy.orm import Session

from helpdesk.database import Database
from helpdesk.database.chamado_repository import ChamadoRepository
from helpdesk.database.pessoa_repository import PessoaRepository
from helpdesk.domain.chamado import Chamado
from helpdesk.domain.dtos import ChamadoDTO
from helpdesk.domain.enums import TipoPessoa
from helpdesk.domain.pessoa import Pessoa
from helpdesk.api.errors import ObjectNotFoundError
from helpdesk.utils.logger import logger


class ChamadoService:
    """
    Camada de serviço para chamados. Técnico e cliente precisam existir
    antes de qualquer escrita.
    """

    def __init__(self, database: Database, chamado_repository: ChamadoRepository,
                 pessoa_repository: PessoaRepository):
        self.database = database
        self.chamado_repository = chamado_repository
        self.pessoa_repository = pessoa_repository
        logger.info("ChamadoService inicializado (ORM).")

    def find_by_id(self, chamado_id: int) -> Chamado:
        with self.database.get_session() as db:
            chamado = self.chamado_repository.find_by_id(db, chamado_id)
        if chamado is None:
            logger.warning(f"Chamado ID {chamado_id} não encontrado.")
            raise ObjectNotFoundError(f"Chamado não encontrado! Id: {chamado_id}")
        return chamado

    def find_all(self) -> List[Chamado]:
        with self.database.get_session() as db:
            return self.chamado_repository.find_all(db)

    def create(self, dto: ChamadoDTO) -> Chamado:
        """Abre um chamado novo; o id informado pelo cliente é descartado."""
        dto.id = None
        logger.info(f"Criando chamado '{dto.titulo}' (técnico {dto.tecnico}, cliente {dto.cliente}).")
        with self.database.get_session() as db:
            tecnico, cliente = self._resolve_pessoas(db, dto)
            chamado = Chamado(
                data_abertura=date.today(),
                prioridade=dto.prioridade.codigo,
                titulo=dto.titulo,
                observacoes=dto.observacoes,
                tecnico=tecnico,
                cliente=cliente,
            )
            chamado.apply_status(dto.status)
            created = self.chamado_repository.add(db, chamado)
        logger.info(f"Chamado ID {created.id} criado.")
        return created

    def update(self, chamado_id: int, dto: ChamadoDTO) -> Chamado:
        """Substitui todos os campos mutáveis, preservando id e data de abertura."""
        dto.id = chamado_id
        logger.info(f"Atualizando chamado ID {chamado_id}.")
        with self.database.get_session() as db:
            chamado = self.chamado_repository.find_by_id(db, chamado_id)
            if chamado is None:
                raise ObjectNotFoundError(f"Chamado não encontrado! Id: {chamado_id}")

            tecnico, cliente = self._resolve_pessoas(db, dto)
            chamado.tecnico = tecnico
            chamado.cliente = cliente
            chamado.prioridade = dto.prioridade.codigo
            chamado.titulo = dto.titulo
            chamado.observacoes = dto.observacoes
            chamado.apply_status(dto.status)

            updated = self.chamado_repository.update(db, chamado)
        logger.info(f"Chamado ID {chamado_id} atualizado.")
        return updated

    def delete(self, chamado_id: int) -> None:
        logger.info(f"Excluindo chamado ID {chamado_id}.")
        with self.database.get_session() as db:
            chamado = self.chamado_repository.find_by_id(db, chamado_id)
            if chamado is None:
                raise ObjectNotFoundError(f"Chamado não encontrado! Id: {chamado_id}")
            self.chamado_repository.delete(db, chamado)
        logger.info(f"Chamado ID {chamado_id} excluído.")

    def _resolve_pessoas(self, db: Session, dto: ChamadoDTO) -> Tuple[Pessoa, Pessoa]:
        tecnico = self.pessoa_repository.find_by_id(db, dto.tecnico, TipoPessoa.TECNICO)
        if tecnico is None:
            logger.warning(f"Técnico ID {dto.tecnico} não encontrado para o chamado.")
            raise ObjectNotFoundError(f"Objeto não encontrado! Id: {dto.tecnico}")
        cliente = self.pessoa_repository.find_by_id(db, dto.cliente, TipoPessoa.CLIENTE)
        if cliente is None:
            logger.warning(f"Cliente ID {dto.cliente} não encontrado para o chamado.")
            raise ObjectNotFoundError(f"Cliente não encontrado! Id: {dto.cliente}")
        return tecnico, cliente
