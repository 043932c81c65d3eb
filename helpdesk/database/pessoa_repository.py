# helpdesk/database/pessoa_repository.py
# Gerencia operações de banco de dados de Pessoas (clientes e técnicos) usando SQLAlchemy ORM.

from typing import List, Optional
from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .base_repository import BaseRepository
from helpdesk.domain.pessoa import Pessoa
from helpdesk.domain.chamado import Chamado
from helpdesk.domain.enums import TipoPessoa
from helpdesk.utils.logger import logger
from helpdesk.api.errors import DatabaseError, DataIntegrityViolationError


def integrity_error_message(error: IntegrityError) -> str:
    """Traduz a violação de unique constraint para a mensagem de negócio."""
    error_info = str(error.orig).lower() if error.orig else str(error).lower()
    if "cpf" in error_info:
        return "CPF já cadastrado no sistema!"
    if "email" in error_info:
        return "E-mail já cadastrado no sistema!"
    return "Violação de integridade dos dados."


class PessoaRepository(BaseRepository):
    """
    Repositório de Pessoas. Os métodos esperam que um objeto Session seja passado.
    """

    def find_by_id(self, db: Session, pessoa_id: int, tipo: Optional[TipoPessoa] = None) -> Optional[Pessoa]:
        """Busca uma pessoa pelo ID, opcionalmente restrita a uma variante."""
        logger.debug(f"ORM: Buscando pessoa pelo ID {pessoa_id} (tipo={tipo.value if tipo else 'qualquer'})")
        try:
            pessoa = db.get(Pessoa, pessoa_id)
            if pessoa and tipo is not None and pessoa.tipo != tipo.value:
                logger.debug(f"ORM: Pessoa ID {pessoa_id} existe, mas é do tipo {pessoa.tipo}.")
                return None
            return pessoa
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro de banco de dados ao buscar pessoa pelo ID {pessoa_id}: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao buscar pessoa pelo ID: {e}") from e

    def find_all(self, db: Session, tipo: Optional[TipoPessoa] = None) -> List[Pessoa]:
        """Recupera todas as pessoas, opcionalmente de uma variante."""
        logger.debug(f"ORM: Recuperando todas as pessoas (tipo={tipo.value if tipo else 'qualquer'})")
        try:
            stmt = select(Pessoa).order_by(Pessoa.id)
            if tipo is not None:
                stmt = stmt.where(Pessoa.tipo == tipo.value)
            pessoas = db.scalars(stmt).all()
            logger.debug(f"ORM: Recuperadas {len(pessoas)} pessoas.")
            return list(pessoas)
        except SQLAlchemyError as e:
             logger.error(f"ORM: Erro de banco de dados ao recuperar pessoas: {e}", exc_info=True)
             raise DatabaseError(f"Erro de banco de dados ao recuperar pessoas: {e}") from e

    def find_by_cpf(self, db: Session, cpf: str) -> Optional[Pessoa]:
        """Busca uma pessoa (de qualquer variante) pelo CPF."""
        try:
            return db.scalars(select(Pessoa).where(Pessoa.cpf == cpf)).first()
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro de banco de dados ao buscar pessoa pelo CPF: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao buscar pessoa pelo CPF: {e}") from e

    def find_by_email(self, db: Session, email: str) -> Optional[Pessoa]:
        """Busca uma pessoa (de qualquer variante) pelo e-mail (case-insensitive)."""
        try:
            stmt = select(Pessoa).where(func.lower(Pessoa.email) == func.lower(email))
            return db.scalars(stmt).first()
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro de banco de dados ao buscar pessoa pelo e-mail '{email}': {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao buscar pessoa pelo e-mail: {e}") from e

    def count_chamados(self, db: Session, pessoa_id: int) -> int:
        """Conta os chamados que referenciam a pessoa, como cliente ou como técnico."""
        try:
            stmt = (
                select(func.count(Chamado.id))
                .where(or_(Chamado.cliente_id == pessoa_id, Chamado.tecnico_id == pessoa_id))
            )
            count = db.scalar(stmt)
            return count if count is not None else 0
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro ao contar chamados da pessoa ID {pessoa_id}: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao contar chamados: {e}") from e

    def add(self, db: Session, pessoa: Pessoa) -> Pessoa:
        """Adiciona uma nova pessoa usando Sessão ORM."""
        if not pessoa.nome or not pessoa.cpf or not pessoa.email or not pessoa.senha:
             raise ValueError("Campos obrigatórios faltando (nome, cpf, email, senha) para Pessoa.")

        logger.debug(f"ORM: Adicionando pessoa '{pessoa.email}' ({pessoa.tipo}) à sessão")
        try:
            db.add(pessoa)
            db.flush()
            logger.info(f"ORM: Pessoa '{pessoa.email}' adicionada à sessão (ID: {pessoa.id}). Commit pendente.")
            return pessoa
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"ORM: Erro de integridade ao adicionar pessoa '{pessoa.email}': {e}")
            raise DataIntegrityViolationError(integrity_error_message(e)) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ORM: Erro de banco de dados ao adicionar pessoa '{pessoa.email}': {e}", exc_info=True)
            raise DatabaseError(f"Falha ao adicionar pessoa: {e}") from e

    def update(self, db: Session, pessoa: Pessoa) -> Pessoa:
        """Envia as alterações de uma pessoa já presente na sessão."""
        if pessoa.id is None:
            raise ValueError("Não é possível atualizar pessoa sem um ID.")

        logger.debug(f"ORM: Atualizando pessoa ID {pessoa.id} na sessão")
        try:
            db.flush()
            logger.info(f"ORM: Pessoa ID {pessoa.id} marcada para atualização na sessão. Commit pendente.")
            return pessoa
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"ORM: Erro de integridade ao atualizar pessoa ID {pessoa.id}: {e}")
            raise DataIntegrityViolationError(integrity_error_message(e)) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ORM: Erro de banco de dados ao atualizar pessoa ID {pessoa.id}: {e}", exc_info=True)
            raise DatabaseError(f"Falha ao atualizar pessoa: {e}") from e

    def delete(self, db: Session, pessoa: Pessoa) -> None:
        """Exclui uma pessoa usando Sessão ORM."""
        logger.debug(f"ORM: Excluindo pessoa ID {pessoa.id}")
        try:
            db.delete(pessoa)
            db.flush()
            logger.info(f"ORM: Pessoa ID {pessoa.id} marcada para exclusão na sessão. Commit pendente.")
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"ORM: Exclusão da pessoa ID {pessoa.id} bloqueada por restrição de integridade: {e}")
            raise DataIntegrityViolationError("Pessoa possui chamados e não pode ser deletada!") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ORM: Erro de banco de dados ao excluir pessoa ID {pessoa.id}: {e}", exc_info=True)
            raise DatabaseError(f"Falha ao excluir pessoa: {e}") from e
