# helpdesk/database/chamado_repository.py
# Handles database operations for Chamados using SQLAlchemy ORM.

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .base_repository import BaseRepository
from helpdesk.domain.chamado import Chamado
from helpdesk.utils.logger import logger
from helpdesk.api.errors import DatabaseError, DataIntegrityViolationError


class ChamadoRepository(BaseRepository):
    """
    Repository for Chamados. Methods expect a Session object to be passed in.
    """

    def find_by_id(self, db: Session, chamado_id: int) -> Optional[Chamado]:
        """Finds a chamado by its ID using ORM Session."""
        logger.debug(f"ORM: Finding chamado by ID {chamado_id}")
        try:
            chamado = db.get(Chamado, chamado_id)
            if chamado:
                 logger.debug(f"ORM: Chamado found by ID {chamado_id}.")
            else:
                 logger.debug(f"ORM: Chamado not found by ID {chamado_id}.")
            return chamado
        except SQLAlchemyError as e:
             logger.error(f"ORM: Database error finding chamado by ID {chamado_id}: {e}", exc_info=True)
             raise DatabaseError(f"Database error finding chamado by ID: {e}") from e

    def find_all(self, db: Session) -> List[Chamado]:
        """Retrieves every chamado ordered by id."""
        logger.debug("ORM: Retrieving all chamados")
        try:
            chamados = db.scalars(select(Chamado).order_by(Chamado.id)).unique().all()
            logger.debug(f"ORM: Retrieved {len(chamados)} chamados.")
            return list(chamados)
        except SQLAlchemyError as e:
             logger.error(f"ORM: Database error retrieving chamados: {e}", exc_info=True)
             raise DatabaseError(f"Database error retrieving chamados: {e}") from e

    def add(self, db: Session, chamado: Chamado) -> Chamado:
        """Adds a new chamado to the database using ORM Session."""
        if chamado.tecnico is None or chamado.cliente is None:
             raise ValueError("Chamado requires both a tecnico and a cliente.")

        logger.debug(f"ORM: Adding chamado '{chamado.titulo}' to session")
        try:
            db.add(chamado)
            db.flush() # Para obter o ID gerado
            logger.info(f"ORM: Chamado added to session (ID: {chamado.id}). Commit pending.")
            return chamado
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"ORM: Integrity error adding chamado: {e}")
            raise DataIntegrityViolationError(f"Falha ao salvar chamado: {e.orig}") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ORM: Database error adding chamado: {e}", exc_info=True)
            raise DatabaseError(f"Failed to add chamado: {e}") from e

    def update(self, db: Session, chamado: Chamado) -> Chamado:
        """Flushes the pending changes of a chamado already in the session."""
        if chamado.id is None:
            raise ValueError("Cannot update chamado without an ID.")

        logger.debug(f"ORM: Updating chamado ID {chamado.id} in session")
        try:
            db.flush()
            logger.info(f"ORM: Chamado ID {chamado.id} marked for update. Commit pending.")
            return chamado
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"ORM: Integrity error updating chamado ID {chamado.id}: {e}")
            raise DataIntegrityViolationError(f"Falha ao atualizar chamado: {e.orig}") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ORM: Database error updating chamado ID {chamado.id}: {e}", exc_info=True)
            raise DatabaseError(f"Failed to update chamado: {e}") from e

    def delete(self, db: Session, chamado: Chamado) -> None:
        """Deletes a chamado using ORM Session."""
        logger.debug(f"ORM: Deleting chamado ID {chamado.id}")
        try:
            db.delete(chamado)
            db.flush()
            logger.info(f"ORM: Chamado ID {chamado.id} marked for deletion. Commit pending.")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ORM: Database error deleting chamado ID {chamado.id}: {e}", exc_info=True)
            raise DatabaseError(f"Failed to delete chamado: {e}") from e
