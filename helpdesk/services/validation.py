# helpdesk/services/validation.py
# Regras de unicidade e de referência consultadas antes de cada escrita.
# São checagens de leitura-antes-da-escrita; as unique constraints da tabela
# 'pessoas' continuam sendo a garantia final sob concorrência.

from typing import Optional
from sqlalchemy.orm import Session

from helpdesk.database.pessoa_repository import PessoaRepository
from helpdesk.api.errors import DataIntegrityViolationError
from helpdesk.utils.logger import logger


def _same_id(a: Optional[int], b: Optional[int]) -> bool:
    return a is not None and b is not None and int(a) == int(b)


def is_unique_cpf(repository: PessoaRepository, db: Session, cpf: str, excluding_id: Optional[int] = None) -> bool:
    """True se nenhuma outra pessoa (id diferente de excluding_id) usa o CPF."""
    existing = repository.find_by_cpf(db, cpf)
    return existing is None or _same_id(existing.id, excluding_id)


def is_unique_email(repository: PessoaRepository, db: Session, email: str, excluding_id: Optional[int] = None) -> bool:
    """True se nenhuma outra pessoa (id diferente de excluding_id) usa o e-mail."""
    existing = repository.find_by_email(db, email)
    return existing is None or _same_id(existing.id, excluding_id)


def has_open_references(repository: PessoaRepository, db: Session, pessoa_id: int) -> bool:
    """True se ao menos um chamado referencia a pessoa."""
    return repository.count_chamados(db, pessoa_id) > 0


def valida_por_cpf_e_email(repository: PessoaRepository, db: Session, cpf: str, email: str,
                           excluding_id: Optional[int] = None) -> None:
    """Levanta DataIntegrityViolationError se CPF ou e-mail pertencem a outra pessoa."""
    if not is_unique_cpf(repository, db, cpf, excluding_id):
        logger.warning(f"CPF já cadastrado para outra pessoa (excluindo ID {excluding_id}).")
        raise DataIntegrityViolationError("CPF já cadastrado no sistema!")
    if not is_unique_email(repository, db, email, excluding_id):
        logger.warning(f"E-mail '{email}' já cadastrado para outra pessoa (excluindo ID {excluding_id}).")
        raise DataIntegrityViolationError("E-mail já cadastrado no sistema!")
