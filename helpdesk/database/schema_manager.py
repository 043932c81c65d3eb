# helpdesk/database/schema_manager.py
# Gerencia a criação inicial das tabelas do banco de dados e os dados de exemplo.

from sqlalchemy import select, func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .base import Base
from helpdesk.utils.logger import logger
from helpdesk.api.errors import DatabaseError

# Dados de exemplo
SEED_TECNICO = {"nome": "Bill Gates", "cpf": "76045777093", "email": "bill@mail.com", "senha": "123"}
SEED_CLIENTE = {"nome": "Linus Torvalds", "cpf": "70511744013", "email": "linus@mail.com", "senha": "123"}


class SchemaManager:
    def __init__(self, engine: Engine):
        self.engine = engine
        logger.debug("SchemaManager inicializado com o engine do SQLAlchemy.")

    def initialize_schema(self, seed: bool = False):
        # Os modelos precisam estar registrados na metadata antes do create_all
        import helpdesk.domain  # noqa: F401
        try:
            logger.info("Iniciando a criação do esquema do banco de dados...")
            Base.metadata.create_all(bind=self.engine)
            logger.info("Tabelas criadas/verificadas com sucesso.")

            if seed:
                with Session(self.engine) as session:
                    with session.begin():
                        self._seed_database(session)

            logger.info("Esquema do banco de dados inicializado com sucesso.")

        except SQLAlchemyError as e:
            logger.critical(f"Falha na inicialização do esquema do banco de dados: {e}", exc_info=True)
            raise DatabaseError(f"Falha na inicialização do esquema: {e}") from e

    def _seed_database(self, session: Session):
        from helpdesk.domain import Pessoa, Chamado, Perfil, Prioridade, Status, TipoPessoa

        total = session.scalar(select(func.count(Pessoa.id)))
        if total:
            logger.debug(f"Banco já possui {total} pessoas. Dados de exemplo não inseridos.")
            return

        logger.info("Inserindo dados de exemplo...")
        tec1 = Pessoa(TipoPessoa.TECNICO, SEED_TECNICO["nome"], SEED_TECNICO["cpf"], SEED_TECNICO["email"])
        tec1.set_senha(SEED_TECNICO["senha"])
        tec1.add_perfil(Perfil.ADMIN)

        cli1 = Pessoa(TipoPessoa.CLIENTE, SEED_CLIENTE["nome"], SEED_CLIENTE["cpf"], SEED_CLIENTE["email"])
        cli1.set_senha(SEED_CLIENTE["senha"])

        cha1 = Chamado(
            prioridade=Prioridade.MEDIA.codigo,
            titulo="Chamado 01",
            observacoes="Primeiro chamado",
            tecnico=tec1,
            cliente=cli1,
        )
        cha1.apply_status(Status.ANDAMENTO)

        session.add_all([tec1, cli1, cha1])
        session.flush()
        logger.info(f"Dados de exemplo inseridos: técnico ID {tec1.id}, cliente ID {cli1.id}, chamado ID {cha1.id}.")
