# helpdesk/domain/chamado.py
# Define o modelo ORM para Chamados (tickets de suporte).

from datetime import date
from typing import Optional, Dict, Any
from sqlalchemy import Integer, Text, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from helpdesk.database.base import Base
from helpdesk.domain.enums import Prioridade, Status
from helpdesk.domain.pessoa import Pessoa
from helpdesk.utils.data_conversion import format_date


class Chamado(Base):
    """
    Representa um chamado como modelo ORM. Sempre referencia exatamente
    um técnico e um cliente.
    """
    __tablename__ = 'chamados'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    data_abertura: Mapped[date] = mapped_column(Date, default=date.today, nullable=False)
    data_fechamento: Mapped[Optional[date]] = mapped_column(Date)
    prioridade: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    titulo: Mapped[str] = mapped_column(Text, nullable=False)
    observacoes: Mapped[str] = mapped_column(Text, nullable=False)
    tecnico_id: Mapped[int] = mapped_column(ForeignKey('pessoas.id'), nullable=False, index=True)
    cliente_id: Mapped[int] = mapped_column(ForeignKey('pessoas.id'), nullable=False, index=True)

    tecnico: Mapped[Pessoa] = relationship(
        Pessoa, foreign_keys=[tecnico_id], back_populates="chamados_tecnico", lazy="joined"
    )
    cliente: Mapped[Pessoa] = relationship(
        Pessoa, foreign_keys=[cliente_id], back_populates="chamados_cliente", lazy="joined"
    )

    @property
    def prioridade_enum(self) -> Prioridade:
        return Prioridade(self.prioridade)

    @property
    def status_enum(self) -> Status:
        return Status(self.status)

    def apply_status(self, status: Status, today: Optional[date] = None):
        """Sets the status, stamping data_fechamento when the ticket is closed."""
        self.status = status.codigo
        if status is Status.ENCERRADO:
            if self.data_fechamento is None:
                self.data_fechamento = today or date.today()
        else:
            self.data_fechamento = None

    def to_dict(self) -> Dict[str, Any]:
        """Converte o objeto Chamado para um dicionário."""
        return {
            'id': self.id,
            'dataAbertura': format_date(self.data_abertura),
            'dataFechamento': format_date(self.data_fechamento),
            'prioridade': self.prioridade,
            'status': self.status,
            'titulo': self.titulo,
            'observacoes': self.observacoes,
            'tecnico': self.tecnico_id,
            'cliente': self.cliente_id,
            'nomeTecnico': self.tecnico.nome if self.tecnico else None,
            'nomeCliente': self.cliente.nome if self.cliente else None,
        }

    def __repr__(self):
        return f"<Chamado(id={self.id}, status={self.status}, tecnico_id={self.tecnico_id}, cliente_id={self.cliente_id})>"
