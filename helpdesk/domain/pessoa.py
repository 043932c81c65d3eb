# helpdesk/domain/pessoa.py
from datetime import date
import bcrypt
from typing import List, Optional, Dict, Any, Set, TYPE_CHECKING
from sqlalchemy import Integer, String, Text, Date, ForeignKey
from sqlalchemy.orm import relationship, Mapped, mapped_column

from helpdesk.database.base import Base
from helpdesk.domain.enums import Perfil, TipoPessoa
from helpdesk.utils.data_conversion import format_date
from helpdesk.utils.logger import logger

if TYPE_CHECKING:
    from helpdesk.domain.chamado import Chamado


class PessoaPerfil(Base):
    """
    Um perfil (role tag) atribuído a uma pessoa.
    """
    __tablename__ = 'perfis'

    pessoa_id: Mapped[int] = mapped_column(ForeignKey('pessoas.id', ondelete='CASCADE'), primary_key=True)
    perfil: Mapped[int] = mapped_column(Integer, primary_key=True)

    pessoa: Mapped["Pessoa"] = relationship(back_populates="perfis_associados")

    def __repr__(self):
        return f"<PessoaPerfil(pessoa_id={self.pessoa_id}, perfil={self.perfil})>"


class Pessoa(Base):
    """
    Registro comum de clientes e técnicos. A variante fica em 'tipo';
    CPF e e-mail são únicos na tabela inteira, independente da variante.
    """
    __tablename__ = 'pessoas'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    nome: Mapped[str] = mapped_column(Text, nullable=False)
    cpf: Mapped[str] = mapped_column(String(11), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    senha: Mapped[str] = mapped_column(Text, nullable=False)
    tipo: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    data_criacao: Mapped[date] = mapped_column(Date, default=date.today, nullable=False)

    perfis_associados: Mapped[List[PessoaPerfil]] = relationship(
        back_populates="pessoa",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    chamados_cliente: Mapped[List["Chamado"]] = relationship(
        "Chamado",
        foreign_keys="Chamado.cliente_id",
        back_populates="cliente",
        lazy="select",
        passive_deletes="all",
    )
    chamados_tecnico: Mapped[List["Chamado"]] = relationship(
        "Chamado",
        foreign_keys="Chamado.tecnico_id",
        back_populates="tecnico",
        lazy="select",
        passive_deletes="all",
    )

    def __init__(self, tipo: TipoPessoa, nome: str, cpf: str, email: str, senha: str = "", **kwargs):
        super().__init__(tipo=tipo.value, nome=nome, cpf=cpf, email=email, senha=senha, **kwargs)
        if self.data_criacao is None:
            self.data_criacao = date.today()
        self.add_perfil(tipo.perfil)

    @property
    def tipo_pessoa(self) -> TipoPessoa:
        return TipoPessoa(self.tipo)

    @property
    def perfis(self) -> Set[Perfil]:
        return {Perfil(p.perfil) for p in self.perfis_associados}

    def add_perfil(self, perfil: Perfil):
        if perfil not in self.perfis:
            self.perfis_associados.append(PessoaPerfil(perfil=perfil.codigo))

    def has_perfil(self, *perfis: Perfil) -> bool:
        return bool(self.perfis.intersection(perfis))

    @property
    def chamados(self) -> List["Chamado"]:
        """Chamados da pessoa no papel da sua variante (solicitante ou responsável)."""
        if self.tipo_pessoa is TipoPessoa.TECNICO:
            return self.chamados_tecnico
        return self.chamados_cliente

    def set_senha(self, senha: str):
        """Hashes the given password (bcrypt, salted) and stores it."""
        if not senha:
            raise ValueError("Senha não pode ser vazia.")
        self.senha = bcrypt.hashpw(senha.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

    def verify_senha(self, senha: str) -> bool:
        """Verifies the given password against the stored hash."""
        if not self.senha or not senha:
            logger.debug(f"Verificação de senha falhou para pessoa {self.id}: Hash ou senha fornecida ausente.")
            return False
        try:
            return bcrypt.checkpw(senha.encode('utf-8'), self.senha.encode('utf-8'))
        except ValueError as e:
            logger.error(f"Erro ao verificar senha para pessoa {self.id}: {e}. Possível hash corrompido.")
            return False

    def to_dict(self) -> Dict[str, Any]:
        """Representação pública; a senha nunca é incluída."""
        return {
            'id': self.id,
            'nome': self.nome,
            'cpf': self.cpf,
            'email': self.email,
            'perfis': sorted(p.codigo for p in self.perfis),
            'dataCriacao': format_date(self.data_criacao),
        }

    def __repr__(self):
        return f"<Pessoa(id={self.id}, tipo='{self.tipo}', email='{self.email}')>"
