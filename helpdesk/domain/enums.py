# helpdesk/domain/enums.py
# Enumerações do domínio, persistidas pelo código inteiro.

from enum import Enum, IntEnum
from typing import Any, Optional


class _CodedEnum(IntEnum):
    """IntEnum que aceita tanto o código quanto o nome na conversão."""

    @property
    def codigo(self) -> int:
        return int(self.value)

    @classmethod
    def to_enum(cls, value: Any) -> Optional["_CodedEnum"]:
        """Converte código (int/str numérica) ou nome para o enum. None continua None."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"{cls.__name__} inválido: {value}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"{cls.__name__} inválido: {value}") from None
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls.to_enum(int(text))
            member = cls.__members__.get(text.upper())
            if member is not None:
                return member
        raise ValueError(f"{cls.__name__} inválido: {value}")


class Perfil(_CodedEnum):
    ADMIN = 0
    CLIENTE = 1
    TECNICO = 2

    @property
    def descricao(self) -> str:
        return f"ROLE_{self.name}"


class Prioridade(_CodedEnum):
    BAIXA = 0
    MEDIA = 1
    ALTA = 2

    @property
    def descricao(self) -> str:
        return self.name


class Status(_CodedEnum):
    ABERTO = 0
    ANDAMENTO = 1
    ENCERRADO = 2

    @property
    def descricao(self) -> str:
        return self.name


class TipoPessoa(str, Enum):
    """Variante de uma Pessoa. Cada variante carrega sempre o seu perfil."""
    CLIENTE = "CLIENTE"
    TECNICO = "TECNICO"

    @property
    def perfil(self) -> Perfil:
        return Perfil.CLIENTE if self is TipoPessoa.CLIENTE else Perfil.TECNICO

    @property
    def label(self) -> str:
        return "Cliente" if self is TipoPessoa.CLIENTE else "Técnico"
