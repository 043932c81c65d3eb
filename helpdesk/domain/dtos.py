# helpdesk/domain/dtos.py
# Request payloads. Each from_dict collects every invalid field before raising.

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set

from helpdesk.api.errors import ValidationError
from helpdesk.domain.enums import Perfil, Prioridade, Status
from helpdesk.utils.data_conversion import safe_int

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _text(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


def _require_dict(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError([{"fieldName": "body", "message": "Corpo da requisição deve ser um objeto JSON"}])
    return data


def normalize_cpf(cpf: Optional[str]) -> Optional[str]:
    """Mantém apenas os dígitos do CPF."""
    if cpf is None:
        return None
    return re.sub(r"\D", "", cpf)


@dataclass
class PessoaCreateDTO:
    """Dados de criação/atualização de cliente ou técnico."""
    nome: str
    cpf: str
    email: str
    senha: Optional[str] = None
    id: Optional[int] = None
    perfis: Set[Perfil] = field(default_factory=set)

    @classmethod
    def from_dict(cls, data: Any, require_senha: bool = True) -> "PessoaCreateDTO":
        data = _require_dict(data)
        errors = ValidationError()

        nome = _text(data, 'nome')
        if not nome:
            errors.add_error('nome', 'Nome é obrigatório')

        cpf = normalize_cpf(_text(data, 'cpf'))
        if not cpf:
            errors.add_error('cpf', 'CPF é obrigatório')
        elif len(cpf) != 11:
            errors.add_error('cpf', 'CPF inválido')

        email = _text(data, 'email')
        if not email:
            errors.add_error('email', 'Email é obrigatório')
        elif not EMAIL_PATTERN.match(email):
            errors.add_error('email', 'Email inválido')

        senha = data.get('senha')
        if senha is not None and not isinstance(senha, str):
            senha = str(senha)
        if require_senha and not senha:
            errors.add_error('senha', 'Senha é obrigatória')

        perfis: Set[Perfil] = set()
        raw_perfis = data.get('perfis') or []
        if not isinstance(raw_perfis, (list, tuple, set)):
            errors.add_error('perfis', 'Perfis deve ser uma lista')
        else:
            for raw in raw_perfis:
                try:
                    perfis.add(Perfil.to_enum(raw))
                except ValueError as e:
                    errors.add_error('perfis', str(e))

        if errors.errors:
            raise errors

        return cls(
            nome=nome,
            cpf=cpf,
            email=email.lower(),
            senha=senha or None,
            perfis=perfis,
        )


@dataclass
class ChamadoDTO:
    """Dados de criação/atualização de chamado."""
    prioridade: Prioridade
    status: Status
    titulo: str
    observacoes: str
    tecnico: int
    cliente: int
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "ChamadoDTO":
        data = _require_dict(data)
        errors = ValidationError()

        prioridade = None
        if data.get('prioridade') is None:
            errors.add_error('prioridade', 'Prioridade é obrigatória')
        else:
            try:
                prioridade = Prioridade.to_enum(data['prioridade'])
            except ValueError as e:
                errors.add_error('prioridade', str(e))

        status = None
        if data.get('status') is None:
            errors.add_error('status', 'Status é obrigatório')
        else:
            try:
                status = Status.to_enum(data['status'])
            except ValueError as e:
                errors.add_error('status', str(e))

        titulo = _text(data, 'titulo')
        if not titulo:
            errors.add_error('titulo', 'Título é obrigatório')

        observacoes = _text(data, 'observacoes')
        if not observacoes:
            errors.add_error('observacoes', 'Observações são obrigatórias')

        tecnico = safe_int(data.get('tecnico'))
        if data.get('tecnico') is None:
            errors.add_error('tecnico', 'Técnico é obrigatório')
        elif tecnico is None:
            errors.add_error('tecnico', 'Técnico deve ser um id numérico')

        cliente = safe_int(data.get('cliente'))
        if data.get('cliente') is None:
            errors.add_error('cliente', 'Cliente é obrigatório')
        elif cliente is None:
            errors.add_error('cliente', 'Cliente deve ser um id numérico')

        if errors.errors:
            raise errors

        return cls(
            prioridade=prioridade,
            status=status,
            titulo=titulo,
            observacoes=observacoes,
            tecnico=tecnico,
            cliente=cliente,
        )


@dataclass(frozen=True)
class CredenciaisDTO:
    """Credenciais de login."""
    email: str
    senha: str

    @classmethod
    def from_dict(cls, data: Any) -> "CredenciaisDTO":
        data = _require_dict(data)
        errors = ValidationError()
        email = _text(data, 'email')
        senha = data.get('senha')
        if not email:
            errors.add_error('email', 'Email é obrigatório')
        if not senha or not isinstance(senha, str):
            errors.add_error('senha', 'Senha é obrigatória')
        if errors.errors:
            raise errors
        return cls(email=email.lower(), senha=senha)
