# helpdesk/services/__init__.py
# Makes 'services' a package. Exports service classes.

from .auth_service import AuthService
from .pessoa_service import PessoaService, ClienteService, TecnicoService
from .chamado_service import ChamadoService

__all__ = [
    "AuthService",
    "PessoaService",
    "ClienteService",
    "TecnicoService",
    "ChamadoService",
]
