# helpdesk/domain/__init__.py
# Makes 'domain' a package. Exports domain models.

# --- ORM Models ---
from .pessoa import Pessoa, PessoaPerfil
from .chamado import Chamado

# --- Enums ---
from .enums import Perfil, Prioridade, Status, TipoPessoa

__all__ = [
    # ORM Models
    "Pessoa", "PessoaPerfil",
    "Chamado",

    # Enums
    "Perfil", "Prioridade", "Status", "TipoPessoa",
]
