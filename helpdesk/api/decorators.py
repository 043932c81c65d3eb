# helpdesk/api/decorators.py
# Access guard and perfil checks for API endpoints.

from functools import wraps
from flask import Flask, request, current_app
from helpdesk.services.auth_service import AuthService
from helpdesk.domain.enums import Perfil
from helpdesk.api.errors import AuthenticationError, ForbiddenError, ApiError
from helpdesk.utils.logger import logger

# Helper to get auth_service instance from app context
def _get_auth_service() -> AuthService:
    service = current_app.config.get('auth_service')
    if not service:
        logger.critical("AuthService not found in application config!")
        raise ApiError("Serviço de autenticação indisponível.", 503)
    return service


def _is_public(path: str) -> bool:
    public_paths = current_app.config.get('PUBLIC_PATHS') or []
    normalized = path.rstrip('/') or '/'
    return normalized in public_paths


def register_access_guard(app: Flask):
    """
    Registers the before_request hook that authenticates every request
    outside PUBLIC_PATHS. The authenticated Pessoa goes to request.current_user.
    """

    @app.before_request
    def access_guard():
        if request.method == 'OPTIONS' or _is_public(request.path):
            return None

        pessoa = _get_auth_service().get_current_user_from_request()
        if pessoa is None:
            logger.debug(f"Acesso negado a {request.method} {request.path}: token ausente ou inválido.")
            raise AuthenticationError()

        request.current_user = pessoa
        logger.debug(f"Acesso liberado para {pessoa.email} (ID: {pessoa.id}) em {request.method} {request.path}")
        return None

    logger.info("Access guard registered.")


def login_required(f):
    """
    Garante que exista um usuário autenticado. Reaproveita o que o guard já
    anexou à requisição; autentica de novo se a rota estiver em PUBLIC_PATHS.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if getattr(request, 'current_user', None) is None:
            pessoa = _get_auth_service().get_current_user_from_request()
            if pessoa is None:
                raise AuthenticationError()
            request.current_user = pessoa
        return f(*args, **kwargs)
    return decorated_function


def perfil_required(*perfis: Perfil):
    """
    Decorator factory: 403 unless the current user carries one of the perfis.
    """
    def decorator(f):
        @wraps(f)
        @login_required
        def decorated_function(*args, **kwargs):
            user = request.current_user
            if not user.has_perfil(*perfis):
                required = ", ".join(p.descricao for p in perfis)
                logger.warning(f"Acesso negado: '{user.email}' (ID: {user.id}) não possui nenhum dos perfis [{required}].")
                raise ForbiddenError()
            return f(*args, **kwargs)
        return decorated_function
    return decorator


admin_required = perfil_required(Perfil.ADMIN)


def ensure_can_grant_perfis(perfis):
    """Somente ADMIN pode atribuir perfis extras no cadastro ou na atualização."""
    if not perfis:
        return
    user = request.current_user
    if not user.has_perfil(Perfil.ADMIN):
        requested = ", ".join(sorted(p.descricao for p in perfis))
        logger.warning(f"Acesso negado: '{user.email}' (ID: {user.id}) tentou atribuir perfis [{requested}] sem ser ADMIN.")
        raise ForbiddenError("Somente administradores podem atribuir perfis.")
