# helpdesk/api/routes/auth.py

from flask import Blueprint, request, jsonify, current_app, make_response
from helpdesk.services.auth_service import AuthService, INVALID_CREDENTIALS_MESSAGE
from helpdesk.api.decorators import login_required
from helpdesk.api.errors import AuthenticationError, ApiError, ValidationError
from helpdesk.domain.dtos import CredenciaisDTO
from helpdesk.utils.logger import logger

auth_bp = Blueprint('auth', __name__)

def _get_auth_service() -> AuthService:
    service = current_app.config.get('auth_service')
    if not service:
        logger.critical("Serviço de autenticação não encontrado na configuração da aplicação!")
        raise ApiError("Serviço de autenticação indisponível.", 503)
    return service

@auth_bp.route('', methods=['POST'])
def login():
    """
    Login por e-mail e senha. Espera JSON {email, senha}.
    O token volta no cabeçalho 'Authorization: Bearer <token>'; o corpo é vazio.
    ---
    tags: [Authentication]
    responses:
      200:
        description: Login realizado; token no cabeçalho Authorization
      401:
        description: Email ou senha inválidos (inclusive corpo malformado)
    """
    logger.info("Requisição de login recebida.")
    data = request.get_json(silent=True)
    try:
        credenciais = CredenciaisDTO.from_dict(data)
    except ValidationError as e:
        logger.warning(f"Login falhou: corpo inválido ({e.errors}).")
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE) from None

    token = _get_auth_service().login(credenciais.email, credenciais.senha)

    response = make_response('', 200)
    response.headers['Authorization'] = f"Bearer {token}"
    response.headers['Access-Control-Expose-Headers'] = 'Authorization'
    logger.info(f"Usuário '{credenciais.email}' logado com sucesso.")
    return response


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    """
    Retorna a pessoa autenticada pelo token atual.
    ---
    tags: [Authentication]
    security:
      - bearerAuth: []
    responses:
      200:
        description: Token válido
      401:
        description: Token ausente, inválido ou expirado
    """
    user = request.current_user
    logger.info(f"Token verificado para: {user.email} (ID: {user.id})")
    return jsonify(user.to_dict()), 200
