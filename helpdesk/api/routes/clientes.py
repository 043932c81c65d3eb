# helpdesk/api/routes/clientes.py
# CRUD endpoints for clientes.

from flask import Blueprint, request, jsonify, current_app, url_for
from helpdesk.services.pessoa_service import ClienteService
from helpdesk.domain.dtos import PessoaCreateDTO
from helpdesk.api.decorators import ensure_can_grant_perfis
from helpdesk.api.errors import ApiError
from helpdesk.utils.logger import logger

clientes_bp = Blueprint('clientes', __name__)

def _get_cliente_service() -> ClienteService:
    service = current_app.config.get('cliente_service')
    if not service:
        logger.critical("ClienteService não encontrado na configuração da aplicação!")
        raise ApiError("Serviço de clientes indisponível.", 503)
    return service


@clientes_bp.route('', methods=['GET'])
def get_all_clientes():
    """Lista todos os clientes."""
    clientes = _get_cliente_service().find_all()
    return jsonify([c.to_dict() for c in clientes]), 200


@clientes_bp.route('/<int:cliente_id>', methods=['GET'])
def get_cliente(cliente_id: int):
    """Busca um cliente pelo ID."""
    cliente = _get_cliente_service().find_by_id(cliente_id)
    return jsonify(cliente.to_dict()), 200


@clientes_bp.route('', methods=['POST'])
def create_cliente():
    """Cria um cliente. Responde 201 com o cabeçalho Location do novo recurso."""
    logger.info("Requisição de criação de cliente recebida.")
    dto = PessoaCreateDTO.from_dict(request.get_json(silent=True))
    ensure_can_grant_perfis(dto.perfis)
    cliente = _get_cliente_service().create(dto)

    response = jsonify(cliente.to_dict())
    response.status_code = 201
    response.headers['Location'] = url_for('.get_cliente', cliente_id=cliente.id, _external=True)
    return response


@clientes_bp.route('/<int:cliente_id>', methods=['PUT'])
def update_cliente(cliente_id: int):
    """Atualiza um cliente. A senha é opcional na atualização."""
    logger.info(f"Requisição de atualização do cliente ID {cliente_id} recebida.")
    dto = PessoaCreateDTO.from_dict(request.get_json(silent=True), require_senha=False)
    ensure_can_grant_perfis(dto.perfis)
    cliente = _get_cliente_service().update(cliente_id, dto)
    return jsonify(cliente.to_dict()), 200


@clientes_bp.route('/<int:cliente_id>', methods=['DELETE'])
def delete_cliente(cliente_id: int):
    logger.info(f"Requisição de exclusão do cliente ID {cliente_id} recebida.")
    _get_cliente_service().delete(cliente_id)
    return '', 204
