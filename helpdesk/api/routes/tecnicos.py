# helpdesk/api/routes/tecnicos.py
# CRUD endpoints for técnicos. Writes require the ADMIN perfil.

from flask import Blueprint, request, jsonify, current_app, url_for
from helpdesk.services.pessoa_service import TecnicoService
from helpdesk.domain.dtos import PessoaCreateDTO
from helpdesk.api.decorators import admin_required
from helpdesk.api.errors import ApiError
from helpdesk.utils.logger import logger

tecnicos_bp = Blueprint('tecnicos', __name__)

def _get_tecnico_service() -> TecnicoService:
    service = current_app.config.get('tecnico_service')
    if not service:
        logger.critical("TecnicoService não encontrado na configuração da aplicação!")
        raise ApiError("Serviço de técnicos indisponível.", 503)
    return service


@tecnicos_bp.route('', methods=['GET'])
def get_all_tecnicos():
    """Lista todos os técnicos."""
    tecnicos = _get_tecnico_service().find_all()
    return jsonify([t.to_dict() for t in tecnicos]), 200


@tecnicos_bp.route('/<int:tecnico_id>', methods=['GET'])
def get_tecnico(tecnico_id: int):
    tecnico = _get_tecnico_service().find_by_id(tecnico_id)
    return jsonify(tecnico.to_dict()), 200


@tecnicos_bp.route('', methods=['POST'])
@admin_required
def create_tecnico():
    """Cria um técnico. (Admin only)"""
    logger.info(f"Criação de técnico solicitada por '{request.current_user.email}'.")
    dto = PessoaCreateDTO.from_dict(request.get_json(silent=True))
    tecnico = _get_tecnico_service().create(dto)

    response = jsonify(tecnico.to_dict())
    response.status_code = 201
    response.headers['Location'] = url_for('.get_tecnico', tecnico_id=tecnico.id, _external=True)
    return response


@tecnicos_bp.route('/<int:tecnico_id>', methods=['PUT'])
@admin_required
def update_tecnico(tecnico_id: int):
    """Atualiza um técnico. (Admin only)"""
    logger.info(f"Atualização do técnico ID {tecnico_id} solicitada por '{request.current_user.email}'.")
    dto = PessoaCreateDTO.from_dict(request.get_json(silent=True), require_senha=False)
    tecnico = _get_tecnico_service().update(tecnico_id, dto)
    return jsonify(tecnico.to_dict()), 200


@tecnicos_bp.route('/<int:tecnico_id>', methods=['DELETE'])
@admin_required
def delete_tecnico(tecnico_id: int):
    """Exclui um técnico sem chamados. (Admin only)"""
    logger.info(f"Exclusão do técnico ID {tecnico_id} solicitada por '{request.current_user.email}'.")
    _get_tecnico_service().delete(tecnico_id)
    return '', 204
