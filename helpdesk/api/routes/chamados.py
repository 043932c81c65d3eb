# helpdesk/api/routes/chamados.py
# CRUD endpoints for chamados.

from flask import Blueprint, request, jsonify, current_app, url_for
from helpdesk.services.chamado_service import ChamadoService
from helpdesk.domain.dtos import ChamadoDTO
from helpdesk.api.errors import ApiError
from helpdesk.utils.logger import logger

chamados_bp = Blueprint('chamados', __name__)

def _get_chamado_service() -> ChamadoService:
    service = current_app.config.get('chamado_service')
    if not service:
        logger.critical("ChamadoService não encontrado na configuração da aplicação!")
        raise ApiError("Serviço de chamados indisponível.", 503)
    return service


@chamados_bp.route('', methods=['GET'])
def get_all_chamados():
    chamados = _get_chamado_service().find_all()
    return jsonify([c.to_dict() for c in chamados]), 200


@chamados_bp.route('/<int:chamado_id>', methods=['GET'])
def get_chamado(chamado_id: int):
    chamado = _get_chamado_service().find_by_id(chamado_id)
    return jsonify(chamado.to_dict()), 200


@chamados_bp.route('', methods=['POST'])
def create_chamado():
    """
    Abre um chamado. Técnico e cliente precisam existir.
    ---
    tags: [Chamados]
    responses:
      201:
        description: Chamado criado; cabeçalho Location aponta para o recurso
      400:
        description: Campos inválidos
      404:
        description: Técnico ou cliente inexistente
    """
    logger.info("Requisição de abertura de chamado recebida.")
    dto = ChamadoDTO.from_dict(request.get_json(silent=True))
    chamado = _get_chamado_service().create(dto)

    response = jsonify(chamado.to_dict())
    response.status_code = 201
    response.headers['Location'] = url_for('.get_chamado', chamado_id=chamado.id, _external=True)
    return response


@chamados_bp.route('/<int:chamado_id>', methods=['PUT'])
def update_chamado(chamado_id: int):
    """Substitui os dados do chamado; ENCERRADO registra a data de fechamento."""
    logger.info(f"Requisição de atualização do chamado ID {chamado_id} recebida.")
    dto = ChamadoDTO.from_dict(request.get_json(silent=True))
    chamado = _get_chamado_service().update(chamado_id, dto)
    return jsonify(chamado.to_dict()), 200


@chamados_bp.route('/<int:chamado_id>', methods=['DELETE'])
def delete_chamado(chamado_id: int):
    logger.info(f"Requisição de exclusão do chamado ID {chamado_id} recebida.")
    _get_chamado_service().delete(chamado_id)
    return '', 204
