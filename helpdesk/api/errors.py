# helpdesk/api/errors.py
# Defines custom application exceptions and Flask error handlers.
# Every error leaves the API with the same body:
# {timestamp, status, error, message, path} (+ errors for field validation).

import time
from typing import Any, Dict, List, Optional

from flask import jsonify, request
from werkzeug.exceptions import HTTPException
from helpdesk.utils.logger import logger

# --- Custom Application Exceptions ---

class ApiError(Exception):
    """Base class for custom API errors."""
    status_code = 500
    error = "Internal Server Error"
    message = "Ocorreu um erro interno no servidor."

    def __init__(self, message=None, status_code=None, payload=None):
        super().__init__(message if message is not None else self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload # Optional additional data

    def to_dict(self, path: str) -> Dict[str, Any]:
        rv = dict(self.payload or ())
        rv.update(standard_error(self.status_code, self.error, self.message, path))
        return rv

class ObjectNotFoundError(ApiError):
    """Indicates a requested entity was not found by id."""
    status_code = 404
    error = "Object Not Found"
    message = "Objeto não encontrado!"

class DataIntegrityViolationError(ApiError):
    """Natural-key collision or a delete blocked by existing references."""
    status_code = 400
    error = "Data Violation"
    message = "Violação de integridade dos dados."

class ValidationError(ApiError):
    """Indicates invalid data provided by the client, one entry per offending field."""
    status_code = 400
    error = "Fields Validation Error"
    message = "Erro na validação dos campos"

    def __init__(self, errors: Optional[List[Dict[str, str]]] = None, message=None):
        super().__init__(message)
        self.errors: List[Dict[str, str]] = list(errors or [])

    def add_error(self, field_name: str, message: str):
        self.errors.append({"fieldName": field_name, "message": message})

    def to_dict(self, path: str) -> Dict[str, Any]:
        rv = super().to_dict(path)
        rv['errors'] = self.errors
        return rv

class AuthenticationError(ApiError):
    """Missing, invalid or expired token, or bad login credentials."""
    status_code = 401
    error = "Não autorizado"
    message = "Autenticação necessária."

class ForbiddenError(ApiError):
    """Indicates the user does not have permission for the action."""
    status_code = 403
    error = "Acesso negado"
    message = "Você não tem permissão para executar esta ação."

class DatabaseError(ApiError):
    """Indicates an error during a database operation."""
    status_code = 500
    message = "Ocorreu um erro no banco de dados."

class ConfigurationError(ApiError):
     """Indicates a problem with the application's configuration."""
     status_code = 500
     message = "Erro de configuração da aplicação."


def standard_error(status: int, error: str, message: str, path: str) -> Dict[str, Any]:
    """Monta o corpo padrão de erro da API."""
    return {
        "timestamp": int(time.time() * 1000),
        "status": status,
        "error": error,
        "message": message,
        "path": path,
    }


# --- Flask Error Handlers ---

def register_error_handlers(app):
    """Registers custom error handlers with the Flask app."""

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError):
        """Handler for custom ApiError exceptions."""
        if error.status_code >= 500:
            logger.error(f"API Error Handled: {type(error).__name__} - Status: {error.status_code} - Msg: {error.message}")
        else:
            logger.warning(f"API Error Handled: {type(error).__name__} - Status: {error.status_code} - Msg: {error.message}")
        response = jsonify(error.to_dict(request.path))
        response.status_code = error.status_code
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        """Handler for standard werkzeug HTTPExceptions (like 404, 405)."""
        logger.warning(f"HTTP Exception Handled: {error.code} {error.name} - Path: {request.path} - Msg: {error.description}")
        response = jsonify(standard_error(error.code, error.name, error.description, request.path))
        response.status_code = error.code
        return response

    @app.errorhandler(Exception)
    def handle_generic_exception(error):
        """Handler for any other unhandled exceptions."""
        # Log the full traceback for unexpected errors
        logger.error(f"Unhandled Exception: {error}", exc_info=True)
        response = jsonify(standard_error(500, ApiError.error, ApiError.message, request.path))
        response.status_code = 500
        return response

    logger.info("Custom error handlers registered.")
