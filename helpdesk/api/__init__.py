# helpdesk/api/__init__.py
# Initializes the API layer and registers blueprints.

from flask import Flask

from helpdesk.utils.logger import logger


def register_blueprints(app: Flask):
    """
    Registers all defined blueprints with the Flask application.
    Routes are imported here so services can import helpdesk.api.errors
    without pulling the whole route tree.

    Args:
        app: The Flask application instance.
    """
    from .routes.auth import auth_bp
    from .routes.clientes import clientes_bp
    from .routes.tecnicos import tecnicos_bp
    from .routes.chamados import chamados_bp

    # Adicionar novos blueprints aqui
    blueprints = [
        (auth_bp, '/login'),
        (clientes_bp, '/clientes'),
        (tecnicos_bp, '/tecnicos'),
        (chamados_bp, '/chamados'),
    ]

    logger.info("Registering API blueprints...")
    for bp, prefix in blueprints:
        app.register_blueprint(bp, url_prefix=prefix)
        logger.debug(f"Blueprint '{bp.name}' registered with prefix '{prefix}'.")
    logger.info("All API blueprints registered.")

__all__ = ["register_blueprints"]
