# helpdesk/app.py
import atexit
import sys
from flask import Flask, jsonify
from flask_cors import CORS
from sqlalchemy import text

from helpdesk.config import Config
from helpdesk.config.settings import DEFAULT_SECRET_KEY
from helpdesk.api import register_blueprints
from helpdesk.api.decorators import register_access_guard
from helpdesk.api.errors import register_error_handlers, ConfigurationError, DatabaseError
from helpdesk.database import Database
from helpdesk.database.pessoa_repository import PessoaRepository
from helpdesk.database.chamado_repository import ChamadoRepository
from helpdesk.security import JWTUtil
from helpdesk.services import AuthService, ClienteService, TecnicoService, ChamadoService
from helpdesk.utils.logger import logger, configure_logger


def create_app(config_object: Config) -> Flask:
    """
    Factory function to create and configure the Flask application.

    Args:
        config_object: The configuration object for the application.

    Returns:
        The configured Flask application instance.

    Raises:
        ConfigurationError: insecure SECRET_KEY outside debug, or no database URI.
        DatabaseError: the database could not be reached or initialized.
    """
    app = Flask("HelpDesk-API")
    app.config.from_object(config_object)

    # --- Logging ---
    configure_logger(config_object.LOG_LEVEL)
    logger.info("Iniciando a aplicação Flask para o HelpDesk-API.")
    logger.info(f"Modo de depuração: {app.config.get('APP_DEBUG')}")

    # --- Secret Key Check ---
    if not app.config.get('SECRET_KEY') or app.config.get('SECRET_KEY') == DEFAULT_SECRET_KEY:
        logger.critical("ALERTA CRÍTICO DE SEGURANÇA: SECRET_KEY não está definida ou está usando o valor padrão!")
        if not app.config.get('APP_DEBUG', False):
            raise ConfigurationError("SECRET_KEY deve ser configurada com um valor seguro e único em produção.")
        logger.warning("Usando SECRET_KEY padrão/insegura no modo de depuração.")

    # --- CORS Configuration ---
    CORS(app, resources={r"/*": {"origins": "*"}}, expose_headers=["Authorization", "Location"])
    logger.info("CORS configurado para permitir todas as origens (Atualizar para produção).")

    # --- Database Initialization (SQLAlchemy) ---
    db_uri = app.config.get('SQLALCHEMY_DATABASE_URI')
    if not db_uri:
        raise ConfigurationError("SQLALCHEMY_DATABASE_URI não está configurado.")

    database = Database(db_uri)
    try:
        database.init(seed=config_object.SEED_DATABASE)
    except (DatabaseError, ConfigurationError) as db_init_err:
        logger.critical(f"Falha ao inicializar o banco de dados: {db_init_err}", exc_info=True)
        raise
    atexit.register(database.dispose)
    app.config['database'] = database
    logger.info("Motor SQLAlchemy e fábrica de sessões inicializados com sucesso.")

    # --- Dependency Injection (Service Instantiation) ---
    logger.info("Instanciando serviços...")
    pessoa_repo = PessoaRepository(database)
    chamado_repo = ChamadoRepository(database)
    jwt_util = JWTUtil(config_object.JWT_SECRET, config_object.JWT_EXPIRATION)

    app.config['pessoa_repository'] = pessoa_repo
    app.config['chamado_repository'] = chamado_repo
    app.config['jwt_util'] = jwt_util

    app.config['auth_service'] = AuthService(database, pessoa_repo, jwt_util)
    app.config['cliente_service'] = ClienteService(database, pessoa_repo)
    app.config['tecnico_service'] = TecnicoService(database, pessoa_repo)
    app.config['chamado_service'] = ChamadoService(database, chamado_repo, pessoa_repo)
    logger.info("Serviços instanciados e adicionados à configuração do aplicativo.")

    # --- Access Guard, Blueprints and Error Handlers ---
    register_access_guard(app)
    register_blueprints(app)
    register_error_handlers(app)

    # --- Simple Health Check Endpoint ---
    @app.route('/health', methods=['GET'])
    def health_check():
        db_status = "ok"
        try:
            with database.get_session() as db:
                db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Verificação de saúde da sessão do banco de dados falhou: {e}", exc_info=True)
            db_status = "error"

        return jsonify({
            "status": "ok",
            "database": db_status,
        }), 200 if db_status == "ok" else 503

    logger.info("Aplicação HelpDesk-API configurada com sucesso.")
    return app


def main():
    """Console entry point: loads the configuration and runs the development server."""
    from helpdesk.config.settings import load_config

    config = load_config()
    try:
        app = create_app(config)
    except (ConfigurationError, DatabaseError) as e:
        logger.critical(f"Falha ao iniciar a aplicação: {e}")
        sys.exit(1)

    logger.info(f"Starting server on {config.APP_HOST}:{config.APP_PORT}")
    app.run(host=config.APP_HOST, port=config.APP_PORT, debug=config.APP_DEBUG)
