# helpdesk/utils/logger.py
# Logger da aplicação: console + arquivo rotativo seguro entre processos.
# Dentro de uma requisição, cada linha recebe método, caminho e o e-mail
# do usuário autenticado.

import logging
import os
import sys
from concurrent_log_handler import ConcurrentRotatingFileHandler
from typing import Optional

# --- Configuração ---
LOG_DIRECTORY = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "logs")
LOG_FILENAME = "helpdesk.log"
LOGGER_NAME = "HelpDeskAPI"
LOG_LEVEL_DEFAULT = "DEBUG"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(request_info)s[%(filename)s:%(lineno)d | %(funcName)s] - %(message)s'
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 10


class RequestContextFilter(logging.Filter):
    """Preenche %(request_info)s; vazio fora de uma requisição Flask."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_info = ""
        try:
            from flask import has_request_context, request
        except ImportError:
            return True
        if has_request_context():
            user = getattr(request, 'current_user', None)
            email = getattr(user, 'email', None) or '-'
            record.request_info = f"<{request.method} {request.path} user={email}> "
        return True


def _resolve_level(level_str: Optional[str]) -> int:
    if level_str is None:
        try:
            from helpdesk.config import config  # Importação atrasada: config não depende do logger
            level_str = config.LOG_LEVEL
        except ImportError:
            level_str = LOG_LEVEL_DEFAULT
    numeric_level = logging.getLevelName(level_str.upper())
    if not isinstance(numeric_level, int):
        print(f"Aviso: Nível de log inválido '{level_str}'. Usando {LOG_LEVEL_DEFAULT}.", file=sys.stderr)
        numeric_level = logging.getLevelName(LOG_LEVEL_DEFAULT)
    return numeric_level


class Logger:
    """Singleton que monta o logger da API uma única vez e permite trocar o nível depois."""
    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
            cls._instance._logger = None
        return cls._instance

    def __init__(self, name: str = LOGGER_NAME, log_level: Optional[str] = None):
        if self._logger is not None:
            if log_level is not None:
                self._logger.setLevel(_resolve_level(log_level))
            return

        self._logger = logging.getLogger(name)
        self._logger.setLevel(_resolve_level(log_level))
        self._logger.propagate = False

        if not self._logger.handlers:
            for handler in self._build_handlers():
                self._logger.addHandler(handler)

    def _build_handlers(self):
        formatter = logging.Formatter(LOG_FORMAT)
        context_filter = RequestContextFilter()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(context_filter)
        handlers = [console_handler]

        try:
            os.makedirs(LOG_DIRECTORY, exist_ok=True)
            log_file_path = os.path.join(LOG_DIRECTORY, LOG_FILENAME)
            file_handler = ConcurrentRotatingFileHandler(
                filename=log_file_path,
                mode='a',
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8',
            )
            file_handler.setFormatter(formatter)
            file_handler.addFilter(context_filter)
            handlers.append(file_handler)
        except OSError as e:
            print(f"Erro ao configurar log de arquivo em '{LOG_DIRECTORY}': {e}", file=sys.stderr)

        return handlers

    def get_logger(self) -> logging.Logger:
        """Retorna a instância do logger configurado."""
        if self._logger is None:
            raise RuntimeError("Logger não foi inicializado.")
        return self._logger


# Instância global do logger
logger = Logger().get_logger()


def configure_logger(level: str):
    """Troca o nível do logger da aplicação (ex.: a partir de Config.LOG_LEVEL)."""
    Logger(log_level=level)
