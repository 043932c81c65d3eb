# helpdesk/services/auth_service.py
# Handles login, token issuing, and current user retrieval.

from typing import Optional
from flask import request

from helpdesk.database import Database
from helpdesk.database.pessoa_repository import PessoaRepository
from helpdesk.domain.pessoa import Pessoa
from helpdesk.security.jwt_util import JWTUtil
from helpdesk.api.errors import AuthenticationError
from helpdesk.utils.logger import logger

INVALID_CREDENTIALS_MESSAGE = "Email ou senha inválidos"


class AuthService:
    """
    Service layer for authentication. Stateless: the token only proves the
    identity; perfis are re-read from the database on every request.
    """

    def __init__(self, database: Database, pessoa_repository: PessoaRepository, jwt_util: JWTUtil):
        """
        Initializes the AuthService.

        Args:
            database: Database used to open sessions.
            pessoa_repository: Instance of PessoaRepository.
            jwt_util: Issuer/validator of the JWT tokens.
        """
        self.database = database
        self.pessoa_repository = pessoa_repository
        self.jwt_util = jwt_util
        logger.info("AuthService initialized (ORM).")

    def login(self, email: str, senha: str) -> str:
        """
        Authenticates a person by e-mail and password and issues a token.

        Raises:
            AuthenticationError: unknown e-mail or wrong password (same message for both).
        """
        logger.debug(f"Tentando login para: {email}")
        with self.database.get_session() as db:
            pessoa = self.pessoa_repository.find_by_email(db, email)

        if pessoa is None:
            logger.warning(f"Login falhou: E-mail '{email}' não encontrado.")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if not pessoa.verify_senha(senha):
            logger.warning(f"Login falhou: Senha incorreta para '{email}'.")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        logger.info(f"Login bem-sucedido para '{email}' (ID: {pessoa.id}). Gerando token.")
        return self.jwt_util.generate_token(pessoa.email)

    def authenticate_token(self, token: Optional[str]) -> Optional[Pessoa]:
        """
        Valida o token e recarrega a pessoa pelo e-mail do subject.
        Retorna None quando o token é inválido/expirado ou a pessoa não existe mais.
        """
        if not token or not self.jwt_util.token_valido(token):
            return None
        email = self.jwt_util.get_username(token)
        if not email:
            logger.warning("Payload de token inválido: 'sub' ausente.")
            return None

        with self.database.get_session() as db:
            pessoa = self.pessoa_repository.find_by_email(db, email)

        if pessoa is None:
            logger.warning(f"Token válido, mas pessoa '{email}' não encontrada no banco de dados.")
            return None
        logger.debug(f"Pessoa autenticada: {pessoa.email} (ID: {pessoa.id}, perfis: {sorted(p.name for p in pessoa.perfis)})")
        return pessoa

    def get_current_user_from_request(self) -> Optional[Pessoa]:
        """
        Retrieves the authenticated person from the 'Authorization: Bearer'
        header of the current request.
        """
        auth_header = request.headers.get('Authorization')
        if not auth_header or not auth_header.startswith('Bearer '):
            logger.debug("Nenhum token Bearer encontrado no cabeçalho da requisição.")
            return None
        token = auth_header[len('Bearer '):].strip()
        return self.authenticate_token(token)
