# helpdesk/security/jwt_util.py
# Emissão e validação dos tokens JWT (HS512). O token carrega apenas a identidade
# (subject = e-mail); os perfis são relidos do banco a cada requisição.

import jwt
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from helpdesk.api.errors import ConfigurationError
from helpdesk.utils.logger import logger

JWT_ALGORITHM = 'HS512'


class JWTUtil:
    """
    Gera e valida tokens assinados com a chave secreta do servidor.
    Nenhum estado é guardado no servidor.
    """

    def __init__(self, secret: str, expiration_ms: int):
        if not secret:
            logger.critical("Chave Secreta JWT não está configurada!")
            raise ConfigurationError("JWT Secret Key is missing.")
        if expiration_ms <= 0:
            raise ConfigurationError("JWT expiration must be a positive number of milliseconds.")
        self._secret = secret
        self.expiration = timedelta(milliseconds=expiration_ms)

    def generate_token(self, email: str, issued_at: Optional[datetime] = None) -> str:
        """Gera um token para o e-mail informado, válido por JWT_EXPIRATION a partir de issued_at."""
        if not email:
            raise ValueError("Email is required to generate a token.")
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            'sub': email,
            'iat': issued_at,
            'exp': issued_at + self.expiration,
        }
        logger.debug(f"Gerando token JWT para '{email}' com expiração em {payload['exp'].isoformat()}")
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def get_claims(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Retorna as claims de um token válido ou None quando a assinatura é
        inválida, o payload não pode ser lido, ou o token já expirou
        (a expiração precisa estar estritamente no futuro).
        """
        if not token:
            return None
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug(f"Verificação de token falhou: Token expirado. Token: {token[:10]}...")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Verificação de token falhou: Token inválido. Erro: {e}. Token: {token[:10]}...")
            return None

    def token_valido(self, token: str, now: Optional[datetime] = None) -> bool:
        """Aceito até o instante de expiração, exclusive. now é o relógio de referência (padrão: agora)."""
        claims = self.get_claims(token)
        if claims is None:
            return False
        exp = claims.get('exp')
        reference = (now or datetime.now(timezone.utc)).timestamp()
        return bool(claims.get('sub')) and exp is not None and reference < exp

    def get_username(self, token: str) -> Optional[str]:
        claims = self.get_claims(token)
        if claims is None:
            return None
        return claims.get('sub')
