# helpdesk/utils/data_conversion.py
from datetime import date
from typing import Any, Optional
from .logger import logger

DATE_FORMAT = "%d/%m/%Y"  # dd/MM/yyyy

def format_date(value: Optional[date]) -> Optional[str]:
    """Formata uma data no padrão dd/MM/yyyy, retornando None se ausente."""
    if value is None:
        return None
    return value.strftime(DATE_FORMAT)

def safe_int(value: Any) -> Optional[int]:
    """Converte um valor para inteiro de forma segura, retornando None em caso de falha."""
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, float):
            if not value.is_integer():
                logger.debug(f"Valor '{value}' não é inteiro; conversão recusada.")
                return None
            return int(value)
        if isinstance(value, str):
            value = value.strip()
        return int(value)
    except (ValueError, TypeError) as e:
        logger.debug(f"Não foi possível converter o valor '{value}' (tipo: {type(value)}) para inteiro: {e}")
        return None
