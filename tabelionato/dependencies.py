"""
Dependências compartilhadas pelas rotas.
"""
import logging
import secrets

from fastapi import Header, HTTPException

from .config import settings

logger = logging.getLogger(__name__)


async def exigir_admin(x_admin_key: str | None = Header(None, alias="X-Admin-Key")) -> None:
    """
    Libera a rota apenas para quem envia a chave administrativa.
    """
    if not settings.ADMIN_API_KEY:
        raise HTTPException(status_code=500, detail="ADMIN_API_KEY não configurado")

    if not x_admin_key:
        raise HTTPException(status_code=401, detail="Não autenticado")

    if not secrets.compare_digest(x_admin_key.encode(), settings.ADMIN_API_KEY.encode()):
        logger.warning("Tentativa de acesso administrativo com chave inválida")
        raise HTTPException(status_code=403, detail="Acesso negado. Apenas administradores.")
