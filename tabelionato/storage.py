"""
Acesso à linha única de configurações do site.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .crypto import encrypt_secret
from .models import SiteSettings
from .schemas import SiteSettingsUpdate

logger = logging.getLogger(__name__)

# Campos que são gravados criptografados: nome no schema -> coluna
_CAMPOS_SECRETOS = {
    "api_token": "api_token_encrypted",
    "smtp_password": "smtp_password_encrypted",
}


async def obter_site_settings(db: AsyncSession) -> SiteSettings | None:
    result = await db.execute(select(SiteSettings).limit(1))
    return result.scalars().first()


async def atualizar_site_settings(db: AsyncSession, dados: SiteSettingsUpdate) -> SiteSettings:
    """
    Aplica uma atualização parcial, criando a linha na primeira gravação.
    Não há controle de concorrência: a última gravação prevalece.
    """
    site_settings = await obter_site_settings(db)
    if site_settings is None:
        site_settings = SiteSettings()
        db.add(site_settings)
        logger.info("site_settings inexistente, criando linha única")

    for campo, valor in dados.model_dump(exclude_unset=True).items():
        if campo in _CAMPOS_SECRETOS:
            setattr(site_settings, _CAMPOS_SECRETOS[campo], encrypt_secret(valor) if valor else None)
        else:
            setattr(site_settings, campo, valor)

    site_settings.touch()
    await db.commit()
    await db.refresh(site_settings)
    return site_settings
