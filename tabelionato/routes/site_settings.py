"""
Rotas das configurações do site (admin)
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..dependencies import exigir_admin
from ..schemas import SiteSettingsResponse, SiteSettingsUpdate
from ..storage import atualizar_site_settings, obter_site_settings

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(exigir_admin)])


@router.get(
    "",
    response_model=SiteSettingsResponse,
    summary="Obter configurações do site",
)
async def obter_configuracoes(db: AsyncSession = Depends(get_db)):
    site_settings = await obter_site_settings(db)
    if site_settings is None:
        return SiteSettingsResponse()
    return SiteSettingsResponse.model_validate(site_settings)


@router.put(
    "",
    response_model=SiteSettingsResponse,
    summary="Atualizar configurações do site",
)
async def atualizar_configuracoes(
    dados: SiteSettingsUpdate,
    db: AsyncSession = Depends(get_db),
):
    site_settings = await atualizar_site_settings(db, dados)
    logger.info(
        f"site_settings atualizado: campos={sorted(dados.model_dump(exclude_unset=True).keys())}"
    )
    return SiteSettingsResponse.model_validate(site_settings)
