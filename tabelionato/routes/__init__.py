from fastapi import APIRouter
from .consulta_processo import router as consulta_router
from .site_settings import router as site_settings_router
from .solicitacoes import router as solicitacoes_router
from .contatos import router as contatos_router

router = APIRouter(prefix="/api")

router.include_router(consulta_router, tags=["Consulta de Processos"])
router.include_router(site_settings_router, prefix="/site-settings", tags=["Configurações"])
router.include_router(solicitacoes_router, prefix="/solicitacoes", tags=["Solicitações"])
router.include_router(contatos_router, prefix="/contact-messages", tags=["Contato"])
