"""
Rotas da consulta de processos (público) e do teste de conexão (admin).
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..consulta import ConsultaProcessoError, consultar_processo, testar_conexao
from ..database import get_db
from ..dependencies import exigir_admin
from ..formatacao import mascarar_cpf
from ..schemas import ConsultaProcessoRequest, MensagemResponse, TesteConexaoResponse
from ..storage import obter_site_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/consulta-processo",
    summary="Consultar processo na API externa",
    responses={
        400: {"model": MensagemResponse},
        401: {"model": MensagemResponse},
        404: {"model": MensagemResponse},
        500: {"model": MensagemResponse},
        503: {"model": MensagemResponse},
        504: {"model": MensagemResponse},
    },
)
async def consulta_processo(
    body: ConsultaProcessoRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Repassa numeroProcesso e cpf para /marcha da API configurada e devolve
    o JSON recebido sem alterações (objeto ou lista).
    """
    body = body or ConsultaProcessoRequest()
    try:
        site_settings = await obter_site_settings(db)
        resposta = await consultar_processo(site_settings, body.numeroProcesso, body.cpf)
    except ConsultaProcessoError as e:
        logger.info(
            f"POST /api/consulta-processo {e.status_code} — num_seq={body.numeroProcesso} "
            f"cpf={mascarar_cpf(body.cpf or '')} — {type(e).__name__}"
        )
        raise

    logger.info(f"POST /api/consulta-processo OK — num_seq={body.numeroProcesso} bytes={len(resposta.content)}")
    return Response(content=resposta.content, status_code=200, media_type="application/json")


@router.post(
    "/test-api-connection",
    response_model=TesteConexaoResponse,
    summary="Testar conexão com a API de consulta",
    dependencies=[Depends(exigir_admin)],
)
async def test_api_connection(db: AsyncSession = Depends(get_db)):
    site_settings = await obter_site_settings(db)
    status_code, resultado = await testar_conexao(site_settings)
    logger.info(f"POST /api/test-api-connection {status_code} — {resultado.status}: {resultado.message}")
    return JSONResponse(status_code=status_code, content=resultado.model_dump())
