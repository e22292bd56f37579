"""
Rotas das solicitações enviadas pelos formulários do site
"""
import json
import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from ..database import get_db
from ..dependencies import exigir_admin
from ..email_service import formatar_email_solicitacao, notificar
from ..models import Solicitacao
from ..schemas import SolicitacaoCriadaResponse, SolicitacaoResponse
from ..storage import obter_site_settings
from ..uploads import UploadInvalidoError, remover_arquivo, salvar_arquivo, validar_arquivos

router = APIRouter()
logger = logging.getLogger(__name__)

_TIPOS_FORMULARIO = ("multipart/form-data", "application/x-www-form-urlencoded")


def _decodificar_valor(valor: str) -> Any:
    """Campos como especificacoes chegam como texto JSON de uma lista."""
    texto = valor.strip()
    if texto.startswith("["):
        try:
            decodificado = json.loads(texto)
        except ValueError:
            return valor
        if isinstance(decodificado, list):
            return decodificado
    return valor


async def _ler_formulario(request: Request) -> tuple[dict[str, Any], dict[str, list[UploadFile]]]:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_TIPOS_FORMULARIO):
        form = await request.form()
        campos: dict[str, Any] = {}
        arquivos: dict[str, list[UploadFile]] = {}
        for chave, valor in form.multi_items():
            if isinstance(valor, UploadFile):
                arquivos.setdefault(chave, []).append(valor)
            else:
                campos[chave] = _decodificar_valor(valor)
        return campos, arquivos

    try:
        dados = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Corpo da requisição inválido")
    if not isinstance(dados, dict):
        raise HTTPException(status_code=400, detail="Corpo da requisição inválido")
    return dados, {}


@router.post(
    "",
    response_model=SolicitacaoCriadaResponse,
    status_code=201,
    summary="Registrar solicitação",
)
async def criar_solicitacao(
    request: Request,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    """
    Aceita JSON ou multipart/form-data. tipoSolicitacao e nomeSolicitacao
    são obrigatórios; os demais campos vão para dados_formulario. Arquivos
    são validados (PDF, tamanho e quantidade por campo) antes de qualquer
    gravação.
    """
    campos, arquivos = await _ler_formulario(request)

    tipo = campos.pop("tipoSolicitacao", None)
    nome = campos.pop("nomeSolicitacao", None)
    if not isinstance(tipo, str) or not isinstance(nome, str) or not tipo.strip() or not nome.strip():
        raise HTTPException(status_code=400, detail="Tipo e nome da solicitação são obrigatórios")
    tipo, nome = tipo.strip(), nome.strip()
    if len(tipo) > 100 or len(nome) > 255:
        raise HTTPException(status_code=400, detail="Tipo ou nome da solicitação muito longo")

    try:
        validados = {campo: await validar_arquivos(campo, lista) for campo, lista in arquivos.items()}
    except UploadInvalidoError as e:
        logger.info(f"POST /api/solicitacoes 400 — tipo={tipo} — {e.message}")
        raise HTTPException(status_code=400, detail=e.message)

    salvos: list[str] = []
    try:
        for campo, lidos in validados.items():
            if lidos:
                campos[campo] = []
                for nome_original, conteudo in lidos:
                    caminho = salvar_arquivo(nome_original, conteudo)
                    salvos.append(caminho)
                    campos[campo].append(caminho)

        solicitacao = Solicitacao(
            tipo_solicitacao=tipo,
            nome_solicitacao=nome,
            dados_formulario=campos,
        )
        db.add(solicitacao)
        await db.commit()
        await db.refresh(solicitacao)

        site_settings = await obter_site_settings(db)
    except Exception as e:
        logger.error(f"Erro ao registrar solicitação tipo={tipo}: {type(e).__name__}: {e}")
        await db.rollback()
        for caminho in salvos:
            remover_arquivo(caminho)
        raise HTTPException(status_code=500, detail="Erro ao enviar solicitação. Tente novamente.")

    logger.info(f"Solicitação registrada: id={solicitacao.id} tipo={tipo} campos={len(campos)}")

    background_tasks.add_task(
        notificar,
        site_settings,
        f"Nova Solicitação: {nome}",
        formatar_email_solicitacao(nome, campos),
    )

    return SolicitacaoCriadaResponse(
        message="Solicitação enviada com sucesso, aguarde nosso contato.",
        id=solicitacao.id,
    )


@router.get(
    "",
    response_model=list[SolicitacaoResponse],
    summary="Listar solicitações",
    dependencies=[Depends(exigir_admin)],
)
async def listar_solicitacoes(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Solicitacao).order_by(Solicitacao.criado_em.desc()))
    return [SolicitacaoResponse.model_validate(s) for s in result.scalars().all()]
