"""
Rotas das mensagens do formulário de contato
"""
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..dependencies import exigir_admin
from ..email_service import formatar_email_contato, notificar
from ..models import MensagemContato
from ..schemas import MensagemContatoCreate, MensagemContatoResponse
from ..storage import obter_site_settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "",
    response_model=MensagemContatoResponse,
    status_code=201,
    summary="Enviar mensagem de contato",
)
async def criar_mensagem(
    dados: MensagemContatoCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    try:
        mensagem = MensagemContato(
            nome=dados.nome,
            email=dados.email,
            telefone=dados.telefone,
            mensagem=dados.mensagem,
            lido=False,
        )
        db.add(mensagem)
        await db.commit()
        await db.refresh(mensagem)

        site_settings = await obter_site_settings(db)
    except Exception as e:
        logger.error(f"Erro ao salvar mensagem de contato: {type(e).__name__}: {e}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Erro ao enviar mensagem. Tente novamente.")

    logger.info(f"Mensagem de contato registrada: id={mensagem.id}")

    background_tasks.add_task(
        notificar,
        site_settings,
        f"Nova mensagem de contato - {dados.nome}",
        formatar_email_contato(dados.nome, dados.email, dados.telefone, dados.mensagem, mensagem.anexos),
    )
    return MensagemContatoResponse.model_validate(mensagem)


@router.get(
    "",
    response_model=list[MensagemContatoResponse],
    summary="Listar mensagens de contato",
    dependencies=[Depends(exigir_admin)],
)
async def listar_mensagens(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(MensagemContato).order_by(MensagemContato.criado_em.desc()))
    return [MensagemContatoResponse.model_validate(m) for m in result.scalars().all()]
