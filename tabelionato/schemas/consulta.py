"""
Schemas Pydantic da consulta de processos
"""
from pydantic import BaseModel, ConfigDict
from typing import Literal, Optional


class ConsultaProcessoRequest(BaseModel):
    """
    Os valores chegam já sem máscara (o cliente remove os não-dígitos).
    Ausência é tratada pela rota com 400, não pela validação do Pydantic.
    """
    model_config = ConfigDict(extra="ignore")

    numeroProcesso: Optional[str] = None
    cpf: Optional[str] = None


class TesteConexaoResponse(BaseModel):
    message: str
    status: Literal["success", "warning", "error"]


class MensagemResponse(BaseModel):
    message: str
