"""
Schemas Pydantic para solicitações e mensagens de contato
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any, Optional
from uuid import UUID


class SolicitacaoResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    tipo_solicitacao: str
    nome_solicitacao: str
    dados_formulario: dict[str, Any]
    criado_em: datetime


class SolicitacaoCriadaResponse(BaseModel):
    message: str
    id: UUID


class MensagemContatoCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    telefone: str = Field(..., min_length=1, max_length=20)
    mensagem: str = Field(..., min_length=1, max_length=10000)

    @field_validator('nome', 'email', 'telefone', 'mensagem')
    @classmethod
    def strip_espacos(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("campo obrigatório")
        return v


class MensagemContatoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    nome: str
    email: str
    telefone: str
    mensagem: str
    anexos: Optional[list[str]] = None
    lido: bool
    criado_em: datetime
