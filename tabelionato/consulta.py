"""
Consulta de processos na API externa (endpoint /marcha).

Cada chamada faz exatamente uma requisição, sem retry e sem cache. A resposta
de sucesso é devolvida como veio; as falhas viram exceções de
ConsultaProcessoError com o status HTTP que a rota deve devolver.
"""
import asyncio
import logging
import re
import socket

import httpx
from cryptography.fernet import InvalidToken
from pydantic import BaseModel

from .config import settings
from .crypto import decrypt_secret
from .formatacao import mascarar_cpf
from .models import SiteSettings
from .schemas import TesteConexaoResponse

logger = logging.getLogger(__name__)

ECONNREFUSED = "ECONNREFUSED"
ENOTFOUND = "ENOTFOUND"

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")

_MENSAGENS_DNS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated with hostname",
)


class ConsultaProcessoError(Exception):
    """Falha da consulta já traduzida para status e mensagem do cliente."""
    status_code: int = 500
    message: str = "Erro inesperado ao processar a consulta. Tente novamente mais tarde."

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class DadosObrigatoriosError(ConsultaProcessoError):
    status_code = 400
    message = "Número do processo e CPF são obrigatórios"


class ApiNaoConfiguradaError(ConsultaProcessoError):
    status_code = 500
    message = (
        "API de consulta não configurada. Informe URL, token e porta "
        "nas configurações do site."
    )


class ProcessoNaoEncontradoError(ConsultaProcessoError):
    status_code = 404
    message = "Processo não encontrado. Verifique o número do processo e o CPF."


class TokenInvalidoError(ConsultaProcessoError):
    status_code = 401
    message = "Token da API inválido. Verifique a configuração da API nas configurações do site."


class ErroStatusApiError(ConsultaProcessoError):
    def __init__(self, upstream_status: int):
        self.upstream_status = upstream_status
        super().__init__(
            message=f"Erro ao consultar processo (status={upstream_status})",
            status_code=upstream_status,
        )


class TempoEsgotadoError(ConsultaProcessoError):
    status_code = 504
    message = "A consulta demorou muito tempo. Por favor, tente novamente."


class ConexaoRecusadaError(ConsultaProcessoError):
    status_code = 503
    message = "Serviço temporariamente indisponível. Tente novamente em alguns instantes."


class HostNaoResolvidoError(ConsultaProcessoError):
    status_code = 503
    message = "Não foi possível resolver o endereço da API de consulta. Tente novamente mais tarde."


class ConfiguracaoApi(BaseModel):
    base_url: str
    porta: int
    token: str


def normalizar_api_url(api_url: str) -> str:
    """
    Remove a barra final e assume http:// quando não há esquema.

    "api.example.com/" -> "http://api.example.com"
    "https://api.example.com" -> "https://api.example.com"
    """
    url = api_url.strip().rstrip("/")
    if not _SCHEME_RE.match(url):
        url = f"http://{url}"
    return url


def configuracao_da_api(site_settings: SiteSettings | None) -> ConfiguracaoApi:
    if (
        site_settings is None
        or not site_settings.api_url
        or not site_settings.api_token_encrypted
        or not site_settings.api_port
    ):
        raise ApiNaoConfiguradaError()

    try:
        token = decrypt_secret(site_settings.api_token_encrypted)
    except (InvalidToken, RuntimeError) as e:
        logger.error(f"Token da API não pôde ser lido de site_settings: {type(e).__name__}")
        raise ApiNaoConfiguradaError() from e

    return ConfiguracaoApi(
        base_url=normalizar_api_url(site_settings.api_url),
        porta=site_settings.api_port,
        token=token,
    )


def montar_url_marcha(config: ConfiguracaoApi) -> str:
    return f"{config.base_url}:{config.porta}/marcha"


def _criar_cliente(timeout: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout)


def _classificar_falha_conexao(exc: BaseException) -> str | None:
    """Identifica conexão recusada ou DNS a partir da cadeia de exceções."""
    pendentes: list[BaseException] = [exc]
    vistos = set()
    while pendentes:
        atual = pendentes.pop()
        if id(atual) in vistos:
            continue
        vistos.add(id(atual))
        if isinstance(atual, ConnectionRefusedError):
            return ECONNREFUSED
        if isinstance(atual, socket.gaierror):
            return ENOTFOUND
        # Host com vários endereços: anyio agrupa uma falha por tentativa
        pendentes.extend(getattr(atual, "exceptions", ()))
        proxima = atual.__cause__ or atual.__context__
        if proxima is not None:
            pendentes.append(proxima)

    texto = str(exc).lower()
    if "connection refused" in texto or "errno 111" in texto or ECONNREFUSED.lower() in texto:
        return ECONNREFUSED
    if any(m in texto for m in _MENSAGENS_DNS) or ENOTFOUND.lower() in texto:
        return ENOTFOUND
    return None


async def requisitar_marcha(config: ConfiguracaoApi, num_seq: str, identificacao: str) -> httpx.Response:
    """
    Faz o GET em /marcha com limite total de CONSULTA_TIMEOUT_SECONDS.
    Ao estourar o limite a requisição em andamento é cancelada.
    """
    url = montar_url_marcha(config)
    params = {"num_seq": num_seq, "identificacao": identificacao}
    headers = {
        "Authorization": f"Bearer {config.token}",
        "Accept": "application/json",
    }
    timeout = settings.CONSULTA_TIMEOUT_SECONDS

    try:
        async with _criar_cliente(timeout) as client:
            return await asyncio.wait_for(
                client.get(url, params=params, headers=headers),
                timeout=timeout,
            )
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        logger.warning(f"Timeout de {timeout}s na API de consulta {url}")
        raise TempoEsgotadoError() from e
    except httpx.ConnectError as e:
        motivo = _classificar_falha_conexao(e)
        if motivo == ECONNREFUSED:
            logger.error(f"Conexão recusada pela API de consulta {url}: {e}")
            raise ConexaoRecusadaError() from e
        if motivo == ENOTFOUND:
            logger.error(f"Host da API de consulta não resolvido {url}: {e}")
            raise HostNaoResolvidoError() from e
        logger.exception(f"Falha de conexão com a API de consulta {url}")
        raise ConsultaProcessoError() from e
    except Exception as e:
        logger.exception(f"Erro inesperado na API de consulta {url} — {type(e).__name__}: {e}")
        raise ConsultaProcessoError() from e


def _verificar_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    if response.status_code == 404:
        raise ProcessoNaoEncontradoError()
    if response.status_code == 401:
        raise TokenInvalidoError()
    raise ErroStatusApiError(response.status_code)


async def consultar_processo(
    site_settings: SiteSettings | None,
    numero_processo: str | None,
    cpf: str | None,
) -> httpx.Response:
    """
    Consulta um processo e devolve a resposta de sucesso da API sem alterações.

    Raises:
        ConsultaProcessoError: qualquer falha, já com o status para o cliente
    """
    if not numero_processo or not cpf:
        raise DadosObrigatoriosError()

    config = configuracao_da_api(site_settings)
    logger.info(f"Consultando processo num_seq={numero_processo} cpf={mascarar_cpf(cpf)}")

    response = await requisitar_marcha(config, numero_processo, cpf)
    if not response.is_success:
        logger.warning(
            f"API de consulta respondeu status={response.status_code} "
            f"para num_seq={numero_processo} cpf={mascarar_cpf(cpf)}"
        )
    _verificar_status(response)
    return response


async def testar_conexao(site_settings: SiteSettings | None) -> tuple[int, TesteConexaoResponse]:
    """
    Verifica se a API responde e aceita o token, usando um par fictício.

    Um 404 aqui é sucesso: a API foi alcançada, autenticou e apenas não
    conhece o processo de teste.
    """
    try:
        config = configuracao_da_api(site_settings)
        response = await requisitar_marcha(
            config,
            settings.CONSULTA_TESTE_NUM_SEQ,
            settings.CONSULTA_TESTE_IDENTIFICACAO,
        )
        _verificar_status(response)
    except ProcessoNaoEncontradoError:
        return 200, TesteConexaoResponse(
            message="Conexão com a API estabelecida com sucesso. Autenticação válida.",
            status="success",
        )
    except ErroStatusApiError as e:
        return e.status_code, TesteConexaoResponse(
            message=f"A API respondeu com status inesperado ({e.upstream_status}).",
            status="warning",
        )
    except ConsultaProcessoError as e:
        return e.status_code, TesteConexaoResponse(message=e.message, status="error")

    return 200, TesteConexaoResponse(
        message="Conexão com a API estabelecida com sucesso.",
        status="success",
    )
