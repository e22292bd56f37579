"""
Validação e gravação dos anexos enviados nos formulários.
"""
import logging
import re
import secrets
import time
from pathlib import Path

from starlette.datastructures import UploadFile

from .config import settings

logger = logging.getLogger(__name__)

PREFIXO_URL = "/uploads"
_TIPOS_GENERICOS = {"", "application/octet-stream"}
_EXTENSAO_RE = re.compile(r"^\.[a-z0-9]{1,10}$")


class UploadInvalidoError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def _tamanho_legivel(n_bytes: int) -> str:
    if n_bytes >= 1024 * 1024:
        return f"{n_bytes / (1024 * 1024):g}MB"
    if n_bytes >= 1024:
        return f"{n_bytes / 1024:g}KB"
    return f"{n_bytes} bytes"


def _tipo_permitido(arquivo: UploadFile) -> bool:
    tipo = (arquivo.content_type or "").lower()
    if tipo in settings.UPLOAD_TIPOS_PERMITIDOS:
        return True
    # Alguns navegadores mandam octet-stream; nesse caso vale a extensão
    return tipo in _TIPOS_GENERICOS and (arquivo.filename or "").lower().endswith(".pdf")


async def validar_arquivos(campo: str, arquivos: list[UploadFile]) -> list[tuple[str, bytes]]:
    """
    Valida quantidade, tipo e tamanho dos arquivos de um campo e devolve
    (nome original, conteúdo) de cada um. Nada é gravado aqui.
    """
    arquivos = [a for a in arquivos if a.filename]
    if len(arquivos) > settings.UPLOAD_MAX_ARQUIVOS:
        raise UploadInvalidoError(
            f"Máximo de {settings.UPLOAD_MAX_ARQUIVOS} arquivos permitidos por campo ({campo})"
        )

    lidos = []
    for arquivo in arquivos:
        if not _tipo_permitido(arquivo):
            raise UploadInvalidoError(f"Apenas arquivos PDF são permitidos ({arquivo.filename})")

        conteudo = await arquivo.read(settings.UPLOAD_MAX_BYTES + 1)
        if len(conteudo) > settings.UPLOAD_MAX_BYTES:
            raise UploadInvalidoError(
                f"O arquivo {arquivo.filename} excede o tamanho máximo de "
                f"{_tamanho_legivel(settings.UPLOAD_MAX_BYTES)}"
            )
        lidos.append((arquivo.filename, conteudo))
    return lidos


def gerar_nome_arquivo(nome_original: str) -> str:
    extensao = Path(nome_original).suffix.lower()
    if not _EXTENSAO_RE.match(extensao):
        extensao = ""
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extensao}"


def salvar_arquivo(nome_original: str, conteudo: bytes) -> str:
    """Grava o arquivo em UPLOAD_DIR e devolve o caminho público /uploads/<nome>."""
    diretorio = Path(settings.UPLOAD_DIR)
    diretorio.mkdir(parents=True, exist_ok=True)

    nome = gerar_nome_arquivo(nome_original)
    (diretorio / nome).write_bytes(conteudo)
    logger.info(f"Anexo gravado: {nome} ({len(conteudo)} bytes, original={nome_original})")
    return f"{PREFIXO_URL}/{nome}"


def remover_arquivo(caminho: str) -> None:
    """Apaga um anexo gravado por salvar_arquivo, a partir do caminho /uploads/<nome>."""
    nome = caminho.rsplit("/", 1)[-1]
    (Path(settings.UPLOAD_DIR) / nome).unlink(missing_ok=True)
    logger.info(f"Anexo removido: {nome}")
