"""
Envio de e-mails de notificação (contato e solicitações) via SMTP.

As credenciais vêm de site_settings. Porta 465 usa TLS implícito; as demais
conectam em texto e sobem para STARTTLS quando o servidor oferece.
"""
import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr
from html import escape
from typing import Any

from cryptography.fernet import InvalidToken
from pydantic import BaseModel

from .config import settings
from .crypto import decrypt_secret
from .formatacao import rotulo_campo
from .models import SiteSettings

logger = logging.getLogger(__name__)

PORTA_SSL_IMPLICITO = 465
SMTP_TIMEOUT_SECONDS = 30
REMETENTE_PADRAO = "Cartório"


class SmtpNaoConfiguradoError(Exception):
    def __init__(self):
        super().__init__(
            "Configurações SMTP não encontradas. Configure o SMTP nas configurações do site."
        )


class ConfiguracaoSmtp(BaseModel):
    host: str
    porta: int
    usuario: str
    senha: str
    nome_remetente: str = REMETENTE_PADRAO


def configuracao_smtp(site_settings: SiteSettings | None) -> ConfiguracaoSmtp:
    if (
        site_settings is None
        or not site_settings.smtp_host
        or not site_settings.smtp_port
        or not site_settings.smtp_user
        or not site_settings.smtp_password_encrypted
    ):
        raise SmtpNaoConfiguradoError()

    try:
        senha = decrypt_secret(site_settings.smtp_password_encrypted)
    except (InvalidToken, RuntimeError) as e:
        logger.error(f"Senha SMTP não pôde ser lida de site_settings: {type(e).__name__}")
        raise SmtpNaoConfiguradoError() from e

    return ConfiguracaoSmtp(
        host=site_settings.smtp_host,
        porta=site_settings.smtp_port,
        usuario=site_settings.smtp_user,
        senha=senha,
        nome_remetente=site_settings.browser_tab_name or REMETENTE_PADRAO,
    )


def usa_ssl_implicito(porta: int) -> bool:
    return porta == PORTA_SSL_IMPLICITO


def _abrir_conexao(config: ConfiguracaoSmtp) -> smtplib.SMTP:
    contexto = ssl.create_default_context()
    if usa_ssl_implicito(config.porta):
        return smtplib.SMTP_SSL(config.host, config.porta, timeout=SMTP_TIMEOUT_SECONDS, context=contexto)

    conexao = smtplib.SMTP(config.host, config.porta, timeout=SMTP_TIMEOUT_SECONDS)
    conexao.ehlo()
    if conexao.has_extn("starttls"):
        conexao.starttls(context=contexto)
        conexao.ehlo()
    return conexao


def _linha_unica(texto: str) -> str:
    """Cabeçalhos não aceitam quebras de linha; nomes vindos de formulários podem ter."""
    return " ".join(texto.split())


def enviar_email(config: ConfiguracaoSmtp, destinatario: str, assunto: str, html: str) -> None:
    mensagem = EmailMessage()
    mensagem["From"] = formataddr((_linha_unica(config.nome_remetente), config.usuario))
    mensagem["To"] = destinatario
    mensagem["Subject"] = _linha_unica(assunto)
    mensagem.set_content("Esta mensagem requer um leitor de e-mail com suporte a HTML.")
    mensagem.add_alternative(html, subtype="html")

    logger.info(
        f"Enviando email host={config.host} porta={config.porta} "
        f"ssl={usa_ssl_implicito(config.porta)} para={destinatario}"
    )
    with _abrir_conexao(config) as conexao:
        conexao.login(config.usuario, config.senha)
        conexao.send_message(mensagem)
    logger.info(f"Email enviado com sucesso para {destinatario}")


def notificar(site_settings: SiteSettings | None, assunto: str, html: str) -> bool:
    """
    Envia uma notificação para o e-mail de solicitações configurado.

    Usada em background após gravar o formulário: falhas são registradas
    no log e não chegam ao cliente. Retorna True se o e-mail foi enviado.
    """
    destinatario = site_settings.solicitacoes_email if site_settings else None
    if not destinatario:
        logger.warning(f"Notificação '{assunto}' não enviada: solicitacoes_email não configurado")
        return False

    try:
        config = configuracao_smtp(site_settings)
        enviar_email(config, destinatario, assunto, html)
        return True
    except SmtpNaoConfiguradoError as e:
        logger.warning(f"Notificação '{assunto}' não enviada: {e}")
    except (smtplib.SMTPException, OSError, ValueError) as e:
        logger.error(f"Falha ao enviar notificação '{assunto}' — {type(e).__name__}: {e}")
    return False


def _url_anexo(caminho: str) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}{caminho}"


def _nome_arquivo(caminho: str) -> str:
    return caminho.rsplit("/", 1)[-1] or "arquivo"


_CABECALHO = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
  <div style="background-color: #1e3a8a; color: white; padding: 20px; border-radius: 8px 8px 0 0;">
    <h1 style="margin: 0; font-size: 24px;">{titulo}</h1>
    {subtitulo}
  </div>
  <div style="background-color: #f9fafb; padding: 30px; border: 1px solid #e5e7eb; border-top: none; border-radius: 0 0 8px 8px;">
"""

_RODAPE = """  </div>
  <div style="text-align: center; margin-top: 20px; padding: 20px; color: #6b7280; font-size: 13px;">
    <p style="margin: 0;">{aviso}</p>
  </div>
</body>
</html>
"""


def _bloco(rotulo: str, conteudo_html: str) -> str:
    return (
        '<div style="margin-bottom: 20px;">'
        f'<h3 style="color: #1e3a8a; font-size: 16px; margin-bottom: 5px;">{escape(rotulo)}:</h3>'
        f'{conteudo_html}</div>\n'
    )


def _lista_anexos(caminhos: list[str]) -> str:
    itens = "".join(
        '<div style="margin-bottom: 8px; padding: 8px; background-color: white; border-radius: 4px;">'
        f'<a href="{escape(_url_anexo(c))}" style="color: #2563eb; text-decoration: none;" target="_blank">'
        f'📎 {escape(_nome_arquivo(c))}</a></div>'
        for c in caminhos
    )
    return f"<div>{itens}</div>"


def formatar_email_contato(
    nome: str,
    email: str,
    telefone: str,
    mensagem: str,
    anexos: list[str] | None = None,
) -> str:
    corpo = _CABECALHO.format(titulo="Nova Mensagem de Contato", subtitulo="")
    corpo += _bloco("Nome", f'<p style="margin: 0;">{escape(nome)}</p>')
    corpo += _bloco(
        "Email",
        f'<p style="margin: 0;"><a href="mailto:{escape(email)}" style="color: #2563eb;">{escape(email)}</a></p>',
    )
    corpo += _bloco(
        "Telefone",
        f'<p style="margin: 0;"><a href="tel:{escape(telefone)}" style="color: #2563eb;">{escape(telefone)}</a></p>',
    )
    corpo += _bloco(
        "Mensagem",
        '<div style="background-color: white; padding: 15px; border-radius: 4px; border: 1px solid #e5e7eb;">'
        f'<p style="margin: 0; white-space: pre-wrap;">{escape(mensagem)}</p></div>',
    )
    if anexos:
        corpo += _bloco(f"Anexos ({len(anexos)})", _lista_anexos(anexos))
    corpo += _RODAPE.format(aviso="Esta é uma mensagem automática do formulário de contato do site.")
    return corpo


def _eh_lista_de_arquivos(valor: Any) -> bool:
    return (
        isinstance(valor, list)
        and len(valor) > 0
        and all(isinstance(v, str) and v.startswith("/uploads/") for v in valor)
    )


def formatar_email_solicitacao(nome_solicitacao: str, dados_formulario: dict[str, Any]) -> str:
    subtitulo = f'<p style="margin: 8px 0 0 0; font-size: 16px; opacity: 0.9;">{escape(nome_solicitacao)}</p>'
    corpo = _CABECALHO.format(titulo="Nova Solicitação", subtitulo=subtitulo)

    for campo, valor in dados_formulario.items():
        if valor is None or valor == "" or valor == []:
            continue
        if _eh_lista_de_arquivos(valor):
            conteudo = _lista_anexos(valor)
        elif isinstance(valor, list):
            conteudo = f'<p style="margin: 0;">{escape(", ".join(str(v) for v in valor))}</p>'
        else:
            conteudo = f'<p style="margin: 0;">{escape(str(valor))}</p>'
        corpo += _bloco(rotulo_campo(campo), conteudo)

    corpo += _RODAPE.format(aviso="Esta é uma mensagem automática do formulário de solicitações do site.")
    return corpo
