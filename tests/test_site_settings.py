"""
Testes das configurações do site (GET/PUT /api/site-settings)
"""
import pytest
from sqlalchemy import func, select

from tabelionato.config import settings
from tabelionato.crypto import decrypt_secret
from tabelionato.models import SiteSettings

URL = "/api/site-settings"

pytestmark = pytest.mark.asyncio


async def test_sem_chave_admin(client):
    response = await client.get(URL)

    assert response.status_code == 401
    assert response.json() == {"message": "Não autenticado"}


async def test_chave_admin_errada(client):
    response = await client.put(URL, json={"apiUrl": "x"}, headers={"X-Admin-Key": "errada"})

    assert response.status_code == 403
    assert response.json() == {"message": "Acesso negado. Apenas administradores."}


async def test_chave_admin_nao_configurada(client, admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_API_KEY", "")

    response = await client.get(URL, headers=admin_headers)

    assert response.status_code == 500


async def test_get_sem_linha(client, admin_headers):
    response = await client.get(URL, headers=admin_headers)

    assert response.status_code == 200
    dados = response.json()
    assert dados["apiUrl"] is None
    assert dados["apiTokenConfigurado"] is False
    assert dados["smtpPasswordConfigurado"] is False


async def test_put_cria_e_atualiza_linha_unica(client, db_session, admin_headers):
    primeiro = await client.put(URL, json={
        "apiUrl": " api.example.com/ ",
        "apiToken": "token-secreto",
        "apiPort": 8080,
        "browserTabName": "Cartório do 1º Ofício",
    }, headers=admin_headers)
    segundo = await client.put(URL, json={"apiPort": 9090}, headers=admin_headers)

    assert primeiro.status_code == 200
    assert segundo.status_code == 200
    dados = segundo.json()
    assert dados["apiUrl"] == "api.example.com/"
    assert dados["apiPort"] == 9090
    assert dados["browserTabName"] == "Cartório do 1º Ofício"
    assert dados["apiTokenConfigurado"] is True

    total = await db_session.scalar(select(func.count()).select_from(SiteSettings))
    assert total == 1


async def test_segredos_criptografados_e_nunca_devolvidos(client, db_session, admin_headers):
    response = await client.put(URL, json={
        "apiToken": "token-secreto",
        "smtpPassword": "senha-smtp",
    }, headers=admin_headers)

    assert "token-secreto" not in response.text
    assert "senha-smtp" not in response.text
    assert "apiToken" not in response.json()

    linha = (await db_session.execute(select(SiteSettings))).scalars().one()
    assert linha.api_token_encrypted != "token-secreto"
    assert decrypt_secret(linha.api_token_encrypted) == "token-secreto"
    assert decrypt_secret(linha.smtp_password_encrypted) == "senha-smtp"

    listagem = await client.get(URL, headers=admin_headers)
    assert "token-secreto" not in listagem.text
    assert listagem.json()["smtpPasswordConfigurado"] is True


async def test_segredo_vazio_remove(client, admin_headers):
    await client.put(URL, json={"apiToken": "token-secreto"}, headers=admin_headers)

    response = await client.put(URL, json={"apiToken": ""}, headers=admin_headers)

    assert response.json()["apiTokenConfigurado"] is False


async def test_segredo_omitido_e_mantido(client, admin_headers):
    await client.put(URL, json={"apiToken": "token-secreto"}, headers=admin_headers)

    response = await client.put(URL, json={"apiUrl": "outra.example.com"}, headers=admin_headers)

    assert response.json()["apiTokenConfigurado"] is True


@pytest.mark.parametrize("payload", [
    {"apiPort": 70000},
    {"smtpPort": 0},
    {"solicitacoesEmail": "sem-arroba"},
])
async def test_validacao(client, admin_headers, payload):
    response = await client.put(URL, json=payload, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Dados inválidos"
