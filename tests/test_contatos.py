"""
Testes das mensagens de contato (POST/GET /api/contact-messages)
"""
import pytest

from tabelionato.routes import contatos as rotas_contatos

URL = "/api/contact-messages"

pytestmark = pytest.mark.asyncio


@pytest.fixture
def notificacoes(monkeypatch):
    enviadas = []
    monkeypatch.setattr(
        rotas_contatos,
        "notificar",
        lambda site_settings, assunto, html: enviadas.append((assunto, html)) or True,
    )
    return enviadas


async def test_envia_mensagem(client, notificacoes):
    response = await client.post(URL, json={
        "nome": "  Ana Souza ",
        "email": "ana@example.com",
        "telefone": "(22) 99999-0000",
        "mensagem": "Gostaria de saber o valor de uma procuração.\nObrigada",
    })

    assert response.status_code == 201
    dados = response.json()
    assert dados["nome"] == "Ana Souza"
    assert dados["lido"] is False
    assert dados["anexos"] is None

    assunto, html = notificacoes[0]
    assert assunto == "Nova mensagem de contato - Ana Souza"
    assert "mailto:ana@example.com" in html
    assert "procuração" in html


@pytest.mark.parametrize("campo", ["nome", "email", "telefone", "mensagem"])
async def test_campos_obrigatorios(client, notificacoes, campo):
    payload = {
        "nome": "Ana",
        "email": "ana@example.com",
        "telefone": "2299990000",
        "mensagem": "Olá",
    }
    payload[campo] = "   "

    response = await client.post(URL, json=payload)

    assert response.status_code == 400
    assert response.json()["message"] == "Dados inválidos"
    assert notificacoes == []


async def test_listagem(client, notificacoes, admin_headers):
    await client.post(URL, json={
        "nome": "Ana",
        "email": "ana@example.com",
        "telefone": "2299990000",
        "mensagem": "Olá",
    })

    sem_chave = await client.get(URL)
    response = await client.get(URL, headers=admin_headers)

    assert sem_chave.status_code == 401
    assert response.status_code == 200
    assert [m["nome"] for m in response.json()] == ["Ana"]
