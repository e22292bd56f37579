"""
Testes do ciclo de vida da aplicação e do health check
"""
from datetime import timezone

import pytest

from tabelionato import main
from tabelionato.config import settings
from tabelionato.models import SiteSettings


@pytest.fixture
def chamadas_banco(monkeypatch):
    chamadas = []

    async def init_falso():
        chamadas.append("init_db")

    async def close_falso():
        chamadas.append("close_db")

    monkeypatch.setattr(main, "init_db", init_falso)
    monkeypatch.setattr(main, "close_db", close_falso)
    return chamadas


@pytest.mark.asyncio
async def test_lifespan_fecha_conexoes_no_encerramento(chamadas_banco):
    async with main.lifespan(main.app):
        assert chamadas_banco == []

    assert chamadas_banco == ["close_db"]


@pytest.mark.asyncio
async def test_lifespan_cria_tabelas_quando_configurado(chamadas_banco, monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_CREATE_TABLES", True)

    async with main.lifespan(main.app):
        assert chamadas_banco == ["init_db"]

    assert chamadas_banco == ["init_db", "close_db"]


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": settings.API_VERSION}


def test_touch_grava_horario_com_fuso():
    site_settings = SiteSettings()

    site_settings.touch()

    assert site_settings.atualizado_em.tzinfo is not None
    assert site_settings.atualizado_em.utcoffset() == timezone.utc.utcoffset(None)
