"""
Configurações e fixtures para testes
"""
import os

from cryptography.fernet import Fernet

ADMIN_KEY = "chave-admin-de-teste"

# Precisa estar no ambiente antes de tabelionato.config ser importado
os.environ["ADMIN_API_KEY"] = ADMIN_KEY
os.environ["FERNET_KEY"] = Fernet.generate_key().decode()

import inspect
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from tabelionato import consulta
from tabelionato.config import settings
from tabelionato.database import Base, get_db
from tabelionato.main import app
from tabelionato.schemas import SiteSettingsUpdate
from tabelionato.storage import atualizar_site_settings


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_HEADERS = {"X-Admin-Key": ADMIN_KEY}


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Banco SQLite em memória, recriado a cada teste"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Cliente HTTP contra o app com a sessão de teste no lugar de get_db"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return dict(ADMIN_HEADERS)


@pytest.fixture
def configurar_site(db_session: AsyncSession):
    """
    Grava site_settings pelo mesmo caminho do PUT /api/site-settings.

    Sem argumentos configura a API de consulta com valores válidos.
    """

    async def _configurar(**campos):
        dados = {
            "api_url": "api.example.com/",
            "api_token": "token-secreto",
            "api_port": 8080,
        }
        dados.update(campos)
        return await atualizar_site_settings(db_session, SiteSettingsUpdate(**dados))

    return _configurar


class UpstreamFalso:
    """
    Substitui a API externa de consulta. Cada requisição recebida é guardada
    em `requisicoes`; `handler` decide a resposta (pode ser async ou levantar).
    """

    def __init__(self):
        self.requisicoes: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(200, json={})
        self.timeouts: list[float] = []

    def responder(self, status_code: int, **kwargs) -> None:
        self.handler = lambda request: httpx.Response(status_code, **kwargs)

    def falhar(self, exc_factory) -> None:
        def _handler(request):
            raise exc_factory(request)

        self.handler = _handler

    async def _receber(self, request: httpx.Request) -> httpx.Response:
        self.requisicoes.append(request)
        resposta = self.handler(request)
        if inspect.isawaitable(resposta):
            resposta = await resposta
        return resposta


@pytest.fixture
def upstream(monkeypatch) -> UpstreamFalso:
    falso = UpstreamFalso()

    def criar_cliente(timeout: float) -> httpx.AsyncClient:
        falso.timeouts.append(timeout)
        return httpx.AsyncClient(transport=httpx.MockTransport(falso._receber), timeout=timeout)

    monkeypatch.setattr(consulta, "_criar_cliente", criar_cliente)
    return falso


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    diretorio = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(diretorio))
    return diretorio
