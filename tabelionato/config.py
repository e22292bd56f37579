from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }

    API_TITLE: str = "API Tabelionato"
    API_DESCRIPTION: str = "API do site do Tabelionato: consulta de processos, configurações e solicitações"
    API_VERSION: str = "1.0.0"
    API_PORT: int = 8000
    API_HOST: str = "0.0.0.0"
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = [
        "http://localhost:5000",
        "http://localhost:3000",
    ]

    # Autenticação administrativa (header X-Admin-Key)
    ADMIN_API_KEY: str = ""

    # Chave Fernet para token da API e senha SMTP guardados no banco
    FERNET_KEY: str = ""

    # Consulta de processos (API externa)
    CONSULTA_TIMEOUT_SECONDS: float = 15.0
    CONSULTA_TESTE_NUM_SEQ: str = "0"
    CONSULTA_TESTE_IDENTIFICACAO: str = "00000000000"

    # Anexos das solicitações
    UPLOAD_DIR: str = "uploads"
    UPLOAD_MAX_BYTES: int = 5 * 1024 * 1024
    UPLOAD_MAX_ARQUIVOS: int = 5
    UPLOAD_TIPOS_PERMITIDOS: List[str] = ["application/pdf"]

    # Usado nos links de anexos dos e-mails
    PUBLIC_BASE_URL: str = "https://cartorioderiodasostras.com.br"

    # Configurações PostgreSQL
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = ""
    DATABASE_NAME: str = "tabelionato"
    DATABASE_ECHO: bool = False
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10
    # Sem alembic (ambientes locais): cria as tabelas na subida da API
    DATABASE_CREATE_TABLES: bool = False

    @property
    def DATABASE_URL(self) -> str:
        """Constrói a URL de conexão do PostgreSQL para asyncpg"""
        return (
            f"postgresql+asyncpg://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )


settings = Settings()
