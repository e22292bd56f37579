"""
Criptografia Fernet para os segredos guardados em site_settings
(token da API de consulta e senha SMTP).
"""
from cryptography.fernet import Fernet

from .config import settings

_fernet: Fernet | None = None


def _get_fernet() -> Fernet:
    global _fernet
    if _fernet is None:
        if not settings.FERNET_KEY:
            raise RuntimeError("FERNET_KEY não configurado")
        _fernet = Fernet(settings.FERNET_KEY.encode())
    return _fernet


def encrypt_secret(plaintext: str) -> str:
    return _get_fernet().encrypt(plaintext.encode()).decode()


def decrypt_secret(ciphertext: str) -> str:
    return _get_fernet().decrypt(ciphertext.encode()).decode()
