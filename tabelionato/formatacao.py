"""
Funções de formatação de textos vindos dos formulários do site.
"""
import re


def somente_digitos(valor: str) -> str:
    """Remove todos os caracteres não-numéricos."""
    return re.sub(r'\D', '', valor)


def mascarar_cpf(cpf: str) -> str:
    """
    Mascara um CPF para uso em logs, mantendo apenas os 5 últimos dígitos.

    12345678900 -> ***.***.789-00. Valores curtos viram apenas asteriscos.
    """
    limpo = somente_digitos(cpf or "")
    if len(limpo) != 11:
        return "*" * len(limpo)
    return f"***.***.{limpo[6:9]}-{limpo[9:]}"


def rotulo_campo(nome: str) -> str:
    """
    Converte o nome camelCase de um campo de formulário em rótulo legível.

    nomeCompleto -> Nome Completo
    """
    separado = re.sub(r'([A-Z])', r' \1', nome).strip()
    return separado[:1].upper() + separado[1:]
