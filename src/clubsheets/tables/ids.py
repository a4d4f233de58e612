"""
Geração do próximo identificador sem sequência central.

Estratégia otimista: lê todos os registros, pega o maior inteiro do campo
identificador e soma um. Duas criações concorrentes podem ler o mesmo máximo e
gerar o mesmo id; o laço de criação do repositório relê o máximo a cada
tentativa, o que reduz a janela mas não a elimina.
"""
from collections.abc import Iterable
from typing import Any

from .codec import MEMBER_NUMBER_WIDTH

# Campo identificador que usa a estratégia com zeros à esquerda
MEMBER_NUMBER_FIELD = "member_number"


def _as_int(value: Any) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def max_id(entities: Iterable[Any], id_field: str) -> int:
    """
    Maior identificador numérico entre as entidades; não numéricos contam como 0.
    """
    return max((_as_int(getattr(entity, id_field, None)) for entity in entities), default=0)


def next_id(entities: Iterable[Any], id_field: str) -> str:
    """
    Calcula o próximo identificador.

    Args:
        entities (Iterable): Entidades existentes na aba.
        id_field (str): Campo identificador; define a estratégia.

    Returns:
        str: max + 1 com seis dígitos para o número de sócio, ou decimal simples para os demais.
    """
    candidate = max_id(entities, id_field) + 1
    if id_field == MEMBER_NUMBER_FIELD:
        return str(candidate).zfill(MEMBER_NUMBER_WIDTH)
    return str(candidate)
