"""
Conversão entre entidades (dataclasses) e linhas da planilha.

O layout de colunas de cada tipo é declarado uma única vez, como uma lista
ordenada de colunas. A posição na lista é a posição na linha: não existe busca
por nome de coluna no nível dos dados.

Datas são escritas sempre como DD/MM/AAAA, mas a leitura é tolerante: aceita
D/M/AAAA e cai para ISO-8601 em qualquer outro formato. Essa assimetria é mantida
como está.
"""
import logging
from dataclasses import dataclass, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

EntityType = TypeVar("EntityType")

MEMBER_NUMBER_WIDTH = 6


def format_date(value: date | None) -> str:
    """
    Formata uma data para a planilha (DD/MM/AAAA, com zeros à esquerda).

    Args:
        value (date | None): Data a formatar.

    Returns:
        str: Data formatada, ou string vazia se não houver data.
    """
    if value is None:
        return ""
    return f"{value.day:02d}/{value.month:02d}/{value.year}"


def parse_date(cell: str) -> date:
    """
    Lê uma data da planilha.

    Aceita D/M/AAAA (com ou sem zeros). Qualquer outro formato passa pelo
    parser ISO-8601. Célula vazia ou ilegível vira a data de hoje.

    Args:
        cell (str): Conteúdo da célula.

    Returns:
        date: Data lida.
    """
    text = cell.strip()
    if not text:
        return date.today()

    parts = text.split("/")
    if len(parts) == 3:
        try:
            day, month, year = (int(part) for part in parts)
            return date(year, month, day)
        except ValueError:
            pass

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        logger.warning("Data ilegível na planilha: '%s'. Usando a data de hoje.", cell)
        return date.today()


class Column:
    """
    Uma coluna da linha: sabe qual campo da entidade ela guarda e como convertê-lo.

    Attributes:
        field (str): Nome do campo na dataclass.
        default (Any): Valor usado quando a célula está ausente ou vazia.
    """

    def __init__(self, field: str, default: Any = ""):
        self.field = field
        self.default = default

    def encode(self, value: Any) -> str:
        return "" if value is None else str(value)

    def decode(self, cell: str) -> Any:
        return cell if cell else self.default

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.field!r})"


class TextColumn(Column):
    pass


class OptionalTextColumn(Column):
    """Texto opcional: célula vazia vira None."""

    def __init__(self, field: str):
        super().__init__(field, default=None)


class PhoneColumn(OptionalTextColumn):
    """Telefone: escrito com '0' à esquerda quando falta."""

    def encode(self, value: Any) -> str:
        phone = "" if value is None else str(value).strip()
        if phone and not phone.startswith("0"):
            return "0" + phone
        return phone


class MemberNumberColumn(Column):
    """Número de sócio: escrito com seis dígitos, completando com zeros."""

    def encode(self, value: Any) -> str:
        if not value:
            return ""
        return str(value).zfill(MEMBER_NUMBER_WIDTH)


class IntColumn(Column):
    def __init__(self, field: str, default: int = 0):
        super().__init__(field, default=default)

    def decode(self, cell: str) -> int:
        try:
            return int(cell.strip())
        except ValueError:
            return self.default


class BoolColumn(Column):
    """Booleano gravado como TRUE/FALSE, no formato que o Sheets usa."""

    def __init__(self, field: str, default: bool = False):
        super().__init__(field, default=default)

    def encode(self, value: Any) -> str:
        return "TRUE" if value else "FALSE"

    def decode(self, cell: str) -> bool:
        text = cell.strip().upper()
        if text == "TRUE":
            return True
        if text == "FALSE":
            return False
        return self.default


class EnumColumn(Column):
    """
    Enum gravado pelo seu valor. Valores desconhecidos são lidos como o padrão.
    """

    def __init__(self, field: str, enum: type[Enum], default: Enum | None = None):
        super().__init__(field, default=default)
        self.enum = enum

    def encode(self, value: Any) -> str:
        if value is None:
            value = self.default
        if isinstance(value, Enum):
            return str(value.value)
        return "" if value is None else str(value)

    def decode(self, cell: str) -> Enum | None:
        try:
            return self.enum(cell)
        except ValueError:
            return self.default


class DateColumn(Column):
    def __init__(self, field: str):
        super().__init__(field, default=None)

    def encode(self, value: date | None) -> str:
        return format_date(value)

    def decode(self, cell: str) -> date:
        return parse_date(cell)


@dataclass(frozen=True)
class RowCodec(Generic[EntityType]):
    """
    Par de funções puras linha <-> entidade para um tipo.

    Campos da entidade que não têm coluna (ex.: entidades relacionadas montadas
    depois da leitura) ficam com o padrão da dataclass.

    Attributes:
        entity_type (type): Dataclass da entidade.
        columns (tuple[Column, ...]): Colunas na ordem da planilha.
    """
    entity_type: type[EntityType]
    columns: tuple[Column, ...]

    def __post_init__(self):
        known = {f.name for f in fields(self.entity_type)}
        for column in self.columns:
            if column.field not in known:
                raise ValueError(
                    f"{self.entity_type.__name__} não tem o campo '{column.field}'."
                )

    def position_of(self, field: str) -> int:
        for index, column in enumerate(self.columns):
            if column.field == field:
                return index
        raise KeyError(f"Campo '{field}' não mapeado em {self.entity_type.__name__}.")

    def to_row(self, entity: EntityType) -> list[str]:
        return [column.encode(getattr(entity, column.field)) for column in self.columns]

    def from_row(self, row: list[str]) -> EntityType:
        values = {
            column.field: column.decode(row[index] if index < len(row) else "")
            for index, column in enumerate(self.columns)
        }
        return self.entity_type(**values)
