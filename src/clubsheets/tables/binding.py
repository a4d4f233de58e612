"""
Ligação entre um tipo de entidade e sua aba na planilha.

As letras de coluna são derivadas das posições do codec, nunca escritas à mão.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..gateway.api import column_letter, sheet_range
from .codec import RowCodec

EntityType = TypeVar("EntityType")


@dataclass(frozen=True)
class TableBinding:
    """
    Aba, largura do intervalo e, opcionalmente, a coluna "rica".

    Attributes:
        sheet_name (str): Nome da aba.
        column_count (int): Quantidade de colunas do intervalo, a partir de A.
        rich_column (int | None): Índice 0-based da coluna que precisa de escrita tipada (USER_ENTERED).
    """
    sheet_name: str
    column_count: int
    rich_column: int | None = None

    def __post_init__(self):
        if self.column_count < 1:
            raise ValueError(f"A aba '{self.sheet_name}' precisa de pelo menos uma coluna.")
        if self.rich_column is not None and not 0 <= self.rich_column < self.column_count:
            raise ValueError(
                f"Coluna rica {self.rich_column} fora do intervalo da aba '{self.sheet_name}'."
            )

    @property
    def end_column(self) -> str:
        return column_letter(self.column_count - 1)

    @property
    def rich_letter(self) -> str | None:
        if self.rich_column is None:
            return None
        return column_letter(self.rich_column)

    @property
    def table_range(self) -> str:
        """Intervalo da tabela inteira, cabeçalho incluso (ex.: "Clanovi!A:G")."""
        return sheet_range(self.sheet_name, f"A:{self.end_column}")

    @property
    def data_range(self) -> str:
        """Intervalo dos dados, começando na linha após o cabeçalho (ex.: "Clanovi!A2:G")."""
        return sheet_range(self.sheet_name, f"A2:{self.end_column}")

    def row_range(self, row_number: int) -> str:
        """Intervalo de uma linha inteira, 1-based (ex.: "Clanovi!A5:G5")."""
        return sheet_range(self.sheet_name, f"A{row_number}:{self.end_column}{row_number}")

    def rich_cell(self, row_number: int) -> str:
        """Célula da coluna rica numa linha 1-based (ex.: "Clanovi!F5")."""
        if self.rich_letter is None:
            raise ValueError(f"A aba '{self.sheet_name}' não tem coluna rica.")
        return sheet_range(self.sheet_name, f"{self.rich_letter}{row_number}")


@dataclass(frozen=True)
class EntityKind(Generic[EntityType]):
    """
    Descritor de um tipo de entidade: aba, codec e campo identificador.

    Attributes:
        name (str): Nome legível usado em logs e mensagens de erro.
        binding (TableBinding): Aba e intervalo.
        codec (RowCodec): Conversão linha <-> entidade.
        id_field (str | None): Campo identificador; None para registros de associação.
    """
    name: str
    binding: TableBinding
    codec: RowCodec[EntityType]
    id_field: str | None = None

    @classmethod
    def define(
            cls,
            name: str,
            sheet_name: str,
            codec: RowCodec[EntityType],
            id_field: str | None = None,
            rich_field: str | None = None,
    ) -> "EntityKind[EntityType]":
        """
        Cria o descritor derivando a largura e a coluna rica do próprio codec.

        Args:
            name (str): Nome legível do tipo.
            sheet_name (str): Nome da aba.
            codec (RowCodec): Codec das linhas.
            id_field (str | None): Campo identificador.
            rich_field (str | None): Campo cuja coluna exige escrita tipada.
        """
        if id_field is not None and codec.position_of(id_field) != 0:
            raise ValueError(f"O identificador de {name} precisa ficar na primeira coluna.")
        rich_column = codec.position_of(rich_field) if rich_field else None
        binding = TableBinding(sheet_name, len(codec.columns), rich_column)
        return cls(name=name, binding=binding, codec=codec, id_field=id_field)
