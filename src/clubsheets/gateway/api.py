"""
Superfície tabular usada pelo store.

O store depende apenas das cinco operações de `TabularApi`. `GspreadApi` as
implementa sobre as chamadas cruas da API v4 expostas pelo gspread; qualquer
substituto (ver `memory.MemoryApi`) serve desde que respeite o mesmo contrato.
"""
import logging
import re
from typing import Protocol

from gspread import Spreadsheet

logger = logging.getLogger(__name__)

RAW = "RAW"
USER_ENTERED = "USER_ENTERED"

_PLAIN_SHEET_NAME = re.compile(r"^[A-Za-z0-9_]+$")


def sheet_range(sheet_name: str, cells: str) -> str:
    """
    Monta um intervalo A1 completo, com aspas no nome da aba quando necessário.

    Args:
        sheet_name (str): Nome da aba.
        cells (str): Parte das células do intervalo (ex.: "A2:G").

    Returns:
        str: Intervalo no formato "Aba!A2:G" ou "'Minha Aba'!A2:G".
    """
    if not _PLAIN_SHEET_NAME.match(sheet_name):
        sheet_name = "'" + sheet_name.replace("'", "''") + "'"
    return f"{sheet_name}!{cells}"


class TabularApi(Protocol):
    def read_range(self, range_name: str) -> list[list[str]]: ...

    def append_rows(self, range_name: str, rows: list[list[str]], value_input: str = RAW) -> None: ...

    def write_range(self, range_name: str, rows: list[list[str]], value_input: str = RAW) -> None: ...

    def delete_row_range(self, sheet_id: int, start_index: int, end_index: int) -> None: ...

    def describe_tables(self) -> list[tuple[str, int]]: ...


class GspreadApi:
    """
    Implementação de `TabularApi` sobre uma `gspread.Spreadsheet`.

    Nenhuma chamada aqui faz retry; isso é responsabilidade das operações do gateway.
    """

    def __init__(self, spreadsheet: Spreadsheet):
        self.spreadsheet = spreadsheet

    def read_range(self, range_name: str) -> list[list[str]]:
        logger.debug("Lendo intervalo '%s'.", range_name)
        response = self.spreadsheet.values_get(range_name)
        return [[str(cell) for cell in row] for row in response.get("values", [])]

    def append_rows(self, range_name: str, rows: list[list[str]], value_input: str = RAW) -> None:
        logger.debug("Adicionando %d linha(s) em '%s' (%s).", len(rows), range_name, value_input)
        self.spreadsheet.values_append(
            range_name,
            params={"valueInputOption": value_input, "insertDataOption": "INSERT_ROWS"},
            body={"values": rows},
        )

    def write_range(self, range_name: str, rows: list[list[str]], value_input: str = RAW) -> None:
        logger.debug("Escrevendo intervalo '%s' (%s).", range_name, value_input)
        self.spreadsheet.values_update(
            range_name,
            params={"valueInputOption": value_input},
            body={"values": rows},
        )

    def delete_row_range(self, sheet_id: int, start_index: int, end_index: int) -> None:
        logger.debug(
            "Removendo linhas [%d, %d) da aba de sheetId %d.", start_index, end_index, sheet_id
        )
        self.spreadsheet.batch_update({
            "requests": [
                {
                    "deleteDimension": {
                        "range": {
                            "sheetId": sheet_id,
                            "dimension": "ROWS",
                            "startIndex": start_index,
                            "endIndex": end_index,
                        }
                    }
                }
            ]
        })

    def describe_tables(self) -> list[tuple[str, int]]:
        metadata = self.spreadsheet.fetch_sheet_metadata({"fields": "sheets.properties"})
        tables: list[tuple[str, int]] = []
        for sheet in metadata.get("sheets", []):
            properties = sheet.get("properties", {})
            title = properties.get("title")
            sheet_id = properties.get("sheetId")
            if title and sheet_id is not None:
                tables.append((title, sheet_id))
        return tables


def column_letter(index: int) -> str:
    """
    Converte um índice de coluna 0-based na letra A1 correspondente (0 -> A, 26 -> AA).

    Args:
        index (int): Índice 0-based da coluna.

    Returns:
        str: Letra(s) da coluna.
    """
    if index < 0:
        raise ValueError(f"Índice de coluna inválido: {index}")
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def column_index(letters: str) -> int:
    """Inverso de `column_letter`: "A" -> 0, "AA" -> 26."""
    index = 0
    for char in letters.upper():
        index = index * 26 + (ord(char) - ord("A") + 1)
    return index - 1
