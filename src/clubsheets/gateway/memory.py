"""
Implementação em memória de `TabularApi`.

Guarda cada aba como uma lista de linhas (cabeçalho incluso) e entende os
intervalos A1 que as operações do gateway produzem. Cada chamada fica registrada
em `calls`, e falhas podem ser injetadas com `fail`, o que a torna útil tanto
como backend substituto quanto como dublê de testes.
"""
import logging
import re
from dataclasses import dataclass

from .api import RAW, column_index

logger = logging.getLogger(__name__)

_A1_RANGE = re.compile(
    r"^(?:'(?P<quoted>(?:[^']|'')+)'|(?P<plain>[^!]+))!"
    r"(?P<start_col>[A-Z]+)?(?P<start_row>\d+)?"
    r"(?P<colon>:(?P<end_col>[A-Z]+)?(?P<end_row>\d+)?)?$"
)


@dataclass(frozen=True)
class A1Range:
    """Intervalo A1 decomposto; linhas 1-based e colunas 0-based, None quando abertas."""
    sheet_name: str
    start_col: int
    start_row: int
    end_col: int | None
    end_row: int | None


def parse_range(range_name: str) -> A1Range:
    match = _A1_RANGE.match(range_name)
    if not match:
        raise ValueError(f"Intervalo A1 inválido: '{range_name}'")

    sheet_name = match.group("plain") or match.group("quoted").replace("''", "'")
    start_col = column_index(match.group("start_col")) if match.group("start_col") else 0
    start_row = int(match.group("start_row")) if match.group("start_row") else 1

    if match.group("colon") is not None:
        end_col = column_index(match.group("end_col")) if match.group("end_col") else None
        end_row = int(match.group("end_row")) if match.group("end_row") else None
    else:
        # Célula única
        end_col = start_col
        end_row = start_row

    return A1Range(sheet_name, start_col, start_row, end_col, end_row)


@dataclass(frozen=True)
class RecordedCall:
    operation: str
    target: str
    value_input: str | None = None


class MemoryApi:
    """
    Planilha em memória.

    Args:
        sheets (dict[str, list[list[str]]] | None): Abas iniciais, nome -> linhas (cabeçalho primeiro).
    """

    def __init__(self, sheets: dict[str, list[list[str]]] | None = None):
        self.sheets: dict[str, list[list[str]]] = {}
        self.sheet_ids: dict[str, int] = {}
        self.calls: list[RecordedCall] = []
        self.typed_cells: set[tuple[str, int, int]] = set()
        self._failures: dict[str, list[Exception]] = {}
        for name, rows in (sheets or {}).items():
            self.add_sheet(name, rows)

    # ------------------------------------------------------------------
    # Utilidades de teste
    # ------------------------------------------------------------------

    def add_sheet(self, name: str, rows: list[list[str]] | None = None) -> int:
        """
        Cria uma aba com as linhas dadas e devolve seu sheetId.
        """
        self.sheets[name] = [list(row) for row in rows or []]
        self.sheet_ids[name] = len(self.sheet_ids)
        return self.sheet_ids[name]

    def fail(self, operation: str, times: int = 1, exception: Exception | None = None) -> None:
        """
        Faz as próximas `times` chamadas de `operation` levantarem `exception`.

        Args:
            operation (str): Nome do método (ex.: "append_rows").
            times (int): Quantas chamadas devem falhar.
            exception (Exception | None): Exceção a levantar; ConnectionError por padrão.
        """
        error = exception or ConnectionError(f"Falha simulada em {operation}")
        self._failures.setdefault(operation, []).extend([error] * times)

    def data_rows(self, name: str) -> list[list[str]]:
        """Linhas de dados da aba, sem o cabeçalho."""
        return self.sheets[name][1:]

    def operations(self) -> list[str]:
        return [call.operation for call in self.calls]

    def _record(self, operation: str, target: str, value_input: str | None = None) -> None:
        self.calls.append(RecordedCall(operation, target, value_input))
        pending = self._failures.get(operation)
        if pending:
            raise pending.pop(0)

    def _sheet(self, name: str) -> list[list[str]]:
        if name not in self.sheets:
            raise KeyError(f"Aba inexistente: '{name}'")
        return self.sheets[name]

    # ------------------------------------------------------------------
    # TabularApi
    # ------------------------------------------------------------------

    def read_range(self, range_name: str) -> list[list[str]]:
        self._record("read_range", range_name)
        a1 = parse_range(range_name)
        rows = self._sheet(a1.sheet_name)

        last_row = len(rows) if a1.end_row is None else min(a1.end_row, len(rows))
        selected: list[list[str]] = []
        for row in rows[a1.start_row - 1:last_row]:
            end = len(row) if a1.end_col is None else a1.end_col + 1
            cells = row[a1.start_col:end]
            # A API omite células vazias no fim da linha
            while cells and cells[-1] == "":
                cells.pop()
            selected.append(cells)

        # ...e linhas vazias no fim do intervalo
        while selected and not selected[-1]:
            selected.pop()
        return selected

    def append_rows(self, range_name: str, rows: list[list[str]], value_input: str = RAW) -> None:
        self._record("append_rows", range_name, value_input)
        a1 = parse_range(range_name)
        sheet = self._sheet(a1.sheet_name)
        for row in rows:
            sheet.append([""] * a1.start_col + [str(cell) for cell in row])

    def write_range(self, range_name: str, rows: list[list[str]], value_input: str = RAW) -> None:
        self._record("write_range", range_name, value_input)
        a1 = parse_range(range_name)
        sheet = self._sheet(a1.sheet_name)
        for offset, row in enumerate(rows):
            row_index = a1.start_row - 1 + offset
            while len(sheet) <= row_index:
                sheet.append([])
            target = sheet[row_index]
            for col_offset, cell in enumerate(row):
                col = a1.start_col + col_offset
                while len(target) <= col:
                    target.append("")
                target[col] = str(cell)
                key = (a1.sheet_name, row_index + 1, col)
                if value_input == RAW:
                    self.typed_cells.discard(key)
                else:
                    self.typed_cells.add(key)

    def delete_row_range(self, sheet_id: int, start_index: int, end_index: int) -> None:
        self._record("delete_row_range", f"{sheet_id}:{start_index}:{end_index}")
        for name, known_id in self.sheet_ids.items():
            if known_id == sheet_id:
                del self.sheets[name][start_index:end_index]
                removed = end_index - start_index
                shifted: set[tuple[str, int, int]] = set()
                for sheet_name, row, col in self.typed_cells:
                    if sheet_name != name or row <= start_index:
                        shifted.add((sheet_name, row, col))
                    elif row > end_index:
                        shifted.add((sheet_name, row - removed, col))
                self.typed_cells = shifted
                return
        raise KeyError(f"sheetId inexistente: {sheet_id}")

    def describe_tables(self) -> list[tuple[str, int]]:
        self._record("describe_tables", "*")
        return list(self.sheet_ids.items())
