"""
Gateway para acesso ao Google Sheets.

Este módulo encapsula todas as chamadas remotas do store, com retry automático
nas operações idempotentes.

Módulos:
    - connection: Conexão e obtenção de spreadsheets
    - api: Superfície tabular (TabularApi) e implementação sobre gspread
    - memory: Implementação em memória da superfície tabular
    - sheet_ids: Cache de sheetIds por repositório
    - operations: Primitivas de leitura e escrita em linhas
"""

from ._retry import RetryPolicy, retry
from .api import RAW, USER_ENTERED, GspreadApi, TabularApi
from .connection import get_spreadsheet
from .memory import MemoryApi
from .operations import (
    append_row,
    delete_row,
    find_row_by_id,
    find_rows_by_column,
    get_all_rows,
    update_row,
)
from .sheet_ids import SheetIdCache

__all__ = [
    "RAW",
    "USER_ENTERED",
    "RetryPolicy",
    "retry",
    "TabularApi",
    "GspreadApi",
    "MemoryApi",
    "get_spreadsheet",
    "SheetIdCache",
    "get_all_rows",
    "find_row_by_id",
    "find_rows_by_column",
    "append_row",
    "update_row",
    "delete_row",
]
