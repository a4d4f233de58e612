import logging

from ..errors import TableNotFoundError
from ._retry import RetryPolicy
from .api import TabularApi

logger = logging.getLogger(__name__)


class SheetIdCache:
    """
    Resolve nomes de aba para o sheetId interno da API, memorizando por instância.

    Uma falta no cache dispara uma única chamada `describe_tables`, que preenche o
    mapa inteiro de uma vez. Não há invalidação: uma aba renomeada depois do
    preenchimento continua resolvendo para o mapeamento antigo.
    """

    def __init__(self, api: TabularApi, retry_policy: RetryPolicy | None = None):
        self.api = api
        self.retry_policy = retry_policy or RetryPolicy()
        self._ids: dict[str, int] = {}

    def resolve(self, sheet_name: str) -> int:
        """
        Obtém o sheetId de uma aba.

        Args:
            sheet_name (str): Nome da aba.

        Returns:
            int: sheetId interno.

        Raises:
            TableNotFoundError: Se a aba não existir após uma leitura bem-sucedida dos metadados.
        """
        if sheet_name in self._ids:
            return self._ids[sheet_name]

        logger.debug("sheetId de '%s' fora do cache, lendo metadados da planilha.", sheet_name)
        tables = self.retry_policy(lambda: self.api.describe_tables())
        for title, sheet_id in tables:
            self._ids[title] = sheet_id
        logger.debug("Cache de sheetIds preenchido com %d abas.", len(self._ids))

        if sheet_name not in self._ids:
            logger.error("Aba '%s' não encontrada nos metadados da planilha.", sheet_name)
            raise TableNotFoundError(sheet_name)
        return self._ids[sheet_name]

    def __contains__(self, sheet_name: str) -> bool:
        return sheet_name in self._ids
