import logging

from gspread import Client, Spreadsheet, SpreadsheetNotFound
from google.oauth2.service_account import Credentials

from ._retry import retry


logger = logging.getLogger(__name__)

SCOPES = [
    'https://www.googleapis.com/auth/spreadsheets',
]


def _connect_service_account(
        service_account_file: str | None = None,
        service_account_info: dict[str, str] | None = None,
) -> Client:
    """
    Conecta-se à API do Google Sheets usando uma conta de serviço.

    Args:
        service_account_file (str | None): Caminho para o arquivo de conta de serviço JSON.
        service_account_info (dict[str, str] | None): Campos da conta de serviço, usados quando não há arquivo.

    Returns:
        Client: Cliente autenticado do gspread para interagir com a API do Google Sheets.
    """
    if service_account_file:
        logger.debug("Conectando à API do Google Sheets usando: %s", service_account_file)
        credentials = Credentials.from_service_account_file(
            service_account_file,
            scopes=SCOPES,
        )
    elif service_account_info:
        logger.debug(
            "Conectando à API do Google Sheets como: %s",
            service_account_info.get("client_email"),
        )
        credentials = Credentials.from_service_account_info(
            service_account_info,
            scopes=SCOPES,
        )
    else:
        raise ValueError("É necessário informar um arquivo ou as informações da conta de serviço.")

    client = Client(auth=credentials)
    logger.info("Conexão estabelecida com sucesso à API do Google Sheets.")
    return client


def get_spreadsheet(
        spreadsheet_id: str,
        service_account_file: str | None = None,
        service_account_info: dict[str, str] | None = None,
) -> Spreadsheet:
    """
    Obtém uma planilha do Google Sheets pelo seu ID.

    Args:
        spreadsheet_id (str): ID da planilha do Google Sheets.
        service_account_file (str | None): Caminho para o arquivo de conta de serviço JSON.
        service_account_info (dict[str, str] | None): Campos da conta de serviço.

    Returns:
        Spreadsheet: Objeto da planilha obtida.
    """
    client = _connect_service_account(service_account_file, service_account_info)
    try:
        logger.debug("Obtendo a planilha com ID: %s", spreadsheet_id)
        spreadsheet = retry(lambda: client.open_by_key(spreadsheet_id))
        logger.info("Planilha obtida com sucesso: %s", spreadsheet.title)
        return spreadsheet

    except SpreadsheetNotFound:
        logger.error("Planilha com ID %s não encontrada.", spreadsheet_id)
        raise
