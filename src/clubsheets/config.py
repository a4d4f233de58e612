from dataclasses import dataclass
import os

from dotenv import load_dotenv

# Carrega as variáveis de ambiente do arquivo .env
load_dotenv()

INLINE_CREDENTIAL_VARS = (
    "GOOGLE_PROJECT_ID",
    "GOOGLE_PRIVATE_KEY_ID",
    "GOOGLE_PRIVATE_KEY",
    "GOOGLE_CLIENT_EMAIL",
    "GOOGLE_CLIENT_ID",
)


@dataclass(frozen=True)
class Config:
    """
    Configurações do store, obtidas de variáveis de ambiente.

    As credenciais podem vir de um arquivo de conta de serviço (SERVICE_ACCOUNT_FILE)
    ou das cinco variáveis GOOGLE_* com os campos da conta de serviço.

    Attributes:
        spreadsheet_id (str | None): ID da planilha, da variável GOOGLE_SPREADSHEET_ID.
        service_account_file (str | None): Caminho do JSON da conta de serviço, da variável SERVICE_ACCOUNT_FILE.
        retry_tries (int | None): Tentativas por chamada remota, da variável SHEETS_RETRY_TRIES (padrão 3).
        retry_delay (float | None): Atraso base do backoff em segundos, da variável SHEETS_RETRY_DELAY (padrão 0.1).
    """
    spreadsheet_id: str | None = None
    service_account_file: str | None = None
    retry_tries: int | None = None
    retry_delay: float | None = None

    def __post_init__(self):
        if self.spreadsheet_id is None:
            object.__setattr__(self, 'spreadsheet_id', os.getenv('GOOGLE_SPREADSHEET_ID'))
        if self.service_account_file is None:
            object.__setattr__(self, 'service_account_file', os.getenv('SERVICE_ACCOUNT_FILE'))
        if self.retry_tries is None:
            object.__setattr__(self, 'retry_tries', int(os.getenv('SHEETS_RETRY_TRIES', '3')))
        if self.retry_delay is None:
            object.__setattr__(self, 'retry_delay', float(os.getenv('SHEETS_RETRY_DELAY', '0.1')))

        if not self.spreadsheet_id:
            raise ValueError("A variável de ambiente 'GOOGLE_SPREADSHEET_ID' é obrigatória.")
        if not self.service_account_file:
            missing = [name for name in INLINE_CREDENTIAL_VARS if not os.getenv(name)]
            if missing:
                raise ValueError(
                    "Defina 'SERVICE_ACCOUNT_FILE' ou as variáveis de ambiente: "
                    + ", ".join(missing)
                )
        if self.retry_tries < 1:
            raise ValueError("'SHEETS_RETRY_TRIES' deve ser pelo menos 1.")

    def service_account_info(self) -> dict[str, str] | None:
        """
        Monta o dicionário da conta de serviço a partir das variáveis GOOGLE_*.

        Returns:
            dict[str, str] | None: Informações da conta de serviço, ou None quando
                as credenciais vêm de SERVICE_ACCOUNT_FILE.
        """
        if self.service_account_file:
            return None
        return {
            "type": "service_account",
            "project_id": os.environ["GOOGLE_PROJECT_ID"],
            "private_key_id": os.environ["GOOGLE_PRIVATE_KEY_ID"],
            # Chaves em .env costumam vir com '\n' literal
            "private_key": os.environ["GOOGLE_PRIVATE_KEY"].replace("\\n", "\n"),
            "client_email": os.environ["GOOGLE_CLIENT_EMAIL"],
            "client_id": os.environ["GOOGLE_CLIENT_ID"],
            "token_uri": "https://oauth2.googleapis.com/token",
        }
