"""
Montagem de todos os repositórios de uma planilha.

Cada repositório tem o próprio cache de sheetIds; não há instâncias globais.
"""
import logging
from dataclasses import dataclass

from .config import Config
from .gateway import GspreadApi, MemoryApi, RetryPolicy, TabularApi, get_spreadsheet
from .tables import (
    CLUB_TABLE_KIND,
    MEMBER_KIND,
    PAYMENT_KIND,
    RESERVATION_KIND,
    RESERVATION_TABLE_KIND,
    ROOM_KIND,
    USER_KIND,
    AssociationRepository,
    ClubTable,
    EntityRepository,
    Member,
    MembershipPayment,
    Reservation,
    ReservationTable,
    Room,
    User,
)
from .tables.member_schema import MEMBERS_TABLE_HEADER, PAYMENTS_TABLE_HEADER
from .tables.relations import club_table_hooks, reservation_hooks, room_hooks
from .tables.reservation_schema import (
    RESERVATION_TABLES_TABLE_HEADER,
    RESERVATIONS_TABLE_HEADER,
)
from .tables.room_schema import CLUB_TABLES_TABLE_HEADER, ROOMS_TABLE_HEADER
from .tables.user_schema import USERS_TABLE_HEADER

logger = logging.getLogger(__name__)

TABLE_HEADERS: dict[str, list[str]] = {
    MEMBER_KIND.binding.sheet_name: MEMBERS_TABLE_HEADER,
    PAYMENT_KIND.binding.sheet_name: PAYMENTS_TABLE_HEADER,
    ROOM_KIND.binding.sheet_name: ROOMS_TABLE_HEADER,
    CLUB_TABLE_KIND.binding.sheet_name: CLUB_TABLES_TABLE_HEADER,
    RESERVATION_KIND.binding.sheet_name: RESERVATIONS_TABLE_HEADER,
    RESERVATION_TABLE_KIND.binding.sheet_name: RESERVATION_TABLES_TABLE_HEADER,
    USER_KIND.binding.sheet_name: USERS_TABLE_HEADER,
}


@dataclass
class Store:
    """
    Repositórios de todos os tipos de entidade, já ligados entre si.
    """
    members: EntityRepository[Member]
    payments: EntityRepository[MembershipPayment]
    rooms: EntityRepository[Room]
    tables: EntityRepository[ClubTable]
    reservations: EntityRepository[Reservation]
    reservation_tables: AssociationRepository[ReservationTable]
    users: EntityRepository[User]

    @classmethod
    def from_config(cls, config: Config | None = None) -> "Store":
        """
        Conecta-se à planilha configurada e monta o store sobre o gspread.
        """
        config = config or Config()
        spreadsheet = get_spreadsheet(
            config.spreadsheet_id,
            config.service_account_file,
            config.service_account_info(),
        )
        policy = RetryPolicy(tries=config.retry_tries, delay=config.retry_delay)
        return open_store(GspreadApi(spreadsheet), policy)


def open_store(api: TabularApi, retry_policy: RetryPolicy | None = None) -> Store:
    """
    Cria os repositórios sobre uma superfície tabular e injeta os ganchos de relação.

    Args:
        api (TabularApi): Superfície tabular (gspread ou memória).
        retry_policy (RetryPolicy | None): Retry compartilhado pelas chamadas remotas.

    Returns:
        Store: Repositórios prontos para uso.
    """
    policy = retry_policy or RetryPolicy()

    rooms = EntityRepository(api, ROOM_KIND, retry_policy=policy)
    tables = EntityRepository(api, CLUB_TABLE_KIND, retry_policy=policy)
    reservation_tables = AssociationRepository(api, RESERVATION_TABLE_KIND, retry_policy=policy)
    reservations = EntityRepository(api, RESERVATION_KIND, retry_policy=policy)

    rooms.hooks = room_hooks(tables)
    tables.hooks = club_table_hooks(rooms)
    reservations.hooks = reservation_hooks(tables, reservation_tables)

    store = Store(
        members=EntityRepository(api, MEMBER_KIND, retry_policy=policy),
        payments=EntityRepository(api, PAYMENT_KIND, retry_policy=policy),
        rooms=rooms,
        tables=tables,
        reservations=reservations,
        reservation_tables=reservation_tables,
        users=EntityRepository(api, USER_KIND, retry_policy=policy),
    )
    logger.info("Store montado com %d abas.", len(TABLE_HEADERS))
    return store


def memory_api(rows: dict[str, list[list[str]]] | None = None) -> MemoryApi:
    """
    Cria uma planilha em memória com todas as abas do store e seus cabeçalhos.

    Args:
        rows (dict[str, list[list[str]]] | None): Linhas de dados iniciais por aba, sem cabeçalho.
    """
    rows = rows or {}
    return MemoryApi({
        sheet_name: [header] + [list(row) for row in rows.get(sheet_name, [])]
        for sheet_name, header in TABLE_HEADERS.items()
    })
