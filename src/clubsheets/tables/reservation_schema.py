"""
Schemas de reservas e da associação reserva <-> mesa.

- Rezervacije: reservas, com data (coluna rica) e quem reservou
- RezervacijeStolovi: arestas muitos-para-muitos (mesa, reserva), sem id próprio
"""
from dataclasses import dataclass, field
from datetime import date

from .binding import EntityKind
from .codec import DateColumn, RowCodec, TextColumn
from .room_schema import ClubTable

# ============================================================================
# RESERVATIONS
# ============================================================================

RESERVATIONS_TABLE_NAME = "Rezervacije"
RESERVATIONS_TABLE_HEADER = ["ID", "Datum", "Ime", "Kontakt"]


@dataclass
class Reservation:
    """
    Reserva de uma ou mais mesas para uma data.

    Attributes:
        id (str | None): Identificador numérico; None antes de ser criada.
        reserved_on (date | None): Data da reserva (coluna rica).
        name (str): Nome de quem reservou.
        contact (str): Contato de quem reservou.
        tables (list[ClubTable]): Mesas reservadas, via RezervacijeStolovi.
    """
    id: str | None
    reserved_on: date | None = None
    name: str = ""
    contact: str = ""
    tables: list[ClubTable] = field(default_factory=list)


RESERVATION_CODEC = RowCodec(
    Reservation,
    (
        TextColumn("id"),
        DateColumn("reserved_on"),
        TextColumn("name"),
        TextColumn("contact"),
    ),
)

RESERVATION_KIND = EntityKind.define(
    "Rezervacija",
    RESERVATIONS_TABLE_NAME,
    RESERVATION_CODEC,
    id_field="id",
    rich_field="reserved_on",
)


# ============================================================================
# RESERVATION <-> TABLE
# ============================================================================

RESERVATION_TABLES_TABLE_NAME = "RezervacijeStolovi"
RESERVATION_TABLES_TABLE_HEADER = ["Sto", "Rezervacija"]


@dataclass(frozen=True)
class ReservationTable:
    """Aresta entre uma mesa e uma reserva."""
    table_id: str
    reservation_id: str


RESERVATION_TABLE_CODEC = RowCodec(
    ReservationTable,
    (
        TextColumn("table_id"),
        TextColumn("reservation_id"),
    ),
)

RESERVATION_TABLE_KIND = EntityKind.define(
    "RezervacijaSto",
    RESERVATION_TABLES_TABLE_NAME,
    RESERVATION_TABLE_CODEC,
)
