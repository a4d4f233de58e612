"""
Schemas das salas e das mesas de jogo.

Cada mesa guarda o id da sala (ID Sobe); a sala conhece suas mesas apenas
depois da montagem feita pelo repositório.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .binding import EntityKind
from .codec import EnumColumn, IntColumn, RowCodec, TextColumn


class RoomName(str, Enum):
    ARKADA = "Arkada"
    TAVERNA = "Taverna"
    ALEKSANDRIJA = "Aleksandrija"
    STEAMPUNK = "Steampunk"
    RAVENLOFT = "Ravenloft"
    DUNGEON = "Dungeon"


# ============================================================================
# ROOMS
# ============================================================================

ROOMS_TABLE_NAME = "Sobe"
ROOMS_TABLE_HEADER = ["ID", "Naziv", "Sprat"]


@dataclass
class Room:
    """
    Sala do clube.

    Attributes:
        id (str | None): Identificador numérico.
        name (RoomName | None): Nome da sala.
        floor (int): Andar.
        tables (list[ClubTable]): Mesas da sala, preenchidas na leitura.
    """
    id: str | None
    name: RoomName | None = None
    floor: int = 0
    tables: list[ClubTable] = field(default_factory=list)


ROOM_CODEC = RowCodec(
    Room,
    (
        TextColumn("id"),
        EnumColumn("name", RoomName),
        IntColumn("floor"),
    ),
)

ROOM_KIND = EntityKind.define("Soba", ROOMS_TABLE_NAME, ROOM_CODEC, id_field="id")


# ============================================================================
# TABLES
# ============================================================================

CLUB_TABLES_TABLE_NAME = "Stolovi"
CLUB_TABLES_TABLE_HEADER = ["ID", "Opis", "Broj Stolica", "ID Sobe"]


@dataclass
class ClubTable:
    """
    Mesa de jogo, sempre pertencente a uma sala.

    Attributes:
        id (str | None): Identificador numérico.
        description (str): Descrição livre.
        seats (int): Número de cadeiras.
        room_id (str): Id da sala (chave estrangeira gravada na aba).
        room (Room | None): Sala montada na leitura, sem as próprias mesas.
    """
    id: str | None
    description: str = ""
    seats: int = 0
    room_id: str = ""
    room: Room | None = None


CLUB_TABLE_CODEC = RowCodec(
    ClubTable,
    (
        TextColumn("id"),
        TextColumn("description"),
        IntColumn("seats"),
        TextColumn("room_id"),
    ),
)

CLUB_TABLE_KIND = EntityKind.define("Sto", CLUB_TABLES_TABLE_NAME, CLUB_TABLE_CODEC, id_field="id")
