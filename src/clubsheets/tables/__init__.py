"""
Tabelas do store: codec de linhas, descritores, repositórios e schemas por tipo.
"""

from .binding import EntityKind, TableBinding
from .codec import RowCodec, format_date, parse_date
from .ids import MEMBER_NUMBER_FIELD, next_id
from .member_schema import (
    MEMBER_KIND,
    PAYMENT_KIND,
    Member,
    MembershipPayment,
    MemberStatus,
    PaymentMethod,
    PaymentType,
)
from .repository import AssociationRepository, EntityHooks, EntityRepository
from .reservation_schema import (
    RESERVATION_KIND,
    RESERVATION_TABLE_KIND,
    Reservation,
    ReservationTable,
)
from .room_schema import CLUB_TABLE_KIND, ROOM_KIND, ClubTable, Room, RoomName
from .user_schema import USER_KIND, User

__all__ = [
    "EntityKind",
    "TableBinding",
    "RowCodec",
    "format_date",
    "parse_date",
    "MEMBER_NUMBER_FIELD",
    "next_id",
    "EntityHooks",
    "EntityRepository",
    "AssociationRepository",
    "Member",
    "MemberStatus",
    "MembershipPayment",
    "PaymentType",
    "PaymentMethod",
    "Room",
    "RoomName",
    "ClubTable",
    "Reservation",
    "ReservationTable",
    "User",
    "MEMBER_KIND",
    "PAYMENT_KIND",
    "ROOM_KIND",
    "CLUB_TABLE_KIND",
    "RESERVATION_KIND",
    "RESERVATION_TABLE_KIND",
    "USER_KIND",
]
