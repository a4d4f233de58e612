"""
Schemas de sócios e mensalidades.

- Clanovi: cadastro de sócios, identificados pelo número de sócio (seis dígitos)
- Clanarine: pagamentos de mensalidade, com id numérico simples
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum

from .binding import EntityKind
from .codec import (
    DateColumn,
    EnumColumn,
    MemberNumberColumn,
    OptionalTextColumn,
    PhoneColumn,
    RowCodec,
    TextColumn,
)
from .ids import MEMBER_NUMBER_FIELD


class MemberStatus(str, Enum):
    AKTIVAN = "Aktivan"
    PASIVAN = "Pasivan"
    PROBNI = "Probni"
    ISTEKAO = "Istekao"
    ISKLJUCEN = "Iskljucen"


class PaymentType(str, Enum):
    MESECNA = "Mesecna"
    GODISNJA = "Godisnja"
    SPECIJALNA = "Specijalna"


class PaymentMethod(str, Enum):
    GOTOVINSKI = "Gotovinski"
    RACUN = "Racun"


# ============================================================================
# MEMBERS
# ============================================================================

MEMBERS_TABLE_NAME = "Clanovi"
MEMBERS_TABLE_HEADER = [
    "Clanski Broj",
    "Ime i Prezime",
    "Email",
    "Telefon",
    "Status",
    "Datum Rodjenja",
    "Napomene",
]


@dataclass
class Member:
    """
    Sócio do clube.

    Attributes:
        member_number (str | None): Número de sócio com seis dígitos; None antes de ser criado.
        full_name (str): Nome completo.
        email (str | None): E-mail de contato.
        phone (str | None): Telefone; gravado com '0' à esquerda.
        status (MemberStatus): Situação do sócio.
        birth_date (date | None): Data de nascimento (coluna rica).
        notes (str | None): Observações livres.
    """
    member_number: str | None
    full_name: str
    email: str | None = None
    phone: str | None = None
    status: MemberStatus = MemberStatus.PROBNI
    birth_date: date | None = None
    notes: str | None = None


MEMBER_CODEC = RowCodec(
    Member,
    (
        MemberNumberColumn(MEMBER_NUMBER_FIELD),
        TextColumn("full_name"),
        OptionalTextColumn("email"),
        PhoneColumn("phone"),
        EnumColumn("status", MemberStatus, MemberStatus.PROBNI),
        DateColumn("birth_date"),
        OptionalTextColumn("notes"),
    ),
)

MEMBER_KIND = EntityKind.define(
    "Clan",
    MEMBERS_TABLE_NAME,
    MEMBER_CODEC,
    id_field=MEMBER_NUMBER_FIELD,
    rich_field="birth_date",
)


# ============================================================================
# MEMBERSHIP PAYMENTS
# ============================================================================

PAYMENTS_TABLE_NAME = "Clanarine"
PAYMENTS_TABLE_HEADER = [
    "ID",
    "Clanski Broj",
    "Datum Uplate",
    "Tip",
    "Nacin Placanja",
    "Napravio",
]


@dataclass
class MembershipPayment:
    """
    Pagamento de mensalidade de um sócio.

    Attributes:
        id (str | None): Identificador numérico; None antes de ser criado.
        member_number (str): Número do sócio que pagou.
        paid_on (date | None): Data do pagamento (coluna rica).
        payment_type (PaymentType): Mensal, anual ou especial.
        method (PaymentMethod): Dinheiro ou conta.
        recorded_by (str): Usuário que registrou o pagamento.
    """
    id: str | None
    member_number: str
    paid_on: date | None = None
    payment_type: PaymentType = PaymentType.MESECNA
    method: PaymentMethod = PaymentMethod.GOTOVINSKI
    recorded_by: str = ""


PAYMENT_CODEC = RowCodec(
    MembershipPayment,
    (
        TextColumn("id"),
        TextColumn("member_number"),
        DateColumn("paid_on"),
        EnumColumn("payment_type", PaymentType, PaymentType.MESECNA),
        EnumColumn("method", PaymentMethod, PaymentMethod.GOTOVINSKI),
        TextColumn("recorded_by"),
    ),
)

PAYMENT_KIND = EntityKind.define(
    "Clanarina",
    PAYMENTS_TABLE_NAME,
    PAYMENT_CODEC,
    id_field="id",
    rich_field="paid_on",
)
