"""Testes unitários para os codecs de linha e a ligação com as abas."""

import logging
from dataclasses import dataclass
from datetime import date

import pytest

from clubsheets.store import memory_api, open_store
from clubsheets.tables.binding import EntityKind, TableBinding
from clubsheets.tables.codec import (
    BoolColumn,
    EnumColumn,
    IntColumn,
    MemberNumberColumn,
    PhoneColumn,
    RowCodec,
    TextColumn,
    format_date,
    parse_date,
)
from clubsheets.tables.member_schema import (
    MEMBER_CODEC,
    MEMBER_KIND,
    PAYMENT_CODEC,
    Member,
    MembershipPayment,
    MemberStatus,
    PaymentMethod,
    PaymentType,
)
from clubsheets.tables.reservation_schema import (
    RESERVATION_CODEC,
    RESERVATION_KIND,
    RESERVATION_TABLE_CODEC,
    RESERVATION_TABLE_KIND,
    Reservation,
    ReservationTable,
)
from clubsheets.tables.room_schema import (
    CLUB_TABLE_CODEC,
    CLUB_TABLE_KIND,
    ROOM_CODEC,
    ROOM_KIND,
    ClubTable,
    Room,
    RoomName,
)
from clubsheets.tables.user_schema import USER_CODEC, User


class TestDates:
    """Testes para format_date e parse_date."""

    def test_format_pads_day_and_month(self):
        """Datas são escritas como DD/MM/AAAA."""
        assert format_date(date(2024, 3, 5)) == "05/03/2024"

    def test_format_none(self):
        """Sem data, célula vazia."""
        assert format_date(None) == ""

    @pytest.mark.parametrize("cell, expected", [
        ("05/03/2024", date(2024, 3, 5)),
        ("5/3/2024", date(2024, 3, 5)),
        ("2024-03-05", date(2024, 3, 5)),
        ("2024-03-05T18:30:00", date(2024, 3, 5)),
    ])
    def test_parse_accepted_formats(self, cell, expected):
        """Aceita D/M/AAAA com ou sem zeros e cai para ISO-8601."""
        assert parse_date(cell) == expected

    def test_parse_empty_is_today(self):
        """Célula vazia vira a data de hoje."""
        assert parse_date("") == date.today()

    def test_parse_garbage_is_today_with_warning(self, caplog):
        """Conteúdo ilegível vira hoje e gera um aviso."""
        with caplog.at_level(logging.WARNING):
            assert parse_date("amanhã") == date.today()
        assert "amanhã" in caplog.text

    def test_parse_invalid_day_falls_back(self):
        """31/02 não é data válida; o fallback ISO também falha."""
        assert parse_date("31/02/2024") == date.today()


class TestColumns:
    """Testes para as colunas tipadas."""

    def test_phone_gets_leading_zero(self):
        """Telefone sem '0' inicial ganha um na escrita."""
        column = PhoneColumn("phone")
        assert column.encode("641234567") == "0641234567"
        assert column.encode("0641234567") == "0641234567"
        assert column.encode(None) == ""

    def test_member_number_is_padded(self):
        """Número de sócio é escrito com seis dígitos."""
        column = MemberNumberColumn("member_number")
        assert column.encode("42") == "000042"
        assert column.encode(None) == ""

    def test_int_column_tolerates_garbage(self):
        """Inteiro ilegível vira o padrão."""
        column = IntColumn("floor")
        assert column.decode("-1") == -1
        assert column.decode("x") == 0
        assert column.decode("") == 0

    def test_bool_column(self):
        """Booleanos no formato do Sheets."""
        column = BoolColumn("active")
        assert column.encode(True) == "TRUE"
        assert column.decode("false") is False
        assert column.decode("") is False

    def test_enum_column_unknown_value_is_default(self):
        """Valor desconhecido é lido como o padrão da coluna."""
        column = EnumColumn("status", MemberStatus, MemberStatus.PROBNI)
        assert column.decode("Aktivan") is MemberStatus.AKTIVAN
        assert column.decode("Zamrznut") is MemberStatus.PROBNI
        assert column.encode(None) == "Probni"

    def test_text_column_default(self):
        """Célula vazia vira o padrão."""
        assert TextColumn("name").decode("") == ""


class TestRowCodec:
    """Testes para RowCodec."""

    def test_member_row_layout(self):
        """A posição da coluna no codec é a posição na linha."""
        member = Member(
            member_number="7",
            full_name="Ana Anic",
            email="ana@example.com",
            phone="641234567",
            status=MemberStatus.AKTIVAN,
            birth_date=date(1999, 1, 2),
            notes=None,
        )

        assert MEMBER_CODEC.to_row(member) == [
            "000007", "Ana Anic", "ana@example.com", "0641234567", "Aktivan", "02/01/1999", "",
        ]

    def test_short_row_uses_defaults(self):
        """Células ausentes no fim da linha viram os padrões."""
        member = MEMBER_CODEC.from_row(["000001", "Ana"])

        assert member.email is None
        assert member.status is MemberStatus.PROBNI
        assert member.birth_date == date.today()

    def test_unmapped_fields_keep_dataclass_default(self):
        """Campos sem coluna (relações) ficam com o padrão da dataclass."""
        room = ROOM_CODEC.from_row(["1", "Arkada", "2"])
        assert room == Room(id="1", name=RoomName.ARKADA, floor=2, tables=[])

    def test_position_of(self):
        """Posição 0-based de um campo; campo desconhecido é KeyError."""
        assert MEMBER_CODEC.position_of("birth_date") == 5
        with pytest.raises(KeyError):
            MEMBER_CODEC.position_of("tables")

    def test_rejects_unknown_field(self):
        """Coluna para um campo que a dataclass não tem é erro de definição."""
        @dataclass
        class Thing:
            id: str

        with pytest.raises(ValueError, match="name"):
            RowCodec(Thing, (TextColumn("id"), TextColumn("name")))


class TestBinding:
    """Testes para TableBinding e EntityKind."""

    def test_ranges(self):
        """Intervalos derivados do nome da aba e da largura."""
        binding = TableBinding("Clanovi", 7, rich_column=5)

        assert binding.table_range == "Clanovi!A:G"
        assert binding.data_range == "Clanovi!A2:G"
        assert binding.row_range(5) == "Clanovi!A5:G5"
        assert binding.rich_cell(5) == "Clanovi!F5"

    def test_rich_cell_without_rich_column(self):
        """Pedir a célula rica de uma aba sem coluna rica é erro."""
        with pytest.raises(ValueError):
            TableBinding("Sobe", 3).rich_cell(2)

    @pytest.mark.parametrize("count, rich", [(0, None), (3, 3), (3, -1)])
    def test_invalid_binding(self, count, rich):
        """Largura ou coluna rica fora do intervalo."""
        with pytest.raises(ValueError):
            TableBinding("X", count, rich_column=rich)

    def test_kinds_derive_layout_from_codec(self):
        """Largura e coluna rica vêm do codec de cada tipo."""
        assert MEMBER_KIND.binding.table_range == "Clanovi!A:G"
        assert MEMBER_KIND.binding.rich_letter == "F"
        assert ROOM_KIND.binding.table_range == "Sobe!A:C"
        assert CLUB_TABLE_KIND.binding.table_range == "Stolovi!A:D"
        assert RESERVATION_KIND.binding.rich_letter == "B"
        assert RESERVATION_TABLE_KIND.id_field is None

    def test_id_must_be_first_column(self):
        """O identificador precisa ficar na coluna A."""
        with pytest.raises(ValueError, match="primeira coluna"):
            EntityKind.define("Soba", "Sobe", ROOM_CODEC, id_field="floor")


ROUND_TRIP_CASES = [
    (
        MEMBER_CODEC,
        Member("000012", "Ana Anic", "ana@example.com", "0641234567",
               MemberStatus.ISTEKAO, date(1999, 1, 2), "Napomena"),
    ),
    (MEMBER_CODEC, Member("000013", "Bojan Bojic", status=MemberStatus.PROBNI, birth_date=date(2000, 2, 29))),
    (
        PAYMENT_CODEC,
        MembershipPayment("3", "000012", date(2025, 1, 10), PaymentType.SPECIJALNA, PaymentMethod.RACUN, "admin"),
    ),
    (ROOM_CODEC, Room(id="2", name=RoomName.RAVENLOFT, floor=-1)),
    (CLUB_TABLE_CODEC, ClubTable(id="7", description="Veliki sto", seats=8, room_id="2")),
    (RESERVATION_CODEC, Reservation(id="4", reserved_on=date(2025, 12, 31), name="Petar", contact="0641111111")),
    (RESERVATION_TABLE_CODEC, ReservationTable(table_id="7", reservation_id="4")),
    (USER_CODEC, User(username="admin", password="tajna", name="Marko", surname="Markovic")),
]


class TestRoundTrip:
    """Linha -> entidade -> linha preserva todos os campos gravados."""

    @pytest.mark.parametrize("codec, entity", ROUND_TRIP_CASES)
    def test_entity_survives_round_trip(self, codec, entity):
        """from_row(to_row(e)) == e para cada tipo."""
        assert codec.from_row(codec.to_row(entity)) == entity

    def test_every_entity_from_find_all(self):
        """Toda entidade lida da aba sobrevive ao ciclo de codificação."""
        api = memory_api({
            "Clanovi": [
                ["000001", "Ana Anic", "", "0641234567", "Aktivan", "02/01/1999"],
                ["000002", "Bojan Bojic", "bojan@example.com", "", "Zamrznut"],
            ],
            "Rezervacije": [["1", "5/3/2025", "Petar", ""]],
        })
        store = open_store(api)

        for repository in (store.members, store.reservations):
            for entity in repository.find_all(resolve=False):
                codec = repository.kind.codec
                assert codec.from_row(codec.to_row(entity)) == entity
