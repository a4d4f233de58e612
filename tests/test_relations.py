"""Testes de montagem de relações entre salas, mesas e reservas."""

from datetime import date

import pytest

from clubsheets.errors import CreateFailedError, OrphanedReferenceError, RepositoryError
from clubsheets.store import memory_api, open_store
from clubsheets.tables import ClubTable, Reservation, RoomName


@pytest.fixture
def api():
    return memory_api({
        "Sobe": [["1", "Arkada", "0"], ["2", "Taverna", "1"]],
        "Stolovi": [
            ["1", "Veliki sto", "8", "1"],
            ["2", "Mali sto", "4", "1"],
            ["3", "Kutak", "2", "2"],
        ],
        "Rezervacije": [["1", "14/02/2025", "Petar", "0641111111"]],
        "RezervacijeStolovi": [["1", "1"], ["3", "1"]],
    })


@pytest.fixture
def store(api):
    return open_store(api)


class TestRoomTables:
    """Sala -> mesas e mesa -> sala."""

    def test_room_lists_its_tables(self, store):
        """A sala traz as mesas cujo ID Sobe é o seu id."""
        room = store.rooms.find("1")

        assert [table.id for table in room.tables] == ["1", "2"]
        assert all(table.room.id == "1" for table in room.tables)

    def test_nested_room_is_shallow(self, store):
        """A sala dentro de cada mesa não carrega as próprias mesas."""
        room = store.rooms.find("1")
        assert room.tables[0].room.tables == []

    def test_room_without_tables(self, store, api):
        """Sala sem mesas tem lista vazia."""
        api.sheets["Stolovi"][1:] = []
        assert store.rooms.find("2").tables == []

    def test_table_resolves_room(self, store):
        """A mesa traz a sala, também sem as mesas."""
        table = store.tables.find("3")

        assert table.room.name is RoomName.TAVERNA
        assert table.room.tables == []

    def test_orphaned_table_room(self, store, api):
        """Mesa apontando para sala inexistente é erro fatal."""
        api.sheets["Stolovi"].append(["4", "Izgubljen", "2", "9"])

        with pytest.raises(OrphanedReferenceError) as exc_info:
            store.tables.find("4")

        assert exc_info.value.kind == "Soba"
        assert exc_info.value.entity_id == "9"

    def test_blank_room_id_is_orphan(self, store, api):
        """Mesa sem ID Sobe não casa com uma sala de id vazio."""
        api.sheets["Sobe"].append(["", "Ravenloft", "2"])
        api.sheets["Stolovi"].append(["4", "Bez sobe", "2", ""])

        with pytest.raises(OrphanedReferenceError) as exc_info:
            store.tables.find("4")

        assert exc_info.value.entity_id == ""

    def test_orphan_fails_whole_listing(self, store, api):
        """Um órfão derruba a listagem inteira, sem resultado parcial."""
        api.sheets["Stolovi"].append(["4", "Izgubljen", "2", "9"])

        with pytest.raises(OrphanedReferenceError):
            store.tables.find_all()


class TestReservationTables:
    """Reserva <-> mesas através de RezervacijeStolovi."""

    def test_reservation_resolves_tables(self, store):
        """A reserva traz as mesas das suas arestas, cada uma com a sala."""
        reservation = store.reservations.find("1")

        assert reservation.reserved_on == date(2025, 2, 14)
        assert [table.id for table in reservation.tables] == ["1", "3"]
        assert reservation.tables[1].room.name is RoomName.TAVERNA

    def test_orphaned_edge(self, store, api):
        """Aresta para mesa inexistente é erro fatal."""
        api.sheets["RezervacijeStolovi"].append(["42", "1"])

        with pytest.raises(OrphanedReferenceError) as exc_info:
            store.reservations.find("1")

        assert exc_info.value.kind == "Sto"
        assert exc_info.value.entity_id == "42"

    def test_create_writes_edges(self, store, api):
        """Criar uma reserva grava uma aresta por mesa."""
        tables = [store.tables.find("2"), store.tables.find("3")]

        created = store.reservations.save(
            Reservation(id=None, reserved_on=date(2025, 3, 1), name="Jelena", tables=tables)
        )

        assert created.id == "2"
        assert api.data_rows("RezervacijeStolovi")[-2:] == [["2", "2"], ["3", "2"]]
        assert [table.id for table in store.reservations.find("2").tables] == ["2", "3"]

    def test_failed_edge_reports_created_reservation(self, store, api, no_sleep):
        """Falha ao gravar a aresta informa que a reserva já existe, sem criar outra."""
        original_append = api.append_rows

        def edges_unavailable(range_name, rows, value_input):
            if range_name.startswith("RezervacijeStolovi!"):
                raise ConnectionError("timeout")
            return original_append(range_name, rows, value_input)

        api.append_rows = edges_unavailable

        with pytest.raises(RepositoryError, match="Rezervacija 2") as exc_info:
            store.reservations.save(
                Reservation(id=None, name="Jelena", tables=[store.tables.find("2")])
            )

        assert isinstance(exc_info.value.__cause__, CreateFailedError)
        assert [row[0] for row in api.data_rows("Rezervacije")] == ["1", "2"]
        assert api.data_rows("RezervacijeStolovi") == [["1", "1"], ["3", "1"]]

    def test_update_keeps_edges(self, store, api):
        """Atualizar a reserva não mexe nas arestas."""
        reservation = store.reservations.find("1")
        reservation.name = "Petar Petrovic"
        reservation.tables = []

        store.reservations.save(reservation)

        assert store.reservations.find("1").name == "Petar Petrovic"
        assert len(api.data_rows("RezervacijeStolovi")) == 2

    def test_delete_removes_edges(self, store, api):
        """Remover a reserva remove também as suas arestas."""
        api.sheets["RezervacijeStolovi"].append(["2", "5"])

        store.reservations.delete("1")

        assert api.data_rows("Rezervacije") == []
        assert api.data_rows("RezervacijeStolovi") == [["2", "5"]]

    def test_table_without_reservations(self, store):
        """Uma mesa sem arestas continua resolvível."""
        assert isinstance(store.tables.find("2"), ClubTable)
