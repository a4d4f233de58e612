"""
Montagem de referências entre entidades (emulação de joins).

- Mesa -> Sala (to-one): a sala vem "rasa", sem as próprias mesas, para que a
  montagem não entre em ciclo sala -> mesas -> sala.
- Sala -> Mesas (um-para-muitos): mesas cujo ID Sobe é o id da sala.
- Reserva -> Mesas (muitos-para-muitos): arestas de RezervacijeStolovi, cada
  lado distante resolvido pelo repositório de mesas.

Uma referência que não resolve é um erro de consistência fatal
(`OrphanedReferenceError`), nunca um None silencioso.
"""
import dataclasses
import logging

from ..errors import CreateFailedError, OrphanedReferenceError, RepositoryError
from .repository import AssociationRepository, EntityHooks, EntityRepository
from .reservation_schema import Reservation, ReservationTable
from .room_schema import ClubTable, Room

logger = logging.getLogger(__name__)


def tables_for_room(tables: EntityRepository[ClubTable], room: Room) -> list[ClubTable]:
    """
    Mesas de uma sala, cada uma apontando para a própria sala (sem mesas).
    """
    shallow_room = dataclasses.replace(room, tables=[])
    return [
        dataclasses.replace(table, room=shallow_room)
        for table in tables.find_all(resolve=False)
        if table.room_id == room.id
    ]


def room_hooks(tables: EntityRepository[ClubTable]) -> EntityHooks[Room]:
    def resolve(room: Room) -> Room:
        return dataclasses.replace(room, tables=tables_for_room(tables, room))

    return EntityHooks(resolve=resolve)


def club_table_hooks(rooms: EntityRepository[Room]) -> EntityHooks[ClubTable]:
    def resolve(table: ClubTable) -> ClubTable:
        room = rooms.find(table.room_id, resolve=False)
        if room is None:
            logger.error("Sto %s aponta para a Soba %s, que não existe.", table.id, table.room_id)
            raise OrphanedReferenceError("Soba", table.room_id, f"Sto {table.id}")
        return dataclasses.replace(table, room=room)

    return EntityHooks(resolve=resolve)


def tables_for_reservation(
        tables: EntityRepository[ClubTable],
        edges: AssociationRepository[ReservationTable],
        reservation: Reservation,
) -> list[ClubTable]:
    """
    Resolve as mesas de uma reserva através da aba de associação.

    Raises:
        OrphanedReferenceError: Se alguma aresta apontar para uma mesa inexistente.
    """
    resolved: list[ClubTable] = []
    for edge in edges.find_all_by("reservation_id", reservation.id):
        table = tables.find(edge.table_id)
        if table is None:
            logger.error(
                "Rezervacija %s aponta para o Sto %s, que não existe.",
                reservation.id,
                edge.table_id,
            )
            raise OrphanedReferenceError("Sto", edge.table_id, f"Rezervacija {reservation.id}")
        resolved.append(table)
    return resolved


def reservation_hooks(
        tables: EntityRepository[ClubTable],
        edges: AssociationRepository[ReservationTable],
) -> EntityHooks[Reservation]:
    def resolve(reservation: Reservation) -> Reservation:
        return dataclasses.replace(
            reservation, tables=tables_for_reservation(tables, edges, reservation)
        )

    def after_create(reservation: Reservation) -> None:
        for table in reservation.tables:
            try:
                edges.save(ReservationTable(table_id=table.id, reservation_id=reservation.id))
            except CreateFailedError as e:
                logger.error(
                    "Rezervacija %s criada, mas a associação com o Sto %s falhou.",
                    reservation.id,
                    table.id,
                )
                raise RepositoryError(
                    f"Rezervacija {reservation.id} foi criada, mas a associação com o Sto "
                    f"{table.id} não foi gravada."
                ) from e

    def before_delete(reservation: Reservation) -> None:
        edges.delete_all_by("reservation_id", reservation.id)

    return EntityHooks(resolve=resolve, after_create=after_create, before_delete=before_delete)
