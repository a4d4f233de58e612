"""
Serviços de domínio: camada fina sobre os repositórios.
"""
import dataclasses
import logging
from typing import Any

from .errors import EntityNotFoundError, OrphanedReferenceError
from .tables import (
    ClubTable,
    EntityRepository,
    Member,
    MembershipPayment,
    Reservation,
    Room,
    User,
)

logger = logging.getLogger(__name__)


def _merge(repository: EntityRepository, entity_id: str, changes: dict[str, Any]):
    entity = repository.find(entity_id)
    if entity is None:
        raise EntityNotFoundError(repository.kind.name, entity_id)
    # O identificador não muda depois de atribuído
    changes.pop(repository.id_field, None)
    return repository.save(dataclasses.replace(entity, **changes))


class MemberService:
    def __init__(self, members: EntityRepository[Member]):
        self.members = members

    def get_members(self) -> list[Member]:
        return self.members.find_all()

    def get_member(self, member_number: str) -> Member | None:
        return self.members.find(member_number)

    def create_member(self, full_name: str, **fields: Any) -> Member:
        return self.members.save(Member(member_number=None, full_name=full_name, **fields))

    def update_member(self, member_number: str, **changes: Any) -> Member:
        return _merge(self.members, member_number, changes)

    def delete_member(self, member_number: str) -> None:
        self.members.delete(member_number)


class PaymentService:
    def __init__(self, payments: EntityRepository[MembershipPayment]):
        self.payments = payments

    def get_payments(self) -> list[MembershipPayment]:
        return self.payments.find_all()

    def get_payment(self, payment_id: str) -> MembershipPayment | None:
        return self.payments.find(payment_id)

    def create_payment(self, member_number: str, recorded_by: str, **fields: Any) -> MembershipPayment:
        payment = MembershipPayment(
            id=None, member_number=member_number, recorded_by=recorded_by, **fields
        )
        return self.payments.save(payment)

    def update_payment(self, payment_id: str, **changes: Any) -> MembershipPayment:
        return _merge(self.payments, payment_id, changes)

    def delete_payment(self, payment_id: str) -> None:
        self.payments.delete(payment_id)


class RoomService:
    def __init__(self, rooms: EntityRepository[Room]):
        self.rooms = rooms

    def get_rooms(self) -> list[Room]:
        return self.rooms.find_all()

    def get_room(self, room_id: str) -> Room | None:
        return self.rooms.find(room_id)


class ReservationService:
    def __init__(
            self,
            reservations: EntityRepository[Reservation],
            tables: EntityRepository[ClubTable],
    ):
        self.reservations = reservations
        self.tables = tables

    def get_reservations(self) -> list[Reservation]:
        return self.reservations.find_all()

    def get_reservation(self, reservation_id: str) -> Reservation | None:
        return self.reservations.find(reservation_id)

    def create_reservation(self, table_ids: list[str], **fields: Any) -> Reservation:
        """
        Cria uma reserva para as mesas informadas.

        As mesas são resolvidas antes da criação, para que nenhuma aresta aponte
        para uma mesa inexistente.

        Raises:
            OrphanedReferenceError: Se alguma mesa não existir.
        """
        tables: list[ClubTable] = []
        for table_id in table_ids:
            table = self.tables.find(table_id)
            if table is None:
                raise OrphanedReferenceError("Sto", table_id, "nova Rezervacija")
            tables.append(table)

        reservation = Reservation(id=None, tables=tables, **fields)
        return self.reservations.save(reservation)

    def delete_reservation(self, reservation_id: str) -> None:
        self.reservations.delete(reservation_id)


class UserService:
    def __init__(self, users: EntityRepository[User]):
        self.users = users

    def get_user_by_username(self, username: str) -> User | None:
        return self.users.find(username)
