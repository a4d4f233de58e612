"""
Exemplo básico de uso do clubsheets.

Este script conecta-se à planilha configurada no .env, cadastra um sócio,
registra a mensalidade dele e lista as salas com suas mesas.
"""

from datetime import date

from dotenv import load_dotenv

from clubsheets import Config, Store
from clubsheets.services import MemberService, PaymentService, RoomService
from clubsheets.tables import MemberStatus, PaymentType

# Carrega variáveis de ambiente do arquivo .env
load_dotenv()


def main():
    """Função principal."""
    config = Config()
    store = Store.from_config(config)

    members = MemberService(store.members)
    payments = PaymentService(store.payments)
    rooms = RoomService(store.rooms)

    print("=" * 60)
    print(f"📊 Planilha: {config.spreadsheet_id}")
    print("=" * 60)

    # O número de sócio é gerado pelo store (maior existente + 1)
    member = members.create_member(
        "Marko Markovic",
        email="marko@example.com",
        phone="641234567",
        birth_date=date(1990, 3, 5),
    )
    print(f"✅ Sócio criado: {member.member_number} {member.full_name}")

    payment = payments.create_payment(
        member.member_number,
        recorded_by="admin",
        paid_on=date.today(),
        payment_type=PaymentType.MESECNA,
    )
    print(f"💶 Mensalidade registrada: #{payment.id}")

    members.update_member(member.member_number, status=MemberStatus.AKTIVAN)
    print(f"🔄 Status atualizado para {MemberStatus.AKTIVAN.value}")

    print("\n🏠 Salas:")
    for room in rooms.get_rooms():
        name = room.name.value if room.name else "?"
        print(f"  {name} (andar {room.floor})")
        for table in room.tables:
            print(f"    - {table.description}: {table.seats} lugares")


if __name__ == "__main__":
    main()
