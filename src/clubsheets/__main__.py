"""Ponto de entrada para execução do módulo como script: lista as entidades de uma aba."""

import logging
import sys

from .config import Config
from .store import Store

USAGE = "Uso: python -m clubsheets [-v|--verbose] {members|payments|rooms|tables|reservations|users}"


def _describe(kind: str, entity) -> str:
    """Resumo de uma linha por entidade."""
    if kind == "members":
        return f"{entity.member_number}  {entity.full_name}  [{entity.status.value}]"
    if kind == "payments":
        return f"{entity.id}  {entity.member_number}  {entity.paid_on}  {entity.payment_type.value}"
    if kind == "rooms":
        name = entity.name.value if entity.name else "?"
        return f"{entity.id}  {name}  (andar {entity.floor}, {len(entity.tables)} mesas)"
    if kind == "tables":
        return f"{entity.id}  {entity.description}  {entity.seats} lugares  sala {entity.room_id}"
    if kind == "reservations":
        tables = ", ".join(table.id for table in entity.tables)
        return f"{entity.id}  {entity.reserved_on}  {entity.name}  mesas: {tables}"
    return f"{entity.username}  {entity.name} {entity.surname}"


def main(argv: list[str] | None = None) -> int:
    """Função principal: lista um tipo de entidade da planilha configurada."""
    args = list(sys.argv[1:] if argv is None else argv)
    verbose = any(arg in ("-v", "--verbose") for arg in args)
    args = [arg for arg in args if arg not in ("-v", "--verbose")]

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return 1

    kind = args[0]
    try:
        store = Store.from_config(Config())
        repository = getattr(store, kind, None)
        if kind == "reservation_tables" or repository is None:
            print(USAGE, file=sys.stderr)
            return 1

        entities = repository.find_all()
        for entity in entities:
            print(_describe(kind, entity))
        print(f"\n{len(entities)} registro(s).")
        return 0

    except Exception as e:
        print(f"Erro fatal: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
