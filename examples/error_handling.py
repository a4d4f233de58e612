"""
Exemplo: Demonstração dos erros do store.

Roda sobre uma planilha em memória, sem credenciais, e mostra como cada
situação de erro aparece para quem usa os repositórios.
"""

import logging

from clubsheets import memory_api, open_store
from clubsheets.errors import (
    CreateFailedError,
    EntityNotFoundError,
    OrphanedReferenceError,
    RepositoryError,
)
from clubsheets.gateway import RetryPolicy
from clubsheets.tables import Room, RoomName


def main():
    """
    Função principal que demonstra o tratamento de erros.

    O store:
    1. Repete chamadas que falham com backoff exponencial
    2. Embrulha falhas externas persistentes em RepositoryError
    3. Trata referências quebradas como erro fatal (OrphanedReferenceError)
    4. Nunca cria uma linha ao atualizar um id inexistente
    """
    logging.basicConfig(level=logging.INFO)

    api = memory_api({
        "Sobe": [["1", "Arkada", "0"]],
        "Stolovi": [["1", "Veliki sto", "8", "1"], ["2", "Izgubljen", "4", "9"]],
    })
    store = open_store(api, RetryPolicy(tries=3, delay=0.01))

    print("=" * 70)
    print("Exemplo: Error Handling")
    print("=" * 70)

    try:
        store.rooms.save(Room(id="42", name=RoomName.TAVERNA))
    except EntityNotFoundError as e:
        print(f"Atualização recusada: {e}")

    try:
        store.tables.find("2")
    except OrphanedReferenceError as e:
        print(f"Referência quebrada: {e}")

    # Falhas temporárias são absorvidas pelo retry
    api.fail("read_range", times=2)
    print(f"Com 2 falhas temporárias: {store.rooms.find('1', resolve=False)}")

    api.fail("read_range", times=3)
    try:
        store.rooms.find("1")
    except RepositoryError as e:
        print(f"Falha persistente: {e} (causa: {e.__cause__!r})")

    api.fail("append_rows", times=3)
    try:
        store.rooms.save(Room(id=None, name=RoomName.DUNGEON, floor=-1))
    except CreateFailedError as e:
        print(f"Criação abandonada: {e}")


if __name__ == "__main__":
    main()
