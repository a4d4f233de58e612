"""
Repositório genérico de entidades sobre uma aba da planilha.

Um único `EntityRepository` atende todos os tipos: o que muda entre eles é o
descritor (`EntityKind`: aba, codec, campo identificador) e os ganchos
(`EntityHooks`) que montam referências para outras entidades. Não há locks nem
transações: toda escrita segue ler estado atual -> calcular -> escrever, e a
criação repete o ciclo inteiro quando falha.
"""
import dataclasses
import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

from ..errors import (
    CreateFailedError,
    EntityNotFoundError,
    RepositoryError,
    StoreError,
)
from ..gateway import (
    RetryPolicy,
    SheetIdCache,
    TabularApi,
    append_row,
    delete_row,
    find_row_by_id,
    find_rows_by_column,
    get_all_rows,
    update_row,
)
from .binding import EntityKind
from .ids import next_id

logger = logging.getLogger(__name__)

EntityType = TypeVar("EntityType")

CREATE_ATTEMPTS = 3
CREATE_DELAY_SECONDS = 0.1


@dataclasses.dataclass
class EntityHooks(Generic[EntityType]):
    """
    Funções injetadas por tipo de entidade.

    Attributes:
        resolve: Monta as entidades relacionadas depois da leitura (emulação de join).
        after_create: Executada depois que a linha nova existe (ex.: gravar associações).
        before_delete: Executada antes de remover a linha (ex.: apagar associações).
    """
    resolve: Callable[[EntityType], EntityType] | None = None
    after_create: Callable[[EntityType], None] | None = None
    before_delete: Callable[[EntityType], None] | None = None


class _SheetRepository(Generic[EntityType]):
    """Infraestrutura comum: cache de sheetIds, retry e embrulho de falhas."""

    def __init__(
            self,
            api: TabularApi,
            kind: EntityKind[EntityType],
            retry_policy: RetryPolicy | None = None,
            create_attempts: int = CREATE_ATTEMPTS,
            create_delay: float = CREATE_DELAY_SECONDS,
    ):
        self.api = api
        self.kind = kind
        self.retry_policy = retry_policy or RetryPolicy()
        self.create_attempts = create_attempts
        self.create_delay = create_delay
        self.sheet_ids = SheetIdCache(api, self.retry_policy)

    @contextmanager
    def _failure_context(self, message: str) -> Iterator[None]:
        """
        Erros do próprio store passam intactos; qualquer outra falha vira RepositoryError.
        """
        try:
            yield
        except StoreError:
            raise
        except Exception as e:
            logger.error("%s: %s", message, str(e), exc_info=True)
            raise RepositoryError(message) from e

    def _append_with_retry(self, build: Callable[[], EntityType]) -> EntityType:
        """
        Repete o ciclo inteiro "ler estado -> montar a entidade -> adicionar".

        Uma falha no append refaz também a leitura, de modo que um id calculado a
        partir de um estado velho não é reaproveitado.

        Args:
            build (Callable): Lê o que for preciso e devolve a entidade a adicionar.

        Returns:
            A entidade efetivamente adicionada.

        Raises:
            CreateFailedError: Depois de `create_attempts` tentativas sem sucesso.
            RepositoryError: Se a linha foi adicionada mas a escrita da coluna rica falhou.
        """
        for attempt in range(1, self.create_attempts + 1):
            try:
                entity = build()
                append_row(self.api, self.kind, entity, self.retry_policy)
                return entity

            except StoreError:
                # O append já aconteceu; repetir o ciclo criaria uma segunda linha
                raise

            except Exception as e:
                if attempt == self.create_attempts:
                    logger.error(
                        "Criação de %s falhou após %d tentativas: %s",
                        self.kind.name,
                        self.create_attempts,
                        str(e),
                        exc_info=True,
                    )
                    raise CreateFailedError(self.kind.name, self.create_attempts) from e

                wait = (2 ** attempt) * self.create_delay
                logger.warning(
                    "Tentativa %d de criar %s falhou: %s. Refazendo em %.2f segundos...",
                    attempt,
                    self.kind.name,
                    str(e),
                    wait,
                )
                time.sleep(wait)

        raise CreateFailedError(self.kind.name, self.create_attempts)


class EntityRepository(_SheetRepository[EntityType]):
    """
    Contrato por tipo de entidade: find, find_all, save e delete.

    Args:
        api (TabularApi): Superfície tabular.
        kind (EntityKind): Descritor do tipo.
        hooks (EntityHooks | None): Ganchos de montagem e manutenção de relações.
        retry_policy (RetryPolicy | None): Retry das chamadas remotas.
        create_attempts (int): Tentativas do ciclo de criação.
        create_delay (float): Atraso base do ciclo de criação, em segundos.
    """

    def __init__(
            self,
            api: TabularApi,
            kind: EntityKind[EntityType],
            hooks: EntityHooks[EntityType] | None = None,
            retry_policy: RetryPolicy | None = None,
            create_attempts: int = CREATE_ATTEMPTS,
            create_delay: float = CREATE_DELAY_SECONDS,
    ):
        if kind.id_field is None:
            raise ValueError(f"{kind.name} não tem campo identificador; use AssociationRepository.")
        super().__init__(api, kind, retry_policy, create_attempts, create_delay)
        self.hooks: EntityHooks[EntityType] = hooks or EntityHooks()

    @property
    def id_field(self) -> str:
        return self.kind.id_field

    def _resolve(self, entity: EntityType) -> EntityType:
        if self.hooks.resolve is None:
            return entity
        return self.hooks.resolve(entity)

    def find(self, entity_id: str, resolve: bool = True) -> EntityType | None:
        """
        Busca uma entidade pelo identificador.

        Args:
            entity_id (str): Identificador.
            resolve (bool): Se False, devolve a entidade sem montar as relações.

        Returns:
            EntityType | None: A entidade, ou None se não existir.

        Raises:
            OrphanedReferenceError: Se uma referência da entidade não existir.
        """
        with self._failure_context(f"Falha ao buscar {self.kind.name} com id {entity_id}"):
            located = find_row_by_id(self.api, self.kind, entity_id, self.retry_policy)

        if located is None:
            return None

        entity, _ = located
        return self._resolve(entity) if resolve else entity

    def find_all(self, resolve: bool = True) -> list[EntityType]:
        """
        Lista todas as entidades da aba.

        Args:
            resolve (bool): Se False, devolve as entidades sem montar as relações.
        """
        with self._failure_context(f"Falha ao listar {self.kind.name}"):
            entities = get_all_rows(self.api, self.kind, self.retry_policy)

        if not resolve:
            return entities
        return [self._resolve(entity) for entity in entities]

    def save(self, entity: EntityType) -> EntityType:
        """
        Cria a entidade se o identificador for None; caso contrário, atualiza.
        """
        if getattr(entity, self.id_field) is None:
            return self.create(entity)
        return self.update(entity)

    def create(self, entity: EntityType) -> EntityType:
        """
        Cria a entidade com o próximo identificador livre.

        Returns:
            EntityType: Cópia da entidade com o identificador atribuído.

        Raises:
            CreateFailedError: Se todas as tentativas falharem.
        """

        def build() -> EntityType:
            existing = get_all_rows(self.api, self.kind, self.retry_policy)
            new_id = next_id(existing, self.id_field)
            logger.debug("Próximo id de %s: %s", self.kind.name, new_id)
            return dataclasses.replace(entity, **{self.id_field: new_id})

        created = self._append_with_retry(build)
        logger.info("%s criado(a) com id %s.", self.kind.name, getattr(created, self.id_field))

        if self.hooks.after_create is not None:
            self.hooks.after_create(created)
        return created

    def update(self, entity: EntityType) -> EntityType:
        """
        Sobrescreve a linha da entidade. Nunca cria uma linha nova.

        Raises:
            EntityNotFoundError: Se não existir linha com o identificador.
        """
        entity_id = getattr(entity, self.id_field)
        if not entity_id:
            raise RepositoryError(f"Não é possível atualizar {self.kind.name} sem identificador.")

        message = f"Falha ao atualizar {self.kind.name} com id {entity_id}"
        with self._failure_context(message):
            located = find_row_by_id(self.api, self.kind, entity_id, self.retry_policy)

        if located is None:
            logger.warning("%s com id %s não existe; nada foi atualizado.", self.kind.name, entity_id)
            raise EntityNotFoundError(self.kind.name, entity_id)

        _, position = located
        with self._failure_context(message):
            update_row(self.api, self.kind, position, entity, self.retry_policy)

        logger.info("%s com id %s atualizado(a).", self.kind.name, entity_id)
        return entity

    def delete(self, entity_id: str) -> None:
        """
        Remove a entidade. Um identificador inexistente é um no-op.
        """
        message = f"Falha ao remover {self.kind.name} com id {entity_id}"
        with self._failure_context(message):
            located = find_row_by_id(self.api, self.kind, entity_id, self.retry_policy)

        if located is None:
            logger.debug("%s com id %s não existe; remoção ignorada.", self.kind.name, entity_id)
            return

        entity, position = located
        if self.hooks.before_delete is not None:
            self.hooks.before_delete(entity)

        with self._failure_context(message):
            delete_row(self.api, self.kind, position, self.sheet_ids)

        logger.info("%s com id %s removido(a).", self.kind.name, entity_id)


class AssociationRepository(_SheetRepository[EntityType]):
    """
    Repositório de registros de associação (arestas muitos-para-muitos) sem id próprio.

    Os registros são encontrados varrendo a coluna de um dos lados do par.
    """

    def save(self, edge: EntityType) -> EntityType:
        """
        Adiciona a aresta ao fim da aba.

        Raises:
            CreateFailedError: Se todas as tentativas falharem.
        """
        saved = self._append_with_retry(lambda: edge)
        logger.debug("Associação %s adicionada: %s", self.kind.name, saved)
        return saved

    def find_all(self) -> list[EntityType]:
        with self._failure_context(f"Falha ao listar {self.kind.name}"):
            return get_all_rows(self.api, self.kind, self.retry_policy)

    def find_all_by(self, field: str, value: str) -> list[EntityType]:
        """
        Lista as arestas cujo campo `field` vale `value`.
        """
        with self._failure_context(f"Falha ao buscar {self.kind.name} com {field} {value}"):
            matches = find_rows_by_column(self.api, self.kind, field, value, self.retry_policy)
        return [edge for edge, _ in matches]

    def delete_all_by(self, field: str, value: str) -> int:
        """
        Remove todas as arestas cujo campo `field` vale `value`.

        A posição da próxima aresta é relida antes de cada remoção, já que toda
        remoção desloca as linhas de baixo.

        Returns:
            int: Quantidade de arestas removidas.
        """
        removed = 0
        with self._failure_context(f"Falha ao remover {self.kind.name} com {field} {value}"):
            while True:
                matches = find_rows_by_column(self.api, self.kind, field, value, self.retry_policy)
                if not matches:
                    break
                _, position = matches[0]
                delete_row(self.api, self.kind, position, self.sheet_ids)
                removed += 1

        if removed:
            logger.info("%d associação(ões) %s removida(s) para %s %s.", removed, self.kind.name, field, value)
        return removed
