"""
Primitivas de acesso às abas: ler tudo, localizar por id, adicionar, atualizar e remover.

Convenções de posição:
    - "posição" é o índice 0-based de uma linha de dados, sem contar o cabeçalho;
    - a linha 1-based na planilha é posição + 2;
    - o índice 0-based usado pelo deleteDimension é posição + 1.

Posições mudam a cada remoção e precisam ser recalculadas antes de toda escrita.

Leituras e sobrescritas (idempotentes) passam pelo retry. O append e a remoção
por posição não são idempotentes e vão em uma única chamada: quem repete esses
passos é o ciclo do repositório, que relê o estado antes de tentar de novo.
"""
import logging
from typing import TYPE_CHECKING, Any

from ..errors import RepositoryError
from ._retry import RetryPolicy
from .api import RAW, USER_ENTERED, TabularApi
from .sheet_ids import SheetIdCache

if TYPE_CHECKING:
    from ..tables.binding import EntityKind

logger = logging.getLogger(__name__)

DEFAULT_RETRY = RetryPolicy()


def _read_data_rows(api: TabularApi, kind: "EntityKind", retry_policy: RetryPolicy) -> list[list[str]]:
    binding = kind.binding
    return retry_policy(lambda: api.read_range(binding.data_range))


def get_all_rows(
        api: TabularApi,
        kind: "EntityKind",
        retry_policy: RetryPolicy = DEFAULT_RETRY,
) -> list[Any]:
    """
    Lê e decodifica todas as linhas de dados da aba.

    Args:
        api (TabularApi): Superfície tabular.
        kind (EntityKind): Tipo de entidade da aba.
        retry_policy (RetryPolicy): Retry aplicado à leitura.

    Returns:
        list: Entidades na ordem em que a API devolveu as linhas.
    """
    logger.debug("Lendo todas as linhas da aba '%s'.", kind.binding.sheet_name)
    rows = _read_data_rows(api, kind, retry_policy)
    return [kind.codec.from_row(row) for row in rows]


def find_row_by_id(
        api: TabularApi,
        kind: "EntityKind",
        entity_id: str,
        retry_policy: RetryPolicy = DEFAULT_RETRY,
) -> tuple[Any, int] | None:
    """
    Localiza a primeira linha cuja primeira célula é igual a `entity_id`.

    Args:
        api (TabularApi): Superfície tabular.
        kind (EntityKind): Tipo de entidade da aba.
        entity_id (str): Identificador procurado.
        retry_policy (RetryPolicy): Retry aplicado à leitura.

    Returns:
        tuple[Any, int] | None:
            - (entidade, posição) da primeira linha encontrada
            - None se nenhuma linha tiver esse identificador
    """
    if not entity_id:
        logger.debug("Id vazio na aba '%s'; nenhuma linha corresponde.", kind.binding.sheet_name)
        return None

    rows = _read_data_rows(api, kind, retry_policy)

    for position, row in enumerate(rows):
        if row and row[0] == entity_id:
            logger.debug(
                "Id '%s' encontrado na aba '%s', posição %d.",
                entity_id,
                kind.binding.sheet_name,
                position,
            )
            return kind.codec.from_row(row), position

    logger.debug("Id '%s' não encontrado na aba '%s'.", entity_id, kind.binding.sheet_name)
    return None


def find_rows_by_column(
        api: TabularApi,
        kind: "EntityKind",
        field: str,
        value: str,
        retry_policy: RetryPolicy = DEFAULT_RETRY,
) -> list[tuple[Any, int]]:
    """
    Seleciona todas as linhas em que a coluna do campo `field` vale `value`.

    Args:
        api (TabularApi): Superfície tabular.
        kind (EntityKind): Tipo de entidade da aba.
        field (str): Campo cuja coluna será comparada.
        value (str): Valor esperado na célula.
        retry_policy (RetryPolicy): Retry aplicado à leitura.

    Returns:
        list[tuple[Any, int]]: Lista de (entidade, posição).
    """
    column_index = kind.codec.position_of(field)
    rows = _read_data_rows(api, kind, retry_policy)

    results: list[tuple[Any, int]] = []
    for position, row in enumerate(rows):
        cell_value = row[column_index] if column_index < len(row) else ""
        if cell_value == value:
            results.append((kind.codec.from_row(row), position))

    logger.debug(
        "%d linhas encontradas na aba '%s' com %s = '%s'.",
        len(results),
        kind.binding.sheet_name,
        field,
        value,
    )
    return results


def append_row(
        api: TabularApi,
        kind: "EntityKind",
        entity: Any,
        retry_policy: RetryPolicy = DEFAULT_RETRY,
) -> None:
    """
    Adiciona a entidade ao fim da aba.

    A linha inteira é escrita como RAW. Se a aba tem coluna rica e a célula
    correspondente não está vazia, uma segunda escrita localiza a última linha
    (relendo a contagem) e sobrescreve só essa célula com USER_ENTERED, para que a
    planilha reconheça o valor como data. Entre as duas chamadas um leitor
    concorrente vê a linha nova com a data ainda em texto literal.

    Args:
        api (TabularApi): Superfície tabular.
        kind (EntityKind): Tipo de entidade da aba.
        entity (Any): Entidade a adicionar.
        retry_policy (RetryPolicy): Retry aplicado à correção da coluna rica.

    Raises:
        RepositoryError: Se a linha foi adicionada mas a correção da coluna rica falhou.
    """
    binding = kind.binding
    values = kind.codec.to_row(entity)

    logger.debug("Adicionando uma linha na aba '%s': %s", binding.sheet_name, values)
    api.append_rows(binding.table_range, [values], value_input=RAW)

    if binding.rich_column is not None and values[binding.rich_column]:
        try:
            retry_policy(lambda: _patch_rich_cell(api, kind, values[binding.rich_column]))
        except Exception as e:
            # A linha já existe: repetir o append duplicaria a entidade
            entity_id = getattr(entity, kind.id_field) if kind.id_field else values
            logger.error(
                "Linha de %s com id %s adicionada, mas a célula %s ficou como texto: %s",
                kind.name,
                entity_id,
                binding.rich_letter,
                str(e),
            )
            raise RepositoryError(
                f"{kind.name} com id {entity_id} foi adicionado(a), mas a data não foi gravada como data."
            ) from e

    logger.debug("Linha adicionada com sucesso na aba '%s'.", binding.sheet_name)


def _patch_rich_cell(api: TabularApi, kind: "EntityKind", value: str) -> None:
    binding = kind.binding
    # Cabeçalho incluso: a contagem é o número 1-based da última linha
    last_row_number = len(api.read_range(binding.table_range)) or 1
    target = binding.rich_cell(last_row_number)
    logger.debug("Reescrevendo '%s' como USER_ENTERED: %s", target, value)
    api.write_range(target, [[value]], value_input=USER_ENTERED)


def update_row(
        api: TabularApi,
        kind: "EntityKind",
        position: int,
        entity: Any,
        retry_policy: RetryPolicy = DEFAULT_RETRY,
) -> None:
    """
    Sobrescreve a linha na posição dada. A coluna rica vai como RAW junto com o resto.

    Args:
        api (TabularApi): Superfície tabular.
        kind (EntityKind): Tipo de entidade da aba.
        position (int): Posição 0-based da linha de dados.
        entity (Any): Novo conteúdo.
        retry_policy (RetryPolicy): Retry aplicado à escrita.
    """
    binding = kind.binding
    values = kind.codec.to_row(entity)
    cell_range = binding.row_range(position + 2)

    logger.debug("Atualizando '%s' para: %s", cell_range, values)
    retry_policy(lambda: api.write_range(cell_range, [values], value_input=RAW))
    logger.debug("Linha atualizada com sucesso: '%s'.", cell_range)


def delete_row(
        api: TabularApi,
        kind: "EntityKind",
        position: int,
        sheet_ids: SheetIdCache,
) -> None:
    """
    Remove fisicamente a linha na posição dada; as linhas abaixo sobem uma posição.

    Args:
        api (TabularApi): Superfície tabular.
        kind (EntityKind): Tipo de entidade da aba.
        position (int): Posição 0-based da linha de dados.
        sheet_ids (SheetIdCache): Cache de sheetIds do repositório.
    """
    binding = kind.binding
    sheet_id = sheet_ids.resolve(binding.sheet_name)
    start_index = position + 1

    logger.debug(
        "Removendo a posição %d da aba '%s' (sheetId %d).",
        position,
        binding.sheet_name,
        sheet_id,
    )
    api.delete_row_range(sheet_id, start_index, start_index + 1)
    logger.debug("Linha removida com sucesso da aba '%s'.", binding.sheet_name)
