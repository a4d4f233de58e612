"""
Exceções levantadas pelo entity store.

Hierarquia:
    StoreError
    ├── EntityNotFoundError     : update de um identificador inexistente
    ├── TableNotFoundError      : aba ausente na planilha
    ├── OrphanedReferenceError  : referência estrangeira sem alvo
    ├── CreateFailedError       : criação esgotou as tentativas
    └── RepositoryError         : falha externa embrulhada com contexto
"""


class StoreError(Exception):
    """Base para todos os erros levantados pelo próprio store."""


class EntityNotFoundError(StoreError):
    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} com id '{entity_id}' não encontrado(a).")


class TableNotFoundError(StoreError):
    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f"Aba '{sheet_name}' não encontrada na planilha.")


class OrphanedReferenceError(StoreError):
    """
    Uma referência (to-one ou to-many) aponta para uma entidade que não existe mais.

    Attributes:
        kind (str): Tipo da entidade referenciada.
        entity_id (str): Identificador que não foi resolvido.
        referenced_by (str): Descrição de quem guarda a referência.
    """

    def __init__(self, kind: str, entity_id: str, referenced_by: str):
        self.kind = kind
        self.entity_id = entity_id
        self.referenced_by = referenced_by
        super().__init__(
            f"{kind} com id '{entity_id}' referenciado(a) por {referenced_by} não existe."
        )


class CreateFailedError(StoreError):
    def __init__(self, kind: str, attempts: int):
        self.kind = kind
        self.attempts = attempts
        super().__init__(f"Falha ao criar {kind} após {attempts} tentativas.")


class RepositoryError(StoreError):
    """Falha externa (rede, API, dados) embrulhada com a operação e o identificador."""
