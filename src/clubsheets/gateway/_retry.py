import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

ReturnType = TypeVar("ReturnType")

# Jitter máximo somado a cada espera, em segundos
JITTER_MAX_SECONDS = 0.1


@dataclass(frozen=True)
class RetryPolicy:
    """
    Parâmetros do retry aplicados a todas as chamadas remotas de um repositório.

    Attributes:
        tries (int): Número máximo de tentativas por chamada.
        delay (float): Atraso base em segundos, dobrado a cada falha.
    """
    tries: int = 3
    delay: float = 0.1

    def __call__(self, function: Callable[[], ReturnType]) -> ReturnType:
        return retry(function, tries=self.tries, delay=self.delay)


def backoff_delay(attempt: int, delay: float) -> float:
    """
    Calcula a espera após a tentativa `attempt` (1-based): delay * 2^attempt + jitter.

    Args:
        attempt (int): Número da tentativa que acabou de falhar.
        delay (float): Atraso base em segundos.

    Returns:
        float: Tempo de espera em segundos.
    """
    return delay * (2 ** attempt) + random.uniform(0, JITTER_MAX_SECONDS)


def retry(
    function: Callable[[], ReturnType],
    tries: int = 3,
    delay: float = 0.1,
) -> ReturnType:
    """
    Executa uma função várias vezes com atraso exponencial e jitter entre as tentativas.

    Toda exceção é tratada como transiente: não há classificação de erros.
    Quem precisa de um erro fatal (ex.: entidade inexistente) deve verificar
    antes de chamar a operação através do retry.

    Args:
        function (Callable): A função a ser executada.
        tries (int): Número máximo de tentativas. Padrão é 3.
        delay (float): Atraso base em segundos. Padrão é 0.1.
    Returns:
        O resultado da função executada, se bem-sucedida.
    Raises:
        Exception: A última exceção, sem alterações, quando as tentativas se esgotam.
    """
    exception: Exception | None = None

    for attempt in range(1, tries + 1):
        try:
            return function()

        except Exception as e:
            exception = e
            if attempt == tries:
                logger.error(
                    "Todas as tentativas falharam após %d tentativas: %s",
                    tries,
                    str(e),
                    exc_info=True,
                )
                break

            wait = backoff_delay(attempt, delay)
            logger.warning(
                "Tentativa %d falhou com erro: %s. Retentando em %.2f segundos...",
                attempt,
                str(e),
                wait,
            )
            time.sleep(wait)

    assert exception is not None
    raise exception
