"""Retry - Combinador de tentativas limitadas.

Nao faz log: observabilidade entra pelo hook ``on_failure``.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

FailureHook = Callable[[int, Exception], None]


@dataclass
class RetryOutcome(Generic[T]):
    """Resultado de uma execucao com retry.

    Attributes:
        value: Valor da tentativa aceita (None se todas falharam)
        succeeded: Se alguma tentativa foi aceita
        errors: Erros das tentativas rejeitadas, em ordem
    """

    value: T | None = None
    succeeded: bool = False
    errors: list[Exception] = field(default_factory=list)

    @property
    def attempts(self) -> int:
        return len(self.errors) + (1 if self.succeeded else 0)

    @property
    def last_error(self) -> Exception | None:
        return self.errors[-1] if self.errors else None


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    attempts: int,
    on_failure: FailureHook | None = None,
) -> RetryOutcome[T]:
    """Executa ``operation`` ate ``attempts`` vezes.

    Uma tentativa e aceita quando retorna sem excecao; qualquer ``Exception``
    e registrada e a proxima tentativa e feita. Cancelamento nao e capturado.

    Args:
        operation: Corrotina sem argumentos (chamada a cada tentativa)
        attempts: Numero maximo de tentativas (>= 1)
        on_failure: Hook chamado com (numero_da_tentativa, erro)

    Returns:
        RetryOutcome com o valor aceito ou a lista de erros
    """
    if attempts < 1:
        raise ValueError("attempts must be >= 1")

    outcome: RetryOutcome[T] = RetryOutcome()
    for attempt in range(1, attempts + 1):
        try:
            outcome.value = await operation()
        except Exception as e:
            outcome.errors.append(e)
            if on_failure is not None:
                on_failure(attempt, e)
            continue
        outcome.succeeded = True
        break
    return outcome
