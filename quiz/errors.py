"""Quiz Errors - Taxonomia de erros do ciclo de vida do quiz.

Cada erro carrega o status HTTP correspondente e uma mensagem publica.
Erros internos (provider, banco, integridade) expoem apenas uma mensagem
generica; o detalhe fica no log.
"""

GENERIC_FAILURE = "An internal error occurred. Please try again later."


class QuizError(Exception):
    """Erro base do modulo de quiz."""

    status_code = 500
    expose_message = False

    def __init__(self, message: str = GENERIC_FAILURE):
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        """Mensagem segura para retornar ao cliente."""
        return self.message if self.expose_message else GENERIC_FAILURE


class ValidationError(QuizError):
    """Entrada do cliente ausente ou malformada (corrigivel pelo usuario)."""

    status_code = 400
    expose_message = True


class NotFoundError(QuizError):
    """Nenhuma linha para o id/sessao informado."""

    status_code = 404
    expose_message = True


class AccessDeniedError(QuizError):
    """Codigo de acesso nao confere com o da sessao."""

    status_code = 401
    expose_message = True


class GenerationError(QuizError):
    """Provider retornou um quiz fora do schema (sem retry na geracao)."""


class GradingError(QuizError):
    """Provider nao produziu gradedAnswers validos apos as tentativas."""

    expose_message = True


class PersistenceError(QuizError):
    """Falha de leitura/escrita no banco."""


class InternalError(QuizError):
    """Falha de integridade de dados (ex: sessao sem codigo de acesso)."""


class ProviderError(QuizError):
    """Falha na chamada ao provider de conteudo generativo."""


class ProviderTimeoutError(ProviderError):
    """Provider nao respondeu dentro do timeout configurado."""
