"""Content Gateway - Acesso ao provider de conteudo generativo.

Envia um prompt via ``claude_agent_sdk.query`` e devolve JSON estruturado
ou texto puro. Nao guarda estado de negocio; uma instancia e criada no
startup e compartilhada entre requests.
"""

import asyncio
import json
import logging
import re
from typing import Any

from claude_agent_sdk import ClaudeAgentOptions
from claude_agent_sdk import query as sdk_query

from ..errors import ProviderError, ProviderTimeoutError
from ..prompts import INSIGHTS_SYSTEM_PROMPT, QUIZ_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def extract_json(text: str) -> dict[str, Any]:
    """Extrai o objeto JSON de uma resposta do modelo.

    Aceita JSON puro, bloco markdown (```json ... ```) ou texto com
    preambulo antes do objeto.

    Raises:
        ValueError: Se nao houver objeto JSON valido no texto
    """
    candidate = text.strip()

    fenced = _FENCE_RE.search(candidate)
    if fenced:
        candidate = fenced.group(1).strip()

    if not candidate.startswith("{"):
        start = candidate.find("{")
        end = candidate.rfind("}")
        if start == -1 or end <= start:
            raise ValueError("No JSON object found in response")
        candidate = candidate[start : end + 1]

    data = json.loads(candidate)
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object, got {type(data).__name__}")
    return data


class ContentGateway:
    """Gateway para o provider generativo (Claude Agent SDK).

    Dois modos:
        - ``generate_content``: resposta JSON -> dict
        - ``generate_text``: resposta em texto puro

    Toda chamada e limitada por ``timeout`` segundos; estourar o limite
    e fatal para a chamada (``ProviderTimeoutError``).

    Example:
        >>> gateway = ContentGateway(model="haiku", timeout=30.0)
        >>> data = await gateway.generate_content("Gere um quiz...")
    """

    DEFAULT_MODEL = "haiku"
    DEFAULT_TIMEOUT = 30.0

    def __init__(self, model: str = DEFAULT_MODEL, timeout: float = DEFAULT_TIMEOUT):
        self.model = model
        self.timeout = timeout

    async def _collect(self, prompt: str, system_prompt: str) -> str:
        options = ClaudeAgentOptions(
            model=self.model,
            system_prompt=system_prompt,
            max_turns=1,
        )

        text = ""
        async for message in sdk_query(prompt=prompt, options=options):
            if hasattr(message, "content") and isinstance(message.content, list):
                for block in message.content:
                    if hasattr(block, "text"):
                        text += block.text
        return text

    async def _complete(self, prompt: str, system_prompt: str) -> str:
        try:
            return await asyncio.wait_for(
                self._collect(prompt, system_prompt), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Provider timeout apos {self.timeout}s (model={self.model})")
            raise ProviderTimeoutError(
                f"Content provider did not respond within {self.timeout}s"
            ) from e
        except ProviderError:
            raise
        except Exception as e:
            logger.exception(f"Erro na chamada ao provider (model={self.model})")
            raise ProviderError(f"Content provider call failed: {e}") from e

    async def generate_content(self, prompt: str) -> dict[str, Any]:
        """Gera resposta estruturada (JSON).

        Raises:
            ProviderError: Resposta vazia ou sem JSON valido
            ProviderTimeoutError: Timeout estourado
        """
        text = await self._complete(prompt, QUIZ_SYSTEM_PROMPT)
        if not text.strip():
            raise ProviderError("Empty response from content provider")

        try:
            return extract_json(text)
        except ValueError as e:
            logger.warning(f"Resposta do provider sem JSON valido: {text[:200]!r}")
            raise ProviderError("Content provider returned malformed JSON") from e

    async def generate_text(self, prompt: str) -> str:
        """Gera resposta em texto puro (pode ser vazia)."""
        text = await self._complete(prompt, INSIGHTS_SYSTEM_PROMPT)
        return text.strip()
