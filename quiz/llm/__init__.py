"""Quiz LLM - Gateway para o provider de conteudo generativo."""

from .gateway import ContentGateway, extract_json

__all__ = ["ContentGateway", "extract_json"]
