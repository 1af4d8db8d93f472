# =============================================================================
# CONFIGURACAO DO QUIZ SERVICE
# =============================================================================

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int, minimum: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Valor invalido para {name}={raw!r}, usando {default}")
        return default
    if minimum is not None and value < minimum:
        return minimum
    return value


def _env_float(name: str, default: float, minimum: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Valor invalido para {name}={raw!r}, usando {default}")
        return default
    if minimum is not None and value < minimum:
        return minimum
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class QuizConfig:
    """Configuracao do servico, lida do ambiente (.env suportado).

    Attributes:
        database_path: Arquivo SQLite
        frontend_url: URL publica base dos links de sessao
        model: Modelo do provider (haiku, sonnet, opus)
        provider_timeout: Timeout de cada chamada ao provider (segundos)
        grading_attempts: Tentativas de correcao por submissao
        qr_scale: Escala do QR code gerado no lancamento
        log_level: Nivel de log
        allowed_origins: Origens liberadas no CORS
        trust_user_header: Aceita o header X-User-Id como identidade
            (apenas desenvolvimento ou atras de proxy confiavel)
    """

    database_path: Path = Path("data/quizzes.db")
    frontend_url: str = "http://localhost:3000"
    model: str = "haiku"
    provider_timeout: float = 30.0
    grading_attempts: int = 2
    qr_scale: int = 5
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    trust_user_header: bool = False

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "QuizConfig":
        """Cria config a partir das variaveis de ambiente."""
        if load_env_file:
            load_dotenv()

        origins = [
            origin.strip()
            for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
            if origin.strip()
        ]

        return cls(
            database_path=Path(os.getenv("DATABASE_PATH", "data/quizzes.db")),
            frontend_url=os.getenv("FRONTEND_URL", "http://localhost:3000"),
            model=os.getenv("QUIZ_MODEL", "haiku"),
            provider_timeout=_env_float("PROVIDER_TIMEOUT_SECONDS", 30.0, minimum=1.0),
            grading_attempts=_env_int("GRADING_MAX_ATTEMPTS", 2, minimum=1),
            qr_scale=_env_int("QR_SCALE", 5, minimum=1),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            allowed_origins=origins or ["*"],
            trust_user_header=_env_bool("TRUST_USER_ID_HEADER", False),
        )
