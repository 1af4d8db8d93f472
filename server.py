"""
Quiz Service Server - Powered by Claude Agent SDK

FastAPI server with:
- Quiz generation, launch, grading and reporting (quiz/)
- SQLite persistence opened at startup
- CORS, centralized error mapping, health check
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app_state import AppResources
from config import QuizConfig
from quiz.errors import GENERIC_FAILURE, QuizError
from quiz.llm import ContentGateway
from quiz.router import router as quiz_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_HANDLER_NAME = "quiz-console"


def configure_logging(level: str = "INFO") -> None:
    """Instala o handler de console no root logger (uma vez) e aplica o nivel."""
    root = logging.getLogger()
    if not any(getattr(h, "name", None) == LOG_HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(LOG_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


# =============================================================================
# ERROR HANDLERS
# =============================================================================


async def quiz_error_handler(request: Request, exc: QuizError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} -> {exc.status_code} "
            f"{type(exc).__name__}: {exc.message}"
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.public_message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = f"Invalid request: {location} {first.get('msg', '')}".strip()
    return JSONResponse(status_code=400, content={"detail": detail})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Erro nao tratado em {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": GENERIC_FAILURE})


# =============================================================================
# APP FACTORY
# =============================================================================


def create_app(config: QuizConfig | None = None, gateway: ContentGateway | None = None) -> FastAPI:
    """Cria a aplicacao.

    Args:
        config: Configuracao (default: ``QuizConfig.from_env()``)
        gateway: Gateway do provider (default: ``ContentGateway`` da config)
    """
    config = config or QuizConfig.from_env()
    configure_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage app lifecycle."""
        resources = AppResources.build(config, gateway=gateway)
        await resources.open()
        app.state.resources = resources
        logger.info("Quiz Service iniciado")
        try:
            yield
        finally:
            await resources.close()
            logger.info("Quiz Service encerrado")

    app = FastAPI(
        title="Quiz Service",
        description="Quiz lifecycle backend powered by Claude Agent SDK",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials="*" not in config.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(QuizError, quiz_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    app.include_router(quiz_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
