# =============================================================================
# CONFTEST - Pytest Fixtures Globais
# =============================================================================
# Ambiente isolado para testes sem provider nem banco externos
# =============================================================================

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Adicionar root ao path
sys.path.insert(0, str(Path(__file__).parent))


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_env(tmp_path: Path):
    """Configura variáveis de ambiente para testes."""
    env_vars = {
        "ANTHROPIC_API_KEY": "test-key-123",
        "DATABASE_PATH": str(tmp_path / "env_quizzes.db"),
        "FRONTEND_URL": "https://quiz.example.com",
        "LOG_LEVEL": "ERROR",
    }
    with patch.dict(os.environ, env_vars):
        yield


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Retorna path temporário para banco de dados."""
    return tmp_path / "test_quizzes.db"
