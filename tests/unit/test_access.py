# =============================================================================
# TESTES - Access Verifier
# =============================================================================

import pytest


@pytest.fixture
def verifier(repository):
    from quiz.engine import AccessVerifier

    return AccessVerifier(repository)


class TestVerify:
    """Testes para AccessVerifier.verify."""

    @pytest.mark.asyncio
    async def test_correct_code(self, verifier, launched_session):
        assert await verifier.verify(launched_session, "123456") is True

    @pytest.mark.asyncio
    async def test_code_is_trimmed(self, verifier, launched_session):
        assert await verifier.verify(launched_session, " 123456 ") is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", ["654321", "000000", "", "12345"])
    async def test_wrong_code_returns_false(self, verifier, launched_session, code):
        assert await verifier.verify(launched_session, code) is False

    @pytest.mark.asyncio
    async def test_unknown_session_raises_not_found(self, verifier):
        from quiz.errors import NotFoundError

        with pytest.raises(NotFoundError):
            await verifier.verify("missing", "123456")

    @pytest.mark.asyncio
    async def test_session_without_code_is_internal_error(
        self, verifier, database, launched_session
    ):
        from quiz.errors import InternalError

        await database.execute(
            "UPDATE launched_quizzes SET access_code = NULL WHERE id = ?", (launched_session,)
        )

        with pytest.raises(InternalError):
            await verifier.verify(launched_session, "123456")
