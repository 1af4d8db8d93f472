# =============================================================================
# TESTES - Submission Grader
# =============================================================================
# Correcao com retry limitado, persistencia e agregados
# =============================================================================

import asyncio
from unittest.mock import AsyncMock, patch

import pytest


@pytest.fixture
def grader(fake_gateway, repository):
    from quiz.engine import StatsAggregator, SubmissionGrader

    return SubmissionGrader(fake_gateway, repository, StatsAggregator(repository))


class TestGrade:
    """Fluxo principal de correcao."""

    @pytest.mark.asyncio
    async def test_three_of_four_scores_75(
        self,
        grader,
        repository,
        fake_gateway,
        launched_session,
        submission_factory,
        graded_payload_factory,
    ):
        fake_gateway.generate_content.return_value = graded_payload_factory(
            [True, True, True, False]
        )

        response = await grader.grade(submission_factory(launched_session))
        results = await repository.list_results(launched_session)
        session = await repository.get_session(launched_session)

        assert len(response.graded_answers) == 4
        assert results[0].score_percentage == 75
        assert session.students_completed == 1
        assert session.average_score == 75

    @pytest.mark.asyncio
    async def test_prompt_embeds_submission(
        self, grader, fake_gateway, launched_session, submission_factory, graded_payload_factory
    ):
        fake_gateway.generate_content.return_value = graded_payload_factory([True] * 4)

        await grader.grade(submission_factory(launched_session))
        prompt = fake_gateway.generate_content.call_args.args[0]

        assert "Student 1" in prompt
        assert "Answer 4" in prompt
        assert "short_answer" in prompt

    @pytest.mark.asyncio
    async def test_resubmission_creates_new_row(
        self,
        grader,
        repository,
        fake_gateway,
        launched_session,
        submission_factory,
        graded_payload_factory,
    ):
        fake_gateway.generate_content.return_value = graded_payload_factory([True] * 4)

        await grader.grade(submission_factory(launched_session, "Ana"))
        await grader.grade(submission_factory(launched_session, "Ana"))

        session = await repository.get_session(launched_session)
        assert session.students_completed == 2


class TestRetries:
    """Retry limitado a 2 tentativas."""

    @pytest.mark.asyncio
    async def test_malformed_then_valid_succeeds(
        self, grader, fake_gateway, launched_session, submission_factory, graded_payload_factory
    ):
        fake_gateway.generate_content.side_effect = [
            {"answers": []},
            graded_payload_factory([True, False, True, False]),
        ]

        response = await grader.grade(submission_factory(launched_session))

        assert fake_gateway.generate_content.await_count == 2
        assert [a.is_correct for a in response.graded_answers] == [True, False, True, False]

    @pytest.mark.asyncio
    async def test_provider_error_then_valid_succeeds(
        self, grader, fake_gateway, launched_session, submission_factory, graded_payload_factory
    ):
        from quiz.errors import ProviderError

        fake_gateway.generate_content.side_effect = [
            ProviderError("boom"),
            graded_payload_factory([True] * 4),
        ]

        response = await grader.grade(submission_factory(launched_session))

        assert len(response.graded_answers) == 4

    @pytest.mark.asyncio
    async def test_exhausted_attempts_raise_grading_error(
        self, grader, repository, fake_gateway, launched_session, submission_factory
    ):
        from quiz.errors import GradingError

        fake_gateway.generate_content.return_value = {"gradedAnswers": "nope"}

        with pytest.raises(GradingError, match="AI failed to grade after multiple attempts"):
            await grader.grade(submission_factory(launched_session))

        assert fake_gateway.generate_content.await_count == 2
        assert await repository.list_results(launched_session) == []

    @pytest.mark.asyncio
    async def test_count_mismatch_is_shape_failure(
        self, grader, fake_gateway, launched_session, submission_factory, graded_payload_factory
    ):
        from quiz.errors import GradingError

        fake_gateway.generate_content.return_value = graded_payload_factory([True, True])

        with pytest.raises(GradingError):
            await grader.grade(submission_factory(launched_session, count=4))

    @pytest.mark.asyncio
    async def test_non_boolean_verdict_is_shape_failure(
        self, grader, fake_gateway, launched_session, submission_factory, graded_payload_factory
    ):
        from quiz.errors import GradingError

        fake_gateway.generate_content.return_value = graded_payload_factory(["yes"] * 4)

        with pytest.raises(GradingError):
            await grader.grade(submission_factory(launched_session))

    @pytest.mark.asyncio
    async def test_failed_attempts_are_logged(
        self, grader, fake_gateway, launched_session, submission_factory, caplog
    ):
        from quiz.errors import GradingError

        fake_gateway.generate_content.return_value = {}

        with caplog.at_level("WARNING", logger="quiz.engine.grader"):
            with pytest.raises(GradingError):
                await grader.grade(submission_factory(launched_session))

        assert "Tentativa de correcao 1/2" in caplog.text
        assert "Tentativa de correcao 2/2" in caplog.text


class TestPreconditions:
    """Validacoes antes de chamar o provider."""

    @pytest.mark.asyncio
    async def test_unknown_session_raises_not_found(
        self, grader, fake_gateway, database, submission_factory
    ):
        from quiz.errors import NotFoundError

        with pytest.raises(NotFoundError):
            await grader.grade(submission_factory("missing"))

        fake_gateway.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_blank_student_name(self, grader, launched_session, submission_factory):
        from quiz.errors import ValidationError

        with pytest.raises(ValidationError):
            await grader.grade(submission_factory(launched_session, student_name=" "))

    @pytest.mark.asyncio
    async def test_no_answers(self, grader, launched_session, submission_factory):
        from quiz.errors import ValidationError

        with pytest.raises(ValidationError):
            await grader.grade(submission_factory(launched_session, count=0))


class TestPostGradeFailures:
    """Falhas depois da correcao nao desfazem a resposta."""

    @pytest.mark.asyncio
    async def test_stats_failure_still_returns_grade(
        self,
        grader,
        repository,
        fake_gateway,
        launched_session,
        submission_factory,
        graded_payload_factory,
    ):
        from quiz.errors import PersistenceError

        fake_gateway.generate_content.return_value = graded_payload_factory([True] * 4)

        with patch.object(
            repository, "recompute_stats", AsyncMock(side_effect=PersistenceError("locked"))
        ):
            response = await grader.grade(submission_factory(launched_session))

        assert len(response.graded_answers) == 4
        assert len(await repository.list_results(launched_session)) == 1

    @pytest.mark.asyncio
    async def test_insert_failure_still_returns_grade(
        self, grader, repository, fake_gateway, launched_session, submission_factory,
        graded_payload_factory,
    ):
        from quiz.errors import PersistenceError

        fake_gateway.generate_content.return_value = graded_payload_factory([False] * 4)

        with patch.object(
            repository, "insert_result", AsyncMock(side_effect=PersistenceError("disk full"))
        ):
            response = await grader.grade(submission_factory(launched_session))

        assert len(response.graded_answers) == 4


class TestConcurrentSubmissions:
    """Duas submissoes concorrentes na mesma sessao."""

    @pytest.mark.asyncio
    async def test_aggregates_reflect_both_students(
        self,
        grader,
        repository,
        fake_gateway,
        launched_session,
        submission_factory,
        graded_payload_factory,
    ):
        async def grade_by_student(prompt):
            await asyncio.sleep(0)
            if '"studentName": "Ana"' in prompt:
                return graded_payload_factory([True, True, True, True])
            return graded_payload_factory([True, False, False, False])

        fake_gateway.generate_content.side_effect = grade_by_student

        await asyncio.gather(
            grader.grade(submission_factory(launched_session, "Ana")),
            grader.grade(submission_factory(launched_session, "Bruno")),
        )
        session = await repository.get_session(launched_session)

        assert session.students_completed == 2
        # AVG(100, 25) = 62.5, ROUND do SQLite arredonda para cima
        assert session.average_score == 63
