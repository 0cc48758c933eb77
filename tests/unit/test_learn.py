"""
Unit Tests for Learn Topics and Quiz Scoring.
"""

import pytest

from src.domain.entities import LearnStatus
from src.service.finance.learn import QUIZZES, SECTIONS, TOPICS, get_quiz, get_topic, score_quiz
from src.service.finance.settings import FinanceSettings


# =============================================================================
# Content Tests
# =============================================================================

class TestContent:
    """Tests for the static topic and quiz content."""

    def test_topic_ids_unique(self):
        ids = [t.id for t in TOPICS]
        assert len(ids) == len(set(ids)) == 14

    def test_every_topic_in_known_section(self):
        assert all(t.section in SECTIONS for t in TOPICS)

    def test_quizzes_reference_topics(self):
        assert set(QUIZZES) <= {t.id for t in TOPICS}

    def test_correct_index_in_range(self):
        for questions in QUIZZES.values():
            for question in questions:
                assert 0 <= question.correct_index < len(question.options)

    def test_lookup(self):
        assert get_topic("sip").title
        assert get_topic("missing") is None
        assert len(get_quiz("sip")) == 3
        assert get_quiz("stocks") is None


# =============================================================================
# Scoring Tests
# =============================================================================

class TestScoreQuiz:
    """Tests for score_quiz()."""

    def test_all_correct_masters(self):
        questions = get_quiz("emergency-fund")
        result = score_quiz("emergency-fund", questions, [q.correct_index for q in questions])
        assert result.score == 3
        assert result.percentage == 100
        assert result.passed is True
        assert result.status == LearnStatus.MASTERED

    def test_two_of_three_fails(self):
        """66.67% is below the 80% pass mark."""
        questions = get_quiz("sip")
        answers = [q.correct_index for q in questions]
        answers[2] = (answers[2] + 1) % len(questions[2].options)

        result = score_quiz("sip", questions, answers)
        assert result.score == 2
        assert result.percentage == pytest.approx(66.67)
        assert result.passed is False
        assert result.status == LearnStatus.QUIZZED
        assert [r["correct"] for r in result.results] == [True, True, False]

    def test_missing_answers_are_wrong(self):
        questions = get_quiz("fire")
        result = score_quiz("fire", questions, [questions[0].correct_index])
        assert result.score == 1
        assert result.results[1]["selected_index"] == -1
        assert result.results[2]["correct"] is False

    def test_pass_mark_configurable(self):
        questions = get_quiz("sip")
        answers = [q.correct_index for q in questions]
        answers[0] = -1
        result = score_quiz("sip", questions, answers, FinanceSettings(quiz_pass_percent=60))
        assert result.passed is True

    def test_empty_quiz(self):
        result = score_quiz("stocks", [], [])
        assert result.total == 0
        assert result.percentage == 0
        assert result.passed is False
