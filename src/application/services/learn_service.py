"""Learn service - topic progress and quizzes."""

from typing import List

import structlog

from src.domain.entities import LearnProgress, LearnStatus, LearnTopic, utcnow
from src.domain.exceptions import InvalidQuizSubmissionException, QuizNotFoundException
from src.domain.interfaces import LearnProgressRepository
from src.service.finance import TOPICS, score_quiz
from src.service.finance.learn import QuizResult, get_quiz, get_topic

logger = structlog.get_logger(__name__)


class LearnService:
    """Application service for the learn module."""

    def __init__(self, progress_repository: LearnProgressRepository):
        self._progress_repo = progress_repository

    def list_topics(self) -> List[LearnTopic]:
        return list(TOPICS)

    async def get_progress(self, user_id: str) -> List[LearnProgress]:
        return await self._progress_repo.list(user_id)

    async def update_progress(
        self,
        user_id: str,
        topic_id: str,
        status: LearnStatus,
    ) -> LearnProgress:
        """
        Set a topic's status.

        `read_at` is stamped the first time progress is recorded and kept
        afterwards. Quiz-only statuses cannot be set directly.

        Raises:
            InvalidQuizSubmissionException: If the topic is unknown or the
                status is quizzed/mastered
        """
        if get_topic(topic_id) is None:
            raise InvalidQuizSubmissionException(f"Unknown topic: {topic_id}")
        if status not in (LearnStatus.UNREAD, LearnStatus.READ):
            raise InvalidQuizSubmissionException("Status can only be set to unread or read")

        now = utcnow()
        progress = await self._progress_repo.get(user_id, topic_id)

        if progress is None:
            progress = LearnProgress(user_id=user_id, topic_id=topic_id, read_at=now)

        progress.status = status
        progress.updated_at = now
        await self._progress_repo.save(progress)

        logger.info("learn_progress_updated", user_id=user_id, topic_id=topic_id, status=status.value)
        return progress

    async def submit_quiz(self, user_id: str, topic_id: str, answers: List[int]) -> QuizResult:
        """
        Score a quiz and record the result.

        Raises:
            QuizNotFoundException: If the topic has no quiz
            InvalidQuizSubmissionException: If there are more answers than questions
        """
        questions = get_quiz(topic_id)
        if questions is None:
            raise QuizNotFoundException(topic_id)
        if len(answers) > len(questions):
            raise InvalidQuizSubmissionException(
                f"Expected at most {len(questions)} answers, got {len(answers)}"
            )

        result = score_quiz(topic_id, questions, answers)

        now = utcnow()
        progress = await self._progress_repo.get(user_id, topic_id)
        if progress is None:
            progress = LearnProgress(user_id=user_id, topic_id=topic_id, read_at=now)

        progress.status = result.status
        progress.quiz_score = result.score
        progress.quizzed_at = now
        progress.updated_at = now
        await self._progress_repo.save(progress)

        logger.info(
            "quiz_submitted",
            user_id=user_id,
            topic_id=topic_id,
            score=result.score,
            total=result.total,
            passed=result.passed,
        )
        return result
