"""Learn module exceptions."""

from .base import DomainException, NotFoundException


class QuizNotFoundException(NotFoundException):
    """Raised when no quiz exists for a topic."""

    def __init__(self, topic_id: str):
        super().__init__("Quiz for topic", topic_id, "QUIZ_NOT_FOUND")
        self.topic_id = topic_id


class InvalidQuizSubmissionException(DomainException):
    """Raised when a quiz submission or progress update is malformed."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_QUIZ_SUBMISSION",
        )
