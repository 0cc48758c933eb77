"""Learn module entities: topics, quizzes and per-user progress."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .common import utcnow


class LearnStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"
    QUIZZED = "quizzed"
    MASTERED = "mastered"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class QuizQuestion:
    question: str
    options: List[str]
    correct_index: int
    explanation: str


@dataclass(frozen=True)
class LearnTopic:
    id: str
    title: str
    description: str
    section: str
    difficulty: Difficulty
    read_time: str
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "section": self.section,
            "difficulty": self.difficulty.value,
            "read_time": self.read_time,
            "tags": list(self.tags),
        }


@dataclass
class LearnProgress:
    """A user's progress on one topic."""

    user_id: str
    topic_id: str
    status: LearnStatus = LearnStatus.UNREAD
    quiz_score: Optional[int] = None
    read_at: Optional[datetime] = None
    quizzed_at: Optional[datetime] = None
    updated_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "topic_id": self.topic_id,
            "status": self.status.value,
            "quiz_score": self.quiz_score,
            "read_at": self.read_at.isoformat() + "Z" if self.read_at else None,
            "quizzed_at": self.quizzed_at.isoformat() + "Z" if self.quizzed_at else None,
        }
