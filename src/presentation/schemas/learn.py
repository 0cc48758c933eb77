"""Learn module Pydantic schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.domain.entities import LearnStatus


class TopicSchema(BaseModel):
    id: str
    title: str
    description: str
    section: str
    difficulty: str
    read_time: str
    tags: List[str]
    has_quiz: bool


class TopicListSchema(BaseModel):
    topics: List[TopicSchema]


class ProgressSchema(BaseModel):
    topic_id: str
    status: str
    quiz_score: Optional[int] = None
    read_at: Optional[datetime] = None
    quizzed_at: Optional[datetime] = None


class ProgressListSchema(BaseModel):
    progress: List[ProgressSchema]


class ProgressUpdateSchema(BaseModel):
    """Schema for POST /v1/learn/progress request body."""

    topic_id: str = Field(..., min_length=1, examples=["emergency-fund"])
    status: LearnStatus = Field(LearnStatus.READ, description="unread or read")


class QuizSubmitSchema(BaseModel):
    """Schema for POST /v1/learn/quiz request body."""

    topic_id: str = Field(..., min_length=1)
    answers: List[int] = Field(
        ...,
        description="Selected option index per question, in order; -1 for unanswered",
    )


class QuestionResultSchema(BaseModel):
    question: str
    selected_index: int
    correct_index: int
    correct: bool
    explanation: str


class QuizResultSchema(BaseModel):
    topic_id: str
    score: int
    total: int
    percentage: float
    passed: bool
    status: str
    results: List[QuestionResultSchema]
