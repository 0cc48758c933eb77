"""Learn module endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.services import LearnService
from src.core.dependencies import get_learn_service
from src.presentation.schemas import (
    ErrorResponseSchema,
    ProgressListSchema,
    ProgressSchema,
    ProgressUpdateSchema,
    QuizResultSchema,
    QuizSubmitSchema,
    TopicListSchema,
)
from src.service.finance import QUIZZES

from .params import DEFAULT_USER_ID, UserIdQuery

learn_router = APIRouter(
    prefix="/learn",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
)


@learn_router.get(
    "/topics",
    response_model=TopicListSchema,
    summary="List Topics",
)
async def list_topics(
    learn_service: Annotated[LearnService, Depends(get_learn_service)],
) -> TopicListSchema:
    return TopicListSchema(
        topics=[
            {**topic.to_dict(), "has_quiz": topic.id in QUIZZES}
            for topic in learn_service.list_topics()
        ]
    )


@learn_router.get(
    "/progress",
    response_model=ProgressListSchema,
    summary="Get Progress",
)
async def get_progress(
    learn_service: Annotated[LearnService, Depends(get_learn_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> ProgressListSchema:
    progress = await learn_service.get_progress(user_id)
    return ProgressListSchema(progress=[p.to_dict() for p in progress])


@learn_router.post(
    "/progress",
    response_model=ProgressSchema,
    summary="Update Progress",
    description="Mark a topic read or unread. Quiz statuses are set by submitting the quiz.",
)
async def update_progress(
    request: ProgressUpdateSchema,
    learn_service: Annotated[LearnService, Depends(get_learn_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> ProgressSchema:
    progress = await learn_service.update_progress(user_id, request.topic_id, request.status)
    return ProgressSchema(**progress.to_dict())


@learn_router.post(
    "/quiz",
    response_model=QuizResultSchema,
    summary="Submit Quiz",
    description="Score answers; 80% or more marks the topic mastered.",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Quiz not found"},
    },
)
async def submit_quiz(
    request: QuizSubmitSchema,
    learn_service: Annotated[LearnService, Depends(get_learn_service)],
    user_id: UserIdQuery = DEFAULT_USER_ID,
) -> QuizResultSchema:
    result = await learn_service.submit_quiz(user_id, request.topic_id, request.answers)
    return QuizResultSchema(**result.to_dict())
