"""Shared query parameters."""

from typing import Annotated

from fastapi import Query

from src.core.config import settings

UserIdQuery = Annotated[
    str,
    Query(
        min_length=1,
        max_length=255,
        description="User ID the request acts on",
    ),
]

DEFAULT_USER_ID = settings.default_user_id
