"""
Pydantic schemas for request and response validation.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.constants import IssueStatus, IssueType


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserResponse(CamelModel):
    id: int
    display_name: str
    email: str | None = None
    permissions: int = 0


class MediaResponse(CamelModel):
    id: int
    tmdb_id: int
    tvdb_id: int | None = None
    media_type: str
    service_url: str | None = None


class IssueCommentResponse(CamelModel):
    id: int
    message: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: UserResponse


class IssueResponse(CamelModel):
    id: int
    issue_type: IssueType
    status: IssueStatus
    problem_season: int = 0
    problem_episode: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    media: MediaResponse
    created_by: UserResponse
    comments: list[IssueCommentResponse] = Field(default_factory=list)


class PageInfo(CamelModel):
    pages: int
    page_size: int
    results: int
    page: int


class IssueResultsResponse(CamelModel):
    page_info: PageInfo
    results: list[IssueResponse]


class IssueCreateRequest(CamelModel):
    message: str = Field(min_length=1)
    media_id: int
    issue_type: IssueType
    problem_season: int = Field(default=0, ge=0)
    problem_episode: int = Field(default=0, ge=0)


class CommentRequest(CamelModel):
    message: str = Field(min_length=1)


class MediaDetailsResponse(CamelModel):
    id: int
    media_type: str
    title: str
    release_date: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    overview: str | None = None
