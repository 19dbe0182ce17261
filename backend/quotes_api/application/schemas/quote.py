"""Pydantic DTOs (Data Transfer Objects) for quotes, likes and comparisons."""

from pydantic import BaseModel, Field

from quotes_api.domain.entities import SortDirection, SortField


class QuoteResponse(BaseModel):
    """A stored quote as returned to clients, without stats."""

    id: str
    content: str
    author: str
    tags: list[str]
    length: int | None = None
    date_added: str | None = None
    date_modified: str | None = None

    model_config = {"from_attributes": True}


class QuoteWithStatsResponse(QuoteResponse):
    """Quote plus stats computed at read time."""

    likes: int
    liked_by_current_user: bool
    popularity_score: float
    trending_score: float


class UserActionRequest(BaseModel):
    """Body for actions performed on behalf of a user (like, unlike, share)."""

    user_id: str = Field(..., min_length=1, examples=["user-42"])


class ReportRequest(UserActionRequest):
    reason: str = Field(..., min_length=1, max_length=500, examples=["Misattributed"])


class ShareResponse(BaseModel):
    share_url: str


class SuccessResponse(BaseModel):
    success: bool = True


class QuoteFilterSchema(BaseModel):
    """Optional listing criteria — unset fields match everything."""

    author: str | None = None
    tags: list[str] = Field(default_factory=list)
    min_length: int | None = Field(None, ge=0)
    max_length: int | None = Field(None, ge=0)
    min_likes: int | None = Field(None, ge=0)


class QuoteSortSchema(BaseModel):
    field: SortField
    direction: SortDirection = SortDirection.ASC


class QuoteListRequest(BaseModel):
    """Body for the filtered quote listing."""

    filter: QuoteFilterSchema | None = None
    sort: QuoteSortSchema | None = None
    limit: int = Field(10, ge=1, le=100)
    offset: int = Field(0, ge=0)
    user_id: str | None = None


class CompareRequest(BaseModel):
    quote_ids: list[str] = Field(..., min_length=2, max_length=5)
    include_metrics: bool = True


class SimilarityEntrySchema(BaseModel):
    quote_ids: list[str]
    score: float
    description: str
    field: str

    model_config = {"from_attributes": True}


class DifferenceEntrySchema(BaseModel):
    field: str
    values: list[str]
    description: str

    model_config = {"from_attributes": True}


class ComparisonMetricsSchema(BaseModel):
    average_length: float
    average_likes: float
    common_tags: list[str]
    author_diversity: float

    model_config = {"from_attributes": True}


class QuoteComparisonResponse(BaseModel):
    quotes: list[QuoteResponse]
    similarities: list[SimilarityEntrySchema]
    differences: list[DifferenceEntrySchema]
    recommendation: str
    overall_similarity: float
    metrics: ComparisonMetricsSchema | None = None

    model_config = {"from_attributes": True}
