"""Pydantic DTOs for user collections and preferences."""

from datetime import datetime

from pydantic import BaseModel, Field

from .quote import QuoteResponse


class CollectionCreate(BaseModel):
    """Schema for creating a new collection."""

    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100, examples=["Morning motivation"])
    description: str | None = Field(None, max_length=500)
    is_public: bool = False


class CollectionQuoteAdd(BaseModel):
    user_id: str = Field(..., min_length=1)
    quote_id: str = Field(..., min_length=1)


class CollectionResponse(BaseModel):
    id: str
    name: str
    description: str | None
    user_id: str
    is_public: bool
    likes: int
    quotes: list[QuoteResponse]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PreferencesUpdate(BaseModel):
    """Lists left unset keep their current value."""

    favorite_authors: list[str] | None = None
    favorite_tags: list[str] | None = None


class PreferencesResponse(BaseModel):
    user_id: str
    favorite_authors: list[str]
    favorite_tags: list[str]
    liked_quotes: list[str]
    created_at: datetime

    model_config = {"from_attributes": True}
