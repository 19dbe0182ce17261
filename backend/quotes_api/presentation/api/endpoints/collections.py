"""Collection and preference endpoints — everything scoped to a single user."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from quotes_api.application.schemas import (
    CollectionCreate,
    CollectionQuoteAdd,
    CollectionResponse,
    PreferencesResponse,
    PreferencesUpdate,
)
from quotes_api.application.services import QuoteService
from quotes_api.domain.exceptions import EntityNotFoundError
from quotes_api.infrastructure.dependencies import get_quote_service

router = APIRouter(tags=["Collections"])


@router.get("/collections", response_model=list[CollectionResponse])
async def list_collections(
    user_id: str = Query(..., min_length=1),
    service: QuoteService = Depends(get_quote_service),
) -> list[CollectionResponse]:
    collections = await service.get_user_collections(user_id)
    return [CollectionResponse.model_validate(c, from_attributes=True) for c in collections]


@router.post("/collections", response_model=CollectionResponse, status_code=status.HTTP_201_CREATED)
async def create_collection(
    data: CollectionCreate,
    service: QuoteService = Depends(get_quote_service),
) -> CollectionResponse:
    collection = await service.create_collection(
        name=data.name,
        user_id=data.user_id,
        description=data.description,
        is_public=data.is_public,
    )
    return CollectionResponse.model_validate(collection, from_attributes=True)


@router.get("/collections/{collection_id}", response_model=CollectionResponse)
async def get_collection(
    collection_id: str,
    user_id: str = Query(..., min_length=1),
    service: QuoteService = Depends(get_quote_service),
) -> CollectionResponse:
    """Retrieve a collection owned by the requesting user."""
    try:
        collection = await service.get_collection(collection_id, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CollectionResponse.model_validate(collection, from_attributes=True)


@router.post("/collections/{collection_id}/quotes", response_model=CollectionResponse)
async def add_quote_to_collection(
    collection_id: str,
    data: CollectionQuoteAdd,
    service: QuoteService = Depends(get_quote_service),
) -> CollectionResponse:
    try:
        collection = await service.add_quote_to_collection(
            collection_id, data.quote_id, data.user_id
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CollectionResponse.model_validate(collection, from_attributes=True)


@router.delete("/collections/{collection_id}/quotes/{quote_id}", response_model=CollectionResponse)
async def remove_quote_from_collection(
    collection_id: str,
    quote_id: str,
    user_id: str = Query(..., min_length=1),
    service: QuoteService = Depends(get_quote_service),
) -> CollectionResponse:
    try:
        collection = await service.remove_quote_from_collection(collection_id, quote_id, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CollectionResponse.model_validate(collection, from_attributes=True)


@router.delete("/collections/{collection_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_collection(
    collection_id: str,
    user_id: str = Query(..., min_length=1),
    service: QuoteService = Depends(get_quote_service),
) -> None:
    try:
        await service.delete_collection(collection_id, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ── Preferences ──────────────────────────────────────────────────────


@router.get("/users/{user_id}/preferences", response_model=PreferencesResponse, tags=["Preferences"])
async def get_preferences(
    user_id: str,
    service: QuoteService = Depends(get_quote_service),
) -> PreferencesResponse:
    """Returns the user's preferences, created empty on first access."""
    preferences = await service.get_user_preferences(user_id)
    return PreferencesResponse.model_validate(preferences, from_attributes=True)


@router.put("/users/{user_id}/preferences", response_model=PreferencesResponse, tags=["Preferences"])
async def update_preferences(
    user_id: str,
    data: PreferencesUpdate,
    service: QuoteService = Depends(get_quote_service),
) -> PreferencesResponse:
    preferences = await service.update_user_preferences(
        user_id,
        favorite_authors=data.favorite_authors,
        favorite_tags=data.favorite_tags,
    )
    return PreferencesResponse.model_validate(preferences, from_attributes=True)
