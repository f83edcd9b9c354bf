"""Kanji Routes — CRUD, delete-all and random sampling over the kanji collection.

Invariants:
    - Request bodies validated by Pydantic (KanjiCreate / KanjiPatch) before reaching handlers
    - Handlers never pick an error status themselves: they raise, error_handlers map
    - /random is registered before /{kanji_id} so it is never parsed as an identifier
    - Random sample on an empty store serves the default set; a small store is never padded

Design Decisions:
    - KanjiStore injected per request (get_kanji_store): no global DB handle in routes
    - Identifiers taken as plain str: a malformed id is a 404, not a 422
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from kanji_api.core.default_kanji import pick_default_kanji
from kanji_api.schemas.kanji import (
    DeleteAllResponse, KanjiCreate, KanjiPatch, KanjiResponse,
    KanjiSample, MessageResponse,
)
from kanji_api.services.kanji_store import KanjiStore, get_kanji_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/kanji", tags=["kanji"])

DEFAULT_SAMPLE_LIMIT = 6


@router.get("", response_model=list[KanjiResponse])
async def list_kanji(store: KanjiStore = Depends(get_kanji_store)):
    """List every stored kanji."""
    kanji = await store.list_all()
    logger.debug(f"Fetched {len(kanji)} kanji")
    return kanji


@router.get("/random", response_model=KanjiSample)
async def random_kanji(
    limit: int = Query(DEFAULT_SAMPLE_LIMIT, ge=1),
    store: KanjiStore = Depends(get_kanji_store),
):
    """Random sample of stored kanji, or of the default set when the store is empty."""
    sampled = await store.sample(limit)
    if sampled:
        return KanjiSample(
            kanji=[KanjiResponse.model_validate(k) for k in sampled],
            is_default_set=False,
        )
    return KanjiSample(
        kanji=[KanjiResponse(**k) for k in pick_default_kanji(limit)],
        is_default_set=True,
    )


@router.get("/{kanji_id}", response_model=KanjiResponse)
async def get_kanji(
    kanji_id: str, store: KanjiStore = Depends(get_kanji_store),
):
    return await store.get(kanji_id)


@router.post(
    "", response_model=KanjiResponse, status_code=status.HTTP_201_CREATED,
)
async def create_kanji(
    body: KanjiCreate, store: KanjiStore = Depends(get_kanji_store),
):
    """Create a kanji. 409 if the character already exists."""
    return await store.create(body)


@router.put("/{kanji_id}", response_model=KanjiResponse)
async def update_kanji(
    kanji_id: str,
    body: KanjiPatch,
    store: KanjiStore = Depends(get_kanji_store),
):
    """Overwrite only the supplied fields of an existing kanji."""
    return await store.update(kanji_id, body)


@router.delete("/{kanji_id}", response_model=MessageResponse)
async def delete_kanji(
    kanji_id: str, store: KanjiStore = Depends(get_kanji_store),
):
    await store.delete(kanji_id)
    return MessageResponse(message="Kanji deleted successfully")


@router.delete("", response_model=DeleteAllResponse)
async def delete_all_kanji(store: KanjiStore = Depends(get_kanji_store)):
    """Remove the whole collection and report how many records went."""
    deleted = await store.delete_all()
    return DeleteAllResponse(deleted_count=deleted)
