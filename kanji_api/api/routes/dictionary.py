"""Dictionary Routes — pass-through search proxy to the upstream dictionary service.

Invariants:
    - Missing query → 400 VALIDATION_ERROR (Pydantic); blank query → 400 BAD_REQUEST
    - Upstream body returned verbatim with its content type; never reshaped
    - Upstream failures raise DictionaryServiceError → 500 via error_handlers
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from kanji_api.core.errors import BadRequestError
from kanji_api.infrastructure.dictionary_client import (
    DictionaryClient, get_dictionary_client,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/dictionary", tags=["dictionary"])


@router.get("/search")
async def search_dictionary(
    query: str = Query(...),
    client: DictionaryClient = Depends(get_dictionary_client),
):
    """Forward a word search upstream and relay the answer as-is."""
    if not query.strip():
        raise BadRequestError("Query parameter is required", field="query")
    upstream = await client.search(query)
    logger.info("Dictionary search proxied", extra={"query": query})
    return Response(content=upstream.content, media_type=upstream.media_type)
