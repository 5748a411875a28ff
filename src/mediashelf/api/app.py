"""FastAPI app exposing search and the entry shelf."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from mediashelf.config import Settings, load_settings
from mediashelf.core.aggregator import Aggregator
from mediashelf.logging import configure_logging, get_logger
from mediashelf.models.entry import Entry
from mediashelf.service import build_aggregator
from mediashelf.store.entries import EntryStore


class SaveRequest(BaseModel):
    """Save request."""

    title: str
    link: str
    media_type: str
    image_url: str | None = None


def create_app(
    settings: Settings | None = None,
    *,
    aggregator: Aggregator | None = None,
    store: EntryStore | None = None,
) -> FastAPI:
    """Create FastAPI app."""

    settings = settings or load_settings()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    aggregator = aggregator or build_aggregator(settings)
    store = store or EntryStore(settings.entries_path)

    app = FastAPI(title="Mediashelf", version="0.1.0")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/search/{query:path}")
    async def search(query: str) -> JSONResponse:
        if not query.strip():
            raise HTTPException(status_code=422, detail="query must not be empty")
        logger.info("API search requested", extra={"query_len": len(query)})
        bundle = await aggregator.search(query)
        # Items are serialized with their concrete type, not re-validated as MediaItem
        return JSONResponse(bundle.model_dump(mode="json"))

    @app.get("/entries")
    def list_entries() -> dict[str, list[Entry]]:
        return store.grouped()

    @app.post("/entries", status_code=status.HTTP_201_CREATED)
    def save_entry(req: SaveRequest) -> Entry:
        try:
            entry = store.add(
                title=req.title,
                link=req.link,
                media_type=req.media_type,
                image_url=req.image_url,
            )
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=f"invalid image_url: {req.image_url}") from e
        logger.info("Entry saved", extra={"entry_id": entry.id, "media_type": entry.media_type})
        return entry

    @app.get("/entries/{entry_id}")
    def get_entry(entry_id: str) -> Entry:
        try:
            return store.get(entry_id)
        except KeyError as e:
            raise HTTPException(status_code=404, detail="entry not found") from e

    @app.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
    def remove_entry(entry_id: str) -> Response:
        try:
            store.remove(entry_id)
        except KeyError as e:
            raise HTTPException(status_code=404, detail="entry not found") from e
        logger.info("Entry removed", extra={"entry_id": entry_id})
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app
