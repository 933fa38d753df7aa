"""FastAPI application exposing the folder query engine over HTTP."""

from __future__ import annotations

import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, List

from fastapi import FastAPI, Header, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from folderquery.config import AppConfig
from folderquery.engine.searcher import FolderSearcher
from folderquery.errors import LoadError, QueryFormatError

LOGGER = logging.getLogger(__name__)

MAX_ROWS = 1000
_SEARCHER_LOCK = threading.Lock()

app = FastAPI(title="folderquery", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.config = None
app.state.searcher = None


class SearchPayload(BaseModel):
    query: str
    start: int = 0
    rows: int = 10
    session: str | None = None


class CountPayload(BaseModel):
    query: str


def _get_searcher() -> FolderSearcher:
    """Build the process-wide searcher on first use; its snapshot never refreshes."""
    if app.state.searcher is None:
        with _SEARCHER_LOCK:
            if app.state.searcher is None:
                config = app.state.config or AppConfig()
                config.corpus_root = config.resolve_corpus_root(Path.cwd())
                app.state.searcher = FolderSearcher.from_config(config)
    return app.state.searcher


def _clean_query(query: str) -> str:
    query = query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Empty query")
    return query


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.post("/search")
def search_records(
    payload: SearchPayload,
    x_session_id: str | None = Header(default=None),
) -> Dict[str, Any]:
    query = _clean_query(payload.query)
    start = max(0, payload.start)
    rows = max(1, min(payload.rows, MAX_ROWS))
    # Anonymous callers get their own cursor; pass the returned id to page on.
    session = payload.session or x_session_id or uuid.uuid4().hex

    searcher = _get_searcher()
    try:
        results = searcher.search(query, start, rows, session=session)
    except QueryFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except LoadError as exc:
        LOGGER.error("Search failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"results": results, "session": session}


@app.post("/count")
def count_records(payload: CountPayload) -> Dict[str, Any]:
    query = _clean_query(payload.query)
    searcher = _get_searcher()
    try:
        total = searcher.count(query)
    except QueryFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except LoadError as exc:
        LOGGER.error("Count failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"count": total}


@app.get("/folders")
def list_folders(query: str) -> Dict[str, List[str]]:
    """List the candidate folders a query would scan."""
    query = _clean_query(query)
    searcher = _get_searcher()
    try:
        candidates = searcher.scanner.candidates(query)
    except QueryFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"folders": [str(folder) for folder in candidates]}
