"""HTTP API for generating temporary account names."""

import itertools
import logging
import threading
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from ..core.serial_mapping import WordNamesSerialMapping

logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(title="tempuser-wordnames", version="0.1.0")

# Serial mapping instance (will be set by main.py)
serial_mapping: Optional[WordNamesSerialMapping] = None

# Supplies indexes when callers do not pass one
_index_counter = itertools.count(1)
_index_lock = threading.Lock()


def set_serial_mapping(mapping: Optional[WordNamesSerialMapping]) -> None:
    """Set the serial mapping instance."""
    global serial_mapping
    serial_mapping = mapping


def reset_index_counter(start: int = 1) -> None:
    """Restart the automatic index sequence."""
    global _index_counter
    with _index_lock:
        _index_counter = itertools.count(start)


def _next_index() -> int:
    with _index_lock:
        return next(_index_counter)


def _require_mapping() -> WordNamesSerialMapping:
    if serial_mapping is None:
        raise HTTPException(status_code=500, detail="Serial mapping not initialized")
    return serial_mapping


# Pydantic models
class NameResponse(BaseModel):
    """A generated name."""

    name: str
    index: int


class WordListResponse(BaseModel):
    """The word list names are currently drawn from."""

    words: list[str]
    count: int
    fallback: bool


# Endpoints are sync: resolving may block on a page fetch, so they run
# in FastAPI's threadpool.
@app.get("/api/names/next", response_model=NameResponse)
def next_name(index: Optional[int] = None) -> NameResponse:
    """Generate a name for the given index, or the next automatic one."""
    mapping = _require_mapping()
    if index is None:
        index = _next_index()

    name = mapping.get_serial_id_for_index(index)
    logger.debug(f"Generated name {name} for index {index}")
    return NameResponse(name=name, index=index)


@app.get("/api/wordlist", response_model=WordListResponse)
def get_word_list() -> WordListResponse:
    """Show the resolved word list."""
    mapping = _require_mapping()
    words = mapping.get_word_list()
    return WordListResponse(
        words=list(words),
        count=len(words),
        fallback=mapping.resolver.is_fallback,
    )


@app.post("/api/wordlist/invalidate")
def invalidate_word_list() -> dict:
    """Drop the memoized word list so the next request re-resolves it."""
    mapping = _require_mapping()
    mapping.invalidate()
    return {"status": "invalidated"}
