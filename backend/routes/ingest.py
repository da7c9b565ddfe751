import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import ValidationError

import config
from models.event import CommandEvent, EditorSaveEvent, ErrorEvent, to_record
from store import EventStore, StoreError, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ingest"])


# ---------- Body decoding ----------

def _fold_keys(data: dict, model) -> dict:
    """Map keys onto field names case-insensitively ('UID' -> 'uid'); an exact key wins."""
    fields = {name.lower(): name for name in model.model_fields}
    folded = {}
    for key, value in data.items():
        name = fields.get(key.lower(), key)
        if name in folded and key != name:
            continue
        folded[name] = value
    return folded


def decode_event(raw: bytes, model, strict: bool = False):
    """
    Decode a request body into `model`.

    Fields that are missing or of the wrong type fall back to their zero
    values ("" / 0) and the rest of the body is still used, so a garbled
    report is stored rather than lost. Keys match field names regardless
    of case, so {"UID": ...} fills uid. With strict=True any such problem
    raises HTTPException(422) instead.
    """
    try:
        data = json.loads(raw) if raw else {}
    except ValueError:
        data = None

    if not isinstance(data, dict):
        if strict:
            raise HTTPException(status_code=422, detail="Body must be a JSON object")
        logger.warning("Undecodable %s body, storing zero values", model.__name__)
        data = {}

    data = _fold_keys(data, model)
    data.pop("kind", None)
    try:
        event = model.model_validate(data)
    except ValidationError as e:
        if strict:
            detail = [{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()]
            raise HTTPException(status_code=422, detail=detail)
        bad = {err["loc"][0] for err in e.errors() if err["loc"]}
        logger.warning("Malformed %s fields %s, storing zero values", model.__name__, sorted(bad))
        event = model.model_validate({k: v for k, v in data.items() if k not in bad})

    if strict and not event.uid:
        raise HTTPException(status_code=422, detail="uid is required")
    return event


async def _ingest(request: Request, store: EventStore, model, failure_message: str) -> Response:
    event = decode_event(await request.body(), model, strict=config.strict_ingest())

    try:
        store.insert(event.kind, to_record(event))
    except StoreError as e:
        logger.error("could not write to store: %s", e)
        raise HTTPException(status_code=500, detail=failure_message)

    logger.info("Saved %s %s", event.kind, to_record(event))
    return Response(status_code=200)


# ---------- Endpoints ----------

@router.post("/repl-command")
async def save_repl_command(request: Request, store: EventStore = Depends(get_store)):
    """Stores a command the player ran in the REPL."""
    return await _ingest(request, store, CommandEvent, "Could not save REPL command")


@router.post("/editor-content")
async def save_editor_content(request: Request, store: EventStore = Depends(get_store)):
    """Stores the full editor buffer from a save."""
    return await _ingest(request, store, EditorSaveEvent, "Could not save editor content")


@router.post("/error")
async def save_error(request: Request, store: EventStore = Depends(get_store)):
    """Stores an error raised by the in-game interpreter."""
    return await _ingest(request, store, ErrorEvent, "Could not save error")
