"""
Event storage shared by the ingestion routes and the evaluation run.

Records are flat dicts ({uid, timestamp, <content field>}) grouped by kind.
Locally they live in a plain dict of lists; with STARSHIP_REDIS_URL set they
go to Redis lists instead, one list per kind plus one per kind and user so
per-user queries and counts never scan the whole kind.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

import redis

import config
from models.event import KINDS

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The backing store could not satisfy a read or write."""


def _check_kind(kind: str) -> None:
    if kind not in KINDS:
        raise ValueError(f"unknown event kind {kind!r}")


class EventStore(ABC):

    @abstractmethod
    def insert(self, kind: str, record: dict) -> None:
        pass

    @abstractmethod
    def query_by_kind(self, kind: str) -> list[dict]:
        pass

    @abstractmethod
    def query_by_kind_and_user(self, kind: str, uid: str) -> list[dict]:
        pass

    @abstractmethod
    def count_by_kind_and_user(self, kind: str, uid: str) -> int:
        pass


# ---------- In-memory backend ----------

class MemoryEventStore(EventStore):
    """Process-local store. Contents are lost on restart."""

    def __init__(self):
        self._records: dict[str, list[dict]] = {kind: [] for kind in KINDS}

    def insert(self, kind: str, record: dict) -> None:
        _check_kind(kind)
        self._records[kind].append(dict(record))

    def query_by_kind(self, kind: str) -> list[dict]:
        _check_kind(kind)
        return [dict(r) for r in self._records[kind]]

    def query_by_kind_and_user(self, kind: str, uid: str) -> list[dict]:
        _check_kind(kind)
        return [dict(r) for r in self._records[kind] if r.get("uid") == uid]

    def count_by_kind_and_user(self, kind: str, uid: str) -> int:
        _check_kind(kind)
        return sum(1 for r in self._records[kind] if r.get("uid") == uid)


# ---------- Redis backend ----------

class RedisEventStore(EventStore):
    """Store backed by Redis lists of JSON records.

    starship:<kind>        every record of that kind, in insertion order
    starship:<kind>:<uid>  the same records filtered to one user
    """

    def __init__(self, client: redis.Redis, prefix: str = "starship"):
        self._client = client
        self._prefix = prefix

    @classmethod
    def from_url(cls, url: str) -> "RedisEventStore":
        return cls(redis.Redis.from_url(url))

    def _kind_key(self, kind: str) -> str:
        return f"{self._prefix}:{kind}"

    def _user_key(self, kind: str, uid: str) -> str:
        return f"{self._prefix}:{kind}:{uid}"

    def _load(self, key: str) -> list[dict]:
        try:
            raw = self._client.lrange(key, 0, -1)
        except redis.RedisError as e:
            raise StoreError(f"reading {key}: {e}") from e
        return [json.loads(item) for item in raw]

    def insert(self, kind: str, record: dict) -> None:
        _check_kind(kind)
        payload = json.dumps(record)
        try:
            pipe = self._client.pipeline()
            pipe.rpush(self._kind_key(kind), payload)
            pipe.rpush(self._user_key(kind, record.get("uid", "")), payload)
            pipe.execute()
        except redis.RedisError as e:
            raise StoreError(f"writing {kind} record: {e}") from e

    def query_by_kind(self, kind: str) -> list[dict]:
        _check_kind(kind)
        return self._load(self._kind_key(kind))

    def query_by_kind_and_user(self, kind: str, uid: str) -> list[dict]:
        _check_kind(kind)
        return self._load(self._user_key(kind, uid))

    def count_by_kind_and_user(self, kind: str, uid: str) -> int:
        _check_kind(kind)
        key = self._user_key(kind, uid)
        try:
            return int(self._client.llen(key))
        except redis.RedisError as e:
            raise StoreError(f"counting {key}: {e}") from e


# ---------- Process-wide instance ----------

_store: Optional[EventStore] = None


def build_store() -> EventStore:
    url = config.redis_url()
    if url:
        logger.info("Using Redis event store")
        return RedisEventStore.from_url(url)
    logger.info("Using in-memory event store")
    return MemoryEventStore()


def get_store() -> EventStore:
    """Return the shared store, building it on first use. Used as a FastAPI dependency."""
    global _store
    if _store is None:
        _store = build_store()
    return _store
