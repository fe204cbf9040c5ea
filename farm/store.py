"""
farm/store.py

Record store adapter over a per-browser key-value backend.

In the running site the backend is ``request.session``; tests pass a plain
dict. Each collection is kept as a single JSON array string under its key
and is always rewritten whole.

Provides:
- RecordStore.load(key) — stored collection, or seed data when absent, corrupt or malformed
- RecordStore.save(key, collection) — serialize and overwrite, then signal
- RecordStore.revision(key) — save counter used by cross-tab refresh
- store_for_request(request) — adapter bound to the visitor's session
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, MutableMapping, Optional

from .records import RECORD_VALIDATORS, REVISIONS_KEY
from .seed_data import default_seeds
from .signals import collection_saved

logger = logging.getLogger(__name__)

Collection = List[Dict[str, Any]]


class RecordStore:
    def __init__(self, backend: MutableMapping[str, Any],
                 seeds: Optional[Dict[str, Callable[[], Collection]]] = None,
                 validators: Optional[Dict[str, Callable[[Dict[str, Any]], bool]]] = None):
        self.backend = backend
        self.seeds = dict(seeds or {})
        self.validators = dict(validators or {})

    def _seed(self, key: str) -> Collection:
        factory = self.seeds.get(key)
        if factory is None:
            return []
        return factory()

    def load(self, key: str) -> Collection:
        raw = self.backend.get(key)
        if raw is None:
            logger.debug("No stored %s; using seed data", key)
            return self._seed(key)

        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning("Stored %s is not valid JSON (%s); falling back to seed data", key, e)
            return self._seed(key)

        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            logger.warning("Stored %s is not a list of records; falling back to seed data", key)
            return self._seed(key)

        is_valid = self.validators.get(key)
        if is_valid is not None:
            bad = [r.get("id") for r in data if not is_valid(r)]
            if bad:
                logger.warning("Stored %s has %d malformed record(s) (ids: %s); falling back to seed data",
                               key, len(bad), bad)
                return self._seed(key)

        return data

    def save(self, key: str, collection: Collection) -> None:
        self.backend[key] = json.dumps(list(collection))
        logger.info("Saved %s: total=%d", key, len(collection))
        collection_saved.send(sender=self.__class__, key=key, collection=collection, backend=self.backend)

    def revision(self, key: str) -> int:
        revisions = self.backend.get(REVISIONS_KEY) or {}
        return int(revisions.get(key, 0))


def store_for_request(request) -> RecordStore:
    return RecordStore(request.session, seeds=default_seeds(), validators=RECORD_VALIDATORS)
