"""
Collection screens: the edit-session logic behind the Crops and Inventory pages.

A screen loads its collection from a RecordStore, keeps a draft of the
record being edited and, on a valid save, reconciles the draft into the
collection and writes the whole collection back. Views build one screen per
request; nothing else mutates a collection.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Mapping, Optional

from django.utils import timezone

from .exceptions import RecordNotFound
from .forms import CropForm, InventoryItemForm
from .records import (
    CROP_FIELDS,
    CROPS_KEY,
    INVENTORY_FIELDS,
    INVENTORY_KEY,
    category_label,
    format_number,
    iso_date,
)

logger = logging.getLogger(__name__)

MODE_CLOSED = "closed"
MODE_CREATE = "create"
MODE_EDIT = "edit"


class CollectionScreen:
    key: str = ""
    id_prefix: str = ""
    fields: tuple = ()
    date_fields: tuple = ()
    form_class = None

    def __init__(self, store, today=None, clock=None):
        self.store = store
        self.collection: List[Dict[str, Any]] = store.load(self.key)
        self.search_term = ""
        self.editing_id: Optional[str] = None
        self.draft: Dict[str, Any] = {}
        self.mode = MODE_CLOSED
        self.form = None
        self._today = today
        self._clock = clock or time.time

    # --- lookups ---

    def today(self):
        return self._today or timezone.localdate()

    def get(self, record_id: str) -> Dict[str, Any]:
        for record in self.collection:
            if record.get("id") == record_id:
                return record
        raise RecordNotFound(self.key, record_id)

    def defaults(self) -> Dict[str, Any]:
        raise NotImplementedError

    @property
    def is_open(self) -> bool:
        return self.mode != MODE_CLOSED

    # --- edit session ---

    def open_create(self) -> None:
        self.editing_id = None
        self.draft = self.defaults()
        self.form = self.form_class(initial=self.draft)
        self.mode = MODE_CREATE

    def open_edit(self, record_id: str) -> None:
        # Look up first so an unknown id leaves the screen closed
        record = self.get(record_id)
        self.editing_id = record_id
        self.draft = {name: record.get(name, "") for name in self.fields}
        self.form = self.form_class(initial=self.draft)
        self.mode = MODE_EDIT

    def edit_field(self, name: str, value: Any) -> None:
        if name not in self.fields:
            raise KeyError(name)
        if name in self.date_fields:
            try:
                value = iso_date(value)
            except ValueError:
                # leave malformed input for the form to reject
                pass
        self.draft[name] = value

    def edit_fields(self, values: Mapping[str, Any]) -> None:
        """Merge submitted form input into the draft, ignoring unrelated keys."""
        for name in self.fields:
            if name in values:
                self.edit_field(name, values.get(name))

    def cancel(self) -> None:
        self.draft = {}
        self.editing_id = None
        self.form = None
        self.mode = MODE_CLOSED

    def save(self) -> Optional[Dict[str, Any]]:
        """
        Validate the draft and commit it.

        Returns the saved record, or None when validation failed; in that
        case ``self.form`` carries the errors and the form stays open.
        """
        if not self.is_open:
            raise RuntimeError("save() called with no form open")

        form = self.form_class(data=self.draft)
        self.form = form
        if not form.is_valid():
            logger.info("Rejected %s draft: %s", self.key, form.errors.as_json())
            return None

        fields = form.to_record()
        if self.mode == MODE_EDIT:
            saved = None
            updated = []
            for record in self.collection:
                if record.get("id") == self.editing_id:
                    saved = self.reconcile({"id": record["id"], **fields}, previous=record)
                    updated.append(saved)
                else:
                    updated.append(record)
            if saved is None:
                # collection was replaced underneath the open form
                raise RecordNotFound(self.key, self.editing_id)
            self.collection = updated
            logger.info("Updated %s record %s", self.key, saved["id"])
        else:
            saved = self.reconcile({"id": self.new_id(), **fields})
            self.collection = self.collection + [saved]
            logger.info("Created %s record %s", self.key, saved["id"])

        self.store.save(self.key, self.collection)
        self.cancel()
        return saved

    # --- hooks ---

    def reconcile(self, record: Dict[str, Any], previous: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return record

    def new_id(self) -> str:
        existing = {record.get("id") for record in self.collection}
        stamp = int(self._clock() * 1000)
        candidate = f"{self.id_prefix}-{stamp}"
        while candidate in existing:
            stamp += 1
            candidate = f"{self.id_prefix}-{stamp}"
        return candidate


class CropScreen(CollectionScreen):
    key = CROPS_KEY
    id_prefix = "crop"
    fields = CROP_FIELDS
    date_fields = ("plantingDate", "expectedHarvestDate")
    form_class = CropForm

    def defaults(self):
        return {
            "name": "",
            "variety": "",
            "plantingDate": "",
            "expectedHarvestDate": "",
            "area": "",
            "status": "planted",
            "healthStatus": "good",
            "yieldEstimate": "",
        }


class InventoryScreen(CollectionScreen):
    key = INVENTORY_KEY
    id_prefix = "item"
    fields = INVENTORY_FIELDS
    form_class = InventoryItemForm

    def defaults(self):
        return {
            "name": "",
            "category": "seeds",
            "quantity": "",
            "unit": "",
            "minStock": "",
            "supplier": "",
            "cost": "",
        }

    def reconcile(self, record, previous=None):
        record["lastUpdated"] = self.today().isoformat()
        return record

    def search(self, term: Optional[str]) -> List[Dict[str, Any]]:
        """Filtered view of the collection; any matching field includes the item."""
        self.search_term = term or ""
        needle = self.search_term.strip().lower()
        if not needle:
            return list(self.collection)
        return [item for item in self.collection if _item_matches(item, needle)]


def _item_matches(item: Dict[str, Any], needle: str) -> bool:
    category = item.get("category", "")
    haystack = [
        item.get("name", ""),
        category,
        category_label(category),
        item.get("supplier") or "",
        item.get("unit", ""),
    ]
    for name in ("quantity", "minStock", "cost"):
        if item.get(name) is not None:
            haystack.append(format_number(item[name]))
    return any(needle in str(value).lower() for value in haystack)
