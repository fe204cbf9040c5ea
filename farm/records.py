"""
Record shapes for the farm collections.

Records are plain dicts with camelCase keys so that the stored JSON matches
the field names the dashboard has always used. This module holds the closed
enumerations, their Spanish display labels and small helpers shared by
forms, screens and metrics.
"""
from datetime import date, datetime
from typing import Any, Dict, Optional

CROPS_KEY = "crops"
INVENTORY_KEY = "inventory"
REVISIONS_KEY = "revisions"

STATUS_CHOICES = [
    ("planted", "Plantado"),
    ("growing", "En Crecimiento"),
    ("harvesting", "En Cosecha"),
    ("completed", "Completado"),
]

HEALTH_CHOICES = [
    ("excellent", "Excelente"),
    ("good", "Bueno"),
    ("fair", "Regular"),
    ("poor", "Pobre"),
]

CATEGORY_CHOICES = [
    ("seeds", "Semillas"),
    ("fertilizers", "Fertilizantes"),
    ("pesticides", "Pesticidas"),
    ("tools", "Herramientas"),
    ("harvest", "Cosecha"),
]

ACTIVE_STATUSES = ("growing", "harvesting")

CROP_FIELDS = (
    "name",
    "variety",
    "plantingDate",
    "expectedHarvestDate",
    "area",
    "status",
    "healthStatus",
    "yieldEstimate",
)

INVENTORY_FIELDS = (
    "name",
    "category",
    "quantity",
    "unit",
    "minStock",
    "supplier",
    "cost",
)

_STATUS_LABELS = dict(STATUS_CHOICES)
_HEALTH_LABELS = dict(HEALTH_CHOICES)
_CATEGORY_LABELS = dict(CATEGORY_CHOICES)


def status_label(status: str) -> str:
    return _STATUS_LABELS.get(status, status)


def health_label(health: str) -> str:
    return _HEALTH_LABELS.get(health, health)


def category_label(category: str) -> str:
    return _CATEGORY_LABELS.get(category, category)


def is_low_stock(item: Dict[str, Any]) -> bool:
    """Low stock is inclusive: an item sitting exactly at its minimum is low."""
    return item.get("quantity", 0) <= item.get("minStock", 0)


def plain_number(value):
    """Return ints for integral floats so JSON keeps ``10`` rather than ``10.0``."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_number(value) -> str:
    """String form used by search: integral values print without a decimal part."""
    return str(plain_number(value))


def iso_date(value) -> str:
    """Normalize a date or date-like string to ``YYYY-MM-DD``."""
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.isoformat()
    if value is None:
        return ""
    text = str(value).strip()
    if not text:
        return ""
    # Accept full ISO timestamps as produced by some pickers
    return date.fromisoformat(text[:10]).isoformat()


def parse_date(value) -> Optional[date]:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except (TypeError, ValueError):
        return None


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _has_id(record: Dict[str, Any]) -> bool:
    return isinstance(record.get("id"), str) and bool(record["id"])


def is_valid_crop(record: Dict[str, Any]) -> bool:
    """True when a stored crop has the fields lists and metrics compute with."""
    if not _has_id(record) or not _is_number(record.get("area")):
        return False
    return record.get("yieldEstimate") is None or _is_number(record["yieldEstimate"])


def is_valid_item(record: Dict[str, Any]) -> bool:
    """True when a stored inventory item has an id and numeric stock figures."""
    if not _has_id(record):
        return False
    if not (_is_number(record.get("quantity")) and _is_number(record.get("minStock"))):
        return False
    return record.get("cost") is None or _is_number(record["cost"])


RECORD_VALIDATORS = {
    CROPS_KEY: is_valid_crop,
    INVENTORY_KEY: is_valid_item,
}
