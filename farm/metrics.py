"""
Derived figures for the dashboard and report pages.

Everything here is a pure function of the collections passed in. Results
are recomputed on every request and never written back to the store.
"""
from collections import Counter
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from .records import (
    ACTIVE_STATUSES,
    HEALTH_CHOICES,
    STATUS_CHOICES,
    health_label,
    is_low_stock,
    parse_date,
)

NOT_AVAILABLE = "n/a"


def active_crops(crops: Iterable[Dict[str, Any]]) -> int:
    return sum(1 for c in crops if c.get("status") in ACTIVE_STATUSES)


def count_status(crops: Iterable[Dict[str, Any]], status: str) -> int:
    return sum(1 for c in crops if c.get("status") == status)


def status_breakdown(crops: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """One entry per status, in the order the statuses are declared."""
    return [
        {"status": key, "label": label, "value": count_status(crops, key)}
        for key, label in STATUS_CHOICES
    ]


def low_stock_count(items: Iterable[Dict[str, Any]]) -> int:
    return sum(1 for i in items if is_low_stock(i))


def total_area(crops: Iterable[Dict[str, Any]]) -> float:
    return sum(c.get("area", 0) for c in crops)


def estimated_yield(crops: Iterable[Dict[str, Any]]) -> float:
    return sum(c.get("yieldEstimate") or 0 for c in crops)


def yield_per_hectare(crops: List[Dict[str, Any]]) -> Optional[float]:
    """Estimated kg per hectare, or None when there is no planted area."""
    area = total_area(crops)
    if area <= 0:
        return None
    return estimated_yield(crops) / area


def upcoming_harvests(crops: Iterable[Dict[str, Any]], today: date, window: int = 30) -> int:
    count = 0
    for crop in crops:
        harvest = parse_date(crop.get("expectedHarvestDate"))
        if harvest is None:
            continue
        if 0 <= (harvest - today).days <= window:
            count += 1
    return count


def category_diversity(items: Iterable[Dict[str, Any]]) -> int:
    return len({i.get("category") for i in items})


def total_inventory_value(items: Iterable[Dict[str, Any]]) -> float:
    return sum(i.get("cost") or 0 for i in items)


def harvested_products(items: Iterable[Dict[str, Any]]) -> int:
    return sum(1 for i in items if i.get("category") == "harvest")


def prevailing_health(crops: List[Dict[str, Any]]) -> Optional[str]:
    """Most common health status; ties go to the healthier status."""
    if not crops:
        return None
    counts = Counter(c.get("healthStatus") for c in crops)
    order = [key for key, _ in HEALTH_CHOICES]
    return max(order, key=lambda key: (counts.get(key, 0), -order.index(key)))


def latest_reading(readings: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    return readings[-1] if readings else None


# ---------------------------------------------------------------------------
# Display helpers and report builders
# ---------------------------------------------------------------------------

def format_quantity(value, decimals=0) -> str:
    """Thousands-separated number, e.g. ``12,500`` or ``8.8``."""
    return f"{value:,.{decimals}f}"


def format_yield_per_hectare(crops: List[Dict[str, Any]]) -> str:
    ratio = yield_per_hectare(crops)
    if ratio is None:
        return NOT_AVAILABLE
    return f"{format_quantity(ratio)} kg/ha"


def production_report(crops: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "title": "Reporte de Producción",
        "description": "Resumen completo de cultivos y rendimientos",
        "rows": [
            ("Total de Cultivos", len(crops)),
            ("Área Total", f"{format_quantity(total_area(crops), 1)} ha"),
            ("Rendimiento Estimado", f"{format_quantity(estimated_yield(crops))} kg"),
            ("Rendimiento por Hectárea", format_yield_per_hectare(crops)),
        ],
    }


def inventory_report(items: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "title": "Reporte de Inventario",
        "description": "Estado actual de productos e insumos",
        "rows": [
            ("Total Items", len(items)),
            ("Valor Total", f"${format_quantity(total_inventory_value(items))}"),
            ("Items con Stock Bajo", low_stock_count(items)),
            ("Categorías", category_diversity(items)),
        ],
    }


def planning_report(crops: List[Dict[str, Any]], today: date, window: int = 30) -> Dict[str, Any]:
    health = prevailing_health(crops)
    return {
        "title": "Reporte de Planificación",
        "description": "Calendario de siembra y cosecha",
        "rows": [
            ("Cultivos en Crecimiento", count_status(crops, "growing")),
            ("Cultivos en Cosecha", count_status(crops, "harvesting")),
            (f"Próximas Cosechas ({window} días)", upcoming_harvests(crops, today, window)),
            ("Salud Predominante", health_label(health) if health else NOT_AVAILABLE),
        ],
    }
