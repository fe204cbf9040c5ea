"""
Default collections used the first time a browser opens the dashboard.

Each factory returns a fresh deep copy so callers can mutate the result
without touching the module constants.
"""
import copy

from .records import CROPS_KEY, INVENTORY_KEY

SEED_CROPS = (
    {
        "id": "1",
        "name": "Papa Criolla",
        "variety": "Yema de Huevo",
        "plantingDate": "2024-08-15",
        "expectedHarvestDate": "2024-12-15",
        "area": 2.5,
        "status": "growing",
        "healthStatus": "excellent",
        "yieldEstimate": 12500,
    },
    {
        "id": "2",
        "name": "Maíz",
        "variety": "ICA V-305",
        "plantingDate": "2024-07-01",
        "expectedHarvestDate": "2024-11-30",
        "area": 4,
        "status": "harvesting",
        "healthStatus": "good",
        "yieldEstimate": 18000,
    },
    {
        "id": "3",
        "name": "Fríjol",
        "variety": "Cargamanto",
        "plantingDate": "2024-09-10",
        "expectedHarvestDate": "2025-01-20",
        "area": 1.5,
        "status": "planted",
        "healthStatus": "good",
        "yieldEstimate": 2400,
    },
    {
        "id": "4",
        "name": "Tomate",
        "variety": "Chonto",
        "plantingDate": "2024-06-20",
        "expectedHarvestDate": "2024-10-05",
        "area": 0.8,
        "status": "completed",
        "healthStatus": "fair",
        "yieldEstimate": 9600,
    },
)

SEED_INVENTORY = (
    {
        "id": "1",
        "name": "Semillas de Papa",
        "category": "seeds",
        "quantity": 500,
        "unit": "kg",
        "minStock": 200,
        "lastUpdated": "2024-10-01",
        "supplier": "Semillas del Valle",
        "cost": 750000,
    },
    {
        "id": "2",
        "name": "Urea",
        "category": "fertilizers",
        "quantity": 40,
        "unit": "bultos",
        "minStock": 50,
        "lastUpdated": "2024-09-28",
        "supplier": "AgroSur",
        "cost": 4200000,
    },
    {
        "id": "3",
        "name": "Fungicida Mancozeb",
        "category": "pesticides",
        "quantity": 12,
        "unit": "litros",
        "minStock": 10,
        "lastUpdated": "2024-09-20",
        "supplier": "Agroquímicos Andinos",
        "cost": 540000,
    },
    {
        "id": "4",
        "name": "Azadón",
        "category": "tools",
        "quantity": 8,
        "unit": "unidades",
        "minStock": 8,
        "lastUpdated": "2024-08-15",
        "cost": 320000,
    },
    {
        "id": "5",
        "name": "Maíz Cosechado",
        "category": "harvest",
        "quantity": 3200,
        "unit": "kg",
        "minStock": 0,
        "lastUpdated": "2024-10-10",
    },
)

SEED_MONITORING = (
    {"date": "2024-10-01", "temperature": 18.5, "humidity": 72, "rainfall": 4.2, "soilMoisture": 38},
    {"date": "2024-10-02", "temperature": 19.1, "humidity": 70, "rainfall": 0, "soilMoisture": 36},
    {"date": "2024-10-03", "temperature": 20.3, "humidity": 65, "rainfall": 0, "soilMoisture": 33},
    {"date": "2024-10-04", "temperature": 17.8, "humidity": 80, "rainfall": 12.6, "soilMoisture": 45},
    {"date": "2024-10-05", "temperature": 16.9, "humidity": 84, "rainfall": 8.1, "soilMoisture": 48},
    {"date": "2024-10-06", "temperature": 18.2, "humidity": 76, "rainfall": 1.3, "soilMoisture": 44},
    {"date": "2024-10-07", "temperature": 19.6, "humidity": 71, "rainfall": 0, "soilMoisture": 41},
)


def default_crops():
    return copy.deepcopy(list(SEED_CROPS))


def default_inventory():
    return copy.deepcopy(list(SEED_INVENTORY))


def default_monitoring():
    return copy.deepcopy(list(SEED_MONITORING))


def default_seeds():
    """Seed factories keyed by store key, ready to hand to ``RecordStore``."""
    return {
        CROPS_KEY: default_crops,
        INVENTORY_KEY: default_inventory,
    }
