from datetime import date, timedelta

from django.test import SimpleTestCase

from farm import metrics
from farm.records import is_low_stock


class LowStockTests(SimpleTestCase):
    def test_below_minimum(self):
        self.assertTrue(is_low_stock({"quantity": 3, "minStock": 5}))

    def test_boundary_is_inclusive(self):
        self.assertTrue(is_low_stock({"quantity": 5, "minStock": 5}))

    def test_above_minimum(self):
        self.assertFalse(is_low_stock({"quantity": 6, "minStock": 5}))

    def test_low_stock_count(self):
        items = [
            {"quantity": 3, "minStock": 5},
            {"quantity": 5, "minStock": 5},
            {"quantity": 6, "minStock": 5},
        ]
        self.assertEqual(metrics.low_stock_count(items), 2)


class CropMetricsTests(SimpleTestCase):
    def setUp(self):
        self.crops = [
            {"area": 2, "yieldEstimate": 1000, "status": "growing", "healthStatus": "good"},
            {"area": 3, "yieldEstimate": 1500, "status": "harvesting", "healthStatus": "good"},
        ]

    def test_totals(self):
        self.assertEqual(metrics.total_area(self.crops), 5)
        self.assertEqual(metrics.estimated_yield(self.crops), 2500)
        self.assertEqual(metrics.yield_per_hectare(self.crops), 500)

    def test_missing_yield_counts_as_zero(self):
        crops = self.crops + [{"area": 5, "status": "planted"}]
        self.assertEqual(metrics.estimated_yield(crops), 2500)
        self.assertEqual(metrics.yield_per_hectare(crops), 250)

    def test_empty_collection_has_no_yield_per_hectare(self):
        self.assertEqual(metrics.total_area([]), 0)
        self.assertIsNone(metrics.yield_per_hectare([]))
        self.assertEqual(metrics.format_yield_per_hectare([]), "n/a")

    def test_active_crops(self):
        crops = self.crops + [{"status": "planted"}, {"status": "completed"}]
        self.assertEqual(metrics.active_crops(crops), 2)

    def test_status_breakdown_follows_declared_order(self):
        breakdown = metrics.status_breakdown(self.crops)
        self.assertEqual([row["status"] for row in breakdown],
                         ["planted", "growing", "harvesting", "completed"])
        self.assertEqual([row["value"] for row in breakdown], [0, 1, 1, 0])

    def test_prevailing_health_prefers_healthier_on_tie(self):
        crops = [{"healthStatus": "poor"}, {"healthStatus": "excellent"}]
        self.assertEqual(metrics.prevailing_health(crops), "excellent")
        self.assertIsNone(metrics.prevailing_health([]))


class UpcomingHarvestTests(SimpleTestCase):
    def test_window_is_inclusive_on_both_ends(self):
        today = date(2025, 3, 1)
        crops = [
            {"expectedHarvestDate": (today - timedelta(days=1)).isoformat()},
            {"expectedHarvestDate": today.isoformat()},
            {"expectedHarvestDate": (today + timedelta(days=30)).isoformat()},
            {"expectedHarvestDate": (today + timedelta(days=31)).isoformat()},
            {"expectedHarvestDate": "someday"},
        ]
        self.assertEqual(metrics.upcoming_harvests(crops, today), 2)
        self.assertEqual(metrics.upcoming_harvests(crops, today, window=31), 3)


class InventoryMetricsTests(SimpleTestCase):
    def setUp(self):
        self.items = [
            {"category": "seeds", "cost": 100},
            {"category": "seeds"},
            {"category": "harvest", "cost": 50},
        ]

    def test_category_diversity(self):
        self.assertEqual(metrics.category_diversity(self.items), 2)

    def test_total_value_ignores_missing_cost(self):
        self.assertEqual(metrics.total_inventory_value(self.items), 150)

    def test_harvested_products(self):
        self.assertEqual(metrics.harvested_products(self.items), 1)


class ReportTests(SimpleTestCase):
    def test_production_report_with_no_area(self):
        report = metrics.production_report([])
        self.assertEqual(dict(report["rows"])["Rendimiento por Hectárea"], "n/a")

    def test_production_report_values(self):
        crops = [{"area": 2, "yieldEstimate": 1000}, {"area": 3, "yieldEstimate": 1500}]
        rows = dict(metrics.production_report(crops)["rows"])
        self.assertEqual(rows["Total de Cultivos"], 2)
        self.assertEqual(rows["Área Total"], "5.0 ha")
        self.assertEqual(rows["Rendimiento Estimado"], "2,500 kg")
        self.assertEqual(rows["Rendimiento por Hectárea"], "500 kg/ha")

    def test_planning_report_labels_window(self):
        report = metrics.planning_report([], date(2025, 1, 1), window=14)
        rows = dict(report["rows"])
        self.assertEqual(rows["Próximas Cosechas (14 días)"], 0)
        self.assertEqual(rows["Salud Predominante"], "n/a")

    def test_latest_reading(self):
        self.assertIsNone(metrics.latest_reading([]))
        self.assertEqual(metrics.latest_reading([{"date": "a"}, {"date": "b"}]), {"date": "b"})
