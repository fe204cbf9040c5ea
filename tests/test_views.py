import json

from django.test import TestCase
from django.urls import reverse

from farm.records import CROPS_KEY, INVENTORY_KEY
from farm.seed_data import default_crops, default_inventory

NEW_CROP = {
    "name": "Arveja",
    "variety": "Santa Isabel",
    "plantingDate": "2025-03-01",
    "expectedHarvestDate": "2025-06-01",
    "area": "1.2",
    "status": "planted",
    "healthStatus": "good",
    "yieldEstimate": "600",
}


class ViewTestCase(TestCase):
    def stored(self, key):
        return json.loads(self.client.session[key])

    def put(self, key, value):
        session = self.client.session
        session[key] = value
        session.save()


class PageRenderTests(ViewTestCase):
    def test_every_page_renders_with_seed_data(self):
        for name in ("dashboard", "inventory_list", "crop_list", "monitoring", "reports",
                     "crop_create", "inventory_create"):
            with self.subTest(page=name):
                response = self.client.get(reverse(name))
                self.assertEqual(response.status_code, 200)

    def test_dashboard_figures(self):
        response = self.client.get(reverse("dashboard"))
        self.assertEqual(response.context["crop_count"], len(default_crops()))
        self.assertEqual(response.context["active_crops"], 2)
        self.assertEqual(response.context["low_stock"], 2)

    def test_reports_handle_empty_crops(self):
        self.put(CROPS_KEY, "[]")
        response = self.client.get(reverse("reports"))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "n/a")

    def test_corrupt_store_falls_back_to_seed(self):
        self.put(INVENTORY_KEY, "{broken")
        response = self.client.get(reverse("inventory_list"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context["items"]), len(default_inventory()))

    def test_monitoring_shows_latest_reading(self):
        response = self.client.get(reverse("monitoring"))
        self.assertEqual(response.context["latest"], response.context["readings"][-1])

    def test_monitoring_history_is_newest_first(self):
        response = self.client.get(reverse("monitoring"))
        readings = response.context["readings"]
        history = response.context["history"]
        self.assertEqual(history, readings[::-1])
        self.assertEqual(history[0], response.context["latest"])

    def test_malformed_inventory_records_fall_back_to_seed(self):
        self.put(INVENTORY_KEY, json.dumps([
            {"id": "x", "name": "Urea", "category": "fertilizers", "quantity": "10",
             "unit": "kg", "minStock": 5, "lastUpdated": "2025-01-01"},
        ]))
        response = self.client.get(reverse("inventory_list"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context["items"]), len(default_inventory()))

    def test_crop_without_id_falls_back_to_seed(self):
        self.put(CROPS_KEY, json.dumps([{"name": "A", "variety": "B", "area": 1, "status": "planted"}]))
        response = self.client.get(reverse("crop_list"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context["crops"]), len(default_crops()))


class CropFormViewTests(ViewTestCase):
    def test_create_redirects_and_persists(self):
        response = self.client.post(reverse("crop_create"), NEW_CROP)
        self.assertRedirects(response, reverse("crop_list"))

        crops = self.stored(CROPS_KEY)
        self.assertEqual(len(crops), len(default_crops()) + 1)
        self.assertEqual(crops[-1]["name"], "Arveja")
        self.assertTrue(crops[-1]["id"].startswith("crop-"))

    def test_invalid_create_keeps_form_open(self):
        response = self.client.post(reverse("crop_create"), dict(NEW_CROP, area="0"))
        self.assertEqual(response.status_code, 200)
        self.assertIn("area", response.context["form"].errors)
        self.assertContains(response, "Revise los campos marcados")
        self.assertNotIn(CROPS_KEY, self.client.session.keys())

    def test_blank_required_field_asks_to_complete(self):
        response = self.client.post(reverse("crop_create"), dict(NEW_CROP, name=""))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Por favor complete los campos requeridos")

    def test_harvest_before_planting_asks_to_review(self):
        response = self.client.post(reverse("crop_create"),
                                    dict(NEW_CROP, expectedHarvestDate="2025-02-01"))
        self.assertEqual(response.status_code, 200)
        self.assertIn("expectedHarvestDate", response.context["form"].errors)
        self.assertContains(response, "Revise los campos marcados")
        self.assertNotIn(CROPS_KEY, self.client.session.keys())

    def test_edit_updates_in_place(self):
        response = self.client.post(reverse("crop_edit", args=["2"]), dict(NEW_CROP, status="harvesting"))
        self.assertRedirects(response, reverse("crop_list"))

        crops = self.stored(CROPS_KEY)
        seeds = default_crops()
        self.assertEqual(len(crops), len(seeds))
        self.assertEqual(crops[1]["id"], "2")
        self.assertEqual(crops[1]["status"], "harvesting")
        self.assertEqual(crops[0], seeds[0])
        self.assertEqual(crops[2:], seeds[2:])

    def test_edit_form_is_prefilled(self):
        response = self.client.get(reverse("crop_edit", args=["1"]))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.context["is_editing"])
        self.assertEqual(response.context["form"].initial["name"], "Papa Criolla")

    def test_edit_unknown_id_is_404(self):
        response = self.client.get(reverse("crop_edit", args=["missing"]))
        self.assertEqual(response.status_code, 404)
        self.assertIsNone(response.context["form"])

        response = self.client.post(reverse("crop_edit", args=["missing"]), NEW_CROP)
        self.assertEqual(response.status_code, 404)
        self.assertNotIn(CROPS_KEY, self.client.session.keys())


class InventoryViewTests(ViewTestCase):
    def test_search_filters_view(self):
        response = self.client.get(reverse("inventory_list"), {"q": "agrosur"})
        names = [item["name"] for item in response.context["items"]]
        self.assertEqual(names, ["Urea"])
        self.assertEqual(response.context["total"], len(default_inventory()))

    def test_search_without_match(self):
        response = self.client.get(reverse("inventory_list"), {"q": "zzz"})
        self.assertEqual(response.context["items"], [])

    def test_low_stock_flag(self):
        response = self.client.get(reverse("inventory_list"))
        flags = {item["name"]: item["low_stock"] for item in response.context["items"]}
        self.assertTrue(flags["Urea"])
        self.assertTrue(flags["Azadón"])
        self.assertFalse(flags["Semillas de Papa"])

    def test_edit_sets_last_updated(self):
        data = {"name": "Urea", "category": "fertilizers", "quantity": "80", "unit": "bultos",
                "minStock": "50", "supplier": "AgroSur", "cost": ""}
        self.client.post(reverse("inventory_edit", args=["2"]), data)
        item = self.stored(INVENTORY_KEY)[1]
        self.assertEqual(item["quantity"], 80)
        self.assertNotEqual(item["lastUpdated"], "2024-09-28")
        self.assertNotIn("cost", item)


class SyncTests(ViewTestCase):
    def test_revisions_advance_after_save(self):
        before = self.client.get(reverse("sync_status")).json()
        self.assertEqual(before, {CROPS_KEY: 0, INVENTORY_KEY: 0})

        self.client.post(reverse("crop_create"), NEW_CROP)
        after = self.client.get(reverse("sync_status")).json()
        self.assertEqual(after, {CROPS_KEY: 1, INVENTORY_KEY: 0})

    def test_list_pages_embed_poller(self):
        response = self.client.get(reverse("crop_list"))
        self.assertContains(response, 'id="sync-revisions"')
