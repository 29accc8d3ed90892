from __future__ import annotations

import io
import os

import django

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "contactsite.settings")
os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
django.setup()

from django.core.cache import cache
from django.core.management import call_command
from django.test import TestCase, override_settings

from apps.site_settings import admin_contact
from apps.site_settings.models import SiteOption, SiteSettings
from apps.site_settings.options import (
    OptionStore,
    delete_option,
    get_option,
    option_cache_key,
    update_option,
)


class OptionStoreTests(TestCase):
    def setUp(self) -> None:
        cache.clear()

    def test_absent_option_returns_default(self):
        self.assertIsNone(get_option("missing"))
        self.assertEqual(get_option("missing", {"a": 1}), {"a": 1})

    def test_update_replaces_whole_value(self):
        update_option("sample", {"a": "1", "b": "2"})
        update_option("sample", {"a": "3"})
        self.assertEqual(get_option("sample"), {"a": "3"})
        self.assertEqual(SiteOption.objects.filter(name="sample").count(), 1)

    def test_cached_value_is_invalidated_on_save(self):
        update_option("sample", {"a": "1"})
        self.assertEqual(get_option("sample"), {"a": "1"})
        self.assertIsNotNone(cache.get(option_cache_key("sample")))

        row = SiteOption.objects.get(name="sample")
        row.value = {"a": "2"}
        row.save()
        self.assertIsNone(cache.get(option_cache_key("sample")))
        self.assertEqual(get_option("sample"), {"a": "2"})

    def test_missing_marker_is_dropped_when_option_appears(self):
        self.assertIsNone(get_option("late"))
        update_option("late", {"x": "y"})
        self.assertEqual(get_option("late"), {"x": "y"})

    def test_delete(self):
        update_option("sample", {"a": "1"})
        self.assertTrue(delete_option("sample"))
        self.assertFalse(delete_option("sample"))
        self.assertIsNone(get_option("sample"))

    def test_store_adapter(self):
        store = OptionStore(timeout=60)
        self.assertIsNone(store.get_record("rec"))
        store.set_record("rec", {"k": "v"})
        self.assertEqual(store.get_record("rec"), {"k": "v"})
        self.assertTrue(store.delete_record("rec"))
        self.assertIsNone(store.get_record("rec"))


class AdminContactTests(TestCase):
    def setUp(self) -> None:
        admin_contact.reset_cache()

    def tearDown(self) -> None:
        admin_contact.reset_cache()

    def test_site_settings_address_wins(self):
        ss = SiteSettings.get_solo()
        ss.admin_email = "owner@example.com"
        ss.save()
        self.assertEqual(admin_contact.get_admin_email(), "owner@example.com")

    @override_settings(ADMINS=[("Ops", "ops@example.com")], DEFAULT_FROM_EMAIL="from@example.com")
    def test_admins_setting_is_next(self):
        self.assertEqual(admin_contact.get_admin_email(), "ops@example.com")

    @override_settings(ADMINS=[], DEFAULT_FROM_EMAIL="from@example.com")
    def test_default_from_email_is_last(self):
        self.assertEqual(admin_contact.get_admin_email(), "from@example.com")

    @override_settings(ADMINS=[], DEFAULT_FROM_EMAIL="from@example.com")
    def test_address_is_reread_after_settings_change(self):
        self.assertEqual(admin_contact.get_admin_email(), "from@example.com")
        SiteSettings.objects.update_or_create(pk=1, defaults={"admin_email": "new@example.com"})
        self.assertEqual(admin_contact.get_admin_email(), "new@example.com")


class ClearCacheCommandTests(TestCase):
    def test_clears_named_option(self):
        update_option("sample", {"a": "1"})
        get_option("sample")
        out = io.StringIO()
        call_command("clear_site_settings_cache", "sample", stdout=out)
        self.assertIsNone(cache.get(option_cache_key("sample")))
        self.assertIn("cleared", out.getvalue())
