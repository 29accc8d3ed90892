from __future__ import annotations

import io
import os
from unittest.mock import patch

import django

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "contactsite.settings")
os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
django.setup()

from django.apps import apps as django_apps
from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.core.cache import cache
from django.core.management import call_command
from django.template import Context, Template
from django.test import Client, SimpleTestCase, TestCase, override_settings
from django.urls import reverse

from apps.contact_data import lookup
from apps.contact_data.apps import get_service
from apps.contact_data.normalizer import LEVEL_ERROR, LEVEL_INFO, normalize_phone, normalize_settings
from apps.contact_data.registry import FieldRegistry, FieldRegistryFrozen
from apps.contact_data.renderer import RenderOptions, obfuscate_email, to_bool
from apps.contact_data.service import ContactDataService
from apps.contact_data.shortcodes import ShortcodeRegistry, parse_attributes
from apps.contact_data.signals import collect_contact_fields
from apps.site_settings import admin_contact
from apps.site_settings.models import SiteSettings
from apps.site_settings.options import get_option, update_option

User = get_user_model()

ADMIN = "admin@example.com"
OBFUSCATED_ADMIN = "admin&#64;example&#46;com"


class MemoryStore:
    def __init__(self, records=None):
        self.records = dict(records or {})

    def get_record(self, name):
        return self.records.get(name)

    def set_record(self, name, value):
        self.records[name] = value

    def delete_record(self, name):
        return self.records.pop(name, None) is not None


def make_service(record=None, **kwargs):
    store = MemoryStore({"public_contact_data": record} if record is not None else None)
    kwargs.setdefault("collect_fields", False)
    return ContactDataService(store=store, admin_email=lambda: ADMIN, **kwargs)


# =====================================================================
# REGISTRY
# =====================================================================
class FieldRegistryTests(SimpleTestCase):
    def test_default_fields_in_order(self):
        registry = FieldRegistry()
        self.assertEqual(
            registry.keys(), ["email", "phone", "googleplus", "facebook", "twitter"]
        )
        self.assertEqual(str(dict(registry.list())["phone"]), "Public phone number")

    def test_register_appends_and_override_keeps_position(self):
        registry = FieldRegistry()
        registry.register("mastodon", "Mastodon")
        registry.register("phone", "Hotline")
        self.assertEqual(registry.keys()[-1], "mastodon")
        self.assertEqual(registry.list()[1], ("phone", "Hotline"))

    def test_empty_label_hides_field(self):
        registry = FieldRegistry()
        registry.register("googleplus", "")
        self.assertFalse(registry.has("googleplus"))
        self.assertNotIn("googleplus", registry.keys())

    def test_registration_after_first_read_is_rejected(self):
        registry = FieldRegistry()
        self.assertTrue(registry.has("email"))
        with self.assertRaises(FieldRegistryFrozen):
            registry.register("late", "Too late")
        registry.reopen()
        registry.register("late", "Now fine")
        self.assertIn("late", registry)

    def test_collect_signal_extends_service_registry(self):
        def add_field(sender, registry, **kwargs):
            registry.register("mastodon", "Mastodon")

        collect_contact_fields.connect(add_field)
        try:
            service = make_service(collect_fields=True)
        finally:
            collect_contact_fields.disconnect(add_field)

        self.assertTrue(service.registry.has("mastodon"))
        self.assertTrue(service.shortcodes.has("public_mastodon"))


# =====================================================================
# NORMALIZER
# =====================================================================
class NormalizerTests(SimpleTestCase):
    def test_valid_emails_pass_unchanged(self):
        for email in ["a@example.com", "first.last+tag@sub.example.org", ""]:
            result = normalize_settings({"email": email}, {"email": "old@example.com"})
            self.assertEqual(result.record["email"], email)
            self.assertEqual(result.warnings, [])

    def test_invalid_email_falls_back_to_previous(self):
        result = normalize_settings({"email": "not-an-email"}, {"email": "old@example.com"})
        self.assertEqual(result.record["email"], "old@example.com")
        self.assertEqual(len(result.warnings), 1)
        warning = result.warnings[0]
        self.assertEqual(warning.field, "email")
        self.assertEqual(warning.level, LEVEL_ERROR)
        self.assertIn("not-an-email", warning.message)
        self.assertIn("old@example.com", warning.message)

    def test_invalid_email_without_previous_is_cleared(self):
        result = normalize_settings({"email": "broken@"}, None)
        self.assertEqual(result.record["email"], "")
        self.assertEqual(len(result.warnings), 1)

    def test_invalid_email_is_escaped_in_warning(self):
        result = normalize_settings({"email": "<b>x"}, {})
        self.assertIn("&lt;b&gt;x", result.warnings[0].message)

    def test_phone_spaces_become_hyphens(self):
        result = normalize_settings({"phone": "555 123"}, {})
        self.assertEqual(result.record["phone"], "555-123")
        self.assertEqual(len(result.warnings), 1)
        self.assertEqual(result.warnings[0].level, LEVEL_INFO)
        self.assertIn("555 123", result.warnings[0].message)
        self.assertIn("555-123", result.warnings[0].message)

    def test_canonical_phone_has_no_warning(self):
        result = normalize_settings({"phone": "+1-555-123"}, {})
        self.assertEqual(result.record["phone"], "+1-555-123")
        self.assertEqual(result.warnings, [])

    def test_normalize_phone_strips_foreign_characters(self):
        self.assertEqual(normalize_phone("(555)  12 34"), "555-12-34")
        self.assertEqual(normalize_phone("+49 (30) 123"), "+49-30-123")

    def test_values_are_trimmed(self):
        result = normalize_settings(
            {"email": "  a@example.com ", "twitter": "\thttps://twitter.com/x \n", "phone": " 123 "},
            {},
        )
        self.assertEqual(result.record["email"], "a@example.com")
        self.assertEqual(result.record["twitter"], "https://twitter.com/x")
        self.assertEqual(result.record["phone"], "123")
        self.assertEqual(result.warnings, [])

    def test_missing_keys_keep_previous_values(self):
        result = normalize_settings({"phone": "123"}, {"twitter": "t", "phone": "9"})
        self.assertEqual(result.record, {"twitter": "t", "phone": "123"})

    def test_none_values_become_empty(self):
        result = normalize_settings({"facebook": None}, {})
        self.assertEqual(result.record["facebook"], "")

    def test_normalized_record_is_a_fixed_point(self):
        submitted = {"email": "nope", "phone": " 555  123 x9 ", "twitter": " t "}
        first = normalize_settings(submitted, {"email": "d@example.com"})
        second = normalize_settings(first.record, {"email": "other@example.com"})
        self.assertEqual(second.record, first.record)
        self.assertEqual(second.warnings, [])


# =====================================================================
# RENDERER / LOOKUP
# =====================================================================
class LookupTests(SimpleTestCase):
    def test_unknown_field_lists_allowed_keys(self):
        out = make_service({}).lookup("bogus", {})
        self.assertEqual(
            out,
            "Invalid field: bogus. Allowed fields: email, phone, googleplus, facebook, twitter.",
        )

    def test_unknown_field_is_escaped(self):
        out = make_service({}).lookup("<x>", {})
        self.assertIn("&lt;x&gt;", out)

    def test_save_logs_structured_event(self):
        service = make_service({})
        with self.assertLogs("apps.contact_data.service", level="INFO") as logs:
            service.save({"phone": "555 123"})
        saved = logs.records[0]
        self.assertEqual(saved.event["option"], "public_contact_data")
        rewritten = logs.records[1]
        self.assertEqual(rewritten.event, {"field": "phone", "severity": "info"})

    def test_phone_link(self):
        out = make_service({"phone": "+1-555-123"}).lookup("phone", {"link": True})
        self.assertEqual(out, "<a href='tel:+1-555-123'>+1-555-123</a>")

    def test_email_falls_back_to_obfuscated_admin_address(self):
        out = make_service({"email": ""}).lookup("email", {})
        self.assertNotIn(ADMIN, out)
        self.assertEqual(out, f"<a href='mailto:{OBFUSCATED_ADMIN}'>{OBFUSCATED_ADMIN}</a>")

    def test_email_without_record_uses_admin_address(self):
        out = make_service().lookup("email", {"link": False})
        self.assertEqual(out, OBFUSCATED_ADMIN)

    def test_stored_email_is_obfuscated(self):
        out = make_service({"email": "info@example.org"}).lookup("email", {"link": False})
        self.assertEqual(out, "info&#64;example&#46;org")

    def test_empty_value_skips_wrappers(self):
        service = make_service({"twitter": ""})
        self.assertEqual(service.lookup("twitter", {"before": "(", "after": ")"}), "")
        self.assertEqual(service.lookup("twitter", {"link": False, "before": "(", "after": ")"}), "")

    def test_pattern_applies_to_empty_value(self):
        out = make_service({"twitter": ""}).lookup(
            "twitter", {"pattern": "Follow us: %value%", "before": "(", "after": ")"}
        )
        self.assertEqual(out, "(Follow us: )")

    def test_empty_pattern_result_skips_wrappers(self):
        out = make_service({"twitter": ""}).lookup(
            "twitter", {"pattern": "%value%", "before": "(", "after": ")"}
        )
        self.assertEqual(out, "")

    def test_before_and_after_wrap_value(self):
        out = make_service({"twitter": "@site"}).lookup(
            "twitter", {"before": "(", "after": ")", "link": False}
        )
        self.assertEqual(out, "(@site)")

    def test_pattern_wins_over_link(self):
        out = make_service({"facebook": "https://fb.example/site"}).lookup(
            "facebook", {"pattern": '<a class="fb" href="%value%">%value%</a>', "link": True}
        )
        self.assertEqual(
            out, '<a class="fb" href="https://fb.example/site">https://fb.example/site</a>'
        )

    def test_other_fields_link_without_scheme(self):
        out = make_service({"facebook": "https://fb.example/site"}).lookup("facebook")
        self.assertEqual(out, "<a href='https://fb.example/site'>https://fb.example/site</a>")

    def test_stored_markup_is_escaped(self):
        out = make_service({"twitter": "<script>"}).lookup("twitter", {"link": False})
        self.assertEqual(out, "&lt;script&gt;")

    def test_unregistered_keys_in_record_are_not_rendered(self):
        out = make_service({"fax": "123"}).lookup("fax", {})
        self.assertTrue(out.startswith("Invalid field: fax."))

    def test_print_writes_to_stream_and_returns(self):
        stream = io.StringIO()
        out = make_service({"phone": "123"}).lookup("phone", {"print": True, "link": False}, stream=stream)
        self.assertEqual(out, "123")
        self.assertEqual(stream.getvalue(), "123")

    def test_print_of_unknown_field_writes_diagnostic(self):
        stream = io.StringIO()
        out = make_service({}).lookup("bogus", {"print": True}, stream=stream)
        self.assertEqual(stream.getvalue(), out)

    def test_no_output_without_print(self):
        with patch("sys.stdout", new_callable=io.StringIO) as fake_out:
            make_service({"phone": "123"}).lookup("phone")
        self.assertEqual(fake_out.getvalue(), "")

    def test_render_options_defaults_and_string_booleans(self):
        opts = RenderOptions.from_mapping({"link": "false", "print": "1", "unknown": "x"})
        self.assertFalse(opts.link)
        self.assertTrue(opts.print)
        self.assertEqual(opts.before, "")
        self.assertIsNone(opts.pattern)
        self.assertTrue(RenderOptions.from_mapping(None).link)

    def test_to_bool(self):
        self.assertTrue(to_bool("Yes"))
        self.assertFalse(to_bool("off"))
        self.assertTrue(to_bool("maybe", default=True))
        self.assertFalse(to_bool(0))

    def test_obfuscate_email(self):
        self.assertEqual(obfuscate_email("a.b@c.d"), "a&#46;b&#64;c&#46;d")


# =====================================================================
# PLACEHOLDERS
# =====================================================================
class PlaceholderTests(SimpleTestCase):
    def setUp(self):
        self.service = make_service({"phone": "+1-555-123", "twitter": "@site"})

    def test_one_placeholder_per_field(self):
        self.assertEqual(
            sorted(self.service.shortcodes.tags()),
            sorted(f"public_{key}" for key in self.service.registry.keys()),
        )

    def test_expand_with_attributes(self):
        out = self.service.expand_placeholders(
            "Call [public_phone link=false before='Tel: '] now"
        )
        self.assertEqual(out, "Call Tel: +1-555-123 now")

    def test_expand_default_links(self):
        out = self.service.expand_placeholders("[public_phone]")
        self.assertEqual(out, "<a href='tel:+1-555-123'>+1-555-123</a>")

    def test_pattern_placeholder_on_empty_field(self):
        service = make_service({"twitter": ""})
        out = service.expand_placeholders('<p>[public_twitter pattern="Follow us: %value%"]</p>')
        self.assertEqual(out, "<p>Follow us: </p>")

    def test_pattern_with_quotes_and_self_closing(self):
        out = self.service.expand_placeholders(
            """[public_twitter pattern='<span class="tw">%value%</span>' /]"""
        )
        self.assertEqual(out, '<span class="tw">@site</span>')

    def test_escaped_and_unknown_tags_are_left_alone(self):
        out = self.service.expand_placeholders("[[public_phone]] [public_fax] [b]")
        self.assertEqual(out, "[public_phone] [public_fax] [b]")

    def test_placeholders_never_print(self):
        with patch("sys.stdout", new_callable=io.StringIO) as fake_out:
            out = self.service.expand_placeholders('[public_phone print="true" link="no"]')
        self.assertEqual(out, "+1-555-123")
        self.assertEqual(fake_out.getvalue(), "")

    def test_parse_attributes(self):
        attrs = parse_attributes(""" Link="no" before='<b>' after=</b> positional """)
        self.assertEqual(attrs, {"link": "no", "before": "<b>", "after": "</b>"})

    def test_registry_rejects_bad_tag(self):
        with self.assertRaises(ValueError):
            ShortcodeRegistry().add("bad tag", lambda attrs: "")


# =====================================================================
# INTEGRATION (option store, template tags, views, lifecycle)
# =====================================================================
@override_settings(ALLOWED_HOSTS=["testserver", "localhost"], ROOT_URLCONF="contactsite.urls")
class ContactDataIntegrationTests(TestCase):
    def setUp(self) -> None:
        cache.clear()
        admin_contact.reset_cache()
        ss = SiteSettings.get_solo()
        ss.admin_email = ADMIN
        ss.save()
        self.service = get_service()

    def test_save_persists_merged_record(self):
        update_option(self.service.option_name, {"twitter": "@old", "fax": "1"})
        result = self.service.save({"phone": "555 123", "email": "x@example.com"})
        self.assertEqual(len(result.warnings), 1)
        stored = get_option(self.service.option_name)
        self.assertEqual(
            stored,
            {"twitter": "@old", "fax": "1", "phone": "555-123", "email": "x@example.com"},
        )

    def test_lookup_reads_latest_record(self):
        self.service.save({"phone": "123"})
        self.assertEqual(lookup("phone", link=False), "123")
        self.service.save({"phone": "456"})
        self.assertEqual(lookup("phone", link=False), "456")

    def test_email_fallback_from_site_settings(self):
        self.assertEqual(lookup("email", link=False), OBFUSCATED_ADMIN)

    def test_admin_address_falls_back_to_default_from_email(self):
        ss = SiteSettings.get_solo()
        ss.admin_email = ""
        ss.save()
        with override_settings(ADMINS=[], DEFAULT_FROM_EMAIL="hello@example.net"):
            admin_contact.reset_cache()
            self.assertEqual(lookup("email", link=False), "hello&#64;example&#46;net")
        admin_contact.reset_cache()

    def test_configured_admin_email_wins_over_site_settings(self):
        with override_settings(CONTACT_DATA={"ADMIN_EMAIL": "cfg@example.com"}):
            service = django_apps.get_app_config("contact_data").build_service()
        self.assertEqual(service.lookup("email", {"link": False}), "cfg&#64;example&#46;com")

    def test_template_tag(self):
        self.service.save({"phone": "+1-555-123"})
        tpl = Template('{% load contact_data_tags %}{% public_contact "phone" before="T: " %}')
        out = tpl.render(Context({}))
        self.assertEqual(out, "T: <a href='tel:+1-555-123'>+1-555-123</a>")

    def test_template_tag_never_prints(self):
        self.service.save({"phone": "1"})
        tpl = Template('{% load contact_data_tags %}{% public_contact "phone" print=True %}')
        with patch("sys.stdout", new_callable=io.StringIO) as fake_out:
            tpl.render(Context({}))
        self.assertEqual(fake_out.getvalue(), "")

    def test_expand_placeholders_filter(self):
        self.service.save({"twitter": "@site"})
        tpl = Template("{% load contact_data_tags %}{{ body|expand_placeholders }}")
        out = tpl.render(Context({"body": "<p>[public_twitter link=0]</p>"}))
        self.assertEqual(out, "<p>@site</p>")

    def test_deactivate_command_deletes_record(self):
        self.service.save({"phone": "1"})
        out = io.StringIO()
        call_command("deactivate_contact_data", "--noinput", stdout=out)
        self.assertIn("deleted", out.getvalue())
        self.assertIsNone(get_option(self.service.option_name))
        self.assertFalse(self.service.deactivate())


@override_settings(ALLOWED_HOSTS=["testserver", "localhost"], ROOT_URLCONF="contactsite.urls")
class ContactSettingsViewTests(TestCase):
    def setUp(self) -> None:
        cache.clear()
        admin_contact.reset_cache()
        self.staff = User.objects.create_user(
            username="staff", email="staff@example.com", password="pass-1234", is_staff=True
        )
        self.client = Client()
        self.url = reverse("contact_data:settings")

    def test_site_settings_admin_links_to_settings_page(self):
        admin_user = User.objects.create_superuser(
            username="root", email="root@example.com", password="pass-1234"
        )
        self.client.force_login(admin_user)
        res = self.client.get(reverse("admin:site_settings_sitesettings_change"))
        self.assertEqual(res.status_code, 200)
        self.assertContains(res, f'href="{self.url}"')

    def test_requires_staff(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, 302)
        self.assertIn(reverse("admin:login"), res["Location"])

    def test_get_renders_inputs_with_help(self):
        self.client.force_login(self.staff)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, 200)
        self.assertContains(res, 'id="public_contact_data_phone"')
        self.assertContains(res, "<code>[public_twitter]</code>")

    def test_post_saves_and_reports_warnings(self):
        self.client.force_login(self.staff)
        res = self.client.post(
            self.url,
            {
                "email": "invalid",
                "phone": "555 123",
                "googleplus": "",
                "facebook": " https://fb.example/site ",
                "twitter": "",
            },
        )
        self.assertRedirects(res, self.url, fetch_redirect_response=False)
        stored = get_option(get_service().option_name)
        self.assertEqual(stored["phone"], "555-123")
        self.assertEqual(stored["email"], "")
        self.assertEqual(stored["facebook"], "https://fb.example/site")

        msgs = list(get_messages(res.wsgi_request))
        levels = sorted(m.level_tag for m in msgs)
        self.assertEqual(levels, ["error", "info", "success"])
