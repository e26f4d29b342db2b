from io import StringIO
from unittest import mock
import json
import os
import tempfile

from django.contrib.auth.models import User
from django.core.management import call_command
from django.db import OperationalError
from django.test import SimpleTestCase, TestCase, override_settings

from .factories import RedirectRecordFactory
from .listing import filter_records, paginate_records, related_records, sort_records
from .models import RedirectRecord
from .records import (
    InvalidRecord,
    RecordNotFound,
    SlugConflict,
    StoreUnavailable,
    create_record,
    delete_record,
    generate_slug,
    get_record,
    list_records,
    update_record,
)
from .text import meta_description, split_keywords, suggest_keywords

VALID = {
    "title": "Ten Tips for Better SEO",
    "desc": "Everything you need to know about meta tags.",
    "url": "https://example.com/tips",
    "image": "https://example.com/tips.jpg",
    "keywords": "seo, meta tags, marketing",
    "site_name": "Example",
    "type": "article",
}


class GenerateSlugTests(SimpleTestCase):
    def test_example(self):
        self.assertEqual(generate_slug("Hello, World!  Foo--Bar"), "hello-world-foo-bar")

    def test_always_url_safe(self):
        for title in (
            "",
            "   ",
            "---",
            "  -- Leading and trailing --  ",
            "Ünïcödé ñame",
            "tabs\tand\nnewlines",
            "<script>alert('x')</script>",
            "a" * 500,
            "word " * 60,
            "🎉 party 🎉",
        ):
            slug = generate_slug(title)
            self.assertRegex(slug, r"^[a-z0-9-]{0,100}$")
            self.assertFalse(slug.startswith("-"), slug)
            self.assertFalse(slug.endswith("-"), slug)

    def test_normalized_slug_is_unchanged(self):
        for title in ("Hello World", "Python 3.12 release notes", "x" * 150):
            slug = generate_slug(title)
            self.assertEqual(generate_slug(slug), slug)

    def test_truncates_to_100(self):
        self.assertEqual(len(generate_slug("a" * 150)), 100)
        # Truncation must not leave a dangling hyphen
        self.assertEqual(generate_slug("a" * 99 + " b"), "a" * 99)

    def test_drops_disallowed_characters(self):
        self.assertEqual(generate_slug("Café & Bar_Grill"), "caf-bargrill")


class TextTests(SimpleTestCase):
    def test_meta_description_short_text_unchanged(self):
        self.assertEqual(meta_description("A short description"), "A short description")

    def test_meta_description_strips_html(self):
        self.assertEqual(
            meta_description("<p>First</p><p>Second &amp; third</p>"),
            "First Second & third",
        )

    def test_meta_description_truncates_on_word_boundary(self):
        text = "word " * 50
        result = meta_description(text)
        self.assertTrue(result.endswith("..."))
        self.assertLessEqual(len(result), 163)
        self.assertFalse(result[:-3].endswith(" "))

    def test_meta_description_cuts_long_words(self):
        result = meta_description("x" * 200)
        self.assertEqual(result, "x" * 160 + "...")

    def test_split_keywords(self):
        self.assertEqual(split_keywords(" seo,  marketing ,, web "), ["seo", "marketing", "web"])
        self.assertEqual(split_keywords(""), [])
        self.assertEqual(split_keywords(None), [])

    def test_suggest_keywords(self):
        suggestions = suggest_keywords(
            "Python packaging: packaging tools and packaging guides for python",
            "seo",
        )
        keywords = split_keywords(suggestions)
        self.assertEqual(keywords[0], "seo")
        self.assertEqual(keywords[1], "packaging")
        self.assertIn("python", keywords)
        self.assertNotIn("for", keywords)
        self.assertEqual(len(keywords), len(set(keywords)))


class RecordApiTests(TestCase):
    def test_create_requires_title(self):
        with self.assertRaises(InvalidRecord):
            create_record(dict(VALID, title=""))
        with self.assertRaises(InvalidRecord):
            create_record(dict(VALID, title="   "))
        self.assertEqual(RedirectRecord.objects.count(), 0)

    def test_create_requires_description_and_url(self):
        for key in ("desc", "url"):
            data = dict(VALID)
            del data[key]
            with self.assertRaises(InvalidRecord):
                create_record(data)

    def test_create_then_list(self):
        record = create_record(VALID)
        self.assertEqual(record.slug, "ten-tips-for-better-seo")
        records = list_records()
        self.assertEqual(list(records), ["ten-tips-for-better-seo"])
        self.assertEqual(records["ten-tips-for-better-seo"], VALID)

    def test_create_with_custom_slug(self):
        record = create_record(dict(VALID, slug="My Custom Slug!"))
        self.assertEqual(record.slug, "my-custom-slug")

    def test_create_defaults_content_type(self):
        data = dict(VALID)
        del data["type"]
        self.assertEqual(create_record(data).content_type, "website")

    def test_create_rejects_duplicate_slug(self):
        create_record(VALID)
        with self.assertRaises(SlugConflict):
            create_record(dict(VALID, desc="Another one"))
        self.assertEqual(
            RedirectRecord.objects.get().description, VALID["desc"]
        )

    def test_create_rejects_reserved_slug(self):
        with self.assertRaises(InvalidRecord):
            create_record(dict(VALID, slug="admin"))

    def test_create_rejects_title_without_slug_characters(self):
        with self.assertRaises(InvalidRecord):
            create_record(dict(VALID, title="!!!"))

    def test_create_rejects_bad_urls(self):
        for data in (
            dict(VALID, url="not a url"),
            dict(VALID, url="javascript:alert(1)"),
            dict(VALID, url="/relative/path"),
            dict(VALID, image="ftp://example.com/x.jpg"),
        ):
            with self.assertRaises(InvalidRecord):
                create_record(data)

    def test_create_rejects_non_string_fields(self):
        with self.assertRaises(InvalidRecord):
            create_record(dict(VALID, title=["a", "list"]))
        with self.assertRaises(InvalidRecord):
            create_record(["not", "a", "dict"])

    def test_update_keeps_slug(self):
        create_record(VALID)
        new_data = dict(
            VALID,
            title="A Completely Different Title",
            desc="New description",
            url="https://example.org/new",
            keywords="",
            type="product",
        )
        record = update_record("ten-tips-for-better-seo", dict(new_data, slug="ignored"))
        self.assertEqual(record.slug, "ten-tips-for-better-seo")
        self.assertEqual(list_records()["ten-tips-for-better-seo"], new_data)
        self.assertEqual(RedirectRecord.objects.count(), 1)

    def test_update_unknown_slug(self):
        with self.assertRaises(RecordNotFound):
            update_record("missing", VALID)

    def test_update_validates(self):
        create_record(VALID)
        with self.assertRaises(InvalidRecord):
            update_record("ten-tips-for-better-seo", dict(VALID, desc=""))
        self.assertEqual(get_record("ten-tips-for-better-seo").description, VALID["desc"])

    def test_delete(self):
        create_record(VALID)
        delete_record("ten-tips-for-better-seo")
        self.assertEqual(list_records(), {})

    def test_delete_unknown_slug(self):
        with self.assertRaises(RecordNotFound):
            delete_record("does-not-exist")

    def test_list_is_insertion_ordered(self):
        for title in ("Zebra", "Apple", "Mango"):
            create_record(dict(VALID, title=title))
        self.assertEqual(list(list_records()), ["zebra", "apple", "mango"])

    def test_store_failure(self):
        with mock.patch.object(
            RedirectRecord.objects, "all", side_effect=OperationalError("locked")
        ):
            with self.assertRaises(StoreUnavailable) as cm:
                list_records()
        self.assertEqual(cm.exception.status, 503)


class ListingTests(TestCase):
    def setUp(self):
        self.python = RedirectRecordFactory(
            slug="python-tips", title="Python Tips", description="Snakes", content_type="article"
        )
        self.django = RedirectRecordFactory(
            slug="web-framework", title="Django", description="Uses PYTHON", content_type="website"
        )
        self.pizza = RedirectRecordFactory(
            slug="pizza", title="Pizza", description="Cheese", content_type="article"
        )
        self.records = [self.python, self.django, self.pizza]

    def test_filter_matches_slug_title_or_description(self):
        self.assertEqual(filter_records(self.records, "PYTHON"), [self.python, self.django])
        self.assertEqual(filter_records(self.records, "framework"), [self.django])
        self.assertEqual(filter_records(self.records, "cheese"), [self.pizza])
        self.assertEqual(filter_records(self.records, "nothing"), [])
        self.assertEqual(filter_records(self.records, ""), self.records)

    def test_filter_by_type(self):
        self.assertEqual(
            filter_records(self.records, content_type="article"), [self.python, self.pizza]
        )
        self.assertEqual(
            filter_records(self.records, "python", content_type="article"), [self.python]
        )

    def test_sort(self):
        self.assertEqual(
            sort_records(self.records, "title"), [self.django, self.pizza, self.python]
        )
        self.assertEqual(
            sort_records(self.records, "slug", descending=True),
            [self.django, self.python, self.pizza],
        )
        self.assertEqual(
            sort_records(self.records, "type")[-1], self.django
        )
        # Unknown keys sort by slug
        self.assertEqual(
            sort_records(self.records, "bogus"), [self.pizza, self.python, self.django]
        )

    def test_paginate_clamps_page(self):
        records = list(range(25))
        self.assertEqual(list(paginate_records(records, 1, 10)), list(range(10)))
        self.assertEqual(paginate_records(records, 99, 10).number, 3)
        self.assertEqual(paginate_records(records, "nonsense", 10).number, 1)
        self.assertEqual(paginate_records([], 5, 10).number, 1)

    def test_related_records(self):
        one = RedirectRecordFactory(keywords="seo, python, web")
        two = RedirectRecordFactory(keywords="python")
        RedirectRecordFactory(keywords="cooking")
        related = related_records(
            RedirectRecord.objects.all(), ["Python", "web"], exclude_slug=self.python.slug
        )
        self.assertEqual(related, [one, two])
        self.assertEqual(related_records(self.records, []), [])


class LandingPageTests(TestCase):
    def test_slug_page(self):
        record = RedirectRecordFactory(
            slug="fish",
            title="Fish & Chips",
            description='The "best" <b>fish</b> in town',
            target_url="https://example.com/fish",
            image_url="https://example.com/fish.jpg",
            keywords="food, seaside ,",
            site_name="Chippy",
            content_type="article",
        )
        response = self.client.get("/fish")
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "redirect_page.html")
        self.assertEqual(response.context["record"].pk, record.pk)
        self.assertContains(response, "<title>Fish &amp; Chips | SEO Redirects</title>", html=True)
        self.assertContains(response, "<h1>Fish &amp; Chips</h1>", html=True)
        self.assertContains(
            response,
            '<p class="description">The &quot;best&quot; &lt;b&gt;fish&lt;/b&gt; in town</p>',
            html=True,
        )
        self.assertContains(
            response, '<meta property="og:title" content="Fish &amp; Chips">', html=True
        )
        self.assertContains(
            response, '<meta property="og:image" content="https://example.com/fish.jpg">', html=True
        )
        self.assertContains(
            response, '<meta property="og:site_name" content="Chippy">', html=True
        )
        self.assertContains(
            response, '<link rel="canonical" href="https://example.com/fish">', html=True
        )
        self.assertContains(response, '<li class="tag">#food</li>', html=True)
        self.assertContains(response, '<li class="tag">#seaside</li>', html=True)
        self.assertEqual(response.context["keyword_list"], ["food", "seaside"])
        self.assertContains(
            response,
            '<a class="button" href="https://example.com/fish" rel="nofollow">Continue Reading</a>',
            html=True,
        )
        # Never an automatic redirect
        self.assertNotContains(response, "http-equiv")

    def test_slug_page_trailing_slash(self):
        RedirectRecordFactory(slug="fish")
        self.assertEqual(self.client.get("/fish/").status_code, 200)

    def test_unknown_slug_is_404(self):
        response = self.client.get("/no-such-page")
        self.assertEqual(response.status_code, 404)
        self.assertTemplateUsed(response, "404.html")
        self.assertContains(response, "/no-such-page", status_code=404)

    def test_round_trip(self):
        User.objects.create_superuser("admin", "admin@example.com", "password")
        self.client.login(username="admin", password="password")
        response = self.client.post(
            "/api/create-redirect",
            json.dumps(dict(VALID, title="Résumé: 10 tips & tricks")),
            content_type="application/json",
        )
        slug = response.json()["slug"]
        page = self.client.get("/" + slug)
        self.assertEqual(page.context["page"]["title"], "Résumé: 10 tips & tricks")
        self.assertEqual(page.context["page"]["desc"], VALID["desc"])
        self.assertContains(page, "<h1>Résumé: 10 tips &amp; tricks</h1>", html=True)

    def test_parameter_page_uses_query_values(self):
        response = self.client.get(
            "/u",
            {
                "title": "Query Title",
                "desc": "Query description",
                "url": "https://example.com/target",
                "image": "https://example.com/img.png",
                "keywords": "one, two",
                "site_name": "Query Site",
                "type": "video",
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.context["record"])
        page = response.context["page"]
        self.assertEqual(page["title"], "Query Title")
        self.assertEqual(page["desc"], "Query description")
        self.assertEqual(page["url"], "https://example.com/target")
        self.assertEqual(page["type"], "video")
        self.assertContains(
            response, '<meta property="og:type" content="video">', html=True
        )
        self.assertContains(response, '<li class="tag">#two</li>', html=True)
        self.assertFalse(RedirectRecord.objects.exists())

    def test_parameter_page_defaults(self):
        response = self.client.get("/u")
        page = response.context["page"]
        self.assertEqual(page["title"], "Redirect Page")
        self.assertEqual(page["desc"], "This is a redirect page")
        self.assertEqual(page["url"], "/")
        self.assertEqual(page["type"], "website")
        self.assertEqual(page["image"], "")
        self.assertContains(
            response, '<meta property="og:type" content="website">', html=True
        )
        self.assertNotContains(response, "og:image")

    def test_parameter_page_refuses_script_urls(self):
        response = self.client.get(
            "/u", {"title": "x", "url": "javascript:alert(1)", "image": "data:text/html,hi"}
        )
        self.assertEqual(response.context["page"]["url"], "/")
        self.assertEqual(response.context["page"]["image"], "")
        self.assertNotContains(response, "javascript:")

    def test_long_url_renders_same_content(self):
        record = RedirectRecordFactory(title="Long & Short", keywords="a, b")
        response = self.client.get(record.get_long_url())
        self.assertEqual(response.context["page"], record.to_wire())

    def test_ampersand_query_strings_are_fixed(self):
        response = self.client.get("/u?title=Hello&amp;desc=World")
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response["Location"], "/u?title=Hello&desc=World")

    def test_percent_encoded_ampersand_query_strings_are_fixed(self):
        response = self.client.get("/u?title=Hello&amp%3Bdesc=World")
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response["Location"], "/u?title=Hello&desc=World")

    def test_parameter_page_renders_values_literally(self):
        response = self.client.get(
            "/u", {"title": "  Hi  ", "url": "www.example.com/page"}
        )
        page = response.context["page"]
        self.assertEqual(page["title"], "  Hi  ")
        self.assertEqual(page["url"], "www.example.com/page")
        self.assertContains(response, 'href="www.example.com/page"')

    def test_parameter_page_refuses_disguised_script_urls(self):
        for url in (" javascript:alert(1)", "java\tscript:alert(1)", "JavaScript:alert(1)"):
            response = self.client.get("/u", {"url": url, "image": url})
            self.assertEqual(response.context["page"]["url"], "/", url)
            self.assertEqual(response.context["page"]["image"], "", url)

    def test_related_records_shown(self):
        RedirectRecordFactory(slug="main", keywords="python")
        RedirectRecordFactory(slug="other", title="Other Python", keywords="python, web")
        response = self.client.get("/main")
        self.assertContains(response, 'href="/other"')

    def test_share_links(self):
        RedirectRecordFactory(slug="share-me", title="Share me")
        response = self.client.get("/share-me")
        self.assertContains(response, "https://twitter.com/intent/tweet?url=http%3A%2F%2Ftestserver%2Fshare-me")
        self.assertContains(response, "https://www.facebook.com/sharer/sharer.php?u=")

    @override_settings(GOOGLE_ANALYTICS_ID="G-TEST123")
    def test_google_analytics(self):
        response = self.client.get("/u")
        self.assertContains(response, "gtag/js?id=G-TEST123")

    def test_security_headers(self):
        response = self.client.get("/u")
        self.assertEqual(response["X-Frame-Options"], "DENY")
        self.assertEqual(response["X-Content-Type-Options"], "nosniff")
        self.assertEqual(response["Referrer-Policy"], "origin-when-cross-origin")


class SiteTests(TestCase):
    def test_homepage(self):
        RedirectRecordFactory(title="Newest thing")
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "home.html")
        self.assertContains(response, "Newest thing")

    def test_sitemap(self):
        RedirectRecordFactory(slug="first")
        RedirectRecordFactory(slug="second")
        response = self.client.get("/sitemap.xml")
        self.assertEqual(response["Content-Type"], "application/xml; charset=utf-8")
        self.assertEqual(response["Cache-Control"], "public, max-age=3600, s-maxage=3600")
        content = response.content.decode()
        self.assertIn("<loc>http://testserver/</loc>", content)
        self.assertIn("<loc>http://testserver/first</loc>", content)
        self.assertIn("<loc>http://testserver/second</loc>", content)

    @override_settings(BASE_URL="https://seo.example.com")
    def test_robots_txt(self):
        response = self.client.get("/robots.txt")
        self.assertEqual(response["Content-Type"], "text/plain")
        self.assertIn(
            "Sitemap: https://seo.example.com/sitemap.xml", response.content.decode()
        )

    @override_settings(STAGING=True)
    def test_robots_txt_staging(self):
        response = self.client.get("/robots.txt")
        self.assertNotIn("Sitemap:", response.content.decode())

    def test_legacy_redirects(self):
        response = self.client.get("/home")
        self.assertEqual(response.status_code, 301)
        self.assertEqual(response["Location"], "/")
        response = self.client.get("/api/sitemap")
        self.assertEqual(response.status_code, 301)
        self.assertEqual(response["Location"], "/sitemap.xml")

    def test_admin_and_manage_without_slash(self):
        response = self.client.get("/admin")
        self.assertEqual(response.status_code, 301)
        self.assertEqual(response["Location"], "/admin/")
        response = self.client.get("/manage")
        self.assertEqual(response.status_code, 301)
        self.assertEqual(response["Location"], "/manage/")


class JsonApiTests(TestCase):
    def setUp(self):
        User.objects.create_superuser("admin", "admin@example.com", "password")
        self.client.login(username="admin", password="password")

    def post(self, data):
        return self.client.post(
            "/api/create-redirect", json.dumps(data), content_type="application/json"
        )

    def test_create(self):
        response = self.post(dict(VALID, slug="tips"))
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["slug"], "tips")
        self.assertEqual(body["short"], "http://testserver/tips")
        self.assertTrue(body["long"].startswith("http://testserver/u?title=Ten+Tips"))
        self.assertIn("no-cache", response["Cache-Control"])

    def test_create_validation_error(self):
        response = self.post(dict(VALID, url=""))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Title, description, and URL are required"})

    def test_create_invalid_json(self):
        response = self.client.post(
            "/api/create-redirect", "{not json", content_type="application/json"
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())

    def test_create_conflict(self):
        self.post(VALID)
        response = self.post(VALID)
        self.assertEqual(response.status_code, 409)
        self.assertIn("already exists", response.json()["error"])

    def test_create_requires_staff(self):
        self.client.logout()
        response = self.post(VALID)
        self.assertEqual(response.status_code, 302)
        self.assertFalse(RedirectRecord.objects.exists())

    def test_create_requires_post(self):
        response = self.client.get("/api/create-redirect")
        self.assertEqual(response.status_code, 405)

    def test_get_redirects(self):
        self.post(dict(VALID, slug="one"))
        self.post(dict(VALID, slug="two", title="Second"))
        self.client.logout()
        response = self.client.get("/api/get-redirects")
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(list(data), ["one", "two"])
        self.assertEqual(data["one"], VALID)
        self.assertEqual(data["two"]["title"], "Second")

    def test_update(self):
        self.post(dict(VALID, slug="one"))
        response = self.client.put(
            "/api/update-redirect?slug=one",
            json.dumps(dict(VALID, title="Updated", slug="renamed")),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["slug"], "one")
        self.assertEqual(RedirectRecord.objects.get(slug="one").title, "Updated")
        self.assertFalse(RedirectRecord.objects.filter(slug="renamed").exists())

    def test_update_unknown(self):
        response = self.client.put(
            "/api/update-redirect?slug=nope",
            json.dumps(VALID),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 404)

    def test_delete(self):
        self.post(dict(VALID, slug="one"))
        response = self.client.delete("/api/delete-redirect?slug=one")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "slug": "one"})
        self.assertFalse(RedirectRecord.objects.exists())

    def test_delete_unknown(self):
        response = self.client.delete("/api/delete-redirect?slug=nope")
        self.assertEqual(response.status_code, 404)
        self.assertIn("error", response.json())

    def test_delete_missing_slug(self):
        response = self.client.delete("/api/delete-redirect")
        self.assertEqual(response.status_code, 400)

    def test_store_unavailable(self):
        with mock.patch.object(
            RedirectRecord.objects, "all", side_effect=OperationalError("locked")
        ):
            response = self.client.get("/api/get-redirects")
        self.assertEqual(response.status_code, 503)
        self.assertEqual(
            response.json(),
            {"error": "The record store could not be reached, please try again."},
        )


class ManageTests(TestCase):
    def setUp(self):
        User.objects.create_superuser("admin", "admin@example.com", "password")
        self.client.login(username="admin", password="password")

    def test_requires_staff(self):
        self.client.logout()
        response = self.client.get("/manage/")
        self.assertEqual(response.status_code, 302)

    def test_index_filters_and_sorts(self):
        RedirectRecordFactory(slug="b-python", title="Python B", content_type="article")
        RedirectRecordFactory(slug="a-python", title="Python A", content_type="video")
        RedirectRecordFactory(slug="cooking", title="Cooking", content_type="article")
        response = self.client.get("/manage/", {"q": "python", "sort": "title", "order": "desc"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [r.slug for r in response.context["page"]], ["b-python", "a-python"]
        )
        self.assertEqual(response.context["total"], 3)
        response = self.client.get("/manage/", {"type": "article"})
        self.assertEqual(
            [r.slug for r in response.context["page"]], ["b-python", "cooking"]
        )

    def test_index_page_out_of_range(self):
        for i in range(12):
            RedirectRecordFactory(slug="record-%02d" % i)
        response = self.client.get("/manage/", {"page": 7})
        self.assertEqual(response.context["page"].number, 2)
        self.assertEqual(len(response.context["page"]), 2)

    def test_index_empty(self):
        response = self.client.get("/manage/")
        self.assertContains(response, "No redirects yet")

    def test_create(self):
        response = self.client.post("/manage/new/", VALID)
        self.assertRedirects(
            response,
            "/manage/ten-tips-for-better-seo/edit/",
            fetch_redirect_response=False,
        )
        response = self.client.get("/manage/ten-tips-for-better-seo/edit/")
        self.assertContains(response, "Redirect created successfully")
        self.assertContains(response, "http://testserver/ten-tips-for-better-seo")

    def test_create_shows_error_and_keeps_input(self):
        response = self.client.post("/manage/new/", dict(VALID, desc=""))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Validation Error")
        self.assertContains(response, "Title, description, and URL are required")
        self.assertContains(response, 'value="https://example.com/tips"')
        self.assertFalse(RedirectRecord.objects.exists())

    def test_create_conflict_message(self):
        RedirectRecordFactory(slug="taken")
        response = self.client.post("/manage/new/", dict(VALID, slug="taken"))
        self.assertContains(response, "Slug Taken")

    def test_edit(self):
        RedirectRecordFactory(slug="edit-me", title="Before")
        response = self.client.post(
            "/manage/edit-me/edit/", dict(VALID, title="After", slug="sneaky")
        )
        self.assertRedirects(response, "/manage/")
        record = RedirectRecord.objects.get()
        self.assertEqual(record.slug, "edit-me")
        self.assertEqual(record.title, "After")

    def test_edit_unknown(self):
        self.assertEqual(self.client.get("/manage/nope/edit/").status_code, 404)

    def test_delete(self):
        RedirectRecordFactory(slug="delete-me")
        response = self.client.get("/manage/delete-me/delete/")
        self.assertContains(response, "Are you sure")
        response = self.client.post("/manage/delete-me/delete/")
        self.assertRedirects(response, "/manage/")
        self.assertFalse(RedirectRecord.objects.exists())

    def test_delete_unknown_shows_error(self):
        response = self.client.post("/manage/gone/delete/", follow=True)
        self.assertContains(response, "No redirect with slug")

    def test_django_admin(self):
        RedirectRecordFactory(slug="in-admin", title="In the admin")
        response = self.client.get("/admin/redirects/redirectrecord/")
        self.assertContains(response, "In the admin")

    def admin_add(self, **kwargs):
        data = {
            "created_0": "2024-01-01",
            "created_1": "12:00:00",
            "slug": "from-admin",
            "title": "From the admin",
            "description": "Added through the Django admin",
            "target_url": "https://example.com/x",
            "image_url": "",
            "keywords": "",
            "site_name": "",
            "content_type": "website",
        }
        data.update(kwargs)
        return self.client.post("/admin/redirects/redirectrecord/add/", data)

    def test_django_admin_add(self):
        response = self.admin_add(slug="From-Admin")
        self.assertEqual(response.status_code, 302)
        self.assertEqual(RedirectRecord.objects.get().slug, "from-admin")

    def test_django_admin_rejects_non_http_urls(self):
        for kwargs in (
            {"target_url": "ftp://example.com/x"},
            {"image_url": "ftps://example.com/x.jpg"},
        ):
            response = self.admin_add(**kwargs)
            self.assertEqual(response.status_code, 200)
            self.assertContains(response, "Must be an absolute http(s) URL")
        self.assertFalse(RedirectRecord.objects.exists())


class CommandTests(TestCase):
    def test_import_and_export(self):
        data = {
            "first-one": VALID,
            "Second One": dict(VALID, title="Second"),
            "broken": dict(VALID, url=""),
        }
        with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as fp:
            json.dump(data, fp)
        self.addCleanup(os.remove, fp.name)
        stdout, stderr = StringIO(), StringIO()
        call_command("import_redirects", fp.name, stdout=stdout, stderr=stderr)
        self.assertIn("2 imported, 1 skipped", stdout.getvalue())
        self.assertIn("Skipping broken", stderr.getvalue())
        self.assertEqual(
            sorted(RedirectRecord.objects.values_list("slug", flat=True)),
            ["first-one", "second-one"],
        )

        # Importing again updates rather than duplicating
        call_command("import_redirects", fp.name, stdout=StringIO(), stderr=StringIO())
        self.assertEqual(RedirectRecord.objects.count(), 2)

        stdout = StringIO()
        call_command("export_redirects", stdout=stdout)
        exported = json.loads(stdout.getvalue())
        self.assertEqual(exported["first-one"], VALID)
        self.assertEqual(exported["second-one"]["title"], "Second")

    def test_import_skips_keys_with_the_same_slug(self):
        data = {
            "Same Slug": VALID,
            "same-slug": dict(VALID, title="Later"),
        }
        with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as fp:
            json.dump(data, fp)
        self.addCleanup(os.remove, fp.name)
        stdout, stderr = StringIO(), StringIO()
        call_command("import_redirects", fp.name, stdout=stdout, stderr=stderr)
        self.assertIn("1 imported, 1 skipped", stdout.getvalue())
        self.assertIn("Skipping same-slug", stderr.getvalue())
        self.assertEqual(RedirectRecord.objects.get().title, VALID["title"])

    def test_import_dry_run(self):
        with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as fp:
            json.dump({"x": VALID}, fp)
        self.addCleanup(os.remove, fp.name)
        call_command("import_redirects", fp.name, "--dry-run", stdout=StringIO())
        self.assertFalse(RedirectRecord.objects.exists())
