from urllib.parse import urlparse
import re

from django.conf import settings
from django.http import HttpResponse
from django.shortcuts import render, get_object_or_404
from django.utils.html import escape

from .listing import related_records
from .models import DEFAULT_CONTENT_TYPE, RedirectRecord
from .text import meta_description, split_keywords

# Used by /u for any query string parameter that is missing or empty
PARAMETER_DEFAULTS = {
    "title": "Redirect Page",
    "desc": "This is a redirect page",
    "url": "/",
    "image": "",
    "keywords": "",
    "site_name": "",
    "type": DEFAULT_CONTENT_TYPE,
}

_ignored_in_scheme_re = re.compile(r"[\x00-\x20]")


def build_url(request, path):
    if settings.BASE_URL:
        return settings.BASE_URL + path
    return request.build_absolute_uri(path)


def safe_url(url, fallback=""):
    "Refuse any URL with a scheme other than http(s), such as javascript: or data:"
    # Browsers ignore control characters and spaces when reading the scheme
    scheme = urlparse(_ignored_in_scheme_re.sub("", url)).scheme
    if scheme and scheme not in ("http", "https"):
        return fallback
    return url


def index(request):
    return render(
        request,
        "home.html",
        {
            "recent": RedirectRecord.objects.order_by("-created", "-id")[:6],
            "total": RedirectRecord.objects.count(),
        },
    )


def render_landing(request, page, record=None):
    keywords = split_keywords(page["keywords"])
    return render(
        request,
        "redirect_page.html",
        {
            "page": page,
            "record": record,
            "page_title": "%s | %s" % (page["title"], settings.SITE_NAME),
            "meta_description": meta_description(page["desc"]),
            "keyword_list": keywords,
            "current_url": request.build_absolute_uri(),
            "related": related_records(
                RedirectRecord.objects.all(),
                keywords,
                exclude_slug=record.slug if record else None,
            ),
        },
    )


def redirect_page(request, slug):
    record = get_object_or_404(RedirectRecord, slug=slug)
    return render_landing(request, record.to_wire(), record=record)


def parameter_page(request):
    page = {
        key: request.GET.get(key) or default
        for key, default in PARAMETER_DEFAULTS.items()
    }
    page["url"] = safe_url(page["url"], fallback=PARAMETER_DEFAULTS["url"])
    page["image"] = safe_url(page["image"])
    return render_landing(request, page)


def sitemap(request):
    xml = [
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
        "<url><loc>%s</loc></url>" % escape(build_url(request, "/")),
    ]
    for record in RedirectRecord.objects.only("slug", "updated"):
        xml.append(
            "<url><loc>%s</loc><lastmod>%s</lastmod></url>"
            % (
                escape(build_url(request, record.get_absolute_url())),
                record.updated.date().isoformat(),
            )
        )
    xml.append("</urlset>")
    response = HttpResponse(
        "\n".join(xml), content_type="application/xml; charset=utf-8"
    )
    response["Cache-Control"] = "public, max-age=3600, s-maxage=3600"
    return response


def custom_404(request, exception):
    return render(
        request,
        "404.html",
        {"missing": request.path.strip("/")},
        status=404,
    )
