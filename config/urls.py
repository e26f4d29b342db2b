from django.urls import path, re_path, include
from django.contrib import admin
from django.http import HttpResponse, HttpResponsePermanentRedirect
from django.conf import settings
from redirects import views as redirect_views
from redirects import staff_views
from redirects import api_views


handler404 = "redirects.views.custom_404"


def home_redirect(request):
    return HttpResponsePermanentRedirect("/")


def sitemap_redirect(request):
    return HttpResponsePermanentRedirect("/sitemap.xml")


def add_slash(request):
    return HttpResponsePermanentRedirect(request.path + "/")


STAGING_ROBOTS_TXT = """
User-agent: Twitterbot
Disallow:

User-agent: *
Disallow: /
"""

PRODUCTION_ROBOTS_TXT = """
User-agent: *
Allow: /
Disallow: /admin/
Disallow: /manage/
Disallow: /api/

Sitemap: {sitemap_url}
"""


def robots_txt(request):
    if settings.STAGING:
        txt = STAGING_ROBOTS_TXT
    else:
        txt = PRODUCTION_ROBOTS_TXT.format(
            sitemap_url=redirect_views.build_url(request, "/sitemap.xml")
        )
    response = HttpResponse(txt, content_type="text/plain")
    response["Cache-Control"] = "public, max-age=%d" % (24 * 60 * 60)
    return response


urlpatterns = [
    re_path(r"^$", redirect_views.index),
    re_path(r"^home/?$", home_redirect),
    re_path(r"^u/?$", redirect_views.parameter_page),
    re_path(r"^robots\.txt$", robots_txt),
    re_path(r"^sitemap\.xml$", redirect_views.sitemap),
    re_path(r"^api/sitemap/?$", sitemap_redirect),
    # JSON API
    re_path(r"^api/create-redirect/?$", api_views.create_redirect),
    re_path(r"^api/get-redirects/?$", api_views.get_redirects),
    re_path(r"^api/update-redirect/?$", api_views.update_redirect),
    re_path(r"^api/delete-redirect/?$", api_views.delete_redirect),
    # Staff management pages
    path("manage/", staff_views.manage_index, name="manage_index"),
    path("manage/new/", staff_views.manage_create, name="manage_create"),
    re_path(
        r"^manage/([a-z0-9-]+)/edit/$", staff_views.manage_edit, name="manage_edit"
    ),
    re_path(
        r"^manage/([a-z0-9-]+)/delete/$",
        staff_views.manage_delete,
        name="manage_delete",
    ),
    re_path(r"^admin/", admin.site.urls),
    # These would otherwise be caught by the slug pattern below
    re_path(r"^(?:admin|manage)$", add_slash),
    # Must come last: anything else that looks like a slug
    re_path(r"^([a-z0-9-]+)/?$", redirect_views.redirect_page),
]
if settings.DEBUG:
    try:
        import debug_toolbar

        urlpatterns = [
            re_path(r"^__debug__/", include(debug_toolbar.urls))
        ] + urlpatterns
    except ImportError:
        pass
