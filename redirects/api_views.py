import json
import logging

from django.contrib.admin.views.decorators import staff_member_required
from django.http import JsonResponse
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from .records import (
    InvalidRecord,
    RecordError,
    create_record,
    delete_record,
    list_records,
    update_record,
)
from .views import build_url

logger = logging.getLogger(__name__)


def _load_json(request):
    try:
        return json.loads(request.body or b"{}")
    except ValueError:
        raise InvalidRecord("Request body must be valid JSON")


def _error_response(request, error):
    logger.warning(
        "%s %s rejected (%d): %s",
        request.method,
        request.path,
        error.status,
        error.message,
    )
    return JsonResponse({"error": error.message}, status=error.status)


def _urls(request, record):
    return {
        "slug": record.slug,
        "short": build_url(request, record.get_absolute_url()),
        "long": build_url(request, record.get_long_url()),
    }


@never_cache
@require_POST
@staff_member_required
def create_redirect(request):
    """
    Create a redirect record from a JSON body:

        {"title", "desc", "url", "image", "keywords", "site_name", "type", "slug"}

    Returns the slug plus the short (/slug) and long (/u?...) URLs.
    """
    try:
        record = create_record(_load_json(request))
    except RecordError as e:
        return _error_response(request, e)
    return JsonResponse(_urls(request, record), status=201)


@never_cache
@require_GET
def get_redirects(request):
    try:
        return JsonResponse(list_records())
    except RecordError as e:
        return _error_response(request, e)


@never_cache
@require_http_methods(["PUT"])
@staff_member_required
def update_redirect(request):
    slug = request.GET.get("slug")
    try:
        if not slug:
            raise InvalidRecord("Missing slug parameter")
        record = update_record(slug, _load_json(request))
    except RecordError as e:
        return _error_response(request, e)
    return JsonResponse(_urls(request, record))


@never_cache
@require_http_methods(["DELETE"])
@staff_member_required
def delete_redirect(request):
    slug = request.GET.get("slug")
    try:
        if not slug:
            raise InvalidRecord("Missing slug parameter")
        delete_record(slug)
    except RecordError as e:
        return _error_response(request, e)
    return JsonResponse({"success": True, "slug": slug})
