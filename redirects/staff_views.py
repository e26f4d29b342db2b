from django.conf import settings
from django.contrib import messages
from django.contrib.admin.views.decorators import staff_member_required
from django.shortcuts import render, redirect, get_object_or_404
from django.utils.html import format_html
from django.views.decorators.cache import never_cache

from .listing import DEFAULT_SORT, SORT_KEYS, filter_records, paginate_records, sort_records
from .models import CONTENT_TYPE_CHOICES, DEFAULT_CONTENT_TYPE, WIRE_FIELDS, RedirectRecord
from .records import (
    RecordError,
    create_record,
    delete_record,
    generate_slug,
    update_record,
)
from .text import suggest_keywords
from .views import build_url

EMPTY_FORM = dict(
    {wire: "" for wire, _ in WIRE_FIELDS}, type=DEFAULT_CONTENT_TYPE, slug=""
)


def notify(request, level, title, message):
    messages.add_message(
        request, level, format_html("<strong>{}</strong> {}", title, message)
    )


def _form_data(post):
    return {key: post.get(key, "") for key in EMPTY_FORM}


def _content_types(records=()):
    choices = list(CONTENT_TYPE_CHOICES)
    known = {value for value, _ in choices}
    for record in records:
        if record.content_type not in known:
            known.add(record.content_type)
            choices.append((record.content_type, record.content_type_label()))
    return choices


@never_cache
@staff_member_required
def manage_index(request):
    records = list(RedirectRecord.objects.all())
    q = request.GET.get("q", "").strip()
    content_type = request.GET.get("type", "")
    sort = request.GET.get("sort", "")
    if sort not in SORT_KEYS:
        sort = DEFAULT_SORT
    descending = request.GET.get("order") == "desc"
    matches = sort_records(filter_records(records, q, content_type), sort, descending)
    return render(
        request,
        "manage_index.html",
        {
            "page": paginate_records(
                matches, request.GET.get("page"), settings.REDIRECTS_PER_PAGE
            ),
            "total": len(records),
            "num_matches": len(matches),
            "q": q,
            "type": content_type,
            "sort": sort,
            "order": "desc" if descending else "asc",
            "content_types": _content_types(records),
        },
    )


@never_cache
@staff_member_required
def manage_create(request):
    form = dict(EMPTY_FORM)
    if request.method == "POST":
        form = _form_data(request.POST)
        try:
            record = create_record(form)
        except RecordError as e:
            notify(request, messages.ERROR, e.title, e.message)
        else:
            notify(
                request,
                messages.SUCCESS,
                "Success!",
                "Redirect created successfully",
            )
            return redirect(record.edit_url())
    return render(
        request,
        "manage_form.html",
        {
            "form": form,
            "record": None,
            "slug_preview": generate_slug(form["title"]) or "your-title-here",
            "content_types": _content_types(),
        },
    )


@never_cache
@staff_member_required
def manage_edit(request, slug):
    record = get_object_or_404(RedirectRecord, slug=slug)
    form = dict(record.to_wire(), slug=record.slug)
    if request.method == "POST":
        form = dict(_form_data(request.POST), slug=record.slug)
        try:
            update_record(slug, form)
        except RecordError as e:
            notify(request, messages.ERROR, e.title, e.message)
        else:
            notify(
                request,
                messages.SUCCESS,
                "Success!",
                "Redirect updated successfully",
            )
            return redirect("manage_index")
    return render(
        request,
        "manage_form.html",
        {
            "form": form,
            "record": record,
            "short_url": build_url(request, record.get_absolute_url()),
            "long_url": build_url(request, record.get_long_url()),
            "suggested_keywords": suggest_keywords(
                "%s %s" % (form["title"], form["desc"]), form["keywords"]
            ),
            "content_types": _content_types([record]),
        },
    )


@never_cache
@staff_member_required
def manage_delete(request, slug):
    if request.method == "POST":
        try:
            delete_record(slug)
        except RecordError as e:
            notify(request, messages.ERROR, e.title, e.message)
        else:
            notify(request, messages.SUCCESS, "Deleted", "Redirect deleted successfully")
        return redirect("manage_index")
    record = get_object_or_404(RedirectRecord, slug=slug)
    return render(request, "manage_confirm_delete.html", {"record": record})
