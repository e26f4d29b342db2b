"""
Create, read, update and delete redirect records.

Everything that writes to the store goes through these functions - the JSON
API, the staff management pages and the import command - so validation and
slug rules live in exactly one place. The Django admin form reuses
`generate_slug` and `validate_http_url`. Input uses the wire field names of the
JSON API (title, desc, url, image, keywords, site_name, type, slug).
"""
from contextlib import contextmanager
import logging
import re

from django.core.exceptions import ValidationError
from django.core.validators import URLValidator
from django.db import DatabaseError, IntegrityError, transaction

from .models import DEFAULT_CONTENT_TYPE, WIRE_FIELDS, RedirectRecord

logger = logging.getLogger(__name__)

SLUG_MAX_LENGTH = 100

# Paths that are routed elsewhere, so a record could never be reached there
RESERVED_SLUGS = frozenset(("u", "admin", "api", "manage", "home", "static"))

REQUIRED_FIELDS = ("title", "description", "target_url")

_disallowed_re = re.compile(r"[^a-z0-9\s-]")
_whitespace_re = re.compile(r"\s+")
_hyphens_re = re.compile(r"-+")

validate_http_url = URLValidator(schemes=["http", "https"])


class RecordError(Exception):
    title = "Error"
    status = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidRecord(RecordError):
    title = "Validation Error"
    status = 400


class RecordNotFound(RecordError):
    title = "Not Found"
    status = 404


class SlugConflict(RecordError):
    title = "Slug Taken"
    status = 409


class StoreUnavailable(RecordError):
    title = "Store Unavailable"
    status = 503


def generate_slug(title):
    """
    Turn arbitrary text into a URL-path-safe slug.

    >>> generate_slug("Hello, World!  Foo--Bar")
    'hello-world-foo-bar'
    """
    slug = _disallowed_re.sub("", title.lower())
    slug = _whitespace_re.sub("-", slug)
    slug = _hyphens_re.sub("-", slug).strip("-")
    return slug[:SLUG_MAX_LENGTH].strip("-")


@contextmanager
def _store(action):
    try:
        yield
    except DatabaseError as e:
        logger.error("Record store failed during %s: %s", action, e)
        raise StoreUnavailable(
            "The record store could not be reached, please try again."
        ) from e


def _string(data, key):
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidRecord("%s must be a string" % key)
    return value.strip()


def clean_record(data):
    "Validate wire-format input, returning model field values"
    if not isinstance(data, dict):
        raise InvalidRecord("Expected an object with title, desc and url")
    values = {field: _string(data, wire) for wire, field in WIRE_FIELDS}
    if not all(values[field] for field in REQUIRED_FIELDS):
        raise InvalidRecord("Title, description, and URL are required")
    for wire, field in (("url", "target_url"), ("image", "image_url")):
        if not values[field]:
            continue
        try:
            validate_http_url(values[field])
        except ValidationError:
            raise InvalidRecord("%s must be an absolute http(s) URL" % wire)
    for wire, field in WIRE_FIELDS:
        max_length = RedirectRecord._meta.get_field(field).max_length
        if max_length and len(values[field]) > max_length:
            raise InvalidRecord(
                "%s must be at most %d characters" % (wire, max_length)
            )
    if not values["content_type"]:
        values["content_type"] = DEFAULT_CONTENT_TYPE
    return values


def slug_for(data, values):
    custom = _string(data, "slug")
    slug = generate_slug(custom or values["title"])
    if not slug:
        raise InvalidRecord(
            "Slug must contain at least one letter or digit"
            if custom
            else "Title must contain at least one letter or digit to build a slug"
        )
    if slug in RESERVED_SLUGS:
        raise InvalidRecord('"%s" is reserved, please choose another slug' % slug)
    return slug


def create_record(data):
    values = clean_record(data)
    slug = slug_for(data, values)
    with _store("create"):
        try:
            with transaction.atomic():
                if RedirectRecord.objects.filter(slug=slug).exists():
                    raise SlugConflict('A redirect with slug "%s" already exists' % slug)
                record = RedirectRecord.objects.create(slug=slug, **values)
        except IntegrityError:
            raise SlugConflict('A redirect with slug "%s" already exists' % slug)
    logger.info("Created redirect %s -> %s", record.slug, record.target_url)
    return record


def get_record(slug):
    with _store("get"):
        try:
            return RedirectRecord.objects.get(slug=slug)
        except RedirectRecord.DoesNotExist:
            raise RecordNotFound('No redirect with slug "%s"' % slug)


def update_record(slug, data):
    # The slug is the key: a "slug" in data never renames the record
    record = get_record(slug)
    values = clean_record(data)
    for field, value in values.items():
        setattr(record, field, value)
    with _store("update"):
        record.save()
    logger.info("Updated redirect %s -> %s", record.slug, record.target_url)
    return record


def delete_record(slug):
    with _store("delete"):
        deleted, _ = RedirectRecord.objects.filter(slug=slug).delete()
    if not deleted:
        raise RecordNotFound('No redirect with slug "%s"' % slug)
    logger.info("Deleted redirect %s", slug)


def list_records():
    with _store("list"):
        return {record.slug: record.to_wire() for record in RedirectRecord.objects.all()}
