"""
Filtering, sorting and pagination for the staff listing of redirect records.

These work on plain lists of records already loaded from the store; the
listing page recomputes all three on every request.
"""
from collections import Counter

from django.core.paginator import Paginator

PER_PAGE = 10

SORT_KEYS = {
    "title": lambda record: record.title.lower(),
    "type": lambda record: record.content_type.lower(),
    "slug": lambda record: record.slug,
}
DEFAULT_SORT = "slug"


def filter_records(records, q="", content_type=""):
    q = (q or "").strip().lower()
    matches = []
    for record in records:
        if content_type and record.content_type != content_type:
            continue
        if q and not (
            q in record.slug.lower()
            or q in record.title.lower()
            or q in record.description.lower()
        ):
            continue
        matches.append(record)
    return matches


def sort_records(records, sort=DEFAULT_SORT, descending=False):
    key = SORT_KEYS.get(sort, SORT_KEYS[DEFAULT_SORT])
    return sorted(records, key=key, reverse=descending)


def paginate_records(records, page=1, per_page=PER_PAGE):
    # get_page() clamps to the last page when filtering shrinks the results
    return Paginator(records, per_page).get_page(page)


def related_records(records, keywords, exclude_slug=None, limit=3):
    """Records sharing the most keywords with the given list, best first"""
    wanted = {k.lower() for k in keywords}
    if not wanted:
        return []
    counts = Counter()
    by_slug = {}
    for record in records:
        if record.slug == exclude_slug:
            continue
        shared = wanted & {k.lower() for k in record.keyword_list()}
        if shared:
            counts[record.slug] = len(shared)
            by_slug[record.slug] = record
    return [by_slug[slug] for slug, _ in counts.most_common(limit)]
