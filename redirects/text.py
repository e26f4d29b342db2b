"""
Text helpers for building meta tags out of user-entered record fields.
"""
from collections import Counter
import re

from django.utils.html import strip_tags

META_DESCRIPTION_LENGTH = 160

_block_tag_re = re.compile(r"<br\s*/?>|</?(?:p|div|h[1-6]|li|ul|ol)[^>]*>", re.I)
_whitespace_re = re.compile(r"\s+")
_non_word_re = re.compile(r"[^\w\s]")

STOP_WORDS = frozenset(
    """
    this that with have will from they been were said each which their time
    more very what know just first into over think also your work life only
    can still should after being now made before here through when where
    much some these many would there
    """.split()
)


def strip_html(text):
    "Plain text version of a possibly-HTML string, whitespace collapsed"
    text = _block_tag_re.sub(" ", text or "")
    text = strip_tags(text)
    for entity, char in (
        ("&nbsp;", " "),
        ("&lt;", "<"),
        ("&gt;", ">"),
        ("&quot;", '"'),
        ("&#39;", "'"),
        ("&amp;", "&"),
    ):
        text = text.replace(entity, char)
    return _whitespace_re.sub(" ", text).strip()


def meta_description(text, max_length=META_DESCRIPTION_LENGTH):
    """
    Truncate text for a <meta name="description"> tag.

    Cuts on the last word boundary if that keeps at least 80% of the
    allowed length, otherwise cuts mid-word. Either way '...' is appended.
    """
    cleaned = strip_html(text)
    if len(cleaned) <= max_length:
        return cleaned
    truncated = cleaned[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > max_length * 0.8:
        return truncated[:last_space] + "..."
    return truncated + "..."


def split_keywords(keywords):
    return [k.strip() for k in (keywords or "").split(",") if k.strip()]


def suggest_keywords(text, existing="", limit=10):
    words = [
        word
        for word in _non_word_re.sub(" ", strip_html(text).lower()).split()
        if len(word) > 3 and word not in STOP_WORDS
    ]
    top_words = [word for word, _ in Counter(words).most_common(5)]
    suggestions = []
    for keyword in split_keywords(existing) + top_words:
        if keyword not in suggestions:
            suggestions.append(keyword)
    return ", ".join(suggestions[:limit])
