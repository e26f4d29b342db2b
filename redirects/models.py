from urllib.parse import urlencode

from django.db import models
from django.utils import timezone

from .text import split_keywords

DEFAULT_CONTENT_TYPE = "website"

CONTENT_TYPE_CHOICES = (
    ("website", "Website"),
    ("article", "Article"),
    ("blog", "Blog Post"),
    ("product", "Product"),
    ("video", "Video"),
    ("book", "Book"),
)

# Wire name used by the JSON API and the /u query string -> model field
WIRE_FIELDS = (
    ("title", "title"),
    ("desc", "description"),
    ("url", "target_url"),
    ("image", "image_url"),
    ("keywords", "keywords"),
    ("site_name", "site_name"),
    ("type", "content_type"),
)


class RedirectRecord(models.Model):
    created = models.DateTimeField(default=timezone.now)
    updated = models.DateTimeField(auto_now=True)
    slug = models.SlugField(max_length=100, unique=True)
    title = models.CharField(max_length=255)
    description = models.TextField()
    target_url = models.URLField(max_length=2048)
    image_url = models.URLField(max_length=2048, blank=True)
    keywords = models.CharField(max_length=500, blank=True)
    site_name = models.CharField(max_length=255, blank=True)
    content_type = models.CharField(
        max_length=32,
        default=DEFAULT_CONTENT_TYPE,
        help_text="Open Graph type, e.g. website, article, product, video, book",
    )

    class Meta:
        ordering = ("created", "id")

    def get_absolute_url(self):
        return "/%s" % self.slug

    def get_long_url(self):
        """The /u?... form of this record, rendered without a store lookup"""
        return "/u?" + urlencode(self.to_wire())

    def edit_url(self):
        return "/manage/%s/edit/" % self.slug

    def keyword_list(self):
        return split_keywords(self.keywords)

    def content_type_label(self):
        return self.content_type[:1].upper() + self.content_type[1:]

    def to_wire(self):
        return {wire: getattr(self, field) for wire, field in WIRE_FIELDS}

    def __str__(self):
        return "%s => %s" % (self.slug, self.target_url)
