from django import forms
from django.contrib import admin

from .models import RedirectRecord
from .records import RESERVED_SLUGS, generate_slug, validate_http_url


class RedirectRecordForm(forms.ModelForm):
    def _http_url(self, field):
        # forms.URLField also lets ftp:// through
        url = self.cleaned_data[field]
        if url:
            try:
                validate_http_url(url)
            except forms.ValidationError:
                raise forms.ValidationError("Must be an absolute http(s) URL")
        return url

    def clean_target_url(self):
        return self._http_url("target_url")

    def clean_image_url(self):
        return self._http_url("image_url")

    def clean_slug(self):
        # Same normalization as the record API
        slug = generate_slug(self.cleaned_data["slug"])
        if not slug:
            raise forms.ValidationError("Slug must contain at least one letter or digit")
        if slug in RESERVED_SLUGS:
            raise forms.ValidationError('"%s" is reserved' % slug)
        return slug


@admin.register(RedirectRecord)
class RedirectRecordAdmin(admin.ModelAdmin):
    form = RedirectRecordForm
    list_display = ("title", "slug", "content_type", "site_name", "created")
    list_filter = ("content_type", "created")
    search_fields = ("slug", "title", "description")
    date_hierarchy = "created"

    def get_prepopulated_fields(self, request, obj=None):
        if obj is None:
            return {"slug": ("title",)}
        return {}

    def get_readonly_fields(self, request, obj=None):
        # Slugs are keys: they never change once a record exists
        if obj is not None:
            return ("slug",)
        return ()
