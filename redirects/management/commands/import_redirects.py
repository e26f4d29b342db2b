from django.core.management.base import BaseCommand, CommandError
from redirects.models import RedirectRecord
from redirects.records import InvalidRecord, clean_record, slug_for
import requests
import json


class Command(BaseCommand):
    help = """
        ./manage.py import_redirects URL-or-path-to-JSON

        The JSON should be an object mapping slug to record, as returned
        by /api/get-redirects. Existing slugs are overwritten.
    """

    def add_arguments(self, parser):
        parser.add_argument(
            "url_or_path_to_json",
            type=str,
            help="URL or path to JSON to import",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            dest="dry_run",
            default=False,
            help="Validate every record without saving anything",
        )

    def handle(self, *args, **kwargs):
        url_or_path_to_json = kwargs["url_or_path_to_json"]
        dry_run = kwargs["dry_run"]

        is_url = url_or_path_to_json.startswith(
            "http://"
        ) or url_or_path_to_json.startswith("https://")

        try:
            if is_url:
                response = requests.get(url_or_path_to_json, timeout=30)
                response.raise_for_status()
                items = response.json()
            else:
                with open(url_or_path_to_json) as fp:
                    items = json.load(fp)
        except (OSError, ValueError, requests.RequestException) as e:
            raise CommandError("Could not load %s: %s" % (url_or_path_to_json, e))

        if not isinstance(items, dict):
            raise CommandError("Expected a JSON object mapping slug to record")

        imported = skipped = 0
        seen = set()
        for key, item in items.items():
            try:
                values = clean_record(item)
                slug = slug_for({"slug": key}, values)
            except InvalidRecord as e:
                self.stderr.write("Skipping %s: %s" % (key, e.message))
                skipped += 1
                continue
            if slug in seen:
                self.stderr.write(
                    "Skipping %s: slug %s already appears earlier in this file"
                    % (key, slug)
                )
                skipped += 1
                continue
            seen.add(slug)
            if dry_run:
                self.stdout.write("Would import %s" % slug)
            else:
                obj, was_created = RedirectRecord.objects.update_or_create(
                    slug=slug, defaults=values
                )
                self.stdout.write(
                    "%s %s" % ("Created" if was_created else "Updated", obj)
                )
            imported += 1
        self.stdout.write(
            self.style.SUCCESS("%d imported, %d skipped" % (imported, skipped))
        )
