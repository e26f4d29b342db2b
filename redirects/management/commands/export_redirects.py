from django.core.management.base import BaseCommand
from redirects.records import list_records
import json


class Command(BaseCommand):
    help = """
        ./manage.py export_redirects > redirects.json

        Writes every record as JSON in the format import_redirects reads.
    """

    def handle(self, *args, **kwargs):
        self.stdout.write(json.dumps(list_records(), indent=2))
