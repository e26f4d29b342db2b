from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="RedirectRecord",
            fields=[
                (
                    "id",
                    models.AutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                ("updated", models.DateTimeField(auto_now=True)),
                ("slug", models.SlugField(max_length=100, unique=True)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("target_url", models.URLField(max_length=2048)),
                ("image_url", models.URLField(blank=True, max_length=2048)),
                ("keywords", models.CharField(blank=True, max_length=500)),
                ("site_name", models.CharField(blank=True, max_length=255)),
                (
                    "content_type",
                    models.CharField(
                        default="website",
                        help_text="Open Graph type, e.g. website, article, product, video, book",
                        max_length=32,
                    ),
                ),
            ],
            options={
                "ordering": ("created", "id"),
            },
        ),
    ]
