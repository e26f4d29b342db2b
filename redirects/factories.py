import factory
import factory.django
from datetime import timezone


class RedirectRecordFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = "redirects.RedirectRecord"

    slug = factory.Sequence(lambda n: "slug%d" % n)
    created = factory.Faker("past_datetime", tzinfo=timezone.utc)
    title = factory.Faker("sentence")
    description = factory.Faker("paragraph")
    target_url = factory.Faker("url")
    image_url = factory.Faker("image_url")
    keywords = "seo, marketing"
    site_name = factory.Faker("company")
    content_type = "article"
