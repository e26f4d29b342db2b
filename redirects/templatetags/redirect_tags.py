from urllib.parse import quote, urlencode

from django import template

register = template.Library()


@register.inclusion_tag("includes/share_links.html")
def share_links(url, title, description="", keywords=()):
    hashtags = ",".join(k.replace(" ", "") for k in keywords)
    return {
        "links": [
            (
                "Facebook",
                "https://www.facebook.com/sharer/sharer.php?"
                + urlencode({"u": url, "quote": title}),
            ),
            (
                "Twitter",
                "https://twitter.com/intent/tweet?"
                + urlencode({"url": url, "text": title, "hashtags": hashtags}),
            ),
            (
                "LinkedIn",
                "https://www.linkedin.com/sharing/share-offsite/?"
                + urlencode({"url": url, "title": title, "summary": description}),
            ),
            ("Email", "mailto:?subject=%s&body=%s" % (quote(title), quote(url))),
        ]
    }


@register.simple_tag(takes_context=True)
def page_href(context, page):
    query_dict = context["request"].GET.copy()
    if page == 1 and "page" in query_dict:
        del query_dict["page"]
    else:
        query_dict["page"] = str(page)
    return "?" + query_dict.urlencode()


@register.simple_tag(takes_context=True)
def sort_href(context, sort):
    "Link that sorts by this column, flipping the order if it is already active"
    query_dict = context["request"].GET.copy()
    active = query_dict.get("sort", "slug") == sort
    query_dict["sort"] = sort
    if active and query_dict.get("order") != "desc":
        query_dict["order"] = "desc"
    else:
        query_dict.pop("order", None)
    # Results move around, so start again from the first page
    query_dict.pop("page", None)
    return "?" + query_dict.urlencode()
