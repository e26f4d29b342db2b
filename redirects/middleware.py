from urllib.parse import parse_qsl, urlencode

from django.shortcuts import redirect


def ampersand_redirect_middleware(get_response):
    """
    Long /u?... URLs copied out of HTML source often arrive with every
    & escaped as &amp; - redirect those to the corrected query string.
    """

    def middleware(request):
        query_string = request.META.get("QUERY_STRING", "")
        if "&amp;" in query_string or "&amp%3B" in query_string:
            query = [
                (key.replace("amp;", "", 1) if key.startswith("amp;") else key, value)
                for key, value in parse_qsl(
                    query_string.replace("&amp%3B", "&amp;"), keep_blank_values=True
                )
            ]
            return redirect(request.path + "?" + urlencode(query))
        return get_response(request)

    return middleware
