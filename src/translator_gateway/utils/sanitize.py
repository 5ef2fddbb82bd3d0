"""
Input sanitizing helpers.
"""

import re

RE_HTML_TAG = re.compile(r"<[^>]*>")


def sanitize_input(value: str) -> str:
    """Strip HTML tags and surrounding whitespace from client input.

    Tags are removed before trimming so the result is stable under repeated
    application: ``sanitize_input("<b>hi</b> there ")`` gives ``"hi there"``.
    """
    return RE_HTML_TAG.sub("", value).strip()
