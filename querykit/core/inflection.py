"""String inflection helpers."""

import re

_UNDERSCORE_BOUNDARY = re.compile(r"(?<=[A-Z])(?=[A-Z][a-z])|(?<=[a-z\d])(?=[A-Z])")


def underscore(word: str) -> str:
    """Convert a camelCase or PascalCase word to snake_case.

    Splits at lowercase/digit to uppercase boundaries and at the end of an
    acronym (``HTMLParser`` -> ``html_parser``). Hyphens become underscores.

    Examples:
        >>> underscore("createdAt")
        'created_at'
        >>> underscore("address2Line")
        'address2_line'
    """
    word = str(word)
    if not re.search(r"[A-Z-]", word):
        return word

    word = _UNDERSCORE_BOUNDARY.sub("_", word)
    return word.replace("-", "_").lower()
