"""XML escaping for generated feeds."""

_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_xml(text: str | None) -> str:
    """Escape text for use in an XML text node or attribute value.

    ``&`` is replaced first so the entities produced by later replacements
    are not escaped again. Input is assumed not to be pre-escaped.

    Args:
        text: Raw text (None is treated as empty)

    Returns:
        Escaped text

    Examples:
        >>> escape_xml("Rock & Roll")
        'Rock &amp; Roll'
    """
    if not text:
        return ""
    for char, entity in _REPLACEMENTS:
        text = text.replace(char, entity)
    return text
