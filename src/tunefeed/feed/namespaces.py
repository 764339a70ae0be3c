"""XML namespaces used in generated feeds."""

PODCAST_NS = "https://podcastindex.org/namespace/1.0"
ITUNES_NS = "http://www.itunes.com/dtds/podcast-1.0.dtd"
XML_NS = "http://www.w3.org/XML/1998/namespace"

# Declared on every generated <rss> root, in this order
STANDARD_NAMESPACES: dict[str, str] = {
    "podcast": PODCAST_NS,
    "itunes": ITUNES_NS,
}

# Other spellings found in published feeds, read as the canonical URI
NAMESPACE_ALIASES: dict[str, str] = {
    "https://github.com/Podcastindex-org/podcast-namespace/blob/main/docs/1.0.md": PODCAST_NS,
    "http://podcastindex.org/namespace/1.0": PODCAST_NS,
    "https://podcastindex.org/namespace/1.0/": PODCAST_NS,
    "http://www.itunes.com/DTDs/Podcast-1.0.dtd": ITUNES_NS,
    "https://www.itunes.com/dtds/podcast-1.0.dtd": ITUNES_NS,
}


def podcast(local: str) -> str:
    """ElementTree name for a podcast-namespace element."""
    return f"{{{PODCAST_NS}}}{local}"


def itunes(local: str) -> str:
    """ElementTree name for an itunes-namespace element."""
    return f"{{{ITUNES_NS}}}{local}"


def split_tag(tag: str) -> tuple[str | None, str]:
    """Split an ElementTree name into (namespace uri, local name)."""
    if tag.startswith("{"):
        uri, _, local = tag[1:].partition("}")
        return uri, local
    return None, tag


def canonical_uri(uri: str) -> str:
    """Map an alias namespace URI onto the one the codec works with."""
    return NAMESPACE_ALIASES.get(uri, uri)


def canonical_tag(tag: str) -> str:
    """Rewrite an ElementTree name whose namespace is a known alias.

    Examples:
        >>> canonical_tag("{http://www.itunes.com/DTDs/Podcast-1.0.dtd}author")
        '{http://www.itunes.com/dtds/podcast-1.0.dtd}author'
    """
    uri, local = split_tag(tag)
    if uri is None or uri not in NAMESPACE_ALIASES:
        return tag
    return f"{{{NAMESPACE_ALIASES[uri]}}}{local}"
