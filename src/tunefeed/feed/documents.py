"""Loading and saving feeds as editable YAML documents."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from tunefeed.feed.models import Album, PublisherFeed
from tunefeed.utils.errors import DocumentError

FeedDocument = Album | PublisherFeed


def load_document(path: Path) -> FeedDocument:
    """Load a feed document.

    Documents whose medium is "publisher" load as a PublisherFeed, anything
    else as an Album.

    Args:
        path: YAML file to read

    Returns:
        Validated Album or PublisherFeed

    Raises:
        DocumentError: If the file is missing, not YAML, or fails validation
    """
    if not path.exists():
        raise DocumentError(f"Feed document not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise DocumentError(f"Invalid YAML in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise DocumentError(f"Feed document {path} is not UTF-8: {e}") from e

    if not isinstance(data, dict):
        raise DocumentError(f"Feed document {path} must be a mapping")

    try:
        if data.get("medium") == "publisher":
            return PublisherFeed(**data)
        return Album(**data)
    except ValidationError as e:
        raise DocumentError(f"Invalid feed document {path}: {e}") from e


def save_document(feed: FeedDocument, path: Path) -> None:
    """Save a feed document as YAML, creating parent directories."""
    data = feed.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
