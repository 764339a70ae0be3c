"""CLI entry point for Tunefeed."""

import sys
from enum import Enum
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tunefeed.config.logging import setup_logging
from tunefeed.config.manager import ConfigManager
from tunefeed.feed.documents import FeedDocument, load_document, save_document
from tunefeed.feed.factory import (
    add_person,
    add_recipient,
    create_empty_album,
    create_empty_person,
    create_empty_publisher_feed,
    create_empty_video_album,
    detect_address_type,
)
from tunefeed.feed.generator import generate_album_feed, generate_publisher_feed
from tunefeed.feed.inheritance import effective_value
from tunefeed.feed.models import (
    KNOWN_MEDIUMS,
    Album,
    Override,
    PersonRole,
    PersonsOverride,
    PublisherFeed,
    Track,
    ValueBlock,
    ValueOverride,
    ValueRecipient,
    is_music_medium,
)
from tunefeed.feed.parser import FeedParser
from tunefeed.utils.errors import ConfigError, FeedParseError, MissingFieldError, TunefeedError

app = typer.Typer(
    name="tunefeed",
    help="Build and import Podcasting 2.0 feeds for music albums and publishers",
    no_args_is_help=True,
)
config_app = typer.Typer(help="Inspect Tunefeed configuration", no_args_is_help=True)
app.add_typer(config_app, name="config")

console = Console()
err_console = Console(stderr=True)


class FeedKind(str, Enum):
    """Kinds of document `tunefeed new` can create."""

    ALBUM = "album"
    VIDEO = "video"
    PUBLISHER = "publisher"


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
) -> None:
    """Tunefeed - Podcasting 2.0 feeds for music albums, videos and publishers."""
    try:
        config = ConfigManager().load_config()
    except ConfigError as e:
        err_console.print(f"[red]✗[/red] {escape(str(e))}")
        sys.exit(1)

    setup_logging(verbose=verbose, log_file=log_file, level=config.log_level)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from tunefeed import __version__

    console.print(f"[bold cyan]Tunefeed[/bold cyan] v{__version__}")


@app.command("new")
def new_document(
    kind: FeedKind = typer.Argument(..., help="Kind of feed: album, video or publisher"),
    output: Path = typer.Argument(..., help="Where to write the YAML document"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Create an empty feed document.

    Examples:
        tunefeed new album my-album.yaml

        tunefeed new publisher label.yaml
    """
    try:
        if output.exists() and not force:
            err_console.print(f"[red]✗[/red] {output} already exists (use --force to overwrite)")
            sys.exit(1)

        config = ConfigManager().load_config()
        options = {"language": config.default_language, "generator": config.default_generator}
        if kind is FeedKind.PUBLISHER:
            feed: FeedDocument = create_empty_publisher_feed(**options)
        elif kind is FeedKind.VIDEO:
            feed = create_empty_video_album(**options)
        else:
            feed = create_empty_album(**options)

        save_document(feed, output)
        console.print(f"[green]✓[/green] Created {kind.value} document [bold]{output}[/bold]")

    except ConfigError as e:
        err_console.print(f"[red]✗[/red] {escape(str(e))}")
        sys.exit(1)
    except TunefeedError as e:
        err_console.print(f"[red]✗[/red] Error: {escape(str(e))}")
        sys.exit(1)


@app.command("render")
def render_feed(
    document: Path = typer.Argument(..., help="Feed document (YAML)"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write XML to this file instead of stdout"
    ),
) -> None:
    """Generate RSS XML from a feed document.

    Examples:
        tunefeed render my-album.yaml -o feed.xml
    """
    try:
        feed = load_document(document)
    except TunefeedError as e:
        err_console.print(f"[red]✗[/red] {escape(str(e))}")
        sys.exit(1)

    for warning in split_warnings(feed):
        err_console.print(f"[yellow]⚠[/yellow] {warning}")

    if isinstance(feed, PublisherFeed):
        xml = generate_publisher_feed(feed)
    else:
        xml = generate_album_feed(feed)

    if output is None:
        typer.echo(xml)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(xml + "\n", encoding="utf-8")
    console.print(f"[green]✓[/green] Wrote feed to [bold]{output}[/bold]")


@app.command("import")
def import_feed(
    feed_file: Path = typer.Argument(..., help="RSS feed XML file"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the YAML document to this file instead of stdout"
    ),
    publisher: bool = typer.Option(
        False, "--publisher", help="Import as a publisher catalog feed"
    ),
    skip_invalid: bool | None = typer.Option(
        None,
        "--skip-invalid/--no-skip-invalid",
        help="Skip items missing a title or enclosure (default from config)",
    ),
) -> None:
    """Import an existing RSS feed into an editable document.

    Examples:
        tunefeed import feed.xml -o my-album.yaml
    """
    try:
        config = ConfigManager().load_config()
        if skip_invalid is None:
            skip_invalid = config.skip_invalid_items

        if not feed_file.exists():
            err_console.print(f"[red]✗[/red] Feed file not found: {feed_file}")
            sys.exit(1)

        xml = feed_file.read_bytes()
        parser = FeedParser(skip_invalid_items=skip_invalid)
        feed: FeedDocument = parser.parse_publisher(xml) if publisher else parser.parse_album(xml)

    except MissingFieldError as e:
        err_console.print(f"[red]✗[/red] {escape(str(e))}")
        err_console.print("[dim]  Use --skip-invalid to import the remaining items[/dim]")
        sys.exit(1)
    except FeedParseError as e:
        err_console.print(f"[red]✗[/red] Failed to parse feed: {escape(str(e))}")
        sys.exit(1)
    except TunefeedError as e:
        err_console.print(f"[red]✗[/red] Error: {escape(str(e))}")
        sys.exit(1)

    if isinstance(feed, Album) and config.warn_non_music_medium and not is_music_medium(feed.medium):
        known = "" if feed.medium in KNOWN_MEDIUMS else " (unrecognised medium)"
        err_console.print(
            f"[yellow]⚠[/yellow] Feed medium is '{escape(feed.medium)}', not a music medium{known}"
        )

    if output is None:
        typer.echo(
            yaml.safe_dump(
                feed.model_dump(mode="json"),
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
        )
        return

    save_document(feed, output)
    console.print(f"[green]✓[/green] Imported [bold]{escape(feed.title)}[/bold] into {output}")


def _load_or_exit(document: Path) -> FeedDocument:
    try:
        return load_document(document)
    except TunefeedError as e:
        err_console.print(f"[red]✗[/red] {escape(str(e))}")
        sys.exit(1)


def _track_or_exit(feed: FeedDocument, track_number: int) -> Track:
    if not isinstance(feed, Album):
        err_console.print("[red]✗[/red] Publisher feeds have no tracks")
        sys.exit(1)
    for track in feed.tracks:
        if track.track_number == track_number:
            return track
    err_console.print(f"[red]✗[/red] No track {track_number} in {escape(feed.title or 'feed')}")
    sys.exit(1)


@app.command("add-recipient")
def add_recipient_command(
    document: Path = typer.Argument(..., help="Feed document (YAML)"),
    address: str = typer.Argument(..., help="Lightning address or node pubkey"),
    split: int = typer.Option(0, "--split", "-s", min=0, help="Share of each payment"),
    name: str = typer.Option("", "--name", "-n", help="Recipient name"),
    track_number: int | None = typer.Option(
        None, "--track", "-t", help="Give this track its own value block"
    ),
) -> None:
    """Add a value recipient to a feed or to one track.

    The first recipient added to a value block also adds the support
    recipients (1% each).

    Examples:
        tunefeed add-recipient my-album.yaml artist@getalby.com --split 95 --name Artist

        tunefeed add-recipient my-album.yaml guest@getalby.com --split 50 --track 2
    """
    feed = _load_or_exit(document)
    recipient = ValueRecipient(
        name=name, address=address, split=split, type=detect_address_type(address)
    )

    if track_number is None:
        feed.value = add_recipient(feed.value, recipient)
        target = "channel"
    else:
        track = _track_or_exit(feed, track_number)
        base = track.value.data if isinstance(track.value, Override) else ValueBlock()
        track.value = ValueOverride(data=add_recipient(base, recipient))
        target = f"track {track_number}"

    save_document(feed, document)
    console.print(f"[green]✓[/green] Added {escape(address)} to the {target} value block")
    for warning in split_warnings(feed):
        err_console.print(f"[yellow]⚠[/yellow] {warning}")


@app.command("add-person")
def add_person_command(
    document: Path = typer.Argument(..., help="Feed document (YAML)"),
    name: str = typer.Argument(..., help="Person's name"),
    group: str = typer.Option("music", "--group", "-g", help="Role group"),
    role: str = typer.Option("band", "--role", "-r", help="Role within the group"),
    href: str | None = typer.Option(None, "--href", help="Link to the person"),
    img: str | None = typer.Option(None, "--img", help="Picture of the person"),
    track_number: int | None = typer.Option(
        None, "--track", "-t", help="Give this track its own credits"
    ),
) -> None:
    """Credit a person on a feed or on one track.

    Examples:
        tunefeed add-person my-album.yaml "Ada Vox" --role vocalist

        tunefeed add-person my-album.yaml "Guest" --role guitarist --track 3
    """
    feed = _load_or_exit(document)
    person = create_empty_person()
    person.name = name
    person.href = href
    person.img = img
    person.roles = [PersonRole(group=group, role=role)]

    if track_number is None:
        feed.persons = add_person(feed.persons, person)
        target = "channel"
    else:
        track = _track_or_exit(feed, track_number)
        base = track.persons.data if isinstance(track.persons, Override) else []
        track.persons = PersonsOverride(data=add_person(base, person))
        target = f"track {track_number}"

    save_document(feed, document)
    console.print(f"[green]✓[/green] Credited {escape(name)} as {escape(role)} on the {target}")


@config_app.command("show")
def show_config() -> None:
    """Show the effective configuration."""
    try:
        manager = ConfigManager()
        config = manager.load_config()
    except ConfigError as e:
        err_console.print(f"[red]✗[/red] {escape(str(e))}")
        sys.exit(1)

    table = Table(title=f"Configuration ({manager.config_file})")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in config.model_dump(mode="json").items():
        table.add_row(key, str(value))
    console.print(table)


def split_warnings(feed: FeedDocument) -> list[str]:
    """Value blocks whose splits don't add up to 100."""

    def check(label: str, value: ValueBlock) -> str | None:
        if not value.recipients:
            return None
        total = sum(r.split for r in value.recipients)
        if total != 100:
            return f"{label} value splits add up to {total}, not 100"
        return None

    warnings = [check("Channel", feed.value)]
    if isinstance(feed, Album):
        for track in feed.tracks:
            if track.overrides_value:
                warnings.append(
                    check(f"Track {track.track_number}", effective_value(track, feed))
                )
    return [w for w in warnings if w]


if __name__ == "__main__":
    app()
