"""atmo CLI -- validate and normalize AT Protocol identifiers.

Thin wrapper around :mod:`atmo.core` using click.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import click

from atmo.config import Settings
from atmo.core import (
    AtIdentifier,
    AtmoError,
    AtUri,
    CidString,
    DateTime,
    Did,
    ErrorKind,
    Handle,
    Nsid,
    RecordKey,
    StringFormat,
    Tid,
)

logger = logging.getLogger(__name__)

_KINDS: dict[str, type[StringFormat]] = {
    ErrorKind.HANDLE.value: Handle,
    ErrorKind.DID.value: Did,
    ErrorKind.NSID.value: Nsid,
    ErrorKind.AT_IDENTIFIER.value: AtIdentifier,
    ErrorKind.AT_URI.value: AtUri,
    ErrorKind.TID.value: Tid,
    ErrorKind.RECORD_KEY.value: RecordKey,
    ErrorKind.CID.value: CidString,
    ErrorKind.DATETIME.value: DateTime,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _error(msg: str) -> None:
    """Print an error message to stderr and exit 1."""
    click.echo(msg, err=True)
    raise SystemExit(1)


def _describe(value: StringFormat) -> dict[str, Any]:
    """Break a parsed value into its components for ``--json`` output."""
    d: dict[str, Any] = {"type": type(value).__name__, "value": str(value)}
    if isinstance(value, Handle):
        d["normalized"] = str(value.normalized())
        d["disallowed_tld"] = value.is_disallowed_tld
    elif isinstance(value, Did):
        d["method"] = value.method
        d["identifier"] = value.identifier
    elif isinstance(value, Nsid):
        d["authority"] = value.authority
        d["name"] = value.name
    elif isinstance(value, AtIdentifier):
        d["kind"] = value.kind.value
    elif isinstance(value, AtUri):
        d["authority"] = str(value.authority)
        d["collection"] = str(value.collection) if value.collection else None
        d["rkey"] = str(value.rkey) if value.rkey else None
        d["fragment"] = value.fragment
    elif isinstance(value, Tid):
        d["timestamp"] = str(DateTime.from_datetime(value.as_datetime()))
        d["clock_id"] = value.clock_id
    elif isinstance(value, CidString):
        d["version"] = value.version
        d["codec"] = value.codec
    return d


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="atmo")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """atmo -- AT Protocol identifier toolkit."""
    try:
        settings = Settings()
    except ValueError as exc:
        _error(f"Error: {exc}")
        return
    ctx.obj = settings
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.debug:
        logging.getLogger("atmo").setLevel(logging.DEBUG)


# ---------------------------------------------------------------------------
# atmo parse
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("kind", type=click.Choice(sorted(_KINDS)))
@click.argument("text")
@click.option("--json", "as_json", is_flag=True, help="Print components as JSON.")
def parse(kind: str, text: str, as_json: bool) -> None:
    """Validate TEXT as KIND and print its canonical form."""
    try:
        value = _KINDS[kind].parse(text)
    except AtmoError as exc:
        _error(f"Error: {exc}")
        return
    logger.debug("Parsed %s %r", kind, text)
    if as_json:
        click.echo(json.dumps(_describe(value), indent=2))
    else:
        click.echo(str(value))


# ---------------------------------------------------------------------------
# atmo tid
# ---------------------------------------------------------------------------


@cli.command()
@click.option(
    "--clock-id",
    type=click.IntRange(0, 1023),
    default=None,
    help="Clock id (default: ATMO_TID_CLOCK_ID or random).",
)
@click.pass_obj
def tid(settings: Settings, clock_id: int | None) -> None:
    """Print a fresh TID for the current time."""
    if clock_id is None:
        clock_id = settings.tid_clock_id
    click.echo(str(Tid.now(clock_id)))


if __name__ == "__main__":
    cli()
