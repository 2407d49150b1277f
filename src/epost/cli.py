"""CLI entry point for epost."""

import json
import logging
import sys
from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from epost.backends.base import LetterBackend
from epost.backends.http import HttpBackend
from epost.config import REGISTRY, Settings, load_settings, resolve_entry, serialize_value
from epost.errors import EPostException, ErrorException
from epost.letter import Letter
from epost.models import DeliveryOptions, Envelope


def _make_backend(settings: Settings) -> LetterBackend:
    return HttpBackend(settings.endpoint, timeout=settings.timeout)


def _make_letter(settings: Settings) -> Letter:
    return Letter.from_settings(settings, backend=_make_backend(settings))


def _parse_fields(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, Any]:
    """Parse repeated KEY=VALUE options; JSON literals are decoded."""
    fields: dict[str, Any] = {}
    for item in values:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}")
        try:
            fields[key] = json.loads(raw)
        except ValueError:
            fields[key] = raw
    return fields


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _handle_errors(f: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator: report library errors on stderr and exit non-zero."""

    @wraps(f)
    def decorated(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except ErrorException as exc:
            click.echo(f"Error: {exc}", err=True)
            if exc.error.data is not None:
                click.echo(json.dumps(exc.error.data, default=str), err=True)
            sys.exit(1)
        except EPostException as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)

    return decorated


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="INI file with [api] and [letter] sections",
)
@click.option("--verbose", "-v", is_flag=True, help="Log requests")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, verbose: bool):
    """E-POST letter submission tool."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    ctx.obj = load_settings(config_file)


# ---- letter commands -----------------------------------------------------


@main.command("send")
@click.argument("attachment", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--recipient", "-r", multiple=True, callback=_parse_fields, help="Recipient KEY=VALUE"
)
@click.option("--sender", "-s", multiple=True, callback=_parse_fields, help="Sender KEY=VALUE")
@click.option(
    "--cover-letter", type=click.Path(exists=True, dir_okay=False), help="Cover letter file"
)
@click.option(
    "--option", "-o", "options", multiple=True, callback=_parse_fields,
    help="Delivery option KEY=VALUE",
)
@click.option("--test-email", default=None, help="Send as test letter to this address")
@click.pass_obj
@_handle_errors
def send_command(
    settings: Settings,
    attachment: str,
    recipient: dict[str, Any],
    sender: dict[str, Any],
    cover_letter: str | None,
    options: dict[str, Any],
    test_email: str | None,
):
    """Submit ATTACHMENT (a PDF) as a letter and print its id."""
    letter = _make_letter(settings)
    letter.set_envelope(Envelope(recipient=recipient, sender=sender))
    letter.set_attachment(attachment)
    letter.set_cover_letter(cover_letter)
    if options:
        letter.set_delivery_options(DeliveryOptions(**options))
    if test_email is not None:
        letter.set_test_email(test_email)

    letter.send()
    click.echo(letter.get_letter_id())


@main.command("status")
@click.argument("letter_id")
@click.pass_obj
@_handle_errors
def status_command(settings: Settings, letter_id: str):
    """Show the status of one letter."""
    status = _make_letter(settings).get_letter_status(letter_id)
    _echo_json(status.to_dict())


@main.command("statuses")
@click.argument("letter_ids", nargs=-1, required=True)
@click.option("--only-issues", is_flag=True, help="Only report letters with problems")
@click.pass_obj
@_handle_errors
def statuses_command(settings: Settings, letter_ids: tuple[str, ...], only_issues: bool):
    """Show the status of several letters."""
    result = _make_letter(settings).get_multiple_letter_statuses(
        list(letter_ids), only_issues=only_issues
    )
    if isinstance(result, list):
        result = [s.to_dict() if hasattr(s, "to_dict") else s for s in result]
    _echo_json(result)


@main.command("status-range")
@click.argument("from_date", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.argument("till_date", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option("--only-issues", is_flag=True, help="Only report letters with problems")
@click.pass_obj
@_handle_errors
def status_range_command(settings: Settings, from_date, till_date, only_issues: bool):
    """Show letters submitted between FROM_DATE and TILL_DATE (YYYY-MM-DD)."""
    result = _make_letter(settings).get_letter_status_by_date_range(
        from_date.date(), till_date.date(), only_issues=only_issues
    )
    _echo_json(result)


# ---- config group --------------------------------------------------------


@main.group()
def config():
    """View effective configuration settings."""


@config.command("list")
@click.pass_obj
def config_list(settings: Settings):
    """Show all settings with their effective values."""
    current_group = ""
    for entry in REGISTRY:
        group = entry.key.split(".")[0]
        if group != current_group:
            if current_group:
                click.echo()
            click.echo(click.style(f"[{group}]", bold=True))
            current_group = group

        value = serialize_value(entry, settings[entry.key])
        source = settings.sources[entry.key]

        if entry.secret and value:
            display = "********"
        else:
            display = value if value else "(empty)"

        source_tag = click.style(f"[{source}]", fg="yellow" if source == "default" else "cyan")
        click.echo(f"  {entry.key} = {display}  {source_tag}")
        click.echo(click.style(f"    {entry.description}", dim=True))


@config.command("get")
@click.argument("key")
@click.pass_obj
def config_get(settings: Settings, key: str):
    """Get the effective value of a setting."""
    entry = resolve_entry(key)
    if not entry:
        click.echo(f"Unknown setting: {key}", err=True)
        sys.exit(1)
    assert entry is not None

    value = serialize_value(entry, settings[key])
    if entry.secret and value:
        click.echo("********")
    else:
        click.echo(value if value else "(empty)")
