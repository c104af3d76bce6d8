# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Command-line interface for the SenderNet SDK.

Usage:
    sendernet send --from-email info@example.com --from-name Example \\
        --to john@example.com --to-name John \\
        --subject "Welcome" --text "Hello John"

    sendernet send ... --header X-Campaign=spring --var name=John \\
        --attach-url invoice.pdf=https://cdn.example.com/invoice.pdf \\
        --attach-file ./terms.pdf

    sendernet config --config /etc/sendernet.ini

The API key comes from ``--api-key``, the ``[sendernet]`` section of the
``--config`` file, or the ``SENDER_API_KEY`` environment variable.
"""

from __future__ import annotations

import base64
import json
import mimetypes
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .client import SenderNet
from .config import load_config_file, resolve_config
from .exceptions import SenderNetError, SenderNetValidationError
from .models import Base64Attachment, EmailParams, Header, Recipient, UrlAttachment

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print a formatted error message to stderr."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")


def print_success(message: str) -> None:
    """Print a formatted success message with checkmark."""
    console.print(f"[green]✓[/green] {message}")


def print_json(data: Any) -> None:
    """Print data as syntax-highlighted JSON."""
    console.print_json(json.dumps(data, indent=2, default=str))


def split_pair(value: str, option: str) -> tuple[str, str]:
    """Split a ``KEY=VALUE`` option value.

    Raises:
        click.BadParameter: If there is no ``=`` or the key is empty.
    """
    key, sep, val = value.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"expected KEY=VALUE, got '{value}'", param_hint=option)
    return key, val


def file_attachment(path: str) -> Base64Attachment:
    """Read a local file into an inline attachment."""
    file_path = Path(path)
    mime_type, _ = mimetypes.guess_type(file_path.name)
    return Base64Attachment(
        filename=file_path.name,
        data=base64.b64encode(file_path.read_bytes()).decode("ascii"),
        mime_type=mime_type,
    )


def build_options(config_path: str | None, api_key: str | None) -> dict[str, Any]:
    options = load_config_file(config_path)
    if api_key:
        options["api_key"] = api_key
    return options


def mask_secret(secret: str) -> str:
    if len(secret) <= 4:
        return "*" * len(secret)
    return f"{'*' * (len(secret) - 4)}{secret[-4:]}"


@click.group()
@click.version_option(package_name="sendernet")
def main() -> None:
    """Send transactional emails through the Sender.net API."""


@main.command()
@click.option("--from-email", required=True, help="Sender email address.")
@click.option("--from-name", required=True, help="Sender display name.")
@click.option("--to", "to_email", required=True, help="Recipient email address.")
@click.option("--to-name", default=None, help="Recipient display name.")
@click.option("--reply-to", default=None, help="Reply-To address.")
@click.option("--reply-to-name", default=None, help="Reply-To display name.")
@click.option("--subject", required=True, help="Email subject.")
@click.option("--text", default=None, help="Plain text body.")
@click.option("--html", default=None, help="HTML body.")
@click.option("--header", "headers", multiple=True, metavar="NAME=VALUE", help="Custom header.")
@click.option("--var", "variables", multiple=True, metavar="KEY=VALUE", help="Template variable.")
@click.option("--attach-url", "url_attachments", multiple=True, metavar="FILENAME=URL",
              help="Attachment downloaded by the API from a URL.")
@click.option("--attach-file", "file_attachments", multiple=True,
              type=click.Path(exists=True, dir_okay=False), help="Local file sent inline.")
@click.option("--api-key", default=None, help="API key (overrides config and environment).")
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False),
              help="INI file with a [sendernet] section.")
def send(
    from_email: str,
    from_name: str,
    to_email: str,
    to_name: str | None,
    reply_to: str | None,
    reply_to_name: str | None,
    subject: str,
    text: str | None,
    html: str | None,
    headers: tuple[str, ...],
    variables: tuple[str, ...],
    url_attachments: tuple[str, ...],
    file_attachments: tuple[str, ...],
    api_key: str | None,
    config_path: str | None,
) -> None:
    """Send one email."""
    try:
        params = (
            EmailParams()
            .set_from(from_email)
            .set_from_name(from_name)
            .set_reply_to(reply_to)
            .set_reply_to_name(reply_to_name)
            .set_recipients([Recipient(to_email, to_name)])
            .set_subject(subject)
            .set_text(text)
            .set_html(html)
            .set_headers([Header(*split_pair(h, "--header")) for h in headers])
            .set_variables(dict(split_pair(v, "--var") for v in variables))
        )
        attachments: list[Any] = []
        for item in url_attachments:
            filename, url = split_pair(item, "--attach-url")
            attachments.append(UrlAttachment(filename=filename, url=url))
        attachments.extend(file_attachment(path) for path in file_attachments)
        params.set_attachments(attachments)

        sender = SenderNet(build_options(config_path, api_key))
        result = sender.email.send(params)
    except ValidationError as e:
        for error in e.errors():
            print_error(error["msg"])
        sys.exit(1)
    except SenderNetValidationError as e:
        print_error(str(e))
        for message in e.error_messages:
            err_console.print(f"  - {escape(message)}")
        sys.exit(1)
    except SenderNetError as e:
        print_error(str(e))
        sys.exit(1)

    print_success(f"Email sent (status {result['status_code']})")
    if result["body"]:
        print_json(result["body"])


@main.command("config")
@click.option("--api-key", default=None, help="API key (overrides config and environment).")
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False),
              help="INI file with a [sendernet] section.")
def show_config(api_key: str | None, config_path: str | None) -> None:
    """Show the resolved configuration."""
    try:
        config = resolve_config(build_options(config_path, api_key))
    except SenderNetError as e:
        print_error(str(e))
        sys.exit(1)

    table = Table(title="SenderNet configuration")
    table.add_column("Option", style="cyan")
    table.add_column("Value")
    table.add_row("host", config.host)
    table.add_row("protocol", config.protocol)
    table.add_row("api_path", config.api_path)
    table.add_row("api_key", mask_secret(config.api_key))
    table.add_row("timeout", str(config.timeout))
    table.add_row("debug", str(config.debug))
    console.print(table)


if __name__ == "__main__":
    main()
