# CLI entrypoint for loghook

import signal
import sys

# Handle Ctrl+C gracefully before any other imports
signal.signal(signal.SIGINT, lambda *_: sys.exit(130))

import logging
from typing import List, Optional

import click
import typer

from .config import load_config, set_dotenv_path
from .errors import CannotCreateIndexError
from .handler import ensure_index, hook_from_config
from .levels import accepted_levels, parse_level
from .lifecycle import LifecycleContext
from .opensearch.client import (
	get_opensearch_client,
	get_store,
	check_connection,
	OpenSearchError,
)
from .opensearch.mappings import LOG_INDEX_MAPPING, log_index_template

app = typer.Typer()


def _echo_error(message):
	typer.echo(typer.style(f"Error: {message}", fg=typer.colors.RED), err=True)


def _parse_fields(fields):
	data = {}
	for item in fields or []:
		key, sep, value = item.partition("=")
		key = key.strip()
		if not sep or not key:
			raise typer.BadParameter(f"Expected key=value, got {item!r}", param_hint="--field")
		data[key] = value
	return data


def _parse_level_option(level):
	try:
		return parse_level(level)
	except ValueError as e:
		raise typer.BadParameter(str(e), param_hint="--level")


def require_opensearch():
	"""Get client and verify OpenSearch is accessible."""
	cfg = load_config()
	client = get_opensearch_client(cfg)
	try:
		check_connection(client, cfg)
	except OpenSearchError as e:
		_echo_error(e)
		raise typer.Exit(1)
	return client, cfg


@app.callback()
def _main_options(
	env: Optional[str] = typer.Option(None, "--env", help="Load settings from this .env file"),
):
	"""Ship application logs to OpenSearch."""
	if env:
		set_dotenv_path(env)


@app.command()
def init(
	template: bool = typer.Option(False, "--template", help="Also install an index template for '<index>-*'"),
):
	"""Create the log index with the default mapping (idempotent)."""
	client, cfg = require_opensearch()
	if template:
		client.indices.put_index_template(name=f"{cfg.index}-template", body=log_index_template(f"{cfg.index}-*"))
		typer.echo(f"Installed index template for '{cfg.index}-*'.")
	try:
		created = ensure_index(get_store(cfg, client=client), cfg.index, LifecycleContext(), LOG_INDEX_MAPPING)
	except CannotCreateIndexError as e:
		_echo_error(e)
		raise typer.Exit(1)
	if not created:
		typer.echo(f"Index '{cfg.index}' already exists.")
		return
	typer.echo(f"Created index '{cfg.index}'.")


@app.command()
def levels(
	level: Optional[str] = typer.Option(None, "--level", "-l", help="Minimum level (default: LOGHOOK_LEVEL)"),
):
	"""Show which levels a hook ships for a minimum level."""
	minimum = _parse_level_option(level) if level else load_config().level
	typer.echo(" ".join(item.label for item in accepted_levels(minimum)))


@app.command()
def send(
	message: str = typer.Argument(..., help="Message text"),
	level: str = typer.Option("info", "--level", "-l", help="Event level"),
	fields: Optional[List[str]] = typer.Option(None, "--field", "-f", help="Structured field as key=value (repeatable)"),
):
	"""Send one log event through a configured hook."""
	event_level = _parse_level_option(level)
	data = _parse_fields(fields)
	cfg = load_config()
	try:
		# Report this command as the call site
		hook = hook_from_config(cfg, skip_prefixes=("logging",))
	except Exception as e:
		_echo_error(f"Cannot set up hook: {type(e).__name__}: {e}")
		raise typer.Exit(1)
	try:
		if int(event_level) < hook.level:
			typer.echo(typer.style(
				f"Level '{event_level.label}' is below the minimum '{hook.levels[-1].label}'; nothing sent.",
				fg=typer.colors.YELLOW,
			), err=True)
			return
		record = logging.getLogger("loghook.send").makeRecord(
			"loghook.send", int(event_level), __file__, 0, message, None, None, extra={"data": data},
		)
		try:
			hook.fire(record)
		except Exception as e:
			_echo_error(f"Delivery failed: {type(e).__name__}: {e}")
			raise typer.Exit(1)
	finally:
		hook.close()
	typer.echo(f"Sent {event_level.label} event to '{cfg.index}'.")


def main():
	if len(sys.argv) == 1:
		# No arguments: show help
		command = typer.main.get_command(app)
		ctx = click.Context(command)
		typer.echo(command.get_help(ctx), err=True)
		return 0
	try:
		app()
	except typer.Exit:
		raise
	except Exception as e:
		typer.echo(typer.style(
			f"Fatal error: {type(e).__name__}: {e}",
			fg=typer.colors.RED
		), err=True)
		sys.exit(1)

if __name__ == "__main__":
	main()
