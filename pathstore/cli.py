"""
Main entry point for PathStore. Accessed by 'pathstore' in the command line.
"""
from datetime import datetime
from functools import update_wrapper
import json
import logging
from pathlib import Path
from typing import Any

import click

from pathstore.core.loader import load_store
from pathstore.core.settings import load_settings, StoreSettings
from pathstore.core.store import PathStore
from pathstore.utils.size import parse_size_in_bytes

# --as choices -> typed accessor
GETTERS = {
    "string": PathStore.get_string,
    "bool": PathStore.get_bool,
    "int": PathStore.get_int,
    "float": PathStore.get_float64,
    "time": PathStore.get_time,
    "duration": PathStore.get_duration,
    "size": PathStore.get_size_in_bytes,
    "slice": PathStore.get_slice,
    "map": PathStore.get_string_map,
}


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging once for command line use."""
    logger = logging.getLogger("pathstore")
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


def pass_settings(f):
    """
    Decorator to pass StoreSettings to Click commands that need them.
    Settings are loaded once per invocation, then command line overrides applied.
    """
    @click.pass_context
    def new_func(ctx: click.Context, *args, **kwargs):
        ctx.ensure_object(dict)
        settings = ctx.obj.get('settings')
        if settings is None:
            opts = ctx.obj.get('global_opts', {})  # user overrides
            settings = load_settings(opts.get('settings_path'))
            if opts.get('delimiter'):
                settings = StoreSettings(delimiter=opts['delimiter'], verbose=settings.verbose)
            if opts.get('verbose'):
                settings = settings.model_copy(update={'verbose': True})
            setup_logging(settings.verbose)
            ctx.obj['settings'] = settings
        return f(ctx.obj['settings'], *args, **kwargs)
    return update_wrapper(new_func, f)


def render(value: Any) -> str:
    """Format a looked-up value for the terminal."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, default=str)
    return str(value)


@click.group()
@click.option('--settings', 'settings_path', type=click.Path(path_type=Path), default=None,
              help="Settings file (YAML or JSON). Defaults to the user config directory.")
@click.option('-d', '--delimiter', default=None,
              help="Separator between key segments. Overrides the settings file.")
@click.option('-v', '--verbose', is_flag=True, default=False,
              help="Debug logging, including why a key was not found.")
@click.version_option(package_name="pathstore")
@click.pass_context
def main(ctx, settings_path, delimiter, verbose):
    """PathStore: look up values in nested JSON/YAML documents by key path."""
    ctx.ensure_object(dict)
    ctx.obj['global_opts'] = {
        'settings_path': settings_path,
        'delimiter': delimiter,
        'verbose': verbose,
    }


@main.command()
@pass_settings
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("key")
@click.option("--as", "as_type", type=click.Choice(["raw", *GETTERS]), default="raw",
              show_default=True, help="Coerce the value to this type before printing.")
def get(settings: StoreSettings, document: Path, key: str, as_type: str):
    """
    Print the value at KEY in DOCUMENT. Exits with 1 if KEY is absent.

    Example: pathstore get event.json event:simulator --as bool
    """
    store = load_store(document, delimiter=settings.delimiter)
    if key not in store:
        click.echo(f"Key not found: {key}", err=True)
        raise click.exceptions.Exit(1)
    if as_type == "raw":
        value = store.get(key)
    else:
        value = GETTERS[as_type](store, key)
    click.echo(render(value))


@main.command()
@pass_settings
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("key")
def shadow(settings: StoreSettings, document: Path, key: str):
    """Print the prefix of KEY that holds a plain value and hides the rest of it."""
    store = load_store(document, delimiter=settings.delimiter)
    prefix = store.shadowed_path(key)
    if prefix:
        click.echo(prefix)
    else:
        click.echo(f"'{key}' is not shadowed.", err=True)


@main.command()
@click.argument("text")
def size(text: str):
    """Print the number of bytes in a size string such as '1GB' or '12 mb'."""
    click.echo(parse_size_in_bytes(text))
