"""
Main CLI entry point for fieldsettings.

Reads and writes the settings fields of a record kept in a JSON file
(see fieldsettings.records.JsonFileRecord).
"""

import json as _json
import logging as _logging
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import click as _click

import fieldsettings
import fieldsettings.config as config
import fieldsettings.errors as errors
import fieldsettings.records as records
import fieldsettings.store as store

CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_field_option = _click.option(
    "--field",
    "-F",
    "field",
    default=None,
    help="Settings field to use (default: first registered field)",
)


def _parse_value(text: str, *, as_string: bool) -> _typing.Any:
    """Parse a command line value as JSON, falling back to the raw string."""
    if as_string:
        return text
    try:
        return _json.loads(text)
    except ValueError:
        return text


def _get_store(ctx: _click.Context, field: str | None) -> store.FieldSettingsStore:
    record: records.JsonFileRecord = ctx.obj["record"]
    try:
        return record.settings(field)
    except errors.ConfigurationError as e:
        raise _click.ClickException(str(e)) from e


def _print_json(data: _typing.Any, *, plain: bool) -> None:
    """Print data as JSON, highlighted when writing to a terminal."""
    if plain or not _sys.stdout.isatty():
        _click.echo(_json.dumps(data, indent=2, ensure_ascii=False))
        return

    import rich.console as _rich_console

    _rich_console.Console().print_json(data=data)


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(fieldsettings.__version__, "-v", "--version", prog_name="fieldsettings")
@_click.option(
    "--file",
    "-f",
    "record_file",
    type=_click.Path(dir_okay=False, path_type=_pathlib.Path),
    required=True,
    envvar="FIELDSETTINGS_RECORD_FILE",
    help="JSON file holding the record",
)
@_click.option(
    "--fields",
    "field_names",
    default=None,
    help="Comma-separated settings fields to register (default: settings)",
)
@_click.option(
    "--defaults",
    "defaults_file",
    type=_click.Path(exists=True, dir_okay=False, path_type=_pathlib.Path),
    default=None,
    help="YAML file with the default settings document",
)
@_click.option("--verbose", is_flag=True, help="Enable debug logging")
@_click.pass_context
def cli(
    ctx: _click.Context,
    record_file: _pathlib.Path,
    field_names: str | None,
    defaults_file: _pathlib.Path | None,
    verbose: bool,
) -> None:
    """fieldsettings - hierarchical settings stored in JSON record fields."""
    settings = config.get_settings()
    _logging.basicConfig(
        level=_logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        defaults = config.load_defaults_file(defaults_file) if defaults_file else None
    except config.DefaultsFileError as e:
        raise _click.ClickException(str(e)) from e

    names = None
    if field_names is not None:
        names = [name.strip() for name in field_names.split(",") if name.strip()]
        if not names:
            raise _click.BadParameter("expected at least one field name", param_hint="'--fields'")

    ctx.ensure_object(dict)
    ctx.obj["record"] = records.JsonFileRecord(
        record_file,
        field_names=names,
        defaults=defaults,
    )


@cli.command(name="fields")
@_click.pass_context
def fields_cmd(ctx: _click.Context) -> None:
    """List registered settings fields."""
    record: records.JsonFileRecord = ctx.obj["record"]
    default_field = record.default_settings_field_name()
    for name in record.settings_field_names:
        marker = " (default)" if name == default_field else ""
        _click.echo(f"{name}{marker}")


@cli.command()
@_field_option
@_click.option("--flat", is_flag=True, help="Show dot-path keys instead of a nested document")
@_click.option("--stored", is_flag=True, help="Show only the stored overrides, without defaults")
@_click.option("--json", "as_json", is_flag=True, help="Plain JSON output")
@_click.pass_context
def show(
    ctx: _click.Context,
    field: str | None,
    flat: bool,
    stored: bool,
    as_json: bool,
) -> None:
    """Show the effective settings of a field.

    Examples:
        fieldsettings -f user.json show
        fieldsettings -f user.json show --flat
        fieldsettings -f user.json --fields settings,address show -F address
    """
    settings_store = _get_store(ctx, field)
    if stored:
        data = settings_store.stored()
    elif flat:
        data = settings_store.all_flattened()
    else:
        data = settings_store.all()
    _print_json(data, plain=as_json)


@cli.command()
@_field_option
@_click.option("--default", "default_value", default=None, help="Printed when PATH is missing")
@_click.argument("path")
@_click.pass_context
def get(ctx: _click.Context, field: str | None, default_value: str | None, path: str) -> None:
    """Print the value at a dot PATH as JSON."""
    settings_store = _get_store(ctx, field)
    if not settings_store.has(path):
        if default_value is None:
            raise _click.ClickException(f"No value at path: {path}")
        _click.echo(default_value)
        return
    _click.echo(_json.dumps(settings_store.get(path), ensure_ascii=False))


@cli.command(name="set")
@_field_option
@_click.option("--string", "as_string", is_flag=True, help="Store VALUE as a string, not JSON")
@_click.argument("path")
@_click.argument("value")
@_click.pass_context
def set_cmd(
    ctx: _click.Context,
    field: str | None,
    as_string: bool,
    path: str,
    value: str,
) -> None:
    """Set a dot PATH to VALUE (parsed as JSON when possible)."""
    settings_store = _get_store(ctx, field)
    try:
        settings_store.set(path, _parse_value(value, as_string=as_string))
    except errors.ValidationError as e:
        raise _click.ClickException(str(e)) from e


@cli.command()
@_field_option
@_click.argument("paths", nargs=-1, required=True)
@_click.pass_context
def delete(ctx: _click.Context, field: str | None, paths: tuple[str, ...]) -> None:
    """Delete one or more dot PATHS (defaults show through again)."""
    settings_store = _get_store(ctx, field)
    try:
        settings_store.delete_multiple(paths)
    except errors.ValidationError as e:
        raise _click.ClickException(str(e)) from e


@cli.command()
@_field_option
@_click.pass_context
def clear(ctx: _click.Context, field: str | None) -> None:
    """Remove every stored value of a field."""
    settings_store = _get_store(ctx, field)
    try:
        settings_store.clear()
    except errors.ValidationError as e:
        raise _click.ClickException(str(e)) from e


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
