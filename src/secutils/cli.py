"""Command line interface for secutils."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any, NoReturn

import click
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from secutils.config import (
    ConfigError,
    ConfigManager,
    SecutilsConfig,
    assign_dotted,
    resolve_with_precedence,
)
from secutils.inspection import (
    DigestComputer,
    FileInspector,
    FileRecord,
    InspectionBatch,
    InspectionError,
    inspect_tree,
    persist,
    persist_many,
)
from secutils.inspection.persistence import record_payload
from secutils.ioc import INDICATOR_KINDS, IocExtractor, IocScan
from secutils.logging_utils import configure_logging

console = Console()


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> NoReturn:
    """Emit a standardized error and terminate the command.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(1)

    raise click.ClickException(message) from original


def _handle_inspection_error(exc: InspectionError, *, json_output: bool) -> NoReturn:
    details: dict[str, Any] = {"path": exc.path, "stage": exc.stage}
    errno = getattr(exc, "errno", None)
    if errno is not None:
        details["errno"] = errno
    _handle_cli_error(
        str(exc),
        code=f"{exc.stage}_failed",
        json_output=json_output,
        details=details,
        original=exc,
    )


def _emit_message(message: Any, *, quiet: bool, error: bool = False) -> None:
    if quiet and not error:
        return
    console.print(message)


def _load_config(json_output: bool) -> SecutilsConfig:
    manager = ConfigManager()
    try:
        return manager.load()
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)


def _resolve_flags(
    ctx: click.Context, config: SecutilsConfig, *, json_output: bool, quiet: bool
) -> tuple[bool, bool]:
    """Return effective (json, quiet) flags, letting explicit options beat config defaults."""
    if ctx.get_parameter_source("json_output") != ParameterSource.COMMANDLINE:
        json_output = config.cli.json_default
    if ctx.get_parameter_source("quiet") != ParameterSource.COMMANDLINE:
        quiet = config.cli.quiet_default
    return json_output, quiet


def _format_size(size: int) -> str:
    return f"{size:,} bytes"


def _record_table(record: FileRecord) -> Table:
    table = Table(title=record.absolute_path, show_header=False)
    table.add_column("Field", style="bold cyan", no_wrap=True)
    table.add_column("Value", overflow="fold")
    rows = [
        ("Name", record.name),
        ("Kind", record.kind),
        ("Size", _format_size(record.size)),
        ("Permissions", f"{record.permissions} ({record.octal_permissions})"),
        ("Owner", record.owner),
        ("Group", record.group),
        ("Modified", record.modified_at.isoformat()),
        ("Type", f"{record.file_type.description} ({record.file_type.extension})"),
    ]
    if record.link_target:
        rows.append(("Link target", record.link_target))
    if record.has_digests:
        rows.extend(
            [
                ("MD5", record.md5 or ""),
                ("SHA-1", record.sha1 or ""),
                ("SHA-256", record.sha256 or ""),
            ]
        )
    for field, value in rows:
        table.add_row(field, value)
    return table


def _batch_table(batch: InspectionBatch) -> Table:
    table = Table(title=f"Inspection of {batch.root}")
    table.add_column("Name", overflow="fold")
    table.add_column("Kind")
    table.add_column("Size", justify="right")
    table.add_column("Permissions")
    table.add_column("Type")
    table.add_column("SHA-256", overflow="fold")
    for record in batch.records:
        table.add_row(
            record.name,
            record.kind,
            str(record.size),
            record.permissions,
            record.file_type.description,
            record.sha256 or "-",
        )
    return table


def _ioc_table(scan: IocScan) -> Table:
    table = Table(title=f"Indicators in {scan.root}")
    table.add_column("Source", overflow="fold")
    table.add_column("Kind")
    table.add_column("Indicator", overflow="fold")
    for report in scan.reports:
        for kind in INDICATOR_KINDS:
            for value in report.indicators.get(kind, []):
                table.add_row(report.source, kind, value)
    return table


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="secutils")
def cli() -> None:
    """secutils gives security practitioners quick forensic views of files.

    Returns:
        None: This function is invoked for its side effects.
    """


@cli.command()
@click.argument("path", required=False, default=".", type=click.Path(path_type=str))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=str),
    help="Write the record(s) as JSON to this file instead of printing them.",
)
@click.option("--json", "json_output", is_flag=True, help="Emit the record(s) as JSON.")
@click.option("-r", "--recursive", is_flag=True, help="Inspect every entry below a directory.")
@click.option("--hidden", is_flag=True, help="Include hidden entries when recursing.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.option("-v", "--verbose", is_flag=True, help="Log inspection details to stderr.")
@click.pass_context
def info(
    ctx: click.Context,
    path: str,
    output: str | None,
    json_output: bool,
    recursive: bool,
    hidden: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """Analyze PATH and report identity, ownership, type, and digests.

    PATH defaults to the current working directory.

    Args:
        ctx: Click context for parameter source inspection.
        path: File, directory, or symlink to inspect.
        output: Optional destination for a JSON document.
        json_output: When True, emit JSON instead of a table.
        recursive: When True, inspect the entries below a directory too.
        hidden: When True, include hidden entries while recursing.
        quiet: When True, suppress non-error output.
        verbose: When True, log at DEBUG level.

    Raises:
        click.ClickException: If configuration or inspection fails.
    """
    config = _load_config(json_output)
    configure_logging(logging.DEBUG if verbose else config.logging.level)
    json_enabled, quiet_enabled = _resolve_flags(
        ctx, config, json_output=json_output, quiet=quiet
    )

    inspector = FileInspector(
        DigestComputer(config.inspection.chunk_size_kb * 1024),
        resolve_owners=config.inspection.resolve_owners,
    )
    indent = config.output.indent

    try:
        if recursive:
            batch = inspect_tree(path, inspector, recursive=True, include_hidden=hidden)
            records = batch.records
        else:
            batch = None
            records = [inspector.inspect(path)]

        if output:
            if batch is None:
                written = persist(records[0], output, indent=indent)
            else:
                written = persist_many(records, output, indent=indent)
    except InspectionError as exc:
        _handle_inspection_error(exc, json_output=json_enabled)

    if output:
        if json_enabled:
            console.print_json(
                data={"output": str(written), "records": len(records)}, indent=indent or None
            )
        else:
            _emit_message(
                f"[green]Wrote {len(records)} record(s) to {written}.[/green]",
                quiet=quiet_enabled,
            )
    elif json_enabled:
        if batch is None:
            data: Any = record_payload(records[0])
        else:
            data = batch.model_dump(mode="json")
        console.print_json(data=data, indent=indent or None)
    elif batch is None:
        _emit_message(_record_table(records[0]), quiet=quiet_enabled)
    else:
        _emit_message(_batch_table(batch), quiet=quiet_enabled)

    if batch is not None and batch.errors and not json_enabled:
        _emit_message("[red]Errors encountered:[/red]", quiet=quiet_enabled, error=True)
        for entry in batch.errors:
            _emit_message(f"  - {entry}", quiet=quiet_enabled, error=True)


@cli.command()
@click.argument("path", type=click.Path(exists=True, path_type=str))
@click.option("--json", "json_output", is_flag=True, help="Emit indicators as JSON.")
@click.option("-r", "--recursive", is_flag=True, help="Scan subdirectories of a directory.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def ioc(ctx: click.Context, path: str, json_output: bool, recursive: bool, quiet: bool) -> None:
    """Extract indicators of compromise from text based files under PATH.

    Recognizes IPv4 addresses, URLs, email addresses, domains, and MD5,
    SHA-1 and SHA-256 hashes, including defanged forms such as
    ``hxxp://example[.]com``.

    Args:
        ctx: Click context for parameter source inspection.
        path: Text file or directory to scan.
        json_output: When True, emit JSON instead of a table.
        recursive: When True, scan subdirectories of a directory.
        quiet: When True, suppress non-error output.

    Raises:
        click.ClickException: If configuration loading or extraction fails.
    """
    config = _load_config(json_output)
    configure_logging(config.logging.level)
    json_enabled, quiet_enabled = _resolve_flags(
        ctx, config, json_output=json_output, quiet=quiet
    )

    extractor = IocExtractor(max_file_size=config.ioc.max_file_size_mb * 1024 * 1024)
    target = Path(path)
    try:
        if target.is_dir():
            scan = extractor.extract_directory(target, recursive=recursive)
        else:
            report = extractor.extract_file(target)
            scan = IocScan(root=str(target), reports=[report])
    except InspectionError as exc:
        _handle_inspection_error(exc, json_output=json_enabled)

    if json_enabled:
        payload = scan.model_dump(mode="json")
        console.print_json(data=payload, indent=config.output.indent or None)
        return

    total = sum(report.total for report in scan.reports)
    if total:
        _emit_message(_ioc_table(scan), quiet=quiet_enabled)
    _emit_message(
        f"[green]ioc summary for {scan.root}: files={len(scan.reports)}, "
        f"indicators={total}, errors={len(scan.errors)}.[/green]",
        quiet=quiet_enabled,
    )
    for entry in scan.errors:
        _emit_message(f"[yellow]  - {entry}[/yellow]", quiet=quiet_enabled, error=True)


@cli.group()
def config() -> None:
    """Manage secutils configuration.

    Returns:
        None: This function is invoked for its side effects.
    """


@config.command("view")
def config_view() -> None:
    """Display the effective configuration.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        config = manager.load()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(config.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Args:
        key: Dotted path describing the configuration field to update.
        value: YAML-literal value to write into the configuration file.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        before = manager.read_text().splitlines()
        file_data = manager.load_file_overrides()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException(
            "KEY must specify a dotted path such as 'inspection.chunk_size_kb'."
        )

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    try:
        assign_dotted(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=SecutilsConfig(), file_overrides=file_data)
        manager.save(file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    # The timestamp header changes on every save; compare the settings only.
    before = [line for line in before if not line.startswith("# Last updated:")]
    after = [
        line
        for line in manager.read_text().splitlines()
        if not line.startswith("# Last updated:")
    ]
    diff = list(
        difflib.unified_diff(
            before,
            after,
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )

    if not diff:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point.

    Returns:
        None: This function is invoked for its side effects.
    """
    cli()


if __name__ == "__main__":
    main()
