from pathlib import Path

import orjson
import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dhcpleases.config import ParserConfig, load_config, sample_config
from dhcpleases.errors import LeaseFileError
from dhcpleases.grammar.printer import is_canonical
from dhcpleases.leases import LeaseFile
from dhcpleases.report import record_to_row, summarize_records, write_csv, write_jsonl
from dhcpleases.scanner import scan_declarations

app = typer.Typer(help="Parse and re-print ISC dhcpd lease files.")
console = Console()
err_console = Console(stderr=True)


def _decode_failed(input: Path, cfg: ParserConfig, exc: UnicodeDecodeError) -> typer.Exit:
    err_console.print(
        f"[bold red]Failed to decode[/] {input} as {cfg.encoding}: {escape(str(exc))}. "
        "Set the 'encoding' config key to the file's encoding."
    )
    return typer.Exit(code=1)


def _config(config: Path | None, lenient: bool = False) -> ParserConfig:
    if config is not None and not config.is_file():
        raise typer.BadParameter(f"Config file not found: {config}")
    try:
        cfg = load_config(config) if config else ParserConfig()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if lenient:
        cfg.strict = False
        cfg.on_error = "skip"
    return cfg


def _load(input: Path, cfg: ParserConfig) -> LeaseFile:
    if not input.is_file():
        raise typer.BadParameter(f"Input file not found: {input}")
    try:
        leases = LeaseFile.from_path(input, config=cfg)
    except LeaseFileError as exc:
        err_console.print(f"[bold red]Failed to parse[/] {input}: {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    except UnicodeDecodeError as exc:
        raise _decode_failed(input, cfg, exc) from exc
    for declaration, error in leases.skipped:
        err_console.print(
            f"[yellow]Skipped declaration[/] '{declaration.header}' "
            f"at line {declaration.line_number}: {escape(str(error))}"
        )
    return leases


@app.command()
def parse(
    input: Path = typer.Argument(..., help="dhcpd.leases file to parse."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Optional path to write JSON."),
    type: str | None = typer.Option(None, "--type", "-t", help="Only records of this type."),
    address: str | None = typer.Option(None, "--address", "-a", help="Only this lease address."),
    config: Path | None = typer.Option(None, "--config", help="YAML/JSON parser config."),
    lenient: bool = typer.Option(
        False, "--lenient", help="Drop unterminated blocks and skip bad declarations."
    ),
) -> None:
    """Parse declarations into JSON records, in file order."""
    leases = _load(input, _config(config, lenient))
    criteria = {}
    if type:
        criteria["type"] = type
    if address:
        criteria["ip_address"] = address
    payload = [record.to_mapping() for record in leases.get_objects(**criteria)]
    if output:
        output.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        console.print(f"[bold green]Wrote[/] {len(payload)} records to {output}")
    else:
        console.print(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())


@app.command("print")
def print_leases(
    input: Path = typer.Argument(..., help="dhcpd.leases file to re-print."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Optional path to write text."),
    config: Path | None = typer.Option(None, "--config", help="YAML/JSON parser config."),
) -> None:
    """Re-print every declaration in canonical form."""
    cfg = _config(config)
    leases = _load(input, cfg)
    text = leases.render()
    if output:
        output.write_text(text, encoding=cfg.encoding)
        console.print(f"[bold green]Wrote[/] {len(leases)} declarations to {output}")
    else:
        typer.echo(text, nl=False)


@app.command()
def check(
    input: Path = typer.Argument(..., help="dhcpd.leases file to check."),
    config: Path | None = typer.Option(None, "--config", help="YAML/JSON parser config."),
) -> None:
    """Report declarations whose text differs from the canonical printer output."""
    cfg = _config(config)
    if not input.is_file():
        raise typer.BadParameter(f"Input file not found: {input}")
    try:
        with input.open(encoding=cfg.encoding) as f:
            lines = f.read().splitlines()
    except UnicodeDecodeError as exc:
        raise _decode_failed(input, cfg, exc) from exc
    try:
        declarations = scan_declarations(lines, strict=cfg.strict)
        mismatched = [d for d in declarations if not is_canonical(d, duplicates=cfg.duplicates)]
    except LeaseFileError as exc:
        err_console.print(f"[bold red]Failed to parse[/] {input}: {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    for declaration in mismatched:
        console.print(
            f"[yellow]Not canonical[/] '{declaration.header}' at line {declaration.line_number}"
        )
    if mismatched:
        raise typer.Exit(code=1)
    console.print(f"[bold green]OK[/] {len(declarations)} declarations round-trip exactly.")


@app.command()
def summary(
    input: Path = typer.Argument(..., help="dhcpd.leases file to summarize."),
    config: Path | None = typer.Option(None, "--config", help="YAML/JSON parser config."),
) -> None:
    """Show counts by declaration type and binding state."""
    leases = _load(input, _config(config))
    stats = summarize_records(leases)
    table = Table(title=str(input))
    table.add_column("Group")
    table.add_column("Value")
    table.add_column("Count", justify="right")
    for kind, count in sorted(stats["types"].items()):
        table.add_row("type", kind, str(count))
    for state, count in sorted(stats["binding_states"].items()):
        table.add_row("binding state", state, str(count))
    table.add_row("addresses", "distinct", str(stats["addresses"]))
    table.add_row("addresses", "current", str(len(leases.current())))
    console.print(table)
    if stats["repeated_addresses"]:
        console.print(f"Repeated addresses: {', '.join(stats['repeated_addresses'])}")


@app.command()
def export(
    input: Path = typer.Argument(..., help="dhcpd.leases file to export."),
    output: Path = typer.Argument(..., help="Destination (.csv for CSV, anything else JSONL)."),
    config: Path | None = typer.Option(None, "--config", help="YAML/JSON parser config."),
) -> None:
    """Export records as flat CSV rows or JSON lines."""
    leases = _load(input, _config(config))
    rows = [record_to_row(record) for record in leases]
    if output.suffix.lower() == ".csv":
        write_csv(output, rows)
    else:
        write_jsonl(output, rows)
    console.print(f"[bold green]Exported[/] {len(rows)} records to {output}")


@app.command("config-sample")
def config_sample(
    output: Path = typer.Argument(..., help="Where to write the sample YAML config."),
) -> None:
    """Write a parser config with default values."""
    output.write_text(yaml.safe_dump(sample_config(), sort_keys=False))
    console.print(f"[bold green]Wrote sample config[/] to {output}")


if __name__ == "__main__":
    app()
