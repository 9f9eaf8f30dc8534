"""csvcut CLI: cut out selected columns of each csv line from stdin."""

from __future__ import annotations

import io
import sys
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from csvcut.domain.models import CutOptions
from csvcut.pipelines.cut import run_cut
from csvcut.runtime import bootstrap
from csvcut.services.parser import ParseError

TARGET_HELP = (
    "Selected portions, 1-based, comma separated: 3 (single), 4- (to the end), "
    "-5 (from the start), 7-9 (inclusive). Order and repeats are kept, e.g. 3,1-3"
)

app = typer.Typer(
    help="Cut out selected portions of each line of csv from stdin.",
    add_completion=False,
)


@app.command()
def cut(
    ctx: typer.Context,
    target: Annotated[str, typer.Option("-f", "--target", help=TARGET_HELP)],
    delimiter: Annotated[
        str | None,
        typer.Option("-d", "--delimiter", help="Field delimiter character (default ',')"),
    ] = None,
    json_out: Annotated[
        bool,
        typer.Option("--json/--no-json", "-j", help="Print results as JSON arrays or objects"),
    ] = False,
    header: Annotated[
        bool,
        typer.Option(
            "--header/--no-header",
            help="Read the first line as headers: it is not printed, and becomes JSON keys",
        ),
    ] = False,
    flexible: Annotated[
        bool,
        typer.Option(
            "--flexible/--strict", help="Allow records with differing field counts"
        ),
    ] = False,
    max_column: Annotated[
        int | None, typer.Option("--max-column", help="Largest column number accepted")
    ] = None,
    overflow: Annotated[
        str | None,
        typer.Option("--overflow", help="Columns above --max-column: reject|saturate"),
    ] = None,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Diagnostics level (stderr)")
    ] = None,
) -> None:
    def pick(name: str, flag_value: Any, config_value: Any) -> Any:
        # flags left at their default defer to the config file
        source = ctx.get_parameter_source(name)
        if source is None or source.name == "DEFAULT":
            return config_value
        return flag_value

    try:
        config = bootstrap(log_level)
        options = CutOptions(
            target=target,
            delimiter=delimiter if delimiter is not None else config.delimiter,
            json_output=pick("json_out", json_out, config.json_output),
            header=pick("header", header, config.header),
            flexible=pick("flexible", flexible, config.flexible),
            max_column=max_column if max_column is not None else config.max_column,
            overflow=overflow or config.overflow,
        )
    except ValidationError as exc:
        msg = "; ".join(str(err["msg"]) for err in exc.errors())
        raise typer.BadParameter(msg) from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc
    # bad bytes survive decoding as surrogates and are reported per row
    stream = io.TextIOWrapper(
        sys.stdin.buffer, encoding="utf-8", errors="surrogateescape", newline=""
    )
    try:
        run_cut(options, stream, sys.stdout)
    except ParseError as exc:
        raise typer.BadParameter(str(exc), param_hint="'-f' / '--target'") from exc
    finally:
        stream.detach()


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
