"""Typer application wiring for the mdoffcanvas CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from mdoffcanvas.core.exceptions import OffcanvasConfigError
from mdoffcanvas.markdown import MarkdownConversionError, render_markdown
from mdoffcanvas.page import render_standalone

from .diagnostics import CliEmitter
from .state import emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Render Markdown with Bootstrap offcanvas panels to HTML.",
    context_settings={"help_option_names": ["--help"]},
    add_completion=False,
)


@app.command()
def render(
    input_path: Annotated[
        Path,
        typer.Argument(
            exists=True,
            dir_okay=False,
            readable=True,
            help="Markdown file to render.",
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the HTML here instead of stdout."),
    ] = None,
    target: Annotated[
        str,
        typer.Option("--target", help="Output format, e.g. html, revealjs, latex."),
    ] = "html",
    bootstrap: Annotated[
        bool,
        typer.Option("--bootstrap/--no-bootstrap", help="Whether the page ships Bootstrap."),
    ] = True,
    scripting: Annotated[
        bool,
        typer.Option("--scripting/--no-scripting", help="Whether the page runs JavaScript."),
    ] = True,
    standalone: Annotated[
        bool,
        typer.Option("--standalone", help="Emit a complete HTML page with Bootstrap."),
    ] = False,
    extensions: Annotated[
        list[str] | None,
        typer.Option(
            "--extension",
            "-x",
            help="Additional Markdown extension to enable (repeatable).",
        ),
    ] = None,
    title: Annotated[
        str | None,
        typer.Option("--title", help="Page title for --standalone output."),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase diagnostic detail."),
    ] = 0,
) -> None:
    """Render INPUT_PATH to HTML, turning offcanvas blocks into panels."""
    state = set_cli_state(verbosity=verbose)

    source = input_path.read_text(encoding="utf-8")
    try:
        document = render_markdown(
            source,
            extensions,
            target=target,
            scripting=scripting,
            bootstrap=bootstrap,
            emitter=CliEmitter(),
        )
    except (OffcanvasConfigError, MarkdownConversionError) as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    html = document.html
    if standalone:
        html = render_standalone(
            document, title=title, bootstrap=bootstrap, scripting=scripting
        )
    if not html.endswith("\n"):
        html += "\n"

    if output is None:
        typer.echo(html, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    if state.verbosity >= 1:
        state.err_console.print(
            f"Wrote {output} ({len(state.warnings)} warning(s))", highlight=False
        )


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - last-resort reporting
        state = get_cli_state()
        if state.verbosity >= 2:
            from rich.traceback import Traceback

            state.err_console.print(
                Traceback.from_exception(type(exc), exc, exc.__traceback__)
            )
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main", "render"]
