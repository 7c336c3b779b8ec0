"""
CLI: ``wit-docs-view`` - show the package-docs embedded in a component.

Usage:
    wit-docs-view app.wasm
    wit-docs-view app.wasm --format markdown --functions-only
    wit-docs-view app.wasm --format wit
"""

from __future__ import annotations

from pathlib import Path

import typer

from witdocs.cli.utils import EXIT_NO_DOCS, err_console, fail, setup, version_callback
from witdocs.errors import WitDocsError
from witdocs.logging import LogContext
from witdocs.pipeline import load_component_docs
from witdocs.renderers import RENDERERS, OutputFormat, WitRenderer

app = typer.Typer(
    name="wit-docs-view",
    help="View documentation from a component's package-docs custom section.",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.command()
def view(
    component: Path = typer.Argument(..., help="Path to the WebAssembly component (.wasm)."),
    format: OutputFormat = typer.Option(
        OutputFormat.PRETTY, "--format", "-f", case_sensitive=False, help="Output format."
    ),
    functions_only: bool = typer.Option(False, "--functions-only", help="Show only function documentation."),
    worlds_only: bool = typer.Option(False, "--worlds-only", help="Show only world documentation."),
    wasm_tools: str | None = typer.Option(  # noqa: UP007
        None, "--wasm-tools", help="wasm-tools executable used by --format wit."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level for stderr diagnostics."),  # noqa: UP007
    version: bool | None = typer.Option(  # noqa: UP007
        None, "--version", "-V", help="Show version and exit.", callback=version_callback, is_eager=True
    ),
) -> None:
    """Print the documentation embedded in a component."""
    settings = setup(log_level)

    with LogContext(component=str(component)):
        try:
            tree = load_component_docs(component)
            if tree is None:
                err_console.print("No package-docs found in component")
                raise typer.Exit(code=EXIT_NO_DOCS)

            display = {"show_worlds": not functions_only, "show_functions": not worlds_only}
            if format is OutputFormat.WIT:
                renderer = WitRenderer(
                    tree,
                    component=component,
                    wasm_tools=wasm_tools or settings.wasm_tools,
                    **display,
                )
            else:
                renderer = RENDERERS[format](tree, **display)
            output = renderer.render()
        except WitDocsError as e:
            fail(e)

    typer.echo(output, nl=False)


def main() -> None:
    """Entry point for ``wit-docs-view``."""
    app()


if __name__ == "__main__":
    main()
