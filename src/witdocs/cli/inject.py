"""
CLI: ``wit-docs-inject`` - embed WIT documentation into a component.

Usage:
    wit-docs-inject --component app.wasm --wit-dir wit/
    wit-docs-inject --component app.wasm --docs-file docs.yaml --inplace
"""

from __future__ import annotations

from pathlib import Path

import typer

from witdocs.cli.utils import err_console, fail, setup, version_callback
from witdocs.errors import WitDocsError
from witdocs.logging import LogContext
from witdocs.pipeline import inject_component

app = typer.Typer(
    name="wit-docs-inject",
    help="Inject package-docs from a WIT source directory into a component.",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.command()
def inject(
    component: Path = typer.Option(..., "--component", "-c", help="Input component (.wasm) path."),
    wit_dir: Path | None = typer.Option(  # noqa: UP007
        None, "--wit-dir", "-w", help="WIT package directory whose doc comments are embedded."
    ),
    docs_file: Path | None = typer.Option(  # noqa: UP007
        None, "--docs-file", help="Pre-extracted documentation tree (.json, .yaml or .yml)."
    ),
    out: Path | None = typer.Option(  # noqa: UP007
        None, "--out", "-o", help="Output path (default: <stem>.docs.wasm next to the input)."
    ),
    inplace: bool = typer.Option(False, "--inplace", help="Overwrite the input file in place."),
    append: bool = typer.Option(
        False, "--append", help="Keep package-docs sections already in the component instead of replacing them."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level for stderr diagnostics."),  # noqa: UP007
    version: bool | None = typer.Option(  # noqa: UP007
        None, "--version", "-V", help="Show version and exit.", callback=version_callback, is_eager=True
    ),
) -> None:
    """Embed documentation into a component's package-docs custom section."""
    settings = setup(log_level)
    replace_existing = settings.replace_existing and not append

    with LogContext(component=str(component)):
        try:
            result = inject_component(
                component,
                wit_dir=wit_dir,
                docs_file=docs_file,
                out=out,
                inplace=inplace,
                replace_existing=replace_existing,
            )
        except WitDocsError as e:
            fail(e)

    err_console.print(f"Injected package-docs into {result.output_path}")


def main() -> None:
    """Entry point for ``wit-docs-inject``."""
    app()


if __name__ == "__main__":
    main()
