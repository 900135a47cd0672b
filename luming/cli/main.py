"""Command-line interface for luming.

Commands compile a layout file and either write an HTML preview, generate
component files, or report diagnostics.
"""

from __future__ import annotations

from pathlib import Path

import click

from luming import __version__
from luming.cli.utils import (
    console,
    diagnostics_table,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from luming.compiler import CompileOptions, CompileResult, compile
from luming.config import ConfigError, LumingConfig, configure_logging, load_config
from luming.diagnostics import has_errors
from luming.renderers import generate_files, render_preview_html

root_option = click.option(
    "--root",
    "root_names",
    multiple=True,
    help="Root template to expand when the file has no structure lines "
    "(repeatable)",
)
input_argument = click.argument(
    "input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)


@click.group()
@click.version_option(version=__version__, prog_name="luming")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_file: Path | None, verbose: bool) -> None:
    r"""Compile layout notation into previews and components.

    \b
    Examples:
        $ luming preview page.luming -o page.html
        $ luming generate page.luming -o components/ --framework vue
        $ luming check page.luming
    """
    try:
        overrides = {"logging": {"level": "DEBUG"}} if verbose else {}
        config = load_config(config_file, **overrides)
    except ConfigError as e:
        print_error(str(e))
        ctx.exit(1)
    configure_logging(config.logging)
    ctx.obj = config


def _compile_file(
    ctx: click.Context, input_file: Path, mode: str, root_names: tuple[str, ...]
) -> CompileResult:
    config: LumingConfig = ctx.obj
    try:
        source = input_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Failed to read {input_file}: {e}")
        ctx.exit(1)
    options = CompileOptions(
        mode=mode,
        root_names=list(root_names) or list(config.compile.root_names),
    )
    return compile(source, options)


def _report_count(result: CompileResult) -> None:
    if result.diagnostics:
        print_warning(
            f"Diagnostics: {len(result.diagnostics)} (run 'luming check' for details)"
        )


@cli.command()
@input_argument
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output HTML file (default: output.preview_path from config)",
)
@root_option
@click.pass_context
def preview(
    ctx: click.Context,
    input_file: Path,
    output: Path | None,
    root_names: tuple[str, ...],
) -> None:
    """Write an HTML preview of a layout file.

    Parameters
    ----------
    ctx : click.Context
        Click context object.
    input_file : Path
        Layout source file.
    output : Path | None
        Output HTML file.
    root_names : tuple[str, ...]
        Explicit root templates.
    """
    config: LumingConfig = ctx.obj
    output_path = output or Path(config.output.preview_path)
    result = _compile_file(ctx, input_file, "preview", root_names)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(render_preview_html(result), encoding="utf-8")
    except OSError as e:
        print_error(f"Failed to write preview: {e}")
        ctx.exit(1)

    print_success(f"Preview written: {output_path}")
    _report_count(result)


@cli.command()
@input_argument
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory (default: output.generate_dir from config)",
)
@click.option(
    "--framework",
    "-f",
    type=click.Choice(["html", "vue", "react"]),
    help="Component framework (default: output.framework from config)",
)
@root_option
@click.pass_context
def generate(
    ctx: click.Context,
    input_file: Path,
    output: Path | None,
    framework: str | None,
    root_names: tuple[str, ...],
) -> None:
    """Generate one component file per template.

    Parameters
    ----------
    ctx : click.Context
        Click context object.
    input_file : Path
        Layout source file.
    output : Path | None
        Output directory.
    framework : str | None
        Component framework.
    root_names : tuple[str, ...]
        Explicit root templates.
    """
    config: LumingConfig = ctx.obj
    out_dir = output or Path(config.output.generate_dir)
    framework = framework or config.output.framework
    result = _compile_file(ctx, input_file, "generate", root_names)
    try:
        files = generate_files(result, framework)
        out_dir.mkdir(parents=True, exist_ok=True)
        for generated in files:
            target = out_dir / generated.file_path
            target.write_text(generated.content, encoding="utf-8")
    except OSError as e:
        print_error(f"Failed to generate files: {e}")
        ctx.exit(1)

    print_success(f"Generated {len(files)} file(s) at: {out_dir}")
    _report_count(result)


@cli.command()
@input_argument
@root_option
@click.pass_context
def check(ctx: click.Context, input_file: Path, root_names: tuple[str, ...]) -> None:
    """Compile a layout file and report its diagnostics.

    Exits with status 1 when any error is reported.

    Parameters
    ----------
    ctx : click.Context
        Click context object.
    input_file : Path
        Layout source file.
    root_names : tuple[str, ...]
        Explicit root templates.
    """
    config: LumingConfig = ctx.obj
    result = _compile_file(ctx, input_file, config.compile.mode, root_names)

    document = result.document
    print_info(
        f"{len(document.statements)} statement(s), "
        f"{len(document.template_order)} template(s), "
        f"{len(result.roots)} root node(s)"
    )
    if not result.diagnostics:
        print_success("No diagnostics")
        return

    console.print(diagnostics_table(result.diagnostics, f"Diagnostics in {input_file}"))
    if has_errors(result.diagnostics):
        ctx.exit(1)
