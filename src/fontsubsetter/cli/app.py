"""CLI application entry point for fontsubsetter.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from fontsubsetter import __version__
from fontsubsetter.cli.output import (
    console,
    print_cancellation_summary,
    print_charset_info,
    print_error,
    print_file_error,
    print_file_success,
    print_fonts_found,
    print_header,
    print_step,
    print_summary,
)
from fontsubsetter.config import (
    LoggingConfig,
    PathsConfig,
    SubsetConfig,
    SubsetterSettings,
)
from fontsubsetter.core import FontSubsetProcessor
from fontsubsetter.domain import CharacterSet, FontFileRef, SubsetResult
from fontsubsetter.exceptions import CharsetLoadError, FontSubsetterError, SubsetError
from fontsubsetter.io import get_report_path

# Create the Typer app
app = typer.Typer(
    name="font-subset",
    help="Subset fonts to a character set and convert them to WOFF2.",
    add_completion=False,
    no_args_is_help=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Fontsubsetter[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def subset(
    source_dir: Annotated[
        Path,
        typer.Option(
            "--source-dir",
            "-s",
            help="Directory containing TTF/OTF/WOFF fonts",
            envvar="FONT_SUBSET_SOURCE_DIR",
        ),
    ] = Path("./fonts/source"),
    target_dir: Annotated[
        Path,
        typer.Option(
            "--target-dir",
            "-t",
            help="Directory for WOFF2 output and subset-report.json",
            envvar="FONT_SUBSET_TARGET_DIR",
        ),
    ] = Path("./fonts/output"),
    char_file: Annotated[
        Path,
        typer.Option(
            "--char-file",
            "-c",
            help="Text file with the characters to keep",
            envvar="FONT_SUBSET_CHAR_FILE",
        ),
    ] = Path("./charset.txt"),
    workers: Annotated[
        int,
        typer.Option(
            "--workers",
            "-j",
            help="Number of fonts processed in parallel",
            min=1,
            max=64,
        ),
    ] = 1,
    timeout: Annotated[
        float,
        typer.Option(
            "--timeout",
            help="Per-font timeout in seconds (0 disables)",
            min=0.0,
        ),
    ] = 300.0,
    hinting: Annotated[
        bool,
        typer.Option(
            "--hinting/--no-hinting",
            help="Keep TrueType hinting instructions",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Subset every font in the source directory to the characters in the character file.

    Each TTF/OTF/WOFF font is reduced to the glyphs the characters need and
    written as WOFF2. A JSON report with per-font size reductions is saved
    next to the output.

    Example:
        font-subset --source-dir fonts/source --char-file charset.txt

    This will create fonts/output/<name>.woff2 for every font and
    fonts/output/subset-report.json.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        print_error(
            f"Invalid log level: {log_level}",
            details="Valid values: DEBUG, INFO, WARNING, ERROR",
        )
        raise typer.Exit(code=1)

    # Print header
    if not quiet:
        print_header(__version__)

    # Create settings from CLI arguments
    settings = SubsetterSettings(
        paths=PathsConfig(
            source_dir=source_dir,
            target_dir=target_dir,
            char_file=char_file,
        ),
        subset=SubsetConfig(
            hinting=hinting,
            timeout_seconds=timeout,
            max_workers=workers,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level.upper(),
        ),
    )

    processor = FontSubsetProcessor(settings)

    def show_charset(charset: CharacterSet) -> None:
        print_charset_info(str(char_file), len(charset))
        print_step("Discovering fonts")

    def show_fonts(font_files: list[FontFileRef]) -> None:
        print_fonts_found(
            str(source_dir),
            [ref.name for ref in font_files],
            verbose=verbose,
        )
        if font_files:
            print_step("Subsetting")

    def show_outcome(
        _completed: int, _total: int, file_name: str, outcome: SubsetResult | SubsetError
    ) -> None:
        if isinstance(outcome, SubsetResult):
            print_file_success(outcome.original_file, outcome.output_file, outcome.reduction)
        else:
            print_file_error(file_name, outcome.reason)

    try:
        if not quiet:
            print_step("Loading character set")

        try:
            report = processor.run(
                progress_callback=None if quiet else show_outcome,
                on_charset_loaded=None if quiet else show_charset,
                on_fonts_discovered=None if quiet else show_fonts,
            )
        except KeyboardInterrupt:
            if not quiet:
                print_cancellation_summary(
                    processed=processor.stats.processed_count,
                    cancelled=processor.stats.cancelled_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            print_summary(
                report_path=str(get_report_path(target_dir)),
                total_time_s=processor.stats.duration_seconds,
                processed=report.processed_files,
                errors=processor.stats.error_count,
                average_reduction=report.average_reduction,
                original_bytes=report.total_original_size,
                optimized_bytes=report.total_optimized_size,
            )

    except CharsetLoadError as e:
        processor.logger.error("Character set unavailable", path=e.path, error=e.reason)
        print_error(
            f"Could not read character file: {e.path}",
            details=e.reason,
        )
        raise typer.Exit(code=1)
    except FontSubsetterError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except OSError as e:
        print_error(f"Could not write output: {e}")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
