"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with per-font result lines and a run summary.
"""


from rich.console import Console
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Fontsubsetter[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_charset_info(char_file: str, count: int) -> None:
    """Print the character set source and size."""
    line = Text("  ")
    line.append(char_file)
    console.print(line)
    console.print(f"  [green]{count:,}[/green] unique characters")


def print_fonts_found(source_dir: str, names: list[str], verbose: bool = False) -> None:
    """Print discovery result.

    Args:
        source_dir: Directory that was scanned
        names: File names of the discovered fonts
        verbose: Whether to list the file names
    """
    if not names:
        line = Text("  No font files found in ")
        line.append(source_dir)
        console.print(line)
        return

    plural = "font" if len(names) == 1 else "fonts"
    console.print(f"  [green]{len(names)}[/green] {plural} found")
    if verbose:
        names_str = ", ".join(names[:20])
        if len(names) > 20:
            names_str += f" {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(names) - 20} more)"
        console.print(Text(f"  {names_str}"))


def print_file_success(original_file: str, output_file: str, reduction: float) -> None:
    """Print one successfully subsetted font."""
    line = Text("  ")
    line.append(SYM_OK, style="green")
    line.append(f" {original_file} -> {output_file} ")
    line.append(f"({reduction:.1f}% smaller)", style="dim")
    console.print(line)


def print_file_error(original_file: str, reason: str) -> None:
    """Print one font that could not be subsetted."""
    line = Text("  ")
    line.append(SYM_ERR, style="red")
    line.append(f" {original_file}: ")
    line.append(reason, style="red")
    console.print(line)


def _format_size(size_bytes: int) -> str:
    """Format a byte count in human-readable form."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_summary(
    report_path: str,
    total_time_s: float,
    processed: int,
    errors: int,
    average_reduction: float,
    original_bytes: int,
    optimized_bytes: int,
) -> None:
    """Print the run summary.

    Args:
        report_path: Path to the written report
        total_time_s: Total processing time in seconds
        processed: Number of fonts subsetted
        errors: Number of fonts that failed
        average_reduction: Mean size reduction in percent
        original_bytes: Combined size of the subsetted source fonts
        optimized_bytes: Combined size of the WOFF2 outputs
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} fonts {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}] {SYM_DOT} "
        f"{average_reduction:.1f}% average reduction"
    )
    if processed:
        console.print(
            f"  {_format_size(original_bytes)} -> {_format_size(optimized_bytes)}"
        )

    line = Text("  Report: ")
    line.append(report_path, style="bold")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    # Use Text so paths and engine messages are never parsed as markup
    line = Text("\n")
    line.append(f"{SYM_ERR} Error:", style="bold red")
    line.append(f" {message}")
    console.print(line)
    if details:
        console.print(Text(f"  {details}"))


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of fonts subsetted before cancellation
        cancelled: Number of fonts that were not processed
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} fonts completed {SYM_DOT} {cancelled} fonts skipped")
    console.print("  No report written")
