"""Batch orchestration for the subsetting pipeline.

This module drives the subsetting engine over every discovered font and
coordinates the whole run: load the character set, discover fonts,
process them, write the report.

Fonts are processed one at a time in-process by default. With a per-font
timeout, engine calls run in a multiprocessing pool that can be terminated
when a font hangs; with more than one worker and no timeout they run in a
ProcessPoolExecutor. Results are always collected in input order.

Key components:
- process_font_file: Top-level picklable function wrapping one engine call
- BatchRunner: Runs the engine over a list of fonts, isolating failures
- FontSubsetProcessor: Runs a complete batch from settings
"""

import multiprocessing
import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ProcessPoolExecutor
from concurrent.futures.process import BrokenProcessPool
from multiprocessing.pool import AsyncResult, Pool
from pathlib import Path
from typing import Any

import structlog

from fontsubsetter.config import SubsetterSettings
from fontsubsetter.core.engine import FontToolsEngine, SubsetEngine
from fontsubsetter.core.report import generate_report
from fontsubsetter.domain import CharacterSet, FontFileRef, Report, SubsetResult
from fontsubsetter.exceptions import SubsetError, SubsetTimeoutError
from fontsubsetter.io import discover_fonts, load_charset
from fontsubsetter.utils import BatchLogger, ProcessingStats, configure_logging, get_logger

FileOutcome = SubsetResult | SubsetError
ProgressCallback = Callable[[int, int, str, FileOutcome], None]


def process_font_file(
    engine: SubsetEngine,
    input_path: str,
    charset: CharacterSet,
    output_dir: str,
) -> dict[str, Any]:
    """Subset a single font file.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Engine failures are returned rather than raised so they cross the process
    boundary intact.

    Args:
        engine: Subsetting engine to call
        input_path: Font file to subset
        charset: Characters to keep
        output_dir: Directory receiving the output

    Returns:
        Dictionary containing either:
        - Success: {"output_file": str, "output_bytes": int, "duration_ms": float}
        - Error: {"error": str, "error_type": str, "traceback": str | None, "duration_ms": float}
    """
    start_time = time.time()

    try:
        output = engine.subset(Path(input_path), charset, Path(output_dir))
        duration_ms = (time.time() - start_time) * 1000
        return {
            "output_file": output.output_filename,
            "output_bytes": output.output_bytes,
            "duration_ms": duration_ms,
        }

    except SubsetError as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": e.reason,
            "error_type": type(e).__name__,
            "traceback": None,
            "duration_ms": duration_ms,
        }

    except Exception as e:
        # Anything else is an engine bug; keep the traceback for the log
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e) or type(e).__name__,
            "error_type": type(e).__name__,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class BatchRunner:
    """Runs a subsetting engine over a batch of fonts.

    Every font is handled independently: a failure is logged and the font
    is left out of the results, but the batch carries on. Results keep the
    order of the input list.

    Example:
        runner = BatchRunner(FontToolsEngine())
        results = runner.run(fonts, charset, Path("fonts/output"))
    """

    def __init__(
        self,
        engine: SubsetEngine,
        max_workers: int = 1,
        timeout: float | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the batch runner.

        Args:
            engine: Engine performing the actual subsetting
            max_workers: Worker processes (1 = sequential)
            timeout: Seconds to wait for each font (None = no limit)
            logger: Logger for batch events (module logger if None)
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.engine = engine
        self.max_workers = max_workers
        self.timeout = timeout or None
        self.logger = logger or get_logger("fontsubsetter.core.processor")
        self.batch_logger = BatchLogger(self.logger)

    @property
    def stats(self) -> ProcessingStats:
        """Statistics of the most recent run."""
        return self.batch_logger.stats

    @property
    def uses_pool(self) -> bool:
        """Whether engine calls run in worker processes."""
        return self.max_workers > 1 or self.timeout is not None

    def run(
        self,
        font_files: Sequence[FontFileRef],
        charset: CharacterSet,
        output_dir: Path,
        progress_callback: ProgressCallback | None = None,
    ) -> list[SubsetResult]:
        """Subset every font into output_dir.

        Args:
            font_files: Fonts to process, in the order results should keep
            charset: Characters to keep
            output_dir: Output directory (created recursively if missing)
            progress_callback: Optional callback(completed, total, file_name, outcome)
                called once per font, in input order

        Returns:
            Results for the fonts that succeeded, in input order

        Raises:
            KeyboardInterrupt: If processing is cancelled by user
        """
        self.batch_logger = BatchLogger(self.logger)
        stats = self.stats
        stats.start_time = time.time()

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        font_files = list(font_files)
        collisions = self._find_collisions(font_files)

        self.logger.info(
            "Starting batch",
            fonts=len(font_files),
            output_dir=str(output_dir),
            max_workers=self.max_workers,
            timeout=self.timeout,
        )

        outcomes: list[FileOutcome] = []
        tracker = _ProgressTracker(len(font_files), progress_callback)

        if self.timeout is not None:
            self._run_timed_pool(font_files, collisions, charset, output_dir, outcomes, tracker)
        elif self.max_workers > 1:
            self._run_pool(font_files, collisions, charset, output_dir, outcomes, tracker)
        else:
            self._run_sequential(font_files, collisions, charset, output_dir, outcomes, tracker)

        stats.end_time = time.time()
        results = [outcome for outcome in outcomes if isinstance(outcome, SubsetResult)]

        self.logger.info(
            "Batch complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return results

    def _find_collisions(self, font_files: list[FontFileRef]) -> dict[int, SubsetError]:
        """Fail fonts whose output name an earlier font already claims."""
        claimed: dict[str, str] = {}
        collisions: dict[int, SubsetError] = {}
        for index, ref in enumerate(font_files):
            owner = claimed.get(ref.output_name)
            if owner is None:
                claimed[ref.output_name] = ref.name
            else:
                collisions[index] = SubsetError(
                    str(ref.path),
                    f"output name {ref.output_name} collides with {owner}",
                )
        return collisions

    def _run_sequential(
        self,
        font_files: list[FontFileRef],
        collisions: dict[int, SubsetError],
        charset: CharacterSet,
        output_dir: Path,
        outcomes: list[FileOutcome],
        tracker: "_ProgressTracker",
    ) -> None:
        for index, ref in enumerate(font_files):
            if index in collisions:
                outcome = self._record(ref, collisions[index])
            else:
                self.batch_logger.log_file_start(ref.name)
                try:
                    raw = process_font_file(self.engine, str(ref.path), charset, str(output_dir))
                except KeyboardInterrupt:
                    self.logger.info("Cancellation requested by user")
                    self.stats.was_cancelled = True
                    self.stats.cancelled_count = len(font_files) - index
                    raise
                outcome = self._record(ref, raw)
            outcomes.append(outcome)
            tracker.advance(ref.name, outcome)

    def _run_pool(
        self,
        font_files: list[FontFileRef],
        collisions: dict[int, SubsetError],
        charset: CharacterSet,
        output_dir: Path,
        outcomes: list[FileOutcome],
        tracker: "_ProgressTracker",
    ) -> None:
        """Process fonts in a ProcessPoolExecutor, collecting in input order.

        Used when there is no per-font timeout. A worker that dies breaks
        the whole executor; the font being waited on fails and the fonts
        lost with the executor are resubmitted to a fresh one.
        """

        def submit(executor: ProcessPoolExecutor, index: int) -> Future:
            ref = font_files[index]
            self.batch_logger.log_file_queued(ref.name)
            return executor.submit(
                process_font_file,
                self.engine,
                str(ref.path),
                charset,
                str(output_dir),
            )

        def restart(executor: ProcessPoolExecutor) -> ProcessPoolExecutor:
            executor.shutdown(wait=True, cancel_futures=True)
            fresh = ProcessPoolExecutor(max_workers=self.max_workers)
            for pending_index, future in list(futures.items()):
                if _needs_resubmit(future):
                    futures[pending_index] = submit(fresh, pending_index)
            return fresh

        executor = ProcessPoolExecutor(max_workers=self.max_workers)
        futures: dict[int, Future] = {}
        try:
            for index in range(len(font_files)):
                if index not in collisions:
                    futures[index] = submit(executor, index)

            for index, ref in enumerate(font_files):
                if index in collisions:
                    outcome = self._record(ref, collisions[index])
                else:
                    raw: dict[str, Any] | SubsetError
                    try:
                        raw = futures.pop(index).result()
                    except BrokenProcessPool as e:
                        raw = SubsetError(str(ref.path), f"worker process died: {e}")
                        executor = restart(executor)
                    outcome = self._record(ref, raw)

                outcomes.append(outcome)
                tracker.advance(ref.name, outcome)

        except KeyboardInterrupt:
            self.logger.info("Cancellation requested by user")
            for future in futures.values():
                future.cancel()
            self.stats.was_cancelled = True
            self.stats.cancelled_count = len(futures)
            raise

        finally:
            executor.shutdown(wait=True, cancel_futures=True)

    def _run_timed_pool(
        self,
        font_files: list[FontFileRef],
        collisions: dict[int, SubsetError],
        charset: CharacterSet,
        output_dir: Path,
        outcomes: list[FileOutcome],
        tracker: "_ProgressTracker",
    ) -> None:
        """Process fonts in a multiprocessing pool with a per-font timeout.

        A font that exceeds the timeout fails with SubsetTimeoutError. The
        stuck worker cannot be interrupted, so the pool is terminated and
        every font that had not finished is resubmitted to a fresh pool.
        """
        timeout = self.timeout or 0.0

        def submit(pool: Pool, index: int) -> AsyncResult:
            ref = font_files[index]
            self.batch_logger.log_file_queued(ref.name)
            return pool.apply_async(
                process_font_file,
                (self.engine, str(ref.path), charset, str(output_dir)),
            )

        def restart(pool: Pool) -> Pool:
            pool.terminate()
            pool.join()
            fresh = multiprocessing.Pool(processes=self.max_workers)
            for pending_index, pending_result in list(pending.items()):
                if not pending_result.ready():
                    self.logger.debug("Resubmitting font", font=font_files[pending_index].name)
                    pending[pending_index] = submit(fresh, pending_index)
            return fresh

        pool = multiprocessing.Pool(processes=self.max_workers)
        pending: dict[int, AsyncResult] = {}
        try:
            for index in range(len(font_files)):
                if index not in collisions:
                    pending[index] = submit(pool, index)

            for index, ref in enumerate(font_files):
                if index in collisions:
                    outcome = self._record(ref, collisions[index])
                else:
                    raw: dict[str, Any] | SubsetError
                    try:
                        raw = pending.pop(index).get(timeout=timeout)
                    except multiprocessing.TimeoutError:
                        raw = SubsetTimeoutError(str(ref.path), timeout)
                        pool = restart(pool)
                    outcome = self._record(ref, raw)

                outcomes.append(outcome)
                tracker.advance(ref.name, outcome)

        except KeyboardInterrupt:
            self.logger.info("Cancellation requested by user")
            self.stats.was_cancelled = True
            self.stats.cancelled_count = len(pending)
            raise

        finally:
            # Every result has been collected or abandoned by now
            pool.terminate()
            pool.join()

    def _record(self, ref: FontFileRef, raw: dict[str, Any] | SubsetError) -> FileOutcome:
        """Turn a worker result into a SubsetResult or logged SubsetError."""
        if isinstance(raw, SubsetError):
            self.batch_logger.log_file_error(ref.name, raw)
            return raw

        if "error" in raw:
            error = SubsetError(str(ref.path), raw["error"])
            self.batch_logger.log_file_error(ref.name, error, traceback=raw.get("traceback"))
            return error

        try:
            original_size = ref.path.stat().st_size
        except OSError as e:
            error = SubsetError(str(ref.path), f"cannot stat source font: {e}")
            self.batch_logger.log_file_error(ref.name, error)
            return error

        result = SubsetResult.from_sizes(
            original_file=ref.name,
            output_file=raw["output_file"],
            original_size=original_size,
            optimized_size=raw["output_bytes"],
        )
        self.batch_logger.log_file_complete(
            file_name=ref.name,
            output_file=result.output_file,
            reduction=result.reduction,
            duration_ms=raw.get("duration_ms", 0.0),
        )
        return result


class _ProgressTracker:
    """Counts finished fonts and forwards them to a progress callback."""

    def __init__(self, total: int, callback: ProgressCallback | None) -> None:
        self.total = total
        self.completed = 0
        self.callback = callback

    def advance(self, file_name: str, outcome: FileOutcome) -> None:
        self.completed += 1
        if self.callback is not None:
            self.callback(self.completed, self.total, file_name, outcome)


def _needs_resubmit(future: Future) -> bool:
    """Whether a future was lost when its executor broke."""
    if not future.done() or future.cancelled():
        return True
    return isinstance(future.exception(), BrokenProcessPool)


class FontSubsetProcessor:
    """Orchestrates a complete subsetting run.

    Manages the complete workflow:
    1. Load the character set (fatal on failure)
    2. Discover fonts in the source directory
    3. Subset every font into the target directory
    4. Write the report

    Example:
        settings = SubsetterSettings()
        processor = FontSubsetProcessor(settings)
        report = processor.run()
    """

    def __init__(
        self,
        config: SubsetterSettings,
        engine: SubsetEngine | None = None,
    ) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Subsetter settings
            engine: Subsetting engine (FontToolsEngine built from config if None)
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.engine = engine or FontToolsEngine(hinting=config.subset.hinting)
        self.runner = BatchRunner(
            engine=self.engine,
            max_workers=config.subset.max_workers,
            timeout=config.subset.timeout_seconds,
            logger=self.logger,
        )

    @property
    def stats(self) -> ProcessingStats:
        """Statistics of the most recent batch."""
        return self.runner.stats

    def load_charset(self) -> CharacterSet:
        """Load the configured character file.

        Raises:
            CharsetLoadError: If the file cannot be read
        """
        return load_charset(self.config.paths.char_file)

    def discover(self) -> list[FontFileRef]:
        """Discover fonts in the configured source directory."""
        return discover_fonts(self.config.paths.source_dir)

    def process(
        self,
        font_files: Sequence[FontFileRef],
        charset: CharacterSet,
        progress_callback: ProgressCallback | None = None,
    ) -> list[SubsetResult]:
        """Subset fonts into the configured target directory."""
        return self.runner.run(
            font_files,
            charset,
            self.config.paths.target_dir,
            progress_callback=progress_callback,
        )

    def report(self, results: Sequence[SubsetResult], charset: CharacterSet) -> Report:
        """Write the report for a finished batch."""
        return generate_report(results, charset, self.config.paths.target_dir, logger=self.logger)

    def run(
        self,
        progress_callback: ProgressCallback | None = None,
        on_charset_loaded: Callable[[CharacterSet], None] | None = None,
        on_fonts_discovered: Callable[[list[FontFileRef]], None] | None = None,
    ) -> Report:
        """Run the whole pipeline.

        Args:
            progress_callback: Optional per-font callback, see BatchRunner.run
            on_charset_loaded: Called with the character set once it is loaded
            on_fonts_discovered: Called with the discovered fonts before processing

        Returns:
            The persisted Report

        Raises:
            CharsetLoadError: If the character file cannot be read
            KeyboardInterrupt: If processing is cancelled by user
        """
        self.logger.info(
            "Starting subsetting run",
            source_dir=str(self.config.paths.source_dir),
            target_dir=str(self.config.paths.target_dir),
            char_file=str(self.config.paths.char_file),
        )

        charset = self.load_charset()
        if on_charset_loaded is not None:
            on_charset_loaded(charset)

        font_files = self.discover()
        if on_fonts_discovered is not None:
            on_fonts_discovered(font_files)

        results = self.process(font_files, charset, progress_callback=progress_callback)
        return self.report(results, charset)
