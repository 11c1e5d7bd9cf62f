"""Unit tests for the I/O layer.

Tests for character set loading, font discovery and report writing.
"""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from fontsubsetter.domain import FontFormat, Report, SubsetResult
from fontsubsetter.exceptions import CharsetLoadError, DiscoveryError
from fontsubsetter.io import (
    REPORT_FILENAME,
    discover_fonts,
    get_report_path,
    list_font_files,
    load_charset,
    write_report,
)


class TestLoadCharset:
    """Tests for load_charset."""

    def test_dedup_and_whitespace(self, tmp_path: Path):
        """'AAABBCabc ' loads as six characters."""
        path = tmp_path / "charset.txt"
        path.write_text("AAABBCabc ", encoding="utf-8")

        charset = load_charset(path)

        assert len(charset) == 6
        assert set(charset) == {"A", "B", "C", "a", "b", "c"}

    def test_newline_delimited(self, tmp_path: Path):
        """One character per line works the same as raw text."""
        path = tmp_path / "charset.txt"
        path.write_text("你\n好\n你\n\n", encoding="utf-8")

        charset = load_charset(path)

        assert charset.text == "你好"
        assert len(charset) == 2

    def test_byte_order_mark_ignored(self, tmp_path: Path):
        """A UTF-8 BOM is not a character."""
        path = tmp_path / "charset.txt"
        path.write_bytes("\ufeffxyz".encode("utf-8"))

        charset = load_charset(path)

        assert charset.text == "xyz"

    def test_missing_file(self, tmp_path: Path):
        """A missing file raises CharsetLoadError carrying the path."""
        path = tmp_path / "missing.txt"

        with pytest.raises(CharsetLoadError) as exc_info:
            load_charset(path)

        assert exc_info.value.path == str(path)
        assert isinstance(exc_info.value, OSError)

    def test_not_utf8(self, tmp_path: Path):
        """Undecodable content is reported as a load failure."""
        path = tmp_path / "charset.txt"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(CharsetLoadError, match="Failed to read character file"):
            load_charset(path)

    def test_directory_instead_of_file(self, tmp_path: Path):
        """A directory cannot be read as a character file."""
        with pytest.raises(CharsetLoadError):
            load_charset(tmp_path)


class TestDiscovery:
    """Tests for list_font_files and discover_fonts."""

    def _touch(self, directory: Path, *names: str) -> None:
        for name in names:
            (directory / name).write_bytes(b"\0")

    def test_filters_extensions(self, tmp_path: Path):
        """Only ttf/otf/woff files are returned."""
        self._touch(tmp_path, "a.ttf", "b.otf", "readme.txt")

        refs = discover_fonts(tmp_path)

        assert [ref.name for ref in refs] == ["a.ttf", "b.otf"]
        assert [ref.format for ref in refs] == [FontFormat.TTF, FontFormat.OTF]

    def test_case_insensitive_and_sorted(self, tmp_path: Path):
        """Upper-case extensions match and results are sorted by name."""
        self._touch(tmp_path, "z.WOFF", "m.Otf", "a.TTF", "x.woff2", "font.ttf.bak")

        refs = discover_fonts(tmp_path)

        assert [ref.name for ref in refs] == ["a.TTF", "m.Otf", "z.WOFF"]

    def test_skips_directories(self, tmp_path: Path):
        """A directory named like a font is not a font."""
        (tmp_path / "nested.ttf").mkdir()
        self._touch(tmp_path, "real.ttf")

        refs = discover_fonts(tmp_path)

        assert [ref.name for ref in refs] == ["real.ttf"]

    def test_empty_directory(self, tmp_path: Path):
        """An empty directory yields no fonts."""
        assert discover_fonts(tmp_path) == []

    def test_missing_directory_is_empty(self, tmp_path: Path):
        """A missing directory is logged and treated as no fonts."""
        assert discover_fonts(tmp_path / "does-not-exist") == []

    def test_list_font_files_raises(self, tmp_path: Path):
        """The strict variant reports the failure."""
        missing = tmp_path / "does-not-exist"

        with pytest.raises(DiscoveryError) as exc_info:
            list_font_files(missing)

        assert exc_info.value.path == str(missing)

    def test_unreadable_directory(self, tmp_path: Path):
        """Listing errors other than a missing directory are soft too."""
        with patch.object(Path, "iterdir", side_effect=PermissionError("denied")):
            assert discover_fonts(tmp_path) == []


class TestWriteReport:
    """Tests for write_report."""

    def _report(self) -> Report:
        return Report(
            timestamp=datetime(2026, 10, 19, tzinfo=timezone.utc),
            character_count=6,
            results=(SubsetResult.from_sizes("font1.ttf", "font1.woff2", 10000, 4000),),
        )

    def test_writes_json(self, tmp_path: Path):
        """The report lands at <dir>/subset-report.json."""
        path = write_report(self._report(), tmp_path)

        assert path == tmp_path / REPORT_FILENAME
        assert path == get_report_path(tmp_path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["processedFiles"] == 1
        assert data["averageReduction"] == "60.0%"
        assert data["details"][0]["reduction"] == "60.0"

    def test_overwrites_existing(self, tmp_path: Path):
        """A previous report is replaced."""
        (tmp_path / REPORT_FILENAME).write_text("stale", encoding="utf-8")

        path = write_report(self._report(), tmp_path)

        assert json.loads(path.read_text(encoding="utf-8"))["characterCount"] == 6

    def test_creates_directory(self, tmp_path: Path):
        """Missing output directories are created."""
        target = tmp_path / "a" / "b"

        path = write_report(self._report(), target)

        assert path.exists()
        assert os.path.isdir(target)
