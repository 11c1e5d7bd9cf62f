"""Shared fixtures: small real fonts built with fontTools."""

import string
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

# Enough glyphs that a subset is clearly smaller than the source
FONT_CHARACTERS = string.ascii_letters + string.digits


def _box_glyph(inset: int):
    pen = TTGlyphPen(None)
    pen.moveTo((inset, 0))
    pen.lineTo((inset, 700))
    pen.lineTo((500 - inset, 700))
    pen.lineTo((500 - inset, 0))
    pen.closePath()
    return pen.glyph()


def build_test_font(path: Path, characters: str = FONT_CHARACTERS, flavor: str | None = None) -> Path:
    """Build a TrueType font with one box glyph per character and save it."""
    glyph_names = {char: f"uni{ord(char):04X}" for char in characters}
    glyph_order = [".notdef", "space", *glyph_names.values()]

    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap({32: "space", **{ord(c): name for c, name in glyph_names.items()}})

    glyphs = {name: _box_glyph(20 + index % 50) for index, name in enumerate(glyph_order)}
    glyphs["space"] = TTGlyphPen(None).glyph()
    builder.setupGlyf(glyphs)

    metrics = {name: (500, 20 + index % 50) for index, name in enumerate(glyph_order)}
    metrics["space"] = (250, 0)
    builder.setupHorizontalMetrics(metrics)
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": "Subset Test", "styleName": "Regular"})
    builder.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    builder.setupPost()

    if flavor is not None:
        builder.font.flavor = flavor
    builder.save(str(path))
    return path


@pytest.fixture
def font_factory(tmp_path: Path):
    """Create test fonts inside a per-test source directory."""
    source_dir = tmp_path / "source"
    source_dir.mkdir()

    def factory(name: str, characters: str = FONT_CHARACTERS, flavor: str | None = None) -> Path:
        return build_test_font(source_dir / name, characters=characters, flavor=flavor)

    factory.source_dir = source_dir  # type: ignore[attr-defined]
    return factory


@pytest.fixture
def charset_file(tmp_path: Path) -> Path:
    """Character file asking for a handful of glyphs."""
    path = tmp_path / "charset.txt"
    path.write_text("AAABBCabc \n", encoding="utf-8")
    return path
