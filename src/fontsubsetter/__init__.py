"""Fontsubsetter - Shrink fonts to a character set as WOFF2 web fonts.

Fontsubsetter is a CLI tool that reads a character list, finds every TTF/OTF/WOFF
font in a source directory, keeps only the glyphs those characters need and
writes each result as a WOFF2 file together with a JSON size report.

Example:
    $ font-subset --source-dir fonts/source --char-file charset.txt

This will create fonts/output/<name>.woff2 for every font plus
fonts/output/subset-report.json.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
