"""Allow running fontsubsetter as ``python -m fontsubsetter``."""

from fontsubsetter.cli import cli

if __name__ == "__main__":
    cli()
