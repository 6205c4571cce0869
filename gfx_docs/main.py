"""Entry point for the Gfx documentation extractor.

Delegates to the Click command group, which loads configuration and
sets up logging before running a subcommand.
"""

from gfx_docs.cli.commands import cli


def main() -> None:
    """Launch the CLI."""
    cli(prog_name="gfxdoc")


if __name__ == "__main__":
    main()
