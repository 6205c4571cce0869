"""Lookup table from output format names to writer classes."""

from typing import Union

from gfx_docs.errors import UnknownOutputFormatError
from gfx_docs.output.html import HtmlWriter
from gfx_docs.output.json_writer import JsonWriter
from gfx_docs.output.markdown import MarkdownWriter
from gfx_docs.utils.config import OutputConfig

OutputWriter = Union[JsonWriter, HtmlWriter, MarkdownWriter]

OUTPUT_WRITERS: dict[str, type] = {
    "json": JsonWriter,
    "html": HtmlWriter,
    "md": MarkdownWriter,
}


def get_writer(output_format: str, config: OutputConfig) -> OutputWriter:
    """Create the writer registered under ``output_format``.

    Args:
        output_format: Format name, e.g. ``json`` or ``html``.
        config: Output settings passed to the writer.

    Returns:
        A writer instance configured from ``config``.

    Raises:
        UnknownOutputFormatError: If no writer has that name.
    """
    writer_cls = OUTPUT_WRITERS.get(output_format)
    if writer_cls is None:
        raise UnknownOutputFormatError(output_format, sorted(OUTPUT_WRITERS))
    return writer_cls.from_config(config)
