"""Gfx documentation extractor.

Finds (% %) doc-strings in Gfx sources, scans their directives into
module, function, constant and type records, and writes them out as
JSON, HTML or Markdown.
"""

__version__ = "0.1.0"
