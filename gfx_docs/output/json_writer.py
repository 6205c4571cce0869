"""JSON output for extracted module documentation.

Dumps the full record tree of every module as one JSON array, either
to an open text stream or to a file path.
"""

import json
import logging
from pathlib import Path
from typing import Any, TextIO, Union

from gfx_docs.parsers.models import ModuleDocInfo
from gfx_docs.utils.config import OutputConfig

logger = logging.getLogger(__name__)


class JsonWriter:
    """Writes modules as a JSON array of record mappings."""

    def __init__(self, include_empty: bool = False, indent: int = 2) -> None:
        """Initialize the JSON writer.

        Args:
            include_empty: Emit keys whose value is missing or empty.
            indent: Indentation passed to the JSON encoder.
        """
        self.include_empty = include_empty
        self.indent = indent

    @classmethod
    def from_config(cls, config: OutputConfig) -> "JsonWriter":
        return cls(include_empty=config.include_empty)

    def to_data(self, modules: list[ModuleDocInfo]) -> list[dict[str, Any]]:
        """Convert modules into JSON-ready mappings."""
        return [m.to_dict(include_empty=self.include_empty) for m in modules]

    def generate(
        self,
        modules: list[ModuleDocInfo],
        destination: Union[str, Path, TextIO],
    ) -> None:
        """Write the modules to a stream or file.

        Args:
            modules: Modules to serialize.
            destination: An open text stream, or a path to write to.
        """
        data = self.to_data(modules)

        if isinstance(destination, (str, Path)):
            path = Path(destination)
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=self.indent)
                f.write("\n")
            logger.info(
                "Wrote JSON documentation: %s (%d modules)", path, len(modules)
            )
        else:
            json.dump(data, destination, indent=self.indent)
            destination.write("\n")
            logger.debug("Wrote JSON documentation for %d modules", len(modules))
