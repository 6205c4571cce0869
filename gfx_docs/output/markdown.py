"""Markdown output generation for module documentation.

Generates one Markdown file per documented module and an index page
linking all of them.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from gfx_docs.errors import OutputDestinationError
from gfx_docs.parsers.models import (
    ConstantDocInfo,
    DocInfo,
    FunctionDocInfo,
    ModuleDocInfo,
    TypeDocInfo,
)
from gfx_docs.utils.config import OutputConfig

logger = logging.getLogger(__name__)

_SECTION_TITLES = {
    "function": "Functions",
    "constant": "Constants",
    "type": "Types",
}


def safe_file_stem(module_name: str) -> str:
    """Convert a module name into a safe filename stem."""
    return module_name.replace("/", "_").replace("\\", "_")


def page_stems(modules: list[ModuleDocInfo]) -> list[str]:
    """Pick a distinct filename stem for each module, in order.

    Modules from different directories can share a name. Later ones get
    a numeric suffix so no page overwrites another.
    """
    used: set[str] = set()
    stems = []
    for module in modules:
        base = safe_file_stem(module.name)
        stem = base
        suffix = 1
        while stem in used:
            suffix += 1
            stem = f"{base}-{suffix}"
        if stem != base:
            logger.warning(
                "Duplicate module name %r, writing its page as %s", module.name, stem
            )
        used.add(stem)
        stems.append(stem)
    return stems


def require_directory(destination: object, writer_name: str) -> Path:
    """Return ``destination`` as a directory path.

    Raises:
        OutputDestinationError: If the destination is not a path.
    """
    if not isinstance(destination, (str, Path)):
        raise OutputDestinationError(
            f"{writer_name} output needs a destination directory, not a stream"
        )
    return Path(destination)


class MarkdownWriter:
    """Writes module documentation as Markdown files."""

    @classmethod
    def from_config(cls, config: OutputConfig) -> "MarkdownWriter":
        return cls()

    def generate(
        self, modules: list[ModuleDocInfo], destination: Union[str, Path]
    ) -> list[Path]:
        """Write every module and an index into ``destination``.

        Args:
            modules: Modules to document.
            destination: Directory to write into; created if missing.

        Returns:
            Paths of the written module files, index last.
        """
        output_dir = require_directory(destination, "Markdown")
        stems = page_stems(modules)
        paths = [
            self.write_module_doc(m, output_dir, stem=s)
            for m, s in zip(modules, stems)
        ]
        paths.append(self.write_index(modules, output_dir, stems=stems))
        return paths

    def write_module_doc(
        self,
        module: ModuleDocInfo,
        output_dir: Path,
        stem: Optional[str] = None,
    ) -> Path:
        """Write documentation for a single module to a .md file.

        Args:
            module: The module record.
            output_dir: Directory for the file.
            stem: Filename stem; defaults to the module's safe name.

        Returns:
            Path to the written Markdown file.
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        md_path = output_dir / f"{stem or safe_file_stem(module.name)}.md"
        md_path.write_text(self._render_module(module), encoding="utf-8")

        logger.info("Wrote module documentation: %s", md_path)
        return md_path

    def write_index(
        self,
        modules: list[ModuleDocInfo],
        output_dir: Path,
        title: str = "Modules",
        stems: Optional[list[str]] = None,
    ) -> Path:
        """Generate an index page linking all modules.

        Args:
            modules: List of documented modules.
            output_dir: Directory for the index.
            title: Title for the index page.
            stems: Filename stems the module pages were written under.

        Returns:
            Path to the written index file.
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        index_path = output_dir / "index.md"
        if stems is None:
            stems = page_stems(modules)

        lines = [f"# {title}\n"]
        for module, stem in sorted(zip(modules, stems), key=lambda ms: ms[0].name):
            summary = f" - {module.abstract}" if module.abstract else ""
            lines.append(f"- [{module.name}]({stem}.md){summary}")

        lines.append("")
        index_path.write_text("\n".join(lines), encoding="utf-8")

        logger.info("Wrote index: %s (%d modules)", index_path, len(modules))
        return index_path

    def _render_module(self, module: ModuleDocInfo) -> str:
        lines: list[str] = [f"# `{module.name}`\n"]
        lines.extend(self._render_common(module))

        # Sections follow the order each kind first appears in the module.
        sections: dict[str, list[DocInfo]] = {}
        for doc_info in module.doc_infos:
            sections.setdefault(doc_info.type, []).append(doc_info)

        for kind, doc_infos in sections.items():
            lines.append(f"## {_SECTION_TITLES.get(kind, kind.title())}\n")
            for doc_info in doc_infos:
                lines.append(self._render_doc_info(doc_info))

        return "\n".join(lines)

    def _render_doc_info(self, doc_info: DocInfo) -> str:
        """Render one child record as Markdown.

        Args:
            doc_info: A function, constant or type record.

        Returns:
            Markdown string for the record.
        """
        lines: list[str] = []

        if isinstance(doc_info, FunctionDocInfo):
            signature = f" {doc_info.signature}" if doc_info.signature else ""
            lines.append(f"### `{doc_info.name}{signature}`\n")
        elif isinstance(doc_info, ConstantDocInfo) and doc_info.value_type:
            lines.append(f"### `{doc_info.name}`: `{doc_info.value_type}`\n")
        elif isinstance(doc_info, TypeDocInfo) and doc_info.supertype:
            lines.append(f"### `{doc_info.name}` < `{doc_info.supertype}`\n")
        else:
            lines.append(f"### `{doc_info.name}`\n")

        lines.extend(self._render_common(doc_info))

        if isinstance(doc_info, FunctionDocInfo):
            if doc_info.params:
                lines.append("**Parameters:**\n")
                lines.extend(f"- {p}" for p in doc_info.params)
                lines.append("")
            if doc_info.returns:
                lines.append(f"**Returns:** {doc_info.returns}\n")
        elif isinstance(doc_info, TypeDocInfo) and doc_info.fields:
            lines.append("**Fields:**\n")
            lines.extend(f"- {f}" for f in doc_info.fields)
            lines.append("")

        return "\n".join(lines)

    def _render_common(self, doc_info: DocInfo) -> list[str]:
        lines = []
        if doc_info.abstract:
            lines.append(f"{doc_info.abstract}\n")
        if doc_info.discussion:
            lines.append(f"{doc_info.discussion}\n")
        if doc_info.see_also:
            links = ", ".join(f"`{link}`" for link in doc_info.see_also)
            lines.append(f"See also: {links}\n")
        return lines
