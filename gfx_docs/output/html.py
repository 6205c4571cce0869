"""HTML output rendered from Jinja2 templates.

Renders one HTML page per module into a destination directory, using
the module.html.j2 template from the templates directory.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from jinja2 import Environment, FileSystemLoader

from gfx_docs.output.markdown import page_stems, require_directory
from gfx_docs.parsers.models import ModuleDocInfo
from gfx_docs.utils.config import OutputConfig

logger = logging.getLogger(__name__)

_DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

MODULE_TEMPLATE = "module.html.j2"


class HtmlWriter:
    """Renders module documentation pages with Jinja2.

    Templates are loaded from a configurable directory and rendered
    with the module record and its child records.
    """

    def __init__(self, templates_dir: Optional[str] = None) -> None:
        """Initialize the HTML writer.

        Args:
            templates_dir: Path to the templates directory. Uses the
                packaged templates/ directory if not specified.
        """
        self._templates_path = (
            Path(templates_dir) if templates_dir else _DEFAULT_TEMPLATES_DIR
        )

        if not self._templates_path.exists():
            logger.warning("Templates directory not found: %s", self._templates_path)

        self._env = Environment(
            loader=FileSystemLoader(str(self._templates_path)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @classmethod
    def from_config(cls, config: OutputConfig) -> "HtmlWriter":
        return cls(templates_dir=config.templates_dir)

    def render_module(self, module: ModuleDocInfo) -> str:
        """Render a module's documentation page.

        Raises:
            TemplateNotFound: If the module template does not exist.
        """
        template = self._env.get_template(MODULE_TEMPLATE)
        rendered = template.render(the_module=module, items=module.doc_infos)
        logger.debug(
            "Rendered %s for %s (%d chars)", MODULE_TEMPLATE, module.name, len(rendered)
        )
        return rendered

    def generate(
        self, modules: list[ModuleDocInfo], destination: Union[str, Path]
    ) -> list[Path]:
        """Write one HTML page per module into ``destination``.

        Args:
            modules: Modules to render.
            destination: Directory to write into; created if missing.

        Returns:
            Paths of the written pages.

        Raises:
            OutputDestinationError: If the destination is a stream.
        """
        output_dir = require_directory(destination, "HTML")
        output_dir.mkdir(parents=True, exist_ok=True)

        paths = []
        for module, stem in zip(modules, page_stems(modules)):
            page_path = output_dir / f"{stem}.html"
            page_path.write_text(self.render_module(module), encoding="utf-8")
            logger.info("Wrote module page: %s", page_path)
            paths.append(page_path)
        return paths
