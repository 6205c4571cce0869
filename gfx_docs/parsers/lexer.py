"""Lexer for directives embedded in Gfx doc-strings.

Doc-strings are written between ``(%`` and ``%)`` markers and hold
directives of the form ``\\name "payload"``. The lexer finds every
doc-string in a source text and turns each one into an ordered group
of directives. It knows nothing about what the directives mean.
"""

import logging
import re
from pathlib import Path

from gfx_docs.parsers.models import Directive

logger = logging.getLogger(__name__)

_DOC_STRING_RE = re.compile(r"\(%([^%]+)%\)")

# A payload is a run of escaped characters or non-quotes, so it ends at
# the first unescaped quote.
_DIRECTIVE_RE = re.compile(r'\\(\S+)\s+"((?:\\.|[^"\\])*)"', re.DOTALL)

_ESCAPED_QUOTE = '\\"'


def _unescape(payload: str) -> str:
    """Replace escaped quotes with literal quotes.

    Other backslash sequences are left untouched.
    """
    return payload.replace(_ESCAPED_QUOTE, '"')


class DirectiveLexer:
    """Splits source text into groups of doc-string directives.

    Lexing never fails: text that does not match the directive syntax
    simply produces no directive.
    """

    def lex_file(self, file_path: str) -> list[list[Directive]]:
        """Read a source file and lex its doc-strings.

        Args:
            file_path: Path to the source file.

        Returns:
            One directive group per doc-string, in source order.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        return self.lex(path.read_text(encoding="utf-8"))

    def lex(self, text: str) -> list[list[Directive]]:
        """Lex every doc-string in a source text.

        Args:
            text: Raw source text.

        Returns:
            One directive group per doc-string, in source order. A
            doc-string without any well-formed directive yields an
            empty group.
        """
        groups = [
            self.lex_doc_string(match.group(1).strip())
            for match in _DOC_STRING_RE.finditer(text)
        ]
        logger.debug(
            "Lexed %d doc-strings, %d directives",
            len(groups),
            sum(len(g) for g in groups),
        )
        return groups

    def lex_doc_string(self, doc_string: str) -> list[Directive]:
        """Lex the directives of a single doc-string body.

        Args:
            doc_string: Text found between the doc-string markers.

        Returns:
            Directives in the order they appear.
        """
        return [
            Directive(name=match.group(1), contents=_unescape(match.group(2)))
            for match in _DIRECTIVE_RE.finditer(doc_string)
        ]


def lex(text: str) -> list[list[Directive]]:
    """Lex every doc-string in ``text`` with a default lexer."""
    return DirectiveLexer().lex(text)
