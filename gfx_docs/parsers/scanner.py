"""Scanner that folds lexed directive groups into documentation records.

Each directive group is handled on its own: the first directive names
the kind of record, every following directive fills a field of that
record. Problems never abort the scan; they are collected as warnings
on the ScanResult so the rest of the unit is still documented.
"""

import logging
from typing import Iterable, Optional, Sequence

from gfx_docs.parsers.models import (
    DOC_INFO_CLASSES,
    Directive,
    DocInfo,
    ModuleDocInfo,
    ScanResult,
)

logger = logging.getLogger(__name__)

ANONYMOUS_MODULE_NAME = "anonymous"


class DocumentScanner:
    """Builds a module record and its children from directive groups."""

    def scan(
        self,
        groups: Iterable[Sequence[Directive]],
        unit_name: Optional[str] = None,
    ) -> ScanResult:
        """Scan the directive groups of one input unit.

        Args:
            groups: Directive groups in source order, one per doc-string.
            unit_name: Identifying name of the unit, used for the default
                module name and to prefix warnings.

        Returns:
            A ScanResult holding the owning module, with its children in
            encounter order, and all warnings.
        """
        result = ScanResult(
            module=ModuleDocInfo(name=unit_name or ANONYMOUS_MODULE_NAME),
            unit_name=unit_name,
        )
        has_explicit_module = False

        for group in groups:
            doc_info = self._scan_group(group, result, has_explicit_module)
            if doc_info is None:
                continue

            if isinstance(doc_info, ModuleDocInfo):
                # Children seen before the module directive stay with the unit.
                doc_info.doc_infos[:0] = result.module.doc_infos
                result.module = doc_info
                has_explicit_module = True
            else:
                result.module.add_doc_info(doc_info)

        logger.debug(
            "Scanned %s: module %r with %d doc infos, %d warnings",
            unit_name or "<string>",
            result.module.name,
            len(result.module.doc_infos),
            len(result.warnings),
        )
        return result

    def _scan_group(
        self,
        group: Sequence[Directive],
        result: ScanResult,
        has_explicit_module: bool,
    ) -> Optional[DocInfo]:
        """Build the record described by a single directive group.

        Returns:
            The finished record, or None if the group was abandoned.
        """
        if not group:
            return None

        head, *rest = group
        doc_info_cls = DOC_INFO_CLASSES.get(head.name)
        if doc_info_cls is None:
            self._warn(result, f"unsupported doc type {head.name}")
            return None

        if doc_info_cls is ModuleDocInfo and has_explicit_module:
            self._warn(
                result,
                f"duplicate module directive {head.contents}, ignoring group",
            )
            return None

        doc_info = doc_info_cls(name=head.contents)
        for directive in rest:
            if not doc_info.accepts(directive.name):
                self._warn(
                    result,
                    f"did not recognize directive {directive.name}, ignoring",
                )
                continue
            doc_info.apply(directive.name, directive.contents)
        return doc_info

    def _warn(self, result: ScanResult, message: str) -> None:
        if result.unit_name:
            message = f"{result.unit_name}: {message}"
        logger.debug("%s", message)
        result.warnings.append(message)


def scan(
    groups: Iterable[Sequence[Directive]],
    unit_name: Optional[str] = None,
) -> ScanResult:
    """Scan directive groups with a default scanner."""
    return DocumentScanner().scan(groups, unit_name=unit_name)
