"""Data models for documentation extracted from Gfx doc-strings.

Defines the directive value produced by the lexer and the documentation
records the scanner builds from it. These models form the shared
vocabulary between the parsing pipeline and the output writers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional


class DocKind(str, Enum):
    """Kinds of documentation record a doc-string can describe."""

    MODULE = "module"
    FUNCTION = "function"
    CONSTANT = "constant"
    TYPE = "type"


@dataclass(frozen=True)
class Directive:
    """A single named directive found inside a doc-string.

    Attributes:
        name: Directive name, without the leading backslash.
        contents: Payload with escaped quotes already unescaped.
    """

    name: str
    contents: str


@dataclass
class DocInfo:
    """Common information that may be described in a Gfx doc-string.

    Subclasses extend ``DIRECTIVE_FIELDS`` with the directives they
    accept and ``SERIALIZABLE_ATTRS`` with the keys they emit.

    Attributes:
        name: Name of the documented element.
        abstract: One-line summary.
        discussion: Longer free-form description.
        see_also: Related links, in the order they were written.
    """

    KIND: ClassVar[DocKind]

    # directive name -> attribute name
    DIRECTIVE_FIELDS: ClassVar[dict[str, str]] = {
        "name": "name",
        "abstract": "abstract",
        "discussion": "discussion",
        "see_also": "see_also",
    }
    LIST_FIELDS: ClassVar[frozenset[str]] = frozenset({"see_also"})
    # emitted even when empty
    ALWAYS_EMITTED: ClassVar[frozenset[str]] = frozenset()
    SERIALIZABLE_ATTRS: ClassVar[tuple[str, ...]] = (
        "name",
        "abstract",
        "discussion",
        "see_also",
        "type",
    )

    name: str = ""
    abstract: Optional[str] = None
    discussion: Optional[str] = None
    see_also: list[str] = field(default_factory=list)

    @property
    def type(self) -> str:
        """The kind name used as the ``type`` discriminator."""
        return self.KIND.value

    def accepts(self, directive_name: str) -> bool:
        """Check whether a directive name maps to a field of this record."""
        return directive_name in self.DIRECTIVE_FIELDS

    def apply(self, directive_name: str, contents: str) -> bool:
        """Assign a directive's contents to the matching field.

        Scalar fields are overwritten, so the last directive wins. List
        fields accumulate one entry per directive in encounter order.

        Args:
            directive_name: Name of the directive.
            contents: Unescaped directive payload.

        Returns:
            True if the directive was applied, False if this record has
            no field for it.
        """
        attr = self.DIRECTIVE_FIELDS.get(directive_name)
        if attr is None:
            return False

        if attr in self.LIST_FIELDS:
            getattr(self, attr).append(contents)
        else:
            setattr(self, attr, contents)
        return True

    def to_dict(self, include_empty: bool = False) -> dict[str, Any]:
        """Serialize to a key-ordered dictionary.

        Args:
            include_empty: Emit keys whose value is None or an empty list.
                Keys in ``ALWAYS_EMITTED`` are written either way.

        Returns:
            Dictionary representation of this record.
        """
        result: dict[str, Any] = {}
        for attr in self.SERIALIZABLE_ATTRS:
            value = self._serialize_attr(attr, include_empty)
            keep = include_empty or attr in self.ALWAYS_EMITTED
            if not keep and (value is None or value == []):
                continue
            result[attr] = value
        return result

    def _serialize_attr(self, attr: str, include_empty: bool) -> Any:
        value = getattr(self, attr)
        if isinstance(value, list):
            return list(value)
        return value


@dataclass
class ModuleDocInfo(DocInfo):
    """Documentation for a module.

    The module is the only record that contains other records. Modules
    cannot be nested, so ``doc_infos`` never holds a ModuleDocInfo.

    Attributes:
        doc_infos: Child records in the order they were encountered.
    """

    KIND: ClassVar[DocKind] = DocKind.MODULE
    ALWAYS_EMITTED: ClassVar[frozenset[str]] = frozenset({"doc_infos"})
    SERIALIZABLE_ATTRS: ClassVar[tuple[str, ...]] = DocInfo.SERIALIZABLE_ATTRS + (
        "doc_infos",
    )

    doc_infos: list[DocInfo] = field(default_factory=list)

    def add_doc_info(self, doc_info: DocInfo) -> None:
        """Append a child record.

        Raises:
            ValueError: If the child is itself a module.
        """
        if isinstance(doc_info, ModuleDocInfo):
            raise ValueError(f"Cannot nest module {doc_info.name!r} in {self.name!r}")
        self.doc_infos.append(doc_info)

    def _serialize_attr(self, attr: str, include_empty: bool) -> Any:
        if attr == "doc_infos":
            return [d.to_dict(include_empty=include_empty) for d in self.doc_infos]
        return super()._serialize_attr(attr, include_empty)


@dataclass
class FunctionDocInfo(DocInfo):
    """Documentation for a function.

    Attributes:
        signature: Stack signature, e.g. ``(<num> <num> -- <num>)``.
        params: One description per parameter.
        returns: Description of the returned type.
    """

    KIND: ClassVar[DocKind] = DocKind.FUNCTION
    DIRECTIVE_FIELDS: ClassVar[dict[str, str]] = {
        **DocInfo.DIRECTIVE_FIELDS,
        "signature": "signature",
        "params": "params",
        "returns": "returns",
    }
    LIST_FIELDS: ClassVar[frozenset[str]] = DocInfo.LIST_FIELDS | {"params"}
    SERIALIZABLE_ATTRS: ClassVar[tuple[str, ...]] = DocInfo.SERIALIZABLE_ATTRS + (
        "signature",
        "params",
        "returns",
    )

    signature: Optional[str] = None
    params: list[str] = field(default_factory=list)
    returns: Optional[str] = None


@dataclass
class ConstantDocInfo(DocInfo):
    """Documentation for a constant.

    The ``\\type`` directive sets ``value_type``; ``type`` itself stays
    the record kind.

    Attributes:
        value_type: Type of the constant's value.
    """

    KIND: ClassVar[DocKind] = DocKind.CONSTANT
    DIRECTIVE_FIELDS: ClassVar[dict[str, str]] = {
        **DocInfo.DIRECTIVE_FIELDS,
        "type": "value_type",
    }
    SERIALIZABLE_ATTRS: ClassVar[tuple[str, ...]] = DocInfo.SERIALIZABLE_ATTRS + (
        "value_type",
    )

    value_type: Optional[str] = None


@dataclass
class TypeDocInfo(DocInfo):
    """Documentation for a type.

    Attributes:
        supertype: Name of the parent type.
        fields: Descriptions of the accessible fields.
    """

    KIND: ClassVar[DocKind] = DocKind.TYPE
    DIRECTIVE_FIELDS: ClassVar[dict[str, str]] = {
        **DocInfo.DIRECTIVE_FIELDS,
        "supertype": "supertype",
        "fields": "fields",
    }
    LIST_FIELDS: ClassVar[frozenset[str]] = DocInfo.LIST_FIELDS | {"fields"}
    SERIALIZABLE_ATTRS: ClassVar[tuple[str, ...]] = DocInfo.SERIALIZABLE_ATTRS + (
        "supertype",
        "fields",
    )

    supertype: Optional[str] = None
    fields: list[str] = field(default_factory=list)


DOC_INFO_CLASSES: dict[str, type[DocInfo]] = {
    DocKind.MODULE.value: ModuleDocInfo,
    DocKind.FUNCTION.value: FunctionDocInfo,
    DocKind.CONSTANT.value: ConstantDocInfo,
    DocKind.TYPE.value: TypeDocInfo,
}


@dataclass
class ScanResult:
    """Outcome of scanning the directive groups of one input unit.

    Attributes:
        unit_name: Identifying name of the unit, usually a filename.
        module: The owning module record.
        warnings: Non-fatal diagnostics in the order they were raised.
    """

    module: ModuleDocInfo
    unit_name: Optional[str] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)
