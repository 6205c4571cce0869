"""Tests for the document scanner state machine."""

import pytest

from gfx_docs.parsers.lexer import lex
from gfx_docs.parsers.models import (
    ConstantDocInfo,
    Directive,
    FunctionDocInfo,
    ModuleDocInfo,
    TypeDocInfo,
)
from gfx_docs.parsers.scanner import ANONYMOUS_MODULE_NAME, DocumentScanner, scan


@pytest.fixture
def scanner() -> DocumentScanner:
    """Create a DocumentScanner instance for testing."""
    return DocumentScanner()


def _d(name: str, contents: str) -> Directive:
    return Directive(name=name, contents=contents)


class TestDefaultModule:
    """Tests for the module record used when no module directive is seen."""

    def test_named_after_unit(self, scanner: DocumentScanner) -> None:
        result = scanner.scan([], unit_name="core.gfx")
        assert result.module.name == "core.gfx"
        assert result.module.doc_infos == []
        assert result.unit_name == "core.gfx"

    def test_anonymous_without_unit_name(self, scanner: DocumentScanner) -> None:
        result = scanner.scan([])
        assert result.module.name == ANONYMOUS_MODULE_NAME
        assert result.warnings == []

    def test_empty_groups_are_skipped(self, scanner: DocumentScanner) -> None:
        result = scanner.scan([[], []], unit_name="x.gfx")
        assert result.module.doc_infos == []
        assert result.warnings == []


class TestRecordKinds:
    """Tests for building each kind of record."""

    def test_function_fields(self, scanner: DocumentScanner) -> None:
        result = scanner.scan(
            [
                [
                    _d("function", "add"),
                    _d("abstract", "Adds two numbers."),
                    _d("signature", "(<num> <num> -- <num>)"),
                    _d("returns", "<num>"),
                ]
            ]
        )
        func = result.module.doc_infos[0]
        assert isinstance(func, FunctionDocInfo)
        assert func.name == "add"
        assert func.abstract == "Adds two numbers."
        assert func.signature == "(<num> <num> -- <num>)"
        assert func.returns == "<num>"
        assert result.warnings == []

    def test_constant_type_directive(self, scanner: DocumentScanner) -> None:
        result = scanner.scan([[_d("constant", "pi"), _d("type", "<num>")]])
        const = result.module.doc_infos[0]
        assert isinstance(const, ConstantDocInfo)
        assert const.value_type == "<num>"
        assert const.type == "constant"

    def test_type_fields(self, scanner: DocumentScanner) -> None:
        result = scanner.scan(
            [
                [
                    _d("type", "Point"),
                    _d("supertype", "Object"),
                    _d("fields", "x"),
                    _d("fields", "y"),
                ]
            ]
        )
        type_info = result.module.doc_infos[0]
        assert isinstance(type_info, TypeDocInfo)
        assert type_info.supertype == "Object"
        assert type_info.fields == ["x", "y"]

    def test_module_becomes_owner(self, scanner: DocumentScanner) -> None:
        result = scanner.scan(
            [[_d("module", "Core"), _d("discussion", "Core words.")]],
            unit_name="core.gfx",
        )
        assert isinstance(result.module, ModuleDocInfo)
        assert result.module.name == "Core"
        assert result.module.discussion == "Core words."
        assert result.module.doc_infos == []


class TestFieldPolicy:
    """Tests for repeated directives of the same name."""

    def test_list_fields_accumulate(self, scanner: DocumentScanner) -> None:
        result = scanner.scan(
            [
                [
                    _d("function", "f"),
                    _d("params", "a"),
                    _d("params", "b"),
                    _d("see_also", "g"),
                    _d("see_also", "h"),
                ]
            ]
        )
        func = result.module.doc_infos[0]
        assert func.params == ["a", "b"]
        assert func.see_also == ["g", "h"]

    def test_scalar_fields_overwrite(self, scanner: DocumentScanner) -> None:
        result = scanner.scan(
            [[_d("function", "f"), _d("abstract", "first"), _d("abstract", "second")]]
        )
        assert result.module.doc_infos[0].abstract == "second"
        assert result.warnings == []

    def test_name_directive_renames(self, scanner: DocumentScanner) -> None:
        result = scanner.scan([[_d("constant", "old"), _d("name", "new")]])
        assert result.module.doc_infos[0].name == "new"


class TestWarnings:
    """Tests for non-fatal diagnostics."""

    def test_unsupported_kind(self, scanner: DocumentScanner) -> None:
        result = scanner.scan(
            [[_d("macro", "M"), _d("abstract", "never applied")]],
            unit_name="a.gfx",
        )
        assert result.module.doc_infos == []
        assert result.warnings == ["a.gfx: unsupported doc type macro"]

    def test_unsupported_kind_leaves_other_groups(
        self, scanner: DocumentScanner
    ) -> None:
        result = scanner.scan(
            [
                [_d("macro", "M")],
                [_d("function", "f")],
            ]
        )
        assert len(result.warnings) == 1
        assert [d.name for d in result.module.doc_infos] == ["f"]

    def test_unrecognized_directive_continues(self, scanner: DocumentScanner) -> None:
        result = scanner.scan(
            [
                [
                    _d("function", "f"),
                    _d("supertype", "Object"),
                    _d("returns", "<num>"),
                ]
            ]
        )
        assert result.warnings == [
            "did not recognize directive supertype, ignoring"
        ]
        assert result.module.doc_infos[0].returns == "<num>"

    def test_kind_name_is_not_a_field(self, scanner: DocumentScanner) -> None:
        result = scanner.scan([[_d("function", "f"), _d("function", "g")]])
        assert result.module.doc_infos[0].name == "f"
        assert len(result.warnings) == 1

    def test_type_directive_only_for_constants(self, scanner: DocumentScanner) -> None:
        result = scanner.scan([[_d("function", "f"), _d("type", "<num>")]])
        assert result.module.doc_infos[0].type == "function"
        assert len(result.warnings) == 1

    def test_warning_without_unit_name_has_no_prefix(
        self, scanner: DocumentScanner
    ) -> None:
        result = scanner.scan([[_d("example", "x")]])
        assert result.warnings == ["unsupported doc type example"]


class TestModuleOwnership:
    """Tests for how module directives own the other records."""

    def test_children_keep_encounter_order(self, scanner: DocumentScanner) -> None:
        result = scanner.scan(
            [
                [_d("module", "M")],
                [_d("function", "f1")],
                [_d("constant", "c1")],
                [_d("function", "f2")],
            ]
        )
        assert result.module.name == "M"
        assert [d.name for d in result.module.doc_infos] == ["f1", "c1", "f2"]
        assert [d.type for d in result.module.doc_infos] == [
            "function",
            "constant",
            "function",
        ]

    def test_module_never_contains_module(self, scanner: DocumentScanner) -> None:
        result = scanner.scan([[_d("module", "M")], [_d("function", "f")]])
        assert not any(isinstance(d, ModuleDocInfo) for d in result.module.doc_infos)

    def test_children_before_module_directive_are_kept(
        self, scanner: DocumentScanner
    ) -> None:
        result = scanner.scan(
            [
                [_d("function", "early")],
                [_d("module", "M")],
                [_d("function", "late")],
            ],
            unit_name="m.gfx",
        )
        assert result.module.name == "M"
        assert [d.name for d in result.module.doc_infos] == ["early", "late"]

    def test_second_module_directive_is_ignored(
        self, scanner: DocumentScanner
    ) -> None:
        result = scanner.scan(
            [
                [_d("module", "First"), _d("abstract", "kept")],
                [_d("function", "f")],
                [_d("module", "Second"), _d("abstract", "dropped")],
                [_d("function", "g")],
            ],
            unit_name="m.gfx",
        )
        assert result.module.name == "First"
        assert result.module.abstract == "kept"
        assert [d.name for d in result.module.doc_infos] == ["f", "g"]
        assert result.warnings == [
            "m.gfx: duplicate module directive Second, ignoring group"
        ]


class TestLexAndScan:
    """Tests running the lexer and scanner together."""

    def test_well_formed_doc_string(self) -> None:
        source = (
            '(% \\function "name" \\abstract "v1" \\discussion "v2" %)'
        )
        result = scan(lex(source), unit_name="t.gfx")
        func = result.module.doc_infos[0]
        assert isinstance(func, FunctionDocInfo)
        assert (func.name, func.abstract, func.discussion) == ("name", "v1", "v2")
        assert result.warnings == []

    def test_full_unit(self) -> None:
        source = """
        (% \\module "Math" \\abstract "Numeric words." %)
        (% \\function "add"
           \\signature "(<num> <num> -- <num>)"
           \\params "the first number"
           \\params "the second number"
           \\returns "<num>" %)
        (% \\constant "pi" \\type "<num>" \\abstract "Ratio of \\"circumference\\"." %)
        (% \\widget "nope" %)
        """
        result = scan(lex(source), unit_name="math.gfx")
        module = result.module
        assert module.name == "Math"
        assert module.abstract == "Numeric words."
        assert [d.name for d in module.doc_infos] == ["add", "pi"]
        assert module.doc_infos[0].params == ["the first number", "the second number"]
        assert module.doc_infos[1].abstract == 'Ratio of "circumference".'
        assert result.warnings == ["math.gfx: unsupported doc type widget"]

    def test_module_without_children_serializes_empty_list(self) -> None:
        result = scan(lex('(% \\module "M" %)'), unit_name="m.gfx")
        assert result.module.to_dict() == {
            "name": "M",
            "type": "module",
            "doc_infos": [],
        }
