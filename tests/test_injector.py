"""
Tests for witdocs.injector.

Tests verify:
- The end-to-end annotated output for a single documented world
- Single-world fallback and the multi-world no-fallback rule
- Indentation of function doc comments
- The legacy ``functions`` alias
- Lines the scanner does not recognize pass through untouched
"""

import pytest

from witdocs.injector import (
    ScanState,
    extract_function_name,
    extract_world_name,
    inject_docs,
    leading_whitespace,
    resolve_function_docs,
    resolve_world,
    resolve_world_docs,
    single_world_fallback,
    split_lines,
)
from witdocs.model import DocTree


def tree_of(data: dict) -> DocTree:
    return DocTree.model_validate(data)


class TestEndToEnd:
    def test_documented_world_and_function(self, app_tree):
        wit = "world app {\n  export run: func();\n}"
        assert inject_docs(wit, app_tree) == (
            "/// Top level.\n"
            "world app {\n"
            "  /// Runs it.\n"
            "  export run: func();\n"
            "}\n"
        )

    def test_wasm_tools_style_output(self, app_tree):
        wit = (
            "package root:component;\n"
            "\n"
            "world root {\n"
            "  import wasi:cli/environment@0.2.0;\n"
            "  export run: func();\n"
            "}\n"
        )
        assert inject_docs(wit, app_tree) == (
            "package root:component;\n"
            "\n"
            "/// Top level.\n"
            "world root {\n"
            "  import wasi:cli/environment@0.2.0;\n"
            "  /// Runs it.\n"
            "  export run: func();\n"
            "}\n"
        )


class TestSingleWorldFallback:
    def test_declared_name_differs(self):
        tree = tree_of({"worlds": {"w1": {"func_exports": {"foo": {"docs": "Foo docs."}}}}})
        wit = "world other {\n  export foo: func();\n}\n"
        assert inject_docs(wit, tree) == "world other {\n  /// Foo docs.\n  export foo: func();\n}\n"

    def test_fallback_world_docs(self):
        tree = tree_of({"worlds": {"w1": {"docs": "Only world."}}})
        assert resolve_world_docs(tree, "renamed") == "Only world."

    def test_single_world_fallback_rule(self, app_tree, multi_world_tree):
        assert single_world_fallback(app_tree) is app_tree.worlds["app"]
        assert single_world_fallback(multi_world_tree) is None
        assert single_world_fallback(DocTree()) is None

    def test_world_keyword_alone_is_not_a_header(self, app_tree):
        # trimmed "world" has no trailing space, so no world scope opens
        wit = "world\n  export run: func();\n}\n"
        assert inject_docs(wit, app_tree) == wit


class TestMultiWorld:
    def test_no_fallback_reproduces_input(self, multi_world_tree):
        wit = "package a:b;\n\nworld gamma {\n  export go: func();\n  import log: func(msg: string);\n}\n"
        assert inject_docs(wit, multi_world_tree) == wit

    def test_exact_match_selects_world(self, multi_world_tree):
        wit = "world beta {\n  export go: func();\n}\n"
        assert inject_docs(wit, multi_world_tree) == (
            "/// Beta world.\nworld beta {\n  /// Beta go.\n  export go: func();\n}\n"
        )

    def test_two_worlds_in_one_rendering(self, multi_world_tree):
        wit = "world alpha {\n  export go: func();\n}\nworld beta {\n  export go: func();\n}\n"
        out = inject_docs(wit, multi_world_tree)
        assert "  /// Alpha go.\n  export go: func();\n}\n/// Beta world.\nworld beta {\n  /// Beta go.\n" in out

    def test_resolve_world_none(self, multi_world_tree):
        assert resolve_world(multi_world_tree, "gamma") is None
        assert resolve_function_docs(multi_world_tree, "gamma", "go") is None


class TestIndentation:
    @pytest.mark.parametrize("indent", ["", " ", "    ", "\t", "\t  "])
    def test_doc_lines_match_declaration_indent(self, app_tree, indent):
        wit = f"world app {{\n{indent}export run: func();\n}}\n"
        out = inject_docs(wit, app_tree)
        assert f"{indent}/// Runs it.\n{indent}export run: func();\n" in out

    def test_multiline_docs(self):
        tree = tree_of({"worlds": {"app": {"docs": "Line one.\nLine two.", "func_exports": {"run": {"docs": "A\nB"}}}}})
        out = inject_docs("world app {\n    export run: func();\n}\n", tree)
        assert out == (
            "/// Line one.\n/// Line two.\nworld app {\n    /// A\n    /// B\n    export run: func();\n}\n"
        )

    def test_leading_whitespace(self):
        assert leading_whitespace("  \texport x") == "  \t"
        assert leading_whitespace("export x") == ""
        assert leading_whitespace("   ") == "   "


class TestAliasCompatibility:
    def test_functions_alias_resolves_like_func_exports(self):
        wit = "world app {\n  export run: func();\n}\n"
        modern = tree_of({"worlds": {"app": {"func_exports": {"run": {"docs": "Runs it."}}}}})
        legacy = tree_of({"worlds": {"app": {"functions": {"run": {"docs": "Runs it."}}}}})
        assert inject_docs(wit, legacy) == inject_docs(wit, modern)

    def test_func_exports_checked_before_alias(self):
        tree = tree_of(
            {"worlds": {"app": {"func_exports": {"run": {"docs": "new"}}, "functions": {"run": {"docs": "old"}}}}}
        )
        assert resolve_function_docs(tree, "app", "run") == "new"

    def test_imports_resolve_through_exports_collection(self):
        tree = tree_of({"worlds": {"app": {"func_exports": {"log": {"docs": "Exported log."}}}}})
        out = inject_docs("world app {\n  import log: func();\n}\n", tree)
        assert "  /// Exported log.\n  import log: func();\n" in out

    def test_empty_func_exports_does_not_fall_back_to_alias(self):
        tree = tree_of({"worlds": {"app": {"func_exports": {}, "functions": {"run": {"docs": "old"}}}}})
        assert resolve_function_docs(tree, "app", "run") is None
        wit = "world app {\n  export run: func();\n}\n"
        assert inject_docs(wit, tree) == wit


class TestPassThrough:
    def test_lines_outside_worlds_untouched(self, app_tree):
        wit = "package a:b;\n\ninterface types {\n  export run: func();\n}\n"
        assert inject_docs(wit, app_tree) == wit

    def test_export_without_colon(self, app_tree):
        wit = "world app {\n  export wasi:cli/run@0.2.0;\n  export run;\n}\n"
        assert inject_docs(wit, app_tree) == "/// Top level.\n" + wit

    def test_undocumented_world_and_function(self):
        tree = tree_of({"worlds": {"app": {"func_exports": {"run": {}}}}})
        wit = "world app {\n  export run: func();\n}\n"
        assert inject_docs(wit, tree) == wit

    def test_empty_docs_emit_nothing(self):
        tree = tree_of({"worlds": {"app": {"docs": ""}}})
        assert inject_docs("world app {\n}\n", tree) == "world app {\n}\n"

    def test_body_ends_at_first_closing_brace(self, app_tree):
        wit = "world app {\n  export iface: interface {\n  }\n  export run: func();\n}\n"
        out = inject_docs(wit, app_tree)
        assert "  /// Runs it." not in out

    def test_unterminated_world(self, app_tree):
        wit = "world app {\n  export run: func();"
        assert inject_docs(wit, app_tree) == "/// Top level.\nworld app {\n  /// Runs it.\n  export run: func();\n"

    def test_empty_input(self, app_tree):
        assert inject_docs("", app_tree) == ""

    def test_crlf_input(self, app_tree):
        out = inject_docs("world app {\r\n  export run: func();\r\n}\r\n", app_tree)
        assert out == "/// Top level.\nworld app {\n  /// Runs it.\n  export run: func();\n}\n"


class TestHelpers:
    def test_extract_world_name(self):
        assert extract_world_name("world app {") == "app"
        assert extract_world_name("world   spaced   {") == "spaced"
        assert extract_world_name("world") == "unknown"

    def test_extract_function_name(self):
        assert extract_function_name("export run: func();") == "run"
        assert extract_function_name("import get-value: func() -> u32;") == "get-value"
        assert extract_function_name("export run;") is None
        assert extract_function_name("export: func();") is None

    def test_extract_function_name_uses_first_colon(self):
        assert extract_function_name("import wasi:io/streams@0.2.0;") == "wasi"

    def test_split_lines(self):
        assert split_lines("a\nb\n") == ["a", "b"]
        assert split_lines("a\r\nb") == ["a", "b"]
        assert split_lines("a\n\nb") == ["a", "", "b"]
        assert split_lines("\n") == [""]
        assert split_lines("") == []

    def test_scan_states(self):
        assert {s.value for s in ScanState} == {"top-level", "world-body"}
