"""Tests for the TypeScript declaration generator."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import COMMON_J

from mpq2json.cache import DocumentCache
from mpq2json.declarations import parse_jass
from mpq2json.documents import parse_trigger_ui
from mpq2json.exceptions import SourceReadError
from mpq2json.store import write_json_tree
from mpq2json.typings import FILE_HEADER, generate_typings, render_declarations, render_doc_comment


def _function(name: str, takes: list[dict], returns: str = "nothing") -> dict:
    return {"name": name, "symbol": "function", "takes": takes, "returns": returns}


class TestRenderDeclarations:
    """Tests for render_declarations function."""

    def test_common_j(self) -> None:
        text = render_declarations(parse_jass(COMMON_J))
        lines = text.splitlines()

        assert lines[0] == FILE_HEADER
        assert "declare interface unit extends widget { __unit: never; }" in lines
        assert "declare const MAX_PLAYERS: integer;" in lines
        assert "declare function GetUnitX(whichUnit: unit): real;" in lines

    def test_array_global(self) -> None:
        library = {"heroes": {"name": "heroes", "symbol": "global", "type": "unit", "isArray": True}}
        assert "declare var heroes: Record<number, unit>;" in render_declarations(library)

    def test_trailing_nullable_params_are_optional(self) -> None:
        library = {
            "F": _function(
                "F",
                [
                    {"type": "unit", "name": "u", "isNullable": True},
                    {"type": "real", "name": "x"},
                    {"type": "real", "name": "y", "isNullable": True},
                ],
            )
        }
        assert "declare function F(u: unit | undefined, x: real, y?: real): nothing;" in render_declarations(library)

    def test_reserved_param_name(self) -> None:
        library = {"F": _function("F", [{"type": "integer", "name": "var"}])}
        assert "declare function F(val: integer): nothing;" in render_declarations(library)

    def test_unknown_symbol_skipped(self) -> None:
        library = {"X": {"name": "X", "symbol": "macro"}}
        assert render_declarations(library) == FILE_HEADER + "\n\n"

    def test_doc_comment_from_script_name(self) -> None:
        library = {"DzDoStuff": _function("DzDoStuff", [{"type": "unit", "name": "u"}])}
        docs = {
            "DoStuff": {
                "title": "Do Stuff",
                "script_name": "DzDoStuff",
                "args": {"type": "unit", "comment": "Target"},
            }
        }
        text = render_declarations(library, docs)
        assert "/**\n * Do Stuff\n * @param u Target\n */\ndeclare function DzDoStuff(u: unit): nothing;" in text


class TestRenderDocComment:
    """Tests for render_doc_comment function."""

    def test_args_bounds(self) -> None:
        entry = {
            "title": "Set Life",
            "description": "Sets life.",
            "args": [{"type": "unit"}, {"type": "real", "default": "100", "min": "0", "max": "1000"}],
        }
        takes = [{"type": "unit", "name": "u"}, {"type": "real", "name": "life"}]
        assert render_doc_comment(entry, takes) == [
            "/**",
            " * Set Life",
            " *",
            " * Sets life.",
            " * @param u",
            " * @param life default: 100, min: 0, max: 1000",
            " */",
        ]

    def test_empty_entry(self) -> None:
        assert render_doc_comment({}, []) == []

    def test_comment_terminator_escaped(self) -> None:
        assert render_doc_comment({"title": "a */ b"}, []) == ["/**", " * a *\\/ b", " */"]


class TestGenerateTypings:
    """Tests for generate_typings function."""

    def test_writes_declaration_file(self, tmp_path: Path) -> None:
        json_path = tmp_path / "jass" / "common.json"
        write_json_tree(json_path, parse_jass(COMMON_J))
        docs_path = tmp_path / "action.json"
        write_json_tree(docs_path, {"GetUnitX": {"title": "Unit X"}})

        target = generate_typings(json_path, tmp_path / "types", DocumentCache(), docs_paths=[docs_path])

        assert target == tmp_path / "types" / "common.d.ts"
        text = target.read_text(encoding="utf-8")
        assert "/**\n * Unit X\n */\ndeclare function GetUnitX(whichUnit: unit): real;" in text

    def test_missing_tree(self, tmp_path: Path) -> None:
        with pytest.raises(SourceReadError):
            generate_typings(tmp_path / "missing.json", tmp_path, DocumentCache())

    def test_trigger_ui_source_docs_shared_across_files(self, tmp_path: Path) -> None:
        """A .txt doc source is parsed through the cache and reused."""
        common = tmp_path / "common.json"
        extra = tmp_path / "extra.json"
        write_json_tree(common, parse_jass(COMMON_J))
        write_json_tree(extra, parse_jass("native GetUnitX takes unit u returns real\n"))
        docs_path = tmp_path / "call.txt"
        docs_path.write_text('[GetUnitX]\ntitle = "Unit X"\n', encoding="utf-8")
        cache = DocumentCache()

        first = generate_typings(common, tmp_path / "types", cache, docs_paths=[docs_path])
        parsed = cache.get(docs_path, parse_trigger_ui)
        second = generate_typings(extra, tmp_path / "types", cache, docs_paths=[docs_path])

        assert cache.get(docs_path, parse_trigger_ui) is parsed
        assert " * Unit X" in first.read_text(encoding="utf-8")
        assert " * Unit X" in second.read_text(encoding="utf-8")

    def test_missing_doc_source_is_skipped(self, tmp_path: Path) -> None:
        json_path = tmp_path / "common.json"
        write_json_tree(json_path, parse_jass(COMMON_J))

        target = generate_typings(json_path, tmp_path, DocumentCache(), docs_paths=[tmp_path / "gone.txt"])

        assert "/**" not in target.read_text(encoding="utf-8").replace(FILE_HEADER, "")
