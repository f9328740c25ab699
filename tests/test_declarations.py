"""Tests for the JASS declaration extractor."""

from __future__ import annotations

from conftest import COMMON_J

from mpq2json.declarations import clean_line, parse_global, parse_jass, parse_prototype


class TestCleanLine:
    """Tests for clean_line function."""

    def test_strips_trailing_comment(self) -> None:
        assert clean_line("native Foo takes nothing returns nothing // note") == (
            "native Foo takes nothing returns nothing"
        )

    def test_collapses_whitespace(self) -> None:
        assert clean_line("  type   unit    extends  widget ") == "type unit extends widget"


class TestParsePrototype:
    """Tests for parse_prototype function."""

    def test_takes_nothing(self) -> None:
        assert parse_prototype("nothing returns nothing") == ([], "nothing")

    def test_parameters_in_order(self) -> None:
        params, returns = parse_prototype("unit whichUnit, real x, real y returns boolean")
        assert [(p.type, p.name) for p in params] == [("unit", "whichUnit"), ("real", "x"), ("real", "y")]
        assert returns == "boolean"

    def test_missing_returns(self) -> None:
        params, returns = parse_prototype("integer i")
        assert [p.name for p in params] == ["i"]
        assert returns == "nothing"


class TestParseGlobal:
    """Tests for parse_global function."""

    def test_constant_with_value(self) -> None:
        declaration = parse_global("constant integer MAX_PLAYERS = 16")
        assert declaration is not None
        assert declaration.isConstant
        assert declaration.type == "integer"
        assert declaration.value == "16"
        assert not declaration.isArray

    def test_array(self) -> None:
        declaration = parse_global("unit array heroes")
        assert declaration is not None
        assert declaration.isArray
        assert declaration.name == "heroes"
        assert declaration.value is None

    def test_string_value_unquoted(self) -> None:
        declaration = parse_global('constant string PREFIX="dz"')
        assert declaration is not None
        assert declaration.value == "dz"

    def test_not_a_global(self) -> None:
        assert parse_global("!!!") is None


class TestParseJass:
    """Tests for parse_jass function."""

    def test_common_j(self) -> None:
        library = parse_jass(COMMON_J, source="common.j")

        assert list(library) == ["widget", "unit", "MAX_PLAYERS", "GetUnitX"]
        assert library["unit"] == {
            "name": "unit",
            "source": "common.j",
            "symbol": "type",
            "extends": "widget",
        }
        assert library["MAX_PLAYERS"]["symbol"] == "global"
        assert library["MAX_PLAYERS"]["isConstant"] is True
        assert library["GetUnitX"] == {
            "name": "GetUnitX",
            "source": "common.j",
            "symbol": "native",
            "takes": [{"type": "unit", "name": "whichUnit"}],
            "returns": "real",
        }

    def test_functions_and_constant_natives(self) -> None:
        text = (
            "constant native GetPlayerId takes player whichPlayer returns integer\n"
            "function DoStuff takes unit u returns nothing\n"
            "    local integer i = 0\n"
            "endfunction\n"
        )
        library = parse_jass(text)
        assert library["GetPlayerId"]["symbol"] == "native"
        assert library["DoStuff"]["symbol"] == "function"
        assert "i" not in library
        assert "source" not in library["DoStuff"]

    def test_private_lines_are_skipped(self) -> None:
        library = parse_jass("private function Hidden takes nothing returns nothing\n")
        assert library == {}

    def test_globals_block_only_after_keyword(self) -> None:
        text = "integer notGlobal\nglobals\ninteger counter = 0\nendglobals\ninteger after\n"
        assert list(parse_jass(text)) == ["counter"]

    def test_later_declaration_wins(self) -> None:
        text = "native A takes nothing returns integer\nnative A takes nothing returns real\n"
        assert parse_jass(text)["A"]["returns"] == "real"
