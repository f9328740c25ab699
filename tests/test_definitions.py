"""Tests for the definition-table field mapper."""

from __future__ import annotations

import pytest

from mpq2json.definitions import DEFINITION_SCHEMAS, map_definition, zip_fields


class TestMapDefinition:
    """Tests for map_definition function."""

    def test_trigger_categories(self) -> None:
        assert map_definition("TriggerCategories", "Combat Spells,BTNattack") == {
            "display": "Combat Spells",
            "icon": "BTNattack",
        }

    def test_missing_trailing_fields_are_empty(self) -> None:
        """Every record of a section has the same field set."""
        assert map_definition("TriggerTypes", "0,1,1,Unit") == {
            "version": "0",
            "global": "1",
            "comparison": "1",
            "display": "Unit",
            "baseType": "",
        }

    def test_trigger_params(self) -> None:
        assert map_definition("TriggerParams", "0,player, Player(0) ,Player 1") == {
            "version": "0",
            "type": "player",
            "code": "Player(0)",
            "display": "Player 1",
        }

    def test_type_defaults(self) -> None:
        assert map_definition("TriggerTypeDefaults", "0") == {"default": "0", "display": ""}

    @pytest.mark.parametrize("section", ["AIFunctionStrings", "DefaultTriggerCategories", "DefaultTriggers"])
    def test_passthrough_sections_keep_value(self, section: str) -> None:
        assert map_definition(section, "a,b,c") == "a,b,c"

    def test_unknown_section(self) -> None:
        assert map_definition("SomethingNew", "a,b") is None

    def test_empty_value(self) -> None:
        assert map_definition("TriggerCategories", "") is None


class TestZipFields:
    """Tests for zip_fields function."""

    def test_extra_values_are_ignored(self) -> None:
        assert zip_fields(("a",), "1,2,3") == {"a": "1"}

    def test_every_schema_has_unique_fields(self) -> None:
        for fields in DEFINITION_SCHEMAS.values():
            assert len(set(fields)) == len(fields)
