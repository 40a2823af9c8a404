"""Tests for entity id generation and validation."""

from __future__ import annotations

from unittest.mock import patch

from runwayctl.domain.ids import ENTITY_ID_PREFIX, generate_entity_id, validate_entity_id


class TestGenerateEntityId:
    def test_prefix_and_shape(self) -> None:
        entity_id = generate_entity_id()
        assert entity_id.startswith(ENTITY_ID_PREFIX)
        assert validate_entity_id(entity_id)

    def test_avoids_existing(self) -> None:
        class _Hex:
            def __init__(self, value: str) -> None:
                self.hex = value

        values = iter([_Hex("aaaaaaaa" + "0" * 24), _Hex("bbbbbbbb" + "0" * 24)])
        with patch("runwayctl.domain.ids.uuid.uuid4", side_effect=lambda: next(values)):
            assert generate_entity_id({"emp_aaaaaaaa"}) == "emp_bbbbbbbb"


class TestValidateEntityId:
    def test_rejects_foreign_ids(self) -> None:
        assert not validate_entity_id("42")
        assert not validate_entity_id("emp_XYZ")
        assert not validate_entity_id("emp_0123456789")
