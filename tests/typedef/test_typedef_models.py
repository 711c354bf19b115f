"""Tests for type-definition models."""

import pytest
from pydantic import ValidationError

from typegraph.typedef.models import ElementDef, EnumDef, EnumDefs, TypeCategory


class TestEnumDef:
    def test_category_defaults_to_enum(self):
        enum_def = EnumDef(name="Color")

        assert enum_def.category == TypeCategory.ENUM
        assert enum_def.element_defs == []

    def test_camel_case_aliases(self):
        enum_def = EnumDef.model_validate(
            {
                "name": "Color",
                "typeVersion": "2.0",
                "createdBy": "admin",
                "elementDefs": [{"value": "RED", "ordinal": 0}],
            }
        )

        assert enum_def.type_version == "2.0"
        assert enum_def.created_by == "admin"
        assert enum_def.element_defs[0].value == "RED"

    def test_dump_by_alias(self):
        enum_def = EnumDef(name="Color", element_defs=[ElementDef(value="RED", ordinal=0)])

        data = enum_def.model_dump(by_alias=True, exclude_none=True)

        assert data["elementDefs"] == [{"value": "RED", "ordinal": 0}]
        assert data["category"] == TypeCategory.ENUM

    def test_string_elements_get_positional_ordinals(self):
        enum_def = EnumDef.model_validate(
            {"name": "Size", "elementDefs": ["SMALL", "LARGE"]}
        )

        assert [(e.value, e.ordinal) for e in enum_def.element_defs] == [
            ("SMALL", 0),
            ("LARGE", 1),
        ]

    def test_element_order_kept_as_given(self):
        enum_def = EnumDef(
            name="Rank",
            element_defs=[
                ElementDef(value="B", ordinal=2),
                ElementDef(value="A", ordinal=1),
            ],
        )

        assert [e.value for e in enum_def.element_defs] == ["B", "A"]

    def test_get_element(self, order_status):
        assert order_status.get_element("SHIPPED").ordinal == 1
        assert order_status.get_element("LOST") is None
        assert order_status.has_element("NEW")
        assert not order_status.has_element("LOST")

    def test_other_category_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            EnumDef.model_validate({"name": "S", "category": "STRUCT", "elementDefs": ["A"]})

        assert "category ENUM" in str(exc_info.value)

    def test_explicit_enum_category_accepted(self):
        enum_def = EnumDef.model_validate({"name": "S", "category": "ENUM"})

        assert enum_def.category == TypeCategory.ENUM

    def test_input_not_modified(self):
        data = {"name": "Size", "elementDefs": ["SMALL", "LARGE"]}

        EnumDef.model_validate(data)

        assert data["elementDefs"] == ["SMALL", "LARGE"]


class TestEnumDefs:
    def test_len(self, order_status):
        assert len(EnumDefs(enum_defs=[order_status])) == 1
        assert len(EnumDefs()) == 0
