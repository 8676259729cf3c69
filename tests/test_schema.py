"""
Tests for type resolution and the Property model.
"""

import pytest

from obj_for_dto.core.errors import DuplicatePropertyName
from obj_for_dto.core.parser import parse_specification
from obj_for_dto.core.schema import (
    BOOLEAN,
    DATE,
    NUMBER,
    STRING,
    CustomType,
    PrimitiveKind,
    Property,
    build_properties,
    custom_type_names,
    resolve_type,
)


def props(spec, **kwargs):
    return build_properties(parse_specification(spec), **kwargs)


class TestResolveType:
    @pytest.mark.parametrize(
        "code,expected",
        [("s", STRING), ("", STRING), ("n", NUMBER), ("b", BOOLEAN), ("d", DATE)],
    )
    def test_builtin_codes(self, code, expected):
        assert resolve_type(code) == expected

    def test_unknown_code_is_custom(self):
        assert resolve_type("e") == CustomType("e")
        assert resolve_type("Employee") == CustomType("Employee")

    def test_alias_maps_to_custom(self):
        assert resolve_type("e", {"e": "Employee"}) == CustomType("Employee")

    def test_builtin_wins_over_alias(self):
        assert resolve_type("s", {"s": "Secret"}) == STRING


class TestProperty:
    def test_flags(self):
        name, when, lead, members = props("name,when:d,lead:Employee?,members:Employee[]")

        assert name.kind == PrimitiveKind.STRING
        assert not name.is_custom
        assert when.is_date
        assert lead.is_custom
        assert lead.kind is None
        assert lead.type_name == "Employee"
        assert members.is_array and members.is_custom

    @pytest.mark.parametrize(
        "spec,expected",
        [
            ("x:s", False),
            ("x:n", True),
            ("x:b?", True),
            ("x:d", False),
            ("x:Employee", False),
            ("x:Employee[]", True),
            ("x:s[]", False),
        ],
    )
    def test_needs_presence_guard(self, spec, expected):
        assert props(spec)[0].needs_presence_guard is expected

    def test_describe(self):
        assert Property("tags", STRING, is_optional=True, is_array=True).describe() == (
            "tags: string[]?"
        )
        assert Property("lead", CustomType("Employee")).describe() == "lead: Employee"


class TestBuildProperties:
    def test_declaration_order_by_default(self):
        assert [p.name for p in props("zeta,alpha,mid")] == ["zeta", "alpha", "mid"]

    def test_sorted_on_request(self):
        assert [p.name for p in props("zeta,alpha,mid", sort=True)] == [
            "alpha",
            "mid",
            "zeta",
        ]

    def test_duplicate_names_rejected(self):
        with pytest.raises(DuplicatePropertyName, match="'name'"):
            props("name,age:n,name:b")

    def test_aliases_applied(self):
        (manager,) = props("manager:e?", aliases={"e": "Employee"})
        assert manager.type == CustomType("Employee")
        assert manager.is_optional


def test_custom_type_names_first_use_order():
    properties = props("lead:Employee,office:Office?,members:Employee[],name")
    assert custom_type_names(properties) == ["Employee", "Office"]
