"""
Python text fragments for a single property.

Renders the decode plan of a property into the TypedDict, dataclass,
``from_json`` and pytest pieces of the generated module.
"""

from typing import List, Optional, Tuple

from ...core.context import PropertyFragments
from ...core.decoder import (
    DecodePlan,
    ElementCheck,
    ExtractionKind,
    GuardKind,
    needs_presence_helper,
)
from ...core.naming import NameSanitizer, underscore
from ...core.schema import PrimitiveKind, Property

# Type of the value held by the dataclass
PYTHON_TYPE_MAP = {
    PrimitiveKind.STRING: "str",
    PrimitiveKind.NUMBER: "float",
    PrimitiveKind.BOOLEAN: "bool",
    PrimitiveKind.DATE: "datetime",
}

# Type of the raw JSON value
JSON_TYPE_MAP = {
    PrimitiveKind.STRING: "str",
    PrimitiveKind.NUMBER: "float",
    PrimitiveKind.BOOLEAN: "bool",
    PrimitiveKind.DATE: "str",
}

TEST_VALUE_MAP = {
    PrimitiveKind.STRING: ("str(uuid4())", "uuid"),
    PrimitiveKind.NUMBER: ("random.randint(0, 1000)", "random"),
    PrimitiveKind.BOOLEAN: ("random.choice([True, False])", "random"),
    PrimitiveKind.DATE: (
        "datetime.fromtimestamp(random.randint(0, 2_000_000_000), tz=timezone.utc)",
        "datetime",
    ),
}

ELEMENT_PREDICATES = {
    ElementCheck.FINITE: "_is_number",
    ElementCheck.PRESENT: "has_value",
}

# Module level helpers emitted into the generated model
NUMBER_HELPER = "number"
DATETIME_HELPER = "datetime"


def test_factory_name(type_name: str) -> str:
    """Name of the fixture factory defined in a class's test module."""
    return f"make_test_{underscore(type_name)}"


class PythonFragmentBuilder:
    """Builds PropertyFragments for Python output."""

    def __init__(self, indent: str, field_sanitizer: NameSanitizer):
        self.indent = indent
        self.field_sanitizer = field_sanitizer

    def build(
        self,
        prop: Property,
        plan: DecodePlan,
        entity: str,
        class_name: str,
        local_sanitizer: NameSanitizer,
    ) -> PropertyFragments:
        field_name = self.field_sanitizer.sanitize_name(prop.name)
        local = local_sanitizer.sanitize_name(prop.name)
        test_value, test_helpers = self.test_value(prop, class_name)

        return PropertyFragments(
            name=prop.name,
            interface_line=f'{self.indent * 2}"{prop.name}": {self.json_type(prop)},',
            dto_line=self.dto_line(prop),
            constructor_line=f"{self.indent}{field_name}: {self.type_text(prop)}",
            constructor_arg=(
                f"{self.indent * 3}{field_name}={self.constructor_arg(prop, plan, local)}"
            ),
            guard=self.guard(prop, plan),
            extraction=self.extraction(prop, plan, local),
            test_value=f"{self.indent * 2}{field_name}={test_value}",
            test_argument=f"{self.indent * 2}{field_name}={local}",
            test_constant=f"{self.indent}{local} = {test_value}",
            test_expectation=self.test_expectation(prop, entity, field_name, local),
            needs_presence_helper=needs_presence_helper(plan),
            needs_identifier_helper=prop.kind == PrimitiveKind.STRING,
            helpers=self.helpers(prop, plan),
            test_helpers=test_helpers,
        )

    # Type text

    def element_type(self, prop: Property) -> str:
        if prop.is_custom:
            return prop.type_name
        return PYTHON_TYPE_MAP[prop.kind]

    def type_text(self, prop: Property) -> str:
        text = self.element_type(prop)
        if prop.is_array:
            return f"List[{text}]"
        if prop.is_optional:
            return f"Optional[{text}]"
        return text

    def json_type(self, prop: Property) -> str:
        """TypedDict value type. Custom types are forward references."""
        if prop.is_custom:
            text = f'"{prop.type_name}Json"'
        else:
            text = JSON_TYPE_MAP[prop.kind]

        if prop.is_array:
            return f"List[{text}]"
        if prop.is_optional:
            return f"Optional[{text}]"
        return text

    def dto_line(self, prop: Property) -> Optional[str]:
        """Only custom properties are remapped to their own DTO shape."""
        if not prop.is_custom:
            return None
        text = f'"{prop.type_name}DTO"'
        if prop.is_array:
            text = f"List[{text}]"
        return f'{self.indent * 2}"{prop.name}": Optional[{text}],'

    def helpers(self, prop: Property, plan: DecodePlan) -> frozenset:
        names = set()
        if plan.element_check == ElementCheck.FINITE:
            names.add(NUMBER_HELPER)
        if prop.is_date:
            names.add(DATETIME_HELPER)
        return frozenset(names)

    # Decoding

    def guard(self, prop: Property, plan: DecodePlan) -> Optional[str]:
        value = f'data.get("{prop.name}")'
        if plan.guard == GuardKind.TRUTHY:
            return value
        elif plan.guard == GuardKind.IS_DEFINED:
            return f"has_value({value})"
        elif plan.guard == GuardKind.IS_ARRAY:
            return f"isinstance({value}, list)"
        return None

    def constructor_arg(self, prop: Property, plan: DecodePlan, local: str) -> str:
        if plan.extraction == ExtractionKind.RAW:
            return f'data["{prop.name}"]'
        elif plan.extraction == ExtractionKind.STRING_OR_NULL:
            return f'data.get("{prop.name}") or None'
        elif plan.extraction == ExtractionKind.DEFINED_OR_NULL:
            value = f'data.get("{prop.name}")'
            return f"{value} if has_value({value}) else None"
        return local

    def extraction(self, prop: Property, plan: DecodePlan, local: str) -> Optional[str]:
        """Statements run before the constructor call, indented for the method body."""
        if not plan.has_block:
            return None

        kind = plan.extraction

        if kind == ExtractionKind.DATE:
            lines = self._date_lines(prop, local)
        elif kind == ExtractionKind.CUSTOM:
            lines = self._custom_lines(prop, local)
        else:
            lines = self._array_lines(prop, plan, local)

        prefix = self.indent * 2
        return "\n".join(f"{prefix}{line}" if line else "" for line in lines)

    def _fail(self, depth: int = 1) -> str:
        return f"{self.indent * depth}return None"

    def _date_lines(self, prop: Property, local: str) -> List[str]:
        if prop.is_optional:
            return [
                f"{local} = None",
                f'if data.get("{prop.name}"):',
                f'{self.indent}{local} = _parse_datetime(data["{prop.name}"])',
                f"{self.indent}if {local} is None:",
                self._fail(2),
            ]
        return [
            f'{local} = _parse_datetime(data.get("{prop.name}"))',
            f"if {local} is None:",
            self._fail(),
        ]

    def _custom_lines(self, prop: Property, local: str) -> List[str]:
        lines = [f'{local} = {prop.type_name}.from_json(data.get("{prop.name}"))']
        if not prop.is_optional:
            lines.append(f"if {local} is None:")
            lines.append(self._fail())
        return lines

    def _filtered(self, prop: Property, plan: DecodePlan, value: str) -> str:
        kind = plan.extraction
        if kind == ExtractionKind.CUSTOM_ARRAY:
            source = f"map({prop.type_name}.from_json, {value})"
            return f"[item for item in {source} if has_value(item)]"
        elif kind == ExtractionKind.DATE_ARRAY:
            source = f"map(_parse_datetime, {value})"
            return f"[item for item in {source} if item is not None]"
        predicate = ELEMENT_PREDICATES[plan.element_check]
        return f"[item for item in {value} if {predicate}(item)]"

    def _array_lines(self, prop: Property, plan: DecodePlan, local: str) -> List[str]:
        value = f'data["{prop.name}"]'
        all_or_nothing = plan.extraction != ExtractionKind.CUSTOM_ARRAY

        body = [f"{local} = {self._filtered(prop, plan, value)}"]
        if all_or_nothing:
            body.append(f"if len({local}) != len({value}):")
            body.append(self._fail())

        # The guard already proved a required array is a list
        if not prop.is_optional:
            return body

        lines = [
            f"{local}: List[{self.element_type(prop)}] = []",
            f'if data.get("{prop.name}"):',
            f"{self.indent}if not isinstance({value}, list):",
            self._fail(2),
        ]
        lines.extend(f"{self.indent}{line}" for line in body)
        return lines

    # Test module

    def test_value(self, prop: Property, class_name: str) -> Tuple[str, frozenset]:
        """Fixture expression for the property and the test helpers it needs."""
        # A fixture factory cannot build an instance of its own class
        if prop.type_name == class_name and prop.is_custom:
            return ("[]" if prop.is_array else "None"), frozenset()

        if prop.is_custom:
            expression = f"{test_factory_name(prop.type_name)}()"
            helpers = frozenset()
        else:
            expression, helper = TEST_VALUE_MAP[prop.kind]
            helpers = frozenset([helper, "random"] if helper == "datetime" else [helper])

        if prop.is_array:
            expression = f"[{expression}]"
        return expression, helpers

    def test_expectation(
        self, prop: Property, entity: str, field_name: str, local: str
    ) -> str:
        operator = "is" if prop.kind == PrimitiveKind.BOOLEAN and not prop.is_array else "=="
        return f"{self.indent}assert {entity}.{field_name} {operator} {local}"
