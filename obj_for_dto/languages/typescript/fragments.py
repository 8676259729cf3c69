"""
TypeScript text fragments for a single property.

Renders the decode plan of a property into the interface, DTO, constructor,
factory and spec file pieces of the generated class.
"""

from typing import List, Optional

from ...core.context import PropertyFragments
from ...core.decoder import (
    DecodePlan,
    ElementCheck,
    ExtractionKind,
    GuardKind,
    needs_presence_helper,
)
from ...core.naming import NameSanitizer
from ...core.schema import PrimitiveKind, Property

TYPESCRIPT_TYPE_MAP = {
    PrimitiveKind.STRING: "string",
    PrimitiveKind.NUMBER: "number",
    PrimitiveKind.BOOLEAN: "boolean",
    PrimitiveKind.DATE: "Date",
}

# Fixture expression and the helper it needs, per primitive kind
TEST_VALUE_MAP = {
    PrimitiveKind.STRING: ("v4()", None),
    PrimitiveKind.NUMBER: ("getRandomInt()", "getRandomInt"),
    PrimitiveKind.BOOLEAN: ("getRandomBoolean()", "getRandomBoolean"),
    PrimitiveKind.DATE: ("getRandomDate()", "getRandomDate"),
}

ELEMENT_FILTERS = {
    ElementCheck.FINITE: "Number.isFinite",
    ElementCheck.PRESENT: "hasValue",
}


def test_factory_name(type_name: str) -> str:
    """Name of the fixture factory exported by a class's spec file."""
    return f"getTest{type_name}"


class TypeScriptFragmentBuilder:
    """Builds PropertyFragments for TypeScript output."""

    def __init__(self, indent: str):
        self.indent = indent

    def build(
        self,
        prop: Property,
        plan: DecodePlan,
        entity: str,
        class_name: str,
        local_sanitizer: NameSanitizer,
    ) -> PropertyFragments:
        local = local_sanitizer.sanitize_name(prop.name)
        test_value, test_helper = self.test_value(prop, class_name)

        return PropertyFragments(
            name=prop.name,
            interface_line=self.interface_line(prop),
            dto_line=self.dto_line(prop),
            constructor_line=self.constructor_line(prop),
            constructor_arg=self.constructor_arg(prop, plan, local),
            guard=self.guard(prop, plan),
            extraction=self.extraction(prop, plan, local),
            test_value=f"{self.indent * 2}{test_value}",
            test_argument=local,
            test_constant=f"{self.indent * 2}const {local} = {test_value}",
            test_expectation=self.test_expectation(prop, entity, local),
            needs_presence_helper=needs_presence_helper(plan),
            needs_identifier_helper=prop.kind == PrimitiveKind.STRING,
            test_helpers=frozenset([test_helper]) if test_helper else frozenset(),
        )

    # Type text

    def element_type(self, prop: Property, interface: bool = False) -> str:
        if prop.is_custom:
            return f"I{prop.type_name}" if interface else prop.type_name
        return TYPESCRIPT_TYPE_MAP[prop.kind]

    def type_text(self, prop: Property, interface: bool = False) -> str:
        text = self.element_type(prop, interface)
        if prop.is_array:
            return f"{text}[]"
        if prop.is_optional:
            return f"{text} | null"
        return text

    def interface_line(self, prop: Property) -> str:
        return f"{self.indent}{prop.name}: {self.type_text(prop, interface=True)}"

    def dto_line(self, prop: Property) -> Optional[str]:
        """Only custom properties are remapped to their own DTO shape."""
        if not prop.is_custom:
            return None
        array = "[]" if prop.is_array else ""
        return f"{self.indent}{prop.name}?: {prop.type_name}DTO{array} | null"

    def constructor_line(self, prop: Property) -> str:
        return f"{self.indent * 2}public readonly {prop.name}: {self.type_text(prop)}"

    # Decoding

    def guard(self, prop: Property, plan: DecodePlan) -> Optional[str]:
        value = f"json.{prop.name}"
        if plan.guard == GuardKind.TRUTHY:
            return value
        elif plan.guard == GuardKind.IS_DEFINED:
            return f"hasValue({value})"
        elif plan.guard == GuardKind.IS_ARRAY:
            return f"Array.isArray({value})"
        return None

    def constructor_arg(self, prop: Property, plan: DecodePlan, local: str) -> str:
        value = f"json.{prop.name}"
        if plan.extraction == ExtractionKind.RAW:
            return value
        elif plan.extraction == ExtractionKind.STRING_OR_NULL:
            return f"{value} || null"
        elif plan.extraction == ExtractionKind.DEFINED_OR_NULL:
            return f"hasValue({value}) ? {value} : null"
        return local

    def extraction(self, prop: Property, plan: DecodePlan, local: str) -> Optional[str]:
        """Statements run before the constructor call, indented for the method body."""
        if not plan.has_block:
            return None

        value = f"json.{prop.name}"
        kind = plan.extraction

        if kind == ExtractionKind.DATE:
            lines = self._date_lines(prop, value, local)
        elif kind == ExtractionKind.CUSTOM:
            lines = self._custom_lines(prop, value, local)
        elif kind == ExtractionKind.CUSTOM_ARRAY and not prop.is_optional:
            lines = [f"const {local} = {self._custom_map(prop, value)}"]
        else:
            lines = self._array_lines(prop, plan, value, local)

        prefix = self.indent * 2
        return "\n".join(f"{prefix}{line}" if line else "" for line in lines)

    def _date_lines(self, prop: Property, value: str, local: str) -> List[str]:
        fail = f"{self.indent}return undefined"
        if prop.is_optional:
            return [
                f"const {local} = {value} ? new Date({value}) : null",
                f"if ({local} && !isFinite({local}.getTime()))",
                fail,
            ]
        return [
            f"const {local} = new Date({value})",
            f"if (!isFinite({local}.getTime()))",
            fail,
        ]

    def _custom_lines(self, prop: Property, value: str, local: str) -> List[str]:
        decode = f"{prop.type_name}.fromJson({value})"
        if prop.is_optional:
            return [f"const {local} = {decode} ?? null"]
        return [
            f"const {local} = {decode}",
            f"if (!{local})",
            f"{self.indent}return undefined",
        ]

    def _custom_map(self, prop: Property, value: str) -> str:
        return f"{value}.map((x: any) => {prop.type_name}.fromJson(x)).filter(hasValue)"

    def _array_lines(
        self, prop: Property, plan: DecodePlan, value: str, local: str
    ) -> List[str]:
        lines = [f"let {local}: {self.element_type(prop)}[] = []"]
        prefix = ""

        if prop.is_optional:
            lines.append(f"if ({value}) {{")
            prefix = self.indent

        fail = f"{prefix}{self.indent}return undefined"
        lines.append(f"{prefix}if (!Array.isArray({value}))")
        lines.append(fail)
        lines.append("")

        if plan.extraction == ExtractionKind.CUSTOM_ARRAY:
            lines.append(f"{prefix}{local} = {self._custom_map(prop, value)}")
        else:
            if plan.extraction == ExtractionKind.DATE_ARRAY:
                filtered = (
                    f"{value}.map((x: any) => new Date(x))"
                    f".filter((x: Date) => isFinite(x.getTime()))"
                )
            else:
                filtered = f"{value}.filter({ELEMENT_FILTERS[plan.element_check]})"
            lines.append(f"{prefix}{local} = {filtered}")
            lines.append(f"{prefix}if ({local}.length !== {value}.length)")
            lines.append(fail)

        if prop.is_optional:
            lines.append("}")

        return lines

    # Spec file

    def test_value(self, prop: Property, class_name: str):
        """Fixture expression for the property and the helper it imports."""
        # A fixture factory cannot build an instance of its own class
        if prop.type_name == class_name and prop.is_custom:
            return ("[]" if prop.is_array else "null"), None

        if prop.is_custom:
            expression = f"{test_factory_name(prop.type_name)}()"
            helper = None
        else:
            expression, helper = TEST_VALUE_MAP[prop.kind]

        if prop.is_array:
            expression = f"[{expression}]"
        return expression, helper

    def test_expectation(self, prop: Property, entity: str, local: str) -> str:
        if prop.is_custom or prop.is_date:
            matcher = "toStrictEqual"
        elif prop.is_array:
            matcher = "toEqual"
        else:
            matcher = "toBe"
        return f"{self.indent * 2}expect({entity}.{prop.name}).{matcher}({local})"
