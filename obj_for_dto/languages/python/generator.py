"""
Python code generator implementation.

Generates ``<Class>Json`` and ``<Class>DTO`` TypedDicts and a frozen
dataclass with a validating ``from_json`` classmethod, plus a pytest module.
"""

from pathlib import Path
from typing import List, Optional, Set, Union

from ...core.config import GeneratorConfig, load_config
from ...core.context import GenerationContext, PropertyFragments
from ...core.decoder import DecodePlan
from ...core.generator import CodeGenerator
from ...core.imports import ImportResolver, ResolvedFile
from ...core.naming import NamingCase, underscore
from ...core.schema import Property, custom_type_names
from .fragments import PythonFragmentBuilder, test_factory_name
from .naming import create_local_sanitizer, create_python_sanitizer


def relative_module(resolved: ResolvedFile) -> str:
    """Relative import path of a located module, e.g. ``..models.employee``."""
    return "." * (resolved.levels_up + 1) + ".".join(resolved.module_parts())


def from_import(module: str, names: List[str]) -> str:
    return f"from {module} import {', '.join(sorted(names))}"


class PythonGenerator(CodeGenerator):
    """Code generator for Python dataclasses with a JSON factory."""

    default_presence_helper_file = "has_value.py"

    model_template = "model.py.j2"
    test_template = "test_model.py.j2"

    constructor_separator = "\n"
    argument_separator = ",\n"
    max_blank_lines = 2
    entity_case = NamingCase.SNAKE_CASE

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        output_dir: Optional[Union[str, Path]] = None,
    ):
        """Initialize Python generator with configuration."""
        super().__init__(config, output_dir)

        # Initialize naming
        self.sanitizer = create_python_sanitizer()
        self.local_sanitizer = create_local_sanitizer()

        self.fragments = PythonFragmentBuilder(self.config.indent, self.sanitizer)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    # Naming

    def file_stem(self, class_name: str) -> str:
        return underscore(class_name)

    def interface_name(self, class_name: str) -> str:
        return f"{class_name}Json"

    def dto_name(self, class_name: str) -> str:
        return f"{class_name}DTO"

    def model_file_name(self, stem: str) -> str:
        return f"{stem}.py"

    def test_file_name(self, stem: str) -> str:
        return f"test_{stem}.py"

    # Rendering

    def build_fragments(
        self, prop: Property, plan: DecodePlan, context: GenerationContext
    ) -> PropertyFragments:
        return self.fragments.build(
            prop,
            plan,
            context.entity_name,
            context.class_name,
            context.local_sanitizer,
        )

    def render_guard(self, guards: List[str]) -> str:
        condition = "not isinstance(data, dict)"
        if len(guards) == 1:
            return f"{condition} or not {guards[0]}"
        elif guards:
            return f"{condition} or not ({' and '.join(guards)})"
        return condition

    def render_dto(self, context: GenerationContext) -> str:
        """Every field of the Json shape, custom ones re-typed to their DTO."""
        dto_lines = dict(zip(context.dto_names, context.dto_lines))
        lines = [
            dto_lines.get(prop.name, line)
            for prop, line in zip(context.properties, context.interface_lines)
        ]
        return "\n".join(lines)

    def add_imports(self, context: GenerationContext, resolver: ImportResolver):
        class_name = context.class_name

        context.add_test_import(
            from_import(f".{self.file_stem(class_name)}", [class_name])
        )

        for type_name in custom_type_names(context.properties):
            # Self references need no import
            if type_name == class_name:
                continue

            stem = underscore(type_name)
            resolved = self.find_import(context, resolver, f"{stem}.py")
            if resolved:
                context.add_import(
                    from_import(
                        relative_module(resolved),
                        [type_name, f"{type_name}DTO", f"{type_name}Json"],
                    )
                )

            resolved = self.find_import(
                context, resolver, f"test_{stem}.py", subdirectory=stem
            )
            if resolved:
                context.add_test_import(
                    from_import(relative_module(resolved), [test_factory_name(type_name)])
                )

        if context.needs_presence_helper:
            resolved = self.find_import(context, resolver, self.presence_helper_file)
            if resolved:
                context.add_import(from_import(relative_module(resolved), ["has_value"]))

    def taken_names(self, class_name: str, properties: List[Property]) -> Set[str]:
        taken = super().taken_names(class_name, properties)
        # Fixture factories imported into the test module
        return taken | {test_factory_name(name) for name in taken}

    def validate_properties(self, class_name: str, properties: List[Property]) -> List[str]:
        warnings = super().validate_properties(class_name, properties)

        for prop in properties:
            field_name = self.sanitizer.sanitize_name(prop.name)
            if field_name != prop.name:
                warnings.append(
                    f"Property '{prop.name}' is a Python keyword; "
                    f"the field is named '{field_name}'"
                )

        return warnings


def create_python_generator(
    config: Optional[GeneratorConfig] = None,
    output_dir: Optional[Union[str, Path]] = None,
) -> PythonGenerator:
    """
    Create Python generator with configuration.

    Args:
        config: Generator configuration, Python defaults when omitted
        output_dir: Directory the artifacts are written to

    Returns:
        Configured PythonGenerator instance
    """
    if config is None:
        config = load_config("python")
    return PythonGenerator(config, output_dir)
