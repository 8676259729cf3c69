"""
TypeScript code generator implementation.

Generates an ``I<Class>`` interface, a ``<Class>DTO`` partial type and a
class with a validating ``fromJson`` factory, plus a Jest spec skeleton.
"""

from pathlib import Path
from typing import List, Optional, Set, Union

from ...core.config import GeneratorConfig, load_config
from ...core.context import GenerationContext, PropertyFragments
from ...core.decoder import DecodePlan
from ...core.generator import CodeGenerator
from ...core.imports import ImportResolver, ResolvedFile
from ...core.naming import dasherize
from ...core.schema import Property, custom_type_names
from .fragments import TypeScriptFragmentBuilder, test_factory_name
from .naming import create_typescript_sanitizer, is_reserved_word


def module_path(resolved: ResolvedFile, stem: Optional[str] = None) -> str:
    """Relative module specifier for a located file, without extension."""
    parts = "/".join(resolved.module_parts(stem))
    if resolved.levels_up == 0:
        return f"./{parts}"
    return "../" * resolved.levels_up + parts


def named_import(names: List[str], source: str) -> str:
    return f"import {{{', '.join(sorted(names))}}} from '{source}'"


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript classes with a JSON factory."""

    default_presence_helper_file = "has-value.ts"
    default_test_helpers_file = "setup-jest-esm.ts"

    model_template = "model.ts.j2"
    test_template = "model.spec.ts.j2"

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        output_dir: Optional[Union[str, Path]] = None,
    ):
        """Initialize TypeScript generator with configuration."""
        super().__init__(config, output_dir)
        self.local_sanitizer = create_typescript_sanitizer()
        self.fragments = TypeScriptFragmentBuilder(self.config.indent)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "typescript"

    @property
    def file_extension(self) -> str:
        """Return TypeScript file extension."""
        return ".ts"

    def get_template_directory(self) -> Path:
        """Return the TypeScript templates directory."""
        return Path(__file__).parent / "templates"

    # Naming

    def file_stem(self, class_name: str) -> str:
        return dasherize(class_name)

    def interface_name(self, class_name: str) -> str:
        return f"I{class_name}"

    def dto_name(self, class_name: str) -> str:
        return f"{class_name}DTO"

    def model_file_name(self, stem: str) -> str:
        return f"{stem}.ts"

    def test_file_name(self, stem: str) -> str:
        return f"{stem}.spec.ts"

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
        if not guards:
            return "!json"
        return f"!(json && {' && '.join(guards)})"

    def render_dto(self, context: GenerationContext) -> str:
        partial = f"Partial<{self.interface_name(context.class_name)}>"
        declaration = f"export type {self.dto_name(context.class_name)} = "

        if not context.dto_names:
            return declaration + partial

        omitted = " | ".join(f"'{name}'" for name in context.dto_names)
        body = "\n".join(context.dto_lines)
        return f"{declaration}Omit<{partial}, {omitted}> & {{\n{body}\n}}"

    def add_imports(self, context: GenerationContext, resolver: ImportResolver):
        class_name = context.class_name

        context.add_test_import(
            named_import([class_name], f"./{self.file_stem(class_name)}")
        )

        for type_name in custom_type_names(context.properties):
            # Self references need no import
            if type_name == class_name:
                continue

            stem = dasherize(type_name)
            resolved = self.find_import(context, resolver, f"{stem}.ts")
            if resolved:
                context.add_import(
                    named_import(
                        [type_name, f"I{type_name}", f"{type_name}DTO"],
                        module_path(resolved),
                    )
                )

            resolved = self.find_import(context, resolver, f"{stem}.spec.ts")
            if resolved:
                context.add_test_import(
                    named_import([test_factory_name(type_name)], module_path(resolved))
                )

        if context.needs_presence_helper:
            resolved = self.find_import(context, resolver, self.presence_helper_file)
            if resolved:
                context.add_import(named_import(["hasValue"], module_path(resolved)))

        if context.needs_identifier_helper:
            context.add_test_import(named_import(["v4"], "uuid"))

        if context.test_helpers:
            resolved = self.find_import(context, resolver, self.test_helpers_file)
            if resolved:
                context.add_test_import(
                    named_import(context.test_helpers, module_path(resolved))
                )

    def taken_names(self, class_name: str, properties: List[Property]) -> Set[str]:
        taken = super().taken_names(class_name, properties)
        # Fixture factories imported into the spec file
        return taken | {test_factory_name(name) for name in taken}

    def validate_properties(self, class_name: str, properties: List[Property]) -> List[str]:
        warnings = super().validate_properties(class_name, properties)

        for prop in properties:
            if is_reserved_word(prop.name):
                warnings.append(
                    f"Property '{prop.name}' is a TypeScript reserved word and "
                    f"cannot be a constructor parameter"
                )

        return warnings


def create_typescript_generator(
    config: Optional[GeneratorConfig] = None,
    output_dir: Optional[Union[str, Path]] = None,
) -> TypeScriptGenerator:
    """
    Create TypeScript generator with configuration.

    Args:
        config: Generator configuration, TypeScript defaults when omitted
        output_dir: Directory the artifacts are written to

    Returns:
        Configured TypeScriptGenerator instance
    """
    if config is None:
        config = load_config("typescript")
    return TypeScriptGenerator(config, output_dir)
