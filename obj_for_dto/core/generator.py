"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement and runs
the shared pipeline: parse the specification, resolve property types,
plan decoding, collect per-property fragments, resolve imports and
assemble the artifact bundle handed to the template renderer.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from ..logging_config import get_logger
from .config import GeneratorConfig
from .context import ArtifactBundle, GenerationContext, PropertyFragments
from .decoder import DecodePlan, plan_decode
from .errors import MissingClassName, MissingSpecification
from .imports import ImportResolver, ResolvedFile
from .naming import NameSanitizer, NamingCase, classify
from .parser import parse_specification
from .schema import Property, build_properties, custom_type_names
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    # File searched for the presence helper when the config leaves it unset
    default_presence_helper_file: Optional[str] = None
    default_test_helpers_file: Optional[str] = None

    model_template = "model.j2"
    test_template = "test.j2"

    constructor_separator = ",\n"
    argument_separator = ", "
    test_value_separator = ",\n"
    max_blank_lines = 1

    # Case of the test instance variable
    entity_case = NamingCase.CAMEL_CASE

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        output_dir: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize generator.

        Args:
            config: Generator configuration
            output_dir: Directory the artifacts will be written to. Imports
                are resolved relative to it. Defaults to the working directory.
        """
        self.config = config or GeneratorConfig()
        self.output_dir = Path(output_dir) if output_dir else Path.cwd()
        # Language generators replace this with their reserved words
        self.local_sanitizer = NameSanitizer()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        if template_dir:
            self._template_engine = create_template_engine(template_dir)
        else:
            # Fallback to in-memory templates
            self._template_engine = create_template_engine()

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.ts')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Returns:
            Path to template directory or None for in-memory templates
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @property
    def presence_helper_file(self) -> Optional[str]:
        return self.config.presence_helper_file or self.default_presence_helper_file

    @property
    def test_helpers_file(self) -> Optional[str]:
        return self.config.test_helpers_file or self.default_test_helpers_file

    # Naming hooks

    @abstractmethod
    def file_stem(self, class_name: str) -> str:
        """Base name shared by the model and test files of a class."""
        pass

    @abstractmethod
    def interface_name(self, class_name: str) -> str:
        pass

    @abstractmethod
    def dto_name(self, class_name: str) -> str:
        pass

    @abstractmethod
    def model_file_name(self, stem: str) -> str:
        pass

    @abstractmethod
    def test_file_name(self, stem: str) -> str:
        pass

    # Rendering hooks

    @abstractmethod
    def build_fragments(
        self, prop: Property, plan: DecodePlan, context: GenerationContext
    ) -> PropertyFragments:
        """
        Render every text fragment of one property.

        Args:
            prop: Resolved property
            plan: Language neutral decoding decisions for the property
            context: State of the current run (class and entity names)

        Returns:
            PropertyFragments for the property
        """
        pass

    @abstractmethod
    def render_guard(self, guards: List[str]) -> str:
        """Condition under which the factory rejects its input."""
        pass

    @abstractmethod
    def render_dto(self, context: GenerationContext) -> str:
        """Declaration body of the outbound partial DTO type."""
        pass

    @abstractmethod
    def add_imports(self, context: GenerationContext, resolver: ImportResolver):
        """
        Add import lines for custom types and helpers to the context.

        Lookups that fail must be recorded with ``context.warn`` and the
        import omitted.
        """
        pass

    def header_text(self, context: GenerationContext) -> Optional[str]:
        """Comment placed at the top of every generated file."""
        if not self.config.add_comments:
            return None
        return (
            f"Generated by obj-for-dto: {context.class_name} "
            f"'{context.specification.strip()}'"
        )

    # Pipeline

    def generate(self, class_name: str, specification: str) -> ArtifactBundle:
        """
        Generate the artifact bundle for one class.

        Args:
            class_name: Name of the class, any case (``employee-record`` works)
            specification: Property specification string

        Returns:
            Assembled ArtifactBundle

        Raises:
            SpecificationError: class name or specification is unusable
        """
        if not class_name or not class_name.strip():
            raise MissingClassName()
        if not specification:
            raise MissingSpecification()

        class_name = classify(class_name.strip())
        if not class_name:
            raise MissingClassName()

        logger.debug("Generating %s %s from %r", self.language_name, class_name, specification)

        tokens = parse_specification(specification)
        properties = build_properties(
            tokens,
            aliases=self.config.type_aliases,
            sort=self.config.sort_properties,
        )

        context = GenerationContext(
            class_name=class_name,
            specification=specification,
            properties=properties,
            local_sanitizer=self.local_sanitizer.extended(
                self.taken_names(class_name, properties)
            ),
        )
        context.entity_name = self.choose_entity_name(context)

        for warning in self.validate_properties(class_name, properties):
            context.warn(warning)

        for prop in properties:
            plan = plan_decode(prop)
            context.add_fragments(self.build_fragments(prop, plan, context))

        self.add_imports(context, self.import_resolver(class_name))

        bundle = self.assemble(context)
        logger.info(
            "Generated %s with %d properties (%d warnings)",
            class_name,
            len(properties),
            len(bundle.warnings),
        )
        return bundle

    def validate_properties(self, class_name: str, properties: List[Property]) -> List[str]:
        """
        Check properties for issues that do not stop generation.

        Language generators extend this with their own checks.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if all(prop.is_optional for prop in properties):
            warnings.append(
                f"{class_name} has no required properties; any object will decode"
            )

        for prop in properties:
            if prop.is_custom and not prop.type_name[0].isupper():
                warnings.append(
                    f"Custom type '{prop.type_name}' of '{prop.name}' is not a class "
                    f"name; map it with a type alias"
                )
            if (
                prop.type_name == class_name
                and prop.is_custom
                and not (prop.is_optional or prop.is_array)
            ):
                warnings.append(
                    f"Property '{prop.name}' requires another {class_name}; "
                    f"no finite JSON value will decode"
                )

        return warnings

    def taken_names(self, class_name: str, properties: List[Property]) -> Set[str]:
        """
        Module level names that generated locals must not shadow.

        A local named after the class or one of its custom types would hide
        the class it is decoded with.
        """
        return {class_name, *custom_type_names(properties)}

    def choose_entity_name(self, context: GenerationContext) -> str:
        """Test instance variable name that no property local shadows."""
        sanitizer = context.local_sanitizer
        entity = sanitizer.sanitize_name(context.class_name, self.entity_case)
        if entity in {sanitizer.sanitize_name(prop.name) for prop in context.properties}:
            entity = sanitizer.sanitize_name(
                f"{context.class_name}Instance", self.entity_case
            )
        return entity

    def target_directory(self, class_name: str) -> Path:
        """Directory the model file of ``class_name`` is written to."""
        if self.config.flat:
            return self.output_dir
        return self.output_dir / self.file_stem(class_name)

    def import_resolver(self, class_name: str) -> ImportResolver:
        return ImportResolver(
            start_dir=self.target_directory(class_name),
            max_depth=self.config.search_depth,
        )

    def find_import(
        self,
        context: GenerationContext,
        resolver: ImportResolver,
        file_name: str,
        subdirectory: Optional[str] = None,
    ) -> Optional[ResolvedFile]:
        """Locate ``file_name``, recording a warning when it is missing."""
        resolved = resolver.try_find(file_name, subdirectory)
        if resolved is None:
            context.warn(f"Unable to find {file_name}; import omitted")
        return resolved

    def assemble(self, context: GenerationContext) -> ArtifactBundle:
        """Fold the collected fragments into the final artifact bundle."""
        class_name = context.class_name

        return ArtifactBundle(
            language=self.language_name,
            class_name=class_name,
            file_stem=self.file_stem(class_name),
            interface_name=self.interface_name(class_name),
            dto_name=self.dto_name(class_name),
            entity_name=context.entity_name,
            indent=self.config.indent,
            interface_text="\n".join(context.interface_lines),
            dto_text=self.render_dto(context),
            constructor_text=self.constructor_separator.join(context.constructor_lines),
            guard=self.render_guard(context.guards),
            extractions="\n\n".join(context.extractions),
            constructor_call=self.argument_separator.join(context.constructor_args),
            imports=list(context.imports),
            test_values=self.test_value_separator.join(context.test_values),
            test_arguments=self.argument_separator.join(context.test_arguments),
            test_constants="\n".join(context.test_constants),
            test_expectations="\n".join(context.test_expectations),
            test_imports=list(context.test_imports),
            header=self.header_text(context),
            helpers=list(context.helpers),
            test_helpers=list(context.test_helpers),
            warnings=list(context.warnings),
            metadata={
                "language": self.language_name,
                "class_name": class_name,
                "file_stem": self.file_stem(class_name),
                "property_count": len(context.properties),
                "required_count": sum(
                    1 for prop in context.properties if not prop.is_optional
                ),
                "custom_types": custom_type_names(context.properties),
                "needs_presence_helper": context.needs_presence_helper,
                "needs_identifier_helper": context.needs_identifier_helper,
            },
        )

    def render(self, bundle: ArtifactBundle) -> Dict[str, str]:
        """
        Render the bundle into file contents.

        Returns:
            Mapping of file path, relative to the output directory, to text
        """
        prefix = "" if self.config.flat else f"{bundle.file_stem}/"
        slots = bundle.slots()

        files = {
            prefix + self.model_file_name(bundle.file_stem): self.format_code(
                self.render_template(self.model_template, slots)
            )
        }

        if self.config.generate_tests:
            files[prefix + self.test_file_name(bundle.file_stem)] = self.format_code(
                self.render_template(self.test_template, slots)
            )

        return files

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Strips trailing whitespace, collapses runs of blank lines down to the
        language's limit and ends the text with a single newline.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if formatted_lines and blank_count <= self.max_blank_lines:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        while formatted_lines and not formatted_lines[-1]:
            formatted_lines.pop()

        return "\n".join(formatted_lines) + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
        files: Dict[str, str] = None,
        bundle: Optional[ArtifactBundle] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated model source
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
            files: Every rendered file keyed by relative path
            bundle: The assembled artifact bundle
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.files = files or {}
        self.bundle = bundle
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, class_name: str, specification: str
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        class_name: Name of the class to generate
        specification: Property specification string

    Returns:
        GenerationResult with files, warnings, and metadata
    """
    try:
        bundle = generator.generate(class_name, specification)
        files = generator.render(bundle)

        metadata = dict(bundle.metadata)
        metadata["file_extension"] = generator.file_extension
        metadata["files"] = list(files)

        model_path = next(iter(files))
        return GenerationResult(
            files[model_path],
            warnings=bundle.warnings,
            metadata=metadata,
            files=files,
            bundle=bundle,
        )

    except Exception as e:
        logger.debug("Generation failed", exc_info=True)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
