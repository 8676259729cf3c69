"""
Per-invocation generation state and its output.

A GenerationContext is created fresh by every ``CodeGenerator.generate``
call and threaded through fragment building and assembly. Nothing here is
shared between runs.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional

from .naming import NameSanitizer
from .schema import Property


@dataclass(frozen=True)
class PropertyFragments:
    """All text a generator derives from one property."""

    name: str
    interface_line: str
    constructor_line: str
    constructor_arg: str
    test_value: str
    test_argument: str
    test_constant: str
    test_expectation: str
    dto_line: Optional[str] = None
    guard: Optional[str] = None
    extraction: Optional[str] = None
    needs_presence_helper: bool = False
    needs_identifier_helper: bool = False
    # Language specific helper names (stdlib modules, fixture helpers, ...)
    helpers: FrozenSet[str] = frozenset()
    test_helpers: FrozenSet[str] = frozenset()


def _append_unique(items: List[str], value: str) -> None:
    if value not in items:
        items.append(value)


@dataclass
class GenerationContext:
    """Accumulator for one generation run."""

    class_name: str
    specification: str
    properties: List[Property] = field(default_factory=list)
    entity_name: str = ""
    # Local variable names for this run, with its class and custom types reserved
    local_sanitizer: NameSanitizer = field(default_factory=NameSanitizer)

    interface_lines: List[str] = field(default_factory=list)
    dto_lines: List[str] = field(default_factory=list)
    dto_names: List[str] = field(default_factory=list)
    constructor_lines: List[str] = field(default_factory=list)
    constructor_args: List[str] = field(default_factory=list)
    guards: List[str] = field(default_factory=list)
    extractions: List[str] = field(default_factory=list)
    test_values: List[str] = field(default_factory=list)
    test_arguments: List[str] = field(default_factory=list)
    test_constants: List[str] = field(default_factory=list)
    test_expectations: List[str] = field(default_factory=list)

    imports: List[str] = field(default_factory=list)
    test_imports: List[str] = field(default_factory=list)
    helpers: List[str] = field(default_factory=list)
    test_helpers: List[str] = field(default_factory=list)

    needs_presence_helper: bool = False
    needs_identifier_helper: bool = False

    warnings: List[str] = field(default_factory=list)

    def add_fragments(self, fragments: PropertyFragments) -> None:
        """Fold one property's fragments in, keeping declaration order."""
        self.interface_lines.append(fragments.interface_line)
        self.constructor_lines.append(fragments.constructor_line)
        self.constructor_args.append(fragments.constructor_arg)
        self.test_values.append(fragments.test_value)
        self.test_arguments.append(fragments.test_argument)
        self.test_constants.append(fragments.test_constant)
        self.test_expectations.append(fragments.test_expectation)

        if fragments.dto_line:
            self.dto_lines.append(fragments.dto_line)
            self.dto_names.append(fragments.name)

        if fragments.guard:
            self.guards.append(fragments.guard)

        if fragments.extraction:
            self.extractions.append(fragments.extraction)

        for helper in sorted(fragments.helpers):
            _append_unique(self.helpers, helper)
        for helper in sorted(fragments.test_helpers):
            _append_unique(self.test_helpers, helper)

        self.needs_presence_helper = (
            self.needs_presence_helper or fragments.needs_presence_helper
        )
        self.needs_identifier_helper = (
            self.needs_identifier_helper or fragments.needs_identifier_helper
        )

    def add_import(self, line: str) -> None:
        _append_unique(self.imports, line)

    def add_test_import(self, line: str) -> None:
        _append_unique(self.test_imports, line)

    def warn(self, message: str) -> None:
        _append_unique(self.warnings, message)


@dataclass
class ArtifactBundle:
    """
    Assembled output of one generation run.

    Every text field is a named slot handed to the template renderer.
    """

    language: str
    class_name: str
    file_stem: str
    interface_name: str
    dto_name: str
    entity_name: str
    indent: str
    interface_text: str
    dto_text: str
    constructor_text: str
    guard: str
    extractions: str
    constructor_call: str
    imports: List[str]
    test_values: str
    test_arguments: str
    test_constants: str
    test_expectations: str
    test_imports: List[str]
    header: Optional[str] = None
    helpers: List[str] = field(default_factory=list)
    test_helpers: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def slots(self) -> Dict[str, Any]:
        """Template context for the renderer."""
        return {
            "language": self.language,
            "class_name": self.class_name,
            "file_stem": self.file_stem,
            "interface_name": self.interface_name,
            "dto_name": self.dto_name,
            "entity_name": self.entity_name,
            "indent": self.indent,
            "interface_text": self.interface_text,
            "dto_text": self.dto_text,
            "constructor_text": self.constructor_text,
            "guard": self.guard,
            "extractions": self.extractions,
            "constructor_call": self.constructor_call,
            "imports": "\n".join(self.imports),
            "test_values": self.test_values,
            "test_arguments": self.test_arguments,
            "test_constants": self.test_constants,
            "test_expectations": self.test_expectations,
            "test_imports": "\n".join(self.test_imports),
            "header": self.header,
            "helpers": self.helpers,
            "test_helpers": self.test_helpers,
        }
