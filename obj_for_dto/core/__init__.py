"""
Core DTO generation components.

Language independent pieces shared by every target: specification parsing,
type resolution, decode planning, import resolution, configuration and the
generator base class.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .context import ArtifactBundle, GenerationContext, PropertyFragments
from .decoder import DecodePlan, ElementCheck, ExtractionKind, GuardKind, plan_decode
from .errors import (
    DuplicatePropertyName,
    EmptySpecification,
    GeneratorError,
    ImportNotFound,
    InvalidPropertyName,
    InvalidTypeCode,
    MalformedTypeSuffix,
    MissingClassName,
    MissingSpecification,
    SpecificationError,
)
from .generator import CodeGenerator, GenerationResult, generate_code
from .imports import ImportResolver, ResolvedFile
from .parser import PropertyToken, parse_specification, parse_token
from .schema import (
    CustomType,
    PrimitiveKind,
    PrimitiveType,
    Property,
    build_properties,
    resolve_type,
)
from .templates import TemplateEngine, TemplateError

__all__ = [
    # Configuration
    "ConfigError",
    "ConfigManager",
    "GeneratorConfig",
    "load_config",
    # Generation state
    "ArtifactBundle",
    "GenerationContext",
    "PropertyFragments",
    # Decoding
    "DecodePlan",
    "ElementCheck",
    "ExtractionKind",
    "GuardKind",
    "plan_decode",
    # Errors
    "DuplicatePropertyName",
    "EmptySpecification",
    "GeneratorError",
    "ImportNotFound",
    "InvalidPropertyName",
    "InvalidTypeCode",
    "MalformedTypeSuffix",
    "MissingClassName",
    "MissingSpecification",
    "SpecificationError",
    # Generator
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    # Imports
    "ImportResolver",
    "ResolvedFile",
    # Parsing and types
    "PropertyToken",
    "parse_specification",
    "parse_token",
    "CustomType",
    "PrimitiveKind",
    "PrimitiveType",
    "Property",
    "build_properties",
    "resolve_type",
    # Templates
    "TemplateEngine",
    "TemplateError",
]
