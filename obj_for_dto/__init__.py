"""
obj-for-dto

Generates DTO interfaces, validating JSON factories and test fixtures from
a compact property specification such as ``name,age:n,active:b?,tags:s[]``.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .core.config import GeneratorConfig, load_config
from .core.errors import GeneratorError, ImportNotFound, SpecificationError
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_languages,
)

# Version info
__version__ = "0.1.0"


def generate_dto(
    class_name: str,
    specification: str,
    language: str = "typescript",
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    output_dir: Optional[Union[str, Path]] = None,
) -> GenerationResult:
    """
    Generate the artifacts for one class.

    Args:
        class_name: Name of the class to generate
        specification: Property specification string
        language: Target language name or alias
        config: Generator configuration dict, object or file path
        output_dir: Directory the files would be written to, used for imports

    Returns:
        GenerationResult with rendered files
    """
    generator = get_generator(language, config, output_dir)
    return generate_code(generator, class_name, specification)


def quick_generate(class_name: str, specification: str, language: str = "typescript", **options) -> str:
    """
    Quick code generation returning only the model source.

    Args:
        class_name: Name of the class to generate
        specification: Property specification string
        language: Target language
        **options: Generator options

    Returns:
        Generated model source
    """
    result = generate_dto(class_name, specification, language, options or None)

    if result.success:
        return result.code
    else:
        raise RuntimeError(f"Code generation failed: {result.error_message}")


# Export main interfaces
__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "GeneratorRegistry",
    "ImportNotFound",
    "RegistryError",
    "SpecificationError",
    "generate_code",
    "generate_dto",
    "get_generator",
    "get_registry",
    "list_supported_languages",
    "load_config",
    "quick_generate",
]
