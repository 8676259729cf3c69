"""
Exception hierarchy for DTO code generation.

Specification errors are fatal and surface to the caller of the generator.
ImportNotFound is the only non-fatal error: the generator catches it and
omits the import.
"""


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class SpecificationError(GeneratorError):
    """Raised when the class name or property specification is unusable."""

    pass


class MissingClassName(SpecificationError):
    """No class name was supplied."""

    def __init__(self):
        super().__init__("Must provide class name")


class MissingSpecification(SpecificationError):
    """No property specification was supplied."""

    def __init__(self):
        super().__init__("Must provide property names")


class EmptySpecification(SpecificationError):
    """The specification contained only separators."""

    def __init__(self, spec: str):
        self.spec = spec
        super().__init__(f"Property specification {spec!r} contains no properties")


class MalformedTypeSuffix(SpecificationError):
    """A type code carries suffixes in an unsupported order or combination."""

    def __init__(self, token: str, raw_type: str):
        self.token = token
        self.raw_type = raw_type
        super().__init__(
            f"Malformed type {raw_type!r} in {token!r}: "
            f"use 'code', 'code?', 'code[]' or 'code[]?'"
        )


class InvalidPropertyName(SpecificationError):
    """A property name is not a valid identifier."""

    def __init__(self, token: str, name: str):
        self.token = token
        self.name = name
        super().__init__(f"Invalid property name {name!r} in {token!r}")


class InvalidTypeCode(SpecificationError):
    """A type code is not an identifier once its suffixes are removed."""

    def __init__(self, token: str, code: str):
        self.token = token
        self.code = code
        super().__init__(f"Invalid type code {code!r} in {token!r}")


class DuplicatePropertyName(SpecificationError):
    """The same property name appears more than once."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Property {name!r} is declared more than once")


class ImportNotFound(GeneratorError):
    """The import resolver could not locate a file. Never fatal."""

    def __init__(self, file_name: str, start_dir=None):
        self.file_name = file_name
        self.start_dir = start_dir
        super().__init__(f"Unable to find {file_name}")
