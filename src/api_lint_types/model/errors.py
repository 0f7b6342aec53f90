"""Configuration defects raised while assembling a type registry."""


class TypeRegistryError(Exception):
    """Base class for registry configuration defects."""


class UndefinedTypeError(TypeRegistryError, KeyError):
    """A type name was looked up but never defined."""

    def __init__(self, name: str, dialect: str):
        self.name = name
        self.dialect = dialect
        super().__init__(f"Type '{name}' is not defined in the {dialect} registry")

    def __str__(self) -> str:
        return self.args[0]


class DuplicateTypeError(TypeRegistryError):
    """A name was defined twice with different descriptors."""


class ExtensionConflictError(TypeRegistryError):
    """Two extensions added the same key to a descriptor with different rules."""


class RegistryFrozenError(TypeRegistryError):
    """The registry was modified after it was frozen."""


class DanglingReferenceError(TypeRegistryError):
    """One or more rules reference type names missing from the registry."""

    def __init__(self, dialect: str, dangling: list[tuple[str, str, str]]):
        self.dialect = dialect
        self.dangling = dangling
        lines = [f"  {owner}.{key} -> {target}" for owner, key, target in dangling]
        super().__init__(
            f"{len(dangling)} dangling type reference(s) in the {dialect} registry:\n" + "\n".join(lines)
        )


class UnsupportedDialectError(TypeRegistryError):
    """The document root does not declare a supported dialect."""
