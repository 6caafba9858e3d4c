class GqlScanError(Exception):
    """Base class for all gqlscan errors."""


class UnsupportedTypeKindError(GqlScanError, ValueError):
    """Raised when the type graph builder meets a kind it cannot represent (e.g. UNION)."""

    def __init__(self, kind: str, type_name: str | None = None) -> None:
        self.kind = kind
        self.type_name = type_name
        target = f" '{type_name}'" if type_name else ""
        super().__init__(f"Unsupported type kind {kind}{target}")


class UnknownObjectFieldError(GqlScanError, LookupError):
    """Raised when an object-valued field refers to a type missing from the registry."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"no such object {field}")


class UnimplementedCombinationError(GqlScanError, NotImplementedError):
    """Raised when a field request cannot be classified as leaf, object or list."""

    def __init__(self, entity: str, field: str, reason: str) -> None:
        self.entity = entity
        self.field = field
        super().__init__(f"unimplemented resolution for {entity}.{field}: {reason}")


class ScanQueryError(GqlScanError):
    """Raised when a query document cannot be executed in scan mode at all."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("GraphQL query errors: " + "; ".join(errors))
