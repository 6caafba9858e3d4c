BUILTIN_SCALARS = frozenset({"ID", "String", "Int", "Float", "Boolean"})


def is_internal_type(type_name: str) -> bool:
    return type_name.startswith("_")


def is_builtin_scalar_type(type_name: str) -> bool:
    return type_name in BUILTIN_SCALARS
