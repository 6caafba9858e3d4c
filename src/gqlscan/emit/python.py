import keyword

from jinja2 import Environment, PackageLoader, select_autoescape

from gqlscan import __version__, log
from gqlscan.config import ScanConfig
from gqlscan.descriptors.models import FieldPlan, ResolverDescriptor


def python_identifier(name: str) -> str:
    """Make a GraphQL name usable as a Python identifier (``from`` -> ``from_``)."""
    if keyword.iskeyword(name):
        return f"{name}_"
    return name


def pascal_case(name: str) -> str:
    return name[:1].upper() + name[1:]


def arguments_literal(field: FieldPlan) -> str:
    """Render the dict literal that maps GraphQL argument names onto the args dataclass."""
    items = ", ".join(f"{argument.name!r}: args.{python_identifier(argument.name)}" for argument in field.arguments)
    return "{" + items + "}"


def target_literal(field: FieldPlan, suffix: str) -> str:
    if field.target is None:
        return "None"
    return repr(f"{field.target}{suffix}")


class PythonResolverEmitter:
    """
    Renders resolver descriptors into the source of a Python module.

    Each descriptor becomes one resolver class whose accessors delegate to a
    ``Resolver``; fields with arguments get a keyword-only argument dataclass.
    Compiling or importing the result is left to the caller.
    """

    def __init__(self, config: ScanConfig | None = None) -> None:
        self.config = config or ScanConfig()

        self.env = Environment(
            loader=PackageLoader("gqlscan.emit", "templates"),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["identifier"] = python_identifier
        self.env.filters["pascal"] = pascal_case
        self.env.filters["arguments_literal"] = arguments_literal
        self.env.filters["target_literal"] = target_literal
        self.env.filters["python_literal"] = repr

    def render(self, descriptors: list[ResolverDescriptor]) -> str:
        """
        Render the module source for the given descriptors.

        Args:
            descriptors: Output of ``derive_descriptors``

        Returns:
            str: Python source code
        """
        log.info(f"Rendering {len(descriptors)} resolvers")
        template = self.env.get_template("resolvers.py.j2")
        return template.render(
            resolvers=descriptors,
            suffix=self.config.resolver_suffix,
            zero_values=self.config.zero_values,
            version=__version__,
        )


def render_resolvers(descriptors: list[ResolverDescriptor], config: ScanConfig | None = None) -> str:
    return PythonResolverEmitter(config).render(descriptors)
