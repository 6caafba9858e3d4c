import json
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Any

import rich_click as click
import yaml
from graphql import GraphQLSchema
from pydantic import ValidationError
from rich.traceback import install

from gqlscan import __version__, log
from gqlscan.config import ScanConfig, load_scan_config
from gqlscan.descriptors import derive_descriptors, descriptors_to_json
from gqlscan.emit import render_resolvers
from gqlscan.errors import GqlScanError
from gqlscan.scan import ScannableSchema, scan_query
from gqlscan.typegraph import TypeGraph, build_type_graph_from_schema
from gqlscan.typegraph.models import EnumType, ListOf, Nullable, ObjectType, Scalar, TypeNode
from gqlscan.utils.schema_loader import check_correct_schema, load_schema, resolve_graphql_files


class PathResolverOption(click.Option):
    def process_value(self, ctx: click.Context, value: Any) -> list[Path] | None:
        value = super().process_value(ctx, value)
        if not value:
            return None
        paths = set(value)
        return resolve_graphql_files(list(paths))


schema_option = click.option(
    "--schema",
    "-s",
    "schemas",
    type=click.Path(exists=True, path_type=Path),
    cls=PathResolverOption,
    required=True,
    multiple=True,
    help="The GraphQL schema file or directory containing schema files. Can be specified multiple times.",
)


output_option = click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    required=True,
    help="Output file",
)


optional_output_option = click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    required=False,
    help="Output file, printed to the console when omitted",
)


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with scalar mappings, zero values and the resolver suffix",
)


def assert_correct_schema(schema: GraphQLSchema) -> None:
    schema_errors = check_correct_schema(schema)
    if schema_errors:
        log.error("Schema validation failed:")
        for error in schema_errors:
            log.error(error)
        log.error(f"Found {len(schema_errors)} validation error(s). Please fix the schema first.")
        sys.exit(1)


def load_config_or_exit(config_path: Path | None) -> ScanConfig:
    try:
        return load_scan_config(config_path)
    except (OSError, yaml.YAMLError, TypeError, ValidationError) as e:
        log.error(f"Invalid scan config: {e}")
        sys.exit(1)


def load_scannable_or_exit(schemas: list[Path]) -> ScannableSchema:
    try:
        schema = load_schema(schemas)
    except OSError as e:
        log.error(f"File I/O error: {e}")
        sys.exit(1)
    except Exception as e:
        log.error(f"Invalid schema: {e}")
        sys.exit(1)

    assert_correct_schema(schema)

    try:
        graph = build_type_graph_from_schema(schema)
    except GqlScanError as e:
        log.error(f"Type graph build failed: {e}")
        sys.exit(1)

    return ScannableSchema(schema=schema, graph=graph)


def write_or_print(content: str, output: Path | None) -> None:
    if output:
        output.write_text(content, encoding="utf-8")
        log.success(f"Wrote {output}")
    else:
        click.echo(content)


def _kind_of(node: TypeNode) -> str:
    if isinstance(node, Nullable):
        return _kind_of(node.inner)
    if isinstance(node, ObjectType):
        return "interface" if node.is_interface else "object"
    if isinstance(node, EnumType):
        return "enum"
    if isinstance(node, Scalar):
        return "scalar"
    if isinstance(node, ListOf):
        return "list"
    return "unknown"


def type_graph_stats(graph: TypeGraph) -> dict[str, Any]:
    counts = Counter(_kind_of(node) for node in graph.roots)
    return {
        "roots": len(graph.roots),
        "atoms": len(graph.atoms),
        "fields": sum(len(object_type.fields) for object_type in graph.object_types()),
        "kinds": dict(sorted(counts.items())),
    }


@click.group(context_settings={"auto_envvar_prefix": "gqlscan"})
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.version_option(__version__)
def cli(log_level: str, log_file: Path | None) -> None:
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
        log.addHandler(file_handler)

    log.setLevel(log_level.upper())
    if log_level.upper() == "DEBUG":
        _ = install(show_locals=True)


@cli.command()
@schema_option
def types(schemas: list[Path]) -> None:
    """Build the type graph of a schema and show how many types of each kind it holds."""
    scannable = load_scannable_or_exit(schemas)

    log.rule("Type graph")
    log.print_dict(type_graph_stats(scannable.graph))


@cli.command()
@schema_option
@optional_output_option
@config_option
def descriptors(schemas: list[Path], output: Path | None, config_path: Path | None) -> None:
    """Derive the resolver descriptors of a schema as JSON."""
    config = load_config_or_exit(config_path)
    scannable = load_scannable_or_exit(schemas)

    write_or_print(descriptors_to_json(derive_descriptors(scannable.graph, config)), output)


@cli.command()
@schema_option
@output_option
@config_option
def generate(schemas: list[Path], output: Path, config_path: Path | None) -> None:
    """Render Python resolver classes for every object and interface type."""
    config = load_config_or_exit(config_path)
    scannable = load_scannable_or_exit(schemas)

    source = render_resolvers(derive_descriptors(scannable.graph, config), config)
    try:
        output.write_text(source, encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Failed to write output file: {e}") from e
    log.success(f"Generated resolvers to {output}")


@cli.command()
@schema_option
@click.option(
    "--query",
    "-q",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="GraphQL query file to scan",
)
@click.option(
    "--variables",
    "-v",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with variable values",
)
@click.option("--operation", type=str, help="Operation name when the query file holds several operations")
@click.option("--leaves-only", is_flag=True, default=False, help="Only output leaf fields")
@optional_output_option
@config_option
def scan(
    schemas: list[Path],
    query: Path,
    variables: Path | None,
    operation: str | None,
    leaves_only: bool,
    output: Path | None,
    config_path: Path | None,
) -> None:
    """Run a query in scan mode and output the path of every field it visits."""
    config = load_config_or_exit(config_path)
    scannable = load_scannable_or_exit(schemas)

    variable_values = None
    if variables:
        try:
            variable_values = json.loads(variables.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise click.ClickException(f"Invalid variables file: {e}") from e

    try:
        result = scan_query(
            scannable,
            query.read_text(encoding="utf-8"),
            variables=variable_values,
            operation_name=operation,
            zero_values=config.zero_values,
        )
    except GqlScanError as e:
        log.error(f"Scan failed: {e}")
        sys.exit(1)

    entries = [entry for entry in result.record.as_list() if entry["leaf"] or not leaves_only]
    write_or_print(json.dumps({"fields": entries, "errors": result.errors}, indent=2, default=str), output)

    if result.errors:
        log.warning(f"Scan finished with {len(result.errors)} field error(s)")
    else:
        log.success(f"Scanned {len(result.record)} fields")


if __name__ == "__main__":
    cli()
