from pathlib import Path

import pytest
from pydantic import ValidationError

from gqlscan.config import ScanConfig, load_scan_config
from tests.conftest import TestSchemaData


def test_defaults() -> None:
    config = load_scan_config(None)
    assert config == ScanConfig()
    assert config.resolver_suffix == "Resolver"
    assert config.scalars == {}
    assert config.zero_values == {}


def test_load_from_yaml() -> None:
    config = load_scan_config(TestSchemaData.SCAN_CONFIG)

    assert config.scalars == {"DateTime": "str"}
    assert config.zero_values == {"DateTime": "1970-01-01T00:00:00Z"}
    assert config.resolver_suffix == "Handle"


def test_camel_case_keys(tmp_path: Path) -> None:
    path = tmp_path / "scan.yaml"
    path.write_text("zeroValues:\n  JSON: '{}'\nresolverSuffix: Node\n")

    config = load_scan_config(path)

    assert config.zero_values == {"JSON": "{}"}
    assert config.resolver_suffix == "Node"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_scan_config(path) == ScanConfig()


def test_non_mapping_root(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- scalars\n")
    with pytest.raises(TypeError, match="mapping"):
        load_scan_config(path)


@pytest.mark.parametrize(
    "content",
    [
        "unknown: 1\n",
        "resolver_suffix: 'with space'\n",
        "scalars: [1, 2]\n",
    ],
)
def test_invalid_config(tmp_path: Path, content: str) -> None:
    path = tmp_path / "invalid.yaml"
    path.write_text(content)
    with pytest.raises(ValidationError):
        load_scan_config(path)
