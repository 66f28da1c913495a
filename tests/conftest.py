from pathlib import Path
from textwrap import dedent
import pytest

from kvsplit import PatternSpec


@pytest.fixture
def eq_pattern() -> PatternSpec:
    return PatternSpec(field_separators=" ", value_separators="=")


@pytest.fixture
def rules_basic() -> Path:
    return Path(__file__).parent / "rules_basic.yaml"


@pytest.fixture
def write_rules(tmp_path):
    def _write(content: str) -> Path:
        file_path = tmp_path / "rules.yaml"
        file_path.write_text(dedent(content))
        return file_path

    return _write
