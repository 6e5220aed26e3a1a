"""
Pytest configuration and shared fixtures.
"""
import sys
from pathlib import Path
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from rtoken.rtokenize import Tokenizer  # noqa: E402


@pytest.fixture(scope="session")
def en_tokenizer() -> Tokenizer:
    """English tokenizer with XML escaping."""
    return Tokenizer(lang_code='en')


@pytest.fixture(scope="session")
def en_raw_tokenizer() -> Tokenizer:
    """English tokenizer without XML escaping."""
    return Tokenizer(lang_code='en', no_escape=True)


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    """Small English input file."""
    path = tmp_path / "input.txt"
    path.write_text("Dr. Smith went to Washington D.C. yesterday.\n"
                    "It costs $5,300 today.\n"
                    "\n"
                    "Wait... what?\n", encoding="utf-8")
    return path
