import sys
from pathlib import Path

# Ensure the src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


import pytest

FIXTURES = PROJECT_ROOT / "tests" / "fixtures"


@pytest.fixture
def protocol_csv() -> Path:
    """Return path to a trimmed IANA protocol-numbers file."""
    return FIXTURES / "protocol-numbers.csv"


@pytest.fixture
def lookup_csv() -> Path:
    """Return path to the sample lookup table."""
    return FIXTURES / "lookup.csv"


@pytest.fixture
def flow_log() -> Path:
    """Return path to the 14 line version 2 sample flow log."""
    return FIXTURES / "flow-log.txt"


def _flow_line(dstport, protocol, srcport=49152) -> str:
    return (
        f"2 123456789012 eni-4d3c2b1a 192.168.1.100 203.0.113.101 "
        f"{srcport} {dstport} {protocol} 25 20000 1620140661 1620140721 ACCEPT OK"
    )


@pytest.fixture
def flow_line():
    """Return a helper building a version 2 flow log line for a port/protocol."""
    return _flow_line


@pytest.fixture
def write_file(tmp_path: Path):
    """Return a helper writing ``text`` to ``name`` under ``tmp_path``."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
