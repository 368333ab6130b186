import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from didi.core.constants import FLAG_STRUCT, HEADER_PREFIX_STRUCT, MAGIC, VERSION  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast unit tests")
    config.addinivalue_line(
        "markers",
        "integration: tests that exercise several components or the CLI end to end",
    )
    config.addinivalue_line("markers", "slow: slow-running tests")


@pytest.fixture
def didi_path(tmp_path: Path) -> Path:
    """Path for a container that does not exist yet."""
    return tmp_path / "example.didi"


@pytest.fixture
def raw_container():
    """Build container bytes by hand, for corrupted-file tests."""

    def _build(
        search: bytes = b"xyz",
        flag: int = 1,
        payload: bytes = b"a3b2c4",
        magic: bytes = MAGIC,
        version: int = VERSION,
        declared_length: int | None = None,
    ) -> bytes:
        length = len(search) if declared_length is None else declared_length
        return (
            HEADER_PREFIX_STRUCT.pack(magic, version, length)
            + search
            + FLAG_STRUCT.pack(flag)
            + payload
        )

    return _build
