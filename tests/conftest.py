from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def read_fixture(kind_name: str) -> bytes:
    return (FIXTURES_DIR / f"{kind_name}.hylo").read_bytes()


@pytest.fixture
def fixture_text():
    def _read(kind_name: str) -> str:
        return read_fixture(kind_name).decode("utf-8")
    return _read


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    d = tmp_path / "Integers"
    d.mkdir()
    return d
