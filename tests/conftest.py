import sys
from pathlib import Path

import pytest


def _prepend_src_path() -> None:
    src_path = Path(__file__).resolve().parents[1] / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_prepend_src_path()

from godbolt.model import Compiler  # noqa: E402


@pytest.fixture
def gcc() -> Compiler:
    """Return a C++ compiler as listed by the service."""
    return Compiler(id="g132", name="x86-64 gcc 13.2", lang="c++", alias=("gcc",))
