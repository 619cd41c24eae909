import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from bsp_dungeon.canvas import GridCanvas  # noqa: E402
from bsp_dungeon.rng import RandomSource  # noqa: E402


class ScriptedRandom:
    """Random source replaying fixed draws so exact geometry can be asserted."""

    def __init__(self, floats=(), ints=()):
        self.floats = list(floats)
        self.ints = list(ints)

    def random(self):
        if not self.floats:
            raise AssertionError("ScriptedRandom ran out of float draws")
        return self.floats.pop(0)

    def randrange(self, start, stop):
        if stop <= start:
            return start
        if not self.ints:
            raise AssertionError("ScriptedRandom ran out of int draws")
        value = self.ints.pop(0)
        assert start <= value < stop, f"scripted int {value} outside [{start}, {stop})"
        return value

    def uniform(self, a, b):
        return a + (b - a) * self.random()


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def rng():
    return RandomSource(seed=1234)


@pytest.fixture
def canvas():
    return GridCanvas(64)


@pytest.fixture(autouse=True)
def _clear_bsp_env(monkeypatch):
    for name in ("DUNGEON_SIZE", "SPLIT_DEPTH", "CORRIDOR_THICKNESS", "MIN_ROOM_INSET", "SEED"):
        monkeypatch.delenv(f"BSP_{name}", raising=False)
