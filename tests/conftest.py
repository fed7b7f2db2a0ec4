from typing import Callable, List

import pytest


class ScriptedRNG:
    """Return pre-recorded uniform draws in order."""

    def __init__(self, values: List[float]) -> None:
        self._values = list(values)

    def random(self) -> float:
        return self._values.pop(0)


@pytest.fixture
def scripted_rng() -> Callable[[List[float]], ScriptedRNG]:
    return ScriptedRNG
