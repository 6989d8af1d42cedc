import numpy as np
import pytest

from springwind.joints import InMemoryJointRuntime, SpringJoint


class ScriptedRandom:
    """Stand-in random source: hands out queued values, then range midpoints."""

    def __init__(self, values=()):
        self.values = list(values)
        self.calls = []

    def uniform(self, low, high):
        self.calls.append((low, high))
        if self.values:
            return self.values.pop(0)
        return 0.5 * (low + high)


def gust_script(interval=100.0, jitter=(0.0, 0.0, 0.0), rise=0.5, sit=1.0, strength=0.1):
    """Values for one spawn, in the order the generator draws them."""
    return [interval, *jitter, rise, sit, strength]


@pytest.fixture
def joints():
    return [SpringJoint(f"j{i}", np.array([0.0, 1.0, 0.0]), 0.0) for i in range(3)]


@pytest.fixture
def runtime():
    return InMemoryJointRuntime()
