import json
import socket

import numpy as np
import pytest

from starfield.catalog.loader import parse_catalog
from starfield.geometry.background import generate_background_field
from starfield.state.events import StarfieldEvents
from starfield.visualization.scene import SceneManager

SOL = {
    "name": "Sol",
    "rightAscension": 0,
    "declination": 0,
    "distance": 0,
    "magnitude": 4.83,
    "color": "#ffff00",
    "type": "G2V",
    "temperature": 5778,
}


def star_entry(**overrides):
    entry = dict(SOL)
    entry.update(overrides)
    return entry


def catalog_json(*entries) -> str:
    return json.dumps({"stars": list(entries)})


def make_records(*entries):
    return parse_catalog(catalog_json(*entries))


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def events():
    return StarfieldEvents()


@pytest.fixture
def small_background():
    return lambda: generate_background_field(count=64, rng=np.random.default_rng(7))


@pytest.fixture
def scene_manager(events, small_background):
    return SceneManager(events, background_factory=small_background)


@pytest.fixture
def sample_records():
    # Sol at the origin and a bright star on the +x axis at x = 100
    return make_records(
        SOL,
        star_entry(name="Beacon", distance=50, magnitude=-5.0, color="#aabfff"),
    )


@pytest.fixture
def silent_server():
    """Port of a listening socket that completes connections but never replies."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(8)
    try:
        yield sock.getsockname()[1]
    finally:
        sock.close()
