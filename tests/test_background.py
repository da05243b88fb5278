import numpy as np
import pytest

from starfield.config import BACKGROUND_ALPHA
from starfield.geometry.background import generate_background_field


@pytest.fixture
def field():
    return generate_background_field(
        count=500, radius=2000.0, jitter=20.0, rng=np.random.default_rng(3)
    )


def test_count_and_shapes(field):
    assert field.count == 500
    assert field.positions.shape == (500, 3)
    assert field.colors.shape == (500, 4)


def test_points_sit_on_the_shell(field):
    radii = np.linalg.norm(field.positions, axis=1)
    assert radii.min() >= 2000.0 - 20.0 - 1e-3
    assert radii.max() <= 2000.0 + 20.0 + 1e-3


def test_points_cover_the_sphere(field):
    directions = field.positions / np.linalg.norm(field.positions, axis=1, keepdims=True)
    # Every octant gets some points
    octants = {tuple(np.sign(d)) for d in directions}
    assert len(octants) == 8


def test_colors_are_pale_blue_white(field):
    rgb = field.colors[:, :3]
    assert rgb.min() >= 0.8
    assert rgb.max() <= 1.0
    assert np.all(rgb[:, 2] >= rgb[:, 0] - 0.05)
    assert rgb[:, 2].mean() > rgb[:, 0].mean()
    assert np.allclose(field.colors[:, 3], BACKGROUND_ALPHA)


def test_uniform_size(field):
    assert field.size == 1.0


def test_seeded_generation_is_repeatable():
    a = generate_background_field(count=50, rng=np.random.default_rng(11))
    b = generate_background_field(count=50, rng=np.random.default_rng(11))
    assert np.array_equal(a.positions, b.positions)
    assert np.array_equal(a.colors, b.colors)


def test_node_is_not_interactive(field):
    node = field.create_node()
    assert node.interactive is False
    assert node.name == 'background_field'
