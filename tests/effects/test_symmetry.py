from __future__ import annotations

import numpy as np
import pytest

from kaleido.effects.symmetry import SymmetricRenderer, kaleidoscope, rotation_step_degrees


@pytest.mark.smoke
@pytest.mark.parametrize("n", [2, 3, 12, 32])
def test_emits_rotation_and_mirror_per_copy(n: int) -> None:
    out = kaleidoscope(((1.0, 2.0), (3.0, 4.0)), n)
    assert out.shape == (2 * n, 2, 2)
    assert out.dtype == np.float64


def test_first_copy_is_the_input_and_mirror_negates_y() -> None:
    out = SymmetricRenderer().emit(((0.0, 5.0), (10.0, 5.0)), 4)
    np.testing.assert_allclose(out[0], [[0.0, 5.0], [10.0, 5.0]], atol=1e-12)
    np.testing.assert_allclose(out[1], [[0.0, -5.0], [10.0, -5.0]], atol=1e-12)


def test_quarter_turn_rotation() -> None:
    out = kaleidoscope(((0.0, 5.0), (10.0, 5.0)), 4)
    # 90 度: (x, y) -> (-y, x)
    np.testing.assert_allclose(out[2], [[-5.0, 0.0], [-5.0, 10.0]], atol=1e-9)
    np.testing.assert_allclose(out[3], [[-5.0, -0.0], [-5.0, -10.0]], atol=1e-9)


def test_copies_are_evenly_spaced_around_full_turn() -> None:
    n = 6
    out = kaleidoscope(((10.0, 0.0), (20.0, 0.0)), n)
    angles = np.degrees(np.arctan2(out[0::2, 1, 1], out[0::2, 1, 0])) % 360.0
    np.testing.assert_allclose(angles, np.arange(n) * rotation_step_degrees(n), atol=1e-9)
    # 回転は長さを保つ
    lengths = np.linalg.norm(out[:, 1] - out[:, 0], axis=-1)
    np.testing.assert_allclose(lengths, 10.0)


def test_rejects_order_below_two() -> None:
    with pytest.raises(ValueError):
        kaleidoscope(((0.0, 0.0), (1.0, 1.0)), 1)


def test_rejects_bad_segment_shape() -> None:
    with pytest.raises(ValueError):
        kaleidoscope(np.zeros((3, 2)), 4)


@pytest.mark.parametrize("n", [2, 5, 7, 12, 32])
def test_every_mirror_row_negates_y_of_its_rotated_row(n: int) -> None:
    out = kaleidoscope(((3.0, 4.0), (-2.5, 7.0)), n)
    rotated = out[0::2]
    mirrored = out[1::2]
    np.testing.assert_array_equal(mirrored[..., 0], rotated[..., 0])
    np.testing.assert_array_equal(mirrored[..., 1], -rotated[..., 1])


@pytest.mark.parametrize("n", [2, 5, 7, 32])
def test_applying_the_rotation_step_n_times_returns_the_segment(n: int) -> None:
    seg = np.array([[3.0, 4.0], [-2.5, 7.0]])
    theta = np.deg2rad(rotation_step_degrees(n))
    rot = np.array([[np.cos(theta), -np.sin(theta)], [np.sin(theta), np.cos(theta)]])
    cur = seg
    for _ in range(n):
        cur = cur @ rot.T
    np.testing.assert_allclose(cur, seg, atol=1e-9)
    # 2 番目のコピーは 1 ステップ分の回転と一致する
    np.testing.assert_allclose(kaleidoscope(seg, n)[2], seg @ rot.T, atol=1e-9)
