import numpy as np
import pytest

from camperception.undistortion import (UndistortionHandler,
                                        init_undistort_rectify_map)

IDENTITY_K = np.eye(3, dtype=np.float32)
NO_DISTORTION = [0.0] * 8


def _camera(fx=100.0, fy=100.0, cx=8.0, cy=6.0):
    return np.array([[fx, 0, cx], [0, fy, cy], [0, 0, 1]], dtype=np.float32)


def test_maps_have_image_shape_and_float32():
    map_x, map_y = init_undistort_rectify_map(
        _camera(), NO_DISTORTION, np.eye(3), _camera(), 16, 12)
    assert map_x.shape == (12, 16)
    assert map_y.shape == (12, 16)
    assert map_x.dtype == np.float32 and map_y.dtype == np.float32


def test_zero_distortion_gives_identity_grid():
    map_x, map_y = init_undistort_rectify_map(
        _camera(), NO_DISTORTION, np.eye(3), _camera(), 16, 12)
    us, vs = np.meshgrid(np.arange(16), np.arange(12))
    np.testing.assert_allclose(map_x, us, atol=1e-4)
    np.testing.assert_allclose(map_y, vs, atol=1e-4)


def test_principal_point_is_fixed_under_radial_distortion():
    dist = [0.5, 0.1, 0, 0, 0.01, 0, 0, 0]
    map_x, map_y = init_undistort_rectify_map(
        _camera(), dist, np.eye(3), _camera(), 16, 12)
    assert map_x[6, 8] == pytest.approx(8.0, abs=1e-5)
    assert map_y[6, 8] == pytest.approx(6.0, abs=1e-5)


def test_positive_radial_distortion_pushes_outward():
    dist = [0.5, 0, 0, 0, 0, 0, 0, 0]
    cam = _camera(fx=10.0, fy=10.0)
    map_x, map_y = init_undistort_rectify_map(cam, dist, np.eye(3), cam, 16, 12)
    us, vs = np.meshgrid(np.arange(16), np.arange(12))
    assert np.all(np.abs(map_x - 8) >= np.abs(us - 8) - 1e-4)
    assert np.all(np.abs(map_y - 6) >= np.abs(vs - 6) - 1e-4)
    assert np.abs(map_x[0, 0] - 8) > 8


def test_wrong_number_of_coefficients_rejected():
    with pytest.raises(ValueError):
        init_undistort_rectify_map(_camera(), [0.0] * 5, np.eye(3), _camera(),
                                   16, 12)


def test_non_positive_size_rejected():
    with pytest.raises(ValueError):
        init_undistort_rectify_map(_camera(), NO_DISTORTION, np.eye(3),
                                   _camera(), 0, 12)


def test_handle_without_distortion_returns_same_image():
    rng = np.random.default_rng(0)
    image = rng.integers(0, 256, size=(5, 7, 3), dtype=np.uint8)
    handler = UndistortionHandler(IDENTITY_K, NO_DISTORTION, 7, 5)
    out = handler.handle(image)
    np.testing.assert_array_equal(out, image)


def test_handle_writes_into_destination():
    image = np.arange(20, dtype=np.uint8).reshape(4, 5)
    dst = np.zeros_like(image)
    handler = UndistortionHandler(IDENTITY_K, NO_DISTORTION, 5, 4)
    out = handler.handle(image, dst)
    assert out is dst
    np.testing.assert_array_equal(dst, image)


def test_release_makes_handle_fail():
    handler = UndistortionHandler(IDENTITY_K, NO_DISTORTION, 5, 4)
    handler.release()
    assert handler.inited is False
    with pytest.raises(RuntimeError):
        handler.handle(np.zeros((4, 5), dtype=np.uint8))