import numpy as np
import pytest

from camperception.boxes import Rect
from camperception.data_provider import DataProvider, ImageOptions, InitOptions
from camperception.image_ops import Color
from camperception.undistortion import UndistortionHandler

H, W = 4, 5


def _provider(**kwargs):
    provider = DataProvider()
    provider.init(InitOptions(image_height=H, image_width=W, **kwargs))
    return provider


def _rgb_frame():
    rng = np.random.default_rng(1)
    return rng.integers(0, 256, size=(H, W, 3), dtype=np.uint8)


def test_init_records_options():
    provider = _provider(sensor_name="front_6mm", device_id=0)
    assert provider.src_height == H
    assert provider.src_width == W
    assert provider.sensor_name == "front_6mm"


def test_rgb_to_bgr_reverses_channels():
    provider = _provider()
    frame = _rgb_frame()
    provider.fill_image_data(H, W, frame.tobytes(), "rgb8")
    bgr = provider.get_image(ImageOptions(Color.BGR))
    np.testing.assert_array_equal(bgr, frame[:, :, ::-1])


def test_bgr_round_trip_to_rgb():
    provider = _provider()
    frame = _rgb_frame()
    provider.fill_image_data(H, W, frame, "bgr8")
    rgb = provider.get_image(ImageOptions(Color.RGB))
    np.testing.assert_array_equal(rgb[:, :, ::-1], frame)
    np.testing.assert_array_equal(
        provider.get_image(ImageOptions(Color.BGR)), frame)


def test_gray_from_rgb_uses_rgb_weights():
    provider = _provider()
    frame = np.zeros((H, W, 3), dtype=np.uint8)
    frame[..., 0] = 255
    provider.fill_image_data(H, W, frame, "rgb8")
    gray = provider.get_image(ImageOptions(Color.GRAY))
    assert gray.shape == (H, W)
    assert np.all(gray == 76)


def test_gray_from_bgr_matches_gray_from_rgb():
    frame = _rgb_frame()
    from_rgb = _provider()
    from_rgb.fill_image_data(H, W, frame, "rgb8")
    from_bgr = _provider()
    from_bgr.fill_image_data(H, W, frame[:, :, ::-1].copy(), "bgr8")
    np.testing.assert_array_equal(
        from_rgb.get_image(ImageOptions(Color.GRAY)),
        from_bgr.get_image(ImageOptions(Color.GRAY)))


@pytest.mark.parametrize("encoding", ["gray", "y"])
def test_gray_duplicates_into_color(encoding):
    provider = _provider()
    frame = np.arange(H * W, dtype=np.uint8).reshape(H, W)
    provider.fill_image_data(H, W, frame, encoding)
    rgb = provider.get_image(ImageOptions(Color.RGB))
    for channel in range(3):
        np.testing.assert_array_equal(rgb[:, :, channel], frame)


def test_crop_selects_region():
    provider = _provider()
    frame = _rgb_frame()
    provider.fill_image_data(H, W, frame, "rgb8")
    roi = Rect(1, 2, 3, 2)
    image = provider.get_image(ImageOptions(Color.RGB, True, roi))
    np.testing.assert_array_equal(image, frame[2:4, 1:4])


def test_image_blob_is_nhwc():
    provider = _provider()
    frame = _rgb_frame()
    provider.fill_image_data(H, W, frame, "rgb8")
    blob = provider.get_image_blob(ImageOptions(Color.RGB))
    assert blob.shape == (1, H, W, 3)
    np.testing.assert_array_equal(blob[0], frame)


def test_nothing_filled_yet():
    provider = _provider()
    assert provider.to_gray_image() is False
    assert provider.to_rgb_image() is False
    with pytest.raises(RuntimeError):
        provider.get_image(ImageOptions(Color.BGR))


def test_unknown_encoding_rejected_and_clears_frame():
    provider = _provider()
    provider.fill_image_data(H, W, _rgb_frame(), "rgb8")
    with pytest.raises(ValueError):
        provider.fill_image_data(H, W, _rgb_frame(), "yuyv")
    assert provider.to_rgb_image() is False


def test_unsupported_target_color():
    provider = _provider()
    provider.fill_image_data(H, W, _rgb_frame(), "rgb8")
    with pytest.raises(ValueError):
        provider.get_image(ImageOptions(Color.NONE))


def test_short_data_rejected():
    provider = _provider()
    with pytest.raises(ValueError):
        provider.fill_image_data(H, W, b"\x00" * 10, "rgb8")


def test_undistortion_requires_handler():
    provider = DataProvider()
    with pytest.raises(ValueError):
        provider.init(InitOptions(image_height=H, image_width=W,
                                  do_undistortion=True))


def test_undistortion_with_identity_handler_keeps_frame():
    handler = UndistortionHandler(np.eye(3), [0.0] * 8, W, H)
    provider = _provider(do_undistortion=True, undistortion_handler=handler)
    frame = _rgb_frame()
    provider.fill_image_data(H, W, frame, "rgb8")
    np.testing.assert_array_equal(
        provider.get_image(ImageOptions(Color.RGB)), frame)


def test_image_options_str():
    assert str(ImageOptions()) == " 0 0"
    options = ImageOptions(Color.BGR, True, Rect(1, 2, 3, 4))
    assert str(options) == " 3 1 1 2 3 4"