# camperception

Building blocks for a camera perception pipeline, written in Python on top of
numpy.

- **Box geometry** (`camperception.boxes`): the frozen dataclasses `Rect`
  (`x`, `y`, `width`, `height`) and `BBox2D` (`xmin`, `ymin`, `xmax`,
  `ymax`), convertible with `Rect.to_bbox()` and `BBox2D.to_rect()`.
  `rect1 & rect2` gives the intersection and `Rect.area()` its area.
  Coverage tests `is_covered`, `is_covered_horizon` and `is_covered_vertical`
  compare the overlap with a threshold; `out_of_valid_region` checks whether a
  box reaches into an image border; `refine_box` clips a box to the image and
  returns a box of the same type.
- **Utilities** (`camperception.util`): `equal` (tolerance comparison),
  `contain`, `load_anchors` (a count followed by width/height pairs, returned
  as a flat list), `load_expand` (whitespace-separated floats),
  `resize_cpu` (bilinear resize of an HWC or NHWC uint8 image to a float32
  `(1, height, width, channels)` blob clipped to 0..255),
  `polygon_from_bbox3d` (the four ground-plane corners of a 3D box) and
  `calculate_mean_and_variance` (mean and population variance, `(0, 0)` for
  empty data).
- **Image operations** (`camperception.image_ops`): the `Color` enum
  (`NONE`, `GRAY`, `RGB`, `BGR`, with a `channels` property),
  `image_to_blob`, `image_to_gray`, `swap_image_channels`,
  `dup_image_channels` and bilinear `image_remap`, which leaves destination
  pixels whose source position falls outside the image untouched.
- **Undistortion** (`camperception.undistortion`):
  `init_undistort_rectify_map` builds `(map_x, map_y)` remap tables for the
  rational 8-coefficient model (`k1, k2, p1, p2, k3, k4, k5, k6`).
  `UndistortionHandler(intrinsic, distortion, width, height)` builds the maps
  once; `handle` applies them and `release` makes the handler unusable.
- **Data provider** (`camperception.data_provider`): `DataProvider` is set up
  with `InitOptions`, takes raw `rgb8`, `bgr8`, `gray` or `y` frames through
  `fill_image_data`, converts between colour layouts on demand
  (`to_gray_image`, `to_rgb_image`, `to_bgr_image`) and hands frames out with
  `get_image` or `get_image_blob` according to `ImageOptions` (target colour
  and optional crop). With `do_undistortion` set, the `UndistortionHandler`
  passed in `InitOptions.undistortion_handler` is applied to each frame.
- **Inference plumbing** (`camperception.inference`,
  `camperception.model_util`, `camperception.dims`): the abstract
  `Inference` base class (`init`, `infer`, `get_blob`, plus
  `set_model_info`), `get_blob_names` and `add_shape` over objects with
  `name` and `shape`, and the `DimsNCHW` / `DimsCHW` records.
- **Frames and calibration** (`camperception.frame`,
  `camperception.batch_stream`): the `CameraFrame` dataclass and
  `BatchStream`, which reads `<prefix>Batch0`, `<prefix>Batch1`, ... files
  (four int32 NCHW dimensions followed by float32 data) and serves
  fixed-size batches through `next()` and iteration, with `reset`, `skip`
  and `batches_read`.

## Installation

```
pip install camperception
```

For running the tests:

```
pip install "camperception[test]"
pytest
```

## Example

```python
import numpy as np

from camperception.boxes import Rect, refine_box
from camperception.data_provider import DataProvider, ImageOptions, InitOptions
from camperception.image_ops import Color

provider = DataProvider()
provider.init(InitOptions(image_height=4, image_width=6))

frame = np.zeros((4, 6, 3), dtype=np.uint8)
frame[..., 0] = 255                      # pure red in RGB order
provider.fill_image_data(4, 6, frame.tobytes(), "rgb8")

gray = provider.get_image(ImageOptions(target_color=Color.GRAY))
crop = provider.get_image(
    ImageOptions(target_color=Color.BGR, do_crop=True, crop_roi=Rect(1, 1, 3, 2))
)

print(refine_box(Rect(-2, -2, 10, 10), 6, 4))   # Rect(x=0, y=0, width=6, height=4)
```

## Errors

Failures are reported with exceptions. An unknown encoding, an unsupported
target colour, too little frame data or a channel-count mismatch raises
`ValueError`. Asking for an image before any frame was filled, or filling a
provider that has not been initialised, raises `RuntimeError`.

## What it does not do

- `Inference` is only an interface: the package contains no back end that
  loads or runs a neural network.
- There is no camera sensor registry; an `UndistortionHandler` is built from
  the intrinsic matrix and distortion coefficients you pass in.
- All image work happens on the CPU with numpy; there is no GPU support.
- There is no command-line program.