"""Frame evaluation: anti-aliased sampling mapped over every pixel.

The frame evaluator owns a flat pixel buffer of ``width * height`` linear
colors (row-major, index ``y * width + x``) and fills it with one parallel
Taichi kernel launch per frame. Each pixel is an independent task:

    - it reads only the immutable scene and the camera origin,
    - it seeds its own random stream from its index and the frame seed,
    - it writes exactly one buffer slot.

No pixel depends on another and no mutable state is shared, so the Taichi
runtime is free to spread pixels over its worker threads in any order. The
kernel returns only after every pixel is written, which sequences frames:
frame N is complete before it is handed over and before frame N+1 starts.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from sdfmarch.core.frame import render_frame
    >>> from sdfmarch.scene.presets import create_single_sphere_scene
    >>>
    >>> scene = create_single_sphere_scene()
    >>> pixels = render_frame(scene, (0.0, 0.0, 0.0), 64, 48, sample_count=10)
    >>> pixels.shape, pixels.dtype
    ((3072, 3), dtype('uint8'))
"""

from typing import Any

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from sdfmarch.camera.pinhole import primary_ray
from sdfmarch.core.color import to_rgb8
from sdfmarch.core.integrator import trace_radiance
from sdfmarch.core.ray import vec3
from sdfmarch.core.sampler import pixel_jitter, seed_stream

# Default number of jittered samples per pixel
DEFAULT_SAMPLES = 10


@ti.func
def sample_pixel(
    scene: ti.template(),
    origin: vec3,
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    samples: ti.i32,
    state: ti.u32,
):
    """Average radiance over jittered rays through one pixel.

    Each sample adds independent uniform noise in [0, 1) to the integer
    pixel coordinate before it is converted to a camera ray. The mean is
    taken per channel.

    Args:
        scene: The scene (compile-time template).
        origin: Camera position for this frame.
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Number of rays to average (>= 1).
        state: The pixel's random stream state.

    Returns:
        A tuple (state, color) with the mean linear radiance.
    """
    s = state
    total = vec3(0.0, 0.0, 0.0)
    for _ in range(samples):
        s, jitter = pixel_jitter(s)
        px = ti.cast(x, ti.f32) + jitter.x
        py = ti.cast(y, ti.f32) + jitter.y
        ray = primary_ray(origin, px, py, width, height)
        s, radiance = trace_radiance(scene, ray.position, ray.direction, 0, s)
        total += radiance
    return s, total / ti.cast(samples, ti.f32)


@ti.func
def sample_pixel_center(
    scene: ti.template(),
    origin: vec3,
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    state: ti.u32,
):
    """Single unjittered sample through the center of a pixel.

    This is the value jittered sampling converges toward as the sample count
    grows, for pixels whose content is smooth across the pixel footprint.
    """
    px = ti.cast(x, ti.f32) + 0.5
    py = ti.cast(y, ti.f32) + 0.5
    ray = primary_ray(origin, px, py, width, height)
    return trace_radiance(scene, ray.position, ray.direction, 0, state)


@ti.func
def finite_or_black(color: vec3) -> vec3:
    """Replace NaN and infinite channels with 0."""
    result = color
    for c in ti.static(range(3)):
        if tm.isnan(color[c]) or tm.isinf(color[c]):
            result[c] = 0.0
    return result


@ti.data_oriented
class FrameEvaluator:
    """Renders whole frames of a fixed resolution into a flat buffer.

    The evaluator keeps its buffer between frames to avoid reallocation, but
    every render() overwrites every slot, so no state carries over from one
    frame to the next.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        frames_rendered: Number of completed render() calls.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate the pixel buffer.

        Args:
            width: Image width in pixels (>= 1).
            height: Image height in pixels (>= 1).

        Raises:
            ValueError: If a dimension is smaller than one pixel.
        """
        if width < 1 or height < 1:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

        self._width = int(width)
        self._height = int(height)
        self._frames_rendered = 0
        self._pixels = ti.Vector.field(3, dtype=ti.f32, shape=self._width * self._height)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def frames_rendered(self) -> int:
        """Get the number of frames rendered so far."""
        return self._frames_rendered

    @ti.kernel
    def _render_kernel(
        self,
        scene: ti.template(),
        origin: vec3,
        samples: ti.i32,
        seed: ti.u32,
    ):
        """Sample every pixel of the frame in parallel."""
        for y, x in ti.ndrange(self._height, self._width):
            index = y * self._width + x
            state = seed_stream(index, seed)
            _, color = sample_pixel(
                scene, origin, x, y, self._width, self._height, samples, state
            )
            self._pixels[index] = finite_or_black(color)

    @ti.kernel
    def _render_center_kernel(self, scene: ti.template(), origin: vec3, seed: ti.u32):
        """One unjittered sample per pixel, for reference images."""
        for y, x in ti.ndrange(self._height, self._width):
            index = y * self._width + x
            state = seed_stream(index, seed)
            _, color = sample_pixel_center(
                scene, origin, x, y, self._width, self._height, state
            )
            self._pixels[index] = finite_or_black(color)

    def render(
        self,
        scene: Any,
        camera_origin: Any = (0.0, 0.0, 0.0),
        sample_count: int = DEFAULT_SAMPLES,
        seed: int = 0,
    ) -> npt.NDArray[np.float32]:
        """Render one frame of linear radiance.

        Args:
            scene: The scene to render. Must not change during the call.
            camera_origin: Camera position (x, y, z) for this frame.
            sample_count: Jittered samples per pixel (>= 1).
            seed: Frame seed; the same seed and inputs reproduce the frame.

        Returns:
            Array of shape (width * height, 3), dtype float32, row-major
            with index y * width + x.

        Raises:
            ValueError: If sample_count is smaller than one.
        """
        if sample_count < 1:
            raise ValueError(f"sample_count must be at least 1, got {sample_count}")

        self._render_kernel(scene, vec3(*camera_origin), int(sample_count), _as_seed(seed))
        self._frames_rendered += 1
        return self._pixels.to_numpy()

    def render_center(
        self,
        scene: Any,
        camera_origin: Any = (0.0, 0.0, 0.0),
        seed: int = 0,
    ) -> npt.NDArray[np.float32]:
        """Render one unjittered sample per pixel through pixel centers.

        Returns:
            Array of shape (width * height, 3), dtype float32.
        """
        self._render_center_kernel(scene, vec3(*camera_origin), _as_seed(seed))
        self._frames_rendered += 1
        return self._pixels.to_numpy()

    def __repr__(self) -> str:
        return (
            f"FrameEvaluator(width={self.width}, height={self.height}, "
            f"frames={self.frames_rendered})"
        )


def _as_seed(seed: int) -> int:
    """Fold an arbitrary integer seed into the u32 range."""
    return int(seed) & 0xFFFFFFFF


# Evaluators are reused per resolution so kernels compile once per scene
_evaluators: dict[tuple[int, int], FrameEvaluator] = {}


def get_evaluator(width: int, height: int) -> FrameEvaluator:
    """Get the shared evaluator for a resolution, creating it on first use."""
    key = (int(width), int(height))
    evaluator = _evaluators.get(key)
    if evaluator is None:
        evaluator = FrameEvaluator(width, height)
        _evaluators[key] = evaluator
    return evaluator


def render_frame_linear(
    scene: Any,
    camera_origin: Any,
    width: int,
    height: int,
    sample_count: int = DEFAULT_SAMPLES,
    seed: int = 0,
) -> npt.NDArray[np.float32]:
    """Render a frame and return linear radiance, shape (width * height, 3)."""
    evaluator = get_evaluator(width, height)
    return evaluator.render(scene, camera_origin, sample_count, seed)


def render_frame(
    scene: Any,
    camera_origin: Any,
    width: int,
    height: int,
    sample_count: int = DEFAULT_SAMPLES,
    seed: int = 0,
) -> npt.NDArray[np.uint8]:
    """Render a frame to an 8-bit RGB pixel buffer.

    This is the single entry point display and export code call once per
    frame (or once for a still image). The returned buffer is a fresh array
    owned by the caller.

    Args:
        scene: The scene to render.
        camera_origin: Camera position (x, y, z) for this frame.
        width: Image width in pixels.
        height: Image height in pixels.
        sample_count: Jittered samples per pixel.
        seed: Frame seed.

    Returns:
        Array of shape (width * height, 3), dtype uint8, row-major with
        index y * width + x and row 0 at the top of the picture.

    Raises:
        ValueError: If dimensions or sample_count are smaller than one.
    """
    linear = render_frame_linear(scene, camera_origin, width, height, sample_count, seed)
    return to_rgb8(linear)
