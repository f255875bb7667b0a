"""Interactive orbiting preview window using Taichi GGUI.

Each window frame renders a complete, fresh pixel buffer from a camera
origin that circles the scene's subject with elapsed wall-clock time, then
presents it. The previous frame's buffer is simply replaced; there is no
accumulation across frames and no preemption of a frame in flight.

Controls:
    Esc: close the window
    P:   export the current frame as a timestamped PNG

Example:
    >>> from sdfmarch.preview.interactive import OrbitPreview
    >>> from sdfmarch.scene.presets import create_carved_cube_scene
    >>>
    >>> preview = OrbitPreview(320, 240, create_carved_cube_scene(), samples=4)
    >>> preview.run()  # Blocks until the window is closed
"""

from __future__ import annotations

import os
import time
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np
import taichi as ti

from sdfmarch.core.color import to_image, to_rgb8
from sdfmarch.core.frame import FrameEvaluator
from sdfmarch.scene.presets import orbit_camera_origin

if TYPE_CHECKING:
    import numpy.typing as npt


def buffer_to_canvas(
    buffer: npt.NDArray[np.uint8],
    width: int,
    height: int,
) -> npt.NDArray[np.float32]:
    """Convert a flat top-row-first buffer to a GGUI canvas array.

    Taichi fields use (x, y) indexing with the origin at the bottom-left,
    so the image is flipped vertically and transposed.

    Returns:
        Array of shape (width, height, 3), dtype float32, values in [0, 1].
    """
    image = to_image(buffer, width, height).astype(np.float32) / 255.0
    return np.ascontiguousarray(np.transpose(np.flipud(image), (1, 0, 2)))


class OrbitPreview:
    """Interactive window showing an animated render of a scene.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        samples: Jittered samples per pixel per frame.
        display_image: Taichi field storing the display image (RGB float).
    """

    def __init__(
        self,
        width: int,
        height: int,
        scene: Any,
        *,
        samples: int = 4,
        orbit_radius: float = 0.5,
        orbit_speed: float = 1.0,
        title: str = "sdfmarch - orbit preview",
    ) -> None:
        """Initialize the preview.

        The window is created lazily on run(), so constructing a preview
        works on headless machines.

        Raises:
            ValueError: If dimensions or samples are smaller than one.
        """
        if samples < 1:
            raise ValueError(f"samples must be at least 1, got {samples}")

        self.width = width
        self.height = height
        self.samples = samples
        self._scene = scene
        self._orbit_radius = orbit_radius
        self._orbit_speed = orbit_speed
        self._title = title

        self._evaluator = FrameEvaluator(width, height)
        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None
        self._last_buffer: npt.NDArray[np.uint8] | None = None
        self._frame_index = 0

        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

    @property
    def frame_index(self) -> int:
        """Number of frames rendered so far."""
        return self._frame_index

    @property
    def last_buffer(self) -> npt.NDArray[np.uint8] | None:
        """The most recently rendered 8-bit buffer, if any."""
        return self._last_buffer

    def render_frame_at(self, elapsed: float) -> npt.NDArray[np.uint8]:
        """Render the frame for a moment of the animation and stage it.

        Args:
            elapsed: Seconds since the animation started.

        Returns:
            The 8-bit buffer of shape (width * height, 3).
        """
        origin = orbit_camera_origin(
            elapsed, radius=self._orbit_radius, speed=self._orbit_speed
        )
        linear = self._evaluator.render(
            self._scene, origin, self.samples, seed=self._frame_index
        )
        buffer = to_rgb8(linear)

        self._last_buffer = buffer
        self._frame_index += 1
        self.display_image.from_numpy(buffer_to_canvas(buffer, self.width, self.height))
        return buffer

    def export_png(self, directory: str | Path = ".") -> Path | None:
        """Export the last frame to a timestamped PNG file.

        Returns:
            The written path, or None if no frame has been rendered yet.
        """
        from sdfmarch.preview.export import save_png

        if self._last_buffer is None:
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = Path(directory) / f"sdfmarch_{timestamp}.png"
        return save_png(self._last_buffer, self.width, self.height, path)

    def _initialize_window(self) -> None:
        if self._window is not None:
            return
        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()

    def _handle_events(self) -> None:
        assert self._window is not None
        for event in self._window.get_events(ti.ui.PRESS):
            if event.key == ti.ui.ESCAPE:
                self._window.running = False
            elif event.key == "p":
                path = self.export_png()
                if path is not None:
                    print(f"Exported: {path} (frame {self._frame_index})")

    def run(self, max_frames: int | None = None) -> None:
        """Run the render-and-present loop until the window closes.

        Args:
            max_frames: Optional number of frames after which to stop.
        """
        self._initialize_window()
        assert self._window is not None and self._canvas is not None

        start = time.perf_counter()
        while self._window.running:
            self._handle_events()
            self.render_frame_at(time.perf_counter() - start)
            self._canvas.set_image(self.display_image)
            self._window.show()

            if max_frames is not None and self._frame_index >= max_frames:
                break

    def close(self) -> None:
        """Close the preview window if it was opened."""
        if self._window is not None:
            self._window.destroy()
            self._window = None
            self._canvas = None

    @staticmethod
    def is_display_available() -> bool:
        """Check if a display is available for GUI rendering.

        Returns:
            True if a display is available, False for headless environments.
        """
        if os.name == "nt":
            return True

        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        if os.uname().sysname == "Darwin":
            ssh_connection = os.environ.get("SSH_CONNECTION")
            return not (ssh_connection and not display)

        return bool(display or wayland)
