"""Render settings and Taichi backend initialization.

Example:
    >>> from sdfmarch.config import RenderSettings, init_backend
    >>> init_backend("cpu", threads=4)
    >>> settings = RenderSettings(width=160, height=120, samples=16)
    >>> settings.validate()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import taichi as ti

# Type alias for compute backend options
BackendName = Literal["cpu", "gpu"]

DEFAULT_WIDTH = 320
DEFAULT_HEIGHT = 240
DEFAULT_SAMPLES = 10


@dataclass(frozen=True)
class RenderSettings:
    """Per-render configuration supplied by the caller.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Jittered samples per pixel.
        seed: Frame seed for the per-pixel random streams.
        camera_origin: Camera position for still renders.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    samples: int = DEFAULT_SAMPLES
    seed: int = 0
    camera_origin: tuple[float, float, float] = (0.0, 0.0, 0.0)

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    def validate(self) -> None:
        """Check the settings.

        Raises:
            ValueError: If a dimension or the sample count is below one, or
                the camera origin does not have three components.
        """
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.samples < 1:
            raise ValueError(f"samples must be at least 1, got {self.samples}")
        if len(self.camera_origin) != 3:
            raise ValueError(
                f"camera_origin must have 3 components, got {len(self.camera_origin)}"
            )


def init_backend(
    arch: BackendName = "cpu",
    *,
    threads: int | None = None,
    seed: int | None = None,
) -> None:
    """Initialize the Taichi runtime.

    Must be called once, before any scene or evaluator is used. Requesting
    "gpu" on a machine without a supported GPU falls back to the CPU.

    Args:
        arch: "cpu" or "gpu".
        threads: Size of the CPU worker pool (default: all cores).
        seed: Seed for Taichi's own generator. The renderer draws from
            explicit per-pixel streams and does not depend on it.

    Raises:
        ValueError: If arch is unknown or threads is smaller than one.
    """
    if arch not in ("cpu", "gpu"):
        raise ValueError(f"Unknown backend: {arch}")
    if threads is not None and threads < 1:
        raise ValueError(f"threads must be at least 1, got {threads}")

    kwargs: dict[str, int] = {}
    if threads is not None:
        kwargs["cpu_max_num_threads"] = threads
    if seed is not None:
        kwargs["random_seed"] = seed

    ti.init(arch=ti.gpu if arch == "gpu" else ti.cpu, **kwargs)
