"""Explicit per-task random streams for Monte Carlo sampling.

Every pixel task owns its own random stream: a single ``u32`` state that is
passed by value into each function consuming randomness and handed back,
advanced, alongside the result. Nothing in the render path touches a shared
or thread-local generator, so two pixels never race on RNG state and a frame
is reproducible from its seed.

The generator is a xorshift32 sequence whose starting state is derived from
the task index and the frame seed through Wang's integer hash.

Example:
    >>> @ti.kernel
    ... def draw() -> ti.f32:
    ...     state = seed_stream(7, ti.u32(0))
    ...     state, u = next_float(state)
    ...     return u
"""

import taichi as ti
import taichi.math as tm

from sdfmarch.core.ray import length_squared, vec3

# Maximum rejection-sampling attempts before giving up on a draw
MAX_REJECTION_ATTEMPTS = 100

# 2^-24: maps the top 24 bits of a u32 onto [0, 1)
_FLOAT_SCALE = 1.0 / 16777216.0


@ti.func
def wang_hash(value: ti.u32) -> ti.u32:
    """Scramble a 32-bit integer (Thomas Wang's hash)."""
    h = value
    h = (h ^ ti.u32(61)) ^ (h >> ti.u32(16))
    h = h * ti.u32(9)
    h = h ^ (h >> ti.u32(4))
    h = h * ti.u32(0x27D4EB2D)
    h = h ^ (h >> ti.u32(15))
    return h


@ti.func
def seed_stream(task_index: ti.i32, frame_seed: ti.u32) -> ti.u32:
    """Derive the starting state of a task's random stream.

    Args:
        task_index: Index of the task (the flat pixel index for frames).
        frame_seed: Seed shared by all tasks of one frame.

    Returns:
        A non-zero xorshift32 state, distinct per (task_index, frame_seed).
    """
    h = wang_hash(ti.cast(task_index, ti.u32) ^ wang_hash(frame_seed))
    # xorshift has a fixed point at zero
    return h | ti.u32(1)


@ti.func
def next_u32(state: ti.u32) -> ti.u32:
    """Advance a xorshift32 state by one step."""
    s = state
    s = s ^ (s << ti.u32(13))
    s = s ^ (s >> ti.u32(17))
    s = s ^ (s << ti.u32(5))
    return s


@ti.func
def next_float(state: ti.u32):
    """Draw a uniform float in [0, 1).

    Args:
        state: The current stream state.

    Returns:
        A tuple (state, value) with the advanced state and the sample.
    """
    s = next_u32(state)
    value = ti.cast(s >> ti.u32(8), ti.f32) * _FLOAT_SCALE
    return s, value


@ti.func
def random_in_unit_sphere(state: ti.u32):
    """Draw a point uniformly inside the unit sphere.

    Uses rejection sampling: each component is drawn uniformly in [-1, 1]
    until the squared length is below one. If every attempt is rejected the
    origin is returned, which still lies inside the ball.

    Args:
        state: The current stream state.

    Returns:
        A tuple (state, point) with the advanced state and a point of
        length < 1.
    """
    s = state
    p = vec3(0.0, 0.0, 0.0)
    found = False
    for _ in range(MAX_REJECTION_ATTEMPTS):
        if not found:
            s, x = next_float(s)
            s, y = next_float(s)
            s, z = next_float(s)
            candidate = vec3(x, y, z) * 2.0 - 1.0
            if length_squared(candidate) < 1.0:
                p = candidate
                found = True
    return s, p


@ti.func
def pixel_jitter(state: ti.u32):
    """Draw a sub-pixel offset, each axis uniform in [0, 1).

    Returns:
        A tuple (state, offset) where offset is a tm.vec2.
    """
    s, dx = next_float(state)
    s, dy = next_float(s)
    return s, tm.vec2(dx, dy)
