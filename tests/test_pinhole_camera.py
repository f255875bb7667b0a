"""Unit tests for the pinhole camera.

Tests cover:
- Pixel to normalized device coordinate mapping
- Primary ray directions through the center and corners
- Camera origin pass-through
"""

import math

import taichi as ti


class TestPixelToNdc:
    """Tests for pixel_to_ndc."""

    def test_center_maps_to_zero(self):
        """Test the image center is at NDC (0, 0)."""
        from sdfmarch.camera import pixel_to_ndc

        result = ti.Vector.field(2, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = pixel_to_ndc(160.0, 120.0, 320, 240)

        test_kernel()
        assert abs(result[None][0]) < 1e-6
        assert abs(result[None][1]) < 1e-6

    def test_top_left_corner(self):
        """Test the top-left corner is (-aspect, -1)."""
        from sdfmarch.camera import pixel_to_ndc

        result = ti.Vector.field(2, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = pixel_to_ndc(0.0, 0.0, 320, 240)

        test_kernel()
        assert abs(result[None][0] - (-320.0 / 240.0)) < 1e-6
        assert abs(result[None][1] - (-1.0)) < 1e-6

    def test_bottom_right_corner(self):
        """Test the bottom-right corner is (aspect, 1)."""
        from sdfmarch.camera import pixel_to_ndc

        result = ti.Vector.field(2, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = pixel_to_ndc(64.0, 48.0, 64, 48)

        test_kernel()
        assert abs(result[None][0] - (64.0 / 48.0)) < 1e-6
        assert abs(result[None][1] - 1.0) < 1e-6


class TestPrimaryRay:
    """Tests for camera_direction and primary_ray."""

    def test_center_looks_down_z(self):
        """Test the center ray direction is (0, 0, 1)."""
        from sdfmarch.camera import camera_direction

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = camera_direction(32.0, 24.0, 64, 48)

        test_kernel()
        r = result[None]
        assert abs(r[0]) < 1e-6
        assert abs(r[1]) < 1e-6
        assert abs(r[2] - 1.0) < 1e-6

    def test_vertical_field_of_view(self):
        """Test the top edge ray is 45 degrees above the axis, pointing -Y."""
        from sdfmarch.camera import camera_direction

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = camera_direction(32.0, 0.0, 64, 48)

        test_kernel()
        r = result[None]
        assert abs(r[0]) < 1e-6
        assert abs(r[1] - (-math.sqrt(0.5))) < 1e-6
        assert abs(r[2] - math.sqrt(0.5)) < 1e-6

    def test_primary_ray_origin_and_unit_direction(self):
        """Test the ray starts at the camera origin with a unit direction."""
        from sdfmarch.camera import primary_ray
        from sdfmarch.core.ray import vec3

        position = ti.Vector.field(3, dtype=ti.f32, shape=())
        direction = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = primary_ray(vec3(0.5, -0.25, 1.0), 3.7, 41.2, 64, 48)
            position[None] = ray.position
            direction[None] = ray.direction

        test_kernel()
        p = position[None]
        d = direction[None]
        assert abs(p[0] - 0.5) < 1e-6
        assert abs(p[1] - (-0.25)) < 1e-6
        assert abs(p[2] - 1.0) < 1e-6
        assert abs(math.sqrt(d[0] ** 2 + d[1] ** 2 + d[2] ** 2) - 1.0) < 1e-5
        # Left half of the picture, lower half of the screen
        assert d[0] < 0.0
        assert d[1] > 0.0
