"""Unit tests for the Scene container and the preset scenes.

Tests cover:
- Scene distance as the minimum over fields
- Normal source selection
- Validation of fields and options
- Preset construction and the orbiting camera path
"""

import math

import numpy as np
import pytest
import taichi as ti


class TestSceneDistance:
    """Tests for Scene.distance and Scene.evaluate."""

    def test_minimum_over_fields(self):
        """Test the scene distance is the nearest field's distance."""
        from sdfmarch.core.ray import vec3
        from sdfmarch.geometry import Cube, Sphere
        from sdfmarch.scene import Scene

        scene = Scene([Sphere((0.0, 0.0, 3.0), 1.0), Cube((4.0, 0.0, 3.0), 0.5)])
        result = ti.field(dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel(s: ti.template()):
            result[0] = s.distance(vec3(0.0, 0.0, 0.0))
            result[1] = s.distance(vec3(4.0, 0.0, 2.0))

        test_kernel(scene)
        assert abs(result[0] - 2.0) < 1e-6
        assert abs(result[1] - 0.5) < 1e-6

    def test_evaluate_matches_fields(self):
        """Test the NumPy evaluation takes the elementwise minimum."""
        from sdfmarch.geometry import Sphere
        from sdfmarch.scene import Scene

        a = Sphere((0.0, 0.0, 3.0), 1.0)
        b = Sphere((0.0, 101.0, 3.0), 100.0)
        scene = Scene([a, b])
        points = np.random.default_rng(0).uniform(-5.0, 5.0, size=(32, 3))

        np.testing.assert_allclose(
            scene.evaluate(points), np.minimum(a.evaluate(points), b.evaluate(points))
        )

    def test_nearest_index(self):
        """Test the host-side lookup of the closest field."""
        from sdfmarch.geometry import Sphere
        from sdfmarch.scene import Scene

        scene = Scene([Sphere((0.0, 0.0, 3.0), 1.0), Sphere((5.0, 0.0, 3.0), 1.0)])
        assert scene.nearest_index((0.0, 0.0, 1.5)) == 0
        assert scene.nearest_index((5.0, 0.0, 1.5)) == 1

    def test_sequence_protocol(self):
        """Test len() and iteration preserve insertion order."""
        from sdfmarch.geometry import Cube, Sphere
        from sdfmarch.scene import Scene

        fields = [Sphere((0.0, 0.0, 3.0), 1.0), Cube((0.0, 0.0, 6.0), 1.0)]
        scene = Scene(fields)
        assert len(scene) == 2
        assert list(scene) == fields


class TestNormalSource:
    """Tests for which distance the normal estimator differentiates."""

    def test_default_is_nearest(self):
        """Test scenes default to normals from the scene minimum."""
        from sdfmarch.geometry import Sphere
        from sdfmarch.scene import Scene

        assert Scene([Sphere((0.0, 0.0, 3.0), 1.0)]).normal_source == "nearest"

    def test_first_uses_first_field(self):
        """Test the "first" source ignores every field but the first."""
        from sdfmarch.core.ray import vec3
        from sdfmarch.geometry import Sphere
        from sdfmarch.scene import Scene

        fields = [Sphere((10.0, 0.0, 0.0), 1.0), Sphere((0.0, 0.0, 0.0), 1.0)]
        nearest = Scene(fields)
        first = Scene(fields, normal_source="first")
        result = ti.field(dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel(a: ti.template(), b: ti.template()):
            result[0] = a.normal_distance(vec3(0.0, 0.0, 0.0))
            result[1] = b.normal_distance(vec3(0.0, 0.0, 0.0))

        test_kernel(nearest, first)
        assert abs(result[0] - (-1.0)) < 1e-6
        assert abs(result[1] - 9.0) < 1e-6

    def test_unknown_source_rejected(self):
        """Test an unknown normal source raises ValueError."""
        from sdfmarch.geometry import Sphere
        from sdfmarch.scene import Scene

        with pytest.raises(ValueError, match="normal source"):
            Scene([Sphere((0.0, 0.0, 3.0), 1.0)], normal_source="last")


class TestSceneValidation:
    """Tests for Scene construction errors."""

    def test_empty_scene_rejected(self):
        """Test a scene needs at least one field."""
        from sdfmarch.scene import Scene

        with pytest.raises(ValueError, match="at least one"):
            Scene([])

    def test_non_field_rejected(self):
        """Test entries without a distance capability raise TypeError."""
        from sdfmarch.geometry import Sphere
        from sdfmarch.scene import Scene

        with pytest.raises(TypeError, match=r"fields\[1\]"):
            Scene([Sphere((0.0, 0.0, 3.0), 1.0), (0.0, 0.0, 3.0)])


class TestPresets:
    """Tests for ready-made scenes and camera paths."""

    def test_single_sphere_scene(self):
        """Test the default single sphere sits at (0, 0, 3) with radius 1."""
        from sdfmarch.scene import create_single_sphere_scene

        scene = create_single_sphere_scene()
        assert len(scene) == 1
        assert abs(float(scene.evaluate((0.0, 0.0, 0.0))) - 2.0) < 1e-12

    def test_ground_top(self):
        """Test the ground surface passes through y = GROUND_LEVEL."""
        from sdfmarch.scene import GROUND_LEVEL, create_ground

        ground = create_ground()
        assert abs(float(ground.evaluate((0.0, GROUND_LEVEL, 3.0)))) < 1e-9
        assert float(ground.evaluate((0.0, 0.0, 3.0))) > 0.0

    def test_carved_cube_scene(self):
        """Test the carved cube has its bite removed and stands over ground."""
        from sdfmarch.scene import CarvedCubeParams, create_carved_cube_scene

        scene = create_carved_cube_scene()
        assert len(scene) == 2

        params = CarvedCubeParams()
        carved = scene.fields[0]
        # Body of the shape is solid, the carve center is empty
        assert float(carved.evaluate((0.0, 0.0, 3.0))) < 0.0
        assert float(carved.evaluate(params.carve_center)) > 0.0

    def test_carved_cube_without_ground(self):
        """Test the ground can be left out."""
        from sdfmarch.scene import CarvedCubeParams, create_carved_cube_scene

        scene = create_carved_cube_scene(CarvedCubeParams(with_ground=False))
        assert len(scene) == 1

    def test_orbit_camera_origin(self):
        """Test the camera circles its base at the requested radius."""
        from sdfmarch.scene import orbit_camera_origin

        for elapsed in (0.0, 0.7, 2.5, 10.0):
            x, y, z = orbit_camera_origin(elapsed, radius=0.5, base=(1.0, 2.0, 0.0))
            assert abs(math.hypot(x - 1.0, y - 2.0) - 0.5) < 1e-12
            assert z == 0.0

        assert orbit_camera_origin(0.0, radius=0.5) == (0.5, 0.0, 0.0)
