"""Tests for the preview module.

Tests cover:
- PNG export and loading
- RMSE comparison
- Matplotlib display (non-interactive backend)
- Interactive preview staging, without opening a window

Note: Tests avoid opening real windows; OrbitPreview.run() is not called.
"""

import numpy as np
import pytest


def _gradient_buffer(width, height):
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:, :, 0] = np.linspace(0, 255, width, dtype=np.uint8)[None, :]
    image[:, :, 1] = np.linspace(0, 255, height, dtype=np.uint8)[:, None]
    image[:, :, 2] = 200
    return image.reshape(width * height, 3)


class TestExport:
    """Tests for PNG export."""

    def test_png_round_trip(self, tmp_path):
        """Test a saved buffer loads back unchanged."""
        from sdfmarch.preview.export import load_png, save_png

        buffer = _gradient_buffer(8, 6)
        path = save_png(buffer, 8, 6, tmp_path / "frame.png")

        assert path.exists()
        loaded, width, height = load_png(path)
        assert (width, height) == (8, 6)
        np.testing.assert_array_equal(loaded, buffer)

    def test_png_orientation(self, tmp_path):
        """Test buffer row 0 becomes the top row of the PNG."""
        from PIL import Image

        from sdfmarch.preview.export import save_png

        buffer = np.zeros((4 * 3, 3), dtype=np.uint8)
        buffer[0] = (255, 0, 0)
        path = save_png(buffer, 4, 3, tmp_path / "corner.png")

        with Image.open(path) as image:
            assert image.size == (4, 3)
            assert image.getpixel((0, 0)) == (255, 0, 0)
            assert image.getpixel((0, 2)) == (0, 0, 0)

    def test_rejects_float_buffer(self, tmp_path):
        """Test linear float buffers must be quantized first."""
        from sdfmarch.preview.export import save_png

        with pytest.raises(ValueError, match="uint8"):
            save_png(np.zeros((12, 3), dtype=np.float32), 4, 3, tmp_path / "x.png")

    def test_rejects_size_mismatch(self, tmp_path):
        """Test a buffer that doesn't match the dimensions is rejected."""
        from sdfmarch.preview.export import save_png

        with pytest.raises(ValueError):
            save_png(np.zeros((12, 3), dtype=np.uint8), 5, 3, tmp_path / "x.png")


class TestComputeRmse:
    """Tests for compute_rmse."""

    def test_identical_is_zero(self):
        """Test identical buffers have zero error."""
        from sdfmarch.preview.export import compute_rmse

        buffer = _gradient_buffer(4, 4)
        assert compute_rmse(buffer, buffer) == 0.0

    def test_constant_offset(self):
        """Test a constant difference gives that difference."""
        from sdfmarch.preview.export import compute_rmse

        a = np.full((10, 3), 10, dtype=np.uint8)
        b = np.full((10, 3), 13, dtype=np.uint8)
        assert abs(compute_rmse(a, b) - 3.0) < 1e-12

    def test_shape_mismatch(self):
        """Test buffers of different shapes are rejected."""
        from sdfmarch.preview.export import compute_rmse

        with pytest.raises(ValueError, match="shapes"):
            compute_rmse(np.zeros((4, 3)), np.zeros((5, 3)))


class TestDisplay:
    """Tests for the Matplotlib display."""

    def test_show_frame(self, monkeypatch):
        """Test show_frame draws the image without blocking."""
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from sdfmarch.preview.display import show_frame

        shown = []
        monkeypatch.setattr(plt, "show", lambda block=True: shown.append(block))

        show_frame(_gradient_buffer(8, 6), 8, 6, title="gradient", block=False)

        assert shown == [False]
        axes = plt.gcf().axes
        assert axes[0].get_title() == "gradient"
        assert axes[0].get_images()[0].get_array().shape == (6, 8, 3)
        plt.close("all")


class TestBufferToCanvas:
    """Tests for buffer_to_canvas."""

    def test_canvas_layout(self):
        """Test the canvas is (width, height) with y growing upward."""
        from sdfmarch.preview.interactive import buffer_to_canvas

        width, height = 4, 3
        buffer = np.zeros((width * height, 3), dtype=np.uint8)
        buffer[0] = (255, 0, 0)  # top-left
        buffer[(height - 1) * width + (width - 1)] = (0, 255, 0)  # bottom-right

        canvas = buffer_to_canvas(buffer, width, height)

        assert canvas.shape == (width, height, 3)
        assert canvas.dtype == np.float32
        np.testing.assert_allclose(canvas[0, height - 1], (1.0, 0.0, 0.0))
        np.testing.assert_allclose(canvas[width - 1, 0], (0.0, 1.0, 0.0))


class TestOrbitPreview:
    """Tests for OrbitPreview without a window."""

    def test_render_frame_at(self, sphere_scene):
        """Test a frame is rendered, kept and staged for display."""
        from sdfmarch.preview.interactive import OrbitPreview

        preview = OrbitPreview(16, 12, sphere_scene, samples=1)
        assert preview.last_buffer is None

        buffer = preview.render_frame_at(0.0)

        assert buffer.shape == (16 * 12, 3)
        assert buffer.dtype == np.uint8
        assert preview.frame_index == 1
        assert preview.last_buffer is buffer
        assert preview.display_image.shape == (16, 12)

    def test_frames_follow_the_orbit(self, sphere_scene):
        """Test frames at different times see the subject from different places."""
        from sdfmarch.preview.interactive import OrbitPreview

        preview = OrbitPreview(16, 12, sphere_scene, samples=1, orbit_radius=0.5)
        a = preview.render_frame_at(0.0)
        b = preview.render_frame_at(3.14159)
        assert not np.array_equal(a, b)
        assert preview.frame_index == 2

    def test_export_png(self, sphere_scene, tmp_path):
        """Test exporting writes the last frame, or nothing before any frame."""
        from sdfmarch.preview.export import load_png
        from sdfmarch.preview.interactive import OrbitPreview

        preview = OrbitPreview(16, 12, sphere_scene, samples=1)
        assert preview.export_png(tmp_path) is None

        buffer = preview.render_frame_at(0.5)
        path = preview.export_png(tmp_path)

        assert path is not None and path.exists()
        loaded, width, height = load_png(path)
        assert (width, height) == (16, 12)
        np.testing.assert_array_equal(loaded, buffer)

    def test_invalid_samples(self, sphere_scene):
        """Test a preview needs at least one sample per pixel."""
        from sdfmarch.preview.interactive import OrbitPreview

        with pytest.raises(ValueError, match="samples"):
            OrbitPreview(16, 12, sphere_scene, samples=0)

    def test_display_detection(self):
        """Test display detection answers without opening anything."""
        from sdfmarch.preview.interactive import OrbitPreview

        assert isinstance(OrbitPreview.is_display_available(), bool)
