"""
Test PixelBuffer storage, addressing and sampling
"""
import numpy as np
import pytest

from kaleido import Pixel, PixelBuffer, SENTINEL


class TestLifecycle:
    """Construction, resize, copy and move"""

    def test_default_is_empty(self):
        buf = PixelBuffer()
        assert buf.size == (0, 0)
        assert buf.empty
        assert buf.nbytes == 0

    def test_resize_allocates_w_h_3(self):
        buf = PixelBuffer()
        buf.resize(4, 3)
        assert buf.nbytes == 4 * 3 * 3

    def test_resize_equal_pixel_count_reuses_storage(self):
        buf = PixelBuffer(10, 10)
        store = buf.storage
        buf.resize(20, 5)
        assert buf.storage is store
        assert buf.nbytes == 300
        assert buf.size == (20, 5)

    def test_resize_different_count_reallocates(self):
        buf = PixelBuffer(10, 10)
        store = buf.storage
        buf.resize(11, 10)
        assert buf.storage is not store
        assert buf.nbytes == 330

    def test_resize_to_zero_drops_storage(self):
        buf = PixelBuffer(3, 3)
        buf.resize(0, 7)
        assert buf.storage is None
        assert buf.size == (0, 7)

    def test_copy_is_deep(self, gradient_buffer):
        dup = gradient_buffer.copy()
        assert dup == gradient_buffer
        dup.set(0, 0, (1, 2, 3))
        assert gradient_buffer.get(0, 0) != Pixel(1, 2, 3)

    def test_take_moves_storage(self, gradient_buffer):
        store = gradient_buffer.storage
        moved = gradient_buffer.take()
        assert moved.storage is store
        assert moved.size == (8, 6)
        assert gradient_buffer.empty
        assert gradient_buffer.size == (0, 0)

    def test_from_array_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            PixelBuffer.from_array(np.zeros((4, 4), dtype=np.uint8))


class TestIntegerAccess:
    def test_empty_buffer_returns_sentinel(self):
        assert PixelBuffer().get(0, 0) == SENTINEL

    def test_get_matches_array(self, gradient_buffer):
        arr = gradient_buffer.to_array()
        assert gradient_buffer.get(3, 2).as_tuple() == tuple(arr[2, 3])

    def test_clamp_to_edge(self, gradient_buffer):
        assert gradient_buffer.get(-5, -1) == gradient_buffer.get(0, 0)
        assert gradient_buffer.get(100, 2) == gradient_buffer.get(7, 2)
        assert gradient_buffer.get(3, 99) == gradient_buffer.get(3, 5)

    def test_set_out_of_range_is_ignored(self, gradient_buffer):
        before = gradient_buffer.copy()
        gradient_buffer.set(-1, 0, (9, 9, 9))
        gradient_buffer.set(8, 0, (9, 9, 9))
        gradient_buffer.set(0, 6, (9, 9, 9))
        assert gradient_buffer == before

    def test_set_writes_pixel(self, gradient_buffer):
        gradient_buffer.set(2, 1, Pixel(11, 22, 33))
        assert gradient_buffer.get(2, 1) == Pixel(11, 22, 33)


class TestBilinear:
    def test_integer_aligned_float_equals_integer_get(self, gradient_buffer):
        assert gradient_buffer.get(3.0, 2.0) == gradient_buffer.get(3, 2)

    def test_midpoint_blend(self):
        buf = PixelBuffer.from_array(np.array([[[0, 0, 0], [100, 200, 50]]], dtype=np.uint8))
        assert buf.get(0.5, 0.0) == Pixel(50, 100, 25)

    def test_beyond_last_column_uses_edge(self):
        buf = PixelBuffer.from_array(np.array([[[0, 0, 0], [100, 200, 50]]], dtype=np.uint8))
        assert buf.get(5.0, 0.0) == Pixel(100, 200, 50)
        assert buf.get(-3.0, -3.0) == Pixel(0, 0, 0)

    def test_empty_buffer_float_returns_sentinel(self):
        assert PixelBuffer().get(0.5, 0.5) == SENTINEL

    def test_vectorised_sample_matches_scalar(self, gradient_buffer):
        rng = np.random.default_rng(7)
        xs = rng.uniform(-2, 10, size=200).astype(np.float32)
        ys = rng.uniform(-2, 8, size=200).astype(np.float32)
        batch = gradient_buffer.sample(xs, ys)
        for x, y, got in zip(xs, ys, batch):
            assert gradient_buffer.get_bilinear(x, y).as_tuple() == tuple(int(v) for v in got)

    def test_sample_on_empty_buffer(self):
        out = PixelBuffer().sample([0.0, 1.0], [0.0, 1.0])
        assert out.tolist() == [[0, 0, 255], [0, 0, 255]]
