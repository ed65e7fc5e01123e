"""
test_buffer_transform.py
------------------------

Tests for bulk RGBA buffer simulation (transform_buffer).

Coverage:
- alpha passthrough and agreement with transform_pixel
- input types and shapes
- independence from chunk size and worker count
- cancellation (all-or-nothing)
- validation
"""

import numpy as np
import pytest

from cvdsim.errors import (
    InvalidBufferLength,
    InvalidChannelValue,
    InvalidMatrixShape,
    TransformCancelled,
)
from cvdsim.transform.buffer import CancelToken, transform_buffer
from cvdsim.transform.config import TransformConfig
from cvdsim.transform.pixel import transform_pixel


class TestAlphaAndAgreement:
    def test_alpha_untouched(self, catalog, rgba_buffer):
        m = catalog.matrix("protanopia", "vienot")
        out = transform_buffer(rgba_buffer, m, 1.0)
        np.testing.assert_array_equal(out[..., 3], rgba_buffer[..., 3])

    def test_matches_per_pixel_transform(self, catalog, rgba_buffer):
        m = catalog.matrix("tritanomaly", "brettel")
        out = transform_buffer(rgba_buffer, m, 0.6)
        for src, dst in zip(rgba_buffer.reshape(-1, 4), out.reshape(-1, 4)):
            expected = transform_pixel(tuple(int(v) for v in src[:3]), m, 0.6)
            assert tuple(int(v) for v in dst[:3]) == expected

    def test_single_pixel_keeps_alpha(self, catalog):
        for entry in catalog:
            m = entry.resolve()
            out = transform_buffer(bytes([10, 20, 30, 255]), m, 1.0)
            assert out.shape == (4,)
            assert out[3] == 255

    def test_zero_strength_is_identity(self, catalog, rgba_buffer):
        m = catalog.matrix("deuteranopia", "vienot")
        out = transform_buffer(rgba_buffer, m, 0.0)
        np.testing.assert_array_equal(out, rgba_buffer)

    def test_input_not_mutated(self, catalog, rgba_buffer):
        before = rgba_buffer.copy()
        transform_buffer(rgba_buffer, catalog.matrix("achromatopsia"), 1.0)
        np.testing.assert_array_equal(rgba_buffer, before)

    def test_not_idempotent_on_own_output(self, catalog):
        m = catalog.matrix("protanomaly", "machado")
        buf = np.array([255, 0, 0, 255], dtype=np.uint8)
        once = transform_buffer(buf, m, 1.0)
        again = transform_buffer(buf, m, 1.0)
        twice = transform_buffer(once, m, 1.0)
        np.testing.assert_array_equal(once, again)
        assert not np.array_equal(once, twice)


class TestInputs:
    def test_shape_and_dtype_preserved(self, identity_matrix, rgba_buffer):
        out = transform_buffer(rgba_buffer, identity_matrix, 1.0)
        assert out.shape == rgba_buffer.shape
        assert out.dtype == np.uint8

    @pytest.mark.parametrize(
        "buffer",
        [
            bytes([10, 20, 30, 255, 40, 50, 60, 128]),
            bytearray([10, 20, 30, 255, 40, 50, 60, 128]),
            [10, 20, 30, 255, 40, 50, 60, 128],
            np.array([10, 20, 30, 255, 40, 50, 60, 128], dtype=np.int64),
        ],
    )
    def test_accepted_buffer_types(self, buffer, catalog):
        m = catalog.matrix("deuteranomaly", "vienot")
        out = transform_buffer(buffer, m, 0.5)
        assert out.shape == (8,)
        assert out.dtype == np.uint8
        assert (out[3], out[7]) == (255, 128)

    def test_empty_buffer(self, identity_matrix):
        out = transform_buffer(b"", identity_matrix)
        assert out.size == 0

    def test_extrapolated_strength_is_clamped_to_bytes(self):
        buf = np.array([100, 100, 100, 7], dtype=np.uint8)
        with pytest.warns(RuntimeWarning):
            out = transform_buffer(buf, -np.eye(3), 2.0)
        np.testing.assert_array_equal(out, [0, 0, 0, 7])


class TestChunking:
    @pytest.mark.parametrize(
        "config",
        [
            TransformConfig(workers=1, chunk_pixels=1),
            TransformConfig(workers=1, chunk_pixels=7),
            TransformConfig(workers=3, chunk_pixels=7),
            TransformConfig(workers=4, chunk_pixels=16),
            TransformConfig(workers=2, chunk_pixels=10_000),
        ],
    )
    def test_result_independent_of_chunking(self, config, catalog, rgba_buffer):
        m = catalog.matrix("protanomaly", "vienot")
        reference = transform_buffer(
            rgba_buffer, m, 0.8, config=TransformConfig(workers=1, chunk_pixels=80)
        )
        out = transform_buffer(rgba_buffer, m, 0.8, config=config)
        np.testing.assert_array_equal(out, reference)

    @pytest.mark.parametrize("kwargs", [{"workers": 0}, {"chunk_pixels": 0}])
    def test_invalid_config(self, kwargs):
        with pytest.raises(ValueError):
            TransformConfig(**kwargs)


class TestCancellation:
    def test_cancelled_before_start(self, identity_matrix, rgba_buffer):
        token = CancelToken()
        token.cancel()
        with pytest.raises(TransformCancelled):
            transform_buffer(rgba_buffer, identity_matrix, cancel=token)

    def test_cancelled_mid_run_returns_nothing(self, catalog, rgba_buffer, monkeypatch):
        import cvdsim.transform.buffer as buffer_mod

        token = CancelToken()
        calls = []
        real_kernel = buffer_mod.simulate_rgb

        def cancelling_kernel(*args):
            calls.append(1)
            if len(calls) == 2:
                token.cancel()
            return real_kernel(*args)

        monkeypatch.setattr(buffer_mod, "simulate_rgb", cancelling_kernel)
        config = TransformConfig(workers=1, chunk_pixels=8)
        with pytest.raises(TransformCancelled):
            transform_buffer(
                rgba_buffer, catalog.matrix("achromatopsia"), cancel=token, config=config
            )
        # remaining chunks were skipped
        assert len(calls) == 2

    def test_cancel_after_last_chunk_still_raises(self, catalog, rgba_buffer, monkeypatch):
        import cvdsim.transform.buffer as buffer_mod

        token = CancelToken()
        real_kernel = buffer_mod.simulate_rgb

        def cancelling_kernel(*args):
            token.cancel()
            return real_kernel(*args)

        monkeypatch.setattr(buffer_mod, "simulate_rgb", cancelling_kernel)
        with pytest.raises(TransformCancelled):
            transform_buffer(
                rgba_buffer,
                catalog.matrix("achromatopsia"),
                cancel=token,
                config=TransformConfig(workers=1, chunk_pixels=1000),
            )

    def test_threaded_cancellation(self, catalog, rgba_buffer):
        token = CancelToken()
        token.cancel()
        config = TransformConfig(workers=4, chunk_pixels=4)
        with pytest.raises(TransformCancelled):
            transform_buffer(
                rgba_buffer, catalog.matrix("normal"), cancel=token, config=config
            )

    def test_uncancelled_token_completes(self, identity_matrix, rgba_buffer):
        token = CancelToken()
        out = transform_buffer(rgba_buffer, identity_matrix, cancel=token)
        assert not token.cancelled
        assert out.shape == rgba_buffer.shape


class TestValidation:
    @pytest.mark.parametrize("length", [1, 3, 5, 7])
    def test_length_not_multiple_of_four(self, length, identity_matrix):
        with pytest.raises(InvalidBufferLength):
            transform_buffer(bytes(length), identity_matrix)

    def test_out_of_range_samples(self, identity_matrix):
        with pytest.raises(InvalidChannelValue):
            transform_buffer([0, 0, 256, 255], identity_matrix)
        with pytest.raises(InvalidChannelValue):
            transform_buffer([0, -1, 0, 255], identity_matrix)

    def test_float_samples_rejected(self, identity_matrix):
        with pytest.raises(InvalidChannelValue):
            transform_buffer(np.zeros(8, dtype=np.float32), identity_matrix)

    def test_bad_matrix(self, rgba_buffer):
        with pytest.raises(InvalidMatrixShape):
            transform_buffer(rgba_buffer, np.eye(2))
