"""Unit tests for LPC estimation and the spectral envelope."""
import pytest
import numpy as np
from lipsync.audio.dsp.window import hamming_window
from lipsync.audio.dsp.lpc import (
    autocorrelation,
    levinson_durbin,
    lpc_coefficients,
    peak_normalize,
)
from lipsync.audio.dsp.spectrum import lpc_envelope
from lipsync.core.exceptions import ConfigurationError

SAMPLE_RATE = 44100
FRAME_SIZE = 1024


def _tone(bin_index: int, amplitude: float = 0.5, noise: float = 0.01) -> np.ndarray:
    """Sine exactly on an FFT bin plus a little noise for conditioning."""
    rng = np.random.default_rng(42)
    n = np.arange(FRAME_SIZE)
    tone = amplitude * np.sin(2 * np.pi * bin_index * n / FRAME_SIZE)
    return tone + noise * rng.standard_normal(FRAME_SIZE)


def test_peak_normalize():
    """Largest absolute sample becomes 1; silence stays zero."""
    result = peak_normalize(np.array([0.1, -0.4, 0.2]))
    np.testing.assert_allclose(result, [0.25, -1.0, 0.5])
    
    silent = peak_normalize(np.zeros(8))
    assert not np.any(silent)


def test_autocorrelation_biased_sum():
    """r[l] sums x[n] * x[n + l] over the overlapping part only."""
    x = np.array([1.0, 2.0, 3.0])
    
    r = autocorrelation(x, order=4)
    
    np.testing.assert_allclose(r, [14.0, 8.0, 3.0, 0.0, 0.0])


def test_levinson_durbin_recovers_ar1():
    """Exact AR(1) autocorrelation yields a single predictor coefficient."""
    r = np.array([1.0, 0.9, 0.81, 0.729])
    
    coefficients, error = levinson_durbin(r, order=3)
    
    np.testing.assert_allclose(coefficients, [1.0, -0.9, 0.0, 0.0], atol=1e-12)
    assert error == pytest.approx(0.19)


def test_levinson_durbin_zero_autocorrelation_uses_epsilon():
    """r[0] = 0 does not raise or produce NaN."""
    coefficients, error = levinson_durbin(np.zeros(65), order=64)
    
    assert coefficients[0] == 1.0
    assert np.all(np.isfinite(coefficients))
    assert not np.any(coefficients[1:])
    assert error == 0.0


def test_lpc_zero_frame_returns_zero_vector():
    """Degenerate silence yields an all-zero coefficient vector."""
    result = lpc_coefficients(np.zeros(FRAME_SIZE), order=64)
    
    assert len(result) == FRAME_SIZE
    assert not np.any(result)


def test_lpc_constant_frame_is_finite():
    """A constant (highly predictable) frame stays numerically stable."""
    windowed = hamming_window(np.full(FRAME_SIZE, 0.3))
    
    result = lpc_coefficients(windowed, order=64)
    
    assert len(result) == FRAME_SIZE
    assert result[0] == 1.0
    assert np.all(np.isfinite(result))
    assert not np.any(result[65:])


def test_lpc_coefficients_zero_padded_to_frame():
    """Only the first order + 1 entries can be non-zero."""
    windowed = hamming_window(_tone(24))
    
    result = lpc_coefficients(windowed, order=16)
    
    assert len(result) == FRAME_SIZE
    assert result[0] == 1.0
    assert not np.any(result[17:])


def test_envelope_peaks_at_tone_frequency():
    """The LPC envelope of a tone peaks at the tone's bin."""
    windowed = hamming_window(_tone(24))
    coefficients = lpc_coefficients(windowed, order=64)
    
    envelope = lpc_envelope(coefficients)
    
    assert len(envelope) == FRAME_SIZE
    assert np.all(envelope >= 0)
    peak_bin = int(np.argmax(envelope[:FRAME_SIZE // 2]))
    assert abs(peak_bin - 24) <= 1


def test_envelope_zero_magnitude_bins_are_zero():
    """Bins where |A| is 0 map to 0 instead of infinity."""
    envelope = lpc_envelope(np.zeros(8))
    
    assert not np.any(envelope)


def test_envelope_requires_power_of_two():
    """Non power-of-two FFT lengths are rejected."""
    with pytest.raises(ConfigurationError):
        lpc_envelope(np.ones(1000))
