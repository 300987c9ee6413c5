"""Unit tests for Hamming windowing."""
import pytest
import numpy as np
from lipsync.audio.dsp.window import hamming_window


def test_window_of_zeros_is_zeros():
    """Windowing a silent frame leaves it silent."""
    result = hamming_window(np.zeros(1024))
    
    assert len(result) == 1024
    assert not np.any(result)


def test_window_forces_ends_to_zero():
    """First and last samples are zeroed even though w[0] = 0.08."""
    result = hamming_window(np.ones(16))
    
    assert result[0] == 0.0
    assert result[-1] == 0.0


def test_window_matches_raised_cosine():
    """Interior samples follow 0.54 - 0.46 cos(2 pi i / (N - 1))."""
    n = 64
    samples = np.linspace(-1.0, 1.0, n)
    i = np.arange(n)
    expected = samples * (0.54 - 0.46 * np.cos(2 * np.pi * i / (n - 1)))
    
    result = hamming_window(samples)
    
    np.testing.assert_allclose(result[1:-1], expected[1:-1])
    # Center of the window is (close to) unity gain
    assert result[n // 2] == pytest.approx(samples[n // 2], rel=0.01)


def test_window_does_not_modify_input():
    """The caller's frame is not written to."""
    samples = np.ones(8)
    hamming_window(samples)
    
    assert np.all(samples == 1.0)


def test_window_empty_frame():
    """Empty frame is handled gracefully."""
    assert len(hamming_window(np.array([]))) == 0
