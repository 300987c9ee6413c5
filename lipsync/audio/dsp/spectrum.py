"""Spectral envelope of an LPC model."""
import numpy as np
from lipsync.audio.models import is_power_of_two
from lipsync.core.exceptions import ConfigurationError


def lpc_envelope(coefficients: np.ndarray) -> np.ndarray:
    """
    Evaluate the all-pole envelope 1/|A(e^jw)| on FFT bins.
    
    Args:
        coefficients: Zero-padded inverse filter; length must be a power of two
        
    Returns:
        Non-negative magnitude per bin (0 where |A| is 0)
    """
    n = len(coefficients)
    if not is_power_of_two(n):
        raise ConfigurationError(f"FFT length must be a power of two, got {n}")
    
    magnitude = np.abs(np.fft.fft(coefficients))
    envelope = np.zeros(n, dtype=np.float64)
    nonzero = magnitude > 0
    envelope[nonzero] = 1.0 / magnitude[nonzero]
    return envelope
