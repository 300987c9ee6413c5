"""Hamming windowing applied before spectral analysis."""
import numpy as np


def hamming_window(samples: np.ndarray) -> np.ndarray:
    """
    Apply a Hamming window to a frame.
    
    w[i] = 0.54 - 0.46 * cos(2*pi*i / (N-1)); the first and last samples
    are forced to zero.
    
    Args:
        samples: Input frame (1D)
        
    Returns:
        New windowed array of the same length
    """
    n = len(samples)
    if n == 0:
        return np.zeros(0, dtype=np.float64)
    
    windowed = np.asarray(samples, dtype=np.float64) * np.hamming(n)
    windowed[0] = 0.0
    windowed[-1] = 0.0
    return windowed
