"""Helper functions for fitting incoming sample blocks to the estimator frame."""
import numpy as np


def fit_frame(samples: np.ndarray, frame_size: int) -> np.ndarray:
    """
    Zero-pad or truncate a block of samples to exactly `frame_size`.
    
    Audio callbacks do not always deliver full blocks; missing samples
    are treated as silence.
    
    Args:
        samples: Block of float samples
        frame_size: Required frame length
        
    Returns:
        1D float64 array of length frame_size
    """
    x = np.asarray(samples, dtype=np.float64).ravel()
    if len(x) == frame_size:
        return x
    if len(x) > frame_size:
        return x[:frame_size]
    return np.pad(x, (0, frame_size - len(x)), mode='constant')
