"""Linear predictive coding: autocorrelation and Levinson-Durbin recursion."""
from typing import Optional, Tuple
import numpy as np

# Divisor used when the prediction error reaches exactly zero
ERROR_EPSILON = 1e-12


def peak_normalize(samples: np.ndarray) -> np.ndarray:
    """
    Scale a frame so its largest absolute sample is 1.
    
    Returns a zero vector when the frame is silent (peak of 0).
    """
    x = np.asarray(samples, dtype=np.float64)
    if x.size == 0:
        return x.copy()
    peak = np.max(np.abs(x))
    if peak == 0:
        return np.zeros_like(x)
    return x / peak


def autocorrelation(samples: np.ndarray, order: int) -> np.ndarray:
    """
    Biased autocorrelation r[0..order].
    
    r[l] = sum(x[n] * x[n + l]) for n in 0..N-1-l; lags beyond the frame are 0.
    """
    x = np.asarray(samples, dtype=np.float64)
    n = len(x)
    r = np.zeros(order + 1, dtype=np.float64)
    for lag in range(min(order + 1, n)):
        r[lag] = np.dot(x[:n - lag], x[lag:])
    return r


def levinson_durbin(r: np.ndarray, order: int) -> Tuple[np.ndarray, float]:
    """
    Solve the LPC normal equations by Levinson-Durbin recursion.
    
    The recursion runs in predictor form,
    k[i] = (r[i] - sum(a[j] * r[i - j], 0 < j < i)) / e[i - 1],
    substituting ERROR_EPSILON for e[i - 1] when it is exactly zero.
    Stages whose reflection coefficient leaves the unit interval are
    dropped, which keeps the model stable and the output finite.
    
    Args:
        r: Autocorrelation values r[0..order]
        order: Number of recursion stages
        
    Returns:
        (coefficients, error): the inverse filter [1, -a1, ..., -a_order]
        and the final prediction error
    """
    a = np.zeros(order + 1, dtype=np.float64)
    error = float(r[0])
    
    for i in range(1, order + 1):
        acc = np.dot(a[1:i], r[i - 1:0:-1])
        denom = error if error != 0 else ERROR_EPSILON
        k = (r[i] - acc) / denom
        
        if not np.isfinite(k) or abs(k) > 1.0:
            break
        
        previous = a[1:i].copy()
        a[i] = k
        a[1:i] = previous - k * previous[::-1]
        error = (1.0 - k * k) * error
    
    coefficients = -a
    coefficients[0] = 1.0
    return coefficients, error


def lpc_coefficients(samples: np.ndarray, order: int, n_fft: Optional[int] = None) -> np.ndarray:
    """
    Estimate the LPC inverse filter of a (windowed) frame.
    
    Args:
        samples: Windowed frame
        order: LPC order
        n_fft: Output length; defaults to the frame length
        
    Returns:
        Coefficient vector of length n_fft, zero-padded after order + 1.
        A silent frame yields an all-zero vector.
    """
    if n_fft is None:
        n_fft = len(samples)
    
    normalized = peak_normalize(samples)
    out = np.zeros(n_fft, dtype=np.float64)
    if not np.any(normalized):
        return out
    
    r = autocorrelation(normalized, order)
    coefficients, _ = levinson_durbin(r, order)
    
    count = min(len(coefficients), n_fft)
    out[:count] = coefficients[:count]
    return out
