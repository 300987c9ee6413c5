"""Formant (F1, F2) extraction from a spectral envelope."""
from typing import List
import numpy as np
from lipsync.audio.models import FormantPair

MAX_FORMANT_PEAKS = 5
MIN_FORMANT_HZ = 150.0
MAX_FORMANT_HZ = 5000.0


def find_peaks(envelope: np.ndarray) -> np.ndarray:
    """Indices i with envelope[i] strictly above both neighbours."""
    spec = np.asarray(envelope, dtype=np.float64)
    if len(spec) < 3:
        return np.zeros(0, dtype=np.int64)
    
    middle = spec[1:-1]
    is_peak = (middle > spec[:-2]) & (middle > spec[2:])
    return np.nonzero(is_peak)[0] + 1


def formant_candidates(
    envelope: np.ndarray,
    sample_rate: int,
    frame_size: int,
    max_peaks: int = MAX_FORMANT_PEAKS,
    min_hz: float = MIN_FORMANT_HZ,
    max_hz: float = MAX_FORMANT_HZ
) -> List[float]:
    """
    Pick formant frequencies from an envelope.
    
    Peaks are taken strongest first; the first `max_peaks` whose frequency
    lies in [min_hz, max_hz] are kept and returned in ascending frequency.
    Only bins up to Nyquist are scanned, the rest mirrors them.
    
    Args:
        envelope: Spectral envelope, one value per FFT bin
        sample_rate: Sample rate in Hz
        frame_size: FFT length used to build the envelope
        
    Returns:
        Accepted frequencies in Hz, ascending
    """
    spec = np.asarray(envelope, dtype=np.float64)[:frame_size // 2 + 1]
    peaks = find_peaks(spec)
    if peaks.size == 0:
        return []
    
    bin_width = sample_rate / frame_size
    strongest_first = peaks[np.argsort(-spec[peaks], kind="stable")]
    
    freqs = []
    for index in strongest_first:
        if len(freqs) >= max_peaks:
            break
        f = float(index) * bin_width
        if min_hz <= f <= max_hz:
            freqs.append(f)
    
    return sorted(freqs)


def extract_formants(envelope: np.ndarray, sample_rate: int, frame_size: int) -> FormantPair:
    """Return (F1, F2); missing formants are reported as 0.0."""
    freqs = formant_candidates(envelope, sample_rate, frame_size)
    f1 = freqs[0] if len(freqs) > 0 else 0.0
    f2 = freqs[1] if len(freqs) > 1 else 0.0
    return FormantPair(f1, f2)
