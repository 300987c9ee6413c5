"""Short-term energy and adaptive voiced/unvoiced gating."""
import numpy as np
from lipsync.audio.models import EstimatorState

# Exponential moving average weights for the noise/speech energy trackers
_KEEP = 0.99
_BLEND = 0.01

# Share of each tracker in the decision threshold
_UNDER_WEIGHT = 0.85
_ABOVE_WEIGHT = 0.15


def frame_volume(samples: np.ndarray) -> float:
    """Mean squared amplitude of a frame (0.0 for an empty frame)."""
    if len(samples) == 0:
        return 0.0
    x = np.asarray(samples, dtype=np.float64)
    return float(np.mean(x * x))


def frame_rms(samples: np.ndarray) -> float:
    """Root mean square amplitude of a frame."""
    return float(np.sqrt(frame_volume(samples)))


def mic_level(rms: float, noise_floor: float = 0.02, gain: float = 20.0) -> float:
    """
    Map frame RMS to a 0..1 level for a microphone meter.
    
    Args:
        rms: Frame RMS
        noise_floor: RMS treated as silence
        gain: Scale applied above the noise floor
        
    Returns:
        Level clamped to [0, 1]
    """
    return float(np.clip((rms - noise_floor) * gain, 0.0, 1.0))


def gate_frame(volume: float, state: EstimatorState) -> bool:
    """
    Decide whether a frame is loud enough for spectral analysis.
    
    Uses the threshold left by the previous frame, then moves the matching
    tracker ("under" for quiet frames, "above" for loud ones) toward this
    frame's volume and recomputes the threshold.
    `state` is EstimatorState (expects under, above, threshold).
    
    Returns:
        True if the frame is voiced
    """
    voiced = volume >= state.threshold
    
    if voiced:
        state.above = state.above * _KEEP + volume * _BLEND
    else:
        state.under = state.under * _KEEP + volume * _BLEND
    state.threshold = state.under * _UNDER_WEIGHT + state.above * _ABOVE_WEIGHT
    
    return voiced
