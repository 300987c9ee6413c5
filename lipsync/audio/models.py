"""Audio data models and structures."""
from dataclasses import dataclass, field
from typing import NamedTuple, Optional
import numpy as np

from lipsync.core.config import settings
from lipsync.core.exceptions import ConfigurationError


UNVOICED = -1  # history sentinel for frames without a classified vowel


@dataclass
class AudioFrame:
    """Represents a single audio frame with metadata."""
    samples: np.ndarray  # float samples, roughly [-1, 1]
    sample_rate: int
    timestamp: float  # seconds on the caller's clock
    stream_id: str = "default"
    
    def __post_init__(self):
        """Validate frame data."""
        if not np.issubdtype(self.samples.dtype, np.floating):
            raise ValueError(f"Expected float samples, got {self.samples.dtype}")
        if len(self.samples.shape) != 1:
            raise ValueError(f"Expected mono (1D array), got shape {self.samples.shape}")


class FormantPair(NamedTuple):
    """First and second formant in Hz (0.0 when not found)."""
    f1: float
    f2: float


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


@dataclass(frozen=True)
class EstimatorConfig:
    """
    Per-session estimator configuration.
    
    Immutable once built; validated on construction so that a bad frame
    size is reported once instead of on every frame.
    """
    sample_rate: int = 44100
    frame_size: int = 1024
    lpc_order: int = 64
    vowel_window: int = 20
    speaking_threshold: float = 0.15
    speak_stop_timeout_ms: int = 1500
    vowel_lock_ms: int = 200
    level_noise_floor: float = 0.02
    level_gain: float = 20.0
    frame_budget_ms: int = 20
    
    def __post_init__(self):
        if self.sample_rate <= 0:
            raise ConfigurationError(f"sample_rate must be positive, got {self.sample_rate}")
        if not is_power_of_two(self.frame_size):
            raise ConfigurationError(
                f"frame_size must be a power of two for the FFT, got {self.frame_size}"
            )
        if not 1 <= self.lpc_order < self.frame_size:
            raise ConfigurationError(
                f"lpc_order must be in [1, frame_size), got {self.lpc_order} (frame_size={self.frame_size})"
            )
        if self.vowel_window < 1:
            raise ConfigurationError(f"vowel_window must be at least 1, got {self.vowel_window}")
        if not 0.0 <= self.speaking_threshold < 1.0:
            raise ConfigurationError(
                f"speaking_threshold must be in [0, 1), got {self.speaking_threshold}"
            )
        if self.speak_stop_timeout_ms < 0 or self.vowel_lock_ms < 0:
            raise ConfigurationError("timeouts must not be negative")
    
    @classmethod
    def from_settings(cls, **overrides) -> "EstimatorConfig":
        """Snapshot the current settings, with optional per-session overrides."""
        values = {
            "sample_rate": settings.sample_rate,
            "frame_size": settings.frame_size,
            "lpc_order": settings.lpc_order,
            "vowel_window": settings.vowel_window,
            "speaking_threshold": settings.speaking_threshold,
            "speak_stop_timeout_ms": settings.speak_stop_timeout_ms,
            "vowel_lock_ms": settings.vowel_lock_ms,
            "level_noise_floor": settings.level_noise_floor,
            "level_gain": settings.level_gain,
            "frame_budget_ms": settings.frame_budget_ms,
        }
        values.update(overrides)
        return cls(**values)
    
    @property
    def bin_width(self) -> float:
        """Frequency spacing of one FFT bin in Hz."""
        return self.sample_rate / self.frame_size


@dataclass
class EstimatorState:
    """Mutable state owned by one estimator instance."""
    # Adaptive energy thresholds, biased toward "unvoiced" at start
    under: float = 1e-6
    above: float = 1e-4
    threshold: float = 1e-5
    
    last_label: str = "n"
    speaking: bool = False
    lock_until: float = float("-inf")
    stop_deadline: Optional[float] = None
    frame_count: int = 0


@dataclass
class EstimatorEvent:
    """A vowel change or speaking-state transition."""
    kind: str  # "vowel" or "speak"
    value: str
    timestamp: float


@dataclass
class FrameAnalysis:
    """Per-frame result of the spectral stages."""
    volume: float
    rms: float
    voiced: bool
    formants: FormantPair = field(default_factory=lambda: FormantPair(0.0, 0.0))
    vowel_index: int = UNVOICED
