"""Fixed-capacity history of per-frame vowel classifications."""
import numpy as np
from lipsync.audio.models import UNVOICED


class VowelHistory:
    """Circular buffer of the last `capacity` raw classifications."""
    
    def __init__(self, capacity: int = 20):
        """
        Initialize history.
        
        Args:
            capacity: Number of frames kept; starts filled with UNVOICED
        """
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._values = np.full(capacity, UNVOICED, dtype=np.int64)
        self._cursor = 0
    
    def __len__(self) -> int:
        return len(self._values)
    
    def push(self, value: int) -> None:
        """Overwrite the oldest entry with `value`; negatives are stored as UNVOICED."""
        self._values[self._cursor] = value if value >= 0 else UNVOICED
        self._cursor = (self._cursor + 1) % len(self._values)
    
    def voiced_ratio(self) -> float:
        """Fraction of entries holding a vowel index."""
        return float(np.count_nonzero(self._values >= 0)) / len(self._values)
    
    def to_list(self) -> list[int]:
        """Entries from oldest to newest."""
        return np.roll(self._values, -self._cursor).tolist()
    
    def clear(self) -> None:
        self._values.fill(UNVOICED)
        self._cursor = 0
