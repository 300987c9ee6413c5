"""Temporal smoothing of vowel classifications and speaking-state tracking."""
from typing import List, Optional
from lipsync.audio.buffers import VowelHistory
from lipsync.audio.models import EstimatorEvent, EstimatorState
from lipsync.audio.vowels import MOUTH_CLOSED, vowel_label
from lipsync.core.logging import logger

SPEAK_START = "start"
SPEAK_STOP = "stop"


class SpeakingStateMachine:
    """
    Turns raw per-frame classifications into vowel and speaking events.
    
    Speaking starts on the first frame whose history voiced ratio exceeds
    the threshold and stops once no such frame has been seen for
    `stop_timeout` seconds. While speaking, a new vowel is emitted only if
    it differs from the last one and the `lock` window has passed.
    All timing is driven by the `now` values passed in (seconds).
    """
    
    def __init__(
        self,
        window: int = 20,
        threshold: float = 0.15,
        stop_timeout: float = 1.5,
        lock: float = 0.2,
        state: Optional[EstimatorState] = None
    ):
        self.history = VowelHistory(window)
        self.threshold = threshold
        self.stop_timeout = stop_timeout
        self.lock = lock
        self.state = state if state is not None else EstimatorState()
    
    def poll(self, now: float) -> List[EstimatorEvent]:
        """Emit "stop" and "N" if the speak-stop deadline has passed."""
        state = self.state
        if not state.speaking or state.stop_deadline is None or now < state.stop_deadline:
            return []
        
        stopped_at = state.stop_deadline
        state.speaking = False
        state.stop_deadline = None
        state.last_label = MOUTH_CLOSED
        logger.info(f"Speaking stopped at {stopped_at:.3f}s")
        return [
            EstimatorEvent("speak", SPEAK_STOP, stopped_at),
            EstimatorEvent("vowel", MOUTH_CLOSED, stopped_at),
        ]
    
    def update(self, raw_index: int, now: float) -> List[EstimatorEvent]:
        """
        Push one raw classification and return the events it causes.
        
        Args:
            raw_index: Cluster index, or -1 for an unvoiced/unclassified frame
            now: Frame time in seconds
        """
        events = self.poll(now)
        self.history.push(raw_index)
        
        if self.history.voiced_ratio() <= self.threshold:
            return events
        
        state = self.state
        label = vowel_label(raw_index)
        
        if not state.speaking:
            state.speaking = True
            logger.info(f"Speaking started at {now:.3f}s")
            events.append(EstimatorEvent("speak", SPEAK_START, now))
        state.stop_deadline = now + self.stop_timeout
        
        if label != state.last_label and now >= state.lock_until:
            logger.debug(f"Vowel {state.last_label} -> {label} at {now:.3f}s")
            state.last_label = label
            state.lock_until = now + self.lock
            events.append(EstimatorEvent("vowel", label, now))
        
        return events
    
    def close(self, now: float) -> List[EstimatorEvent]:
        """End the session: a pending stop is emitted immediately."""
        state = self.state
        if state.speaking and (state.stop_deadline is None or state.stop_deadline > now):
            state.stop_deadline = now
        return self.poll(now)
