"""Main vowel estimation pipeline orchestrator."""
import time
from typing import Callable, List, Optional, Union
import numpy as np

from lipsync.audio.models import (
    AudioFrame,
    EstimatorConfig,
    EstimatorEvent,
    EstimatorState,
    FormantPair,
    FrameAnalysis,
)
from lipsync.audio.buffers import VowelHistory
from lipsync.audio.ingestion import fit_frame
from lipsync.audio.dsp.window import hamming_window
from lipsync.audio.dsp.energy import frame_volume, gate_frame, mic_level
from lipsync.audio.dsp.lpc import lpc_coefficients
from lipsync.audio.dsp.spectrum import lpc_envelope
from lipsync.audio.dsp.formant import extract_formants
from lipsync.audio.smoothing import SpeakingStateMachine
from lipsync.audio.vowels import classify_vowel
from lipsync.core.logging import logger

VowelCallback = Callable[[str], None]
SpeakStatusCallback = Callable[[str], None]
LevelCallback = Callable[[float, float], None]


def estimate_formants(samples: np.ndarray, config: EstimatorConfig) -> FormantPair:
    """
    Run the spectral stages on one frame.
    
    Window -> LPC -> envelope -> formant peaks. A silent frame (peak of 0)
    returns (0, 0) without touching the FFT.
    """
    windowed = hamming_window(samples)
    coefficients = lpc_coefficients(windowed, config.lpc_order, config.frame_size)
    if not np.any(coefficients):
        return FormantPair(0.0, 0.0)
    
    envelope = lpc_envelope(coefficients)
    return extract_formants(envelope, config.sample_rate, config.frame_size)


class VowelEstimator:
    """
    Real-time vowel estimator for one audio session.
    
    Feed fixed-size frames to `process_frame`; vowel labels
    ("a", "i", "u", "e", "o", "n", "N") and speaking status ("start", "stop")
    are returned as events and passed to the registered callbacks.
    Not safe for concurrent use; create one instance per session.
    """
    
    def __init__(
        self,
        config: Optional[EstimatorConfig] = None,
        on_vowel: Optional[VowelCallback] = None,
        on_speak_status: Optional[SpeakStatusCallback] = None,
        on_level: Optional[LevelCallback] = None
    ):
        """
        Initialize the estimator.
        
        Args:
            config: Session configuration (defaults to current settings)
            on_vowel: Called with each emitted vowel label
            on_speak_status: Called with "start" / "stop"
            on_level: Called per frame with (rms, meter level 0..1)
        
        Raises:
            ConfigurationError: If the configuration is unusable
        """
        self.config = config if config is not None else EstimatorConfig.from_settings()
        self.on_vowel = on_vowel
        self.on_speak_status = on_speak_status
        self.on_level = on_level
        
        self._state = EstimatorState()
        self._smoother = self._build_smoother()
        
        logger.debug(
            f"VowelEstimator ready: {self.config.sample_rate} Hz, "
            f"frame {self.config.frame_size}, LPC order {self.config.lpc_order}"
        )
    
    def _build_smoother(self) -> SpeakingStateMachine:
        return SpeakingStateMachine(
            window=self.config.vowel_window,
            threshold=self.config.speaking_threshold,
            stop_timeout=self.config.speak_stop_timeout_ms / 1000.0,
            lock=self.config.vowel_lock_ms / 1000.0,
            state=self._state
        )
    
    @property
    def state(self) -> EstimatorState:
        return self._state
    
    @property
    def history(self) -> VowelHistory:
        return self._smoother.history
    
    def set_callbacks(
        self,
        on_vowel: Optional[VowelCallback],
        on_speak_status: Optional[SpeakStatusCallback]
    ) -> None:
        """Register vowel and speaking-status handlers."""
        self.on_vowel = on_vowel
        self.on_speak_status = on_speak_status
    
    def analyze(self, samples: np.ndarray) -> FrameAnalysis:
        """
        Gate and classify one frame without touching the speaking state.
        
        Updates the adaptive energy thresholds.
        """
        volume = frame_volume(samples)
        analysis = FrameAnalysis(volume=volume, rms=float(np.sqrt(volume)), voiced=False)
        
        if not gate_frame(volume, self._state):
            return analysis
        
        analysis.voiced = True
        try:
            analysis.formants = estimate_formants(samples, self.config)
        except Exception as e:
            logger.error(f"Formant estimation failed: {e}", exc_info=True)
            # Treat as unclassified to keep the stream going
            return analysis
        
        analysis.vowel_index = classify_vowel(*analysis.formants)
        return analysis
    
    def process_frame(
        self,
        frame: Union[AudioFrame, np.ndarray],
        now: Optional[float] = None
    ) -> List[EstimatorEvent]:
        """
        Process one frame through the full pipeline.
        
        Args:
            frame: AudioFrame or 1D sample array of length config.frame_size
            now: Frame time in seconds; defaults to the frame timestamp, or
                 time.monotonic() for bare arrays
        
        Returns:
            Events emitted by this frame, in order
        """
        start_time = time.perf_counter()
        
        if isinstance(frame, AudioFrame):
            samples = frame.samples
            if now is None:
                now = frame.timestamp
            if frame.sample_rate != self.config.sample_rate:
                logger.warning(
                    f"Sample rate mismatch on stream {frame.stream_id}: "
                    f"{frame.sample_rate} != {self.config.sample_rate}"
                )
        else:
            samples = np.asarray(frame, dtype=np.float64)
        if now is None:
            now = time.monotonic()
        
        if len(samples) != self.config.frame_size:
            logger.warning(f"Frame length mismatch: {len(samples)} -> {self.config.frame_size}")
            samples = fit_frame(samples, self.config.frame_size)
        
        analysis = self.analyze(samples)
        self._state.frame_count += 1
        
        if self.on_level is not None:
            level = mic_level(analysis.rms, self.config.level_noise_floor, self.config.level_gain)
            self.on_level(analysis.rms, level)
        
        events = self._smoother.update(analysis.vowel_index, now)
        self._dispatch(events)
        
        # Log processing time if it exceeds the frame budget
        processing_time = (time.perf_counter() - start_time) * 1000
        if processing_time > self.config.frame_budget_ms:
            logger.warning(
                f"Frame processing took {processing_time:.2f}ms (target: {self.config.frame_budget_ms}ms)"
            )
        
        return events
    
    def poll(self, now: Optional[float] = None) -> List[EstimatorEvent]:
        """Emit a pending speak stop without a new frame."""
        events = self._smoother.poll(time.monotonic() if now is None else now)
        self._dispatch(events)
        return events
    
    def close(self, now: Optional[float] = None) -> List[EstimatorEvent]:
        """End the session; if still speaking, "stop" and "N" are emitted now."""
        events = self._smoother.close(time.monotonic() if now is None else now)
        self._dispatch(events)
        return events
    
    def reset(self) -> None:
        """Forget thresholds, history and speaking state."""
        self._state = EstimatorState()
        self._smoother.state = self._state
        self._smoother.history.clear()
    
    def _dispatch(self, events: List[EstimatorEvent]) -> None:
        for event in events:
            if event.kind == "vowel" and self.on_vowel is not None:
                self.on_vowel(event.value)
            elif event.kind == "speak" and self.on_speak_status is not None:
                self.on_speak_status(event.value)
