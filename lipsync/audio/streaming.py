"""Helpers for splitting continuous audio into estimator frames."""
from typing import Iterator
import numpy as np
from lipsync.audio.models import AudioFrame
from lipsync.audio.ingestion import fit_frame


def iter_frames(
    samples: np.ndarray,
    sample_rate: int,
    frame_size: int,
    start_time: float = 0.0,
    stream_id: str = "offline"
) -> Iterator[AudioFrame]:
    """
    Split a signal into consecutive, non-overlapping frames.
    
    The last partial frame is zero-padded. Timestamps follow the signal's
    own clock: start_time + i * frame_size / sample_rate.
    
    Args:
        samples: Mono float signal
        sample_rate: Sample rate in Hz
        frame_size: Samples per frame
        start_time: Time of the first sample in seconds
        stream_id: Identifier copied into every frame
        
    Yields:
        AudioFrame objects
    """
    x = np.asarray(samples, dtype=np.float64).ravel()
    frame_seconds = frame_size / sample_rate
    
    for i, offset in enumerate(range(0, len(x), frame_size)):
        yield AudioFrame(
            samples=fit_frame(x[offset:offset + frame_size], frame_size),
            sample_rate=sample_rate,
            timestamp=start_time + i * frame_seconds,
            stream_id=stream_id
        )
