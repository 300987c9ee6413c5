"""Command-line entrypoint: run the vowel estimator over a WAV file."""
import argparse
import json
import sys
from typing import List, Optional
import numpy as np
from scipy.io import wavfile

from lipsync.audio.models import EstimatorConfig, EstimatorEvent
from lipsync.audio.pipeline import VowelEstimator
from lipsync.audio.streaming import iter_frames
from lipsync.core.config import settings
from lipsync.core.exceptions import ConfigurationError
from lipsync.core.logging import logger, setup_logging


def load_wav(path: str) -> tuple[int, np.ndarray]:
    """
    Read a WAV file as mono float samples in [-1, 1].
    
    Returns:
        (sample_rate, samples)
    """
    sample_rate, data = wavfile.read(path)
    
    if data.dtype == np.uint8:
        audio = (data.astype(np.float64) - 128.0) / 128.0
    elif np.issubdtype(data.dtype, np.integer):
        audio = data.astype(np.float64) / float(np.iinfo(data.dtype).max + 1)
    else:
        audio = data.astype(np.float64)
    
    # Mix down to mono
    if audio.ndim > 1:
        audio = audio.mean(axis=1)
    
    return int(sample_rate), audio


def analyze_file(path: str, frame_size: int, lpc_order: int) -> List[EstimatorEvent]:
    """Run the estimator over a whole file on the file's own clock."""
    sample_rate, audio = load_wav(path)
    config = EstimatorConfig.from_settings(
        sample_rate=sample_rate,
        frame_size=frame_size,
        lpc_order=lpc_order
    )
    estimator = VowelEstimator(config)
    
    events = []
    for frame in iter_frames(audio, sample_rate, frame_size, stream_id=path):
        events.extend(estimator.process_frame(frame))
    
    end_time = len(audio) / sample_rate
    events.extend(estimator.close(end_time))
    logger.info(f"Analyzed {estimator.state.frame_count} frames from {path}, {len(events)} events")
    return events


def format_event(event: EstimatorEvent, as_json: bool = False) -> str:
    if as_json:
        return json.dumps({"time": round(event.timestamp, 4), "kind": event.kind, "value": event.value})
    return f"{event.timestamp:8.3f}  {event.kind:<5}  {event.value}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lipsync-analyze",
        description="Estimate vowel and speaking events from a WAV file"
    )
    parser.add_argument("path", help="WAV file to analyze")
    parser.add_argument("--frame-size", type=int, default=settings.frame_size,
                        help="samples per frame (power of two)")
    parser.add_argument("--lpc-order", type=int, default=settings.lpc_order,
                        help="LPC model order")
    parser.add_argument("--json", action="store_true", help="print events as JSON lines")
    parser.add_argument("--log-level", default=settings.log_level,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        type=str.upper, help="logging verbosity")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    
    try:
        events = analyze_file(args.path, args.frame_size, args.lpc_order)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    
    for event in events:
        print(format_event(event, as_json=args.json))
    return 0


if __name__ == "__main__":
    sys.exit(main())
