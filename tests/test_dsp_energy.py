"""Unit tests for the energy gate and level meter."""
import pytest
import numpy as np
from lipsync.audio.models import EstimatorState
from lipsync.audio.dsp.energy import frame_volume, frame_rms, gate_frame, mic_level


def test_frame_volume_is_mean_square():
    """Volume is the mean of squared samples."""
    samples = np.array([0.5, -0.5, 0.5, -0.5])
    
    assert frame_volume(samples) == pytest.approx(0.25)
    assert frame_rms(samples) == pytest.approx(0.5)
    assert frame_volume(np.array([])) == 0.0


def test_gate_initial_state_biased_to_unvoiced():
    """Fresh state starts from the small positive constants."""
    state = EstimatorState()
    
    assert state.threshold == 1e-5
    assert state.above == 1e-4
    assert state.under == 1e-6


def test_gate_silence_is_unvoiced():
    """A silent frame is unvoiced and pulls the 'under' tracker down."""
    state = EstimatorState()
    
    voiced = gate_frame(0.0, state)
    
    assert voiced is False
    assert state.under == pytest.approx(1e-6 * 0.99)
    assert state.above == 1e-4
    assert state.threshold == pytest.approx(0.85 * state.under + 0.15 * state.above)


def test_gate_loud_frame_is_voiced():
    """A loud frame is voiced and moves the 'above' tracker."""
    state = EstimatorState()
    
    voiced = gate_frame(0.1, state)
    
    assert voiced is True
    assert state.above == pytest.approx(1e-4 * 0.99 + 0.1 * 0.01)
    assert state.under == 1e-6
    assert state.threshold == pytest.approx(0.85 * state.under + 0.15 * state.above)


def test_gate_threshold_rises_with_speech_level():
    """After sustained loud speech, a quiet frame no longer passes the gate."""
    state = EstimatorState()
    quiet_volume = 0.005
    
    # Quiet frame passes against the initial threshold
    assert gate_frame(quiet_volume, EstimatorState()) is True
    
    for _ in range(2000):
        assert gate_frame(0.1, state) is True
    
    assert state.threshold == pytest.approx(0.85 * 1e-6 + 0.15 * 0.1, rel=0.01)
    assert gate_frame(quiet_volume, state) is False


def test_mic_level_clamped():
    """Level meter is clamped to [0, 1]."""
    assert mic_level(0.0, noise_floor=0.02, gain=20.0) == 0.0
    assert mic_level(0.045, noise_floor=0.02, gain=20.0) == pytest.approx(0.5)
    assert mic_level(1.0, noise_floor=0.02, gain=20.0) == 1.0
