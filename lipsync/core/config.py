"""Configuration settings for the lip-sync vowel estimator."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Audio settings
    sample_rate: int = 44100  # Hz, typical browser/microphone rate
    frame_size: int = 1024  # samples per frame, must be a power of two
    
    # LPC / formant settings
    lpc_order: int = 64  # number of LPC poles
    
    # Temporal smoothing settings
    vowel_window: int = 20  # frames kept in the vowel history
    speaking_threshold: float = 0.15  # voiced ratio that counts as speaking
    speak_stop_timeout_ms: int = 1500  # silence before "stop" is emitted
    vowel_lock_ms: int = 200  # minimum time between vowel changes
    
    # Level meter settings
    level_noise_floor: float = 0.02  # RMS subtracted before scaling
    level_gain: float = 20.0  # scale applied above the noise floor
    
    # Performance settings
    frame_budget_ms: int = 20  # Target per-frame processing time
    
    # Logging
    log_level: str = "INFO"
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
