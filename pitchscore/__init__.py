"""PitchScore — submit a startup pitch, get a (simulated) strengths/weaknesses assessment."""

__version__ = "0.1.0"
