"""AUV Console: remote operations for an onboard robotics computer."""

__version__ = "0.1.0"
