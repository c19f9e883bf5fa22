"""PhoneDrop — push files from a phone, watch them land on a live dashboard."""

__version__ = "0.1.0"
