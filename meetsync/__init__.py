"""Room coordination, WebRTC signaling relay and periodic meeting minutes."""

__version__ = "0.1.0"
