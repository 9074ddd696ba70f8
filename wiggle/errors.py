"""
Error taxonomy for rendering and export.

Jitter and history are pure and never raise these; failures only happen
where a raster surface is acquired or where frames are encoded.
"""


class WiggleError(Exception):
    pass


class ConfigurationError(WiggleError):
    """The renderer offers no capability the caller can use."""


class SurfaceUnavailableError(WiggleError):
    """A raster surface or drawing context could not be acquired."""


class EncodingError(WiggleError):
    """The GIF encoder failed mid-stream."""
