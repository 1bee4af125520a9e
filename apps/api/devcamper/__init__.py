"""DevCamper bootcamp directory API."""

__version__ = "1.0.0"
