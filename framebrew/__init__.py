"""Frame Brew: short-form video creation, review and generation backend."""

__version__ = "0.1.0"
