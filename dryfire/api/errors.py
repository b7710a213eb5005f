class InvalidInput(ValueError):
    """Raised when a frame, background, ROI or config does not fit together."""
