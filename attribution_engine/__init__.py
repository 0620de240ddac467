"""XAI Attribution Engine: normalizes feature-attribution exports for visualization."""

__version__ = "1.0.0"
