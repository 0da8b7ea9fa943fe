"""Markup parsing and signal extraction package."""

# Use explicit imports when needed:
# from worker.extraction.parser import parse
# from worker.extraction.signals import SignalSet, ImageSignal, extract_signals
# from worker.extraction.fingerprints import detect_technologies, detect_social_presence

__all__ = [
    # Parser
    "parse",
    # Signals
    "SignalSet",
    "ImageSignal",
    "extract_signals",
    # Fingerprints
    "TechnologyMarker",
    "TECHNOLOGY_MARKERS",
    "SOCIAL_NETWORKS",
    "detect_technologies",
    "detect_social_presence",
]
