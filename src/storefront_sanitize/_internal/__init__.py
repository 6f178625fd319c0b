"""Internal scanning passes. Not part of the public API."""
