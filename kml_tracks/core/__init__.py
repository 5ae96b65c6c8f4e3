"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: KML tag names and sizing defaults
- exceptions: Exception taxonomy
- ingress: File and URL loading, single-flight loader
"""
