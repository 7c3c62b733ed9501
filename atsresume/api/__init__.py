"""
HTTP API

Thin FastAPI layer: parses request bodies, calls the templating and rendering
contexts, and maps failures to structured JSON errors.
"""
