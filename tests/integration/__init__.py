"""Integration tests for components working together as a system.

Coverage:
    - FastAPI host endpoints with real HTTP requests
    - Full conversation flow against an in-process Query Service app

Backends are served through ASGITransport. No network required.
"""
