"""Test package for the NCAA chat front-end.

Unit tests for isolated logic and integration tests for workflows.

Structure:
    - unit/: Individual function and class tests
    - integration/: Host app and end-to-end conversation tests

Leverages pytest with pytest-check for soft assertions.
"""
