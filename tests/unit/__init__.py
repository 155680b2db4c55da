"""Unit tests for individual components in isolation.

Coverage:
    - models/: Pydantic validation and wire-name mapping
    - chat/: Controller, history recall and message formatting
    - client/: Query Service requests and error conversion
    - render/: Chart dispatch and table shaping

Uses an in-memory Query Service double and httpx.MockTransport.
"""
