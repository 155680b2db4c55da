"""NCAA Chat - natural-language front-end for NCAA basketball data.

Combines NiceGUI for the chat page, httpx for Query Service calls,
Plotly for charts, FastAPI for hosting, and Pydantic for data validation.

Components:
    - chat: conversation state, submission and query history
    - client: Query Service HTTP client
    - render: chart and table shaping
    - ui: Web interface for chat interactions
    - models: Request/response schemas
    - api: FastAPI host application
"""

__version__ = "0.1.0"
