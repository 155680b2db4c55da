"""Pydantic models for Query Service payloads and conversation state.

Provides type safety, validation, and the camelCase wire mapping.

Models:
    - ChatRequest: Outgoing chat query payload
    - ChatResponse: Answer text with optional table and chart
    - Chart: Tagged union over bar, line, pie, bubble and scatter charts
    - ProcessQueriesResponse: Bulk processing summary
    - ChatMessage: Individual message in the conversation
"""

from src.models.schemas import (
    BarChart,
    BubbleChart,
    Chart,
    ChartSeries,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    LineChart,
    PieChart,
    ProcessQueriesResponse,
    ScatterChart,
    TableData,
)

__all__ = [
    "BarChart",
    "BubbleChart",
    "Chart",
    "ChartSeries",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "LineChart",
    "PieChart",
    "ProcessQueriesResponse",
    "ScatterChart",
    "TableData",
]
