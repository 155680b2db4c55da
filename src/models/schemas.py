"""Pydantic models for the Query Service payloads and chat messages.

Field names are snake_case in Python and camelCase on the wire.
"""

import logging
from typing import Annotated, Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        query: The user's natural-language question.
    """

    query: str = Field(..., min_length=1)

    @field_validator("query", mode="before")
    @classmethod
    def strip_query(cls, v: str) -> str:
        """Strip whitespace from query before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class TableData(BaseModel):
    """Tabular result. Rows are not checked against the column count."""

    columns: list[str] = Field(default_factory=list)
    rows: list[list[Any]] = Field(default_factory=list)

    @field_validator("columns", mode="before")
    @classmethod
    def stringify_columns(cls, v: Any) -> Any:
        """Accept non-string headers such as season years."""
        if isinstance(v, list):
            return ["" if column is None else str(column) for column in v]
        return v


class ChartSeries(BaseModel):
    """One line of a multi-series line chart."""

    model_config = _WIRE_CONFIG

    name: str | None = None
    x: list[Any] = Field(default_factory=list)
    y: list[Any] = Field(default_factory=list)
    labels: list[Any] | None = None


class _ChartBase(BaseModel):
    model_config = _WIRE_CONFIG

    labels: list[Any] | None = None
    x_label: str | None = None
    y_label: str | None = None


class _CartesianChart(_ChartBase):
    x: list[Any] = Field(default_factory=list)
    y: list[Any] = Field(default_factory=list)


class BarChart(_CartesianChart):
    chart_type: Literal["bar"] = "bar"


class LineChart(_CartesianChart):
    """Single line, or one line per entry of ``series`` when present."""

    chart_type: Literal["line", "multi_line"] = "line"
    series: list[ChartSeries] | None = None


class PieChart(_ChartBase):
    chart_type: Literal["pie"] = "pie"
    values: list[float | None] = Field(default_factory=list)


class BubbleChart(_CartesianChart):
    chart_type: Literal["bubble"] = "bubble"
    sizes: list[float | None] = Field(default_factory=list)


class ScatterChart(_CartesianChart):
    """Plain marker plot; also receives every unrecognised chart type."""

    chart_type: str = "scatter"


_CHART_TAGS = {"bar": "bar", "line": "line", "multi_line": "line", "pie": "pie", "bubble": "bubble"}


def _chart_tag(value: Any) -> str:
    if isinstance(value, dict):
        chart_type = value.get("chartType", value.get("chart_type"))
    else:
        chart_type = getattr(value, "chart_type", None)
    return _CHART_TAGS.get(chart_type, "scatter")


Chart = Annotated[
    Annotated[BarChart, Tag("bar")]
    | Annotated[LineChart, Tag("line")]
    | Annotated[PieChart, Tag("pie")]
    | Annotated[BubbleChart, Tag("bubble")]
    | Annotated[ScatterChart, Tag("scatter")],
    Discriminator(_chart_tag),
]


class ChatResponse(BaseModel):
    """Answer returned by the Query Service.

    Attributes:
        message: Text answer.
        table: Optional tabular result (``tableData`` on the wire).
        chart: Optional chart description (``graphData`` on the wire).
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str = ""
    table: TableData | None = Field(
        default=None,
        validation_alias=AliasChoices("tableData", "table"),
        serialization_alias="tableData",
    )
    chart: Chart | None = Field(
        default=None,
        validation_alias=AliasChoices("graphData", "chart"),
        serialization_alias="graphData",
    )

    @field_validator("table", "chart", mode="wrap")
    @classmethod
    def drop_malformed_visual(
        cls, v: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        """Discard an unreadable table or chart so the text answer survives."""
        try:
            return handler(v)
        except ValidationError as e:
            logger.warning(f"Dropping malformed {info.field_name} from response: {e}")
            return None


class ProcessQueriesResponse(BaseModel):
    """Summary of a bulk query processing run. Absent counts default to zero."""

    model_config = _WIRE_CONFIG

    original_count: int = 0
    duplicates_removed: int = 0
    final_count: int = 0
    queries_processed: int = 0
    queries_succeeded: int = 0
    queries_failed: int = 0
    processing_time_ms: int | None = None
    errors: list[str] = Field(default_factory=list)


class ChatMessage(BaseModel):
    """A single entry of the conversation. Immutable once created.

    Attributes:
        text: Displayed text.
        is_user: True for user submissions, False for bot replies.
        response: Raw Query Service response, bot replies only.
        time_taken_ms: Wall-clock time of the backend call.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    is_user: bool
    response: ChatResponse | None = None
    time_taken_ms: int | None = Field(default=None, ge=0)
