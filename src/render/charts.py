"""Plotly figure descriptions for Query Service charts.

Turns a Chart model into plain trace/layout dictionaries. Nothing here
touches NiceGUI, so figures can be built and inspected without a page.
"""

from dataclasses import dataclass, field
from typing import Any

from src.models.schemas import BarChart, BubbleChart, Chart, LineChart, PieChart, ScatterChart

FONT_FAMILY = (
    '-apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif'
)
TEXT_COLOR = "#1f2937"
AXIS_TITLE_COLOR = "#6b7280"

PRIMARY_COLOR = "rgba(255, 107, 53, 0.8)"
PRIMARY_COLOR_SOLID = "rgba(255, 107, 53, 1.0)"
WHITE_OUTLINE = "rgba(255, 255, 255, 0.8)"
AREA_FILL_COLOR = "rgba(255, 107, 53, 0.2)"

# Line colours for multi-series charts, reused cyclically.
SERIES_PALETTE = (
    "rgba(255, 107, 53, 1)",
    "rgba(78, 205, 196, 1)",
    "rgba(142, 68, 173, 1)",
    "rgba(52, 152, 219, 1)",
    "rgba(46, 204, 113, 1)",
    "rgba(241, 196, 15, 1)",
)

PLOT_CONFIG: dict[str, Any] = {
    "responsive": True,
    "displayModeBar": True,
    "modeBarButtonsToRemove": ["pan2d", "lasso2d", "select2d", "autoScale2d"],
    "displaylogo": False,
    "toImageButtonOptions": {
        "format": "png",
        "filename": "chart",
        "height": 500,
        "width": 1000,
        "scale": 2,
    },
}


@dataclass
class ChartFigure:
    """Library-agnostic drawable: traces plus layout."""

    traces: list[dict[str, Any]] = field(default_factory=list)
    layout: dict[str, Any] = field(default_factory=dict)

    def to_plotly(self) -> dict[str, Any]:
        """Figure dict accepted by ``ui.plotly``, with the fixed interaction config."""
        return {"data": self.traces, "layout": self.layout, "config": PLOT_CONFIG}


def format_label(label: str | None) -> str:
    """Turn a raw column name into a title, e.g. ``win_loss_ratio`` -> ``Win Loss Ratio``."""
    if not label:
        return ""
    words = label.replace("_", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def _num(value: float) -> str:
    return f"{value:g}"


def gradient_colors(count: int) -> list[str]:
    """Orange gradient, one colour per index, interpolated linearly."""
    colors = []
    for i in range(count):
        ratio = i / max(count - 1, 1)
        colors.append(f"rgba(255, {_num(107 + ratio * 40)}, {_num(53 - ratio * 23)}, 0.8)")
    return colors


def _font(size: int, color: str = TEXT_COLOR) -> dict[str, Any]:
    return {"family": FONT_FAMILY, "size": size, "color": color}


def _title(text: str) -> dict[str, Any]:
    return {"text": text, "font": _font(18), "x": 0.5, "xanchor": "center"}


def _axis(title: str) -> dict[str, Any]:
    return {
        "title": {"text": title, "font": _font(14, AXIS_TITLE_COLOR)},
        "gridcolor": "rgba(0, 0, 0, 0.05)",
        "gridwidth": 1,
        "showgrid": True,
        "zeroline": False,
        "linecolor": "rgba(0, 0, 0, 0.1)",
        "linewidth": 1,
    }


def _base_layout() -> dict[str, Any]:
    return {
        "paper_bgcolor": "rgba(0, 0, 0, 0)",
        "plot_bgcolor": "rgba(255, 255, 255, 0.3)",
        "font": {"family": FONT_FAMILY, "color": TEXT_COLOR},
        "hoverlabel": {
            "bgcolor": "rgba(255, 255, 255, 0.95)",
            "bordercolor": "rgba(255, 107, 53, 0.3)",
            "font": _font(12),
        },
    }


def _cartesian_layout(x_title: str, y_title: str) -> dict[str, Any]:
    return {
        **_base_layout(),
        "title": _title(f"{y_title} vs {x_title}"),
        "xaxis": _axis(x_title),
        "yaxis": _axis(y_title),
        "hovermode": "closest",
        "showlegend": False,
        "margin": {"l": 70, "r": 30, "t": 50, "b": 70},
    }


def _hover_template(x_title: str, y_title: str) -> str:
    return f"<b>%{{text}}</b><br>{x_title}: %{{x}}<br>{y_title}: %{{y}}<extra></extra>"


def _pie_figure(chart: PieChart, y_title: str) -> ChartFigure:
    labels = chart.labels or []
    layout = {
        **_base_layout(),
        "title": _title(y_title or "Distribution"),
        "showlegend": True,
        "legend": {"font": _font(12)},
        "margin": {"l": 20, "r": 20, "t": 50, "b": 20},
    }
    trace = {
        "type": "pie",
        "labels": labels,
        "values": chart.values,
        "textinfo": "label+percent",
        "textposition": "outside",
        "hovertemplate": (
            "<b>%{label}</b><br>Value: %{value}<br>Percentage: %{percent}<extra></extra>"
        ),
        "marker": {
            "colors": gradient_colors(len(labels)),
            "line": {"color": WHITE_OUTLINE, "width": 2},
        },
    }
    return ChartFigure(traces=[trace], layout=layout)


def _bubble_figure(chart: BubbleChart, x_title: str, y_title: str) -> ChartFigure:
    trace = {
        "type": "scatter",
        "mode": "markers",
        "x": chart.x,
        "y": chart.y,
        "text": chart.labels,
        "hovertemplate": _hover_template(x_title, y_title),
        "marker": {
            "size": chart.sizes,
            "sizemode": "diameter",
            "sizeref": 2.0,
            "sizemin": 4,
            "color": PRIMARY_COLOR,
            "line": {"color": PRIMARY_COLOR_SOLID, "width": 2},
            "opacity": 0.7,
        },
    }
    return ChartFigure(traces=[trace], layout=_cartesian_layout(x_title, y_title))


def _bar_figure(chart: BarChart, x_title: str, y_title: str) -> ChartFigure:
    color: str | list[str] = PRIMARY_COLOR
    if len(chart.y) >= 2:
        color = gradient_colors(len(chart.y))
    trace = {
        "type": "bar",
        "x": chart.x,
        "y": chart.y,
        "text": chart.labels or [],
        "textposition": "outside",
        "hovertemplate": _hover_template(x_title, y_title),
        "marker": {
            "color": color,
            "line": {"color": PRIMARY_COLOR_SOLID, "width": 1.5},
            "opacity": 0.9,
        },
    }
    return ChartFigure(traces=[trace], layout=_cartesian_layout(x_title, y_title))


def _line_figure(chart: LineChart, x_title: str, y_title: str) -> ChartFigure:
    layout = _cartesian_layout(x_title, y_title)
    hover = _hover_template(x_title, y_title)

    if not chart.series:
        trace = {
            "type": "scatter",
            "mode": "lines+markers",
            "x": chart.x,
            "y": chart.y,
            "text": chart.labels or [],
            "hovertemplate": hover,
            "line": {"color": PRIMARY_COLOR_SOLID, "width": 3, "shape": "linear"},
            "marker": {
                "size": 8,
                "color": PRIMARY_COLOR_SOLID,
                "line": {"color": WHITE_OUTLINE, "width": 2},
            },
            "fill": "tonexty",
            "fillcolor": AREA_FILL_COLOR,
        }
        return ChartFigure(traces=[trace], layout=layout)

    layout["showlegend"] = True
    layout["legend"] = {"font": _font(12)}
    traces = []
    for i, series in enumerate(chart.series):
        color = SERIES_PALETTE[i % len(SERIES_PALETTE)]
        traces.append(
            {
                "type": "scatter",
                "mode": "lines+markers",
                "name": series.name or f"Series {i + 1}",
                "x": series.x,
                "y": series.y,
                "text": series.labels,
                "hovertemplate": hover,
                "line": {"color": color, "width": 3, "shape": "linear"},
                "marker": {
                    "size": 7,
                    "color": color,
                    "line": {"color": WHITE_OUTLINE, "width": 2},
                },
                "fill": "none",
            }
        )
    return ChartFigure(traces=traces, layout=layout)


def _scatter_figure(chart: ScatterChart, x_title: str, y_title: str) -> ChartFigure:
    trace = {
        "type": "scatter",
        "mode": "markers",
        "x": chart.x,
        "y": chart.y,
        "text": chart.labels,
        "hovertemplate": _hover_template(x_title, y_title),
        "marker": {
            "size": 10,
            "color": PRIMARY_COLOR,
            "line": {"color": PRIMARY_COLOR_SOLID, "width": 2},
            "opacity": 0.8,
        },
    }
    return ChartFigure(traces=[trace], layout=_cartesian_layout(x_title, y_title))


def build_figure(chart: Chart) -> ChartFigure:
    """Map a chart payload to traces and layout.

    Paired arrays (x/y/labels/sizes) are passed through as received;
    unequal lengths are not corrected.

    Args:
        chart: Any member of the Chart union.

    Returns:
        ChartFigure ready for ``to_plotly()``.
    """
    x_title = format_label(chart.x_label)
    y_title = format_label(chart.y_label)

    match chart:
        case PieChart():
            return _pie_figure(chart, y_title)
        case BubbleChart():
            return _bubble_figure(chart, x_title, y_title)
        case BarChart():
            return _bar_figure(chart, x_title, y_title)
        case LineChart():
            return _line_figure(chart, x_title, y_title)
        case ScatterChart():
            return _scatter_figure(chart, x_title, y_title)
        case _:
            raise TypeError(f"Unsupported chart model: {type(chart).__name__}")
