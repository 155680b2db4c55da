"""NiceGUI widgets for chart and table results, and per-page cleanup."""

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager, ExitStack
from typing import Any, Protocol

from nicegui import ui

from src.chat.controller import ConversationController
from src.models.schemas import Chart, TableData
from src.render.charts import build_figure
from src.render.tables import build_table
from src.ui.events import WindowResizeEvents

logger = logging.getLogger(__name__)


class ChartView:
    """Plotly chart bound to one Chart payload.

    Holds a window-resize subscription from creation until close().
    """

    def __init__(self, chart: Chart, resize_events: WindowResizeEvents) -> None:
        self._chart = chart
        self._plot = ui.plotly(build_figure(chart).to_plotly()).classes("w-full h-96 plot-wrapper")
        self._resources = ExitStack()
        self._resources.enter_context(resize_events.listening(self._on_resize))

    def update(self, chart: Chart) -> None:
        """Redraw from scratch when handed a different chart object."""
        if chart is self._chart:
            return
        self._chart = chart
        self._plot.figure = build_figure(chart).to_plotly()
        self._plot.update()

    def _on_resize(self, width: int, height: int) -> None:
        self._plot.update()

    def close(self) -> None:
        self._resources.close()


def render_table(table: TableData) -> ui.table:
    view = build_table(table)
    return ui.table(columns=view.columns, rows=view.rows, row_key="_row").classes(
        "w-full result-table"
    ).props("dense flat bordered")


class DeletableClient(Protocol):
    def on_delete(self, handler: Callable[..., Any]) -> None: ...


class PageScope:
    """Everything one open chat page holds on to.

    Released when NiceGUI deletes the page's client. A websocket that drops
    and reconnects keeps the same client, so the page stays wired up.
    """

    def __init__(self, client: DeletableClient, controller: ConversationController) -> None:
        self._controller = controller
        self._resources = ExitStack()
        self.chart_views: list[ChartView] = []
        client.on_delete(self.close)

    def enter(self, context: AbstractContextManager[None]) -> None:
        self._resources.enter_context(context)

    def add_chart(self, view: ChartView) -> ChartView:
        self.chart_views.append(view)
        return view

    def close(self) -> None:
        for view in self.chart_views:
            view.close()
        self.chart_views.clear()
        self._resources.close()
        self._controller.close()
        logger.info("Chat page closed")
