"""Unit tests for the NiceGUI result widgets and page cleanup.

``ui.plotly`` and ``ui.table`` are replaced with recording stand-ins so
the widgets can be built without a running NiceGUI client.
"""

import pytest
import pytest_check as check

from src.chat.controller import Change, ConversationController
from src.models.schemas import BarChart, LineChart, TableData
from src.render.charts import build_figure
from src.ui import components
from src.ui.components import ChartView, PageScope, render_table
from src.ui.events import WindowResizeEvents


class FakePlot:
    """Records what ChartView does to its plotly element."""

    def __init__(self, figure: dict) -> None:
        self.figure = figure
        self.updates = 0

    def classes(self, *args, **kwargs) -> "FakePlot":
        return self

    def update(self) -> None:
        self.updates += 1


class FakeTable:
    def __init__(self, columns: list, rows: list, row_key: str) -> None:
        self.columns = columns
        self.rows = rows
        self.row_key = row_key

    def classes(self, *args, **kwargs) -> "FakeTable":
        return self

    def props(self, *args, **kwargs) -> "FakeTable":
        return self


class FakeClient:
    """NiceGUI client double with the two lifecycle hooks a page can use."""

    def __init__(self) -> None:
        self.delete_handlers: list = []
        self.disconnect_handlers: list = []

    def on_delete(self, handler) -> None:
        self.delete_handlers.append(handler)

    def on_disconnect(self, handler) -> None:
        self.disconnect_handlers.append(handler)

    def reconnect(self) -> None:
        for handler in self.disconnect_handlers:
            handler()

    def delete(self) -> None:
        for handler in self.delete_handlers:
            handler()


@pytest.fixture(autouse=True)
def fake_elements(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(components.ui, "plotly", FakePlot)
    monkeypatch.setattr(components.ui, "table", FakeTable)


@pytest.fixture
def resize_events() -> WindowResizeEvents:
    return WindowResizeEvents()


def _bar(*y: int) -> BarChart:
    return BarChart(x=[f"team{i}" for i in range(len(y))], y=list(y), x_label="team", y_label="wins")


class TestChartView:
    """Tests for full redraws and the resize subscription."""

    def test_initial_figure(self, resize_events: WindowResizeEvents) -> None:
        chart = _bar(28, 31)

        view = ChartView(chart, resize_events)

        check.equal(view._plot.figure, build_figure(chart).to_plotly())
        check.equal(len(resize_events), 1)

    def test_new_chart_redraws_fully(self, resize_events: WindowResizeEvents) -> None:
        """A different chart object replaces the whole figure."""
        view = ChartView(_bar(28, 31), resize_events)
        replacement = LineChart(x=[2022, 2023], y=[20, 25], x_label="season", y_label="wins")

        view.update(replacement)

        check.equal(view._plot.figure, build_figure(replacement).to_plotly())
        check.equal(view._plot.updates, 1)

    def test_equal_but_new_chart_still_redraws(self, resize_events: WindowResizeEvents) -> None:
        view = ChartView(_bar(28, 31), resize_events)

        view.update(_bar(28, 31))

        check.equal(view._plot.updates, 1)

    def test_same_chart_is_noop(self, resize_events: WindowResizeEvents) -> None:
        chart = _bar(28, 31)
        view = ChartView(chart, resize_events)
        before = view._plot.figure

        view.update(chart)

        check.is_(view._plot.figure, before)
        check.equal(view._plot.updates, 0)

    def test_resize_refreshes_plot(self, resize_events: WindowResizeEvents) -> None:
        view = ChartView(_bar(1, 2), resize_events)

        resize_events.publish(1280, 800)

        check.equal(view._plot.updates, 1)

    def test_close_releases_resize_subscription(
        self, resize_events: WindowResizeEvents
    ) -> None:
        view = ChartView(_bar(1, 2), resize_events)

        view.close()
        resize_events.publish(640, 480)

        check.equal(len(resize_events), 0)
        check.equal(view._plot.updates, 0)


def test_render_table_passes_grid_shape() -> None:
    table = render_table(TableData(columns=["team", "wins"], rows=[["Duke", 32]]))

    check.equal([c["label"] for c in table.columns], ["team", "wins"])
    check.equal(table.rows, [{"_row": 0, "c0": "Duke", "c1": 32}])
    check.equal(table.row_key, "_row")


class TestPageScope:
    """Tests for releasing a page's resources with its client."""

    def test_reconnect_keeps_page_wired(
        self, controller: ConversationController, resize_events: WindowResizeEvents
    ) -> None:
        """A dropped websocket that comes back must not tear the page down."""
        client = FakeClient()
        scope = PageScope(client, controller)
        scope.add_chart(ChartView(_bar(1, 2), resize_events))
        changes: list[Change] = []
        controller.subscribe(changes.append)

        client.reconnect()
        controller.edit_draft("still here")

        check.equal(changes, [Change.DRAFT])
        check.equal(len(resize_events), 1)
        check.equal(client.disconnect_handlers, [])

    def test_delete_releases_everything(
        self, controller: ConversationController, resize_events: WindowResizeEvents
    ) -> None:
        client = FakeClient()
        scope = PageScope(client, controller)
        scope.add_chart(ChartView(_bar(1, 2), resize_events))
        scope.add_chart(ChartView(_bar(3, 4), resize_events))
        scope.enter(resize_events.listening(lambda w, h: None))
        changes: list[Change] = []
        controller.subscribe(changes.append)

        client.delete()
        controller.edit_draft("gone")

        check.equal(len(resize_events), 0)
        check.equal(scope.chart_views, [])
        check.equal(changes, [])
