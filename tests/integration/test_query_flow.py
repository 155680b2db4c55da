"""Integration tests for the conversation flow against a backend.

The Query Service is a small FastAPI app served in-process through
ASGITransport. The real client and controller are used, no mocks.
"""

import httpx
import pytest
import pytest_check as check
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from src.chat.controller import ConversationController
from src.chat.history import Direction
from src.client.query_service import QueryService
from src.config import AppConfig
from src.models.schemas import LineChart
from src.render.charts import build_figure
from src.render.tables import build_table


def create_backend() -> FastAPI:
    backend = FastAPI()

    @backend.post("/api/chat")
    async def chat(body: dict):
        query = body["query"]
        if "crash" in query:
            return JSONResponse(status_code=500, content={"error": {"message": "engine down"}})
        if "unknown" in query:
            raise HTTPException(status_code=404, detail="No data for that team")
        if "share" in query:
            return {
                "message": "Duke won 3 of 4",
                "tableData": {"columns": [2022, 2023], "rows": [[3, 1]]},
                "graphData": {"chartType": "pie", "values": "unavailable"},
            }
        return {
            "message": f"Results for: {query}",
            "tableData": {
                "columns": ["season", "wins"],
                "rows": [[2022, 28], [2023, 31]],
            },
            "graphData": {
                "chartType": "multi_line",
                "xLabel": "season",
                "yLabel": "total_wins",
                "series": [
                    {"name": "Duke", "x": [2022, 2023], "y": [28, 31]},
                    {"name": "UNC", "x": [2022, 2023], "y": [29, 20]},
                ],
            },
        }

    @backend.post("/api/queries/process")
    async def process():
        return {"originalCount": 3, "finalCount": 3, "queriesProcessed": 3, "queriesSucceeded": 3}

    return backend


@pytest.fixture
def service(app_config: AppConfig) -> QueryService:
    return QueryService(app_config, transport=httpx.ASGITransport(app=create_backend()))


@pytest.fixture
def live_controller(service: QueryService, app_config: AppConfig) -> ConversationController:
    return ConversationController(service, app_config)


class TestConversationFlow:
    """End-to-end submit, render and recall."""

    async def test_answer_renders_table_and_chart(
        self, live_controller: ConversationController
    ) -> None:
        live_controller.edit_draft("Duke vs UNC wins by season")
        await live_controller.submit()

        reply = live_controller.messages[-1]
        check.equal(reply.text, "Results for: Duke vs UNC wins by season")
        check.is_instance(reply.response.chart, LineChart)
        check.is_not_none(reply.time_taken_ms)

        figure = build_figure(reply.response.chart)
        check.equal([t["name"] for t in figure.traces], ["Duke", "UNC"])
        check.equal(figure.layout["title"]["text"], "Total Wins vs Season")

        table = build_table(reply.response.table)
        check.equal(len(table.rows), 2)

    async def test_nested_server_error_message(
        self, live_controller: ConversationController
    ) -> None:
        live_controller.edit_draft("crash please")
        await live_controller.submit()

        check.equal(
            live_controller.messages[-1].text, "Sorry, I encountered an error: engine down"
        )
        check.is_false(live_controller.loading)

    async def test_fastapi_detail_message(self, live_controller: ConversationController) -> None:
        live_controller.edit_draft("unknown team")
        await live_controller.submit()

        check.equal(
            live_controller.messages[-1].text,
            "Sorry, I encountered an error: No data for that team",
        )

    async def test_bad_chart_still_shows_answer(
        self, live_controller: ConversationController
    ) -> None:
        live_controller.edit_draft("Duke win share")
        await live_controller.submit()

        reply = live_controller.messages[-1]
        check.equal(reply.text, "Duke won 3 of 4")
        check.is_none(reply.response.chart)
        check.equal(build_table(reply.response.table).columns[0]["label"], "2022")

    async def test_recall_after_round_trip(self, live_controller: ConversationController) -> None:
        for query in ("first", "second"):
            live_controller.edit_draft(query)
            await live_controller.submit()

        live_controller.navigate_history(Direction.OLDER)
        live_controller.navigate_history(Direction.OLDER)

        check.equal(live_controller.draft, "first")

    async def test_process_queries(self, live_controller: ConversationController) -> None:
        await live_controller.process_queries()

        text = live_controller.messages[-1].text
        check.is_in("• Original queries: 3", text)
        check.is_in("• Successful: 3", text)
        check.is_false(live_controller.processing_queries)


async def test_unreachable_backend(app_config: AppConfig) -> None:
    """A refused connection becomes an error message."""

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    controller = ConversationController(
        QueryService(app_config, transport=httpx.MockTransport(refuse)), app_config
    )
    controller.edit_draft("anything")
    await controller.submit()

    check.equal(
        controller.messages[-1].text,
        "Sorry, I encountered an error: Connection failed: connection refused",
    )
