"""NiceGUI chat page for the NCAA basketball Query Service."""

from nicegui import events, ui

from src.chat.controller import Change, ConversationController
from src.chat.formatting import format_time
from src.client.query_service import QueryService
from src.config import get_app_config
from src.models.schemas import ChatMessage
from src.ui.components import ChartView, PageScope, render_table
from src.ui.events import (
    INPUT_KEYS_JS,
    RESIZE_SCRIPT,
    WindowResizeEvents,
    dispatch_input_key,
    history_recall_script,
    max_input_height,
)

PAGE_TITLE = "NCAA Basketball Data"

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<link href="https://fonts.googleapis.com/icon?family=Material+Icons" rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: linear-gradient(135deg, #fff4ec 0%, #ffe3cf 100%); min-height: 100vh; }

    .app-container {
        background: rgba(255, 255, 255, 0.6);
        backdrop-filter: blur(12px);
        border-radius: 16px;
        box-shadow: 0 8px 24px rgba(255, 107, 53, 0.15);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #ff6b35 0%, #f7931e 100%); }

    .message-user {
        background: linear-gradient(135deg, #ff6b35 0%, #f7931e 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-bot {
        background: rgba(255, 255, 255, 0.85);
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .message-text { white-space: pre-wrap; }
    .time-taken { color: #9ca3af; font-size: 11px; }

    .history-panel {
        background: rgba(255, 255, 255, 0.9);
        border-top: 1px solid rgba(255, 107, 53, 0.2);
        max-height: 220px;
        overflow-y: auto;
    }
    .history-item { text-align: left; text-transform: none; }

    .input-box {
        background: #fffaf6;
        border: 1px solid #fde1cf;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #ff6b35; }

    .send-btn { background: linear-gradient(135deg, #ff6b35 0%, #f7931e 100%) !important; }
    .plot-wrapper { border-radius: 12px; background: rgba(255, 255, 255, 0.5); }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    ui.add_body_html(RESIZE_SCRIPT)

    client = ui.context.client
    config = get_app_config()
    controller = ConversationController(QueryService(config), config)
    resize_events = WindowResizeEvents()
    scope = PageScope(client, controller)
    rendered_count = 0

    messages_container: ui.column
    scroll_area: ui.scroll_area
    loading_row: ui.row
    elapsed_label: ui.label
    input_field: ui.textarea
    send_btn: ui.button

    def render_message(msg: ChatMessage) -> None:
        align = "justify-end" if msg.is_user else "justify-start"
        bubble = "message-user" if msg.is_user else "message-bot"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes(f"max-w-[85%] gap-2 px-4 py-3 {bubble}"):
                with ui.row().classes("items-baseline gap-2"):
                    ui.label(msg.text).classes("message-text text-sm leading-relaxed")
                    if not msg.is_user and msg.time_taken_ms:
                        ui.label(f"({format_time(msg.time_taken_ms)})").classes("time-taken")
                response = msg.response
                if response is None or msg.is_user:
                    return
                if response.table is not None:
                    render_table(response.table)
                if response.chart is not None:
                    scope.add_chart(ChartView(response.chart, resize_events))

    def render_new_messages() -> None:
        nonlocal rendered_count
        with messages_container:
            for msg in controller.messages[rendered_count:]:
                render_message(msg)
        rendered_count = len(controller.messages)
        scroll_area.scroll_to(percent=1.0)

    def sync_input() -> None:
        if input_field.value != controller.draft:
            input_field.value = controller.draft
        send_btn.set_enabled(not controller.loading and bool(controller.draft.strip()))

    def sync_loading() -> None:
        loading_row.set_visibility(controller.loading)
        input_field.set_enabled(not controller.loading)
        elapsed_label.set_text(f"{controller.elapsed_seconds}s")
        sync_input()

    def sync_history_keys() -> None:
        client.run_javascript(history_recall_script(controller.can_navigate_history))

    @ui.refreshable
    def process_button() -> None:
        if not controller.process_queries_enabled:
            return
        if controller.processing_queries:
            with ui.button().props("flat color=white disable"):
                ui.spinner(size="sm", color="white")
                ui.label("Processing...").classes("ml-2")
        else:
            ui.button("Process Queries", on_click=controller.process_queries).props(
                "flat color=white"
            )

    @ui.refreshable
    def history_section() -> None:
        if not controller.history_panel_enabled or not controller.history:
            return
        with ui.row().classes("w-full px-4 pt-2 items-center justify-between"):
            ui.button(
                "Hide history" if controller.show_history_panel else "Show history",
                on_click=controller.toggle_history_panel,
            ).props("flat dense no-caps color=orange").bind_enabled_from(
                controller, "loading", backward=lambda loading: not loading
            )
            ui.label("Use ↑/↓ to cycle queries").classes("text-xs text-gray-500")
        if not controller.show_history_panel:
            return
        with ui.column().classes("w-full history-panel px-4 py-2 gap-1"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("Query history").classes("text-sm font-semibold")
                ui.button("Close", on_click=controller.close_history_panel).props(
                    "flat dense no-caps"
                )
            for index, query in controller.history.most_recent_first():
                ui.button(
                    query, on_click=lambda _, i=index: controller.recall_from_panel(i)
                ).props("flat dense no-caps align=left").classes("w-full history-item")

    def on_change(change: Change) -> None:
        match change:
            case Change.MESSAGES:
                render_new_messages()
            case Change.DRAFT:
                sync_input()
            case Change.LOADING:
                sync_loading()
                sync_history_keys()
            case Change.ELAPSED:
                sync_loading()
            case Change.HISTORY:
                history_section.refresh()
                sync_history_keys()
            case Change.PANEL:
                history_section.refresh()
            case Change.PROCESSING:
                process_button.refresh()
            case Change.FOCUS:
                input_field.run_method("focus")

    def on_input(e: events.ValueChangeEventArguments) -> None:
        if e.value != controller.draft:
            controller.edit_draft(e.value or "")

    async def on_key(e: events.GenericEventArguments) -> None:
        key = e.args[0] if isinstance(e.args, list) else e.args
        await dispatch_input_key(controller, key)

    def on_resize(width: int, height: int) -> None:
        input_field.style(f"max-height: {max_input_height(height)}px; overflow-y: auto")

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-5xl mx-auto app-container gap-0").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("sports_basketball").classes("text-white text-3xl")
                ui.label(PAGE_TITLE).classes("text-lg font-semibold text-white")
            process_button()

        # Messages
        with ui.scroll_area().classes("flex-grow w-full") as scroll_area:
            with ui.column().classes("w-full p-5"):
                messages_container = ui.column().classes("w-full gap-4")
                with ui.row().classes("w-full justify-start") as loading_row:
                    with ui.row().classes("message-bot px-4 py-3 items-center gap-2"):
                        ui.spinner(size="sm", color="orange")
                        ui.label("Loading...").classes("text-sm text-gray-500")
                        elapsed_label = ui.label("0s").classes("text-sm text-gray-400")
                loading_row.set_visibility(False)

        # History
        history_section()

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end border-t"):
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.textarea(
                        placeholder="Ask a question about NCAA basketball data...",
                        on_change=on_input,
                    )
                    .props("autogrow borderless dense rows=1")
                    .classes("w-full")
                    .style(f"max-height: {max_input_height(None)}px; overflow-y: auto")
                    .on("keydown", on_key, js_handler=INPUT_KEYS_JS)
                )
            send_btn = (
                ui.button(icon="send", on_click=controller.submit)
                .props("round unelevated")
                .classes("send-btn")
            )
            send_btn.disable()

    render_new_messages()
    controller.subscribe(on_change)
    ui.on("window_resize", lambda e: resize_events.publish(e.args["width"], e.args["height"]))
    scope.enter(resize_events.listening(on_resize))
