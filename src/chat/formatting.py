"""Text formatting for bot messages."""

from src.models.schemas import ProcessQueriesResponse

WELCOME_MESSAGE = "Welcome! Ask me anything about NCAA basketball data."


def format_time(milliseconds: int) -> str:
    """Render a duration as ``850ms``, ``12s`` or ``2m 5s``."""
    seconds = milliseconds // 1000
    if seconds < 1:
        return f"{milliseconds}ms"
    if seconds < 60:
        return f"{seconds}s"
    minutes, remaining = divmod(seconds, 60)
    return f"{minutes}m {remaining}s"


def format_query_error(detail: str) -> str:
    return f"Sorry, I encountered an error: {detail}"


def format_process_error(detail: str) -> str:
    return f"❌ Error processing queries: {detail}"


def format_process_summary(summary: ProcessQueriesResponse, elapsed_ms: int) -> str:
    """Build the bot message reporting a bulk processing run.

    Args:
        summary: Counts returned by the Query Service.
        elapsed_ms: Locally measured duration, used when the backend
                    does not report its own processing time.

    Returns:
        Multi-line summary, with a numbered error list when errors were reported.
    """
    processing_ms = summary.processing_time_ms or elapsed_ms
    lines = [
        "✅ Query processing completed!",
        "",
        "📊 Statistics:",
        f"• Original queries: {summary.original_count}",
        f"• Duplicates removed: {summary.duplicates_removed}",
        f"• Final unique queries: {summary.final_count}",
        f"• Queries processed: {summary.queries_processed}",
        f"• Successful: {summary.queries_succeeded}",
        f"• Failed: {summary.queries_failed}",
        f"• Processing time: {format_time(processing_ms)}",
    ]
    if summary.errors:
        lines += ["", "⚠️ Errors:"]
        lines += [f"{i}. {error}" for i, error in enumerate(summary.errors, start=1)]
    return "\n".join(lines)
