"""MCP server exposing page to Markdown conversion."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from bs4 import BeautifulSoup
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from pagemd.config import settings
from pagemd.dom import parse_html
from pagemd.exceptions import PageMDError
from pagemd.logger import logger, setup_logging
from pagemd.pipeline import Pipeline
from pagemd.timing import timeit

# Initialize logging as soon as possible
setup_logging()


class TypedFastMCP(FastMCP):
    """Typed FastMCP subclass with server state attribute.

    This allows proper type checking for the state attribute
    instead of using type: ignore comments.
    """

    state: "ServerState | None"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize TypedFastMCP with state set to None."""
        super().__init__(*args, **kwargs)
        self.state = None


class ServerState:
    """Holds the conversion pipeline shared by the tools."""

    def __init__(self) -> None:
        """Initialize the server state.

        Raises:
            ProfileLoadError: If PROFILES_PATH points to an unusable file.

        """
        self.pipeline = Pipeline(settings)

    async def start(self) -> None:
        """Startup logic."""
        logger.info(
            "Starting pagemd server with %d profile(s): %s",
            len(self.pipeline.profiles),
            ", ".join(profile.id for profile in self.pipeline.profiles),
        )

    async def stop(self) -> None:
        """Cleanup logic."""
        logger.info("Stopping pagemd server...")


@asynccontextmanager
async def lifespan(app: TypedFastMCP) -> AsyncIterator[dict[str, Any]]:
    """Manage application lifespan: build and release the pipeline."""
    state = ServerState()
    await state.start()

    # Attach state to the typed mcp object
    app.state = state

    try:
        yield {"state": state}
    finally:
        await state.stop()


def log_tool_call(tool_name: str, details: str) -> None:
    """Log a tool call."""
    logger.info("[TOOL CALLED] %s: %s", tool_name, details)


def get_state() -> ServerState:
    """Get the server state from the context."""
    if mcp.state is None:
        raise RuntimeError("Server state not initialized")
    return mcp.state


def get_pipeline(state: ServerState) -> Pipeline:
    """Get the pipeline from server state."""
    return state.pipeline


mcp = TypedFastMCP("pagemd", lifespan=lifespan)


@mcp.tool(
    title="convert_page",
    description=settings.tool_convert_page_desc,
)
@timeit("convert_page tool")
async def convert_page(
    html: Annotated[str, settings.arg_html_desc],
    url: Annotated[str, settings.arg_url_desc],
    title: Annotated[str | None, settings.arg_title_desc] = None,
    profile_id: Annotated[str | None, settings.arg_profile_id_desc] = None,
) -> dict[str, Any]:
    """Convert page markup to a Markdown document."""
    log_tool_call("convert_page", f"URL: {url}, profile: {profile_id or 'auto'}")
    pipeline = get_pipeline(get_state())
    try:
        conversion = await asyncio.to_thread(pipeline.convert_page, html, url, title, profile_id)
    except PageMDError as e:
        raise ToolError(f"{type(e).__name__}: {e}") from e
    return conversion.to_dict()


@mcp.tool(
    title="detect_content",
    description=settings.tool_detect_content_desc,
)
@timeit("detect_content tool")
async def detect_content(
    html: Annotated[str, settings.arg_html_desc],
    title: Annotated[str | None, settings.arg_title_desc] = None,
) -> dict[str, Any]:
    """Detect the main content of a page."""
    log_tool_call("detect_content", f"{len(html)} characters")
    pipeline = get_pipeline(get_state())
    detected = await asyncio.to_thread(pipeline.detect, html, title)
    return detected.to_dict(include_html=False)


@mcp.tool(
    title="match_profile",
    description=settings.tool_match_profile_desc,
)
@timeit("match_profile tool")
async def match_profile(
    url: Annotated[str, settings.arg_url_desc],
    title: Annotated[str | None, settings.arg_title_desc] = None,
    html: Annotated[str | None, settings.arg_html_desc] = None,
) -> dict[str, Any]:
    """Return the profile that applies to a page."""
    log_tool_call("match_profile", f"URL: {url}")
    pipeline = get_pipeline(get_state())
    document = parse_optional_html(html)
    profile, reasons = await asyncio.to_thread(pipeline.match_profile, url, title, document)
    return {"id": profile.id, "name": profile.name, "matchReasons": reasons}


@mcp.tool(
    title="list_profiles",
    description=settings.tool_list_profiles_desc,
)
async def list_profiles() -> list[dict[str, Any]]:
    """List the available conversion profiles."""
    log_tool_call("list_profiles", "all")
    pipeline = get_pipeline(get_state())
    return [
        profile.model_dump(mode="json", by_alias=True, exclude_none=True)
        for profile in pipeline.profiles
    ]


def parse_optional_html(html: str | None) -> BeautifulSoup | None:
    """Parse optional markup for selector and meta tag rules."""
    if not html:
        return None
    return parse_html(html)


def main() -> None:
    """Run the MCP server."""
    mcp.run(transport="streamable-http", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
