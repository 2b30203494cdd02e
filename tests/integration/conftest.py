"""Pytest configuration for integration tests.

The MCP server runs in-process through the fastmcp in-memory transport, so
these tests need neither a running server nor network access. Profiles come
from PROFILES_PATH when it is set, otherwise the built-in profiles are used.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from fastmcp import Client

from pagemd.server import mcp


@pytest.fixture
async def mcp_client() -> AsyncGenerator[Client[Any]]:
    """Provide an MCP client connected to the in-process server."""
    async with Client(mcp) as client:
        yield client


@pytest.fixture
def article_page() -> str:
    """News page with site chrome around a long article."""
    paragraph = "<p>" + "The council approved the new cycling lanes after a long debate. " * 6 + "</p>"
    return f"""
    <html>
    <head>
        <title>City News</title>
        <meta name="description" content="Local reporting.">
    </head>
    <body>
        <header><nav><a href="/">Home</a> <a href="/sports">Sports</a></nav></header>
        <div id="cookie-consent">
            <p>We use cookies to improve your experience.</p>
            <button>Accept all</button>
        </div>
        <main>
            <article>
                <h1>Council Approves Cycling Lanes</h1>
                <p class="byline">By <span class="author">Sam Reporter</span></p>
                {paragraph * 4}
                <h2>What happens next</h2>
                {paragraph * 2}
                <p>Read the <a href="https://example.com/plan?utm_source=news&amp;page=2">full plan</a>.</p>
            </article>
        </main>
        <footer>Copyright City News</footer>
    </body>
    </html>
    """
