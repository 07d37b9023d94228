"""
PDF export module for server-side document printing.

This module prints HTML documents (the landowner permission slip) to PDF
using headless browser rendering via Playwright.

IMPORTANT: After installing/updating dependencies, run:
    python -m playwright install chromium

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2025-12-18
"""

import asyncio
import logging
from typing import Optional

from fastapi import HTTPException
from playwright.async_api import async_playwright, Browser, Playwright, TimeoutError as PlaywrightTimeoutError

logger = logging.getLogger(__name__)

# Global browser instance for reuse
_playwright: Optional[Playwright] = None
_browser: Optional[Browser] = None
_browser_lock = asyncio.Lock()

PDF_TIMEOUT_MS = 10000


async def get_browser() -> Browser:
    """Get or create a singleton headless browser instance.

    Returns:
        Browser instance.
    """
    global _playwright, _browser

    async with _browser_lock:
        if _browser is None or not _browser.is_connected():
            if _playwright is None:
                _playwright = await async_playwright().start()
            _browser = await _playwright.chromium.launch(
                headless=True,
                args=[
                    '--no-sandbox',
                    '--disable-setuid-sandbox',
                    '--disable-dev-shm-usage',
                    '--disable-gpu',
                ]
            )
            logger.info("Launched headless browser for PDF export")
        return _browser


async def render_pdf(html: str) -> bytes:
    """Print an HTML document to a Letter-size PDF.

    Args:
        html: Complete HTML document.

    Returns:
        PDF file bytes.

    Raises:
        HTTPException: If rendering fails or times out.
    """
    try:
        browser = await get_browser()
        context = await browser.new_context(locale='en-CA')
        page = await context.new_page()

        try:
            await page.set_content(html, wait_until='load', timeout=PDF_TIMEOUT_MS)
            return await page.pdf(format='Letter', print_background=True)
        finally:
            # Clean up the context
            await context.close()

    except PlaywrightTimeoutError as e:
        logger.error("PDF rendering timed out: %s", e)
        raise HTTPException(
            status_code=504,
            detail=f"Rendering timeout: {str(e)}"
        )
    except Exception as e:
        logger.exception("PDF rendering failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to generate document: {str(e)}"
        )


async def cleanup_browser():
    """Cleanup the browser instance on shutdown."""
    global _playwright, _browser
    if _browser is not None:
        await _browser.close()
        _browser = None
    if _playwright is not None:
        await _playwright.stop()
        _playwright = None
