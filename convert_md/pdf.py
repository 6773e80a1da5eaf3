"""
HTML to PDF capture using Playwright (Puppeteer approach).

The Markdown is rendered to a temporary HTML file beside the PDF, loaded
into headless Chromium, given time for mermaid.js to turn every
``.mermaid`` block into SVG, then printed.

MIT License - Copyright (c) 2025 Markdown to PDF Converter
"""

import asyncio
import time
from pathlib import Path
from typing import Any, Callable, Optional, Union

from playwright.async_api import async_playwright
from tqdm import tqdm

from .config import Config
from .console import log_debug, log_error, log_info, log_success, log_warning
from .dependencies import REMEDIATION_HINT
from .errors import CaptureError, InputNotFoundError
from .renderer import MERMAID_CLASS, convert_to_html

PathLike = Union[str, Path]

BROWSER_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',  # Use /tmp instead of /dev/shm (prevents OOM crashes)
]

# Returns null when mermaid.js never loaded
DIAGRAM_STATUS_JS = f"""() => {{
    if (typeof mermaid === 'undefined') {{
        return null;
    }}
    const diagrams = document.querySelectorAll('.{MERMAID_CLASS}');
    let rendered = 0;
    diagrams.forEach(el => {{
        if (el.querySelector('svg')) {{
            rendered++;
        }}
    }});
    return {{ total: diagrams.length, rendered: rendered }};
}}"""


def temp_html_path(output_pdf: PathLike) -> Path:
    """Return the intermediate HTML path for a PDF: ``<stem>_temp.html`` beside it."""
    output_pdf = Path(output_pdf)
    return output_pdf.with_name(f"{output_pdf.stem}_temp.html")


async def wait_for_diagrams(page, timeout_ms: int, interval_ms: int, initial_delay_ms: int = 0,
                            clock: Callable[[], float] = time.monotonic) -> bool:
    """Poll until every Mermaid block contains an SVG or ``timeout_ms`` elapses.

    The bound includes ``initial_delay_ms``. Returns True when all diagrams
    rendered (or there are none). A timeout or a missing mermaid.js only
    logs a warning; capture goes ahead with whatever is on the page.
    """
    started = clock()
    if initial_delay_ms:
        await page.wait_for_timeout(initial_delay_ms)

    while True:
        status = await page.evaluate(DIAGRAM_STATUS_JS)
        if status is None:
            log_warning("Mermaid.js is not available in the page; diagrams will not be rendered")
            return False

        total, rendered = status['total'], status['rendered']
        if rendered >= total:
            log_debug(f"All {total} Mermaid diagram(s) rendered")
            return True

        elapsed_ms = (clock() - started) * 1000
        if elapsed_ms >= timeout_ms:
            log_warning(f"Only {rendered}/{total} Mermaid diagrams rendered after {timeout_ms}ms, continuing")
            return False

        await page.wait_for_timeout(interval_ms)


class PDFConverter:
    """Render one Markdown file to PDF through headless Chromium."""

    STEPS = 5

    def __init__(self, config: Optional[Config] = None, playwright_factory: Callable[[], Any] = async_playwright):
        self.config = config or Config()
        self._playwright_factory = playwright_factory

    async def _launch_browser(self, playwright):
        """Launch a fresh, isolated Chromium instance."""
        return await playwright.chromium.launch(headless=True, args=BROWSER_ARGS)

    async def _capture(self, html_file: Path, output_pdf: Path, pbar) -> None:
        playwright = await self._playwright_factory().start()
        try:
            pbar.set_description(f"  {output_pdf.name} - Browser")
            browser = await self._launch_browser(playwright)
            try:
                page = await browser.new_page()
                pbar.update(1)

                pbar.set_description(f"  {output_pdf.name} - Loading")
                await page.goto(html_file.absolute().as_uri(), wait_until='networkidle')
                pbar.update(1)

                pbar.set_description(f"  {output_pdf.name} - Diagrams")
                await wait_for_diagrams(
                    page,
                    timeout_ms=self.config.get_render_timeout_ms(),
                    interval_ms=self.config.get_render_poll_interval_ms(),
                    initial_delay_ms=self.config.get_render_initial_delay_ms(),
                )
                # Absorb any trailing asynchronous layout work
                await page.wait_for_timeout(self.config.get_settle_delay_ms())
                pbar.update(1)

                pbar.set_description(f"  {output_pdf.name} - PDF")
                margins = self.config.get_page_margins()
                log_debug(f"Printing PDF with margins: {margins}")
                await page.pdf(
                    path=str(output_pdf),
                    format=self.config.get_page_format(),
                    margin=margins,
                    print_background=True,
                )
                pbar.update(1)
            finally:
                await browser.close()
        finally:
            await playwright.stop()

    async def convert(self, input_path: PathLike, output_pdf: PathLike) -> Path:
        """Convert ``input_path`` to ``output_pdf``.

        Raises ``InputNotFoundError`` before anything is written, and
        ``CaptureError`` if the browser fails; the temporary HTML file is
        removed on every path.
        """
        input_path = Path(input_path)
        output_pdf = Path(output_pdf)
        if not input_path.is_file():
            raise InputNotFoundError(input_path)

        log_info(f"Converting {input_path} to PDF...")
        html_file = temp_html_path(output_pdf)
        try:
            with tqdm(total=self.STEPS, desc=f"  {output_pdf.name}", unit="step", leave=False) as pbar:
                pbar.set_description(f"  {output_pdf.name} - HTML")
                convert_to_html(input_path, html_file, self.config)
                pbar.update(1)

                log_info("Rendering Mermaid diagrams and generating PDF...")
                try:
                    await self._capture(html_file, output_pdf, pbar)
                except Exception as e:
                    log_error(f"Error converting to PDF: {e}")
                    log_error(REMEDIATION_HINT)
                    raise CaptureError(f"Failed to convert {input_path} to PDF: {e}") from e
        finally:
            if html_file.exists():
                html_file.unlink()
                log_debug(f"Removed temporary file: {html_file}")

        log_success(f"PDF file created: {output_pdf}")
        return output_pdf


def convert_to_pdf(input_path: PathLike, output_pdf: PathLike, config: Optional[Config] = None) -> Path:
    """Synchronous wrapper around ``PDFConverter.convert``."""
    return asyncio.run(PDFConverter(config).convert(input_path, output_pdf))
