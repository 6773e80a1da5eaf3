"""
Markdown to HTML rendering with client-side Mermaid diagrams.

Fenced blocks tagged ``mermaid`` are sanitized and emitted as
``<pre class="mermaid">`` so mermaid.js can find and render them in the
browser; every other fence goes through Python-Markdown's ``fenced_code``.

MIT License - Copyright (c) 2025 Markdown to PDF Converter
"""

import html
import re
from pathlib import Path
from typing import List, Optional, Union

import markdown
from markdown import Markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

from .config import Config
from .console import log_debug, log_info, log_success
from .errors import InputNotFoundError
from .sanitizer import sanitize

MERMAID_LANGUAGE = "mermaid"
MERMAID_CLASS = "mermaid"

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "nl2br", "sane_lists"]

PathLike = Union[str, Path]


class MermaidPreprocessor(Preprocessor):
    """Replace ``mermaid`` fences with stashed ``<pre class="mermaid">`` blocks.

    Runs before ``fenced_code`` (priority 25). Fences with any other info
    string are matched too, so that a mermaid fence quoted inside another
    block is never picked up, but they are returned untouched.
    """

    FENCE_RE = re.compile(
        r'^(?P<fence>`{3,}|~{3,})[ \t]*(?P<info>[^\n]*)\n'
        r'(?P<code>.*?)(?<=\n)(?P=fence)[ \t]*$',
        re.MULTILINE | re.DOTALL,
    )

    def run(self, lines: List[str]) -> List[str]:
        text = "\n".join(lines)
        count = 0

        def _replace(match):
            nonlocal count
            if match.group("info").strip() != MERMAID_LANGUAGE:
                return match.group(0)
            code = match.group("code")
            if code.endswith("\n"):
                code = code[:-1]
            count += 1
            block = f'<pre class="{MERMAID_CLASS}">{sanitize(code)}</pre>'
            placeholder = self.md.htmlStash.store(block)
            return f"\n\n{placeholder}\n\n"

        text = self.FENCE_RE.sub(_replace, text)
        if count:
            log_debug(f"Sanitized {count} Mermaid diagram(s)")
        return text.split("\n")


class MermaidExtension(Extension):
    """Register the Mermaid fence preprocessor."""

    def extendMarkdown(self, md: Markdown) -> None:  # noqa: N802
        md.preprocessors.register(MermaidPreprocessor(md), "mermaid_fence", 26)


def markdown_to_html(content: str) -> str:
    """Convert a Markdown string to an HTML fragment."""
    md = markdown.Markdown(extensions=[MermaidExtension(), *MARKDOWN_EXTENSIONS])
    return md.convert(content)


def title_from_path(path: PathLike) -> str:
    """Return the file name with a trailing ``.md`` removed."""
    name = Path(path).name
    return name[:-3] if name.endswith(".md") else name


STYLESHEET = """
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto,
                   'Helvetica Neue', Arial, sans-serif;
      line-height: 1.6;
      max-width: 1200px;
      margin: 0 auto;
      padding: 20px;
      color: #333;
    }
    h1, h2, h3, h4, h5, h6 {
      color: #2c3e50;
      margin-top: 1.5em;
    }
    h1 {
      border-bottom: 2px solid #3498db;
      padding-bottom: 0.2em;
    }
    code {
      background-color: #f4f4f4;
      padding: 2px 6px;
      border-radius: 3px;
      font-family: 'Courier New', monospace;
      font-size: 0.9em;
    }
    pre {
      background-color: #f4f4f4;
      padding: 15px;
      border-radius: 5px;
      overflow-x: auto;
      page-break-inside: avoid;
    }
    pre code {
      background-color: transparent;
      padding: 0;
    }
    .mermaid {
      background-color: #f9f9f9;
      padding: 20px;
      margin: 20px 0;
      border-radius: 5px;
      text-align: center;
      min-height: 100px;
      display: flex;
      justify-content: center;
      align-items: center;
    }
    .mermaid svg {
      max-width: 100%;
      height: auto;
    }
    table {
      border-collapse: collapse;
      width: 100%;
      margin: 20px 0;
    }
    table th, table td {
      border: 1px solid #ddd;
      padding: 12px;
      text-align: left;
    }
    table th {
      background-color: #4CAF50;
      color: white;
    }
    table tr:nth-child(even) {
      background-color: #f2f2f2;
    }
    a {
      color: #3498db;
      text-decoration: none;
    }
    a:hover {
      text-decoration: underline;
    }
    hr {
      border: none;
      border-top: 2px solid #eee;
      margin: 30px 0;
    }
    blockquote {
      border-left: 4px solid #ddd;
      margin: 0;
      padding-left: 20px;
      color: #666;
    }
"""

# Doubled braces are literal braces for str.format
MERMAID_INIT_SCRIPT = """
    function waitForMermaid(callback, attemptsLeft) {{
      if (typeof mermaid !== 'undefined') {{
        callback();
      }} else if (attemptsLeft > 0) {{
        setTimeout(function() {{
          waitForMermaid(callback, attemptsLeft - 1);
        }}, {poll_interval_ms});
      }} else {{
        console.error('Mermaid.js failed to load after {max_attempts} attempts');
      }}
    }}

    function initMermaid() {{
      mermaid.initialize({{
        startOnLoad: false,
        theme: 'default',
        securityLevel: 'loose',
        flowchart: {{
          useMaxWidth: true,
          htmlLabels: true,
          curve: 'basis'
        }},
        sequence: {{
          diagramMarginX: 50,
          diagramMarginY: 10,
          actorMargin: 50
        }},
        gantt: {{
          useMaxWidth: true
        }}
      }});

      if (document.querySelectorAll('.{css_class}').length > 0) {{
        mermaid.run({{
          querySelector: '.{css_class}',
          suppressErrors: true
        }}).catch(function(err) {{
          console.error('Mermaid rendering error:', err);
        }});
      }}
    }}

    if (document.readyState === 'loading') {{
      document.addEventListener('DOMContentLoaded', function() {{
        waitForMermaid(initMermaid, {max_attempts});
      }});
    }} else {{
      waitForMermaid(initMermaid, {max_attempts});
    }}
"""


def _create_html_template(content: str, title: str, config: Config) -> str:
    """Wrap rendered body content in the full page with styles and scripts."""
    init_script = MERMAID_INIT_SCRIPT.format(
        poll_interval_ms=config.get_mermaid_poll_interval_ms(),
        max_attempts=config.get_mermaid_max_attempts(),
        css_class=MERMAID_CLASS,
    )
    mermaid_url = html.escape(config.get_mermaid_url())

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{html.escape(title)}</title>
  <style>{STYLESHEET}  </style>
</head>
<body>
{content}

  <script src="{mermaid_url}"></script>
  <script>{init_script}  </script>
</body>
</html>
"""


def render_html(content: str, title: str, config: Optional[Config] = None) -> str:
    """Render a Markdown document to a complete HTML page."""
    config = config or Config()
    body = markdown_to_html(content)
    return _create_html_template(body, title, config)


def read_markdown(input_path: PathLike) -> str:
    """Read a UTF-8 Markdown file, raising ``InputNotFoundError`` if missing."""
    input_path = Path(input_path)
    if not input_path.is_file():
        raise InputNotFoundError(input_path)
    with open(input_path, 'r', encoding='utf-8') as f:
        return f.read()


def convert_to_html(input_path: PathLike, output_path: PathLike, config: Optional[Config] = None) -> Path:
    """Convert a Markdown file to a standalone HTML file and return its path."""
    input_path = Path(input_path)
    output_path = Path(output_path)
    log_info(f"Converting {input_path} to HTML...")

    content = read_markdown(input_path)
    page = render_html(content, title_from_path(input_path), config)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(page)

    log_success(f"HTML file created: {output_path}")
    return output_path
