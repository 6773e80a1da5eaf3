from pathlib import Path

import pytest

from convert_md.config import Config

SIMPLE_MD = """# Simple Test

Just a simple paragraph.
"""

SAMPLE_MD = """# Sample Document

Some **bold** text and a [link](https://example.com).

```javascript
const hello = 'world';
if (a < b) {}
```

| Name | Value |
|------|-------|
| one  | 1     |

> This is a blockquote
"""

MERMAID_MD = """# Diagrams

```mermaid
sequenceDiagram
    Alice->>Bob: Hello
```

```mermaid
flowchart LR
    subgraph Payment Service
        API
    end
    Payment Service --> Database
```
"""


@pytest.fixture
def write_md(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def simple_md(write_md) -> Path:
    return write_md("simple.md", SIMPLE_MD)


@pytest.fixture
def sample_md(write_md) -> Path:
    return write_md("sample.md", SAMPLE_MD)


@pytest.fixture
def mermaid_md(write_md) -> Path:
    return write_md("mermaid-only.md", MERMAID_MD)


@pytest.fixture
def fast_config() -> Config:
    """Config with every browser-side delay switched off."""
    return Config(
        {
            "render_initial_delay_ms": 0,
            "settle_delay_ms": 0,
            "render_poll_interval_ms": 0,
        },
        environ={},
    )
