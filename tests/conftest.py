"""Pytest configuration and shared fixtures for the mdlayout test suite."""

import logging

import pytest

from mdlayout.api import build_styles, build_transforms
from mdlayout.context import RenderContext
from mdlayout.logging_utils import NOISY_LOGGERS, TRACE_LOGGER
from mdlayout.options import ConversionOptions
from mdlayout.processors import Dispatcher, build_default_registry


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - full Markdown to layout pipeline")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "e2e: End-to-end tests running the CLI as a subprocess")


@pytest.fixture
def styles():
    """Style registry with the default palette."""
    return build_styles()


@pytest.fixture
def render_context(styles):
    """Fresh render context seeded with the default font."""
    return RenderContext(styles.default_font())


@pytest.fixture
def dispatcher(styles, render_context):
    """Dispatcher wired with the default processors and transforms."""
    return Dispatcher(
        registry=build_default_registry(),
        styles=styles,
        transforms=build_transforms(styles, ConversionOptions()),
        render_context=render_context,
    )


@pytest.fixture
def sample_markdown():
    """Markdown document exercising every supported construct."""
    return """Preface text.

# Introduction

Some *emphasis*, **strong** and ~~struck~~ text with `code` and a [link](https://example.com).

## Details

> A quoted line

- first
- second

1. one
2. two

- [x] done
- [ ] todo

| Name | Value |
|:-----|------:|
| a    | 1     |
| b    | 2     |
| c    | 3     |

```python
def hello():
    return "world"
```

```ditaa
+-----+    +-----+
| A   |--->| B   |
+-----+    +-----+
```

---

# Second chapter

### Deep section

Final paragraph.
"""


@pytest.fixture
def restore_logging():
    """Undo the handlers and levels installed by configure_logging."""
    root = logging.getLogger()
    names = (TRACE_LOGGER,) + NOISY_LOGGERS
    saved_level = root.level
    saved_levels = {name: logging.getLogger(name).level for name in names}
    yield
    root.setLevel(saved_level)
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    for name, level in saved_levels.items():
        logging.getLogger(name).setLevel(level)
