"""Pytest configuration and shared fixtures for the md2textile test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Undo handlers the CLI attaches to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run the test in an empty working directory without config discovery leaks."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MD2TEXTILE_CONFIG", raising=False)
    return tmp_path


@pytest.fixture
def sample_markdown() -> str:
    """Provide a document exercising every supported construct.

    Returns
    -------
    str
        Markdown source

    """
    return """# Sample Document

This is a **sample document** with _italic text_ and some `inline code`.

## Lists

- Item 1
- Item 2
  - Nested item
- Item 3

1. First item
2. Second item

> Quoted text
> spanning two lines

```python
def hello_world():
    print("Hello, World!")
```

| Header 1 | Header 2 |
|:---------|---------:|
| Row 1    | `Data 1` |

See [the docs](https://example.com) and ![logo](logo.png).

---
"""
