"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from classjars.core import context
from classjars.core.observability.metrics import MetricsRegistry


@pytest.fixture(autouse=True)
def _reset_project_root():
    """Keep the process-wide project root from leaking between tests."""
    previous = context.get_project_root()
    yield
    context.set_project_root(previous)


@pytest.fixture
def registry() -> MetricsRegistry:
    """A private metrics registry so tests never share counters."""
    return MetricsRegistry()


@pytest.fixture
def project_yml(tmp_path: Path) -> Path:
    """A classjars.yml with two mapped modules and one source root."""
    content = textwrap.dedent("""\
        name: demo
        description: "Demo workspace"
        source_roots:
          - java
        modules:
          - name: app
            target: //java/app:app
          - name: lib
            target: //java/lib:lib
    """)
    (tmp_path / "java").mkdir()
    path = tmp_path / "classjars.yml"
    path.write_text(content)
    return path
