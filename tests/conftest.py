"""Pytest configuration and shared fixtures for the flare2markup test suite.

This module provides shared fixtures, test configuration, and helpers
that are used across the entire test suite.
"""

from typing import Callable

import pytest

from flare2markup import convert_html

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    import os

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def convert() -> Callable[..., str]:
    """Provide a helper converting an HTML snippet and returning only the content.

    Returns
    -------
    Callable[..., str]
        ``convert(html, target_format="asciidoc", **kwargs)``

    """

    def _convert(html: str, target_format: str = "asciidoc", **kwargs) -> str:
        return convert_html(html, target_format, **kwargs).content

    return _convert


@pytest.fixture
def procedure_html() -> str:
    """Provide a Flare-style procedure topic used across integration tests.

    Returns
    -------
    str
        Topic body with a title, an ordered procedure containing a code block,
        a flat sibling sub-list and a note callout.

    """
    return """<html><head><title>Install</title><style>p { color: red; }</style></head>
<body>
<h1>Installing the agent</h1>
<p>Follow these steps to install the agent on a workstation.</p>
<ol>
  <li><p>Download the installer.</p></li>
  <li><p>Run the installer:</p><pre class="language-bash">sudo ./install.sh</pre></li>
  <li>Choose the components:</li>
</ol>
<ol class="sub-list" type="a">
  <li>Core service</li>
  <li>Command-line tools</li>
</ol>
<div class="note"><p>Restart the workstation when the installer finishes.</p></div>
</body></html>
"""
