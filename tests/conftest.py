"""Shared pytest fixtures for pagekit tests."""

from types import SimpleNamespace

import pytest

from pagekit import PageKit, PageKitConfig, PushRegistry
from pagekit.templates import Renderer, TemplateEnvironmentCache


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture
def request_carrier():
    """A bare request object; registrations are attached as attributes."""
    return SimpleNamespace()


@pytest.fixture
def registry():
    return PushRegistry()


@pytest.fixture
def bare_registry():
    """A registry without the baseline global calls."""
    return PushRegistry(install_defaults=False)


@pytest.fixture
def views_dir(tmp_path):
    """A directory of small application templates."""
    views = tmp_path / "views"
    views.mkdir()
    (views / "page.html").write_text("<h1>{{ title }}</h1>", encoding="utf-8")
    (views / "item.html").write_text("<li>{{ label }}</li>", encoding="utf-8")
    (views / "list.html").write_text(
        "<ul>{% for label in labels %}{{ partial('item', {'label': label}) }}{% endfor %}</ul>",
        encoding="utf-8",
    )
    (views / "probe.html").write_text(
        "{{ title }}|{{ 'same' if partial == expected_partial else 'different' }}",
        encoding="utf-8",
    )
    return views


@pytest.fixture
def environments(tmp_path):
    baseline = tmp_path / "baseline"
    baseline.mkdir()
    (baseline / "fallback.html").write_text("baseline {{ title }}", encoding="utf-8")
    return TemplateEnvironmentCache(views_dir=baseline)


@pytest.fixture
def renderer(environments):
    return Renderer(environments, locals={"title": "Default title", "site": "Example"})


@pytest.fixture
def kit(views_dir):
    return PageKit(PageKitConfig(partial_paths=[views_dir]))
