"""Jinja2 integration for rendering JSML inside templates."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from .models import DEFAULT_OPTIONS, RenderOptions
from .to_html import to_html, to_html_all

TEMPLATES_DIR = Path(__file__).parent / "templates"


def jsml_filter(value: Any, options: Optional[RenderOptions] = None) -> Markup:
    """Render a JSML node (or a list of nodes) as trusted markup."""
    opts = options or DEFAULT_OPTIONS
    if isinstance(value, (list, tuple)):
        return Markup(to_html_all(value, options=opts))
    return Markup(to_html(value, options=opts))


def install(env: Environment, options: Optional[RenderOptions] = None) -> Environment:
    """Register the ``jsml`` filter on an existing environment."""

    def _filter(value: Any) -> Markup:
        return jsml_filter(value, options)

    env.filters["jsml"] = _filter
    return env


def page_environment(options: Optional[RenderOptions] = None) -> Environment:
    """Create the environment used for standalone pages."""

    env = Environment(
        loader=FileSystemLoader([TEMPLATES_DIR]),
        autoescape=select_autoescape(["html", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    return install(env, options)


def render_page(body: Any, *, title: str, options: Optional[RenderOptions] = None) -> str:
    env = page_environment(options)
    template = env.get_template("page.html.jinja")
    return template.render(title=title, body=body)
