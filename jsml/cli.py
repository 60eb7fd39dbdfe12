"""Command-line interface for rendering JSML documents."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List

import yaml

from .create_element import create_element
from .dom_model import Document
from .errors import JsmlError
from .io_utils import read_jsml, read_jsml_stream, write_text
from .jinja_filters import render_page
from .models import DEFAULT_OPTIONS, RenderOptions, load_options
from .to_html import to_html_all


def _load_input(source: str) -> Any:
    if source == "-":
        return read_jsml_stream(sys.stdin)
    path = Path(source)
    if not path.exists():
        raise SystemExit(f"Input not found: {path}")
    return read_jsml(path)


def _as_nodes(payload: Any) -> List[Any]:
    if isinstance(payload, list):
        return payload
    return [payload]


def _materialize(nodes: List[Any], mode: str, options: RenderOptions) -> List[Any]:
    if mode == "dom":
        document = Document()
        return [create_element(node, document, options=options) for node in nodes]
    return nodes


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="jsml", description="Render a JSML document to HTML.")
    parser.add_argument("input", help="JSML file (.json, .yaml, .yml) or '-' to read JSON from stdin")
    parser.add_argument("--out", type=Path, default=None, help="Write HTML to this file instead of stdout")
    parser.add_argument(
        "--mode",
        choices=("html", "dom"),
        default="html",
        help="'html' renders strings directly; 'dom' builds elements first and serializes them.",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML file with render options")
    parser.add_argument("--page", action="store_true", help="Wrap the fragment in a full HTML document")
    parser.add_argument("--title", default="JSML", help="Document title used with --page")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    options = load_options(args.config) if args.config else DEFAULT_OPTIONS

    try:
        payload = _load_input(args.input)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SystemExit(f"Could not parse {args.input}: {exc}") from exc

    nodes = _as_nodes(payload)
    try:
        body = _materialize(nodes, args.mode, options)
        if args.page:
            output = render_page(body, title=args.title, options=options)
        else:
            output = to_html_all(body, options=options)
    except JsmlError as exc:
        raise SystemExit(f"Invalid JSML in {args.input}: {exc}") from exc

    if args.out:
        write_text(args.out, output + "\n")
        print(f"Wrote {len(nodes)} node(s) to {args.out}", file=sys.stderr)
        return
    sys.stdout.write(output + "\n")


if __name__ == "__main__":
    main(sys.argv[1:])
