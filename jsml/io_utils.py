"""Utility helpers for JSML input and logging."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, TextIO

import yaml

YAML_SUFFIXES = {".yaml", ".yml"}


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def read_jsml(path: Path) -> Any:
    """Load a JSML document from a JSON or YAML file."""
    if path.suffix.lower() in YAML_SUFFIXES:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    return read_json(path)


def read_jsml_stream(stream: TextIO) -> Any:
    return json.load(stream)


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def warn(msg: str) -> None:
    print(msg, file=sys.stderr)
