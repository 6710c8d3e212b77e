"""Delivery of a model's response to the console or to files."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

STDOUT = "STDOUT"


def write_outputs(model_name: str, response: str, outputs: Iterable[str]) -> None:
    """Send *response* to every target: ``STDOUT`` prints it, any other
    target is a file path that is created, with its directories, or
    overwritten."""
    for output in outputs:
        if output == STDOUT:
            print(f"\nResponse from {model_name}:\n{response}")
            continue
        path = Path(output)
        if str(path.parent) != ".":
            path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(response)