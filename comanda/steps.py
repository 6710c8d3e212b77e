"""Step definitions for a processing pipeline and helpers to normalise them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

_FILENAMES_PREFIX = "filenames:"
_VARIABLE_MARKER = " as $"


@dataclass
class StepConfig:
    """Configuration of a single step.

    Each field holds what the workflow file gave: a string, a list of
    strings, or a mapping. ``None`` means the key was absent.
    """

    input: Any = None
    model: Any = None
    action: Any = None
    output: Any = None
    next_action: Any = None


@dataclass
class Step:
    """A named step of the pipeline."""

    name: str
    config: StepConfig = field(default_factory=StepConfig)


@dataclass
class DSLConfig:
    """The ordered list of steps making up a pipeline."""

    steps: list[Step] = field(default_factory=list)


class StepValidationError(ValueError):
    """Raised when a step lacks one or more required fields."""

    def __init__(self, step_name: str, errors: list[str]) -> None:
        self.step_name = step_name
        self.errors = list(errors)
        joined = "\n- ".join(self.errors)
        super().__init__(f"validation errors in step '{step_name}':\n- {joined}")


def _filename_of(item: Any) -> str | None:
    if isinstance(item, dict):
        filename = item.get("filename")
        if isinstance(filename, str):
            return filename
    return None


def normalize_string_slice(value: Any) -> list[str]:
    """Turn a step field into a list of strings.

    Lists keep their length: strings stay as they are, mappings with a
    ``filename`` key give that name and anything else becomes ``""``.
    A string starting with ``filenames:`` is split on commas.
    """
    if value is None:
        return []
    if isinstance(value, str):
        if value.startswith(_FILENAMES_PREFIX):
            names = value[len(_FILENAMES_PREFIX):].split(",")
            return [name.strip() for name in names if name.strip()]
        return [value]
    if isinstance(value, (list, tuple)):
        result = []
        for item in value:
            if isinstance(item, str):
                result.append(item)
            else:
                result.append(_filename_of(item) or "")
        return result
    if isinstance(value, dict):
        filename = _filename_of(value)
        return [filename] if filename is not None else []
    return []


def parse_variable_assignment(text: str) -> tuple[str, str]:
    """Split ``"<input> as $<name>"`` into the input and the variable name.

    Without exactly one assignment the text comes back unchanged with an
    empty name.
    """
    parts = text.split(_VARIABLE_MARKER)
    if len(parts) == 2:
        return parts[0], parts[1]
    return text, ""


def substitute_variables(text: str, variables: dict[str, str]) -> str:
    """Replace every ``$name`` in *text* with the variable's value."""
    for name, value in variables.items():
        text = text.replace("$" + name, value)
    return text


def validate_step_config(step_name: str, config: StepConfig) -> None:
    """Check that a step has input, model, action and output set."""
    errors = []
    if config.input is None:
        errors.append(
            "input tag is required (can be NA or empty, but the tag must be present)"
        )
    if not normalize_string_slice(config.model):
        errors.append("model is required (can be NA or a valid model name)")
    if not normalize_string_slice(config.action):
        errors.append("action is required")
    if not normalize_string_slice(config.output):
        errors.append("output is required (can be STDOUT for console output)")
    if errors:
        raise StepValidationError(step_name, errors)