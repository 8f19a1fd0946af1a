"""Bundled prompt and response schema for chat-model label translation.

The template is filled with ``str.format``; the placeholders below are the
ones LlmProcessingClient.translate supplies.
"""

import json
from pathlib import Path

from labelflow.processing.exceptions import ProcessingError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

TEMPLATE_PLACEHOLDERS = ("source_language", "target_country", "json_schema", "structured_data")


def load_prompt_template(path: Path | None = None) -> str:
    """Load the label translation prompt and check it has every placeholder.

    Args:
        path: Path to the template file.
              Defaults to the bundled translation_prompt.txt.

    Raises:
        ProcessingError: if the file cannot be read or a placeholder is missing.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "translation_prompt.txt"
    try:
        template = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProcessingError(f"Failed to load prompt template: {exc}") from exc

    missing = [name for name in TEMPLATE_PLACEHOLDERS if f"{{{name}}}" not in template]
    if missing:
        raise ProcessingError(f"Prompt template {path.name} is missing placeholders: {missing}")
    return template


def load_json_schema(path: Path | None = None) -> str:
    """Load the schema translated labels must match.

    The schema must be a JSON object that requires ``translated_data``,
    since that is the only field read back from the model's answer.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "translation_schema.json"
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProcessingError(f"Failed to load JSON schema: {exc}") from exc

    try:
        schema = json.loads(raw)
    except ValueError as exc:
        raise ProcessingError(f"JSON schema {path.name} is not valid JSON: {exc}") from exc
    if not isinstance(schema, dict) or "translated_data" not in schema.get("required", []):
        raise ProcessingError(f"JSON schema {path.name} must require 'translated_data'")
    return raw
