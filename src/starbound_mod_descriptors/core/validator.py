"""JSON Schema validation for descriptor documents.

This module loads the formal JSON Schemas shipped with the package and
validates item, modinfo and legacy mod documents against them.
"""

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

# starbound_mod_descriptors/core/validator.py -> starbound_mod_descriptors/schemas/
SCHEMA_DIR = Path(__file__).parent.parent / "schemas"

ITEM_SCHEMA = "item"
MODINFO_SCHEMA = "modinfo"
LEGACY_MOD_SCHEMA = "legacy_mod"


def schema_path(schema_name: str) -> Path:
    """Return the path of the schema file called ``schema_name``."""
    return SCHEMA_DIR / f"{schema_name}.schema.json"


def load_schema(schema_name: str) -> dict[str, Any]:
    """Load a JSON schema from disk.

    Args:
        schema_name: One of ``item``, ``modinfo`` or ``legacy_mod``

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    path = schema_path(schema_name)
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_document(document: Any, schema_name: str) -> None:
    """Validate a decoded JSON document against a named schema.

    Args:
        document: The decoded JSON value to validate
        schema_name: Name of the schema to validate against

    Raises:
        ValidationError: If the document doesn't conform to the schema
        FileNotFoundError: If schema file is missing
        json.JSONDecodeError: If schema is invalid
    """
    schema = load_schema(schema_name)
    jsonschema.validate(instance=document, schema=schema)


def describe_validation_error(error: ValidationError) -> str:
    """Build a one-line description of where and why validation failed."""
    error_path = " -> ".join(str(p) for p in error.path) if error.path else "root"
    return f"Validation error at {error_path}: {error.message}"


def validate_document_with_error_details(
    document: Any, schema_name: str
) -> tuple[bool, str | None]:
    """Validate a document and return detailed error information.

    This is a convenience wrapper that catches validation errors and
    returns user-friendly error messages.

    Args:
        document: The decoded JSON value to validate
        schema_name: Name of the schema to validate against

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_document(document, schema_name)
        return True, None
    except ValidationError as e:
        error_msg = describe_validation_error(e)

        # Add context if available
        if e.instance:
            error_msg += f"\nInvalid value: {e.instance}"

        return False, error_msg
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"
