"""
Spec Validation - JSON Schema validation of declared resource specs.

Runs before any admin API call: schema shape, mutually exclusive
attributes, and the config_json blob itself.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from jsonschema import Draft7Validator, ValidationError

from normalize import validate_config_json
from schema import Attribute, to_json_schema

logger = logging.getLogger(__name__)


def validate_openapi_schema(schema: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate that a schema is a valid JSON Schema (Draft 7).

    Args:
        schema: The schema to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        Draft7Validator.check_schema(schema)
        return True, None
    except Exception as e:
        return False, f"Invalid schema: {str(e)}"


def validate_spec_against_schema(
    spec: Dict[str, Any], schema: Dict[str, Any]
) -> Tuple[bool, Optional[str]]:
    """
    Validate a resource spec against a JSON Schema.

    Args:
        spec: The resource specification to validate
        schema: The JSON Schema to validate against

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        validator = Draft7Validator(schema, format_checker=Draft7Validator.FORMAT_CHECKER)
        errors = list(validator.iter_errors(spec))

        if not errors:
            return True, None

        # Collect all validation errors
        error_messages = []
        for error in errors:
            path = ".".join(str(p) for p in error.absolute_path) or "(root)"
            error_messages.append(f"{path}: {error.message}")

        return False, "; ".join(error_messages)

    except ValidationError as e:
        return False, f"Validation error: {str(e)}"
    except Exception as e:
        logger.error(f"Unexpected error during validation: {e}")
        return False, f"Validation failed: {str(e)}"


def validate_resource_spec(
    attributes: Sequence[Attribute], spec: Dict[str, Any]
) -> Tuple[bool, Optional[str]]:
    """
    Validate a declared spec against a resource's attribute table.

    Checks the JSON Schema derived from the table, then conflicting
    attributes, then that config_json is a JSON object.

    Args:
        attributes: The resource's attribute table
        spec: The declared attributes

    Returns:
        Tuple of (is_valid, error_message)
    """
    is_valid, error = validate_spec_against_schema(spec, to_json_schema(attributes))
    if not is_valid:
        return False, error

    for attr in attributes:
        if not spec.get(attr.name):
            continue
        for other in attr.conflicts_with:
            if spec.get(other):
                return False, f'"{attr.name}": conflicts with {other}'

    config_json = spec.get("config_json")
    if config_json:
        is_valid, error = validate_config_json(config_json)
        if not is_valid:
            return False, f"config_json: {error}"

    return True, None
