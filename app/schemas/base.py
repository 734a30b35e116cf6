"""Shared pydantic configuration for the JSON API (camelCase on the wire)."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Leading entries of FastAPI error locations that name where the value came from.
REQUEST_LOCATIONS = ("body", "query", "path", "header")


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON keys; either is accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def describe_errors(errors: list[dict]) -> str:
    """Turn pydantic error dicts into one short client-facing message."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(
        str(part) for part in first.get("loc", ()) if part not in REQUEST_LOCATIONS
    )
    msg = first.get("msg", "invalid value")
    return f"Invalid {field}: {msg}" if field else msg
