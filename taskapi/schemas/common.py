"""
Common schemas and helpers used across multiple route modules.
"""

from pydantic import BaseModel, Field, ValidationError as SchemaError

from core.errors import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Keeps the SQL OFFSET inside a 64-bit integer
MAX_PAGE = 1_000_000


class PaginationParams(BaseModel):
    """Page-number pagination parameters."""
    page: int = Field(default=DEFAULT_PAGE, ge=1, le=MAX_PAGE, description="1-based page number")
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Items per page")

    @classmethod
    def from_query(cls, args) -> "PaginationParams":
        """Read page/limit from a query-string mapping.

        Invalid or missing values fall back to the defaults; an oversized
        page or limit is capped rather than rejected.
        """
        page = _int_or_default(args.get("page"), DEFAULT_PAGE)
        limit = _int_or_default(args.get("limit"), DEFAULT_LIMIT)
        if page < 1:
            page = DEFAULT_PAGE
        if limit < 1:
            limit = DEFAULT_LIMIT
        return cls(page=min(page, MAX_PAGE), limit=min(limit, MAX_LIMIT))


def _int_or_default(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_body(schema, data):
    """Validate a JSON body against a schema.

    Raises:
        ValidationError: body missing, not an object, or invalid; the
            response lists the offending fields.
    """
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")
    try:
        return schema.model_validate(data)
    except SchemaError as e:
        errors = {}
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "body"
            errors.setdefault(field, err["msg"])
        raise ValidationError("Invalid input data", errors=errors)
