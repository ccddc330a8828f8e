"""Request validation against the configured schema."""

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from gig_api.exceptions import UnprocessableError

from .models import RequestContext, ValidationSchema

# Order in which request parts are validated
VALIDATED_PARTS = ("input", "query", "params")


def format_validation_error(error: ValidationError | RequestValidationError) -> str:
    """Render the first validation error without quote characters."""
    errors = error.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"{location}: {first['msg']}" if location else first["msg"]
    return message.replace('"', "").replace("'", "")


def validate_request(schema: ValidationSchema | None, ctx: RequestContext) -> None:
    """Validate every configured request part.

    Validated models are stored in ``ctx.validated`` under the part name.

    Args:
        schema: Validation schema, or None to skip validation
        ctx: Request context to validate

    Raises:
        UnprocessableError: On the first part that fails validation
    """
    if schema is None:
        return

    for part in VALIDATED_PARTS:
        model = getattr(schema, part)
        if model is None:
            continue

        value = getattr(ctx, part)
        try:
            ctx.validated[part] = model.model_validate(value if value is not None else {})
        except ValidationError as e:
            raise UnprocessableError(format_validation_error(e)) from e
