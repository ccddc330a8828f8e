"""Tests for request validation."""

from typing import Literal

import pytest
from pydantic import BaseModel

from gig_api.exceptions import UnprocessableError
from gig_api.pipeline import RequestContext, ValidationSchema, validate_request


class Body(BaseModel):
    kind: Literal["fixed", "hourly"]


class Query(BaseModel):
    page: int = 1


class Params(BaseModel):
    id: int


def test_no_schema_is_noop():
    ctx = RequestContext(input="anything")

    validate_request(None, ctx)

    assert ctx.validated == {}


def test_each_part_validated_and_stored():
    ctx = RequestContext(input={"kind": "fixed"}, query={"page": "4"}, params={"id": "12"})

    validate_request(ValidationSchema(input=Body, query=Query, params=Params), ctx)

    assert ctx.validated["input"] == Body(kind="fixed")
    assert ctx.validated["query"] == Query(page=4)
    assert ctx.validated["params"] == Params(id=12)


def test_message_has_no_quotes():
    ctx = RequestContext(input={"kind": "daily"})

    with pytest.raises(UnprocessableError) as exc_info:
        validate_request(ValidationSchema(input=Body), ctx)

    message = exc_info.value.message
    assert message.startswith("kind: ")
    assert "fixed" in message
    assert '"' not in message and "'" not in message


def test_body_checked_before_params():
    ctx = RequestContext(input={}, params={"id": "x"})

    with pytest.raises(UnprocessableError, match="^kind:"):
        validate_request(ValidationSchema(input=Body, params=Params), ctx)


def test_missing_body_validated_as_empty_object():
    ctx = RequestContext(input=None)

    with pytest.raises(UnprocessableError, match="kind: Field required"):
        validate_request(ValidationSchema(input=Body), ctx)
