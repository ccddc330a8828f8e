"""Enums for the request pipeline.

This module contains basic enums to avoid circular dependencies.
"""

from enum import StrEnum


class PipelineStage(StrEnum):
    """Stages of a pipeline run, in execution order."""

    PARSE = "parse"
    VALIDATE = "validate"
    AUTHENTICATE = "authenticate"
    ROLE = "role"
    PERMISSION = "permission"
    OWNERSHIP = "ownership"
    HANDLER = "handler"
    RESPOND = "respond"
