"""Talent profile event handlers."""

from typing import Any

from loguru import logger

from gig_api.event_bus.core import EventHandler
from gig_api.events.types import CreateTalentPayload, GetTalentByUserIdPayload
from gig_api.repositories import TalentRepository


class CreateTalentHandler(EventHandler[CreateTalentPayload]):
    """Create the talent profile of a user who picked the talent role."""

    def __init__(self, talent_repository: TalentRepository):
        self.talent_repository = talent_repository

    async def handle(self, payload: CreateTalentPayload | dict[str, Any]) -> dict[str, Any]:
        request = CreateTalentPayload.model_validate(payload)
        profile = await self.talent_repository.create_profile(request.user_id)
        logger.info(f"Talent profile ready for user {request.user_id}")
        return profile


class GetTalentByUserIdHandler(EventHandler[GetTalentByUserIdPayload]):
    """Answer ``talent:get-by-user-id`` with the talent profile, if any."""

    def __init__(self, talent_repository: TalentRepository):
        self.talent_repository = talent_repository

    async def handle(self, payload: GetTalentByUserIdPayload | dict[str, Any]) -> dict[str, Any] | None:
        request = GetTalentByUserIdPayload.model_validate(payload)
        return await self.talent_repository.find_by_user_id(request.user_id)
