"""Dependency injection setup module.

This module provides centralized service registration for both
FastAPI server and CLI applications.
"""

from loguru import logger

from gig_api.authorization import AuthorizationModel, OwnershipEvaluator, PermissionEvaluator
from gig_api.event_bus import EventBus, get_event_bus
from gig_api.identity import IdentityProvider, get_identity_provider
from gig_api.pipeline import PipelineExecutor
from gig_api.repositories import TalentRepository, UserRepository
from gig_api.services.auth_service import AuthService
from gig_api.services.registry import ServiceRegistry
from gig_api.services.user_service import UserService
from gig_api.store import RowStore, SqlRowStore


def register_core_services(registry: ServiceRegistry) -> None:
    """Register core services in the service registry.

    Core services are the event bus, storage, the identity provider and the
    authorization pipeline built on top of them. Everything except the bus is
    registered as a factory, so nothing touches the database or the network
    until first use.

    Args:
        registry: Service registry instance to register services in
    """
    logger.debug("Registering core services in DI container")

    registry.register_singleton(EventBus, get_event_bus())
    registry.register_factory(RowStore, SqlRowStore)
    registry.register_factory(IdentityProvider, get_identity_provider)
    registry.register_factory(AuthorizationModel, lambda: AuthorizationModel(registry.get(RowStore)))
    registry.register_factory(
        PermissionEvaluator,
        lambda: PermissionEvaluator(registry.get(AuthorizationModel), registry.get(EventBus)),
    )
    registry.register_factory(OwnershipEvaluator, lambda: OwnershipEvaluator(registry.get(AuthorizationModel)))
    registry.register_factory(
        PipelineExecutor,
        lambda: PipelineExecutor(
            registry.get(EventBus),
            registry.get(IdentityProvider),
            registry.get(PermissionEvaluator),
            registry.get(OwnershipEvaluator),
        ),
    )


def register_app_services(registry: ServiceRegistry) -> None:
    """Register application-specific services in the service registry.

    Args:
        registry: Service registry instance to register services in
    """
    logger.debug("Registering application services in DI container")

    registry.register_factory(UserRepository, lambda: UserRepository(registry.get(RowStore)))
    registry.register_factory(TalentRepository, lambda: TalentRepository(registry.get(RowStore)))
    registry.register_factory(UserService, lambda: UserService(registry.get(UserRepository), registry.get(EventBus)))
    registry.register_factory(AuthService, lambda: AuthService(registry.get(UserRepository), registry.get(EventBus)))


def register_all_services(registry: ServiceRegistry) -> None:
    """Register all services in the service registry.

    This is a convenience function that registers both core and application services.

    Args:
        registry: Service registry instance to register services in
    """
    register_core_services(registry)
    register_app_services(registry)
