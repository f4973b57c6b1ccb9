# ==============================================
# App wiring
# ==============================================
#
# PURPOSE:
#   Assemble a SyncMediator from configuration and attach it to
#   the host's HookRegistry. This is the only place that reads
#   config for the sync path; the mediator itself takes plain
#   collaborators.
#
# FUNCTIONS:
# ----------
# - build_mediator(config=None, store=None, user_resolver=None) -> SyncMediator
# - install(hooks, user_resolver, config=None, store=None) -> SyncMediator
#
# ==============================================

from typing import Optional

from formsync.config import AppConfig, get_config
from formsync.hooks import HookRegistry
from formsync.storage.base import ProfileStore
from formsync.storage.factory import create_store
from formsync.sync.mediator import SyncMediator, UserResolver


def build_mediator(
    config: Optional[AppConfig] = None,
    store: Optional[ProfileStore] = None,
    user_resolver: Optional[UserResolver] = None,
) -> SyncMediator:
    """
    Create a SyncMediator for the configured backend.

    Args:
        config: Application configuration. If None, loads from environment.
        store: Use this store instead of creating one from config
        user_resolver: Returns the acting user's id

    Returns:
        SyncMediator
    """
    config = config or get_config()
    return SyncMediator(
        store=store or create_store(config),
        user_resolver=user_resolver,
        no_override=config.sync.no_override,
    )


def install(
    hooks: HookRegistry,
    user_resolver: UserResolver,
    config: Optional[AppConfig] = None,
    store: Optional[ProfileStore] = None,
) -> SyncMediator:
    """Build a mediator and subscribe it to the host's hooks."""
    mediator = build_mediator(config, store=store, user_resolver=user_resolver)
    mediator.register(hooks)
    return mediator
