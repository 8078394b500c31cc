from __future__ import annotations

import logging
from dataclasses import dataclass, field

from devkitchen.hub.contracts.cache import CacheStore
from devkitchen.hub.contracts.extension import HubModule
from devkitchen.hub.contracts.repository import UserStore
from devkitchen.hub.core.cache import MemoryCacheStore, RedisCacheStore, create_redis_client
from devkitchen.hub.core.config import Settings, settings as default_settings
from devkitchen.hub.core.errors import CacheBackendUnavailable
from devkitchen.hub.core.extension import ExtensionDataResolver, ExtensionListenerRegistry
from devkitchen.hub.core.logging import configure_logging
from devkitchen.hub.core.modules import load_and_register_modules, load_modules_config
from devkitchen.hub.users import SqlUserStore, UserService, create_user_repository

logger = logging.getLogger(__name__)


@dataclass
class Runtime:
    settings: Settings
    registry: ExtensionListenerRegistry
    resolver: ExtensionDataResolver
    cache: CacheStore | None
    user_service: UserService
    modules: list[HubModule] = field(default_factory=list)


async def build_cache_store(cfg: Settings) -> CacheStore | None:
    if cfg.cache_backend == "memory":
        return MemoryCacheStore(maxsize=cfg.memory_cache_maxsize)
    if cfg.cache_backend == "redis":
        try:
            return RedisCacheStore(await create_redis_client(cfg.redis_url))
        except CacheBackendUnavailable as exc:
            logger.warning("Redis unavailable at startup, running without cache: %s", exc)
            return None
    return None


async def build_runtime(
    cfg: Settings | None = None,
    *,
    store: UserStore | None = None,
    cache: CacheStore | None = None,
) -> Runtime:
    """
    Wire registry, modules, resolver, cache and user service.

    ``store`` and ``cache`` override what the settings would build.
    """
    cfg = cfg or default_settings
    configure_logging(cfg.log_level)

    registry = ExtensionListenerRegistry()
    try:
        modules_cfg = load_modules_config(cfg.modules_config_paths)
        modules = load_and_register_modules(registry=registry, cfg=modules_cfg)
    except Exception:
        logger.exception("Failed to initialize hub runtime")
        raise

    resolver = ExtensionDataResolver(registry=registry)

    if cache is None:
        cache = await build_cache_store(cfg)

    if store is None:
        from devkitchen.hub.db import get_async_engine, get_async_sessionmaker
        from devkitchen.hub.db.init import init_db

        if cfg.app_env == "dev":
            await init_db(get_async_engine())
        store = SqlUserStore(get_async_sessionmaker())

    repository = await create_user_repository(
        store,
        cache,
        force_cache=cfg.user_cache_force,
        prefix=cfg.user_cache_prefix,
        ttl=cfg.user_cache_ttl,
        negative_ttl=cfg.user_negative_cache_ttl,
    )

    logger.info(
        "Hub runtime ready",
        extra={
            "modules": [m.name for m in modules],
            "extension_listeners": registry.describe(),
            "user_repository": type(repository).__name__,
        },
    )

    return Runtime(
        settings=cfg,
        registry=registry,
        resolver=resolver,
        cache=cache,
        user_service=UserService(repository, cache=cache),
        modules=modules,
    )
