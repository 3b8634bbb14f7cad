"""Domain registry — which resources a project models and who owns them.

A *domain* is one of:

- a SQLAlchemy declarative base class; its resources are the mapped classes,
- a ``sqlalchemy.orm.registry``; its resources are the mapped classes,
- a ``sqlalchemy.MetaData``; its resources are the tables.

Domains for an application scope come from ``[apps.<scope>] domains`` in the
config (``"package.module:Object"`` import paths) and from plugins
implementing ``register_domains(scope)``.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import MetaData
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import registry as OrmRegistry

if TYPE_CHECKING:
    from stackscout.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """A registry could not be read (bad import path, failing plugin, ...)."""


class ResourceRegistryProvider(Protocol):
    """Return ``(resource_name, domain_name)`` pairs for an application scope."""

    def resources_for(self, scope: str | None) -> list[tuple[str, str]]: ...


def load_object(path: str) -> Any:
    """Import ``"package.module:Attr.attr"`` and return the object.

    Raises:
        RegistryError: the path is malformed, the module cannot be imported,
            or the attribute does not exist.
    """
    module_name, sep, attr_path = path.partition(":")
    if not sep or not module_name or not attr_path:
        msg = f"Domain path must look like 'package.module:Object', got {path!r}"
        raise RegistryError(msg)
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import {module_name!r} for domain {path!r}: {exc}"
        raise RegistryError(msg) from exc
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            msg = f"Domain {path!r} not found: {exc}"
            raise RegistryError(msg) from exc
    return obj


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _mapped_subclasses(base: type) -> Iterator[type]:
    """Yield classes below *base* that carry their own mapper, in definition order."""
    for sub in base.__subclasses__():
        mapper = sa_inspect(sub, raiseerr=False)
        if mapper is not None and getattr(mapper, "class_", None) is sub:
            yield sub
        yield from _mapped_subclasses(sub)


def _orm_registry_resources(reg: OrmRegistry, base: type | None) -> list[str]:
    seen: dict[type, None] = {}
    if base is not None:
        for cls in _mapped_subclasses(base):
            seen.setdefault(cls, None)
    # Classes mapped through the registry without subclassing the base.
    extra = sorted(
        (m.class_ for m in reg.mappers if m.class_ not in seen),
        key=qualified_name,
    )
    return [qualified_name(cls) for cls in [*seen, *extra]]


def resources_of(domain: Any) -> list[str]:
    """Resource names declared by *domain*.

    Raises:
        RegistryError: *domain* is not a supported kind.
    """
    if isinstance(domain, MetaData):
        return [table.fullname for table in domain.tables.values()]
    if isinstance(domain, OrmRegistry):
        return _orm_registry_resources(domain, None)
    reg = getattr(domain, "registry", None)
    if isinstance(domain, type) and isinstance(reg, OrmRegistry):
        return _orm_registry_resources(reg, domain)
    msg = (
        f"{domain!r} is not a domain: expected a declarative base, "
        "an ORM registry or a MetaData"
    )
    raise RegistryError(msg)


def _plugin_domain(item: Any) -> tuple[str, Any]:
    if isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str):
        return item[0], item[1]
    if isinstance(item, type):
        return qualified_name(item), item
    msg = f"Plugin domain {item!r} needs a name: return (name, domain) for non-class domains"
    raise RegistryError(msg)


class DomainRegistry:
    """Resource registry built from configured import paths and plugins.

    Parameters:
        configured: scope -> list of ``"package.module:Object"`` paths.
        plugin_manager: optional manager whose ``register_domains`` hook
            contributes extra domains.

    Nothing is cached: each call re-reads the live registries.
    """

    def __init__(
        self,
        configured: Mapping[str, Sequence[str]] | None = None,
        *,
        plugin_manager: PluginManager | None = None,
    ) -> None:
        self._configured = dict(configured or {})
        self._pm = plugin_manager

    def domains_for(self, scope: str | None) -> list[tuple[str, Any]]:
        """Return ``(domain_name, domain)`` pairs in source order, deduplicated."""
        domains: list[tuple[str, Any]] = []
        if scope is not None:
            for path in self._configured.get(scope, []):
                obj = load_object(path)
                name = qualified_name(obj) if isinstance(obj, type) else path
                domains.append((name, obj))

        if self._pm is not None:
            domains.extend(self._plugin_domains(scope))

        unique: list[tuple[str, Any]] = []
        seen: set[int] = set()
        for name, obj in domains:
            if id(obj) in seen:
                continue
            seen.add(id(obj))
            unique.append((name, obj))
        return unique

    def _plugin_domains(self, scope: str | None) -> list[tuple[str, Any]]:
        assert self._pm is not None
        try:
            contributions = self._pm.hook.register_domains(scope=scope)
        except Exception as exc:
            msg = f"Plugin failed while registering domains: {exc}"
            raise RegistryError(msg) from exc

        domains: list[tuple[str, Any]] = []
        for contribution in contributions:
            if not isinstance(contribution, (list, tuple)):
                msg = f"register_domains must return a list, got {type(contribution).__name__}"
                raise RegistryError(msg)
            domains.extend(_plugin_domain(item) for item in contribution)
        return domains

    def resources_for(self, scope: str | None) -> list[tuple[str, str]]:
        pairs: list[tuple[str, str]] = []
        for domain_name, domain in self.domains_for(scope):
            names = resources_of(domain)
            logger.debug("Domain %s has %d resources", domain_name, len(names))
            pairs.extend((name, domain_name) for name in names)
        return pairs
