"""Application service layer: routing, catalog, and turn handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from clario_bot.core.ports import ConnectorPort, IntentClassifierPort, TemplateStorePort

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from .response_catalog import ResponseCatalog
    from .turn_router import TurnRouter


@dataclass(slots=True)
class ServiceContainer:
    """Aggregate of application-level services available to request handlers."""

    classifier: Optional[IntentClassifierPort] = None
    template_store: Optional[TemplateStorePort] = None
    connector: Optional[ConnectorPort] = None
    catalog: Optional["ResponseCatalog"] = None
    turn_router: Optional["TurnRouter"] = None


def build_default_services(
    *,
    classifier_port: Optional[IntentClassifierPort] = None,
    template_store_port: Optional[TemplateStorePort] = None,
    connector_port: Optional[ConnectorPort] = None,
) -> ServiceContainer:
    """Return a service container with the catalog and router wired to the ports.

    The router is only built when both a classifier and a template store exist.
    """

    # pylint: disable=import-outside-toplevel
    from .response_catalog import ResponseCatalog
    from .turn_router import TurnRouter

    catalog = ResponseCatalog(template_store_port) if template_store_port is not None else None
    turn_router = None
    if classifier_port is not None and catalog is not None:
        turn_router = TurnRouter(classifier_port, catalog)
    return ServiceContainer(
        classifier=classifier_port,
        template_store=template_store_port,
        connector=connector_port,
        catalog=catalog,
        turn_router=turn_router,
    )


__all__ = ["ServiceContainer", "build_default_services"]
