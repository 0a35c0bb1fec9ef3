"""BaseService — foundation for host-facing services.

Every service receives the :class:`DependencyGraph` it operates on and the
session :class:`GraphSettings`. Nothing is looked up from global state: the
host session that owns the graph constructs the service.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from stategraph.config.settings import GraphSettings
from stategraph.services.result import ServiceError, ServiceResult
from stategraph.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from stategraph.dependency_graph import DependencyGraph

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class GraphService(BaseService):
            def metrics(self) -> ServiceResult:
                report = self._graph.get_metrics()
                ...
    """

    def __init__(self, graph: DependencyGraph, settings: GraphSettings | None = None) -> None:
        self._graph = graph
        self._settings = settings or GraphSettings()
        if self._settings.verbose:
            enable_telemetry()

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    @property
    def settings(self) -> GraphSettings:
        return self._settings

    @staticmethod
    def _failure(op: str, code: str, message: str, **detail: object) -> ServiceResult:
        """Build an ``ok=False`` result and log it at INFO."""
        logger.info("%s failed: %s (%s)", op, message, code)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=dict(detail)),
        )
