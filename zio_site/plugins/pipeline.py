"""Sequential execution of configured plugin entries."""

from __future__ import annotations

import logging
import typing as typ

from .base import PluginExecutionError, PluginRegistry

if typ.TYPE_CHECKING:
    from zio_site.config import PluginEntry

    from .base import BuildContext, Plugin

logger = logging.getLogger(__name__)


class PluginPipeline:
    """Run plugin entries strictly in declaration order.

    Every reference is resolved when the pipeline is created, so an unknown
    plugin fails before any unit runs. During :meth:`run` each unit sees the
    context as left by the units before it; the first failure aborts the run.
    """

    def __init__(
        self, entries: typ.Sequence[PluginEntry], registry: PluginRegistry
    ) -> None:
        self.entries = tuple(entries)
        self._units: list[tuple[PluginEntry, Plugin]] = [
            (entry, registry.resolve(entry.reference)) for entry in self.entries
        ]

    def run(self, context: BuildContext) -> BuildContext:
        """Apply every unit to ``context`` and return it.

        Raises
        ------
        PluginExecutionError
            If any unit raises; the original error is chained.
        """
        for entry, plugin in self._units:
            logger.debug("running plugin %s", entry.reference)
            context.invocations.append(entry.reference)
            try:
                plugin(context, entry.options)
            except Exception as exc:
                raise PluginExecutionError(entry.reference, str(exc)) from exc
        return context


__all__ = ["PluginPipeline"]
