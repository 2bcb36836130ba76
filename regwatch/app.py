"""Application bootstrap for regwatch.

Wires the components for one pass in dependency order:
config → logging → registry → state store → watch source → notifications.

A pass reads the watch list and the state once, reconciles every entry,
saves the state once and sends exactly one report.  Fatal errors abort
before the save, leaving the previous state file untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from regwatch.config import ConfigurationError, load_config, validate_config
from regwatch.ledger.store import JsonStateStore, StateFileError
from regwatch.models.config import RegwatchConfig
from regwatch.notifications import ReportDispatcher, build_report_dispatcher, render_report
from regwatch.observability.logging import get_logger, setup_logging
from regwatch.reconcile.reconciler import reconcile
from regwatch.registry import RegistryClient, RegistryError, build_registry
from regwatch.watchlist import WatchListFormatError, WatchSource, build_watch_source

if TYPE_CHECKING:
    from regwatch.models.report import PassResult

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


class WatchRun:
    """One reconcile pass with its collaborators.

    Collaborators not passed in are built from *config*.  Call ``close()``
    (or use ``async with``) to release the registry connection pool.
    """

    def __init__(
        self,
        config: RegwatchConfig,
        *,
        registry: RegistryClient | None = None,
        source: WatchSource | None = None,
        store: JsonStateStore | None = None,
        dispatcher: ReportDispatcher | None = None,
    ) -> None:
        self.config = config
        self._log = get_logger("app")
        self._registry = registry or build_registry(config.registry)
        self._source = source or build_watch_source(
            config.watch, self._registry, timeout=config.registry.timeout_seconds
        )
        self._store = store or JsonStateStore(config.state.path)
        self._dispatcher = dispatcher or build_report_dispatcher(config.notifications)

    async def __aenter__(self) -> WatchRun:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def run(self) -> tuple[PassResult, bool]:
        """Execute one pass.

        Returns:
            The pass result and whether the report reached every sink.

        Raises:
            WatchListFormatError: the watch list is malformed.
            StateFileError:       the state file cannot be read.
            RegistryError:        the registry failed; nothing was saved.
        """
        entries = await self._source.load()
        self._log.info("watch_list_loaded", source=self._source.description, entries=len(entries))

        prior_state = self._store.load()
        result = await reconcile(entries, self._registry, prior_state)

        self._store.save(result.state)

        report = render_report(result)
        delivered = await self._dispatcher.deliver(report)
        return result, delivered

    async def close(self) -> None:
        try:
            await self._registry.aclose()
        except Exception as exc:
            self._log.debug("registry close raised (non-fatal)", error=str(exc))


async def main(config: RegwatchConfig | None = None) -> int:
    """Load configuration, run one pass and return the process exit code."""
    try:
        config = config or load_config()
    except (ConfigurationError, ValueError) as exc:
        setup_logging()
        get_logger("app").critical("fatal configuration error", error=str(exc))
        return EXIT_USAGE

    setup_logging(config.log.level, config.log.format)
    log = get_logger("app")
    log.info("regwatch starting", version=_regwatch_version(), source=config.watch.source)

    try:
        validate_config(config)
    except ConfigurationError as exc:
        log.critical("fatal configuration error", error=str(exc))
        return EXIT_USAGE

    async with WatchRun(config) as watch_run:
        try:
            result, delivered = await watch_run.run()
        except WatchListFormatError as exc:
            log.critical("malformed watch list", error=str(exc))
            return EXIT_USAGE
        except (RegistryError, StateFileError, httpx.HTTPError, OSError) as exc:
            log.critical("pass aborted", error=str(exc), error_type=type(exc).__name__)
            return EXIT_FAILURE

    if not delivered:
        log.error("report delivery failed", changed=len(result.changes))
        return EXIT_FAILURE

    log.info("regwatch finished", changed=len(result.changes), checked=len(result.checked))
    return EXIT_OK


def _regwatch_version() -> str:
    from regwatch import __version__

    return __version__
