"""Command-line entry point for the schema upgrader.

Usage:
    rage-upgrade              # same as "rage-upgrade run"
    rage-upgrade run          # upgrade every controller to its latest version
    rage-upgrade status       # refresh once and print each controller's state
    rage-upgrade restore mongo  # run the pending transformer's restore hook

Exits with status 1 on any fatal condition after logging the error and
the result set gathered so far.
"""

import argparse
import asyncio
import json
import sys

from rage.config import get_settings
from rage.config.settings import Settings
from rage.observability.logging import get_logger, setup_logging
from rage.observability.metrics import push_metrics
from rage.upgrade.controllers import MongoController
from rage.upgrade.errors import UpgradeError
from rage.upgrade.models import UpgradeContext
from rage.upgrade.orchestrator import UpgradeOrchestrator, summarize
from rage.upgrade.registry import ControllerRegistry

logger = get_logger(__name__)


def build_registry(settings: Settings) -> ControllerRegistry:
    """Register the controllers this deployment upgrades."""
    registry = ControllerRegistry()
    registry.register(
        "mongo",
        MongoController(version_collection=settings.upgrade.version_collection),
    )
    return registry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rage-upgrade",
        description="Upgrade the analytics backend data to the latest schema version.",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("run", help="Run upgrade rounds until every controller is up to date")
    subparsers.add_parser("status", help="Refresh every controller once without transforming")
    restore = subparsers.add_parser(
        "restore", help="Run a controller's restore hook for its pending transformer"
    )
    restore.add_argument("controller", help="Registered controller name")
    return parser


async def _run(orchestrator: UpgradeOrchestrator) -> None:
    await orchestrator.upgrade()


async def _status(orchestrator: UpgradeOrchestrator) -> None:
    await orchestrator.connect()
    results = await orchestrator.refresh()
    print(json.dumps(summarize(results), indent=4))


async def _restore(orchestrator: UpgradeOrchestrator, registry: ControllerRegistry, name: str) -> None:
    controller = registry.get(name)
    context = await orchestrator.connect()
    await controller.restore(context)


async def execute(
    args: argparse.Namespace,
    settings: Settings,
    registry: ControllerRegistry,
) -> int:
    """Run the selected command. Returns the process exit code."""
    if args.command == "restore" and args.controller not in registry:
        logger.error("upgrade_unknown_controller", controller=args.controller)
        return 2

    orchestrator = UpgradeOrchestrator(
        registry,
        UpgradeContext(settings=settings),
        max_stalled_rounds=settings.upgrade.max_stalled_rounds,
    )
    try:
        if args.command == "status":
            await _status(orchestrator)
        elif args.command == "restore":
            await _restore(orchestrator, registry, args.controller)
        else:
            await _run(orchestrator)
    except UpgradeError as e:
        logger.error(
            "upgrade_failed",
            error=e.message,
            error_type=type(e).__name__,
            results=e.results,
        )
        return 1
    finally:
        await orchestrator.close()

    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )

    exit_code = asyncio.run(execute(args, settings, build_registry(settings)))

    metrics = settings.observability.metrics
    if metrics.enabled and metrics.pushgateway_url:
        try:
            push_metrics(metrics.pushgateway_url, metrics.job_name)
        except OSError as e:
            logger.warning("upgrade_metrics_push_failed", error=str(e))

    return exit_code


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
