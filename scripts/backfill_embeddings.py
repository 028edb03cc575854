#!/usr/bin/env python3
"""
Backfill agent profile embeddings.

Computes and stores embeddings for all active agents that don't have one yet.
Ctrl-C stops the run cleanly after the current batch.

Example usage:
    python -m scripts.backfill_embeddings
    python -m scripts.backfill_embeddings --agent-id 42
    python -m scripts.backfill_embeddings --dry-run
    python -m scripts.backfill_embeddings --batch-size 5 --delay 2000

Environment:
    DATABASE_URL      PostgreSQL connection string
    OPENAI_API_KEY    Embedding provider API key
"""
import argparse
import asyncio
import logging
import signal
import sys
import time
from typing import List, Optional

from core.app_context import AppContext
from core.config_loader import AppConfig, load_config
from core.exceptions import EngineError
from core.matcher import EmbeddingBackfillJob
from database.uow import agent_uow

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DRY_RUN_PREVIEW = 50


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Backfill agent profile embeddings")
    parser.add_argument("--batch-size", type=int, default=None,
                        help="Agents per batch (default: backfill.batch_size, 10)")
    parser.add_argument("--delay", type=int, default=None,
                        help="Milliseconds between batches (default: backfill.delay_ms, 1000)")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show what would be done without making changes")
    parser.add_argument("--agent-id", type=int, default=None,
                        help="Process only this agent (recomputes an existing embedding)")
    parser.add_argument("--config", default="config.yaml",
                        help="Path to config.yaml")
    args = parser.parse_args(argv)

    if args.batch_size is not None and args.batch_size < 1:
        parser.error("--batch-size must be at least 1")
    if args.delay is not None and args.delay < 0:
        parser.error("--delay must not be negative")
    return args


def _print_stats(job: EmbeddingBackfillJob, title: str) -> None:
    stats = job.get_embedding_stats()
    print(f"\n{title}:")
    print(f"  Total agents: {stats.total_agents}")
    print(f"  With embeddings: {stats.with_embeddings}")
    print(f"  Without embeddings: {stats.without_embeddings}")
    print(f"  Coverage: {stats.coverage_percent}%")


def _dry_run(job: EmbeddingBackfillJob, agent_id: Optional[int]) -> None:
    print("\nDRY RUN - no changes will be made")
    if agent_id is not None:
        agent = job.repo.get_by_id(agent_id)
        if agent is None:
            print(f"Agent {agent_id} not found")
        else:
            has_embedding = agent.embedding is not None
            print(f"  Agent {agent.id}: {agent.name}")
            print(f"  Has embedding: {'Yes' if has_embedding else 'No'}")
            print("  -> Would recompute embedding" if has_embedding else "  -> Would compute embedding")
        return

    pending = job.repo.get_agents_without_embeddings(limit=DRY_RUN_PREVIEW + 1)
    print(f"\nAgents that would be processed (showing first {DRY_RUN_PREVIEW}):")
    for agent in pending[:DRY_RUN_PREVIEW]:
        print(f"  - Agent {agent.id}: {agent.name}")
    if len(pending) > DRY_RUN_PREVIEW:
        print("  ... and more")


async def run(args: argparse.Namespace, config: AppConfig) -> int:
    context = AppContext.build(config)
    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _request_stop(sig, frame):
        logger.info("Shutdown signal received, stopping after the current batch")
        loop.call_soon_threadsafe(stop_event.set)

    signal.signal(signal.SIGINT, _request_stop)
    signal.signal(signal.SIGTERM, _request_stop)

    with agent_uow(config.database.url) as repo:
        job = EmbeddingBackfillJob(repo, context.embedding_client, config.backfill)
        _print_stats(job, "Current status")

        if args.dry_run:
            _dry_run(job, args.agent_id)
            return 0

        if args.agent_id is not None:
            if await job.compute_agent_embedding(args.agent_id):
                print(f"\nEmbedding computed for agent {args.agent_id}")
                return 0
            print(f"\nFailed to compute embedding for agent {args.agent_id}")
            return 1

        started = time.monotonic()
        result = await job.run(
            batch_size=args.batch_size,
            delay_ms=args.delay,
            stop_event=stop_event
        )
        duration = time.monotonic() - started

        print("\nBackfill " + ("stopped" if result.cancelled else "complete"))
        print(f"  Duration: {duration:.1f}s")
        print(f"  Total: {result.total}")
        print(f"  Processed: {result.processed}")
        print(f"  Failed: {result.failed}")
        print(f"  Batches: {result.batches}")
        _print_stats(job, "Updated status")

    return 0 if result.failed == 0 else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)

    try:
        return asyncio.run(run(args, config))
    except EngineError as e:
        logger.error(f"Backfill aborted: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
