"""Operator commands for the question bank: schema setup, topic import and queue inspection."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from question_bank.core.logging import configure_logging
from question_bank.core.settings import Settings, get_settings
from question_bank.database import Database
from question_bank.queue_store import RedisQueueStore
from question_bank.topic_repository import TopicRepository

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("sql") / "schema.sql"


class TopicImportEntry(BaseModel):
    title: str = Field(..., min_length=1)
    description: str | None = None


class TopicImportFile(BaseModel):
    topics: list[TopicImportEntry]


def load_topic_file(path: Path) -> list[dict[str, str | None]]:
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        data = TopicImportFile.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise ValueError(f"Invalid topics data: {exc}") from exc
    return [topic.model_dump() for topic in data.topics]


def _database(settings: Settings) -> Database:
    return Database(settings.question_bank_db_dsn, reshape_schema_query=settings.reshape_schema_query)


def _queue_store(settings: Settings) -> RedisQueueStore:
    return RedisQueueStore(settings.question_bank_redis_url, default_queue=settings.job_queue_name)


async def init_db(settings: Settings) -> None:
    database = _database(settings)
    await database.connect()
    try:
        await database.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
    finally:
        await database.disconnect()
    print("database schema is up to date")


async def list_topics(settings: Settings) -> None:
    database = _database(settings)
    await database.connect()
    try:
        topics = await TopicRepository(database).list_all()
    finally:
        await database.disconnect()
    for topic in topics:
        print(f"{topic.id}\t{topic.title}")
    print(f"{len(topics)} topics")


async def import_topics(settings: Settings, path: Path, *, clear: bool) -> None:
    topics = load_topic_file(path)
    database = _database(settings)
    await database.connect()
    try:
        repository = TopicRepository(database)
        if clear:
            await repository.clear_all()
        inserted = await repository.insert_many(topics)
    finally:
        await database.disconnect()
    print(f"imported {inserted} topics from {path}")


async def queue_stats(settings: Settings, queue_name: str | None) -> None:
    queue_store = _queue_store(settings)
    try:
        name = queue_name or queue_store.default_queue
        length = await queue_store.length(name)
        head = await queue_store.pop(name, remove=False)
    finally:
        await queue_store.close()
    print(f"queue: {name}")
    print(f"length: {length}")
    print(f"head: {head.model_dump_json() if head is not None else '-'}")


async def queue_clear(settings: Settings, queue_name: str | None) -> None:
    queue_store = _queue_store(settings)
    try:
        name = queue_name or queue_store.default_queue
        await queue_store.clear(name)
    finally:
        await queue_store.close()
    print(f"cleared queue {name}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="question-bank", description="Question bank operator commands")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="Create the question bank tables if they are missing")

    topics = commands.add_parser("topics", help="Manage topics")
    topic_commands = topics.add_subparsers(dest="topics_command", required=True)
    topic_commands.add_parser("list", help="Print every topic id and title")
    topic_import = topic_commands.add_parser("import", help="Import topics from a JSON file")
    topic_import.add_argument("file", type=Path, help='JSON file shaped as {"topics": [{"title": ..., "description": ...}]}')
    topic_import.add_argument("--clear", action="store_true", help="Delete existing topics before importing")

    queue = commands.add_parser("queue", help="Inspect the job queue")
    queue_commands = queue.add_subparsers(dest="queue_command", required=True)
    for name, help_text in (("stats", "Print queue length and head item"), ("clear", "Drop every queued item")):
        queue_command = queue_commands.add_parser(name, help=help_text)
        queue_command.add_argument("--queue", default=None, help="Queue name; defaults to JOB_QUEUE_NAME")

    return parser


async def run(args: argparse.Namespace, settings: Settings) -> None:
    if args.command == "init-db":
        await init_db(settings)
    elif args.command == "topics" and args.topics_command == "list":
        await list_topics(settings)
    elif args.command == "topics" and args.topics_command == "import":
        await import_topics(settings, args.file, clear=args.clear)
    elif args.command == "queue" and args.queue_command == "stats":
        await queue_stats(settings, args.queue)
    elif args.command == "queue" and args.queue_command == "clear":
        await queue_clear(settings, args.queue)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.effective_log_level)

    try:
        asyncio.run(run(args, settings))
    except Exception as exc:  # noqa: BLE001
        logger.debug("command failed", exc_info=True)
        print(str(exc), file=sys.stderr)
        raise SystemExit(1) from None


if __name__ == "__main__":
    main()
