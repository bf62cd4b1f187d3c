import argparse
import asyncio
import json
import mimetypes
import sys
from collections.abc import Sequence
from pathlib import Path

import httpx

from docintel.config.settings import Settings
from docintel.extraction.models import UploadedDocument
from docintel.logging.logger import Log
from docintel.pipeline.exceptions import PipelineError
from docintel.pipeline.factory import build_pipeline
from docintel.storage.connection import close_pool, open_pool
from docintel.storage.factory import StorageFactory
from docintel.storage.postgres_storage import PostgresStorage
from docintel.summarization.text_store import TemporaryTextStore


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docintel",
        description="Analyze a document and print the analysis as JSON.",
    )
    parser.add_argument("path", type=Path, help="document to analyze")
    parser.add_argument("--owner", default="local", help="owner id the asset is stored under")
    parser.add_argument("--mime", default="", help="mime type, guessed from the name if omitted")
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="create the PostgreSQL tables before analyzing",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, settings: Settings) -> dict[str, object]:
    """Entry point: open storage -> build pipeline -> analyze one file."""
    mime_type = args.mime or mimetypes.guess_type(args.path.name)[0] or ""
    document = UploadedDocument(
        content=args.path.read_bytes(),
        file_name=args.path.name,
        mime_type=mime_type,
    )
    text_store = TemporaryTextStore(settings.server_url)

    pool = None
    if settings.storage_backend.lower() == "postgres":
        pool = await open_pool(settings)
    try:
        storage = StorageFactory.create(settings, pool)
        if args.create_schema and isinstance(storage, PostgresStorage):
            await storage.create_schema()
        async with httpx.AsyncClient(timeout=settings.provider_timeout_seconds) as http_client:
            pipeline = build_pipeline(settings, storage, text_store, http_client)
            response = await pipeline.analyze(document, owner_id=args.owner)
    finally:
        await close_pool(pool)
    return response.to_dict()


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        result = asyncio.run(run(args, settings))
    except PipelineError as exc:
        Log.error(str(exc))
        return 1
    except OSError as exc:
        Log.error(f"Cannot analyze {args.path}: {exc}")
        return 1
    json.dump(result, sys.stdout, indent=2, ensure_ascii=False, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
