"""
Command line entry points: run the API server or seed sample posts.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

import uvicorn

from blog_backend.config import get_settings
from blog_backend.dependencies import build_post_store
from blog_backend.store import InMemoryPostStore, PostRecord, PostStore

logger = logging.getLogger(__name__)

SAMPLE_POSTS = (
    {
        "title": "Hello, world",
        "content": "The first post on this blog.",
        "image": "",
    },
    {
        "title": "Uploading images",
        "content": "Posts can carry an image URL returned by /api/upload.",
        "image": "",
    },
    {
        "title": "Editing posts",
        "content": "Titles, content and images can all be replaced later.",
        "image": "",
    },
)


def seed_posts(store: PostStore, count: int = len(SAMPLE_POSTS)) -> list[PostRecord]:
    created = []
    for i in range(count):
        sample = SAMPLE_POSTS[i % len(SAMPLE_POSTS)]
        post = store.create(sample)
        logger.info("Seeded post %s (%s)", post.id, post.title)
        created.append(post)
    return created


def _serve(args: argparse.Namespace) -> int:
    settings = get_settings()
    uvicorn.run(
        "blog_backend.app:create_app",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def _seed(args: argparse.Namespace) -> int:
    store = build_post_store(get_settings())
    if isinstance(store, InMemoryPostStore):
        logger.warning("No persistent store configured; seeded posts are discarded on exit")
    created = seed_posts(store, args.count)
    print(f"Seeded {len(created)} posts.")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Blog backend")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", type=str, default=None, help="Bind address")
    serve.add_argument("--port", type=int, default=None, help="Bind port")
    serve.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change",
    )
    serve.set_defaults(func=_serve)

    seed = subparsers.add_parser("seed", help="Insert sample posts")
    seed.add_argument(
        "-n",
        "--count",
        type=int,
        default=len(SAMPLE_POSTS),
        help="How many posts to insert",
    )
    seed.set_defaults(func=_seed)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(levelname)s:%(name)s:%(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
