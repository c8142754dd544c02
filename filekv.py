"""Command line entry point for filekv.

Runs the HTTP server or performs a single storage operation against the
configured backend:

    python filekv.py --path ./data/kv put sys/token secret
    python filekv.py --path ./data/kv list sys
    python filekv.py --config server_config.yml serve
"""
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from filekv_lib.config import ServerConfig, load_config
from filekv_lib.logging_config import configure_logging
from filekv_lib.storage import Entry, StorageError, create_backend

logger = logging.getLogger(__name__)


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="filekv", description="Filesystem key-value store")
    p.add_argument("--config", type=Path, default=None, help="YAML server configuration file")
    p.add_argument("--path", default=None, help="Storage root directory (overrides config)")
    p.add_argument("--backend", default=None, choices=["file", "inmem"], help="Storage backend (overrides config)")
    p.add_argument("--log-level", default=None, help="Log level (overrides config)")
    sub = p.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    get = sub.add_parser("get", help="Print the value stored under a key")
    get.add_argument("key")

    put = sub.add_parser("put", help="Store a value under a key")
    put.add_argument("key")
    put.add_argument("value", nargs="?", default=None, help="Value; read from stdin when omitted")

    delete = sub.add_parser("delete", help="Delete a key")
    delete.add_argument("key")

    ls = sub.add_parser("list", help="List the children of a prefix")
    ls.add_argument("prefix", nargs="?", default="")
    return p


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    return get_parser().parse_args(list(argv) if argv is not None else None)


def resolve_config(args: argparse.Namespace) -> ServerConfig:
    cfg = load_config(args.config)
    overrides = {}
    if args.path:
        overrides["path"] = args.path
    if args.backend:
        overrides["backend"] = args.backend
    if args.log_level:
        overrides["log_level"] = args.log_level
    if getattr(args, "host", None):
        overrides["host"] = args.host
    if getattr(args, "port", None):
        overrides["port"] = args.port
    return cfg.model_copy(update=overrides)


def run(args: argparse.Namespace) -> int:
    cfg = resolve_config(args)
    configure_logging(args.config, level=cfg.log_level)

    if args.command == "serve":
        import uvicorn
        from filekv_lib.main import create_app
        app = create_app(cfg)
        uvicorn.run(app, host=cfg.host, port=cfg.port)
        return 0

    backend = create_backend(cfg.backend, cfg.backend_options())
    if args.command == "get":
        entry = backend.get(args.key)
        if entry is None:
            print(f"No entry for {args.key!r}", file=sys.stderr)
            return 1
        sys.stdout.buffer.write(entry.value)
        sys.stdout.buffer.flush()
    elif args.command == "put":
        value = args.value.encode("utf-8") if args.value is not None else sys.stdin.buffer.read()
        backend.put(Entry(key=args.key, value=value))
    elif args.command == "delete":
        backend.delete(args.key)
    elif args.command == "list":
        for name in backend.list(args.prefix):
            print(name)
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    try:
        return run(args)
    except (StorageError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
