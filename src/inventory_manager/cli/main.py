from __future__ import annotations

import argparse
import sys
from typing import Sequence

from ..config import load_config
from ..inventory import DatabaseInitError, InventoryDatabase, InventoryShell, ProductRepository
from ..logging import get_logger

LOG = get_logger("cli")


def _handle_shell(ns: argparse.Namespace) -> int:
    config = load_config(db_path=ns.db)
    try:
        with InventoryDatabase(config.db_path) as db:
            InventoryShell(ProductRepository(db)).run()
    except DatabaseInitError as e:
        LOG.error(f"Database initialization failed: {e}")
        return 1
    return 0


def _add_serve_cli(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    serve = subparsers.add_parser(
        "serve",
        help="Run the inventory JSON API.",
        description="Serve products, search, filter and report over HTTP.",
    )
    serve.add_argument("--host", help="Bind address (default: INVENTORY_API_HOST or 127.0.0.1)")
    serve.add_argument("--port", type=int, help="Bind port (default: INVENTORY_API_PORT or 8001)")
    serve.add_argument("--log-level", default="info")
    serve.add_argument(
        "--allow-origin",
        action="append",
        dest="allow_origins",
        help="Allowed CORS origin (can be provided multiple times, use '*' for any).",
    )

    def _serve(ns: argparse.Namespace) -> int:
        from ..inventory.frontend import create_app
        import uvicorn

        config = load_config(db_path=ns.db)
        try:
            app = create_app(config.db_path, allow_origins=ns.allow_origins)
        except DatabaseInitError as e:
            LOG.error(f"Database initialization failed: {e}")
            return 1

        uvicorn.run(
            app,
            host=ns.host or config.api_host,
            port=ns.port or config.api_port,
            log_level=ns.log_level,
        )
        return 0

    serve.set_defaults(handler=_serve)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inventory-manager",
        description="Manage a product inventory stored in a local SQLite file.",
    )
    parser.add_argument(
        "--db",
        default=None,
        help="Database file (default: INVENTORY_DB_PATH or ./inventory.db)",
    )
    subparsers = parser.add_subparsers(dest="command")

    shell = subparsers.add_parser("shell", help="Run the interactive menu (default).")
    shell.set_defaults(handler=_handle_shell)

    _add_serve_cli(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    provided = list(argv) if argv is not None else sys.argv[1:]
    LOG.debug(f"CLI invoked with arguments: {provided}")

    parser = build_parser()
    args = parser.parse_args(provided)
    handler = getattr(args, "handler", None) or _handle_shell
    code = handler(args)
    LOG.debug(f"Command '{args.command or 'shell'}' finished with exit code {code}.")
    return code


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
