"""Command-line interface for the Chirpy backend."""

from __future__ import annotations
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

try:
    import httpx
except ImportError as exc:  # pragma: no cover - exercised in environments missing deps
    raise SystemExit(
        "The 'httpx' package is required. Execute `pip install -e .` to install dependencies."
    ) from exc

from chirpy.config import Settings, load_settings
from chirpy.database import Database, UserStoreError
from chirpy.errors import ChirpyError
from chirpy.users import UserService

logger = logging.getLogger("chirpy.main")

_DEFAULT_SERVICE_URL = "http://localhost:8080"


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    config_help = "Path to a YAML configuration file (default: CHIRPY_CONFIG or config/chirpy.yaml)"
    parser = argparse.ArgumentParser(description="Chirpy backend utilities")
    parser.add_argument("--config", type=Path, default=None, help=config_help)

    # Subcommands accept --config too; SUPPRESS keeps a global value intact.
    config_parent = argparse.ArgumentParser(add_help=False)
    config_parent.add_argument("--config", type=Path, default=argparse.SUPPRESS, help=config_help)

    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    subparsers.add_parser("init-db", parents=[config_parent], help="Initialise the user database")

    serve_parser = subparsers.add_parser("serve", parents=[config_parent], help="Start the HTTP service")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: 0.0.0.0)")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for the HTTP API (default: 8080)",
    )

    create_parser = subparsers.add_parser(
        "create-user", parents=[config_parent], help="Create a user directly in the database"
    )
    create_parser.add_argument("email", help="Email address for the new user")

    subparsers.add_parser("list-users", parents=[config_parent], help="List users stored in the database")

    for name, help_text in (
        ("metrics", "Show the hit counter of a running service"),
        ("reset-metrics", "Reset the hit counter of a running service"),
    ):
        remote_parser = subparsers.add_parser(name, help=help_text)
        remote_parser.add_argument(
            "--service-url",
            default=_DEFAULT_SERVICE_URL,
            help=f"Base URL of a running Chirpy service (default: {_DEFAULT_SERVICE_URL})",
        )
        remote_parser.add_argument(
            "--token",
            default=None,
            help="Admin bearer token, required when the service sets CHIRPY_ADMIN_TOKENS",
        )

    args_list = list(argv) if argv is not None else sys.argv[1:]
    known_commands = {"serve", "init-db", "create-user", "list-users", "metrics", "reset-metrics"}

    global_args: list[str] = []
    if args_list[:1] == ["--config"] and len(args_list) >= 2:
        global_args, args_list = args_list[:2], args_list[2:]
    elif args_list[:1] and args_list[0].startswith("--config="):
        global_args, args_list = args_list[:1], args_list[1:]

    if not args_list:
        args_list = ["serve"]
    else:
        first = args_list[0]
        if first in ("-h", "--help"):
            return parser.parse_args([*global_args, *args_list])
        if first not in known_commands:
            if any(flag in args_list for flag in ("-h", "--help")):
                return parser.parse_args([*global_args, *args_list])
            args_list = ["serve", *args_list]

    return parser.parse_args([*global_args, *args_list])


def _initialise_database(settings: Settings) -> Database:
    database = Database(settings.database_path)
    database.initialize()
    logger.info("Database initialised at %s", settings.database_path)
    return database


def _serve(*, settings: Settings, database: Database) -> None:
    from chirpy import create_app
    import uvicorn

    logger.info("Starting Chirpy on http://%s:%s", settings.host, settings.port)

    app = create_app(settings=settings, database=database)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")


def _create_user(database: Database, email: str) -> int:
    try:
        user = UserService(database).create_user(email)
    except ChirpyError as exc:
        print(f"Failed to create user: {exc}", file=sys.stderr)
        return 1

    print(f"Created user {user.id} <{user.email}>")
    return 0


def _list_users(database: Database) -> int:
    try:
        users = database.list_users()
    except UserStoreError as exc:
        print(f"Failed to load users: {exc}", file=sys.stderr)
        return 1

    if not users:
        print("No users are currently registered.")
        return 0

    print(f"{len(users)} user(s) found:")
    print(f"{'ID':<36}  {'Email':<32}  Created")
    print("-" * 90)
    for user in users:
        created = user.created_at.strftime("%Y-%m-%d %H:%M:%S %Z")
        print(f"{str(user.id):<36}  {user.email:<32}  {created}")
    return 0


def _call_admin_endpoint(method: str, service_url: str, path: str, token: str | None) -> int:
    endpoint = service_url.rstrip("/") + path
    headers = {"Authorization": f"Bearer {token}"} if token else {}

    try:
        response = httpx.request(method, endpoint, headers=headers, timeout=10.0)
    except httpx.HTTPError as exc:
        print(f"Failed to contact Chirpy service: {exc}", file=sys.stderr)
        return 1

    if response.status_code in (401, 403):
        print(
            "The service rejected the admin request. Provide a valid --token.",
            file=sys.stderr,
        )
        return 1
    if response.status_code != 200:
        print(
            f"Service responded with {response.status_code}: {response.text.strip()}",
            file=sys.stderr,
        )
        return 1

    print(response.text.strip())
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI usage."""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    args = _parse_args(argv)

    if args.command == "metrics":
        return _call_admin_endpoint("GET", args.service_url, "/admin/metrics", args.token)
    if args.command == "reset-metrics":
        return _call_admin_endpoint("POST", args.service_url, "/admin/reset", args.token)

    try:
        settings = load_settings(args.config)
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    if args.command == "serve":
        overrides: dict[str, object] = {}
        if args.host:
            overrides["host"] = args.host
        if args.port:
            overrides["port"] = args.port
        settings = replace(settings, **overrides)

    database = _initialise_database(settings)

    if args.command == "serve":
        _serve(settings=settings, database=database)
    elif args.command == "init-db":
        print("Database initialisation complete.")
    elif args.command == "create-user":
        return _create_user(database, args.email)
    elif args.command == "list-users":
        return _list_users(database)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
