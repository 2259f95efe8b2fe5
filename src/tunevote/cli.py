"""
TuneVote CLI - Entry point

Runs the voting API server and offers small utilities for inspecting the
vote ledger from the command line.
"""

import argparse
import os
import sqlite3
import sys

from loguru import logger


def run_server(host: str, port: int, reload: bool = False) -> int:
    """Start the FastAPI app under uvicorn.

    Args:
        host: Interface to bind
        port: Port to listen on
        reload: Restart on source changes (development only)

    Returns:
        Exit code (0 for clean shutdown)
    """
    import uvicorn

    from .core.database import get_database_path

    logger.info(f"Server is running on http://{host}:{port}")
    logger.info(f"API endpoints available at http://{host}:{port}/api")
    logger.info(f"Database: {get_database_path()}")

    uvicorn.run(
        "web.backend.main:app",
        host=host,
        port=port,
        reload=reload,
    )
    return 0


def run_init_db() -> int:
    """Create or migrate the database schema."""
    from .core.database import get_database_path, get_schema_version, init_database

    init_database()
    print(f"Database ready at {get_database_path()} (schema v{get_schema_version()})")
    return 0


def run_track_key(artist: str, title: str) -> int:
    """Print the track key for an artist/title pair."""
    from .domain.voting.track_key import make_track_key

    print(make_track_key(artist, title))
    return 0


def run_tally(track_key: str) -> int:
    """Print vote counts for a track key."""
    from .core.database import get_db_connection, init_database
    from .domain.voting.ledger import get_tally
    from .domain.voting.track_key import split_track_key

    init_database()
    try:
        with get_db_connection() as conn:
            tally = get_tally(conn, track_key)
    except sqlite3.Error as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    artist, title = split_track_key(track_key)
    print(f"{track_key}: 👍 {tally.up_count}  👎 {tally.down_count}")
    print(f"  artist: {artist or '-'}  title: {title or '-'}")
    return 0


def run_stats() -> int:
    """Print the number of stored votes."""
    from .core.database import get_database_path, get_db_connection, init_database
    from .domain.voting.ledger import count_votes

    init_database()
    try:
        with get_db_connection() as conn:
            total = count_votes(conn)
    except sqlite3.Error as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{total} votes in {get_database_path()}")
    return 0


def main() -> None:
    """Main entry point for the tunevote command."""
    from .core.config import load_config
    from .core.output import setup_from_config

    parser = argparse.ArgumentParser(
        description="TuneVote - anonymous track voting for live radio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db",
        help="Path to the SQLite database (overrides DATABASE_PATH)",
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", help="Interface to bind (default from config)")
    serve_parser.add_argument("--port", type=int, help="Port (default from config)")
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (development)",
    )

    subparsers.add_parser("init-db", help="Create or migrate the database schema")

    key_parser = subparsers.add_parser(
        "track-key", help="Print the track key for an artist and title"
    )
    key_parser.add_argument("artist", help="Artist name")
    key_parser.add_argument("title", help="Track title")

    tally_parser = subparsers.add_parser("tally", help="Show vote counts for a track key")
    tally_parser.add_argument("track_key", help="Track key, e.g. 'artist||title'")

    subparsers.add_parser("stats", help="Show the total number of stored votes")

    args = parser.parse_args()

    if args.db:
        os.environ["DATABASE_PATH"] = args.db

    if args.subcommand == "track-key":
        sys.exit(run_track_key(args.artist, args.title))

    config = load_config()
    setup_from_config(config.logging)

    if args.subcommand == "init-db":
        sys.exit(run_init_db())

    elif args.subcommand == "tally":
        sys.exit(run_tally(args.track_key))

    elif args.subcommand == "stats":
        sys.exit(run_stats())

    elif args.subcommand == "serve" or args.subcommand is None:
        host = getattr(args, "host", None) or config.server.host
        port = getattr(args, "port", None) or config.server.port
        if config.server.allowed_origins and not os.environ.get("ALLOWED_ORIGINS"):
            os.environ["ALLOWED_ORIGINS"] = ",".join(config.server.allowed_origins)
        sys.exit(run_server(host, port, reload=getattr(args, "reload", False)))


if __name__ == "__main__":
    main()
