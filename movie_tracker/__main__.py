"""Command-line entry point. Allows python -m movie_tracker."""

import argparse
import logging
import sys
from collections.abc import Sequence

from movie_tracker.database import MovieStore
from movie_tracker.errors import MovieTrackerError
from movie_tracker.settings import settings
from movie_tracker.sources import MovieDataSource, OMDbClient
from movie_tracker.types import MovieRecord, SearchFilter
from movie_tracker.utils import set_log_level


def _print_records(records: list[MovieRecord]) -> None:
    """Print records separated by blank lines."""
    if not records:
        print("No movies found")
        return
    for record in records:
        print(record)
    print(f"Total : {len(records)}")


def run_init_db(store: MovieStore) -> None:
    """Create the movies table and report its size."""
    print(f"✅ Database ready: {store.count()} movie(s)")


def run_list(store: MovieStore) -> None:
    """Print every movie."""
    _print_records(store.fetch_all())


def run_search(store: MovieStore, args: argparse.Namespace) -> None:
    """Print the movies matching the given filters."""
    search_filter = SearchFilter(
        title=args.title,
        year=args.year,
        content_rating=args.content_rating,
        genre=args.genre,
        cast=args.cast,
        rating=args.rating,
    )
    _print_records(store.search(search_filter))


def run_add(
    store: MovieStore,
    args: argparse.Namespace,
    source: MovieDataSource | None = None,
) -> MovieRecord:
    """Fetch a movie's metadata and add it to the collection."""
    if source is None:
        with OMDbClient() as client:
            metadata = client.get_movie_data(args.imdb_id, args.title or "", args.year or "")
    else:
        metadata = source.get_movie_data(args.imdb_id, args.title or "", args.year or "")

    saved = store.insert(MovieRecord.from_metadata(metadata))
    print("✅ Movie added")
    print(saved)
    return saved


def run_remove(store: MovieStore, args: argparse.Namespace) -> None:
    """Remove a movie by id."""
    if store.delete_by_id(args.id):
        print(f"✅ Movie {args.id} removed")
    else:
        print(f"⚠️  No movie with id {args.id}")


def _cli_log_level(verbose: bool) -> int:
    """Log level for a CLI run: LOG_LEVEL when verbose, otherwise at least WARNING."""
    level = logging.getLevelName(settings.logging.level)
    return level if verbose else max(level, logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="movie_tracker",
        description="Movie Tracker - personal movie collection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m movie_tracker init-db                   # Create the database
  python -m movie_tracker add tt0111161             # Add a movie from OMDb
  python -m movie_tracker search --genre Drama      # Search the collection
  python -m movie_tracker remove 1                  # Remove a movie
        """,
    )
    parser.add_argument("--database-url", help="SQLAlchemy URL (overrides DATABASE_URL)")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show store logs at LOG_LEVEL (default: warnings only)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    subparsers.add_parser("init-db", help="Create the movies table")
    subparsers.add_parser("list", help="List every movie")

    search_parser = subparsers.add_parser("search", help="Search movies")
    search_parser.add_argument("--title")
    search_parser.add_argument("--year")
    search_parser.add_argument("--content-rating")
    search_parser.add_argument("--genre", help="Substring of the genre list")
    search_parser.add_argument("--cast", help="Substring of the cast list")
    search_parser.add_argument("--rating")

    add_parser = subparsers.add_parser("add", help="Add a movie from OMDb")
    add_parser.add_argument("imdb_id", help="IMDb id (use '' to look up by title)")
    add_parser.add_argument("--title")
    add_parser.add_argument("--year")

    remove_parser = subparsers.add_parser("remove", help="Remove a movie by id")
    remove_parser.add_argument("id")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    set_log_level(_cli_log_level(args.verbose))

    try:
        with MovieStore(args.database_url) as store:
            if args.command == "init-db":
                run_init_db(store)
            elif args.command == "list":
                run_list(store)
            elif args.command == "search":
                run_search(store, args)
            elif args.command == "add":
                run_add(store, args)
            elif args.command == "remove":
                run_remove(store, args)

    except KeyboardInterrupt:
        print("\n⚠️  Interrupted")
        return 130
    except (MovieTrackerError, ValueError) as e:
        print(f"\n❌ ERROR : {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
