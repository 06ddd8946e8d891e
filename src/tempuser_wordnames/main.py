"""tempuser-wordnames main entry point."""

import asyncio
import logging
import os
import sys
from pathlib import Path

import uvicorn
import yaml
from dotenv import load_dotenv

from .adapters.mediawiki import DEFAULT_TIMEOUT, MediaWikiPageFetcher
from .adapters.web import app, reset_index_counter, set_serial_mapping
from .core import (
    ConfigurationError,
    WordNamesSerialMapping,
    WordNamesSettings,
    create_object_cache,
)

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WORDNAMES_CONFIG"


def load_config(config_path: Path | None = None) -> dict:
    """Load configuration from YAML file."""
    if config_path is None:
        # Try multiple locations
        locations = [
            Path("config") / "config.yaml",
            Path.home() / ".tempuser-wordnames" / "config.yaml",
            Path("config.yaml"),
        ]
        env_path = os.getenv(CONFIG_ENV_VAR)
        if env_path:
            locations.insert(0, Path(env_path).expanduser())
        for loc in locations:
            if loc.exists():
                config_path = loc
                break

    if config_path is None or not config_path.exists():
        logger.warning("No config file found, using defaults")
        return {}

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def setup_logging(config: dict) -> None:
    """Set up logging configuration."""
    log_config = config.get("logging", {})
    level = getattr(logging, str(log_config.get("level", "INFO")).upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Set third-party loggers to WARNING
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_serial_mapping(config: dict) -> WordNamesSerialMapping:
    """Wire settings, cache and page fetcher into a serial mapping.

    Raises:
        ConfigurationError: If no word list is configured
    """
    settings = WordNamesSettings.from_config(config)
    fetch_config = config.get("fetch", {})

    fetcher = MediaWikiPageFetcher(
        api_urls=config.get("wikis", {}) or {},
        local_wiki=settings.wiki_id,
        timeout=float(fetch_config.get("timeout", DEFAULT_TIMEOUT)),
    )
    cache = create_object_cache(config.get("cache"))

    return WordNamesSerialMapping(settings, cache=cache, fetch_page=fetcher)


async def run_server(config: dict, mapping: WordNamesSerialMapping) -> None:
    """Run the tempuser-wordnames server."""
    server_config = config.get("server", {})
    host = server_config.get("host", "0.0.0.0")
    port = server_config.get("port", 8080)

    set_serial_mapping(mapping)

    uvicorn_config = uvicorn.Config(
        app=app,
        host=host,
        port=port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    logger.info(f"Starting tempuser-wordnames server on http://{host}:{port}")
    await server.serve()


def handle_generate_command(mapping: WordNamesSerialMapping, args: list[str]) -> int:
    """Handle generate subcommand.

    Usage:
        python -m tempuser_wordnames generate [COUNT] [--start N]
    """
    count = 1
    start = 1
    try:
        if "--start" in args:
            pos = args.index("--start")
            start = int(args[pos + 1])
            args = args[:pos] + args[pos + 2:]
        if args:
            count = int(args[0])
    except (IndexError, ValueError):
        print("Usage: python -m tempuser_wordnames generate [COUNT] [--start N]")
        return 1

    if count < 1:
        print("COUNT must be at least 1")
        return 1

    for index in range(start, start + count):
        print(mapping.get_serial_id_for_index(index))
    return 0


def handle_wordlist_command(mapping: WordNamesSerialMapping) -> int:
    """Handle wordlist subcommand."""
    words = mapping.get_word_list()
    source = "fallback list" if mapping.resolver.is_fallback else "configured list"
    print(f"{len(words)} words ({source}):")
    for word in words:
        print(f"   {word}")
    return 0


def print_help() -> None:
    """Print help message."""
    print("""tempuser-wordnames - word-based names for temporary accounts

Usage:
    python -m tempuser_wordnames              Start the server
    python -m tempuser_wordnames generate     Print generated names
    python -m tempuser_wordnames wordlist     Show the resolved word list

Commands:
    (default)               Start the HTTP API
    generate [COUNT]        Print COUNT names (default: 1)
    generate --start N      Start indexing at N (default: 1)
    wordlist                Print the word list names are drawn from

Configuration:
    Read from $WORDNAMES_CONFIG, config/config.yaml,
    ~/.tempuser-wordnames/config.yaml or ./config.yaml

Examples:
    python -m tempuser_wordnames
    python -m tempuser_wordnames generate 5
    python -m tempuser_wordnames generate 3 --start 1000
    python -m tempuser_wordnames wordlist
""")


def main() -> None:
    """Main entry point."""
    args = sys.argv[1:]

    # Handle help
    if args and args[0] in ("-h", "--help", "help"):
        print_help()
        return

    config = load_config()
    setup_logging(config)

    try:
        mapping = build_serial_mapping(config)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(2)

    if args and args[0] == "generate":
        sys.exit(handle_generate_command(mapping, args[1:]))

    if args and args[0] == "wordlist":
        sys.exit(handle_wordlist_command(mapping))

    if args:
        print(f"Unknown command: {args[0]}")
        print_help()
        sys.exit(1)

    # Default: run server
    logger.info("tempuser-wordnames starting...")
    reset_index_counter()

    try:
        asyncio.run(run_server(config, mapping))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise


if __name__ == "__main__":
    main()
