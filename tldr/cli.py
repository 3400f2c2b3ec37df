"""
Command-line interface for the tldr URL shortener.

Usage:
    tldr shorten <url>
    tldr resolve <short>
    tldr list
    tldr health
    tldr init-db
"""

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

from .common.logging_config import setup_logging
from .database import create_store
from .exceptions import MappingInvalidError, MappingNotFoundError, TLDRError
from .service import ShortenerService
from .tokens import TokenGenerator


DEFAULT_DATABASE_URL = "sqlite:///data/tldr.db"


def _print_json(payload: dict, error: bool = False) -> None:
    print(json.dumps(payload, indent=2), file=sys.stderr if error else sys.stdout)


def _failure(message: str) -> int:
    _print_json({"success": False, "error": message}, error=True)
    return 1


class TLDRCLI:
    """Command-line interface for tldr."""
    
    def __init__(self, database_url: str, token_length: int = TokenGenerator.DEFAULT_LENGTH, verbose: bool = False):
        """Initialize CLI."""
        self.database_url = database_url
        self.token_length = token_length
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.store = None
        self.service = None
    
    async def initialize(self, create_tables: bool = True):
        """Open the store and build the service."""
        self.store = create_store(
            self.database_url,
            create_tables=create_tables,
            logger=self.logger,
        )
        await self.store.initialize()
        
        self.service = ShortenerService(
            store=self.store,
            token_generator=TokenGenerator(default_length=self.token_length),
            logger=self.logger,
        )
    
    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()
        elif self.store:
            await self.store.close()
    
    async def shorten(self, url: str) -> int:
        """Shorten a URL."""
        try:
            mapping = await self.service.mint(url)
        except TLDRError as e:
            return _failure(str(e))
        
        _print_json({"success": True, **mapping.to_dict()})
        return 0
    
    async def resolve(self, short: str) -> int:
        """Print the mapping behind a token."""
        try:
            mapping = await self.service.resolve(short)
        except MappingNotFoundError as e:
            return _failure(str(e))
        except MappingInvalidError as e:
            _print_json({"success": False, "error": str(e), **e.mapping.to_dict()}, error=True)
            return 1
        except TLDRError as e:
            return _failure(str(e))
        
        _print_json({"success": True, **mapping.to_dict()})
        return 0
    
    async def list_mappings(self) -> int:
        """List all mappings."""
        try:
            mappings = await self.service.list_all()
        except TLDRError as e:
            return _failure(str(e))
        
        _print_json({
            "success": True,
            "count": len(mappings),
            "mappings": [m.to_dict() for m in mappings],
        })
        return 0
    
    async def health(self) -> int:
        """Check store health."""
        health_status = await self.service.health_check()
        _print_json({"success": health_status["overall"], "health": health_status})
        return 0 if health_status["overall"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tldr",
        description="tldr URL shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL (https:// is added when no http(s) scheme is given)
  %(prog)s shorten example.com/long/url
  
  # Look up a token
  %(prog)s resolve QwErTyUiOpAsDfGhJk
  
  # List all mappings
  %(prog)s list
  
  # Create the url table
  %(prog)s init-db
        """
    )
    
    parser.add_argument(
        "--database-url",
        default=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        help=f"Mapping store URL (default: from DATABASE_URL env or {DEFAULT_DATABASE_URL})"
    )
    
    parser.add_argument(
        "--token-length",
        type=int,
        default=int(os.getenv("TOKEN_LENGTH", TokenGenerator.DEFAULT_LENGTH)),
        help="Token length; must match the server's (default: from TOKEN_LENGTH env or 18)"
    )
    
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )
    
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")
    
    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    
    resolve_parser = subparsers.add_parser("resolve", help="Look up the URL behind a token")
    resolve_parser.add_argument("short", help="Token to lookup")
    
    subparsers.add_parser("list", help="List all mappings")
    subparsers.add_parser("health", help="Check store health")
    subparsers.add_parser("init-db", help="Create the url table if it does not exist")
    
    return parser


async def run(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and execute one command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        return 1
    
    cli = TLDRCLI(
        database_url=args.database_url,
        token_length=args.token_length,
        verbose=args.verbose,
    )
    
    try:
        await cli.initialize(create_tables=args.command in ("init-db", "shorten"))
        
        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "resolve":
            return await cli.resolve(args.short)
        elif args.command == "list":
            return await cli.list_mappings()
        elif args.command == "health":
            return await cli.health()
        elif args.command == "init-db":
            _print_json({"success": True, "message": f"Initialized {args.database_url}"})
            return 0
        else:
            parser.print_help()
            return 1
    except TLDRError as e:
        return _failure(str(e))
    except ValueError as e:
        return _failure(str(e))
    finally:
        await cli.cleanup()


def main() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
