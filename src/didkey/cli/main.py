#!/usr/bin/env python3
"""
didkey CLI - parse, resolve and create did:key identifiers.

Commands:
  didkey parse <did>                      Show the components of a did:key
  didkey resolve <did>                    Print the DID document
  didkey from-raw <hex> --codec <name>    Create a did:key from raw key bytes
"""

from __future__ import annotations

import argparse
import logging
import sys

from ..core.config import get_config
from ..core.exceptions import DidKeyException
from ..core.logging import configure_logging
from ..did import DidKey
from ..encoding import KeyCodec, Multicodec
from ..resolver import DidKeyResolver
from .output import output_error, output_result

logger = logging.getLogger(__name__)


def cmd_parse(args: argparse.Namespace) -> int:
    """Show the components of a did:key."""
    try:
        did_key = DidKey.parse(args.did)
    except DidKeyException as e:
        output_error(e.message)
        return 1

    output_result(
        {
            "did": str(did_key),
            "version": did_key.version,
            "codec": did_key.codec.name,
            "codec_code": f"0x{did_key.codec_code:x}",
            "method_specific_id": did_key.method_specific_id,
            "raw_key": did_key.raw_key_bytes.hex(),
        }
    )
    return 0


def build_resolver(args: argparse.Namespace) -> DidKeyResolver:
    """Resolver from the method flags, or from configuration when none is given."""
    if not (args.multikey or args.jwk or args.jwk_2020):
        return DidKeyResolver.from_config(get_config())

    builder = DidKeyResolver.builder()
    if args.multikey:
        builder.multikey()
    if args.jwk:
        builder.jwk()
    if args.jwk_2020:
        builder.jwk_2020()
    return builder.build()


def cmd_resolve(args: argparse.Namespace) -> int:
    """Resolve a did:key into its DID document."""
    try:
        resolver = build_resolver(args)
        resolved = resolver.resolve(args.did)
    except DidKeyException as e:
        logger.debug("Resolution failed", extra={"did": args.did, "error": e})
        output_error(e.message)
        return 1

    output_result(resolved.document.to_dict())
    return 0


def cmd_from_raw(args: argparse.Namespace) -> int:
    """Create a did:key from hex-encoded raw public key bytes."""
    try:
        raw = bytes.fromhex(args.key)
    except ValueError:
        output_error(f"Invalid hex key: {args.key}")
        return 1

    try:
        did_key = DidKey.from_raw(raw, Multicodec.of(args.codec))
    except DidKeyException as e:
        output_error(e.message)
        return 1

    output_result({"did": str(did_key), "codec": did_key.codec.name})
    return 0


def app() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="didkey",
        description="did:key identifier toolkit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  didkey parse did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp
  didkey resolve did:key:zDnaerx9CtbPJ1q36T5Ln5wYt3MQYeGRG5ehnPAmxcf5mDZpv --jwk
  didkey from-raw 3b6a27bc... --codec ed25519-pub
        """,
    )
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # parse
    parse_parser = subparsers.add_parser("parse", help="Show the components of a did:key")
    parse_parser.add_argument("did", help="did:key identifier")

    # resolve
    resolve_parser = subparsers.add_parser("resolve", help="Resolve a did:key into a DID document")
    resolve_parser.add_argument("did", help="did:key identifier")
    resolve_parser.add_argument("--multikey", action="store_true", help="Include a Multikey verification method")
    resolve_parser.add_argument("--jwk", action="store_true", help="Include a JsonWebKey verification method")
    resolve_parser.add_argument(
        "--jwk-2020", action="store_true", help="Include a JsonWebKey2020 verification method"
    )

    # from-raw
    raw_parser = subparsers.add_parser("from-raw", help="Create a did:key from raw public key bytes")
    raw_parser.add_argument("key", help="Raw public key, hex encoded")
    raw_parser.add_argument(
        "--codec",
        "-c",
        required=True,
        choices=[codec.name for codec in KeyCodec.known()],
        help="Multicodec key type",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = app()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, json_format=True if args.json_logs else None)

    commands = {
        "parse": cmd_parse,
        "resolve": cmd_resolve,
        "from-raw": cmd_from_raw,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
