from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional
from urllib.parse import urlsplit

from . import constants
from .errors import S3SignerError
from .logging import get_logger
from .signer import S3URISigner

logger = get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pys3signer",
        description="Print a presigned HTTPS download URL for an s3:// URI.",
    )
    parser.add_argument("uri", help="s3://bucket/key, optionally with id:secret@ credentials")
    parser.add_argument(
        "--expires",
        type=int,
        default=constants.DEFAULT_EXPIRATION,
        help="lifetime of the URL in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--provider",
        choices=[constants.PROVIDER_ENV, constants.PROVIDER_INSTANCE_PROFILE],
        help="where to take credentials from when the URI carries none",
    )
    parser.add_argument("--region", help="bucket region (default: us-east-1)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stdout")
    return parser


def build_config(uri: str, provider: Optional[str], region: Optional[str]) -> Dict[str, Dict]:
    if not provider:
        return {}
    entry = {"provider": provider}
    if region:
        entry["region"] = region
    return {constants.S3_SOURCE_KEY: {urlsplit(uri).hostname or "": entry}}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger.setLevel(logging.INFO if args.verbose else logging.WARNING)

    signer = S3URISigner(build_config(args.uri, args.provider, args.region))
    try:
        url = signer.sign(args.uri, args.expires)
    except S3SignerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(url)
    return 0
