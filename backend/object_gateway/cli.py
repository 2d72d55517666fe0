#!/usr/bin/env python3
"""
Command-line access to the object storage gateway.

Usage:
    # Upload a local file and print the UploadResult as JSON
    object-gateway upload ./photo.png --collection avatars

    # Presigned / public URLs for an existing key
    object-gateway presign photo-..._1700000000.png --ttl 600
    object-gateway public-url photo-..._1700000000.png

    # Recover a key from a URL (no network access)
    object-gateway resolve "https://host/bucket/photo-..._1700000000.png?X-Amz-Signature=..."

Storage settings come from the environment (or .env):
    S3_ENDPOINT, S3_BUCKET, S3_ACCESS_KEY, S3_SECRET_KEY
"""
import argparse
import json
import mimetypes
import os
import sys

from object_gateway.config import settings
from object_gateway.exceptions import GatewayError
from object_gateway.storage.gateway import ObjectStorageGateway
from object_gateway.utils.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='object-gateway',
        description='Upload files to S3-compatible storage and issue URLs'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    upload = subparsers.add_parser('upload', help='Upload a local file')
    upload.add_argument('path', help='File to upload')
    upload.add_argument('--collection', '-c', required=True,
                        help='Logical category label for the upload')
    upload.add_argument('--content-type', '-t',
                        help='MIME type (guessed from the filename when omitted)')

    presign = subparsers.add_parser('presign', help='Print a presigned GET URL')
    presign.add_argument('key', help='Object key')
    presign.add_argument('--ttl', type=int, default=None,
                         help='Expiration in seconds (default: S3_PRESIGN_EXPIRATION)')

    public = subparsers.add_parser('public-url', help='Print the public URL')
    public.add_argument('key', help='Object key')

    resolve = subparsers.add_parser('resolve', help='Print the object key of a URL')
    resolve.add_argument('url', help='Public or presigned URL')

    return parser


def run(args: argparse.Namespace) -> str:
    """Execute one command and return what should be printed."""
    if args.command == 'resolve':
        return ObjectStorageGateway.resolve_key(args.url)

    gateway = ObjectStorageGateway.from_settings(settings)

    if args.command == 'upload':
        content_type = (
            args.content_type
            or mimetypes.guess_type(args.path)[0]
            or 'application/octet-stream'
        )
        with open(args.path, 'rb') as f:
            result = gateway.upload(
                f,
                os.path.basename(args.path),
                os.path.getsize(args.path),
                content_type,
                args.collection,
            )
        return json.dumps(result.model_dump(by_alias=True), indent=2)

    if args.command == 'presign':
        return gateway.presigned_url(args.key, ttl=args.ttl)

    return gateway.public_url(args.key)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.service_name, settings.log_level)

    try:
        output = run(args)
    except (GatewayError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
