#!/usr/bin/env python3
"""CLI entry point for the Terraform plan viewer."""

from __future__ import annotations

import argparse
import os
import re
import sys
from datetime import timedelta

from tfs.exceptions import TfsError
from tfs.planner import Buckets, load_buckets, print_plan
from tfs.report import write_report
from tfs.source import DEFAULT_TERRAFORM_BIN
from tfs.tui import run as run_tui
from tfs.uploader import DEFAULT_EXPIRATION, get_uploader, report_key

DEFAULT_OUTPUT = "tfs.html"

_DURATION = re.compile(r"^(\d+)([smh]?)$")
_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600}


def parse_expiration(value: str) -> timedelta:
    """argparse type for durations like "900", "90s", "15m" or "1h"."""
    match = _DURATION.match(value.strip())
    if not match:
        raise argparse.ArgumentTypeError(
            f"invalid duration {value!r} (expected e.g. 900, 90s, 15m, 1h)"
        )
    seconds = int(match.group(1)) * _UNITS[match.group(2)]
    if seconds <= 0:
        raise argparse.ArgumentTypeError("duration must be positive")
    return timedelta(seconds=seconds)


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared across subcommands."""
    parser.add_argument("plan", help="Path to a binary plan file or its JSON form")
    parser.add_argument("--terraform-bin",
                        help=f"Terraform executable (or TFS_TERRAFORM_BIN env var, "
                             f"default: {DEFAULT_TERRAFORM_BIN})")


def add_upload_args(parser: argparse.ArgumentParser) -> None:
    """Add report upload target arguments."""
    # Azure
    parser.add_argument("--azure-storage-account",
                        help="Azure storage account (or TFS_AZURE_STORAGE_ACCOUNT env var)")
    parser.add_argument("--azure-container",
                        help="Azure blob container (or TFS_AZURE_CONTAINER env var)")
    parser.add_argument("--client-id", help="Service principal client ID")
    parser.add_argument("--client-secret", help="Service principal client secret")
    parser.add_argument("--tenant-id", help="Azure AD tenant ID")
    # AWS
    parser.add_argument("--s3-bucket", help="S3 bucket to upload to (or TFS_S3_BUCKET env var)")
    parser.add_argument("--region", help="AWS region (or AWS_REGION env var)")
    # Google Cloud
    parser.add_argument("--gcs-bucket", help="GCS bucket to upload to (or TFS_GCS_BUCKET env var)")
    parser.add_argument("--expiration", type=parse_expiration, default=DEFAULT_EXPIRATION,
                        help="How long the signed link stays valid (default: 15m)")


def _resolve_terraform_bin(args: argparse.Namespace) -> str:
    """Resolve the terraform executable from flag → env var → default."""
    return (
        getattr(args, "terraform_bin", None)
        or os.environ.get("TFS_TERRAFORM_BIN")
        or DEFAULT_TERRAFORM_BIN
    )


def _load(args: argparse.Namespace) -> Buckets:
    """Load and classify the plan, or exit 1 with a single diagnostic."""
    try:
        return load_buckets(args.plan, _resolve_terraform_bin(args))
    except TfsError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)


def cmd_tui(args: argparse.Namespace) -> None:
    """Browse the plan in the interactive viewer."""
    run_tui(_load(args))


def cmd_show(args: argparse.Namespace) -> None:
    """Print every change's diff to the console."""
    buckets = _load(args)
    print_plan(buckets, verbose=args.verbose)


def cmd_web(args: argparse.Namespace) -> None:
    """Generate the HTML report and optionally upload it."""
    try:
        uploader = get_uploader(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except TfsError as e:
        print(f"Error: Upload failed: {e.message}", file=sys.stderr)
        sys.exit(1)

    buckets = _load(args)
    output = args.out or DEFAULT_OUTPUT
    write_report(buckets, output)
    print(f"Generated {output}")

    if uploader is None:
        return

    key = report_key()
    print(f"Uploading to {uploader.provider} ({key})...")
    with open(output, "rb") as f:
        data = f.read()
    try:
        url = uploader.upload(key, data, args.expiration)
    except TfsError as e:
        print(f"Error: Upload failed: {e.message}", file=sys.stderr)
        sys.exit(1)
    print(f"\nSigned URL (expires in {args.expiration}):\n{url}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="tfs",
        description="Terraform plan analyzer: interactive viewer and HTML report",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # tui
    p_tui = subparsers.add_parser("tui", help="Show the plan in an interactive terminal view")
    add_common_args(p_tui)

    # show
    p_show = subparsers.add_parser("show", help="Print the plan diff to the console")
    add_common_args(p_show)
    p_show.add_argument("--verbose", "-v", action="store_true",
                        help="Also show no-op, read and import changes")

    # web
    p_web = subparsers.add_parser("web", help="Generate an HTML report, optionally uploading it")
    add_common_args(p_web)
    p_web.add_argument("--out", default=DEFAULT_OUTPUT,
                       help=f"Path of the HTML file to write (default: {DEFAULT_OUTPUT})")
    add_upload_args(p_web)

    args = parser.parse_args()

    commands = {
        "tui": cmd_tui,
        "show": cmd_show,
        "web": cmd_web,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
