"""
Commands:
    list-buckets
    list-s3 <bucket>
    describe-table <table>
    scan-table <table>          print all items in the table (paginated)
    scan-table-csv <table>      print all items as CSV (headers inferred)
    scan-table-tsv <table>      print all items as TSV (headers inferred)
    list-tables
    delete-all <table>
    item-exists <table> <key1=value1> [key2=value2 ...]
    set-attr <table> <attribute> <value> <key1=value1> [key2=value2 ...]

Fallback:
    <bucket> [table]            list the bucket's objects, then describe the
                                table if one is given

Examples:
    cloud-admin scan-table-csv users > users.csv
    cloud-admin item-exists users pk=user#1 sk=profile
    cloud-admin set-attr users active true pk=user#1 sk=profile
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from pydantic import ValidationError as ConfigValidationError

from .config import AwsConfig
from .exceptions import CloudAdminError, ValidationError
from .handlers import BucketReadApi, TableReadApi, TableWriteApi
from .utils import parse_key_args

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2

FALLBACK_COMMAND = "bucket"

# Global options that consume the following token as their value
VALUE_OPTIONS = ("--region", "--profile", "--endpoint-url")


def configure_logging(debug: bool, stream: TextIO) -> None:
    """Send log records to stderr; WARNING and above unless debugging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=stream,
        force=True,
    )
    if not debug:
        # botocore is chatty at INFO about credential discovery
        logging.getLogger("botocore").setLevel(logging.WARNING)


# ----------------------------------------------------------------------
# Command implementations
# ----------------------------------------------------------------------

def cmd_list_buckets(args, config: AwsConfig, out: TextIO, err: TextIO) -> int:
    count = BucketReadApi(config).list_buckets(out)
    print(f"\nTotal: {count} bucket(s)", file=out)
    return EXIT_OK


def cmd_list_s3(args, config: AwsConfig, out: TextIO, err: TextIO) -> int:
    count = BucketReadApi(config).list_objects(args.bucket, out)
    print(f"\nTotal: {count} object(s)", file=out)
    return EXIT_OK


def cmd_describe_table(args, config: AwsConfig, out: TextIO, err: TextIO) -> int:
    TableReadApi(config).print_description(args.table, out)
    return EXIT_OK


def cmd_scan_table(args, config: AwsConfig, out: TextIO, err: TextIO) -> int:
    count = TableReadApi(config).scan_table(args.table, out)
    print(f"\nTotal: {count} item(s)", file=out)
    return EXIT_OK


def cmd_scan_table_csv(args, config: AwsConfig, out: TextIO, err: TextIO) -> int:
    count = TableReadApi(config).scan_table_csv(args.table, out)
    print(f"\nWrote {count} item(s) as CSV", file=err)
    return EXIT_OK


def cmd_scan_table_tsv(args, config: AwsConfig, out: TextIO, err: TextIO) -> int:
    count = TableReadApi(config).scan_table_tsv(args.table, out)
    print(f"\nWrote {count} item(s) as TSV", file=err)
    return EXIT_OK


def cmd_list_tables(args, config: AwsConfig, out: TextIO, err: TextIO) -> int:
    TableReadApi(config).print_tables(out)
    return EXIT_OK


def cmd_delete_all(args, config: AwsConfig, out: TextIO, err: TextIO) -> int:
    deleted = TableWriteApi(config).delete_all(args.table, out)
    print(f"Deleted {deleted} item(s)", file=out)
    return EXIT_OK


def cmd_item_exists(args, config: AwsConfig, out: TextIO, err: TextIO) -> int:
    try:
        key = parse_key_args(args.key)
    except ValidationError as e:
        print(e.message, file=err)
        return EXIT_USAGE
    exists = TableReadApi(config).item_exists(args.table, key)
    print("true" if exists else "false", file=out)
    return EXIT_OK


def cmd_set_attr(args, config: AwsConfig, out: TextIO, err: TextIO) -> int:
    value, key_args = args.rest[0], args.rest[1:]
    try:
        key = parse_key_args(key_args)
    except ValidationError as e:
        print(e.message, file=err)
        return EXIT_USAGE
    TableWriteApi(config).set_attribute_from_text(args.table, key, args.attribute, value)
    print("OK", file=out)
    return EXIT_OK


def cmd_bucket_fallback(args, config: AwsConfig, out: TextIO, err: TextIO) -> int:
    count = BucketReadApi(config).list_objects(args.bucket, out)
    print(f"\nTotal: {count} object(s)", file=out)
    if args.table:
        TableReadApi(config).print_description(args.table, out)
    return EXIT_OK


# ----------------------------------------------------------------------
# Parser
# ----------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="cloud-admin",
        description="Administrative operations for S3 and DynamoDB",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument("--region", help="AWS region (default: from environment/profile)")
    parser.add_argument("--profile", help="AWS named profile")
    parser.add_argument("--endpoint-url", help="Endpoint URL for both S3 and DynamoDB (e.g. LocalStack)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging on stderr")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    p = subparsers.add_parser("list-buckets", help="List S3 buckets")
    p.set_defaults(handler=cmd_list_buckets)

    p = subparsers.add_parser("list-s3", help="List object keys in a bucket")
    p.add_argument("bucket", help="S3 bucket name")
    p.set_defaults(handler=cmd_list_s3)

    p = subparsers.add_parser("describe-table", help="Show attribute definitions and key schema")
    p.add_argument("table", help="DynamoDB table name")
    p.set_defaults(handler=cmd_describe_table)

    p = subparsers.add_parser("scan-table", help="Print every item in a table")
    p.add_argument("table", help="DynamoDB table name")
    p.set_defaults(handler=cmd_scan_table)

    p = subparsers.add_parser("scan-table-csv", help="Print every item as CSV")
    p.add_argument("table", help="DynamoDB table name")
    p.set_defaults(handler=cmd_scan_table_csv)

    p = subparsers.add_parser("scan-table-tsv", help="Print every item as TSV")
    p.add_argument("table", help="DynamoDB table name")
    p.set_defaults(handler=cmd_scan_table_tsv)

    p = subparsers.add_parser("list-tables", help="List DynamoDB tables")
    p.set_defaults(handler=cmd_list_tables)

    p = subparsers.add_parser("delete-all", help="Delete every item in a table")
    p.add_argument("table", help="DynamoDB table name")
    p.set_defaults(handler=cmd_delete_all)

    p = subparsers.add_parser("item-exists", help="Check whether an item exists")
    p.add_argument("table", help="DynamoDB table name")
    p.add_argument("key", nargs="*", metavar="key=value", help="Key attributes (string values)")
    p.set_defaults(handler=cmd_item_exists)

    p = subparsers.add_parser("set-attr", help="Set one attribute on an item")
    p.add_argument("table", help="DynamoDB table name")
    p.add_argument("attribute", help="Attribute to set")
    # REMAINDER so values such as -1e5 or -x are not read as options
    p.add_argument(
        "rest", nargs=argparse.REMAINDER, metavar="value",
        help="Value (true/false become booleans, numbers become numbers), then key attributes"
    )
    p.set_defaults(handler=cmd_set_attr)

    # Hidden: reached only through route_fallback()
    p = subparsers.add_parser(FALLBACK_COMMAND)
    p.add_argument("bucket", help="S3 bucket name")
    p.add_argument("table", nargs="?", help="DynamoDB table to describe afterwards")
    p.set_defaults(handler=cmd_bucket_fallback)

    return parser


COMMANDS = (
    "list-buckets", "list-s3", "describe-table", "scan-table", "scan-table-csv",
    "scan-table-tsv", "list-tables", "delete-all", "item-exists", "set-attr",
)


def route_fallback(argv: List[str]) -> List[str]:
    """Route an unknown leading token to the bucket fallback command.

    Global options before the command are skipped. ``-h``/``--help`` and an
    empty command line are left for argparse.
    """
    i = 0
    while i < len(argv):
        token = argv[i]
        if token in VALUE_OPTIONS:
            i += 2
            continue
        if token.startswith("-"):
            i += 1
            continue
        if token in COMMANDS:
            return argv
        return argv[:i] + [FALLBACK_COMMAND] + argv[i:]
    return argv


def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """Run one command.

    Returns:
        Process exit code: 0 success, 1 service error, 2 usage error
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    out = out or sys.stdout
    err = err or sys.stderr

    parser = build_parser()
    args = parser.parse_args(route_fallback(argv))
    if args.command is None:
        parser.print_usage(err)
        print("cloud-admin: error: a command is required", file=err)
        return EXIT_USAGE
    if args.command == "set-attr" and not args.rest:
        parser.error("the following arguments are required: value")

    try:
        config = AwsConfig.from_env().with_overrides(
            region_name=args.region,
            profile_name=args.profile,
            endpoint_url=args.endpoint_url,
            debug=args.debug
        )
    except (ConfigValidationError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=err)
        return EXIT_USAGE

    configure_logging(config.enable_debug_logging, err)
    logger.debug(f"Running {args.command} (region={config.region_name}, profile={config.profile_name})")

    try:
        return args.handler(args, config, out, err)
    except CloudAdminError as e:
        logger.debug(f"{args.command} failed (error code: {e.error_code})", exc_info=True)
        print(f"Error: {e}", file=err)
        return EXIT_ERROR


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
