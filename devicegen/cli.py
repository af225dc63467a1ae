"""Command-line entry point: ``devicegen -n <device-name> [-c Name] [-d dir]``.

Exit codes:
    0  the service tree was generated
    1  invalid arguments, or the service directory already exists
    2  installation or configuration defect (missing template, bad catalog)
    3  filesystem error while writing the tree
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import NoReturn

from pydantic import ValidationError

from devicegen.config import Config
from devicegen.scaffolder.errors import (
    CatalogError,
    DestinationExists,
    DisplayNameNotCapitalized,
    InvalidInput,
    IOFailure,
    TemplateMissing,
)
from devicegen.scaffolder.generator import ServiceGenerator
from devicegen.utils import (
    console,
    err_console,
    print_error,
    print_file_tree,
    print_success,
    print_summary_table,
)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_INSTALL = 2
EXIT_IO = 3

_DESCRIPTION = """\
Generates the build tree for a newly named device service. The service is
taken from the device-simple example; replace the code in
internal/driver/<device-name>driver.go with your own implementation of the
ProtocolDriver interface.

options:
  device-name (required) - should be comprised of lower-case letters and may
      contain dash(-) characters
  camel-case-name (optional) - must begin with an upper case letter and may
      only contain letters, digits, dash(-) and underscore(_) characters (no
      spaces); will default to device-name with first letter
      converted to upper case
  destination-directory (optional) - will default to current directory if not
      provided
"""

_EPILOG = """\
example:
  devicegen -n mydevice -c MyDevice -d ~/my-edgex-repositories

  - Produces a new device service called "device-mydevice-go" with an example
    implementation of the ProtocolDriver interface called "MyDeviceDriver".
    The example implementation is functionally equivalent to the
    "SimpleDevice" example in device-sdk-go. It is expected that the user
    would replace the example implementation with an implementation that
    works with "MyDevice".
"""


class UsageError(Exception):
    """Raised instead of exiting when argparse rejects the command line."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="devicegen",
        usage="%(prog)s -n <device-name> [-c <camel-case-name>] [-d <destination-directory>]",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # -n is validated by the scaffolder so a missing name is reported as
    # MissingDeviceName rather than as an argparse error.
    parser.add_argument("-n", dest="device_name", metavar="device-name", default=None)
    parser.add_argument("-c", dest="camel_name", metavar="camel-case-name", default=None)
    parser.add_argument("-d", dest="destination", metavar="destination-directory", default="")
    return parser


def _usage_failure(parser: argparse.ArgumentParser, message: str) -> int:
    print_error(message)
    err_console.print(parser.format_help(), markup=False, highlight=False)
    return EXIT_USAGE


def main(argv: list[str] | None = None) -> int:
    """Run the generator; return the process exit code."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        return _usage_failure(parser, str(exc))

    try:
        generator = ServiceGenerator(Config.from_env())
    except ValidationError as exc:
        print_error(f"Invalid configuration: {exc}")
        return EXIT_INSTALL
    except CatalogError as exc:
        print_error(f"Installation problem: {exc}")
        return EXIT_INSTALL

    try:
        # An explicit but empty -c is rejected; only an omitted -c is derived.
        if args.camel_name is not None and not args.camel_name:
            raise DisplayNameNotCapitalized(args.camel_name)
        plan = generator.prepare(args.device_name, args.camel_name, args.destination)
    except InvalidInput as exc:
        return _usage_failure(parser, str(exc))
    except DestinationExists as exc:
        print_error(str(exc))
        return EXIT_USAGE
    except CatalogError as exc:
        print_error(f"Installation problem: {exc}")
        return EXIT_INSTALL

    console.print()
    console.print(
        f"Creating new device service tree: {plan.service_root} ... ",
        end="",
        markup=False,
        highlight=False,
    )
    try:
        root = asyncio.run(generator.execute(plan))
    except DestinationExists as exc:
        console.print()
        print_error(str(exc))
        return EXIT_USAGE
    except (TemplateMissing, CatalogError) as exc:
        console.print()
        print_error(f"Installation problem: {exc}")
        return EXIT_INSTALL
    except IOFailure as exc:
        console.print()
        print_error(str(exc))
        return EXIT_IO
    print_success("done")
    console.print()

    names = plan.names
    print_summary_table(
        {
            "Service": names.service_name,
            "Device name": names.device_name,
            "Camel-case name": names.camel_name,
            "Driver": names.driver_type,
            "Location": str(root),
        },
        title="New device service",
    )
    labels = {entry.dest_path: entry.description for entry in plan.entries if entry.description}
    print_file_tree(root, sorted(p for p in root.rglob("*") if p.is_file()), labels)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
