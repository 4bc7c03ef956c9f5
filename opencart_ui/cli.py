"""
Command-line utilities for the OpenCart UI suite.

Inspects environments and test data without starting a browser, and checks
that the project layout is usable before a run.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, List

from . import __version__
from .core.config import Config
from .core.environment import ConfigurationResolver, KNOWN_ENVIRONMENTS
from .core.exceptions import OpenCartUIError
from .data.provider import DataProvider


def _config_from_args(args: argparse.Namespace) -> Config:
    root = Path(args.root) if args.root else Path.cwd()
    config = Config.from_root(root, environment=getattr(args, "env", None))
    if args.config_dir:
        config.config_dir = Path(args.config_dir)
    return config


def cmd_env(args: argparse.Namespace) -> int:
    """Print the resolved environment with secrets masked."""
    try:
        config = _config_from_args(args)
        resolver = ConfigurationResolver(config.config_dir)
        env_config = resolver.resolve(config.environment)
        if config.headless_override is not None:
            env_config = env_config.with_headless(config.headless_override)

        print(json.dumps(env_config.to_dict(mask_secrets=True), indent=2))
        return 0

    except OpenCartUIError as e:
        print(f"❌ {e}")
        if args.verbose:
            print(json.dumps(e.to_dict(), indent=2, default=str))
        return 1


def cmd_data(args: argparse.Namespace) -> int:
    """Print the rows of a data source, one JSON array per line."""
    try:
        config = _config_from_args(args)
        provider = DataProvider(config.testdata_dir)
        if args.sheet:
            rows = provider.excel_data(args.name)
        else:
            rows = provider.load(args.name)

        for row in rows:
            print(json.dumps(list(row)))
        if args.verbose:
            print(f"📊 {len(rows)} rows")
        return 0

    except OpenCartUIError as e:
        print(f"❌ {e}")
        return 1


def cmd_validate(args: argparse.Namespace) -> int:
    """Check the directory layout and every known environment file."""
    try:
        config = _config_from_args(args)
        config.validate()
    except OpenCartUIError as e:
        print(f"❌ {e}")
        return 1

    resolver = ConfigurationResolver(config.config_dir)
    failures = 0
    for name in KNOWN_ENVIRONMENTS:
        path = resolver.properties_path(name)
        if not path.exists():
            print(f"   ⚠️  {name}: {path.name} not present")
            continue
        try:
            env_config = resolver.resolve(name)
            print(f"   ✅ {name}: {env_config.browser} -> {env_config.base_url}")
        except OpenCartUIError as e:
            failures += 1
            print(f"   ❌ {name}: {e}")

    if failures:
        print(f"❌ {failures} environment file(s) invalid")
        return 1

    print("✅ Configuration is valid")
    return 0


def create_main_parser() -> argparse.ArgumentParser:
    """Create main CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="opencart-ui",
        description="OpenCart UI automation utilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  opencart-ui env --env stage
  opencart-ui data register
  opencart-ui data productimages --sheet
  opencart-ui validate

Tests themselves run through pytest: pytest e2e --env qa
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "--root",
        help="Project root holding config/ and testdata/ (default: current directory)"
    )
    parser.add_argument(
        "--config-dir",
        help="Directory holding the <env>.properties files"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    env_parser = subparsers.add_parser(
        "env",
        help="Show the resolved environment configuration"
    )
    env_parser.add_argument(
        "--env",
        help="Environment name: " + ", ".join(KNOWN_ENVIRONMENTS)
    )
    env_parser.set_defaults(func=cmd_env)

    data_parser = subparsers.add_parser(
        "data",
        help="Print the rows of a test data source"
    )
    data_parser.add_argument("name", help="CSV name without extension, or sheet name")
    data_parser.add_argument(
        "--sheet",
        action="store_true",
        help="Read a sheet of the test data workbook instead of a CSV file"
    )
    data_parser.set_defaults(func=cmd_data)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate the project layout and environment files"
    )
    validate_parser.set_defaults(func=cmd_validate)

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_main_parser()

    if args is None:
        args = sys.argv[1:]

    parsed_args = parser.parse_args(args)

    if not hasattr(parsed_args, 'func'):
        parser.print_help()
        return 1

    return parsed_args.func(parsed_args)


if __name__ == "__main__":
    sys.exit(main())
