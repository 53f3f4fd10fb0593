"""Plugforge command-line interface.

Usage::

    plugforge create my-app --plugins logger/default,task/default
    plugforge create my-app --template enterprise-monorepo --api graphql
    plugforge list
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from plugforge.composer import CreateRequest, PreconditionError, ProjectGenerator
from plugforge.composer.context import ScaffoldContext
from plugforge.composer.registry import PluginRegistry
from plugforge.composer.resolver import API_STYLES, TemplateResolver, parse_plugin_list
from plugforge.composer.summary import MessageRenderer
from plugforge.config import Config
from plugforge.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

PROG = "plugforge"


def _global_options(suppress: bool = False) -> argparse.ArgumentParser:
    """Store and output options accepted before or after the subcommand.

    The subcommand copies use ``SUPPRESS`` defaults so that an option given
    before the subcommand is not reset when it is absent after it.
    """
    unset = argparse.SUPPRESS if suppress else None
    options = argparse.ArgumentParser(add_help=False)
    options.add_argument(
        "--plugins-dir", default=unset,
        help="Directory holding the plugin store (default: $PLUGFORGE_PLUGINS_DIR or ./plugins)",
    )
    options.add_argument(
        "--templates-dir", default=unset,
        help="Directory holding template overrides (default: $PLUGFORGE_TEMPLATES_DIR or ./templates)",
    )
    options.add_argument(
        "--output", "-o", default=unset,
        help="Parent directory for the new project (default: $PLUGFORGE_OUTPUT_DIR or .)",
    )
    options.add_argument(
        "--verbose", "-v", action="store_true",
        default=argparse.SUPPRESS if suppress else False,
        help="Print debug output",
    )
    return options


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Plugforge -- compose new projects from reusable plugins",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        parents=[_global_options()],
        epilog=(
            "Examples:\n"
            f"  {PROG} create my-app\n"
            f"  {PROG} create my-app --plugins logger/default,task/default\n"
            f"  {PROG} create my-app --template enterprise-monorepo --api graphql\n"
        ),
    )

    sub = parser.add_subparsers(dest="command")
    sub_options = _global_options(suppress=True)

    create = sub.add_parser("create", help="Create a new project", parents=[sub_options])
    create.add_argument("project_name", nargs="?", default="", help="Name of the project directory")
    create.add_argument("--plugins", default=None, help="Comma-separated list of plugins")
    create.add_argument("--template", default=None, help="Use a predefined template")
    # Validated by the generator so that a bad value takes the usage path.
    create.add_argument("--api", default=None, help=f"API style ({', '.join(API_STYLES)})")
    create.add_argument("--store", default=None, help="Specify the store to use")

    sub.add_parser("list", help="List available templates and plugins", parents=[sub_options])
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    """Environment-derived config with command-line flags layered on top."""
    config = Config.from_env()
    if args.plugins_dir:
        config.plugins_dir = Path(args.plugins_dir)
    if args.templates_dir:
        config.templates_dir = Path(args.templates_dir)
    if args.output:
        config.output_dir = Path(args.output)
    if args.verbose:
        config.verbose = True
    return config


def _usage(config: Config) -> str:
    resolver = TemplateResolver(ScaffoldContext(config=config))
    return MessageRenderer().usage(PROG, resolver.known_templates(), API_STYLES)


def run_create(args: argparse.Namespace, config: Config) -> int:
    request = CreateRequest(
        project_name=args.project_name or "",
        plugins=parse_plugin_list(args.plugins),
        template=args.template,
        api=args.api,
        store=args.store,
    )

    generator = ProjectGenerator(config)
    try:
        result = generator.create(request)
    except PreconditionError as exc:
        print_error(str(exc))
        console.print(_usage(config), markup=False, highlight=False)
        return 1

    print_success(f"Project {result.project_name} created successfully!")
    summary = MessageRenderer().summary(
        result.project_name,
        result.project_path,
        result.plugins,
        template=request.template,
        store=request.store,
        warnings=result.warnings,
        duration=result.duration,
    )
    console.print(summary, markup=False, highlight=False)
    return 0


def run_list(config: Config) -> int:
    ctx = ScaffoldContext(config=config)
    templates = TemplateResolver(ctx).known_templates()
    print_summary_table(templates, title="Templates", columns=("Template", "Description"))

    plugins = PluginRegistry(ctx).discover()
    if not plugins:
        print_warning(f"No plugins found under {config.plugins_dir}")
        return 0
    rows: dict[str, str] = {}
    for plugin_id in plugins:
        descriptor = config.plugin_path(plugin_id) / config.config_filename
        rows[plugin_id] = config.config_filename if descriptor.is_file() else "legacy"
    print_summary_table(rows, title="Plugins", columns=("Plugin", "Placement"))
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``plugforge`` and ``python -m plugforge``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config_from_args(args)

    if args.command == "create":
        code = run_create(args, config)
    elif args.command == "list":
        code = run_list(config)
    else:
        console.print(_usage(config), markup=False, highlight=False)
        code = 0

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
