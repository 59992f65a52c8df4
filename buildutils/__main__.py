"""CLI entry point for the monorepo build utilities.

Usage:
    buildutils [options] COMMAND [command options]
    python -m buildutils [options] COMMAND [command options]

Options:
    --config PATH       Path to buildutils.yaml config file
    --root DIR          Workspace root (default: cwd)
    --verbose / -v      Debug output
    --quiet / -q        Only warnings and errors
    --help / -h         Show this help

Commands:
    paths [--core]                  List workspace package directories
    graph [--format LIST] [--output DIR] [--include-external] [--order]
                                    Build the package dependency graph
    version [--package NAME]        Print the Python or a JS package version
    prebump                         Prepare a clean tree for a version bump
    postbump [--no-commit]          Run integrity checks and commit the bump
    check CMD                       Run a shell command, exit with its status
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .errors import BuildUtilsError

logger = logging.getLogger("buildutils")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buildutils",
        description="Build utilities for a JavaScript monorepo",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to buildutils.yaml configuration file",
    )
    parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Workspace root (default: current directory)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Debug output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Only show warnings and errors",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    paths = sub.add_parser("paths", help="List workspace package directories")
    paths.add_argument(
        "--core",
        action="store_true",
        default=False,
        help="List core packages (packages/*) instead of workspace packages",
    )

    graph = sub.add_parser("graph", help="Build the package dependency graph")
    graph.add_argument(
        "--format",
        type=str,
        default=None,
        help="Comma-separated output formats (json,dot)",
    )
    graph.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output directory for graph files",
    )
    graph.add_argument(
        "--include-external",
        action="store_true",
        default=False,
        help="Include external packages in the DOT output",
    )
    graph.add_argument(
        "--order",
        action="store_true",
        default=False,
        help="Print local packages in dependency order",
    )

    version = sub.add_parser("version", help="Print a version")
    version.add_argument(
        "--package",
        type=str,
        default=None,
        help="Print the version of packages/NAME instead of the Python version",
    )

    sub.add_parser("prebump", help="Prepare a clean tree for a version bump")

    postbump = sub.add_parser("postbump", help="Run integrity checks and commit the bump")
    postbump.add_argument(
        "--no-commit",
        action="store_true",
        default=False,
        help="Skip the git commit",
    )

    check = sub.add_parser("check", help="Run a shell command and exit with its status")
    check.add_argument("cmd", type=str, help="Shell command to run")

    return parser


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Determine workspace root
    if args.root:
        repo_root = os.path.abspath(args.root)
    else:
        repo_root = os.getcwd()

    if not os.path.isdir(repo_root):
        print(f"Error: workspace root not found: {repo_root}", file=sys.stderr)
        return 1

    try:
        from .config import load_config
        config = load_config(config_path=args.config, repo_root=repo_root)

        if args.verbose:
            level = logging.DEBUG
        elif args.quiet:
            level = logging.WARNING
        else:
            level = getattr(logging, str(config.logging.level).upper(), logging.INFO)
        logging.basicConfig(level=level, format=config.logging.format)

        return _dispatch(args, config)
    except BuildUtilsError as exc:
        logger.error("%s", exc)
        return 1
    except Exception:
        logger.exception("Uncaught exception")
        return 1


def _dispatch(args, config) -> int:
    if args.command == "paths":
        return _cmd_paths(args, config)
    if args.command == "graph":
        return _cmd_graph(args, config)
    if args.command == "version":
        return _cmd_version(args, config)
    if args.command == "prebump":
        from .proc import prebump
        prebump(config.versioning, cwd=config.root)
        return 0
    if args.command == "postbump":
        from .proc import postbump
        postbump(config.versioning, commit=not args.no_commit, cwd=config.root)
        return 0
    if args.command == "check":
        from .proc import check_status
        return check_status(args.cmd, cwd=config.root)
    return 2


def _cmd_paths(args, config) -> int:
    from .discovery import get_core_paths, get_workspace_paths

    if args.core:
        paths = get_core_paths(config.root, config.workspace.core_glob)
    else:
        paths = get_workspace_paths(config.root, config.workspace)
    for path in paths:
        print(path)
    return 0


def _cmd_graph(args, config) -> int:
    from .graphs.package_graph import build_package_graph
    from .output import dot_writer, json_writer

    if args.format:
        config.output.formats = [f.strip() for f in args.format.split(",") if f.strip()]
    if args.output:
        config.output.directory = args.output

    graph = build_package_graph(config)

    order = None
    if args.order:
        order = graph.overall_order(local_only=True)

    print(f"  Packages: {len(graph.local_names)} local, "
          f"{len(graph.external_packages)} external")
    print(f"  Dependencies: {graph.edge_count}")
    if args.order:
        for name in order:
            print(name)

    output_dir = config.output.directory
    if not os.path.isabs(output_dir):
        output_dir = os.path.join(config.root, output_dir)

    written = []
    for fmt in config.output.formats:
        if fmt == "json":
            written.append(json_writer.write_package_graph_json(graph, output_dir, order=order))
        elif fmt == "dot":
            written.append(dot_writer.write_package_graph_dot(
                graph, output_dir, local_only=not args.include_external,
            ))
        else:
            logger.warning("Unknown output format: %s", fmt)
    for path in written:
        logger.info("Wrote %s", path)
    return 0


def _cmd_version(args, config) -> int:
    from .proc import get_js_version, get_python_version

    if args.package:
        print(get_js_version(args.package, base_path=config.root))
    else:
        print(get_python_version(config.versioning, cwd=config.root))
    return 0


if __name__ == "__main__":
    sys.exit(main())
