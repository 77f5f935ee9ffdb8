"""CLI entrypoint for gitchurn.

Usage:
    python main.py [options] <command>

Commands:
    churn        Distinct content versions per file path across history
    log          Commits reachable from the ref, in walk order (rev-list style)

Options:
    --repo PATH              Path to the git repository (default: current directory)
    --ref REF                Where to start walking (default: HEAD)
    --topo-order             Walk in topological order
    --date-order             Walk in commit-date order
    --reverse                Reverse the walk order
    --max N                  Cap the number of commits walked
    --output FILE            Write JSON output to FILE (default: print to stdout)
    --json                   Force JSON output
    -v / -q                  More / less logging on stderr
    --log-file FILE          Also append logs to FILE

churn options:
    --top N                  Only print the N highest-churn paths
    --min-versions N         Hide paths with fewer than N versions
    --progress N             Log progress every N commits
    --partial                On error, report what was folded so far instead of failing
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from gitchurn.analyzers import get_commit_log, get_file_churn
from gitchurn.errors import GitChurnError
from gitchurn.logging_config import get_logger, setup_logging
from gitchurn.models import ChurnReport, to_json
from gitchurn.repo import open_repo
from gitchurn.walker import WalkConfig

logger = get_logger("cli")


def _walk_config(args: argparse.Namespace) -> WalkConfig:
    return WalkConfig.from_flags(
        ref=args.ref,
        topo_order=args.topo_order,
        date_order=args.date_order,
        reverse=args.reverse,
        max_count=args.max,
    )


def render_churn(report: ChurnReport, top: int | None = None) -> str:
    """Plain-text table: one ``versions  path`` row per file, sorted by path."""
    rows = report.files
    if top is not None:
        # Highest churn first; the sort is stable so ties stay in path order
        rows = sorted(rows, key=lambda f: -f.versions)[:top]

    status = ""
    if report.error:
        status = "  [PARTIAL]"
    elif report.truncated:
        status = "  [TRUNCATED]"
    lines = [
        f"File churn from '{report.ref}' — {report.commits_walked} commits, "
        f"{len(report.files)} files, {report.total_versions} versions{status}",
        "",
    ]
    for f in rows:
        lines.append(f"  {f.versions:>6}  {f.path}")
    if top is not None and len(report.files) > top:
        lines.append(f"  ... and {len(report.files) - top} more")
    if report.error:
        lines.append("")
        lines.append(f"  stopped early: {report.error}")
    return "\n".join(lines)


def cmd_churn(args: argparse.Namespace) -> int:
    repo = open_repo(args.repo)
    report = get_file_churn(
        repo,
        _walk_config(args),
        min_versions=args.min_versions,
        progress_every=args.progress,
        partial=args.partial,
    )
    if args.json or args.output:
        _emit(to_json(report), args.output)
    else:
        print(render_churn(report, top=args.top))
    # A --max cap is requested by the user, so only errors fail the run
    return 0 if report.error is None else 1


def cmd_log(args: argparse.Namespace) -> int:
    repo = open_repo(args.repo)
    log = get_commit_log(repo, _walk_config(args))
    if args.json or args.output:
        _emit(to_json(log), args.output)
    else:
        for c in log:
            print(f"{c.sha} {c.summary}")
    return 0


def _emit(text: str, output_path: str | None) -> None:
    if output_path:
        Path(output_path).write_text(text)
        logger.info("Output written to: %s", output_path)
    else:
        print(text)


def _add_common_flags(parser: argparse.ArgumentParser, suppress: bool = False) -> None:
    """Flags accepted both before and after the subcommand name.

    The subcommand copies use ``SUPPRESS`` defaults so they only set what was
    actually typed after the command, and never reset values given before it.
    """

    def default(value):
        return argparse.SUPPRESS if suppress else value

    parser.add_argument("--repo", default=default("."), metavar="PATH", help="Path to the git repo (default: .)")
    parser.add_argument(
        "--ref", default=default("HEAD"), metavar="REF", help="Ref to start walking from (default: HEAD)"
    )
    parser.add_argument(
        "--topo-order", action="store_true", default=default(False), help="Sort commits in topological order"
    )
    parser.add_argument("--date-order", action="store_true", default=default(False), help="Sort commits in date order")
    parser.add_argument("--reverse", action="store_true", default=default(False), help="Sort commits in reverse")
    parser.add_argument(
        "--max", type=int, default=default(None), metavar="N", help="Cap the number of commits walked"
    )
    parser.add_argument("--output", default=default(None), metavar="FILE", help="Write JSON output to FILE")
    parser.add_argument("--json", action="store_true", default=default(False), help="Force JSON output")
    parser.add_argument("-v", "--verbose", action="store_true", default=default(False), help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", default=default(False), help="Only log errors")
    parser.add_argument("--log-file", default=default(None), metavar="FILE", help="Also append logs to FILE")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitchurn",
        description="Count distinct content versions of every file in a git repository's history.",
    )
    _add_common_flags(parser)

    common = argparse.ArgumentParser(add_help=False)
    _add_common_flags(common, suppress=True)

    sub = parser.add_subparsers(dest="command", required=True)
    churn = sub.add_parser("churn", parents=[common], help="Distinct content versions per file path")
    churn.add_argument("--top", type=int, default=None, metavar="N", help="Only print the N highest-churn paths")
    churn.add_argument(
        "--min-versions", type=int, default=1, metavar="N", help="Hide paths with fewer than N versions"
    )
    churn.add_argument("--progress", type=int, default=None, metavar="N", help="Log progress every N commits")
    churn.add_argument(
        "--partial",
        action="store_true",
        help="On a repository error, report the commits folded so far instead of failing",
    )
    sub.add_parser("log", parents=[common], help="Commits in walk order, rev-list style")

    return parser


_COMMANDS = {
    "churn": cmd_churn,
    "log": cmd_log,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)
    try:
        return _COMMANDS[args.command](args)
    except (GitChurnError, ValueError) as exc:
        logger.error("error: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
