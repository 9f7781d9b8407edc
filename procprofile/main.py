"""procprofile command line.

Inspect, compare, merge and migrate processing profiles without a GUI.
"""

import argparse
import sys
from enum import Enum
from typing import List, Optional

from procprofile.config import settings
from procprofile.io.profile_io import LoadResult, load_profile, save_profile
from procprofile.params import AutoPartialProfile, ParameterSet, ThresholdCurve
from procprofile.utils.errors import format_user_error
from procprofile.utils.logger import get_logger, set_level

logger = get_logger(__name__)


def _format_value(value) -> str:
    if isinstance(value, ThresholdCurve):
        return ";".join(str(p) for p in value.to_control_points())
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _report_load(result: LoadResult) -> bool:
    """Print problems of a load. Returns False when the load failed."""
    if result.is_fatal:
        print(f"Error: cannot load {result.path}: {result.status.value}", file=sys.stderr)
        return False
    for issue in result.issues:
        print(f"Warning: {result.path}: {issue}", file=sys.stderr)
    if result.newer_schema:
        print(f"Warning: {result.path} was written by a newer version "
              f"(schema {result.file_version}); some settings may be ignored", file=sys.stderr)
    return True


def _load(path: str, params: ParameterSet) -> Optional[LoadResult]:
    result = load_profile(params, path)
    return result if _report_load(result) else None


def _print_differences(left: ParameterSet, right: ParameterSet) -> int:
    specs = {spec.path: spec for spec in ParameterSet.field_specs()}
    paths = left.differences(right)
    for path in paths:
        spec = specs[path]
        print(f"{path}: {_format_value(spec.get(left))} -> {_format_value(spec.get(right))}")
    return len(paths)


# --- commands ---

def cmd_defaults(args) -> int:
    result = save_profile(ParameterSet(), args.output, dest2=args.copy)
    if not result.ok:
        print(f"Error: could not write {', '.join(result.failed)}", file=sys.stderr)
        return 1
    for path in result.written:
        print(path)
    return 0


def cmd_show(args) -> int:
    params = ParameterSet()
    result = _load(args.profile, params)
    if result is None:
        return 1
    print(f"{result.path}: {result.status.value} (schema {result.file_version}, "
          f"written by {result.app_version or 'unknown'})")
    changed = _print_differences(ParameterSet(), params)
    if not changed:
        print("All settings at their defaults.")
    return 0


def cmd_diff(args) -> int:
    left, right = ParameterSet(), ParameterSet()
    if _load(args.first, left) is None or _load(args.second, right) is None:
        return 1
    if not _print_differences(left, right):
        print("Profiles are identical.")
    return 0


def cmd_apply(args) -> int:
    base = ParameterSet()
    if _load(args.base, base) is None:
        return 1
    partial = AutoPartialProfile()
    if not _report_load(partial.load(args.partial)):
        return 1
    partial.apply_to(base)
    result = base.save(args.output)
    if not result.ok:
        print(f"Error: could not write {args.output}", file=sys.stderr)
        return 1
    print(f"Applied {partial.pedited.count()} setting(s) from {args.partial} -> {args.output}")
    return 0


def cmd_migrate(args) -> int:
    params = ParameterSet()
    result = _load(args.profile, params)
    if result is None:
        return 1
    saved = params.save(args.output)
    if not saved.ok:
        print(f"Error: could not write {args.output}", file=sys.stderr)
        return 1
    print(f"{args.profile}: schema {result.file_version} -> {settings.CURRENT_SCHEMA_VERSION}")
    return 0


def cmd_sidecar(args) -> int:
    params = ParameterSet()
    if _load(args.profile, params) is None:
        return 1
    sidecar = settings.sidecar_path(args.image)
    cached = settings.cache_profile_path(args.image, args.cache_dir)
    result = params.save(sidecar, dest2=cached, relativize_paths=True)
    for path in result.written:
        print(path)
    if not result.ok:
        print(f"Error: could not write {', '.join(result.failed)}", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procprofile",
        description="Inspect, compare, merge and migrate processing profiles",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default=None,
        help=f"Logging level (default: {settings.LOGGING_LEVEL})",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    p = sub.add_parser("defaults", help="Write a profile with every setting at its default")
    p.add_argument("output", metavar="OUT")
    p.add_argument("--copy", metavar="PATH", default=None, help="Also write an identical second copy")
    p.set_defaults(func=cmd_defaults)

    p = sub.add_parser("show", help="Print the settings that differ from the defaults")
    p.add_argument("profile", metavar="PROFILE")
    p.set_defaults(func=cmd_show)

    p = sub.add_parser("diff", help="Print the settings that differ between two profiles")
    p.add_argument("first", metavar="A")
    p.add_argument("second", metavar="B")
    p.set_defaults(func=cmd_diff)

    p = sub.add_parser("apply", help="Overlay the settings present in a partial profile onto a base profile")
    p.add_argument("base", metavar="BASE")
    p.add_argument("partial", metavar="PARTIAL")
    p.add_argument("-o", "--output", required=True, metavar="OUT")
    p.set_defaults(func=cmd_apply)

    p = sub.add_parser("migrate", help="Rewrite a profile at the current schema version")
    p.add_argument("profile", metavar="PROFILE")
    p.add_argument("-o", "--output", required=True, metavar="OUT")
    p.set_defaults(func=cmd_migrate)

    p = sub.add_parser("sidecar", help="Store a profile next to an image and in the user cache")
    p.add_argument("profile", metavar="PROFILE")
    p.add_argument("image", metavar="IMAGE")
    p.add_argument("--cache-dir", default=None, metavar="DIR", help="Cache directory (default: per-user cache)")
    p.set_defaults(func=cmd_sidecar)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns 0 on success, 1 on failure."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level:
        set_level(args.log_level)
    try:
        return args.func(args)
    except OSError as e:
        logger.error("Command %s failed: %s", args.command, e)
        message = format_user_error(e, "running " + args.command)
        print(f"Error: {message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
