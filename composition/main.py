import argparse
import sys
import textwrap
from typing import Callable, Dict, List, Optional, TextIO

from composition import env_info
from composition.forwarding import AbcSet
from composition.hashset import HashSet
from composition.instrumented import demo_forwarded_count
from composition.instrumented_hashset import demo_double_count
from composition.options import (
    DEFAULT_OPTIONS,
    BackingKind,
    DemoOptions,
    option_set_from_dict,
)
from composition.properties import (
    destroy_by_super_class,
    inconsistency_caused_by_default_value,
)
from composition.textmap import TextProperties
from composition.util import PropertyTypeError, debug, in_debug, set_debug


def backing_kind(argstr: str) -> BackingKind:
    try:
        return BackingKind[argstr.strip().lower()]
    except KeyError:
        raise ValueError


def command_line_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(
        add_help=False, formatter_class=argparse.RawTextHelpFormatter
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Output additional debugging information on stderr",
    )
    common.add_argument(
        "--report_verbose",
        dest="report_verbose",
        action="store_true",
        help="Explain each observed value next to it",
    )
    parser = argparse.ArgumentParser(
        prog="composition",
        description="Demonstrations of composition versus inheritance",
    )
    subparsers = parser.add_subparsers(help="sub-command help", dest="action")
    hashset_parser = subparsers.add_parser(
        "hashset",
        help="Count insertions with a subclass of a concrete set",
        parents=[common],
        formatter_class=argparse.RawTextHelpFormatter,
        description=textwrap.dedent(
            """\
        Adds the given elements to an InstrumentedHashSet with a single bulk
        insert, and prints how many insertions it counted.
        The count is wrong: the inherited bulk insert calls the overridden
        single insert, so every element is counted twice.
        """
        ),
    )
    forwarding_parser = subparsers.add_parser(
        "forwarding",
        help="Count insertions with a wrapper around any set",
        parents=[common],
        formatter_class=argparse.RawTextHelpFormatter,
        description=textwrap.dedent(
            """\
        Adds the given elements to an InstrumentedSet with a single bulk
        insert, and prints how many insertions it counted.
        """
        ),
    )
    forwarding_parser.add_argument(
        "--backing",
        type=backing_kind,
        choices=BackingKind.__members__.values(),
        metavar="KIND",
        help=textwrap.dedent(
            """\
        The set that the counting wrapper forwards to.
            builtin : a builtin set (the default)
            hashset : a HashSet, whose bulk insert calls its single insert
        """
        ),
    )
    for subparser in (hashset_parser, forwarding_parser):
        subparser.add_argument(
            "elements",
            metavar="ELEMENT",
            type=str,
            nargs="*",
            help='Elements to insert (default: "Snap" "Crakle" "Pop")',
        )
    subparsers.add_parser(
        "properties",
        help="Show the hazards of a property table that subclasses dict",
        parents=[common],
        formatter_class=argparse.RawTextHelpFormatter,
    )
    subparsers.add_parser(
        "textmap",
        help="Show a property table that wraps a dict instead",
        parents=[common],
        formatter_class=argparse.RawTextHelpFormatter,
    )
    subparsers.add_parser(
        "all",
        help="Run every demonstration",
        parents=[common],
        formatter_class=argparse.RawTextHelpFormatter,
    )
    return parser


def make_backing(kind: BackingKind) -> AbcSet:
    if kind == BackingKind.hashset:
        return HashSet()
    return set()


def hashset(options: DemoOptions, stdout: TextIO, stderr: TextIO) -> int:
    count = demo_double_count(options.elements)
    stdout.write(f"InstrumentedHashSet add count: {count}\n")
    if options.report_verbose:
        stdout.write(
            f"  ({len(options.elements)} elements were offered; the inherited "
            "update() re-entered the overridden add() for each one)\n"
        )
    return 0


def forwarding(options: DemoOptions, stdout: TextIO, stderr: TextIO) -> int:
    backing = make_backing(options.backing)
    count = demo_forwarded_count(backing, options.elements)
    stdout.write(f"InstrumentedSet add count: {count}\n")
    if options.report_verbose:
        stdout.write(
            f"  ({len(options.elements)} elements were offered, forwarded to a "
            f"{options.backing.value} backing set)\n"
        )
    return 0


def properties(options: DemoOptions, stdout: TextIO, stderr: TextIO) -> int:
    raw, via_property = inconsistency_caused_by_default_value()
    stdout.write(f'p.get("key"): {raw!r}\n')
    stdout.write(f'p.get_property("key"): {via_property!r}\n')
    if options.report_verbose:
        stdout.write("  (the inherited get() does not consult the defaults)\n")
    try:
        destroy_by_super_class()
    except PropertyTypeError as exc:
        # Expected: this is the failure being demonstrated.
        stdout.write(f"{type(exc).__name__}: {exc}\n")
        if options.report_verbose:
            stdout.write("  (a non-text key went in through the inherited put())\n")
    else:
        stderr.write("Expected a PropertyTypeError, but none was raised\n")
        return 1
    return 0


def textmap(options: DemoOptions, stdout: TextIO, stderr: TextIO) -> int:
    defaults = TextProperties()
    defaults.set_property("key", "100")
    p = TextProperties(defaults)
    stdout.write(f'p.get("key"): {p.get("key")!r}\n')
    stdout.write(f'p.get_property("key"): {p.get_property("key")!r}\n')
    try:
        p[object()] = "value"  # type: ignore
    except PropertyTypeError as exc:
        stdout.write(f"rejected: {exc}\n")
    else:
        stderr.write("Expected the insertion to be rejected\n")
        return 1
    stdout.write(f"entries: {len(p)}\n")
    return 0


_DEMOS: Dict[str, Callable[[DemoOptions, TextIO, TextIO], int]] = {
    "hashset": hashset,
    "forwarding": forwarding,
    "properties": properties,
    "textmap": textmap,
}


def run(
    cmd_args: List[str], stdout: TextIO = sys.stdout, stderr: TextIO = sys.stderr
) -> int:
    parser = command_line_parser()
    args = parser.parse_args(cmd_args)
    if not args.action:
        parser.print_help(stderr)
        return 2
    set_debug(args.verbose)
    if in_debug():
        debug(env_info())
    options = DEFAULT_OPTIONS.overlay(option_set_from_dict(args.__dict__))
    debug("Running with", options)
    if args.action == "all":
        ret = 0
        for name, demo in _DEMOS.items():
            stdout.write(f"== {name}\n")
            ret = max(ret, demo(options, stdout, stderr))
        return ret
    elif args.action in _DEMOS:
        return _DEMOS[args.action](options, stdout, stderr)
    else:
        print(f'Unknown action: "{args.action}"', file=stderr)
        return 2


def main(cmd_args: Optional[List[str]] = None) -> None:
    if cmd_args is None:
        cmd_args = sys.argv[1:]
    sys.exit(run(cmd_args))


if __name__ == "__main__":
    main()
