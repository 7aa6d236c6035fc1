import io
from typing import List, Tuple

import pytest

from composition.main import command_line_parser, run
from composition.options import BackingKind


def call_run(cmd_args: List[str]) -> Tuple[int, List[str], List[str]]:
    stdbuf: io.StringIO = io.StringIO()
    errbuf: io.StringIO = io.StringIO()
    retcode = run(cmd_args, stdbuf, errbuf)
    stdlines = [ls for ls in stdbuf.getvalue().split("\n") if ls]
    errlines = [ls for ls in errbuf.getvalue().split("\n") if ls]
    return retcode, stdlines, errlines


def test_hashset_reports_double_count() -> None:
    assert call_run(["hashset"]) == (0, ["InstrumentedHashSet add count: 6"], [])


def test_hashset_with_custom_elements() -> None:
    retcode, out, _ = call_run(["hashset", "a", "b"])
    assert retcode == 0
    assert out == ["InstrumentedHashSet add count: 4"]


@pytest.mark.parametrize("backing", ["builtin", "hashset"])
def test_forwarding_reports_correct_count(backing) -> None:
    retcode, out, err = call_run(["forwarding", "--backing", backing])
    assert (retcode, out, err) == (0, ["InstrumentedSet add count: 3"], [])


def test_forwarding_report_verbose() -> None:
    retcode, out, _ = call_run(["forwarding", "--report_verbose", "x"])
    assert retcode == 0
    assert out[0] == "InstrumentedSet add count: 1"
    assert "builtin backing set" in out[1]


def test_properties_demo() -> None:
    retcode, out, err = call_run(["properties"])
    assert retcode == 0
    assert err == []
    assert out == [
        'p.get("key"): None',
        "p.get_property(\"key\"): '100'",
        "PropertyTypeError: key of type 'object' cannot be cast to str",
    ]


def test_textmap_demo() -> None:
    retcode, out, _ = call_run(["textmap"])
    assert retcode == 0
    assert out[0] == "p.get(\"key\"): '100'"
    assert out[1] == "p.get_property(\"key\"): '100'"
    assert out[2].startswith("rejected: key <object object at")
    assert out[3] == "entries: 0"


def test_all_runs_every_demo() -> None:
    retcode, out, _ = call_run(["all"])
    assert retcode == 0
    headers = [line for line in out if line.startswith("== ")]
    assert headers == ["== hashset", "== forwarding", "== properties", "== textmap"]
    assert "InstrumentedHashSet add count: 6" in out
    assert "InstrumentedSet add count: 3" in out


def test_no_action_prints_help() -> None:
    retcode, out, err = call_run([])
    assert retcode == 2
    assert out == []
    assert err[0].startswith("usage: composition")


def test_bad_backing_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as exc_info:
        command_line_parser().parse_args(["forwarding", "--backing", "treeset"])
    assert exc_info.value.code == 2


def test_backing_parses_to_enum() -> None:
    args = command_line_parser().parse_args(["forwarding", "--backing", "HashSet"])
    assert args.backing == BackingKind.hashset
