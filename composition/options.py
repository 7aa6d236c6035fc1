import enum
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Sequence


class BackingKind(enum.Enum):
    builtin = "builtin"
    hashset = "hashset"

    def __repr__(self):
        return f"BackingKind.{self.name}"


@dataclass
class DemoOptionSet:
    """
    Encodes some set of partially-specified options.

    This class is used while parsing options from the command line.
    It is very similar to `DemoOptions` (which is used while running demonstrations)
    but allows None values everywhere so that options can correctly override each
    other.
    """

    backing: Optional[BackingKind] = None
    elements: Optional[Sequence[str]] = None
    report_verbose: Optional[bool] = None

    def overlay(self, overrides: "DemoOptionSet") -> "DemoOptionSet":
        kw = {k: v for (k, v) in overrides.__dict__.items() if v is not None}
        return replace(self, **kw)


def option_set_from_dict(source: Mapping[str, object]) -> DemoOptionSet:
    options = DemoOptionSet()
    for optname in ("backing", "elements", "report_verbose"):
        arg_val = source.get(optname, None)
        # An empty element list on the command line means "use the default":
        if arg_val is not None and arg_val != []:
            setattr(options, optname, arg_val)
    return options


@dataclass
class DemoOptions:
    """Encodes the options for use while running the demonstrations."""

    backing: BackingKind
    elements: Sequence[str]
    report_verbose: bool

    def overlay(self, overrides: Optional[DemoOptionSet] = None, **kw) -> "DemoOptions":
        if overrides is not None:
            assert not kw
            kw = overrides.__dict__
        kw = {k: v for (k, v) in kw.items() if v is not None}
        ret = replace(self, **kw)
        assert type(ret) is DemoOptions
        return ret


DEFAULT_OPTIONS = DemoOptions(
    backing=BackingKind.builtin,
    elements=("Snap", "Crakle", "Pop"),
    report_verbose=False,
)
