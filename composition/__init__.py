"""Counting sets and property tables: composition versus inheritance."""

import sys

import importlib_metadata

from composition.forwarding import ForwardingMap, ForwardingSet, SupportsSetMethods
from composition.hashset import HashSet
from composition.instrumented import InstrumentedSet
from composition.instrumented_hashset import InstrumentedHashSet
from composition.properties import Properties
from composition.textmap import TextProperties, TypedMap
from composition.util import PropertyTypeError, debug

__version__ = "0.1.0"  # Do not forget to update in setup.py!
__author__ = "LightDance"
__license__ = "MIT"
__status__ = "Alpha"


def installed_version() -> str:
    try:
        return importlib_metadata.version("composition-over-inheritance")
    except importlib_metadata.PackageNotFoundError:
        return __version__


def env_info() -> str:
    python_ver = sys.version.split(" ")[0]
    return f"composition v{installed_version()} on {sys.platform}, Python {python_ver}"


__all__ = [
    "debug",
    "ForwardingMap",
    "ForwardingSet",
    "HashSet",
    "InstrumentedHashSet",
    "InstrumentedSet",
    "Properties",
    "PropertyTypeError",
    "SupportsSetMethods",
    "TextProperties",
    "TypedMap",
]
