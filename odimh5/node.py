"""
node.py
-------
The structural node shared by every ODIM object: an HDF5 location (file
root or group) plus its optional 'what', 'where' and 'how' metadata
groups.

A node is built either in create mode (fresh group, metadata groups made
on first use) or in open mode (existing group, metadata groups opened if
present). Entities own exactly one node each and never switch mode.
"""
import logging
import os

import h5py
import numpy as np

from . import attrs
from .constants import (
    GRP_HOW,
    GRP_WHAT,
    GRP_WHERE,
    HOW_BOOL,
    HOW_DOUBLE,
    HOW_LONG,
    HOW_STRING,
    VAL_FALSE,
    VAL_TRUE,
)
from .errors import AlreadyExists, OpenFailure, TypeMismatch, WriteFailure

logger = logging.getLogger(__name__)


def child_name(prefix: str, index=None) -> str:
    """'dataset' + 3 -> 'dataset3'; index None leaves the name alone."""
    return prefix if index is None else f"{prefix}{int(index)}"


def _open_group(parent, name):
    if name not in parent:
        return None
    obj = parent[name]
    if not isinstance(obj, h5py.Group):
        raise OpenFailure("Expected a group", parent.name, name)
    return obj


def _create_group(parent, name):
    if name in parent:
        raise AlreadyExists("Group already exists", parent.name, name)
    try:
        return parent.create_group(name)
    except (OSError, ValueError, RuntimeError) as err:
        raise WriteFailure(f"Failed to create group: {err}", parent.name, name) from err


class Node:
    """An HDF5 group (or file root) with its what/where/how handles."""

    __slots__ = ("hnd", "what", "where", "how", "how_attribute_count", "created")

    def __init__(self, hnd, created: bool):
        self.hnd = hnd
        self.created = created
        self.what = None
        self.where = None
        self.how = None
        self.how_attribute_count = 0
        if not created:
            self.what = _open_group(hnd, GRP_WHAT)
            self.where = _open_group(hnd, GRP_WHERE)
            self.how = _open_group(hnd, GRP_HOW)
            if self.how is not None:
                self.how_attribute_count = len(self.how.attrs)

    # -- construction --------------------------------------------------------

    @classmethod
    def create_file(cls, path):
        if os.path.exists(path):
            raise AlreadyExists("File already exists", str(path))
        try:
            hnd = h5py.File(path, "w-")
        except FileExistsError as err:
            raise AlreadyExists("File already exists", str(path)) from err
        except OSError as err:
            raise WriteFailure(f"Failed to create file: {err}", str(path)) from err
        logger.debug("created %s", path)
        return cls(hnd, created=True)

    @classmethod
    def open_file(cls, path, read_only: bool = True):
        try:
            hnd = h5py.File(path, "r" if read_only else "r+")
        except OSError as err:
            raise OpenFailure(f"Failed to open file: {err}", str(path)) from err
        logger.debug("opened %s (%s)", path, "r" if read_only else "r+")
        return cls(hnd, created=False)

    @classmethod
    def create_child(cls, parent: "Node", name: str, index=None):
        return cls(_create_group(parent.hnd, child_name(name, index)), created=True)

    @classmethod
    def open_child(cls, parent: "Node", name: str, index=None):
        grp = _open_group(parent.hnd, child_name(name, index))
        if grp is None:
            raise OpenFailure("Group missing", parent.path, child_name(name, index))
        return cls(grp, created=False)

    # -- structure -----------------------------------------------------------

    @property
    def path(self) -> str:
        return self.hnd.name

    @property
    def read_only(self) -> bool:
        return self.hnd.file.mode == "r"

    def child_exists(self, name: str) -> bool:
        return name in self.hnd

    def child_count(self) -> int:
        return len(self.hnd)

    def ensure_what(self):
        if self.what is None:
            self.what = _create_group(self.hnd, GRP_WHAT)
        return self.what

    def ensure_where(self):
        if self.where is None:
            self.where = _create_group(self.hnd, GRP_WHERE)
        return self.where

    def ensure_how(self):
        if self.how is None:
            self.how = _create_group(self.hnd, GRP_HOW)
        return self.how

    def require_what(self):
        if self.what is None:
            raise OpenFailure("Group missing", self.path, GRP_WHAT)
        return self.what

    def require_where(self):
        if self.where is None:
            raise OpenFailure("Group missing", self.path, GRP_WHERE)
        return self.where

    def close(self):
        if isinstance(self.hnd, h5py.File) and self.hnd.id.valid:
            self.hnd.close()

    # -- optional 'how' attributes ------------------------------------------

    def has_how(self, name: str) -> bool:
        return self.how is not None and attrs.exists(self.how, name)

    def how_attributes(self) -> list:
        return [] if self.how is None else list(self.how.attrs.keys())

    def get_how(self, name: str, default=None):
        """Read an optional how attribute.

        Names listed in the HOW_* tables are read as their documented kind;
        anything else is converted by its stored type class.
        """
        if not self.has_how(name):
            return default
        if name in HOW_BOOL:
            return attrs.get_bool(self.how, name)
        if name in HOW_LONG:
            return attrs.get_long(self.how, name)
        if name in HOW_STRING:
            return attrs.get_string(self.how, name)

        shape = self.how.attrs.get_id(name).shape
        scalar = not shape or int(np.prod(shape)) == 1
        if name in HOW_DOUBLE:
            return attrs.get_double(self.how, name) if scalar else attrs.get_doubles(self.how, name)

        kind = attrs.type_class(self.how, name)
        if kind == h5py.h5t.STRING:
            val = attrs.get_string(self.how, name)
            return {VAL_TRUE: True, VAL_FALSE: False}.get(val, val)
        if kind == h5py.h5t.INTEGER:
            return attrs.get_long(self.how, name) if scalar else attrs.get_longs(self.how, name)
        if kind == h5py.h5t.FLOAT:
            return attrs.get_double(self.how, name) if scalar else attrs.get_doubles(self.how, name)
        raise TypeMismatch("Unsupported attribute type", self.how.name, name)

    def set_how(self, name: str, value):
        how = self.ensure_how()
        if name in HOW_BOOL:
            if isinstance(value, str) and value not in (VAL_TRUE, VAL_FALSE):
                raise TypeError(f"how/{name} takes a boolean, got '{value}'")
            attrs.set_bool(how, name, value == VAL_TRUE if isinstance(value, str) else bool(value))
        elif name in HOW_LONG:
            attrs.set_long(how, name, int(value))
        elif name in HOW_DOUBLE:
            if isinstance(value, (list, tuple, np.ndarray)):
                attrs.set_doubles(how, name, value)
            else:
                attrs.set_double(how, name, float(value))
        elif name in HOW_STRING:
            attrs.set_string(how, name, str(value))
        else:
            self._set_how_by_value(how, name, value)

    @staticmethod
    def _set_how_by_value(how, name, value):
        # Unknown names are stored by the Python type of the value
        if isinstance(value, (bool, np.bool_)):
            attrs.set_bool(how, name, bool(value))
        elif isinstance(value, (int, np.integer)):
            attrs.set_long(how, name, int(value))
        elif isinstance(value, (float, np.floating)):
            attrs.set_double(how, name, float(value))
        elif isinstance(value, str):
            attrs.set_string(how, name, value)
        elif isinstance(value, (list, tuple, np.ndarray)):
            arr = np.asarray(value)
            if arr.dtype.kind in "iu":
                attrs.set_longs(how, name, arr)
            elif arr.dtype.kind == "f":
                attrs.set_doubles(how, name, arr)
            else:
                raise TypeError(f"Unsupported array type {arr.dtype} for how/{name}")
        else:
            raise TypeError(f"Unsupported value type {type(value).__name__} for how/{name}")
