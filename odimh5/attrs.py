"""
attrs.py
--------
Typed attribute codec for any h5py object carrying ``.attrs`` (File,
Group, Dataset).

Three families of calls per kind:
- new_*: create; an attribute that already exists is an error.
- set_*: create or update. Strings, booleans and arrays are deleted and
  recreated since their stored size may change; int64/float64 scalars
  are written in place when an attribute of the same class exists.
- get_*: read with type-class and size validation.

Kinds: string (fixed-length ASCII, null terminated), bool (the strings
"True"/"False"), int64, float64, int64/float64 arrays, and a UTC time
split into a YYYYMMDD date attribute and an HHMMSS time attribute.
"""
import calendar
import datetime as dt
import re
import time

import h5py
import numpy as np

from .constants import STRING_BUFFER_SIZE, VAL_FALSE, VAL_TRUE
from .errors import (
    AlreadyExists,
    AttributeMissing,
    BadValue,
    ReadFailure,
    SizeMismatch,
    TypeMismatch,
    WriteFailure,
)

_ENGINE_ERRORS = (OSError, ValueError, TypeError, RuntimeError)

_DATE_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_TIME_RE = re.compile(r"^(\d{2})(\d{2})(\d{2})$")


def _path(node):
    return getattr(node, "name", None) or "/"


def _dec(x):
    if isinstance(x, np.ndarray):
        x = x.reshape(-1)[0] if x.size == 1 else x.tolist()
    if isinstance(x, (bytes, bytearray, np.bytes_)):
        return bytes(x).decode("utf-8", "replace").rstrip("\x00")
    return str(x)


def _string_type(length: int):
    # H5T_C_S1 sized for the text plus its terminator
    tid = h5py.h5t.C_S1.copy()
    tid.set_size(length + 1)
    tid.set_strpad(h5py.h5t.STR_NULLTERM)
    return h5py.Datatype(tid)


def _open(node, name):
    if name not in node.attrs:
        raise AttributeMissing("Attribute missing", _path(node), name)
    try:
        return node.attrs.get_id(name)
    except _ENGINE_ERRORS as err:
        raise ReadFailure(f"Failed to open attribute: {err}", _path(node), name) from err


def _is_null(aid):
    # h5py.Empty attributes have a null dataspace and no value to read
    return aid.get_space().get_simple_extent_type() == h5py.h5s.NULL


def _open_value(node, name):
    aid = _open(node, name)
    if _is_null(aid):
        raise BadValue("Attribute has no value (null dataspace)", _path(node), name)
    return aid


def _read(node, name):
    try:
        return node.attrs[name]
    except _ENGINE_ERRORS as err:
        raise ReadFailure(f"Failed to read attribute: {err}", _path(node), name) from err


def _count(aid):
    return int(np.prod(aid.shape)) if aid.shape else 1


def exists(node, name: str) -> bool:
    return name in node.attrs


def delete(node, name: str):
    try:
        del node.attrs[name]
    except KeyError as err:
        raise AttributeMissing("Attribute missing", _path(node), name) from err
    except _ENGINE_ERRORS as err:
        raise WriteFailure(f"Failed to delete attribute: {err}", _path(node), name) from err


def type_class(node, name: str) -> int:
    """Return the h5py.h5t class constant (STRING, INTEGER, FLOAT, ...) of an attribute."""
    return _open(node, name).get_type().get_class()


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------

def _create(node, name, data, dtype):
    if name in node.attrs:
        raise AlreadyExists("Attribute already exists", _path(node), name)
    try:
        node.attrs.create(name, data, dtype=dtype)
    except _ENGINE_ERRORS as err:
        raise WriteFailure(f"Failed to write attribute: {err}", _path(node), name) from err


def new_string(node, name: str, value: str):
    raw = str(value).encode("utf-8")
    _create(node, name, np.bytes_(raw), _string_type(len(raw)))


def new_bool(node, name: str, value: bool):
    new_string(node, name, VAL_TRUE if value else VAL_FALSE)


def new_long(node, name: str, value: int):
    _create(node, name, np.int64(value), np.dtype("<i8"))


def new_double(node, name: str, value: float):
    _create(node, name, np.float64(value), np.dtype("<f8"))


def new_longs(node, name: str, values):
    _create(node, name, np.asarray(values, dtype=np.int64).reshape(-1), np.dtype("<i8"))


def new_doubles(node, name: str, values):
    _create(node, name, np.asarray(values, dtype=np.float64).reshape(-1), np.dtype("<f8"))


def format_time(value):
    """Split an epoch time (or aware/UTC datetime) into ('YYYYMMDD', 'HHMMSS')."""
    if isinstance(value, dt.datetime):
        value = calendar.timegm(value.utctimetuple())
    tm = time.gmtime(int(value))
    return (
        "%04d%02d%02d" % (tm.tm_year, tm.tm_mon, tm.tm_mday),
        "%02d%02d%02d" % (tm.tm_hour, tm.tm_min, tm.tm_sec),
    )


def new_time(node, date_name: str, time_name: str, value):
    date_str, time_str = format_time(value)
    new_string(node, date_name, date_str)
    new_string(node, time_name, time_str)


# ---------------------------------------------------------------------------
# create or update
# ---------------------------------------------------------------------------

def _replace(node, name):
    if name in node.attrs:
        delete(node, name)


def _modify_scalar(node, name, value, h5class):
    aid = _open(node, name)
    if _is_null(aid) or aid.get_type().get_class() != h5class or _count(aid) != 1:
        return False
    try:
        node.attrs.modify(name, value)
    except _ENGINE_ERRORS as err:
        raise WriteFailure(f"Failed to write attribute: {err}", _path(node), name) from err
    return True


def set_string(node, name: str, value: str):
    _replace(node, name)
    new_string(node, name, value)


def set_bool(node, name: str, value: bool):
    set_string(node, name, VAL_TRUE if value else VAL_FALSE)


def set_long(node, name: str, value: int):
    if name in node.attrs:
        if _modify_scalar(node, name, int(value), h5py.h5t.INTEGER):
            return
        delete(node, name)
    new_long(node, name, value)


def set_double(node, name: str, value: float):
    if name in node.attrs:
        if _modify_scalar(node, name, float(value), h5py.h5t.FLOAT):
            return
        delete(node, name)
    new_double(node, name, value)


def set_longs(node, name: str, values):
    _replace(node, name)
    new_longs(node, name, values)


def set_doubles(node, name: str, values):
    _replace(node, name)
    new_doubles(node, name, values)


def set_time(node, date_name: str, time_name: str, value):
    date_str, time_str = format_time(value)
    set_string(node, date_name, date_str)
    set_string(node, time_name, time_str)


# ---------------------------------------------------------------------------
# read
# ---------------------------------------------------------------------------

def get_string(node, name: str, max_size: int = STRING_BUFFER_SIZE) -> str:
    aid = _open_value(node, name)
    tid = aid.get_type()
    if tid.get_class() != h5py.h5t.STRING:
        raise TypeMismatch("Attribute is not a string", _path(node), name)
    if not tid.is_variable_str() and tid.get_size() > max_size:
        raise SizeMismatch(
            f"String attribute of {tid.get_size()} bytes exceeds {max_size}", _path(node), name)
    if _count(aid) != 1:
        raise SizeMismatch("Expected a scalar string attribute", _path(node), name)
    return _dec(_read(node, name))


def get_bool(node, name: str) -> bool:
    val = get_string(node, name, max_size=6)
    if val == VAL_TRUE:
        return True
    if val == VAL_FALSE:
        return False
    raise BadValue(f"Invalid boolean value '{val}'", _path(node), name)


def _numeric_scalar(node, name, accepted):
    aid = _open_value(node, name)
    if aid.get_type().get_class() not in accepted:
        raise TypeMismatch("Attribute is not numeric", _path(node), name)
    if _count(aid) != 1:
        raise SizeMismatch(
            f"Expected a scalar attribute, found {_count(aid)} elements", _path(node), name)
    return np.asarray(_read(node, name)).reshape(-1)[0]


def get_long(node, name: str) -> int:
    val = _numeric_scalar(node, name, (h5py.h5t.INTEGER, h5py.h5t.FLOAT))
    if isinstance(val, np.floating):
        if not float(val).is_integer():
            raise TypeMismatch(f"Expected an integer, found {val}", _path(node), name)
    return int(val)


def get_double(node, name: str) -> float:
    return float(_numeric_scalar(node, name, (h5py.h5t.INTEGER, h5py.h5t.FLOAT)))


def _numeric_array(node, name, accepted, max_count):
    aid = _open_value(node, name)
    if aid.get_type().get_class() not in accepted:
        raise TypeMismatch("Attribute has the wrong numeric class", _path(node), name)
    count = _count(aid)
    if max_count is not None and count > max_count:
        raise SizeMismatch(
            f"Array attribute of {count} elements exceeds {max_count}", _path(node), name)
    return np.asarray(_read(node, name)).reshape(-1)


def get_longs(node, name: str, max_count=None) -> list:
    return [int(v) for v in _numeric_array(node, name, (h5py.h5t.INTEGER,), max_count)]


def get_doubles(node, name: str, max_count=None) -> list:
    vals = _numeric_array(node, name, (h5py.h5t.FLOAT, h5py.h5t.INTEGER), max_count)
    return [float(v) for v in vals]


def parse_time(date_str: str, time_str: str) -> int:
    """Inverse of format_time. Raises ValueError on malformed input."""
    dm = _DATE_RE.match(date_str.strip())
    tm = _TIME_RE.match(time_str.strip())
    if dm is None or tm is None:
        raise ValueError(f"Bad date/time '{date_str}' '{time_str}'")
    stamp = dt.datetime(*(int(v) for v in dm.groups() + tm.groups()))
    return calendar.timegm(stamp.timetuple())


def get_time(node, date_name: str, time_name: str) -> int:
    date_str = get_string(node, date_name, max_size=9)
    time_str = get_string(node, time_name, max_size=7)
    try:
        return parse_time(date_str, time_str)
    except ValueError as err:
        raise BadValue(str(err), _path(node), f"{date_name}/{time_name}") from err
