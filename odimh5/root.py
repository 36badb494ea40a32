"""
root.py
-------
File-level helpers shared by the root objects (polar volume, vertical
profile): the /Conventions + /what header, the /where site location, the
object tag check and dataset counting.
"""
from . import attrs
from .constants import (
    ATN_CONVENTIONS,
    ATN_DATE,
    ATN_HEIGHT,
    ATN_LATITUDE,
    ATN_LONGITUDE,
    ATN_OBJECT,
    ATN_SOURCE,
    ATN_TIME,
    ATN_VERSION,
    GRP_DATASET,
    VAL_CONVENTIONS,
    VAL_VERSION,
)
from .errors import ProductMismatch
from .node import Node, child_name


def new_header(node: Node, object_type: str, valid_time, source=None):
    attrs.new_string(node.hnd, ATN_CONVENTIONS, VAL_CONVENTIONS)
    what = node.ensure_what()
    attrs.new_string(what, ATN_OBJECT, object_type)
    attrs.new_string(what, ATN_VERSION, VAL_VERSION)
    attrs.new_time(what, ATN_DATE, ATN_TIME, valid_time)
    if source is not None:
        attrs.new_string(what, ATN_SOURCE, source)


def new_location(node: Node, latitude: float, longitude: float, height: float):
    where = node.ensure_where()
    attrs.new_double(where, ATN_LATITUDE, latitude)
    attrs.new_double(where, ATN_LONGITUDE, longitude)
    attrs.new_double(where, ATN_HEIGHT, height)


def check_object(node: Node, object_type: str):
    found = attrs.get_string(node.require_what(), ATN_OBJECT)
    if found != object_type:
        raise ProductMismatch(
            f"Object type mismatch: expected {object_type}, found {found}",
            node.path, ATN_OBJECT)


def count_datasets(node: Node) -> int:
    """Highest dataset<N> present, probing down from the root child count."""
    for n in range(node.child_count(), 0, -1):
        if node.child_exists(child_name(GRP_DATASET, n)):
            return n
    return 0


class RootObject:
    """Common surface of an ODIM file: lifetime, header and location."""

    object_type = None

    def __init__(self, node: Node, dataset_count: int):
        self.node = node
        self.path = node.hnd.filename
        self._dataset_count = dataset_count

    @classmethod
    def _create(cls, path, valid_time, latitude, longitude, height, source=None):
        node = Node.create_file(path)
        try:
            new_header(node, cls.object_type, valid_time, source)
            new_location(node, latitude, longitude, height)
        except Exception:
            node.close()
            raise
        return cls(node, 0)

    @classmethod
    def _open(cls, path, read_only=True):
        node = Node.open_file(path, read_only)
        try:
            check_object(node, cls.object_type)
            count = count_datasets(node)
        except Exception:
            node.close()
            raise
        return cls(node, count)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.node.close()

    @property
    def read_only(self) -> bool:
        return self.node.read_only

    @property
    def valid_time(self) -> int:
        return attrs.get_time(self.node.require_what(), ATN_DATE, ATN_TIME)

    @property
    def source(self):
        what = self.node.require_what()
        return attrs.get_string(what, ATN_SOURCE) if attrs.exists(what, ATN_SOURCE) else None

    @property
    def latitude(self) -> float:
        return attrs.get_double(self.node.require_where(), ATN_LATITUDE)

    @property
    def longitude(self) -> float:
        return attrs.get_double(self.node.require_where(), ATN_LONGITUDE)

    @property
    def height(self) -> float:
        return attrs.get_double(self.node.require_where(), ATN_HEIGHT)

    def get_how(self, name, default=None):
        return self.node.get_how(name, default)

    def set_how(self, name, value):
        self.node.set_how(name, value)
