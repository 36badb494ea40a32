"""
scan.py
-------
A polar scan (dataset<N> with what/product = SCAN): one elevation sweep of
nrays x nbins layers.

Ranges are given and returned in metres; where/rstart is stored in km as
the convention requires, where/rscale in metres.
"""
import logging

from . import attrs
from .constants import (
    ATN_AZIMUTH_COUNT,
    ATN_ELEVATION,
    ATN_END_DATE,
    ATN_END_TIME,
    ATN_FIRST_AZIMUTH,
    ATN_PRODUCT,
    ATN_RANGE_COUNT,
    ATN_RANGE_SCALE,
    ATN_RANGE_START,
    ATN_START_DATE,
    ATN_START_TIME,
    DEFAULT_COMPRESSION,
    GRP_DATASET,
    PT_SCAN,
)
from .errors import ProductMismatch
from .layers import LayerSet
from .node import Node

logger = logging.getLogger(__name__)


def check_product(node: Node, product: str):
    found = attrs.get_string(node.require_what(), ATN_PRODUCT)
    if found != product:
        raise ProductMismatch(
            f"Product type mismatch: expected {product}, found {found}",
            node.path, ATN_PRODUCT)


class Scan:
    """Handle to one polar scan and its data/quality layers."""

    def __init__(self, node: Node, index: int, azimuth_count: int, range_bin_count: int, layers: LayerSet):
        self.node = node
        self.index = index
        self.azimuth_count = azimuth_count
        self.range_bin_count = range_bin_count
        self._layers = layers

    def __repr__(self):
        return (f"<Scan dataset{self.index} {self.azimuth_count}x{self.range_bin_count} "
                f"layers={len(self._layers)}>")

    @classmethod
    def create(cls, parent: Node, index: int, elevation: float, azimuth_count: int,
               range_bin_count: int, first_azimuth: int, range_start: float,
               range_scale: float, start_time, end_time):
        node = Node.create_child(parent, GRP_DATASET, index)
        what = node.ensure_what()
        attrs.new_string(what, ATN_PRODUCT, PT_SCAN)
        attrs.new_time(what, ATN_START_DATE, ATN_START_TIME, start_time)
        attrs.new_time(what, ATN_END_DATE, ATN_END_TIME, end_time)

        where = node.ensure_where()
        attrs.new_double(where, ATN_ELEVATION, elevation)
        attrs.new_long(where, ATN_RANGE_COUNT, range_bin_count)
        attrs.new_double(where, ATN_RANGE_START, range_start / 1000.0)
        attrs.new_double(where, ATN_RANGE_SCALE, range_scale)
        attrs.new_long(where, ATN_AZIMUTH_COUNT, azimuth_count)
        attrs.new_long(where, ATN_FIRST_AZIMUTH, first_azimuth)

        logger.debug("created scan %s (%.2f deg)", node.path, elevation)
        dims = (int(azimuth_count), int(range_bin_count))
        return cls(node, index, dims[0], dims[1], LayerSet(node, dims))

    @classmethod
    def open(cls, parent: Node, index: int):
        node = Node.open_child(parent, GRP_DATASET, index)
        check_product(node, PT_SCAN)
        where = node.require_where()
        dims = (attrs.get_long(where, ATN_AZIMUTH_COUNT), attrs.get_long(where, ATN_RANGE_COUNT))
        return cls(node, index, dims[0], dims[1], LayerSet.discover(node, dims))

    # -- geometry ------------------------------------------------------------

    @property
    def elevation(self) -> float:
        return attrs.get_double(self.node.require_where(), ATN_ELEVATION)

    @property
    def first_azimuth(self) -> int:
        return attrs.get_long(self.node.require_where(), ATN_FIRST_AZIMUTH)

    @property
    def range_start(self) -> float:
        return attrs.get_double(self.node.require_where(), ATN_RANGE_START) * 1000.0

    @property
    def range_scale(self) -> float:
        return attrs.get_double(self.node.require_where(), ATN_RANGE_SCALE)

    @property
    def start_time(self) -> int:
        return attrs.get_time(self.node.require_what(), ATN_START_DATE, ATN_START_TIME)

    @property
    def end_time(self) -> int:
        return attrs.get_time(self.node.require_what(), ATN_END_DATE, ATN_END_TIME)

    # -- layers --------------------------------------------------------------

    def layer_count(self) -> int:
        return len(self._layers)

    def layer_quantity(self, i: int) -> str:
        return self._layers.quantity(i)

    def layer(self, key):
        """Layer by position or quantity; None if no layer has the quantity."""
        return self._layers.get(key)

    def add_layer(self, quantity: str, is_quality: bool = False, floating_point: bool = True,
                  data=None, no_data=None, undetect=None, compression: int = DEFAULT_COMPRESSION):
        return self._layers.add(quantity, is_quality, floating_point, data, no_data, undetect, compression)

    # -- how -----------------------------------------------------------------

    def get_how(self, name, default=None):
        return self.node.get_how(name, default)

    def set_how(self, name, value):
        self.node.set_how(name, value)
