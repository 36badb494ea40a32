"""
profile.py
----------
A vertical profile dataset (dataset<N> with what/product = VP): 1-D layers
of ``levels`` elements.
"""
import logging

from . import attrs
from .constants import (
    ATN_END_DATE,
    ATN_END_TIME,
    ATN_INTERVAL,
    ATN_LEVELS,
    ATN_MAX_HEIGHT,
    ATN_MIN_HEIGHT,
    ATN_PRODUCT,
    ATN_START_DATE,
    ATN_START_TIME,
    DEFAULT_COMPRESSION,
    GRP_DATASET,
    PT_VERTICAL_PROFILE,
)
from .layers import LayerSet
from .node import Node
from .scan import check_product

logger = logging.getLogger(__name__)


def _optional_double(group, name):
    if group is None or not attrs.exists(group, name):
        return None
    return attrs.get_double(group, name)


class Profile:
    """Handle to one vertical profile and its data/quality layers."""

    def __init__(self, node: Node, index: int, levels: int, layers: LayerSet):
        self.node = node
        self.index = index
        self.levels = levels
        self._layers = layers

    def __repr__(self):
        return f"<Profile dataset{self.index} levels={self.levels} layers={len(self._layers)}>"

    @classmethod
    def create(cls, parent: Node, index: int, levels: int, start_time, end_time,
               interval=None, min_height=None, max_height=None):
        node = Node.create_child(parent, GRP_DATASET, index)
        what = node.ensure_what()
        attrs.new_string(what, ATN_PRODUCT, PT_VERTICAL_PROFILE)
        attrs.new_time(what, ATN_START_DATE, ATN_START_TIME, start_time)
        attrs.new_time(what, ATN_END_DATE, ATN_END_TIME, end_time)

        where = node.ensure_where()
        attrs.new_long(where, ATN_LEVELS, levels)
        if interval is not None:
            attrs.new_double(where, ATN_INTERVAL, interval)
        if min_height is not None:
            attrs.new_double(where, ATN_MIN_HEIGHT, min_height)
        if max_height is not None:
            attrs.new_double(where, ATN_MAX_HEIGHT, max_height)

        logger.debug("created profile %s (%d levels)", node.path, levels)
        return cls(node, index, int(levels), LayerSet(node, (int(levels),)))

    @classmethod
    def open(cls, parent: Node, index: int, levels=None):
        """Open dataset<index>; ``levels`` overrides where/levels when given."""
        node = Node.open_child(parent, GRP_DATASET, index)
        check_product(node, PT_VERTICAL_PROFILE)
        if levels is None:
            levels = attrs.get_long(node.require_where(), ATN_LEVELS)
        return cls(node, index, int(levels), LayerSet.discover(node, (int(levels),)))

    @property
    def start_time(self) -> int:
        return attrs.get_time(self.node.require_what(), ATN_START_DATE, ATN_START_TIME)

    @property
    def end_time(self) -> int:
        return attrs.get_time(self.node.require_what(), ATN_END_DATE, ATN_END_TIME)

    @property
    def interval(self):
        return _optional_double(self.node.where, ATN_INTERVAL)

    @property
    def min_height(self):
        return _optional_double(self.node.where, ATN_MIN_HEIGHT)

    @property
    def max_height(self):
        return _optional_double(self.node.where, ATN_MAX_HEIGHT)

    def layer_count(self) -> int:
        return len(self._layers)

    def layer_quantity(self, i: int) -> str:
        return self._layers.quantity(i)

    def layer(self, key):
        return self._layers.get(key)

    def add_layer(self, quantity: str, is_quality: bool = False, floating_point: bool = True,
                  data=None, no_data=None, undetect=None, compression: int = DEFAULT_COMPRESSION):
        return self._layers.add(quantity, is_quality, floating_point, data, no_data, undetect, compression)

    def get_how(self, name, default=None):
        return self.node.get_how(name, default)

    def set_how(self, name, value):
        self.node.set_how(name, value)
