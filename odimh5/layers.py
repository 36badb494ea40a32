"""
layers.py
---------
Bookkeeping of the data<M>/quality<M> layers under one dataset group.

Data and quality layers are numbered independently from 1 and must be
contiguous: discovery stops each series at the first missing index, so a
layer after a gap is not seen.
"""
import itertools
import logging
from typing import List, NamedTuple

from . import attrs
from .constants import ATN_QUANTITY, DEFAULT_COMPRESSION, GRP_DATA, GRP_QUALITY
from .layer import Layer
from .node import Node, child_name

logger = logging.getLogger(__name__)


class LayerInfo(NamedTuple):
    is_quality: bool
    index: int
    quantity: str


def probe_layers(node: Node) -> List[LayerInfo]:
    """Read the quantity of every data<M> then quality<M> layer; no arrays are read."""
    infos = []
    for is_quality, prefix in ((False, GRP_DATA), (True, GRP_QUALITY)):
        for index in itertools.count(1):
            if not node.child_exists(child_name(prefix, index)):
                break
            child = Node.open_child(node, prefix, index)
            quantity = attrs.get_string(child.require_what(), ATN_QUANTITY)
            infos.append(LayerInfo(is_quality, index, quantity))
    logger.debug("%s: found %d layers", node.path, len(infos))
    return infos


def next_index(infos: List[LayerInfo], is_quality: bool) -> int:
    return max((i.index for i in infos if i.is_quality == is_quality), default=0) + 1


class LayerSet:
    """Ordered layer records of a scan or profile, plus layer construction."""

    def __init__(self, node: Node, dims, infos=None):
        self.node = node
        self.dims = tuple(dims)
        self.infos = list(infos or [])

    @classmethod
    def discover(cls, node: Node, dims):
        return cls(node, dims, probe_layers(node))

    def __len__(self):
        return len(self.infos)

    def quantity(self, i: int) -> str:
        return self.infos[i].quantity

    def _open(self, info):
        return Layer.open(self.node, info.is_quality, info.index, info.quantity, self.dims)

    def get(self, key):
        """Layer by position, or by quantity (None when no layer has it)."""
        if isinstance(key, str):
            for info in self.infos:
                if info.quantity == key:
                    return self._open(info)
            return None
        return self._open(self.infos[key])

    def add(self, quantity: str, is_quality: bool = False, floating_point: bool = True,
            data=None, no_data=None, undetect=None, compression: int = DEFAULT_COMPRESSION):
        info = LayerInfo(is_quality, next_index(self.infos, is_quality), quantity)
        layer = Layer.create(
            self.node, info.is_quality, info.index, info.quantity, self.dims,
            floating_point=floating_point, data=data, no_data=no_data,
            undetect=undetect, compression=compression)

        # Record only once the layer exists so a failure leaves the count alone
        self.infos.append(info)
        return layer
