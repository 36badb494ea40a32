"""
layer.py
--------
A single data<M> or quality<M> layer: one compressed 1-D or 2-D array plus
its calibration (what/gain, what/offset) and sentinels (what/nodata,
what/undetect).

Callers always work in physical units: read() applies
    physical = stored * gain + offset
and write() applies the inverse before persisting. Both are skipped when
gain/offset are within CALIBRATION_TOLERANCE of identity.

Storage class detection on open is best effort. ODIM gives no reliable
marker, so a layer with non-identity gain/offset is taken as floating
point; otherwise the stored HDF5 type decides. An integer layer that uses
gain/offset is therefore reported as floating point.
"""
import logging

import h5py
import numpy as np

from . import attrs
from .constants import (
    ATN_CLASS,
    ATN_GAIN,
    ATN_IMAGE_VERSION,
    ATN_NO_DATA,
    ATN_OFFSET,
    ATN_QUANTITY,
    ATN_UNDETECT,
    CALIBRATION_TOLERANCE,
    DAT_DATA,
    DEFAULT_COMPRESSION,
    GRP_DATA,
    GRP_QUALITY,
    VAL_CLASS,
    VAL_IMAGE_VERSION,
)
from .errors import DimensionMismatch, OpenFailure, ReadFailure, WriteFailure
from .node import Node

logger = logging.getLogger(__name__)

_ENGINE_ERRORS = (OSError, ValueError, TypeError, RuntimeError)


def is_identity(gain: float, offset: float) -> bool:
    return abs(gain - 1.0) <= CALIBRATION_TOLERANCE and abs(offset) <= CALIBRATION_TOLERANCE


def round_half_away(x):
    """Round to nearest, ties away from zero (C lround semantics)."""
    x = np.asarray(x, dtype=np.float64)
    return np.copysign(np.floor(np.abs(x) + 0.5), x)


def _size(dims) -> int:
    size = 1
    for d in dims:
        size *= int(d)
    return size


class Layer:
    """Handle to one data or quality layer of a scan or profile."""

    def __init__(self, node: Node, is_quality: bool, index: int, quantity: str, dims,
                 floating_point: bool, gain: float = 1.0, offset: float = 0.0):
        self.node = node
        self.is_quality = is_quality
        self.index = index
        self.quantity = quantity
        self.dims = tuple(int(d) for d in dims)
        self.size = _size(self.dims)
        self.floating_point = floating_point
        self.gain = gain
        self.offset = offset

    def __repr__(self):
        kind = "quality" if self.is_quality else "data"
        return f"<Layer {kind}{self.index} {self.quantity} dims={self.dims}>"

    @classmethod
    def create(cls, parent: Node, is_quality: bool, index: int, quantity: str, dims,
               floating_point: bool = True, data=None, no_data=None, undetect=None,
               compression: int = DEFAULT_COMPRESSION):
        """Create the layer group, its what attributes and the (empty) array.

        If ``data`` is given it is written straight away. Sentinels are
        always written, defaulting to 0.
        """
        dims = tuple(int(d) for d in dims)
        node = Node.create_child(parent, GRP_QUALITY if is_quality else GRP_DATA, index)
        what = node.ensure_what()
        attrs.new_string(what, ATN_QUANTITY, quantity)
        attrs.new_double(what, ATN_GAIN, 1.0)
        attrs.new_double(what, ATN_OFFSET, 0.0)

        try:
            dset = node.hnd.create_dataset(
                DAT_DATA,
                shape=dims,
                dtype=np.float32 if floating_point else np.int32,
                chunks=dims,
                compression="gzip",
                compression_opts=compression,
            )
        except _ENGINE_ERRORS as err:
            raise WriteFailure(f"Failed to create layer array: {err}", node.path, DAT_DATA) from err

        # Only 2-D layers are tagged as images
        if len(dims) == 2:
            attrs.new_string(dset, ATN_CLASS, VAL_CLASS)
            attrs.new_string(dset, ATN_IMAGE_VERSION, VAL_IMAGE_VERSION)

        layer = cls(node, is_quality, index, quantity, dims, floating_point)
        no_data = 0 if no_data is None else no_data
        undetect = 0 if undetect is None else undetect
        if data is not None:
            layer.write(data, no_data, undetect)
        else:
            attrs.new_double(what, ATN_NO_DATA, float(no_data))
            attrs.new_double(what, ATN_UNDETECT, float(undetect))
        logger.debug("created %s %s", node.path, quantity)
        return layer

    @classmethod
    def open(cls, parent: Node, is_quality: bool, index: int, quantity: str, dims):
        node = Node.open_child(parent, GRP_QUALITY if is_quality else GRP_DATA, index)
        what = node.require_what()
        if not attrs.exists(what, ATN_GAIN) and not attrs.exists(what, ATN_OFFSET):
            # Both absent means uncalibrated; one alone raises AttributeMissing
            logger.debug("%s: no gain/offset, using identity", node.path)
            gain, offset = 1.0, 0.0
        else:
            gain = attrs.get_double(what, ATN_GAIN)
            offset = attrs.get_double(what, ATN_OFFSET)
        dset = cls._find_dataset(node)

        if not is_identity(gain, offset):
            floating_point = True
        else:
            # Can't tell by the gain/offset, rely on the stored type
            floating_point = dset.id.get_type().get_class() != h5py.h5t.INTEGER
        return cls(node, is_quality, index, quantity, dims, floating_point, gain, offset)

    # -- calibration ---------------------------------------------------------

    @property
    def calibrated(self) -> bool:
        return not is_identity(self.gain, self.offset)

    def set_gain(self, gain: float):
        attrs.set_double(self.node.ensure_what(), ATN_GAIN, gain)
        self.gain = float(gain)

    def set_offset(self, offset: float):
        attrs.set_double(self.node.ensure_what(), ATN_OFFSET, offset)
        self.offset = float(offset)

    # -- how -----------------------------------------------------------------

    def get_how(self, name, default=None):
        return self.node.get_how(name, default)

    def set_how(self, name, value):
        self.node.set_how(name, value)

    # -- array i/o -----------------------------------------------------------

    @staticmethod
    def _find_dataset(node):
        if not node.child_exists(DAT_DATA):
            raise OpenFailure("Layer array missing", node.path, DAT_DATA)
        dset = node.hnd[DAT_DATA]
        if not isinstance(dset, h5py.Dataset):
            raise OpenFailure("Expected a dataset", node.path, DAT_DATA)
        return dset

    def _checked_dataset(self):
        # Verify the stored extent against the owning entity's dimensions
        dset = self._find_dataset(self.node)
        if dset.size != self.size:
            raise DimensionMismatch(
                f"Dataset has {dset.size} elements, expected {self.size} {self.dims}",
                self.node.path, DAT_DATA)
        return dset

    def _read_dtype(self, dtype):
        if dtype is None:
            return np.dtype(np.float32 if self.floating_point else np.int32)
        dtype = np.dtype(dtype)
        if dtype.kind not in "iuf":
            raise TypeError(f"Unsupported layer read type {dtype}")
        return dtype

    def read_sentinels(self, dtype=None):
        """Return (no_data, undetect) in physical units."""
        dtype = self._read_dtype(dtype)
        what = self.node.require_what()
        no_data = attrs.get_double(what, ATN_NO_DATA)
        undetect = attrs.get_double(what, ATN_UNDETECT)
        return self._to_physical(np.array([no_data, undetect]), dtype, sentinels=True).tolist()

    def read(self, dtype=None):
        """Return (values, no_data, undetect) in physical units.

        ``values`` has shape ``dims`` and the requested dtype (float32 for
        floating point layers, int32 otherwise). Integer results are
        rounded half away from zero after calibration.
        """
        dtype = self._read_dtype(dtype)
        dset = self._checked_dataset()
        no_data, undetect = self.read_sentinels(dtype)
        try:
            raw = dset.astype(dtype)[()]
        except _ENGINE_ERRORS as err:
            raise ReadFailure(f"Failed to read layer data: {err}", self.node.path, DAT_DATA) from err
        values = self._to_physical(np.asarray(raw), dtype)
        return values.reshape(self.dims), no_data, undetect

    def _to_physical(self, raw, dtype, sentinels=False):
        if dtype.kind in "iu":
            if sentinels:
                raw = round_half_away(raw)
            if not self.calibrated:
                return raw.astype(dtype)
            return round_half_away(raw * self.gain + self.offset).astype(dtype)
        if not self.calibrated:
            return raw.astype(dtype)
        gain = dtype.type(self.gain)
        offset = dtype.type(self.offset)
        return (raw.astype(dtype) * gain + offset).astype(dtype)

    def _to_storage(self, values):
        """Convert physical values to the storage domain, keeping the input's precision."""
        kind = values.dtype.kind
        if kind in "iub":
            gain_mult = np.float32(1.0 / self.gain)
            return round_half_away((values - self.offset) * gain_mult).astype(np.int64)
        ftype = np.float32 if values.dtype == np.float32 else np.float64
        gain_mult = ftype(1.0 / self.gain)
        return (values.astype(ftype) - ftype(self.offset)) * gain_mult

    def write(self, values, no_data, undetect):
        """Persist ``values`` (physical units) and the two sentinels."""
        values = np.asarray(values)
        dset = self._checked_dataset()
        if values.size != self.size:
            raise DimensionMismatch(
                f"Input has {values.size} elements, expected {self.size} {self.dims}",
                self.node.path, DAT_DATA)
        if values.dtype.kind not in "iubf":
            raise TypeError(f"Unsupported layer write type {values.dtype}")

        # Sentinels are stored as doubles; only a calibrated write converts
        # them, in the precision of the input values
        sentinels = np.array([no_data, undetect], dtype=np.float64)
        if self.calibrated:
            logger.debug("%s: converting with gain=%g offset=%g", self.node.path, self.gain, self.offset)
            if values.dtype.kind in "iub":
                sentinels = round_half_away(sentinels)
                sentinels = round_half_away((sentinels - self.offset) * np.float32(1.0 / self.gain))
            else:
                sentinels = self._to_storage(sentinels.astype(values.dtype))
            values = self._to_storage(values)
        if dset.dtype.kind in "iu" and values.dtype.kind == "f":
            values = round_half_away(values)

        what = self.node.ensure_what()
        attrs.set_double(what, ATN_NO_DATA, float(sentinels[0]))
        attrs.set_double(what, ATN_UNDETECT, float(sentinels[1]))
        try:
            dset[...] = values.reshape(dset.shape)
        except _ENGINE_ERRORS as err:
            raise WriteFailure(f"Failed to write layer data: {err}", self.node.path, DAT_DATA) from err
