"""
odimh5
------
Read and write weather radar polar volumes, scans, vertical profiles and
their data/quality layers in the ODIM_H5 convention, on top of h5py.

    with Volume.create("vol.h5", t, lat, lon, height) as vol:
        scan = vol.add_scan(0.5, 360, 500, 0, 0.0, 250.0, t0, t1)
        scan.add_layer("DBZH", data=dbz, no_data=-9999.0, undetect=-32.0)

    with Volume.open("vol.h5") as vol:
        dbz, no_data, undetect = vol.scan(0).layer("DBZH").read()
"""
from .errors import (
    AlreadyExists,
    AttributeMissing,
    BadValue,
    DimensionMismatch,
    OdimError,
    OpenFailure,
    ProductMismatch,
    ReadFailure,
    SizeMismatch,
    TypeMismatch,
    WriteFailure,
)
from .files import open_product, peek_object
from .layer import Layer
from .layers import LayerInfo
from .node import Node
from .profile import Profile
from .scan import Scan
from .vertical_profile import VerticalProfile
from .volume import Volume

__version__ = "0.1.0"

__all__ = [
    "AlreadyExists",
    "AttributeMissing",
    "BadValue",
    "DimensionMismatch",
    "Layer",
    "LayerInfo",
    "Node",
    "OdimError",
    "OpenFailure",
    "ProductMismatch",
    "Profile",
    "ReadFailure",
    "Scan",
    "SizeMismatch",
    "TypeMismatch",
    "VerticalProfile",
    "Volume",
    "WriteFailure",
    "open_product",
    "peek_object",
]
