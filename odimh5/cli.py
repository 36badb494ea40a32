"""
cli.py
------
Print a summary of an ODIM_H5 polar volume (PVOL) or vertical profile
(VP) file.

What it does:
- Opens the file read-only as the object its root /what:object names.
- Root: object, date/time, source, lat/lon/height.
- Each /datasetX: product geometry (elangle, nrays, nbins, a1gate,
  rstart, rscale for scans; levels for profiles) and start/end times.
- Each dataX / qualityX: quantity (and its description when it is a
  standard ODIM quantity), storage kind, gain/offset and the
  nodata/undetect sentinels in physical units; with --stats also the
  min/max of the calibrated field, ignoring sentinel values.

Usage
-----
odimh5-info -i /path/to/input.h5 [--stats]

Exits 1 if the input is missing or cannot be decoded.
"""
import argparse
import os
import sys
import time

import numpy as np

from .constants import OT_VOLUME_POLAR, QUANTITIES
from .errors import OdimError
from .files import open_product
from .scan import Scan


def _ts(epoch: int) -> str:
    return time.strftime("%Y-%m-%d %H:%M:%S", time.gmtime(epoch))


def _field_stats(layer):
    values, no_data, undetect = layer.read(np.float64)
    valid = values[(values != no_data) & (values != undetect)]
    if valid.size == 0:
        return "no valid values"
    return f"min={valid.min():.3f} max={valid.max():.3f} valid={valid.size}/{values.size}"


def _describe_layers(ds, stats: bool, out):
    for i in range(ds.layer_count()):
        layer = ds.layer(i)
        kind = "quality" if layer.is_quality else "data"
        storage = "float" if layer.floating_point else "int"
        no_data, undetect = layer.read_sentinels(np.float64)
        line = (f"    {kind}{layer.index}: {layer.quantity:<6} {storage:<5} "
                f"gain={layer.gain:g} offset={layer.offset:g} "
                f"nodata={no_data:g} undetect={undetect:g}")
        if stats:
            line += "  " + _field_stats(layer)
        print(line, file=out)
        if layer.quantity in QUANTITIES:
            print(f"      {QUANTITIES[layer.quantity]}", file=out)


def _describe_dataset(ds, stats: bool, out):
    if isinstance(ds, Scan):
        print(f"  dataset{ds.index}: SCAN elangle={ds.elevation:g} nrays={ds.azimuth_count} "
              f"nbins={ds.range_bin_count} a1gate={ds.first_azimuth} "
              f"rstart={ds.range_start:g}m rscale={ds.range_scale:g}m", file=out)
    else:
        print(f"  dataset{ds.index}: VP levels={ds.levels}", file=out)
    print(f"    {_ts(ds.start_time)} -> {_ts(ds.end_time)}", file=out)
    _describe_layers(ds, stats, out)


def describe(path: str, stats: bool = False, out=None):
    out = out or sys.stdout
    with open_product(path) as product:
        print(f"{path}: {product.object_type}", file=out)
        print(f"  time={_ts(product.valid_time)} source={product.source or '-'}", file=out)
        print(f"  lat={product.latitude:.4f} lon={product.longitude:.4f} "
              f"height={product.height:g}", file=out)
        for name in product.node.how_attributes():
            print(f"  how/{name}={product.get_how(name)}", file=out)
        datasets = product.scans() if product.object_type == OT_VOLUME_POLAR else product.profiles()
        for ds in datasets:
            _describe_dataset(ds, stats, out)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Summarise an ODIM_H5 polar volume or vertical profile file.")
    ap.add_argument("-i", "--input", required=True, help="Input ODIM .h5 file")
    ap.add_argument("--stats", action="store_true", help="Also print min/max of each layer (reads every array)")
    args = ap.parse_args(argv)

    in_path = args.input
    if not os.path.exists(in_path):
        print("Input file does not exist:", in_path, file=sys.stderr)
        sys.exit(1)
    try:
        describe(in_path, stats=args.stats)
    except OdimError as err:
        print(f"Failed to read {in_path}: {err}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
