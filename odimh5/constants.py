"""
constants.py
------------
Read-only name and value tables for the ODIM_H5 convention, plus the
library defaults that callers may override per call.

Codes are plain strings. Quantities in particular are not restricted to
QUANTITIES: real files carry many more and they must round-trip unchanged.
"""

# Library defaults
DEFAULT_COMPRESSION = 6        # gzip level for layer arrays (0 - 9)
STRING_BUFFER_SIZE = 2048      # largest string attribute read by default
CALIBRATION_TOLERANCE = 1e-6   # |gain - 1| and |offset| below this mean identity

# Group names
GRP_WHAT = "what"
GRP_WHERE = "where"
GRP_HOW = "how"
GRP_DATASET = "dataset"
GRP_DATA = "data"
GRP_QUALITY = "quality"

# Dataset names
DAT_DATA = "data"

# Attribute names
ATN_CONVENTIONS = "Conventions"
ATN_OBJECT = "object"
ATN_VERSION = "version"
ATN_DATE = "date"
ATN_TIME = "time"
ATN_SOURCE = "source"
ATN_LATITUDE = "lat"
ATN_LONGITUDE = "lon"
ATN_HEIGHT = "height"
ATN_PRODUCT = "product"
ATN_START_DATE = "startdate"
ATN_START_TIME = "starttime"
ATN_END_DATE = "enddate"
ATN_END_TIME = "endtime"
ATN_ELEVATION = "elangle"
ATN_FIRST_AZIMUTH = "a1gate"
ATN_RANGE_COUNT = "nbins"
ATN_RANGE_START = "rstart"
ATN_RANGE_SCALE = "rscale"
ATN_AZIMUTH_COUNT = "nrays"
ATN_QUANTITY = "quantity"
ATN_GAIN = "gain"
ATN_OFFSET = "offset"
ATN_NO_DATA = "nodata"
ATN_UNDETECT = "undetect"
ATN_CLASS = "CLASS"
ATN_IMAGE_VERSION = "IMAGE_VERSION"
ATN_LEVELS = "levels"
ATN_INTERVAL = "interval"
ATN_MIN_HEIGHT = "minheight"
ATN_MAX_HEIGHT = "maxheight"

# Attribute values
VAL_TRUE = "True"
VAL_FALSE = "False"
VAL_CONVENTIONS = "ODIM_H5/V2_0"
VAL_VERSION = "H5rad 2.0"
VAL_CLASS = "IMAGE"
VAL_IMAGE_VERSION = "1.2"

# Object types (root what/object)
OT_VOLUME_POLAR = "PVOL"
OT_VOLUME_CARTESIAN = "CVOL"
OT_SCAN = "SCAN"
OT_RAY = "RAY"
OT_AZIMUTH = "AZIM"
OT_IMAGE = "IMAGE"
OT_COMPOSITE_IMAGE = "COMP"
OT_CROSS_SECTION = "XSEC"
OT_VERTICAL_PROFILE = "VP"
OT_PICTURE = "PIC"

OBJECT_TYPES = (
    OT_VOLUME_POLAR, OT_VOLUME_CARTESIAN, OT_SCAN, OT_RAY, OT_AZIMUTH,
    OT_IMAGE, OT_COMPOSITE_IMAGE, OT_CROSS_SECTION, OT_VERTICAL_PROFILE,
    OT_PICTURE,
)

# Product types (dataset what/product)
PT_SCAN = "SCAN"
PT_PPI = "PPI"
PT_CAPPI = "CAPPI"
PT_PSEUDO_CAPPI = "PCAPPI"
PT_ECHO_TOP = "ETOP"
PT_MAXIMUM = "MAX"
PT_ACCUMULATION = "RR"
PT_VIL = "VIL"
PT_COMPOSITE = "COMP"
PT_VERTICAL_PROFILE = "VP"
PT_RANGE_HEIGHT = "RHI"
PT_VERTICAL_SLICE = "XSEC"
PT_VERTICAL_SIDE_PANEL = "VSP"
PT_HORIZONTAL_SIDE_PANEL = "HSP"
PT_RAY = "RAY"
PT_AZIMUTH = "AZIM"
PT_QUALITY = "QUAL"

# Quantities (layer what/quantity)
QUANTITIES = {
    "TH": "Horizontally-polarized total (uncorrected) reflectivity factor (dBZ)",
    "TV": "Vertically-polarized total (uncorrected) reflectivity factor (dBZ)",
    "DBZH": "Horizontally-polarized (corrected) reflectivity factor (dBZ)",
    "DBZV": "Vertically-polarized (corrected) reflectivity factor (dBZ)",
    "ZDR": "Differential reflectivity (dBZ)",
    "RHOHV": "Correlation between Zh and Zv [0-1]",
    "LDR": "Linear depolarization info (dB)",
    "PHIDP": "Differential phase (degrees)",
    "KDP": "Specific differential phase (degrees/km)",
    "SQI": "Signal quality index [0-1]",
    "SNR": "Normalized signal-to-noise ratio [0-1]",
    "RATE": "Rain rate (mm/h)",
    "ACRR": "Accumulated precipitation (mm)",
    "HGHT": "Height of echotops (km)",
    "VIL": "Vertical Integrated Liquid water (kg/m2)",
    "VRAD": "Radial velocity (m/s)",
    "WRAD": "Spectral width of radial velocity (m/s)",
    "UWND": "Component of wind in x-direction (m/s)",
    "VWND": "Component of wind in y-direction (m/s)",
    "BRDR": "1 denotes border between radars in composite, 0 otherwise",
    "QIND": "Spatially analyzed quality indicator, according to OPERA II [0-1]",
    "CLASS": "Classified according to legend",
}

# Optional 'how' attributes, by stored kind
HOW_BOOL = {
    "simulated": "True if data is simulated",
    "dealiased": "True if data has been dealiased",
    "malfunc": "Radar malfunction indicator",
    "VPRCorr": "True if VPR correction has been applied",
    "BBC": "True if bright-band correction has been applied",
}

HOW_LONG = {
    "startepochs": "Product start time (UNIX epoch)",
    "endepochs": "Product end time (UNIX epoch)",
    "ACCnum": "Number of images used in precipitation accumulation",
    "nodes_count": "Number of radar nodes contributing to a composite",
    "levels": "Number of levels in discrete data legend",
}

HOW_DOUBLE = {
    "zr_a": "Z-R constant A in Z = AR^b",
    "zr_b": "Z-R exponent b in Z = AR^b",
    "kr_a": "K-R constant A in R = AK^b",
    "kr_b": "K-R exponent b in R = AK^b",
    "beamwidth": "Radar half power beam width (degrees)",
    "wavelength": "Wavelength (cm)",
    "rpm": "Antenna revolutions per minute",
    "pulsewidth": "Pulse width (us)",
    "lowprf": "Low pulse repetition frequency (Hz)",
    "highprf": "High pulse repetition frequency (Hz)",
    "minrange": "Minimum range of data used when generating a profile (km)",
    "maxrange": "Maximum range of data used when generating a profile (km)",
    "NI": "Unambiguous velocity (Nyquist) interval (+-m/s)",
    "elaccuracy": "Antenna pointing accuracy in elevation (degrees)",
    "azaccuracy": "Antenna pointing accuracy in azimuth (degrees)",
    "radhoriz": "Radar horizon, maximum range (km)",
    "MDS": "Minimum detectable signal at 10km (dBm)",
    "OUR": "Overall uptime reliability (%)",
    "SQI": "Signal Quality Index threshold value",
    "CSR": "Clutter-to-signal ratio threshold value",
    "LOG": "Security distance above mean noise level threshold value (dB)",
    "freeze": "Freezing level above sea level (km)",
    "min": "Minimum value for continuous quality data",
    "max": "Maximum value for continuous quality data",
    "step": "Step value for continuous quality data",
    "peakpwr": "Peak power (kW)",
    "avgpwr": "Average power (W)",
    "dynrange": "Dynamic range (dB)",
    "RAC": "Range attenuation correction (dBm)",
    "PAC": "Precipitation attenuation correction (dBm)",
    "S2N": "Signal-to-noise ratio threshold value (dB)",
}

HOW_STRING = {
    "task": "Name of the acquisition task or product generator",
    "system": "Radar system",
    "software": "Processing software",
    "sw_version": "Software version",
    "malfuncmsg": "Radar malfunction message",
    "comment": "Free text description",
    "polarization": "Type of polarization transmitted by the radar (H,V)",
}
