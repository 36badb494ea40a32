"""
Open an ODIM file as the root object its what/object tag names.
"""
from . import attrs
from .constants import ATN_OBJECT, OBJECT_TYPES, OT_VERTICAL_PROFILE, OT_VOLUME_POLAR
from .errors import ProductMismatch
from .node import Node
from .vertical_profile import VerticalProfile
from .volume import Volume

ROOT_TYPES = {
    OT_VOLUME_POLAR: Volume,
    OT_VERTICAL_PROFILE: VerticalProfile,
}


def peek_object(path) -> str:
    """Return the root what/object tag of a file without opening it as an entity."""
    node = Node.open_file(path, read_only=True)
    try:
        return attrs.get_string(node.require_what(), ATN_OBJECT)
    finally:
        node.close()


def open_product(path, read_only: bool = True):
    object_type = peek_object(path)
    if object_type not in ROOT_TYPES:
        reason = "Unsupported" if object_type in OBJECT_TYPES else "Unknown"
        raise ProductMismatch(f"{reason} object type {object_type}", str(path), ATN_OBJECT)
    return ROOT_TYPES[object_type].open(path, read_only)
