"""
Exceptions raised by odimh5.

Every error carries the HDF5 path of the node it was raised against and,
where applicable, the attribute or dataset name.
"""


class OdimError(Exception):
    """Base exception class for all odimh5 errors."""

    def __init__(self, message, path=None, name=None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.name = name

    def __str__(self):
        where = self.path or ""
        if self.name:
            where = f"{where.rstrip('/')}/{self.name}"
        return f"{self.message} ({where})" if where else self.message


class OpenFailure(OdimError, LookupError):
    """Raised when an expected group, dataset or file cannot be opened."""

    pass


class AttributeMissing(OdimError, KeyError):
    """Raised when a required attribute is absent."""

    pass


class TypeMismatch(OdimError):
    """Raised when an attribute's stored type class disagrees with the request."""

    pass


class SizeMismatch(OdimError):
    """Raised when a stored payload is larger than the requested read allows."""

    pass


class DimensionMismatch(SizeMismatch):
    """Raised when a layer's array extent disagrees with its entity's dimensions."""

    pass


class BadValue(OdimError):
    """Raised when an attribute holds a value that cannot be decoded."""

    pass


class ProductMismatch(OdimError):
    """Raised when an object or product tag disagrees with the entity kind."""

    pass


class WriteFailure(OdimError):
    """Raised when the HDF5 library fails to write an attribute or array."""

    pass


class AlreadyExists(WriteFailure):
    """Raised when a create targets a group, attribute or file that exists."""

    pass


class ReadFailure(OdimError):
    """Raised when the HDF5 library fails to read an attribute or array."""

    pass
