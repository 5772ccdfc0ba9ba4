"""Stored representations of geocell keys."""

from enum import Enum
from typing import Iterable, List, Optional, Union

from ..abstractions.types import InvalidArgumentError

StoredCell = Union[str, int]


class GeocellFormat(Enum):
    """How geocell keys are written to the multi-valued index field.

    KEY stores the key string itself and is lossless. HEX stores the key
    parsed as a hexadecimal integer, the layout used by existing geomodel
    datasets; leading '0' symbols are lost, so keys such as '3', '03' and
    '003' share one stored value and queries return extra candidates that
    culling has to remove.
    """
    KEY = 'key'
    HEX = 'hex'

    @classmethod
    def resolve(cls, value: Optional[Union[str, 'GeocellFormat']] = None) -> 'GeocellFormat':
        """Get a format from an enum, its name/value, or the global config."""
        if value is None:
            from ..config import config
            value = config.get('geocells.storage_format', cls.KEY.value)
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as e:
            raise InvalidArgumentError(
                f"Unknown geocell storage format: {value!r}. "
                f"Available: {[f.value for f in cls]}", e
            ) from e


def serialize_cell(cell_key: str, fmt: GeocellFormat = GeocellFormat.KEY) -> StoredCell:
    """Convert one cell key to its stored form."""
    if fmt is GeocellFormat.HEX:
        if not cell_key:
            raise InvalidArgumentError("The whole-world key has no hex form")
        return int(cell_key, 16)
    return cell_key


def serialize_cells(cell_keys: Iterable[str], fmt: GeocellFormat = GeocellFormat.KEY) -> List[StoredCell]:
    """Convert cell keys to their stored form, de-duplicated and sorted."""
    return sorted({serialize_cell(key, fmt) for key in cell_keys})
