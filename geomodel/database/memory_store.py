"""In-memory record store with a multi-valued geocell index."""

import itertools
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Union

import numpy as np

from ..abstractions.types import BoundingBox, UnsupportedQueryError
from ..grid_systems import MAX_RESOLUTION, encode_many, query_plan
from ..infrastructure.logging import get_logger, operation_scope
from .geo_model import GeoModel
from .serialization import GeocellFormat, StoredCell, serialize_cell, serialize_cells

logger = get_logger(__name__)

_MISSING = object()

BoxSpec = Union[BoundingBox, Sequence[str]]


class GeoStore:
    """
    Record store supporting equality filters and geocell membership.

    Records are kept by id together with an inverted index from stored
    geocell value to record ids, which is the only spatial structure the
    store has. Bounding-box queries are answered in two steps: the covering
    cells are looked up in the index, then the candidates are culled
    against the exact box.

    Not thread-safe; guard with a lock if shared between threads.
    """

    def __init__(self, name: str = 'default', config=None):
        """
        Initialize store.

        Args:
            name: Store name used in log context
            config: Config instance (defaults to the global one)
        """
        if config is None:
            from ..config import config
        self.name = name
        self.storage_format = GeocellFormat.resolve(
            config.get('geocells.storage_format', GeocellFormat.KEY.value))
        self.cull_results = bool(config.get('geocells.cull_results', True))
        self.strict_queries = bool(config.get('geocells.strict_queries', False))

        self._records: Dict[str, GeoModel] = {}
        self._order: Dict[str, int] = {}
        self._cell_index: Dict[StoredCell, Set[str]] = {}
        self._indexed_cells: Dict[str, List[StoredCell]] = {}
        self._sequence = itertools.count()
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._records

    def save(self, record: GeoModel) -> str:
        """
        Store a record, recomputing its geocells.

        Args:
            record: Record to insert or replace

        Returns:
            The record id (assigned if the record had none)
        """
        record.before_save(self.storage_format)
        return self._put(record)

    def save_many(self, records: Iterable[GeoModel]) -> List[str]:
        """
        Store several records, encoding their locations in one batch.

        Args:
            records: Records to insert or replace

        Returns:
            Record ids in input order
        """
        records = list(records)
        # Parse every location before touching any record
        points = [record.point for record in records]

        located = []
        for record, point in zip(records, points):
            record.location = point
            if point is None:
                record.geocells = []
            else:
                located.append(record)

        if located:
            lats = np.array([r.location.latitude for r in located], dtype=np.float64)
            lngs = np.array([r.location.longitude for r in located], dtype=np.float64)
            full_keys = encode_many(lats, lngs, MAX_RESOLUTION)
            for record, full_key in zip(located, full_keys):
                record.geocells = [serialize_cell(str(full_key)[:res], self.storage_format)
                                   for res in range(1, MAX_RESOLUTION + 1)]

        record_ids = [self._put(record) for record in records]
        logger.debug(f"Saved {len(record_ids)} records ({len(located)} located) in {self.name}")
        return record_ids

    def get(self, record_id: str) -> Optional[GeoModel]:
        return self._records.get(record_id)

    def delete(self, record_id: str) -> bool:
        """Remove a record; returns False if it was not stored."""
        record = self._records.pop(record_id, None)
        if record is None:
            return False
        self._unindex(record_id)
        del self._order[record_id]
        return True

    def all(self, **filters: Any) -> List[GeoModel]:
        """Get records whose attributes equal every given filter value."""
        return [record for record in self._records.values() if self._matches(record, filters)]

    def filter_geocells(self, cells: Iterable[StoredCell], **filters: Any) -> List[GeoModel]:
        """
        Get records whose geocells contain any of the given values.

        Args:
            cells: Stored geocell values (see GeocellFormat)
            **filters: Additional attribute equality filters

        Returns:
            Matching records in insertion order
        """
        matched: Set[str] = set()
        for cell in cells:
            matched.update(self._cell_index.get(cell, ()))

        records = (self._records[rid] for rid in sorted(matched, key=self._order.__getitem__))
        return [record for record in records if self._matches(record, filters)]

    def bounding_box_query(self, box: BoxSpec, **filters: Any) -> List[GeoModel]:
        """
        Get records located inside a bounding box.

        Args:
            box: BoundingBox, or a (southwest, northeast) pair of "lat,lng" strings
            **filters: Additional attribute equality filters

        Returns:
            Matching records in insertion order. Without culling this is
            the candidate set, a superset of the exact answer.
        """
        if not isinstance(box, BoundingBox):
            box = BoundingBox.from_text(*box)

        with operation_scope('bounding_box_query', store=self.name) as metrics:
            resolution, cells = query_plan(box)
            metrics['resolution'] = resolution
            metrics['candidate_cells'] = len(cells)

            if not cells:
                if self.strict_queries:
                    raise UnsupportedQueryError(
                        f"Bounding box {box.southwest} -> {box.northeast} is inverted or "
                        f"crosses the antimeridian"
                    )
                logger.info(f"Bounding box {box.southwest} -> {box.northeast} "
                               f"is not supported by the geocell index, no results")
                return []

            candidates = self.filter_geocells(serialize_cells(cells, self.storage_format), **filters)
            metrics['items_processed'] = len(candidates)

            if not self.cull_results:
                return candidates

            results = self._cull(candidates, box)
            metrics['results'] = len(results)
            return results

    def _cull(self, candidates: List[GeoModel], box: BoundingBox) -> List[GeoModel]:
        """Drop candidates outside the exact box."""
        if not candidates:
            return []
        lats = np.fromiter((r.location.latitude for r in candidates), dtype=np.float64, count=len(candidates))
        lngs = np.fromiter((r.location.longitude for r in candidates), dtype=np.float64, count=len(candidates))
        sw, ne = box.southwest, box.northeast
        mask = ((sw.latitude <= lats) & (lats <= ne.latitude) &
                (sw.longitude <= lngs) & (lngs <= ne.longitude))
        return [record for record, keep in zip(candidates, mask) if keep]

    def _put(self, record: GeoModel) -> str:
        if record.record_id is None:
            record.record_id = self._next_id()

        if record.record_id in self._records:
            self._unindex(record.record_id)
        else:
            self._order[record.record_id] = next(self._sequence)

        self._records[record.record_id] = record
        self._indexed_cells[record.record_id] = list(record.geocells)
        for cell in record.geocells:
            self._cell_index.setdefault(cell, set()).add(record.record_id)
        return record.record_id

    def _unindex(self, record_id: str):
        # Cells recorded at index time; the record may have been mutated since
        for cell in self._indexed_cells.pop(record_id, ()):
            ids = self._cell_index.get(cell)
            if ids is None:
                continue
            ids.discard(record_id)
            if not ids:
                del self._cell_index[cell]

    def _next_id(self) -> str:
        record_id = str(next(self._ids))
        while record_id in self._records:
            record_id = str(next(self._ids))
        return record_id

    @staticmethod
    def _matches(record: GeoModel, filters: Dict[str, Any]) -> bool:
        return all(getattr(record, name, _MISSING) == value for name, value in filters.items())
