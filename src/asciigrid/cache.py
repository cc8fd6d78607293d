import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np

from asciigrid.brightness import TableSnapshot
from asciigrid.partition import Partition

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunSnapshot:
    resolution: int
    partition: Partition
    alphabet: frozenset[str]
    table: TableSnapshot


@dataclass(frozen=True)
class Reuse:
    """What a new run may take over from the previous one."""

    partition: Partition | None = None
    table: TableSnapshot | None = None
    raw: Mapping[str, float] = field(default_factory=dict)


def _frozen_copy(arr: np.ndarray) -> np.ndarray:
    copy = np.array(arr, copy=True)
    copy.flags.writeable = False
    return copy


class RunCache:
    """Holds the partition and brightness table of the last completed run."""

    def __init__(self):
        self._snapshot: RunSnapshot | None = None

    @property
    def snapshot(self) -> RunSnapshot | None:
        return self._snapshot

    def clear(self) -> None:
        self._snapshot = None

    def try_reuse(self, resolution: int, alphabet: Iterable[str]) -> Reuse:
        snap = self._snapshot
        if snap is None:
            log.debug("Run cache empty")
            return Reuse()
        alphabet = frozenset(alphabet)

        partition = snap.partition if snap.resolution == resolution else None
        table = snap.table if snap.alphabet == alphabet else None
        raw = {glyph: value for glyph, value in snap.table.raw.items() if glyph in alphabet}
        log.debug(
            "Run cache: partition %s, table %s, %d/%d glyph brightness values recycled",
            "hit" if partition is not None else "miss",
            "hit" if table is not None else "miss",
            len(raw),
            len(alphabet),
        )
        return Reuse(partition=partition, table=table, raw=MappingProxyType(raw))

    def store(self, resolution: int, partition: Partition, alphabet: Iterable[str], table: TableSnapshot) -> None:
        """Replace the cached run with read-only copies of the given results."""
        if self._snapshot is not None and self._snapshot.partition is partition:
            kept_partition = partition
        else:
            kept_partition = Partition(
                resolution=partition.resolution,
                cell_size=partition.cell_size,
                cells=_frozen_copy(partition.cells),
                brightness=_frozen_copy(partition.brightness),
            )
        if self._snapshot is not None and self._snapshot.table is table:
            kept_table = table
        else:
            kept_table = TableSnapshot(
                glyphs=frozenset(table.glyphs),
                raw=MappingProxyType(dict(table.raw)),
                normalized=MappingProxyType(dict(table.normalized)),
            )
        self._snapshot = RunSnapshot(
            resolution=resolution,
            partition=kept_partition,
            alphabet=frozenset(alphabet),
            table=kept_table,
        )
