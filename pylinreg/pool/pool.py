"""
Pool: an in-memory list of instances read from a features file.

The pool is the data side of the command line. It reads and writes
features files, exports to other learners' formats and builds injured
copies for the numerical stability research.

Usage:
    pool = Pool.from_features_file("learn.tsv")
    model = learn(pool, 'welford_lr')

    injured = pool.injured(1e-3, 1e3)   # feature -> feature·1e-3 + 1e3
    injured.write_features(sys.stdout)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, TextIO
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.exceptions import FormatError
from pylinreg.pool.instance import Instance


@dataclass
class Pool:
    """
    Ordered collection of instances sharing one feature count.

    Iterating a pool yields its instances, which satisfy the Observation
    protocol.
    """
    _instances: list[Instance] = field(default_factory=list)

    # === Construction ===

    @classmethod
    def from_instances(cls, instances: Iterable[Instance]) -> Pool:
        return cls(_instances=list(instances))

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, use_weights: bool = False) -> Pool:
        """
        Parse features file lines. Blank lines are skipped.

        Raises:
            FormatError: On a malformed line, or a line whose feature
                count differs from the first instance's
        """
        instances: list[Instance] = []
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            instance = Instance.from_features_string(
                line, use_weights=use_weights, line_number=line_number
            )
            if instances and len(instance.features) != len(instances[0].features):
                raise FormatError(
                    f"line {line_number}: expected {len(instances[0].features)} features, "
                    f"got {len(instance.features)}",
                    line_number=line_number,
                    line=line,
                )
            instances.append(instance)
        return cls(_instances=instances)

    @classmethod
    def from_features_file(cls, path: str | Path, *, use_weights: bool = False) -> Pool:
        """
        Read a features file.

        Args:
            path: Features file path
            use_weights: Take the weight column as given; otherwise every
                instance gets weight 1.0
        """
        with open(path, encoding='utf-8') as f:
            return cls.from_lines(f, use_weights=use_weights)

    # === Access ===

    def __iter__(self) -> Iterator[Instance]:
        return iter(self._instances)

    def __len__(self) -> int:
        return len(self._instances)

    def __getitem__(self, index: int) -> Instance:
        return self._instances[index]

    @property
    def features_count(self) -> int:
        """Feature count of the first instance, 0 for an empty pool."""
        if not self._instances:
            return 0
        return len(self._instances[0].features)

    def subset(self, indices: Iterable[int]) -> Iterator[Instance]:
        """Instances at the given positions, in the given order."""
        for index in indices:
            yield self._instances[index]

    def arrays(self) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
        """(features matrix, goals, weights) of the whole pool."""
        X = np.array([i.features for i in self._instances], dtype=np.float64)
        X = X.reshape(len(self._instances), self.features_count)
        y = np.array([i.goal for i in self._instances], dtype=np.float64)
        weights = np.array([i.weight for i in self._instances], dtype=np.float64)
        return X, y, weights

    # === Transforms ===

    def injured(self, factor: float, offset: float) -> Pool:
        """New pool with every feature mapped to feature·factor + offset."""
        return Pool(_instances=[i.injured(factor, offset) for i in self._instances])

    # === Writers ===

    def write_features(self, out: TextIO) -> None:
        for instance in self._instances:
            out.write(instance.to_features_string() + "\n")

    def write_vowpal_wabbit(self, out: TextIO) -> None:
        for instance in self._instances:
            out.write(instance.to_vowpal_wabbit_string() + "\n")

    def write_svm_light(self, out: TextIO) -> None:
        for instance in self._instances:
            out.write(instance.to_svm_light_string() + "\n")
