"""
One labelled observation of a pool, and its text line formats.

Features file line (whitespace separated, written tab separated):

    <query_id> <goal> <url> <weight> <f_0> <f_1> ...

Export lines:

    VowpalWabbit:  <goal> <weight> | 0:<f_0> 1:<f_1> ...<TAB><query_id>
    SVMLight:      <goal> 1:<f_0> 2:<f_1> ... # <query_id>

Features are written with 20 significant digits; goal and weight with
enough digits to read back exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.exceptions import FormatError

# query_id, goal, url, weight
_HEADER_FIELDS = 4


def _format_feature(value: float) -> str:
    return f"{value:.20g}"


def _format_label(value: float) -> str:
    return f"{value:.17g}"


@dataclass(frozen=True, eq=False)
class Instance:
    """
    A pool row: identifiers, goal, weight and a feature vector.

    Satisfies the Observation protocol, so pools can be fed to solvers
    directly.
    """
    query_id: str
    goal: float
    url: str
    weight: float
    features: NDArray[np.floating[Any]]

    def __post_init__(self):
        features = np.array(self.features, dtype=np.float64).reshape(-1)
        features.setflags(write=False)
        object.__setattr__(self, 'features', features)
        object.__setattr__(self, 'goal', float(self.goal))
        object.__setattr__(self, 'weight', float(self.weight))

    @classmethod
    def from_features_string(
        cls,
        line: str,
        *,
        use_weights: bool = False,
        line_number: int | None = None,
    ) -> Instance:
        """
        Parse one features file line.

        The weight column must be numeric but is replaced by 1.0 unless
        use_weights is set.

        Raises:
            FormatError: If the line has fewer than four fields or a
                numeric field does not parse
        """
        where = f"line {line_number}" if line_number is not None else "features line"
        tokens = line.split()
        if len(tokens) < _HEADER_FIELDS:
            raise FormatError(
                f"{where}: expected at least {_HEADER_FIELDS} fields "
                f"(query_id goal url weight), got {len(tokens)}",
                line_number=line_number,
                line=line,
            )

        query_id, goal, url, weight = tokens[:_HEADER_FIELDS]
        try:
            goal_value = float(goal)
            weight_value = float(weight)
            features = [float(token) for token in tokens[_HEADER_FIELDS:]]
        except ValueError as e:
            raise FormatError(f"{where}: {e}", line_number=line_number, line=line) from e

        if weight_value < 0:
            raise FormatError(
                f"{where}: negative weight {weight_value}",
                line_number=line_number,
                line=line,
            )

        return cls(
            query_id=query_id,
            goal=goal_value,
            url=url,
            weight=weight_value if use_weights else 1.0,
            features=np.array(features, dtype=np.float64),
        )

    def injured(self, factor: float, offset: float) -> Instance:
        """Copy with every feature replaced by feature·factor + offset."""
        return Instance(
            query_id=self.query_id,
            goal=self.goal,
            url=self.url,
            weight=self.weight,
            features=self.features * factor + offset,
        )

    # === Line formats ===

    def to_features_string(self) -> str:
        fields = [self.query_id, _format_label(self.goal), self.url, _format_label(self.weight)]
        fields.extend(_format_feature(f) for f in self.features)
        return "\t".join(fields)

    def to_vowpal_wabbit_string(self) -> str:
        parts = [_format_label(self.goal), _format_label(self.weight), "|"]
        parts.extend(f"{i}:{_format_feature(f)}" for i, f in enumerate(self.features))
        return " ".join(parts) + "\t" + self.query_id

    def to_svm_light_string(self) -> str:
        parts = [_format_label(self.goal)]
        parts.extend(f"{i + 1}:{_format_feature(f)}" for i, f in enumerate(self.features))
        return " ".join(parts) + " # " + self.query_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Instance):
            return NotImplemented
        return (
            self.query_id == other.query_id
            and self.url == other.url
            and self.goal == other.goal
            and self.weight == other.weight
            and np.array_equal(self.features, other.features)
        )

    __hash__ = None
