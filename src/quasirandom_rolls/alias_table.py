from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from .item_mapping import InvalidWeights, check_weights, float_to_item


UNSET_ALIAS = -1


@dataclass(frozen=True)
class AliasTableEntry:
    """
    One column of an alias table. probability is the chance of keeping the
    column itself; otherwise alias_index is returned. An entry with
    probability 1.0 never consults its alias, which is then UNSET_ALIAS.
    """
    probability: float
    alias_index: int = UNSET_ALIAS


class AliasTable:
    """
    AliasTable

    Encodes a discrete distribution over N items so that a draw costs O(1)
    given two independent uniform values in [0, 1):

      - x picks a column uniformly
      - y decides between the column and its alias

    Built with the stable variant of Vose's alias method, see
    https://www.keithschwarz.com/darts-dice-coins/

    The table is read-only once built. Rebuild it if the weights change.
    """

    def __init__(self, entries: Sequence[AliasTableEntry]):
        if len(entries) == 0:
            raise InvalidWeights("an alias table needs at least one entry")

        n = len(entries)
        for column, entry in enumerate(entries):
            if not 0.0 <= entry.probability <= 1.0:
                raise ValueError(
                    f"column {column}: probability {entry.probability!r} is outside [0, 1]"
                )
            if entry.alias_index == UNSET_ALIAS:
                if entry.probability < 1.0:
                    raise ValueError(
                        f"column {column}: probability < 1 needs an alias"
                    )
                continue
            if not 0 <= entry.alias_index < n:
                raise ValueError(
                    f"column {column}: alias {entry.alias_index} is out of range"
                )
            if entry.alias_index == column:
                raise ValueError(f"column {column}: alias points at itself")

        self._entries: Tuple[AliasTableEntry, ...] = tuple(entries)

    @classmethod
    def from_weights(cls, weights: Sequence[float]) -> "AliasTable":
        return make_alias_table(weights)

    # ------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------

    def sample(self, x: float, y: float) -> int:
        return sample_alias_table(self, x, y)

    def sample_point(self, point: Tuple[float, float]) -> int:
        return sample_alias_table(self, point[0], point[1])

    # ------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------

    def implied_weights(self) -> List[float]:
        """
        The pmf this table samples from, recovered from its columns.
        """
        n = len(self._entries)
        weights = [0.0] * n
        for column, entry in enumerate(self._entries):
            if entry.probability >= 1.0:
                weights[column] += 1.0 / n
                continue
            weights[column] += entry.probability / n
            weights[entry.alias_index] += (1.0 - entry.probability) / n
        return weights

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, column: int) -> AliasTableEntry:
        return self._entries[column]

    def __iter__(self) -> Iterator[AliasTableEntry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AliasTable):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return "AliasTable(%r)" % (
            [(e.probability, e.alias_index) for e in self._entries],
        )


def make_alias_table(weights: Sequence[float]) -> AliasTable:
    """
    Build an alias table from a normalized weight vector in O(N).

    Weights are not renormalized here; callers pass a pmf. Items left over
    in either work list once the other runs dry only differ from 1.0 by
    rounding, so they become columns that always return themselves.
    """
    check_weights(weights)

    n = len(weights)
    probabilities = [0.0] * n
    aliases = [UNSET_ALIAS] * n

    # (index, scaled probability) work lists, processed from the end
    small: List[Tuple[int, float]] = []
    large: List[Tuple[int, float]] = []
    for index, w in enumerate(weights):
        p = w * n
        if p < 1.0:
            small.append((index, p))
        else:
            large.append((index, p))

    while small and large:
        small_index, small_p = small.pop()
        large_index, large_p = large.pop()

        probabilities[small_index] = small_p
        aliases[small_index] = large_index

        large_p = (large_p + small_p) - 1.0
        if large_p < 1.0:
            small.append((large_index, large_p))
        else:
            large.append((large_index, large_p))

    for leftover in (large, small):
        for index, _ in leftover:
            probabilities[index] = 1.0
            aliases[index] = UNSET_ALIAS

    return AliasTable(
        [AliasTableEntry(p, a) for p, a in zip(probabilities, aliases)]
    )


def sample_alias_table(table: Sequence[AliasTableEntry], x: float, y: float) -> int:
    """
    Draw an item index from an alias table.

    x and y must come from independent axes: reusing one value for both
    the column and the accept test correlates them and biases the result.
    """
    column = float_to_item(x, len(table))
    entry = table[column]
    if entry.probability >= 1.0 or y <= entry.probability:
        return column
    return entry.alias_index
