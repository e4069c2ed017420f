"""Attribute Pairs — ordered key/value lists stored as one JSON string per pair.

Invariants:
    - PairList preserves insertion order (re-encoding is deterministic)
    - Keys may repeat; lookup() returns the first match, to_flat_map() keeps the last
    - lookup() never raises: absence is the empty string
    - encode_pair/decode_pair are mutual inverses; the encoded field names
      ("key", "value") match rows already stored in the components table
    - replace_matching() is idempotent for a given update map and validates
      the whole map before touching any pair

Design Decisions:
    - Pair is a frozen pydantic model: JSON shape validation comes from the
      model, not from hand-written parsing
    - PairList wraps a list instead of subclassing it so mutation goes through
      replace_matching() only
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, ValidationError

from carton.core.errors import FieldDecodeError


class Pair(BaseModel):
    """One attribute: key/value strings."""
    model_config = ConfigDict(frozen=True)

    key: str
    value: str = ""


def encode_pair(pair: Pair) -> str:
    return pair.model_dump_json()


def decode_pair(text: str) -> Pair:
    """Decode one stored pair string. Raises FieldDecodeError on bad shape."""
    try:
        return Pair.model_validate_json(text)
    except ValidationError as e:
        raise FieldDecodeError.from_validation(e, "pair") from e


class PairList:
    """Ordered sequence of Pairs used for inputs, outputs and envs."""

    def __init__(self, pairs: Iterable[Pair] = ()):
        self._pairs: list[Pair] = list(pairs)

    def __iter__(self) -> Iterator[Pair]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PairList):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"PairList({self._pairs!r})"

    def lookup(self, key: str) -> str:
        """Value of the first pair with this key, or "" when absent."""
        for pair in self._pairs:
            if pair.key == key:
                return pair.value
        return ""

    def values_of(self, key: str) -> list[str]:
        return [p.value for p in self._pairs if p.key == key]

    def to_flat_map(self) -> dict[str, str]:
        """Key-unique dict; a repeated key keeps its last value."""
        return {p.key: p.value for p in self._pairs}

    def replace_matching(self, updates: Mapping[str, Sequence[str]]) -> None:
        """Nuke every pair whose key is in updates, then set the new values.

        New pairs for a key take the slot of the first pair removed for that
        key; keys not present before are appended in update order.
        Raises TypeError if a value is a bare string instead of a sequence.
        """
        for key, values in updates.items():
            if isinstance(values, (str, bytes)):
                raise TypeError(
                    f"replace_matching values for {key!r} must be a sequence of "
                    f"strings, not {type(values).__name__}"
                )

        kept: list[Pair] = []
        slots: dict[str, int] = {}
        for pair in self._pairs:
            if pair.key in updates:
                slots.setdefault(pair.key, len(kept))
                continue
            kept.append(pair)

        # slots is ordered by first removal; walk it backwards so earlier slots stay valid
        for key in reversed(list(slots)):
            fresh = [Pair(key=key, value=v) for v in updates[key]]
            kept[slots[key]:slots[key]] = fresh

        for key, values in updates.items():
            if key not in slots:
                kept.extend(Pair(key=key, value=v) for v in values)

        self._pairs = kept

    def to_encoded_strings(self) -> list[str]:
        return [encode_pair(p) for p in self._pairs]

    def to_list(self) -> list[dict]:
        return [p.model_dump() for p in self._pairs]
