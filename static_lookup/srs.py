"""Structured reference string holder and JSON loader.

The reference string is produced by a separate setup ceremony; this module only
carries it around and reads or writes it. Points are stored as hex strings of
their canonical affine encoding.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence, Tuple, Union

from primitives.curve import BN254, PairingEngine, Point, get_engine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceString:
    """First- and second-group powers [tau^i]_1 and [tau^i]_2.

    Shared read-only by every table built from it.
    """
    g1: Tuple[Point, ...]
    g2: Tuple[Point, ...]
    engine: PairingEngine = BN254

    def __post_init__(self) -> None:
        object.__setattr__(self, "g1", tuple(self.g1))
        object.__setattr__(self, "g2", tuple(self.g2))

    def __len__(self) -> int:
        return len(self.g1)

    @property
    def g1_len(self) -> int:
        return len(self.g1)

    def g1_prefix(self, n: int) -> Sequence[Point]:
        return self.g1[:n]

    # --- JSON ---

    def to_json(self) -> dict[str, Any]:
        return {
            "curve": self.engine.name,
            "g1": [self.engine.encode_g1(p).hex() for p in self.g1],
            "g2": [self.engine.encode_g2(p).hex() for p in self.g2],
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "ReferenceString":
        engine = get_engine(data.get("curve", BN254.name))
        g1 = [engine.decode_g1(bytes.fromhex(h)) for h in data["g1"]]
        g2 = [engine.decode_g2(bytes.fromhex(h)) for h in data["g2"]]
        return cls(g1=tuple(g1), g2=tuple(g2), engine=engine)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ReferenceString":
        """Load a reference string from a JSON file."""
        with open(path) as f:
            data = json.load(f)
        srs = cls.from_json(data)
        logger.debug("Loaded %s reference string from %s: %d G1, %d G2",
                     srs.engine.name, path, len(srs.g1), len(srs.g2))
        return srs

    def save(self, path: Union[str, Path]) -> None:
        with open(path, "w") as f:
            json.dump(self.to_json(), f, indent=2)
