"""Decoder configuration -- IFD chain guards."""

import json
from dataclasses import dataclass
from typing import Optional

# 'previous': reject an IFD whose next pointer is its own offset.
# 'visited':  reject any pointer back to an IFD already decoded.
CYCLE_GUARDS = ('previous', 'visited')


@dataclass
class DecoderConfig:
    """Tunable limits applied while walking the IFD chain.

    The defaults reproduce the classic single-step guard with no cap on
    chain length.
    """

    cycle_guard: str = 'previous'
    max_ifds: Optional[int] = None

    def __post_init__(self):
        if self.cycle_guard not in CYCLE_GUARDS:
            raise ValueError(
                f'cycle_guard must be one of {CYCLE_GUARDS}, got {self.cycle_guard!r}')
        if self.max_ifds is not None and self.max_ifds < 1:
            raise ValueError(f'max_ifds must be positive, got {self.max_ifds}')

    @classmethod
    def default(cls) -> 'DecoderConfig':
        return cls()

    @classmethod
    def strict(cls, max_ifds: int = 1024) -> 'DecoderConfig':
        """Visited-set guard plus a chain length cap, for untrusted input."""
        return cls(cycle_guard='visited', max_ifds=max_ifds)

    @classmethod
    def from_json(cls, path) -> 'DecoderConfig':
        """Load settings from a JSON file.

        JSON format::

            {"cycle_guard": "visited", "max_ifds": 256}

        Both keys are optional; omitted keys keep their defaults.
        """
        with open(str(path), 'r') as f:
            data = json.load(f)

        config = cls.default()
        return cls(
            cycle_guard=data.get('cycle_guard', config.cycle_guard),
            max_ifds=data.get('max_ifds', config.max_ifds),
        )
