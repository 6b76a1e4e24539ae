"""
Uniform random source protocol.

The sampling engine only needs uniform draws in the open interval (0, 1)
and the ability to fork a generator. Concrete engines are in srswor.engine.
"""

from typing import Protocol


class RandomSource(Protocol):
    """
    Uniform pseudo-random source.

    Properties:
    - Open interval: raw() never returns 0.0 or 1.0
    - Stateful: every draw advances the internal state (not thread-safe)
    - Forkable: clone() copies the state, the copy evolves independently
    """

    def raw(self) -> float:
        """
        Draw a uniform value.

        Returns:
            Value in the open interval (0, 1)
        """
        ...

    def clone(self) -> "RandomSource":
        """
        Deep copy of the generator.

        Returns:
            Generator with identical state that shares nothing with the receiver
        """
        ...
