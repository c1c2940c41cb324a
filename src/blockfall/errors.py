"""Exception types raised by the engine.

Only API misuse is reported through exceptions.  Moves and rotations that do
not fit are reported through return values and a topped-out board is a
session status, neither of them raises.
"""

from __future__ import annotations


class BlockfallError(Exception):
    """Base class for all engine errors."""


class ContractViolation(BlockfallError, RuntimeError):
    """The caller broke the engine's usage contract.

    These errors are fatal for the session: the driver is expected to stop its
    tick scheduler rather than catch and continue.
    """


class ShapeTemplateError(ContractViolation, ValueError):
    """A textual shape template could not be turned into a shape."""


__all__ = ["BlockfallError", "ContractViolation", "ShapeTemplateError"]
