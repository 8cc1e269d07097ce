"""Run options for :func:`isolines.get_isolines`."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import DEFAULT_NODE_BITS, MAX_NODE_BITS, ON_ERROR_MODES


@dataclass(frozen=True)
class IsolineOptions:
    """Options shared by one extraction run.

    Parameters
    ----------
    node_bits:
        Bits per axis used by :class:`isolines.nodes.NodeCodec`.  Bounds the
        grid extent to ``2 ** node_bits - 1`` samples per axis.
    on_error:
        ``"raise"`` propagates the first chain inconsistency; ``"skip"``
        logs it, leaves that level empty with the error attached, and keeps
        going with the remaining levels.
    """

    node_bits: int = DEFAULT_NODE_BITS
    on_error: str = "raise"

    def __post_init__(self) -> None:
        if not 1 <= self.node_bits <= MAX_NODE_BITS:
            raise ValueError(
                f"node_bits must be in [1, {MAX_NODE_BITS}], got {self.node_bits}"
            )
        if self.on_error not in ON_ERROR_MODES:
            raise ValueError(
                f"on_error must be one of {ON_ERROR_MODES}, got {self.on_error!r}"
            )
