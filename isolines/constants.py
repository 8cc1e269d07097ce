"""Package-wide defaults for isoline extraction.

Values here are the fallbacks used when a caller does not pass an explicit
option.  :class:`isolines.config.IsolineOptions` bundles the ones that shape
an extraction run.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# NodeID packing
# ---------------------------------------------------------------------------
#: Bits per axis used to pack a grid corner into a NodeID.  Corner coordinates
#: must stay below ``2 ** bits``, so the largest accepted grid extent per axis
#: is ``2 ** bits - 1`` samples (65535 with the default).
DEFAULT_NODE_BITS = 16

#: Upper bound on ``node_bits`` so that decoded ids fit a signed 64-bit array.
MAX_NODE_BITS = 31

# ---------------------------------------------------------------------------
# Endpoint matching
# ---------------------------------------------------------------------------
#: Half-width of the square window (in grid units) searched around a seed
#: point for a polyline end.
ENDPOINT_PROXIMITY = 2.0

# ---------------------------------------------------------------------------
# Refinement
# ---------------------------------------------------------------------------
DEFAULT_STEP_TOLERANCE = 1e-3
DEFAULT_VALUE_TOLERANCE = 1e-6
MAX_BISECTION_STEPS = 64

#: Accepted values for ``IsolineOptions.on_error``.
ON_ERROR_MODES = ("raise", "skip")
