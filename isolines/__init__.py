"""
isolines — contour extraction on integer sampling grids
=======================================================

Extract the isolines of a scalar field sampled at integer grid points, for a
set of threshold levels.  Each level yields open polylines (ending at the
grid border or at a domain gap) and closed loops.

Implemented features
--------------------
- Level bucketing: :class:`LevelIndex`
- Grid scan into per-level dual edges: :func:`find_level_edges`
- Chain reconstruction from unordered edges: :func:`sort_lines`,
  :class:`ChainBuilder`
- Polyline assembly: :func:`get_isolines`, :func:`get_array_isolines`
- Sub-pixel refinement: :func:`refine_isolines` with :func:`bisect_to_step`,
  :func:`bisect_to_value` or :func:`linear_interpolation`
- Curve crossings and endpoint matching: :func:`find_curve_crossings`,
  :func:`find_line_ends`, :func:`attach_points`
- Field adapters: :func:`array_field`, :func:`geometry_field`

Quick start
-----------

Analytic field::

    from isolines import get_isolines

    f = lambda x, y: (x - 32) ** 2 + (y - 32) ** 2
    result = get_isolines(f, [100.0, 400.0], 64, 64)
    loop = result[0].closed[0]        # (N, 2) array, loop[0] == loop[-1]

Sampled field with holes (NaN marks points outside the domain)::

    import numpy as np
    from isolines import get_array_isolines, IsolineOptions

    phi = np.random.rand(128, 128)
    phi[40:60, 40:60] = np.nan
    result = get_array_isolines(phi, [0.25, 0.5, 0.75],
                                options=IsolineOptions(on_error="skip"))
"""

from .levels import LevelIndex
from .nodes import NodeCodec
from .chains import ChainBuilder, LevelStructure, sort_lines
from .scanner import find_curve_crossings, find_level_edges
from .fields import array_field, geometry_field, grid_coordinates, sample_grid, sample_levelset
from .assembler import (
    assemble_levels,
    chain_to_polyline,
    contract_midpoints,
    get_array_isolines,
    get_isolines,
)
from .refine import (
    Section,
    bisect_to_step,
    bisect_to_value,
    linear_interpolation,
    refine_isolines,
    refine_point,
    refine_polyline,
    section_for_midpoint,
)
from .endpoints import LineEnd, append_at_end, attach_points, find_line_ends
from .config import IsolineOptions
from .errors import ChainInconsistencyError, GridBoundsError, IsolineError, RefinementError

import isolines.utils

isolines.utils.configure_logging()

__version__ = "0.1.0"

__all__ = [
    # Core pipeline
    "LevelIndex",
    "NodeCodec",
    "find_level_edges",
    "ChainBuilder",
    "LevelStructure",
    "sort_lines",
    "get_isolines",
    "get_array_isolines",
    "assemble_levels",
    "chain_to_polyline",
    "contract_midpoints",

    # Refinement
    "Section",
    "section_for_midpoint",
    "bisect_to_step",
    "bisect_to_value",
    "linear_interpolation",
    "refine_point",
    "refine_polyline",
    "refine_isolines",

    # Curves and endpoints
    "find_curve_crossings",
    "LineEnd",
    "find_line_ends",
    "append_at_end",
    "attach_points",

    # Fields
    "array_field",
    "geometry_field",
    "sample_levelset",
    "sample_grid",
    "grid_coordinates",

    # Options and errors
    "IsolineOptions",
    "IsolineError",
    "ChainInconsistencyError",
    "GridBoundsError",
    "RefinementError",
]
