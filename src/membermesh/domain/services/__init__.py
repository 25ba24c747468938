"""Domain services for member mesh generation.

This package provides the geometry services behind a member mesh:
- Profile construction from shape dimension records
- Placement of a member between two reference points
- End-cap triangulation of profiles with holes
- Tapered mesh construction from segment boundaries
"""

from .placement import (
    DEGENERATE_LENGTH_TOLERANCE,
    calculate_beam_basis,
    compute_axial_placement,
    compute_beam_placement,
    require_valid_placement,
)
from .profile_factory import build_profile, section_height
from .tapered_mesh import (
    TaperedMeshBuilder,
    build_prismatic_mesh,
    build_taper_mesh,
    build_tapered_mesh,
    compute_vertex_normals,
    generate_intermediate_profiles,
    interpolate_profiles,
)
from .triangulation import triangulate_cap, triangulate_profile

__all__ = [
    "DEGENERATE_LENGTH_TOLERANCE",
    "TaperedMeshBuilder",
    "build_prismatic_mesh",
    "build_profile",
    "build_taper_mesh",
    "build_tapered_mesh",
    "calculate_beam_basis",
    "compute_axial_placement",
    "compute_beam_placement",
    "compute_vertex_normals",
    "generate_intermediate_profiles",
    "interpolate_profiles",
    "require_valid_placement",
    "section_height",
    "triangulate_cap",
    "triangulate_profile",
]
