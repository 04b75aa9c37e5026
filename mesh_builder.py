# mesh_builder.py
import numpy as np
import trimesh
from typing import List, Optional, Tuple

# Import from other project modules
import constants as const
from geometry import WallSegment, extract_wall_bases_2d


def _is_mesh_degenerate(vertices: np.ndarray) -> bool:
    """Checks if a set of vertices forms a degenerate mesh (all points nearly coincide)."""
    if vertices is None or len(vertices) < 3:
        return True
    if not np.all(np.isfinite(vertices)):
        return True
    spread = np.ptp(vertices, axis=0)
    return float(np.max(spread)) < const.GEOMETRY_TOLERANCE


def _create_extruded_prism_simple(
    base_verts_2d: Tuple[Tuple[float, float], ...],
    height: float,
) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """Extrudes a counter-clockwise quad along +Z into a closed prism."""
    if len(base_verts_2d) != 4:
        return None  # Expect quads
    base_verts = np.array([[x, y, 0.0] for x, y in base_verts_2d])
    top_verts = base_verts + np.array([0.0, 0.0, height])
    verts = np.vstack((base_verts, top_verts))  # 0-3 base, 4-7 top
    faces = np.array(
        [
            [0, 1, 5],
            [0, 5, 4],
            [1, 2, 6],
            [1, 6, 5],
            [2, 3, 7],
            [2, 7, 6],
            [3, 0, 4],
            [3, 4, 7],  # Sides
            [4, 5, 6],
            [4, 6, 7],  # Top cap
            [3, 2, 1],
            [3, 1, 0],  # Bottom cap (reversed)
        ],
        dtype=np.int32,
    )
    return verts, faces


def create_2d_maze_stl(
    walls: List[WallSegment],
    extent: Tuple[float, float],
    wall_thickness: float = const.MAZE_2D_WALL_THICKNESS,
    wall_height: float = const.MAZE_2D_WALL_HEIGHT,
    base_height: float = const.MAZE_2D_BASE_HEIGHT,
    output_filename: Optional[str] = None,
) -> Optional[trimesh.Trimesh]:
    """
    Builds a printable mesh of the maze: each wall segment extruded to
    wall_height on top of a rectangular base plate covering `extent`.
    Exports to output_filename when given and returns the mesh.
    """
    print(f"\n--- Generating 2D Maze STL with Base: {output_filename or '(in memory)'} ---")
    print(
        f"    Wall H={wall_height:.2f}, Base H={base_height:.2f}, Total H={wall_height + base_height:.2f}"
    )

    # --- 1. Get Wall Base Polygons ---
    wall_bases = extract_wall_bases_2d(walls, wall_thickness)
    if not wall_bases:
        print("ERROR: No wall bases found. Cannot create 2D STL.")
        return None
    print(f"  Extracted {len(wall_bases)} wall base polygons.")

    # --- 2. Generate Wall Meshes from Bases ---
    all_wall_meshes: List[trimesh.Trimesh] = []
    skip_count = 0
    for base_verts_2d in wall_bases:
        extrusion_result = _create_extruded_prism_simple(base_verts_2d, wall_height)
        if extrusion_result is None or _is_mesh_degenerate(extrusion_result[0]):
            skip_count += 1
            continue
        verts, faces = extrusion_result
        all_wall_meshes.append(trimesh.Trimesh(vertices=verts, faces=faces, process=False))
    print(f"  2D Wall Mesh Summary: Gen={len(all_wall_meshes)}, Skip={skip_count}")
    if not all_wall_meshes:
        print("ERROR: No valid 2D wall meshes generated. Aborting STL creation.")
        return None

    # --- 3. Create Base Plate ---
    width, height = extent
    parts = list(all_wall_meshes)
    if base_height > const.GEOMETRY_TOLERANCE:
        margin = wall_thickness / 2.0
        base_mesh = trimesh.creation.box(
            extents=[width + 2 * margin, height + 2 * margin, base_height]
        )
        # Top of the plate at z=0, under the maze footprint
        base_mesh.apply_translation([width / 2.0, height / 2.0, -base_height / 2.0])
        parts.append(base_mesh)
    else:
        print("  Skipping base plate creation.")

    # --- 4. Combine ---
    final_mesh = trimesh.util.concatenate(parts)
    final_mesh.merge_vertices()
    print(f"    Combined Walls & Base: {len(final_mesh.vertices)}V, {len(final_mesh.faces)}F")

    # --- 5. Export Final Mesh ---
    if output_filename:
        print(f"  Exporting final 2D maze to {output_filename}...")
        final_mesh.export(output_filename)
        print("  Export complete.")
    return final_mesh
