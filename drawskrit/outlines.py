# drawskrit/outlines.py
"""
Unit outlines for drawskrit shapes and the affine helpers that place them.

Every shape is defined once as a polyline in a unit frame (half extents of 1,
centred on the origin, y pointing down as on the surface) and moved into its
cell by a single scale-rotate-translate matrix.
"""
import math
import numpy as np


CIRCLE_NUM_POINTS = 72
BEZIER_NUM_POINTS = 40


def _bezier(p0, p1, p2, p3, num_points=BEZIER_NUM_POINTS):
    """Samples a cubic Bezier curve into an (num_points, 2) array."""
    t = np.linspace(0, 1, num_points)[:, np.newaxis]
    return ((1-t)**3*np.asarray(p0) + 3*(1-t)**2*t*np.asarray(p1)
            + 3*(1-t)*t**2*np.asarray(p2) + t**3*np.asarray(p3))


## --- Unit Outlines ---
# (points, closed)
_rectangle = (np.array([(-1.0, -1.0), (1.0, -1.0), (1.0, 1.0), (-1.0, 1.0)]), True)
_circle = (np.array([(math.cos(t), math.sin(t))
                     for t in np.linspace(0.0, 2.0 * math.pi, num=CIRCLE_NUM_POINTS, endpoint=False)]), True)
_triangle = (np.array([(0.0, -1.0), (1.0, 1.0), (-1.0, 1.0)]), True)
_line = (np.array([(-1.0, 0.0), (1.0, 0.0)]), False)
# a mouth: a deep lower curve closed by a shallow upper one
_smile = (np.vstack([
    _bezier((-1.0, -1.0), (-1.0, 1.0), (1.0, 1.0), (1.0, -1.0)),
    _bezier((1.0, -1.0), (1.0, 0.0), (-1.0, 0.0), (-1.0, -1.0))[1:-1],
]), True)

UNIT_OUTLINES = {
    "square": _rectangle,
    "rectangle": _rectangle,
    "circle": _circle,
    "ellipse": _circle,
    "triangle": _triangle,
    "line": _line,
    "smile": _smile,
}


## --- Affine Helpers ---
def _make_affine_matrix(sx=1.0, sy=1.0, theta=0.0, x=0.0, y=0.0):
    """
    Creates a 3x3 matrix that scales, then rotates, then translates.

    Args:
        sx: Scale factor along x (default 1.0)
        sy: Scale factor along y (default 1.0)
        theta: Rotation angle in radians (default 0.0)
        x: Translation in x direction (default 0.0)
        y: Translation in y direction (default 0.0)

    Returns:
        3x3 numpy array equal to translation @ rotation @ scale
    """
    rotation = np.array([[math.cos(theta), -math.sin(theta), 0.0],
                         [math.sin(theta), math.cos(theta), 0.0], [0.0, 0.0, 1.0]])
    scale = np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])
    translation = np.array([[1.0, 0.0, x], [0.0, 1.0, y], [0.0, 0.0, 1.0]])
    return translation @ rotation @ scale


def _apply_transform(points: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Applies a 3x3 affine matrix to an (N, 2) point array using homogeneous coordinates."""
    points_h = np.hstack([points, np.ones((points.shape[0], 1))])
    return (matrix @ points_h.T).T[:, :2]


def shape_outline(kind: str, center, half_width: float, half_height: float, rotation_deg: float = 0.0):
    """
    Places the unit outline of ``kind`` on the surface.

    Args:
        kind: One of the keys of UNIT_OUTLINES
        center: (x, y) centre in surface pixels
        half_width: Half extent along the shape's own x axis
        half_height: Half extent along the shape's own y axis
        rotation_deg: Rotation in degrees, negative is counter-clockwise on screen

    Returns:
        Tuple of ((N, 2) point array, closed flag)

    Raises:
        ValueError: If ``kind`` has no outline

    Examples:
        >>> points, closed = shape_outline("square", (50, 50), 10, 10)
        >>> points[0]
        array([40., 40.])
    """
    if kind not in UNIT_OUTLINES:
        raise ValueError(f"Unknown shape kind: {kind}")
    unit_points, closed = UNIT_OUTLINES[kind]
    matrix = _make_affine_matrix(half_width, half_height, math.radians(rotation_deg), center[0], center[1])
    return _apply_transform(unit_points, matrix), closed
