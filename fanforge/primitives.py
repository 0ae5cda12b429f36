import numpy as np
from .core import SceneNode
from .material import PhongMaterial

# --- Geometry ---

class Geometry:
    """
    Flat-shaded triangle geometry.

    `positions` and `normals` are (N, 3) float32 arrays, `indices` is an
    (M, 3) int32 array of triangles. Every face has its own vertices so that
    normals stay per-face.
    """
    def __init__(self, positions, normals, indices):
        self.positions = np.asarray(positions, dtype='f4').reshape(-1, 3)
        self.normals = np.asarray(normals, dtype='f4').reshape(-1, 3)
        self.indices = np.asarray(indices, dtype='i4').reshape(-1, 3)
        if self.positions.shape != self.normals.shape:
            raise ValueError("Geometry needs exactly one normal per vertex")

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices)

    def interleaved(self) -> np.ndarray:
        """Returns vertex data as [x, y, z, nx, ny, nz] rows for upload."""
        return np.hstack([self.positions, self.normals]).astype('f4')

    def bounds(self):
        return self.positions.min(axis=0), self.positions.max(axis=0)

class _GeometryBuilder:
    def __init__(self):
        self.positions = []
        self.normals = []
        self.indices = []

    def add_polygon(self, vertices, outward):
        """
        Adds a planar convex polygon as a triangle fan.

        The winding is chosen so the face normal points along `outward`.
        """
        verts = np.array(vertices, dtype=float)
        # Collapsed edges (cone tips) would yield zero-area triangles.
        verts = np.array([v for i, v in enumerate(verts) if not np.allclose(v, verts[i - 1])])
        if len(verts) < 3:
            return
        normal = np.zeros(3)
        for i in range(len(verts)):
            cur, nxt = verts[i], verts[(i + 1) % len(verts)]
            normal += np.cross(cur, nxt)
        length = np.linalg.norm(normal)
        if length < 1e-12:
            return
        normal /= length
        if np.dot(normal, outward) < 0:
            verts = verts[::-1]
            normal = -normal

        base = len(self.positions)
        for v in verts:
            self.positions.append(v)
            self.normals.append(normal)
        for i in range(1, len(verts) - 1):
            self.indices.append((base, base + i, base + i + 1))

    def build(self) -> Geometry:
        return Geometry(self.positions, self.normals, self.indices)

def cylinder_geometry(radius_top: float = 1.0, radius_bottom: float = 1.0, height: float = 1.0, radial_segments: int = 8) -> Geometry:
    """
    Builds a capped cylinder (or frustum) centered at the origin along the Y axis.

    Args:
        radius_top (float): Radius of the top cap. 0 gives a cone.
        radius_bottom (float): Radius of the bottom cap.
        height (float): Total height along Y.
        radial_segments (int): Number of sides around the circumference.
    """
    if radial_segments < 3:
        raise ValueError("A cylinder needs at least 3 radial segments")
    if height <= 0:
        raise ValueError("Cylinder height must be positive")
    if radius_top < 0 or radius_bottom < 0 or (radius_top == 0 and radius_bottom == 0):
        raise ValueError("Cylinder radii must be non-negative and not both zero")

    half = height / 2.0
    theta = np.linspace(0.0, 2.0 * np.pi, radial_segments + 1)
    sin_t, cos_t = np.sin(theta), np.cos(theta)
    top = np.stack([radius_top * sin_t, np.full_like(theta, half), radius_top * cos_t], axis=-1)
    bottom = np.stack([radius_bottom * sin_t, np.full_like(theta, -half), radius_bottom * cos_t], axis=-1)

    builder = _GeometryBuilder()
    for i in range(radial_segments):
        mid = 0.5 * (theta[i] + theta[i + 1])
        outward = np.array([np.sin(mid), 0.0, np.cos(mid)])
        builder.add_polygon([top[i], bottom[i], bottom[i + 1], top[i + 1]], outward)

    if radius_top > 0:
        builder.add_polygon(top[:-1], np.array([0.0, 1.0, 0.0]))
    if radius_bottom > 0:
        builder.add_polygon(bottom[:-1], np.array([0.0, -1.0, 0.0]))
    return builder.build()

def box_geometry(width: float = 1.0, height: float = 1.0, depth: float = 1.0) -> Geometry:
    """
    Builds an axis-aligned box centered at the origin.

    Args:
        width (float): Size along X.
        height (float): Size along Y.
        depth (float): Size along Z.
    """
    if width <= 0 or height <= 0 or depth <= 0:
        raise ValueError("Box dimensions must be positive")
    hx, hy, hz = width / 2.0, height / 2.0, depth / 2.0

    builder = _GeometryBuilder()
    for axis in range(3):
        for sign in (1.0, -1.0):
            outward = np.zeros(3)
            outward[axis] = sign
            u, v = [a for a in range(3) if a != axis]
            half = np.array([hx, hy, hz])
            corners = []
            for du, dv in ((-1, -1), (1, -1), (1, 1), (-1, 1)):
                c = np.zeros(3)
                c[axis] = sign * half[axis]
                c[u] = du * half[u]
                c[v] = dv * half[v]
                corners.append(c)
            builder.add_polygon(corners, outward)
    return builder.build()

# --- Mesh ---

class Mesh(SceneNode):
    """A scene node that draws a geometry with a material."""
    def __init__(self, geometry: Geometry, material: PhongMaterial = None, position=(0, 0, 0), rotation=(0, 0, 0), name: str = None):
        super().__init__(position=position, rotation=rotation, name=name)
        self.geometry = geometry
        self.material = material if material else PhongMaterial()

def cylinder(radius_top: float = 1.0, radius_bottom: float = 1.0, height: float = 1.0, radial_segments: int = 8, material: PhongMaterial = None, **kwargs) -> Mesh:
    """
    Creates a cylinder mesh. Extra keyword arguments go to `Mesh`.

    Example:
        >>> from fanforge import cylinder, PhongMaterial
        >>> stand = cylinder(0.25, 0.25, 3, 8, PhongMaterial(0x3399ff), position=(0, 1.5, 0))
    """
    return Mesh(cylinder_geometry(radius_top, radius_bottom, height, radial_segments), material, **kwargs)

def box(width: float = 1.0, height: float = 1.0, depth: float = 1.0, material: PhongMaterial = None, **kwargs) -> Mesh:
    """Creates a box mesh. Extra keyword arguments go to `Mesh`."""
    return Mesh(box_geometry(width, height, depth), material, **kwargs)
