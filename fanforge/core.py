import numpy as np

X, Y, Z = np.array([1,0,0]), np.array([0,1,0]), np.array([0,0,1])

def rotation_matrix(axis, angle: float) -> np.ndarray:
    """Returns a 4x4 rotation matrix around `axis` by `angle` radians."""
    ax = np.array(axis, dtype=float)
    if np.linalg.norm(ax) == 0: raise ValueError("Rotation axis cannot be zero vector")
    ax /= np.linalg.norm(ax)
    c, s = np.cos(angle), np.sin(angle)
    kx, ky, kz = ax
    K = np.array([[0, -kz, ky], [kz, 0, -kx], [-ky, kx, 0]])
    m = np.eye(4)
    m[:3, :3] = np.eye(3) + s * K + (1 - c) * (K @ K)
    return m

def euler_matrix(rotation) -> np.ndarray:
    """
    Returns the 4x4 matrix for an (x, y, z) Euler rotation in 'XYZ' order,
    i.e. Rx @ Ry @ Rz.
    """
    rx, ry, rz = rotation
    return rotation_matrix(X, rx) @ rotation_matrix(Y, ry) @ rotation_matrix(Z, rz)

def translation_matrix(offset) -> np.ndarray:
    m = np.eye(4)
    m[:3, 3] = offset
    return m

def scale_matrix(factor) -> np.ndarray:
    if isinstance(factor, (int, float)):
        factor = (factor, factor, factor)
    return np.diag([factor[0], factor[1], factor[2], 1.0])


class SceneNode:
    """
    Base class for everything placed in the scene graph.

    A node owns a local transform (position, Euler rotation, scale) and a list
    of children. Parents exclusively own their children: adding a node that
    already has a parent moves it.
    """

    def __init__(self, position=(0, 0, 0), rotation=(0, 0, 0), scale=(1, 1, 1), name: str = None):
        self.name = name
        self.position = np.array(position, dtype=float)
        self.rotation = np.array(rotation, dtype=float)
        self.scale = np.array(scale, dtype=float)
        self.parent = None
        self.children = []

    def __repr__(self):
        label = f" '{self.name}'" if self.name else ""
        return f"<{type(self).__name__}{label} children={len(self.children)}>"

    def add(self, *children: 'SceneNode') -> 'SceneNode':
        """Attaches children to this node and returns self."""
        for child in children:
            if child is self:
                raise ValueError("A node cannot be its own child")
            if child.parent is not None:
                child.parent.remove(child)
            child.parent = self
            self.children.append(child)
        return self

    def remove(self, child: 'SceneNode'):
        self.children.remove(child)
        child.parent = None

    def local_matrix(self) -> np.ndarray:
        return translation_matrix(self.position) @ euler_matrix(self.rotation) @ scale_matrix(self.scale)

    def world_matrix(self) -> np.ndarray:
        """Composes local matrices from the root down to this node."""
        m = self.local_matrix()
        node = self.parent
        while node is not None:
            m = node.local_matrix() @ m
            node = node.parent
        return m

    def world_position(self) -> np.ndarray:
        return self.world_matrix()[:3, 3]

    def traverse(self, parent_matrix=None):
        """
        Walks the subtree depth-first, parents before children.

        Yields (node, world_matrix) pairs. `parent_matrix` is the world matrix
        of this node's parent; it defaults to the identity.
        """
        if parent_matrix is None:
            parent_matrix = np.eye(4)
        world = parent_matrix @ self.local_matrix()
        yield self, world
        for child in self.children:
            yield from child.traverse(world)

    def find(self, name: str):
        """Returns the first node in the subtree with the given name, or None."""
        for node, _ in self.traverse():
            if node.name == name:
                return node
        return None


class Group(SceneNode):
    """A transform-only node. Used as a pivot for its children."""

    def __init__(self, *children: SceneNode, position=(0, 0, 0), rotation=(0, 0, 0), name: str = None):
        super().__init__(position=position, rotation=rotation, name=name)
        if children:
            self.add(*children)
