import numpy as np
from .core import SceneNode
from .material import to_rgb

class AmbientLight(SceneNode):
    """Uniform light that reaches every surface equally."""
    def __init__(self, color=0xffffff, intensity: float = 1.0):
        """
        Args:
            color: Light color. Hex int, '#rrggbb' or (r, g, b).
            intensity (float, optional): Brightness multiplier. Defaults to 1.0.
        """
        super().__init__(name="ambient_light")
        self.rgb = to_rgb(color)
        self.intensity = float(intensity)

    def radiance(self) -> np.ndarray:
        return np.array(self.rgb) * self.intensity

class DirectionalLight(SceneNode):
    """
    Parallel light shining from `position` towards the origin.

    Only the direction of the position vector matters, not its length.
    """
    def __init__(self, color=0xffffff, intensity: float = 1.0, position=(0, 1, 0)):
        super().__init__(position=position, name="directional_light")
        if np.linalg.norm(self.position) == 0:
            raise ValueError("DirectionalLight position cannot be the origin")
        self.rgb = to_rgb(color)
        self.intensity = float(intensity)

    def radiance(self) -> np.ndarray:
        return np.array(self.rgb) * self.intensity

    def direction(self, world_matrix=None) -> np.ndarray:
        """Unit vector pointing from the surface towards the light."""
        p = self.position if world_matrix is None else world_matrix[:3, 3]
        return p / np.linalg.norm(p)
