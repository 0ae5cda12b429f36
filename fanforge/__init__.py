from .core import SceneNode, Group, X, Y, Z
from .material import PhongMaterial
from .light import AmbientLight, DirectionalLight
from .camera import PerspectiveCamera, OrbitControls
from .primitives import (
    Geometry, Mesh,
    cylinder_geometry, box_geometry,
    cylinder, box,
)
from .scene import Scene, NativeRenderer
from .animation import FanState, FanAnimator, advance, apply_state, INCREASING, DECREASING
from .fan import Fan, FanParams, build_fan
