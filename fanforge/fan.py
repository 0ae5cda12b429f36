import numpy as np
from .core import Group
from .camera import PerspectiveCamera
from .light import AmbientLight, DirectionalLight
from .material import PhongMaterial
from .primitives import cylinder, box
from .scene import Scene
from .animation import FanAnimator

CAMERA_PARAM = {
    'fovy': 60.0,
    'near': 0.1,
    'far': 20.0,
    'position': (10.0, 10.0, 10.0),
    'target': (0.0, 0.0, 0.0),
}

RENDERER_PARAM = {
    'clear_color': 0x666666,
    'width': 1280,
    'height': 720,
}

# Only the direction of `position` matters for a directional light.
DIRECTIONAL_LIGHT_PARAM = {
    'color': 0xffffff,
    'intensity': 1.0,
    'position': (1.0, 1.0, 1.0),
}

AMBIENT_LIGHT_PARAM = {
    'color': 0xffffff,
    'intensity': 0.2,
}

MATERIAL_COLORS = {
    'red': 0xff3333,
    'green': 0x228822,
    'blue': 0x3399ff,
}

# (radius_top, radius_bottom, height, radial_segments)
BASE_PARAM = (1.0, 1.0, 0.25, 8)
STAND_PARAM = (0.25, 0.25, 3.0, 8)
BODY_PARAM = (0.5, 0.5, 2.0, 8)
# (width, height, depth)
BLADE_PARAM = (1.0, 0.05, 2.5)

BLADE_COUNT = 3
BLADE_TILT = 0.25
# Distance of the blade hub from the body center, along the body axis.
BLADE_HUB_OFFSET = 1.25


class FanParams:
    """
    Geometric and material constants for the fan scene.

    Every keyword overrides the matching module-level default; dict-valued
    settings are merged key by key.
    """
    def __init__(self, camera=None, renderer=None, directional_light=None, ambient_light=None, colors=None,
                 base=BASE_PARAM, stand=STAND_PARAM, body=BODY_PARAM, blade=BLADE_PARAM,
                 blade_count: int = BLADE_COUNT, blade_tilt: float = BLADE_TILT, blade_hub_offset: float = BLADE_HUB_OFFSET):
        self.camera = {**CAMERA_PARAM, **(camera or {})}
        self.renderer = {**RENDERER_PARAM, **(renderer or {})}
        self.directional_light = {**DIRECTIONAL_LIGHT_PARAM, **(directional_light or {})}
        self.ambient_light = {**AMBIENT_LIGHT_PARAM, **(ambient_light or {})}
        self.colors = {**MATERIAL_COLORS, **(colors or {})}
        self.base = tuple(base)
        self.stand = tuple(stand)
        self.body = tuple(body)
        self.blade = tuple(blade)
        if self.renderer['width'] <= 0 or self.renderer['height'] <= 0:
            raise ValueError("Window width and height must be positive")
        if blade_count < 1:
            raise ValueError("A fan needs at least one blade")
        self.blade_count = blade_count
        self.blade_tilt = blade_tilt
        self.blade_hub_offset = blade_hub_offset

    @property
    def aspect(self) -> float:
        return self.renderer['width'] / self.renderer['height']


class Fan:
    """
    The built fan scene together with the nodes the animation drives.

    Attributes:
        scene (Scene): Root of the scene graph, with camera and clear color.
        body_pivot (Group): Swings around its Z axis.
        blade_group (Group): Spins around its Y axis.
        blade_pivots (list[Group]): Static angular offsets of each blade.
        blades (list[Mesh]): One mesh per blade.
    """
    def __init__(self, scene: Scene, body_pivot: Group, blade_group: Group, blade_pivots, blades, params: FanParams = None):
        self.scene = scene
        self.body_pivot = body_pivot
        self.blade_group = blade_group
        self.blade_pivots = list(blade_pivots)
        self.blades = list(blades)
        self.params = params if params else FanParams()
        # Animated angles are added on top of these rest rotations.
        self.body_pivot_rest = body_pivot.rotation.copy()
        self.blade_group_rest = blade_group.rotation.copy()

    @property
    def camera(self) -> PerspectiveCamera:
        return self.scene.camera

    def animator(self, **kwargs) -> FanAnimator:
        """Returns a `FanAnimator` driving this fan. Keywords set the step sizes."""
        return FanAnimator(self, **kwargs)

    def render(self, animator: FanAnimator = None, **kwargs) -> FanAnimator:
        """
        Opens the interactive window. Hold space to run the fan.

        Keyword arguments are passed to `Scene.render`.
        """
        animator = animator if animator else self.animator()
        kwargs.setdefault('width', self.params.renderer['width'])
        kwargs.setdefault('height', self.params.renderer['height'])
        self.scene.render(animator=animator, **kwargs)
        return animator


def build_fan(params: FanParams = None) -> Fan:
    """
    Builds the fan scene graph.

    The root holds the two lights, the base, the stand and the body pivot.
    The body pivot holds the body mesh and the blade group, which holds one
    pivot per blade at equal angular offsets, each parenting a blade mesh.
    """
    p = params or FanParams()

    cam = p.camera
    camera = PerspectiveCamera(cam['fovy'], p.aspect, cam['near'], cam['far'], position=cam['position'])
    camera.look_at(cam['target'])
    scene = Scene(camera=camera, clear_color=p.renderer['clear_color'])

    scene.add(DirectionalLight(**p.directional_light))
    scene.add(AmbientLight(**p.ambient_light))

    materials = {name: PhongMaterial(color) for name, color in p.colors.items()}
    blue = materials['blue']

    base_height = p.base[2]
    stand_height = p.stand[2]
    scene.add(cylinder(*p.base, material=blue, position=(0, base_height / 2.0, 0), name="base"))
    scene.add(cylinder(*p.stand, material=blue, position=(0, stand_height / 2.0, 0), name="stand"))

    # The body cylinder lies along Z once the pivot tips it forward.
    body_pivot = Group(position=(0, stand_height, 0), rotation=(np.pi / 2, 0, 0), name="body_pivot")
    body_pivot.add(cylinder(*p.body, material=blue, name="body"))
    scene.add(body_pivot)

    blade_group = Group(position=(0, p.blade_hub_offset, 0), rotation=(0, np.pi / 2, 0), name="blade_group")
    body_pivot.add(blade_group)

    blade_colors = ['red', 'green', 'blue']
    blade_length = p.blade[2]
    blade_pivots, blades = [], []
    for i in range(p.blade_count):
        pivot = Group(rotation=(0, i * (2 * np.pi / p.blade_count), p.blade_tilt), name=f"blade_pivot_{i + 1}")
        blade = box(*p.blade, material=materials[blade_colors[i % len(blade_colors)]],
                    position=(0, 0, blade_length / 2.0), name=f"blade_{i + 1}")
        pivot.add(blade)
        blade_group.add(pivot)
        blade_pivots.append(pivot)
        blades.append(blade)

    return Fan(scene, body_pivot, blade_group, blade_pivots, blades, p)
