import numpy as np

class PerspectiveCamera:
    """A pinhole camera with a vertical field of view, looking at a target."""

    def __init__(self, fovy: float = 60.0, aspect: float = 16 / 9, near: float = 0.1, far: float = 20.0, position=(10, 10, 10), target=(0, 0, 0), up=(0, 1, 0)):
        """
        Initializes the camera.

        Args:
            fovy (float, optional): Vertical field of view in degrees. Defaults to 60.
            aspect (float, optional): Viewport width divided by height.
            near (float, optional): Near clipping distance. Defaults to 0.1.
            far (float, optional): Far clipping distance. Defaults to 20.0.
            position (tuple, optional): Camera position. Defaults to (10, 10, 10).
            target (tuple, optional): The point the camera looks at. Defaults to the origin.
            up (tuple, optional): World up direction. Defaults to +Y.
        """
        if not 0 < fovy < 180:
            raise ValueError("fovy must be between 0 and 180 degrees")
        if not 0 < near < far:
            raise ValueError("Clipping planes must satisfy 0 < near < far")
        self.fovy = float(fovy)
        self.near = float(near)
        self.far = float(far)
        self.aspect = 1.0
        self.set_aspect(aspect)
        self.position = np.array(position, dtype=float)
        self.target = np.array(target, dtype=float)
        self.up = np.array(up, dtype=float)

    def set_aspect(self, aspect: float):
        """Updates the aspect ratio, e.g. after a window resize."""
        if aspect <= 0:
            raise ValueError("Aspect ratio must be positive")
        self.aspect = float(aspect)

    def look_at(self, target):
        """Points the camera at `target`, keeping its position."""
        self.target = np.array(target, dtype=float)

    def view_matrix(self) -> np.ndarray:
        f = self.target - self.position
        f = f / (np.linalg.norm(f) or 1.0)
        s = np.cross(f, self.up)
        s = s / (np.linalg.norm(s) or 1.0)
        u = np.cross(s, f)
        m = np.eye(4)
        m[0, :3] = s
        m[1, :3] = u
        m[2, :3] = -f
        m[:3, 3] = -m[:3, :3] @ self.position
        return m

    def projection_matrix(self) -> np.ndarray:
        f = 1.0 / np.tan(np.radians(self.fovy) / 2.0)
        near, far = self.near, self.far
        m = np.zeros((4, 4))
        m[0, 0] = f / self.aspect
        m[1, 1] = f
        m[2, 2] = (far + near) / (near - far)
        m[2, 3] = 2.0 * far * near / (near - far)
        m[3, 2] = -1.0
        return m


class OrbitControls:
    """
    Orbits a camera around its target from mouse input.

    Left drag rotates, right drag pans, the scroll wheel zooms. Input handlers
    only accumulate deltas; `update()` applies them to the camera.
    """
    ROTATE, PAN = 0, 1

    def __init__(self, camera: PerspectiveCamera, rotate_speed: float = 1.0, zoom_speed: float = 0.95, min_distance: float = 0.5, max_distance: float = 18.0):
        self.camera = camera
        self.rotate_speed = rotate_speed
        self.zoom_speed = zoom_speed
        self.min_distance = min_distance
        self.max_distance = max_distance
        self.enabled = True
        self.viewport_height = 720

        self._state = None
        self._cursor = None
        self._theta_delta = 0.0
        self._phi_delta = 0.0
        self._zoom_factor = 1.0
        self._pan_offset = np.zeros(3)

    # --- Input handlers ---

    def on_mouse_button(self, button: int, pressed: bool, x: float, y: float):
        if not self.enabled:
            return
        if pressed:
            self._state = self.ROTATE if button == 0 else self.PAN
            self._cursor = (x, y)
        else:
            self._state = None
            self._cursor = None

    def on_cursor(self, x: float, y: float):
        if not self.enabled or self._state is None or self._cursor is None:
            return
        dx, dy = x - self._cursor[0], y - self._cursor[1]
        self._cursor = (x, y)
        if self._state == self.ROTATE:
            self.rotate(dx, dy)
        else:
            self.pan(dx, dy)

    def on_scroll(self, dy: float):
        if not self.enabled or dy == 0:
            return
        self.zoom(dy)

    # --- Operations ---

    def rotate(self, dx: float, dy: float):
        """Rotates by a drag of (dx, dy) pixels."""
        scale = 2.0 * np.pi * self.rotate_speed / max(self.viewport_height, 1)
        self._theta_delta -= dx * scale
        self._phi_delta -= dy * scale

    def zoom(self, steps: float):
        """Positive steps move towards the target."""
        self._zoom_factor *= self.zoom_speed ** steps

    def pan(self, dx: float, dy: float):
        """Moves target and camera parallel to the view plane by (dx, dy) pixels."""
        cam = self.camera
        offset = cam.position - cam.target
        distance = np.linalg.norm(offset) * np.tan(np.radians(cam.fovy) / 2.0)
        scale = 2.0 * distance / max(self.viewport_height, 1)
        view = cam.view_matrix()
        right, up = view[0, :3], view[1, :3]
        self._pan_offset += -dx * scale * right + dy * scale * up

    def update(self) -> bool:
        """Applies pending input to the camera. Returns True if it moved."""
        changed = (self._theta_delta != 0.0 or self._phi_delta != 0.0
                   or self._zoom_factor != 1.0 or np.any(self._pan_offset))
        if not changed:
            return False

        cam = self.camera
        offset = cam.position - cam.target
        radius = np.linalg.norm(offset)
        theta = np.arctan2(offset[0], offset[2])
        phi = np.arccos(np.clip(offset[1] / radius, -1.0, 1.0)) if radius > 0 else np.pi / 2

        eps = 1e-6
        theta += self._theta_delta
        phi = np.clip(phi + self._phi_delta, eps, np.pi - eps)
        radius = np.clip(radius * self._zoom_factor, self.min_distance, self.max_distance)

        cam.target = cam.target + self._pan_offset
        cam.position = cam.target + radius * np.array([
            np.sin(phi) * np.sin(theta),
            np.cos(phi),
            np.sin(phi) * np.cos(theta),
        ])

        self._theta_delta = 0.0
        self._phi_delta = 0.0
        self._zoom_factor = 1.0
        self._pan_offset = np.zeros(3)
        return True
