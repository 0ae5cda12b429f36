import sys
import os
import numpy as np
from .core import SceneNode, Group
from .camera import PerspectiveCamera, OrbitControls
from .light import AmbientLight, DirectionalLight
from .material import to_rgb
from .primitives import Mesh
from .loader import assemble_mesh_program

class Scene:
    """
    Holds the scene graph root, the camera and the background color.
    """
    def __init__(self, root: SceneNode = None, camera: PerspectiveCamera = None, clear_color=0x666666):
        self.root = root if root else Group(name="root")
        self.camera = camera if camera else PerspectiveCamera()
        self.clear_rgb = to_rgb(clear_color)

    def add(self, *nodes: SceneNode) -> 'Scene':
        self.root.add(*nodes)
        return self

    def meshes(self):
        """Returns (mesh, world_matrix) pairs for every mesh in the graph."""
        return [(node, world) for node, world in self.root.traverse() if isinstance(node, Mesh)]

    def lights(self):
        """
        Returns (ambient, directional) where ambient is the summed ambient
        radiance and directional is a list of (light, world_matrix) pairs.
        """
        ambient = np.zeros(3)
        directional = []
        for node, world in self.root.traverse():
            if isinstance(node, AmbientLight):
                ambient += node.radiance()
            elif isinstance(node, DirectionalLight):
                directional.append((node, world))
        return ambient, directional

    def render(self, animator=None, width=1280, height=720, save_frame=None, verbose=True):
        """
        Opens a window and renders the scene until it is closed.

        Args:
            animator (optional): Object with `tick()` and `on_key(key, pressed)`,
                                 driven once per frame and on key input.
            width (int, optional): Window width in pixels. Defaults to 1280.
            height (int, optional): Window height in pixels. Defaults to 720.
            save_frame (str, optional): If given, renders a single frame off-screen
                                        to this image path instead of opening a window.
            verbose (bool, optional): Print informational messages. Defaults to True.
        """
        if save_frame:
            try:
                renderer = NativeRenderer(self, width, height, headless=True, verbose=verbose)
                renderer.render_to_file(save_frame)
            except Exception as e:
                print(f"ERROR: Failed to save frame: {e}", file=sys.stderr)
            return

        if not os.environ.get("DISPLAY") and sys.platform == 'linux':
            print("WARNING: No display detected. Window creation may fail.", file=sys.stderr)
        renderer = NativeRenderer(self, width, height, verbose=verbose)
        if animator is not None:
            renderer.add_frame_callback(animator.tick)
            renderer.add_key_callback(animator.on_key)
        try:
            renderer.run()
        except Exception as e:
            print(f"ERROR: Failed to launch window: {e}", file=sys.stderr)


class NativeRenderer:
    """
    OpenGL renderer using ModernGL and GLFW.

    The frame loop is explicit: each iteration polls input, lets the orbit
    controls move the camera, runs the registered frame callbacks and draws.
    """
    def __init__(self, scene: Scene, width=1280, height=720, title="fanforge", headless=False, verbose=True):
        self.scene = scene
        self.width = width
        self.height = height
        self.title = title
        self.headless = headless
        self.verbose = verbose

        self.window = None
        self.ctx = None
        self.program = None
        self.controls = OrbitControls(scene.camera)
        self.controls.viewport_height = height

        self._buffers = {}
        self._frame_callbacks = []
        self._key_callbacks = []
        self.frame_count = 0

    def _info(self, message: str):
        if self.verbose:
            print(f"INFO: {message}")

    # --- Hooks ---

    def add_frame_callback(self, callback):
        """Registers `callback()` to run once per frame, before drawing."""
        self._frame_callbacks.append(callback)

    def add_key_callback(self, callback):
        """Registers `callback(key_name, pressed)` for key presses and releases."""
        self._key_callbacks.append(callback)

    # --- Setup ---

    def _init_context(self):
        import moderngl
        import glfw
        if not glfw.init(): raise RuntimeError("Could not initialize GLFW")

        glfw.window_hint(glfw.VISIBLE, not self.headless)
        glfw.window_hint(glfw.RESIZABLE, False if self.headless else True)
        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 3)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 3)
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, True)

        self.window = glfw.create_window(self.width, self.height, self.title, None, None)
        if not self.window: raise RuntimeError("Could not create GLFW window.")

        glfw.make_context_current(self.window)
        glfw.swap_interval(1)
        self.ctx = moderngl.create_context()
        self.ctx.enable(moderngl.DEPTH_TEST | moderngl.CULL_FACE)

    def _compile_shader(self):
        """Builds the Phong mesh program. Keeps the previous program on failure."""
        vertex_shader, fragment_shader = assemble_mesh_program()
        try:
            prog = self.ctx.program(vertex_shader=vertex_shader, fragment_shader=fragment_shader)
            self._info("Shader compiled successfully.")
            return prog
        except Exception as e:
            print(f"ERROR: Shader compilation failed. Details:\n{e}", file=sys.stderr)
            return self.program

    def _upload_meshes(self):
        """Creates one vertex array per distinct geometry in the scene."""
        for mesh, _ in self.scene.meshes():
            key = id(mesh.geometry)
            if key in self._buffers:
                continue
            geometry = mesh.geometry
            vbo = self.ctx.buffer(geometry.interleaved().tobytes())
            ibo = self.ctx.buffer(geometry.indices.tobytes())
            vao = self.ctx.vertex_array(self.program, [(vbo, '3f 3f', 'in_position', 'in_normal')], index_buffer=ibo)
            self._buffers[key] = (vbo, ibo, vao)
        self._info(f"Uploaded {len(self._buffers)} geometries.")

    def _install_callbacks(self):
        import glfw

        key_names = {glfw.KEY_SPACE: 'space', glfw.KEY_ESCAPE: 'escape', glfw.KEY_ENTER: 'enter'}

        def on_key(window, key, scancode, action, mods):
            if action == glfw.REPEAT:
                return
            name = key_names.get(key) or glfw.get_key_name(key, scancode) or str(key)
            pressed = action == glfw.PRESS
            if name == 'escape' and pressed:
                glfw.set_window_should_close(window, True)
            self.on_key(name, pressed)

        def on_mouse_button(window, button, action, mods):
            x, y = glfw.get_cursor_pos(window)
            self.controls.on_mouse_button(button, action == glfw.PRESS, x, y)

        def on_cursor(window, x, y):
            self.controls.on_cursor(x, y)

        def on_scroll(window, dx, dy):
            self.controls.on_scroll(dy)

        def on_resize(window, width, height):
            self.on_resize(width, height)

        glfw.set_key_callback(self.window, on_key)
        glfw.set_mouse_button_callback(self.window, on_mouse_button)
        glfw.set_cursor_pos_callback(self.window, on_cursor)
        glfw.set_scroll_callback(self.window, on_scroll)
        glfw.set_framebuffer_size_callback(self.window, on_resize)

    # --- Events ---

    def on_key(self, key: str, pressed: bool):
        for callback in self._key_callbacks:
            callback(key, pressed)

    def on_resize(self, width: int, height: int):
        """Matches the viewport and camera aspect to the framebuffer size."""
        if width <= 0 or height <= 0:
            # Minimized
            return
        self.width, self.height = width, height
        if self.ctx is not None:
            self.ctx.viewport = (0, 0, width, height)
        self.scene.camera.set_aspect(width / height)
        self.controls.viewport_height = height

    # --- Drawing ---

    def _set_uniform(self, name, value):
        try:
            uniform = self.program[name]
        except KeyError:
            return
        if isinstance(value, np.ndarray) and value.ndim == 2:
            # GLSL matrices are column-major.
            uniform.write(value.T.astype('f4').tobytes())
        else:
            uniform.value = tuple(value) if isinstance(value, (np.ndarray, list)) else value

    def draw(self):
        """Draws the current state of the scene into the bound framebuffer."""
        self.ctx.clear(*self.scene.clear_rgb, depth=1.0)
        camera = self.scene.camera

        self._set_uniform('u_projection', camera.projection_matrix())
        self._set_uniform('u_view', camera.view_matrix())
        self._set_uniform('u_camera_pos', camera.position)

        ambient, directional = self.scene.lights()
        self._set_uniform('u_ambient', ambient)
        if directional:
            light, world = directional[0]
            self._set_uniform('u_light_dir', light.direction(world))
            self._set_uniform('u_light_color', light.radiance())
        else:
            self._set_uniform('u_light_dir', (0.0, 1.0, 0.0))
            self._set_uniform('u_light_color', (0.0, 0.0, 0.0))

        for mesh, world in self.scene.meshes():
            buffers = self._buffers.get(id(mesh.geometry))
            if buffers is None:
                continue
            self._set_uniform('u_model', world)
            self._set_uniform('u_normal_matrix', np.linalg.inv(world[:3, :3]).T)
            material = mesh.material
            self._set_uniform('u_color', material.rgb)
            self._set_uniform('u_specular', material.specular)
            self._set_uniform('u_shininess', material.shininess)
            buffers[2].render()

    def step(self):
        """Runs one frame: camera controls, frame callbacks, then drawing."""
        self.controls.update()
        for callback in self._frame_callbacks:
            callback()
        self.draw()
        self.frame_count += 1

    def run(self):
        import glfw
        try:
            self._init_context()
            self.program = self._compile_shader()
            if self.program is None: return
            self._upload_meshes()
            self._install_callbacks()
            self.on_resize(*glfw.get_framebuffer_size(self.window))

            scene_dirs = len(self.scene.lights()[1])
            if scene_dirs > 1:
                print(f"WARNING: {scene_dirs} directional lights found, only the first is used.", file=sys.stderr)

            while not glfw.window_should_close(self.window):
                glfw.poll_events()
                self.step()
                glfw.swap_buffers(self.window)
            self._info(f"Window closed after {self.frame_count} frames.")
        finally:
            glfw.terminate()

    def render_to_file(self, path):
        """Renders a single frame off-screen and saves it as an image."""
        import glfw
        try:
            from PIL import Image
        except ImportError:
            print("ERROR: Saving frames requires 'Pillow'. Install it with 'pip install fanforge[record]'.", file=sys.stderr)
            return
        try:
            self._init_context()
            self.program = self._compile_shader()
            if self.program is None: return
            self._upload_meshes()
            self.scene.camera.set_aspect(self.width / self.height)

            size = (self.width, self.height)
            fbo = self.ctx.framebuffer(
                color_attachments=[self.ctx.texture(size, 4)],
                depth_attachment=self.ctx.depth_renderbuffer(size),
            )
            fbo.use()
            self.ctx.viewport = (0, 0, self.width, self.height)
            self.draw()

            image = Image.frombytes('RGB', fbo.size, fbo.read(), 'raw', 'RGB', 0, -1)
            image.save(path)
            print(f"Saved frame to {path}")
        finally:
            glfw.terminate()
