import pytest
from unittest.mock import MagicMock, patch
from fanforge import build_fan

@pytest.fixture
def fan():
    """A freshly built fan with default parameters."""
    return build_fan()

@pytest.fixture
def mock_gl():
    """
    Replaces `glfw` and `moderngl` with mocks so renderer code runs without a
    display. The window closes after two frames unless the test reconfigures
    `window_should_close`.
    """
    mock_glfw = MagicMock()
    mock_glfw.init.return_value = True
    mock_glfw.window_should_close.side_effect = [False, False, True]
    mock_glfw.get_framebuffer_size.return_value = (800, 600)
    mock_glfw.get_cursor_pos.return_value = (0.0, 0.0)
    mock_glfw.get_key_name.return_value = None
    mock_moderngl = MagicMock()
    with patch.dict('sys.modules', {'glfw': mock_glfw, 'moderngl': mock_moderngl}):
        yield mock_glfw, mock_moderngl

