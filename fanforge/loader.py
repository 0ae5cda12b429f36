import re
from pathlib import Path
from functools import lru_cache

GLSL_DIR = Path(__file__).parent / 'glsl'

# A top-level definition ends at the first closing brace in column 0.
_DEFINITION_RE = re.compile(r"^\w+\s+(\w+)\s*\([^)]*\)\s*\{.*?^\}", re.MULTILINE | re.DOTALL)
_CALL_RE = re.compile(r"\b(\w+)\s*\(")

def parse_glsl_library(content: str) -> dict:
    """Maps each top-level function name in `content` to its full definition."""
    return {match.group(1): match.group(0) for match in _DEFINITION_RE.finditer(content)}

@lru_cache(maxsize=None)
def load_library() -> dict:
    """Parses every .glsl file in the glsl/ directory, in file name order."""
    library = {}
    for glsl_file in sorted(GLSL_DIR.glob('*.glsl')):
        library.update(parse_glsl_library(glsl_file.read_text()))
    return library

def called_functions(source: str, library: dict) -> set:
    """Names of the library functions that `source` calls."""
    return {name for name in _CALL_RE.findall(source) if name in library}

def resolve_dependencies(names, library: dict) -> list:
    """
    Expands `names` with every library function they call, directly or not.

    The result follows declaration order, so callees precede callers as GLSL
    requires.
    """
    missing = set(names) - set(library)
    if missing:
        raise KeyError(f"Unknown GLSL functions: {', '.join(sorted(missing))}")

    needed = set()
    pending = list(names)
    while pending:
        name = pending.pop()
        if name in needed:
            continue
        needed.add(name)
        body = library[name].split('{', 1)[1]
        pending.extend(called_functions(body, library) - needed)
    return [name for name in library if name in needed]

@lru_cache(maxsize=None)
def get_glsl_definitions(required_names: frozenset) -> str:
    """Returns the GLSL source of the named functions and everything they call."""
    library = load_library()
    return "\n\n".join(library[name] for name in resolve_dependencies(required_names, library))

@lru_cache(maxsize=None)
def get_shader_source(filename: str) -> str:
    """Returns the text of a shader stage file such as 'mesh.vert'."""
    path = GLSL_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Shader source '{filename}' not found in {GLSL_DIR}")
    return path.read_text()

def assemble_mesh_program() -> tuple:
    """
    Returns (vertex_shader, fragment_shader) sources for the Phong mesh program.

    The `{lighting}` placeholder in mesh.frag is replaced by the library
    functions the fragment stage calls.
    """
    template = get_shader_source('mesh.frag')
    lighting = get_glsl_definitions(frozenset(called_functions(template, load_library())))
    return get_shader_source('mesh.vert'), template.replace('{lighting}', lighting)
