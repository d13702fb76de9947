"""
Architectural tests — enforce layer boundaries.

These tests verify that the codebase maintains proper separation of concerns:
- workspace/ is plain file I/O with no knowledge of backends or operations
- adapters/ must not depend on tools/ or the front ends
- tools/ must not depend on the front ends (dispatcher, server, cli)

This keeps handlers testable with a fake backend and no MCP session.
"""

import ast
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent

FRONT_ENDS = {"dispatcher", "server", "cli"}

# Layers and their forbidden imports
LAYER_RULES = {
    "workspace": {"adapters", "tools", "mcp"} | FRONT_ENDS,
    "adapters": {"tools", "mcp"} | FRONT_ENDS,
    "tools": {"adapters", "mcp"} | FRONT_ENDS,
    "resources": {"tools", "mcp"} | FRONT_ENDS,
}


def get_imports_from_file(filepath: Path) -> set[str]:
    """Extract all import names from a Python file."""
    try:
        with open(filepath) as f:
            tree = ast.parse(f.read(), filename=str(filepath))
    except SyntaxError:
        return set()

    imports = set()

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.add(alias.name.split(".")[0])
        elif isinstance(node, ast.ImportFrom):
            if node.module and node.level == 0:
                imports.add(node.module.split(".")[0])

    return imports


def get_python_files(directory: Path) -> list[Path]:
    """Get all Python files in a directory (non-recursive for top-level packages)."""
    if not directory.exists():
        return []
    return list(directory.glob("*.py"))


class TestLayerBoundaries:
    """Verify that layer boundaries are respected."""

    @pytest.mark.parametrize("layer,forbidden", list(LAYER_RULES.items()))
    def test_layer_does_not_import_forbidden(self, layer: str, forbidden: set[str]) -> None:
        """Each layer must not import from its forbidden layers."""
        layer_dir = PROJECT_ROOT / layer
        violations = []

        for filepath in get_python_files(layer_dir):
            imports = get_imports_from_file(filepath)
            bad_imports = imports & forbidden

            if bad_imports:
                violations.append(
                    f"{filepath.name} imports {bad_imports}"
                )

        assert not violations, (
            f"Layer '{layer}' has forbidden imports:\n" +
            "\n".join(f"  - {v}" for v in violations)
        )

    def test_only_server_speaks_mcp(self) -> None:
        """The MCP SDK is confined to server.py."""
        offenders = [
            path.name
            for path in PROJECT_ROOT.glob("*.py")
            if path.name != "server.py" and "mcp" in get_imports_from_file(path)
        ]
        assert not offenders, f"MCP imports outside server.py: {offenders}"

    def test_settings_is_only_env_reader(self) -> None:
        """os.getenv / os.environ appear only in settings.py."""
        offenders = []
        sources = list(PROJECT_ROOT.glob("*.py"))
        for layer in LAYER_RULES:
            sources += get_python_files(PROJECT_ROOT / layer)
        for path in sources:
            if path.name == "settings.py":
                continue
            source = path.read_text()
            if "os.getenv" in source or "os.environ" in source:
                offenders.append(str(path.relative_to(PROJECT_ROOT)))
        assert not offenders, f"Environment read outside settings.py: {offenders}"


class TestPackageStructure:
    """Verify expected package structure exists."""

    @pytest.mark.parametrize("package", ["tools", "workspace"])
    def test_package_has_init(self, package: str) -> None:
        """Each package must have an __init__.py."""
        init_file = PROJECT_ROOT / package / "__init__.py"
        assert init_file.exists(), f"{package}/__init__.py missing"
