"""Packaging metadata stays in sync with the goutline package."""
import re
import sys
from pathlib import Path

PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


def _pyproject_project_table() -> dict:
    if sys.version_info >= (3, 11):
        import tomllib
        with open(PYPROJECT, "rb") as f:
            return tomllib.load(f)["project"]
    # Python 3.10: regex for the two fields we check
    content = PYPROJECT.read_text(encoding="utf-8")
    version = re.search(r'^version\s*=\s*"([^"]+)"', content, re.MULTILINE)
    script = re.search(r'^goutline\s*=\s*"([^"]+)"', content, re.MULTILINE)
    return {
        "version": version.group(1) if version else None,
        "scripts": {"goutline": script.group(1)} if script else {},
    }


def test_version_sync():
    """__init__.py and pyproject.toml declare the same version."""
    import goutline

    project = _pyproject_project_table()
    assert goutline.__version__ == project["version"], (
        f"Version mismatch: __init__.py={goutline.__version__} "
        f"pyproject.toml={project['version']}"
    )


def test_console_script_targets_cli_main():
    from goutline import cli

    project = _pyproject_project_table()
    assert project["scripts"]["goutline"] == "goutline.cli:main"
    assert callable(cli.main)
