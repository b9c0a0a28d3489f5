"""Top-level package for notes-pager.

Lays out numbered Markdown notes into fixed-capacity pages and loads further
notes on demand.

Provides subpackages:
- notes_pager.core – content tree models
- notes_pager.layout – measurement, splitting and pagination engine
- notes_pager.loading – markup conversion, document sources, source loader
- notes_pager.output – append-only presentation surface
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            for line in pyproject.read_text().splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("notes-pager")
    except Exception:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
