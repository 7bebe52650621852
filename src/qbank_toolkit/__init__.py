"""Top-level package for the question bank toolkit.

Provides subpackages:
- qbank_toolkit.analysis – guideline analysis and rule reconciliation
- qbank_toolkit.answers – answer alternatives, requirements and formats
- qbank_toolkit.validation – pre-import question validation
- qbank_toolkit.core – models, schema checks and persistence
- qbank_toolkit.common – sanitization and exam board helpers
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("qbank-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
