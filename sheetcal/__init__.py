"""sheetcal - Weekly schedule API backed by a header-keyed spreadsheet

Components:
    sheets/: record mapper and grid storage backends
    api/: FastAPI application exposing the /api/event resource
    config.py: YAML + environment configuration
    logging_config.py: structured logging setup
"""

from pathlib import Path


PROJECT_ROOT = Path(__file__).parent.parent
ARGS_DIR = PROJECT_ROOT / "args"
CONFIG_PATH = ARGS_DIR / "sheetcal.yaml"

# Version
__version__ = "0.1.0"

__all__ = ["ARGS_DIR", "CONFIG_PATH", "PROJECT_ROOT", "__version__"]
