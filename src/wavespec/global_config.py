"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors and cross-cutting constants that many modules
can import.

Feature packages that need extra, domain-specific settings keep them next
to their code (e.g. `wavespec.analysis.params`) and build on these anchors.
"""

from pathlib import Path

# Core roots
PACKAGE_ROOT: Path = Path(__file__).resolve().parent
# PROJECT_ROOT is the repo root (where pyproject.toml and data/ live)
# From src/wavespec/global_config.py, go up two levels: src/wavespec -> src -> repo root
PROJECT_ROOT: Path = PACKAGE_ROOT.parent.parent

# Core Names
PROJECT_NAME = "wavespec"
PACKAGE_NAME = "wavespec"

# Data directories
DATA_DIR: Path = PROJECT_ROOT / "data"
RAW_DIR: Path = DATA_DIR / "raw"
RAW_AUDIO_DIR: Path = RAW_DIR / "audio"
DERIVED_DIR: Path = DATA_DIR / "derived"

# Logs directories
LOGS_DIR: Path = DATA_DIR / "logs"
DERIVED_LOGS_DIR: Path = LOGS_DIR / "derived"
