"""Environment loading for the server process.

``.env`` supplies defaults, ``.env.local`` overrides it, and variables that
were already set in the real process environment win over both files.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


def load_env(base_dir: str | os.PathLike[str] | None = None) -> None:
    real_env = dict(os.environ)
    base = Path(base_dir) if base_dir is not None else Path.cwd()

    load_dotenv(base / ".env")
    load_dotenv(base / ".env.local", override=True)

    os.environ.update(real_env)
