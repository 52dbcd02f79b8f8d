"""Bundle a lab working directory into a single submission ZIP file.

Every file under the working directory is added (existing ``.zip`` files
excluded), together with a PNG snapshot of each open matplotlib figure under
``figures/`` inside the archive.
"""

from __future__ import annotations

import io
import logging
import re
import time
import zipfile
from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt

logger = logging.getLogger(__name__)

DEFAULT_NAME_PREFIX = "IDAQ_submission"
FIGURE_DIR = "figures"
FIGURE_DPI = 150


def _normalize_zip_name(file_name: Optional[str]) -> str:
    if file_name is None or not str(file_name).strip():
        file_name = f"{DEFAULT_NAME_PREFIX}_{time.strftime('%Y%m%d_%H%M%S')}"
    name = Path(str(file_name).strip()).name
    if not name.lower().endswith(".zip"):
        name += ".zip"
    return name


def _figure_slug(fig, number: int) -> str:
    label = fig.get_label() or ""
    slug = re.sub(r"[^A-Za-z0-9_-]+", "_", label).strip("_")
    return f"figure_{number}_{slug}.png" if slug else f"figure_{number}.png"


def collect_working_files(directory: Path) -> List[Path]:
    """Return every regular file under ``directory`` except ZIP archives."""
    return sorted(
        p
        for p in directory.rglob("*")
        if p.is_file() and p.suffix.lower() != ".zip"
    )


def save_submission(
    file_name: Optional[str] = None,
    directory: str | Path = ".",
    include_figures: bool = True,
) -> Path:
    """Create a submission ZIP of ``directory`` plus all open figures.

    Args:
        file_name: Archive name; ``.zip`` is appended when missing. A
            timestamped ``IDAQ_submission_*`` name is used when omitted.
        directory: Working directory to bundle. The archive is written there.
        include_figures: Add a PNG of every open matplotlib figure.

    Returns:
        pathlib.Path: Path of the written archive.

    Raises:
        FileNotFoundError: If ``directory`` does not exist.
    """
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Working directory does not exist: {root}")

    zip_path = root / _normalize_zip_name(file_name)
    files = collect_working_files(root)
    logger.info("Bundling %d file(s) from %s into %s", len(files), root, zip_path)

    n_figures = 0
    with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for path in files:
            zf.write(path, arcname=path.relative_to(root).as_posix())

        if include_figures:
            for number in plt.get_fignums():
                fig = plt.figure(number)
                buf = io.BytesIO()
                fig.savefig(buf, format="png", dpi=FIGURE_DPI)
                zf.writestr(f"{FIGURE_DIR}/{_figure_slug(fig, number)}", buf.getvalue())
                n_figures += 1

    logger.info("Saved submission %s (%d figure(s))", zip_path, n_figures)
    return zip_path
