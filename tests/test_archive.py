import zipfile

import matplotlib.pyplot as plt
import pytest

from idaq.archive import collect_working_files, save_submission


def _populate(root):
    (root / "analysis.py").write_text("print('lab')\n")
    (root / "data").mkdir()
    (root / "data" / "run1.csv").write_text("a,b\n1,2\n")
    (root / "old_submission.zip").write_bytes(b"PK")


def test_save_submission_bundles_files_and_skips_zips(tmp_path):
    _populate(tmp_path)
    plt.close("all")
    path = save_submission("Homework1_LastName", directory=tmp_path, include_figures=False)

    assert path == tmp_path / "Homework1_LastName.zip"
    with zipfile.ZipFile(path) as zf:
        names = set(zf.namelist())
    assert names == {"analysis.py", "data/run1.csv"}


def test_save_submission_includes_open_figures(tmp_path):
    _populate(tmp_path)
    plt.close("all")
    fig = plt.figure("IDAQ Lab - T-test Comparison")
    fig.add_subplot().plot([0, 1], [0, 1])
    try:
        path = save_submission("lab2.zip", directory=tmp_path)
    finally:
        plt.close("all")

    with zipfile.ZipFile(path) as zf:
        figures = [n for n in zf.namelist() if n.startswith("figures/")]
    assert path.name == "lab2.zip"
    assert figures == ["figures/figure_1_IDAQ_Lab_-_T-test_Comparison.png"]


def test_default_name_is_timestamped(tmp_path):
    _populate(tmp_path)
    path = save_submission(directory=tmp_path, include_figures=False)
    assert path.name.startswith("IDAQ_submission_")
    assert path.suffix == ".zip"


def test_collect_working_files_excludes_zips(tmp_path):
    _populate(tmp_path)
    names = [p.name for p in collect_working_files(tmp_path)]
    assert "old_submission.zip" not in names
    assert names == ["analysis.py", "run1.csv"]


def test_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        save_submission("x", directory=tmp_path / "missing")
