"""
Tests for the command line interface.
"""

import pytest

from multimeta.cli import main
from multimeta.data.io import read_meta_table


@pytest.fixture
def study_files(write_study_file):
    return [
        write_study_file("erf.txt", [("rs1", 0.01, 0.2), ("rs2", 0.5, 0.1), ("rs3", 0.3, 0.0)]),
        write_study_file("orcades.txt", [("rs3", 0.2, 0.1), ("rs1", 0.04, 0.3)]),
    ]


def test_writes_results(study_files, tmp_path):
    outfile = tmp_path / "meta.txt"
    assert main([str(p) for p in study_files] + ["--outfile", str(outfile)]) == 0
    table = read_meta_table(outfile)
    assert list(table.index) == ["rs1", "rs3"]
    assert list(table.columns) == ["Study.1", "Study.2", "p.meta"]


def test_named_studies(study_files, tmp_path):
    outfile = tmp_path / "meta.txt"
    argv = [str(p) for p in study_files] + ["--names", "ERF", "ORCADES",
                                             "--outfile", str(outfile)]
    assert main(argv) == 0
    assert outfile.read_text().splitlines()[0] == "ERF\tORCADES\tp.meta"


def test_default_outfile(study_files, tmp_path):
    assert main([str(p) for p in study_files]) == 0
    assert (tmp_path / "Multivariate_meta-analysis_results.txt").exists()


def test_names_must_match_files(study_files):
    with pytest.raises(SystemExit) as excinfo:
        main([str(p) for p in study_files] + ["--names", "only_one"])
    assert excinfo.value.code == 2


def test_single_study_fails(study_files, tmp_path, caplog):
    assert main([str(study_files[0])]) == 1
    assert "not enough studies" in caplog.text
    assert not (tmp_path / "Multivariate_meta-analysis_results.txt").exists()


def test_no_common_variants_fails(write_study_file, tmp_path):
    a = write_study_file("a.txt", [("rs1", 0.1, 0.0)])
    b = write_study_file("b.txt", [("rs2", 0.1, 0.0)])
    assert main([str(a), str(b)]) == 1


def test_unreadable_file_fails(study_files, tmp_path):
    assert main([str(study_files[0]), str(tmp_path / "missing.txt")]) == 1


def test_qq_plot(study_files, tmp_path):
    plots_dir = tmp_path / "plots"
    argv = [str(p) for p in study_files] + ["--qq-plot", "--plots-dir", str(plots_dir)]
    assert main(argv) == 0
    assert (plots_dir / "qq" / "qq_p_meta.png").exists()
    assert (plots_dir / "plot_manifest.txt").exists()
