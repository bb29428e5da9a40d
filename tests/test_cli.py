import logging

from antsp.cli import main


def write(tmp_path, text):
    p = tmp_path / "matrix.txt"
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_solves_matrix_file(tmp_path, caplog):
    path = write(tmp_path, "0 5\n5 0\n")
    with caplog.at_level(logging.INFO, logger="antsp"):
        assert main([path, "--iters", "3", "--rounds", "2", "--seed", "1"]) == 0
    lines = [r.getMessage() for r in caplog.records]
    assert lines.count("Best tour length: 10.0") == 2
    assert any(m.startswith("Best tour: ") for m in lines)


def test_bad_matrix_exit_code(tmp_path):
    path = write(tmp_path, "0 -5\n5 0\n")
    assert main([path, "--iters", "1"]) == 1


def test_missing_file_exit_code(tmp_path):
    assert main([str(tmp_path / "missing.txt")]) == 1


def test_zero_ants_exit_code(tmp_path):
    path = write(tmp_path, "0 1\n1 0\n")
    assert main([path, "--ant-factor", "0.1"]) == 1


def test_fast_pow_flag(tmp_path):
    path = write(tmp_path, "0 2 9\n2 0 4\n9 4 0\n")
    assert main([path, "--iters", "5", "--seed", "2", "--ant-factor", "1", "--fast-pow"]) == 0
