import os

import filekv


def test_cli_put_get_list_delete(tmp_path, capsysbinary):
    root = str(tmp_path / "kv")
    cfg = str(tmp_path / "none.yml")

    assert filekv.main(["--config", cfg, "--path", root, "put", "app/db/password", "hunter2"]) == 0
    assert filekv.main(["--config", cfg, "--path", root, "get", "app/db/password"]) == 0
    assert capsysbinary.readouterr().out == b"hunter2"

    assert filekv.main(["--config", cfg, "--path", root, "list", "app"]) == 0
    assert capsysbinary.readouterr().out.splitlines() == [b"db/"]

    assert filekv.main(["--config", cfg, "--path", root, "delete", "app/db/password"]) == 0
    assert os.listdir(root) == []

    assert filekv.main(["--config", cfg, "--path", root, "get", "app/db/password"]) == 1


def test_cli_without_path_fails(tmp_path):
    cfg = str(tmp_path / "none.yml")
    assert filekv.main(["--config", cfg, "list"]) == 2
