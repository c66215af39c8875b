import os

import yaml

from firesim_setup.lib.marshal import force_symlink, marshal_config_path, write_default_config


def test_config_path(tmp_path):
    assert marshal_config_path(tmp_path) == tmp_path / "software/firemarshal/marshal-config.yaml"


def test_default_config_points_back_at_firesim(tmp_path):
    p = tmp_path / "software/firemarshal/marshal-config.yaml"
    write_default_config(p)
    assert yaml.safe_load(p.read_text()) == {"firesim-dir": "../../../../"}


def test_force_symlink_creates_and_replaces(tmp_path):
    link = tmp_path / "sw/firesim-software"
    force_symlink("../a", link)
    assert os.readlink(link) == "../a"

    force_symlink("../b", link)
    assert os.readlink(link) == "../b"


def test_force_symlink_replaces_a_dangling_link(tmp_path):
    link = tmp_path / "link"
    os.symlink("does-not-exist", link)
    force_symlink("elsewhere", link)
    assert os.readlink(link) == "elsewhere"


def test_dry_run(tmp_path):
    link = tmp_path / "sw/firesim-software"
    force_symlink("../a", link, dry_run=True)
    write_default_config(tmp_path / "cfg.yaml", dry_run=True)
    assert not link.exists() and not link.is_symlink()
    assert not (tmp_path / "cfg.yaml").exists()
