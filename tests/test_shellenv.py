import os

from firesim_setup.lib.shellenv import capture_sourced_env, find_devtoolset, parse_env_dump


def _toolset(root, name, *, make=True, executable=True):
    d = root / name
    (d / "root/usr/bin").mkdir(parents=True)
    if make:
        m = d / "root/usr/bin/make"
        m.write_text("#!/bin/sh\n")
        os.chmod(m, 0o755 if executable else 0o644)
    return d


def test_parse_env_dump():
    dump = "A=1\0B=x=y\0MULTI=line1\nline2\0\0junk\0"
    assert parse_env_dump(dump) == {"A": "1", "B": "x=y", "MULTI": "line1\nline2"}


def test_capture_sourced_env(fake_procs):
    fake_procs.when("bash", last="/cy/env.sh", stdout="RISCV=/cy/riscv\0PATH=/cy/bin\0")
    env = capture_sourced_env("/cy/env.sh", env={"X": "1"})
    assert env == {"RISCV": "/cy/riscv", "PATH": "/cy/bin"}
    call = fake_procs.calls[0]
    assert call.argv[:2] == ["bash", "-c"]
    assert call.argv[-1] == "/cy/env.sh"
    assert call.env["X"] == "1"


def test_capture_dry_run_is_empty(fake_procs):
    assert capture_sourced_env("/cy/env.sh", dry_run=True) == {}
    assert fake_procs.calls == []


def test_latest_devtoolset_wins_lexically(tmp_path):
    _toolset(tmp_path, "devtoolset-7")
    _toolset(tmp_path, "devtoolset-8")
    _toolset(tmp_path, "devtoolset-10")
    # "devtoolset-10" sorts before "devtoolset-8".
    assert find_devtoolset(str(tmp_path)) == tmp_path / "devtoolset-8"


def test_devtoolset_needs_executable_make(tmp_path):
    _toolset(tmp_path, "devtoolset-7")
    _toolset(tmp_path, "devtoolset-8", make=False)
    _toolset(tmp_path, "devtoolset-9", executable=False)
    assert find_devtoolset(str(tmp_path)) == tmp_path / "devtoolset-7"


def test_no_devtoolset(tmp_path):
    assert find_devtoolset(str(tmp_path)) is None
    assert find_devtoolset(str(tmp_path / "missing")) is None


def test_capture_drops_bash_bookkeeping(fake_procs):
    fake_procs.when("bash", stdout="PWD=/x\0SHLVL=2\0_=/usr/bin/env\0CC=gcc-9\0")
    assert capture_sourced_env("/rh/devtoolset-9/enable") == {"CC": "gcc-9"}
