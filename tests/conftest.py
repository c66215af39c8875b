import io
import logging
import subprocess
import types
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from firesim_setup.lib import command


@dataclass
class Call:
    argv: List[str]
    cwd: Optional[str]
    env: Dict[str, str]


@dataclass
class Rule:
    match: Callable[[List[str]], bool]
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    missing: bool = False
    action: Optional[Callable[[List[str], Optional[str]], None]] = None


class _Running:
    """Just enough of a Popen object for the streaming path of run_cmd."""

    def __init__(self, returncode: int, output: str):
        self.returncode = returncode
        self.stdout = io.StringIO(output)

    def wait(self) -> int:
        return self.returncode

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.stdout.close()
        return False


@dataclass
class FakeProcesses:
    """Stands in for subprocess.run and subprocess.Popen as seen by firesim_setup.lib.command."""

    calls: List[Call] = field(default_factory=list)
    rules: List[Rule] = field(default_factory=list)

    def when(self, *prefix: str, last: Optional[str] = None, **kw) -> None:
        def match(argv: List[str]) -> bool:
            if prefix and argv[: len(prefix)] != list(prefix):
                return False
            if last is not None and not argv[-1].endswith(last):
                return False
            return True

        # Later rules win over earlier ones.
        self.rules.insert(0, Rule(match=match, **kw))

    def _dispatch(self, argv: List[str], kwargs) -> Tuple[int, str, str]:
        self.calls.append(Call(argv=argv, cwd=kwargs.get("cwd"), env=dict(kwargs.get("env") or {})))
        for rule in self.rules:
            if rule.match(argv):
                if rule.action is not None:
                    rule.action(argv, kwargs.get("cwd"))
                if rule.missing:
                    raise FileNotFoundError(2, "No such file or directory", argv[0])
                return rule.returncode, rule.stdout, rule.stderr
        return 0, "", ""

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        returncode, stdout, stderr = self._dispatch(argv, kwargs)
        return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=stderr)

    def popen(self, argv, **kwargs):
        returncode, stdout, stderr = self._dispatch(list(argv), kwargs)
        # run_cmd merges stderr into stdout when streaming.
        return _Running(returncode, stdout + stderr)

    @property
    def argvs(self) -> List[List[str]]:
        return [c.argv for c in self.calls]

    def ran(self, *prefix: str) -> bool:
        return any(a[: len(prefix)] == list(prefix) for a in self.argvs)

    def find(self, *prefix: str) -> Call:
        for c in self.calls:
            if c.argv[: len(prefix)] == list(prefix):
                return c
        raise AssertionError(f"{prefix} was never run; ran {self.argvs}")


@pytest.fixture
def fake_procs(monkeypatch):
    fake = FakeProcesses()
    # Not on EC2 unless a test says otherwise.
    fake.when("wget", "-T", returncode=4)
    monkeypatch.setattr(
        command,
        "subprocess",
        types.SimpleNamespace(run=fake, Popen=fake.popen, PIPE=subprocess.PIPE, STDOUT=subprocess.STDOUT),
    )
    return fake


@pytest.fixture
def repo(tmp_path, monkeypatch):
    root = tmp_path / "firesim"
    root.mkdir()
    monkeypatch.chdir(root)
    monkeypatch.delenv("RISCV", raising=False)
    monkeypatch.delenv("FIRESIM_SETUP_CONFIG", raising=False)
    monkeypatch.delenv("FIRESIM_SETUP_DRY_RUN", raising=False)
    monkeypatch.setenv("FIRESIM_SETUP_LOG", str(tmp_path / "setup.log"))
    return root


@pytest.fixture(autouse=True)
def _reset_logging():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for attr in ("_firesim_setup_configured", "_firesim_setup_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)


@pytest.fixture
def make_ctx(repo):
    from firesim_setup.context import SetupContext
    from firesim_setup.env_descriptor import EnvDescriptor
    from firesim_setup.flags import RunFlags
    from firesim_setup.setup_config import SetupConfig

    def make(flags=None, raw=None, env=None):
        return SetupContext(
            repo_dir=repo,
            flags=flags or RunFlags(),
            cfg=SetupConfig(raw=raw or {}, environ={}),
            env=dict(env or {"PATH": "/usr/bin"}),
            descriptor=EnvDescriptor(generated_by="test"),
        )

    return make
