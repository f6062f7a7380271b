from pathlib import Path

import pytest

from oosu_cli.exceptions import TransportError
from oosu_cli.models.config import OosuSettings


class FakeTransport:
    """Transport double that records every attempt and succeeds on demand."""

    def __init__(self, name="fake", outcomes=(), default=True, fail_urls=()):
        self.name = name
        self.default = default
        self.fail_urls = set(fail_urls)
        self.calls: list[str] = []
        self._outcomes = list(outcomes)

    @staticmethod
    def payload(url: str) -> bytes:
        return f"payload:{url}".encode()

    async def fetch(self, url: str, destination: Path) -> None:
        self.calls.append(url)
        ok = self._outcomes.pop(0) if self._outcomes else self.default
        if not ok or url in self.fail_urls:
            destination.write_bytes(b"partial")
            raise TransportError(f"{self.name} failed for {url}")
        destination.write_bytes(self.payload(url))


class RecordingLauncher:
    """Launcher double that remembers its arguments and staged config content."""

    def __init__(self, status: int = 0, error: BaseException | None = None):
        self.status = status
        self.error = error
        self.executable: Path | None = None
        self.calls: list[list[str]] = []
        self.staged_config: bytes | None = None

    def __call__(self, executable: Path) -> "RecordingLauncher":
        self.executable = executable
        return self

    async def launch(self, args: list[str]) -> int:
        self.calls.append(list(args))
        if args:
            self.staged_config = Path(args[0]).read_bytes()
        if self.error is not None:
            raise self.error
        return self.status


@pytest.fixture
def settings() -> OosuSettings:
    return OosuSettings(
        tool_url="https://example.test/OOSU10.exe",
        recommended_config_url="https://example.test/OOSU10.cfg",
        default_config_url="https://example.test/OOSU10-Default.cfg",
    )


@pytest.fixture
def script_dir(tmp_path: Path) -> Path:
    path = tmp_path / "script"
    path.mkdir()
    return path


@pytest.fixture
def work_base(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path
