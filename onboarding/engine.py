"""Deployment engine contract and the default engine driving the serverless CLI."""

import asyncio
import logging
import os
import shlex
import shutil
import sys
from collections import deque
from pathlib import Path
from typing import Any, AsyncIterator, Protocol, TypeVar, runtime_checkable

from core.settings import get_setting, load_settings
from onboarding.dashboard import DashboardPlugin
from onboarding.service_config import load_configuration

logger = logging.getLogger(__name__)

T = TypeVar("T")

_KNOWN_COMMANDS = frozenset({"deploy", "info", "package", "remove"})
_OUTPUT_TAIL_LINES = 20
_READ_CHUNK = 64 * 1024


async def _read_lines(stream: asyncio.StreamReader) -> AsyncIterator[str]:
    """Yield decoded lines of any length; StreamReader.readline caps them at its limit."""
    buffer = b""
    while True:
        chunk = await stream.read(_READ_CHUNK)
        if not chunk:
            break
        buffer += chunk
        *complete, buffer = buffer.split(b"\n")
        for raw in complete:
            yield raw.decode("utf-8", errors="replace").rstrip()
    if buffer:
        yield buffer.decode("utf-8", errors="replace").rstrip()


class DeployCommandError(RuntimeError):
    """The deploy command could not be started or exited non-zero."""

    def __init__(self, message: str, returncode: int | None = None, output_tail: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output_tail = output_tail


class PluginManager:
    """Plugin registry of an engine. Plugins expose a `hooks` dict: event -> callable."""

    def __init__(self, engine: Any) -> None:
        self._engine = engine
        self.plugins: list[Any] = []
        self.dashboard_plugin: DashboardPlugin | None = None

    def add_plugin(self, plugin_class: type[T]) -> T:
        """Instantiate plugin_class with the engine, register and return it."""
        plugin = plugin_class(self._engine)
        self.plugins.append(plugin)
        logger.debug("Registered plugin %s", plugin_class.__name__)
        return plugin

    async def spawn(self, event: str, *args: Any) -> None:
        """Run every registered hook for event, in registration order."""
        for plugin in list(self.plugins):
            hook = getattr(plugin, "hooks", {}).get(event)
            if hook is None:
                continue
            result = hook(*args)
            if asyncio.iscoroutine(result):
                await result


@runtime_checkable
class DeployEngine(Protocol):
    """Contract for the orchestration engine the deploy step delegates to."""

    plugin_manager: PluginManager

    async def init(self) -> None:
        """Resolve configuration and register the engine's own plugins."""

    async def run(self) -> None:
        """Execute the configured commands."""


class ServerlessEngine:
    """Runs `serverless <commands>` in the service directory.

    Output of the child process is written line by line to sys.stdout and
    dispatched to plugins as `<command>:output` events, framed by
    `before:<command>` and `after:<command>`.
    """

    def __init__(
        self,
        *,
        configuration: dict[str, Any] | None,
        service_dir: Path,
        configuration_filename: str | None,
        is_configuration_resolved: bool = False,
        has_resolved_commands_externally: bool = False,
        is_telemetry_reported_externally: bool = False,
        commands: list[str] | None = None,
        options: dict[str, Any] | None = None,
    ) -> None:
        self.configuration: dict[str, Any] = configuration or {}
        self.service_dir = Path(service_dir)
        self.configuration_filename = configuration_filename
        self.is_configuration_resolved = is_configuration_resolved
        self.has_resolved_commands_externally = has_resolved_commands_externally
        self.is_telemetry_reported_externally = is_telemetry_reported_externally
        self.commands: list[str] = list(commands or [])
        self.options: dict[str, Any] = dict(options or {})
        self.plugin_manager = PluginManager(self)
        self._argv: list[str] | None = None

    async def init(self) -> None:
        if not self.is_configuration_resolved:
            if not self.configuration_filename:
                raise DeployCommandError("No service configuration file to resolve")
            self.configuration = load_configuration(self.service_dir / self.configuration_filename)
        if not self.commands:
            raise DeployCommandError("No command to run")
        if not self.has_resolved_commands_externally and self.commands[0] not in _KNOWN_COMMANDS:
            raise DeployCommandError(f"Unknown command {self.commands[0]!r}")

        self._argv = self._resolve_executable()
        if self.configuration.get("org"):
            self.plugin_manager.dashboard_plugin = self.plugin_manager.add_plugin(DashboardPlugin)

        sys.stdout.write(f"Running \"{' '.join(self.commands)}\" for {self.service_dir}\n")

    def _resolve_executable(self) -> list[str]:
        command = get_setting(load_settings(), "deploy.command", ["serverless"])
        argv = shlex.split(command) if isinstance(command, str) else [str(c) for c in command]
        if not argv:
            raise DeployCommandError("deploy.command is empty")
        resolved = shutil.which(argv[0])
        if resolved is None:
            raise DeployCommandError(f"Deploy command not found on PATH: {argv[0]}")
        return [resolved, *argv[1:]]

    def _env(self) -> dict[str, str]:
        env = os.environ.copy()
        env["SLS_INTERACTIVE_SETUP_DISABLE"] = "1"
        if self.is_telemetry_reported_externally:
            env["SLS_TELEMETRY_DISABLED"] = "1"
        return env

    def _command_argv(self) -> list[str]:
        assert self._argv is not None
        argv = [*self._argv, *self.commands]
        for flag in ("stage", "region"):
            if self.options.get(flag):
                argv += [f"--{flag}", str(self.options[flag])]
        return argv

    async def run(self) -> None:
        if self._argv is None:
            raise RuntimeError("ServerlessEngine.run() called before init()")

        lifecycle = self.commands[0]
        argv = self._command_argv()
        logger.info("Running %s in %s", " ".join(argv), self.service_dir)
        await self.plugin_manager.spawn(f"before:{lifecycle}")

        proc = await asyncio.create_subprocess_exec(
            *argv,
            cwd=self.service_dir,
            env=self._env(),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
        tail: deque[str] = deque(maxlen=_OUTPUT_TAIL_LINES)
        try:
            assert proc.stdout is not None
            async for line in _read_lines(proc.stdout):
                tail.append(line)
                sys.stdout.write(line + "\n")
                await self.plugin_manager.spawn(f"{lifecycle}:output", line)
            returncode = await proc.wait()
        except BaseException:
            if proc.returncode is None:
                logger.warning("Killing %s (pid %s)", argv[0], proc.pid)
                proc.kill()
                await proc.wait()
            raise

        if returncode != 0:
            logger.warning("%s exited with code %s", argv[0], returncode)
            raise DeployCommandError(
                f"serverless {lifecycle} failed with exit code {returncode}",
                returncode=returncode,
                output_tail="\n".join(tail),
            )
        await self.plugin_manager.spawn(f"after:{lifecycle}")
