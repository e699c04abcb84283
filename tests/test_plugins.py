"""Tests for plugin resolution and hook ordering."""

from __future__ import annotations

import asyncio
import sys
import typing as typ
from types import ModuleType, SimpleNamespace

import pytest

from sitepress.config import LogLevel
from sitepress.errors import AsyncHookError, PluginLoadError
from sitepress.plugins import Plugin, PluginRunner, load_plugins

if typ.TYPE_CHECKING:
    from pathlib import Path


def _context(logs: LogLevel = LogLevel.MINIMUM) -> typ.Any:  # noqa: ANN401
    return SimpleNamespace(vars={"global_meta": {}}, logs=logs, calls=[])


def test_load_plugins_from_file_and_module(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "plugins").mkdir()
    (tmp_path / "plugins" / "first.py").write_text(
        "def before_build(context):\n    context.calls.append('first')\n"
    )
    module = ModuleType("sitepress_test_second")
    module.after_build = lambda context: context.calls.append("second")  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "sitepress_test_second", module)

    plugins = load_plugins(["plugins/first.py", "sitepress_test_second"], tmp_path)
    assert [plugin.name for plugin in plugins] == [
        "plugins/first.py",
        "sitepress_test_second",
    ]
    assert plugins[0].before_build is not None
    assert plugins[0].after_build is None
    assert plugins[1].before_build is None
    assert plugins[1].after_build is not None


def test_unknown_plugins_raise(tmp_path: Path) -> None:
    with pytest.raises(PluginLoadError):
        load_plugins(["missing/plugin.py"], tmp_path)
    with pytest.raises(PluginLoadError):
        load_plugins(["sitepress_no_such_plugin_module"], tmp_path)


def test_before_hooks_run_in_order_and_see_mutations() -> None:
    def first(context: typ.Any) -> None:  # noqa: ANN401
        context.vars["global_meta"]["site_name"] = "X"
        context.calls.append("first")

    def second(context: typ.Any) -> None:  # noqa: ANN401
        context.calls.append(f"second saw {context.vars['global_meta']['site_name']}")

    context = _context()
    PluginRunner(
        [Plugin("first", before_build=first), Plugin("second", before_build=second)]
    ).run_before_build(context)
    assert context.calls == ["first", "second saw X"]


def test_async_before_hook_completes_before_next_plugin() -> None:
    async def slow(context: typ.Any) -> None:  # noqa: ANN401
        await asyncio.sleep(0)
        context.calls.append("slow")

    def fast(context: typ.Any) -> None:  # noqa: ANN401
        context.calls.append("fast")

    context = _context()
    PluginRunner(
        [Plugin("slow", before_build=slow), Plugin("fast", before_build=fast)]
    ).run_before_build(context)
    assert context.calls == ["slow", "fast"]


def test_async_hook_inside_running_loop_fails_clearly() -> None:
    async def hook(context: typ.Any) -> None:  # noqa: ANN401
        context.calls.append("never")

    context = _context()

    async def build_inside_loop() -> None:
        PluginRunner([Plugin("hook", after_build=hook)]).run_after_build(context)

    with pytest.raises(AsyncHookError, match="hook"):
        asyncio.run(build_inside_loop())
    assert context.calls == []


def test_before_hook_errors_propagate_unchanged() -> None:
    error = KeyError("boom")

    def explode(context: typ.Any) -> None:  # noqa: ANN401
        raise error

    with pytest.raises(KeyError) as excinfo:
        PluginRunner([Plugin("explode", before_build=explode)]).run_before_build(
            _context()
        )
    assert excinfo.value is error


@pytest.mark.parametrize(
    ("logs", "expected"),
    [(LogLevel.MINIMUM, False), (LogLevel.COMPLETE, True)],
)
def test_after_hook_diagnostics_follow_log_level(
    capsys: pytest.CaptureFixture[str], logs: LogLevel, expected: bool  # noqa: FBT001
) -> None:
    context = _context(logs)
    PluginRunner(
        [Plugin("notify", after_build=lambda ctx: ctx.calls.append("after"))]
    ).run_after_build(context)
    assert context.calls == ["after"]
    printed = capsys.readouterr().out
    assert (">> Plugin AfterBuild: Executing notify" in printed) is expected


def test_before_hook_diagnostics_always_print(
    capsys: pytest.CaptureFixture[str],
) -> None:
    PluginRunner([Plugin("setup", before_build=lambda ctx: None)]).run_before_build(
        _context()
    )
    assert ">> Plugin BeforeBuild: Executing setup" in capsys.readouterr().out
