r"""Resolve build plugins and run their lifecycle hooks.

A plugin is any Python module exposing ``before_build(context)``,
``after_build(context)``, or both. Plugins are named in ``site.yaml`` either by
dotted module name (``mysite.plugins.sitemap``) or by a path to a ``.py`` file
relative to the configuration file, and are resolved once, in order, when the
build starts.

Example
-------
A plugin that publishes the site name to every template::

    # plugins/site_name.py
    def before_build(context):
        context.vars["global_meta"]["site_name"] = "Example"

>>> from pathlib import Path
>>> from sitepress.plugins import load_plugins
>>> plugins = load_plugins(["plugins/site_name.py"], Path("."))  # doctest: +SKIP
>>> plugins[0].name  # doctest: +SKIP
'plugins/site_name.py'
"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import importlib
import importlib.util
import inspect
import typing as typ
from pathlib import Path

from sitepress.config import LogLevel
from sitepress.errors import AsyncHookError, PluginLoadError

if typ.TYPE_CHECKING:
    from types import ModuleType

    from sitepress.context import BuildContext

Hook = typ.Callable[["BuildContext"], typ.Any]


@dc.dataclass(frozen=True, slots=True)
class Plugin:
    """A resolved plugin with its optional lifecycle hooks."""

    name: str
    before_build: Hook | None = None
    after_build: Hook | None = None

    @classmethod
    def from_module(cls, name: str, module: ModuleType) -> Plugin:
        """Wrap ``module``, keeping only the hooks it actually defines."""
        before = getattr(module, "before_build", None)
        after = getattr(module, "after_build", None)
        return cls(
            name=name,
            before_build=before if callable(before) else None,
            after_build=after if callable(after) else None,
        )


def _is_path_identifier(identifier: str) -> bool:
    return identifier.endswith(".py") or "/" in identifier or "\\" in identifier


def _load_from_path(identifier: str, base_dir: Path) -> ModuleType:
    path = Path(identifier)
    if not path.is_absolute():
        path = base_dir / path
    if not path.is_file():
        msg = f"Plugin file '{path}' not found."
        raise PluginLoadError(msg)
    module_name = f"sitepress_plugin_{path.stem}_{abs(hash(str(path))):x}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Plugin file '{path}' cannot be imported."
        raise PluginLoadError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def load_plugins(identifiers: typ.Iterable[str], base_dir: Path) -> list[Plugin]:
    """Resolve plugin identifiers into :class:`Plugin` instances.

    Parameters
    ----------
    identifiers : Iterable[str]
        Dotted module names or ``.py`` file paths, in hook order.
    base_dir : Path
        Directory relative file paths are resolved against.

    Returns
    -------
    list[Plugin]
        Plugins in the same order as ``identifiers``.

    Raises
    ------
    PluginLoadError
        If a module cannot be found. Errors raised while the plugin module
        itself executes propagate unchanged.
    """
    plugins: list[Plugin] = []
    for identifier in identifiers:
        if _is_path_identifier(identifier):
            module = _load_from_path(identifier, base_dir)
        else:
            try:
                module = importlib.import_module(identifier)
            except ModuleNotFoundError as exc:
                msg = f"Plugin module '{identifier}' not found."
                raise PluginLoadError(msg) from exc
        plugins.append(Plugin.from_module(identifier, module))
    return plugins


async def _await(awaitable: typ.Awaitable[typ.Any]) -> typ.Any:  # noqa: ANN401
    return await awaitable


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def _complete(plugin: Plugin, result: object) -> None:
    """Drive an awaitable hook result to completion.

    Raises
    ------
    AsyncHookError
        If the build itself runs inside an event loop, where the awaitable
        cannot be driven synchronously.
    """
    if not inspect.isawaitable(result):
        return
    if _loop_running():
        if inspect.iscoroutine(result):
            result.close()
        raise AsyncHookError(plugin.name)
    asyncio.run(_await(result))


class PluginRunner:
    """Invoke plugin hooks sequentially in declared order."""

    def __init__(self, plugins: typ.Sequence[Plugin]) -> None:
        self.plugins = list(plugins)

    def run_before_build(self, context: BuildContext) -> None:
        """Run every ``before_build`` hook, finishing each before the next.

        Hooks may mutate ``context``; later hooks and every render observe
        the changes. Exceptions propagate unchanged and abort the build.
        """
        for plugin in self.plugins:
            if plugin.before_build is None:
                continue
            print(f">> Plugin BeforeBuild: Executing {plugin.name}")
            _complete(plugin, plugin.before_build(context))

    def run_after_build(self, context: BuildContext) -> None:
        """Run every ``after_build`` hook in order; return values are ignored."""
        for plugin in self.plugins:
            if plugin.after_build is None:
                continue
            if context.logs == LogLevel.COMPLETE:
                print(f">> Plugin AfterBuild: Executing {plugin.name}")
            _complete(plugin, plugin.after_build(context))


__all__ = ["Hook", "Plugin", "PluginRunner", "load_plugins"]
