"""Sequential helpers: run a group of prompts, or a list of tasks under spinners."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

from pi.prompts.spinner import Spinner


class _Cancel:
    """Sentinel a prompt returns when the user cancelled it."""

    _instance: _Cancel | None = None

    def __new__(cls) -> _Cancel:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CANCEL"


CANCEL = _Cancel()


def is_cancel(value: object) -> bool:
    return value is CANCEL


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


PromptFn = Callable[[dict[str, Any]], Any]


async def group(
    prompts: dict[str, PromptFn],
    on_cancel: Callable[[dict[str, Any]], None] | None = None,
) -> dict[str, Any]:
    """Run *prompts* in order; each receives the results collected so far.

    When a prompt returns :data:`CANCEL` and *on_cancel* is given, its result
    is recorded as ``"canceled"`` and *on_cancel* receives the results.
    """
    results: dict[str, Any] = {}
    for name, prompt in prompts.items():
        result = await _resolve(prompt(results))
        if on_cancel is not None and is_cancel(result):
            results[name] = "canceled"
            on_cancel(results)
            continue
        results[name] = result
    return results


TaskFn = Callable[[Callable[[str], None]], Union[str, None, Awaitable[Union[str, None]]]]


@dataclass
class Task:
    title: str
    task: TaskFn
    enabled: bool = True


async def tasks(task_list: list[Task], **spinner_options: Any) -> None:
    """Run each enabled task under its own spinner.

    The task receives the spinner's ``message`` function; its return value,
    or the title, becomes the final line.
    """
    for task in task_list:
        if not task.enabled:
            continue
        spinner = Spinner(**spinner_options)
        spinner.start(task.title)
        with spinner:
            result = await _resolve(task.task(spinner.message))
            spinner.stop(result or task.title)
