# tests/test_registry.py

from __future__ import annotations

import logging

import pytest

from taskwright.core.errors import ErrorKind, FatalError
from taskwright.tasks.task_models import Option


def test_run_task_calls_first_registered_handler_once(builder) -> None:
    called = {"first": 0, "second": 0}

    def first(args):
        called["first"] += 1
        return 7

    def second(args):
        called["second"] += 1
        return 9

    builder.register_task("build", "first", first)
    builder.register_task("build", "shadowed", second)

    assert builder.run_task("build", {"x": 1}) == 7
    assert called == {"first": 1, "second": 0}


def test_duplicate_registration_warns(builder, caplog) -> None:
    caplog.set_level(logging.DEBUG)
    builder.register_task("a", "", lambda args: 0)
    builder.register_task("a", "", lambda args: 1)
    assert any(r.levelno == logging.WARNING and '"a"' in r.getMessage() for r in caplog.records)


def test_handler_receives_args_unchanged(builder) -> None:
    seen = {}

    def handler(args):
        seen.update(args)
        return 0

    builder.register_task("t", "", handler)
    builder.run_task("t", {"target": "release"})
    assert seen == {"target": "release"}


def test_unknown_task_is_fatal(builder) -> None:
    with pytest.raises(FatalError) as exc:
        builder.run_task("nope", {})
    assert exc.value.kind == ErrorKind.UNKNOWN_TASK
    assert "nope" in exc.value.message


def test_negative_result_is_logged_and_returned(builder, caplog) -> None:
    caplog.set_level(logging.DEBUG)
    builder.register_task("broken", "", lambda args: -3)

    assert builder.run_task("broken", {}) == -3
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors and 'Failed task "broken"' in errors[0].getMessage()


def test_none_result_counts_as_success(builder) -> None:
    builder.register_task("quiet", "", lambda args: None)
    assert builder.run_task("quiet", {}) == 0


def test_call_stack_inside_handler_started_from_begin(builder, state) -> None:
    seen = []

    def handler(args):
        seen.append(state.task_stack())
        return 0

    builder.register_task("build", "Build everything", handler)

    assert builder.begin(["build"]) == 0
    assert seen == [("build",)]
    assert state.task_stack() == ()


def test_nested_tasks_stack(builder, state) -> None:
    seen = []

    def inner(args):
        seen.append(state.task_stack())
        return 0

    def outer(args):
        return builder.run_task("inner", args)

    builder.register_task("inner", "", inner)
    builder.register_task("outer", "", outer)

    builder.run_task("outer", {})
    assert seen == [("outer", "inner")]
    assert state.task_stack() == ()


def test_stack_popped_when_handler_raises(builder, state) -> None:
    def boom(args):
        raise RuntimeError("boom")

    builder.register_task("boom", "", boom)
    with pytest.raises(RuntimeError):
        builder.run_task("boom", {})
    assert state.task_stack() == ()


def test_fatal_inside_handler_keeps_stack_snapshot(builder, state) -> None:
    def failing(args):
        builder.fatal("nope")

    builder.register_task("deploy", "", failing)
    with pytest.raises(FatalError) as exc:
        builder.run_task("deploy", {})
    assert exc.value.task_stack == ("deploy",)
    assert exc.value.task == "deploy"


def test_begin_applies_verbose_flag(builder, state) -> None:
    builder.register_task("t", "", lambda args: 0)
    assert state.verbose is False
    builder.begin(["-v", "t"])
    assert state.verbose is True


def test_begin_verbose_after_task_name(builder, state) -> None:
    captured = {}

    def handler(args):
        captured.update(args)
        return 0

    builder.register_task("t", "", handler)
    builder.begin(["t", "--verbose"])
    assert state.verbose is True
    assert captured["verbose"] is True


def test_begin_passes_declared_options(builder) -> None:
    captured = {}

    def handler(args):
        captured.update(args)
        return 0

    builder.register_task("build", "", handler)
    builder.register_option(Option(name="target", description="Target triple", aliases=["t"]))
    builder.register_option(Option(name="jobs", type=int, default=1))
    builder.register_option(name="release", requires_arg=False)

    builder.begin(["build", "--target", "x86_64", "--jobs", "4", "--release"])
    assert captured["target"] == "x86_64"
    assert captured["jobs"] == 4
    assert captured["release"] is True
    assert captured["verbose"] is False


def test_begin_fills_option_defaults(builder) -> None:
    captured = {}

    def handler(args):
        captured.update(args)
        return 0

    builder.register_task("build", "", handler)
    builder.register_option(Option(name="jobs", type=int, default=2))
    builder.register_option(Option(name="dry-run", requires_arg=False))

    builder.begin(["build"])
    assert captured["jobs"] == 2
    assert captured["dry_run"] is False


def test_options_accepted_before_task_name(builder) -> None:
    captured = {}

    def handler(args):
        captured.update(args)
        return 0

    builder.register_task("build", "", handler)
    builder.register_option(Option(name="target", aliases=["t"]))

    builder.begin(["-t", "arm", "build"])
    assert captured["target"] == "arm"


def test_missing_required_option_exits(builder) -> None:
    builder.register_task("build", "", lambda args: 0)
    builder.register_option(Option(name="target", required=True))

    with pytest.raises(SystemExit) as exc:
        builder.begin(["build"])
    assert exc.value.code == 2


def test_unknown_or_missing_task_exits(builder) -> None:
    builder.register_task("build", "", lambda args: 0)

    with pytest.raises(SystemExit):
        builder.begin([])
    with pytest.raises(SystemExit):
        builder.begin(["deploy"])


def test_register_option_keeps_a_copy(builder) -> None:
    opt = Option(name="target", default="x86")
    builder.register_option(opt)
    opt.default = "arm"
    opt.aliases.append("t")

    stored = builder.registry.options[0]
    assert stored.default == "x86"
    assert stored.aliases == []


def test_task_decorator_registers(builder) -> None:
    @builder.task("clean", "Remove output")
    def clean(args):
        return 5

    task = builder.registry.find_task("clean")
    assert task is not None
    assert task.description == "Remove output"
    assert builder.run_task("clean") == 5


def test_non_numeric_result_is_reported_as_failure(builder, caplog) -> None:
    caplog.set_level(logging.DEBUG)
    builder.register_task("odd", "", lambda args: "done")
    builder.register_task("numeric", "", lambda args: "2")

    assert builder.run_task("odd", {}) == -1
    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert any("non-numeric result: 'done'" in m for m in errors)
    assert any('Failed task "odd"' in m for m in errors)

    assert builder.run_task("numeric", {}) == 2
