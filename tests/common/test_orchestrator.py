# tests/common/test_orchestrator.py
# -*- coding: utf-8 -*-
"""
Tests for the centralized orchestrator module.
"""

from unittest.mock import MagicMock

import pytest

from common.errors import PackageIndexError
from common.orchestrator import Orchestrator


class TestOrchestrator:
    """Tests for the Orchestrator class."""

    def test_init(self):
        """Test initialization of the Orchestrator class."""
        app_settings = MagicMock()
        logger = MagicMock()

        orchestrator = Orchestrator(app_settings, logger)

        assert orchestrator.app_settings == app_settings
        assert orchestrator.logger == logger
        assert orchestrator.tasks == []
        assert orchestrator.context == {}
        assert orchestrator.completed_tasks == []
        assert orchestrator.failed_task is None

    def test_add_task(self):
        """Test adding a task to the orchestrator."""
        orchestrator = Orchestrator(MagicMock(), MagicMock())

        task_func = MagicMock()
        orchestrator.add_task(
            "Test Task",
            task_func,
            ["arg1", "arg2"],
            {"kwarg1": "value1"},
        )

        assert len(orchestrator.tasks) == 1
        task = orchestrator.tasks[0]
        assert task["name"] == "Test Task"
        assert task["func"] == task_func
        assert task["args"] == ["arg1", "arg2"]
        assert task["kwargs"] == {"kwarg1": "value1"}

    def test_run_success(self):
        """Test running the orchestrator with successful tasks."""
        app_settings = MagicMock()
        orchestrator = Orchestrator(app_settings, MagicMock())

        task1 = MagicMock(return_value="result1")
        task2 = MagicMock(return_value="result2")

        orchestrator.add_task("Task 1", task1)
        orchestrator.add_task("Task 2", task2)

        result = orchestrator.run()

        assert result is True
        task1.assert_called_once_with(
            context=orchestrator.context, app_settings=app_settings
        )
        task2.assert_called_once()
        assert orchestrator.context["Task 1_result"] == "result1"
        assert orchestrator.context["Task 2_result"] == "result2"
        assert orchestrator.completed_tasks == ["Task 1", "Task 2"]
        assert orchestrator.failed_task is None

    def test_run_executes_in_declaration_order(self):
        calls = []
        orchestrator = Orchestrator(MagicMock(), MagicMock())
        for name in ["first", "second", "third"]:
            orchestrator.add_task(
                name, lambda n=name, **kwargs: calls.append(n)
            )

        orchestrator.run()

        assert calls == ["first", "second", "third"]

    def test_run_failure_stops_sequence(self):
        """The first failing task halts the run and its error propagates."""
        logger = MagicMock()
        orchestrator = Orchestrator(MagicMock(), logger)
        task1 = MagicMock(return_value=None)
        task2 = MagicMock(side_effect=PackageIndexError("apt update failed", 100))
        task3 = MagicMock()
        orchestrator.add_task("Task 1", task1)
        orchestrator.add_task("Task 2", task2)
        orchestrator.add_task("Task 3", task3)

        with pytest.raises(PackageIndexError) as excinfo:
            orchestrator.run()

        assert excinfo.value.returncode == 100
        task1.assert_called_once()
        task2.assert_called_once()
        task3.assert_not_called()
        assert orchestrator.completed_tasks == ["Task 1"]
        assert orchestrator.failed_task == "Task 2"
        assert "Task 2_result" not in orchestrator.context

        logger.critical.assert_called_once_with(
            "🔥 Task 'Task 2' failed: apt update failed", exc_info=True
        )
        logger.error.assert_called_once_with(
            "A fatal error occurred. Halting orchestration."
        )

    def test_context_passing(self):
        """Test that context is passed to tasks and can be updated by them."""
        orchestrator = Orchestrator(MagicMock(), MagicMock())

        def task1(context, app_settings, **kwargs):
            context["task1_data"] = "data from task 1"
            return "result1"

        def task2(context, app_settings, **kwargs):
            assert context["task1_data"] == "data from task 1"
            context["task2_data"] = "data from task 2"
            return "result2"

        orchestrator.add_task("Task 1", task1)
        orchestrator.add_task("Task 2", task2)

        result = orchestrator.run()

        assert result is True
        assert orchestrator.context["task1_data"] == "data from task 1"
        assert orchestrator.context["task2_data"] == "data from task 2"
        assert orchestrator.context["Task 1_result"] == "result1"
        assert orchestrator.context["Task 2_result"] == "result2"
