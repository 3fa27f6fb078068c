# common/orchestrator.py
# -*- coding: utf-8 -*-
"""
Centralized orchestrator for managing and executing sequences of tasks.
"""

import logging
from typing import Any, Callable, Dict, List, Optional


class Orchestrator:
    """A fail-fast orchestrator that runs a series of defined tasks in order."""

    def __init__(
        self,
        app_settings: Any,
        orchestrator_logger: Optional[logging.Logger] = None,
    ):
        """
        Initializes the Orchestrator.

        Args:
            app_settings: The application settings object.
            orchestrator_logger: An optional logger instance.
        """
        self.app_settings = app_settings
        self.logger = orchestrator_logger or logging.getLogger(__name__)
        self.tasks: List[Dict[str, Any]] = []
        # Shared context for tasks to pass state between each other
        self.context: Dict[str, Any] = {}
        self.completed_tasks: List[str] = []
        self.failed_task: Optional[str] = None

    def add_task(
        self,
        name: str,
        func: Callable,
        args: Optional[List[Any]] = None,
        kwargs: Optional[Dict[str, Any]] = None,
    ):
        """
        Adds a task to the execution list.

        Args:
            name: A human-readable name for the task.
            func: The function to execute for this task.
            args: A list of positional arguments to pass to the function.
            kwargs: A dictionary of keyword arguments to pass to the function.
        """
        self.tasks.append({
            "name": name,
            "func": func,
            "args": args or [],
            "kwargs": kwargs or {},
        })
        self.logger.debug(f"Task '{name}' added to the queue.")

    def run(self) -> bool:
        """
        Executes all added tasks in sequence.

        The first task that raises stops the run. Its name is recorded in
        ``failed_task`` and the exception propagates to the caller; no
        later task is started.

        Returns:
            True if all tasks completed successfully.
        """
        self.logger.info("Orchestration started.")
        for i, task in enumerate(self.tasks):
            task_name = task["name"]
            self.logger.info(
                f"--- Stage {i + 1}/{len(self.tasks)}: Running task '{task_name}' ---"
            )

            try:
                # Pass the shared context to every function
                task["kwargs"]["context"] = self.context
                task["kwargs"]["app_settings"] = self.app_settings

                result = task["func"](*task["args"], **task["kwargs"])
            except Exception as e:
                self.failed_task = task_name
                self.logger.critical(
                    f"🔥 Task '{task_name}' failed: {e}", exc_info=True
                )
                self.logger.error(
                    "A fatal error occurred. Halting orchestration."
                )
                raise

            self.context[f"{task_name}_result"] = result
            self.completed_tasks.append(task_name)
            self.logger.info(f"✅ Task '{task_name}' completed successfully.")

        self.logger.info("✨ Orchestration finished successfully.")
        return True
