"""
Tests for Centralized Logging Utility and Injection Mechanics.

Verifies:
1. Proxy correctness.
2. Injection capabilities (`set_console`).
3. Logging wrappers and verbosity control.
"""

import logging

from rich.console import Console

from lua_verifier.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
  reset_console,
  set_console,
  set_verbose,
)


def test_console_proxy_forwards_to_backend():
  assert callable(console.print)
  assert isinstance(console.backend, Console)
  # Unknown attributes are forwarded
  assert console.width == console.backend.width


def test_custom_console_injection():
  capture = Console(record=True, width=120)
  set_console(capture)

  log_info("Verifying script.lua")
  log_success("clean")
  log_warning("Warning #1: Using undefined variable x")
  log_error("aborted")

  output = capture.export_text()
  assert "Verifying script.lua" in output
  assert "Using undefined variable x" in output
  assert "aborted" in output
  assert "SUCCESS" in output


def test_reset_restores_fresh_backend():
  temp = Console()
  set_console(temp)
  assert console.backend is temp
  reset_console()
  assert console.backend is not temp


def test_verbose_enables_verifier_trace():
  capture = Console(record=True, width=200)
  set_console(capture)
  set_verbose(True)
  assert logging.getLogger().level == logging.DEBUG

  logging.getLogger("lua_verifier.analysis.scope_store").debug("Defining: x @ 0")
  assert "Defining: x @ 0" in capture.export_text()

  set_verbose(False)
  assert logging.getLogger().level == logging.INFO


def test_single_rich_handler_after_swaps():
  from rich.logging import RichHandler

  set_console(Console())
  set_console(Console())
  handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
  assert len(handlers) == 1
