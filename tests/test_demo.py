"""Tests for the demonstration entry point."""

from backoffkit import demo
from backoffkit.retry import RetryConfig


def test_demo_prints_every_attempt(capsys):
    """Each attempt prints Trying... and each failure is reported."""
    config = RetryConfig(delay_factor=0.001, randomization_factor=0, max_delay=0.001, max_attempts=3)

    exit_code = demo.main([], config=config)

    out = capsys.readouterr().out.splitlines()
    assert exit_code == 1
    assert out == [
        "Trying...",
        "Attempt 1 failed: failed",
        "Trying...",
        "Attempt 2 failed: failed",
        "Trying...",
        "Attempt 3 failed: failed",
        "Failed after 3 attempts: failed",
    ]


def test_demo_reports_timeout(capsys):
    """A deadline shorter than the first wait prints the timeout notice."""
    config = RetryConfig(
        delay_factor=0.01, randomization_factor=0, max_delay=0.01, max_attempts=5, timeout=0.001
    )

    exit_code = demo.main([], config=config)

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "Retry timed out" in out
    assert "retry timed out after" in out


def test_quick_flag_shrinks_delay(capsys, monkeypatch):
    """--quick overrides the delay factor of the sample configuration."""
    seen = {}

    def fake_retry(operation, config, **kwargs):
        seen["config"] = config
        return None

    monkeypatch.setattr(demo, "retry", fake_retry)

    assert demo.main(["--quick"]) == 0
    assert seen["config"].delay_factor == 0.01
    assert seen["config"].max_attempts == demo.DEMO_CONFIG.max_attempts


def test_importing_main_module_does_not_run_demo(capsys):
    """The -m entry point only runs the demo when executed as a script."""
    import importlib

    module = importlib.import_module("backoffkit.__main__")

    assert module.main is demo.main
    assert capsys.readouterr().out == ""
