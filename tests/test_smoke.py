"""Smoke tests for basic module wiring."""

from __future__ import annotations


def test_imports() -> None:
    import lightsplit
    import lightsplit.application.splits
    import lightsplit.cli.main
    import lightsplit.domain
    import lightsplit.receipt
    import lightsplit.runtime
    import lightsplit.runtime.server

    assert lightsplit.__version__
    assert lightsplit.application.splits is not None
    assert lightsplit.cli.main is not None
    assert lightsplit.domain is not None
    assert lightsplit.receipt is not None
    assert lightsplit.runtime is not None
    assert lightsplit.runtime.server.app is not None
