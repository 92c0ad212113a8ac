from __future__ import annotations

from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from depmirror.config import DepMirrorConfig
from depmirror.context import DepMirrorContext, pass_context


@pytest.mark.unit
class TestDepMirrorContext:
    """Tests for DepMirrorContext class."""

    def test_default_initialization(self) -> None:
        ctx = DepMirrorContext()

        assert ctx.config_path is None
        assert ctx.verbose == 0
        assert ctx.color is True
        assert isinstance(ctx.config, DepMirrorConfig)

    def test_instances_are_independent(self) -> None:
        first = DepMirrorContext()
        second = DepMirrorContext()

        first.verbose = 2
        first.config.backup = True

        assert second.verbose == 0
        assert second.config.backup is False

    def test_slots_prevent_arbitrary_attributes(self) -> None:
        ctx = DepMirrorContext()

        with pytest.raises(AttributeError):
            ctx.registry = Path("crates.txt")  # type: ignore[attr-defined]


@pytest.mark.unit
class TestPassContext:
    """Tests for the pass_context decorator."""

    def test_injects_existing_context(self) -> None:
        seen = []

        @click.command()
        @pass_context
        def command(ctx: DepMirrorContext) -> None:
            seen.append(ctx)

        obj = DepMirrorContext()
        obj.verbose = 1
        result = CliRunner().invoke(command, [], obj=obj)

        assert result.exit_code == 0
        assert seen == [obj]

    def test_creates_context_when_missing(self) -> None:
        seen = []

        @click.command()
        @pass_context
        def command(ctx: DepMirrorContext) -> None:
            seen.append(ctx)

        result = CliRunner().invoke(command, [])

        assert result.exit_code == 0
        assert isinstance(seen[0], DepMirrorContext)
