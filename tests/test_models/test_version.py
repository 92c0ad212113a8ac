from __future__ import annotations

import pytest

from depmirror.models import Version


@pytest.mark.unit
class TestVersion:
    """Tests for the Version value type."""

    def test_str_and_repr(self) -> None:
        v = Version(1, 0, 210)

        assert str(v) == "1.0.210"
        assert repr(v) == "Version(1, 0, 210)"

    def test_ordering_is_numeric(self) -> None:
        """Test components compare as numbers, not strings."""
        assert Version(1, 0, 10) > Version(1, 0, 9)
        assert Version(2, 0, 0) > Version(1, 99, 99)
        assert max([Version(0, 9, 0), Version(0, 10, 0)]) == Version(0, 10, 0)

    def test_hashable(self) -> None:
        assert len({Version(1, 2, 3), Version(1, 2, 3)}) == 1

    def test_negative_component_rejected(self) -> None:
        with pytest.raises(ValueError):
            Version(1, -1, 0)

    @pytest.mark.parametrize("component", ["1", 1.0, True, None])
    def test_non_int_component_rejected(self, component: object) -> None:
        with pytest.raises(TypeError):
            Version(component, 0, 0)  # type: ignore[arg-type]
