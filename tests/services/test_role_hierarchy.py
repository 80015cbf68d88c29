"""
Role Hierarchy Builder Unit Tests
=================================

Tests for:
- Level assignment by breadth-first traversal
- Parent/child wiring
- Dangling "reports to" references
- Cycles and self references
- roles_at_or_above selection
"""

import pytest

from crm_access.schemas.directory import DirectoryRole
from crm_access.services.role_hierarchy import build_role_hierarchy, roles_at_or_above


pytestmark = pytest.mark.hierarchy


def role(role_id: str, reports_to: str = None) -> DirectoryRole:
    return DirectoryRole(
        external_id=role_id,
        organization_id="org-1",
        display_label=role_id.upper(),
        reports_to_id=reports_to,
    )


class TestBuildRoleHierarchy:
    """Tests for build_role_hierarchy."""

    def test_empty_input(self):
        """Test that no roles give an empty hierarchy."""
        assert build_role_hierarchy([]) == {}

    def test_single_root_is_level_zero(self):
        """Test a lone role becomes a level 0 root."""
        # Act
        hierarchy = build_role_hierarchy([role("ceo")])

        # Assert
        assert hierarchy["ceo"].level == 0
        assert hierarchy["ceo"].children == []
        assert hierarchy["ceo"].reports_to is None

    def test_chain_levels(self):
        """Test levels grow by one along a reporting chain."""
        # Arrange - input deliberately out of order
        roles = [role("rep", "manager"), role("manager", "ceo"), role("ceo")]

        # Act
        hierarchy = build_role_hierarchy(roles)

        # Assert
        assert hierarchy["ceo"].level == 0
        assert hierarchy["manager"].level == 1
        assert hierarchy["rep"].level == 2
        assert hierarchy["ceo"].children == ["manager"]
        assert hierarchy["manager"].children == ["rep"]

    def test_forest_with_siblings(self):
        """Test multiple roots and siblings are placed independently."""
        # Arrange
        roles = [
            role("ceo"),
            role("cfo"),
            role("sales", "ceo"),
            role("support", "ceo"),
            role("accounting", "cfo"),
        ]

        # Act
        hierarchy = build_role_hierarchy(roles)

        # Assert
        assert hierarchy["ceo"].level == hierarchy["cfo"].level == 0
        assert hierarchy["sales"].level == hierarchy["support"].level == 1
        assert hierarchy["accounting"].level == 1
        assert hierarchy["ceo"].children == ["sales", "support"]

    def test_dangling_parent_is_treated_as_root(self):
        """Test a role reporting to an unknown role becomes a root with placed children."""
        # Arrange
        roles = [role("orphan", "deleted-role"), role("child", "orphan")]

        # Act
        hierarchy = build_role_hierarchy(roles)

        # Assert
        assert hierarchy["orphan"].level == 0
        assert hierarchy["child"].level == 1
        # The dangling reference is kept on the node
        assert hierarchy["orphan"].reports_to == "deleted-role"

    def test_two_role_cycle_terminates(self):
        """Test A -> B -> A terminates and keeps both roles."""
        # Arrange
        roles = [role("a", "b"), role("b", "a")]

        # Act
        hierarchy = build_role_hierarchy(roles)

        # Assert
        assert set(hierarchy) == {"a", "b"}
        assert hierarchy["a"].level == 0
        assert hierarchy["b"].level == 0

    def test_cycle_beside_valid_tree(self):
        """Test a cycle does not disturb the levels of a healthy tree."""
        # Arrange
        roles = [
            role("ceo"),
            role("manager", "ceo"),
            role("x", "y"),
            role("y", "z"),
            role("z", "x"),
        ]

        # Act
        hierarchy = build_role_hierarchy(roles)

        # Assert
        assert len(hierarchy) == 5
        assert hierarchy["manager"].level == 1
        assert all(hierarchy[r].level == 0 for r in ("x", "y", "z"))

    def test_self_reference_terminates(self):
        """Test a role reporting to itself is kept at level 0."""
        # Act
        hierarchy = build_role_hierarchy([role("loop", "loop")])

        # Assert
        assert list(hierarchy) == ["loop"]
        assert hierarchy["loop"].level == 0

    def test_duplicate_role_ids_keep_first(self):
        """Test duplicate ids appear once, using the first occurrence."""
        # Arrange
        roles = [role("ceo"), role("manager", "ceo"), role("manager", "other")]

        # Act
        hierarchy = build_role_hierarchy(roles)

        # Assert
        assert list(hierarchy) == ["ceo", "manager"]
        assert hierarchy["manager"].reports_to == "ceo"
        assert hierarchy["ceo"].children == ["manager"]

    def test_every_input_role_appears_once(self):
        """Test output keys equal the set of input ids."""
        # Arrange
        roles = [role(f"r{i}", f"r{i - 1}" if i else None) for i in range(50)]

        # Act
        hierarchy = build_role_hierarchy(roles)

        # Assert
        assert list(hierarchy) == [f"r{i}" for i in range(50)]
        assert hierarchy["r49"].level == 49


class TestRolesAtOrAbove:
    """Tests for roles_at_or_above."""

    @pytest.fixture
    def hierarchy(self):
        return build_role_hierarchy([
            role("ceo"),
            role("sales", "ceo"),
            role("support", "ceo"),
            role("rep", "sales"),
        ])

    def test_includes_ancestors_and_self(self, hierarchy):
        """Test a leaf role sees every shallower or equal level."""
        assert roles_at_or_above(hierarchy, "rep") == ["ceo", "sales", "support", "rep"]

    def test_includes_peers_but_not_subordinates(self, hierarchy):
        """Test a mid-level role includes same-level peers and excludes deeper roles."""
        result = roles_at_or_above(hierarchy, "sales")

        assert result == ["ceo", "sales", "support"]
        assert "rep" not in result

    def test_root_role(self, hierarchy):
        """Test a root role only sees level 0."""
        assert roles_at_or_above(hierarchy, "ceo") == ["ceo"]

    def test_unknown_role(self, hierarchy):
        """Test an unknown role yields nothing."""
        assert roles_at_or_above(hierarchy, "missing") == []
