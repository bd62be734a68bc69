# tests/logic_tests/test_checker_config.py

import pytest

from logic.checker import ORSetChecker, build_checker
from logic.config import (
    DEFAULT_VARIANT,
    PRESETS,
    CheckerConfig,
    DeletePolicy,
    ReadSelectionPolicy,
    preset,
)


class TestCheckerConfig:
    def test_01_defaults_are_partition_aware(self):
        config = CheckerConfig()
        assert config.partition_aware is True
        assert config.check_duplicates is True
        assert config.read_selection_policy is ReadSelectionPolicy.LAST_SETTLED
        assert config.delete_policy is DeletePolicy.MATCHING_TAG
        assert config.name == DEFAULT_VARIANT

    @pytest.mark.parametrize("name", sorted(PRESETS))
    def test_02_presets_carry_their_own_name(self, name):
        assert preset(name).name == name

    def test_03_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown checker variant"):
            preset("linearizable")

    def test_04_overrides_rename_the_config(self):
        custom = preset("legacy").with_overrides(check_duplicates=False)
        assert custom.check_duplicates is False
        assert custom.delete_policy is DeletePolicy.ANY_TAG
        assert custom.name == "legacy+custom"

    def test_05_none_overrides_are_ignored(self):
        base = CheckerConfig()
        assert base.with_overrides(partition_aware=None, delete_policy=None) is base

    def test_06_override_equal_to_current_keeps_name(self):
        assert CheckerConfig().with_overrides(partition_aware=True).name == "partition-aware"

    def test_07_describe_lists_every_switch(self):
        text = CheckerConfig().describe()
        for fragment in ("partition_aware=True", "check_duplicates=True", "last-settled", "matching-tag"):
            assert fragment in text

    def test_08_config_is_immutable(self):
        with pytest.raises(AttributeError):
            CheckerConfig().partition_aware = False


class TestBuildChecker:
    def test_01_default_variant(self):
        checker = build_checker()
        assert isinstance(checker, ORSetChecker)
        assert checker.config == PRESETS[DEFAULT_VARIANT]

    def test_02_overrides_apply_on_top_of_preset(self):
        checker = build_checker("eventual", delete_policy=DeletePolicy.ANY_TAG)
        assert checker.config.delete_policy is DeletePolicy.ANY_TAG
        assert checker.config.partition_aware is False
        assert checker.config.name == "eventual+custom"

    def test_03_unknown_variant(self):
        with pytest.raises(ValueError):
            build_checker("strict")

    def test_04_repr_names_the_variant(self):
        assert "legacy" in repr(build_checker("legacy"))
