"""Tests for mapping changed files to deploy targets."""

import pytest

from deploy_changed_functions.api.exceptions import PathMappingError
from deploy_changed_functions.core.target_resolver import (
    DeployTargetResolver,
    FunctionPathParser,
    resolve_global_change,
)
from deploy_changed_functions.models.target import DeployTarget, TargetKind


class TestResolveGlobalChange:
    """Tests for resolve_global_change."""

    @pytest.mark.parametrize(
        "config_changed, paths_changed, expected",
        [
            (False, False, False),
            (True, False, True),
            (False, True, True),
            (True, True, True),
        ],
    )
    def test_either_change_is_global(self, config_changed, paths_changed, expected):
        assert resolve_global_change(config_changed, paths_changed) is expected


class TestFunctionPathParser:
    """Tests for FunctionPathParser."""

    def test_first_segment_under_source_root(self):
        parser = FunctionPathParser()
        assert parser.function_name("src/sendEmail/index.js") == "sendEmail"

    def test_nested_file(self):
        parser = FunctionPathParser()
        assert parser.function_name("src/cleanup/lib/deep/util.js") == "cleanup"

    def test_custom_source_root(self):
        parser = FunctionPathParser("lib/")
        assert parser.function_name("lib/billing/main.ts") == "billing"

    def test_path_outside_source_root(self):
        parser = FunctionPathParser()
        with pytest.raises(PathMappingError) as exc_info:
            parser.function_name("package.json")
        assert "package.json" in str(exc_info.value)

    def test_top_level_file_in_source_root(self):
        parser = FunctionPathParser()
        with pytest.raises(PathMappingError):
            parser.function_name("src/index.js")


class TestDeployTargetResolver:
    """Tests for DeployTargetResolver.resolve_function_subset."""

    def test_changed_functions_become_subset(self):
        resolver = DeployTargetResolver()
        target = resolver.resolve_function_subset(
            ["src/sendEmail/index.js", "src/cleanup/a.js", "src/sendEmail/lib.js"]
        )

        assert target.kind == TargetKind.SUBSET
        assert target.names == ("sendEmail", "cleanup")
        assert target.only_argument == "functions:sendEmail,functions:cleanup"
        assert target.force is False

    def test_shared_folder_change_deploys_all(self):
        resolver = DeployTargetResolver()
        target = resolver.resolve_function_subset(
            ["src/utils/helpers.js", "src/sendEmail/index.js"]
        )

        assert target == DeployTarget.all_functions()
        assert target.only_argument == "functions"

    def test_constants_folder_is_shared_by_default(self):
        resolver = DeployTargetResolver()
        assert resolver.resolve_function_subset(["src/constants/x.js"]).is_all

    def test_custom_shared_folders(self):
        resolver = DeployTargetResolver(ignore_folders=["common"])

        assert resolver.resolve_function_subset(["src/common/a.js"]).is_all
        utils_target = resolver.resolve_function_subset(["src/utils/a.js"])
        assert utils_target.names == ("utils",)

    def test_override_shared_folders_per_call(self):
        resolver = DeployTargetResolver()
        target = resolver.resolve_function_subset(["src/utils/a.js"], ignore_folders=[])
        assert target.kind == TargetKind.SUBSET

    def test_no_changes_is_noop(self):
        resolver = DeployTargetResolver()
        assert resolver.resolve_function_subset([]).is_noop

    def test_blank_entries_are_skipped(self):
        resolver = DeployTargetResolver()
        assert resolver.resolve_function_subset(["", "   "]).is_noop

        target = resolver.resolve_function_subset(["", "src/cleanup/index.js", ""])
        assert target.names == ("cleanup",)

    def test_unmappable_path_raises(self):
        resolver = DeployTargetResolver()
        with pytest.raises(PathMappingError):
            resolver.resolve_function_subset(["src/index.js"])
