"""
Unit tests for version preview

patch/minor/major bump exactly one component and reset lower ones; every
other increment kind is never predicted.
"""

import pytest

from rnrelease.models.session import IncrementKind
from rnrelease.services.versioning.preview import (
    PREVIEW_PLACEHOLDER,
    build_increment_options,
    preview_version,
)


@pytest.mark.unit
class TestPreviewVersion:
    """Test preview_version()"""

    @pytest.mark.parametrize(
        "version,patch,minor,major",
        [
            ("1.2.3", "1.2.4", "1.3.0", "2.0.0"),
            ("0.0.0", "0.0.1", "0.1.0", "1.0.0"),
            ("2.5.9", "2.5.10", "2.6.0", "3.0.0"),
            ("10.20.30", "10.20.31", "10.21.0", "11.0.0"),
        ],
    )
    def test_predictable_kinds(self, version, patch, minor, major):
        assert preview_version(version, IncrementKind.PATCH) == patch
        assert preview_version(version, IncrementKind.MINOR) == minor
        assert preview_version(version, IncrementKind.MAJOR) == major

    @pytest.mark.parametrize(
        "kind",
        [IncrementKind.PREPATCH, IncrementKind.PREMINOR, IncrementKind.PREMAJOR, IncrementKind.PRERELEASE],
    )
    @pytest.mark.parametrize("version", ["1.2.3", "0.0.1", "not-a-version"])
    def test_prerelease_kinds_use_placeholder(self, kind, version):
        assert preview_version(version, kind) == PREVIEW_PLACEHOLDER

    def test_accepts_plain_string_kind(self):
        assert preview_version("1.2.3", "minor") == "1.3.0"

    def test_invalid_version_raises_for_predictable_kind(self):
        with pytest.raises(ValueError):
            preview_version("1.2", IncrementKind.PATCH)


@pytest.mark.unit
class TestBuildIncrementOptions:
    """Test build_increment_options()"""

    def test_one_option_per_kind_in_order(self):
        kinds = [kind.value for kind in IncrementKind]

        options = build_increment_options("1.0.0", kinds)

        assert [option.kind for option in options] == kinds
        assert [option.preview for option in options] == [
            "1.0.1",
            "1.1.0",
            "2.0.0",
            PREVIEW_PLACEHOLDER,
            PREVIEW_PLACEHOLDER,
            PREVIEW_PLACEHOLDER,
            PREVIEW_PLACEHOLDER,
        ]

    def test_unparsable_version_raises(self):
        with pytest.raises(ValueError):
            build_increment_options("v-next", ["patch", "major"])

    def test_option_exposes_title_and_description(self):
        option = build_increment_options("2.5.9", ["major"])[0]

        assert option.title == "major"
        assert option.description == "3.0.0"
