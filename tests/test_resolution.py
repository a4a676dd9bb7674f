"""Tests for stockreel.acquire.resolution."""

from __future__ import annotations

import pytest

from stockreel.acquire.resolution import matches, orientation_for, target_resolution
from stockreel.types import ResolutionTarget, VideoAspect

PORTRAIT = ResolutionTarget(width=1080, height=1920)


class TestTargetResolution:
    def test_portrait(self):
        assert target_resolution(VideoAspect.portrait).as_tuple() == (1080, 1920)

    def test_landscape(self):
        assert target_resolution(VideoAspect.landscape).as_tuple() == (1920, 1080)

    def test_square(self):
        assert target_resolution(VideoAspect.square).as_tuple() == (1080, 1080)


class TestOrientation:
    @pytest.mark.parametrize("aspect,label", [
        (VideoAspect.portrait, "portrait"),
        (VideoAspect.landscape, "landscape"),
        (VideoAspect.square, "square"),
    ])
    def test_label(self, aspect, label):
        assert orientation_for(aspect) == label


class TestMatches:
    def test_exact(self):
        assert matches(1080, 1920, PORTRAIT)

    @pytest.mark.parametrize("dw,dh", [(-10, 0), (10, 0), (0, -10), (0, 10), (10, -10), (-7, 3)])
    def test_within_tolerance(self, dw, dh):
        assert matches(1080 + dw, 1920 + dh, PORTRAIT)

    @pytest.mark.parametrize("dw,dh", [(11, 0), (-11, 0), (0, 11), (0, -11), (8, 11)])
    def test_outside_tolerance(self, dw, dh):
        assert not matches(1080 + dw, 1920 + dh, PORTRAIT)

    def test_swapped_orientation(self):
        assert not matches(1920, 1080, PORTRAIT)

    def test_custom_tolerance(self):
        assert matches(1088, 1920, PORTRAIT, tolerance=8)
        assert not matches(1088, 1920, PORTRAIT, tolerance=7)

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            matches(0, 1920, PORTRAIT)
