"""Tests for cutsheet.timeline module."""

from __future__ import annotations

import dataclasses
from fractions import Fraction

import pytest

from cutsheet.exceptions import InvalidClipError, InvalidProjectError, TimelineError
from cutsheet.timeline import VALID_TRACKS, Clip, Project


class TestClip:
    def test_defaults(self) -> None:
        clip = Clip("Scene1", "s1.png", 0, 2)
        assert clip.track == "V"
        assert clip.source_in == 0.0

    def test_derived_times(self) -> None:
        clip = Clip("VO1", "vo1.mp3", 1.5, 2.0, "A1", source_in=0.5)
        assert clip.end_time == 3.5
        assert clip.source_out == 2.5

    def test_is_immutable(self) -> None:
        clip = Clip("Scene1", "s1.png", 0, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            clip.duration = 5  # type: ignore[misc]

    @pytest.mark.parametrize("duration", [0, -1, float("nan"), float("inf")])
    def test_bad_duration_raises(self, duration: float) -> None:
        with pytest.raises(InvalidClipError):
            Clip("Scene1", "s1.png", 0, duration)

    def test_negative_start_raises(self) -> None:
        with pytest.raises(InvalidClipError) as exc:
            Clip("Scene1", "s1.png", -0.1, 2)
        assert exc.value.clip_name == "Scene1"
        assert "start_time" in str(exc.value)

    def test_negative_source_in_raises(self) -> None:
        with pytest.raises(InvalidClipError):
            Clip("Scene1", "s1.png", 0, 2, source_in=-1)

    @pytest.mark.parametrize("track", ["A3", "v", "", "VIDEO"])
    def test_unknown_track_raises(self, track: str) -> None:
        with pytest.raises(InvalidClipError):
            Clip("Scene1", "s1.png", 0, 2, track)

    @pytest.mark.parametrize("track", VALID_TRACKS)
    def test_valid_tracks(self, track: str) -> None:
        assert Clip("c", "c.png", 0, 1, track).track == track

    def test_non_numeric_raises(self) -> None:
        with pytest.raises(InvalidClipError):
            Clip("Scene1", "s1.png", "0", 2)  # type: ignore[arg-type]

    def test_errors_share_timeline_base(self) -> None:
        with pytest.raises(TimelineError):
            Clip("Scene1", "s1.png", 0, 0)


class TestProject:
    def test_clips_frozen_to_tuple(self) -> None:
        clips = [Clip("a", "a.png", 0, 1)]
        project = Project("Promo", 30, clips)
        clips.append(Clip("b", "b.png", 1, 1))
        assert isinstance(project.clips, tuple)
        assert len(project.clips) == 1

    def test_empty_project(self) -> None:
        project = Project("Promo", 30)
        assert project.clips == ()
        assert project.duration == 0.0

    def test_duration_is_latest_end(self) -> None:
        clips = [Clip("a", "a.png", 0, 10, "A2"), Clip("b", "b.png", 4, 2, "V")]
        assert Project("Promo", 30, clips).duration == 10

    def test_clips_on_keeps_input_order(self) -> None:
        clips = [
            Clip("v2", "v2.png", 5, 1, "V"),
            Clip("vo", "vo.mp3", 0, 1, "A1"),
            Clip("v1", "v1.png", 0, 1, "V"),
        ]
        project = Project("Promo", 30, clips)
        assert [c.clip_name for c in project.clips_on("V")] == ["v2", "v1"]
        assert project.clips_on("A2") == []

    def test_rational_frame_rate_accepted(self) -> None:
        assert Project("Promo", 29.97).frame_rate == 29.97

    @pytest.mark.parametrize("fps", [Fraction(30000, 1001), Fraction(24)])
    def test_fraction_frame_rate_accepted(self, fps: Fraction) -> None:
        clip = Clip("a", "a.mp4", Fraction(1, 2), Fraction(3))
        project = Project("Promo", fps, [clip])
        assert project.frame_rate == fps
        assert project.duration == Fraction(7, 2)

    @pytest.mark.parametrize("title", ["", "   "])
    def test_blank_title_raises(self, title: str) -> None:
        with pytest.raises(InvalidProjectError):
            Project(title, 30)

    @pytest.mark.parametrize("fps", [0, -30, float("nan"), "30"])
    def test_bad_frame_rate_raises(self, fps: object) -> None:
        with pytest.raises(InvalidProjectError):
            Project("Promo", fps)  # type: ignore[arg-type]

    def test_non_clip_entry_raises(self) -> None:
        with pytest.raises(InvalidProjectError):
            Project("Promo", 30, [{"clip_name": "a"}])  # type: ignore[list-item]
