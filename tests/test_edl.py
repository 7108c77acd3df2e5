"""Tests for cutsheet.export.edl module."""

from __future__ import annotations

import pytest

from cutsheet.export.edl import generate_edl, generate_edl_event, generate_edl_header
from cutsheet.timeline import Clip, Project


def event_lines(edl: str) -> list[str]:
    return [line for line in edl.split("\n") if line[:3].isdigit()]


def timecodes(event_line: str) -> list[str]:
    return event_line.split()[-4:]


class TestHeader:
    def test_empty_project_is_header_only(self) -> None:
        edl = generate_edl(Project(title="Promo", frame_rate=30))
        assert edl == "TITLE: Promo\nFCM: NON-DROP FRAME\n\n"

    def test_title_embedded_verbatim(self) -> None:
        assert generate_edl_header("Spring: Launch #2").startswith("TITLE: Spring: Launch #2\n")


class TestEventLayout:
    def test_single_event_exact(self) -> None:
        clip = Clip("Scene1", "https://cdn.example.com/s1.png", 0, 2.5, "V")
        edl = generate_edl(Project(title="Promo", frame_rate=30, clips=[clip]))

        expected = (
            "TITLE: Promo\n"
            "FCM: NON-DROP FRAME\n"
            "\n"
            "001  Scene1" + " " * 26 + " V     C        "
            "00:00:00:00 00:00:02:15 00:00:00:00 00:00:02:15\n"
            "* FROM CLIP NAME: Scene1\n"
            "* SOURCE FILE: https://cdn.example.com/s1.png\n"
        )
        assert edl == expected

    def test_blocks_separated_by_blank_line(self) -> None:
        clips = [
            Clip("Scene1", "s1.png", 0, 2, "V"),
            Clip("VO1", "vo1.mp3", 0, 1.8, "A1"),
        ]
        edl = generate_edl(Project(title="Promo", frame_rate=30, clips=clips))

        expected = (
            "TITLE: Promo\n"
            "FCM: NON-DROP FRAME\n"
            "\n"
            "001  Scene1" + " " * 26 + " V     C        "
            "00:00:00:00 00:00:02:00 00:00:00:00 00:00:02:00\n"
            "* FROM CLIP NAME: Scene1\n"
            "* SOURCE FILE: s1.png\n"
            "\n"
            "002  VO1" + " " * 29 + " A1     C        "
            "00:00:00:00 00:00:01:24 00:00:00:00 00:00:01:24\n"
            "* FROM CLIP NAME: VO1\n"
            "* SOURCE FILE: vo1.mp3\n"
        )
        assert edl == expected

    def test_clip_name_padded_to_32(self) -> None:
        block = generate_edl_event(1, Clip("A", "a.png", 0, 1, "V"), 30)
        assert block.startswith("001  A" + " " * 31 + " V")

    def test_long_clip_name_not_truncated(self) -> None:
        name = "X" * 40
        block = generate_edl_event(1, Clip(name, "a.png", 0, 1, "V"), 30)
        assert block.startswith(f"001  {name} V     C")
        assert f"* FROM CLIP NAME: {name}\n" in block

    def test_audio_tracks(self) -> None:
        a2 = generate_edl_event(7, Clip("Music", "bed.mp3", 0, 10, "A2"), 24)
        assert " A2     C        " in a2
        assert a2.startswith("007  ")


class TestTimecodes:
    def test_record_and_source_times(self) -> None:
        clip = Clip("Scene3", "s3.png", start_time=5, duration=3, track="V")
        edl = generate_edl(Project(title="Promo", frame_rate=30, clips=[clip]))

        src_in, src_out, rec_in, rec_out = timecodes(event_lines(edl)[0])
        assert (src_in, src_out) == ("00:00:00:00", "00:00:03:00")
        assert (rec_in, rec_out) == ("00:00:05:00", "00:00:08:00")

    def test_source_independent_of_start(self) -> None:
        early = generate_edl_event(1, Clip("A", "a.png", 0, 3, "V"), 30)
        late = generate_edl_event(1, Clip("A", "a.png", 3600, 3, "V"), 30)
        assert timecodes(early.split("\n")[0])[:2] == timecodes(late.split("\n")[0])[:2]

    def test_source_in_offsets_source_range(self) -> None:
        clip = Clip("Trim", "long.mov", start_time=1, duration=2, track="V", source_in=4)
        src_in, src_out, rec_in, rec_out = timecodes(generate_edl_event(1, clip, 25).split("\n")[0])
        assert (src_in, src_out) == ("00:00:04:00", "00:00:06:00")
        assert (rec_in, rec_out) == ("00:00:01:00", "00:00:03:00")

    def test_frame_rate_applies_to_every_event(self) -> None:
        clips = [Clip("A", "a.png", 0.5, 0.5, "V"), Clip("B", "b.png", 1.5, 0.5, "V")]
        edl = generate_edl(Project(title="Promo", frame_rate=24, clips=clips))
        assert [timecodes(line)[2] for line in event_lines(edl)] == ["00:00:00:12", "00:00:01:12"]


class TestEventOrder:
    @pytest.mark.parametrize("count", [1, 2, 9, 10, 12])
    def test_sequential_numbers(self, count: int) -> None:
        clips = [Clip(f"Clip{i}", f"c{i}.png", i, 1, "V") for i in range(count)]
        edl = generate_edl(Project(title="Promo", frame_rate=30, clips=clips))

        numbers = [line[:3] for line in event_lines(edl)]
        assert numbers == [f"{i:03d}" for i in range(1, count + 1)]
        assert edl.count("* FROM CLIP NAME:") == count

    def test_unsorted_input_kept_in_order(self) -> None:
        clips = [
            Clip("Late", "late.png", 10, 1, "V"),
            Clip("Early", "early.png", 0, 1, "V"),
            Clip("Middle", "middle.png", 5, 1, "A1"),
        ]
        edl = generate_edl(Project(title="Promo", frame_rate=30, clips=clips))

        lines = event_lines(edl)
        assert [line.split()[1] for line in lines] == ["Late", "Early", "Middle"]
        assert [line[:3] for line in lines] == ["001", "002", "003"]

    def test_overlapping_clips_each_get_an_event(self) -> None:
        clips = [Clip("A", "a.png", 0, 5, "V"), Clip("B", "b.png", 2, 5, "V")]
        edl = generate_edl(Project(title="Promo", frame_rate=30, clips=clips))
        assert len(event_lines(edl)) == 2

    def test_more_than_999_events_widen_number(self) -> None:
        clips = [Clip("C", "c.png", 0, 1, "V")] * 1000
        lines = event_lines(generate_edl(Project(title="Promo", frame_rate=30, clips=clips)))
        assert lines[-1].startswith("1000  C")


class TestDeterminism:
    def test_idempotent(self) -> None:
        project = Project(
            title="Promo",
            frame_rate=30,
            clips=[Clip("Scene1", "s1.png", 0, 2, "V"), Clip("Music", "bed.mp3", 0, 2, "A2")],
        )
        assert generate_edl(project) == generate_edl(project)

    def test_does_not_mutate_project(self) -> None:
        clips = (Clip("Scene1", "s1.png", 0, 2, "V"),)
        project = Project(title="Promo", frame_rate=30, clips=clips)
        generate_edl(project)
        assert project.clips == clips
