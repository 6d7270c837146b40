#!/usr/bin/env python3
"""
Tests for new-name computation and rename plan building
"""

from pathlib import Path

from subrenamer.rename.core import build_new_name, build_plan
from subrenamer.utils import ON_COLLISION_SKIP

from conftest import pair


def _names(plan):
    return [(i.source_path.name, i.destination_path.name) for i in plan.items]


class TestBuildNewName:
    """Video stem + preserved tags + subtitle extension"""

    def test_language_tag_is_kept(self):
        assert build_new_name(pair("/m/Show.S01E02.mkv", "/m/subs_02_eng.srt")) == "Show.S01E02.eng.srt"

    def test_plain_rename(self):
        assert build_new_name(pair("/m/A.mkv", "/m/1.srt")) == "A.srt"

    def test_several_tags_keep_their_order(self):
        name = build_new_name(pair("/m/Show.S01E02.mkv", "/m/show 1x02 en forced.srt"))
        assert name == "Show.S01E02.en.forced.srt"

    def test_extension_case_is_preserved(self):
        assert build_new_name(pair("/m/Show.S01E02.mkv", "/m/x_02.SRT")) == "Show.S01E02.SRT"

    def test_tags_already_on_video_are_not_doubled(self):
        assert build_new_name(pair("/m/Film.eng.mkv", "/m/x.eng.srt")) == "Film.eng.srt"

    def test_custom_vocabulary(self):
        name = build_new_name(pair("/m/Show.S01E02.mkv", "/m/x_02_klingon.srt"), language_tags={"klingon"})
        assert name == "Show.S01E02.klingon.srt"


class TestBuildPlan:
    """Plan determinism, no-ops and collisions"""

    def test_destination_stays_in_subtitle_directory(self):
        plan = build_plan([pair("/m/Show.S01E02.mkv", "/m/Subs/subs_02_eng.srt")])
        assert plan.items[0].destination_path == Path("/m/Subs/Show.S01E02.eng.srt")

    def test_already_named_subtitle_is_not_planned(self):
        plan = build_plan([pair("/m/A.mkv", "/m/A.srt")])
        assert len(plan) == 0

    def test_collisions_get_a_counter(self):
        pairs = [
            pair("/m/Show.S01E02.mkv", "/m/c_02.srt"),
            pair("/m/Show.S01E02.mkv", "/m/a_02.srt"),
            pair("/m/Show.S01E02.mkv", "/m/b_02.srt"),
        ]
        plan = build_plan(pairs)
        assert _names(plan) == [
            ("a_02.srt", "Show.S01E02.srt"),
            ("b_02.srt", "Show.S01E02.2.srt"),
            ("c_02.srt", "Show.S01E02.3.srt"),
        ]
        assert [i.collision_resolved for i in plan.items] == [False, True, True]

    def test_counter_goes_before_language_tags(self):
        pairs = [
            pair("/m/Show.S01E02.mkv", "/m/a_02_eng.srt"),
            pair("/m/Show.S01E02.mkv", "/m/b_02_eng.srt"),
        ]
        assert _names(build_plan(pairs)) == [
            ("a_02_eng.srt", "Show.S01E02.eng.srt"),
            ("b_02_eng.srt", "Show.S01E02.2.eng.srt"),
        ]

    def test_different_tags_do_not_collide(self):
        pairs = [
            pair("/m/Show.S01E02.mkv", "/m/a_02_eng.srt"),
            pair("/m/Show.S01E02.mkv", "/m/b_02_spa.srt"),
        ]
        assert _names(build_plan(pairs)) == [
            ("a_02_eng.srt", "Show.S01E02.eng.srt"),
            ("b_02_spa.srt", "Show.S01E02.spa.srt"),
        ]

    def test_file_already_holding_the_name_keeps_it(self):
        """A subtitle already at its final name is never displaced"""
        pairs = [
            pair("/m/Show.S01E02.mkv", "/m/x_02.srt"),
            pair("/m/Show.S01E02.mkv", "/m/Show.S01E02.srt"),
        ]
        plan = build_plan(pairs)
        assert _names(plan) == [("x_02.srt", "Show.S01E02.2.srt")]

    def test_previously_disambiguated_name_is_stable(self):
        pairs = [
            pair("/m/Show.S01E02.mkv", "/m/Show.S01E02.srt"),
            pair("/m/Show.S01E02.mkv", "/m/Show.S01E02.2.srt"),
        ]
        assert len(build_plan(pairs)) == 0

    def test_skip_policy(self):
        pairs = [
            pair("/m/Show.S01E02.mkv", "/m/a_02.srt"),
            pair("/m/Show.S01E02.mkv", "/m/b_02.srt"),
        ]
        plan = build_plan(pairs, on_collision=ON_COLLISION_SKIP)
        assert _names(plan) == [("a_02.srt", "Show.S01E02.srt")]
        assert [(i.source_path.name, i.destination_path.name) for i in plan.skipped] == [
            ("b_02.srt", "Show.S01E02.srt"),
        ]

    def test_destinations_are_unique_and_differ_from_sources(self):
        pairs = [pair("/m/Show.S01E02.mkv", f"/m/v{n}_02_eng.srt") for n in range(6)]
        plan = build_plan(pairs)
        destinations = [i.destination_path for i in plan.items]
        assert len(destinations) == len(set(destinations)) == 6
        assert all(i.destination_path != i.source_path for i in plan.items)

    def test_chained_renames_are_ordered(self):
        """B.srt must move out before A.srt takes its name"""
        pairs = [
            pair("/m/B.mkv", "/m/A.srt"),
            pair("/m/C.mkv", "/m/B.srt"),
        ]
        assert _names(build_plan(pairs)) == [("B.srt", "C.srt"), ("A.srt", "B.srt")]

    def test_plan_is_deterministic(self):
        pairs = [
            pair("/m/Show.S01E02.mkv", "/m/b_02.srt"),
            pair("/m/Show.S01E02.mkv", "/m/a_02.srt"),
        ]
        assert _names(build_plan(pairs)) == _names(build_plan(list(reversed(pairs))))

    def test_counter_names_from_an_earlier_run_are_stable(self):
        """Three subtitles that collided once keep their .2/.3 names on the next run"""
        names = ("Show.S01E02.srt", "Show.S01E02.2.srt", "Show.S01E02.3.srt")
        pairs = [pair("/m/Show.S01E02.mkv", f"/m/{name}") for name in names]
        assert len(build_plan(pairs)) == 0
        assert len(build_plan(list(reversed(pairs)))) == 0

    def test_new_subtitle_skips_counter_names_in_use(self):
        pairs = [
            pair("/m/Show.S01E02.mkv", "/m/Show.S01E02.srt"),
            pair("/m/Show.S01E02.mkv", "/m/Show.S01E02.2.srt"),
            pair("/m/Show.S01E02.mkv", "/m/a_02.srt"),
        ]
        assert _names(build_plan(pairs)) == [("a_02.srt", "Show.S01E02.3.srt")]
