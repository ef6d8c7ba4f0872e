#!/usr/bin/env python3
"""
Player Generation Tests
========================

Reference tables, names, attributes, personality and bio generation.
"""

import logging
import random
import re
from dataclasses import replace

import pytest

from hoops.attributes import (
    ATTRIBUTE_MAX,
    ATTRIBUTE_MIN,
    CATEGORIES,
    POSITION_WEIGHTS,
    PlayerAttributes,
    calculate_overall_rating,
    generate_player_attributes,
    get_attribute_display_name,
    get_attribute_grade,
    get_player_archetype,
    get_top_attributes,
    roll_raw_attributes,
    round_half_up,
)
from hoops.bio import (
    FALLBACK_WEIGHT,
    HEIGHT_RANGES,
    PlayerBio,
    format_college_display,
    format_draft_display,
    generate_draft_info,
    generate_player_bio,
    generate_player_height,
    generate_player_weight,
    get_bmi_category,
    get_college_tier,
    get_hometown_abbreviation,
    is_international_player,
    parse_height_inches,
)
from hoops.colleges import (
    ALL_COLLEGES,
    INTERNATIONAL,
    INTERNATIONAL_WEIGHT,
    NO_COLLEGE,
    NO_COLLEGE_WEIGHT,
    create_college_weighted_pool,
    get_college_info,
    most_common_college,
)
from hoops.config import POSITIONS
from hoops.hometowns import get_hometown_info, is_international_hometown
from hoops.names import FIRST_NAMES, LAST_NAMES, NameGenerator, NamePoolExhaustedError
from hoops.personality import (
    PlayerPersonality,
    TRAITS,
    calculate_personality_score,
    generate_personality_traits,
    get_personality_insights,
    get_personality_label,
    get_trait_description,
    get_trait_display_name,
    validate_personality_traits,
)
from hoops.reference_data import build_weighted_pool, weighted_choice


def _uniform_attributes(value: float) -> PlayerAttributes:
    return PlayerAttributes().map_values(lambda _c, _a, _v: value)


# ═══════════════════════════════════════════════════════════════
# REFERENCE DATA
# ═══════════════════════════════════════════════════════════════

class TestReferenceData:
    def test_pool_expands_by_weight(self):
        pool = build_weighted_pool([("a", 3), ("b", 1), ("c", 0)], lambda e: e[1])
        assert [e[0] for e in pool] == ["a", "a", "a", "b"]

    def test_zero_weight_never_drawn(self):
        pool = build_weighted_pool([("a", 2), ("never", 0)], lambda e: e[1])
        rng = random.Random(1)
        assert all(weighted_choice(pool, rng)[0] == "a" for _ in range(200))

    def test_empty_pool_raises(self):
        with pytest.raises(ValueError):
            weighted_choice([])

    def test_college_table_size(self):
        assert len(ALL_COLLEGES) == 149

    def test_college_pool_has_pseudo_entries(self):
        pool = create_college_weighted_pool()
        assert pool.count(NO_COLLEGE) == NO_COLLEGE_WEIGHT
        assert pool.count(INTERNATIONAL) == INTERNATIONAL_WEIGHT
        assert len(pool) == sum(c.weight for c in ALL_COLLEGES) + 40

    def test_college_lookup(self):
        duke = get_college_info("Duke University")
        assert duke is not None
        assert duke.conference == "ACC"
        assert get_college_info("Hogwarts") is None

    def test_most_common_college_is_real(self):
        top = most_common_college()
        assert get_college_info(top).weight == max(c.weight for c in ALL_COLLEGES)

    def test_hometown_lookup(self):
        chicago = get_hometown_info("Chicago, IL")
        assert chicago.state == "IL"
        assert not chicago.is_international
        assert is_international_hometown("Madrid, Spain")
        assert not is_international_hometown("Chicago, IL")
        assert get_hometown_info("Atlantis, Sea") is None


# ═══════════════════════════════════════════════════════════════
# NAME GENERATOR
# ═══════════════════════════════════════════════════════════════

class TestNameGenerator:
    def test_pools_have_no_repeats(self):
        assert len(FIRST_NAMES) == len(set(FIRST_NAMES))
        assert len(LAST_NAMES) == len(set(LAST_NAMES))

    def test_total_possible(self):
        gen = NameGenerator()
        assert gen.total_possible_names == len(FIRST_NAMES) * len(LAST_NAMES)

    def test_names_unique(self):
        gen = NameGenerator(rng=random.Random(5))
        names = [gen.generate_unique_name() for _ in range(500)]
        assert len(set(names)) == 500
        assert gen.used_name_count == 500
        assert all(len(n.split(" ")) == 2 for n in names)

    def test_small_pool_exhausts(self):
        gen = NameGenerator(["Al", "Bo"], ["Xu", "Yi"], rng=random.Random(2))
        names = {gen.generate_unique_name() for _ in range(gen.total_possible_names)}
        assert names == {"Al Xu", "Al Yi", "Bo Xu", "Bo Yi"}
        assert gen.is_name_pool_exhausted()
        with pytest.raises(NamePoolExhaustedError):
            gen.generate_unique_name()

    def test_batch_returns_partial(self, caplog):
        gen = NameGenerator(["Al", "Bo"], ["Xu", "Yi"], rng=random.Random(3))
        with caplog.at_level(logging.WARNING, logger="hoops.names"):
            names = gen.generate_multiple_names(6)
        assert len(names) == 4
        assert "4 out of 6" in caplog.text

    def test_reset_allows_reuse(self):
        gen = NameGenerator(["Al"], ["Xu"], rng=random.Random(4))
        assert gen.generate_unique_name() == "Al Xu"
        gen.reset_used_names()
        assert gen.used_name_count == 0
        assert gen.generate_unique_name() == "Al Xu"

    def test_release_returns_name_to_pool(self):
        gen = NameGenerator(["Al"], ["Xu", "Yi"], rng=random.Random(5))
        gen.generate_multiple_names(2)
        assert gen.is_name_pool_exhausted()
        gen.release("Al Yi")
        gen.release("Not Generated")
        assert gen.used_name_count == 1
        assert gen.generate_unique_name() == "Al Yi"

    def test_independent_instances(self):
        a = NameGenerator(["Al"], ["Xu"])
        b = NameGenerator(["Al"], ["Xu"])
        a.generate_unique_name()
        assert b.generate_unique_name() == "Al Xu"

    def test_pool_low_and_stats(self):
        gen = NameGenerator(["Al", "Bo", "Cy"], ["Xu", "Yi", "Zo"], rng=random.Random(6))
        assert not gen.is_name_pool_low()
        gen.generate_multiple_names(9)
        assert gen.is_name_pool_low()
        stats = gen.get_stats()
        assert stats["used_names"] == 9
        assert stats["available_names"] == 0
        assert stats["total_possible"] == 9
        assert stats["usage_percentage"] == "100.00%"


# ═══════════════════════════════════════════════════════════════
# ATTRIBUTES / OVERALL
# ═══════════════════════════════════════════════════════════════

class TestAttributes:
    def test_position_weights_sum_to_one(self):
        for pos, weights in POSITION_WEIGHTS.items():
            assert abs(sum(weights.values()) - 1.0) < 1e-9, pos
            assert set(weights) == set(CATEGORIES)

    def test_overall_of_uniform_profile(self):
        for pos in POSITIONS:
            assert calculate_overall_rating(_uniform_attributes(72), pos) == 72

    def test_overall_is_pure(self):
        attrs = generate_player_attributes("SF", 27, 75, random.Random(11))
        first = calculate_overall_rating(attrs, "SF")
        assert all(calculate_overall_rating(attrs, "SF") == first for _ in range(10))

    def test_overall_rounds_half_up(self):
        assert round_half_up(72.5) == 73
        assert round_half_up(73.5) == 74
        assert round_half_up(72.49) == 72

    def test_unknown_position(self):
        with pytest.raises(ValueError):
            calculate_overall_rating(PlayerAttributes(), "QB")
        with pytest.raises(ValueError):
            generate_player_attributes("QB", 25, 70)

    def test_bounds_over_many_generations(self):
        rng = random.Random(2024)
        for i in range(10_000):
            pos = POSITIONS[i % len(POSITIONS)]
            age = 18 + i % 23
            target = rng.randint(40, 99)
            attrs = generate_player_attributes(pos, age, target, rng)
            for _cat, _attr, value in attrs.iter_attributes():
                assert ATTRIBUTE_MIN <= value <= ATTRIBUTE_MAX
            personality = generate_personality_traits(pos, age, calculate_overall_rating(attrs, pos), rng)
            for value in personality.to_dict().values():
                assert 0 <= value <= 100

    def test_target_pull_narrows_gap(self):
        gaps = []
        for seed in range(200):
            raw = roll_raw_attributes("PG", 22, random.Random(seed))
            final = generate_player_attributes("PG", 22, 80, random.Random(seed))
            raw_gap = abs(calculate_overall_rating(raw, "PG") - 80)
            final_gap = abs(calculate_overall_rating(final, "PG") - 80)
            assert final_gap <= raw_gap + 1
            gaps.append(final_gap)
        assert sum(gaps) / len(gaps) <= 7

    def test_dict_round_trip_keeps_overall(self):
        attrs = generate_player_attributes("C", 30, 82, random.Random(3))
        restored = PlayerAttributes.from_dict(attrs.to_dict())
        assert calculate_overall_rating(restored, "C") == calculate_overall_rating(attrs, "C")

    @pytest.mark.parametrize("value,grade", [
        (95, "A+"), (94, "A"), (90, "A"), (85, "A-"), (80, "B+"), (75, "B"),
        (70, "B-"), (65, "C+"), (60, "C"), (55, "C-"), (50, "D+"), (40, "D"), (39, "F"),
    ])
    def test_grades(self, value, grade):
        assert get_attribute_grade(value) == grade

    def test_top_attributes(self):
        attrs = _uniform_attributes(50)
        attrs.shooting.three_point_shooting = 90
        attrs.athleticism.speed = 80
        top = get_top_attributes(attrs, count=2)
        assert top == [("shooting", "three_point_shooting", 90), ("athleticism", "speed", 80)]

    def test_archetype(self):
        attrs = _uniform_attributes(50)
        attrs.rebounding.offensive_rebounding = 95
        attrs.rebounding.defensive_rebounding = 95
        assert get_player_archetype(attrs, "C") == "Glass Cleaner"
        assert get_player_archetype(attrs, "PG") == "Traditional Point Guard"


# ═══════════════════════════════════════════════════════════════
# PERSONALITY
# ═══════════════════════════════════════════════════════════════

class TestPersonality:
    @pytest.mark.parametrize("score,label", [
        (24, "Diva"), (25, "Mercurial"), (39, "Mercurial"), (40, "Neutral"),
        (59, "Neutral"), (60, "Pro"), (79, "Pro"), (80, "Leader"),
    ])
    def test_label_thresholds(self, score, label):
        assert get_personality_label(score) == label

    def test_score_formula(self):
        p = PlayerPersonality(agreeableness=80, temperament=20, work_ethic=50, leadership=70,
                              professionalism=60, ego=40, loyalty=50, market_pref=50, morale=80)
        # 20 + 12 + 14 + 12 + 5 + 6
        assert calculate_personality_score(p) == 69.0
        assert p.label == "Pro"

    def test_insights_order(self):
        p = PlayerPersonality(agreeableness=90, temperament=10, work_ethic=90, leadership=90,
                              professionalism=90, ego=10, loyalty=20, market_pref=50, morale=30)
        insights = get_personality_insights(p)
        assert insights[0] == "Natural leader who elevates teammates"
        assert insights[1:] == [
            "Excellent captain material",
            "Exceptional work ethic",
            "Low loyalty - flight risk in free agency",
            "Low morale - performance may suffer",
        ]

    def test_neutral_has_no_label_insight(self):
        p = PlayerPersonality(**{t: 50 for t in TRAITS})
        assert p.label == "Neutral"
        assert get_personality_insights(p) == []

    def test_validate_clamps(self):
        p = PlayerPersonality(agreeableness=-5, ego=140)
        fixed = validate_personality_traits(p)
        assert fixed.agreeableness == 0
        assert fixed.ego == 100

    def test_veteran_point_guard_leans_leader(self):
        rng = random.Random(8)
        young = [generate_personality_traits("C", 20, 70, rng).leadership for _ in range(300)]
        vets = [generate_personality_traits("PG", 34, 70, rng).leadership for _ in range(300)]
        assert sum(vets) / len(vets) > sum(young) / len(young) + 15


# ═══════════════════════════════════════════════════════════════
# BIO
# ═══════════════════════════════════════════════════════════════

class TestBio:
    def test_draft_round_and_pick_agree(self):
        rng = random.Random(31)
        for i in range(2000):
            bio = generate_player_bio(19 + i % 18, POSITIONS[i % 5], 50 + i % 45, 2024, rng)
            assert (bio.draft_round is None) == (bio.draft_pick is None)
            if bio.draft_pick is not None:
                assert 1 <= bio.draft_pick <= 60
                assert bio.draft_round == (1 if bio.draft_pick <= 30 else 2)
            assert 1990 <= bio.draft_year <= 2024

    def test_elite_pick_band(self):
        rng = random.Random(4)
        for _ in range(500):
            draft_round, pick = generate_draft_info(90, rng)
            if pick is not None:
                assert 1 <= pick <= 15
                assert draft_round == 1

    def test_elite_domestic_players_attend_college(self):
        rng = random.Random(12)
        for _ in range(3000):
            bio = generate_player_bio(25, "SF", 88, 2024, rng)
            if not is_international_hometown(bio.hometown):
                assert bio.college not in (NO_COLLEGE, INTERNATIONAL)

    def test_international_players_never_no_college_from_pool(self):
        rng = random.Random(13)
        for _ in range(2000):
            bio = generate_player_bio(25, "SG", 70, 2024, rng)
            if is_international_hometown(bio.hometown) and bio.college not in (NO_COLLEGE, INTERNATIONAL):
                assert get_college_info(bio.college) is not None

    def test_height_format_and_range(self):
        rng = random.Random(14)
        for pos, (lo, hi, _common) in HEIGHT_RANGES.items():
            for _ in range(200):
                height = generate_player_height(pos, rng)
                assert re.fullmatch(r"\d+'\d+\"", height)
                assert lo <= parse_height_inches(height) <= hi

    def test_weight_bounds(self):
        rng = random.Random(15)
        for pos in POSITIONS:
            for _ in range(200):
                weight = generate_player_weight(generate_player_height(pos, rng), pos, rng)
                assert 160 <= weight <= 350

    def test_malformed_height_uses_fallback(self):
        assert generate_player_weight("tall", "C") == FALLBACK_WEIGHT
        assert generate_player_weight("", "PG") == FALLBACK_WEIGHT

    def test_format_draft_display(self):
        drafted = PlayerBio("Duke University", "Chicago, IL", 2019, 1, 7, "6'6\"", 215)
        undrafted = PlayerBio(NO_COLLEGE, "Chicago, IL", 2019, None, None, "6'6\"", 215)
        assert format_draft_display(drafted) == "2019, 1st Round, Pick 7"
        assert format_draft_display(undrafted) == "Undrafted"
        assert undrafted.undrafted

    def test_hometown_abbreviation(self):
        assert get_hometown_abbreviation("Chicago, IL") == "IL"
        assert get_hometown_abbreviation("Madrid, Spain") == "ESP"
        assert get_hometown_abbreviation("Vilnius, Lithuania") == "LTU"

    def test_bmi_category(self):
        assert get_bmi_category("6'8\"", 215) == "normal"
        assert get_bmi_category("bad", 230) == "normal"
        assert get_bmi_category("6'0\"", 260) == "overweight"


# ═══════════════════════════════════════════════════════════════
# DISPLAY HELPERS
# ═══════════════════════════════════════════════════════════════

class TestDisplayHelpers:
    def test_college_display_and_tier(self):
        assert format_college_display(None) == NO_COLLEGE
        assert format_college_display("Duke University") == "Duke University"
        assert get_college_tier("Duke University") == "elite"
        assert get_college_tier(NO_COLLEGE) == "none"
        assert get_college_tier(INTERNATIONAL) == "mid"
        assert get_college_tier("Ohio State University", random.Random(1)) in ("high", "mid")

    def test_international_player(self):
        abroad = PlayerBio(NO_COLLEGE, "Madrid, Spain", 2015, None, None, "6'10\"", 240)
        home = PlayerBio("Duke University", "Chicago, IL", 2015, 1, 3, "6'5\"", 205)
        assert is_international_player(abroad)
        assert not is_international_player(home)
        assert is_international_player(replace(home, college=INTERNATIONAL))

    def test_attribute_display_names(self):
        assert get_attribute_display_name("three_point_shooting") == "3-Point Shooting"
        assert get_attribute_display_name("mystery") == "mystery"

    def test_trait_display(self):
        for trait in TRAITS:
            assert get_trait_display_name(trait)
            assert get_trait_description(trait)
        assert get_trait_display_name("market_pref") == "Market Preference"
        assert get_trait_description("unknown") == ""
