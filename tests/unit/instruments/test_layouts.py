"""Tests for question-pair layouts."""

from __future__ import annotations


class TestLayouts:
    """Test the innate and surface pair tables."""

    def test_question_counts(self):
        from drivefit.instruments.layouts import (
            IMPOSED_QUESTION_COUNT,
            INNATE_LAYOUT,
            SURFACE_LAYOUT,
        )

        assert INNATE_LAYOUT.question_count == 17
        assert SURFACE_LAYOUT.question_count == 20
        assert IMPOSED_QUESTION_COUNT == 21

    def test_every_drive_has_terms(self):
        from drivefit.drives.models import DRIVES
        from drivefit.instruments.layouts import INNATE_LAYOUT, SURFACE_LAYOUT

        for drive in DRIVES:
            assert INNATE_LAYOUT.terms_for(drive)
            assert SURFACE_LAYOUT.terms_for(drive)

    def test_context_labels_are_stripped(self):
        from drivefit.drives.models import Drive
        from drivefit.instruments.layouts import SURFACE_LAYOUT

        pair = SURFACE_LAYOUT.pairs[17]

        assert pair.front is Drive.DOMINANCE
        assert pair.back is Drive.DOMINANCE
        assert pair.front_label == "dominancePrivate"

    def test_find_pair_in_either_order(self):
        from drivefit.drives.models import Drive
        from drivefit.instruments.layouts import INNATE_LAYOUT

        pair, a_is_front = INNATE_LAYOUT.find_pair(Drive.EXPLORATION, Drive.ACHIEVEMENT)
        same, reversed_front = INNATE_LAYOUT.find_pair(Drive.ACHIEVEMENT, Drive.EXPLORATION)

        assert pair.index == 1
        assert a_is_front is True
        assert same.index == 1
        assert reversed_front is False

    def test_mirrored_flips_orientation(self):
        from drivefit.instruments.layouts import INNATE_LAYOUT

        mirrored = INNATE_LAYOUT.mirrored()

        assert mirrored.front_reversed is True
        assert mirrored.pairs == INNATE_LAYOUT.pairs

    def test_imposed_triplet(self):
        from drivefit.drives.models import Drive
        from drivefit.instruments.layouts import imposed_triplet

        assert imposed_triplet(Drive.EXPLORATION) == (1, 2, 3)
        assert imposed_triplet(Drive.VALUE) == (19, 20, 21)
