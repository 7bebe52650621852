"""
Unit Tests for GuidelineCollector
"""

from qbank_toolkit.analysis.collector import GuidelineCollector


class TestGuidelineCollector:
    """Tests for evidence accumulation and build()."""

    def test_build_when_sets_filled_then_sorted_tuples(self):
        collector = GuidelineCollector()
        collector.answer_formats.update({"table", "graph", "mcq"})

        assert collector.build().answer_formats == ("graph", "mcq", "table")

    def test_add_subject_when_duplicate_then_first_seen_order_kept(self):
        collector = GuidelineCollector()
        for subject in ("Physics", "", None, "Chemistry", "Physics"):
            collector.add_subject(subject)

        assert collector.build().subjects_detected == ("Physics", "Chemistry")

    def test_mark_abbreviation_when_without_signal_then_label_only(self):
        collector = GuidelineCollector()
        collector.mark_abbreviation("cao", with_signal=False)
        summary = collector.build()

        assert summary.abbreviations_detected == ("CAO",)
        assert summary.variation_signals == ()

    def test_build_when_context_type_only_then_contextual_flag_forced(self):
        collector = GuidelineCollector()
        collector.context_types.add("unit")

        assert collector.build().includes_contextual_answers is True
