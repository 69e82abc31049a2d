"""
Unit tests for the large first-contact pass.
"""

from txflag.first_contact_detector import detect_large_first_contacts

from .factories import dataset, tx


class TestDetectLargeFirstContacts:
    """Tests for pairwise relationship history."""

    def test_first_large_transaction_flagged_later_ones_not(self):
        ds = dataset(
            tx("first", "carol", "dave", 1500.0, minutes=1),
            tx("small", "carol", "dave", 50.0, minutes=2),
            tx("big_again", "carol", "dave", 90000.0, minutes=3),
        )
        assert detect_large_first_contacts(ds) == {"first"}

    def test_relationship_is_symmetric(self):
        ds = dataset(
            tx("ab", "a", "b", 2000.0, minutes=0),
            tx("ba", "b", "a", 2000.0, minutes=1),
        )
        assert detect_large_first_contacts(ds) == {"ab"}

    def test_small_transaction_establishes_relationship(self):
        ds = dataset(
            tx("small", "a", "b", 999.99, minutes=0),
            tx("large", "b", "a", 5000.0, minutes=1),
        )
        assert detect_large_first_contacts(ds) == set()

    def test_threshold_is_inclusive(self):
        ds = dataset(tx("t", "a", "b", 1000.0))
        assert detect_large_first_contacts(ds) == {"t"}

    def test_input_is_resorted_by_time(self):
        ds = dataset(
            tx("later", "a", "b", 3000.0, minutes=30),
            tx("earlier", "a", "b", 3000.0, minutes=0),
        )
        assert detect_large_first_contacts(ds) == {"earlier"}

    def test_timestamp_tie_resolved_by_input_order(self):
        ds = dataset(
            tx("listed_first", "a", "b", 3000.0, minutes=0),
            tx("listed_second", "b", "a", 3000.0, minutes=0),
        )
        assert detect_large_first_contacts(ds) == {"listed_first"}

    def test_distinct_pairs_do_not_interact(self):
        ds = dataset(
            tx("ab", "a", "b", 3000.0, minutes=0),
            tx("ac", "a", "c", 3000.0, minutes=0),
            tx("bc", "b", "c", 3000.0, minutes=0),
        )
        assert detect_large_first_contacts(ds) == {"ab", "ac", "bc"}

    def test_custom_threshold(self):
        ds = dataset(tx("t", "a", "b", 300.0))
        assert detect_large_first_contacts(ds, threshold=250.0) == {"t"}
        assert detect_large_first_contacts(ds, threshold=500.0) == set()

    def test_deterministic(self):
        ds = dataset(
            tx("t1", "a", "b", 1200.0, minutes=0),
            tx("t2", "c", "a", 1200.0, minutes=0),
            tx("t3", "b", "a", 1200.0, minutes=0),
        )
        assert detect_large_first_contacts(ds) == detect_large_first_contacts(ds)

    def test_no_state_between_calls(self):
        ds = dataset(tx("t", "a", "b", 5000.0))
        assert detect_large_first_contacts(ds) == {"t"}
        assert detect_large_first_contacts(ds) == {"t"}

    def test_empty_dataset(self):
        assert detect_large_first_contacts(dataset()) == set()
