from importing.usernames import allocate, base_username


class TestBaseUsername:
    """Tests for base_username function."""

    def test_lowercase_concatenation(self):
        assert base_username("Jane", "Doe") == "janedoe"

    def test_no_separator(self):
        assert base_username("MARY", "O'Neil") == "maryo'neil"


class TestAllocate:
    """Tests for allocate function."""

    def test_returns_base_when_free(self):
        """Test that a free base name is returned unchanged."""
        assert allocate("janedoe", lambda name: False) == "janedoe"

    def test_first_suffix_when_base_taken(self):
        taken = {"janedoe"}

        assert allocate("janedoe", taken.__contains__) == "janedoe1"

    def test_skips_taken_suffixes(self):
        taken = {"janedoe", "janedoe1", "janedoe2"}

        assert allocate("janedoe", taken.__contains__) == "janedoe3"

    def test_fills_gap_in_suffixes(self):
        """Test that the lowest free suffix wins, even with higher ones taken."""
        taken = {"janedoe", "janedoe2"}

        assert allocate("janedoe", taken.__contains__) == "janedoe1"

    def test_never_returns_taken_name(self):
        taken = {"janedoe"} | {f"janedoe{i}" for i in range(1, 50)}

        name = allocate("janedoe", taken.__contains__)

        assert name not in taken
        assert name == "janedoe50"

    def test_suffixes_tried_in_order(self):
        """Test that candidates are checked in increasing suffix order."""
        lookups = []
        taken = {"janedoe", "janedoe1"}

        def exists(name):
            lookups.append(name)
            return name in taken

        allocate("janedoe", exists)

        assert lookups == ["janedoe", "janedoe1", "janedoe2"]

    def test_no_caching_between_calls(self):
        """Test that each call re-checks the lookup."""
        taken = set()

        first = allocate("janedoe", taken.__contains__)
        taken.add(first)
        second = allocate("janedoe", taken.__contains__)

        assert first == "janedoe"
        assert second == "janedoe1"
