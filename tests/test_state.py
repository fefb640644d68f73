"""Tests for the resource state store (pact_webhooks/resource/state.py)."""

from pact_webhooks.resource.state import ResourceState


class TestResourceState:
    """Tests for ResourceState accessors."""

    def test_absent_versus_empty(self):
        """Test an empty string is present while a missing key is not."""
        state = ResourceState({"description": "", "request": {"password": ""}})
        assert state.get_ok_exists("description") == ("", True)
        assert state.get_ok_exists("request.password") == ("", True)
        assert state.get_ok_exists("request.username") == (None, False)
        assert state.get_ok_exists("missing") == (None, False)

    def test_none_counts_as_absent(self):
        """Test a stored None is reported as not set."""
        state = ResourceState({"request": {"password": None}})
        assert state.get_ok_exists("request.password") == (None, False)

    def test_nested_block_list_form(self):
        """Test numeric segments index into the nested-block list form."""
        state = ResourceState({"request": [{"password": "s3cr3t"}]})
        assert state.get("request.0.password") == "s3cr3t"
        assert state.get("request.password") == "s3cr3t"
        assert state.get("request.1.password") is None

    def test_set_creates_intermediate_maps(self):
        """Test dotted keys create the nested structure."""
        state = ResourceState()
        state.set("request.headers", {"X": "1"})
        state.set("description", "hook")
        assert state.to_document() == {"request": {"headers": {"X": "1"}}, "description": "hook"}

    def test_values_are_copied(self):
        """Test callers cannot mutate stored state through returned values."""
        headers = {"X": "1"}
        state = ResourceState()
        state.set("request.headers", headers)
        headers["X"] = "2"
        state.get("request.headers")["X"] = "3"
        assert state.get("request.headers") == {"X": "1"}

    def test_id(self):
        """Test the id starts empty and can be set and cleared."""
        state = ResourceState()
        assert state.id == ""
        state.set_id("abc123")
        assert state.id == "abc123"
        state.set_id("")
        assert state.id == ""

    def test_save_and_load(self, tmp_path):
        """Test state survives a round trip through a file."""
        path = tmp_path / "webhook.state.json"
        state = ResourceState({"description": "hook", "request": {"url": "https://x/hook"}}, "abc123")
        state.save(path)

        loaded = ResourceState.load(path)
        assert loaded.id == "abc123"
        assert loaded.to_document() == {"description": "hook", "request": {"url": "https://x/hook"}}

    def test_load_missing_file(self, tmp_path):
        """Test a missing state file starts empty."""
        state = ResourceState.load(tmp_path / "nope.json")
        assert state.id == ""
        assert state.to_document() == {}
