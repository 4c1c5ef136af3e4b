"""Unit tests for engines.sql.safety — static checks for query templates."""

from sqltpl.engines.sql.safety import check_template


class TestCheckTemplate:
    def test_no_blocks(self):
        assert check_template("SELECT ?# FROM t WHERE id = ?d") == []

    def test_valid_block(self):
        assert check_template("SELECT * FROM t{ WHERE id = ?d}") == []

    def test_nested_block(self):
        warnings = check_template("SELECT * FROM t {WHERE {a = ?d}}")
        assert [w["kind"] for w in warnings] == ["nested_block"]
        assert warnings[0]["position"] == 23

    def test_unmatched_close(self):
        warnings = check_template("SELECT ?d}")
        assert len(warnings) == 1
        assert warnings[0]["kind"] == "unmatched_close"
        assert warnings[0]["position"] == 9

    def test_unclosed_block(self):
        warnings = check_template("SELECT 1 { AND a = ?d")
        assert [w["kind"] for w in warnings] == ["unclosed_block"]
        assert warnings[0]["position"] == 9

    def test_static_block(self):
        warnings = check_template("SELECT 1{ AND a = 1}")
        assert [w["kind"] for w in warnings] == ["static_block"]
        assert "no placeholder" in warnings[0]["message"]

    def test_sorted_by_position(self):
        warnings = check_template("} {x}")
        assert [w["kind"] for w in warnings] == ["unmatched_close", "static_block"]

    def test_empty_template(self):
        assert check_template("") == []
