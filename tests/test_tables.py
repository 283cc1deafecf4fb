"""
Test cases for step table conversion and body lookups
"""

from unittest import TestCase

from behave.model import Table

from demoqa.tables import coerce, first_row, get_by_path, rows_hash


class TestCoerce(TestCase):
    """Step argument coercion"""

    def test_integers(self):
        """It should turn digit strings into ints"""
        self.assertEqual(coerce("999"), 999)
        self.assertEqual(coerce("0"), 0)

    def test_floats(self):
        """It should turn decimal strings into floats"""
        self.assertEqual(coerce("8.99"), 8.99)

    def test_booleans(self):
        """It should turn true/false in any case into bools"""
        self.assertIs(coerce("true"), True)
        self.assertIs(coerce("FALSE"), False)
        self.assertIs(coerce("True"), True)

    def test_strings(self):
        """It should pass anything else through"""
        for value in ("i7", "-5", "1.", "1e3", "yes", ""):
            self.assertEqual(coerce(value), value)


class TestTables(TestCase):
    """behave table helpers"""

    def test_rows_hash(self):
        """It should build a coerced dict from a two-column table"""
        table = Table(["price", "999"], rows=[["cpu", "i7"], ["used", "false"], ["weight", "1.5"]])
        self.assertEqual(rows_hash(table), {"price": 999, "cpu": "i7", "used": False, "weight": 1.5})

    def test_rows_hash_single_pair(self):
        """It should read a table made of the heading row only"""
        self.assertEqual(rows_hash(Table(["price", "899"])), {"price": 899})

    def test_rows_hash_wrong_shape(self):
        """It should reject a table that is not two columns wide"""
        self.assertRaises(ValueError, rows_hash, Table(["a", "b", "c"]))

    def test_first_row(self):
        """It should key the first data row by heading"""
        table = Table(["Email", "Age"], rows=[["a@b.c", "30"], ["x@y.z", "40"]])
        self.assertEqual(first_row(table), {"Email": "a@b.c", "Age": "30"})

    def test_first_row_empty(self):
        """It should return an empty dict for a table with no rows"""
        self.assertEqual(first_row(Table(["Email"])), {})


class TestGetByPath(TestCase):
    """Dotted path lookups"""

    BODY = {"id": "7", "data": {"price": 899, "tags": ["a", "b"]}, "empty": None}

    def test_nested(self):
        """It should walk nested dicts"""
        self.assertEqual(get_by_path(self.BODY, "data.price"), 899)

    def test_list_index(self):
        """It should index into lists"""
        self.assertEqual(get_by_path(self.BODY, "data.tags.1"), "b")
        self.assertEqual(get_by_path([{"id": "1"}], "0.id"), "1")

    def test_missing(self):
        """It should return the default for missing paths"""
        self.assertIsNone(get_by_path(self.BODY, "data.cpu"))
        self.assertEqual(get_by_path(self.BODY, "data.tags.9", "n/a"), "n/a")
        self.assertEqual(get_by_path(self.BODY, "empty.x", "n/a"), "n/a")
        self.assertEqual(get_by_path("text", "a", "n/a"), "n/a")

    def test_none_value(self):
        """It should return a stored None"""
        self.assertIsNone(get_by_path(self.BODY, "empty", "n/a"))
