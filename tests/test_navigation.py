"""Tests for the route back stack."""
import unittest

from breaking_silence.navigation import AppDestinations, Navigator


class TestNavigator(unittest.TestCase):
    def setUp(self):
        self.nav = Navigator()
        self.changes = []
        self.nav.add_listener(lambda prev, route: self.changes.append((prev, route)))

    def test_starts_at_home(self):
        self.assertEqual(self.nav.current, AppDestinations.HOME_ROUTE)
        self.assertEqual(self.nav.back_stack, ["home"])

    def test_navigate_pushes_and_notifies(self):
        self.nav.navigate(AppDestinations.SCAN_ROUTE)
        self.assertEqual(self.nav.current, "scan")
        self.assertEqual(self.nav.back_stack, ["home", "scan"])
        self.assertEqual(self.changes, [("home", "scan")])

    def test_back_returns_to_previous(self):
        self.nav.navigate(AppDestinations.SETTINGS_ROUTE)
        self.nav.navigate(AppDestinations.SCAN_ROUTE)
        self.assertTrue(self.nav.pop_back_stack())
        self.assertEqual(self.nav.current, "settings")
        self.assertEqual(self.changes[-1], ("scan", "settings"))

    def test_back_at_root_does_nothing(self):
        self.assertFalse(self.nav.pop_back_stack())
        self.assertEqual(self.nav.current, "home")
        self.assertEqual(self.changes, [])

    def test_unknown_route(self):
        with self.assertRaises(ValueError):
            self.nav.navigate("profile")
        with self.assertRaises(ValueError):
            Navigator("profile")

    def test_back_stack_is_a_copy(self):
        self.nav.back_stack.append("scan")
        self.assertEqual(self.nav.back_stack, ["home"])

    def test_placeholders_are_routes(self):
        for route in AppDestinations.PLACEHOLDERS:
            self.assertIn(route, AppDestinations.ALL)
        self.assertNotIn(AppDestinations.SCAN_ROUTE, AppDestinations.PLACEHOLDERS)


if __name__ == "__main__":
    unittest.main()
