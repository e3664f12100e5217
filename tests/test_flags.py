import unittest


from testenv.flags import FlagSpec, format_flag_help, parse_flags

TABLE = (
    FlagSpec(("-a", "--alpha"), "alpha", help="Alpha"),
    FlagSpec(("-n", "--name"), "name", takes_value=True, metavar="name", help="Name"),
)
DEFAULTS = {"alpha": False, "name": None}
SUBS = {"go": "go", "start": "go", "stop": "stop"}


class TestParseFlags(unittest.TestCase):
    def test_flags_and_values(self) -> None:
        parsed = parse_flags(["-a", "--name", "x"], TABLE, defaults=DEFAULTS)
        self.assertEqual({"alpha": True, "name": "x"}, parsed.values)
        self.assertEqual((), parsed.warnings)
        self.assertIsNone(parsed.subcommand)

    def test_aliases_and_last_subcommand_wins(self) -> None:
        parsed = parse_flags(["start", "stop", "start"], TABLE, defaults=DEFAULTS, subcommands=SUBS)
        self.assertEqual("go", parsed.subcommand)

    def test_unknown_and_missing_value(self) -> None:
        parsed = parse_flags(["--what", "bare", "-n"], TABLE, defaults=DEFAULTS, subcommands=SUBS)
        self.assertEqual(("Unknown option: --what", "Option -n expects a value; ignored"), parsed.warnings)
        self.assertIsNone(parsed.values["name"])

    def test_stop_at_returns_remaining_tokens(self) -> None:
        parsed = parse_flags(["-a", "go", "-c", "--file", "x"], TABLE, defaults=DEFAULTS, subcommands=SUBS, stop_at=("go",))
        self.assertEqual("go", parsed.subcommand)
        self.assertEqual(("-c", "--file", "x"), parsed.rest)
        self.assertEqual((), parsed.warnings)

    def test_duplicate_flag_names_rejected(self) -> None:
        with self.assertRaises(ValueError):
            parse_flags([], TABLE + (FlagSpec(("-a",), "other"),), defaults=DEFAULTS)

    def test_help_lines(self) -> None:
        lines = format_flag_help(TABLE, width=20)
        self.assertEqual("  -a, --alpha         Alpha", lines[0])
        self.assertTrue(lines[1].startswith("  -n, --name <name>"))


if __name__ == "__main__":
    unittest.main()
