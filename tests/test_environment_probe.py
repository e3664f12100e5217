import tempfile
import unittest
from pathlib import Path


from testenv.config import TestEnvironment
from testenv.errors import ExternalServiceUnavailable
from testenv.log import Level, RecordingLogger
from testenv.workspace.environment import (
    STRATEGY_EXTERNAL,
    STRATEGY_IN_MEMORY,
    check_datastore,
    cleanup_run_artifacts,
    parse_datastore_address,
    probe_datastore,
)


class _Conn:
    closed = False

    def close(self) -> None:
        self.closed = True


class TestDatastoreProbe(unittest.TestCase):
    def test_parse_address_variants(self) -> None:
        self.assertEqual(("localhost", 27017), parse_datastore_address("mongodb://localhost/app_test"))
        self.assertEqual(("db", 27018), parse_datastore_address("mongodb://user:pw@db:27018/x"))
        self.assertEqual(("a", 1), parse_datastore_address("mongodb://a:1,b:2/x?replicaSet=rs"))
        self.assertEqual(("::1", 27019), parse_datastore_address("mongodb://[::1]:27019/x"))

    def test_srv_and_bad_ports_are_unavailable(self) -> None:
        with self.assertRaises(ExternalServiceUnavailable):
            parse_datastore_address("mongodb+srv://cluster.example.net/x")
        with self.assertRaises(ExternalServiceUnavailable):
            parse_datastore_address("mongodb://db:abc/x")

    def test_probe_closes_connection(self) -> None:
        conn = _Conn()
        seen = []

        def connect(address, timeout):
            seen.append((address, timeout))
            return conn

        probe_datastore("mongodb://db:1234/x", connect=connect, timeout=2.0)
        self.assertEqual([(("db", 1234), 2.0)], seen)
        self.assertTrue(conn.closed)

    def test_unreachable_datastore_degrades_to_in_memory(self) -> None:
        def refuse(address, timeout):
            raise ConnectionRefusedError("refused")

        log = RecordingLogger()
        check = check_datastore(TestEnvironment.from_env({}), log=log, connect=refuse)

        self.assertEqual(STRATEGY_IN_MEMORY, check.strategy)
        self.assertIn("refused", check.reason)
        self.assertEqual(1, len(log.messages(Level.WARNING)))
        self.assertEqual([], log.messages(Level.ERROR))

    def test_reachable_datastore(self) -> None:
        log = RecordingLogger()
        check = check_datastore(TestEnvironment.from_env({}), log=log, connect=lambda a, t: _Conn())
        self.assertEqual(STRATEGY_EXTERNAL, check.strategy)
        self.assertEqual(["Datastore connection successful"], log.messages(Level.SUCCESS))

    def test_memory_db_skips_probe(self) -> None:
        def boom(address, timeout):
            raise AssertionError("probe should not run")

        env = TestEnvironment.from_env({"USE_MEMORY_DB": "true"})
        check = check_datastore(env, log=RecordingLogger(), connect=boom)
        self.assertEqual(STRATEGY_IN_MEMORY, check.strategy)


class TestCleanupRunArtifacts(unittest.TestCase):
    def test_removes_files_and_directories(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "coverage" / "lcov-report").mkdir(parents=True)
            (root / "test-results.xml").write_text("<x/>", encoding="utf-8")
            (root / "keep.txt").write_text("k", encoding="utf-8")

            removed = cleanup_run_artifacts(root, log=RecordingLogger())

            self.assertEqual({"coverage", "test-results.xml"}, {p.name for p in removed})
            self.assertFalse((root / "coverage").exists())
            self.assertTrue((root / "keep.txt").exists())
            self.assertEqual([], cleanup_run_artifacts(root, log=RecordingLogger()))


if __name__ == "__main__":
    unittest.main()
