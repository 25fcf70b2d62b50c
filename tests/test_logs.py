import os
import tempfile
import time
import unittest
from pathlib import Path

from hvilotes.logs import cleanup_logs, list_logs, show_log


class LogsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.log_dir = Path(self._tmp.name)
        now = time.time()
        for name, age_days in (("extract-antigo", 40), ("extract-medio", 2), ("extract-novo", 0)):
            path = self.log_dir / f"{name}.log"
            path.write_text("\n".join(f"linha {i}" for i in range(10)), encoding="utf-8")
            stamp = now - age_days * 86400
            os.utime(path, (stamp, stamp))
        (self.log_dir / "outro.txt").write_text("ignorado", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_list_newest_first(self) -> None:
        entries = list_logs(self.log_dir)
        self.assertEqual([entry.run_id for entry in entries], ["extract-novo", "extract-medio", "extract-antigo"])
        self.assertEqual(len(list_logs(self.log_dir, limit=1)), 1)
        self.assertEqual(list_logs(self.log_dir / "nao-existe"), [])

    def test_show_tail(self) -> None:
        self.assertEqual(show_log(self.log_dir, "extract-novo", tail=True, lines=2), "linha 8\nlinha 9")
        self.assertEqual(len(show_log(self.log_dir, "extract-novo").splitlines()), 10)
        with self.assertRaises(FileNotFoundError):
            show_log(self.log_dir, "extract-inexistente")

    def test_cleanup_by_age(self) -> None:
        result = cleanup_logs(self.log_dir, max_days=30)
        self.assertEqual(result["deleted"], ["extract-antigo"])
        self.assertFalse((self.log_dir / "extract-antigo.log").exists())
        self.assertTrue((self.log_dir / "outro.txt").exists())

    def test_cleanup_without_limits_keeps_everything(self) -> None:
        result = cleanup_logs(self.log_dir)
        self.assertEqual(result["deleted"], [])
        self.assertEqual(len(list_logs(self.log_dir)), 3)


if __name__ == "__main__":
    unittest.main()
