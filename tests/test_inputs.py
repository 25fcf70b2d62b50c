import tempfile
import unittest
from pathlib import Path

from preprocessamento.inputs import resolve_input_paths


class ResolveInputPathsTests(unittest.TestCase):
    def test_directory_is_sorted_and_filtered(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("b.pdf", "a.XLSX", "c.xls", "notas.txt"):
                (root / name).write_bytes(b"")
            (root / "sub").mkdir()
            extra = root / "sub" / "avulso.txt"
            extra.write_bytes(b"")

            prepared = resolve_input_paths(input_dirs=[root], files=[extra])

        self.assertEqual([item.original.name for item in prepared], ["a.XLSX", "b.pdf", "c.xls", "avulso.txt"])
        self.assertEqual([item.kind for item in prepared], ["xlsx", "pdf", "xls", "txt"])

    def test_limit(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("1.pdf", "2.pdf", "3.pdf"):
                (root / name).write_bytes(b"")
            prepared = resolve_input_paths(input_dirs=[root], limit=2)
        self.assertEqual([item.original.name for item in prepared], ["1.pdf", "2.pdf"])

    def test_nothing_to_resolve(self) -> None:
        self.assertEqual(resolve_input_paths(), [])


if __name__ == "__main__":
    unittest.main()
