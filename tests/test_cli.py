import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from hexmap.cli import main


class CliTests(unittest.TestCase):
    def test_writes_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            json_path = Path(tmp_dir) / "map.json"
            buf = io.StringIO()
            with redirect_stdout(buf):
                code = main(["--size", "small", "--seed", "4", "--territories", "5", "--json", str(json_path)])
            payload = json.loads(json_path.read_text(encoding="utf-8"))

        self.assertEqual(code, 0)
        self.assertEqual(payload["config"]["grid_width"], 10)
        self.assertEqual(payload["config"]["territory_count"], 5)
        lines = buf.getvalue().splitlines()
        self.assertIn("territories |", lines[0])
        self.assertTrue(lines[1].startswith("Saved map JSON to "))

    def test_config_file_overrides_preset(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            config_path = Path(tmp_dir) / "config.json"
            config_path.write_text(json.dumps({"grid_width": 6, "grid_height": 5}), encoding="utf-8")
            json_path = Path(tmp_dir) / "map.json"
            with redirect_stdout(io.StringIO()):
                main(["--config", str(config_path), "--height", "4", "--seed", "1", "--json", str(json_path)])
            payload = json.loads(json_path.read_text(encoding="utf-8"))
        self.assertEqual(len(payload["all_hexes"]), 24)

    def test_bad_config_exits(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            config_path = Path(tmp_dir) / "config.json"
            config_path.write_text(json.dumps({"grid_width": "wide"}), encoding="utf-8")
            with self.assertRaises(SystemExit):
                main(["--config", str(config_path)])

            for raw in ('{"grid_width": Infinity}', '{"empty_tile_percent": NaN}'):
                config_path.write_text(raw, encoding="utf-8")
                with self.assertRaises(SystemExit):
                    main(["--config", str(config_path)])

            config_path.write_text("[1, 2]", encoding="utf-8")
            with self.assertRaises(SystemExit):
                main(["--config", str(config_path)])

            with self.assertRaises(SystemExit):
                main(["--config", str(Path(tmp_dir) / "missing.json")])

    def test_run_log(self) -> None:
        cwd = os.getcwd()
        with tempfile.TemporaryDirectory() as tmp_dir:
            os.chdir(tmp_dir)
            try:
                with redirect_stdout(io.StringIO()):
                    main(["--size", "small", "--seed", "2", "--log"])
                logs = list(Path("logs").glob("hexmap_*.log"))
                self.assertEqual(len(logs), 1)
                text = logs[0].read_text(encoding="utf-8")
            finally:
                os.chdir(cwd)
        self.assertIn("Config:", text)
        self.assertIn("seed=2", text)
        self.assertIn("Blocked 8 of 80 hexes", text)
        self.assertIn("Generated", text)


if __name__ == "__main__":
    unittest.main()
