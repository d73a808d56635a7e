"""
Tests for the command line entry point.
"""

import json
import tempfile
from datetime import datetime
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from openpyxl import Workbook

from config.config_manager import ConfigManager
from main import main


def write_setup(root: Path, **report_settings) -> Path:
    wb = Workbook()
    employees = wb.active
    employees.title = "Employees"
    employees.append(["Id", "Name", "Email"])
    employees.append(["42", "Maria Silva", "maria@example.com"])
    punches = wb.create_sheet("Punches")
    punches.append(["Id", "EmployeeId", "Timestamp"])
    punches.append(["p1", "42", datetime(2024, 5, 6, 8, 0)])
    punches.append(["p2", "42", datetime(2024, 5, 6, 12, 0)])
    wb.save(root / "punches.xlsx")

    manager = ConfigManager(root / "config.json")
    config = manager.load()
    config.paths.punch_workbook = str(root / "punches.xlsx")
    config.paths.output_dir = str(root / "reports")
    config.paths.outbox_dir = str(root / "outbox")
    config.paths.status_file = str(root / "status.json")
    for key, value in report_settings.items():
        setattr(config.report, key, value)
    manager.save()
    return root / "config.json"


class TestMain:
    """Tests for main()."""

    def test_success(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = write_setup(Path(tmpdir))
            message = json.dumps({"employeeId": "42", "year": 2024, "month": 5, "reportId": "cli"})

            code = main([message, "--config", str(config_path)])

            assert code == 0
            assert (Path(tmpdir) / "reports" / "cli.html").exists()
            with open(Path(tmpdir) / "status.json", 'r', encoding='utf-8') as f:
                assert json.load(f)["cli"]["status"] == "PROCESSED"
        assert "html:" in capsys.readouterr().out

    def test_message_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = write_setup(Path(tmpdir))
            message_file = Path(tmpdir) / "message.json"
            message_file.write_text(
                json.dumps({"FuncionarioId": "42", "Ano": 2024, "Mes": 5, "RelatorioId": "f"}),
                encoding="utf-8"
            )

            assert main(["--message-file", str(message_file), "--config", str(config_path)]) == 0

    def test_unknown_employee_exit_code(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = write_setup(Path(tmpdir))
            message = json.dumps({"employeeId": "999", "year": 2024, "month": 5})

            assert main([message, "--config", str(config_path)]) == 1

    def test_malformed_message_exit_code(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = write_setup(Path(tmpdir))

            assert main(["{oops", "--config", str(config_path)]) == 1

    def test_unsupported_output_format_exit_code(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = write_setup(Path(tmpdir), output_formats=["docx"])
            message = json.dumps({"employeeId": "42", "year": 2024, "month": 5})

            assert main([message, "--config", str(config_path)]) == 1

    def test_bad_filename_pattern_exit_code(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = write_setup(Path(tmpdir), filename_pattern="{employee}.{ext}")
            message = json.dumps({"employeeId": "42", "year": 2024, "month": 5})

            assert main([message, "--config", str(config_path)]) == 1

    def test_no_message(self):
        assert main([]) == 1

    def test_verbose_flag(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = write_setup(Path(tmpdir))
            message = json.dumps({"employeeId": "42", "year": 2024, "month": 5})

            assert main([message, "--config", str(config_path), "-v"]) == 0
