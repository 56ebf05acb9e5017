"""
Tests for the export pipeline and export options.
"""
import os

import pandas as pd
import pytest

from compliance_reports.config import Settings
from compliance_reports.exceptions import InvalidConfigurationError, UnknownReportKindError
from compliance_reports.export_options import ExportOptions
from compliance_reports.exporter import ReportExporter, write_atomic


@pytest.fixture
def exporter(helvetica_manager, tmp_path):
    return ReportExporter(font_manager=helvetica_manager, settings=Settings(output_dir=str(tmp_path)))


def options(tmp_path, generated_at, **kwargs):
    values = dict(
        report_kind="job_application",
        data={"personalInfo": {"fullName": "Jane Doe"}},
        company_name="Acme Care",
        output_dir=str(tmp_path / "out"),
        generated_at=generated_at,
    )
    values.update(kwargs)
    return ExportOptions(**values)


class TestExportOptions:
    def test_unknown_kind(self):
        with pytest.raises(UnknownReportKindError):
            ExportOptions(report_kind="payroll")

    def test_empty_output_dir(self):
        with pytest.raises(InvalidConfigurationError):
            ExportOptions(report_kind="supervision", output_dir="  ")

    def test_generated_at_must_be_datetime(self):
        with pytest.raises(InvalidConfigurationError):
            ExportOptions(report_kind="supervision", generated_at="2024-03-15")

    def test_from_settings(self):
        settings = Settings.from_env({"REPORTS_COMPANY_NAME": "Acme Care", "REPORTS_OUTPUT_DIR": "/tmp/reports"})
        opts = ExportOptions.from_settings(settings, "spot_check", {}, company_name=None, employee_name="Sam")

        assert opts.company == {"name": "Acme Care", "logo": None}
        assert opts.output_dir == "/tmp/reports"
        assert opts.employee_name == "Sam"


def test_settings_from_env():
    settings = Settings.from_env({"REPORTS_HTTP_TIMEOUT": "5", "LOG_LEVEL": "debug",
                                  "REPORTS_COMPANY_LOGO": ""})
    assert settings.http_timeout == 5.0
    assert settings.log_level == "DEBUG"
    assert settings.company_logo is None
    assert settings.output_dir == "exports"


class TestReportExporter:
    def test_successful_export(self, exporter, tmp_path, generated_at):
        progress = []
        exporter.progress = lambda p, d: progress.append(p)
        result = exporter.export(options(tmp_path, generated_at))

        assert result.is_complete
        assert result.filename == "Job_Application_Jane_Doe_15-03-2024.pdf"
        assert os.path.exists(result.output_path)
        with open(result.output_path, "rb") as f:
            assert f.read().startswith(b"%PDF")
        assert result.file_size == os.path.getsize(result.output_path)
        assert os.listdir(tmp_path / "out") == [result.filename]
        assert progress == sorted(progress)
        assert progress[-1] == 1.0

    def test_layout_summary(self, exporter, tmp_path, generated_at):
        result = exporter.export(options(tmp_path, generated_at))

        assert isinstance(result.layout_summary, pd.DataFrame)
        assert len(result.layout_summary) == result.page_count
        assert result.layout_summary["Page"].tolist() == list(range(1, result.page_count + 1))
        assert result.layout_summary["First text"].iloc[0] == "Acme Care"

    def test_invalid_data_returns_failed_result(self, exporter, tmp_path, generated_at):
        result = exporter.export(options(tmp_path, generated_at, data=["not", "a", "mapping"]))

        assert result.is_failed
        assert "must be an object" in result.error
        assert not os.path.exists(tmp_path / "out")

    def test_logo_failure_writes_nothing(self, exporter, tmp_path, generated_at):
        result = exporter.export(options(tmp_path, generated_at, company_logo=str(tmp_path / "missing.png")))

        assert result.is_failed
        assert "logo" in result.status_message
        assert result.output_path is None
        assert not os.path.exists(tmp_path / "out")

    def test_appraisal_employee_name(self, exporter, tmp_path, generated_at, sample_appraisal_all_e):
        del sample_appraisal_all_e["employee_name"]
        result = exporter.export(options(tmp_path, generated_at, report_kind="annual_appraisal",
                                         data=sample_appraisal_all_e, employee_name="Sam Taylor"))
        assert result.filename == "Annual_Appraisal_Sam_Taylor_15-03-2024.pdf"

    def test_supervision_questions_json(self, exporter, tmp_path, generated_at, sample_supervision):
        questions = '{"version": 1, "defaults": [{"id": "bruises", "label": "Bruises?", "enabled": true}]}'
        result = exporter.export(options(tmp_path, generated_at, report_kind="supervision",
                                         data=sample_supervision, supervision_questions=questions))

        assert result.is_complete
        assert result.filename == "Supervision_John_Smith_15-03-2024.pdf"

    def test_unexpected_error_names_the_step(self, exporter, tmp_path, generated_at, monkeypatch):
        def broken_save(output_dir, filename, content):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr("compliance_reports.exporter.write_atomic", broken_save)
        result = exporter.export(options(tmp_path, generated_at))

        assert result.is_failed
        assert "'save'" in result.error
        assert "disk on fire" in result.error


class TestWriteAtomic:
    def test_writes_file(self, tmp_path):
        path = write_atomic(str(tmp_path / "nested"), "report.pdf", b"%PDF-1.4")

        assert path == str(tmp_path / "nested" / "report.pdf")
        with open(path, "rb") as f:
            assert f.read() == b"%PDF-1.4"
        assert os.listdir(tmp_path / "nested") == ["report.pdf"]

    def test_replaces_existing_file(self, tmp_path):
        write_atomic(str(tmp_path), "report.pdf", b"old")
        write_atomic(str(tmp_path), "report.pdf", b"new")
        with open(tmp_path / "report.pdf", "rb") as f:
            assert f.read() == b"new"

    def test_failed_rename_leaves_no_temp_file(self, tmp_path, monkeypatch):
        def failing_replace(src, dst):
            raise OSError("rename failed")

        monkeypatch.setattr("compliance_reports.exporter.os.replace", failing_replace)
        with pytest.raises(OSError):
            write_atomic(str(tmp_path), "report.pdf", b"data")
        assert os.listdir(tmp_path) == []
