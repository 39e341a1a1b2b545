"""
End-to-end tests: config files in, overlaid PDF out.
"""

import fitz  # PyMuPDF
import pytest

from pdf_overlay.config.settings import Settings
from pdf_overlay.layout.resolver import FieldResolutionError
from pdf_overlay.pdf.loader import PdfLoadError
from pdf_overlay.pipeline import ConfigReadError, run_pipeline


@pytest.fixture
def make_settings(tmp_path, template_pdf, write_config):
    def _make(positions_text: str, values_text: str, **overrides) -> Settings:
        options = {
            "input": template_pdf,
            "output": tmp_path / "filled.pdf",
            "positions": write_config("positions", positions_text),
            "values": write_config("values", values_text),
        }
        options.update(overrides)
        return Settings(**options)

    return _make


class TestRunPipeline:
    def test_text_scenario(self, make_settings):
        settings = make_settings("t,name1,1,50,100,12\n", "name1,Hello\n")
        report = run_pipeline(settings)

        assert report.instruction_count == 1
        assert report.issue_count == 0
        with fitz.open(settings.output) as output:
            hits = output[0].search_for("Hello")
            assert len(hits) == 1
            assert hits[0].x0 == pytest.approx(50.0, abs=1.0)

    def test_radio_scenario(self, make_settings):
        settings = make_settings("r,opt,1,10,10,10\nr,opt,1,20,10,10\n", "opt,1\n")
        report = run_pipeline(settings)

        assert report.instruction_count == 1
        with fitz.open(settings.output) as output:
            drawings = output[0].get_drawings()
            assert len(drawings) == 1
            assert drawings[0]["rect"].x0 == pytest.approx(20.0, abs=0.5)

    def test_mixed_form_with_issues(self, make_settings):
        positions = "\n".join(
            [
                "# intake form",
                "t,name,1,50,100,12",
                "t,city,2,50,120,0",
                "x,bad,1,1,1,1",
                "c,agree,1,300,100,8",
                "c,decline,1,320,100,8",
                "r,plan,1,10,200,8",
                "r,plan,1,30,200,8",
                "m,topics,2,10,300,8",
                "m,topics,2,30,300,8",
                "m,topics,2,50,300,8",
            ]
        )
        values = "name,Ann Example\nagree,1\ndecline,0\nplan,4\ntopics,0;;2\n"
        settings = make_settings(positions, values)

        report = run_pipeline(settings)

        # name + city placeholder + agree + two topics; plan index 4 is skipped
        assert report.instruction_count == 5
        assert [issue.line_number for issue in report.config_issues] == [4]
        assert [issue.field for issue in report.resolution_issues] == ["plan"]

        with fitz.open(settings.output) as output:
            assert output[0].search_for("Ann Example")
            assert output[1].search_for("no field value specified")
            assert len(output[0].get_drawings()) == 1
            assert len(output[1].get_drawings()) == 2

    def test_output_may_replace_input(self, make_settings, template_pdf):
        settings = make_settings("t,a,1,10,10,9", "a,in place", output=template_pdf)
        run_pipeline(settings)
        with fitz.open(template_pdf) as output:
            assert output[0].search_for("in place")

    def test_input_is_preserved(self, make_settings, template_pdf):
        original = template_pdf.read_bytes()
        run_pipeline(make_settings("t,a,1,10,10,9", "a,x"))
        assert template_pdf.read_bytes() == original


class TestRunFailures:
    def test_missing_positions_file(self, make_settings, tmp_path):
        settings = make_settings("", "", positions=tmp_path / "nope")
        with pytest.raises(ConfigReadError, match="nope"):
            run_pipeline(settings)

    def test_missing_input_document(self, make_settings, tmp_path):
        settings = make_settings("t,a,1,1,1,9", "", input=tmp_path / "absent.pdf")
        with pytest.raises(PdfLoadError):
            run_pipeline(settings)
        assert not settings.output.exists()

    def test_page_beyond_template(self, make_settings):
        settings = make_settings("t,a,9,1,1,9", "a,x")
        with pytest.raises(FieldResolutionError):
            run_pipeline(settings)
        assert not settings.output.exists()
