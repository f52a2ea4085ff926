"""Unit tests for program kinds and ProgramSourceGenerator."""

import dataclasses
import re

import pytest

from mocka.contexts.templating import (
    ConsoleProgram,
    ProgramSourceGenerator,
    TemplateRegistry,
    TemplateRenderError,
    WebServerProgram,
)
from mocka.contexts.templating.registries import TemplateConfigRegistry

UNRESOLVED = re.compile(r"\{\{.*?\}\}|\{%.*?%\}")


@pytest.fixture
def generator():
    return ProgramSourceGenerator()


class TestProgramKinds:
    @pytest.mark.unit
    def test_console_values(self):
        assert ConsoleProgram(exit_code=3).template_values() == {"exit_code": 3}
        assert ConsoleProgram.template_name == "console"

    @pytest.mark.unit
    def test_web_server_values(self):
        kind = WebServerProgram(port=8080, status_code=404, status_message="Not Found")

        assert kind.template_name == "webserver"
        assert kind.template_values() == {
            "port": 8080,
            "status_code": 404,
            "status_message": "Not Found",
        }

    @pytest.mark.unit
    def test_kinds_are_immutable(self):
        kind = ConsoleProgram(exit_code=1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            kind.exit_code = 2

    @pytest.mark.unit
    def test_console_has_no_web_fields(self):
        field_names = {f.name for f in dataclasses.fields(ConsoleProgram)}
        assert field_names == {"exit_code"}


class TestRender:
    @pytest.mark.unit
    def test_console_source(self, generator):
        source = generator.render(ConsoleProgram(exit_code=42))

        assert "package main" in source
        assert "os.Exit(42)" in source
        assert not UNRESOLVED.search(source)

    @pytest.mark.unit
    def test_negative_exit_code_passes_through(self, generator):
        source = generator.render(ConsoleProgram(exit_code=-1))
        assert "os.Exit(-1)" in source

    @pytest.mark.unit
    def test_web_server_source(self, generator):
        source = generator.render(
            WebServerProgram(port=8080, status_code=404, status_message="Not Found")
        )

        assert 'http.ListenAndServe(":8080", nil)' in source
        assert "w.WriteHeader(404)" in source
        assert not UNRESOLVED.search(source)

    @pytest.mark.unit
    def test_status_message_is_text_not_code(self, generator):
        """The message placeholder receives the message text, not the numeric status code."""
        source = generator.render(
            WebServerProgram(port=8080, status_code=404, status_message="Not Found")
        )

        assert 'fmt.Fprint(w, "Not Found")' in source
        assert 'fmt.Fprint(w, "404")' not in source

    @pytest.mark.unit
    def test_message_embedded_verbatim(self, generator):
        """No escaping is applied; malformed values surface at compile time."""
        source = generator.render(
            WebServerProgram(port=1, status_code=200, status_message='say "hi" & <bye>')
        )
        assert 'fmt.Fprint(w, "say "hi" & <bye>")' in source

    @pytest.mark.unit
    def test_rendering_is_idempotent(self, generator):
        kind = WebServerProgram(port=9000, status_code=503, status_message="Unavailable")

        assert generator.render(kind) == ProgramSourceGenerator().render(
            WebServerProgram(port=9000, status_code=503, status_message="Unavailable")
        )

    @pytest.mark.unit
    def test_source_filename(self, generator):
        assert generator.source_filename(ConsoleProgram(exit_code=0)) == "main.go"


class TestRenderErrors:
    @pytest.mark.unit
    def test_missing_declared_placeholder(self, tmp_path):
        (tmp_path / "console").mkdir()
        (tmp_path / "console" / "template.go.jinja").write_text("os.Exit({{ exit_code }})\n")
        (tmp_path / "console" / "template_config.yaml").write_text(
            "placeholders:\n  - exit_code\n  - signal\n"
        )
        generator = ProgramSourceGenerator(
            TemplateRegistry(tmp_path), TemplateConfigRegistry(tmp_path)
        )

        with pytest.raises(TemplateRenderError, match="signal"):
            generator.render(ConsoleProgram(exit_code=0))

    @pytest.mark.unit
    def test_undeclared_template_variable(self, tmp_path):
        (tmp_path / "console").mkdir()
        (tmp_path / "console" / "template.go.jinja").write_text("{{ exit_code }} {{ extra }}\n")
        (tmp_path / "console" / "template_config.yaml").write_text(
            "placeholders:\n  - exit_code\n"
        )
        generator = ProgramSourceGenerator(
            TemplateRegistry(tmp_path), TemplateConfigRegistry(tmp_path)
        )

        with pytest.raises(TemplateRenderError) as exc_info:
            generator.render(ConsoleProgram(exit_code=0))

        assert exc_info.value.template_name == "console"
        assert exc_info.value.original_error is not None

    @pytest.mark.unit
    def test_missing_template_file(self, tmp_path):
        (tmp_path / "console").mkdir()
        (tmp_path / "console" / "template_config.yaml").write_text(
            "placeholders:\n  - exit_code\n"
        )
        generator = ProgramSourceGenerator(
            TemplateRegistry(tmp_path), TemplateConfigRegistry(tmp_path)
        )

        with pytest.raises(TemplateRenderError, match="not found"):
            generator.render(ConsoleProgram(exit_code=0))

    @pytest.mark.unit
    def test_missing_config(self, tmp_path):
        generator = ProgramSourceGenerator(
            TemplateRegistry(tmp_path), TemplateConfigRegistry(tmp_path)
        )

        with pytest.raises(TemplateRenderError, match="No config"):
            generator.render(ConsoleProgram(exit_code=0))
