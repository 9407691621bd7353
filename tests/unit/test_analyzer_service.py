from body_language_analyst.models import AnalysisFailure, AnalysisSuccess, ImagePart, PromptRequest, Tag, TaggedImage
from body_language_analyst.prompts import SYSTEM_INSTRUCTION
from body_language_analyst.services.analyzer import AnalyzerService

REQUEST = PromptRequest(text="prompt", parts=(ImagePart("image/png", "AAA"),))


class RecordingProvider:
    def __init__(self, result=("## Summary", {"total_tokens": 9}), error=None):
        self.result = result
        self.error = error
        self.calls = []

    def call_analysis(self, cfg, prompt_text, parts, system_prompt=None):
        self.calls.append((prompt_text, parts, system_prompt))
        if self.error:
            raise self.error
        return self.result


def test_success(settings):
    provider = RecordingProvider()
    result = AnalyzerService(provider).analyze(settings, REQUEST, system_prompt="sys")
    assert isinstance(result, AnalysisSuccess)
    assert result.text == "## Summary"
    assert result.usage == {"total_tokens": 9}
    assert provider.calls == [("prompt", REQUEST.parts, "sys")]


def test_missing_credential_never_reaches_provider(settings):
    settings.api_key = None
    provider = RecordingProvider()
    result = AnalyzerService(provider).analyze(settings, REQUEST)
    assert isinstance(result, AnalysisFailure)
    assert result.kind == "config"
    assert "OPENAI_API_KEY" in result.reason
    assert provider.calls == []


def test_no_images_is_validation_failure(settings):
    provider = RecordingProvider()
    result = AnalyzerService(provider).analyze(settings, PromptRequest(text="p", parts=()))
    assert result.kind == "validation"
    assert "at least one image" in result.reason
    assert provider.calls == []


def test_provider_error_becomes_failure(settings, capsys):
    provider = RecordingProvider(error=RuntimeError("quota exceeded"))
    result = AnalyzerService(provider).analyze(settings, REQUEST)
    assert result.ok is False
    assert result.kind == "service"
    assert result.reason == "An error occurred while analyzing the images: quota exceeded"
    assert "quota exceeded" in capsys.readouterr().err


def test_empty_text_is_failure(settings):
    result = AnalyzerService(RecordingProvider(result=("  ", None))).analyze(settings, REQUEST)
    assert isinstance(result, AnalysisFailure)


def test_analyze_images_builds_prompt_and_system_instruction(settings):
    provider = RecordingProvider()
    img = TaggedImage(id="1", filename="a.png", mime_type="image/png", data=b"x", encoded="eA==", tags=(Tag(1, 2, "Kim"),))
    AnalyzerService(provider).analyze_images(settings, "dinner", [img])
    prompt_text, parts, system_prompt = provider.calls[0]
    assert 'Context from the user: "dinner"' in prompt_text
    assert "'Kim' is located at approximate coordinates (x: 1, y: 2)" in prompt_text
    assert parts[0].data == "eA=="
    assert system_prompt == SYSTEM_INSTRUCTION


def test_analyze_images_with_undecodable_prompt_file_uses_default(tmp_path, settings):
    p = tmp_path / "prompt.txt"
    p.write_bytes(b"\xff\xfe\xfa")
    settings.prompt_file = str(p)
    provider = RecordingProvider()
    img = TaggedImage(id="1", filename="a.png", mime_type="image/png", data=b"x", encoded="eA==")
    result = AnalyzerService(provider).analyze_images(settings, "", [img])
    assert isinstance(result, AnalysisSuccess)
    assert provider.calls[0][2] == SYSTEM_INSTRUCTION


def test_analyze_images_preparation_error_becomes_failure(settings, monkeypatch, capsys):
    from body_language_analyst.services import analyzer

    def broken(cfg):
        raise RuntimeError("prompt store offline")

    monkeypatch.setattr(analyzer, "load_system_instruction", broken)
    provider = RecordingProvider()
    img = TaggedImage(id="1", filename="a.png", mime_type="image/png", data=b"x", encoded="eA==")
    result = AnalyzerService(provider).analyze_images(settings, "", [img])
    assert isinstance(result, AnalysisFailure)
    assert result.kind == "service"
    assert "prompt store offline" in result.reason
    assert provider.calls == []
    assert "prompt store offline" in capsys.readouterr().err
