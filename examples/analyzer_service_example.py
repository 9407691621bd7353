"""Small example showing `AnalyzerService` usage with a dummy provider.

Run directly to see the prompt that would be sent and the canned result:
    python examples/analyzer_service_example.py
"""
import io

from PIL import Image

from body_language_analyst import AnalyzerService, Settings, build_prompt, encode_image_bytes
from body_language_analyst.models import Tag


class DummyProvider:
    def call_analysis(self, cfg, prompt_text, parts, system_prompt=None):
        return f"## Summary\n\n{len(parts)} image(s) received.", {"total_tokens": 0}


def _png(color):
    buf = io.BytesIO()
    Image.new("RGB", (320, 240), color=color).save(buf, format="PNG")
    return buf.getvalue()


def main():
    cfg = Settings(api_key="demo", base_url=None, model="demo-model", timeout=10, max_tokens=256)
    first = encode_image_bytes("office.png", _png((200, 180, 160))).with_tag(Tag(x=120, y=90, name="Alice"))
    second = encode_image_bytes("hallway.png", _png((90, 110, 140)))

    print(build_prompt("A team meeting", [first, second]).text)

    result = AnalyzerService(DummyProvider()).analyze_images(cfg, "A team meeting", [first, second])
    print("Result:", result.text if result.ok else result.reason)


if __name__ == "__main__":
    main()
